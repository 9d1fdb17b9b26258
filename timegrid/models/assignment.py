from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from .subject import Subject


@dataclass(frozen=True)
class Assignment:
    subject: str
    teacher: str
    department: str
    semester: str
    is_lab: bool = False
    capacity: int | None = None

    @classmethod
    def from_subject(cls, s: Subject) -> "Assignment":
        return cls(s.name, s.teacher, s.department, s.semester, s.is_lab, s.capacity)

    def same_block(self, other: "Assignment | None") -> bool:
        # Lab run identity: subject/teacher/semester with the lab flag set on both
        if other is None or not (self.is_lab and other.is_lab):
            return False
        return (
            self.subject == other.subject
            and self.teacher == other.teacher
            and self.semester == other.semester
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "subject": self.subject,
            "teacher": self.teacher,
            "department": self.department,
            "semester": self.semester,
            "isLab": self.is_lab,
        }
        if self.capacity is not None:
            out["capacity"] = self.capacity
        return out
