from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from ..errors import ValidationError


@dataclass(frozen=True)
class Subject:
    id: int
    name: str
    teacher: str
    department: str
    semester: str
    is_lab: bool = False
    periods_per_week: int = 1
    capacity: int | None = None

    def __post_init__(self) -> None:
        for field_name in ("name", "teacher", "department", "semester"):
            if not str(getattr(self, field_name)).strip():
                raise ValidationError(f"Subject {field_name} must not be empty")
        if isinstance(self.periods_per_week, bool) or not isinstance(self.periods_per_week, int):
            raise ValidationError("periodsPerWeek must be an integer")
        if self.periods_per_week < 1:
            raise ValidationError("periodsPerWeek must be a number greater than 0")
        if self.capacity is not None:
            if isinstance(self.capacity, bool) or not isinstance(self.capacity, int):
                raise ValidationError("capacity must be an integer")
            if self.capacity < 1:
                raise ValidationError("capacity must be a number greater than 0")

    @property
    def span(self) -> int:
        """Number of consecutive class periods one placement occupies."""
        return self.periods_per_week if self.is_lab else 1

    @property
    def identity(self) -> tuple[str, str, str, str]:
        return (self.name, self.teacher, self.department, self.semester)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "teacher": self.teacher,
            "department": self.department,
            "semester": self.semester,
            "isLab": self.is_lab,
            "periodsPerWeek": self.periods_per_week,
        }
        if self.capacity is not None:
            out["capacity"] = self.capacity
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Subject":
        if not isinstance(data.get("isLab", False), bool):
            raise ValidationError(f"Invalid subject record {data!r}: isLab must be true or false")
        try:
            return cls(
                id=int(data["id"]),
                name=str(data["name"]),
                teacher=str(data["teacher"]),
                department=str(data["department"]),
                semester=str(data["semester"]),
                is_lab=data.get("isLab", False),
                periods_per_week=int(data.get("periodsPerWeek", 1)),
                capacity=None if data.get("capacity") is None else int(data["capacity"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError(f"Invalid subject record {data!r}: {e}") from e
