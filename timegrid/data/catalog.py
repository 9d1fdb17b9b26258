from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Iterable, List

from ..errors import ValidationError
from ..models.subject import Subject


class SubjectCatalog:
    """Ordered list of subjects; order matters to generation and the fallback."""

    def __init__(self, subjects: Iterable[Subject] = ()):
        self.records: List[Subject] = []
        self.last_removed: Subject | None = None
        for s in subjects:
            self._check_unique(s)
            self.records.append(s)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def _check_unique(self, s: Subject, ignore_id: int | None = None) -> None:
        for r in self.records:
            if r.id != ignore_id and r.identity == s.identity:
                raise ValidationError(
                    f"{s.name} ({s.teacher}, {s.department}, {s.semester}) is already in the catalog"
                )

    def next_id(self) -> int:
        return max((r.id for r in self.records), default=0) + 1

    def get(self, subject_id: int) -> Subject:
        for r in self.records:
            if r.id == subject_id:
                return r
        raise ValidationError(f"No subject with id {subject_id}")

    def add(self, **fields: Any) -> Subject:
        s = Subject(id=self.next_id(), **fields)
        self._check_unique(s)
        self.records.append(s)
        return s

    def update(self, subject_id: int, **changes: Any) -> Subject:
        current = self.get(subject_id)
        updated = replace(current, **changes)
        self._check_unique(updated, ignore_id=subject_id)
        self.records[self.records.index(current)] = updated
        return updated

    def remove(self, subject_id: int) -> Subject:
        s = self.get(subject_id)
        self.records.remove(s)
        self.last_removed = s
        return s

    def restore_removed(self) -> Subject:
        s = self.last_removed
        if s is None:
            raise ValidationError("Nothing to restore")
        self._check_unique(s)
        if any(r.id == s.id for r in self.records):
            s = replace(s, id=self.next_id())
        self.records.append(s)
        self.last_removed = None
        return s

    def clear(self) -> None:
        self.records = []
        self.last_removed = None

    def departments(self) -> List[str]:
        return list(dict.fromkeys(r.department for r in self.records))

    def semesters(self) -> List[str]:
        return list(dict.fromkeys(r.semester for r in self.records))

    def search(self, term: str = "") -> Dict[str, Dict[str, List[Subject]]]:
        """Subjects whose name or teacher contains ``term``, by department then semester."""
        needle = term.strip().lower()
        out: Dict[str, Dict[str, List[Subject]]] = {}
        for r in self.records:
            if needle and needle not in r.name.lower() and needle not in r.teacher.lower():
                continue
            out.setdefault(r.department, {}).setdefault(r.semester, []).append(r)
        return out
