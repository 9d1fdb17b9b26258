from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Tuple

from ..errors import MalformedResponse, ValidationError
from ..models.calendar import SlotCalendar
from ..models.subject import Subject
from ..models.timetable import Grid, grid_to_dict, parse_grid

SUBJECTS_FILE = "subjects.json"
TIMETABLE_FILE = "timetable.json"
REMOVED_FILE = "removed.json"


def load_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    with tmp.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    tmp.replace(path)


class JsonStore:
    """Subjects and the current grid as two JSON files in one state directory."""

    def __init__(self, directory: Path, calendar: SlotCalendar):
        self.directory = Path(directory)
        self.calendar = calendar

    @property
    def subjects_path(self) -> Path:
        return self.directory / SUBJECTS_FILE

    @property
    def timetable_path(self) -> Path:
        return self.directory / TIMETABLE_FILE

    @property
    def removed_path(self) -> Path:
        return self.directory / REMOVED_FILE

    def load(self) -> Tuple[List[Subject] | None, Grid | None]:
        logger = logging.getLogger(__name__)
        subjects: List[Subject] | None = None
        grid: Grid | None = None
        if self.subjects_path.exists():
            raw = load_json(self.subjects_path)
            if not isinstance(raw, list):
                raise ValidationError(f"{self.subjects_path} must hold a list of subjects")
            subjects = [Subject.from_dict(r) for r in raw]
            logger.info(f"Loaded {len(subjects)} subjects from {self.subjects_path}")
        if self.timetable_path.exists():
            try:
                grid = parse_grid(load_json(self.timetable_path), self.calendar)
            except json.JSONDecodeError as e:
                raise MalformedResponse(f"{self.timetable_path} is not valid JSON: {e}") from e
            logger.info(f"Loaded timetable from {self.timetable_path}")
        return subjects, grid

    def save_subjects(self, subjects: List[Subject]) -> None:
        write_json(self.subjects_path, [s.to_dict() for s in subjects])

    def save_grid(self, grid: Grid) -> None:
        write_json(self.timetable_path, grid_to_dict(grid))

    def load_removed(self) -> Subject | None:
        """Last removed subject, kept so a later session can undo the removal."""
        if not self.removed_path.exists():
            return None
        return Subject.from_dict(load_json(self.removed_path))

    def save_removed(self, subject: Subject | None) -> None:
        if subject is None:
            self.removed_path.unlink(missing_ok=True)
        else:
            write_json(self.removed_path, subject.to_dict())

    def clear(self) -> None:
        for p in (self.subjects_path, self.timetable_path, self.removed_path):
            p.unlink(missing_ok=True)
