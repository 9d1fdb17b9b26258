from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional

from ..errors import MalformedResponse
from .assignment import Assignment
from .calendar import SlotCalendar


Cell = Optional[Assignment]
Grid = Dict[str, List[Cell]]  # day -> class-period cells
Predicate = Callable[[Assignment], bool]

REQUIRED_FIELDS = ("subject", "teacher", "department", "semester", "isLab")


def empty_grid(calendar: SlotCalendar) -> Grid:
    return {d: [None] * calendar.class_period_count for d in calendar.days}


def parse_cell(raw: Any, where: str) -> Cell:
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise MalformedResponse(f"{where}: expected an object or null, got {type(raw).__name__}")
    missing = [k for k in REQUIRED_FIELDS if k not in raw]
    if missing:
        raise MalformedResponse(f"{where}: missing fields {missing}")
    if not isinstance(raw["isLab"], bool):
        raise MalformedResponse(f"{where}: isLab must be a boolean")
    capacity = raw.get("capacity")
    if capacity is not None and (isinstance(capacity, bool) or not isinstance(capacity, int)):
        raise MalformedResponse(f"{where}: capacity must be an integer")
    return Assignment(
        subject=str(raw["subject"]),
        teacher=str(raw["teacher"]),
        department=str(raw["department"]),
        semester=str(raw["semester"]),
        is_lab=raw["isLab"],
        capacity=capacity,
    )


def parse_grid(payload: Any, calendar: SlotCalendar) -> Grid:
    """Turn a day-keyed JSON object into a Grid, checking it fits the calendar.

    Every calendar day must be present with exactly ``class_period_count``
    entries. Extra keys in the payload are ignored.
    """
    if not isinstance(payload, Mapping):
        raise MalformedResponse("Timetable payload must be an object keyed by day name")
    grid: Grid = {}
    n = calendar.class_period_count
    for day in calendar.days:
        cells = payload.get(day)
        if not isinstance(cells, list):
            raise MalformedResponse(f"Timetable is missing day {day!r}")
        if len(cells) != n:
            raise MalformedResponse(f"{day} has {len(cells)} periods, expected {n}")
        grid[day] = [parse_cell(raw, f"{day}[{i}]") for i, raw in enumerate(cells)]
    return grid


def grid_to_dict(grid: Grid) -> Dict[str, List[Dict[str, Any] | None]]:
    return {d: [a.to_dict() if a is not None else None for a in cells] for d, cells in grid.items()}


@dataclass(frozen=True)
class GridFilter:
    """Presentation filter; a ``None`` field matches every value."""

    department: str | None = None
    semester: str | None = None
    teacher: str | None = None

    def __call__(self, a: Assignment) -> bool:
        if self.department is not None and a.department != self.department:
            return False
        if self.semester is not None and a.semester != self.semester:
            return False
        if self.teacher is not None and a.teacher != self.teacher:
            return False
        return True


class GridStore:
    def __init__(self, calendar: SlotCalendar, grid: Grid | None = None):
        self.calendar = calendar
        self.grid: Grid = empty_grid(calendar)
        if grid is not None:
            self.replace(grid)

    def get(self, day: str, period_index: int) -> Cell:
        self.calendar.check_day(day)
        self.calendar.check_period(period_index)
        return self.grid[day][period_index]

    def set(self, day: str, period_index: int, cell: Cell) -> None:
        self.calendar.check_day(day)
        self.calendar.check_period(period_index)
        self.grid[day][period_index] = cell

    def day(self, day: str) -> List[Cell]:
        self.calendar.check_day(day)
        return list(self.grid[day])

    def replace(self, new_grid: Grid) -> None:
        n = self.calendar.class_period_count
        for d in self.calendar.days:
            if d not in new_grid or len(new_grid[d]) != n:
                raise MalformedResponse(f"Replacement grid does not fit the calendar on {d}")
        # Old grid is discarded wholesale, never merged
        self.grid = {d: list(new_grid[d]) for d in self.calendar.days}

    def clear(self) -> None:
        self.grid = empty_grid(self.calendar)

    def snapshot(self) -> Grid:
        return copy.deepcopy(self.grid)

    def filtered_view(self, predicate: Predicate | None) -> Grid:
        if predicate is None:
            return self.snapshot()
        return {
            d: [a if a is not None and predicate(a) else None for a in cells]
            for d, cells in self.grid.items()
        }

    def occupied(self) -> int:
        return sum(1 for cells in self.grid.values() for a in cells if a is not None)
