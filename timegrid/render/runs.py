from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence

from ..models.assignment import Assignment
from ..models.calendar import SlotCalendar
from ..models.period import SlotKind
from ..models.timetable import Cell, Grid, Predicate

BREAK = "break"
LUNCH = "lunch"
EMPTY = "empty"
OCCUPIED = "occupied"


@dataclass(frozen=True)
class RenderCell:
    kind: str  # break, lunch, empty, occupied
    start: str
    end: str
    label: str = ""
    span: int = 1
    period_index: int | None = None
    assignment: Assignment | None = None

    @property
    def time_range(self) -> str:
        return f"{self.start} – {self.end}"


def render_day(
    cells: Sequence[Cell],
    calendar: SlotCalendar,
    predicate: Predicate | None = None,
) -> List[RenderCell]:
    """Merge consecutive identical lab periods of one day into spanning cells.

    The predicate is applied first, so a lab block that is only partly
    visible never merges across the hidden part. Runs stop at Break/Lunch
    slots, which always render as their own label cell.
    """
    visible: List[Cell] = [
        a if a is not None and (predicate is None or predicate(a)) else None for a in cells
    ]
    out: List[RenderCell] = []
    slots = calendar.slots
    pos = 0
    period = 0
    while pos < len(slots):
        s = slots[pos]
        if s.kind is not SlotKind.CLASS_PERIOD:
            kind = LUNCH if s.kind is SlotKind.LUNCH else BREAK
            out.append(RenderCell(kind, s.start, s.end, label=s.label))
            pos += 1
            continue
        a = visible[period]
        if a is None:
            out.append(RenderCell(EMPTY, s.start, s.end, label=s.label, period_index=period))
            pos += 1
            period += 1
            continue
        span = 1
        if a.is_lab:
            while (
                period + span < len(visible)
                and pos + span < len(slots)
                and slots[pos + span].kind is SlotKind.CLASS_PERIOD
                and a.same_block(visible[period + span])
            ):
                span += 1
        last = slots[pos + span - 1]
        out.append(
            RenderCell(
                OCCUPIED,
                s.start,
                last.end,
                label=s.label,
                span=span,
                period_index=period,
                assignment=a,
            )
        )
        pos += span
        period += span
    return out


def render_week(
    grid: Grid,
    calendar: SlotCalendar,
    predicate: Predicate | None = None,
) -> Dict[str, List[RenderCell]]:
    return {d: render_day(grid[d], calendar, predicate) for d in calendar.days}
