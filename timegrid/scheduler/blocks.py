from __future__ import annotations

import logging
from typing import List, Tuple

from ..errors import RangeError
from ..models.assignment import Assignment
from ..models.calendar import SlotCalendar
from ..models.subject import Subject
from ..models.timetable import GridStore

logger = logging.getLogger(__name__)


def block_range(calendar: SlotCalendar, period_index: int, span: int) -> List[int]:
    """Class-period indices a block of ``span`` starting at ``period_index`` covers.

    Raises RangeError when the block runs past the last class period or when a
    Break/Lunch slot falls between two of its periods.
    """
    calendar.check_period(period_index)
    last = period_index + span - 1
    if last >= calendar.class_period_count:
        raise RangeError(
            f"A {span}-period block starting at period {period_index + 1} runs past the end of the day"
        )
    idxs = list(range(period_index, last + 1))
    for a, b in zip(idxs, idxs[1:]):
        if not calendar.adjacent(a, b):
            between = calendar.slots[calendar.position_of(a) + 1]
            raise RangeError(
                f"A {span}-period block starting at period {period_index + 1} "
                f"would straddle {between.label} ({between.time_range})"
            )
    return idxs


def insert_period(
    store: GridStore,
    day: str,
    period_index: int,
    subject: Subject,
) -> List[int]:
    calendar = store.calendar
    calendar.check_day(day)
    idxs = block_range(calendar, period_index, subject.span)
    snapshot = Assignment.from_subject(subject)
    for i in idxs:
        store.grid[day][i] = snapshot
    logger.info(f"Insert {day} periods {idxs} -> {subject.name} – {subject.teacher}")
    return idxs


def lab_run_bounds(cells: List[Assignment | None], period_index: int) -> Tuple[int, int]:
    """Inclusive bounds of the maximal lab run through ``period_index``."""
    target = cells[period_index]
    lo = hi = period_index
    while lo > 0 and target is not None and target.same_block(cells[lo - 1]):
        lo -= 1
    while hi < len(cells) - 1 and target is not None and target.same_block(cells[hi + 1]):
        hi += 1
    return lo, hi


def remove_period(store: GridStore, day: str, period_index: int) -> List[int]:
    target = store.get(day, period_index)
    if target is None:
        return []
    cells = store.grid[day]
    if not target.is_lab:
        cells[period_index] = None
        logger.info(f"Remove {day} period {period_index} ({target.subject})")
        return [period_index]
    lo, hi = lab_run_bounds(cells, period_index)
    idxs = list(range(lo, hi + 1))
    for i in idxs:
        cells[i] = None
    logger.info(f"Remove lab block {day} periods {idxs} ({target.subject})")
    return idxs
