from __future__ import annotations

import logging
from typing import Sequence

from ..models.assignment import Assignment
from ..models.calendar import SlotCalendar
from ..models.subject import Subject
from ..models.timetable import Grid, empty_grid


def fallback_grid(subjects: Sequence[Subject], calendar: SlotCalendar) -> Grid:
    """Fill the whole week round-robin from the catalog, ignoring every constraint.

    Position ``n`` in day-major, period-minor order gets ``subjects[n % len(subjects)]``.
    The pool is the catalog itself, one candidate per subject. The result is a
    populated, reproducible grid, not a valid timetable.
    """
    logger = logging.getLogger(__name__)
    grid = empty_grid(calendar)
    if not subjects:
        logger.info("Fallback with empty catalog -> empty grid")
        return grid
    pool = [Assignment.from_subject(s) for s in subjects]
    n = 0
    for day in calendar.days:
        for i in range(calendar.class_period_count):
            grid[day][i] = pool[n % len(pool)]
            n += 1
    logger.info(f"Fallback filled {n} periods from {len(pool)} subjects")
    return grid
