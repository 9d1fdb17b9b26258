from __future__ import annotations

from collections import Counter
from typing import Dict, List

from ..models.calendar import SlotCalendar
from ..models.timetable import Grid
from ..scheduler.blocks import lab_run_bounds


def validate_grid(grid: Grid, calendar: SlotCalendar) -> Dict[str, object]:
    """Structural report for a grid; scheduling conflicts are not checked here."""
    report: Dict[str, object] = {}
    lab_runs: List[Dict[str, object]] = []
    broken: List[str] = []
    empty = 0
    load: Counter = Counter()

    for d in calendar.days:
        cells = grid[d]
        i = 0
        while i < len(cells):
            a = cells[i]
            if a is None:
                empty += 1
                i += 1
                continue
            load[a.department] += 1
            if not a.is_lab:
                i += 1
                continue
            lo, hi = lab_run_bounds(cells, i)
            lab_runs.append({"day": d, "start": lo, "span": hi - lo + 1, "subject": a.subject})
            # A run that the editor could not have produced in one piece
            if any(not calendar.adjacent(j, j + 1) for j in range(lo, hi)):
                broken.append(f"{d}:{lo}-{hi}:{a.subject}")
            load[a.department] += hi - lo
            i = hi + 1

    report["lab_runs"] = lab_runs
    report["broken_lab_runs"] = broken
    report["empty_slots"] = empty
    report["department_load"] = dict(load)
    return report
