from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Dict, List

from ..models.calendar import SlotCalendar
from .runs import BREAK, LUNCH, OCCUPIED, RenderCell

HEADER = ["Day", "Start", "End", "Span", "Subject", "Teacher", "Department", "Semester", "Lab", "Capacity"]


def csv_table(week: Dict[str, List[RenderCell]], calendar: SlotCalendar) -> str:
    # One row per render cell; a merged lab block is one row with its span
    buf = io.StringIO()
    w = csv.writer(buf, lineterminator="\n")
    w.writerow(HEADER)
    for d in calendar.days:
        for c in week[d]:
            if c.kind in (BREAK, LUNCH):
                w.writerow([d, c.start, c.end, 1, c.label, "", "", "", "", ""])
            elif c.kind == OCCUPIED and c.assignment is not None:
                a = c.assignment
                w.writerow(
                    [
                        d,
                        c.start,
                        c.end,
                        c.span,
                        a.subject,
                        a.teacher,
                        a.department,
                        a.semester,
                        "yes" if a.is_lab else "no",
                        a.capacity if a.capacity is not None else "",
                    ]
                )
            else:
                w.writerow([d, c.start, c.end, 1, "", "", "", "", "", ""])
    return buf.getvalue()


def write_csv_table(text: str, outputs_dir: Path) -> Path:
    outputs_dir.mkdir(parents=True, exist_ok=True)
    out_path = outputs_dir / "timetable.csv"
    with out_path.open("w", encoding="utf-8", newline="") as f:
        f.write(text)
    return out_path
