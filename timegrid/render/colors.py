from __future__ import annotations

from typing import Dict, Iterable

from ..models.timetable import Grid

# (background, text) pairs, cycled in first-seen department order
PALETTE = [
    ("#ffe4e6", "#9f1239"),  # rose
    ("#fce7f3", "#9d174d"),  # pink
    ("#fae8ff", "#86198f"),  # fuchsia
    ("#f3e8ff", "#6b21a8"),  # purple
    ("#ede9fe", "#5b21b6"),  # violet
    ("#e0e7ff", "#3730a3"),  # indigo
    ("#dbeafe", "#1e40af"),  # blue
    ("#e0f2fe", "#075985"),  # sky
    ("#cffafe", "#155e75"),  # cyan
    ("#ccfbf1", "#115e59"),  # teal
    ("#d1fae5", "#065f46"),  # emerald
    ("#dcfce7", "#166534"),  # green
    ("#ecfccb", "#3f6212"),  # lime
    ("#fef9c3", "#854d0e"),  # yellow
    ("#fef3c7", "#92400e"),  # amber
    ("#ffedd5", "#9a3412"),  # orange
]

NEUTRAL = ("#f1f5f9", "#1e293b")


def department_colors(departments: Iterable[str]) -> Dict[str, tuple[str, str]]:
    distinct = list(dict.fromkeys(d for d in departments if d))
    return {d: PALETTE[i % len(PALETTE)] for i, d in enumerate(distinct)}


def grid_departments(grid: Grid) -> list[str]:
    return [a.department for cells in grid.values() for a in cells if a is not None]
