from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from timegrid.config import Settings
from timegrid.models.calendar import SlotCalendar
from timegrid.models.subject import Subject
from timegrid.models.timetable import GridStore


@pytest.fixture
def calendar() -> SlotCalendar:
    # 8 class periods: 0 1 | Break | 2 3 4 | Lunch | 5 6 | Break | 7
    return SlotCalendar.default()


@pytest.fixture
def store(calendar: SlotCalendar) -> GridStore:
    return GridStore(calendar)


def make_subject(id: int = 1, name: str = "Algebra", **kw: Any) -> Subject:
    fields: dict[str, Any] = {
        "teacher": "Prof. Thorne",
        "department": "Mathematics",
        "semester": "1st Semester",
        "is_lab": False,
        "periods_per_week": 1,
    }
    fields.update(kw)
    return Subject(id=id, name=name, **fields)


@pytest.fixture
def lecture() -> Subject:
    return make_subject(1, "Linear Algebra", periods_per_week=3)


@pytest.fixture
def lab() -> Subject:
    return make_subject(
        2,
        "Organic Chemistry",
        teacher="Prof. Chen",
        department="Chemistry",
        semester="3rd Semester",
        is_lab=True,
        periods_per_week=3,
        capacity=20,
    )


@pytest.fixture
def settings(tmp_path: Path, calendar: SlotCalendar) -> Settings:
    return Settings(root=tmp_path, calendar=calendar, state_dir=tmp_path / "state", min_subjects=2)
