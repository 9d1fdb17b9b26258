from __future__ import annotations

import json
from pathlib import Path

import pytest

from conftest import make_subject
from timegrid.data.store import JsonStore
from timegrid.errors import MalformedResponse, ValidationError
from timegrid.models.calendar import SlotCalendar
from timegrid.models.timetable import GridStore, empty_grid
from timegrid.scheduler.blocks import insert_period
from timegrid.scheduler.fallback import fallback_grid


def test_round_trip_reproduces_grid(tmp_path: Path, store: GridStore, lab, lecture) -> None:
    insert_period(store, "Monday", 2, lab)
    insert_period(store, "Friday", 7, lecture)
    js = JsonStore(tmp_path, store.calendar)
    js.save_subjects([lecture, lab])
    js.save_grid(store.grid)

    subjects, grid = js.load()
    assert subjects == [lecture, lab]
    assert grid == store.grid


def test_round_trip_fallback_week(tmp_path: Path, calendar: SlotCalendar) -> None:
    subjects = [make_subject(1, "A", capacity=30), make_subject(2, "B", is_lab=True, periods_per_week=2)]
    grid = fallback_grid(subjects, calendar)
    js = JsonStore(tmp_path, calendar)
    js.save_grid(grid)
    assert js.load() == (None, grid)


def test_persisted_shape(tmp_path: Path, store: GridStore, lab) -> None:
    insert_period(store, "Monday", 2, lab)
    js = JsonStore(tmp_path, store.calendar)
    js.save_grid(store.grid)
    data = json.loads(js.timetable_path.read_text(encoding="utf-8"))
    assert set(data) == set(store.calendar.days)
    assert data["Monday"][0] is None
    assert data["Monday"][2] == {
        "subject": "Organic Chemistry",
        "teacher": "Prof. Chen",
        "department": "Chemistry",
        "semester": "3rd Semester",
        "isLab": True,
        "capacity": 20,
    }


def test_load_without_files(tmp_path: Path, calendar: SlotCalendar) -> None:
    assert JsonStore(tmp_path / "missing", calendar).load() == (None, None)


def test_load_rejects_wrong_length_day(tmp_path: Path, calendar: SlotCalendar) -> None:
    js = JsonStore(tmp_path, calendar)
    bad = {d: [None] * 8 for d in calendar.days}
    bad["Thursday"] = [None] * 7
    js.timetable_path.write_text(json.dumps(bad), encoding="utf-8")
    with pytest.raises(MalformedResponse):
        js.load()


def test_clear_removes_files(tmp_path: Path, calendar: SlotCalendar) -> None:
    js = JsonStore(tmp_path, calendar)
    js.save_subjects([make_subject()])
    js.save_grid(empty_grid(calendar))
    js.clear()
    assert not js.subjects_path.exists() and not js.timetable_path.exists()
    js.clear()


def test_replace_rejects_misfit_grid(store: GridStore) -> None:
    with pytest.raises(MalformedResponse):
        store.replace({"Monday": [None] * 8})
    assert store.occupied() == 0


def test_lab_flag_must_be_boolean(tmp_path: Path, calendar: SlotCalendar) -> None:
    js = JsonStore(tmp_path, calendar)
    record = make_subject(1, "Optics").to_dict()
    record["isLab"] = "false"
    js.subjects_path.write_text(json.dumps([record]), encoding="utf-8")
    with pytest.raises(ValidationError):
        js.load()


def test_removed_subject_round_trip(tmp_path: Path, calendar: SlotCalendar, lab) -> None:
    js = JsonStore(tmp_path, calendar)
    assert js.load_removed() is None
    js.save_removed(lab)
    assert js.load_removed() == lab
    js.save_removed(None)
    assert js.load_removed() is None
    js.save_removed(lab)
    js.clear()
    assert not js.removed_path.exists()
