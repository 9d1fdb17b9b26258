from __future__ import annotations

import pytest

from conftest import make_subject
from timegrid.data.catalog import SubjectCatalog
from timegrid.errors import RangeError
from timegrid.models.assignment import Assignment
from timegrid.models.subject import Subject
from timegrid.models.timetable import GridStore
from timegrid.scheduler.blocks import block_range, insert_period, remove_period


def test_non_lab_insert_touches_one_slot(store: GridStore, lecture: Subject) -> None:
    before = store.snapshot()
    assert insert_period(store, "Wednesday", 5, lecture) == [5]
    assert store.get("Wednesday", 5) == Assignment.from_subject(lecture)
    after = store.snapshot()
    after["Wednesday"][5] = None
    assert after == before


def test_lab_insert_writes_identical_block(store: GridStore, lab: Subject) -> None:
    assert insert_period(store, "Monday", 2, lab) == [2, 3, 4]
    cells = store.day("Monday")
    assert cells[2] == cells[3] == cells[4] == Assignment.from_subject(lab)
    assert cells[1] is None and cells[5] is None


@pytest.mark.parametrize("target", [2, 3, 4])
def test_remove_anywhere_in_lab_clears_block(store: GridStore, lab: Subject, target: int) -> None:
    insert_period(store, "Monday", 2, lab)
    assert remove_period(store, "Monday", target) == [2, 3, 4]
    assert store.day("Monday") == [None] * 8


@pytest.mark.parametrize(
    "start, span",
    [
        (1, 2),  # crosses the morning break
        (3, 3),  # crosses lunch
        (4, 2),  # crosses lunch
        (6, 2),  # crosses the afternoon break
        (7, 2),  # runs past the end of the day
        (6, 4),
    ],
)
def test_insert_rejects_bad_spans(store: GridStore, start: int, span: int) -> None:
    s = make_subject(9, "Physics Lab", is_lab=True, periods_per_week=span)
    with pytest.raises(RangeError):
        insert_period(store, "Tuesday", start, s)
    assert store.day("Tuesday") == [None] * 8


def test_block_range_accepts_runs_between_breaks(store: GridStore) -> None:
    assert block_range(store.calendar, 0, 2) == [0, 1]
    assert block_range(store.calendar, 2, 3) == [2, 3, 4]
    assert block_range(store.calendar, 5, 2) == [5, 6]
    assert block_range(store.calendar, 7, 1) == [7]


def test_insert_overwrites_existing_content(store: GridStore, lecture: Subject, lab: Subject) -> None:
    for i in range(8):
        insert_period(store, "Friday", i, lecture)
    insert_period(store, "Friday", 2, lab)
    cells = store.day("Friday")
    assert [c.subject for c in cells] == ["Linear Algebra"] * 2 + ["Organic Chemistry"] * 3 + ["Linear Algebra"] * 3


def test_remove_empty_slot_is_noop(store: GridStore) -> None:
    assert remove_period(store, "Monday", 0) == []
    assert store.day("Monday") == [None] * 8


def test_remove_non_lab_clears_only_target(store: GridStore, lecture: Subject) -> None:
    for i in (2, 3, 4):
        insert_period(store, "Monday", i, lecture)
    assert remove_period(store, "Monday", 3) == [3]
    cells = store.day("Monday")
    assert cells[2] is not None and cells[3] is None and cells[4] is not None


def test_remove_lab_stops_at_different_block(store: GridStore, lab: Subject) -> None:
    other = make_subject(3, "Organic Chemistry", teacher="Dr. Reed", is_lab=True, periods_per_week=2,
                         semester="3rd Semester")
    insert_period(store, "Thursday", 2, lab)
    insert_period(store, "Thursday", 0, other)
    # Different teacher: the 0-1 block and the 2-4 block stay separate
    assert remove_period(store, "Thursday", 1) == [0, 1]
    assert remove_period(store, "Thursday", 2) == [2, 3, 4]


def test_remove_clears_maximal_identical_run(store: GridStore) -> None:
    two = make_subject(4, "Circuits Lab", is_lab=True, periods_per_week=2)
    one = make_subject(4, "Circuits Lab", is_lab=True, periods_per_week=1)
    insert_period(store, "Monday", 2, two)
    insert_period(store, "Monday", 4, one)
    assert remove_period(store, "Monday", 2) == [2, 3, 4]


def test_snapshot_independent_of_catalog_edits(store: GridStore) -> None:
    catalog = SubjectCatalog()
    s = catalog.add(name="Linear Algebra", teacher="Prof. Thorne", department="Mathematics", semester="1st Semester")
    insert_period(store, "Monday", 0, s)
    catalog.update(s.id, name="Matrix Theory", teacher="Dr. Grant")
    assert store.get("Monday", 0).subject == "Linear Algebra"
    assert store.get("Monday", 0).teacher == "Prof. Thorne"


def test_unknown_day_or_index_is_range_error(store: GridStore, lecture: Subject) -> None:
    with pytest.raises(RangeError):
        insert_period(store, "Sunday", 0, lecture)
    with pytest.raises(RangeError):
        insert_period(store, "Monday", 8, lecture)
    with pytest.raises(RangeError):
        remove_period(store, "Monday", -1)
