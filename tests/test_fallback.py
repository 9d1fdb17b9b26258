from __future__ import annotations

from conftest import make_subject
from timegrid.models.assignment import Assignment
from timegrid.models.calendar import SlotCalendar
from timegrid.scheduler.fallback import fallback_grid


def test_round_robin_day_major(calendar: SlotCalendar) -> None:
    a = make_subject(1, "A")
    b = make_subject(2, "B", is_lab=True, periods_per_week=3)
    grid = fallback_grid([a, b], calendar)
    snap_a, snap_b = Assignment.from_subject(a), Assignment.from_subject(b)
    flat = [cell for d in calendar.days for cell in grid[d]]
    assert len(flat) == 40
    for n, cell in enumerate(flat):
        assert cell == [snap_a, snap_b][n % 2], n
    assert grid["Monday"][0] == snap_a
    assert grid["Monday"][1] == snap_b
    assert grid["Tuesday"][0] == snap_a


def test_pool_not_expanded_by_periods(calendar: SlotCalendar) -> None:
    subjects = [make_subject(1, "A", periods_per_week=5), make_subject(2, "B"), make_subject(3, "C")]
    grid = fallback_grid(subjects, calendar)
    assert [c.subject for c in grid["Monday"]] == ["A", "B", "C", "A", "B", "C", "A", "B"]
    assert grid["Tuesday"][0].subject == "C"


def test_empty_catalog_gives_empty_week(calendar: SlotCalendar) -> None:
    grid = fallback_grid([], calendar)
    assert list(grid) == list(calendar.days)
    assert all(cells == [None] * 8 for cells in grid.values())


def test_fallback_is_pure(calendar: SlotCalendar) -> None:
    subjects = [make_subject(i, f"S{i}") for i in range(1, 8)]
    first = fallback_grid(subjects, calendar)
    second = fallback_grid(list(subjects), calendar)
    assert first == second
    assert fallback_grid(list(reversed(subjects)), calendar) != first
