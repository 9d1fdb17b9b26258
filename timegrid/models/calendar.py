from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Tuple

from ..errors import RangeError, ValidationError
from .period import Slot, SlotKind


DEFAULT_DAYS: Tuple[str, ...] = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")

DEFAULT_SLOTS: Tuple[Dict[str, str], ...] = (
    {"start": "9:00 AM", "end": "9:45 AM", "kind": "period", "label": "1st Period"},
    {"start": "9:45 AM", "end": "10:35 AM", "kind": "period", "label": "2nd Period"},
    {"start": "10:35 AM", "end": "10:50 AM", "kind": "break", "label": "Break"},
    {"start": "10:50 AM", "end": "11:35 AM", "kind": "period", "label": "3rd Period"},
    {"start": "11:35 AM", "end": "12:20 PM", "kind": "period", "label": "4th Period"},
    {"start": "12:20 PM", "end": "1:05 PM", "kind": "period", "label": "5th Period"},
    {"start": "1:05 PM", "end": "2:00 PM", "kind": "lunch", "label": "Lunch"},
    {"start": "2:00 PM", "end": "2:45 PM", "kind": "period", "label": "6th Period"},
    {"start": "2:45 PM", "end": "3:30 PM", "kind": "period", "label": "7th Period"},
    {"start": "3:30 PM", "end": "3:45 PM", "kind": "break", "label": "Break"},
    {"start": "3:45 PM", "end": "4:30 PM", "kind": "period", "label": "8th Period"},
)


@dataclass(frozen=True)
class SlotCalendar:
    """Weekly time template shared by every day.

    Class periods are addressed by their index among ClassPeriod slots
    (0..class_period_count-1). ``positions`` maps that index back into the
    full slot sequence so callers can tell whether two periods are truly
    back-to-back or separated by a Break/Lunch slot.
    """

    days: Tuple[str, ...]
    slots: Tuple[Slot, ...]
    positions: Tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.days:
            raise ValidationError("Calendar needs at least one day")
        if len(set(self.days)) != len(self.days):
            raise ValidationError(f"Duplicate day names in calendar: {list(self.days)}")
        positions = tuple(i for i, s in enumerate(self.slots) if s.kind is SlotKind.CLASS_PERIOD)
        if not positions:
            raise ValidationError("Calendar needs at least one class period slot")
        object.__setattr__(self, "positions", positions)

    @classmethod
    def from_config(cls, days: Iterable[str], slots: Iterable[Dict[str, Any]]) -> "SlotCalendar":
        built: List[Slot] = []
        for idx, s in enumerate(slots):
            try:
                kind = SlotKind(str(s.get("kind", "period")).lower())
            except ValueError as e:
                raise ValidationError(f"Unknown slot kind in slot {idx}: {s.get('kind')!r}") from e
            built.append(
                Slot(
                    index=idx,
                    start=str(s["start"]),
                    end=str(s["end"]),
                    kind=kind,
                    label=str(s.get("label") or kind.value.title()),
                )
            )
        return cls(days=tuple(days), slots=tuple(built))

    @classmethod
    def default(cls) -> "SlotCalendar":
        return cls.from_config(DEFAULT_DAYS, DEFAULT_SLOTS)

    @property
    def class_period_count(self) -> int:
        return len(self.positions)

    @property
    def class_periods(self) -> List[Slot]:
        return [self.slots[p] for p in self.positions]

    def check_day(self, day: str) -> None:
        if day not in self.days:
            raise RangeError(f"Unknown day {day!r}; expected one of {list(self.days)}")

    def check_period(self, period_index: int) -> None:
        if not 0 <= period_index < self.class_period_count:
            raise RangeError(
                f"Period index {period_index} outside 0..{self.class_period_count - 1}"
            )

    def position_of(self, period_index: int) -> int:
        self.check_period(period_index)
        return self.positions[period_index]

    def slot_for(self, period_index: int) -> Slot:
        return self.slots[self.position_of(period_index)]

    def adjacent(self, first: int, second: int) -> bool:
        """True when class period ``second`` directly follows ``first`` in the template."""
        return self.position_of(second) - self.position_of(first) == 1
