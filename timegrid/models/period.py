from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SlotKind(str, Enum):
    CLASS_PERIOD = "period"
    BREAK = "break"
    LUNCH = "lunch"


@dataclass(frozen=True)
class Slot:
    index: int
    start: str
    end: str
    kind: SlotKind
    label: str

    @property
    def time_range(self) -> str:
        return f"{self.start} – {self.end}"

    @property
    def is_class_period(self) -> bool:
        return self.kind is SlotKind.CLASS_PERIOD
