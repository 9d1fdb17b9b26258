# Re-export common types
from .assignment import Assignment
from .calendar import SlotCalendar
from .period import Slot, SlotKind
from .subject import Subject
from .timetable import Grid, GridFilter, GridStore, empty_grid

__all__ = [
    "Assignment",
    "Grid",
    "GridFilter",
    "GridStore",
    "Slot",
    "SlotCalendar",
    "SlotKind",
    "Subject",
    "empty_grid",
]
