"""Weekly timetable grid engine: slot calendar, lab-block editing, run-length rendering."""

__version__ = "0.1.0"
