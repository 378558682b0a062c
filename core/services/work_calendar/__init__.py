from .engine import ScanDirection, WorkCalendarEngine
from .resolver import resolve_calendar

__all__ = ["ScanDirection", "WorkCalendarEngine", "resolve_calendar"]
