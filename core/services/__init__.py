from .common.limits import SchedulingLimits
from .scheduling import ScheduleResult, SchedulingEngine, WbsDateRange, compute_schedule
from .work_calendar import ScanDirection, WorkCalendarEngine, resolve_calendar

__all__ = [
    "SchedulingLimits",
    "SchedulingEngine",
    "ScheduleResult",
    "WbsDateRange",
    "compute_schedule",
    "ScanDirection",
    "WorkCalendarEngine",
    "resolve_calendar",
]
