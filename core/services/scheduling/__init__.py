from .diagnostics import (
    CalendarIssue,
    ScheduleDiagnostics,
    diagnose_project,
    ensure_schedulable,
)
from .engine import SchedulingEngine, compute_schedule
from .models import ScheduleResult, WbsDateRange

__all__ = [
    "SchedulingEngine",
    "compute_schedule",
    "ScheduleResult",
    "WbsDateRange",
    "CalendarIssue",
    "ScheduleDiagnostics",
    "diagnose_project",
    "ensure_schedulable",
]
