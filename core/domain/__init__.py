from core.domain.activity import Activity, Predecessor
from core.domain.calendar import STANDARD_WEEK, CalendarException, WorkingCalendar
from core.domain.enums import ActivityType, DependencyType
from core.domain.identifiers import generate_id
from core.domain.project import Project
from core.domain.wbs import ROOT_PARENT_SENTINELS, WBSNode

__all__ = [
    "generate_id",
    "DependencyType",
    "ActivityType",
    "Activity",
    "Predecessor",
    "STANDARD_WEEK",
    "CalendarException",
    "WorkingCalendar",
    "ROOT_PARENT_SENTINELS",
    "WBSNode",
    "Project",
]
