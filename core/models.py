from core.domain import (
    Activity,
    ActivityType,
    CalendarException,
    DependencyType,
    Predecessor,
    Project,
    ROOT_PARENT_SENTINELS,
    STANDARD_WEEK,
    WBSNode,
    WorkingCalendar,
    generate_id,
)

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
