from __future__ import annotations

from enum import Enum


class DependencyType(str, Enum):
    FINISH_TO_START = "FS"
    FINISH_TO_FINISH = "FF"
    START_TO_START = "SS"
    START_TO_FINISH = "SF"


class ActivityType(str, Enum):
    TASK = "Task"
    START_MILESTONE = "Start Milestone"
    FINISH_MILESTONE = "Finish Milestone"

    @property
    def is_milestone(self) -> bool:
        return self in (ActivityType.START_MILESTONE, ActivityType.FINISH_MILESTONE)


__all__ = ["DependencyType", "ActivityType"]
