from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from core.domain.enums import ActivityType, DependencyType
from core.domain.identifiers import generate_id


@dataclass
class Predecessor:
    activity_id: str
    dependency_type: DependencyType = DependencyType.FINISH_TO_START
    lag_days: float = 0  # working days, negative for lead time


@dataclass
class Activity:
    id: str
    name: str = ""
    wbs_id: Optional[str] = None
    duration_days: float = 0
    activity_type: Optional[ActivityType] = None
    calendar_id: Optional[str] = None
    predecessors: List[Predecessor] = field(default_factory=list)

    # computed by the scheduling engine on every run
    early_start: Optional[date] = None
    early_finish: Optional[date] = None
    late_start: Optional[date] = None
    late_finish: Optional[date] = None
    total_float: int = 0
    is_critical: bool = False
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @property
    def effective_type(self) -> ActivityType:
        if self.activity_type is not None:
            # plain strings such as "Start Milestone" are accepted too
            return ActivityType(self.activity_type)
        if (self.duration_days or 0) == 0:
            return ActivityType.FINISH_MILESTONE
        return ActivityType.TASK

    @property
    def scheduled_duration(self) -> float:
        """Duration used by the date math; milestones are always zero-length."""
        if self.effective_type.is_milestone:
            return 0
        return self.duration_days or 0

    @staticmethod
    def create(
        name: str,
        duration_days: float = 0,
        wbs_id: Optional[str] = None,
        predecessors: Optional[List[Predecessor]] = None,
        **extra,
    ) -> "Activity":
        return Activity(
            id=generate_id(),
            name=name,
            wbs_id=wbs_id,
            duration_days=duration_days,
            predecessors=list(predecessors or []),
            **extra,
        )


__all__ = ["Activity", "Predecessor"]
