from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from core.models import Activity


@dataclass(frozen=True)
class WbsDateRange:
    start_date: date
    end_date: date
    duration_days: int  # calendar span, both ends inclusive


@dataclass
class ScheduleResult:
    activities: List[Activity] = field(default_factory=list)
    wbs_dates: Dict[str, WbsDateRange] = field(default_factory=dict)
    project_start: Optional[date] = None
    project_finish: Optional[date] = None
    forward_rounds: int = 0
    backward_rounds: int = 0
    converged: bool = True

    def activity(self, activity_id: str) -> Optional[Activity]:
        for act in self.activities:
            if act.id == activity_id:
                return act
        return None

    def critical_activity_ids(self) -> List[str]:
        return [act.id for act in self.activities if act.is_critical]


__all__ = ["ScheduleResult", "WbsDateRange"]
