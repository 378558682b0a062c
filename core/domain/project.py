from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from core.domain.activity import Activity
from core.domain.calendar import WorkingCalendar
from core.domain.identifiers import generate_id
from core.domain.wbs import WBSNode


@dataclass
class Project:
    """Snapshot handed to the scheduling engine by the surrounding application."""

    id: str
    name: str
    start_date: Optional[date] = None
    default_calendar_id: Optional[str] = None
    activities: List[Activity] = field(default_factory=list)
    calendars: List[WorkingCalendar] = field(default_factory=list)
    wbs_nodes: List[WBSNode] = field(default_factory=list)

    @staticmethod
    def create(name: str, start_date: Optional[date] = None, **extra) -> "Project":
        return Project(
            id=generate_id(),
            name=name,
            start_date=start_date,
            **extra,
        )


__all__ = ["Project"]
