from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from core.models import Activity, Predecessor


@dataclass(frozen=True)
class SuccessorLink:
    successor_id: str
    link: Predecessor


def build_activity_index(activities: List[Activity]) -> Dict[str, Activity]:
    # later duplicates win, matching a plain id -> activity assignment
    return {act.id: act for act in activities}


def build_successor_index(
    activities: List[Activity],
    activities_by_id: Dict[str, Activity],
) -> Dict[str, List[SuccessorLink]]:
    """
    Inverse of the predecessor lists: predecessor id -> outgoing links.
    Links pointing at unknown activities are dropped.
    """
    successors: Dict[str, List[SuccessorLink]] = {}
    for act in activities:
        for link in act.predecessors:
            if link.activity_id not in activities_by_id:
                continue
            successors.setdefault(link.activity_id, []).append(
                SuccessorLink(successor_id=act.id, link=link)
            )
    return successors


__all__ = ["SuccessorLink", "build_activity_index", "build_successor_index"]
