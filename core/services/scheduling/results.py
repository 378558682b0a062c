from __future__ import annotations

from typing import List

from core.models import Activity


def finalize_float_and_criticality(activities: List[Activity]) -> None:
    """
    Derive total float from the early/late finish gap and report the early
    schedule as the working schedule.
    """
    for act in activities:
        if act.late_finish is not None and act.early_finish is not None:
            act.total_float = (act.late_finish - act.early_finish).days
        else:
            act.total_float = 0
        act.is_critical = act.total_float <= 0
        act.start_date = act.early_start
        act.end_date = act.early_finish


__all__ = ["finalize_float_and_criticality"]
