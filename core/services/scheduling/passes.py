from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, List, Optional

from core.models import Activity
from core.services.common.limits import SchedulingLimits
from core.services.scheduling.date_compute import (
    backward_constraint,
    finish_from_start,
    forward_constraint,
    start_from_finish,
)
from core.services.scheduling.graph import SuccessorLink
from core.services.work_calendar.engine import ScanDirection, WorkCalendarEngine

logger = logging.getLogger(__name__)

CalendarLookup = Callable[[Activity], WorkCalendarEngine]


@dataclass(frozen=True)
class PassOutcome:
    rounds: int
    converged: bool


def run_forward_pass(
    activities: List[Activity],
    activities_by_id: Dict[str, Activity],
    project_start: date,
    calendar_for: CalendarLookup,
    limits: SchedulingLimits,
) -> PassOutcome:
    """
    Relax early start/finish to a fixed point.
    Each round re-evaluates every activity against the current dates of its
    predecessors, so input order does not matter; cycles stop at the round cap.
    """
    max_rounds = limits.max_rounds(len(activities))
    rounds = 0
    converged = False

    while rounds < max_rounds:
        rounds += 1
        changed = False
        for act in activities:
            calendar = calendar_for(act)
            duration = act.scheduled_duration

            candidate: Optional[date] = None
            for link in act.predecessors:
                pred = activities_by_id.get(link.activity_id)
                if pred is None or pred.early_start is None or pred.early_finish is None:
                    continue
                constraint = forward_constraint(
                    link, pred.early_start, pred.early_finish, duration, calendar
                )
                if candidate is None or constraint > candidate:
                    candidate = constraint

            if candidate is None or candidate < project_start:
                candidate = project_start
            candidate = calendar.nearest_working_day(candidate, ScanDirection.FORWARD)

            if candidate != act.early_start:
                act.early_start = candidate
                act.early_finish = finish_from_start(candidate, duration, calendar)
                changed = True

        if not changed:
            converged = True
            break

    if not converged:
        logger.warning(
            "Forward pass did not converge after %s rounds; predecessor graph likely has a cycle",
            rounds,
        )
    logger.debug("Forward pass finished: rounds=%s converged=%s", rounds, converged)
    return PassOutcome(rounds=rounds, converged=converged)


def run_backward_pass(
    activities: List[Activity],
    activities_by_id: Dict[str, Activity],
    successors: Dict[str, List[SuccessorLink]],
    project_finish: date,
    calendar_for: CalendarLookup,
    limits: SchedulingLimits,
) -> PassOutcome:
    """
    Relax late start/finish to a fixed point, walking activities in reverse.
    No late finish may exceed the project finish.
    """
    for act in activities:
        act.late_finish = project_finish
        act.late_start = start_from_finish(project_finish, act.scheduled_duration, calendar_for(act))

    max_rounds = limits.max_rounds(len(activities))
    rounds = 0
    converged = False

    while rounds < max_rounds:
        rounds += 1
        changed = False
        for act in reversed(activities):
            calendar = calendar_for(act)
            duration = act.scheduled_duration

            candidate = project_finish
            outgoing = successors.get(act.id, [])
            if outgoing:
                earliest: Optional[date] = None
                for entry in outgoing:
                    succ = activities_by_id[entry.successor_id]
                    constraint = backward_constraint(
                        entry.link, succ.late_start, succ.late_finish, duration, calendar
                    )
                    if earliest is None or constraint < earliest:
                        earliest = constraint
                candidate = earliest
            if candidate > project_finish:
                candidate = project_finish

            if candidate != act.late_finish:
                act.late_finish = candidate
                act.late_start = start_from_finish(candidate, duration, calendar)
                changed = True

        if not changed:
            converged = True
            break

    if not converged:
        logger.warning(
            "Backward pass did not converge after %s rounds; predecessor graph likely has a cycle",
            rounds,
        )
    logger.debug("Backward pass finished: rounds=%s converged=%s", rounds, converged)
    return PassOutcome(rounds=rounds, converged=converged)


__all__ = ["CalendarLookup", "PassOutcome", "run_backward_pass", "run_forward_pass"]
