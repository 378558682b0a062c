# core/services/scheduling/engine.py
from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Dict, List, Optional

from core.models import Activity, ActivityType, DependencyType, Project
from core.services.common.limits import SchedulingLimits
from core.services.scheduling.graph import build_activity_index, build_successor_index
from core.services.scheduling.models import ScheduleResult
from core.services.scheduling.passes import run_backward_pass, run_forward_pass
from core.services.scheduling.results import finalize_float_and_criticality
from core.services.scheduling.wbs_rollup import rollup_wbs_dates
from core.services.work_calendar.engine import WorkCalendarEngine
from core.services.work_calendar.resolver import resolve_calendar

logger = logging.getLogger(__name__)


def _working_copy(act: Activity) -> Activity:
    return replace(
        act,
        activity_type=ActivityType(act.activity_type) if act.activity_type is not None else None,
        predecessors=[
            replace(link, dependency_type=DependencyType(link.dependency_type))
            for link in act.predecessors or []
        ],
        early_start=None,
        early_finish=None,
        late_start=None,
        late_finish=None,
        total_float=0,
        is_critical=False,
        start_date=None,
        end_date=None,
    )


class SchedulingEngine:
    """
    CPM-style scheduling engine:
    - Forward pass: ES/EF relaxed to a fixed point
    - Backward pass: LS/LF relaxed to a fixed point
    - FS, FF, SS, SF with signed lag in working days
    - Per-activity calendars via WorkCalendarEngine
    - WBS date rollup

    Stateless between calls; safe to share across threads.
    """

    def __init__(self, limits: Optional[SchedulingLimits] = None):
        self._limits: SchedulingLimits = limits or SchedulingLimits()

    def compute_schedule(self, project: Project) -> ScheduleResult:
        """
        Full CPM calculation for a project snapshot:
        - works on copies; the caller's activities are never mutated
        - dangling predecessor references are ignored
        - cyclic graphs stop at the round cap with the best dates reached
        """
        source = list(project.activities or [])
        if not source:
            return ScheduleResult()

        activities: List[Activity] = [_working_copy(act) for act in source]
        activities_by_id = build_activity_index(activities)
        project_start = project.start_date or date.today()
        if isinstance(project_start, datetime):
            project_start = project_start.date()

        engines: Dict[Optional[str], WorkCalendarEngine] = {}

        def calendar_for(act: Activity) -> WorkCalendarEngine:
            engine = engines.get(act.calendar_id)
            if engine is None:
                engine = WorkCalendarEngine(resolve_calendar(act.calendar_id, project), self._limits)
                engines[act.calendar_id] = engine
            return engine

        forward = run_forward_pass(
            activities=activities,
            activities_by_id=activities_by_id,
            project_start=project_start,
            calendar_for=calendar_for,
            limits=self._limits,
        )

        project_finish = max(act.early_finish for act in activities)
        successors = build_successor_index(activities, activities_by_id)
        backward = run_backward_pass(
            activities=activities,
            activities_by_id=activities_by_id,
            successors=successors,
            project_finish=project_finish,
            calendar_for=calendar_for,
            limits=self._limits,
        )

        finalize_float_and_criticality(activities)
        wbs_dates = rollup_wbs_dates(project.wbs_nodes or [], activities)

        logger.info(
            "Scheduled %s activities for project %s: %s -> %s (forward=%s, backward=%s rounds)",
            len(activities),
            project.id,
            project_start.isoformat(),
            project_finish.isoformat(),
            forward.rounds,
            backward.rounds,
        )

        return ScheduleResult(
            activities=activities,
            wbs_dates=wbs_dates,
            project_start=project_start,
            project_finish=project_finish,
            forward_rounds=forward.rounds,
            backward_rounds=backward.rounds,
            converged=forward.converged and backward.converged,
        )


def compute_schedule(project: Project, limits: Optional[SchedulingLimits] = None) -> ScheduleResult:
    return SchedulingEngine(limits).compute_schedule(project)


__all__ = ["SchedulingEngine", "compute_schedule"]
