from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterator, List, Tuple

from core.exceptions import BusinessRuleError, ValidationError
from core.models import Activity, Project, WorkingCalendar


@dataclass
class CalendarIssue:
    calendar_id: str
    code: str
    message: str


@dataclass
class ScheduleDiagnostics:
    cycles: List[List[str]] = field(default_factory=list)
    dangling_predecessors: List[Tuple[str, str]] = field(default_factory=list)
    calendar_issues: List[CalendarIssue] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not (self.cycles or self.dangling_predecessors or self.calendar_issues)


def _successor_graph(activities: List[Activity]) -> Dict[str, List[str]]:
    known = {act.id for act in activities}
    graph: Dict[str, List[str]] = {act.id: [] for act in activities}
    for act in activities:
        for link in act.predecessors:
            if link.activity_id not in known:
                continue
            targets = graph[link.activity_id]
            if act.id not in targets:
                targets.append(act.id)
    return graph


def _normalized(ring: List[str]) -> Tuple[str, ...]:
    pivot = ring.index(min(ring))
    return tuple(ring[pivot:] + ring[:pivot])


def find_dependency_cycles(activities: List[Activity]) -> List[List[str]]:
    """
    Depth-first walk over predecessor -> successor edges. Every back edge
    yields one closed path such as ["A", "B", "A"].
    """
    graph = _successor_graph(activities)
    state: Dict[str, int] = {}  # 1 = on current path, 2 = done
    seen: set[Tuple[str, ...]] = set()
    cycles: List[List[str]] = []

    for root in graph:
        if state.get(root):
            continue
        path: List[str] = [root]
        position: Dict[str, int] = {root: 0}
        stack: List[Tuple[str, Iterator[str]]] = [(root, iter(graph[root]))]
        state[root] = 1

        while stack:
            node, pending = stack[-1]
            nxt = next(pending, None)
            if nxt is None:
                stack.pop()
                path.pop()
                position.pop(node, None)
                state[node] = 2
                continue

            mark = state.get(nxt, 0)
            if mark == 0:
                state[nxt] = 1
                position[nxt] = len(path)
                path.append(nxt)
                stack.append((nxt, iter(graph[nxt])))
            elif mark == 1:
                ring = path[position[nxt]:]
                key = _normalized(ring)
                if key not in seen:
                    seen.add(key)
                    cycles.append([*ring, nxt])

    return cycles


def find_dangling_predecessors(activities: List[Activity]) -> List[Tuple[str, str]]:
    known = {act.id for act in activities}
    return [
        (act.id, link.activity_id)
        for act in activities
        for link in act.predecessors
        if link.activity_id not in known
    ]


def validate_calendar(calendar: WorkingCalendar) -> List[CalendarIssue]:
    issues: List[CalendarIssue] = []
    week_days = tuple(calendar.week_days or ())

    if len(week_days) != 7:
        issues.append(
            CalendarIssue(
                calendar_id=calendar.id,
                code="CALENDAR_WEEKDAYS_INVALID",
                message=f"Calendar '{calendar.name}' defines {len(week_days)} weekdays instead of 7.",
            )
        )
    elif not any(week_days):
        issues.append(
            CalendarIssue(
                calendar_id=calendar.id,
                code="CALENDAR_NO_WORKING_DAYS",
                message=(
                    f"Calendar '{calendar.name}' has no working weekday; "
                    "dates will only land on working exceptions."
                ),
            )
        )

    if calendar.hours_per_day is None or calendar.hours_per_day <= 0:
        issues.append(
            CalendarIssue(
                calendar_id=calendar.id,
                code="CALENDAR_HOURS_INVALID",
                message=f"Calendar '{calendar.name}' must have positive hours per day.",
            )
        )

    dates: set[date] = set()
    for item in calendar.exceptions or []:
        if item.date in dates:
            issues.append(
                CalendarIssue(
                    calendar_id=calendar.id,
                    code="CALENDAR_EXCEPTION_DUPLICATE",
                    message=f"Calendar '{calendar.name}' repeats exception {item.date.isoformat()}.",
                )
            )
        dates.add(item.date)

    return issues


def diagnose_project(project: Project) -> ScheduleDiagnostics:
    activities = list(project.activities or [])
    issues: List[CalendarIssue] = []
    for cal in project.calendars or []:
        issues.extend(validate_calendar(cal))
    return ScheduleDiagnostics(
        cycles=find_dependency_cycles(activities),
        dangling_predecessors=find_dangling_predecessors(activities),
        calendar_issues=issues,
    )


def ensure_schedulable(project: Project) -> ScheduleDiagnostics:
    """
    Strict pre-flight check for callers that do not want the engine's
    best-effort behaviour on cyclic graphs or dead calendars.
    Dangling predecessors are reported but tolerated.
    """
    report = diagnose_project(project)
    if report.cycles:
        names = {act.id: (act.name or act.id) for act in project.activities or []}
        cycle_text = " -> ".join(names.get(act_id, act_id) for act_id in report.cycles[0])
        raise BusinessRuleError(
            f"Cannot schedule project: circular dependency detected. Cycle path: {cycle_text}",
            code="SCHEDULE_CYCLE",
        )
    if report.calendar_issues:
        first = report.calendar_issues[0]
        raise ValidationError(first.message, code=first.code)
    return report


__all__ = [
    "CalendarIssue",
    "ScheduleDiagnostics",
    "diagnose_project",
    "ensure_schedulable",
    "find_dangling_predecessors",
    "find_dependency_cycles",
    "validate_calendar",
]
