from __future__ import annotations

from typing import Optional

from core.models import Project, WorkingCalendar


def _find(project: Project, calendar_id: Optional[str]) -> Optional[WorkingCalendar]:
    if not calendar_id:
        return None
    for cal in project.calendars or []:
        if cal.id == calendar_id:
            return cal
    return None


def resolve_calendar(calendar_id: Optional[str], project: Project) -> WorkingCalendar:
    """
    Resolution order:
    - the calendar referenced by the activity
    - the project's declared default calendar
    - any calendar flagged as default
    - the built-in standard calendar (ephemeral, not added to the project)
    """
    cal = _find(project, calendar_id) or _find(project, project.default_calendar_id)
    if cal is not None:
        return cal
    for candidate in project.calendars or []:
        if candidate.is_default:
            return candidate
    return WorkingCalendar.create_default()


__all__ = ["resolve_calendar"]
