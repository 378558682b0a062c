from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping, Optional

from core.exceptions import ValidationError
from core.models import (
    Activity,
    ActivityType,
    CalendarException,
    DependencyType,
    Predecessor,
    Project,
    WBSNode,
    WorkingCalendar,
)
from core.services.scheduling.models import ScheduleResult


def _parse_date(value: Any, field_name: str) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            # "2024-01-01" or "2024-01-01T12:00:00.000Z"
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            pass
    raise ValidationError(f"{field_name} must be an ISO date (YYYY-MM-DD), got {value!r}.")


def _require_date(value: Any, field_name: str) -> date:
    parsed = _parse_date(value, field_name)
    if parsed is None:
        raise ValidationError(f"{field_name} is required.")
    return parsed


def _format_date(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _require_id(raw: Mapping[str, Any], kind: str) -> str:
    value = raw.get("id")
    if value is None or str(value).strip() == "":
        raise ValidationError(f"{kind} entry is missing an id.", code="SNAPSHOT_ID_MISSING")
    return str(value)


def _number(value: Any, field_name: str) -> float:
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number, got {value!r}.")
    if isinstance(value, (int, float)):
        return value
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number, got {value!r}.") from None
    return int(parsed) if parsed.is_integer() else parsed


def predecessor_from_payload(raw: Mapping[str, Any]) -> Predecessor:
    activity_id = raw.get("activityId")
    if activity_id is None or str(activity_id).strip() == "":
        raise ValidationError("Predecessor entry is missing activityId.", code="SNAPSHOT_ID_MISSING")
    kind = raw.get("type") or DependencyType.FINISH_TO_START.value
    try:
        dependency_type = DependencyType(str(kind).strip().upper())
    except ValueError:
        raise ValidationError(
            f"Unknown relationship type {kind!r}; expected FS, SS, FF or SF.",
            code="SNAPSHOT_RELATION_INVALID",
        ) from None
    return Predecessor(
        activity_id=str(activity_id),
        dependency_type=dependency_type,
        lag_days=_number(raw.get("lag"), "lag"),
    )


def activity_from_payload(raw: Mapping[str, Any]) -> Activity:
    activity_id = _require_id(raw, "Activity")
    raw_type = raw.get("activityType")
    activity_type = None
    if raw_type:
        try:
            activity_type = ActivityType(raw_type)
        except ValueError:
            raise ValidationError(
                f"Activity {activity_id} has unknown activityType {raw_type!r}.",
                code="SNAPSHOT_ACTIVITY_TYPE_INVALID",
            ) from None

    preds = raw.get("predecessors")
    if not isinstance(preds, list):
        preds = []

    return Activity(
        id=activity_id,
        name=str(raw.get("name") or ""),
        wbs_id=raw.get("wbsId"),
        duration_days=_number(raw.get("duration"), f"Activity {activity_id} duration"),
        activity_type=activity_type,
        calendar_id=raw.get("calendarId") or None,
        predecessors=[predecessor_from_payload(p) for p in preds],
    )


def calendar_from_payload(raw: Mapping[str, Any]) -> WorkingCalendar:
    calendar_id = _require_id(raw, "Calendar")
    exceptions = [
        CalendarException(
            date=_require_date(item.get("date"), f"Calendar {calendar_id} exception date"),
            is_working=bool(item.get("isWorking")),
        )
        for item in raw.get("exceptions") or []
    ]
    return WorkingCalendar.create(
        name=str(raw.get("name") or calendar_id),
        week_days=list(raw.get("weekDays") or []),
        hours_per_day=_number(raw.get("hoursPerDay", 8), f"Calendar {calendar_id} hoursPerDay"),
        exceptions=exceptions,
        is_default=bool(raw.get("isDefault")),
        calendar_id=calendar_id,
    )


def wbs_node_from_payload(raw: Mapping[str, Any]) -> WBSNode:
    return WBSNode(
        id=_require_id(raw, "WBS"),
        name=str(raw.get("name") or ""),
        parent_id=raw.get("parentId"),
    )


def project_from_payload(payload: Mapping[str, Any]) -> Project:
    """Map a planner ProjectData document (camelCase keys) into a Project snapshot."""
    if not isinstance(payload, Mapping):
        raise ValidationError("Project payload must be a mapping.")
    meta = payload.get("meta") or {}
    return Project(
        id=str(meta.get("projectCode") or payload.get("id") or ""),
        name=str(meta.get("title") or ""),
        start_date=_parse_date(meta.get("projectStartDate"), "meta.projectStartDate"),
        default_calendar_id=meta.get("defaultCalendarId") or None,
        activities=[activity_from_payload(a) for a in payload.get("activities") or []],
        calendars=[calendar_from_payload(c) for c in payload.get("calendars") or []],
        wbs_nodes=[wbs_node_from_payload(w) for w in payload.get("wbs") or []],
    )


def activity_to_payload(act: Activity) -> dict[str, Any]:
    return {
        "id": act.id,
        "name": act.name,
        "wbsId": act.wbs_id,
        "activityType": act.effective_type.value,
        "duration": act.scheduled_duration,
        "calendarId": act.calendar_id,
        "predecessors": [
            {
                "activityId": link.activity_id,
                "type": link.dependency_type.value,
                "lag": link.lag_days,
            }
            for link in act.predecessors
        ],
        "startDate": _format_date(act.start_date),
        "endDate": _format_date(act.end_date),
        "earlyStart": _format_date(act.early_start),
        "earlyFinish": _format_date(act.early_finish),
        "lateStart": _format_date(act.late_start),
        "lateFinish": _format_date(act.late_finish),
        "totalFloat": act.total_float,
        "isCritical": act.is_critical,
    }


def schedule_result_to_payload(result: ScheduleResult) -> dict[str, Any]:
    return {
        "activities": [activity_to_payload(act) for act in result.activities],
        "wbsMap": {
            wbs_id: {
                "startDate": _format_date(span.start_date),
                "endDate": _format_date(span.end_date),
                "duration": span.duration_days,
            }
            for wbs_id, span in result.wbs_dates.items()
        },
        "projectStart": _format_date(result.project_start),
        "projectFinish": _format_date(result.project_finish),
        "converged": result.converged,
    }


__all__ = [
    "activity_from_payload",
    "activity_to_payload",
    "calendar_from_payload",
    "predecessor_from_payload",
    "project_from_payload",
    "schedule_result_to_payload",
    "wbs_node_from_payload",
]
