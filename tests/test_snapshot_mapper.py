from datetime import date

import pytest

from core.exceptions import ValidationError
from core.models import ActivityType, DependencyType
from core.services.scheduling.engine import compute_schedule
from infra.snapshot import project_from_payload, schedule_result_to_payload


def _payload(**overrides):
    payload = {
        "meta": {
            "projectCode": "PRJ-001",
            "title": "Mock Project",
            "projectStartDate": "2024-01-01",
            "defaultCalendarId": "std",
        },
        "calendars": [
            {
                "id": "std",
                "name": "Standard",
                "weekDays": [False, True, True, True, True, True, False],
                "hoursPerDay": 8,
                "isDefault": True,
                "exceptions": [],
            }
        ],
        "wbs": [
            {"id": "W1", "name": "Phase 1", "parentId": None},
            {"id": "W2", "name": "Phase 2", "parentId": "null"},
        ],
        "activities": [
            {"id": "A", "name": "Task A", "wbsId": "W1", "duration": 2, "predecessors": []},
            {
                "id": "B",
                "name": "Task B",
                "wbsId": "W1",
                "duration": 2,
                "predecessors": [{"activityId": "A", "type": "FS", "lag": 0}],
            },
        ],
    }
    payload.update(overrides)
    return payload


def test_payload_maps_to_project():
    project = project_from_payload(_payload())

    assert project.id == "PRJ-001"
    assert project.name == "Mock Project"
    assert project.start_date == date(2024, 1, 1)
    assert project.default_calendar_id == "std"
    assert [a.id for a in project.activities] == ["A", "B"]
    assert project.activities[1].predecessors[0].dependency_type == DependencyType.FINISH_TO_START
    assert project.calendars[0].week_days[0] is False
    assert project.wbs_nodes[1].is_root


def test_scheduled_payload_round_trip():
    result = compute_schedule(project_from_payload(_payload()))
    out = schedule_result_to_payload(result)

    b = next(a for a in out["activities"] if a["id"] == "B")
    assert b["startDate"] == "2024-01-03"
    assert b["endDate"] == "2024-01-04"
    assert b["isCritical"] is True
    assert b["totalFloat"] == 0
    assert out["wbsMap"] == {"W1": {"startDate": "2024-01-01", "endDate": "2024-01-04", "duration": 4}}
    assert out["projectFinish"] == "2024-01-04"
    assert out["converged"] is True


def test_payload_accepts_loose_values():
    payload = _payload()
    payload["meta"]["projectStartDate"] = "2024-01-01T09:30:00.000Z"
    payload["activities"][1]["predecessors"] = [{"activityId": "A", "type": "ss", "lag": "2"}]
    payload["activities"].append(
        {"id": "M", "name": "Done", "duration": 3, "activityType": "Finish Milestone"}
    )

    project = project_from_payload(payload)
    link = project.activities[1].predecessors[0]
    milestone = project.activities[2]

    assert project.start_date == date(2024, 1, 1)
    assert link.dependency_type == DependencyType.START_TO_START
    assert link.lag_days == 2
    assert milestone.activity_type == ActivityType.FINISH_MILESTONE
    assert milestone.scheduled_duration == 0


def test_missing_relation_type_defaults_to_finish_to_start():
    payload = _payload()
    payload["activities"][1]["predecessors"] = [{"activityId": "A"}]

    link = project_from_payload(payload).activities[1].predecessors[0]

    assert link.dependency_type == DependencyType.FINISH_TO_START
    assert link.lag_days == 0


def test_calendar_exceptions_are_mapped():
    payload = _payload()
    payload["calendars"][0]["exceptions"] = [{"date": "2024-01-02", "isWorking": False}]

    result = compute_schedule(project_from_payload(payload))

    assert result.activity("A").early_finish == date(2024, 1, 3)


@pytest.mark.parametrize(
    "mutate, code",
    [
        (lambda p: p["activities"][0].pop("id"), "SNAPSHOT_ID_MISSING"),
        (
            lambda p: p["activities"][1]["predecessors"][0].update(type="XX"),
            "SNAPSHOT_RELATION_INVALID",
        ),
        (lambda p: p["activities"][0].update(activityType="Epic"), "SNAPSHOT_ACTIVITY_TYPE_INVALID"),
        (lambda p: p["calendars"][0].update(weekDays=[True] * 6), "CALENDAR_WEEKDAYS_INVALID"),
    ],
)
def test_invalid_payload_is_rejected(mutate, code):
    payload = _payload()
    mutate(payload)

    with pytest.raises(ValidationError) as exc:
        project_from_payload(payload)

    assert exc.value.code == code


def test_bad_dates_and_numbers_are_rejected():
    payload = _payload()
    payload["meta"]["projectStartDate"] = "next monday"
    with pytest.raises(ValidationError, match="projectStartDate"):
        project_from_payload(payload)

    payload = _payload()
    payload["activities"][0]["duration"] = "two"
    with pytest.raises(ValidationError, match="duration"):
        project_from_payload(payload)


def test_non_mapping_payload_is_rejected():
    with pytest.raises(ValidationError):
        project_from_payload(["not", "a", "mapping"])
