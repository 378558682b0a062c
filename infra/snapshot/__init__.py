from infra.snapshot.mapper import (
    activity_from_payload,
    activity_to_payload,
    calendar_from_payload,
    predecessor_from_payload,
    project_from_payload,
    schedule_result_to_payload,
    wbs_node_from_payload,
)

__all__ = [
    "project_from_payload",
    "activity_from_payload",
    "predecessor_from_payload",
    "calendar_from_payload",
    "wbs_node_from_payload",
    "activity_to_payload",
    "schedule_result_to_payload",
]
