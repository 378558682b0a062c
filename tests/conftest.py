# tests/conftest.py
import logging
from datetime import date

import pytest

from core.models import Activity, DependencyType, Predecessor, Project, WorkingCalendar
from core.services.scheduling.engine import SchedulingEngine
from core.services.work_calendar.engine import WorkCalendarEngine

# Monday
PROJECT_START = date(2024, 1, 1)


@pytest.fixture
def standard_calendar():
    return WorkingCalendar.create(name="Standard", is_default=True, calendar_id="default")


@pytest.fixture
def work_calendar(standard_calendar):
    return WorkCalendarEngine(standard_calendar)


@pytest.fixture
def scheduling_engine():
    return SchedulingEngine()


@pytest.fixture
def make_project(standard_calendar):
    def _make(activities, calendars=None, wbs_nodes=None, start_date=PROJECT_START, **extra):
        return Project(
            id="P-1",
            name="Mock Project",
            start_date=start_date,
            default_calendar_id="default",
            activities=list(activities),
            calendars=list(calendars) if calendars is not None else [standard_calendar],
            wbs_nodes=list(wbs_nodes or []),
            **extra,
        )

    return _make


def _build_activity(activity_id, duration, *preds, **extra):
    """preds are (id, type, lag) tuples or plain predecessor ids (FS, no lag)."""
    links = []
    for pred in preds:
        if isinstance(pred, str):
            links.append(Predecessor(activity_id=pred))
        else:
            pred_id, kind, lag = pred
            links.append(Predecessor(activity_id=pred_id, dependency_type=DependencyType(kind), lag_days=lag))
    return Activity(id=activity_id, name=f"Activity {activity_id}", duration_days=duration, predecessors=links, **extra)


@pytest.fixture
def act():
    return _build_activity


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        if handler not in saved_handlers:
            handler.close()
    for handler in saved_handlers:
        root.addHandler(handler)
    root.setLevel(saved_level)
