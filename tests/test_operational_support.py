from __future__ import annotations

import logging

from infra.logging_config import LOG_FILE_NAME, setup_logging
from infra.operational_support import (
    TraceIdLogFilter,
    bind_trace_id,
    create_trace_id,
    current_trace_id,
)
from infra.path import default_log_dir, default_result_path


def test_bind_trace_id_scopes_the_value():
    assert current_trace_id() is None

    with bind_trace_id("inc-test-123") as trace_id:
        assert trace_id == "inc-test-123"
        assert current_trace_id() == "inc-test-123"
        with bind_trace_id(None) as nested:
            assert nested.startswith("sched-")
            assert current_trace_id() == nested
        assert current_trace_id() == "inc-test-123"

    assert current_trace_id() is None


def test_create_trace_id_is_unique():
    assert create_trace_id() != create_trace_id()


def test_trace_filter_tags_records():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
    trace_filter = TraceIdLogFilter()

    assert trace_filter.filter(record)
    assert record.trace_id == "-"

    with bind_trace_id("abc"):
        trace_filter.filter(record)
    assert record.trace_id == "abc"


def test_setup_logging_writes_trace_tagged_file(tmp_path, restore_root_logging):
    log_file = setup_logging(tmp_path / "logs")

    with bind_trace_id("run-42"):
        logging.getLogger("core.services.scheduling").info("Scheduled %s activities", 3)
    for handler in restore_root_logging.handlers:
        handler.flush()

    assert log_file == tmp_path / "logs" / LOG_FILE_NAME
    text = log_file.read_text(encoding="utf-8")
    assert "Logging initialized" in text
    assert "trace=run-42 core.services.scheduling - Scheduled 3 activities" in text


def test_setup_logging_does_not_stack_handlers(tmp_path, restore_root_logging):
    setup_logging(tmp_path)
    setup_logging(tmp_path)

    assert len(restore_root_logging.handlers) == 2


def test_default_log_dir_lives_under_user_data(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
    monkeypatch.setenv("APPDATA", str(tmp_path))
    monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path)
    monkeypatch.delenv("PM_SCHED_HOME", raising=False)

    log_dir = default_log_dir()

    assert log_dir.name == "logs"
    assert tmp_path in log_dir.parents


def test_scheduler_home_override_moves_logs_and_results(tmp_path, monkeypatch):
    monkeypatch.setenv("PM_SCHED_HOME", str(tmp_path / "sched"))

    assert default_log_dir() == tmp_path / "sched" / "logs"
    result_path = default_result_path("PRJ 001/A")
    assert result_path == tmp_path / "sched" / "schedules" / "PRJ_001_A.schedule.json"
    assert result_path.parent.is_dir()
