from __future__ import annotations

import os
import time
from dataclasses import dataclass
from datetime import date

import pytest

from core.models import Activity, DependencyType, Predecessor, Project, WBSNode, WorkingCalendar
from core.services.scheduling.engine import SchedulingEngine


@dataclass(frozen=True)
class PerfConfig:
    activities: int
    wbs_nodes: int
    cross_dependency_gap: int
    start_date: date
    build_sla_seconds: float
    schedule_sla_seconds: float
    total_sla_seconds: float


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


def _load_config() -> PerfConfig:
    return PerfConfig(
        activities=_env_int("PM_PERF_ACTIVITIES", 2000),
        wbs_nodes=max(1, _env_int("PM_PERF_WBS_NODES", 50)),
        cross_dependency_gap=max(2, _env_int("PM_PERF_CROSS_DEP_GAP", 29)),
        start_date=date.fromisoformat(os.getenv("PM_PERF_START_DATE", "2025-01-06")),
        build_sla_seconds=_env_float("PM_PERF_SLA_BUILD_SECONDS", 5.0),
        schedule_sla_seconds=_env_float("PM_PERF_SLA_SCHEDULE_SECONDS", 30.0),
        total_sla_seconds=_env_float("PM_PERF_SLA_TOTAL_SECONDS", 40.0),
    )


def _timed(metrics: dict[str, float], key: str, fn):
    started = time.perf_counter()
    result = fn()
    metrics[key] = time.perf_counter() - started
    return result


def _build_large_project(config: PerfConfig) -> Project:
    nodes = [WBSNode(id="WBS-ROOT", name="Root")]
    nodes += [
        WBSNode(id=f"WBS-{idx:03d}", name=f"Package {idx + 1}", parent_id="WBS-ROOT")
        for idx in range(config.wbs_nodes)
    ]

    activities = []
    for idx in range(config.activities):
        preds = []
        if idx:
            preds.append(Predecessor(activity_id=f"A{idx - 1:05d}"))
        if idx >= config.cross_dependency_gap and idx % config.cross_dependency_gap == 0:
            preds.append(
                Predecessor(
                    activity_id=f"A{idx - config.cross_dependency_gap:05d}",
                    dependency_type=DependencyType.START_TO_START,
                    lag_days=idx % 3,
                )
            )
        activities.append(
            Activity(
                id=f"A{idx:05d}",
                name=f"Activity {idx + 1:05d}",
                wbs_id=f"WBS-{idx % config.wbs_nodes:03d}",
                duration_days=1 + (idx % 5),
                predecessors=preds,
            )
        )

    return Project(
        id="PERF",
        name=f"Large Perf Project ({config.activities} activities)",
        start_date=config.start_date,
        default_calendar_id="default",
        activities=activities,
        calendars=[WorkingCalendar.create(name="Standard", is_default=True, calendar_id="default")],
        wbs_nodes=nodes,
    )


def _assert_slas(metrics: dict[str, float], config: PerfConfig) -> None:
    limits = {
        "build": config.build_sla_seconds,
        "schedule": config.schedule_sla_seconds,
        "total": config.total_sla_seconds,
    }
    breaches = []
    for key, limit in limits.items():
        value = metrics.get(key, 0.0)
        if value > limit:
            breaches.append(f"{key}: {value:.2f}s > {limit:.2f}s")

    if breaches:
        metric_text = ", ".join(f"{k}={v:.2f}s" for k, v in sorted(metrics.items()))
        pytest.fail(f"Large-scale performance SLA breach: {'; '.join(breaches)} | metrics: {metric_text}")


def test_large_scale_schedule_performance():
    if not _env_flag("PM_RUN_PERF_TESTS", default=False):
        pytest.skip("Set PM_RUN_PERF_TESTS=1 to run large-scale performance tests.")

    config = _load_config()
    assert config.activities >= 200, "Large-scale performance test expects at least 200 activities."

    metrics: dict[str, float] = {}
    total_started = time.perf_counter()

    project = _timed(metrics, "build", lambda: _build_large_project(config))
    result = _timed(metrics, "schedule", lambda: SchedulingEngine().compute_schedule(project))
    metrics["total"] = time.perf_counter() - total_started

    assert len(result.activities) == config.activities
    assert result.converged
    assert result.critical_activity_ids()
    assert "WBS-ROOT" in result.wbs_dates
    _assert_slas(metrics, config)
