from __future__ import annotations

import logging
from dataclasses import dataclass
from threading import Event
from typing import Callable, Optional

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal

from core.models import Project
from core.services.common.limits import SchedulingLimits
from core.services.scheduling.engine import compute_schedule
from core.services.scheduling.models import ScheduleResult
from infra.operational_support import bind_trace_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScheduleRequest:
    request_id: str
    project: Project
    limits: Optional[SchedulingLimits] = None


@dataclass(frozen=True)
class ScheduleResponse:
    request_id: str
    trace_id: str
    result: Optional[ScheduleResult] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ScheduleJobHandle:
    """Blocking view of a job for callers without a Qt event loop."""

    def __init__(self, request_id: str) -> None:
        self.request_id = request_id
        self._event = Event()
        self._response: ScheduleResponse | None = None

    def resolve(self, response: ScheduleResponse) -> None:
        self._response = response
        self._event.set()

    def done(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float | None = None) -> ScheduleResponse | None:
        if not self._event.wait(timeout):
            return None
        return self._response


class _ScheduleJobSignals(QObject):
    finished = Signal(object)
    failed = Signal(object)


class ScheduleJob(QRunnable):
    """Runs one schedule request off the caller's thread."""

    def __init__(self, request: ScheduleRequest) -> None:
        super().__init__()
        self.request = request
        self.signals = _ScheduleJobSignals()
        self.handle = ScheduleJobHandle(request.request_id)

    def run(self) -> None:
        with bind_trace_id(None) as trace_id:
            logger.info(
                "Schedule request %s started (%s activities)",
                self.request.request_id,
                len(self.request.project.activities or []),
            )
            try:
                # PM_SCHED_* overrides apply unless the request carries its own limits
                limits = self.request.limits or SchedulingLimits.from_env()
                result = compute_schedule(self.request.project, limits)
            except Exception as exc:  # noqa: BLE001
                logger.exception("Schedule request %s failed", self.request.request_id)
                response = ScheduleResponse(
                    request_id=self.request.request_id,
                    trace_id=trace_id,
                    error=str(exc) or exc.__class__.__name__,
                )
                self.handle.resolve(response)
                self.signals.failed.emit(response)
                return

            response = ScheduleResponse(
                request_id=self.request.request_id,
                trace_id=trace_id,
                result=result,
            )
            self.handle.resolve(response)
            self.signals.finished.emit(response)


def submit_schedule_request(
    request: ScheduleRequest,
    pool: QThreadPool | None = None,
    on_finished: Callable[[ScheduleResponse], None] | None = None,
    on_failed: Callable[[ScheduleResponse], None] | None = None,
) -> ScheduleJobHandle:
    job = ScheduleJob(request)
    if on_finished is not None:
        job.signals.finished.connect(on_finished)
    if on_failed is not None:
        job.signals.failed.connect(on_failed)
    (pool or QThreadPool.globalInstance()).start(job)
    return job.handle


__all__ = [
    "ScheduleJob",
    "ScheduleJobHandle",
    "ScheduleRequest",
    "ScheduleResponse",
    "submit_schedule_request",
]
