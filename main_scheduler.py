# main_scheduler.py
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from PySide6.QtCore import QCoreApplication, QThreadPool

from core.exceptions import DomainError
from core.services.scheduling.diagnostics import ensure_schedulable
from infra.logging_config import setup_logging
from infra.path import default_result_path
from infra.schedule_worker import ScheduleRequest, submit_schedule_request
from infra.snapshot import project_from_payload, schedule_result_to_payload

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INVALID_INPUT = 2
EXIT_TIMEOUT = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compute a CPM schedule for a planner project document (JSON)."
    )
    parser.add_argument("payload", type=Path, help="Project document to schedule")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Where to write the schedule (default: user data dir)",
    )
    parser.add_argument("--log-dir", type=Path, default=None, help="Directory for scheduler.log")
    parser.add_argument(
        "--timeout",
        type=float,
        default=60.0,
        help="Seconds to wait for the background job",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Refuse projects with dependency cycles or broken calendars",
    )
    return parser


def run(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_dir)

    try:
        payload = json.loads(args.payload.read_text(encoding="utf-8"))
        project = project_from_payload(payload)
        if args.strict:
            ensure_schedulable(project)
    except (OSError, json.JSONDecodeError, DomainError) as exc:
        logger.error("Cannot schedule %s: %s", args.payload, exc)
        return EXIT_INVALID_INPUT

    # Qt objects used by the worker need an application instance
    _app = QCoreApplication.instance() or QCoreApplication([])

    pool = QThreadPool.globalInstance()
    handle = submit_schedule_request(
        ScheduleRequest(request_id=project.id or args.payload.stem, project=project),
        pool=pool,
    )
    response = handle.wait(args.timeout)
    if response is None:
        logger.error("Schedule for %s did not finish within %.1fs", args.payload, args.timeout)
        return EXIT_TIMEOUT
    pool.waitForDone()

    if not response.ok:
        logger.error("Schedule for %s failed (trace=%s): %s", args.payload, response.trace_id, response.error)
        return EXIT_FAILED

    output = args.output or default_result_path(project.id or args.payload.stem)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(
        json.dumps(schedule_result_to_payload(response.result), indent=2),
        encoding="utf-8",
    )
    logger.info(
        "Schedule written to %s (finish %s, converged=%s)",
        output,
        response.result.project_finish,
        response.result.converged,
    )
    return EXIT_OK


def main():
    sys.exit(run())


if __name__ == "__main__":
    main()
