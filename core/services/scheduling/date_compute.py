from __future__ import annotations

from datetime import date

from core.models import DependencyType, Predecessor
from core.services.work_calendar.engine import ONE_DAY, ScanDirection, WorkCalendarEngine


def finish_from_start(start: date, duration: float, calendar: WorkCalendarEngine) -> date:
    # the start day counts as day 1
    if duration <= 0:
        return start
    return calendar.add_working_days(start, duration - 1)


def start_from_finish(finish: date, duration: float, calendar: WorkCalendarEngine) -> date:
    if duration <= 0:
        return finish
    return calendar.add_working_days(finish, -(duration - 1))


def forward_constraint(
    link: Predecessor,
    pred_start: date,
    pred_finish: date,
    duration: float,
    calendar: WorkCalendarEngine,
) -> date:
    """
    Earliest permissible start of the successor for one incoming link.
    `duration` and `calendar` belong to the successor.
    """
    lag = link.lag_days or 0
    kind = link.dependency_type

    if kind == DependencyType.START_TO_START:
        return calendar.add_working_days(pred_start, lag)

    if kind == DependencyType.FINISH_TO_FINISH:
        # EF_s >= EF_p + lag
        finish = calendar.add_working_days(pred_finish, lag)
        return start_from_finish(finish, duration, calendar)

    if kind == DependencyType.START_TO_FINISH:
        # EF_s >= ES_p + lag
        finish = calendar.add_working_days(pred_start, lag)
        return start_from_finish(finish, duration, calendar)

    # FS: successor starts the day after EF_p + lag
    d = calendar.add_working_days(pred_finish, lag) + ONE_DAY
    return calendar.nearest_working_day(d, ScanDirection.FORWARD)


def backward_constraint(
    link: Predecessor,
    succ_start: date,
    succ_finish: date,
    duration: float,
    calendar: WorkCalendarEngine,
) -> date:
    """
    Latest permissible finish of the predecessor for one outgoing link.
    `link` is the successor's predecessor entry; `duration` and `calendar`
    belong to the predecessor.
    """
    lag = link.lag_days or 0
    kind = link.dependency_type

    if kind == DependencyType.START_TO_START:
        # LS_p <= LS_s - lag
        start = calendar.add_working_days(succ_start, -lag)
        return finish_from_start(start, duration, calendar)

    if kind == DependencyType.FINISH_TO_FINISH:
        return calendar.add_working_days(succ_finish, -lag)

    if kind == DependencyType.START_TO_FINISH:
        # LS_p <= LF_s - lag
        start = calendar.add_working_days(succ_finish, -lag)
        return finish_from_start(start, duration, calendar)

    # FS: LF_p <= LS_s - 1 day - lag
    d = calendar.nearest_working_day(succ_start - ONE_DAY, ScanDirection.BACKWARD)
    return calendar.add_working_days(d, -lag)


__all__ = [
    "backward_constraint",
    "finish_from_start",
    "forward_constraint",
    "start_from_finish",
]
