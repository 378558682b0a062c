# core/services/work_calendar/engine.py
from __future__ import annotations

import logging
import math
from datetime import date, timedelta
from enum import Enum
from typing import Dict, Optional

from core.models import WorkingCalendar
from core.services.common.limits import SchedulingLimits

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)


class ScanDirection(int, Enum):
    FORWARD = 1
    BACKWARD = -1


class WorkCalendarEngine:
    """
    Whole-day working-time arithmetic over a single WorkingCalendar.
    Every loop is capped by SchedulingLimits so an all-non-working calendar
    degrades to returning the last date reached instead of spinning forever.
    """

    def __init__(self, calendar: WorkingCalendar, limits: Optional[SchedulingLimits] = None):
        self._calendar: WorkingCalendar = calendar
        self._limits: SchedulingLimits = limits or SchedulingLimits()
        self._exceptions: Dict[date, bool] = {
            item.date: bool(item.is_working) for item in (calendar.exceptions or [])
        }

    @property
    def calendar(self) -> WorkingCalendar:
        return self._calendar

    def is_working_day(self, d: date) -> bool:
        override = self._exceptions.get(d)
        if override is not None:
            return override
        # isoweekday: Mon=1..Sun=7 -> 0=Sunday indexing
        return bool(self._calendar.week_days[d.isoweekday() % 7])

    def nearest_working_day(self, d: date, direction: ScanDirection = ScanDirection.FORWARD) -> date:
        current = d
        step = ONE_DAY * int(direction)
        loops = 0
        while not self.is_working_day(current):
            if loops >= self._limits.max_snap_steps:
                logger.warning(
                    "No working day within %s days of %s on calendar %s; returning %s",
                    self._limits.max_snap_steps,
                    d.isoformat(),
                    self._calendar.id,
                    current.isoformat(),
                )
                break
            current += step
            loops += 1
        return current

    def add_working_days(self, start: date, working_days: float) -> date:
        direction = ScanDirection.FORWARD if working_days >= 0 else ScanDirection.BACKWARD
        current = start
        if not self.is_working_day(current):
            current = self.nearest_working_day(current, direction)

        if working_days == 0:
            return current

        # fractional shifts consume the next whole working day
        remaining = math.ceil(abs(working_days))
        step = ONE_DAY * int(direction)
        loops = 0
        while remaining > 0 and loops < self._limits.max_shift_steps:
            current += step
            if self.is_working_day(current):
                remaining -= 1
            loops += 1

        if remaining > 0:
            logger.warning(
                "Shift of %s working days from %s stopped after %s steps on calendar %s",
                working_days,
                start.isoformat(),
                self._limits.max_shift_steps,
                self._calendar.id,
            )
        return current

