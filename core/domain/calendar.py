from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Sequence

from core.domain.identifiers import generate_id
from core.exceptions import ValidationError

# 0=Sunday ... 6=Saturday
STANDARD_WEEK: tuple[bool, ...] = (False, True, True, True, True, True, False)


@dataclass(frozen=True)
class CalendarException:
    """A single date whose working flag overrides the weekday pattern."""

    date: date
    is_working: bool = False


@dataclass
class WorkingCalendar:
    id: str
    name: str = "Standard"
    is_default: bool = False
    # indexed 0=Sunday, 6=Saturday
    week_days: tuple[bool, ...] = STANDARD_WEEK
    hours_per_day: float = 8.0
    exceptions: List[CalendarException] = field(default_factory=list)

    @staticmethod
    def create(
        name: str,
        week_days: Sequence[bool] = STANDARD_WEEK,
        hours_per_day: float = 8.0,
        exceptions: Iterable[CalendarException] = (),
        is_default: bool = False,
        calendar_id: str | None = None,
    ) -> "WorkingCalendar":
        days = tuple(bool(flag) for flag in week_days)
        if len(days) != 7:
            raise ValidationError(
                f"Calendar '{name}' must define exactly 7 weekdays, got {len(days)}.",
                code="CALENDAR_WEEKDAYS_INVALID",
            )

        items = list(exceptions)
        seen: set[date] = set()
        for item in items:
            if item.date in seen:
                raise ValidationError(
                    f"Calendar '{name}' has more than one exception on {item.date.isoformat()}.",
                    code="CALENDAR_EXCEPTION_DUPLICATE",
                )
            seen.add(item.date)

        return WorkingCalendar(
            id=calendar_id or generate_id("cal"),
            name=name,
            is_default=is_default,
            week_days=days,
            hours_per_day=hours_per_day,
            exceptions=items,
        )

    @staticmethod
    def create_default() -> "WorkingCalendar":
        return WorkingCalendar(id="default", name="Standard", is_default=True)


__all__ = ["STANDARD_WEEK", "CalendarException", "WorkingCalendar"]
