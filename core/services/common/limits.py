from __future__ import annotations

import os
from dataclasses import dataclass

from core.exceptions import ValidationError

DEFAULT_MAX_SNAP_STEPS = 3650  # ~10 years of calendar days
DEFAULT_MAX_SHIFT_STEPS = 5000
DEFAULT_EXTRA_ROUNDS = 2


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValidationError(
            f"{name} must be an integer, got {raw!r}.",
            code="SCHEDULING_LIMIT_INVALID",
        ) from None
    if value < 0:
        raise ValidationError(
            f"{name} must not be negative, got {value}.",
            code="SCHEDULING_LIMIT_INVALID",
        )
    return value


@dataclass(frozen=True)
class SchedulingLimits:
    """Iteration bounds that guarantee every pass terminates."""

    max_snap_steps: int = DEFAULT_MAX_SNAP_STEPS
    max_shift_steps: int = DEFAULT_MAX_SHIFT_STEPS
    extra_rounds: int = DEFAULT_EXTRA_ROUNDS

    def max_rounds(self, activity_count: int) -> int:
        return activity_count + self.extra_rounds

    @staticmethod
    def from_env() -> "SchedulingLimits":
        return SchedulingLimits(
            max_snap_steps=_env_int("PM_SCHED_MAX_SNAP_STEPS", DEFAULT_MAX_SNAP_STEPS),
            max_shift_steps=_env_int("PM_SCHED_MAX_SHIFT_STEPS", DEFAULT_MAX_SHIFT_STEPS),
            extra_rounds=_env_int("PM_SCHED_EXTRA_ROUNDS", DEFAULT_EXTRA_ROUNDS),
        )


__all__ = ["SchedulingLimits"]
