from __future__ import annotations

from uuid import uuid4


def generate_id(prefix: str | None = None) -> str:
    """Random identifier; `prefix` gives readable ids such as "cal-<uuid>"."""
    value = str(uuid4())
    return f"{prefix}-{value}" if prefix else value


__all__ = ["generate_id"]
