# infra/path.py
from __future__ import annotations
import os
import sys
from pathlib import Path

APP_NAME = "PlannerScheduler"
COMPANY_NAME = "TECHASH"

# Overrides the whole per-user tree (logs and schedule output)
HOME_ENV = "PM_SCHED_HOME"


def _platform_data_root() -> Path:
    if sys.platform.startswith("win"):
        return Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    return Path(os.getenv("XDG_DATA_HOME", Path.home() / ".local" / "share"))


def user_data_dir() -> Path:
    """
    Per-user directory for scheduler output, e.g. ~/.local/share/TECHASH/PlannerScheduler.
    `PM_SCHED_HOME` replaces it entirely.
    """
    override = (os.getenv(HOME_ENV) or "").strip()
    path = Path(override) if override else _platform_data_root() / COMPANY_NAME / APP_NAME
    try:
        path.mkdir(parents=True, exist_ok=True)
        return path
    except OSError:
        fallback = Path.home() / f".{APP_NAME}"
        fallback.mkdir(parents=True, exist_ok=True)
        return fallback


def default_log_dir() -> Path:
    return user_data_dir() / "logs"


def default_result_path(project_id: str) -> Path:
    """Where a computed schedule lands when the caller gives no output path."""
    folder = user_data_dir() / "schedules"
    folder.mkdir(parents=True, exist_ok=True)
    name = "".join(ch if ch.isalnum() or ch in "-_." else "_" for ch in project_id) or "project"
    return folder / f"{name}.schedule.json"
