"""Level-gated console logging."""

from __future__ import annotations

import sys
from datetime import datetime

log_levels: dict[str, bool] = {
    "NETWORK": False,
    "SERVER": False,
    "DATABASE": False,
}


def set_log_level(level: str, enabled: bool) -> None:
    """Turn logging for ``level`` on or off."""
    log_levels[level] = enabled


def current_time() -> str:
    """Return the local time as ``YYYY-MM-DD HH:MM:SS``."""
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def log(level: str, message: str) -> bool:
    """Print ``message`` if ``level`` is enabled; return whether it was printed."""
    if not log_levels.get(level, False):
        return False
    print(f"[{level}][{current_time()}] {message}", file=sys.stdout, flush=True)
    return True