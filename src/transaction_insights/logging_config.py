"""Root logging setup shared by the API server, the CLI and the dashboard."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# driver and HTTP client chatter stays at WARNING unless DEBUG is requested
NOISY_LOGGERS = ("pymongo", "urllib3", "asyncio")


def resolve_level(level: int | str) -> int:
    """Return a numeric level for `level`; unknown names fall back to INFO."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def configure_logging(
    log_path: Path | None = None,
    level: int | str = logging.INFO,
    force: bool = False,
) -> None:
    """Configure root logging handlers and formatting.

    Args:
        log_path: Optional path to a file where logs will be written.
        level: Logging level, numeric or a name such as ``"DEBUG"``.
        force: Replace handlers installed by an earlier call.
    """
    numeric = resolve_level(level)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(level=numeric, format=LOG_FORMAT, handlers=handlers, force=force)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(numeric if numeric <= logging.DEBUG else logging.WARNING)

    # uvicorn runs with log_config=None; let its records reach the root handlers
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).propagate = True
