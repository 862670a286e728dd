"""Logging configuration for Stackforge.

User-facing progress is printed through :data:`stackforge.utils.console`.
Everything else (prompt sizes, API failures, validation attempts, correction
records) is written by the standard ``logging`` loggers to a per-run JSON-lines
file under the log directory.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from rich.logging import RichHandler

from stackforge.utils import console

LOG_FILE_PREFIX = "generation-"

# Attributes every LogRecord carries; anything else was passed via ``extra``.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "asctime", "taskName"}


class JSONFormatter(logging.Formatter):
    """One JSON object per line, including any ``extra`` fields."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def prune_old_logs(log_dir: Path, keep: int) -> list[Path]:
    """Delete the oldest run logs so that at most *keep* remain.

    Returns:
        The paths that were removed.
    """
    logs = sorted(
        log_dir.glob(f"{LOG_FILE_PREFIX}*.log"),
        key=lambda p: p.stat().st_mtime,
        reverse=True,
    )
    removed: list[Path] = []
    for stale in logs[keep:]:
        stale.unlink(missing_ok=True)
        removed.append(stale)
    return removed


def setup_logging(
    log_dir: str | Path,
    level: str = "INFO",
    keep: int = 10,
    console_level: str | None = "WARNING",
) -> Path:
    """Configure the ``stackforge`` logger tree for one run.

    Args:
        log_dir: Directory for run logs (created if missing).
        level: Level for the file handler.
        keep: Number of run logs to retain, including this one.
        console_level: Level at which records are mirrored to the terminal
            through Rich, or ``None`` to keep the terminal quiet.

    Returns:
        Path of the log file for this run.
    """
    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
    log_path = directory / f"{LOG_FILE_PREFIX}{stamp}.log"

    root = logging.getLogger("stackforge")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.DEBUG)
    root.propagate = False

    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setLevel(level.upper())
    file_handler.setFormatter(JSONFormatter())
    root.addHandler(file_handler)

    if console_level:
        rich_handler = RichHandler(console=console, show_path=False, markup=False)
        rich_handler.setLevel(console_level.upper())
        root.addHandler(rich_handler)

    prune_old_logs(directory, keep)
    return log_path
