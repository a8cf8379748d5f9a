"""
Logging setup shared by the simulator, the API and the CLI launcher.

Modules grab a logger at import time:

    from infra.logger import get_logger
    logger = get_logger(__name__)

and the entrypoint (main.py, a test, a notebook) calls configure_logging()
once. Until then records propagate to whatever the root logger does, which
keeps library use silent by default.
"""

from __future__ import annotations

import json as jsonlib
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from .paths import LOG_STORAGE_DIR, STORAGE_DIR

__all__ = ["STORAGE_DIR", "LOG_STORAGE_DIR", "configure_logging", "get_logger"]

_ROOT_NAME = "arena"
_PLAIN_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

# Attributes every LogRecord carries; anything else came in through `extra=`.
_RESERVED = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render each record as a single JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return jsonlib.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(
    level: str | int = "INFO",
    json: bool = False,
    log_file: str | Path | None = None,
    to_file: bool = True,
) -> None:
    """
    Configure console (and optionally file) logging for the process.

    Safe to call more than once; previous handlers installed by this
    function are replaced instead of stacked.

    Args:
        level: Level name or number for the root logger
        json: Emit one JSON object per line instead of plain text
        log_file: Explicit log file path (default: storage/logs/arena.log)
        to_file: Set False to log to the console only
    """
    if isinstance(level, str):
        level = level.upper()

    formatter: logging.Formatter = JsonFormatter() if json else logging.Formatter(_PLAIN_FORMAT)

    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        if getattr(handler, "_arena_handler", False):
            root.removeHandler(handler)
            handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    console._arena_handler = True  # type: ignore[attr-defined]
    root.addHandler(console)

    if to_file:
        path = Path(log_file) if log_file is not None else LOG_STORAGE_DIR / "arena.log"
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler._arena_handler = True  # type: ignore[attr-defined]
        root.addHandler(file_handler)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module logger (``arena`` when no name is given)."""
    return logging.getLogger(name or _ROOT_NAME)
