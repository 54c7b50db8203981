"""Centralized logging configuration for sitepipe."""

from __future__ import annotations

import json
import logging

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["console", "configure_logging"]

console = Console(stderr=True)

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(level: str = "info", fmt: str = "text") -> None:
    """Install a single managed handler on the root logger."""
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if getattr(handler, "_sitepipe_managed", False):
            root_logger.removeHandler(handler)

    if fmt == "json":
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
    else:
        handler = RichHandler(console=console, rich_tracebacks=True, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
    handler._sitepipe_managed = True  # type: ignore[attr-defined]
    root_logger.addHandler(handler)
    root_logger.setLevel(_LEVELS.get(level, logging.INFO))
