"""Logging helper used by the detect-changed-files CLI."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler


LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def init_logging(level: str, logfile: str | None = None) -> None:
    """Configure root logging on stderr; stdout is reserved for the report."""
    resolved_level = level.upper()
    fallback = resolved_level not in LEVELS
    if fallback:
        resolved_level = "INFO"

    handlers: list[logging.Handler] = [
        RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_time=True, show_path=False)
    ]
    if logfile:
        log_path = Path(logfile)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, resolved_level),
        format="%(name)s | %(message)s",
        handlers=handlers,
        force=True,
    )
    if fallback:
        logging.getLogger(__name__).warning("Unsupported log level %r, falling back to INFO", level)
