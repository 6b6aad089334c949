"""File logging for the TUI; the terminal itself belongs to Textual."""

from __future__ import annotations

import logging
from pathlib import Path

from comboshop.config import DEBUG_LOG_PATH, LOG_LEVEL

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(path: str = DEBUG_LOG_PATH, level: str = LOG_LEVEL) -> None:
    """Send ``comboshop.*`` records to an append-only debug file."""
    root = logging.getLogger("comboshop")
    if any(getattr(h, "_comboshop", False) for h in root.handlers):
        return

    log_file = Path(path)
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError:
        # Unwritable log location must not stop the app.
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler._comboshop = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(getattr(logging, level, logging.DEBUG))
    root.propagate = False
