"""Logging setup shared by the API and the scripts."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install a single stream handler on the ``storepnl`` logger."""
    root = logging.getLogger("storepnl")
    root.setLevel(level.upper())
    if not any(getattr(h, "_storepnl", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._storepnl = True  # type: ignore[attr-defined]
        root.addHandler(handler)
