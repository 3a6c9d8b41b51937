"""Process-wide logging setup."""

from __future__ import annotations

import logging

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Attach one stream handler to the devlink logger tree (idempotent)."""
    root = logging.getLogger("devlink")
    root.setLevel(level)
    if any(getattr(h, "_devlink", False) for h in root.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler._devlink = True  # type: ignore[attr-defined]
    root.addHandler(handler)
