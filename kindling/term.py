"""Terminal detection."""

from __future__ import annotations

import os


def is_terminal(w: object) -> bool:
    """Return True if w is a file object attached to a terminal."""
    try:
        fd = w.fileno()  # type: ignore[attr-defined]
    except (AttributeError, OSError, ValueError):
        return False
    if not isinstance(fd, int):
        return False
    return os.isatty(fd)