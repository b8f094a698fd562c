"""
Call-site resolution for the ``caller`` field.
"""

from __future__ import annotations

import inspect
import os

UNKNOWN_FILE = "<???>"
UNKNOWN_LINE = 1


def format_caller(path: str, line: int) -> str:
    """Format a ``file:line`` tag using only the base name of ``path``."""
    return f"{os.path.basename(path) or path}:{line}"


def resolve_caller(skip: int = 1) -> str:
    """Return ``file:line`` for the frame ``skip`` levels above the function calling this one.

    ``skip=0`` is the calling function itself. Falls back to ``<???>:1`` when
    frames are unavailable or the walk runs past the outermost frame.
    """
    frame = inspect.currentframe()
    try:
        frame = frame.f_back if frame is not None else None
        for _ in range(skip):
            if frame is None:
                break
            frame = frame.f_back

        if frame is None:
            return format_caller(UNKNOWN_FILE, UNKNOWN_LINE)
        return format_caller(frame.f_code.co_filename, frame.f_lineno)
    finally:
        # Frames reference their locals; drop ours to avoid a reference cycle.
        del frame
