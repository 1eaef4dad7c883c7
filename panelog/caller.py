"""Locate the source line that issued a log call."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

UNKNOWN_CALLER = "[unknown]"

CallerLocator = Callable[[int], str]


def format_location(filename: str, lineno: int) -> str:
    """Render ``filename`` and ``lineno`` as ``[parent/file.py:line]``."""

    parts = [part for part in Path(filename).as_posix().split("/") if part]
    return f"[{'/'.join(parts[-2:])}:{lineno}]"


def locate_caller(depth: int = 0) -> str:
    """Return the ``[parent/file.py:line]`` tag of a frame on the current stack.

    ``depth`` counts frames above the function calling ``locate_caller``:
    ``0`` is that function itself, ``1`` its caller, and so on. Frames that do
    not exist collapse onto the outermost one.
    """

    try:
        frame = sys._getframe(1)
    except ValueError:
        return UNKNOWN_CALLER
    for _ in range(depth):
        if frame.f_back is None:
            break
        frame = frame.f_back
    return format_location(frame.f_code.co_filename, frame.f_lineno)
