"""Colour palette and small helpers for styling console output."""
from __future__ import annotations

from rich.style import Style

LEVEL_STYLES = {
    "debug": "cyan",
    "info": "green",
    "warn": "yellow",
    "error": "red",
}

VALUES_STYLE = "magenta"
FAILURE_STYLE = "red"
FAILURE_HIGHLIGHT_STYLE = "white on red"
HIGHLIGHT_STYLE = "bold white"


def level_style(level: str) -> str:
    return LEVEL_STYLES.get(level, "default")


def tag_style(style: str) -> str:
    """Style for the ``[file:line]`` tag that leads a line printed in ``style``."""

    if style == "cyan":
        return "on cyan"
    return f"white on {style}"


def color_string(value: str, *styles: str) -> str:
    """Wrap ``value`` in the terminal escape sequences of the given rich styles."""

    if not styles:
        return value
    return Style.parse(" ".join(styles)).render(value)


def highlight(message: str) -> str:
    """Make ``message`` stand out when embedded in a log message."""

    return color_string(message, HIGHLIGHT_STYLE)
