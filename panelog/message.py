"""Classification and rendering of the values handed to a log call."""
from __future__ import annotations

import traceback
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Optional

from rich.pretty import pretty_repr
from rich.text import Text

from .colors import FAILURE_HIGHLIGHT_STYLE, FAILURE_STYLE

PLACEHOLDER = "%s"
MAX_DEPTH = 5


class MessageKind(Enum):
    TEXT = "text"
    STRUCTURED = "structured"
    FAILURE = "failure"


def inspect_value(value: Any, *, single_line: bool = False) -> str:
    """Depth-bounded pretty representation of ``value``."""

    if single_line:
        return pretty_repr(value, max_width=2**31, max_depth=MAX_DEPTH)
    return pretty_repr(value, max_depth=MAX_DEPTH)


@dataclass(frozen=True)
class Message:
    """A log message resolved to one of the three kinds it can take."""

    kind: MessageKind
    value: Any

    @property
    def is_failure(self) -> bool:
        return self.kind is MessageKind.FAILURE

    def substitute(self, args: Iterable[Any]) -> "Message":
        """Replace each ``%s`` in a text message with the next argument."""

        if self.kind is not MessageKind.TEXT:
            return self
        content = self.render()
        for arg in args:
            content = content.replace(PLACEHOLDER, str(arg), 1)
        return Message(MessageKind.TEXT, content)

    def render(self) -> str:
        """Render the message as text, keeping any embedded escape sequences."""

        if self.kind is MessageKind.FAILURE:
            exc = self.value
            lines = traceback.format_exception(type(exc), exc, exc.__traceback__)
            return "".join(lines).rstrip("\n")
        if self.kind is MessageKind.STRUCTURED:
            return inspect_value(self.value)
        return str(self.value)

    def plain(self) -> str:
        """Render the message without terminal escape sequences."""

        return Text.from_ansi(self.render()).plain

    def console_lines(self, style: str, project_root: Optional[Path] = None) -> list[Text]:
        """Split the message into styled console lines.

        Failures are always red; their first line and every frame that points
        into ``project_root`` (outside installed packages) are highlighted.
        """

        rendered = self.render()
        if self.kind is not MessageKind.FAILURE:
            return [Text.from_ansi(line, style=style) for line in rendered.split("\n")]

        root = str(project_root) if project_root is not None else None
        lines = []
        for index, line in enumerate(rendered.split("\n")):
            in_project = root is not None and root in line and "site-packages" not in line
            line_style = FAILURE_HIGHLIGHT_STYLE if index == 0 or in_project else FAILURE_STYLE
            lines.append(Text(line, style=line_style))
        return lines


def classify(value: Any) -> Message:
    """Resolve an arbitrary log argument into a :class:`Message`."""

    if isinstance(value, Message):
        return value
    if isinstance(value, BaseException):
        return Message(MessageKind.FAILURE, value)
    if isinstance(value, (Mapping, list, tuple, set, frozenset)):
        return Message(MessageKind.STRUCTURED, value)
    return Message(MessageKind.TEXT, value)
