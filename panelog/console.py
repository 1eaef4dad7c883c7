"""Bordered console "windows" that group consecutive lines by source.

A window opens with a header naming its label. Every following line with the
same label prints inside it behind a border prefix, and a line with a
different label closes it with a footer before opening its own window.

The open label is shared by everyone printing through the same
:class:`ConsoleWindow`, so interleaved callers break each other's windows:
grouping is best effort and never transactional.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence, Union

from rich.console import Console
from rich.text import Text

from .colors import VALUES_STYLE, tag_style
from .message import inspect_value

HEADER_PREFIX = "╔════ "
MIDDLE_PREFIX = "║ "
FOOTER_PREFIX = "╚═════════ "


class _Continue:
    """Label that keeps printing inside whichever window is open."""

    def __repr__(self) -> str:
        return "CONTINUE"


CONTINUE = _Continue()

Label = Union[str, _Continue, None]


class ConsoleWindow:
    """Stateful printer deciding whether a line continues the open window."""

    def __init__(
        self,
        console: Optional[Console] = None,
        error_console: Optional[Console] = None,
    ) -> None:
        self.console = console or Console()
        self.error_console = error_console or Console(stderr=True)
        self._label = ""

    @property
    def label(self) -> str:
        """Label of the window currently displayed, empty when none is open."""

        return self._label

    def _continues(self, label: Label) -> bool:
        if not self._label:
            return False
        return label is CONTINUE or label == self._label

    def render(
        self,
        label: Label,
        lines: Sequence[Text],
        *,
        tag: str,
        style: str,
        is_error: bool = False,
    ) -> None:
        """Print ``lines`` tagged with ``tag``, opening or closing windows as needed."""

        inside = self._continues(label)
        if not inside:
            self.close_window()
            if isinstance(label, str) and label:
                self._label = label
                self.console.print(Text(HEADER_PREFIX + label), highlight=False, soft_wrap=True)
                inside = True

        first = Text(MIDDLE_PREFIX if inside else "", style=style)
        first.append(tag, style=tag_style(style))
        first.append(" ")
        if lines:
            first.append_text(lines[0])
        rows = [first]
        for line in lines[1:]:
            row = Text(MIDDLE_PREFIX, style="red")
            row.append_text(line)
            rows.append(row)

        sink = self.error_console if is_error else self.console
        sink.print(Text("\n").join(rows), highlight=False, soft_wrap=True)

    def render_values(self, label: str, values: Mapping[str, Any], *, is_error: bool = False) -> None:
        """Print ``values`` as a labelled block."""

        sink = self.error_console if is_error else self.console
        header = Text(f"{MIDDLE_PREFIX}[VALUES] ", style=VALUES_STYLE)
        header.append(f"[{label}]", style="cyan")
        sink.print(header, highlight=False, soft_wrap=True)
        for line in inspect_value(dict(values)).split("\n"):
            row = Text(MIDDLE_PREFIX, style=VALUES_STYLE)
            row.append(line)
            sink.print(row, highlight=False, soft_wrap=True)
        footer = Text(f"{FOOTER_PREFIX}[END OF VALUES] ", style=VALUES_STYLE)
        footer.append(f"[{label}]", style="cyan")
        sink.print(footer, highlight=False, soft_wrap=True)

    def close_window(self) -> None:
        """Print the footer of the open window, if any, and forget it."""

        if self._label:
            self.console.print(Text(FOOTER_PREFIX), highlight=False, soft_wrap=True)
            self._label = ""

    def report_failure(self) -> None:
        """Print the exception being handled to the error console."""

        self.error_console.print_exception(show_locals=False)
