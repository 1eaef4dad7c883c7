"""Tests for the bordered console window formatter."""
from __future__ import annotations

from rich.text import Text

from panelog.console import CONTINUE, FOOTER_PREFIX, HEADER_PREFIX, MIDDLE_PREFIX, ConsoleWindow

from conftest import console_lines, read_console


def _lines(*values: str) -> list[Text]:
    return [Text(value) for value in values]


def test_first_line_opens_window(window: ConsoleWindow) -> None:
    window.render("jobs/a.log", _lines("hello"), tag="[tests/x.py:1]", style="green")

    output = console_lines(window.console)
    assert output == [f"{HEADER_PREFIX}jobs/a.log", f"{MIDDLE_PREFIX}[tests/x.py:1] hello"]
    assert window.label == "jobs/a.log"


def test_same_label_continues_without_header(window: ConsoleWindow) -> None:
    window.render("a.log", _lines("one"), tag="[t:1]", style="green")
    window.render("a.log", _lines("two"), tag="[t:2]", style="green")

    output = read_console(window.console)
    assert output.count(HEADER_PREFIX) == 1
    assert FOOTER_PREFIX not in output
    assert f"{MIDDLE_PREFIX}[t:2] two" in output


def test_new_label_closes_previous_window(window: ConsoleWindow) -> None:
    window.render("a.log", _lines("one"), tag="[t:1]", style="green")
    window.render("b.log", _lines("two"), tag="[t:2]", style="green")

    output = console_lines(window.console)
    assert output == [
        f"{HEADER_PREFIX}a.log",
        f"{MIDDLE_PREFIX}[t:1] one",
        FOOTER_PREFIX.rstrip(),
        f"{HEADER_PREFIX}b.log",
        f"{MIDDLE_PREFIX}[t:2] two",
    ]
    assert window.label == "b.log"


def test_continue_stays_in_open_window(window: ConsoleWindow) -> None:
    window.render("a.log", _lines("one"), tag="[t:1]", style="green")
    window.render(CONTINUE, _lines("two"), tag="[t:2]", style="cyan")

    assert window.label == "a.log"
    assert console_lines(window.console)[-1] == f"{MIDDLE_PREFIX}[t:2] two"


def test_continue_without_window_prints_bare_line(window: ConsoleWindow) -> None:
    window.render(CONTINUE, _lines("alone"), tag="[t:1]", style="green")

    assert console_lines(window.console) == ["[t:1] alone"]
    assert window.label == ""


def test_no_label_closes_window(window: ConsoleWindow) -> None:
    window.render("a.log", _lines("one"), tag="[t:1]", style="green")
    window.render(None, _lines("two"), tag="[t:2]", style="green")

    output = console_lines(window.console)
    assert output[-2:] == [FOOTER_PREFIX.rstrip(), "[t:2] two"]
    assert window.label == ""


def test_multiline_message_prefixes_following_lines(window: ConsoleWindow) -> None:
    window.render(None, _lines("first", "second", "third"), tag="[t:1]", style="green")

    assert console_lines(window.console) == [
        "[t:1] first",
        f"{MIDDLE_PREFIX}second",
        f"{MIDDLE_PREFIX}third",
    ]


def test_errors_go_to_error_console(window: ConsoleWindow) -> None:
    window.render("a.log", _lines("boom"), tag="[t:1]", style="red", is_error=True)

    assert console_lines(window.console) == [f"{HEADER_PREFIX}a.log"]
    assert console_lines(window.error_console) == [f"{MIDDLE_PREFIX}[t:1] boom"]


def test_render_values_block(window: ConsoleWindow) -> None:
    window.render_values("a.log", {"user": "ana", "attempt": 2})

    output = console_lines(window.console)
    assert output[0] == f"{MIDDLE_PREFIX}[VALUES] [a.log]"
    assert output[-1] == f"{FOOTER_PREFIX}[END OF VALUES] [a.log]"
    assert any("'user': 'ana'" in line for line in output)


def test_close_window_is_noop_without_window(window: ConsoleWindow) -> None:
    window.close_window()
    assert read_console(window.console) == ""
