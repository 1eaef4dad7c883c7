"""Shared fixtures for the panelog tests."""
from __future__ import annotations

import io
from pathlib import Path
import sys

import pytest
from rich.console import Console

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from panelog import ConsoleWindow, init_logging, shutdown_logging


def make_console() -> Console:
    return Console(file=io.StringIO(), width=200, color_system=None, force_terminal=False)


def read_console(console: Console) -> str:
    return console.file.getvalue()


@pytest.fixture
def window() -> ConsoleWindow:
    return ConsoleWindow(console=make_console(), error_console=make_console())


@pytest.fixture
def log_env(tmp_path: Path, monkeypatch) -> ConsoleWindow:
    """Run inside ``tmp_path`` with a freshly initialised subsystem."""

    monkeypatch.chdir(tmp_path)
    shutdown_logging()
    window = init_logging(console=make_console(), error_console=make_console())
    yield window
    shutdown_logging()


def console_lines(console: Console) -> list[str]:
    return [line.rstrip() for line in read_console(console).splitlines()]
