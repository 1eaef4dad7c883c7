"""Leveled logging to the console and to date-partitioned files.

Create a :class:`Log` with a path relative to the logs folder and await its
level methods::

    log = Log("jobs/import", init_values={"batch": 3})
    await log.info("Imported %s rows", 120)
    log.values["row"] = 121
    await log.error(exc)  # also dumps ``log.values``

The same level names on the class (``Log.info("...")``) only print to the
console and continue whichever window is open.
"""
from __future__ import annotations

import functools
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Coroutine, Mapping, Optional

from rich.text import Text

from .caller import UNKNOWN_CALLER, CallerLocator, locate_caller
from .colors import highlight, level_style
from .console import CONTINUE, ConsoleWindow
from .message import classify, inspect_value
from .subsystem import get_config, get_window
from .writer import LogWriter


def format_timestamp(moment: datetime) -> str:
    """Render ``moment`` as ``h:mm:ss AM``."""

    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment:%M:%S} {meridiem}"


def output(
    level: str,
    message: Any,
    use_prev_log: bool = True,
    *,
    depth: int = 1,
    window: Optional[ConsoleWindow] = None,
) -> None:
    """Print ``message`` to the console only.

    ``use_prev_log`` keeps the line inside the open window; otherwise the
    window is closed first. ``depth`` is the number of frames between this
    function and the call site to tag.
    """

    window = window or get_window()
    try:
        tag = locate_caller(depth)
        msg = classify(message)
        style = level_style(level)
        window.render(
            CONTINUE if use_prev_log else None,
            msg.console_lines(style, get_config().resolved_project_root()),
            tag=tag,
            style=style,
            is_error=level == "error" or msg.is_failure,
        )
    except Exception:
        window.report_failure()
    return None


class _LevelMethod:
    """Console-only printer on the class, console and file logger on instances."""

    def __init__(self, level: str) -> None:
        self.level = level

    def __get__(self, instance: Optional["Log"], owner: type | None = None) -> Callable[..., Any]:
        if instance is None:
            return functools.partial(output, self.level)
        return functools.partial(instance._log, self.level)


class Log:
    """Log to the console and to ``logs/<date>/<file_path>.log``.

    ``values`` holds debugging data that is printed and saved with every
    error. ``file_timeout`` is the idle time in milliseconds after which the
    log file is closed; ``0`` closes it after every write. The idle close runs
    on the event loop that wrote last, so await :meth:`close` before that loop
    ends (for example at the end of an ``asyncio.run`` body) to release the
    file right away.

    Level methods print to the console as soon as they are called and return
    a coroutine that appends the line to the file.
    """

    debug = _LevelMethod("debug")
    info = _LevelMethod("info")
    warn = _LevelMethod("warn")
    error = _LevelMethod("error")

    highlight = staticmethod(highlight)
    h = highlight

    def __init__(
        self,
        file_path: str,
        *,
        should_console_log: bool = True,
        should_save_console: bool = True,
        init_values: Optional[Mapping[str, Any]] = None,
        file_timeout: Optional[int] = None,
        window: Optional[ConsoleWindow] = None,
        clock: Optional[Callable[[], datetime]] = None,
        locator: CallerLocator = locate_caller,
    ) -> None:
        config = get_config()
        self._window = window or get_window()
        self._clock = clock or datetime.now
        self._locator = locator
        self._project_root = config.resolved_project_root()

        if not file_path:
            file_path = f"other/{uuid.uuid4()}"
            self._window.render(
                None,
                [Text(f"Log: file_path is empty, defaulting to {file_path}", style="yellow")],
                tag=locator(1),
                style="yellow",
            )

        folders = [part for part in file_path.split("/") if part]
        file_name = folders.pop() if folders else f"unknown-{uuid.uuid4()}"
        if not file_name.endswith(".log"):
            file_name = f"{file_name}.log"
        self.file_path = file_path
        self.relative_path: tuple[str, ...] = (*folders, file_name)

        self.should_console_log = should_console_log
        self.should_save_console = should_save_console
        self._values: dict[str, Any] = {}
        self.set_values(init_values or {})

        self._writer = LogWriter(
            config.resolved_log_dir(),
            self.relative_path,
            config.file_timeout if file_timeout is None else file_timeout,
            clock=self._clock,
            date_format=config.date_format,
        )

    def __repr__(self) -> str:
        return f"Log({self.file_path!r})"

    @property
    def values(self) -> dict[str, Any]:
        """Debugging data dumped with every error; assigning merges into it."""

        return self._values

    @values.setter
    def values(self, data: Mapping[str, Any]) -> None:
        self.set_values(data)

    def set_values(self, data: Optional[Mapping[str, Any]] = None, **values: Any) -> None:
        self._values.update(data or {})
        self._values.update(values)

    @property
    def file_timeout(self) -> int:
        return self._writer.file_timeout

    @file_timeout.setter
    def file_timeout(self, value: int) -> None:
        self._writer.file_timeout = value

    @property
    def relative_path_string(self) -> str:
        return "/".join(self.relative_path)

    @property
    def absolute_path(self) -> Path:
        return self._writer.absolute_path

    @property
    def writer(self) -> LogWriter:
        return self._writer

    def dump_values(self) -> None:
        """Print ``values`` to the console."""

        self._window.render_values(self.relative_path_string, self._values)

    async def close(self) -> None:
        """Finish pending writes and close the log file."""

        await self._writer.close()

    def _log(self, level: str, message: Any, *args: Any, depth: int = 1) -> Coroutine[Any, Any, None]:
        # Console output happens right away; only the file write waits for the
        # returned coroutine.
        try:
            tag = self._locator(depth)
        except Exception:
            tag = UNKNOWN_CALLER

        now: Optional[datetime] = None
        data: Optional[bytes] = None
        try:
            now = self._clock()
            msg = classify(message).substitute(args)
            label = self.relative_path_string

            if self.should_console_log:
                style = level_style(level)
                self._window.render(
                    label,
                    msg.console_lines(style, self._project_root),
                    tag=tag,
                    style=style,
                    is_error=level == "error" or msg.is_failure,
                )
                if level == "error":
                    self._window.render_values(label, self._values, is_error=True)

            if self.should_save_console:
                stamp = format_timestamp(now)
                text = f"[{stamp}] [{level.upper()}] {tag} {msg.plain()}\n"
                if level == "error":
                    text += f"[{stamp}] ↦ {inspect_value(self._values, single_line=True)}\n"
                data = text.encode("utf-8")
        except Exception:
            self._window.report_failure()
        return self._save(data, now)

    async def _save(self, data: Optional[bytes], when: Optional[datetime]) -> None:
        if data is None:
            return None
        try:
            await self._writer.append(data, when)
        except Exception:
            self._window.report_failure()
        return None


debug = functools.partial(output, "debug")
info = functools.partial(output, "info")
warn = functools.partial(output, "warn")
error = functools.partial(output, "error")
