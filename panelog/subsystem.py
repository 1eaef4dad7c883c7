"""Process-wide logging subsystem: shared console window and diagnostics."""
from __future__ import annotations

import logging
from dataclasses import fields
from threading import RLock
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.traceback import install as install_rich_traceback

from .config import LoggingConfig
from .console import ConsoleWindow

__all__ = [
    "init_logging",
    "get_config",
    "get_window",
    "shutdown_logging",
]

PACKAGE_LOGGER = "panelog"

_config_lock = RLock()
_config: LoggingConfig | None = None
_window: ConsoleWindow | None = None
_handler: logging.Handler | None = None


def _parse_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.WARNING)


def init_logging(
    *,
    console: Optional[Console] = None,
    error_console: Optional[Console] = None,
    **kwargs: object,
) -> ConsoleWindow:
    """Initialise the shared console window and the package diagnostics logger.

    The function is idempotent; repeated calls reuse the existing window
    unless explicit consoles or a different configuration are requested.
    Unknown keyword arguments are ignored.
    """

    with _config_lock:
        global _config, _window, _handler

        known = {field.name for field in fields(LoggingConfig)}
        cfg = LoggingConfig(**{key: value for key, value in kwargs.items() if key in known})

        if _config is not None and _window is not None:
            if _config == cfg and console is None and error_console is None:
                return _window
            _teardown_locked()

        level = _parse_level(cfg.level)
        if cfg.rich_tracebacks:
            install_rich_traceback(show_locals=False)

        window = ConsoleWindow(console=console, error_console=error_console)

        handler = RichHandler(
            console=window.error_console,
            rich_tracebacks=cfg.rich_tracebacks,
            show_level=True,
            show_path=False,
            log_time_format="%Y-%m-%d %H:%M:%S",
        )
        handler.setLevel(level)
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        package_logger.setLevel(level)
        package_logger.addHandler(handler)

        _config = cfg
        _window = window
        _handler = handler
        return window


def _teardown_locked() -> None:
    global _config, _window, _handler
    if _window is not None:
        _window.close_window()
    if _handler is not None:
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        package_logger.removeHandler(_handler)
        package_logger.setLevel(logging.NOTSET)
    _config = None
    _window = None
    _handler = None


def shutdown_logging() -> None:
    """Close any open window and reset the subsystem, intended for tests."""

    with _config_lock:
        _teardown_locked()


def get_config() -> LoggingConfig:
    with _config_lock:
        if _config is None:
            init_logging()
        return _config


def get_window() -> ConsoleWindow:
    with _config_lock:
        if _window is None:
            init_logging()
        return _window
