"""Colourful windowed console logging with date-partitioned log files."""

from .colors import color_string, highlight  # noqa: F401
from .config import LoggingConfig  # noqa: F401
from .console import CONTINUE, ConsoleWindow  # noqa: F401
from .dirs import SubDirEntry, read_sub_dir  # noqa: F401
from .logger import Log, debug, error, info, output, warn  # noqa: F401
from .subsystem import get_config, get_window, init_logging, shutdown_logging  # noqa: F401
from .writer import LogWriter  # noqa: F401

__all__ = [
    "CONTINUE",
    "ConsoleWindow",
    "Log",
    "LogWriter",
    "LoggingConfig",
    "SubDirEntry",
    "color_string",
    "debug",
    "error",
    "get_config",
    "get_window",
    "highlight",
    "info",
    "init_logging",
    "output",
    "read_sub_dir",
    "shutdown_logging",
    "warn",
]
