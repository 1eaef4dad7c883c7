"""Runtime configuration for the logging subsystem."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class LoggingConfig:
    """Runtime configuration for the logging subsystem."""

    log_dir: Path = Path("logs")
    file_timeout: int = 5000
    date_format: str = "%Y-%m-%d"
    level: str | int = "WARNING"
    rich_tracebacks: bool = False
    project_root: Optional[Path] = None

    def __post_init__(self) -> None:
        if self.file_timeout < 0:
            raise ValueError(f"file_timeout must be >= 0, got {self.file_timeout}")
        self.log_dir = Path(self.log_dir)
        if self.project_root is not None:
            self.project_root = Path(self.project_root)

    def resolved_log_dir(self) -> Path:
        """Return the log root, anchored at the current working directory."""

        return self.log_dir if self.log_dir.is_absolute() else Path.cwd() / self.log_dir

    def resolved_project_root(self) -> Path:
        return self.project_root or Path.cwd()
