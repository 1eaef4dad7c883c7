"""Recursive directory listing."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class SubDirEntry:
    name: str
    directory: Path
    path: Path


def read_sub_dir(path: str | os.PathLike[str]) -> list[SubDirEntry]:
    """List every regular file below ``path``, including subdirectories."""

    return [
        SubDirEntry(name=file.name, directory=file.parent, path=file)
        for file in Path(path).rglob("*")
        if file.is_file()
    ]
