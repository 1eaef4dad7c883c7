"""Append-only writer for date-partitioned log files."""
from __future__ import annotations

import asyncio
import logging
from collections import deque
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Callable, Optional, Sequence

logger = logging.getLogger(__name__)


class LogWriter:
    """Append encoded log lines to ``<root>/<date>/<relative_path>``.

    Lines are queued and drained in submission order under an ``asyncio.Lock``.
    The file handle is reopened when the date partition changes. With a
    positive ``file_timeout`` (milliseconds) the handle stays open and is closed
    once no append happened for that long; with ``0`` it is closed after every
    drain.

    The idle timer runs on the event loop of the last append. A handle still
    open when that loop stops is released by the next append under a new loop
    or by :meth:`close`.
    """

    def __init__(
        self,
        root: Path,
        relative_path: Sequence[str],
        file_timeout: int = 5000,
        *,
        clock: Callable[[], datetime] = datetime.now,
        date_format: str = "%Y-%m-%d",
    ) -> None:
        self.root = Path(root)
        self.relative_path = tuple(relative_path)
        self.file_timeout = file_timeout
        self.date_format = date_format
        self._clock = clock
        self._handle: Optional[BinaryIO] = None
        self._handle_date: Optional[str] = None
        self._partition = self._today()
        self._queue: deque[bytes] = deque()
        self._timer: Optional[asyncio.TimerHandle] = None
        self._lock: Optional[asyncio.Lock] = None
        self._lock_loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def file_timeout(self) -> int:
        return self._file_timeout

    @file_timeout.setter
    def file_timeout(self, value: int) -> None:
        if value < 0:
            raise ValueError(f"file_timeout must be >= 0, got {value}")
        self._file_timeout = value

    def _today(self) -> str:
        return self._clock().strftime(self.date_format)

    def path_for(self, partition: str) -> Path:
        return self.root.joinpath(partition, *self.relative_path)

    @property
    def absolute_path(self) -> Path:
        """Path of the open file, or of the last partition written to."""

        return self.path_for(self._handle_date or self._partition)

    @property
    def is_open(self) -> bool:
        return self._handle is not None

    @property
    def pending(self) -> int:
        """Number of queued buffers not yet written."""

        return len(self._queue)

    def _get_lock(self) -> asyncio.Lock:
        """Return the lock of the running loop, replacing one left by an earlier loop."""

        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            if self._lock_loop is not None:
                # The old loop is gone along with its idle timer.
                logger.debug("Event loop changed, releasing %s", self.absolute_path)
                self.close_now()
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    async def append(self, data: bytes, when: Optional[datetime] = None) -> None:
        """Queue ``data`` and write it to the partition of ``when`` (default: now)."""

        self._queue.append(data)
        async with self._get_lock():
            if not self._queue:
                # An earlier holder already drained this buffer.
                return
            today = (when or self._clock()).strftime(self.date_format)
            if self._handle is None or self._handle_date != today:
                await self._open(today)

            handle = self._handle
            try:
                while self._queue:
                    await asyncio.to_thread(handle.write, self._queue[0])
                    self._queue.popleft()
                await asyncio.to_thread(handle.flush)
            except Exception:
                self.close_now()
                raise

            if self.file_timeout > 0:
                self._arm_timer()
            else:
                self.close_now()

    async def _open(self, partition: str) -> None:
        if self._handle is not None:
            logger.debug("Rotating %s from %s to %s", "/".join(self.relative_path), self._handle_date, partition)
        self.close_now()

        path = self.path_for(partition)
        await asyncio.to_thread(path.parent.mkdir, parents=True, exist_ok=True)
        self._handle = await asyncio.to_thread(open, path, "ab")
        self._handle_date = partition
        self._partition = partition
        logger.debug("Opened %s", path)

    def _arm_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.file_timeout / 1000, self._on_idle)

    def _on_idle(self) -> None:
        self._timer = None
        if self._lock is not None and self._lock.locked():
            # The running drain re-arms the timer when it finishes.
            return
        logger.debug("Closing idle %s", self.absolute_path)
        self.close_now()

    def close_now(self) -> None:
        """Close the handle and cancel the idle timer without waiting for a drain."""

        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._handle is not None:
            self._handle.close()
            self._handle = None
        self._handle_date = None

    async def close(self) -> None:
        """Wait for any in-flight drain, then release the file handle."""

        async with self._get_lock():
            self.close_now()
