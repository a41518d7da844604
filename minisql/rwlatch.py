"""A reader-writer latch that favours a waiting writer over new readers."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from minisql.config import UINT32_MAX


class ReaderWriterLatch:
    """Many readers or one writer; a writer that has entered blocks new readers."""

    MAX_READERS = UINT32_MAX

    def __init__(self) -> None:
        self._mutex = threading.Lock()
        self._writer = threading.Condition(self._mutex)
        self._reader = threading.Condition(self._mutex)
        self._reader_count = 0
        self._writer_entered = False

    def w_lock(self) -> None:
        """Acquire the latch for writing, waiting for readers to leave."""
        with self._mutex:
            while self._writer_entered:
                self._reader.wait()
            self._writer_entered = True
            while self._reader_count > 0:
                self._writer.wait()

    def w_unlock(self) -> None:
        """Release a write latch and wake everyone waiting to enter."""
        with self._mutex:
            self._writer_entered = False
            self._reader.notify_all()

    def r_lock(self) -> None:
        """Acquire the latch for reading."""
        with self._mutex:
            while self._writer_entered or self._reader_count == self.MAX_READERS:
                self._reader.wait()
            self._reader_count += 1

    def r_unlock(self) -> None:
        """Release a read latch."""
        with self._mutex:
            if self._reader_count == 0:
                raise RuntimeError("read latch released without being held")
            self._reader_count -= 1
            if self._writer_entered:
                if self._reader_count == 0:
                    self._writer.notify()
            elif self._reader_count == self.MAX_READERS - 1:
                self._reader.notify()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        """Hold the write latch for the duration of a ``with`` block."""
        self.w_lock()
        try:
            yield
        finally:
            self.w_unlock()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        """Hold a read latch for the duration of a ``with`` block."""
        self.r_lock()
        try:
            yield
        finally:
            self.r_unlock()