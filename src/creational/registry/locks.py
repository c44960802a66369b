"""Reader/writer lock used by the type registry.

Any number of readers may hold the lock together; a writer holds it alone.
Waiting writers block new readers so a steady stream of lookups cannot
starve registrations.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class ReadWriteLock:
    """Writer-preferring shared/exclusive lock built on a condition variable."""

    def __init__(self) -> None:
        self._condition = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer_active = False
        self._writers_waiting = 0

    @property
    def readers(self) -> int:
        """Number of readers currently holding the lock."""
        return self._readers

    @property
    def write_locked(self) -> bool:
        return self._writer_active

    @property
    def writers_waiting(self) -> int:
        """Number of writers blocked waiting for the lock."""
        return self._writers_waiting

    def acquire_read(self) -> None:
        with self._condition:
            self._condition.wait_for(lambda: not self._writer_active and self._writers_waiting == 0)
            self._readers += 1

    def release_read(self) -> None:
        with self._condition:
            if self._readers == 0:
                raise RuntimeError("release_read() called without a matching acquire_read()")
            self._readers -= 1
            if self._readers == 0:
                self._condition.notify_all()

    def acquire_write(self) -> None:
        with self._condition:
            self._writers_waiting += 1
            acquired = False
            try:
                self._condition.wait_for(lambda: not self._writer_active and self._readers == 0)
                self._writer_active = acquired = True
            finally:
                self._writers_waiting -= 1
                if not acquired:
                    # readers may be parked on _writers_waiting
                    self._condition.notify_all()

    def release_write(self) -> None:
        with self._condition:
            if not self._writer_active:
                raise RuntimeError("release_write() called without a matching acquire_write()")
            self._writer_active = False
            self._condition.notify_all()

    @contextmanager
    def read(self) -> Iterator[None]:
        """Hold the lock in shared mode for the duration of the block."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write(self) -> Iterator[None]:
        """Hold the lock in exclusive mode for the duration of the block."""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()
