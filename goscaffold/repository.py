"""In-memory store of generated scaffolds.

Artifacts live for the lifetime of the process only.  The store is shared by
every request handler, so access goes through a reader/writer lock: lookups
run concurrently, saves and deletes are exclusive.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Optional

from goscaffold.errors import ScaffoldNotFoundError
from goscaffold.models import GeneratedArtifact


class ReadWriteLock:
    """Many-readers / single-writer lock.

    A waiting writer blocks new readers, so a steady stream of downloads
    cannot starve a save.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self, timeout: Optional[float] = None) -> bool:
        with self._cond:
            acquired = self._cond.wait_for(
                lambda: not self._writer and self._writers_waiting == 0,
                timeout=timeout,
            )
            if acquired:
                self._readers += 1
            return acquired

    def release_read(self) -> None:
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read() called without a matching acquire")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self, timeout: Optional[float] = None) -> bool:
        with self._cond:
            self._writers_waiting += 1
            try:
                acquired = self._cond.wait_for(
                    lambda: not self._writer and self._readers == 0,
                    timeout=timeout,
                )
            finally:
                self._writers_waiting -= 1
            if acquired:
                self._writer = True
            else:
                # Readers held back by this writer may proceed again.
                self._cond.notify_all()
            return acquired

    def release_write(self) -> None:
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write() called without a matching acquire")
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_lock(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_lock(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


class ScaffoldRepository:
    """Handle -> :class:`GeneratedArtifact` map guarded by a :class:`ReadWriteLock`.

    Example:
        >>> repo = ScaffoldRepository()
        >>> repo.save(artifact)
        >>> repo.get(artifact.handle) == artifact
        True
    """

    def __init__(self) -> None:
        self._artifacts: dict[str, GeneratedArtifact] = {}
        self._lock = ReadWriteLock()

    def save(self, artifact: GeneratedArtifact) -> None:
        """Store *artifact*, replacing any entry with the same handle."""
        with self._lock.write_lock():
            self._artifacts[artifact.handle] = artifact

    def get(self, handle: str) -> GeneratedArtifact:
        """Return the artifact stored under *handle*.

        Raises:
            ScaffoldNotFoundError: If the handle is unknown.
        """
        with self._lock.read_lock():
            artifact = self._artifacts.get(handle)
        if artifact is None:
            raise ScaffoldNotFoundError(handle)
        return artifact

    def delete(self, handle: str) -> None:
        """Remove the entry for *handle*; the archive file is left alone.

        Raises:
            ScaffoldNotFoundError: If the handle is unknown.
        """
        with self._lock.write_lock():
            if handle not in self._artifacts:
                raise ScaffoldNotFoundError(handle)
            del self._artifacts[handle]

    def list(self) -> list[GeneratedArtifact]:
        with self._lock.read_lock():
            return list(self._artifacts.values())

    def __contains__(self, handle: object) -> bool:
        with self._lock.read_lock():
            return handle in self._artifacts

    def __len__(self) -> int:
        with self._lock.read_lock():
            return len(self._artifacts)
