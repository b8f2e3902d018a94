"""Holder of the published configuration snapshot."""

from __future__ import annotations

from contextlib import contextmanager
import threading
from typing import Generator

from .config_model import Configuration


class ReadWriteLock:
    """Many concurrent readers or one writer; waiting writers go first."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read_locked(self) -> Generator[None, None, None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write_locked(self) -> Generator[None, None, None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class ConfigStore:
    """Publishes one immutable Configuration at a time.

    The lock only guards the reference swap. Readers keep whatever snapshot
    they fetched until they call ``get`` again.
    """

    def __init__(self, initial: Configuration | None = None):
        self._lock = ReadWriteLock()
        self._config = initial

    def get(self) -> Configuration | None:
        with self._lock.read_locked():
            return self._config

    def replace(self, config: Configuration) -> Configuration | None:
        """Publish ``config`` and return the snapshot it supersedes."""
        with self._lock.write_locked():
            previous = self._config
            self._config = config
        return previous


default_store = ConfigStore()
