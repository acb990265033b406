"""A reusable barrier whose party count can shrink as participants finish."""

from __future__ import annotations

import threading


class Barrier:
    """Block threads until all current parties have arrived."""

    def __init__(self, parties: int) -> None:
        self._parties = parties
        self._count = 0
        self._generation = 0
        self._cond = threading.Condition()

    @property
    def parties(self) -> int:
        """Number of threads the barrier currently waits for."""
        with self._cond:
            return self._parties

    @property
    def waiting(self) -> int:
        """Number of threads currently blocked in :meth:`wait`."""
        with self._cond:
            return self._count

    def _release(self) -> None:
        self._count = 0
        self._generation += 1
        self._cond.notify_all()

    def wait(self) -> None:
        """Wait until every current party has called wait (or left)."""
        with self._cond:
            generation = self._generation
            self._count += 1
            if self._count >= self._parties:
                self._release()
                return
            while generation == self._generation:
                self._cond.wait()

    def done(self) -> None:
        """Leave the barrier for good, releasing waiters if they are now all present."""
        with self._cond:
            self._parties -= 1
            if self._count >= self._parties:
                self._release()