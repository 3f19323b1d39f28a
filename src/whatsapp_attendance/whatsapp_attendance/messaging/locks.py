from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator


class EmployeeLocks:
    """One lock per employee id.

    Reading the latest event and appending the next one must not interleave
    for the same employee; different employees never wait on each other.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[int, threading.Lock] = {}

    def _lock_for(self, employee_id: int) -> threading.Lock:
        with self._guard:
            return self._locks.setdefault(int(employee_id), threading.Lock())

    @contextmanager
    def hold(self, employee_id: int) -> Iterator[None]:
        with self._lock_for(employee_id):
            yield
