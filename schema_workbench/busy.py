from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Dict, Iterator


class BusyFlag:
    """Non-blocking guard allowing one in-flight request per triggering control."""

    def __init__(self):
        self._lock = threading.Lock()
        self._busy: Dict[str, bool] = {}

    def try_acquire(self, control: str) -> bool:
        with self._lock:
            if self._busy.get(control):
                return False
            self._busy[control] = True
            return True

    def release(self, control: str) -> None:
        with self._lock:
            self._busy.pop(control, None)

    def is_busy(self, control: str) -> bool:
        with self._lock:
            return bool(self._busy.get(control))

    @contextmanager
    def hold(self, control: str) -> Iterator[bool]:
        """Yield True if the control was free (and is now held), False if it was already busy."""
        acquired = self.try_acquire(control)
        try:
            yield acquired
        finally:
            if acquired:
                self.release(control)


busy_flags = BusyFlag()
