"""Logical time source for claim timestamps."""

import threading


class LogicalClock:
    """Monotonic block-height style counter."""

    def __init__(self, height: int = 0):
        if height < 0:
            raise ValueError("height must be non-negative")
        self._height = height
        self._lock = threading.Lock()

    def now(self) -> int:
        return self._height

    def advance(self, blocks: int = 1) -> int:
        """Move time forward by ``blocks`` and return the new height."""
        if blocks < 0:
            raise ValueError("blocks must be non-negative")
        with self._lock:
            self._height += blocks
            return self._height
