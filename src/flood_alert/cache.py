"""Process-wide, build-once snapshot cache."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SnapshotCache(Generic[T]):
    """Memoizes the result of *builder* for the lifetime of the process.

    Concurrent first callers block on the same lock, so only one build runs
    and every caller gets its result. A build that raises is not cached; the
    next ``get()`` tries again. There is no expiry.
    """

    def __init__(self, builder: Callable[[], T]) -> None:
        self._builder = builder
        self._value: T | None = None
        self._populated = False
        self._lock = threading.Lock()
        self.build_count = 0

    @property
    def is_populated(self) -> bool:
        return self._populated

    def peek(self) -> T | None:
        """Return the cached value without building."""
        return self._value

    def get(self) -> T:
        """Return the cached value, building it on first use."""
        if self._populated:
            return self._value  # type: ignore[return-value]

        with self._lock:
            if not self._populated:
                logger.debug("Building snapshot")
                value = self._builder()
                self.build_count += 1
                self._value = value
                self._populated = True
        return self._value  # type: ignore[return-value]
