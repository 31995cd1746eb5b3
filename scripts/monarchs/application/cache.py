from __future__ import annotations
import logging
from datetime import datetime, timedelta
from typing import Callable
from monarchs.domain.entities import Monarch
from monarchs.domain.interfaces import IMonarchCache

log = logging.getLogger(__name__)


class InMemoryMonarchCache(IMonarchCache):
    """
    Single-slot cache holding one snapshot of the monarch list.

    The snapshot is the list itself plus the time it was captured. Callers
    get the SAME list object back, not a copy. Once the duration has
    passed the snapshot is treated as absent, although nothing is cleared.

    Not thread-safe: intended for the single-task console run.
    """

    def __init__(self, duration: timedelta, clock: Callable[[], datetime] = datetime.now) -> None:
        self._duration    = duration
        self._clock       = clock
        self._monarchs:    list[Monarch] | None = None
        self._captured_at: datetime | None = None

    def try_get(self) -> list[Monarch] | None:
        if self._monarchs is None or self._captured_at is None:
            return None

        age = self._clock() - self._captured_at
        if age < self._duration:
            return self._monarchs

        log.debug("Cache snapshot expired (age %s, duration %s)", age, self._duration)
        return None

    def store(self, monarchs: list[Monarch]) -> None:
        self._monarchs    = monarchs
        self._captured_at = self._clock()
        log.debug("Cached %d monarchs", len(monarchs))
