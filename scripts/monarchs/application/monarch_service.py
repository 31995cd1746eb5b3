from __future__ import annotations

import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from typing import Callable, TypeVar

from monarchs.config import DEFAULT_PARALLEL_THRESHOLD
from monarchs.domain.entities import FetchResult, Monarch, MonarchStatistics
from monarchs.domain.interfaces import IMonarchCache, IMonarchRepository

log = logging.getLogger(__name__)

T = TypeVar("T")

MAX_WORKERS = 4

# House label used by the feed for the 1649-1660 interregnum, not a dynasty.
NON_DYNASTIC_HOUSE = "Commonwealth"

NO_RESULT = ("None", 0)

DATA_FROM_CACHE = "Data from cache."


class MonarchService:
    """
    The top-level use case: get the monarch list and answer questions about it.

    Receives its repository and cache via constructor injection, so it
    knows the sequence of operations but not where the data comes from.

    The four query methods are pure: they read the list they are given,
    never mutate it and never touch the network or the cache.
    """

    def __init__(self, repository: IMonarchRepository, cache: IMonarchCache, parallel_threshold: int = DEFAULT_PARALLEL_THRESHOLD) -> None:
        self._repository         = repository
        self._cache              = cache
        self._parallel_threshold = parallel_threshold

    async def get_monarchs(self, url: str) -> FetchResult[list[Monarch]]:
        """
        Return the monarch list, from cache when it is still valid.

        On a miss the repository is asked once; non-dynastic records are
        dropped and a successful result is cached before being returned.
        """
        cached = self._cache.try_get()
        if cached is not None:
            log.info("Data retrieved from cache.")
            return FetchResult.success(cached, DATA_FROM_CACHE)

        result = await self._repository.fetch_monarchs(url)

        # Failed fetches carry no payload.
        if result.data is not None:
            kept = [m for m in result.data if m.house != NON_DYNASTIC_HOUSE]
            log.debug("Dropped %d %s records", len(result.data) - len(kept), NON_DYNASTIC_HOUSE)
            result = replace(result, data=kept)

        if result.status and result.data is not None:
            self._cache.store(result.data)

        return result

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_total_monarch_count(self, monarchs: list[Monarch]) -> int:
        return len(monarchs)

    def get_longest_ruling_monarch(self, monarchs: list[Monarch]) -> tuple[str | None, int]:
        """
        Name and reign length of the longest-ruling monarch.
        Ties go to whoever appears first. Empty input gives ("None", 0).
        """
        if not monarchs:
            return NO_RESULT

        lengths = self._project(monarchs, _reign_length)
        best    = max(range(len(monarchs)), key=lengths.__getitem__)
        return monarchs[best].name, lengths[best]

    def get_longest_ruling_house(self, monarchs: list[Monarch]) -> tuple[str | None, int]:
        """
        House whose members' reign lengths add up to the most years.

        Houses are matched by exact label. Ties go to the house seen
        first. Empty input gives ("None", 0).
        """
        if not monarchs:
            return NO_RESULT

        lengths = self._project(monarchs, _reign_length)

        # dicts keep insertion order, so max() below prefers the first-seen house
        totals: dict[str | None, int] = {}
        for monarch, length in zip(monarchs, lengths):
            totals[monarch.house] = totals.get(monarch.house, 0) + length

        return max(totals.items(), key=lambda item: item[1])

    def get_most_common_first_name(self, monarchs: list[Monarch]) -> str | None:
        """
        First word of the most frequent name, or None for an empty list.
        Counter.most_common orders equal counts by first appearance.
        """
        if not monarchs:
            return None

        counts = Counter(self._project(monarchs, _first_name))
        return counts.most_common(1)[0][0]

    def summarise(self, monarchs: list[Monarch]) -> MonarchStatistics:
        return MonarchStatistics(
            total_count            = self.get_total_monarch_count(monarchs),
            longest_monarch        = self.get_longest_ruling_monarch(monarchs),
            longest_house          = self.get_longest_ruling_house(monarchs),
            most_common_first_name = self.get_most_common_first_name(monarchs),
        )

    # ------------------------------------------------------------------
    # Execution strategy
    # ------------------------------------------------------------------

    def _project(self, monarchs: list[Monarch], fn: Callable[[Monarch], T]) -> list[T]:
        """
        Apply `fn` to every monarch, keeping input order.

        Above the parallel threshold the list is split into chunks that
        run on a thread pool. Executor.map yields chunk results in
        submission order, so the output is identical to the sequential path.
        """
        if len(monarchs) <= self._parallel_threshold:
            return [fn(m) for m in monarchs]

        chunk_size = (len(monarchs) + MAX_WORKERS - 1) // MAX_WORKERS
        chunks     = [monarchs[i: i + chunk_size] for i in range(0, len(monarchs), chunk_size)]
        log.debug("Parallel projection | %d records | %d chunks", len(monarchs), len(chunks))

        with ThreadPoolExecutor(max_workers=MAX_WORKERS) as pool:
            parts = pool.map(lambda chunk: [fn(m) for m in chunk], chunks)
            return [value for part in parts for value in part]


def _reign_length(monarch: Monarch) -> int:
    return monarch.reign_length


def _first_name(monarch: Monarch) -> str:
    return monarch.first_name
