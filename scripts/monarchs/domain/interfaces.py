"""
Domain Layer — Interfaces (Abstract Contracts)
-----------------------------------------------
These are ABSTRACT definitions of what the outer layers must provide.
The domain layer defines the shape; infrastructure and application
classes implement it.

MonarchService depends on these contracts only, so tests can pass a
FakeRepository or a cache with a frozen clock without touching the
network.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from .entities import FetchResult, Monarch


class IMonarchRepository(ABC):
    """
    Contract that any monarch data source must fulfil.
    The service depends on THIS, not on the concrete HTTP repository.
    """

    @abstractmethod
    async def fetch_monarchs(self, url: str) -> FetchResult[list[Monarch]]:
        """
        Fetch and translate the full monarch list from `url`.

        Never raises for transport or parsing problems; those come back
        as a failure FetchResult.
        """
        ...


class IMonarchCache(ABC):
    """
    Contract for the single-slot monarch cache.
    Swap the in-memory version for anything else without touching the service.
    """

    @abstractmethod
    def try_get(self) -> list[Monarch] | None:
        """Return the cached list while it is still valid, otherwise None."""
        ...

    @abstractmethod
    def store(self, monarchs: list[Monarch]) -> None:
        """Replace the cached list and restart its validity window."""
        ...
