from __future__ import annotations
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Monarch:
    """
    Immutable domain entity representing one historical ruler.

    frozen=True guarantees immutability — start_year and end_year are
    computed by the anti-corruption layer BEFORE construction, so a
    Monarch never exists in a half-parsed state.

    Field names are OURS (snake_case), not the feed's ("nm", "hse", ...).
    The translation happens in the infrastructure layer, not here.
    """
    id:         int
    name:       str | None
    country:    str | None
    house:      str | None
    years_raw:  str | None
    start_year: int = 0
    end_year:   int = 0

    @property
    def reign_length(self) -> int:
        # Can be negative for malformed year ranges.
        return self.end_year - self.start_year

    @property
    def first_name(self) -> str:
        return (self.name or "").split(" ")[0]


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """
    Immutable success-or-failure envelope.

    Expected failures travel as values of this type instead of exceptions,
    so every caller checks the same three fields.
    """
    status:  bool
    data:    T | None
    message: str

    @classmethod
    def success(cls, data: T, message: str) -> FetchResult[T]:
        return cls(status=True, data=data, message=message)

    @classmethod
    def failure(cls, message: str) -> FetchResult[T]:
        return cls(status=False, data=None, message=message)


@dataclass(frozen=True)
class MonarchStatistics:
    """
    Immutable value object bundling the four aggregate answers.
    Returned by MonarchService.summarise.
    """
    total_count:            int
    longest_monarch:        tuple[str | None, int]
    longest_house:          tuple[str | None, int]
    most_common_first_name: str | None
