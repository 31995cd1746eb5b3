from __future__ import annotations

import pytest

from monarchs.domain.entities import Monarch


def _make_monarch(name: str = "Test King", house: str | None = "House of Test", start_year: int = 0, end_year: int = 0, id: int = 1) -> Monarch:
    return Monarch(
        id         = id,
        name       = name,
        country    = "England",
        house      = house,
        years_raw  = f"{start_year}-{end_year}",
        start_year = start_year,
        end_year   = end_year,
    )


@pytest.fixture
def make_monarch():
    """Factory for Monarch records with only the interesting fields set."""
    return _make_monarch
