from __future__ import annotations

import logging
from typing import Any

import httpx

from monarchs.domain.entities import FetchResult, Monarch
from monarchs.domain.interfaces import IMonarchRepository
from monarchs.domain.years import parse_years

log = logging.getLogger(__name__)

DATA_FETCHED_SUCCESSFULLY = "Data fetched successfully."
PARSING_ERROR             = "Parsing error"
UNEXPECTED_FORMAT         = "Unexpected data format"


class UnexpectedFormatError(Exception):
    """Raised when the payload's top-level JSON value is not an array."""
    pass


class MonarchHttpRepository(IMonarchRepository):
    """
    Concrete implementation of IMonarchRepository over plain HTTP GET.

    The constructor receives an httpx.AsyncClient (injected) rather than
    creating one internally. The caller owns the client, including its
    timeout, and tests can hand in a client backed by httpx.MockTransport.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    # Anti-Corruption Layer
    @staticmethod
    def _text(value: Any) -> str | None:
        """Scalars become strings; nested JSON is a malformed record."""
        if value is None:
            return None
        if isinstance(value, (dict, list)):
            raise TypeError(f"expected a scalar, got {type(value).__name__}")
        return str(value)

    @staticmethod
    def _integer(value: Any) -> int:
        """Missing ids default to 0; floats, strings and booleans are malformed."""
        if value is None:
            return 0
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"expected an integer id, got {type(value).__name__}")
        return value

    @classmethod
    def _parse_record(cls, record: dict[str, Any]) -> Monarch:
        """
        ANTI-CORRUPTION LAYER — translates one feed record into a Monarch.

        The feed sends:     We store as:
          "nm"          →   name
          "cty"         →   country
          "hse"         →   house
          "yrs"         →   years_raw  (+ start_year / end_year)

        Bad field types raise; the caller turns that into a failed fetch.
        """
        years_raw  = cls._text(record.get("yrs"))
        start, end = parse_years(years_raw)
        return Monarch(
            id         = cls._integer(record.get("id")),
            name       = cls._text(record.get("nm")),
            country    = cls._text(record.get("cty")),
            house      = cls._text(record.get("hse")),
            years_raw  = years_raw,
            start_year = start,
            end_year   = end,
        )

    def _parse_payload(self, payload: Any) -> list[Monarch]:
        if not isinstance(payload, list):
            raise UnexpectedFormatError(f"expected a JSON array, got {type(payload).__name__}")

        monarchs: list[Monarch] = []
        for record in payload:
            if not isinstance(record, dict):
                log.debug("Skipping non-object entry: %r", record)
                continue
            monarchs.append(self._parse_record(record))
        return monarchs

    # IMonarchRepository implementation
    async def fetch_monarchs(self, url: str) -> FetchResult[list[Monarch]]:
        """
        GET `url` once and translate the JSON array into Monarch objects.

        No retries: any failure is final and comes back as a failure
        result. The exception detail is logged, not returned.
        """
        log.info("Fetching data from remote...")
        try:
            response = await self._client.get(url)
            response.raise_for_status()
            monarchs = self._parse_payload(response.json())

        except UnexpectedFormatError as exc:
            log.warning("Fetched data is not in the expected JSON array format: %s", exc)
            return FetchResult.failure(UNEXPECTED_FORMAT)

        except Exception as exc:
            log.error("Error while fetching/parsing data: %s", exc, exc_info=True)
            return FetchResult.failure(PARSING_ERROR)

        log.info("Fetched %d monarchs", len(monarchs))
        return FetchResult.success(monarchs, DATA_FETCHED_SUCCESSFULLY)
