"""
main.py — Dependency Wiring (Composition Root)
------------------------------------------------
This file has ONE job: wire all the pieces together and run the app.

It does NOT contain any business logic. It just:
  1. Reads configuration from environment variables and CLI flags
  2. Creates concrete implementations of each interface
  3. Injects them into the classes that need them
  4. Calls the top-level use case (MonarchService)
  5. Reports the result and exits with a status code

Dependency graph (what depends on what):
                    main.py  (wires everything)
                       │
                       ▼
                 MonarchService
                 │            │
                 ▼            ▼
   IMonarchRepository      IMonarchCache
   (MonarchHttpRepository) (InMemoryMonarchCache)
                 │
                 ▼
         httpx.AsyncClient
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

import httpx

# Application layer
from monarchs.application.cache import InMemoryMonarchCache
from monarchs.application.monarch_service import MonarchService
from monarchs.config import AppSettings, ConfigurationError

# Infrastructure layer
from monarchs.infrastructure.http_repository import MonarchHttpRepository

log = logging.getLogger(__name__)

EXIT_OK           = 0
EXIT_FAILURE      = 1
EXIT_CONFIG_ERROR = 2


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
        datefmt="%H:%M:%S",
    )


# ---------------------------------------------------------------------------
# Dependency wiring
# ---------------------------------------------------------------------------

async def build_and_run(settings: AppSettings, transport: httpx.AsyncBaseTransport | None = None) -> int:
    """
    Wires all dependencies together, fetches the data and prints the
    four statistics. Returns the process exit status.

    `transport` is only for tests; production uses httpx's default.
    """
    client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout),
        follow_redirects=True,
        transport=transport,
    )

    try:
        # --- Wire the dependency graph bottom-up ---
        repository = MonarchHttpRepository(client=client)
        cache      = InMemoryMonarchCache(duration=settings.cache_duration)
        service    = MonarchService(
            repository         = repository,
            cache              = cache,
            parallel_threshold = settings.parallel_threshold,
        )

        # --- Execute ---
        response = await service.get_monarchs(settings.data_url)
        if not response.status or response.data is None:
            log.error("Data fetch failed: %s", response.message)
            return EXIT_FAILURE

        stats = service.summarise(response.data)

        # --- Report ---
        house_name, house_years = stats.longest_house
        monarch_name, monarch_years = stats.longest_monarch
        log.info("1) Total monarch count   : %d", stats.total_count)
        log.info("2) Longest ruling monarch: %s (%d years)", monarch_name, monarch_years)
        log.info("3) Longest ruling house  : %s (%d years)", house_name, house_years)
        log.info("4) Most common first name: %s", stats.most_common_first_name)

        log.info("Application completed successfully.")
        return EXIT_OK

    except Exception:
        log.error("A critical error occurred.", exc_info=True)
        return EXIT_FAILURE

    finally:
        # Always release the connection pool, even after a failure
        await client.aclose()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Fetch the list of monarchs and print reign statistics"
    )
    parser.add_argument("--url",                help="Source of the monarch JSON array (env: MONARCHS_DATA_URL)")
    parser.add_argument("--timeout",            type=float, help="HTTP timeout in seconds (env: MONARCHS_HTTP_TIMEOUT)")
    parser.add_argument("--cache-minutes",      type=float, help="Cache validity window (env: MONARCHS_CACHE_DURATION_MINUTES)")
    parser.add_argument("--parallel-threshold", type=int,   help="List size above which queries run on a thread pool")
    parser.add_argument("-v", "--verbose",      action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def load_settings(args: argparse.Namespace) -> AppSettings:
    """Environment first, then any flag given on the command line wins."""
    base = AppSettings.from_env()
    return AppSettings(
        data_url               = args.url if args.url is not None else base.data_url,
        http_timeout           = args.timeout if args.timeout is not None else base.http_timeout,
        cache_duration_minutes = args.cache_minutes if args.cache_minutes is not None else base.cache_duration_minutes,
        parallel_threshold     = args.parallel_threshold if args.parallel_threshold is not None else base.parallel_threshold,
    )


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    _configure_logging(args.verbose)

    log.info("Application is starting...")

    try:
        settings = load_settings(args)
    except ConfigurationError as exc:
        log.error("Invalid configuration: %s", exc)
        return EXIT_CONFIG_ERROR

    return asyncio.run(build_and_run(settings))


if __name__ == "__main__":
    sys.exit(main())
