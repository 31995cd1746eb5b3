import argparse
import asyncio
import logging

import httpx

import main
from monarchs.config import AppSettings

FEED = [
    {"id": 1, "nm": "Henry VII", "cty": "England", "hse": "House of Tudor", "yrs": "1485-1509"},
    {"id": 2, "nm": "Henry VIII", "cty": "England", "hse": "House of Tudor", "yrs": "1509-1547"},
    {"id": 3, "nm": "Oliver Cromwell", "cty": "England", "hse": "Commonwealth", "yrs": "1653-1700"},
    {"id": 4, "nm": "Victoria", "cty": "United Kingdom", "hse": "House of Hanover", "yrs": "1837-1901"},
]


def _settings():
    return AppSettings(data_url="https://example.test/kings")


def test_prints_statistics_and_succeeds(caplog):
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=FEED))

    with caplog.at_level(logging.INFO):
        code = asyncio.run(main.build_and_run(_settings(), transport=transport))

    assert code == main.EXIT_OK
    assert "1) Total monarch count   : 3" in caplog.text
    assert "2) Longest ruling monarch: Victoria (64 years)" in caplog.text
    assert "3) Longest ruling house  : House of Hanover (64 years)" in caplog.text
    assert "4) Most common first name: Henry" in caplog.text
    assert "Application completed successfully." in caplog.text


def test_fetch_failure_exits_without_statistics(caplog):
    transport = httpx.MockTransport(lambda request: httpx.Response(500))

    with caplog.at_level(logging.INFO):
        code = asyncio.run(main.build_and_run(_settings(), transport=transport))

    assert code == main.EXIT_FAILURE
    assert "Data fetch failed: Parsing error" in caplog.text
    assert "Total monarch count" not in caplog.text


def test_unexpected_exception_is_caught_at_the_top(caplog, monkeypatch):
    def explode(self, monarchs):
        raise RuntimeError("boom")

    monkeypatch.setattr(main.MonarchService, "summarise", explode)
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=FEED))

    with caplog.at_level(logging.INFO):
        code = asyncio.run(main.build_and_run(_settings(), transport=transport))

    assert code == main.EXIT_FAILURE
    assert "A critical error occurred." in caplog.text
    assert "Total monarch count" not in caplog.text


def test_command_line_overrides_environment(monkeypatch):
    monkeypatch.setenv("MONARCHS_HTTP_TIMEOUT", "12")
    monkeypatch.setenv("MONARCHS_PARALLEL_THRESHOLD", "99")
    args = argparse.Namespace(url=None, timeout=3.0, cache_minutes=None, parallel_threshold=None)

    settings = main.load_settings(args)

    assert settings.http_timeout == 3.0
    assert settings.parallel_threshold == 99


def test_invalid_configuration_exits_with_config_error(monkeypatch):
    monkeypatch.setenv("MONARCHS_CACHE_DURATION_MINUTES", "five")

    assert main.main([]) == main.EXIT_CONFIG_ERROR


def test_infinite_cache_duration_exits_with_config_error(monkeypatch):
    monkeypatch.setenv("MONARCHS_CACHE_DURATION_MINUTES", "inf")

    assert main.main([]) == main.EXIT_CONFIG_ERROR
