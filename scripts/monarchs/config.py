from __future__ import annotations

import math
import os
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable, Mapping, TypeVar

T = TypeVar("T")

ENV_PREFIX = "MONARCHS_"

DEFAULT_DATA_URL = (
    "https://gist.githubusercontent.com/christianpanton/10d65ccef9f29de3acd49d97ed423736"
    "/raw/b09563bc0c4b318132c7a738e679d4f984ef0048/kings"
)
DEFAULT_HTTP_TIMEOUT           = 30.0
DEFAULT_CACHE_DURATION_MINUTES = 5.0
DEFAULT_PARALLEL_THRESHOLD     = 10_000


class ConfigurationError(Exception):
    """Raised when a setting is present but unusable."""
    pass


@dataclass(frozen=True)
class AppSettings:
    """
    Immutable runtime configuration.

    Built from MONARCHS_* environment variables by from_env(); main.py
    then applies any command-line overrides on top.
    """
    data_url:               str   = DEFAULT_DATA_URL
    http_timeout:           float = DEFAULT_HTTP_TIMEOUT
    cache_duration_minutes: float = DEFAULT_CACHE_DURATION_MINUTES
    parallel_threshold:     int   = DEFAULT_PARALLEL_THRESHOLD

    def __post_init__(self) -> None:
        if not self.data_url:
            raise ConfigurationError("data_url must not be empty")
        if not math.isfinite(self.http_timeout) or self.http_timeout <= 0:
            raise ConfigurationError("http_timeout must be a finite, positive number")
        if not math.isfinite(self.cache_duration_minutes) or self.cache_duration_minutes < 0:
            raise ConfigurationError("cache_duration_minutes must be a finite, non-negative number")
        try:
            timedelta(minutes=self.cache_duration_minutes)
        except OverflowError as exc:
            raise ConfigurationError("cache_duration_minutes is too large") from exc
        if self.parallel_threshold < 0:
            raise ConfigurationError("parallel_threshold must not be negative")

    @property
    def cache_duration(self) -> timedelta:
        return timedelta(minutes=self.cache_duration_minutes)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AppSettings:
        """Read settings from the environment, falling back to defaults."""
        env = os.environ if environ is None else environ
        return cls(
            data_url               = env.get(f"{ENV_PREFIX}DATA_URL", DEFAULT_DATA_URL),
            http_timeout           = _read(env, "HTTP_TIMEOUT", float, DEFAULT_HTTP_TIMEOUT),
            cache_duration_minutes = _read(env, "CACHE_DURATION_MINUTES", float, DEFAULT_CACHE_DURATION_MINUTES),
            parallel_threshold     = _read(env, "PARALLEL_THRESHOLD", int, DEFAULT_PARALLEL_THRESHOLD),
        )


def _read(env: Mapping[str, str], name: str, convert: Callable[[str], T], default: T) -> T:
    raw = env.get(f"{ENV_PREFIX}{name}")
    if raw is None or not raw.strip():
        return default
    try:
        return convert(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{ENV_PREFIX}{name}={raw!r} is not a valid {convert.__name__}") from exc
