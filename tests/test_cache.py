from datetime import datetime, timedelta

from monarchs.application.cache import InMemoryMonarchCache


class FakeClock:
    """Manually advanced clock so expiry can be tested without sleeping."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


def _cache(clock, minutes=5):
    return InMemoryMonarchCache(duration=timedelta(minutes=minutes), clock=clock)


def test_empty_cache_reports_absence():
    clock = FakeClock(datetime(2024, 1, 1, 12, 0))
    assert _cache(clock).try_get() is None


def test_store_then_get_returns_same_list(make_monarch):
    clock    = FakeClock(datetime(2024, 1, 1, 12, 0))
    cache    = _cache(clock)
    monarchs = [make_monarch("Edward I"), make_monarch("Edward II")]

    cache.store(monarchs)
    clock.advance(timedelta(minutes=4, seconds=59))

    assert cache.try_get() is monarchs


def test_snapshot_expires_after_duration(make_monarch):
    clock = FakeClock(datetime(2024, 1, 1, 12, 0))
    cache = _cache(clock)
    cache.store([make_monarch()])

    clock.advance(timedelta(minutes=5))

    assert cache.try_get() is None


def test_store_replaces_snapshot_and_restarts_window(make_monarch):
    clock = FakeClock(datetime(2024, 1, 1, 12, 0))
    cache = _cache(clock)
    cache.store([make_monarch("Old King")])

    clock.advance(timedelta(minutes=4))
    fresh = [make_monarch("New King")]
    cache.store(fresh)
    clock.advance(timedelta(minutes=4))

    assert cache.try_get() is fresh


def test_zero_duration_never_hits(make_monarch):
    clock = FakeClock(datetime(2024, 1, 1, 12, 0))
    cache = _cache(clock, minutes=0)
    cache.store([make_monarch()])

    assert cache.try_get() is None
