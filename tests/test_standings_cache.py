"""Tests for the standings TTL cache."""

from unittest.mock import Mock

import pytest

from fplpairs.fpl_client import FPLAPIError
from fplpairs.models import LeagueEntry
from fplpairs.standings_cache import StandingsCache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def loader():
    return Mock(side_effect=lambda: [LeagueEntry(1, 'BAB-A', 'Ann')])


class TestStandingsCache:
    def test_cached_within_ttl(self, loader, clock):
        cache = StandingsCache(loader, ttl_seconds=60, clock=clock)
        first = cache.get()
        clock.now += 59
        assert cache.get() is first
        assert loader.call_count == 1
        assert cache.version == 1

    def test_refetches_after_ttl(self, loader, clock):
        cache = StandingsCache(loader, ttl_seconds=60, clock=clock)
        cache.get()
        clock.now += 60
        cache.get()
        assert loader.call_count == 2
        assert cache.version == 2

    def test_invalidate_forces_refetch(self, loader, clock):
        cache = StandingsCache(loader, ttl_seconds=3600, clock=clock)
        cache.get()
        cache.invalidate()
        cache.get()
        assert loader.call_count == 2

    def test_first_failure_propagates(self, clock):
        cache = StandingsCache(Mock(side_effect=FPLAPIError('down')), ttl_seconds=60, clock=clock)
        with pytest.raises(FPLAPIError):
            cache.get()
        assert cache.version == 0

    def test_stale_data_served_when_refresh_fails(self, clock):
        entries = [LeagueEntry(1, 'BAB-A', 'Ann')]
        loader = Mock(side_effect=[entries, FPLAPIError('down')])
        cache = StandingsCache(loader, ttl_seconds=60, clock=clock)

        cache.get()
        clock.now += 120

        assert cache.get() == entries
        assert cache.version == 1

    def test_outage_waits_before_retrying(self, clock):
        entries = [LeagueEntry(1, 'BAB-A', 'Ann')]
        calls = []

        def flaky_loader():
            calls.append(clock.now)
            if len(calls) > 1:
                raise FPLAPIError('down')
            return entries

        cache = StandingsCache(flaky_loader, ttl_seconds=60, retry_seconds=30, clock=clock)
        cache.get()
        clock.now += 120

        for _ in range(5):
            assert cache.get() == entries
        assert len(calls) == 2

        clock.now += 30
        assert cache.get() == entries
        assert len(calls) == 3

    def test_recovers_after_outage(self, clock):
        first = [LeagueEntry(1, 'BAB-A', 'Ann')]
        second = [LeagueEntry(2, 'BAB-B', 'Ben')]
        loader = Mock(side_effect=[first, FPLAPIError('down'), second])
        cache = StandingsCache(loader, ttl_seconds=60, retry_seconds=10, clock=clock)

        cache.get()
        clock.now += 60
        assert cache.get() == first
        clock.now += 10
        assert cache.get() == second
        assert cache.version == 2

    def test_get_versioned_pairs_entries_with_version(self, clock):
        first = [LeagueEntry(1, 'BAB-A', 'Ann')]
        second = [LeagueEntry(2, 'BAB-B', 'Ben')]
        cache = StandingsCache(Mock(side_effect=[first, second]), ttl_seconds=60, clock=clock)

        assert cache.get_versioned() == (first, 1)
        cache.invalidate()
        assert cache.get_versioned() == (second, 2)
        assert cache.get_versioned() == (second, 2)
