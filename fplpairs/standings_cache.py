"""Time-limited cache of the league standings directory."""

import logging
import threading
import time
from typing import Callable, Optional

from .constants import STANDINGS_RETRY_SECONDS
from .fpl_client import FPLAPIError
from .models import LeagueEntry

logger = logging.getLogger('fplpairs.standings_cache')


class StandingsCache:
    """
    Holds the league directory for ``ttl_seconds``.

    Entries are refetched through ``loader`` once the TTL expires or after
    ``invalidate()``. If a refresh fails while stale data is held, the stale
    data is served and the next attempt waits ``retry_seconds``. Every
    successful refresh bumps ``version`` so dependants (e.g. resolved pairs)
    know to rebuild.
    """

    def __init__(
        self,
        loader: Callable[[], list[LeagueEntry]],
        ttl_seconds: float,
        retry_seconds: float = STANDINGS_RETRY_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._loader = loader
        self.ttl_seconds = ttl_seconds
        self.retry_seconds = retry_seconds
        self._clock = clock
        self._entries: Optional[list[LeagueEntry]] = None
        self._expires_at = float('-inf')
        self._lock = threading.Lock()
        self.version = 0

    def get(self) -> list[LeagueEntry]:
        """Return cached entries, refreshing them if expired."""
        return self.get_versioned()[0]

    def get_versioned(self) -> tuple[list[LeagueEntry], int]:
        """Return cached entries together with the version they belong to."""
        with self._lock:
            now = self._clock()
            if self._entries is not None and now < self._expires_at:
                return self._entries, self.version

            try:
                entries = self._loader()
            except FPLAPIError as exc:
                if self._entries is None:
                    raise
                logger.warning(
                    f'Standings refresh failed, serving stale data for {self.retry_seconds}s: {exc}'
                )
                self._expires_at = now + self.retry_seconds
                return self._entries, self.version

            self._entries = entries
            self._expires_at = now + self.ttl_seconds
            self.version += 1
            return entries, self.version

    def invalidate(self) -> None:
        """Force the next get() to refetch."""
        with self._lock:
            self._expires_at = float('-inf')
            logger.info('Standings cache invalidated')
