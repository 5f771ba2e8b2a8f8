"""Main scoring engine that ties everything together."""

import logging
import threading
import time
from typing import Any, Optional, Union

from .captains import CaptainStore
from .config import get_captains_path, get_config
from .fpl_client import FPLClient
from .models import LeagueEntry, Team, TeamError, TeamResult
from .points import fetch_points_batch
from .resolver import resolve_teams
from .schemas import LeagueConfig
from .scoring import rank_results, score_team
from .standings_cache import StandingsCache

logger = logging.getLogger('fplpairs.scorer')


class MiniLeagueScorer:
    """
    Scoring engine for the pairs mini-league.

    Standings are cached for the configured TTL and the team resolution is
    rebuilt whenever the standings change. Gameweek points are never cached.
    """

    def __init__(
        self,
        config: LeagueConfig,
        client: FPLClient,
        captains: CaptainStore,
        standings: Optional[StandingsCache] = None,
    ):
        self.config = config
        self.client = client
        self.captains = captains
        self.standings = standings or StandingsCache(
            client.fetch_league_entries,
            ttl_seconds=config.standings_cache_ttl_seconds,
            retry_seconds=config.standings_retry_seconds,
        )
        self._pairs: Optional[list[Team]] = None
        self._pairs_version = -1
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: Optional[LeagueConfig] = None) -> 'MiniLeagueScorer':
        """Build a scorer wired to the real FPL API from league_config.json."""
        config = config or get_config()
        client = FPLClient(
            league_id=config.league_id,
            api_base=config.api_base,
            timeout=config.request_timeout_seconds,
            max_pages=config.max_standings_pages,
            user_agent=config.user_agent,
        )
        return cls(config, client, CaptainStore(get_captains_path()))

    @property
    def team_names(self) -> list[str]:
        return [team.name for team in self.config.teams]

    def abbreviations(self) -> dict[str, str]:
        return {team.name: team.prefix for team in self.config.teams if team.prefix}

    def league_directory(self) -> list[LeagueEntry]:
        """The league's entries (cached standings)."""
        return self.standings.get()

    def get_pairs(self) -> list[Team]:
        """Current team -> entries resolution, rebuilt when standings change."""
        directory, version = self.standings.get_versioned()
        with self._lock:
            # A newer resolution built by another thread wins over this directory
            if self._pairs is None or self._pairs_version < version:
                self._pairs = resolve_teams(self.config.teams, directory)
                self._pairs_version = version
            return self._pairs

    def refresh_pairs(self) -> list[Team]:
        """Drop cached standings and rebuild the resolution."""
        self.standings.invalidate()
        return self.get_pairs()

    def score_gameweek(self, gw: int) -> list[Union[TeamResult, TeamError]]:
        """
        Score every team for a gameweek and rank them.

        Args:
            gw: Gameweek number (already validated)

        Returns:
            Ranked list of TeamResult, followed by TeamError for invalid teams
        """
        pairs = self.get_pairs()
        captains = self.captains.get(gw)

        entry_ids = [member.entry_id for team in pairs if team.is_valid for member in team.members]
        logger.info(f'Fetching GW{gw} points for {len(entry_ids)} entries')
        points = fetch_points_batch(
            self.client.fetch_entry_points,
            entry_ids,
            gw,
            workers=self.config.fetch_workers,
            timeout=self.config.batch_timeout_seconds,
        )

        results = [score_team(team, points, captains.get(team.name)) for team in pairs]
        return rank_results(results)

    def gameweek_snapshot(self, gw: int) -> dict[str, Any]:
        """JSON-ready gameweek payload for the web client."""
        results = self.score_gameweek(gw)
        pending = any(
            member.points == 0
            for result in results
            if isinstance(result, TeamResult)
            for member in result.members
        )
        return {
            'gw': gw,
            'results': [result.as_dict() for result in results],
            'pending': pending,
            'timestamp': int(time.time() * 1000),
        }
