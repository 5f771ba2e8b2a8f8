"""HTTP client for the official Fantasy Premier League API."""

import logging
from typing import Any, Optional

import requests
from pydantic import ValidationError

from .constants import (
    DEFAULT_USER_AGENT,
    FPL_API_BASE,
    MAX_STANDINGS_PAGES,
    REQUEST_TIMEOUT_SECONDS,
)
from .models import LeagueEntry
from .schemas import StandingsPage

logger = logging.getLogger('fplpairs.fpl_client')


class FPLAPIError(Exception):
    """Raised when the FPL API is unreachable or returns an unusable response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class FPLClient:
    """Thin wrapper around the FPL endpoints used by the league."""

    def __init__(
        self,
        league_id: int,
        api_base: str = FPL_API_BASE,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        max_pages: int = MAX_STANDINGS_PAGES,
        user_agent: str = DEFAULT_USER_AGENT,
        session: Optional[requests.Session] = None,
    ):
        self.league_id = league_id
        self.api_base = api_base.rstrip('/')
        self.timeout = timeout
        self.max_pages = max_pages
        self.session = session or requests.Session()
        self.session.headers.update({'User-Agent': user_agent, 'Accept': 'application/json'})

    def _get_json(self, path: str, params: Optional[dict] = None) -> Any:
        url = f'{self.api_base}/{path.lstrip("/")}'
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise FPLAPIError(f'Request to {url} failed: {exc}') from exc

        if response.status_code != 200:
            raise FPLAPIError(
                f'{url} returned status {response.status_code}', status_code=response.status_code
            )

        try:
            return response.json()
        except ValueError as exc:
            raise FPLAPIError(f'{url} returned invalid JSON') from exc

    def fetch_standings_page(self, page: int) -> StandingsPage:
        """Fetch one page (50 rows) of the classic league standings."""
        data = self._get_json(
            f'leagues-classic/{self.league_id}/standings/', params={'page_standings': page}
        )
        try:
            return StandingsPage.model_validate(data)
        except ValidationError as exc:
            raise FPLAPIError(f'Unexpected standings payload on page {page}: {exc}') from exc

    def fetch_league_entries(self) -> list[LeagueEntry]:
        """
        Fetch every entry in the league, following pagination.

        Stops when the API reports no further pages, or after ``max_pages``.

        Raises:
            FPLAPIError: If any page cannot be fetched
        """
        entries: list[LeagueEntry] = []
        for page in range(1, self.max_pages + 1):
            standings = self.fetch_standings_page(page).standings
            entries.extend(
                LeagueEntry(
                    entry_id=row.entry,
                    entry_name=row.entry_name,
                    player_name=row.player_name,
                )
                for row in standings.results
            )
            if not standings.has_next or not standings.results:
                break
        else:
            logger.warning(
                f'League {self.league_id} has more than {self.max_pages} standings pages; truncated'
            )

        logger.info(f'Fetched {len(entries)} entries for league {self.league_id}')
        return entries

    def fetch_entry_points(self, entry_id: int, gw: int) -> int:
        """
        Fetch an entry's official points for a gameweek.

        Returns 0 when the gameweek has no data yet (404 or missing points).

        Raises:
            FPLAPIError: On any other upstream failure
        """
        try:
            data = self._get_json(f'entry/{entry_id}/event/{gw}/picks/')
        except FPLAPIError as exc:
            if exc.status_code == 404:
                logger.debug(f'No picks for entry {entry_id} in GW{gw} yet')
                return 0
            raise

        history = data.get('entry_history') if isinstance(data, dict) else None
        points = history.get('points') if isinstance(history, dict) else None
        # bool is an int subclass but never a valid score
        if isinstance(points, int) and not isinstance(points, bool):
            return points
        return 0
