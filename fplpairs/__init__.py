from .models import LeagueEntry, Member, Team, TeamResult, TeamError
from .scoring import CaptainDecision, select_captain, score_team, rank_results
from .resolver import resolve_team, resolve_teams, has_prefix, match_manager
from .points import fetch_points_batch
from .fpl_client import FPLClient, FPLAPIError
from .standings_cache import StandingsCache
from .captains import CaptainStore
from .scorer import MiniLeagueScorer
from .server import MiniLeagueHTTPServer, serve

__all__ = [
    # Models
    'LeagueEntry',
    'Member',
    'Team',
    'TeamResult',
    'TeamError',
    # Captain rule and ranking
    'CaptainDecision',
    'select_captain',
    'score_team',
    'rank_results',
    # Entry resolution
    'resolve_team',
    'resolve_teams',
    'has_prefix',
    'match_manager',
    # Upstream data
    'fetch_points_batch',
    'FPLClient',
    'FPLAPIError',
    'StandingsCache',
    # Persistence
    'CaptainStore',
    # Engine and HTTP
    'MiniLeagueScorer',
    'MiniLeagueHTTPServer',
    'serve',
]
