"""Constants for the FPL pairs mini-league."""

# Official Fantasy Premier League API
FPL_API_BASE = 'https://fantasy.premierleague.com/api'

DEFAULT_LEAGUE_ID = 498513
DEFAULT_USER_AGENT = 'FPL-Pairs-League'

# Gameweek bounds for a Premier League season
MIN_GAMEWEEK = 1
MAX_GAMEWEEK = 38

# Pages of standings followed at most (the endpoint returns 50 rows each)
MAX_STANDINGS_PAGES = 20

STANDINGS_CACHE_TTL_SECONDS = 6 * 60 * 60
STANDINGS_RETRY_SECONDS = 60
FETCH_WORKERS = 10
REQUEST_TIMEOUT_SECONDS = 10.0
BATCH_TIMEOUT_SECONDS = 60.0

TEAM_SIZE = 2

DEFAULT_HOST = '0.0.0.0'
DEFAULT_PORT = 3000
