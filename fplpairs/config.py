"""League configuration management."""

import os
from functools import lru_cache
from pathlib import Path

from .schemas import LeagueConfig
from .utils import load_json

CONFIG_ENV_VAR = 'FPL_PAIRS_CONFIG'
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / 'data' / 'league_config.json'


def get_config_path() -> Path:
    """Path of the league config, honouring the FPL_PAIRS_CONFIG override."""
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override) if override else DEFAULT_CONFIG_PATH


@lru_cache(maxsize=1)
def get_config() -> LeagueConfig:
    """
    Load league configuration from data/league_config.json.

    Configuration is cached after first load.

    Returns:
        LeagueConfig object with validated settings

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValueError: If config file has invalid structure

    Example:
        from fplpairs.config import get_config
        config = get_config()
        print(f"League: {config.league_id}")
    """
    return load_json(get_config_path(), schema=LeagueConfig)


def get_captains_path() -> Path:
    """
    Get the captains file path.

    Relative paths are resolved against the directory holding the config file.
    """
    captains_path = Path(get_config().captains_path)
    if captains_path.is_absolute():
        return captains_path
    return get_config_path().parent / captains_path


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file (or FPL_PAIRS_CONFIG) changes during runtime
    and you need to reload it.
    """
    get_config.cache_clear()
