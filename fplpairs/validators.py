"""Validation of client-supplied gameweeks and captain selections."""

from typing import Any, Optional

from .constants import MAX_GAMEWEEK, MIN_GAMEWEEK


def parse_gameweek(raw: Any) -> Optional[int]:
    """
    Parse a gameweek from a path segment or CLI value.

    Returns:
        The gameweek number, or None if it is not an integer in 1-38
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw.isdigit():
            return None
    try:
        gw = int(raw)
    except (TypeError, ValueError):
        return None
    if not (MIN_GAMEWEEK <= gw <= MAX_GAMEWEEK):
        return None
    return gw


def validate_gameweek(raw: Any) -> list[str]:
    """Return validation errors for a gameweek value (empty if valid)."""
    if parse_gameweek(raw) is None:
        return [f'Invalid gameweek {raw!r} (must be {MIN_GAMEWEEK}-{MAX_GAMEWEEK})']
    return []


def validate_captain_selection(body: Any, team_names: list[str]) -> list[str]:
    """
    Validate a captain submission body.

    Checks:
    - Body is a JSON object
    - Every key is a configured team name
    - Every value is an integer entry id

    Whether the entry id belongs to the team is not checked here; a
    non-member captain falls back to automatic selection when scoring.

    Args:
        body: Decoded JSON body
        team_names: Configured team names

    Returns:
        List of validation error messages (empty if valid)
    """
    if not isinstance(body, dict):
        return ['Body must be a JSON object mapping team name to entry id']

    errors = []
    known = set(team_names)
    for team, entry_id in body.items():
        if team not in known:
            errors.append(f'Unknown team: {team}')
        if isinstance(entry_id, bool) or not isinstance(entry_id, int) or entry_id <= 0:
            errors.append(f'Captain for {team} must be a positive integer entry id')

    return errors
