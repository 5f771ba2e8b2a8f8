"""Resolve configured pairs teams to concrete league entries."""

import logging
import re

from .constants import TEAM_SIZE
from .models import LeagueEntry, Member, Team
from .schemas import TeamConfig
from .utils import normalize_name

logger = logging.getLogger('fplpairs.resolver')


class ResolutionError(ValueError):
    """A team's descriptors did not map to exactly two entries."""


def has_prefix(entry_name: str, prefix: str) -> bool:
    """
    Check whether a squad name carries a team prefix.

    Accepts "PREFIX-Name", "PREFIX - Name", "PREFIX–Name", "PREFIX—Name",
    "PREFIX: Name" and "PREFIX Name" (case-insensitive).
    """
    pattern = re.escape((prefix or '').strip())
    if not pattern:
        return False
    return re.match(rf'^\s*{pattern}(?:\s*[-–—:]\s*|\s+)', entry_name or '', re.IGNORECASE) is not None


def match_by_prefix(prefix: str, directory: list[LeagueEntry]) -> list[LeagueEntry]:
    """All entries whose squad name starts with the prefix."""
    return [entry for entry in directory if has_prefix(entry.entry_name, prefix)]


def match_manager(name: str, directory: list[LeagueEntry]) -> LeagueEntry:
    """
    Find the single entry managed by ``name``.

    Tries exact, then normalized, then substring matching. The first tier
    with any hit decides: exactly one hit wins, several hits are ambiguous.

    Raises:
        ResolutionError: If no tier matches, or a tier matches ambiguously
    """
    target = normalize_name(name)
    tiers = [
        ('exact', lambda e: e.player_name == name),
        ('normalized', lambda e: bool(target) and normalize_name(e.player_name) == target),
        (
            'substring',
            lambda e: bool(target)
            and bool(normalize_name(e.player_name))
            and (target in normalize_name(e.player_name) or normalize_name(e.player_name) in target),
        ),
    ]

    for tier, predicate in tiers:
        matches = [entry for entry in directory if predicate(entry)]
        if len(matches) == 1:
            logger.debug(f'Manager {name!r} matched entry {matches[0].entry_id} ({tier})')
            return matches[0]
        if len(matches) > 1:
            ids = ', '.join(str(m.entry_id) for m in matches)
            raise ResolutionError(f'Manager {name!r} is ambiguous ({tier} match: {ids})')

    raise ResolutionError(f'No entry found for manager {name!r}')


def _members_from_ids(entry_ids: list[int], directory: list[LeagueEntry]) -> list[Member]:
    by_id = {entry.entry_id: entry for entry in directory}
    members = []
    for entry_id in entry_ids:
        entry = by_id.get(entry_id)
        members.append(Member.from_entry(entry) if entry else Member(entry_id=entry_id))
    return members


def resolve_team(team: TeamConfig, directory: list[LeagueEntry]) -> Team:
    """
    Map one team's descriptors to exactly two members.

    Manual ``entry_ids`` take precedence over ``managers``, which take
    precedence over ``prefix``. Failures produce a Team with ``error`` set.
    """
    try:
        if team.entry_ids:
            members = _members_from_ids(team.entry_ids, directory)
        elif team.managers:
            members = [Member.from_entry(match_manager(name, directory)) for name in team.managers]
        else:
            matches = match_by_prefix(team.prefix or '', directory)
            if len(matches) != TEAM_SIZE:
                raise ResolutionError(f'Found {len(matches)} squads with prefix {team.prefix}')
            members = [Member.from_entry(entry) for entry in matches]

        if len({member.entry_id for member in members}) != TEAM_SIZE:
            raise ResolutionError('Both members resolved to the same entry')
    except ResolutionError as exc:
        logger.warning(f'Could not resolve team {team.name}: {exc}')
        return Team(name=team.name, error=str(exc))

    return Team(name=team.name, members=members)


def resolve_teams(teams: list[TeamConfig], directory: list[LeagueEntry]) -> list[Team]:
    """Resolve every configured team, keeping config order."""
    resolved = [resolve_team(team, directory) for team in teams]
    invalid = sum(1 for team in resolved if not team.is_valid)
    logger.info(f'Resolved {len(resolved) - invalid}/{len(resolved)} teams')
    return resolved
