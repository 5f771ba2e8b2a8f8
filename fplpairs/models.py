"""Data models for the pairs league."""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class LeagueEntry:
    """One FPL squad in the classic league standings."""
    entry_id: int
    entry_name: str  # squad name, e.g. "BAB-Dipesh"
    player_name: str  # manager display name

    def as_dict(self) -> dict[str, Any]:
        return {'manager': self.player_name, 'entryId': self.entry_id, 'fplTeam': self.entry_name}


@dataclass
class Member:
    """A league entry playing for a pairs team."""
    entry_id: int
    squad_name: str = ''
    manager: str = ''
    points: Optional[int] = None  # None until fetched

    @property
    def display_name(self) -> str:
        return self.manager or self.squad_name or str(self.entry_id)

    @classmethod
    def from_entry(cls, entry: LeagueEntry) -> 'Member':
        return cls(entry_id=entry.entry_id, squad_name=entry.entry_name, manager=entry.player_name)

    def as_dict(self) -> dict[str, Any]:
        return {
            'entryId': self.entry_id,
            'displayName': self.display_name,
            'squadName': self.squad_name,
            'manager': self.manager,
            'points': self.points,
        }


@dataclass
class Team:
    """A resolved pairs team. Invalid teams carry an error and no members."""
    name: str
    members: list[Member] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.error is None and len(self.members) == 2

    def as_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            'name': self.name,
            'members': [member.as_dict() for member in self.members],
        }
        if self.error:
            data['error'] = self.error
        return data


@dataclass
class TeamResult:
    """Scored gameweek result for one team."""
    team_name: str
    members: list[Member]
    captain_entry_id: int
    captain_points: int
    auto_selected: bool
    total_points: int

    def as_dict(self) -> dict[str, Any]:
        return {
            'teamName': self.team_name,
            'members': [member.as_dict() for member in self.members],
            'captainEntryId': self.captain_entry_id,
            'captainPoints': self.captain_points,
            'autoSelected': self.auto_selected,
            'totalPoints': self.total_points,
        }


@dataclass
class TeamError:
    """A team that could not be scored, reported in place of a result."""
    team_name: str
    error: str

    def as_dict(self) -> dict[str, Any]:
        return {'teamName': self.team_name, 'error': self.error}
