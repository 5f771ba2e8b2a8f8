"""Captaincy rule and ranking for pairs teams."""

from typing import NamedTuple, Optional, Union

from .models import Member, Team, TeamError, TeamResult


class CaptainDecision(NamedTuple):
    captain_entry_id: int
    auto_selected: bool
    captain_points: int
    total_points: int


def _tie_break_key(member: Member) -> tuple[str, int]:
    return (member.squad_name or '').casefold(), member.entry_id


def select_captain(
    m1: Member, m2: Member, explicit_captain_id: Optional[int] = None
) -> CaptainDecision:
    """
    Decide a team's captain and total for one gameweek.

    Scoring:
        - Team total = member 1 points + member 2 points + captain points
        - An explicit captain is honoured only if it is one of the two members
        - Otherwise the lower scorer captains (auto); on equal points the
          member with the smaller squad name (case-insensitive) wins, then
          the smaller entry id

    Missing points count as 0.
    """
    p1 = m1.points or 0
    p2 = m2.points or 0

    if explicit_captain_id is not None and explicit_captain_id in (m1.entry_id, m2.entry_id):
        captain = m1 if explicit_captain_id == m1.entry_id else m2
        auto = False
    else:
        auto = True
        if p1 != p2:
            captain = m1 if p1 < p2 else m2
        else:
            captain = m1 if _tie_break_key(m1) <= _tie_break_key(m2) else m2

    captain_points = p1 if captain is m1 else p2
    return CaptainDecision(
        captain_entry_id=captain.entry_id,
        auto_selected=auto,
        captain_points=captain_points,
        total_points=p1 + p2 + captain_points,
    )


def score_team(
    team: Team, points: dict[int, int], explicit_captain_id: Optional[int] = None
) -> Union[TeamResult, TeamError]:
    """
    Score one resolved team from a map of entry points.

    Invalid teams come back as TeamError rather than raising.
    """
    if not team.is_valid:
        return TeamError(team_name=team.name, error=team.error or 'Invalid team definition')

    members = [
        Member(
            entry_id=m.entry_id,
            squad_name=m.squad_name,
            manager=m.manager,
            points=points.get(m.entry_id, 0),
        )
        for m in team.members
    ]
    decision = select_captain(members[0], members[1], explicit_captain_id)
    return TeamResult(
        team_name=team.name,
        members=members,
        captain_entry_id=decision.captain_entry_id,
        captain_points=decision.captain_points,
        auto_selected=decision.auto_selected,
        total_points=decision.total_points,
    )


def rank_results(
    results: list[Union[TeamResult, TeamError]],
) -> list[Union[TeamResult, TeamError]]:
    """
    Order results for display.

    Scored teams by total points descending, ties by team name; teams that
    could not be scored follow in their original order.
    """
    scored = [r for r in results if isinstance(r, TeamResult)]
    errors = [r for r in results if isinstance(r, TeamError)]
    scored.sort(key=lambda r: (-r.total_points, r.team_name.casefold()))
    return [*scored, *errors]
