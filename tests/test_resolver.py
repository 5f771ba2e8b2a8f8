"""Unit tests for mapping teams to league entries."""

import pytest

from fplpairs.models import LeagueEntry
from fplpairs.resolver import (
    ResolutionError,
    has_prefix,
    match_manager,
    resolve_team,
    resolve_teams,
)
from fplpairs.schemas import TeamConfig


@pytest.fixture
def directory():
    return [
        LeagueEntry(101, 'BAB-Dipesh', 'Dipesh Shah'),
        LeagueEntry(102, 'BAB - Rahul', 'Rahul Verma'),
        LeagueEntry(201, 'DK: Knightfall', "Sean O'Neil"),
        LeagueEntry(202, 'dk Batman', 'Bruce  Wayne'),
        LeagueEntry(301, 'FG-Solo', 'Only One'),
        LeagueEntry(401, 'SS-One', 'Sam Jones'),
        LeagueEntry(402, 'SS-Two', 'Sam Smith'),
        LeagueEntry(403, 'SS-Three', 'Priya Patel'),
        LeagueEntry(501, 'BABX-Imposter', 'Someone Else'),
    ]


class TestHasPrefix:
    @pytest.mark.parametrize(
        'squad',
        ['BAB-Name', 'BAB - Name', 'BAB–Name', 'BAB—Name', 'BAB: Name', 'BAB Name', '  bab-name'],
    )
    def test_accepted_separators(self, squad):
        assert has_prefix(squad, 'BAB')

    @pytest.mark.parametrize('squad', ['BABX-Name', 'BAB', 'XBAB-Name', '', 'BA-B Name'])
    def test_rejected_names(self, squad):
        assert not has_prefix(squad, 'BAB')

    def test_prefix_is_escaped(self):
        """Test regex metacharacters in a prefix match literally."""
        assert has_prefix('X.G-Name', 'X.G')
        assert not has_prefix('XYG-Name', 'X.G')

    def test_empty_prefix_never_matches(self):
        assert not has_prefix('BAB-Name', '')


class TestPrefixResolution:
    def test_exactly_two_matches(self, directory):
        team = resolve_team(TeamConfig(name='Banter Bros', prefix='BAB'), directory)
        assert team.is_valid
        assert [m.entry_id for m in team.members] == [101, 102]
        assert team.members[0].squad_name == 'BAB-Dipesh'
        assert team.members[0].manager == 'Dipesh Shah'
        assert team.members[0].points is None

    def test_case_insensitive_prefix(self, directory):
        team = resolve_team(TeamConfig(name='Dark Knights', prefix='DK'), directory)
        assert [m.entry_id for m in team.members] == [201, 202]

    def test_single_match_flags_team_invalid(self, directory):
        """Test one matching squad is an error, not a half-populated team."""
        team = resolve_team(TeamConfig(name='Footballing Gods', prefix='FG'), directory)
        assert not team.is_valid
        assert team.members == []
        assert team.error == 'Found 1 squads with prefix FG'

    def test_too_many_matches_flags_team_invalid(self, directory):
        team = resolve_team(TeamConfig(name='Super Saiyan', prefix='SS'), directory)
        assert not team.is_valid
        assert team.error == 'Found 3 squads with prefix SS'

    def test_no_matches_flags_team_invalid(self, directory):
        team = resolve_team(TeamConfig(name='Thunderbolts', prefix='TB'), directory)
        assert team.error == 'Found 0 squads with prefix TB'


class TestManagerMatching:
    def test_exact_match(self, directory):
        assert match_manager('Rahul Verma', directory).entry_id == 102

    def test_normalized_match(self, directory):
        """Test case, whitespace and punctuation are ignored."""
        assert match_manager('bruce wayne', directory).entry_id == 202
        assert match_manager('Sean ONeil', directory).entry_id == 201

    def test_substring_match(self, directory):
        assert match_manager('Priya', directory).entry_id == 403

    def test_ambiguous_substring_raises(self, directory):
        with pytest.raises(ResolutionError, match='ambiguous'):
            match_manager('Sam', directory)

    def test_unknown_manager_raises(self, directory):
        with pytest.raises(ResolutionError, match='No entry found'):
            match_manager('Nobody Here', directory)

    def test_exact_tier_wins_over_substring(self):
        directory = [
            LeagueEntry(1, 'A-1', 'Sam'),
            LeagueEntry(2, 'A-2', 'Sam Smith'),
        ]
        assert match_manager('Sam', directory).entry_id == 1


class TestManagerResolution:
    def test_two_managers(self, directory):
        team = resolve_team(
            TeamConfig(name='Mixed', managers=['Priya', 'sean oneil']), directory
        )
        assert team.is_valid
        assert [m.entry_id for m in team.members] == [403, 201]

    def test_one_unresolved_manager_flags_team(self, directory):
        team = resolve_team(
            TeamConfig(name='Mixed', managers=['Priya Patel', 'Ghost']), directory
        )
        assert not team.is_valid
        assert team.members == []
        assert 'Ghost' in team.error

    def test_both_descriptors_hitting_same_entry(self, directory):
        team = resolve_team(
            TeamConfig(name='Mixed', managers=['Dipesh', 'Dipesh Shah']), directory
        )
        assert not team.is_valid
        assert team.error == 'Both members resolved to the same entry'


class TestOverrides:
    def test_entry_ids_take_precedence(self, directory):
        team = resolve_team(
            TeamConfig(name='Super Saiyan', prefix='SS', entry_ids=[401, 403]), directory
        )
        assert team.is_valid
        assert [m.entry_id for m in team.members] == [401, 403]
        assert team.members[1].manager == 'Priya Patel'

    def test_override_outside_directory_keeps_id(self, directory):
        team = resolve_team(TeamConfig(name='Guests', entry_ids=[9001, 101]), directory)
        assert team.is_valid
        assert team.members[0].entry_id == 9001
        assert team.members[0].display_name == '9001'
        assert team.members[1].squad_name == 'BAB-Dipesh'


def test_resolve_teams_keeps_order_and_invalid_teams(directory):
    teams = resolve_teams(
        [
            TeamConfig(name='Footballing Gods', prefix='FG'),
            TeamConfig(name='Banter Bros', prefix='BAB'),
        ],
        directory,
    )
    assert [t.name for t in teams] == ['Footballing Gods', 'Banter Bros']
    assert [t.is_valid for t in teams] == [False, True]
    assert teams[0].as_dict() == {
        'name': 'Footballing Gods',
        'members': [],
        'error': 'Found 1 squads with prefix FG',
    }
