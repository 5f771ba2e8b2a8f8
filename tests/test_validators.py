"""Unit tests for request validation."""

import pytest

from fplpairs.validators import parse_gameweek, validate_captain_selection, validate_gameweek

TEAMS = ['Banter Bros', 'Dark Knights']


class TestGameweekValidation:
    @pytest.mark.parametrize('raw,expected', [('1', 1), ('38', 38), (' 7 ', 7), (12, 12)])
    def test_valid(self, raw, expected):
        assert parse_gameweek(raw) == expected
        assert validate_gameweek(raw) == []

    @pytest.mark.parametrize('raw', ['0', '39', '-1', 'abc', '', '1.5', None, True, 40])
    def test_invalid(self, raw):
        assert parse_gameweek(raw) is None
        errors = validate_gameweek(raw)
        assert len(errors) == 1
        assert 'must be 1-38' in errors[0]


class TestCaptainSelectionValidation:
    def test_valid_selection(self):
        assert validate_captain_selection({'Banter Bros': 101, 'Dark Knights': 202}, TEAMS) == []

    def test_empty_selection_is_valid(self):
        assert validate_captain_selection({}, TEAMS) == []

    @pytest.mark.parametrize('body', [[], 'Banter Bros', 5, None])
    def test_body_must_be_object(self, body):
        errors = validate_captain_selection(body, TEAMS)
        assert errors == ['Body must be a JSON object mapping team name to entry id']

    def test_unknown_team(self):
        errors = validate_captain_selection({'Nobody FC': 1}, TEAMS)
        assert errors == ['Unknown team: Nobody FC']

    @pytest.mark.parametrize('entry_id', ['101', 1.5, None, True, 0, -3])
    def test_entry_id_must_be_positive_integer(self, entry_id):
        errors = validate_captain_selection({'Banter Bros': entry_id}, TEAMS)
        assert errors == ['Captain for Banter Bros must be a positive integer entry id']

    def test_collects_every_error(self):
        errors = validate_captain_selection({'Nobody FC': 'x', 'Banter Bros': 1}, TEAMS)
        assert len(errors) == 2
