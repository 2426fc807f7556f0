"""
경기 무결성 검증기 테스트
"""
from standings.models import Player
from standings.validators import MatchIntegrityValidator, ValidationSeverity

from conftest import make_match


class TestMatchIntegrityValidator:
    """MatchIntegrityValidator"""

    def test_clean_data_is_valid(self, four_players, four_player_matches):
        result = MatchIntegrityValidator().validate(four_players, four_player_matches)

        assert result.is_valid
        assert not result.has_critical_errors
        assert result.errors == []
        assert result.checked_matches == len(four_player_matches)

    def test_duplicate_player_id(self):
        players = [Player(id="a", name="A"), Player(id="a", name="A2")]
        result = MatchIntegrityValidator().validate(players, [])

        assert not result.is_valid
        assert result.errors[0].error_type == "DUPLICATE_PLAYER_ID"
        assert result.errors[0].severity == ValidationSeverity.CRITICAL

    def test_self_pairing(self, four_players):
        matches = [make_match("m1", 1, "a", "a", winner_id="a")]
        result = MatchIntegrityValidator().validate(four_players, matches)

        assert [e.error_type for e in result.errors] == ["SELF_PAIRING"]

    def test_match_after_drop_is_medium_warning(self):
        players = [Player(id="a", name="A", dropped=True, dropped_at_round=1), Player(id="b", name="B")]
        matches = [
            make_match("m1", 1, "a", "b", winner_id="b"),
            make_match("m2", 2, "a", "b", winner_id="a"),
        ]
        result = MatchIntegrityValidator().validate(players, matches)

        assert result.is_valid
        assert len(result.warnings) == 1
        warning = result.warnings[0]
        assert warning.error_type == "MATCH_AFTER_DROP"
        assert warning.severity == ValidationSeverity.MEDIUM
        assert (warning.match_id, warning.player_id, warning.value) == ("m2", "a", 2)

    def test_issues_serializable(self, four_players):
        matches = [make_match("m1", 1, "a", "zz", winner_id="q")]
        result = MatchIntegrityValidator().validate(four_players, matches)

        dumped = [e.model_dump(mode="json") for e in result.errors]
        assert {d["error_type"] for d in dumped} == {"UNKNOWN_PLAYER", "WINNER_NOT_PARTICIPANT"}
        assert all(d["severity"] == "critical" for d in dumped)
