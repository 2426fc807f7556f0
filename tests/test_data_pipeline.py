"""
데이터 수집 스키마 단위 테스트
- PlayerRow / MatchRow 검증
- Supabase 행 → 엔진 모델 변환
- 승점 정책 설정
"""
import pytest
from pydantic import ValidationError as PydanticValidationError

from data_pipeline.schemas import (
    MatchRow,
    PlayerRow,
    StandingsRequest,
    StandingResponse,
    parse_match_rows,
    parse_player_rows,
)
from standings import compute_standings
from standings.config import ScoringPolicy
from standings.models import MatchStatus


# =============================================================================
# 선수 행
# =============================================================================

class TestPlayerRow:
    """선수 행 검증"""

    def test_name_whitespace_normalized(self):
        row = PlayerRow(id="p1", name="  Ash   Ketchum ")
        assert row.name == "Ash Ketchum"

    def test_blank_name_rejected(self):
        with pytest.raises(PydanticValidationError):
            PlayerRow(id="p1", name="   ")

    def test_dropped_at_round_must_be_positive(self):
        with pytest.raises(PydanticValidationError):
            PlayerRow(id="p1", name="Ash", dropped=True, dropped_at_round=0)

    def test_extra_columns_ignored(self):
        row = PlayerRow(id="p1", name="Ash", has_static_seating=True, static_seat_number=3)
        player = row.to_model()
        assert player.id == "p1"
        assert player.dropped is False


# =============================================================================
# 경기 행
# =============================================================================

class TestMatchRow:
    """경기 행 검증"""

    def test_round_number_must_be_positive(self):
        with pytest.raises(PydanticValidationError):
            MatchRow(id="m1", tournament_id="T1", round_number=0, player1_id="p1")

    def test_unknown_status_rejected(self):
        with pytest.raises(PydanticValidationError):
            MatchRow(id="m1", tournament_id="T1", round_number=1, player1_id="p1", status="cancelled")

    def test_empty_strings_become_none(self):
        row = MatchRow(
            id="m1", tournament_id="T1", round_number=1,
            player1_id="p1", player2_id="", winner_id="", status="ready",
        )
        assert row.player2_id is None
        assert row.winner_id is None

    def test_completed_without_opponent_is_bye(self):
        row = MatchRow(id="m1", tournament_id="T1", round_number=1, player1_id="p1", status="completed")
        assert row.status == MatchStatus.BYE
        assert row.to_model().is_bye

    def test_default_status_ready(self):
        row = MatchRow(id="m1", tournament_id="T1", round_number=1, player1_id="p1", player2_id="p2")
        assert row.status == MatchStatus.READY

    def test_created_at_parsed(self):
        row = MatchRow(
            id="m1", tournament_id="T1", round_number=1, player1_id="p1",
            created_at="2026-02-21T10:00:00+00:00",
        )
        assert row.to_model().created_at.year == 2026


# =============================================================================
# 변환 및 계산
# =============================================================================

class TestRowConversion:
    """Supabase 행 → 스탠딩"""

    def test_parse_rows(self, supabase_rows):
        players = parse_player_rows(supabase_rows["players"])
        matches = parse_match_rows(supabase_rows["matches"])

        assert [p.id for p in players] == ["p1", "p2", "p3"]
        assert players[2].dropped_at_round == 1
        assert [m.status for m in matches] == [MatchStatus.COMPLETED, MatchStatus.BYE, MatchStatus.READY]

    def test_request_to_standings(self, supabase_rows):
        request = StandingsRequest(**supabase_rows)
        players, matches = request.to_models()
        standings = compute_standings(players, matches, ScoringPolicy())

        by_id = {s.player_id: s for s in standings}
        assert by_id["p1"].game_wins == 2
        assert by_id["p2"].game_wins == 1
        assert by_id["p3"].byes_received == 1
        assert by_id["p3"].dropped is True

        response = StandingResponse.from_standing(by_id["p1"])
        assert response.omw == by_id["p1"].opponent_match_win_percentage
        assert response.player_id == "p1"


class TestScoringPolicy:
    """승점 정책 설정"""

    def test_defaults(self):
        policy = ScoringPolicy()
        assert (policy.win_points, policy.draw_points, policy.loss_points) == (3, 1, 0)
        assert policy.percentage_floor == "1/3"
        assert policy.points_for(2, 1) == 7

    def test_decimal_floor(self):
        policy = ScoringPolicy(percentage_floor="0.25")
        assert policy.floor * 4 == 1

    @pytest.mark.parametrize("value", ["abc", "1/0", "2", "-1/3"])
    def test_invalid_floor_rejected(self, value):
        with pytest.raises(PydanticValidationError):
            ScoringPolicy(percentage_floor=value)

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("STANDINGS_WIN_POINTS", "2")
        monkeypatch.setenv("STANDINGS_PERCENTAGE_FLOOR", "1/4")
        policy = ScoringPolicy()
        assert policy.win_points == 2
        assert policy.percentage_floor == "1/4"
