"""
Pytest configuration and fixtures for Swiss Standings tests
"""

import pytest
import sys
from pathlib import Path
from datetime import datetime, timedelta

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from standings.models import Match, MatchStatus, Player
from standings.config import ScoringPolicy


BASE_TIME = datetime(2026, 2, 21, 10, 0, 0)


def make_match(
    match_id,
    round_number,
    player1_id,
    player2_id=None,
    winner_id=None,
    status=None,
    result=None,
    minute=0,
):
    """테스트용 경기 생성 (player2 없으면 부전승)"""
    if status is None:
        status = MatchStatus.BYE if player2_id is None else MatchStatus.COMPLETED
    if player2_id is None and winner_id is None:
        winner_id = player1_id
    return Match(
        id=match_id,
        tournament_id="T1",
        round_number=round_number,
        player1_id=player1_id,
        player2_id=player2_id,
        winner_id=winner_id,
        status=status,
        result=result,
        created_at=BASE_TIME + timedelta(hours=round_number, minutes=minute),
    )


@pytest.fixture
def policy():
    """기본 승점 정책 (3/1/0, 하한 1/3)"""
    return ScoringPolicy()


@pytest.fixture
def four_players():
    return [
        Player(id="a", name="Alice"),
        Player(id="b", name="Bob"),
        Player(id="c", name="Carol"),
        Player(id="d", name="Dave"),
    ]


@pytest.fixture
def four_player_matches():
    """
    R1: A > B, C = D
    R2: A > C, B > D
    R3: A 부전승, B > C (D 휴식)
    """
    return [
        make_match("m1", 1, "a", "b", winner_id="a", result="2-0"),
        make_match("m2", 1, "c", "d", winner_id=None, result="Draw", minute=1),
        make_match("m3", 2, "a", "c", winner_id="a", result="2-1"),
        make_match("m4", 2, "b", "d", winner_id="b", result="2-1", minute=1),
        make_match("m5", 3, "a"),
        make_match("m6", 3, "b", "c", winner_id="b", result="2-0", minute=1),
    ]


@pytest.fixture
def supabase_rows():
    """Supabase 행 형식 샘플"""
    return {
        "players": [
            {"id": "p1", "name": "Alice", "tournament_id": "T1", "dropped": False,
             "dropped_at_round": None, "created_at": "2026-02-21T09:00:00+00:00"},
            {"id": "p2", "name": "Bob", "tournament_id": "T1", "dropped": False,
             "dropped_at_round": None, "created_at": "2026-02-21T09:01:00+00:00"},
            {"id": "p3", "name": "Carol", "tournament_id": "T1", "dropped": True,
             "dropped_at_round": 1, "created_at": "2026-02-21T09:02:00+00:00"},
        ],
        "matches": [
            {"id": "m1", "tournament_id": "T1", "round_number": 1, "player1_id": "p1",
             "player2_id": "p2", "winner_id": "p1", "result": "2-1", "status": "completed",
             "created_at": "2026-02-21T10:00:00+00:00"},
            {"id": "m2", "tournament_id": "T1", "round_number": 1, "player1_id": "p3",
             "player2_id": None, "winner_id": "p3", "result": None, "status": "bye",
             "created_at": "2026-02-21T10:00:01+00:00"},
            {"id": "m3", "tournament_id": "T1", "round_number": 2, "player1_id": "p1",
             "player2_id": "p2", "winner_id": None, "result": None, "status": "ready",
             "created_at": "2026-02-21T11:00:00+00:00"},
        ],
    }
