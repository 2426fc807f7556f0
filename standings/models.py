"""
스탠딩 계산용 데이터 모델

- Player / Match: 입력 (엔진은 절대 수정하지 않음)
- PlayerTally: 집계 중간값 (builder 내부 전용)
- Standing: 출력 (읽기 전용, 매 호출마다 새로 생성)
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from fractions import Fraction
from typing import Any, Dict, List, Optional, Tuple


class MatchStatus(str, Enum):
    """경기 상태 (tournament_matches.status)"""
    READY = "ready"
    PENDING = "pending"
    COMPLETED = "completed"
    BYE = "bye"


@dataclass(frozen=True)
class Player:
    """대회 참가 선수 (tournament_players)"""
    id: str
    name: str
    dropped: bool = False
    dropped_at_round: Optional[int] = None


@dataclass(frozen=True)
class Match:
    """대회 경기 (tournament_matches)"""
    id: str
    tournament_id: str
    round_number: int
    player1_id: str
    player2_id: Optional[str] = None      # None이면 부전승(bye)
    winner_id: Optional[str] = None       # 두 선수 모두 있고 None이면 무승부
    status: MatchStatus = MatchStatus.COMPLETED
    result: Optional[str] = None          # "2-1" 형식 게임 스코어 또는 "Draw"
    created_at: Optional[datetime] = None

    @property
    def is_bye(self) -> bool:
        return self.player2_id is None

    @property
    def is_draw(self) -> bool:
        return self.player2_id is not None and self.winner_id is None

    @property
    def participants(self) -> Tuple[str, ...]:
        if self.player2_id is None:
            return (self.player1_id,)
        return (self.player1_id, self.player2_id)


@dataclass
class PlayerTally:
    """선수별 집계값"""
    player: Player
    wins: int = 0
    losses: int = 0
    draws: int = 0
    byes_received: int = 0
    matches_played: int = 0
    match_points: int = 0
    game_wins: int = 0
    game_losses: int = 0
    # 경기당 1개 항목 (같은 상대와 두 번 붙으면 두 번 들어감)
    opponents: List[str] = field(default_factory=list)

    @property
    def player_id(self) -> str:
        return self.player.id


@dataclass(frozen=True)
class TieBreakers:
    """선수별 타이브레이커 (정확한 분수값)"""
    match_win_percentage: Fraction
    opponent_match_win_percentage: Fraction
    opponent_opponent_match_win_percentage: Fraction


@dataclass(frozen=True)
class Standing:
    """최종 순위표 한 줄"""
    player_id: str
    name: str
    rank: int
    wins: int
    losses: int
    draws: int
    byes_received: int
    matches_played: int
    match_points: int
    match_win_percentage: float
    opponent_match_win_percentage: float
    opponent_opponent_match_win_percentage: float
    game_wins: int = 0
    game_losses: int = 0
    dropped: bool = False
    dropped_at_round: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rank": self.rank,
            "player_id": self.player_id,
            "name": self.name,
            "wins": self.wins,
            "losses": self.losses,
            "draws": self.draws,
            "byes_received": self.byes_received,
            "matches_played": self.matches_played,
            "match_points": self.match_points,
            "match_win_percentage": self.match_win_percentage,
            "omw": self.opponent_match_win_percentage,
            "oomw": self.opponent_opponent_match_win_percentage,
            "game_wins": self.game_wins,
            "game_losses": self.game_losses,
            "dropped": self.dropped,
            "dropped_at_round": self.dropped_at_round,
        }


@dataclass(frozen=True)
class Pairing:
    """한 라운드의 대진 (외부 페어링 결과)"""
    player1_id: str
    player1_name: str
    player2_id: Optional[str]
    player2_name: Optional[str]
    round_number: int


@dataclass(frozen=True)
class SeatAssignment:
    """대진별 테이블 번호 배정 결과"""
    match_number: int
    warning: Optional[str] = None
