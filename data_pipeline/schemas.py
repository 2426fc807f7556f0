"""
데이터 수집 스키마 정의

Supabase tournament_players / tournament_matches 행을 Pydantic 모델로 검증한 뒤
스탠딩 엔진 모델(Player, Match)로 변환한다.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Optional, List, Dict, Any
from datetime import datetime

from standings.models import Match, MatchStatus, Player, Standing


class PlayerRow(BaseModel):
    """선수 행 (tournament_players)"""
    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1, description="선수 ID (UUID)")
    name: str = Field(..., min_length=1, max_length=100, description="선수명")
    tournament_id: Optional[str] = Field(None, description="대회 ID")
    dropped: bool = Field(default=False, description="기권 여부")
    dropped_at_round: Optional[int] = Field(None, ge=1, description="기권 라운드")
    created_at: Optional[datetime] = Field(None, description="등록 시간")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """선수명 공백 정리"""
        v = " ".join(v.split())
        if not v:
            raise ValueError("선수명이 비어 있습니다")
        return v

    def to_model(self) -> Player:
        return Player(
            id=self.id,
            name=self.name,
            dropped=self.dropped,
            dropped_at_round=self.dropped_at_round,
        )


class MatchRow(BaseModel):
    """경기 행 (tournament_matches)"""
    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1, description="경기 ID (UUID)")
    tournament_id: str = Field(..., min_length=1, description="대회 ID")
    round_number: int = Field(..., ge=1, description="라운드 번호")
    player1_id: str = Field(..., min_length=1, description="선수1 ID")
    player2_id: Optional[str] = Field(None, description="선수2 ID (없으면 부전승)")
    winner_id: Optional[str] = Field(None, description="승자 ID (없으면 무승부)")
    result: Optional[str] = Field(None, description="결과 텍스트 (예: 2-1, Draw)")
    status: MatchStatus = Field(default=MatchStatus.READY, description="경기 상태")
    match_number: Optional[int] = Field(None, ge=1, description="테이블 번호")
    created_at: Optional[datetime] = Field(None, description="생성 시간")

    @field_validator("player2_id", "winner_id", "result", mode="before")
    @classmethod
    def empty_to_none(cls, v: Any) -> Any:
        """빈 문자열은 None으로"""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def validate_bye_status(self) -> "MatchRow":
        """상대가 없는 완료 경기는 부전승으로 간주"""
        if self.player2_id is None and self.status == MatchStatus.COMPLETED:
            self.status = MatchStatus.BYE
        return self

    def to_model(self) -> Match:
        return Match(
            id=self.id,
            tournament_id=self.tournament_id,
            round_number=self.round_number,
            player1_id=self.player1_id,
            player2_id=self.player2_id,
            winner_id=self.winner_id,
            status=self.status,
            result=self.result,
            created_at=self.created_at,
        )


class StandingsRequest(BaseModel):
    """스탠딩 계산 요청"""
    players: List[PlayerRow] = Field(default_factory=list)
    matches: List[MatchRow] = Field(default_factory=list)

    def to_models(self) -> tuple:
        return (
            [p.to_model() for p in self.players],
            [m.to_model() for m in self.matches],
        )


class StandingResponse(BaseModel):
    """순위표 한 줄 (API 응답)"""
    rank: int
    player_id: str
    name: str
    wins: int
    losses: int
    draws: int
    byes_received: int
    matches_played: int
    match_points: int
    match_win_percentage: float
    omw: float = Field(..., description="Opponents' Match-Win %")
    oomw: float = Field(..., description="Opponents' Opponents' Match-Win %")
    game_wins: int = 0
    game_losses: int = 0
    dropped: bool = False
    dropped_at_round: Optional[int] = None

    @classmethod
    def from_standing(cls, standing: Standing) -> "StandingResponse":
        return cls(**standing.to_dict())


def parse_player_rows(rows: List[Dict[str, Any]]) -> List[Player]:
    """Supabase 선수 행 목록 → Player 목록"""
    return [PlayerRow(**row).to_model() for row in rows]


def parse_match_rows(rows: List[Dict[str, Any]]) -> List[Match]:
    """Supabase 경기 행 목록 → Match 목록"""
    return [MatchRow(**row).to_model() for row in rows]
