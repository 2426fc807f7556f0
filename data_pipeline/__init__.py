"""
데이터 수집 패키지

Supabase 원본 행 → Pydantic 검증 → 스탠딩 엔진 모델
"""

from .schemas import (
    PlayerRow,
    MatchRow,
    StandingsRequest,
    StandingResponse,
    parse_player_rows,
    parse_match_rows,
)

__all__ = [
    "PlayerRow",
    "MatchRow",
    "StandingsRequest",
    "StandingResponse",
    "parse_player_rows",
    "parse_match_rows",
]
