"""
스탠딩 엔진 설정

승점 가중치와 하한(floor)은 대회 규정마다 다를 수 있으므로 환경변수로 조정 가능
- STANDINGS_WIN_POINTS / STANDINGS_DRAW_POINTS / STANDINGS_LOSS_POINTS
- STANDINGS_PERCENTAGE_FLOOR ("1/3", "0.25" 등)
"""
from fractions import Fraction
from functools import lru_cache
from typing import Tuple

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from .models import MatchStatus

load_dotenv()


class ScoringPolicy(BaseSettings):
    """승점 및 타이브레이커 정책 (Play! Pokémon / MTG 표준 기본값)"""

    win_points: int = Field(default=3, ge=1, description="승리(부전승 포함) 승점")
    draw_points: int = Field(default=1, ge=0, description="무승부 승점")
    loss_points: int = Field(default=0, ge=0, description="패배 승점")
    percentage_floor: str = Field(default="1/3", description="상대 승률 하한 (분수 문자열)")
    eligible_statuses: Tuple[MatchStatus, ...] = Field(
        default=(MatchStatus.COMPLETED, MatchStatus.BYE),
        description="집계 대상 경기 상태",
    )

    class Config:
        env_prefix = "STANDINGS_"
        case_sensitive = False
        frozen = True

    @field_validator("percentage_floor")
    @classmethod
    def validate_percentage_floor(cls, v: str) -> str:
        try:
            value = Fraction(v.strip())
        except (ValueError, ZeroDivisionError):
            raise ValueError(f"하한값 형식이 올바르지 않습니다: {v} (예: 1/3)")
        if not 0 <= value <= 1:
            raise ValueError(f"하한값은 0 이상 1 이하여야 합니다: {v}")
        return v.strip()

    @property
    def floor(self) -> Fraction:
        """하한값 (정확한 분수)"""
        return Fraction(self.percentage_floor)

    def points_for(self, wins: int, draws: int, losses: int = 0) -> int:
        """승/무/패로 승점 계산 (부전승은 승리로 집계)"""
        return wins * self.win_points + draws * self.draw_points + losses * self.loss_points

    def cache_key(self) -> Tuple:
        return (
            self.win_points,
            self.draw_points,
            self.loss_points,
            self.floor,
            tuple(self.eligible_statuses),
        )


class SupabaseConfig(BaseSettings):
    """Supabase 설정"""

    supabase_url: str = Field(default="", description="Supabase Project URL")
    supabase_key: str = Field(default="", description="Supabase anon key")

    class Config:
        env_prefix = ""
        case_sensitive = False


@lru_cache()
def get_scoring_policy() -> ScoringPolicy:
    return ScoringPolicy()


# 전역 설정 인스턴스
supabase_config = SupabaseConfig()
