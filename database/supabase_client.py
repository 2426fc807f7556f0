"""
Supabase 데이터베이스 클라이언트 (읽기 전용)

대회 명단과 경기 기록을 불러온다. 모든 조회는 tournament_id와 workspace_id를
명시적으로 받아서 필터링한다 (세션/테넌트 전역 상태 사용 안 함).
"""
from typing import List, Optional, Dict, Any
from supabase import create_client, Client
from loguru import logger

from standings.config import supabase_config
from standings.models import Player, Match
from data_pipeline.schemas import parse_player_rows, parse_match_rows


# 싱글톤 클라이언트
_supabase_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Supabase 클라이언트 인스턴스 반환 (싱글톤)
    """
    global _supabase_client
    if _supabase_client is None:
        if not supabase_config.supabase_url or not supabase_config.supabase_key:
            raise ValueError("SUPABASE_URL과 SUPABASE_KEY 환경변수를 설정해주세요")
        _supabase_client = create_client(
            supabase_config.supabase_url,
            supabase_config.supabase_key
        )
    return _supabase_client


class TournamentRepository:
    """대회 데이터 조회"""

    def __init__(self, client: Optional[Client] = None):
        self.client: Client = client or get_supabase_client()

    # ==================== 대회 ====================

    def get_tournament(self, tournament_id: str, workspace_id: str) -> Optional[Dict[str, Any]]:
        """대회 정보 조회 (워크스페이스에 없으면 None)"""
        try:
            result = self.client.table("tournaments").select(
                "id, name, status, tournament_type, num_rounds, created_at"
            ).eq("id", tournament_id).eq("workspace_id", workspace_id).execute()
        except Exception as e:
            logger.error(f"대회 조회 오류 ({tournament_id}): {e}")
            raise

        if result.data:
            return result.data[0]
        return None

    # ==================== 선수 ====================

    def get_players(self, tournament_id: str, workspace_id: str) -> List[Player]:
        """대회 명단 조회 (기권 선수 포함)"""
        try:
            result = self.client.table("tournament_players").select(
                "id, name, tournament_id, dropped, dropped_at_round, created_at"
            ).eq("tournament_id", tournament_id).eq(
                "workspace_id", workspace_id
            ).order("created_at").execute()
        except Exception as e:
            logger.error(f"선수 명단 조회 오류 ({tournament_id}): {e}")
            raise

        players = parse_player_rows(result.data or [])
        logger.debug(f"선수 명단 {len(players)}명 로드: {tournament_id}")
        return players

    # ==================== 경기 ====================

    def get_matches(self, tournament_id: str, workspace_id: str) -> List[Match]:
        """대회 경기 조회 (round_number, created_at, id 순)"""
        try:
            result = self.client.table("tournament_matches").select(
                "id, tournament_id, round_number, player1_id, player2_id, "
                "winner_id, result, status, match_number, created_at"
            ).eq("tournament_id", tournament_id).eq(
                "workspace_id", workspace_id
            ).order("round_number").order("created_at").order("id").execute()
        except Exception as e:
            logger.error(f"경기 조회 오류 ({tournament_id}): {e}")
            raise

        matches = parse_match_rows(result.data or [])
        logger.debug(f"경기 {len(matches)}개 로드: {tournament_id}")
        return matches
