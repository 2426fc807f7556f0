"""
Swiss Standings - FastAPI 웹 서버

- 스탠딩 계산 API (요청 본문의 명단/경기로 계산)
- 대회별 스탠딩 조회 API (Supabase에서 로드 후 계산)
- 권장 라운드 수 API

데이터 저장은 하지 않는다 (읽기 전용).
"""
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from loguru import logger
from dotenv import load_dotenv

from data_pipeline.schemas import StandingsRequest, StandingResponse
from database.supabase_client import TournamentRepository
from standings import (
    DataIntegrityError,
    StandingsEngine,
    calculate_suggested_rounds,
    get_scoring_policy,
)
from standings.config import supabase_config
from standings.rounds import TOURNAMENT_TYPES

# 환경변수 로드
load_dotenv()

# FastAPI 앱
app = FastAPI(
    title="Swiss Standings",
    description="스위스 대회 스탠딩 및 타이브레이커 계산 API",
    version="1.0.0"
)

# 요청 간 공유 (입력이 같으면 결과 재사용)
_engine = StandingsEngine(memoize=True)


def get_engine() -> StandingsEngine:
    return _engine


def get_repository() -> TournamentRepository:
    """Supabase 저장소 의존성"""
    if not supabase_config.supabase_url or not supabase_config.supabase_key:
        raise HTTPException(status_code=503, detail="Supabase가 설정되지 않았습니다")
    return TournamentRepository()


def _integrity_exception(e: DataIntegrityError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={
            "message": "데이터 무결성 오류로 스탠딩을 계산할 수 없습니다",
            "issues": [issue.model_dump(mode="json") for issue in e.issues],
        },
    )


# ==================== API ====================

@app.get("/api/status")
async def get_status():
    """서버 상태 및 현재 승점 정책"""
    policy = get_scoring_policy()
    return {
        "status": "ok",
        "supabase_configured": bool(supabase_config.supabase_url and supabase_config.supabase_key),
        "scoring": {
            "win_points": policy.win_points,
            "draw_points": policy.draw_points,
            "loss_points": policy.loss_points,
            "percentage_floor": policy.percentage_floor,
        },
    }


@app.post("/api/standings", response_model=List[StandingResponse])
async def compute_standings_endpoint(
    request: StandingsRequest,
    engine: StandingsEngine = Depends(get_engine),
):
    """요청 본문의 명단/경기로 스탠딩 계산"""
    players, matches = request.to_models()
    try:
        standings = engine.compute(players, matches)
    except DataIntegrityError as e:
        logger.warning(f"스탠딩 계산 거부: {e}")
        raise _integrity_exception(e)
    return [StandingResponse.from_standing(s) for s in standings]


@app.get("/api/tournaments/{tournament_id}/standings", response_model=List[StandingResponse])
async def get_tournament_standings(
    tournament_id: str,
    workspace_id: str = Query(..., description="워크스페이스 ID"),
    repository: TournamentRepository = Depends(get_repository),
    engine: StandingsEngine = Depends(get_engine),
):
    """대회 스탠딩 조회"""
    tournament = repository.get_tournament(tournament_id, workspace_id)
    if not tournament:
        raise HTTPException(status_code=404, detail="대회를 찾을 수 없습니다")

    players = repository.get_players(tournament_id, workspace_id)
    matches = repository.get_matches(tournament_id, workspace_id)

    try:
        standings = engine.compute(players, matches)
    except DataIntegrityError as e:
        logger.error(f"대회 {tournament_id} 스탠딩 계산 실패: {e}")
        raise _integrity_exception(e)
    return [StandingResponse.from_standing(s) for s in standings]


@app.get("/api/rounds/suggested")
async def get_suggested_rounds(
    player_count: int = Query(..., ge=0, description="참가자 수"),
    tournament_type: str = Query("swiss", description="대회 방식 (swiss/single_elimination)"),
):
    """참가자 수에 따른 권장 라운드 수"""
    if tournament_type not in TOURNAMENT_TYPES:
        raise HTTPException(status_code=400, detail=f"지원하지 않는 대회 방식입니다: {tournament_type}")
    return {
        "player_count": player_count,
        "tournament_type": tournament_type,
        "suggested_rounds": calculate_suggested_rounds(player_count, tournament_type),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.server:app", host="0.0.0.0", port=7171, reload=False)
