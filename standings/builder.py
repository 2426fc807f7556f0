"""
Standings Builder

경기 기록에서 선수별 승/무/패/부전승 집계와 승점, 상대 목록을 만든다.
- 명단의 모든 선수는 경기가 없어도 0 집계로 포함
- 부전승: player1 +1승, 상대 기록 없음
- 승부 경기: 승자 +1승, 패자 +1패, 서로를 상대로 기록
- 무승부: 양쪽 +1무, 서로를 상대로 기록
"""
import re
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from loguru import logger

from .config import ScoringPolicy, get_scoring_policy
from .errors import DataIntegrityError
from .models import Match, Player, PlayerTally
from .validators import MatchIntegrityValidator

GAME_SCORE_PATTERN = re.compile(r"^(\d+)-(\d+)$")


def match_sort_key(match: Match) -> Tuple[int, float, str]:
    """결정적 처리 순서: (round_number, created_at, id)"""
    created = match.created_at.timestamp() if match.created_at is not None else float("-inf")
    return (match.round_number, created, match.id)


def eligible_matches(
    matches: Iterable[Match],
    policy: Optional[ScoringPolicy] = None,
) -> List[Match]:
    """집계 대상 경기 (completed/bye)만 결정적 순서로 반환"""
    policy = policy or get_scoring_policy()
    statuses = set(policy.eligible_statuses)
    return sorted((m for m in matches if m.status in statuses), key=match_sort_key)


def parse_game_score(result: Optional[str]) -> Optional[Tuple[int, int]]:
    """"2-1" 형식 결과에서 (player1 게임 승, player2 게임 승) 추출"""
    if not result:
        return None
    found = GAME_SCORE_PATTERN.match(result.strip())
    if not found:
        return None
    return int(found.group(1)), int(found.group(2))


def build_tallies(
    players: Sequence[Player],
    matches: Iterable[Match],
    policy: Optional[ScoringPolicy] = None,
) -> Dict[str, PlayerTally]:
    """
    선수별 집계 생성

    Args:
        players: 대회 전체 명단
        matches: 대회 경기 목록 (ready/pending은 자동 제외)
        policy: 승점 정책 (None이면 환경설정 기본값)

    Returns:
        {player_id: PlayerTally} (명단 순서 유지)

    Raises:
        DataIntegrityError: 승자/참가자 불일치, 명단에 없는 선수 등
    """
    policy = policy or get_scoring_policy()
    eligible = eligible_matches(matches, policy)

    result = MatchIntegrityValidator().validate(players, eligible)
    if result.has_critical_errors:
        logger.error(f"스탠딩 집계 중단: 무결성 오류 {len(result.errors)}건")
        raise DataIntegrityError(result.errors)

    tallies: Dict[str, PlayerTally] = {p.id: PlayerTally(player=p) for p in players}

    for m in eligible:
        p1 = tallies[m.player1_id]
        p1.matches_played += 1

        if m.is_bye:
            p1.wins += 1
            p1.byes_received += 1
            continue

        p2 = tallies[m.player2_id]
        p2.matches_played += 1
        p1.opponents.append(p2.player_id)
        p2.opponents.append(p1.player_id)

        if m.is_draw:
            p1.draws += 1
            p2.draws += 1
        elif m.winner_id == m.player1_id:
            p1.wins += 1
            p2.losses += 1
        else:
            p2.wins += 1
            p1.losses += 1

        score = parse_game_score(m.result)
        if score:
            p1.game_wins += score[0]
            p1.game_losses += score[1]
            p2.game_wins += score[1]
            p2.game_losses += score[0]

    for t in tallies.values():
        t.match_points = policy.points_for(t.wins, t.draws, t.losses)

    logger.debug(f"집계 완료: 선수 {len(tallies)}명, 경기 {len(eligible)}개")
    return tallies
