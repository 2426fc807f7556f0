"""
라운드 운영 보조 함수

- 참가자 수에 따른 권장 라운드 수
- 대진별 테이블 번호 배정 (고정 좌석 우선)
"""
import math
from typing import Dict, List, Optional, Sequence, Set

from loguru import logger

from .models import Pairing, SeatAssignment

# (최대 인원, 스위스 라운드 수) - Pokémon/MTG 표준 기준
SWISS_ROUND_THRESHOLDS = [
    (8, 3),
    (16, 4),
    (32, 5),
    (64, 6),
    (128, 7),
    (226, 8),
]
SWISS_MAX_ROUNDS = 9

TOURNAMENT_TYPES = ("swiss", "single_elimination")


def calculate_suggested_rounds(player_count: int, tournament_type: str = "swiss") -> int:
    """참가자 수에 따른 권장 라운드 수"""
    if player_count < 2:
        return 0

    if tournament_type == "single_elimination":
        return math.ceil(math.log2(player_count))

    for max_players, rounds in SWISS_ROUND_THRESHOLDS:
        if player_count <= max_players:
            return rounds
    return SWISS_MAX_ROUNDS


def assign_match_numbers(
    pairings: Sequence[Pairing],
    static_seats: Dict[str, int],
) -> List[SeatAssignment]:
    """
    대진별 테이블 번호 배정

    - 고정 좌석 선수는 항상 해당 테이블에서 경기 (부전승 포함)
    - 고정 좌석 선수끼리 만나면 낮은 번호 사용 + 경고
    - 같은 번호를 요구하는 대진이 둘 이상이면 나중 대진을 순차 배정으로 미룸
    - 나머지는 비어 있는 가장 작은 번호부터 순서대로
    """
    result: List[Optional[SeatAssignment]] = [None] * len(pairings)
    taken: Set[int] = set()
    deferred: List[int] = []

    for i, p in enumerate(pairings):
        s1 = static_seats.get(p.player1_id)
        s2 = static_seats.get(p.player2_id) if p.player2_id else None

        if s1 is None and s2 is None:
            deferred.append(i)
            continue

        warning = None
        if s1 is not None and s2 is not None:
            target = min(s1, s2)
            warning = (
                f"좌석 충돌: {p.player1_name} (테이블 {s1}) vs "
                f"{p.player2_name} (테이블 {s2}) - 테이블 {target} 사용"
            )
            logger.warning(warning)
        else:
            target = s1 if s1 is not None else s2

        if target in taken:
            deferred.append(i)
        else:
            taken.add(target)
            result[i] = SeatAssignment(match_number=target, warning=warning)

    next_number = 1
    for i in deferred:
        while next_number in taken:
            next_number += 1
        taken.add(next_number)
        result[i] = SeatAssignment(match_number=next_number)
        next_number += 1

    return result
