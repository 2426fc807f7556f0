"""
스탠딩 엔진

compute_standings(players, matches) -> 순위표

상태가 없는 순수 함수. 경기 데이터가 바뀌면 처음부터 다시 계산한다.
대회/워크스페이스 범위 지정은 호출자 책임 (엔진은 tournament_id로 필터링하지 않음).
"""
import threading
from collections import OrderedDict
from typing import Iterable, List, Optional, Sequence, Tuple

from loguru import logger

from .builder import build_tallies, eligible_matches
from .config import ScoringPolicy, get_scoring_policy
from .models import Match, Player, Standing
from .sorter import rank_standings
from .tiebreak import calculate_tiebreakers


def compute_standings(
    players: Sequence[Player],
    matches: Iterable[Match],
    policy: Optional[ScoringPolicy] = None,
) -> List[Standing]:
    """
    순위표 계산

    Args:
        players: 대회 전체 명단 (기권 선수 포함)
        matches: 대회 경기 목록 (completed/bye만 집계)
        policy: 승점 정책 (None이면 환경설정 기본값)

    Returns:
        1위부터 정렬된 Standing 목록 (길이 == 명단 인원)

    Raises:
        DataIntegrityError: 무결성 오류가 하나라도 있으면 전체 중단
    """
    policy = policy or get_scoring_policy()
    tallies = build_tallies(players, matches, policy)
    tiebreakers = calculate_tiebreakers(tallies, policy)
    standings = rank_standings(tallies, tiebreakers)

    if standings:
        leader = standings[0]
        logger.info(
            f"스탠딩 계산 완료: {len(standings)}명, "
            f"1위 {leader.name} ({leader.match_points}점)"
        )
    else:
        logger.info("스탠딩 계산 완료: 명단 없음")
    return standings


class StandingsEngine:
    """
    정책을 고정한 스탠딩 계산기

    memoize=True이면 입력(명단 + 집계 대상 경기 + 정책)이 같을 때 이전 결과를 재사용한다.
    입력 순서는 정규화하므로 순서만 다른 입력도 같은 캐시 항목을 쓴다.
    """

    def __init__(
        self,
        policy: Optional[ScoringPolicy] = None,
        memoize: bool = False,
        max_cache_size: int = 128,
    ):
        self.policy = policy or get_scoring_policy()
        self.memoize = memoize
        self.max_cache_size = max_cache_size
        self._cache: "OrderedDict[Tuple, Tuple[Standing, ...]]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def _cache_key(self, players: Sequence[Player], matches: Iterable[Match]) -> Tuple:
        return (
            self.policy.cache_key(),
            tuple(sorted(players, key=lambda p: (p.id, p.name))),
            tuple(eligible_matches(matches, self.policy)),
        )

    def compute(self, players: Sequence[Player], matches: Iterable[Match]) -> List[Standing]:
        if not self.memoize:
            return compute_standings(players, matches, self.policy)

        matches = list(matches)
        key = self._cache_key(players, matches)
        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                self._cache.move_to_end(key)
                self.hits += 1
                logger.debug(f"스탠딩 캐시 적중 (hits={self.hits})")
                return list(cached)

        standings = compute_standings(players, matches, self.policy)

        with self._lock:
            self.misses += 1
            self._cache[key] = tuple(standings)
            while len(self._cache) > self.max_cache_size:
                self._cache.popitem(last=False)
        return standings

    def clear_cache(self):
        with self._lock:
            self._cache.clear()
            self.hits = 0
            self.misses = 0
