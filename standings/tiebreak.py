"""
Tie-Break Calculator

Play! Pokémon Tournament Rules Handbook 5.3 방식의 타이브레이커
- MW%: 승점 / (경기 수 × 승리 승점)
- OMW%: 상대들의 MW% 평균 (각 값은 하한 적용)
- OOMW%: 상대들의 OMW% 평균 (각 값은 하한 적용)

하한은 다른 선수에게 "빌려주는" 값에만 적용한다. 본인 행의 값은 그대로 둔다.
모든 계산은 Fraction으로 수행하여 입력 순서와 무관하게 동일한 결과를 보장한다.
"""
from fractions import Fraction
from typing import Dict, Optional

from loguru import logger

from .config import ScoringPolicy, get_scoring_policy
from .models import PlayerTally, TieBreakers

ZERO = Fraction(0)


def match_win_percentage(tally: PlayerTally, policy: Optional[ScoringPolicy] = None) -> Fraction:
    """본인 MW% (경기가 없으면 0)"""
    policy = policy or get_scoring_policy()
    if tally.matches_played == 0:
        return ZERO
    return Fraction(tally.match_points, tally.matches_played * policy.win_points)


def _floored(value: Fraction, floor: Fraction) -> Fraction:
    return value if value >= floor else floor


def _floored_mean(player: PlayerTally, values: Dict[str, Fraction], floor: Fraction) -> Fraction:
    if not player.opponents:
        return ZERO
    total = sum((_floored(values[opp], floor) for opp in player.opponents), ZERO)
    return total / len(player.opponents)


def opponent_match_win_percentage(
    player: PlayerTally,
    tallies: Dict[str, PlayerTally],
    policy: Optional[ScoringPolicy] = None,
) -> Fraction:
    """OMW% (실제 상대가 없으면 0)"""
    policy = policy or get_scoring_policy()
    mwp = {opp: match_win_percentage(tallies[opp], policy) for opp in set(player.opponents)}
    return _floored_mean(player, mwp, policy.floor)


def opponent_opponent_match_win_percentage(
    player: PlayerTally,
    tallies: Dict[str, PlayerTally],
    policy: Optional[ScoringPolicy] = None,
) -> Fraction:
    """OOMW% (실제 상대가 없으면 0)"""
    policy = policy or get_scoring_policy()
    omw = {
        opp: opponent_match_win_percentage(tallies[opp], tallies, policy)
        for opp in set(player.opponents)
    }
    return _floored_mean(player, omw, policy.floor)


def calculate_tiebreakers(
    tallies: Dict[str, PlayerTally],
    policy: Optional[ScoringPolicy] = None,
) -> Dict[str, TieBreakers]:
    """
    전체 선수 타이브레이커 계산

    MW% → OMW% → OOMW% 순으로 한 번씩만 계산한다.
    """
    policy = policy or get_scoring_policy()
    floor = policy.floor

    mwp = {pid: match_win_percentage(t, policy) for pid, t in tallies.items()}
    omw = {pid: _floored_mean(t, mwp, floor) for pid, t in tallies.items()}
    oomw = {pid: _floored_mean(t, omw, floor) for pid, t in tallies.items()}

    logger.debug(f"타이브레이커 계산 완료: {len(tallies)}명 (하한 {floor})")
    return {
        pid: TieBreakers(
            match_win_percentage=mwp[pid],
            opponent_match_win_percentage=omw[pid],
            opponent_opponent_match_win_percentage=oomw[pid],
        )
        for pid in tallies
    }
