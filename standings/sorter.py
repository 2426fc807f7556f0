"""
Ranking Sorter

정렬 기준:
1. 승점 (내림차순)
2. OMW% (내림차순)
3. OOMW% (내림차순)
4. 이름 (오름차순)
5. 선수 ID (오름차순) - 완전한 순서 보장
"""
from fractions import Fraction
from typing import Dict, List, Tuple

from .models import PlayerTally, Standing, TieBreakers


def ranking_key(tally: PlayerTally, tb: TieBreakers) -> Tuple[int, Fraction, Fraction, str, str]:
    """정렬 키 (오름차순 정렬 시 1위가 맨 앞)"""
    return (
        -tally.match_points,
        -tb.opponent_match_win_percentage,
        -tb.opponent_opponent_match_win_percentage,
        tally.player.name,
        tally.player_id,
    )


def rank_standings(
    tallies: Dict[str, PlayerTally],
    tiebreakers: Dict[str, TieBreakers],
) -> List[Standing]:
    """
    순위 부여

    기권(dropped) 선수도 불이익 없이 순위에 포함하며 dropped 정보는 표시용으로만 전달한다.
    """
    ordered = sorted(
        tallies.values(),
        key=lambda t: ranking_key(t, tiebreakers[t.player_id]),
    )

    standings: List[Standing] = []
    for rank, t in enumerate(ordered, 1):
        tb = tiebreakers[t.player_id]
        standings.append(Standing(
            player_id=t.player_id,
            name=t.player.name,
            rank=rank,
            wins=t.wins,
            losses=t.losses,
            draws=t.draws,
            byes_received=t.byes_received,
            matches_played=t.matches_played,
            match_points=t.match_points,
            match_win_percentage=float(tb.match_win_percentage),
            opponent_match_win_percentage=float(tb.opponent_match_win_percentage),
            opponent_opponent_match_win_percentage=float(tb.opponent_opponent_match_win_percentage),
            game_wins=t.game_wins,
            game_losses=t.game_losses,
            dropped=t.player.dropped,
            dropped_at_round=t.player.dropped_at_round,
        ))
    return standings
