"""
스위스 대회 스탠딩 시스템

경기 기록 → 승점 집계 → OMW%/OOMW% 타이브레이커 → 순위표
"""
from .models import (
    Player,
    Match,
    MatchStatus,
    PlayerTally,
    TieBreakers,
    Standing,
    Pairing,
    SeatAssignment,
)
from .config import ScoringPolicy, get_scoring_policy
from .errors import StandingsError, DataIntegrityError
from .validators import (
    MatchIntegrityValidator,
    ValidationResult,
    ValidationError,
    ValidationSeverity,
)
from .builder import build_tallies, eligible_matches, match_sort_key, parse_game_score
from .tiebreak import (
    match_win_percentage,
    opponent_match_win_percentage,
    opponent_opponent_match_win_percentage,
    calculate_tiebreakers,
)
from .sorter import ranking_key, rank_standings
from .engine import compute_standings, StandingsEngine
from .rounds import calculate_suggested_rounds, assign_match_numbers

__all__ = [
    # Models
    "Player",
    "Match",
    "MatchStatus",
    "PlayerTally",
    "TieBreakers",
    "Standing",
    "Pairing",
    "SeatAssignment",
    # Config
    "ScoringPolicy",
    "get_scoring_policy",
    # Errors
    "StandingsError",
    "DataIntegrityError",
    # Validation
    "MatchIntegrityValidator",
    "ValidationResult",
    "ValidationError",
    "ValidationSeverity",
    # Builder
    "build_tallies",
    "eligible_matches",
    "match_sort_key",
    "parse_game_score",
    # Tie-breakers
    "match_win_percentage",
    "opponent_match_win_percentage",
    "opponent_opponent_match_win_percentage",
    "calculate_tiebreakers",
    # Sorter
    "ranking_key",
    "rank_standings",
    # Engine
    "compute_standings",
    "StandingsEngine",
    # Rounds
    "calculate_suggested_rounds",
    "assign_match_numbers",
]
