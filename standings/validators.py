"""
경기 데이터 무결성 검증

집계 전에 명단과 집계 대상 경기를 한 번에 검사하여 모든 문제를 모아서 보고한다.
- CRITICAL: 계산 중단 (DataIntegrityError)
- MEDIUM: 계산은 진행, 경고 로그만
"""
from collections import Counter
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence

from loguru import logger
from pydantic import BaseModel, Field

from .models import Match, MatchStatus, Player


class ValidationSeverity(str, Enum):
    """검증 오류 심각도"""
    CRITICAL = "critical"   # 계산 불가
    MEDIUM = "medium"       # 계산 가능, 경고 표시
    INFO = "info"           # 정보성


class ValidationError(BaseModel):
    """검증 오류"""
    error_type: str = Field(..., description="오류 유형")
    severity: ValidationSeverity = Field(..., description="심각도")
    message: str = Field(..., description="오류 메시지")
    match_id: Optional[str] = Field(None, description="관련 경기 ID")
    player_id: Optional[str] = Field(None, description="관련 선수 ID")
    value: Optional[Any] = Field(None, description="문제가 된 값")


class ValidationResult(BaseModel):
    """검증 결과"""
    is_valid: bool = Field(default=True, description="최종 유효성")
    errors: List[ValidationError] = Field(default_factory=list)
    warnings: List[ValidationError] = Field(default_factory=list)
    checked_matches: int = Field(default=0, description="검사한 경기 수")
    validated_at: datetime = Field(default_factory=datetime.now)

    @property
    def has_critical_errors(self) -> bool:
        return any(e.severity == ValidationSeverity.CRITICAL for e in self.errors)


class MatchIntegrityValidator:
    """
    명단 + 집계 대상 경기 무결성 검증

    - 명단 선수 ID 중복
    - 경기 ID 중복
    - 명단에 없는 선수 참조
    - 자기 자신과의 대진
    - 부전승 상태인데 상대가 있는 경기
    - 참가자가 아닌 승자
    - 기권(drop) 라운드 이후의 완료 경기 (경고)
    """

    def validate(self, players: Sequence[Player], matches: Iterable[Match]) -> ValidationResult:
        errors: List[ValidationError] = []
        warnings: List[ValidationError] = []

        roster: Dict[str, Player] = {}
        for player_id, count in Counter(p.id for p in players).items():
            if count > 1:
                errors.append(ValidationError(
                    error_type="DUPLICATE_PLAYER_ID",
                    severity=ValidationSeverity.CRITICAL,
                    message=f"명단에 같은 선수 ID가 {count}번 있습니다: {player_id}",
                    player_id=player_id,
                ))
        for p in players:
            roster.setdefault(p.id, p)

        matches = list(matches)
        for match_id, count in Counter(m.id for m in matches).items():
            if count > 1:
                errors.append(ValidationError(
                    error_type="DUPLICATE_MATCH_ID",
                    severity=ValidationSeverity.CRITICAL,
                    message=f"같은 경기 ID가 {count}번 있습니다: {match_id}",
                    match_id=match_id,
                ))

        for m in matches:
            errors.extend(self._check_match(m, roster))
            warnings.extend(self._check_drop_round(m, roster))

        for w in warnings:
            logger.warning(w.message)

        return ValidationResult(
            is_valid=not errors,
            errors=errors,
            warnings=warnings,
            checked_matches=len(matches),
        )

    def _check_match(self, m: Match, roster: Dict[str, Player]) -> List[ValidationError]:
        errors: List[ValidationError] = []

        if not m.player1_id:
            errors.append(ValidationError(
                error_type="MISSING_PLAYER1",
                severity=ValidationSeverity.CRITICAL,
                message=f"경기 {m.id}에 player1이 없습니다",
                match_id=m.id,
            ))
            return errors

        for pid in m.participants:
            if pid not in roster:
                errors.append(ValidationError(
                    error_type="UNKNOWN_PLAYER",
                    severity=ValidationSeverity.CRITICAL,
                    message=f"경기 {m.id}의 선수 {pid}가 명단에 없습니다",
                    match_id=m.id,
                    player_id=pid,
                ))

        if m.player2_id is not None and m.player2_id == m.player1_id:
            errors.append(ValidationError(
                error_type="SELF_PAIRING",
                severity=ValidationSeverity.CRITICAL,
                message=f"경기 {m.id}: 선수 {m.player1_id}가 자기 자신과 대진되었습니다",
                match_id=m.id,
                player_id=m.player1_id,
            ))

        if m.status == MatchStatus.BYE and m.player2_id is not None:
            errors.append(ValidationError(
                error_type="BYE_WITH_OPPONENT",
                severity=ValidationSeverity.CRITICAL,
                message=f"경기 {m.id}: 부전승 상태인데 상대 선수 {m.player2_id}가 있습니다",
                match_id=m.id,
                player_id=m.player2_id,
            ))

        if m.winner_id is not None and m.winner_id not in m.participants:
            errors.append(ValidationError(
                error_type="WINNER_NOT_PARTICIPANT",
                severity=ValidationSeverity.CRITICAL,
                message=f"경기 {m.id}: 승자 {m.winner_id}가 경기 참가자가 아닙니다",
                match_id=m.id,
                player_id=m.winner_id,
                value=m.winner_id,
            ))

        return errors

    def _check_drop_round(self, m: Match, roster: Dict[str, Player]) -> List[ValidationError]:
        warnings: List[ValidationError] = []
        for pid in m.participants:
            player = roster.get(pid)
            if player is None or player.dropped_at_round is None:
                continue
            if m.round_number > player.dropped_at_round:
                warnings.append(ValidationError(
                    error_type="MATCH_AFTER_DROP",
                    severity=ValidationSeverity.MEDIUM,
                    message=(
                        f"경기 {m.id}: {player.name}({pid})는 {player.dropped_at_round}라운드에 "
                        f"기권했지만 {m.round_number}라운드 경기가 있습니다"
                    ),
                    match_id=m.id,
                    player_id=pid,
                    value=m.round_number,
                ))
        return warnings
