"""
스탠딩 엔진 예외
"""
from typing import List, Sequence


class StandingsError(Exception):
    """스탠딩 계산 오류 기본 클래스"""


class DataIntegrityError(StandingsError):
    """
    데이터 무결성 오류

    경기 하나라도 건너뛰면 모든 선수의 OMW%/OOMW%가 바뀌므로
    부분 결과 없이 전체 계산을 중단한다.
    """

    def __init__(self, issues: Sequence = ()):
        self.issues: List = list(issues)
        if self.issues:
            detail = "; ".join(issue.message for issue in self.issues)
        else:
            detail = "알 수 없는 무결성 오류"
        super().__init__(f"데이터 무결성 오류 {len(self.issues)}건: {detail}")
