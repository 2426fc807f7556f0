"""
스위스 대회 스탠딩 계산기 메인

사용법:
    python main.py standings --input data/tournament.json [--output data/standings.json]
    python main.py rounds --players 24 [--type swiss]
"""
import json
import sys
from datetime import datetime
from pathlib import Path
from typing import List

from loguru import logger

from data_pipeline.schemas import StandingsRequest
from standings import DataIntegrityError, Standing, calculate_suggested_rounds, compute_standings
from standings.rounds import TOURNAMENT_TYPES


def setup_logging(level: str = "INFO", log_file: bool = False):
    """로깅 설정"""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level
    )
    if log_file:
        logger.add(
            "logs/standings_{time:YYYY-MM-DD}.log",
            rotation="1 day",
            retention="30 days",
            level="DEBUG"
        )


def load_request(input_file: str) -> StandingsRequest:
    """JSON 파일에서 명단/경기 로드 ({"players": [...], "matches": [...]})"""
    with open(input_file, "r", encoding="utf-8") as f:
        data = json.load(f)
    return StandingsRequest(**data)


def export_standings(standings: List[Standing], output_file: str):
    """순위표를 JSON으로 내보내기"""
    export_data = {
        "meta": {
            "generated_at": datetime.now().isoformat(),
            "total_players": len(standings),
        },
        "standings": [s.to_dict() for s in standings],
    }

    Path(output_file).parent.mkdir(parents=True, exist_ok=True)
    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(export_data, f, ensure_ascii=False, indent=2)

    logger.info(f"순위표 내보내기 완료: {output_file}")


def print_standings(standings: List[Standing], top_n: int = 20):
    """순위표 출력"""
    print(f"\n{'='*72}")
    print(f"{'순위':>4} {'이름':<16} {'승':>3} {'패':>3} {'무':>3} {'승점':>5} {'OMW%':>8} {'OOMW%':>8}  비고")
    print(f"{'-'*72}")

    for s in standings[:top_n]:
        name = s.name if len(s.name) <= 16 else s.name[:14] + ".."
        note = f"기권(R{s.dropped_at_round})" if s.dropped and s.dropped_at_round else ("기권" if s.dropped else "")
        print(
            f"{s.rank:>4} {name:<16} {s.wins:>3} {s.losses:>3} {s.draws:>3} {s.match_points:>5} "
            f"{s.opponent_match_win_percentage:>8.2%} {s.opponent_opponent_match_win_percentage:>8.2%}  {note}"
        )


def main():
    """메인 함수"""
    import argparse

    parser = argparse.ArgumentParser(description="스위스 대회 스탠딩 계산기")
    parser.add_argument("--log-level", default="INFO", help="로그 레벨")
    parser.add_argument("--log-file", action="store_true", help="logs/ 디렉토리에 파일 로그 저장")
    subparsers = parser.add_subparsers(dest="command", required=True)

    standings_parser = subparsers.add_parser("standings", help="순위표 계산")
    standings_parser.add_argument("--input", type=str, required=True, help="명단/경기 JSON 파일")
    standings_parser.add_argument("--output", type=str, help="출력 파일 (생략시 화면 출력)")
    standings_parser.add_argument("--top", type=int, default=20, help="출력할 상위 N명")

    rounds_parser = subparsers.add_parser("rounds", help="권장 라운드 수")
    rounds_parser.add_argument("--players", type=int, required=True, help="참가자 수")
    rounds_parser.add_argument("--type", choices=TOURNAMENT_TYPES, default="swiss", help="대회 방식")

    args = parser.parse_args()
    setup_logging(args.log_level, args.log_file)

    if args.command == "standings":
        request = load_request(args.input)
        players, matches = request.to_models()
        try:
            standings = compute_standings(players, matches)
        except DataIntegrityError as e:
            for issue in e.issues:
                logger.error(f"[{issue.error_type}] {issue.message}")
            sys.exit(1)

        if args.output:
            export_standings(standings, args.output)
        else:
            print_standings(standings, top_n=args.top)

    elif args.command == "rounds":
        rounds = calculate_suggested_rounds(args.players, args.type)
        print(f"참가자 {args.players}명 ({args.type}): 권장 {rounds}라운드")


if __name__ == "__main__":
    main()
