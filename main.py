#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
fnorm - CLI Entry Point

파일명을 ASCII 슬러그 형식으로 정규화하는 명령행 도구입니다.
재귀 탐색 없이 인자로 받은 경로만 처리합니다.

사용법:
    python main.py [옵션] FILE [FILE ...]

예시:
    python main.py "My Document.PDF"           # -> my-document.pdf
    python main.py --dry-run *.jpg             # 미리보기
    python main.py --allow-dirs "Old Folder"   # 디렉토리 이름도 정규화
"""
import sys
import os

# 프로젝트 루트를 sys.path에 추가 (절대 import 지원)
_project_root = os.path.dirname(os.path.abspath(__file__))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import argparse
from pathlib import Path
from typing import List, Optional

from fnorm.config import FnormConfig, DEFAULT_CONFIG_PATH
from fnorm.fnorm_logger import FnormLogger
from fnorm.rename_orchestrator import RenameOrchestrator, BatchResult
from fnorm.rename_task import RenameTask, STATUS_FAILED, STATUS_UNCHANGED
from fnorm.version import __version__, get_full_version


def create_parser() -> argparse.ArgumentParser:
    """CLI 인자 파서 생성"""
    parser = argparse.ArgumentParser(
        prog='fnorm',
        description=f'fnorm v{__version__} - Normalize filenames to ASCII-only slug format',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Normalization rules:
  - Spaces become hyphens, names are lowercased
  - Leading/trailing spaces and dots are trimmed
  - Special characters: / -> -or-, & -> -and-, @ -> -at-, % -> -percent
  - Accented letters and typographic symbols simplified to ASCII
  - Forbidden characters replaced with hyphens, runs of hyphens collapsed
  - Leading hyphens trimmed, extensions lowercased

Examples:
  %(prog)s "My Document.PDF"              # -> my-document.pdf
  %(prog)s "Photo & Video.mov"            # -> photo-and-video.mov
  %(prog)s "tcp/udp guide.txt"            # -> tcp-or-udp-guide.txt
  %(prog)s --dry-run "File With Spaces.txt"
  %(prog)s *.jpg
        """
    )

    parser.add_argument(
        'files',
        nargs='*',
        metavar='FILE',
        help='정규화할 파일 (또는 --allow-dirs 사용 시 디렉토리)'
    )

    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Show what would be renamed without making changes'
    )

    parser.add_argument(
        '--allow-dirs',
        action='store_true',
        help='디렉토리 인자도 이름 정규화 (기본값: 디렉토리는 건너뜀)'
    )

    parser.add_argument(
        '-w', '--workers',
        type=int,
        default=None,
        help='병렬 처리 워커 수 (기본값: 1)'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default=None,
        help='로그 레벨 설정 (기본값: INFO)'
    )

    parser.add_argument(
        '--log-dir',
        type=str,
        default=None,
        help='로그 파일 저장 폴더 (지정하지 않으면 파일 로그 없음)'
    )

    parser.add_argument(
        '--mapping-csv',
        type=str,
        default=None,
        help='원본 → 변경 이름 매핑 CSV 저장 경로'
    )

    parser.add_argument(
        '--summary',
        action='store_true',
        help='처리 후 결과 요약 출력 (stderr)'
    )

    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help=f'설정 파일 경로 (기본값: {DEFAULT_CONFIG_PATH}, 없으면 환경 변수 사용)'
    )

    parser.add_argument(
        '-v', '--version',
        action='version',
        version=get_full_version(),
        help='Show version information'
    )

    return parser


def load_config(args: argparse.Namespace) -> FnormConfig:
    """
    설정 로드 후 CLI 인자로 오버라이드

    Args:
        args: 파싱된 CLI 인자

    Returns:
        FnormConfig
    """
    if args.config:
        config = FnormConfig.load(Path(args.config))
    elif DEFAULT_CONFIG_PATH.exists():
        config = FnormConfig.load(DEFAULT_CONFIG_PATH)
    else:
        config = FnormConfig.from_env()

    data = config.to_dict()
    if args.dry_run:
        data['dry_run'] = True
    if args.allow_dirs:
        data['allow_directories'] = True
    if args.workers is not None:
        data['workers'] = args.workers
    if args.log_level:
        data['log_level'] = args.log_level
    if args.log_dir:
        data['log_dir'] = args.log_dir
    if args.mapping_csv:
        data['mapping_csv'] = args.mapping_csv

    # from_dict를 거쳐 잘못된 값은 기본값으로 대체
    return FnormConfig.from_dict(data)


def print_task(task: RenameTask, dry_run: bool):
    """경로별 결과 출력"""
    if task.status == STATUS_FAILED:
        print(task.describe(), file=sys.stderr, flush=True)
    elif task.status == STATUS_UNCHANGED:
        # dry-run에서는 변경 예정 항목만 출력
        if not dry_run:
            print(task.describe(), flush=True)
    else:
        print(task.describe(), flush=True)


def print_final_summary(result: BatchResult, dry_run: bool):
    """최종 결과 요약 출력 (stderr)"""
    mode = "미리보기" if dry_run else "실행"
    changed = result.would_rename if dry_run else result.renamed

    print(f"\n{'='*50}", file=sys.stderr)
    print(f"fnorm {mode} 결과", file=sys.stderr)
    print(f"  총 경로 수: {result.total_paths}", file=sys.stderr)
    print(f"  {'변경 예정' if dry_run else '변경 완료'}: {changed}", file=sys.stderr)
    print(f"  변경 없음: {result.unchanged}", file=sys.stderr)
    print(f"  실패:      {result.failed}", file=sys.stderr)

    if result.mapping_csv_path:
        print(f"\n  매핑 파일: {result.mapping_csv_path}", file=sys.stderr)

    if result.log_file_path:
        print(f"  로그 파일: {result.log_file_path}", file=sys.stderr)

    print(f"{'='*50}", file=sys.stderr)


def run(files: List[str], config: FnormConfig) -> BatchResult:
    """일괄 정규화 실행"""
    logger = FnormLogger(
        log_level=config.log_level,
        log_dir=config.log_path,
        console_output=False,  # 경로별 결과는 CLI에서 직접 출력
        file_logging=config.log_path is not None
    )

    orchestrator = RenameOrchestrator(
        config,
        logger,
        task_callback=lambda task: print_task(task, config.dry_run)
    )

    try:
        return orchestrator.run(files)
    finally:
        logger.close()


def main(argv: Optional[List[str]] = None):
    """메인 엔트리포인트"""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.files:
        print("Error: No files specified", file=sys.stderr)
        print("Use -h or --help for usage information", file=sys.stderr)
        sys.exit(1)

    config = load_config(args)

    try:
        result = run(args.files, config)
    except KeyboardInterrupt:
        print("\n\n⚠️  사용자에 의해 중단되었습니다.", file=sys.stderr)
        sys.exit(130)

    if args.summary:
        print_final_summary(result, config.dry_run)

    # 하나라도 실패하면 종료 코드 1
    sys.exit(result.exit_code)


if __name__ == '__main__':
    main()
