"""
FnormLogger 로깅 모듈

이름 변경 작업 중 발생하는 이벤트를 기록합니다.
콘솔과 파일 출력을 동시에 지원하며, 로그 파일 로테이션을 제공합니다.
"""
import logging
import sys
from pathlib import Path
from datetime import datetime
from logging.handlers import RotatingFileHandler
from typing import Optional


# 로그 파일 기본 설정
DEFAULT_LOG_DIR = Path("logs")
DEFAULT_LOG_FILENAME = "fnorm.log"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_BACKUP_COUNT = 5


class FnormLogger:
    """fnorm 전용 로거 클래스"""

    def __init__(
        self,
        log_level: str = "INFO",
        log_dir: Optional[Path] = None,
        log_filename: str = DEFAULT_LOG_FILENAME,
        max_bytes: int = DEFAULT_MAX_BYTES,
        backup_count: int = DEFAULT_BACKUP_COUNT,
        console_output: bool = True,
        file_logging: bool = True
    ):
        """
        FnormLogger 초기화

        Args:
            log_level: 로그 레벨 (DEBUG, INFO, WARNING, ERROR)
            log_dir: 로그 파일 저장 디렉토리
            log_filename: 요약 로그 파일명
            max_bytes: 로그 파일 최대 크기 (기본 10MB)
            backup_count: 백업 파일 개수
            console_output: 콘솔 출력 여부
            file_logging: 파일 출력 여부 (False면 log_dir를 만들지 않음)
        """
        self.log_level = self._validate_log_level(log_level)
        self.log_dir = Path(log_dir) if log_dir else DEFAULT_LOG_DIR

        # 1. Summary Log (fnorm.log)
        self.summary_log_filename = log_filename

        # 2. Detail Log (fnorm_YYYYMMDD.log) - Daily rotation
        date_str = datetime.now().strftime("%Y%m%d")
        self.detail_log_filename = f"{Path(log_filename).stem}_{date_str}.log"

        self.max_bytes = max_bytes
        self.backup_count = backup_count
        self.console_output = console_output
        self.file_logging = file_logging

        self._logger = self._setup_logger()

    def _validate_log_level(self, level: str) -> str:
        """로그 레벨 유효성 검증"""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR"}
        level_upper = str(level).upper()
        return level_upper if level_upper in valid_levels else "INFO"

    def _get_log_level_int(self) -> int:
        """문자열 로그 레벨을 logging 모듈 상수로 변환"""
        level_map = {
            "DEBUG": logging.DEBUG,
            "INFO": logging.INFO,
            "WARNING": logging.WARNING,
            "ERROR": logging.ERROR
        }
        return level_map.get(self.log_level, logging.INFO)

    def _setup_logger(self) -> logging.Logger:
        """로거 설정 및 핸들러 추가"""
        # 인스턴스마다 고유한 로거 이름 (테스트 시 충돌 방지)
        logger = logging.getLogger(f"fnorm_{id(self)}")
        # 모든 로그가 핸들러에 도달하도록 DEBUG로 두고 핸들러별로 필터링
        logger.setLevel(logging.DEBUG)
        logger.propagate = False

        formatter = logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

        if self.file_logging:
            # Summary: INFO 고정, Detail: DEBUG 고정
            self._add_file_handler(logger, formatter, self.summary_log_filename, logging.INFO)
            self._add_file_handler(logger, formatter, self.detail_log_filename, logging.DEBUG)

        if self.console_output:
            self._setup_console_handler(logger, formatter)

        if not logger.handlers:
            logger.addHandler(logging.NullHandler())

        return logger

    def _add_file_handler(self, logger: logging.Logger, formatter: logging.Formatter, filename: str, level: int):
        """파일 핸들러 추가 (공통 메서드)"""
        self.log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            filename=self.log_dir / filename,
            maxBytes=self.max_bytes,
            backupCount=self.backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    def _setup_console_handler(self, logger: logging.Logger, formatter: logging.Formatter):
        """콘솔 핸들러 설정 (stdout은 경로별 결과 메시지용이므로 stderr 사용)"""
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(self._get_log_level_int())
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    @property
    def log_file_path(self) -> Path:
        """현재 상세 로그 파일 경로 반환"""
        return self.log_dir / self.detail_log_filename

    def debug(self, message: str):
        self._logger.debug(message)

    def info(self, message: str):
        self._logger.info(message)

    def warning(self, message: str):
        self._logger.warning(message)

    def error(self, message: str, exc_info: bool = True):
        """
        ERROR 레벨 로그

        Args:
            message: 에러 메시지
            exc_info: 예외 처리 중이면 스택 트레이스 포함 (기본 True)
        """
        self._logger.error(message, exc_info=exc_info and sys.exc_info()[0] is not None)

    def log_task_start(self, task_name: str, file_path: str):
        self.debug(f"[START] {task_name}: {file_path}")

    def log_task_complete(self, task_name: str, file_path: str):
        self.info(f"[COMPLETE] {task_name}: {file_path}")

    def log_task_skip(self, task_name: str, file_path: str, reason: str):
        self.warning(f"[SKIP] {task_name}: {file_path} - {reason}")

    def log_task_error(self, task_name: str, file_path: str, error: Exception):
        """태스크 에러 로그 (스택 트레이스 포함)"""
        self.error(f"[ERROR] {task_name}: {file_path} - {type(error).__name__}: {error}")

    def log_batch_start(self, total_paths: int, dry_run: bool):
        """일괄 처리 시작 로그"""
        self.info(f"{'='*60}")
        self.info(f"Batch started ({'dry-run' if dry_run else 'apply'})")
        self.info(f"Total paths to process: {total_paths}")
        self.info(f"{'='*60}")

    def log_batch_complete(self, renamed: int, unchanged: int, failed: int):
        """일괄 처리 완료 로그"""
        self.info(f"{'='*60}")
        self.info("Batch completed")
        self.info(f"  Renamed: {renamed}")
        self.info(f"  Unchanged: {unchanged}")
        self.info(f"  Failed: {failed}")
        self.info(f"{'='*60}")

    def close(self):
        """로거 핸들러 정리"""
        for handler in self._logger.handlers[:]:
            handler.close()
            self._logger.removeHandler(handler)

