"""
FnormConfig 설정 관리 모듈

일괄 이름 변경 실행에 필요한 설정을 관리합니다.
JSON 파일 또는 환경 변수(.env 포함)에서 로드하고, 잘못된 값은 기본값으로 대체합니다.

기본 설정: --config 파일 > config/fnorm_config.json (존재 시) > 환경 변수(.env 포함)
CLI 인자는 기본 설정 위에 덮어씀
"""
import os
from pathlib import Path
from dataclasses import dataclass
from typing import Set, Dict, Any, Optional, Mapping
import json

from dotenv import load_dotenv


# 유효한 로그 레벨
VALID_LOG_LEVELS: Set[str] = {"DEBUG", "INFO", "WARNING", "ERROR"}

# 기본 설정 파일 경로
DEFAULT_CONFIG_PATH = Path("config/fnorm_config.json")

# 워커 수 상한 (경로별 작업은 파일 시스템 호출 몇 번뿐이라 많이 둘 필요 없음)
MAX_WORKERS = 32

# 환경 변수 이름
ENV_DRY_RUN = "FNORM_DRY_RUN"
ENV_ALLOW_DIRS = "FNORM_ALLOW_DIRS"
ENV_WORKERS = "FNORM_WORKERS"
ENV_LOG_LEVEL = "FNORM_LOG_LEVEL"
ENV_LOG_DIR = "FNORM_LOG_DIR"

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class FnormConfig:
    """fnorm 설정 데이터클래스"""

    dry_run: bool = False
    allow_directories: bool = False
    workers: int = 1
    log_level: str = "INFO"
    log_dir: str = ""          # 비어 있으면 파일 로그 비활성화
    mapping_csv: str = ""      # 비어 있으면 매핑 CSV 미생성

    def __post_init__(self):
        """초기화 후 유효성 검증 및 기본값 적용"""
        self._validate_and_fix()

    def _validate_and_fix(self):
        """잘못된 값을 기본값으로 대체"""
        if isinstance(self.log_level, str):
            self.log_level = self.log_level.upper()
        if self.log_level not in VALID_LOG_LEVELS:
            self.log_level = "INFO"

        # workers: 1 이상 MAX_WORKERS 이하 정수 (bool 제외)
        if isinstance(self.workers, bool) or not isinstance(self.workers, int) or self.workers < 1:
            self.workers = 1
        elif self.workers > MAX_WORKERS:
            self.workers = MAX_WORKERS

        if not isinstance(self.dry_run, bool):
            self.dry_run = False

        if not isinstance(self.allow_directories, bool):
            self.allow_directories = False

        if not isinstance(self.log_dir, str):
            self.log_dir = ""

        if not isinstance(self.mapping_csv, str):
            self.mapping_csv = ""

    def to_dict(self) -> Dict[str, Any]:
        """JSON 직렬화를 위한 딕셔너리 변환"""
        return {
            'dry_run': self.dry_run,
            'allow_directories': self.allow_directories,
            'workers': self.workers,
            'log_level': self.log_level,
            'log_dir': self.log_dir,
            'mapping_csv': self.mapping_csv
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FnormConfig':
        """딕셔너리에서 FnormConfig 복원 (안전한 기본값 적용)"""
        return cls(
            dry_run=data.get('dry_run', False),
            allow_directories=data.get('allow_directories', False),
            workers=data.get('workers', 1),
            log_level=data.get('log_level', 'INFO'),
            log_dir=data.get('log_dir', ''),
            mapping_csv=data.get('mapping_csv', '')
        )

    def to_json(self, indent: int = 2) -> str:
        """JSON 문자열로 직렬화"""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)

    @classmethod
    def from_json(cls, json_str: str) -> 'FnormConfig':
        """JSON 문자열에서 FnormConfig 복원"""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError:
            # JSON 파싱 실패 시 기본 설정 반환
            return cls()
        if not isinstance(data, dict):
            return cls()
        return cls.from_dict(data)

    def save(self, file_path: Path) -> None:
        """설정을 JSON 파일로 저장"""
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, 'w', encoding='utf-8') as f:
            f.write(self.to_json())

    @classmethod
    def load(cls, file_path: Path) -> 'FnormConfig':
        """JSON 파일에서 설정 로드 (파일 없으면 기본값)"""
        file_path = Path(file_path)
        if not file_path.exists():
            return cls()

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                return cls.from_json(f.read())
        except (IOError, UnicodeDecodeError):
            return cls()

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        dotenv_path: Optional[Path] = None
    ) -> 'FnormConfig':
        """
        환경 변수에서 설정 로드

        environ을 넘기지 않으면 .env 파일을 먼저 로드한 뒤 os.environ을 사용합니다.
        (이미 설정된 시스템 변수는 .env가 덮어쓰지 않음)

        Args:
            environ: 환경 변수 매핑 (테스트용)
            dotenv_path: .env 파일 경로 (없으면 현재 디렉토리부터 탐색)

        Returns:
            FnormConfig
        """
        if environ is None:
            load_dotenv(dotenv_path=dotenv_path)
            environ = os.environ

        def _flag(name: str) -> bool:
            return environ.get(name, "").strip().lower() in _TRUE_VALUES

        try:
            workers = int(environ.get(ENV_WORKERS, "1"))
        except ValueError:
            workers = 1

        return cls(
            dry_run=_flag(ENV_DRY_RUN),
            allow_directories=_flag(ENV_ALLOW_DIRS),
            workers=workers,
            log_level=environ.get(ENV_LOG_LEVEL, "INFO"),
            log_dir=environ.get(ENV_LOG_DIR, "")
        )

    @property
    def log_path(self) -> Optional[Path]:
        """log_dir을 Path 객체로 반환"""
        return Path(self.log_dir) if self.log_dir else None

    @property
    def mapping_csv_path(self) -> Optional[Path]:
        """mapping_csv를 Path 객체로 반환"""
        return Path(self.mapping_csv) if self.mapping_csv else None
