"""
Rename Orchestrator

명령행으로 받은 경로 목록을 순서대로 처리하는 일괄 실행 컨트롤러입니다.

핵심 기능:
- 결함 격리: 경로 하나의 실패가 나머지 경로 처리를 중단시키지 않음
- 디렉토리 정책: allow_directories가 꺼져 있으면 디렉토리 인자를 거부
- Dry-run 모드: 파일 시스템 변경 없이 미리보기
- 워커 풀: workers > 1이면 스레드 풀로 병렬 처리 (결과는 입력 순서 유지)
- 매핑 CSV 생성
"""
import csv
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Union

from fnorm.config import FnormConfig
from fnorm.errors import PathTypeRejected
from fnorm.fnorm_logger import FnormLogger
from fnorm.rename_executor import RenameExecutor
from fnorm.rename_task import (
    RenameTask,
    STATUS_UNCHANGED,
    STATUS_WOULD_RENAME,
    STATUS_RENAMED,
    STATUS_FAILED,
)


@dataclass
class BatchResult:
    """일괄 처리 결과"""
    total_paths: int = 0
    unchanged: int = 0
    would_rename: int = 0
    renamed: int = 0
    failed: int = 0
    tasks: List[RenameTask] = field(default_factory=list)
    mapping_csv_path: Optional[Path] = None
    log_file_path: Optional[Path] = None
    errors: List[str] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        """오류가 하나라도 있으면 1"""
        return 1 if self.failed > 0 else 0

    def to_dict(self):
        """결과를 딕셔너리로 변환"""
        return {
            'total_paths': self.total_paths,
            'unchanged': self.unchanged,
            'would_rename': self.would_rename,
            'renamed': self.renamed,
            'failed': self.failed,
            'mapping_csv_path': str(self.mapping_csv_path) if self.mapping_csv_path else None,
            'log_file_path': str(self.log_file_path) if self.log_file_path else None,
            'errors': self.errors
        }


class RenameOrchestrator:
    """경로 목록 일괄 정규화 컨트롤러"""

    # Task callback 타입: 경로 하나 처리가 끝날 때마다 호출 (task) -> None
    TaskCallback = Optional[Callable[[RenameTask], None]]

    def __init__(
        self,
        config: FnormConfig,
        logger: Optional[FnormLogger] = None,
        executor: Optional[RenameExecutor] = None,
        task_callback: TaskCallback = None
    ):
        """
        Args:
            config: fnorm 설정
            logger: 로거 (없으면 설정 기반 로거 생성)
            executor: RenameExecutor (없으면 로컬 파일 시스템용 생성)
            task_callback: 경로별 처리 완료 콜백 함수
        """
        self.config = config
        self.logger = logger or FnormLogger(
            log_level=config.log_level,
            log_dir=config.log_path,
            console_output=False,
            file_logging=config.log_path is not None
        )
        self.executor = executor or RenameExecutor(logger=self.logger)
        self.task_callback = task_callback

    def run(self, paths: Iterable[Union[str, Path]], dry_run: Optional[bool] = None) -> BatchResult:
        """
        경로 목록 처리

        Args:
            paths: 처리할 경로 목록
            dry_run: None이면 config.dry_run 사용

        Returns:
            BatchResult: 실행 결과
        """
        dry_run = self.config.dry_run if dry_run is None else dry_run
        paths = [Path(p) for p in paths]
        result = BatchResult(total_paths=len(paths))

        self.logger.log_batch_start(result.total_paths, dry_run)

        if self.config.workers > 1 and len(paths) > 1:
            # map()은 입력 순서대로 결과를 돌려줌
            with ThreadPoolExecutor(max_workers=self.config.workers) as pool:
                tasks = list(pool.map(lambda p: self._process_one(p, dry_run), paths))
        else:
            tasks = [self._process_one(path, dry_run) for path in paths]

        for task in tasks:
            self._tally(result, task)

        if self.config.mapping_csv_path:
            result.mapping_csv_path = self._generate_mapping_csv(result.tasks, self.config.mapping_csv_path)

        if self.logger.file_logging:
            result.log_file_path = self.logger.log_file_path

        self.logger.log_batch_complete(
            result.renamed + result.would_rename, result.unchanged, result.failed
        )
        return result

    def _process_one(self, path: Path, dry_run: bool) -> RenameTask:
        """
        경로 하나 처리 (예상하지 못한 예외도 결과 값으로 변환)

        Args:
            path: 처리할 경로
            dry_run: dry-run 모드 여부

        Returns:
            RenameTask
        """
        self.logger.log_task_start("normalize", str(path))

        try:
            if not self.config.allow_directories and self.executor.filesystem.is_dir(path):
                task = self._rejected(path, PathTypeRejected(path))
            else:
                task = self.executor.process_path(path, dry_run=dry_run)
        except Exception as e:
            # 결함 격리: 개별 경로 에러 시 해당 경로만 실패 처리
            self.logger.log_task_error("normalize", str(path), e)
            task = RenameTask(
                original_path=path,
                old_name=path.name,
                status=STATUS_FAILED,
                error_kind="unexpected",
                error_message=f"{type(e).__name__}: {e}"
            )

        self._log_outcome(task)

        if self.task_callback:
            self.task_callback(task)

        return task

    def _rejected(self, path: Path, error: PathTypeRejected) -> RenameTask:
        return RenameTask(
            original_path=path,
            old_name=path.name,
            status=STATUS_FAILED,
            is_dir=True,
            error_kind=error.kind,
            error_message=error.message
        )

    def _log_outcome(self, task: RenameTask):
        if task.status == STATUS_FAILED:
            self.logger.log_task_skip("normalize", str(task.original_path), task.error_message)
        elif task.status == STATUS_UNCHANGED:
            self.logger.debug(f"변경 없음: {task.original_path}")
        else:
            self.logger.log_task_complete("normalize", f"{task.old_name} → {task.new_name}")

    def _tally(self, result: BatchResult, task: RenameTask):
        """결과 집계"""
        if task.status == STATUS_UNCHANGED:
            result.unchanged += 1
        elif task.status == STATUS_WOULD_RENAME:
            result.would_rename += 1
        elif task.status == STATUS_RENAMED:
            result.renamed += 1
        else:
            result.failed += 1
            result.errors.append(f"{task.original_path}: {task.error_message}")
        result.tasks.append(task)

    def _generate_mapping_csv(self, tasks: List[RenameTask], csv_path: Path) -> Optional[Path]:
        """
        매핑 CSV 생성

        Args:
            tasks: RenameTask 목록
            csv_path: 저장 경로

        Returns:
            생성된 CSV 파일 경로 (실패 시 None)
        """
        try:
            csv_path.parent.mkdir(parents=True, exist_ok=True)
            with open(csv_path, 'w', newline='', encoding='utf-8-sig') as f:
                writer = csv.writer(f)
                writer.writerow(['original_path', 'new_path', 'status', 'error_message'])
                for task in tasks:
                    writer.writerow([
                        str(task.original_path),
                        str(task.target_path) if task.target_path else '',
                        task.status,
                        task.error_message
                    ])

            self.logger.info(f"매핑 CSV 생성: {csv_path}")
            return csv_path

        except OSError as e:
            self.logger.error(f"CSV 생성 실패: {e}")
            return None
