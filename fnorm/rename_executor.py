"""
Rename Executor

경로 하나에 대해 정규화된 이름을 계산하고, 필요하면 실제 이름을 변경합니다.

결정(plan)과 실행(apply)이 분리되어 있어 dry-run 미리보기가 가능합니다.

처리 흐름:
    1. 경로 메타데이터 확인 (없으면 NotFound)
    2. 디렉토리 / basename 분리
    3. basename 정규화
    4. 변경 없음 → unchanged
    5. 대상이 다른 항목으로 점유되어 있으면 TargetExists
       (대소문자 전용 변경은 임시 이름도 확인)
    6. 대소문자만 다른 경우 → 임시 이름을 거치는 2단계 rename, 그 외 → 직접 rename
"""
import stat
import threading
from pathlib import Path
from dataclasses import dataclass
from typing import Optional, Union

from fnorm.adapters.filesystem_adapter import LocalFileSystem
from fnorm.errors import FnormError, NotFound, TargetExists, RenameFailed, RestoreFailed
from fnorm.fnorm_logger import FnormLogger
from fnorm.normalizer import normalize
from fnorm.rename_task import (
    RenameTask,
    STATUS_UNCHANGED,
    STATUS_WOULD_RENAME,
    STATUS_RENAMED,
    STATUS_FAILED,
)

# 대소문자 전용 rename에 사용하는 임시 접미사
TEMP_SUFFIX = ".fnorm-tmp"


@dataclass(frozen=True)
class RenamePlan:
    """이름 변경 결정 (파일 시스템 변경 전)"""
    source: Path
    target: Path
    old_name: str
    new_name: str
    is_dir: bool = False
    case_only: bool = False

    @property
    def changed(self) -> bool:
        return self.old_name != self.new_name

    @property
    def temp_path(self) -> Path:
        return self.source.with_name(self.old_name + TEMP_SUFFIX)


def is_case_only_change(old_path: Path, new_path: Path) -> bool:
    """두 경로가 대소문자만 다른지 확인"""
    old, new = str(old_path), str(new_path)
    return old != new and old.casefold() == new.casefold()


class RenameExecutor:
    """정규화 결과를 파일 시스템에 적용"""

    def __init__(
        self,
        filesystem: Optional[LocalFileSystem] = None,
        logger: Optional[FnormLogger] = None
    ):
        """
        Args:
            filesystem: 파일 시스템 어댑터 (없으면 LocalFileSystem)
            logger: 로거 (없으면 파일/콘솔 출력 없는 로거 생성)
        """
        self.filesystem = filesystem or LocalFileSystem()
        self.logger = logger or FnormLogger(console_output=False, file_logging=False)
        # 대상 확인과 rename 사이에 다른 스레드가 끼어들지 않도록 직렬화
        self._rename_lock = threading.Lock()

    def plan(self, path: Union[str, Path]) -> RenamePlan:
        """
        이름 변경 결정 (파일 시스템 변경 없음)

        Args:
            path: 처리할 경로

        Returns:
            RenamePlan

        Raises:
            NotFound: 경로를 확인할 수 없을 때
            TargetExists: 대상(대소문자 전용 변경이면 임시 이름 포함)이 다른 항목으로 점유되어 있을 때
        """
        source = Path(path)
        try:
            info = self.filesystem.stat(source)
        except OSError as e:
            raise NotFound(source, e)

        old_name = source.name
        if old_name in ('', '.', '..'):
            raise NotFound(source, reason="invalid filename")

        new_name = normalize(old_name)
        target = source.parent / new_name

        plan = RenamePlan(
            source=source,
            target=target,
            old_name=old_name,
            new_name=new_name,
            is_dir=stat.S_ISDIR(info.st_mode),
            case_only=is_case_only_change(source, target)
        )

        if plan.changed:
            self._ensure_target_free(plan)

        return plan

    def apply(self, plan: RenamePlan) -> RenamePlan:
        """
        결정된 이름 변경을 실제로 수행

        Raises:
            TargetExists: 대상이 그 사이 생성된 경우
            RenameFailed: rename 실패
            RestoreFailed: 2단계 rename 실패 후 복구도 실패
        """
        if not plan.changed:
            return plan

        with self._rename_lock:
            self._ensure_target_free(plan)
            if plan.case_only:
                self._rename_case_only(plan)
            else:
                error = self._try_rename(plan.source, plan.target)
                if error is not None:
                    raise RenameFailed(plan.source, plan.target, error)

        self.logger.debug(f"rename: {plan.source} → {plan.target}")
        return plan

    def process_path(self, path: Union[str, Path], dry_run: bool = False) -> RenameTask:
        """
        경로 하나를 처리하고 결과를 반환 (FnormError는 결과 값으로 변환)

        Args:
            path: 처리할 경로
            dry_run: True면 결정만 하고 파일 시스템은 변경하지 않음

        Returns:
            RenameTask (unchanged / would_rename / renamed / failed)
        """
        source = Path(path)
        task = RenameTask(original_path=source, old_name=source.name)

        try:
            plan = self.plan(source)
            task.target_path = plan.target
            task.new_name = plan.new_name
            task.is_dir = plan.is_dir
            task.case_only = plan.case_only

            if not plan.changed:
                task.status = STATUS_UNCHANGED
            elif dry_run:
                task.status = STATUS_WOULD_RENAME
            else:
                self.apply(plan)
                task.status = STATUS_RENAMED
        except FnormError as e:
            task.status = STATUS_FAILED
            task.error_kind = e.kind
            task.error_message = e.message
            if isinstance(e, RestoreFailed):
                task.metadata['temp_path'] = str(e.temp_path)
            self.logger.debug(f"처리 실패: {source} - {e.kind}: {e.message}")

        return task

    def _ensure_target_free(self, plan: RenamePlan):
        """
        대상 이름이 비어 있는지 확인

        대소문자 전용 변경에서는 대상이 원본과 같은 항목(대소문자 무시 파일 시스템)일 때만
        존재를 허용하고, 임시 이름도 비어 있어야 합니다.

        Raises:
            TargetExists: 대상 또는 임시 이름이 다른 항목으로 점유되어 있을 때
        """
        if self.filesystem.exists(plan.target):
            if not (plan.case_only and self.filesystem.samefile(plan.source, plan.target)):
                raise TargetExists(plan.target)

        if plan.case_only and self.filesystem.exists(plan.temp_path):
            raise TargetExists(plan.temp_path)

    def _try_rename(self, source: Path, target: Path) -> Optional[OSError]:
        """rename 수행 후 실패 시 OSError를 값으로 반환"""
        try:
            self.filesystem.rename(source, target)
        except OSError as e:
            return e
        return None

    def _rename_case_only(self, plan: RenamePlan):
        """
        대소문자 전용 rename: 원본 → 임시 → 대상

        대소문자를 구분하지 않는 파일 시스템에서 rename이 무시되는 것을 피합니다.
        두 번째 단계가 실패하면 임시 → 원본으로 되돌리고, 되돌리기마저 실패하면
        두 오류를 모두 담은 RestoreFailed를 발생시킵니다.
        """
        temp = plan.temp_path

        # 1단계: 원본 → 임시
        error = self._try_rename(plan.source, temp)
        if error is not None:
            raise RenameFailed(plan.source, temp, error)

        # 2단계: 임시 → 대상
        error = self._try_rename(temp, plan.target)
        if error is None:
            return

        # 복구: 임시 → 원본
        restore_error = self._try_rename(temp, plan.source)
        if restore_error is not None:
            self.logger.error(f"복구 실패: {temp} → {plan.source} - {restore_error}")
            raise RestoreFailed(plan.source, plan.target, temp, error, restore_error)

        raise RenameFailed(temp, plan.target, error)
