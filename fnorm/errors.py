"""
fnorm 예외 정의

경로 하나를 처리하는 동안 발생할 수 있는 실패 유형입니다.
RenameExecutor 내부에서 raise되고, process_path 경계에서 RenameTask의
오류 결과로 변환됩니다.
"""
from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]


class FnormError(Exception):
    """fnorm 기본 예외"""

    kind = "error"

    def __init__(self, path: PathLike, message: str):
        super().__init__(message)
        self.path = Path(path)
        self.message = message


class NotFound(FnormError):
    """경로를 확인할 수 없음 (stat 실패)"""

    kind = "not_found"

    def __init__(self, path: PathLike, cause: Optional[OSError] = None, reason: str = ""):
        if cause is not None:
            reason = cause.strerror or str(cause)
        super().__init__(path, f"stat {path}: {reason}" if reason else f"stat {path}")
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


class PathTypeRejected(FnormError):
    """호출자 정책으로 거부된 경로 유형 (예: 디렉토리)"""

    kind = "path_type_rejected"

    def __init__(self, path: PathLike, reason: str = "is a directory"):
        super().__init__(path, f"skipping directory {path}: {reason}")
        self.reason = reason


class TargetExists(FnormError):
    """대상 이름에 이미 항목이 존재함"""

    kind = "target_exists"

    def __init__(self, path: PathLike):
        super().__init__(path, f'target file already exists "{Path(path).name}"')


class RenameFailed(FnormError):
    """
    파일 시스템 rename 실패

    원인 OSError는 cause 속성과 __cause__ 양쪽에서 확인할 수 있습니다.
    """

    kind = "rename_failed"

    def __init__(self, source: PathLike, target: PathLike, cause: OSError):
        super().__init__(source, f'failed to rename "{source}" to "{target}": {cause}')
        self.target = Path(target)
        self.cause = cause
        self.__cause__ = cause


class RestoreFailed(FnormError):
    """
    대소문자 전용 2단계 rename의 두 번째 단계 실패 + 원래 이름 복구 실패

    두 오류를 모두 보존합니다.

    Attributes:
        temp_path: 파일이 남아 있는 임시 경로
        rename_error: 임시 이름 → 대상 이름 rename 오류
        restore_error: 임시 이름 → 원래 이름 복구 오류
    """

    kind = "restore_failed"

    def __init__(
        self,
        source: PathLike,
        target: PathLike,
        temp_path: PathLike,
        rename_error: OSError,
        restore_error: OSError
    ):
        super().__init__(
            source,
            f'failed to rename to "{target}" and failed to restore original: '
            f'{rename_error} (restore error: {restore_error})'
        )
        self.target = Path(target)
        self.temp_path = Path(temp_path)
        self.rename_error = rename_error
        self.restore_error = restore_error
        self.__cause__ = rename_error
