# fnorm Package
from fnorm.normalizer import normalize
from fnorm.rename_task import RenameTask
from fnorm.rename_executor import RenameExecutor, RenamePlan
from fnorm.rename_orchestrator import RenameOrchestrator, BatchResult
from fnorm.fnorm_logger import FnormLogger
from fnorm.errors import (
    FnormError,
    NotFound,
    PathTypeRejected,
    TargetExists,
    RenameFailed,
    RestoreFailed,
)
from fnorm.version import __version__

__all__ = [
    'normalize',
    'RenameTask',
    'RenameExecutor',
    'RenamePlan',
    'RenameOrchestrator',
    'BatchResult',
    'FnormLogger',
    'FnormError',
    'NotFound',
    'PathTypeRejected',
    'TargetExists',
    'RenameFailed',
    'RestoreFailed',
    '__version__',
]
