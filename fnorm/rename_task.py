"""
RenameTask 데이터 모델

경로 하나를 처리한 결과를 담는 데이터 객체입니다.
RenameExecutor가 생성하고, RenameOrchestrator와 CLI가 출력/집계에 사용합니다.

상태(status):
    unchanged    - 이미 정규화된 이름 (파일 시스템 변경 없음)
    would_rename - dry-run에서 이름 변경 예정
    renamed      - 이름 변경 완료
    failed       - 오류 (error_kind, error_message 참고)
"""
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
import json

STATUS_UNCHANGED = "unchanged"
STATUS_WOULD_RENAME = "would_rename"
STATUS_RENAMED = "renamed"
STATUS_FAILED = "failed"


@dataclass
class RenameTask:
    """경로 하나의 처리 결과"""

    # 경로
    original_path: Path               # 입력 경로
    target_path: Optional[Path] = None  # 정규화된 대상 경로

    # 이름
    old_name: str = ""                # 원본 basename
    new_name: str = ""                # 정규화된 basename

    # 처리 상태
    status: str = "pending"
    is_dir: bool = False
    case_only: bool = False           # 대소문자만 다른 변경 여부
    error_kind: str = ""              # FnormError.kind
    error_message: str = ""

    # 메타데이터
    metadata: Dict = field(default_factory=dict)

    @property
    def is_error(self) -> bool:
        return self.status == STATUS_FAILED

    def describe(self) -> str:
        """사용자 표시용 한 줄 메시지"""
        if self.status == STATUS_UNCHANGED:
            return f"✓ {self.old_name} (no changes needed)"
        if self.status == STATUS_WOULD_RENAME:
            return f"Would rename: {self.old_name} -> {self.new_name}"
        if self.status == STATUS_RENAMED:
            return f"Renamed: {self.old_name} -> {self.new_name}"
        return f"Error processing {self.original_path}: {self.error_message}"

    def to_dict(self) -> Dict[str, Any]:
        """JSON 직렬화를 위한 딕셔너리 변환"""
        return {
            'original_path': str(self.original_path),
            'target_path': str(self.target_path) if self.target_path else None,
            'old_name': self.old_name,
            'new_name': self.new_name,
            'status': self.status,
            'is_dir': self.is_dir,
            'case_only': self.case_only,
            'error_kind': self.error_kind,
            'error_message': self.error_message,
            'metadata': self.metadata
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RenameTask':
        """딕셔너리에서 RenameTask 복원"""
        target = data.get('target_path')
        return cls(
            original_path=Path(data['original_path']),
            target_path=Path(target) if target else None,
            old_name=data.get('old_name', ''),
            new_name=data.get('new_name', ''),
            status=data.get('status', 'pending'),
            is_dir=data.get('is_dir', False),
            case_only=data.get('case_only', False),
            error_kind=data.get('error_kind', ''),
            error_message=data.get('error_message', ''),
            metadata=data.get('metadata', {})
        )

    def to_json(self) -> str:
        """JSON 문자열로 직렬화"""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2)

    @classmethod
    def from_json(cls, json_str: str) -> 'RenameTask':
        """JSON 문자열에서 RenameTask 복원"""
        return cls.from_dict(json.loads(json_str))
