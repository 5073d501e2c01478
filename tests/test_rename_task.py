"""
RenameTask 데이터 모델 테스트
"""
import sys
from pathlib import Path

import pytest

# 프로젝트 루트 경로 추가
sys.path.insert(0, str(Path(__file__).parent.parent))

from fnorm.rename_task import (
    RenameTask,
    STATUS_UNCHANGED,
    STATUS_WOULD_RENAME,
    STATUS_RENAMED,
    STATUS_FAILED,
)


class TestRenameTask:

    @pytest.mark.parametrize("status, expected", [
        (STATUS_UNCHANGED, "✓ Old Name.txt (no changes needed)"),
        (STATUS_WOULD_RENAME, "Would rename: Old Name.txt -> old-name.txt"),
        (STATUS_RENAMED, "Renamed: Old Name.txt -> old-name.txt"),
    ])
    def test_describe(self, status, expected):
        task = RenameTask(
            original_path=Path("/data/Old Name.txt"),
            old_name="Old Name.txt",
            new_name="old-name.txt",
            status=status
        )
        assert task.describe() == expected
        assert not task.is_error

    def test_describe_error(self):
        task = RenameTask(
            original_path=Path("/data/x.txt"),
            status=STATUS_FAILED,
            error_message="stat /data/x.txt: No such file or directory"
        )
        assert task.is_error
        assert task.describe() == "Error processing /data/x.txt: stat /data/x.txt: No such file or directory"

    def test_json_round_trip(self):
        task = RenameTask(
            original_path=Path("/data/Report.PDF"),
            target_path=Path("/data/report.pdf"),
            old_name="Report.PDF",
            new_name="report.pdf",
            status=STATUS_FAILED,
            case_only=True,
            error_kind="restore_failed",
            error_message="복구 실패",
            metadata={'temp_path': "/data/Report.PDF.fnorm-tmp"}
        )

        restored = RenameTask.from_json(task.to_json())

        assert restored == task
        assert "복구 실패" in task.to_json()

    def test_from_dict_defaults(self):
        task = RenameTask.from_dict({'original_path': "a.txt"})

        assert task.original_path == Path("a.txt")
        assert task.target_path is None
        assert task.status == "pending"
