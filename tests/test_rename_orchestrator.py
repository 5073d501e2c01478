"""
RenameOrchestrator 테스트

일괄 처리 순서, 결함 격리, 디렉토리 정책, 매핑 CSV를 검증합니다.
"""
import csv
import shutil
import sys
import tempfile
from pathlib import Path

import pytest

# 프로젝트 루트 경로 추가
sys.path.insert(0, str(Path(__file__).parent.parent))

from fnorm.config import FnormConfig
from fnorm.rename_executor import RenameExecutor
from fnorm.rename_orchestrator import RenameOrchestrator, BatchResult
from fnorm.rename_task import (
    STATUS_UNCHANGED,
    STATUS_WOULD_RENAME,
    STATUS_RENAMED,
    STATUS_FAILED,
)


class ExplodingExecutor(RenameExecutor):
    """특정 이름에서 예상하지 못한 예외를 던지는 executor"""

    def __init__(self, bad_name: str):
        super().__init__()
        self.bad_name = bad_name

    def process_path(self, path, dry_run=False):
        if Path(path).name == self.bad_name:
            raise RuntimeError("boom")
        return super().process_path(path, dry_run=dry_run)


@pytest.fixture
def temp_workspace():
    """임시 작업 공간 생성"""
    temp_dir = tempfile.mkdtemp()
    yield Path(temp_dir)
    shutil.rmtree(temp_dir, ignore_errors=True)


def make_files(workspace: Path, *names: str):
    paths = []
    for name in names:
        path = workspace / name
        path.write_text(name, encoding='utf-8')
        paths.append(path)
    return paths


class TestBatchProcessing:

    def test_mixed_batch(self, temp_workspace):
        renamed, unchanged = make_files(temp_workspace, "My Document.PDF", "clean-name.txt")
        missing = temp_workspace / "Missing File.txt"

        result = RenameOrchestrator(FnormConfig()).run([renamed, missing, unchanged])

        assert result.total_paths == 3
        assert result.renamed == 1
        assert result.unchanged == 1
        assert result.failed == 1
        assert result.exit_code == 1
        assert [t.status for t in result.tasks] == [STATUS_RENAMED, STATUS_FAILED, STATUS_UNCHANGED]
        assert (temp_workspace / "my-document.pdf").exists()
        assert len(result.errors) == 1
        assert str(missing) in result.errors[0]

    def test_all_success_exit_code(self, temp_workspace):
        paths = make_files(temp_workspace, "One.txt", "two.txt")

        result = RenameOrchestrator(FnormConfig()).run(paths)

        assert result.exit_code == 0
        assert result.failed == 0

    def test_empty_batch(self):
        result = RenameOrchestrator(FnormConfig()).run([])

        assert result.total_paths == 0
        assert result.exit_code == 0

    def test_paths_that_collide_with_each_other(self, temp_workspace):
        """두 인자가 같은 대상 이름으로 정규화되면 두 번째는 충돌"""
        first, second = make_files(temp_workspace, "A B.txt", "A  B.txt")

        result = RenameOrchestrator(FnormConfig()).run([first, second])

        assert [t.status for t in result.tasks] == [STATUS_RENAMED, STATUS_FAILED]
        assert result.tasks[1].error_kind == "target_exists"
        assert second.exists()
        assert (temp_workspace / "a-b.txt").read_text(encoding='utf-8') == "A B.txt"

    def test_accepts_string_paths(self, temp_workspace):
        make_files(temp_workspace, "String Path.txt")

        result = RenameOrchestrator(FnormConfig()).run([str(temp_workspace / "String Path.txt")])

        assert result.renamed == 1


class TestDryRun:

    def test_dry_run_from_config(self, temp_workspace):
        paths = make_files(temp_workspace, "My Document.PDF", "clean-name.txt")

        result = RenameOrchestrator(FnormConfig(dry_run=True)).run(paths)

        assert result.would_rename == 1
        assert result.unchanged == 1
        assert result.renamed == 0
        assert sorted(p.name for p in temp_workspace.iterdir()) == ["My Document.PDF", "clean-name.txt"]

    def test_dry_run_argument_overrides_config(self, temp_workspace):
        paths = make_files(temp_workspace, "My Document.PDF")

        result = RenameOrchestrator(FnormConfig()).run(paths, dry_run=True)

        assert result.tasks[0].status == STATUS_WOULD_RENAME
        assert paths[0].exists()


class TestDirectoryPolicy:

    @pytest.fixture
    def folder(self, temp_workspace):
        folder = temp_workspace / "My Folder"
        folder.mkdir()
        return folder

    def test_directory_rejected_by_default(self, folder):
        result = RenameOrchestrator(FnormConfig()).run([folder])

        task = result.tasks[0]
        assert task.status == STATUS_FAILED
        assert task.error_kind == "path_type_rejected"
        assert task.is_dir is True
        assert "skipping directory" in task.error_message
        assert folder.exists()
        assert result.exit_code == 1

    def test_directory_allowed(self, folder):
        result = RenameOrchestrator(FnormConfig(allow_directories=True)).run([folder])

        assert result.tasks[0].status == STATUS_RENAMED
        assert (folder.parent / "my-folder").is_dir()


class TestFaultIsolation:

    def test_unexpected_exception_fails_only_that_path(self, temp_workspace):
        paths = make_files(temp_workspace, "First File.txt", "Bad File.txt", "Last File.txt")
        orchestrator = RenameOrchestrator(FnormConfig(), executor=ExplodingExecutor("Bad File.txt"))

        result = orchestrator.run(paths)

        statuses = [t.status for t in result.tasks]
        assert statuses == [STATUS_RENAMED, STATUS_FAILED, STATUS_RENAMED]
        assert result.tasks[1].error_kind == "unexpected"
        assert "RuntimeError: boom" in result.tasks[1].error_message
        assert (temp_workspace / "last-file.txt").exists()


class TestWorkers:

    def test_parallel_results_keep_input_order(self, temp_workspace):
        names = [f"File {i:02d}.txt" for i in range(20)]
        paths = make_files(temp_workspace, *names)

        result = RenameOrchestrator(FnormConfig(workers=4)).run(paths)

        assert result.renamed == 20
        assert [t.old_name for t in result.tasks] == names
        assert [t.new_name for t in result.tasks] == [f"file-{i:02d}.txt" for i in range(20)]

    def test_parallel_collisions_never_overwrite(self, temp_workspace):
        """같은 대상으로 정규화되는 두 경로 중 하나만 변경되고 나머지는 충돌 처리"""
        pairs = [(f"Doc {i}.txt", f"Doc  {i}.txt") for i in range(15)]
        paths = make_files(temp_workspace, *[name for pair in pairs for name in pair])

        result = RenameOrchestrator(FnormConfig(workers=8)).run(paths)

        assert result.renamed == 15
        assert result.failed == 15
        assert all(t.error_kind == "target_exists" for t in result.tasks if t.is_error)
        # 덮어쓰기가 없으므로 파일 수는 그대로
        assert len(list(temp_workspace.iterdir())) == 30
        for i in range(15):
            content = (temp_workspace / f"doc-{i}.txt").read_text(encoding='utf-8')
            assert content in pairs[i]


class TestCallbackAndMapping:

    def test_callback_called_per_path(self, temp_workspace):
        paths = make_files(temp_workspace, "One.txt", "two.txt")
        seen = []

        RenameOrchestrator(FnormConfig(), task_callback=seen.append).run(paths)

        assert [t.old_name for t in seen] == ["One.txt", "two.txt"]

    def test_mapping_csv(self, temp_workspace):
        paths = make_files(temp_workspace, "My Document.PDF", "clean-name.txt")
        csv_path = temp_workspace / "out" / "mapping.csv"
        config = FnormConfig(mapping_csv=str(csv_path))

        result = RenameOrchestrator(config).run(paths + [temp_workspace / "gone.txt"])

        assert result.mapping_csv_path == csv_path
        with open(csv_path, 'r', encoding='utf-8-sig', newline='') as f:
            rows = list(csv.DictReader(f))

        assert [r['status'] for r in rows] == [STATUS_RENAMED, STATUS_UNCHANGED, STATUS_FAILED]
        assert rows[0]['new_path'] == str(temp_workspace / "my-document.pdf")
        assert rows[2]['error_message'].startswith("stat ")

    def test_log_file_path_reported(self, temp_workspace):
        paths = make_files(temp_workspace, "One.txt")
        config = FnormConfig(log_dir=str(temp_workspace / "logs"))
        orchestrator = RenameOrchestrator(config)

        result = orchestrator.run(paths)
        orchestrator.logger.close()

        assert result.log_file_path == orchestrator.logger.log_file_path
        assert result.log_file_path.exists()
        assert result.to_dict()['log_file_path'] == str(result.log_file_path)

    def test_no_log_file_without_log_dir(self, temp_workspace):
        result = RenameOrchestrator(FnormConfig()).run(make_files(temp_workspace, "One.txt"))

        assert result.log_file_path is None

    def test_batch_result_to_dict(self):
        data = BatchResult(total_paths=2, renamed=1, failed=1).to_dict()

        assert data['total_paths'] == 2
        assert data['mapping_csv_path'] is None
