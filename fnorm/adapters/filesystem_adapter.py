"""
FileSystem Adapter

RenameExecutor가 사용하는 파일 시스템 기능(stat, 존재 확인, rename)을 감쌉니다.
테스트에서는 이 클래스를 상속해 특정 rename 호출을 실패시킬 수 있습니다.
"""
import os
import stat
from pathlib import Path


class LocalFileSystem:
    """로컬 파일 시스템 어댑터"""

    def stat(self, path: Path) -> os.stat_result:
        """
        경로 메타데이터 조회 (심볼릭 링크는 따라감)

        Raises:
            OSError: 경로를 확인할 수 없을 때
        """
        return os.stat(path)

    def is_dir(self, path: Path) -> bool:
        try:
            return stat.S_ISDIR(self.stat(path).st_mode)
        except OSError:
            return False

    def exists(self, path: Path) -> bool:
        # 끊어진 심볼릭 링크도 점유된 이름으로 취급
        return os.path.lexists(path)

    def samefile(self, first: Path, second: Path) -> bool:
        """두 경로가 같은 항목을 가리키는지 확인 (대소문자 무시 파일 시스템 판별용)"""
        try:
            return os.path.samefile(first, second)
        except OSError:
            return False

    def rename(self, source: Path, target: Path) -> None:
        os.rename(source, target)
