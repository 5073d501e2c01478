"""
Pytest Configuration

프로젝트 루트를 sys.path에 추가하여 절대 import를 지원하고,
FNORM_* 환경 변수를 격리하는 공용 fixture를 제공합니다.
"""
import sys
import os

import pytest

# 프로젝트 루트를 sys.path에 추가
_project_root = os.path.dirname(os.path.abspath(__file__))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

FNORM_ENV_NAMES = (
    "FNORM_DRY_RUN",
    "FNORM_ALLOW_DIRS",
    "FNORM_WORKERS",
    "FNORM_LOG_LEVEL",
    "FNORM_LOG_DIR",
)


@pytest.fixture
def clean_env(monkeypatch):
    """
    FNORM_* 환경 변수가 없는 상태로 테스트 실행

    setenv로 원래 상태를 먼저 기록해 두므로, 테스트 중 load_dotenv가
    넣은 값도 테스트 종료 시 함께 제거됩니다.
    """
    for name in FNORM_ENV_NAMES:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    yield monkeypatch
