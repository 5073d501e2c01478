"""
fnorm Adapters

코어 로직이 사용하는 외부 자원(파일 시스템)을 감싸는 어댑터 모듈입니다.
"""
from fnorm.adapters.filesystem_adapter import LocalFileSystem

__all__ = ['LocalFileSystem']
