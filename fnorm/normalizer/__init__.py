"""
Filename Normalizer Module

파일명을 ASCII 슬러그 형식으로 바꾸는 순수 함수 모음입니다.

정규화 함수 import 방법:
    from fnorm.normalizer import normalize
"""
from fnorm.normalizer.slug_normalize import normalize, normalize_base, split_extension

__all__ = ['normalize', 'normalize_base', 'split_extension']
