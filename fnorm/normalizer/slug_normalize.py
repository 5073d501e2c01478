#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
파일명 정규화 - 핵심 로직 모듈

임의의 유니코드 파일명을 ASCII 소문자 + 하이픈 기반 슬러그 형식으로 변환합니다.
확장자는 소문자로만 바꾸고 그대로 보존합니다.

처리 순서 (베이스 이름에만 적용, 11번 제외):
    1. 빈 문자열이면 즉시 반환
    2. 마지막 '.' 기준으로 베이스/확장자 분리
    3. 앞뒤 공백 및 '.' 제거
    4. 공백 → 하이픈
    5. 소문자 변환 (유니코드)
    6. 특수 기호 치환 (/ & @ %)
    7. 악센트 문자/타이포그래피 기호 음역
    8. 허용되지 않은 문자 → 하이픈
    9. 연속 하이픈 압축
    10. 앞쪽 하이픈 제거 (뒤쪽은 유지)
    11. 확장자 소문자 변환
    12. 재조합

예:
    "My Document.PDF"   → "my-document.pdf"
    "tcp/udp guide.md"  → "tcp-or-udp-guide.md"
    "CPU Usage 90%.txt" → "cpu-usage-90-percent.txt"

알려진 제약:
    '.'으로 시작하고 다른 '.'이 없는 이름(".Hidden File")은 전체가 확장자로
    분류되므로 소문자 변환만 적용됩니다 → ".hidden file"
"""

import re
from types import MappingProxyType
from typing import Tuple

# ============================================================================
# 설정 및 상수
# ============================================================================

# 트리밍 대상 ASCII 공백 문자
ASCII_WHITESPACE = ' \t\n\r\x0b\x0c'

# 특수 기호 치환 (순서대로 적용)
# '%'만 뒤쪽 하이픈이 없음
SPECIAL_REPLACEMENTS: Tuple[Tuple[str, str], ...] = (
    ('/', '-or-'),
    ('&', '-and-'),
    ('@', '-at-'),
    ('%', '-percent'),
)

# 음역 테이블 (소문자 기준 - 소문자 변환 이후 적용)
TRANSLITERATIONS = MappingProxyType({
    'á': 'a', 'à': 'a', 'â': 'a', 'ä': 'a', 'ã': 'a', 'å': 'a',
    'é': 'e', 'è': 'e', 'ê': 'e', 'ë': 'e',
    'í': 'i', 'ì': 'i', 'î': 'i', 'ï': 'i',
    'ó': 'o', 'ò': 'o', 'ô': 'o', 'ö': 'o', 'õ': 'o',
    'ú': 'u', 'ù': 'u', 'û': 'u', 'ü': 'u',
    'ñ': 'n',
    'ç': 'c',
    'æ': 'ae', 'œ': 'oe',
    'ø': 'o', 'ß': 'ss',
    # 타이포그래피
    '–': '-', '—': '-',   # en/em dash
    '‘': "'", '’': "'",   # 곡선 작은따옴표
    '“': '"', '”': '"',   # 곡선 큰따옴표
})

# 허용 문자: a-z, 0-9, '-', '_', '.'
FORBIDDEN_CHARS = re.compile(r'[^a-z0-9\-_.]')
MULTI_HYPHEN = re.compile(r'-+')


# ============================================================================
# 분리 / 트리밍
# ============================================================================

def split_extension(name: str) -> Tuple[str, str]:
    """
    파일명을 (베이스, 확장자)로 분리

    마지막 '.'부터 끝까지가 확장자입니다 ('.' 포함).
    확장자가 '.' 하나뿐이면 확장자가 없는 것으로 봅니다.
    '.'이 맨 앞에만 있으면 전체가 확장자가 됩니다 (".bashrc" → ("", ".bashrc")).

    Args:
        name: 파일명

    Returns:
        (베이스, 확장자) 튜플
    """
    dot = name.rfind('.')
    if dot == -1:
        return name, ''

    ext = name[dot:]
    if ext == '.':
        return name, ''
    return name[:dot], ext


def trim_base(base: str) -> str:
    """앞뒤 ASCII 공백 제거 후 앞뒤 '.' 제거 (내부 내용은 유지)"""
    return base.strip(ASCII_WHITESPACE).strip('.')


# ============================================================================
# 변환 단계
# ============================================================================

def spaces_to_hyphens(text: str) -> str:
    return text.replace(' ', '-')


def lowercase(text: str) -> str:
    # 음역 테이블이 소문자 키이므로 음역보다 먼저 수행
    return text.lower()


def replace_special_tokens(text: str) -> str:
    """
    특수 기호를 단어 토큰으로 치환

    / → -or-, & → -and-, @ → -at-, % → -percent
    """
    for symbol, token in SPECIAL_REPLACEMENTS:
        text = text.replace(symbol, token)
    return text


def transliterate(text: str) -> str:
    """
    음역 테이블 기반 문자 단위 치환

    테이블에 없는 문자는 그대로 통과합니다 (이후 필터 단계에서 처리).

    Args:
        text: 소문자 변환된 텍스트

    Returns:
        음역된 텍스트
    """
    return ''.join(TRANSLITERATIONS.get(ch, ch) for ch in text)


def replace_forbidden_chars(text: str) -> str:
    """허용되지 않은 문자를 한 글자당 하이픈 하나로 치환"""
    return FORBIDDEN_CHARS.sub('-', text)


def collapse_hyphens(text: str) -> str:
    return MULTI_HYPHEN.sub('-', text)


def trim_leading_hyphens(text: str) -> str:
    """
    앞쪽 하이픈 제거 (뒤쪽 하이픈은 유지)

    하이픈 제거로 드러난 앞쪽 '.'도 함께 제거합니다.
    그대로 두면 결과가 숨김 파일 형태가 되어 재정규화 시 결과가 달라집니다.
    예: "-.b" → "b"
    """
    return text.lstrip('-.')


# 베이스 이름 변환 파이프라인 (3~10단계)
BASE_STAGES = (
    trim_base,
    spaces_to_hyphens,
    lowercase,
    replace_special_tokens,
    transliterate,
    replace_forbidden_chars,
    collapse_hyphens,
    trim_leading_hyphens,
)


def normalize_base(base: str) -> str:
    """베이스 이름에 3~10단계를 순서대로 적용"""
    for stage in BASE_STAGES:
        base = stage(base)
    return base


# ============================================================================
# 공개 API
# ============================================================================

def normalize(name: str) -> str:
    """
    파일명을 슬러그 형식으로 정규화

    순수 함수이며 멱등성을 가집니다: normalize(normalize(x)) == normalize(x)

    Args:
        name: 원본 파일명 (디렉토리 제외)

    Returns:
        정규화된 파일명

    Example:
        >>> normalize("File & Video.mov")
        'file-and-video.mov'
        >>> normalize("café menu.txt")
        'cafe-menu.txt'
    """
    if not name:
        return ''

    base, ext = split_extension(name)
    base = normalize_base(base)
    ext = ext.lower()

    # "a..b." 처럼 끝의 '.'만으로 확장자가 사라진 경우, 결과 베이스에 남은 '.'
    # 기준으로 한 번 더 분리해야 재정규화 결과와 같아짐
    if not ext and '.' in base:
        return normalize(base)

    return base + ext
