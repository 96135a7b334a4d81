"""
core/time_utils.py - 날짜/시간 관련 유틸리티 함수들

AWS API가 돌려주는 시각은 timezone-aware 이지만,
테스트나 외부 입력의 naive datetime은 UTC로 간주합니다.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone

SECONDS_PER_DAY = 86400


def utc_now() -> datetime:
    """현재 UTC 시각 (timezone-aware)"""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """datetime을 UTC로 정규화 (naive면 UTC로 간주)"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_iso_utc(value: datetime) -> str:
    """UTC ISO-8601 문자열 (밀리초, Z 접미사)

    Example:
        2024-06-01T00:00:00.000Z
    """
    text = ensure_utc(value).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def ceil_days_between(start: datetime, end: datetime) -> int:
    """두 시각 사이의 경과 일수 (절대값, 올림)

    시계 오차로 start가 end보다 미래여도 음수가 되지 않습니다.
    """
    elapsed = abs((ensure_utc(end) - ensure_utc(start)).total_seconds())
    return math.ceil(elapsed / SECONDS_PER_DAY)
