# core/__init__.py
"""
core - 미사용 시크릿 스캐너 공통 인프라

스캐너가 공유하는 설정, 예외, boto3 client 생성, 시간 유틸리티를 포함합니다.

아키텍처:
    core/
    ├── client.py       # boto3 client 생성 (타임아웃, 재시도 정책)
    ├── config.py       # 불변 실행 설정 (환경 변수 로드)
    ├── exceptions.py   # 통합 예외 계층
    └── time_utils.py   # UTC 정규화, ISO-8601, 경과 일수

Usage:
    from core.config import ScannerConfig
    from core.exceptions import SourceUnavailableError, format_error_for_user

    config = ScannerConfig.from_env()
"""

from core import client, config, exceptions, time_utils

__all__: list[str] = [
    "client",
    "config",
    "exceptions",
    "time_utils",
]
