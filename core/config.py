"""
core/config.py - 스캐너 실행 설정

실행 시작 시 환경 변수에서 한 번만 읽어 불변 설정 객체로 만듭니다.
오케스트레이터는 생성 시점에 이 객체를 주입받으며, 실행 중 전역 상태를 읽지 않습니다.

환경 변수:
    UnusedDays                  미사용 판정 기준 일수 (기본: 90)
    DeleteUnusedSecrets         삭제 단계 예약 플래그 (기본: false, 현재 비활성)
    BucketName                  보고서 업로드 대상 S3 버킷
    SuppressedSecretsParameter  제외 목록을 담은 SSM 파라미터 이름 (빈 값이면 필터 없음)
    AWS_REGION / AWS_DEFAULT_REGION
    LOG_LEVEL                   로그 레벨 (기본: INFO)

Usage:
    from core.config import ScannerConfig

    config = ScannerConfig.from_env()
    config = config.replace(unused_days=30)
"""

from __future__ import annotations

import dataclasses
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from .exceptions import ConfigurationError

DEFAULT_UNUSED_DAYS = 90
DEFAULT_LOG_LEVEL = "INFO"

ENV_UNUSED_DAYS = "UnusedDays"
ENV_DELETE_UNUSED_SECRETS = "DeleteUnusedSecrets"
ENV_BUCKET_NAME = "BucketName"
ENV_SUPPRESSION_PARAMETER = "SuppressedSecretsParameter"
ENV_LOG_LEVEL = "LOG_LEVEL"

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off", ""}


def _parse_unused_days(raw: str | None) -> int:
    if raw is None or raw.strip() == "":
        return DEFAULT_UNUSED_DAYS
    try:
        value = int(raw.strip())
    except ValueError as e:
        raise ConfigurationError(ENV_UNUSED_DAYS, f"정수가 아닙니다: {raw!r}", cause=e) from e
    if value < 0:
        raise ConfigurationError(ENV_UNUSED_DAYS, f"0 이상이어야 합니다: {value}")
    return value


def _parse_bool(key: str, raw: str | None) -> bool:
    if raw is None:
        return False
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(key, f"true/false 값이 아닙니다: {raw!r}")


def _parse_log_level(raw: str | None) -> str:
    level = (raw or DEFAULT_LOG_LEVEL).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigurationError(ENV_LOG_LEVEL, f"알 수 없는 로그 레벨: {raw!r}")
    return level


@dataclass(frozen=True)
class ScannerConfig:
    """스캐너 실행 설정

    Attributes:
        bucket_name: 보고서 업로드 대상 버킷
        unused_days: 미사용 판정 기준 일수 (age >= unused_days 이면 미사용)
        suppression_parameter_name: 제외 목록 SSM 파라미터 이름 (빈 값이면 필터 없음)
        delete_unused_secrets: 삭제 단계 예약 플래그 (현재 동작하지 않음)
        region: AWS 리전 (None이면 세션 기본값)
        log_level: 로그 레벨 이름
    """

    bucket_name: str = ""
    unused_days: int = DEFAULT_UNUSED_DAYS
    suppression_parameter_name: str = ""
    delete_unused_secrets: bool = False
    region: str | None = None
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        if isinstance(self.unused_days, bool) or not isinstance(self.unused_days, int):
            raise ConfigurationError("unused_days", f"정수가 아닙니다: {self.unused_days!r}")
        if self.unused_days < 0:
            raise ConfigurationError("unused_days", f"0 이상이어야 합니다: {self.unused_days}")

    @property
    def has_suppression(self) -> bool:
        """제외 목록 필터 사용 여부"""
        return bool(self.suppression_parameter_name)

    def require_bucket(self) -> str:
        """업로드 대상 버킷 이름 반환 (없으면 ConfigurationError)"""
        if not self.bucket_name:
            raise ConfigurationError(ENV_BUCKET_NAME, "보고서 버킷이 설정되지 않았습니다")
        return self.bucket_name

    def replace(self, **overrides) -> ScannerConfig:
        """None이 아닌 값만 덮어쓴 새 설정 반환 (CLI 옵션 병합용)"""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ScannerConfig:
        """환경 변수에서 설정 로드

        Args:
            environ: 환경 변수 매핑 (None이면 os.environ)

        Returns:
            ScannerConfig 인스턴스

        Raises:
            ConfigurationError: 값 형식 오류
        """
        env = os.environ if environ is None else environ

        return cls(
            bucket_name=env.get(ENV_BUCKET_NAME, "").strip(),
            unused_days=_parse_unused_days(env.get(ENV_UNUSED_DAYS)),
            suppression_parameter_name=env.get(ENV_SUPPRESSION_PARAMETER, "").strip(),
            delete_unused_secrets=_parse_bool(ENV_DELETE_UNUSED_SECRETS, env.get(ENV_DELETE_UNUSED_SECRETS)),
            region=env.get("AWS_REGION") or env.get("AWS_DEFAULT_REGION") or None,
            log_level=_parse_log_level(env.get(ENV_LOG_LEVEL)),
        )
