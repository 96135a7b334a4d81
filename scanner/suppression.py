"""
scanner/suppression.py - 제외 목록(Suppression List) 로드

운영자가 SSM Parameter Store에 관리하는 쉼표 구분 시크릿 이름 목록을 읽어
스캔 대상에서 제외합니다. 실행당 한 번 로드되며 실행 중 갱신하지 않습니다.

파라미터 조회 실패를 빈 목록으로 취급하면 보호 대상 시크릿이 보고/삭제될 수 있으므로
조회 실패는 항상 SourceUnavailableError로 전파합니다.

필요 권한:
    - ssm:GetParameter
    - kms:Decrypt (SecureString 사용 시)
"""

from __future__ import annotations

import logging

from botocore.exceptions import BotoCoreError, ClientError

from core.client import get_client
from core.exceptions import SourceUnavailableError, is_not_found

logger = logging.getLogger(__name__)

EMPTY_SUPPRESSION: frozenset[str] = frozenset()


def parse_suppression_value(value: str | None) -> frozenset[str]:
    """쉼표 구분 문자열을 이름 집합으로 변환 (공백 제거, 빈 항목 무시)"""
    if not value:
        return EMPTY_SUPPRESSION
    return frozenset(name.strip() for name in value.split(",") if name.strip())


def load_suppressed_secrets(session, parameter_name: str, region: str | None = None) -> frozenset[str]:
    """SSM 파라미터에서 제외 목록 로드

    Args:
        session: boto3 Session
        parameter_name: 파라미터 이름 (빈 값이면 필터 없음)
        region: AWS 리전

    Returns:
        제외할 시크릿 이름 집합

    Raises:
        SourceUnavailableError: 파라미터 없음, 권한 없음, 복호화 실패, 연결 실패
    """
    if not parameter_name:
        logger.debug("제외 목록 파라미터 미설정 - 필터 없이 스캔")
        return EMPTY_SUPPRESSION

    ssm = get_client(session, "ssm", region_name=region)

    try:
        response = ssm.get_parameter(Name=parameter_name, WithDecryption=True)
    except (ClientError, BotoCoreError) as e:
        if is_not_found(e):
            logger.error(f"제외 목록 파라미터 없음: {parameter_name}")
        raise SourceUnavailableError.from_client_error("ssm", "get_parameter", e) from e

    suppressed = parse_suppression_value(response.get("Parameter", {}).get("Value"))
    logger.info(f"제외 목록 로드 완료: {len(suppressed)}개 ({parameter_name})")
    return suppressed


def is_suppressed(name: str, suppressed: frozenset[str]) -> bool:
    """제외 목록 포함 여부"""
    return name in suppressed
