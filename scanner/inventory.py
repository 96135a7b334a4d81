"""
scanner/inventory.py - Secrets Manager 미사용 시크릿 수집

전체 시크릿 인벤토리를 페이지 단위로 순회하며 미사용 시크릿을 판정합니다.

판정 기준:
    - LastAccessedDate가 있어야 함 (액세스 이력 없음은 "알 수 없음"으로 보고 제외)
    - 경과 일수(올림) >= unused_days
    - 제외 목록에 없음

어느 페이지에서든 오류가 나면 전체 스캔을 중단합니다. 일부 페이지만 반영된
목록은 이번 실행에서 잡아야 할 시크릿을 가릴 수 있기 때문입니다.

필요 권한:
    - secretsmanager:ListSecrets
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import datetime

from botocore.exceptions import BotoCoreError, ClientError

from core.client import get_client
from core.config import DEFAULT_UNUSED_DAYS
from core.exceptions import SourceUnavailableError
from core.time_utils import ceil_days_between, utc_now

from .suppression import EMPTY_SUPPRESSION, is_suppressed
from .types import InventoryScan, SecretRecord, UnusedCandidate

logger = logging.getLogger(__name__)


def get_days_unused(last_accessed_date: datetime | None, now: datetime) -> int | None:
    """마지막 액세스 이후 경과 일수

    Args:
        last_accessed_date: 마지막 액세스 시각 (없으면 None)
        now: 기준 시각

    Returns:
        올림한 경과 일수, 액세스 이력이 없으면 None
    """
    if last_accessed_date is None:
        return None
    return ceil_days_between(last_accessed_date, now)


def evaluate_secret(
    record: SecretRecord,
    now: datetime,
    unused_days: int = DEFAULT_UNUSED_DAYS,
    suppressed: frozenset[str] = EMPTY_SUPPRESSION,
) -> UnusedCandidate | None:
    """단일 시크릿 미사용 판정

    Returns:
        미사용이면 UnusedCandidate, 아니면 None
    """
    days_unused = get_days_unused(record.last_accessed_date, now)
    if days_unused is None or days_unused < unused_days:
        return None

    if is_suppressed(record.name, suppressed):
        logger.debug(f"제외 목록 대상: {record.name} ({days_unused}일 미사용)")
        return None

    return UnusedCandidate(
        name=record.name,
        last_accessed_date=record.last_accessed_date,
        days_unused=days_unused,
    )


def iter_secret_pages(session, region: str | None = None) -> Iterator[list[SecretRecord]]:
    """ListSecrets 페이지 순회

    NextToken이 없는 페이지가 마지막 페이지입니다.

    Raises:
        SourceUnavailableError: 어느 페이지에서든 호출 실패
    """
    sm = get_client(session, "secretsmanager", region_name=region)

    try:
        paginator = sm.get_paginator("list_secrets")
        for page in paginator.paginate():
            yield [SecretRecord.from_api(entry) for entry in page.get("SecretList", [])]
    except (ClientError, BotoCoreError) as e:
        raise SourceUnavailableError.from_client_error("secretsmanager", "list_secrets", e) from e


def collect_unused_secrets(
    session,
    unused_days: int = DEFAULT_UNUSED_DAYS,
    suppressed: frozenset[str] = EMPTY_SUPPRESSION,
    region: str | None = None,
    now: datetime | None = None,
) -> InventoryScan:
    """전체 인벤토리에서 미사용 시크릿 수집

    Args:
        session: boto3 Session
        unused_days: 미사용 판정 기준 일수
        suppressed: 제외할 시크릿 이름 집합
        region: AWS 리전
        now: 기준 시각 (None이면 현재 UTC)

    Returns:
        InventoryScan (candidates 순서 = 페이지 순서)

    Raises:
        SourceUnavailableError: 인벤토리 조회 실패 (부분 결과 없음)
    """
    now = now or utc_now()
    scan = InventoryScan()

    for page_number, records in enumerate(iter_secret_pages(session, region), start=1):
        scan.pages_scanned = page_number
        scan.secrets_scanned += len(records)
        logger.debug(f"ListSecrets 페이지 {page_number}: {len(records)}개")

        for record in records:
            candidate = evaluate_secret(record, now, unused_days, suppressed)
            if candidate is not None:
                scan.candidates.append(candidate)

    logger.info(
        f"시크릿 스캔 완료: {scan.secrets_scanned}개 중 미사용 {len(scan.candidates)}개 "
        f"(기준 {unused_days}일, {scan.pages_scanned}페이지)"
    )
    return scan
