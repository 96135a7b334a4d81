"""
scanner/report.py - 미사용 시크릿 CSV 보고서 생성 및 S3 업로드

보고서는 메모리 버퍼에 CSV로 작성한 뒤 단일 객체로 업로드합니다.
객체 키에 내보낸 시각을 넣어 이전 보고서를 덮어쓰지 않습니다.
만료(14일)는 버킷 수명 주기 규칙이 담당합니다.

필요 권한:
    - s3:PutObject
"""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Sequence
from datetime import datetime

from botocore.exceptions import BotoCoreError, ClientError

from core.client import get_client
from core.exceptions import SinkUnavailableError
from core.time_utils import to_iso_utc, utc_now

from .types import REPORT_HEADER, UnusedCandidate

logger = logging.getLogger(__name__)

REPORT_KEY_PREFIX = "unused-secrets-"
REPORT_CONTENT_TYPE = "text/csv"


def build_report_key(exported_at: datetime) -> str:
    """보고서 객체 키 (unused-secrets-<ISO8601>.csv)"""
    return f"{REPORT_KEY_PREFIX}{to_iso_utc(exported_at)}.csv"


def render_csv(candidates: Sequence[UnusedCandidate]) -> bytes:
    """CSV 바이트 생성 (헤더 + 후보당 1행)"""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(REPORT_HEADER)

    for candidate in candidates:
        writer.writerow(candidate.to_row())

    return buffer.getvalue().encode("utf-8")


def export_report(
    session,
    bucket: str,
    candidates: Sequence[UnusedCandidate],
    region: str | None = None,
    now: datetime | None = None,
) -> str:
    """보고서를 S3에 업로드

    Args:
        session: boto3 Session
        bucket: 대상 버킷
        candidates: 미사용 시크릿 목록 (비어 있으면 안 됨)
        region: AWS 리전
        now: 내보내기 시각 (None이면 현재 UTC)

    Returns:
        업로드한 객체 키

    Raises:
        ValueError: 빈 목록
        SinkUnavailableError: 업로드 실패
    """
    if not candidates:
        raise ValueError("빈 보고서는 업로드하지 않습니다")

    key = build_report_key(now or utc_now())
    body = render_csv(candidates)

    s3 = get_client(session, "s3", region_name=region)
    try:
        s3.put_object(
            Bucket=bucket,
            Key=key,
            Body=body,
            ContentType=REPORT_CONTENT_TYPE,
        )
    except (ClientError, BotoCoreError) as e:
        raise SinkUnavailableError.from_client_error("s3", "put_object", e) from e

    logger.info(f"보고서 업로드 완료: s3://{bucket}/{key} ({len(candidates)}건)")
    return key
