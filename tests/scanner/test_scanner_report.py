"""
tests/scanner/test_scanner_report.py - CSV 보고서 생성 / S3 업로드 테스트
"""

import csv
import io
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from core.exceptions import SinkUnavailableError
from scanner.report import REPORT_CONTENT_TYPE, build_report_key, export_report, render_csv
from scanner.types import UnusedCandidate

EXPORTED_AT = datetime(2024, 6, 1, 3, 0, 0, 123000, tzinfo=timezone.utc)


def make_candidate(
    name: str = "unused-secret",
    last_accessed: datetime | None = datetime(2024, 1, 1, tzinfo=timezone.utc),
    days_unused: int | None = 152,
) -> UnusedCandidate:
    """UnusedCandidate 테스트 데이터 생성"""
    return UnusedCandidate(name=name, last_accessed_date=last_accessed, days_unused=days_unused)


class TestBuildReportKey:
    """build_report_key 테스트"""

    def test_key_format(self):
        assert build_report_key(EXPORTED_AT) == "unused-secrets-2024-06-01T03:00:00.123Z.csv"

    def test_unique_per_timestamp(self):
        """내보낸 시각이 다르면 키도 다름"""
        later = datetime(2024, 6, 8, 3, tzinfo=timezone.utc)
        assert build_report_key(EXPORTED_AT) != build_report_key(later)


class TestRenderCsv:
    """render_csv 테스트"""

    def test_header_and_rows(self):
        """고정 헤더 + 후보당 1행"""
        body = render_csv([make_candidate("A"), make_candidate("B", days_unused=200)])
        lines = body.decode("utf-8").splitlines()

        assert lines[0] == "Name,LastAccessedDate,DaysUnused"
        assert lines[1] == "A,2024-01-01T00:00:00.000Z,152"
        assert lines[2] == "B,2024-01-01T00:00:00.000Z,200"
        assert len(lines) == 3

    def test_not_available_only_when_undefined(self):
        """값이 없을 때만 N/A"""
        body = render_csv([make_candidate("X", last_accessed=None, days_unused=None), make_candidate("Y", days_unused=0)])
        rows = list(csv.reader(io.StringIO(body.decode("utf-8"))))

        assert rows[1] == ["X", "N/A", "N/A"]
        assert rows[2][2] == "0"

    def test_quotes_names_with_commas(self):
        """쉼표 포함 이름은 따옴표 처리"""
        body = render_csv([make_candidate("a,b")])
        rows = list(csv.reader(io.StringIO(body.decode("utf-8"))))
        assert rows[1][0] == "a,b"


class TestExportReport:
    """export_report 테스트 (MagicMock)"""

    def test_put_object(self, mock_boto3_session):
        """단일 객체 업로드"""
        s3 = MagicMock()

        with patch("scanner.report.get_client", return_value=s3):
            key = export_report(mock_boto3_session, "reports", [make_candidate()], now=EXPORTED_AT)

        assert key == "unused-secrets-2024-06-01T03:00:00.123Z.csv"
        s3.put_object.assert_called_once()
        kwargs = s3.put_object.call_args[1]
        assert kwargs["Bucket"] == "reports"
        assert kwargs["Key"] == key
        assert kwargs["ContentType"] == REPORT_CONTENT_TYPE == "text/csv"
        assert kwargs["Body"].startswith(b"Name,LastAccessedDate,DaysUnused\n")

    def test_empty_candidates_rejected(self, mock_boto3_session):
        """빈 보고서는 생성하지 않음"""
        with patch("scanner.report.get_client") as mock_get_client:
            with pytest.raises(ValueError):
                export_report(mock_boto3_session, "reports", [], now=EXPORTED_AT)

        mock_get_client.assert_not_called()

    def test_upload_failure_is_fatal(self, mock_boto3_session):
        """업로드 실패 - SinkUnavailableError"""
        s3 = MagicMock()
        s3.put_object.side_effect = ClientError({"Error": {"Code": "AccessDenied", "Message": "denied"}}, "PutObject")

        with patch("scanner.report.get_client", return_value=s3):
            with pytest.raises(SinkUnavailableError) as exc_info:
                export_report(mock_boto3_session, "reports", [make_candidate()], now=EXPORTED_AT)

        assert exc_info.value.error_code == "AccessDenied"


class TestExportReportMoto:
    """moto 기반 S3 연동 테스트"""

    def test_object_written(self, moto_session, report_bucket):
        key = export_report(moto_session, report_bucket, [make_candidate("A")], now=EXPORTED_AT)

        obj = moto_session.client("s3").get_object(Bucket=report_bucket, Key=key)
        assert obj["ContentType"] == "text/csv"
        assert obj["Body"].read().decode("utf-8") == (
            "Name,LastAccessedDate,DaysUnused\nA,2024-01-01T00:00:00.000Z,152\n"
        )

    def test_missing_bucket(self, moto_session):
        """버킷 없음 - SinkUnavailableError"""
        with pytest.raises(SinkUnavailableError) as exc_info:
            export_report(moto_session, "no-such-bucket", [make_candidate()], now=EXPORTED_AT)

        assert exc_info.value.error_code == "NoSuchBucket"
