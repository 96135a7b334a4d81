"""
tests/scanner/test_scanner_types.py - 스캐너 데이터 타입 테스트
"""

from datetime import datetime, timezone

import pytest

from scanner.types import RunState, ScanAction, ScanResult, SecretRecord, UnusedCandidate

LAST_ACCESSED = datetime(2024, 1, 1, tzinfo=timezone.utc)


class TestSecretRecord:
    """SecretRecord 테스트"""

    def test_from_api(self):
        record = SecretRecord.from_api({"ARN": "arn", "Name": "db-password", "LastAccessedDate": LAST_ACCESSED})
        assert record.name == "db-password"
        assert record.last_accessed_date == LAST_ACCESSED

    def test_from_api_never_accessed(self):
        """LastAccessedDate 없는 항목"""
        assert SecretRecord.from_api({"Name": "fresh"}).last_accessed_date is None

    def test_is_frozen(self):
        with pytest.raises(Exception):  # FrozenInstanceError
            SecretRecord("x").name = "y"


class TestUnusedCandidate:
    """UnusedCandidate 테스트"""

    def test_to_row(self):
        candidate = UnusedCandidate("A", LAST_ACCESSED, 152)
        assert candidate.to_row() == ("A", "2024-01-01T00:00:00.000Z", "152")

    def test_to_row_not_available(self):
        assert UnusedCandidate("A", None, None).to_row() == ("A", "N/A", "N/A")

    def test_to_dict(self):
        assert UnusedCandidate("A", LAST_ACCESSED, 152).to_dict() == {
            "Name": "A",
            "LastAccessedDate": "2024-01-01T00:00:00.000Z",
            "DaysUnused": 152,
        }


class TestEnums:
    """Enum 값 확인"""

    def test_scan_action_values(self):
        assert ScanAction.REPORT.value == "report"
        assert ScanAction.REPORT_AND_DELETE.value == "report_and_delete"

    def test_run_state_terminal_values(self):
        assert RunState.DONE.value == "done"
        assert RunState.FAILED.value == "failed"


class TestScanResult:
    def test_payload(self):
        result = ScanResult(
            candidates=[UnusedCandidate("A", LAST_ACCESSED, 152)],
            action=ScanAction.REPORT,
            state=RunState.DONE,
        )
        assert result.unused_count == 1
        assert result.to_payload()[0]["Name"] == "A"
