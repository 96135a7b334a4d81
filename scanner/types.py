"""
scanner/types.py - 미사용 시크릿 스캐너 데이터 타입
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from core.time_utils import to_iso_utc

NOT_AVAILABLE = "N/A"

REPORT_HEADER = ("Name", "LastAccessedDate", "DaysUnused")


class ScanAction(Enum):
    """스캔 후 수행할 조치

    REPORT_AND_DELETE는 예약된 값입니다. 선택되더라도 삭제 단계는
    로그만 남기고 아무것도 삭제하지 않습니다.
    """

    REPORT = "report"
    REPORT_AND_DELETE = "report_and_delete"


class RunState(Enum):
    """실행 상태

    START → SUPPRESSION_LOADED → SCANNING → {EMPTY_RESULT | EXPORTING} → DONE
    모든 단계에서 FAILED로 전이 가능
    """

    START = "start"
    SUPPRESSION_LOADED = "suppression_loaded"
    SCANNING = "scanning"
    EMPTY_RESULT = "empty_result"
    EXPORTING = "exporting"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class SecretRecord:
    """인벤토리에서 받은 시크릿 항목 (읽기 전용)"""

    name: str
    last_accessed_date: datetime | None = None

    @classmethod
    def from_api(cls, entry: dict[str, Any]) -> SecretRecord:
        """ListSecrets SecretList 항목에서 생성"""
        return cls(
            name=entry["Name"],
            last_accessed_date=entry.get("LastAccessedDate"),
        )


@dataclass(frozen=True)
class UnusedCandidate:
    """미사용으로 판정된 시크릿"""

    name: str
    last_accessed_date: datetime | None
    days_unused: int | None

    def to_row(self) -> tuple[str, str, str]:
        """보고서 행 (Name, LastAccessedDate, DaysUnused)"""
        last_accessed = to_iso_utc(self.last_accessed_date) if self.last_accessed_date else NOT_AVAILABLE
        days_unused = str(self.days_unused) if self.days_unused is not None else NOT_AVAILABLE
        return (self.name, last_accessed, days_unused)

    def to_dict(self) -> dict[str, Any]:
        """호출자 반환용 딕셔너리 (JSON 직렬화 가능)"""
        return {
            "Name": self.name,
            "LastAccessedDate": to_iso_utc(self.last_accessed_date) if self.last_accessed_date else None,
            "DaysUnused": self.days_unused,
        }


@dataclass
class InventoryScan:
    """인벤토리 전체 스캔 결과"""

    candidates: list[UnusedCandidate] = field(default_factory=list)
    pages_scanned: int = 0
    secrets_scanned: int = 0


@dataclass
class ScanResult:
    """한 번의 실행 결과"""

    candidates: list[UnusedCandidate]
    action: ScanAction
    state: RunState
    report_key: str | None = None
    pages_scanned: int = 0
    secrets_scanned: int = 0

    @property
    def unused_count(self) -> int:
        return len(self.candidates)

    def to_payload(self) -> list[dict[str, Any]]:
        """스케줄러(Lambda) 반환 값"""
        return [c.to_dict() for c in self.candidates]
