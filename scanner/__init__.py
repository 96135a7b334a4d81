"""
scanner - 미사용 시크릿 스캐너

Secrets Manager 인벤토리를 감사하여 기준 일수 이상 사용되지 않은 시크릿을
CSV 보고서로 S3에 내보냅니다.
"""

from .inventory import collect_unused_secrets, evaluate_secret, get_days_unused, iter_secret_pages
from .report import build_report_key, export_report, render_csv
from .runner import UnusedSecretsScanner, handler
from .suppression import is_suppressed, load_suppressed_secrets, parse_suppression_value
from .types import (
    InventoryScan,
    RunState,
    ScanAction,
    ScanResult,
    SecretRecord,
    UnusedCandidate,
)

__all__: list[str] = [
    # types
    "SecretRecord",
    "UnusedCandidate",
    "InventoryScan",
    "ScanResult",
    "ScanAction",
    "RunState",
    # suppression
    "load_suppressed_secrets",
    "parse_suppression_value",
    "is_suppressed",
    # inventory
    "get_days_unused",
    "evaluate_secret",
    "iter_secret_pages",
    "collect_unused_secrets",
    # report
    "build_report_key",
    "render_csv",
    "export_report",
    # runner
    "UnusedSecretsScanner",
    "handler",
]
