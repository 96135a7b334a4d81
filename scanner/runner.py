"""
scanner/runner.py - 미사용 시크릿 스캔 실행 (오케스트레이터)

제외 목록 로드 → 인벤토리 스캔 → (결과 있으면) 보고서 업로드 순서로 한 번 실행합니다.
실행 간 상태는 없으며, 실패 시 재시도하지 않고 호출자(스케줄러)에 그대로 전파합니다.

상태 전이:
    START → SUPPRESSION_LOADED → SCANNING → {EMPTY_RESULT | EXPORTING} → DONE
    (모든 단계 → FAILED)

Lambda 진입점:
    scanner.runner.handler
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Any

from core.client import get_session
from core.config import ScannerConfig
from core.time_utils import utc_now

from .inventory import collect_unused_secrets
from .report import export_report
from .suppression import load_suppressed_secrets
from .types import RunState, ScanAction, ScanResult, UnusedCandidate

logger = logging.getLogger(__name__)

_PACKAGE_LOGGERS = ("core", "scanner")


class UnusedSecretsScanner:
    """미사용 시크릿 스캐너

    Args:
        config: 실행 설정
        session: boto3 Session (None이면 첫 사용 시 생성)
        clock: 현재 시각 함수 (테스트 주입용)

    Example:
        scanner = UnusedSecretsScanner(ScannerConfig.from_env())
        result = scanner.run()
    """

    def __init__(
        self,
        config: ScannerConfig,
        session=None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.config = config
        self._session = session
        self._clock = clock
        self.state = RunState.START

    @property
    def session(self):
        if self._session is None:
            self._session = get_session(region_name=self.config.region)
        return self._session

    @property
    def action(self) -> ScanAction:
        if self.config.delete_unused_secrets:
            return ScanAction.REPORT_AND_DELETE
        return ScanAction.REPORT

    def _transition(self, state: RunState) -> None:
        logger.debug(f"상태 전이: {self.state.value} → {state.value}")
        self.state = state

    def run(self, export: bool = True) -> ScanResult:
        """스캔 1회 실행

        Args:
            export: False면 보고서를 업로드하지 않음 (dry-run)

        Returns:
            ScanResult

        Raises:
            ConfigurationError: 버킷 미설정 (외부 호출 전)
            SourceUnavailableError: 제외 목록/인벤토리 조회 실패
            SinkUnavailableError: 보고서 업로드 실패
        """
        self.state = RunState.START
        config = self.config

        try:
            bucket = config.require_bucket() if export else None

            suppressed = load_suppressed_secrets(self.session, config.suppression_parameter_name, config.region)
            self._transition(RunState.SUPPRESSION_LOADED)

            self._transition(RunState.SCANNING)
            scan = collect_unused_secrets(
                self.session,
                unused_days=config.unused_days,
                suppressed=suppressed,
                region=config.region,
                now=self._clock(),
            )

            result = ScanResult(
                candidates=scan.candidates,
                action=self.action,
                state=self.state,
                pages_scanned=scan.pages_scanned,
                secrets_scanned=scan.secrets_scanned,
            )

            if not scan.candidates:
                self._transition(RunState.EMPTY_RESULT)
            else:
                self._transition(RunState.EXPORTING)
                if bucket is not None:
                    result.report_key = export_report(
                        self.session,
                        bucket,
                        scan.candidates,
                        region=config.region,
                        now=self._clock(),
                    )
                    if result.action is ScanAction.REPORT_AND_DELETE:
                        self._delete_unused_secrets(scan.candidates)
                else:
                    logger.info("dry-run: 보고서 업로드 생략")

            self._transition(RunState.DONE)
            result.state = self.state
            return result

        except Exception:
            self._transition(RunState.FAILED)
            logger.exception("미사용 시크릿 스캔 실패")
            raise

    def _delete_unused_secrets(self, candidates: Sequence[UnusedCandidate]) -> None:
        """삭제 단계 (예약됨, 비활성)

        DeleteUnusedSecrets=true여도 시크릿을 삭제하지 않습니다.
        활성화는 별도 변경으로 검토되어야 합니다.
        """
        logger.warning(f"시크릿 삭제 기능은 비활성 상태입니다. 삭제 대상 {len(candidates)}개를 삭제하지 않았습니다")


def configure_logging(level: str) -> None:
    """패키지 로거 레벨 설정 (Lambda 런타임은 루트 핸들러를 이미 구성함)"""
    for name in _PACKAGE_LOGGERS:
        logging.getLogger(name).setLevel(level)


def handler(event: Any, context: Any) -> list[dict[str, Any]]:
    """스케줄 트리거 진입점

    입력 이벤트는 사용하지 않습니다. 성공 시 미사용 시크릿 목록을 반환하고,
    실패 시 예외를 그대로 올려 호출을 실패 처리합니다.
    """
    try:
        config = ScannerConfig.from_env()
    except Exception:
        logger.exception("설정 로드 실패")
        raise

    configure_logging(config.log_level)
    result = UnusedSecretsScanner(config).run()

    logger.info(
        f"미사용 시크릿 {result.unused_count}개"
        + (f", 보고서: s3://{config.bucket_name}/{result.report_key}" if result.report_key else "")
    )
    return result.to_payload()
