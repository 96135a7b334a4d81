"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 CLI 애플리케이션 진입점입니다.
스케줄 실행(Lambda)과 동일한 오케스트레이터를 로컬/CI에서 실행합니다.

명령어 구조:
    uss --version
    uss scan                        # 환경 변수 설정으로 스캔 + 보고서 업로드
    uss scan --dry-run              # 스캔만 (업로드 없음)
    uss scan -p my-profile -r ap-southeast-2 --unused-days 30 --json

설정 우선순위:
    CLI 옵션 > 환경 변수 (UnusedDays, BucketName, SuppressedSecretsParameter, ...) > 기본값
"""

from __future__ import annotations

import json
import logging
from importlib.metadata import PackageNotFoundError, version

import click
from botocore.exceptions import BotoCoreError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from core.client import get_session
from core.config import ScannerConfig
from core.exceptions import ScannerError, format_error_for_user
from scanner.runner import UnusedSecretsScanner
from scanner.types import NOT_AVAILABLE, ScanResult

console = Console()

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def get_version() -> str:
    """설치된 패키지 버전 (개발 체크아웃이면 0.0.0)"""
    try:
        return version("unused-secrets-scanner")
    except PackageNotFoundError:
        return "0.0.0"


def _render_table(result: ScanResult, unused_days: int) -> Table:
    table = Table(title=f"미사용 시크릿 ({unused_days}일 이상)")
    table.add_column("Name", style="cyan")
    table.add_column("LastAccessedDate")
    table.add_column("DaysUnused", justify="right", style="red")

    for candidate in result.candidates:
        name, last_accessed, days_unused = candidate.to_row()
        table.add_row(escape(name), last_accessed if last_accessed != NOT_AVAILABLE else "-", days_unused)

    return table


@click.group()
@click.version_option(get_version(), prog_name="uss")
@click.option("-v", "--verbose", is_flag=True, help="DEBUG 로그 출력")
def cli(verbose: bool) -> None:
    """USS - Unused Secrets Scanner"""
    # WARNING 레벨 기본값: INFO 로그가 결과 출력에 섞이지 않도록 함
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )


@cli.command()
@click.option("-p", "--profile", default=None, help="AWS 프로파일")
@click.option("-r", "--region", default=None, help="AWS 리전")
@click.option("--unused-days", type=click.IntRange(min=0), default=None, help="미사용 판정 기준 일수 (기본: 90)")
@click.option("--bucket", default=None, help="보고서 업로드 대상 S3 버킷")
@click.option("--suppression-parameter", default=None, help="제외 목록 SSM 파라미터 이름")
@click.option("--dry-run", is_flag=True, help="스캔만 수행 (보고서 업로드 안 함)")
@click.option("--json", "as_json", is_flag=True, help="결과를 JSON으로 출력")
@click.option("-q", "--quiet", is_flag=True, help="최소 출력 모드")
def scan(
    profile: str | None,
    region: str | None,
    unused_days: int | None,
    bucket: str | None,
    suppression_parameter: str | None,
    dry_run: bool,
    as_json: bool,
    quiet: bool,
) -> None:
    """미사용 시크릿 스캔 및 보고서 업로드"""
    try:
        config = ScannerConfig.from_env().replace(
            region=region,
            unused_days=unused_days,
            bucket_name=bucket,
            suppression_parameter_name=suppression_parameter,
        )
        session = get_session(profile_name=profile, region_name=config.region)
        result = UnusedSecretsScanner(config, session=session).run(export=not dry_run)
    except (ScannerError, BotoCoreError) as e:
        console.print(f"[red]오류: {escape(format_error_for_user(e))}[/red]")
        raise SystemExit(1) from e

    if as_json:
        click.echo(json.dumps(result.to_payload(), ensure_ascii=False, indent=2))
        return

    if quiet:
        click.echo(result.report_key or "")
        return

    console.print(f"[dim]스캔: {result.secrets_scanned}개 ({result.pages_scanned}페이지)[/dim]")
    if not result.candidates:
        console.print("[green]미사용 시크릿 없음[/green]")
        return

    console.print(_render_table(result, config.unused_days))
    if result.report_key:
        console.print(f"\n[bold green]완료![/bold green] s3://{config.bucket_name}/{result.report_key}")
    else:
        console.print("\n[yellow]dry-run: 보고서를 업로드하지 않았습니다[/yellow]")
