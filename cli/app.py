"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 CLI 애플리케이션 진입점입니다.
OCI Tenancy를 탐색하고 Terraform 파일(또는 JSON)을 생성합니다.

명령어 구조:
    oci-tf-bootstrap                          # ~/.oci/config DEFAULT 프로파일로 ./terraform 생성
    oci-tf-bootstrap --always-free            # Always-Free tier 리소스만
    oci-tf-bootstrap --json > tenancy.json    # 탐색 결과 JSON 출력
    oci-tf-bootstrap --version                # 버전 표시

실행 흐름:
    1. 설정 파일 경로/프로파일 결정 (플래그 > 환경 변수 > 기본값)
    2. load_context(): oci SDK로 설정 로드 (실패 시 설정 도움말 출력)
    3. discover(): 카테고리별 병렬 탐색 (+ Always-Free 필터)
    4. TerraformGenerator 또는 output_json

종료 코드:
    0: 성공 (허용 가능한 탐색 실패는 경고로만 표시)
    1: 설정 오류, 치명적 탐색 실패, 산출물 생성 실패
    130: 사용자 중단 (Ctrl+C)

Usage:
    $ oci-tf-bootstrap --profile prod --region us-ashburn-1 -o ./tf
    $ python -m cli.app --json
"""

from __future__ import annotations

import logging
import sys

import click

from cli.ui import (
    DiscoveryProgress,
    console,
    print_error,
    print_error_tree,
    print_info,
    print_panel_header,
    print_success,
    print_warning,
    setup_logging,
)
from core.auth import load_context, resolve_config_path, resolve_profile
from core.config import DEFAULT_OUTPUT_DIR, get_version
from core.discovery import discover
from core.exceptions import (
    ConfigurationError,
    DiscoveryCancelledError,
    FatalDiscoveryError,
    GenerationError,
    format_error_for_user,
)
from core.parallel import CollectedError
from core.renderer import GeneratorOptions, TerraformGenerator, output_json

logger = logging.getLogger(__name__)

VERSION = get_version()

EXIT_ERROR = 1
EXIT_INTERRUPTED = 130

SETUP_HELP = """\
OCI CLI 인증 설정 방법:

  1. OCI CLI 설치:
     brew install oci-cli           # macOS
     pip install oci-cli            # pip

  2. 초기 설정 실행:
     oci setup config

     다음 항목을 입력합니다:
     - Tenancy OCID (OCI Console > Profile > Tenancy)
     - User OCID (OCI Console > Profile > User Settings)
     - Region (예: us-ashburn-1)
     - API 키 생성

  3. 생성된 공개 키를 OCI Console에 등록:
     Profile > User Settings > API Keys > Add API Key

다른 방법 (플래그 또는 환경 변수):
  --config-file /path/to/config     # 설정 파일 경로 지정
  --config /path/to/oci-dir         # 설정 디렉토리 지정
  --profile PROFILE_NAME            # 프로파일 지정

  OCI_CLI_CONFIG_FILE=/path/to/config
  OCI_CLI_PROFILE=PROFILE_NAME

문서: https://docs.oracle.com/en-us/iaas/Content/API/Concepts/sdkconfig.htm"""


def print_setup_help() -> None:
    """OCI 설정 도움말 출력"""
    console.print()
    console.print(SETUP_HELP, markup=False, highlight=False)


def _summarize_warnings(warnings: list[CollectedError]) -> list[tuple[str, list[str]]]:
    grouped: dict[str, list[str]] = {}
    for warning in warnings:
        target = f" ({warning.resource_id})" if warning.resource_id else ""
        grouped.setdefault(warning.category, []).append(f"{warning.operation}{target}: {warning.error_code}")
    return list(grouped.items())


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(VERSION, "-v", "--version", prog_name="oci-tf-bootstrap")
@click.option("--profile", default=None, help="OCI 설정 프로파일 (기본: $OCI_CLI_PROFILE 또는 DEFAULT)")
@click.option("--config", "config_dir", default=None, help="OCI 설정 디렉토리 (파일명은 config)")
@click.option(
    "--config-file",
    "config_file",
    default=None,
    help="OCI 설정 파일 경로 (기본: $OCI_CLI_CONFIG_FILE 또는 ~/.oci/config)",
)
@click.option("-o", "--output", "output_dir", default=DEFAULT_OUTPUT_DIR, show_default=True, help="Terraform 출력 디렉토리")
@click.option("-r", "--region", default=None, help="리전 덮어쓰기 (기본: 설정 파일의 region)")
@click.option("--json", "as_json", is_flag=True, help="Terraform 대신 탐색 결과를 JSON으로 stdout에 출력")
@click.option("--always-free", "always_free", is_flag=True, help="Always-Free tier 대상 리소스만 출력")
@click.option("--debug", is_flag=True, help="디버그 로그 출력")
def cli(
    profile: str | None,
    config_dir: str | None,
    config_file: str | None,
    output_dir: str,
    region: str | None,
    as_json: bool,
    always_free: bool,
    debug: bool,
) -> None:
    """OCI Tenancy를 탐색하여 Terraform 시작 파일을 생성합니다."""
    setup_logging(debug)

    try:
        _run(profile, config_dir, config_file, output_dir, region, as_json, always_free)
    except KeyboardInterrupt:
        console.print()
        print_info("사용자에 의해 중단되었습니다")
        sys.exit(EXIT_INTERRUPTED)


def _run(
    profile: str | None,
    config_dir: str | None,
    config_file: str | None,
    output_dir: str,
    region: str | None,
    as_json: bool,
    always_free: bool,
) -> None:
    config_path = resolve_config_path(config_file, config_dir)
    profile_name = resolve_profile(profile)

    header = [
        ("Profile", profile_name),
        ("Config", config_path),
        ("Output", "stdout (JSON)" if as_json else output_dir),
    ]
    if always_free:
        header.append(("Mode", "always-free tier"))

    try:
        ctx = load_context(profile_name, config_path, region, always_free)
    except ConfigurationError as e:
        print_panel_header(f"oci-tf-bootstrap v{VERSION}", header)
        print_error(str(e))
        if e.config_key == "config_file":
            print_setup_help()
        sys.exit(EXIT_ERROR)

    header += [("Tenancy", ctx.tenancy_id), ("Region", ctx.region)]
    print_panel_header(f"oci-tf-bootstrap v{VERSION}", header)

    try:
        with DiscoveryProgress() as progress:
            result = discover(ctx, progress_tracker=progress)
    except FatalDiscoveryError as e:
        print_error(format_error_for_user(e))
        if e.cause is not None:
            print_info(format_error_for_user(e.cause))
        sys.exit(EXIT_ERROR)
    except DiscoveryCancelledError as e:
        print_error(str(e))
        sys.exit(EXIT_ERROR)

    if result.has_warnings:
        print_warning(f"일부 리소스를 탐색하지 못했습니다 ({len(result.warnings)}건, 결과에서 제외)")
        for skipped in result.skipped:
            print_info(str(skipped))
        print_error_tree(_summarize_warnings(result.warnings))

    if as_json:
        output_json(result.snapshot, click.get_text_stream("stdout"))
        return

    try:
        written = TerraformGenerator(result.snapshot, GeneratorOptions(always_free=always_free)).generate(output_dir)
    except GenerationError as e:
        print_error(format_error_for_user(e))
        sys.exit(EXIT_ERROR)

    print_success(f"Terraform 파일 {len(written)}개 생성: {output_dir}")
    for path in written:
        console.print(f"   [dim]{path.name}[/dim]")


if __name__ == "__main__":
    cli()
