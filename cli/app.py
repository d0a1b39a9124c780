"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 CLI 애플리케이션 진입점입니다.

명령어 구조:
    iamcheck --version                  # 버전 표시
    iamcheck check                      # 기본 자격 증명으로 점검
    iamcheck check -p audit -r us-east-1
    iamcheck check --endpoint-url http://localhost:4566   # 에뮬레이터
    iamcheck check -f json              # JSON 출력 (CI용)

종료 코드:
    0: 모든 점검 통과
    1: 하나 이상 실패
    2: 세션/설정 오류
"""

import json
import logging
import sys

import click
from rich.markup import escape

from cli.ui.console import console, get_logger, print_error
from core.auth import SessionConfig, create_clients
from core.config import get_default_profile, get_default_region, get_endpoint_url, get_max_workers, get_version
from core.exceptions import ConfigError, format_error_for_user
from plugins.iam.conformance import print_report, results_to_dict, run_conformance_suite

# Keep lightweight, centralized logging config
# WARNING 레벨로 설정하여 INFO 로그가 점검 출력에 섞이지 않도록 함
logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

VERSION = get_version()

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG_ERROR = 2


@click.group()
@click.version_option(version=VERSION, prog_name="iamcheck")
def cli():
    """IAM 구성 적합성 점검 도구"""


@cli.command("check")
@click.option("-p", "--profile", default=get_default_profile, help="AWS 프로파일 (기본: AWS_PROFILE)")
@click.option("-r", "--region", default=get_default_region, show_default="AWS_REGION", help="리전")
@click.option("--endpoint-url", default=get_endpoint_url, help="IAM/STS 엔드포인트 (에뮬레이터)")
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(["console", "json"]),
    default="console",
    show_default=True,
    help="출력 형식",
)
@click.option("-w", "--max-workers", type=click.IntRange(min=1), default=get_max_workers, help="병렬 점검 워커 수")
@click.option("--debug", is_flag=True, help="디버그 로그 출력")
def check_command(profile, region, endpoint_url, output_format, max_workers, debug):
    """정책 권한, 역할/그룹 정책 연결, 사용자 그룹 멤버십 점검"""
    if debug:
        for name in ("core", "plugins"):
            get_logger(name, logging.DEBUG)

    config = SessionConfig(profile_name=profile or None, region=region, endpoint_url=endpoint_url or None)
    try:
        clients = create_clients(config)
    except ConfigError as e:
        print_error(escape(format_error_for_user(e)))
        sys.exit(EXIT_CONFIG_ERROR)

    results = run_conformance_suite(clients, max_workers=max_workers)

    if output_format == "json":
        click.echo(json.dumps(results_to_dict(results), ensure_ascii=False, indent=2))
    else:
        print_report(results, out=console)

    sys.exit(EXIT_OK if all(r.passed for r in results) else EXIT_FAILED)


if __name__ == "__main__":
    cli()
