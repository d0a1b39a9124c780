"""
core/config.py - 중앙 설정 관리

환경 변수와 기본값을 한 곳에서 관리합니다.

Usage:
    from core.config import settings, get_default_region, get_endpoint_url

    region = get_default_region()  # AWS_REGION > AWS_DEFAULT_REGION > "us-east-1"
    endpoint = get_endpoint_url()  # 에뮬레이터(LocalStack 등) 사용 시

환경 변수:
    AWS_PROFILE                    기본 프로파일
    AWS_REGION / AWS_DEFAULT_REGION 기본 리전
    IAM_CONFORMANCE_ENDPOINT_URL   IAM/STS 엔드포인트 (에뮬레이터)
    IAM_CONFORMANCE_MAX_WORKERS    병렬 점검 워커 수
    IAM_CONFORMANCE_LIVE           통합 테스트를 실제 계정에 대해 실행
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_ENDPOINT_URL = "IAM_CONFORMANCE_ENDPOINT_URL"
ENV_MAX_WORKERS = "IAM_CONFORMANCE_MAX_WORKERS"
ENV_LIVE = "IAM_CONFORMANCE_LIVE"


@dataclass(frozen=True)
class Settings:
    """애플리케이션 기본 설정 (불변)"""

    # IAM은 글로벌 서비스지만 STS/클라이언트 생성에 리전이 필요
    DEFAULT_REGION: str = "us-east-1"

    # API 호출
    API_TIMEOUT: int = 30  # 초
    API_CONNECT_TIMEOUT: int = 10  # 초
    API_RETRY_COUNT: int = 3

    # 병렬 점검
    MAX_WORKERS: int = 4

    # 정책 리소스 와일드카드
    WILDCARD_RESOURCE: str = "*"


settings = Settings()


# =============================================================================
# 환경 변수 헬퍼
# =============================================================================


def get_env_bool(name: str, default: bool = False) -> bool:
    """환경 변수를 bool로 해석

    "1", "true", "yes", "on" (대소문자 무시)을 True로 취급합니다.
    """
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def get_env_int(name: str, default: int) -> int:
    """환경 변수를 int로 해석 (파싱 실패 시 기본값)"""
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def get_default_region() -> str:
    """기본 리전 반환"""
    return os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION") or settings.DEFAULT_REGION


def get_default_profile() -> str | None:
    """기본 프로파일 반환 (미설정 시 None)"""
    return os.environ.get("AWS_PROFILE") or None


def get_endpoint_url() -> str | None:
    """IAM/STS 엔드포인트 URL 반환 (미설정 시 None = AWS 기본 엔드포인트)"""
    return os.environ.get(ENV_ENDPOINT_URL) or None


def get_max_workers() -> int:
    """병렬 점검 워커 수 (최소 1)"""
    return max(1, get_env_int(ENV_MAX_WORKERS, settings.MAX_WORKERS))


def is_live_mode() -> bool:
    """통합 테스트를 실제 IAM에 대해 실행할지 여부"""
    return get_env_bool(ENV_LIVE)


# =============================================================================
# 프로젝트 경로 / 버전
# =============================================================================


def get_project_root() -> Path:
    """프로젝트 루트 경로"""
    return Path(__file__).resolve().parent.parent


def get_version() -> str:
    """version.txt에서 버전 문자열을 읽음 (없으면 "0.0.0")"""
    version_file = get_project_root() / "version.txt"
    try:
        return version_file.read_text(encoding="utf-8").strip() or "0.0.0"
    except OSError:
        return "0.0.0"
