"""
core/parallel/client.py - boto3 client 생성 헬퍼

Retry + 타임아웃 + 연결 풀이 설정된 boto3 client를 생성합니다.
재시도 정책은 여기(botocore 전송 계층)에서만 적용되며,
점검 로직 자체는 재시도하지 않습니다.

Example:
    from core.parallel.client import get_client

    iam = get_client(session, "iam")

    # 에뮬레이터 (LocalStack 등)
    iam = get_client(session, "iam", endpoint_url="http://localhost:4566")
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal, cast

from core.config import get_endpoint_url, settings

if TYPE_CHECKING:
    import boto3

# Retry mode 타입 (botocore TypedDict와 호환)
RetryMode = Literal["legacy", "standard", "adaptive"]

DEFAULT_MAX_ATTEMPTS = settings.API_RETRY_COUNT
DEFAULT_RETRY_MODE: RetryMode = "standard"
DEFAULT_CONNECT_TIMEOUT = settings.API_CONNECT_TIMEOUT  # 초
DEFAULT_READ_TIMEOUT = settings.API_TIMEOUT  # 초
DEFAULT_MAX_POOL_CONNECTIONS = 10  # MAX_WORKERS 이상 권장


def get_client(
    session: boto3.Session,
    service_name: str,
    region_name: str | None = None,
    endpoint_url: str | None = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    retry_mode: RetryMode = DEFAULT_RETRY_MODE,
    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT,
    read_timeout: int = DEFAULT_READ_TIMEOUT,
    max_pool_connections: int = DEFAULT_MAX_POOL_CONNECTIONS,
    **kwargs: Any,
) -> Any:
    """Retry가 적용된 boto3 client 생성

    Args:
        session: boto3 Session
        service_name: AWS 서비스 이름 (iam, sts 등)
        region_name: 리전 (None이면 세션 기본값)
        endpoint_url: 엔드포인트 (None이면 IAM_CONFORMANCE_ENDPOINT_URL, 그것도 없으면 AWS 기본값)
        max_attempts: 최대 시도 횟수
        retry_mode: 재시도 모드
        connect_timeout: 연결 타임아웃 (초)
        read_timeout: 읽기 타임아웃 (초)
        max_pool_connections: HTTP 연결 풀 크기
        **kwargs: session.client()에 전달할 추가 인자

    Returns:
        boto3 client
    """
    from botocore.config import Config

    config = Config(
        retries={"max_attempts": max_attempts, "mode": retry_mode},  # pyright: ignore[reportArgumentType]
        connect_timeout=connect_timeout,
        read_timeout=read_timeout,
        max_pool_connections=max_pool_connections,
    )

    # 기존 config가 있으면 병합
    if "config" in kwargs:
        existing = kwargs.pop("config")
        config = config.merge(existing)

    endpoint_url = endpoint_url or get_endpoint_url()
    if endpoint_url:
        kwargs["endpoint_url"] = endpoint_url

    # cast to Any to bypass boto3-stubs Literal type requirements
    return session.client(  # pyright: ignore[reportCallIssue]
        cast(Any, service_name),
        region_name=region_name,
        config=config,
        **kwargs,
    )
