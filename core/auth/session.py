"""
core/auth/session.py - boto3 세션 / 클라이언트 생성

프로파일 또는 환경 변수 자격 증명으로 boto3 Session을 만들고,
점검에 필요한 IAM/STS 클라이언트 쌍을 생성합니다.

Usage:
    from core.auth import SessionConfig, create_clients

    clients = create_clients(SessionConfig(profile_name="audit"))
    account_id = clients.sts.get_caller_identity()["Account"]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import boto3
from botocore.exceptions import ProfileNotFound

from core.config import get_default_profile, get_default_region, get_endpoint_url
from core.exceptions import ConfigError
from core.parallel.client import get_client

logger = logging.getLogger(__name__)


@dataclass
class SessionConfig:
    """세션 설정

    Attributes:
        profile_name: AWS 프로파일 (None이면 AWS_PROFILE 또는 기본 자격 증명 체인)
        region: 리전 (None이면 AWS_REGION / AWS_DEFAULT_REGION / 기본값)
        endpoint_url: IAM/STS 엔드포인트 (에뮬레이터용)
    """

    profile_name: str | None = field(default_factory=get_default_profile)
    region: str = field(default_factory=get_default_region)
    endpoint_url: str | None = field(default_factory=get_endpoint_url)

    @property
    def name(self) -> str:
        return self.profile_name or "default-credentials"


@dataclass
class IAMClients:
    """점검에 사용하는 클라이언트 쌍

    boto3 client는 스레드 세이프하므로 병렬 점검에서 공유합니다.
    """

    iam: Any
    sts: Any


def create_session(config: SessionConfig | None = None) -> boto3.Session:
    """boto3 Session 생성

    Raises:
        ConfigError: 프로파일을 찾을 수 없는 경우
    """
    config = config or SessionConfig()
    try:
        session = boto3.Session(profile_name=config.profile_name, region_name=config.region)
    except ProfileNotFound as e:
        raise ConfigError("profile", f"프로파일을 찾을 수 없습니다: {config.profile_name}", cause=e) from e

    logger.debug(f"세션 생성: {config.name} ({config.region})")
    return session


def create_clients(config: SessionConfig | None = None, session: boto3.Session | None = None) -> IAMClients:
    """IAM/STS 클라이언트 생성

    Args:
        config: 세션 설정 (None이면 환경 기본값)
        session: 기존 세션 (None이면 config로 생성)
    """
    config = config or SessionConfig()
    session = session or create_session(config)

    return IAMClients(
        iam=get_client(session, "iam", region_name=config.region, endpoint_url=config.endpoint_url),
        sts=get_client(session, "sts", region_name=config.region, endpoint_url=config.endpoint_url),
    )
