"""
tests/conftest.py - pytest 공통 픽스처

AWS API 모킹과 테스트 헬퍼를 제공합니다.

실행 모드:
    기본: moto(mock_aws)로 IAM/STS를 에뮬레이션하고 기대 리소스를 생성
    --live 또는 IAM_CONFORMANCE_LIVE=1: 실제 계정의 기존 리소스를 점검

Usage:
    def test_something(iam_clients):
        # iam_clients: IAMClients(iam=..., sts=...)
        pass
"""

import json
import sys
from pathlib import Path
from typing import Any, Dict, List
from unittest.mock import MagicMock

import boto3
import pytest
from moto import mock_aws

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from core.auth import IAMClients, SessionConfig, create_clients  # noqa: E402
from core.config import ENV_ENDPOINT_URL, is_live_mode  # noqa: E402
from plugins.iam.conformance_analysis import (  # noqa: E402
    GROUP_POLICY_BINDINGS,
    POLICY_EXPECTATIONS,
    ROLE_POLICY_BINDINGS,
    USER_GROUP_BINDINGS,
)

TEST_REGION = "us-east-1"
MOTO_ACCOUNT_ID = "123456789012"

EC2_TRUST_POLICY = {
    "Version": "2012-10-17",
    "Statement": [
        {
            "Effect": "Allow",
            "Principal": {"Service": "ec2.amazonaws.com"},
            "Action": "sts:AssumeRole",
        }
    ],
}


# =============================================================================
# 실행 모드
# =============================================================================


def pytest_addoption(parser):
    parser.addoption(
        "--live",
        action="store_true",
        default=False,
        help="moto 대신 실제 AWS 계정의 IAM 리소스를 점검",
    )


def is_live(config) -> bool:
    return bool(config.getoption("--live")) or is_live_mode()


# =============================================================================
# 환경 설정
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment(request, monkeypatch):
    """테스트 환경 설정 (live 모드에서는 실제 자격 증명 유지)"""
    if is_live(request.config):
        yield
        return

    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", TEST_REGION)
    monkeypatch.delenv("AWS_REGION", raising=False)
    monkeypatch.delenv("AWS_PROFILE", raising=False)
    monkeypatch.delenv(ENV_ENDPOINT_URL, raising=False)

    yield


# =============================================================================
# moto 픽스처
# =============================================================================


def seed_iam_resources(iam) -> Dict[str, str]:
    """기대값과 일치하는 정책/역할/그룹/사용자 생성

    Returns:
        정책 이름 → ARN
    """
    policy_arns = {}
    for name, expected in POLICY_EXPECTATIONS.items():
        response = iam.create_policy(
            PolicyName=name.value,
            PolicyDocument=json.dumps(expected.to_policy_document()),
        )
        policy_arns[name.value] = response["Policy"]["Arn"]

    for binding in ROLE_POLICY_BINDINGS:
        iam.create_role(RoleName=binding.subject, AssumeRolePolicyDocument=json.dumps(EC2_TRUST_POLICY))
        iam.attach_role_policy(RoleName=binding.subject, PolicyArn=policy_arns[binding.target])

    for binding in GROUP_POLICY_BINDINGS:
        iam.create_group(GroupName=binding.subject)
        iam.attach_group_policy(GroupName=binding.subject, PolicyArn=policy_arns[binding.target])

    for binding in USER_GROUP_BINDINGS:
        iam.create_user(UserName=binding.subject)
        iam.add_user_to_group(UserName=binding.subject, GroupName=binding.target)

    return policy_arns


@pytest.fixture
def moto_clients():
    """moto를 사용한 빈 IAM/STS"""
    with mock_aws():
        session = boto3.Session(region_name=TEST_REGION)
        yield create_clients(SessionConfig(profile_name=None, region=TEST_REGION, endpoint_url=None), session=session)


@pytest.fixture
def seeded_clients(moto_clients):
    """기대 리소스가 생성된 moto IAM/STS"""
    seed_iam_resources(moto_clients.iam)
    yield moto_clients


@pytest.fixture
def iam_clients(request):
    """통합 점검 대상 클라이언트 (live 또는 seeded moto)"""
    if is_live(request.config):
        yield create_clients(SessionConfig())
        return

    yield request.getfixturevalue("seeded_clients")


# =============================================================================
# MagicMock 클라이언트
# =============================================================================


@pytest.fixture
def mock_sts_client():
    """STS 클라이언트 모킹"""
    mock_client = MagicMock()

    mock_client.get_caller_identity.return_value = {
        "UserId": "AIDATEST123",
        "Account": MOTO_ACCOUNT_ID,
        "Arn": f"arn:aws:iam::{MOTO_ACCOUNT_ID}:user/test-user",
    }

    yield mock_client


@pytest.fixture
def mock_iam_client():
    """IAM 클라이언트 모킹 (FullAccessPolicyEC2 하나)"""
    mock_client = MagicMock()

    mock_client.get_policy.return_value = {
        "Policy": {
            "PolicyName": "FullAccessPolicyEC2",
            "Arn": f"arn:aws:iam::{MOTO_ACCOUNT_ID}:policy/FullAccessPolicyEC2",
            "DefaultVersionId": "v1",
        }
    }
    mock_client.get_policy_version.return_value = {
        "PolicyVersion": {
            "VersionId": "v1",
            "IsDefaultVersion": True,
            "Document": {
                "Version": "2012-10-17",
                "Statement": [{"Effect": "Allow", "Action": "ec2:*", "Resource": "*"}],
            },
        }
    }

    yield mock_client


@pytest.fixture
def mock_clients(mock_iam_client, mock_sts_client):
    """MagicMock IAMClients"""
    return IAMClients(iam=mock_iam_client, sts=mock_sts_client)


# =============================================================================
# 유틸리티 함수
# =============================================================================


def set_paginated_response(mock_client: MagicMock, pages: List[Dict[str, Any]]) -> MagicMock:
    """get_paginator().paginate() 응답 설정 헬퍼"""
    mock_paginator = MagicMock()
    mock_paginator.paginate.return_value = pages
    mock_client.get_paginator.return_value = mock_paginator
    return mock_paginator


def create_mock_client_error(
    error_code: str,
    error_message: str = "Test error",
    operation: str = "TestOperation",
) -> Exception:
    """ClientError 생성 헬퍼"""
    from botocore.exceptions import ClientError

    return ClientError(
        {
            "Error": {
                "Code": error_code,
                "Message": error_message,
            }
        },
        operation,
    )


@pytest.fixture
def client_error():
    """ClientError 팩토리 픽스처"""
    return create_mock_client_error


@pytest.fixture
def paginated():
    """페이지네이터 응답 설정 픽스처"""
    return set_paginated_response
