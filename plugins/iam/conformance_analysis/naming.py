"""
plugins/iam/conformance_analysis/naming.py - IAM 리소스 이름 규약

점검 대상 리소스 이름은 닫힌 집합(Enum)으로 관리합니다.
새 리소스 종류를 추가할 때는 여기에 멤버를 추가합니다.
"""

from __future__ import annotations

from enum import Enum

from core.exceptions import ValidationError

POLICY_ARN_TEMPLATE = "arn:aws:iam::{account_id}:policy/{policy_name}"


class PolicyName(str, Enum):
    """고객 관리형 정책 이름"""

    FULL_ACCESS_EC2 = "FullAccessPolicyEC2"
    FULL_ACCESS_S3 = "FullAccessPolicyS3"
    READ_ACCESS_S3 = "ReadAccessPolicyS3"


class GroupName(str, Enum):
    """IAM 그룹 이름"""

    FULL_ACCESS_EC2 = "FullAccessGroupEC2"
    FULL_ACCESS_S3 = "FullAccessGroupS3"
    READ_ACCESS_S3 = "ReadAccessGroupS3"


class RoleName(str, Enum):
    """IAM 역할 이름"""

    FULL_ACCESS_EC2 = "FullAccessRoleEC2"
    FULL_ACCESS_S3 = "FullAccessRoleS3"
    READ_ACCESS_S3 = "ReadAccessRoleS3"


class UserName(str, Enum):
    """IAM 사용자 이름"""

    FULL_ACCESS_EC2 = "FullAccessUserEC2"
    FULL_ACCESS_S3 = "FullAccessUserS3"
    READ_ACCESS_S3 = "ReadAccessUserS3"


def resource_name(name: str | Enum) -> str:
    """Enum 멤버 또는 문자열에서 실제 리소스 이름 추출"""
    if isinstance(name, Enum):
        return str(name.value)
    return name


def build_policy_arn(account_id: str, policy_name: str | PolicyName) -> str:
    """정책 ARN 생성

    Args:
        account_id: AWS 계정 ID (비어 있으면 안 됨)
        policy_name: 정책 이름

    Returns:
        arn:aws:iam::{account_id}:policy/{policy_name}

    Raises:
        ValidationError: account_id 또는 policy_name이 비어 있는 경우
    """
    name = resource_name(policy_name)
    if not account_id:
        raise ValidationError("account_id", account_id, "비어 있지 않은 계정 ID")
    if not name:
        raise ValidationError("policy_name", name, "비어 있지 않은 정책 이름")

    return POLICY_ARN_TEMPLATE.format(account_id=account_id, policy_name=name)
