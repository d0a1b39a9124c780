"""
plugins/iam/conformance_analysis/collector.py - IAM 읽기 전용 조회

모든 함수는 boto3 client를 인자로 받습니다. 전역 클라이언트를 두지 않습니다.

오류 처리:
    - 응답에 기대한 필드가 없거나 NoSuchEntity → ResolutionError
    - 그 외 ClientError → APICallError
    - 재시도는 client의 botocore retry 설정에 맡깁니다
"""

from __future__ import annotations

import logging
from typing import Any

from botocore.exceptions import ClientError

from core.exceptions import APICallError, ResolutionError, is_not_found

from .document import AuthorizationDocument, decode_policy_document

logger = logging.getLogger(__name__)


def _raise_for_client_error(e: ClientError, service: str, operation: str, resource_type: str, identifier: str) -> None:
    if is_not_found(e):
        raise ResolutionError(resource_type, identifier, "존재하지 않습니다", cause=e) from e
    raise APICallError.from_client_error(service, operation, e) from e


# =============================================================================
# 계정 / 정책
# =============================================================================


def resolve_account_id(sts) -> str:
    """현재 자격 증명의 AWS 계정 ID 조회

    Raises:
        ResolutionError: 응답에 Account가 없는 경우
        APICallError: STS 호출 실패
    """
    try:
        identity = sts.get_caller_identity()
    except ClientError as e:
        raise APICallError.from_client_error("sts", "get_caller_identity", e) from e

    account_id = identity.get("Account")
    if not account_id:
        raise ResolutionError("account", "caller", "GetCallerIdentity 응답에 Account가 없습니다")

    logger.debug(f"계정 ID 확인: {account_id}")
    return account_id


def fetch_policy_document(iam, policy_arn: str) -> AuthorizationDocument:
    """정책의 기본 버전 문서를 조회하고 디코딩

    Raises:
        ResolutionError: 정책/버전/문서가 없는 경우
        PolicyDocumentDecodeError: 문서 디코딩 실패
        APICallError: IAM 호출 실패
    """
    try:
        policy = iam.get_policy(PolicyArn=policy_arn).get("Policy")
    except ClientError as e:
        _raise_for_client_error(e, "iam", "get_policy", "policy", policy_arn)

    if not policy:
        raise ResolutionError("policy", policy_arn, "GetPolicy 응답에 Policy가 없습니다")

    version_id = policy.get("DefaultVersionId")
    if not version_id:
        raise ResolutionError("policy", policy_arn, "DefaultVersionId가 없습니다")

    try:
        version = iam.get_policy_version(PolicyArn=policy_arn, VersionId=version_id).get("PolicyVersion")
    except ClientError as e:
        _raise_for_client_error(e, "iam", "get_policy_version", "policy_version", f"{policy_arn}:{version_id}")

    if not version:
        raise ResolutionError("policy_version", f"{policy_arn}:{version_id}", "PolicyVersion이 없습니다")

    logger.debug(f"정책 문서 조회: {policy_arn} ({version_id})")
    return decode_policy_document(version.get("Document"), policy_arn=policy_arn)


# =============================================================================
# 역할 / 그룹 / 사용자 존재 확인
# =============================================================================


def ensure_role_exists(iam, role_name: str) -> dict[str, Any]:
    """역할 조회 (없으면 ResolutionError)"""
    try:
        role = iam.get_role(RoleName=role_name).get("Role")
    except ClientError as e:
        _raise_for_client_error(e, "iam", "get_role", "role", role_name)
    if not role:
        raise ResolutionError("role", role_name, "GetRole 응답에 Role이 없습니다")
    return role


def ensure_group_exists(iam, group_name: str) -> dict[str, Any]:
    """그룹 조회 (없으면 ResolutionError)"""
    try:
        group = iam.get_group(GroupName=group_name).get("Group")
    except ClientError as e:
        _raise_for_client_error(e, "iam", "get_group", "group", group_name)
    if not group:
        raise ResolutionError("group", group_name, "GetGroup 응답에 Group이 없습니다")
    return group


def ensure_user_exists(iam, user_name: str) -> dict[str, Any]:
    """사용자 조회 (없으면 ResolutionError)"""
    try:
        user = iam.get_user(UserName=user_name).get("User")
    except ClientError as e:
        _raise_for_client_error(e, "iam", "get_user", "user", user_name)
    if not user:
        raise ResolutionError("user", user_name, "GetUser 응답에 User가 없습니다")
    return user


# =============================================================================
# 연결 / 멤버십 목록
# =============================================================================


def _paginate(iam, operation: str, result_key: str, resource_type: str, identifier: str, **params) -> list[dict]:
    records: list[dict] = []
    try:
        paginator = iam.get_paginator(operation)
        for page in paginator.paginate(**params):
            if result_key not in page:
                raise ResolutionError(resource_type, identifier, f"{operation} 응답에 {result_key}가 없습니다")
            records.extend(page[result_key])
    except ClientError as e:
        _raise_for_client_error(e, "iam", operation, resource_type, identifier)

    logger.debug(f"{operation} [{identifier}]: {len(records)}건")
    return records


def list_attached_role_policies(iam, role_name: str) -> list[dict]:
    """역할에 연결된 관리형 정책 목록 ({PolicyName, PolicyArn})"""
    return _paginate(iam, "list_attached_role_policies", "AttachedPolicies", "role", role_name, RoleName=role_name)


def list_attached_group_policies(iam, group_name: str) -> list[dict]:
    """그룹에 연결된 관리형 정책 목록 ({PolicyName, PolicyArn})"""
    return _paginate(
        iam, "list_attached_group_policies", "AttachedPolicies", "group", group_name, GroupName=group_name
    )


def list_groups_for_user(iam, user_name: str) -> list[dict]:
    """사용자가 속한 그룹 목록 ({GroupName, ...})"""
    return _paginate(iam, "list_groups_for_user", "Groups", "user", user_name, UserName=user_name)
