"""
IAM Conformance Analysis 모듈

정책 문서 모델, 적합성 판정, 이름 규약, 기대값, 조회 컴포넌트 제공
"""

from .checker import (
    check_conformance,
    find_violations,
    has_attached_policy,
    has_group,
    has_named_record,
    statement_conforms,
)
from .collector import (
    ensure_group_exists,
    ensure_role_exists,
    ensure_user_exists,
    fetch_policy_document,
    list_attached_group_policies,
    list_attached_role_policies,
    list_groups_for_user,
    resolve_account_id,
)
from .document import AuthorizationDocument, AuthorizationStatement, decode_policy_document
from .expectations import (
    ALL_BINDINGS,
    GROUP_POLICY_BINDINGS,
    POLICY_EXPECTATIONS,
    ROLE_POLICY_BINDINGS,
    USER_GROUP_BINDINGS,
    BindingKind,
    ExpectedPermission,
    ResourceBinding,
)
from .naming import GroupName, PolicyName, RoleName, UserName, build_policy_arn

__all__ = [
    # Document
    "AuthorizationDocument",
    "AuthorizationStatement",
    "decode_policy_document",
    # Checker
    "check_conformance",
    "find_violations",
    "has_attached_policy",
    "has_group",
    "has_named_record",
    "statement_conforms",
    # Collector
    "ensure_group_exists",
    "ensure_role_exists",
    "ensure_user_exists",
    "fetch_policy_document",
    "list_attached_group_policies",
    "list_attached_role_policies",
    "list_groups_for_user",
    "resolve_account_id",
    # Expectations
    "ALL_BINDINGS",
    "GROUP_POLICY_BINDINGS",
    "POLICY_EXPECTATIONS",
    "ROLE_POLICY_BINDINGS",
    "USER_GROUP_BINDINGS",
    "BindingKind",
    "ExpectedPermission",
    "ResourceBinding",
    # Naming
    "GroupName",
    "PolicyName",
    "RoleName",
    "UserName",
    "build_policy_arn",
]
