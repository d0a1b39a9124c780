"""
plugins/iam/conformance_analysis/expectations.py - 기대 권한 / 연결 정의

점검의 정답(ground truth)입니다. 정적으로 선언되며 변경되지 않습니다.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from core.config import settings

from .checker import ExpectedActions, normalize_actions
from .document import ActionSpec
from .naming import GroupName, PolicyName, RoleName, UserName

POLICY_DOCUMENT_VERSION = "2012-10-17"


@dataclass(frozen=True)
class ExpectedPermission:
    """정책 하나의 기대 권한

    Attributes:
        actions: 기대 액션 (문자열 또는 순서 있는 튜플)
        effect: 기대 Effect
    """

    actions: ActionSpec
    effect: str = "Allow"

    @classmethod
    def of(cls, actions: ExpectedActions, effect: str = "Allow") -> ExpectedPermission:
        return cls(actions=normalize_actions(actions), effect=effect)

    def to_policy_document(self) -> dict[str, Any]:
        """이 기대값과 일치하는 IAM 정책 문서(dict) 생성"""
        action: Any = list(self.actions) if isinstance(self.actions, tuple) else self.actions
        return {
            "Version": POLICY_DOCUMENT_VERSION,
            "Statement": [
                {
                    "Effect": self.effect,
                    "Action": action,
                    "Resource": settings.WILDCARD_RESOURCE,
                }
            ],
        }


class BindingKind(Enum):
    """리소스 간 연결 종류"""

    ROLE_POLICY = "role_policy"  # 역할 ← 정책 연결
    GROUP_POLICY = "group_policy"  # 그룹 ← 정책 연결
    USER_GROUP = "user_group"  # 사용자 → 그룹 멤버십


@dataclass(frozen=True)
class ResourceBinding:
    """두 리소스 간 기대 연결

    Attributes:
        kind: 연결 종류
        subject: 조회 대상 (역할/그룹/사용자 이름)
        target: subject에 연결되어 있어야 하는 이름 (정책/그룹 이름)
    """

    kind: BindingKind
    subject: str
    target: str

    def __str__(self) -> str:
        return f"{self.subject} -> {self.target}"


POLICY_EXPECTATIONS: dict[PolicyName, ExpectedPermission] = {
    PolicyName.FULL_ACCESS_EC2: ExpectedPermission.of("ec2:*", "Allow"),
    PolicyName.FULL_ACCESS_S3: ExpectedPermission.of("s3:*", "Allow"),
    PolicyName.READ_ACCESS_S3: ExpectedPermission.of(["s3:Describe*", "s3:Get*", "s3:List*"], "Allow"),
}

ROLE_POLICY_BINDINGS: tuple[ResourceBinding, ...] = (
    ResourceBinding(BindingKind.ROLE_POLICY, RoleName.FULL_ACCESS_EC2.value, PolicyName.FULL_ACCESS_EC2.value),
    ResourceBinding(BindingKind.ROLE_POLICY, RoleName.FULL_ACCESS_S3.value, PolicyName.FULL_ACCESS_S3.value),
    ResourceBinding(BindingKind.ROLE_POLICY, RoleName.READ_ACCESS_S3.value, PolicyName.READ_ACCESS_S3.value),
)

GROUP_POLICY_BINDINGS: tuple[ResourceBinding, ...] = (
    ResourceBinding(BindingKind.GROUP_POLICY, GroupName.FULL_ACCESS_EC2.value, PolicyName.FULL_ACCESS_EC2.value),
    ResourceBinding(BindingKind.GROUP_POLICY, GroupName.FULL_ACCESS_S3.value, PolicyName.FULL_ACCESS_S3.value),
    ResourceBinding(BindingKind.GROUP_POLICY, GroupName.READ_ACCESS_S3.value, PolicyName.READ_ACCESS_S3.value),
)

USER_GROUP_BINDINGS: tuple[ResourceBinding, ...] = (
    ResourceBinding(BindingKind.USER_GROUP, UserName.FULL_ACCESS_EC2.value, GroupName.FULL_ACCESS_EC2.value),
    ResourceBinding(BindingKind.USER_GROUP, UserName.FULL_ACCESS_S3.value, GroupName.FULL_ACCESS_S3.value),
    ResourceBinding(BindingKind.USER_GROUP, UserName.READ_ACCESS_S3.value, GroupName.READ_ACCESS_S3.value),
)

ALL_BINDINGS: tuple[ResourceBinding, ...] = ROLE_POLICY_BINDINGS + GROUP_POLICY_BINDINGS + USER_GROUP_BINDINGS
