"""
plugins/iam/conformance_analysis/document.py - IAM 정책 문서 모델

GetPolicyVersion이 반환한 정책 문서를 디코딩하고
정해진 스키마(Statement 목록)로 검증합니다.

정책 문서 형식:
    - IAM API 원본: percent-encoding 된 JSON 문자열
    - boto3 응답: botocore가 이미 디코딩한 dict

두 형식 모두 decode_policy_document()로 처리합니다.
스키마가 맞지 않으면 필드 접근 시점이 아니라 디코딩 시점에
PolicyDocumentDecodeError가 발생합니다.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import unquote

from core.exceptions import PolicyDocumentDecodeError, ResolutionError

# '%' 뒤에 16진수 두 자리가 오지 않으면 잘못된 escape
_INVALID_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")

ActionSpec = str | tuple[str, ...]


@dataclass(frozen=True)
class AuthorizationStatement:
    """정책 문서의 Statement 하나

    Attributes:
        actions: 액션 (문자열 하나 또는 순서가 있는 튜플)
        effect: "Allow" 또는 "Deny"
        resource: 리소스 패턴 (문자열 또는 튜플)
    """

    actions: ActionSpec
    effect: str
    resource: ActionSpec

    @classmethod
    def from_dict(cls, data: Any, index: int = 0) -> AuthorizationStatement:
        if not isinstance(data, Mapping):
            raise PolicyDocumentDecodeError(f"Statement[{index}]가 객체가 아닙니다: {type(data).__name__}")

        effect = data.get("Effect")
        if not isinstance(effect, str):
            raise PolicyDocumentDecodeError(f"Statement[{index}].Effect가 문자열이 아닙니다")

        return cls(
            actions=_string_or_strings(data.get("Action"), f"Statement[{index}].Action"),
            effect=effect,
            resource=_string_or_strings(data.get("Resource"), f"Statement[{index}].Resource"),
        )


@dataclass(frozen=True)
class AuthorizationDocument:
    """디코딩된 정책 문서 (불변)"""

    statements: tuple[AuthorizationStatement, ...]
    version: str | None = None

    def __len__(self) -> int:
        return len(self.statements)

    def __iter__(self) -> Iterator[AuthorizationStatement]:
        return iter(self.statements)

    @classmethod
    def from_dict(cls, data: Any) -> AuthorizationDocument:
        if not isinstance(data, Mapping):
            raise PolicyDocumentDecodeError(f"정책 문서가 객체가 아닙니다: {type(data).__name__}")
        if "Statement" not in data:
            raise PolicyDocumentDecodeError("Statement 필드가 없습니다")

        raw_statements = data["Statement"]
        if not isinstance(raw_statements, list):
            raise PolicyDocumentDecodeError(f"Statement가 목록이 아닙니다: {type(raw_statements).__name__}")

        version = data.get("Version")
        if version is not None and not isinstance(version, str):
            raise PolicyDocumentDecodeError("Version이 문자열이 아닙니다")

        return cls(
            statements=tuple(AuthorizationStatement.from_dict(s, i) for i, s in enumerate(raw_statements)),
            version=version,
        )


def _string_or_strings(value: Any, field_name: str) -> ActionSpec:
    """문자열은 그대로, 문자열 목록은 순서를 유지한 튜플로 변환"""
    if isinstance(value, str):
        return value
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return tuple(value)
    if value is None:
        raise PolicyDocumentDecodeError(f"{field_name} 필드가 없습니다")
    raise PolicyDocumentDecodeError(f"{field_name}는 문자열 또는 문자열 목록이어야 합니다")


def percent_decode(text: str) -> str:
    """percent-encoding 디코딩 (잘못된 escape는 오류)"""
    match = _INVALID_ESCAPE.search(text)
    if match:
        raise PolicyDocumentDecodeError(f"잘못된 percent-escape (위치 {match.start()})")
    try:
        return unquote(text, errors="strict")
    except UnicodeDecodeError as e:
        raise PolicyDocumentDecodeError("percent-decoding 결과가 UTF-8이 아닙니다", cause=e) from e


def decode_policy_document(raw: Any, policy_arn: str | None = None) -> AuthorizationDocument:
    """정책 문서 디코딩 + 스키마 검증

    Args:
        raw: percent-encoding 된 JSON 문자열 또는 디코딩된 dict
        policy_arn: 오류 메시지용 정책 ARN

    Returns:
        AuthorizationDocument

    Raises:
        ResolutionError: 문서가 없는 경우 (None)
        PolicyDocumentDecodeError: 디코딩 또는 스키마 검증 실패
    """
    if raw is None:
        raise ResolutionError("policy_document", policy_arn or "-", "정책 문서가 응답에 없습니다")

    try:
        if isinstance(raw, str):
            try:
                data = json.loads(percent_decode(raw))
            except (ValueError, RecursionError) as e:
                # 과도한 중첩은 RecursionError
                raise PolicyDocumentDecodeError("JSON 파싱 실패", cause=e) from e
        else:
            data = raw

        return AuthorizationDocument.from_dict(data)
    except PolicyDocumentDecodeError as e:
        if policy_arn and e.policy_arn is None:
            raise PolicyDocumentDecodeError(e.reason, policy_arn=policy_arn, cause=e.cause) from e
        raise
