"""
plugins/iam/conformance_analysis/checker.py - 정책 적합성 / 연결 여부 판정

순수 함수만 포함합니다 (API 호출 없음).

판정 규칙:
    - 각 Statement의 Action은 기대값과 구조적으로 같아야 함
      (문자열 ≠ 원소 하나짜리 목록, 목록은 순서까지 일치)
    - Effect는 대소문자까지 일치
    - Resource는 와일드카드 문자열 "*" 이어야 함
    - 문서 전체는 모든 Statement가 통과해야 적합 (빈 문서는 부적합)
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from core.config import settings
from core.exceptions import ResolutionError

from .document import ActionSpec, AuthorizationDocument, AuthorizationStatement

ExpectedActions = str | Sequence[str]


def normalize_actions(actions: ExpectedActions) -> ActionSpec:
    """기대 액션을 문서 모델과 같은 형태로 변환 (목록 → 튜플, 문자열 유지)"""
    if isinstance(actions, str):
        return actions
    return tuple(actions)


def statement_conforms(
    statement: AuthorizationStatement,
    expected_actions: ExpectedActions,
    expected_effect: str,
) -> bool:
    """Statement 하나가 기대값과 일치하는지 판정"""
    return (
        statement.actions == normalize_actions(expected_actions)
        and statement.effect == expected_effect
        and statement.resource == settings.WILDCARD_RESOURCE
    )


def check_conformance(
    document: AuthorizationDocument | None,
    expected_actions: ExpectedActions,
    expected_effect: str,
) -> bool:
    """정책 문서 전체의 적합성 판정

    Args:
        document: 디코딩된 정책 문서
        expected_actions: 기대 액션 (문자열 또는 순서 있는 목록)
        expected_effect: 기대 Effect

    Returns:
        모든 Statement가 일치하면 True. 빈 문서는 False.

    Raises:
        ResolutionError: document가 None인 경우 (상위 조회 실패)
    """
    if document is None:
        raise ResolutionError("policy_document", "-", "정책 문서가 없습니다")
    if len(document) == 0:
        return False
    return all(statement_conforms(s, expected_actions, expected_effect) for s in document)


def find_violations(
    document: AuthorizationDocument,
    expected_actions: ExpectedActions,
    expected_effect: str,
) -> list[str]:
    """불일치 사유 목록 (보고서용)

    check_conformance()가 True이면 빈 목록을 반환합니다.
    """
    if len(document) == 0:
        return ["Statement가 없습니다"]

    expected = normalize_actions(expected_actions)
    violations = []
    for i, statement in enumerate(document):
        if statement.actions != expected:
            violations.append(f"Statement[{i}].Action: 예상 {_render(expected)}, 실제 {_render(statement.actions)}")
        if statement.effect != expected_effect:
            violations.append(f"Statement[{i}].Effect: 예상 {expected_effect!r}, 실제 {statement.effect!r}")
        if statement.resource != settings.WILDCARD_RESOURCE:
            violations.append(
                f"Statement[{i}].Resource: 예상 {settings.WILDCARD_RESOURCE!r}, 실제 {_render(statement.resource)}"
            )
    return violations


def _render(value: ActionSpec) -> str:
    if isinstance(value, tuple):
        return repr(list(value))
    return repr(value)


# =============================================================================
# 연결 / 멤버십 여부
# =============================================================================


def has_named_record(records: Iterable[Mapping[str, Any]], name_field: str, target: str) -> bool:
    """records 중 name_field 값이 target과 정확히 일치하는 항목이 있는지 확인"""
    return any(record.get(name_field) == target for record in records)


def has_attached_policy(records: Iterable[Mapping[str, Any]], policy_name: str) -> bool:
    """AttachedPolicies 목록에 policy_name이 있는지 확인"""
    return has_named_record(records, "PolicyName", policy_name)


def has_group(records: Iterable[Mapping[str, Any]], group_name: str) -> bool:
    """Groups 목록에 group_name이 있는지 확인"""
    return has_named_record(records, "GroupName", group_name)
