"""
plugins/iam/conformance.py - IAM 구성 적합성 점검

이미 존재하는 IAM 리소스가 기대한 권한/연결을 갖고 있는지 읽기 전용으로 점검합니다.

점검 항목:
    - 정책: 기본 버전 문서의 모든 Statement가 기대 Action/Effect, Resource "*"
    - 역할/그룹: 기대 정책이 연결되어 있음
    - 사용자: 기대 그룹의 멤버임

각 점검은 독립적이며 병렬로 실행됩니다. 한 점검의 실패가 다른 점검에
영향을 주지 않습니다.

결과 상태:
    PASSED              일치
    MISMATCH            조회 성공, 기대값과 불일치
    RESOLUTION_FAILED   계정/리소스 조회 실패
    DECODE_FAILED       정책 문서 디코딩 실패
    API_ERROR           AWS API 호출 실패 (권한 없음 등)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from botocore.exceptions import BotoCoreError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from core.auth import IAMClients
from core.config import get_max_workers
from core.exceptions import APICallError, PolicyDocumentDecodeError, ResolutionError, format_error_for_user
from core.parallel import ParallelConfig, run_parallel

from .conformance_analysis import (
    ALL_BINDINGS,
    POLICY_EXPECTATIONS,
    BindingKind,
    ExpectedPermission,
    PolicyName,
    ResourceBinding,
    build_policy_arn,
    check_conformance,
    ensure_group_exists,
    ensure_role_exists,
    ensure_user_exists,
    fetch_policy_document,
    find_violations,
    has_attached_policy,
    has_group,
    list_attached_group_policies,
    list_attached_role_policies,
    list_groups_for_user,
    resolve_account_id,
)

logger = logging.getLogger(__name__)

console = Console()


class CheckStatus(Enum):
    """점검 결과 상태"""

    PASSED = "passed"
    MISMATCH = "mismatch"
    RESOLUTION_FAILED = "resolution_failed"
    DECODE_FAILED = "decode_failed"
    API_ERROR = "api_error"

    @property
    def passed(self) -> bool:
        return self is CheckStatus.PASSED


@dataclass(frozen=True)
class PolicyCheck:
    """정책 권한 점검 명세"""

    policy_name: PolicyName
    expected: ExpectedPermission

    def __str__(self) -> str:
        return self.policy_name.value


Check = Union[PolicyCheck, ResourceBinding]


@dataclass
class CheckResult:
    """점검 결과

    Attributes:
        kind: "policy" 또는 BindingKind 값
        subject: 점검 대상 (정책/역할/그룹/사용자 이름)
        target: 기대값 요약 (액션 또는 연결 대상 이름)
        status: 결과 상태
        reasons: 실패 사유
    """

    kind: str
    subject: str
    target: str
    status: CheckStatus
    reasons: list[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.status.passed

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "subject": self.subject,
            "target": self.target,
            "status": self.status.value,
            "reasons": list(self.reasons),
        }


# =============================================================================
# 개별 점검
# =============================================================================


def _describe(check: Check) -> tuple[str, str, str]:
    if isinstance(check, PolicyCheck):
        actions = check.expected.actions
        target = ", ".join(actions) if isinstance(actions, tuple) else actions
        return "policy", check.policy_name.value, f"{check.expected.effect} {target}"
    return check.kind.value, check.subject, check.target


def _failure(check: Check, error: Exception) -> CheckResult:
    kind, subject, target = _describe(check)
    if isinstance(error, ResolutionError):
        status = CheckStatus.RESOLUTION_FAILED
    elif isinstance(error, PolicyDocumentDecodeError):
        status = CheckStatus.DECODE_FAILED
    else:
        status = CheckStatus.API_ERROR
    reason = format_error_for_user(error)
    logger.warning(f"점검 실패 [{kind}: {subject}] {status.value}: {reason}")
    return CheckResult(kind, subject, target, status, [reason])


def check_policy(iam, sts, policy_name: PolicyName, expected: ExpectedPermission) -> CheckResult:
    """정책 문서가 기대 권한과 일치하는지 점검"""
    check = PolicyCheck(policy_name, expected)
    kind, subject, target = _describe(check)

    try:
        policy_arn = build_policy_arn(resolve_account_id(sts), policy_name)
        document = fetch_policy_document(iam, policy_arn)
    except (ResolutionError, PolicyDocumentDecodeError, APICallError, BotoCoreError) as e:
        return _failure(check, e)

    if check_conformance(document, expected.actions, expected.effect):
        return CheckResult(kind, subject, target, CheckStatus.PASSED)
    return CheckResult(kind, subject, target, CheckStatus.MISMATCH, find_violations(document, expected.actions, expected.effect))


_BINDING_LOOKUPS = {
    BindingKind.ROLE_POLICY: (ensure_role_exists, list_attached_role_policies, has_attached_policy),
    BindingKind.GROUP_POLICY: (ensure_group_exists, list_attached_group_policies, has_attached_policy),
    BindingKind.USER_GROUP: (ensure_user_exists, list_groups_for_user, has_group),
}


def check_binding(iam, binding: ResourceBinding) -> CheckResult:
    """역할/그룹의 정책 연결 또는 사용자의 그룹 멤버십 점검"""
    ensure_exists, list_records, is_present = _BINDING_LOOKUPS[binding.kind]
    kind, subject, target = _describe(binding)

    try:
        ensure_exists(iam, binding.subject)
        records = list_records(iam, binding.subject)
    except (ResolutionError, APICallError, BotoCoreError) as e:
        return _failure(binding, e)

    if is_present(records, binding.target):
        return CheckResult(kind, subject, target, CheckStatus.PASSED)

    found = ", ".join(str(r.get("PolicyName") or r.get("GroupName")) for r in records) or "없음"
    return CheckResult(kind, subject, target, CheckStatus.MISMATCH, [f"{binding.target} 없음 (현재: {found})"])


def execute_check(clients: IAMClients, check: Check) -> CheckResult:
    """점검 명세 하나 실행"""
    if isinstance(check, PolicyCheck):
        return check_policy(clients.iam, clients.sts, check.policy_name, check.expected)
    return check_binding(clients.iam, check)


# =============================================================================
# 전체 점검
# =============================================================================


def build_checks(
    policies: dict[PolicyName, ExpectedPermission] | None = None,
    bindings: Sequence[ResourceBinding] | None = None,
) -> list[Check]:
    """점검 명세 목록 생성 (선언 순서: 정책 → 역할 → 그룹 → 사용자)"""
    policies = POLICY_EXPECTATIONS if policies is None else policies
    bindings = ALL_BINDINGS if bindings is None else bindings

    checks: list[Check] = [PolicyCheck(name, expected) for name, expected in policies.items()]
    checks.extend(bindings)
    return checks


def run_conformance_suite(
    clients: IAMClients,
    checks: Sequence[Check] | None = None,
    max_workers: int | None = None,
) -> list[CheckResult]:
    """모든 점검을 병렬 실행

    Returns:
        점검 명세 순서와 같은 CheckResult 목록
    """
    checks = build_checks() if checks is None else checks
    config = ParallelConfig(max_workers=max_workers or get_max_workers())

    outcomes = run_parallel(lambda check: execute_check(clients, check), checks, config)

    results = []
    for outcome in outcomes:
        if outcome.success and outcome.value is not None:
            results.append(outcome.value)
        else:
            logger.error(f"예상치 못한 점검 오류 [{outcome.item}]: {outcome.error}")
            results.append(_failure(outcome.item, outcome.error or RuntimeError("결과 없음")))
    return results


# =============================================================================
# 보고
# =============================================================================

_STATUS_STYLES = {
    CheckStatus.PASSED: "green",
    CheckStatus.MISMATCH: "red",
    CheckStatus.RESOLUTION_FAILED: "yellow",
    CheckStatus.DECODE_FAILED: "magenta",
    CheckStatus.API_ERROR: "red bold",
}


def results_to_dict(results: Sequence[CheckResult]) -> dict[str, Any]:
    """JSON 출력용 요약"""
    passed = sum(1 for r in results if r.passed)
    return {
        "total": len(results),
        "passed": passed,
        "failed": len(results) - passed,
        "results": [r.to_dict() for r in results],
    }


def print_report(results: Sequence[CheckResult], out: Console | None = None) -> None:
    """점검 결과 표 출력"""
    out = out or console

    table = Table(title="IAM 구성 점검 결과", show_lines=False)
    table.add_column("종류", style="cyan")
    table.add_column("대상")
    table.add_column("기대값")
    table.add_column("결과", no_wrap=True)
    table.add_column("사유", style="dim")

    for r in results:
        style = _STATUS_STYLES[r.status]
        table.add_row(
            escape(r.kind),
            escape(r.subject),
            escape(r.target),
            f"[{style}]{r.status.value.upper()}[/{style}]",
            escape("\n".join(r.reasons)),
        )

    out.print(table)

    failed = sum(1 for r in results if not r.passed)
    if failed:
        out.print(f"[red bold]실패 {failed}건[/red bold] / 전체 {len(results)}건")
    else:
        out.print(f"[green]전체 {len(results)}건 통과[/green]")
