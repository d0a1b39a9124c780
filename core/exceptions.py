"""
core/exceptions.py - 통합 예외 계층 구조

애플리케이션 전체에서 사용되는 예외 클래스들을 정의합니다.
일관된 예외 처리와 에러 메시지를 제공합니다.

예외 계층 구조:
    IAMCheckError (베이스)
    ├── APICallError (AWS API 호출 실패)
    ├── ConfigError (설정 관련)
    ├── ValidationError (입력 검증)
    └── ConformanceError (점검 실패 - 불일치 이외)
        ├── ResolutionError (리소스/자격 증명 조회 실패)
        └── PolicyDocumentDecodeError (정책 문서 디코딩/스키마 실패)

정책 내용이 기대값과 다른 경우(불일치)는 예외가 아니라 정상적인 점검
결과(False)로 반환됩니다.

Usage:
    from core.exceptions import APICallError, ResolutionError

    try:
        role = iam.get_role(RoleName=name)
    except ClientError as e:
        if is_not_found(e):
            raise ResolutionError("role", name, "존재하지 않습니다", cause=e) from e
        raise APICallError.from_client_error("iam", "get_role", e) from e
"""

from typing import Any, Dict, Optional

# =============================================================================
# 베이스 예외
# =============================================================================


class IAMCheckError(Exception):
    """IAM 점검 기본 예외 클래스

    모든 커스텀 예외의 베이스 클래스입니다.

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
    """

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """예외 정보를 딕셔너리로 반환"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
        }


# =============================================================================
# AWS API 호출 관련 예외
# =============================================================================


class APICallError(IAMCheckError):
    """AWS API 호출 관련 예외

    boto3/botocore의 ClientError를 래핑하여 일관된 예외 처리를 제공합니다.
    """

    def __init__(
        self,
        service: str,
        operation: str,
        error_code: Optional[str] = None,
        error_message: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        message = f"{service}.{operation}"
        if error_code:
            message = f"{message} 실패 ({error_code})"
        if error_message:
            message = f"{message}: {error_message}"

        super().__init__(message)
        self.cause = cause
        self.service = service
        self.operation = operation
        self.error_code = error_code
        self.error_message = error_message
        self.details.update(
            {
                "service": service,
                "operation": operation,
                "error_code": error_code,
            }
        )

    def __str__(self) -> str:
        # ClientError 메시지는 이미 message에 포함됨
        return self.message

    @classmethod
    def from_client_error(
        cls,
        service: str,
        operation: str,
        client_error: Exception,
    ) -> "APICallError":
        """botocore.exceptions.ClientError로부터 생성

        Args:
            service: AWS 서비스 이름
            operation: API 작업 이름
            client_error: ClientError 예외

        Returns:
            APICallError 인스턴스
        """
        error_code = None
        error_message = None

        if hasattr(client_error, "response"):
            error_info = client_error.response.get("Error", {})
            error_code = error_info.get("Code")
            error_message = error_info.get("Message")

        return cls(
            service=service,
            operation=operation,
            error_code=error_code,
            error_message=error_message,
            cause=client_error,
        )


# =============================================================================
# 설정 / 검증 관련 예외
# =============================================================================


class ConfigError(IAMCheckError):
    """설정 관련 예외"""

    def __init__(
        self,
        key: str,
        message: str,
        cause: Optional[Exception] = None,
    ):
        full_message = f"설정 오류 [{key}]: {message}"
        super().__init__(full_message, cause)
        self.config_key = key
        self.details["config_key"] = key


class ValidationError(IAMCheckError):
    """입력 검증 오류"""

    def __init__(
        self,
        field: str,
        value: Any,
        expected: str,
        cause: Optional[Exception] = None,
    ):
        message = f"검증 오류 [{field}]: 예상값 '{expected}', 실제값 '{value}'"
        super().__init__(message, cause)
        self.field = field
        self.value = value
        self.expected = expected
        self.details.update(
            {
                "field": field,
                "value": str(value),
                "expected": expected,
            }
        )


# =============================================================================
# 점검 관련 예외
# =============================================================================


class ConformanceError(IAMCheckError):
    """점검을 완료할 수 없는 경우의 베이스 예외

    정책 불일치와는 구분됩니다. 불일치는 점검 결과(False)이며
    이 예외 계열은 점검 자체가 성립하지 않는 상황을 나타냅니다.
    """


class ResolutionError(ConformanceError):
    """자격 증명 또는 리소스 조회 실패

    API 응답에 기대한 리소스가 없거나(NoSuchEntity 포함),
    응답 필드가 누락된 경우 발생합니다. 재시도하지 않습니다.
    """

    def __init__(
        self,
        resource_type: str,
        identifier: str,
        reason: str,
        cause: Optional[Exception] = None,
    ):
        message = f"조회 실패 [{resource_type}: {identifier}]: {reason}"
        super().__init__(message, cause)
        self.resource_type = resource_type
        self.identifier = identifier
        self.reason = reason
        self.details.update({"resource_type": resource_type, "identifier": identifier})


class PolicyDocumentDecodeError(ConformanceError):
    """정책 문서를 percent-decode / JSON 파싱 / 스키마 검증할 수 없는 경우"""

    def __init__(
        self,
        reason: str,
        policy_arn: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        message = f"정책 문서 디코딩 실패: {reason}"
        if policy_arn:
            message = f"정책 문서 디코딩 실패 [{policy_arn}]: {reason}"
        super().__init__(message, cause)
        self.reason = reason
        self.policy_arn = policy_arn
        if policy_arn:
            self.details["policy_arn"] = policy_arn


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================

ACCESS_DENIED_CODES = frozenset({"AccessDenied", "AccessDeniedException", "UnauthorizedAccess"})

NOT_FOUND_CODES = frozenset({"NoSuchEntity", "NoSuchEntityException", "NotFoundException", "ResourceNotFoundException"})


def get_error_code(error: Exception) -> str:
    """예외에서 AWS 에러 코드를 추출 (없으면 빈 문자열)"""
    if isinstance(error, APICallError):
        return error.error_code or ""
    if hasattr(error, "response"):
        return error.response.get("Error", {}).get("Code", "") or ""
    return ""


def is_access_denied(error: Exception) -> bool:
    """액세스 거부 오류인지 확인

    Args:
        error: 확인할 예외

    Returns:
        액세스 거부 오류이면 True
    """
    return get_error_code(error) in ACCESS_DENIED_CODES


def is_not_found(error: Exception) -> bool:
    """리소스를 찾을 수 없는 오류인지 확인

    Args:
        error: 확인할 예외

    Returns:
        리소스 없음 오류이면 True
    """
    return get_error_code(error) in NOT_FOUND_CODES


_FRIENDLY_MESSAGES = {
    "ExpiredToken": "인증 토큰이 만료되었습니다. 다시 로그인하세요.",
    "InvalidClientTokenId": "잘못된 자격 증명입니다.",
    "Throttling": "요청이 너무 많습니다. 잠시 후 다시 시도하세요.",
}


def format_error_for_user(error: Exception) -> str:
    """사용자에게 표시할 에러 메시지 포맷팅

    알려진 AWS 에러 코드에는 조치 안내를 덧붙입니다.

    Args:
        error: 예외

    Returns:
        사용자 친화적인 에러 메시지
    """
    message = str(error)
    if is_access_denied(error):
        return f"{message} - 권한이 없습니다. IAM 읽기 권한을 확인하세요."

    hint = _FRIENDLY_MESSAGES.get(get_error_code(error))
    if hint:
        return f"{message} - {hint}"
    return message
