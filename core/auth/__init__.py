# core/auth/__init__.py
"""
AWS 인증 모듈 (core/auth)

점검 대상 계정에 접근하기 위한 boto3 세션과 IAM/STS 클라이언트를 만듭니다.
자격 증명은 boto3 기본 체인(환경 변수, 프로파일, 인스턴스 역할)을 따릅니다.

사용 예시:
    from core.auth import SessionConfig, create_clients

    clients = create_clients(SessionConfig(profile_name="audit", region="us-east-1"))
"""

from .session import IAMClients, SessionConfig, create_clients, create_session

__all__ = [
    "IAMClients",
    "SessionConfig",
    "create_clients",
    "create_session",
]
