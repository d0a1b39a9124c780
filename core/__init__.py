# core/__init__.py
"""
core - IAM 점검 인프라

아키텍처:
    core/
    ├── auth/           # boto3 세션 / IAM·STS 클라이언트
    ├── parallel/       # retry 설정 client, 독립 작업 병렬 실행
    ├── config.py       # 중앙 설정 관리
    └── exceptions.py   # 통합 예외 계층

Usage:
    from core.config import settings, get_default_region
    from core.auth import SessionConfig, create_clients
    from core.exceptions import ResolutionError, is_not_found
"""

from core import auth, config, exceptions, parallel

__all__: list[str] = [
    # 서브패키지
    "auth",
    "parallel",
    # 모듈
    "config",
    "exceptions",
]
