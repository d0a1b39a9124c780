"""
core/parallel - 병렬 처리 모듈

주요 구성 요소:
- run_parallel: 독립 작업을 스레드 풀에서 실행 (입력 순서 보존)
- get_client: retry/timeout이 설정된 boto3 client 생성

Example:
    from core.parallel import ParallelConfig, get_client, run_parallel

    iam = get_client(session, "iam")
    outcomes = run_parallel(lambda name: iam.get_role(RoleName=name), role_names)
"""

from .client import get_client
from .executor import ParallelConfig, TaskOutcome, run_parallel

__all__ = [
    "ParallelConfig",
    "TaskOutcome",
    "get_client",
    "run_parallel",
]
