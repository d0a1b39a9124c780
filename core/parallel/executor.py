"""
core/parallel/executor.py - 독립 작업 병렬 실행기

서로 의존하지 않는 읽기 전용 작업을 ThreadPoolExecutor로 병렬 실행합니다.
결과는 입력 순서대로 반환되며, 한 작업의 예외는 다른 작업에 영향을 주지 않습니다.

Example:
    from core.parallel import ParallelConfig, run_parallel

    results = run_parallel(check, items, ParallelConfig(max_workers=4))
    for outcome in results:
        if outcome.success:
            print(outcome.value)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


@dataclass
class ParallelConfig:
    """병렬 실행 설정

    Attributes:
        max_workers: 최대 동시 스레드 수 (1~100)
    """

    max_workers: int = 4

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.max_workers > 100:
            self.max_workers = 100


@dataclass
class TaskOutcome(Generic[T, R]):
    """개별 작업 결과

    Attributes:
        item: 입력 항목
        value: 성공 시 반환값
        error: 실패 시 예외
    """

    item: T
    value: R | None = None
    error: Exception | None = None

    @property
    def success(self) -> bool:
        return self.error is None


def _run_single(func: Callable[[T], R], item: T) -> TaskOutcome[T, R]:
    try:
        return TaskOutcome(item=item, value=func(item))
    except Exception as e:
        logger.debug(f"작업 실패 [{item}]: {e}")
        return TaskOutcome(item=item, error=e)


def run_parallel(
    func: Callable[[T], R],
    items: Sequence[T],
    config: ParallelConfig | None = None,
) -> list[TaskOutcome[T, R]]:
    """items 각각에 func를 병렬 실행

    Args:
        func: item -> R 함수
        items: 입력 항목 목록
        config: 병렬 실행 설정 (None이면 기본값)

    Returns:
        입력 순서와 동일한 TaskOutcome 목록
    """
    config = config or ParallelConfig()

    if not items:
        logger.warning("실행할 작업이 없습니다")
        return []

    logger.info(f"병렬 실행 시작: {len(items)}개 작업, max_workers={config.max_workers}")
    start_time = time.monotonic()

    with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
        futures = [executor.submit(_run_single, func, item) for item in items]
        outcomes = [future.result() for future in futures]

    total_time = (time.monotonic() - start_time) * 1000
    failed = sum(1 for o in outcomes if not o.success)
    logger.info(f"병렬 실행 완료: 성공 {len(outcomes) - failed}, 실패 {failed}, 총 {total_time:.0f}ms")

    return outcomes
