"""
tests/core/parallel/test_executor.py - core/parallel/executor.py 테스트
"""

import threading
import time

import pytest

from core.parallel.executor import ParallelConfig, TaskOutcome, run_parallel


class TestParallelConfig:
    """ParallelConfig 테스트"""

    def test_default(self):
        assert ParallelConfig().max_workers == 4

    def test_invalid_workers(self):
        with pytest.raises(ValueError):
            ParallelConfig(max_workers=0)

    def test_clamped(self):
        assert ParallelConfig(max_workers=500).max_workers == 100


class TestRunParallel:
    """run_parallel() 테스트"""

    def test_preserves_input_order(self):
        def slow_for_small(n):
            time.sleep(0.01 * (5 - n))
            return n * 10

        outcomes = run_parallel(slow_for_small, [1, 2, 3, 4], ParallelConfig(max_workers=4))

        assert [o.value for o in outcomes] == [10, 20, 30, 40]
        assert [o.item for o in outcomes] == [1, 2, 3, 4]

    def test_failure_is_isolated(self):
        def func(n):
            if n == 2:
                raise RuntimeError("boom")
            return n

        outcomes = run_parallel(func, [1, 2, 3])

        assert [o.success for o in outcomes] == [True, False, True]
        assert isinstance(outcomes[1].error, RuntimeError)
        assert outcomes[2].value == 3

    def test_empty(self):
        assert run_parallel(lambda x: x, []) == []

    def test_uses_worker_threads(self):
        main = threading.get_ident()

        outcomes = run_parallel(lambda _: threading.get_ident(), [1, 2])

        assert all(o.value != main for o in outcomes)

    def test_outcome_success_property(self):
        assert TaskOutcome(item=1, value=None).success
        assert not TaskOutcome(item=1, error=ValueError()).success
