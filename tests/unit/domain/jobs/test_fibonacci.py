"""
Tests for the Fibonacci domain service.

Sequence under test: fib(0) = fib(1) = 1, fib(n) = fib(n-1) + fib(n-2).
"""

import pytest

from fibjobs.domain.jobs.fibonacci import compute_result, fib
from fibjobs.domain.jobs.job_index import JobIndex


def test_base_cases():
    assert fib(0) == 1
    assert fib(1) == 1


def test_first_terms():
    assert [fib(n) for n in range(10)] == [1, 1, 2, 3, 5, 8, 13, 21, 34, 55]


@pytest.mark.parametrize("n", range(2, 25))
def test_recurrence_holds(n):
    assert fib(n) == fib(n - 1) + fib(n - 2)


def test_compute_result_uses_index_value():
    assert compute_result(JobIndex(10)) == 89
    assert compute_result(JobIndex(20)) == 10946


def test_compute_result_is_deterministic():
    index = JobIndex(15)
    assert compute_result(index) == compute_result(index) == 987
