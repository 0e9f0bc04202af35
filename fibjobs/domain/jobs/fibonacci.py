"""
Fibonacci domain service.

The computation a job asks for. Pure and deterministic: the result depends
only on the index and nothing is read or written.

Sequence definition used throughout the system:
    fib(0) = 1
    fib(1) = 1
    fib(n) = fib(n - 1) + fib(n - 2)   for n >= 2

The recursion is deliberately naive and therefore exponential in n; the
JobIndex range (0..40) is what keeps it bounded. Latency for indices near
the upper bound is seconds, and the worker processes messages one at a time,
so a large index delays everything queued behind it.
"""

from fibjobs.domain.jobs.job_index import JobIndex


def fib(n: int) -> int:
    """
    Recursive Fibonacci with fib(0) = fib(1) = 1.

    Callers are expected to have validated n; values below 2 return 1.

    Examples:
        >>> [fib(n) for n in range(6)]
        [1, 1, 2, 3, 5, 8]
    """
    if n < 2:
        return 1
    return fib(n - 1) + fib(n - 2)


def compute_result(index: JobIndex) -> int:
    """
    Compute the Result Value for an accepted job index.

    Args:
        index: Validated JobIndex

    Returns:
        fib(index.value)
    """
    return fib(index.value)
