"""
Domain Layer - Core Business Logic

Framework-independent rules of the jobs pipeline: what an acceptable job
is, what it computes, and which storage contracts the pipeline needs.

Architecture:
    - Clean Architecture: Domain Layer is the center, no external dependencies
    - Dependency Inversion: Domain defines interfaces, Infrastructure implements

Subdomains:
    - jobs: JobIndex, Fibonacci computation, storage/messaging protocols
    - shared: Domain exceptions

Usage:
    >>> from fibjobs.domain import JobIndex, compute_result
    >>> compute_result(JobIndex.from_string("10"))
    89
"""

from .jobs import (
    MAX_INDEX,
    MIN_INDEX,
    PLACEHOLDER_VALUE,
    JobIndex,
    compute_result,
    fib,
)
from .shared import (
    DomainException,
    InvalidInputError,
    MalformedMessageError,
    OutOfRangeError,
)

__all__ = [
    "JobIndex",
    "fib",
    "compute_result",
    "PLACEHOLDER_VALUE",
    "MIN_INDEX",
    "MAX_INDEX",
    "DomainException",
    "InvalidInputError",
    "OutOfRangeError",
    "MalformedMessageError",
]
