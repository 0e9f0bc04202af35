"""
Jobs Subdomain

The unit of work (JobIndex), the computation it requests (Fibonacci), and
the storage/messaging contracts the pipeline is built on.

Exports:
    - JobIndex: Validated index value object
    - fib, compute_result: The computation
    - PLACEHOLDER_VALUE, MIN_INDEX, MAX_INDEX: Domain constants
    - StateStoreProtocol, JobLogProtocol, EventPublisherProtocol,
      EventSubscriberProtocol: Interfaces implemented by Infrastructure
"""

from .constants import MAX_INDEX, MIN_INDEX, PLACEHOLDER_VALUE
from .fibonacci import compute_result, fib
from .job_index import JobIndex, parse_integer
from .repositories import (
    EventPublisherProtocol,
    EventSubscriberProtocol,
    JobLogProtocol,
    StateStoreProtocol,
)

__all__ = [
    "JobIndex",
    "parse_integer",
    "fib",
    "compute_result",
    "PLACEHOLDER_VALUE",
    "MIN_INDEX",
    "MAX_INDEX",
    "StateStoreProtocol",
    "JobLogProtocol",
    "EventPublisherProtocol",
    "EventSubscriberProtocol",
]
