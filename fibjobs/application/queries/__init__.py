"""
Queries Package (CQRS read side)

Read-only accessors, never mutate anything:
    - ListJobsQueryHandler: Durable Log rows
    - CurrentValuesQueryHandler: Fast State Store snapshot
"""

from .current_values import CurrentValuesQueryHandler
from .list_jobs import ListJobsQueryHandler, LoggedJob

__all__ = [
    "ListJobsQueryHandler",
    "LoggedJob",
    "CurrentValuesQueryHandler",
]
