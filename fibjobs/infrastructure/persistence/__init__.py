"""
Persistence Infrastructure Module

Exports:
    From redis:
        - RedisStateStore

    From postgres:
        - PostgresJobLog
"""

from .postgres import PostgresJobLog
from .redis import RedisStateStore

__all__ = ["RedisStateStore", "PostgresJobLog"]
