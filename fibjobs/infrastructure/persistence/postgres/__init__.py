"""
PostgreSQL Infrastructure Module

Exports:
    - PostgresJobLog: Durable Log on a single-column table
    - create_log_engine: SQLAlchemy engine with startup retry
    - postgres_health_check: SELECT 1 test
    - dispose_engine: Release pool connections
"""

from .connection import create_log_engine, dispose_engine, postgres_health_check
from .job_log import PostgresJobLog

__all__ = [
    "PostgresJobLog",
    "create_log_engine",
    "postgres_health_check",
    "dispose_engine",
]
