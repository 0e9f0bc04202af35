"""
Infrastructure Layer - External Dependencies

Implements the Domain protocols on top of Redis, PostgreSQL and Celery.

Modules:
    - persistence: RedisStateStore (Fast State Store), PostgresJobLog (Durable Log)
    - messaging: Event Channel publishers/subscriber
    - exceptions: StoreUnavailableError, LogUnavailableError, ChannelUnavailableError

Every adapter converts its client library's exceptions into one of the
exceptions above at its boundary.
"""

from .exceptions import (
    ChannelUnavailableError,
    InfrastructureError,
    LogUnavailableError,
    StoreUnavailableError,
)
from .messaging import CeleryEventPublisher, RedisEventPublisher, RedisEventSubscriber
from .persistence import PostgresJobLog, RedisStateStore

__all__ = [
    "InfrastructureError",
    "StoreUnavailableError",
    "LogUnavailableError",
    "ChannelUnavailableError",
    "RedisStateStore",
    "PostgresJobLog",
    "RedisEventPublisher",
    "RedisEventSubscriber",
    "CeleryEventPublisher",
]
