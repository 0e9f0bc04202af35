"""
Redis Infrastructure Module

Exports:
    - RedisStateStore: Fast State Store on a Redis hash
    - create_redis_client: Pooled client with startup retry
    - redis_health_check: PING test
    - close_redis_client: Release pool connections
"""

from .connection import close_redis_client, create_redis_client, redis_health_check
from .state_store import RedisStateStore

__all__ = [
    "RedisStateStore",
    "create_redis_client",
    "redis_health_check",
    "close_redis_client",
]
