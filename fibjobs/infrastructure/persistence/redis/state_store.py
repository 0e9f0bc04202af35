"""
Redis State Store.

Fast State Store implementation: one Redis hash ("values") mapping the
canonical index string to its current value, either the placeholder written
by the gateway or the Fibonacci result written by the worker.

Storage Format:
    Redis key "values" (HASH)
        "5"  -> "Nothing yet!"   # accepted, not computed yet
        "10" -> "89"             # computed

Business Rules:
    - Last-write-wins (plain HSET, no WATCH/MULTI, no versions)
    - No TTL: entries live until someone flushes Redis
    - A late placeholder may overwrite an earlier result; that is accepted

Error Handling:
    - Every RedisError is re-raised as StoreUnavailableError
"""

import logging
from typing import Dict

from redis import Redis
from redis.exceptions import RedisError

from fibjobs.domain.jobs.constants import STATE_HASH_NAME
from fibjobs.infrastructure.exceptions import StoreUnavailableError

# Configure logger for this module
logger = logging.getLogger(__name__)


class RedisStateStore:
    """
    Fast State Store backed by a Redis hash.

    Implements StateStoreProtocol. Holds a shared client, safe to use from
    many request threads at once.

    Examples:
        >>> store = RedisStateStore(create_redis_client(settings))
        >>> store.set_value("5", "Nothing yet!")
        >>> store.snapshot()
        {'5': 'Nothing yet!'}
    """

    def __init__(self, client: Redis, hash_name: str = STATE_HASH_NAME) -> None:
        """
        Args:
            client: Redis client (decode_responses=True)
            hash_name: Redis hash holding the mapping (default "values")
        """
        self.redis = client
        self.hash_name = hash_name

    def set_value(self, key: str, value: str) -> None:
        try:
            self.redis.hset(self.hash_name, key, value)
        except RedisError as e:
            logger.error(f"Failed to set '{value}' for key '{key}' in {self.hash_name}: {e}")
            raise StoreUnavailableError(
                f"unable to set value '{value}' for key: '{key}'"
            ) from e

        logger.debug(f"State store: {self.hash_name}[{key}] = {value}")

    def snapshot(self) -> Dict[str, str]:
        try:
            values = self.redis.hgetall(self.hash_name)
        except RedisError as e:
            logger.error(f"Failed to read {self.hash_name} from Redis: {e}")
            raise StoreUnavailableError(f"unable to retrieve values from redis: {e}") from e

        return dict(values)
