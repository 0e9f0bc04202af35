"""
Redis Connection Management.

Builds Redis clients over a connection pool, verifies them with PING and
retries with exponential backoff while the server comes up. Used by the
state store, the pub/sub event channel and the health endpoint.

Responsibility:
    - Create a pooled Redis client from Settings
    - Health check with PING
    - Retry logic with exponential backoff (startup only)
    - Release pool connections on shutdown

Architecture Notes:
    - Infrastructure Layer (external dependency on Redis)
    - No module-level singleton: the caller owns the client it creates
      (FastAPI lifespan for the gateway, ComputationWorker.run for the worker)
    - redis.Redis over a ConnectionPool is thread-safe, so one client is
      shared by every request thread of the gateway

Business Rules:
    - Max connections: Settings.redis_max_connections (default 10)
    - Socket/connect timeout: Settings.redis_timeout (default 5s)
    - Retry attempts: Settings.connect_retry_attempts (default 3)
    - Exponential backoff: 1s, 2s, 4s (base=1s, multiplier=2)
    - Decode responses: True (return strings not bytes)

Error Handling:
    - ConnectionError/TimeoutError during PING: log and retry
    - All retries exhausted: StoreUnavailableError
    - Health check failure: return False (never raise)

Examples:
    >>> client = create_redis_client(settings)
    >>> client.hset("values", "5", "Nothing yet!")
    >>> redis_health_check(client)
    True
    >>> close_redis_client(client)
"""

import logging
import time
from typing import Optional

from redis import ConnectionPool, Redis
from redis.exceptions import ConnectionError, RedisError, TimeoutError

from fibjobs.config import Settings
from fibjobs.infrastructure.exceptions import StoreUnavailableError

# Configure logger for this module
logger = logging.getLogger(__name__)

BACKOFF_BASE_SECONDS = 1


def create_redis_client(settings: Settings) -> Redis:
    """
    Create a pooled Redis client and wait until it answers PING.

    Args:
        settings: Process settings (host, port, pool size, timeout, retries)

    Returns:
        Redis client bound to a fresh ConnectionPool

    Raises:
        StoreUnavailableError: If PING fails after all retry attempts

    Implementation Details:
        - Retry logic: N attempts with exponential backoff (1s, 2s, 4s, ...)
        - Decode responses: True (returns strings not bytes)
        - Socket keepalive: enabled for long-lived connections
    """
    logger.info(
        f"Creating Redis connection pool: "
        f"host={settings.redis_host}, port={settings.redis_port}, "
        f"max_connections={settings.redis_max_connections}, "
        f"timeout={settings.redis_timeout}s"
    )

    pool = ConnectionPool(
        host=settings.redis_host,
        port=settings.redis_port,
        db=0,
        max_connections=settings.redis_max_connections,
        socket_timeout=settings.redis_timeout,
        socket_connect_timeout=settings.redis_timeout,
        socket_keepalive=True,
        decode_responses=True,  # Return strings not bytes
    )
    client = Redis(connection_pool=pool)

    retry_attempts = max(1, settings.connect_retry_attempts)
    last_error: Optional[Exception] = None

    for attempt in range(retry_attempts):
        try:
            client.ping()
            logger.debug(f"Redis connection established (attempt {attempt + 1})")
            return client

        except (ConnectionError, TimeoutError) as e:
            last_error = e
            if attempt < retry_attempts - 1:
                delay = BACKOFF_BASE_SECONDS * (2**attempt)
                logger.warning(
                    f"Redis connection failed (attempt {attempt + 1}/{retry_attempts}): {e}. "
                    f"Retrying in {delay}s..."
                )
                time.sleep(delay)
            else:
                logger.error(
                    f"Redis connection failed after {retry_attempts} attempts: {e}"
                )

    pool.disconnect()
    raise StoreUnavailableError(
        f"Failed to connect to Redis at {settings.redis_host}:{settings.redis_port} "
        f"after {retry_attempts} attempts. Last error: {last_error}"
    )


def redis_health_check(client: Redis) -> bool:
    """
    Check Redis health with PING test.

    Args:
        client: Client created by create_redis_client()

    Returns:
        True if Redis answered PING, False otherwise (never raises)
    """
    try:
        if client.ping():
            logger.debug("Redis health check: OK")
            return True
        logger.warning("Redis health check: PING returned False")
        return False

    except RedisError as e:
        logger.warning(f"Redis health check failed: {e}")
        return False


def close_redis_client(client: Optional[Redis]) -> None:
    """
    Close a client and disconnect every connection of its pool.

    Safe to call with None and safe to call twice.
    """
    if client is None:
        logger.debug("Redis client already closed or not initialized")
        return

    logger.info("Closing Redis connection pool")
    try:
        client.close()
        client.connection_pool.disconnect()
    except RedisError as e:
        logger.error(f"Error closing Redis connection pool: {e}")
