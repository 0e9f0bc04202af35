"""
PostgreSQL Connection Management.

Builds the SQLAlchemy engine behind the Durable Log, verifies it with
SELECT 1 and retries with exponential backoff while the database comes up.

Business Rules:
    - Driver: psycopg2 (postgresql+psycopg2), sslmode=disable
    - pool_pre_ping: True (stale connections are replaced transparently)
    - Retry attempts: Settings.connect_retry_attempts (default 3)
    - Exponential backoff: 1s, 2s, 4s (base=1s, multiplier=2)

Error Handling:
    - OperationalError during startup check: log and retry
    - All retries exhausted: LogUnavailableError
    - Health check failure: return False (never raise)

Examples:
    >>> engine = create_log_engine(settings)
    >>> postgres_health_check(engine)
    True
    >>> dispose_engine(engine)
"""

import logging
import time
from typing import Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from fibjobs.config import Settings
from fibjobs.infrastructure.exceptions import LogUnavailableError

# Configure logger for this module
logger = logging.getLogger(__name__)

BACKOFF_BASE_SECONDS = 1


def build_database_url(settings: Settings) -> URL:
    """
    Build the SQLAlchemy URL from the PG* settings.

    URL.create escapes the password, so credentials with '@' or ':' are fine.
    """
    return URL.create(
        "postgresql+psycopg2",
        username=settings.pg_user,
        password=settings.pg_password,
        host=settings.pg_host,
        port=settings.pg_port,
        database=settings.pg_database,
        query={"sslmode": "disable"},
    )


def create_log_engine(settings: Settings) -> Engine:
    """
    Create the Durable Log engine and wait until the database answers.

    Args:
        settings: Process settings with Postgres fields populated

    Returns:
        SQLAlchemy Engine (thread-safe, pooled)

    Raises:
        LogUnavailableError: If the database is unreachable after all retries
    """
    logger.info(
        f"Creating PostgreSQL engine: host={settings.pg_host}, "
        f"port={settings.pg_port}, database={settings.pg_database}, user={settings.pg_user}"
    )

    engine = create_engine(build_database_url(settings), pool_pre_ping=True)

    retry_attempts = max(1, settings.connect_retry_attempts)
    last_error: Optional[Exception] = None

    for attempt in range(retry_attempts):
        try:
            with engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            logger.debug(f"PostgreSQL connection established (attempt {attempt + 1})")
            return engine

        except OperationalError as e:
            last_error = e
            if attempt < retry_attempts - 1:
                delay = BACKOFF_BASE_SECONDS * (2**attempt)
                logger.warning(
                    f"PostgreSQL connection failed (attempt {attempt + 1}/{retry_attempts}): {e}. "
                    f"Retrying in {delay}s..."
                )
                time.sleep(delay)
            else:
                logger.error(
                    f"PostgreSQL connection failed after {retry_attempts} attempts: {e}"
                )

    engine.dispose()
    raise LogUnavailableError(
        f"Failed to connect to PostgreSQL at {settings.pg_host}:{settings.pg_port} "
        f"after {retry_attempts} attempts. Last error: {last_error}"
    )


def postgres_health_check(engine: Engine) -> bool:
    """
    Check PostgreSQL health with SELECT 1.

    Returns:
        True if the query succeeded, False otherwise (never raises)
    """
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        logger.debug("PostgreSQL health check: OK")
        return True

    except SQLAlchemyError as e:
        logger.warning(f"PostgreSQL health check failed: {e}")
        return False


def dispose_engine(engine: Optional[Engine]) -> None:
    """Release every pooled connection. Safe to call with None."""
    if engine is None:
        return
    logger.info("Disposing PostgreSQL engine")
    engine.dispose()
