"""
Process configuration from environment variables.

Both processes (HTTP gateway and computation worker) build a Settings
instance once at startup and pass it to whatever needs it, logging level
included. The only other environment reads are the uvicorn bind address
(HOST, PORT) in fibjobs.api.main.run and the Celery broker URL, which the
Celery app module derives at import time.

Required variables:
    Gateway: REDIS_HOST, REDIS_PORT, PGHOST, PGPORT, PGUSER, PGPASSWORD, PGDATABASE
    Worker:  REDIS_HOST, REDIS_PORT

Optional variables (defaults in parentheses):
    REDIS_TIMEOUT (5), REDIS_MAX_CONNECTIONS (10), CONNECT_RETRY_ATTEMPTS (3),
    EVENT_DELIVERY ("broadcast"), CELERY_BROKER_URL (redis://REDIS_HOST:REDIS_PORT/0),
    LOG_LEVEL ("INFO")

A .env file in the working directory is loaded first when present
(python-dotenv), real environment variables win over it.

Examples:
    >>> settings = Settings.from_env()
    >>> settings.redis_host
    'localhost'
    >>> worker_settings = Settings.from_env(require_postgres=False)
"""

import logging
import os
from dataclasses import dataclass
from typing import Final, Mapping, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


REDIS_ENV_VARS: Final[tuple[str, ...]] = ("REDIS_HOST", "REDIS_PORT")
POSTGRES_ENV_VARS: Final[tuple[str, ...]] = (
    "PGHOST",
    "PGPORT",
    "PGUSER",
    "PGPASSWORD",
    "PGDATABASE",
)

DELIVERY_BROADCAST: Final[str] = "broadcast"
DELIVERY_QUEUE: Final[str] = "queue"
DELIVERY_MODES: Final[tuple[str, ...]] = (DELIVERY_BROADCAST, DELIVERY_QUEUE)


class ConfigMissingError(Exception):
    """
    Raised when a required environment variable is absent or empty.

    Fatal: the gateway refuses to start and the worker exits with status 1.

    Attributes:
        name: Environment variable that is missing
    """

    def __init__(self, name: str, message: str | None = None) -> None:
        self.name = name
        super().__init__(message or f"environment variable '{name}' is not set")


def _require(env: Mapping[str, str], name: str) -> str:
    value = env.get(name, "")
    if value == "":
        raise ConfigMissingError(name)
    return value


def _require_int(env: Mapping[str, str], name: str) -> int:
    raw = _require(env, name)
    try:
        return int(raw)
    except ValueError:
        raise ConfigMissingError(
            name, f"environment variable '{name}' must be an integer, got {raw!r}"
        )


def _optional_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name, "")
    if raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigMissingError(
            name, f"environment variable '{name}' must be an integer, got {raw!r}"
        )


@dataclass(frozen=True)
class Settings:
    """
    Immutable process settings.

    Postgres fields are None when the settings were built for the worker
    (require_postgres=False).
    """

    redis_host: str
    redis_port: int
    pg_host: Optional[str] = None
    pg_port: Optional[int] = None
    pg_user: Optional[str] = None
    pg_password: Optional[str] = None
    pg_database: Optional[str] = None
    redis_timeout: int = 5
    redis_max_connections: int = 10
    connect_retry_attempts: int = 3
    event_delivery: str = DELIVERY_BROADCAST
    celery_broker_url: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(
        cls,
        env: Optional[Mapping[str, str]] = None,
        require_postgres: bool = True,
        load_dotenv_file: bool = True,
    ) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            env: Mapping to read from (default: os.environ)
            require_postgres: Whether the PG* variables are mandatory
            load_dotenv_file: Load .env into os.environ first (ignored when env is given)

        Returns:
            Settings instance

        Raises:
            ConfigMissingError: If a required variable is missing, a numeric
                variable is not numeric, or EVENT_DELIVERY is unknown
        """
        if env is None:
            if load_dotenv_file:
                load_dotenv()
            env = os.environ

        redis_host = _require(env, "REDIS_HOST")
        redis_port = _require_int(env, "REDIS_PORT")

        pg_fields: dict = {}
        if require_postgres:
            pg_fields = {
                "pg_host": _require(env, "PGHOST"),
                "pg_port": _require_int(env, "PGPORT"),
                "pg_user": _require(env, "PGUSER"),
                "pg_password": _require(env, "PGPASSWORD"),
                "pg_database": _require(env, "PGDATABASE"),
            }

        event_delivery = env.get("EVENT_DELIVERY", "") or DELIVERY_BROADCAST
        if event_delivery not in DELIVERY_MODES:
            raise ConfigMissingError(
                "EVENT_DELIVERY",
                f"EVENT_DELIVERY must be one of {DELIVERY_MODES}, got {event_delivery!r}",
            )

        settings = cls(
            redis_host=redis_host,
            redis_port=redis_port,
            redis_timeout=_optional_int(env, "REDIS_TIMEOUT", 5),
            redis_max_connections=_optional_int(env, "REDIS_MAX_CONNECTIONS", 10),
            connect_retry_attempts=_optional_int(env, "CONNECT_RETRY_ATTEMPTS", 3),
            event_delivery=event_delivery,
            celery_broker_url=env.get("CELERY_BROKER_URL") or None,
            log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
            **pg_fields,
        )

        logger.debug(
            f"Settings loaded: redis={settings.redis_host}:{settings.redis_port}, "
            f"postgres={settings.pg_host}:{settings.pg_port}/{settings.pg_database}, "
            f"event_delivery={settings.event_delivery}"
        )
        return settings

    @property
    def broker_url(self) -> str:
        """Celery broker URL, derived from the Redis location when not set."""
        return self.celery_broker_url or f"redis://{self.redis_host}:{self.redis_port}/0"

    @property
    def has_postgres(self) -> bool:
        return self.pg_host is not None


def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging once per process.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ...)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
