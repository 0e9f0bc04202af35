"""
Gateway resources and FastAPI dependency injection.

The gateway process owns exactly one Redis client and one SQLAlchemy
engine. They are opened in the FastAPI lifespan, kept on app.state for the
lifetime of the process and closed on shutdown. Request handlers reach them
only through the Depends() providers below, which is also the seam tests use
to swap in in-memory stores.

Architecture Pattern:
    Lifespan -> GatewayResources (app.state.resources) -> Depends providers
             -> Application Layer handlers
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from fastapi import Request

from fibjobs.application.commands.submit_job import SubmitJobHandler
from fibjobs.application.queries.current_values import CurrentValuesQueryHandler
from fibjobs.application.queries.list_jobs import ListJobsQueryHandler
from fibjobs.config import DELIVERY_QUEUE, Settings
from fibjobs.domain.jobs.repositories import (
    EventPublisherProtocol,
    JobLogProtocol,
    StateStoreProtocol,
)
from fibjobs.infrastructure.messaging.redis_channel import RedisEventPublisher
from fibjobs.infrastructure.persistence.postgres.connection import (
    create_log_engine,
    dispose_engine,
    postgres_health_check,
)
from fibjobs.infrastructure.persistence.postgres.job_log import PostgresJobLog
from fibjobs.infrastructure.persistence.redis.connection import (
    close_redis_client,
    create_redis_client,
    redis_health_check,
)
from fibjobs.infrastructure.persistence.redis.state_store import RedisStateStore

# Configure logger
logger = logging.getLogger(__name__)


@dataclass
class GatewayResources:
    """
    Long-lived handles shared by every request of the gateway process.

    Attributes:
        state_store: Fast State Store
        publisher: Event Channel publisher
        job_log: Durable Log
        health_checks: name -> zero-arg callable returning bool, used by
            GET /health?deep=true
        closers: Release callbacks run by close(), last opened first
    """

    state_store: StateStoreProtocol
    publisher: EventPublisherProtocol
    job_log: JobLogProtocol
    health_checks: dict = field(default_factory=dict)
    closers: List[Callable[[], Any]] = field(default_factory=list)

    def close(self) -> None:
        """Release everything opened for this process. Idempotent."""
        while self.closers:
            closer = self.closers.pop()
            try:
                closer()
            except Exception as e:
                logger.error(f"Error while releasing gateway resource: {e}")


def _build_publisher(settings: Settings, redis_client) -> EventPublisherProtocol:
    if settings.event_delivery == DELIVERY_QUEUE:
        # Imported lazily: the broadcast gateway never needs Celery configured
        from fibjobs.application.tasks.celery_app import celery_app
        from fibjobs.application.tasks.compute_tasks import COMPUTE_TASK_NAME
        from fibjobs.infrastructure.messaging.celery_channel import CeleryEventPublisher

        celery_app.conf.broker_url = settings.broker_url
        logger.info(f"Event delivery: durable queue via {settings.broker_url}")
        return CeleryEventPublisher(celery_app, COMPUTE_TASK_NAME)

    logger.info("Event delivery: best-effort broadcast (Redis pub/sub)")
    return RedisEventPublisher(redis_client)


def open_gateway_resources(settings: Settings) -> GatewayResources:
    """
    Connect to Redis and PostgreSQL and build the gateway's stores.

    Also creates the Durable Log table when missing.

    Args:
        settings: Settings with Postgres fields populated

    Returns:
        GatewayResources ready to serve requests

    Raises:
        StoreUnavailableError: Redis unreachable after retries
        LogUnavailableError: PostgreSQL unreachable after retries
    """
    redis_client = create_redis_client(settings)
    engine = None
    try:
        engine = create_log_engine(settings)
        job_log = PostgresJobLog(engine)
        job_log.ensure_schema()
        publisher = _build_publisher(settings, redis_client)
    except Exception:
        dispose_engine(engine)
        close_redis_client(redis_client)
        raise

    return GatewayResources(
        state_store=RedisStateStore(redis_client),
        publisher=publisher,
        job_log=job_log,
        health_checks={
            "redis": lambda: redis_health_check(redis_client),
            "postgres": lambda: postgres_health_check(engine),
        },
        closers=[
            lambda: close_redis_client(redis_client),
            lambda: dispose_engine(engine),
        ],
    )


# ============================================================================
# DEPENDENCY PROVIDERS
# ============================================================================


def get_resources(request: Request) -> GatewayResources:
    """Return the resources opened by the lifespan of this app."""
    resources: Optional[GatewayResources] = getattr(request.app.state, "resources", None)
    if resources is None:
        raise RuntimeError("Gateway resources are not initialized")
    return resources


def get_submit_job_handler(request: Request) -> SubmitJobHandler:
    resources = get_resources(request)
    return SubmitJobHandler(
        state_store=resources.state_store,
        publisher=resources.publisher,
        job_log=resources.job_log,
    )


def get_list_jobs_handler(request: Request) -> ListJobsQueryHandler:
    return ListJobsQueryHandler(job_log=get_resources(request).job_log)


def get_current_values_handler(request: Request) -> CurrentValuesQueryHandler:
    return CurrentValuesQueryHandler(state_store=get_resources(request).state_store)
