"""
Celery task for the durable delivery mode.

Runs the same JobProcessor step as the pub/sub worker. Differences from the
broadcast path:
    - StoreUnavailableError is retried with exponential backoff (up to 3
      times) instead of dropped
    - MalformedMessageError is still dropped: retrying cannot fix a payload

Resources:
    One Redis client per worker process, created on worker_process_init and
    closed on worker_process_shutdown. Outside a worker (eager mode, tests)
    it is created on first use.
"""

import logging
from typing import Optional

from celery import Task
from celery.signals import worker_process_init, worker_process_shutdown

from .celery_app import celery_app
from fibjobs.application.services.job_processor import JobProcessor
from fibjobs.config import Settings
from fibjobs.domain.shared.exceptions import MalformedMessageError
from fibjobs.infrastructure.exceptions import StoreUnavailableError
from fibjobs.infrastructure.persistence.redis.connection import (
    close_redis_client,
    create_redis_client,
)
from fibjobs.infrastructure.persistence.redis.state_store import RedisStateStore

# Configure logger for this module
logger = logging.getLogger(__name__)

COMPUTE_TASK_NAME = "compute_fibonacci"

_redis_client = None
_processor: Optional[JobProcessor] = None


@worker_process_init.connect
def open_worker_resources(**kwargs) -> None:
    """Create the Redis client owned by this worker process."""
    global _redis_client, _processor

    settings = Settings.from_env(require_postgres=False)
    _redis_client = create_redis_client(settings)
    _processor = JobProcessor(RedisStateStore(_redis_client))
    logger.info("Celery worker process resources ready")


@worker_process_shutdown.connect
def close_worker_resources(**kwargs) -> None:
    """Release the Redis client owned by this worker process."""
    global _redis_client, _processor

    close_redis_client(_redis_client)
    _redis_client = None
    _processor = None


def get_processor() -> JobProcessor:
    if _processor is None:
        open_worker_resources()
    return _processor


@celery_app.task(
    bind=True,
    name=COMPUTE_TASK_NAME,
    acks_late=True,
    reject_on_worker_lost=True,
    autoretry_for=(StoreUnavailableError,),
    max_retries=3,
    retry_backoff=True,
    retry_backoff_max=60,
)
def compute_fibonacci_task(self: Task, payload: str) -> Optional[int]:
    """
    Compute and store the result for one queued index.

    Args:
        self: Celery task instance (bind=True)
        payload: Index decimal string, as published by the gateway

    Returns:
        The computed result, or None when the payload was dropped

    Raises:
        StoreUnavailableError: Triggers autoretry; after max_retries the
            message is given up and the entry stays placeholder
    """
    logger.info(f"new message: {payload} (task {self.request.id})")

    try:
        return get_processor().process(payload)
    except MalformedMessageError as e:
        logger.warning(f"Dropping message: {e.message}")
        return None
