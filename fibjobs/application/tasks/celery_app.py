"""
Celery application for the durable delivery mode.

Only used when the gateway runs with EVENT_DELIVERY=queue. In that mode the
Event Channel is a Redis-backed Celery queue instead of pub/sub: a job
published while no worker runs waits in the queue, and a worker that dies
mid-task gets the message redelivered (acks_late).

Start a consumer with:
    celery -A fibjobs.application.tasks.celery_app worker --concurrency=1

Architecture Note:
- Part of Application Layer (orchestration)
- Broker from CELERY_BROKER_URL, else derived from REDIS_HOST/REDIS_PORT
- No result backend: results go to the state store, not to Celery
"""

import os

from celery import Celery
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _default_broker_url() -> str:
    host = os.environ.get("REDIS_HOST", "localhost")
    port = os.environ.get("REDIS_PORT", "6379")
    return f"redis://{host}:{port}/0"


celery_app = Celery(
    "fibjobs",
    broker=os.environ.get("CELERY_BROKER_URL") or _default_broker_url(),
)

celery_app.conf.update(
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    worker_prefetch_multiplier=1,  # one message in flight keeps arrival order
    task_ignore_result=True,
    task_time_limit=300,
)

celery_app.autodiscover_tasks(["fibjobs.application.tasks"], related_name="compute_tasks")
