"""
Celery Tasks

Responsibility:
    Durable delivery mode (EVENT_DELIVERY=queue): the compute task consumed
    by `celery -A fibjobs.application.tasks.celery_app worker`.

Contains:
    - celery_app.py - Celery configuration
    - compute_tasks.py - compute_fibonacci task
"""

from .celery_app import celery_app
from .compute_tasks import COMPUTE_TASK_NAME, compute_fibonacci_task

__all__ = ["celery_app", "compute_fibonacci_task", "COMPUTE_TASK_NAME"]
