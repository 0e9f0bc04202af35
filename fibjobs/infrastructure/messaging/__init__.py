"""
Messaging Infrastructure Module

Event Channel implementations:
    - RedisEventPublisher / RedisEventSubscriber: pub/sub, at-most-once (default)
    - CeleryEventPublisher: Celery queue, at-least-once (EVENT_DELIVERY=queue)
"""

from .celery_channel import CeleryEventPublisher
from .redis_channel import RedisEventPublisher, RedisEventSubscriber

__all__ = ["RedisEventPublisher", "RedisEventSubscriber", "CeleryEventPublisher"]
