"""
Celery Queue Event Channel.

Durable alternative to the Redis pub/sub channel, selected with
EVENT_DELIVERY=queue. Publishing enqueues the compute task by name, so the
gateway never imports task code and the queue keeps the message until a
worker acknowledges it.

Delivery Semantics:
    - At-least-once: messages survive an absent worker and are redelivered
      if a worker dies before acknowledging
    - Single consumer per message (competing consumers, not fan-out)
    - publish() always reports 1 receiver: the queue itself

Error Handling:
    - Broker errors on enqueue (KombuError, socket errors) ->
      ChannelUnavailableError
"""

import logging

from celery import Celery
from kombu.exceptions import KombuError

from fibjobs.infrastructure.exceptions import ChannelUnavailableError

# Configure logger for this module
logger = logging.getLogger(__name__)


class CeleryEventPublisher:
    """
    Gateway side of the durable Event Channel (implements EventPublisherProtocol).

    Examples:
        >>> publisher = CeleryEventPublisher(celery_app, "compute_fibonacci")
        >>> publisher.publish("5")
        1
    """

    def __init__(self, app: Celery, task_name: str) -> None:
        self.app = app
        self.task_name = task_name

    def publish(self, payload: str) -> int:
        try:
            result = self.app.send_task(self.task_name, args=[payload])
        except (KombuError, OSError) as e:
            logger.error(f"Failed to enqueue '{payload}' for {self.task_name}: {e}")
            raise ChannelUnavailableError("unable to publish message") from e

        logger.debug(f"Enqueued '{payload}' as task {result.id}")
        return 1
