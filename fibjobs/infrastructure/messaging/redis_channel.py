"""
Redis Pub/Sub Event Channel.

Best-effort broadcast of accepted job indices from the gateway to whichever
workers are subscribed at publish time.

Delivery Semantics:
    - At-most-once: Redis pub/sub keeps nothing, a message published while
      no worker is subscribed is gone for good
    - Fan-out: every subscribed worker receives every message
    - Payload: the canonical decimal string of the index ("5")

Error Handling:
    - RedisError on publish or while listening -> ChannelUnavailableError
"""

import logging
from typing import Iterator

from redis import Redis
from redis.exceptions import RedisError

from fibjobs.domain.jobs.constants import EVENT_CHANNEL_NAME
from fibjobs.infrastructure.exceptions import ChannelUnavailableError

# Configure logger for this module
logger = logging.getLogger(__name__)


class RedisEventPublisher:
    """
    Gateway side of the Event Channel (implements EventPublisherProtocol).

    Examples:
        >>> publisher = RedisEventPublisher(client)
        >>> publisher.publish("5")
        1
    """

    def __init__(self, client: Redis, channel: str = EVENT_CHANNEL_NAME) -> None:
        self.redis = client
        self.channel = channel

    def publish(self, payload: str) -> int:
        """
        Publish payload and return how many subscribers received it.

        Raises:
            ChannelUnavailableError: If Redis rejects the publish
        """
        try:
            receivers = self.redis.publish(self.channel, payload)
        except RedisError as e:
            logger.error(f"Failed to publish '{payload}' on channel '{self.channel}': {e}")
            raise ChannelUnavailableError("unable to publish message") from e

        if receivers == 0:
            logger.warning(
                f"Published '{payload}' on '{self.channel}' with no subscriber listening; "
                f"it will not be computed"
            )
        return int(receivers)


class RedisEventSubscriber:
    """
    Worker side of the Event Channel (implements EventSubscriberProtocol).

    Subscribes on construction so the subscription is live before the first
    listen() call. listen() polls with get_message(timeout=poll_timeout)
    instead of blocking in pubsub.listen(), which would not return until the
    next message arrives, so a close() from a signal handler is noticed
    within one poll interval.

    Examples:
        >>> subscriber = RedisEventSubscriber(client)
        >>> for payload in subscriber.listen():
        ...     handle(payload)
    """

    def __init__(
        self,
        client: Redis,
        channel: str = EVENT_CHANNEL_NAME,
        poll_timeout: float = 1.0,
    ) -> None:
        self.redis = client
        self.channel = channel
        self.poll_timeout = poll_timeout
        self._closed = False
        self._listening = False
        self._released = False

        try:
            self.pubsub = self.redis.pubsub(ignore_subscribe_messages=True)
            self.pubsub.subscribe(self.channel)
        except RedisError as e:
            logger.error(f"Failed to subscribe to channel '{self.channel}': {e}")
            raise ChannelUnavailableError(
                f"unable to subscribe to channel '{self.channel}': {e}"
            ) from e

        logger.info(f"Subscribed to channel '{self.channel}'")

    @property
    def closed(self) -> bool:
        return self._closed

    def listen(self) -> Iterator[str]:
        """
        Yield payloads in arrival order until close() is called.

        The subscription is released when the loop ends, whichever way it ends.

        Raises:
            ChannelUnavailableError: If the connection to Redis breaks
        """
        self._listening = True
        try:
            while not self._closed:
                try:
                    message = self.pubsub.get_message(timeout=self.poll_timeout)
                except RedisError as e:
                    logger.error(f"Subscription to '{self.channel}' failed: {e}")
                    raise ChannelUnavailableError(
                        f"subscription to channel '{self.channel}' failed: {e}"
                    ) from e

                if message is None or message.get("type") != "message":
                    continue

                yield message["data"]
        finally:
            self._listening = False
            self._release()

    def close(self) -> None:
        """
        Stop listening. Idempotent and safe to call from a signal handler:
        while listen() is running it only flags the loop, which then
        releases the connection itself.
        """
        if self._closed:
            return
        self._closed = True
        logger.info(f"Closing subscription to channel '{self.channel}'")

        if not self._listening:
            self._release()

    def _release(self) -> None:
        if self._released:
            return
        self._released = True
        try:
            self.pubsub.unsubscribe(self.channel)
            self.pubsub.close()
        except RedisError as e:
            logger.warning(f"Error while closing subscription: {e}")
