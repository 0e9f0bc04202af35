"""
Tests for the Redis pub/sub Event Channel.

Covers:
- Publish on the "insert" channel, receiver count reported
- Subscriber yields only data messages, in order
- close() before/while listening releases the subscription once
- RedisError mapped to ChannelUnavailableError
"""

from unittest.mock import MagicMock

import pytest
from redis.exceptions import ConnectionError

from fibjobs.infrastructure.exceptions import ChannelUnavailableError
from fibjobs.infrastructure.messaging.redis_channel import (
    RedisEventPublisher,
    RedisEventSubscriber,
)


@pytest.fixture
def redis_client():
    return MagicMock()


# ============================================================================
# PUBLISHER
# ============================================================================


def test_publish_on_insert_channel(redis_client):
    redis_client.publish.return_value = 2

    receivers = RedisEventPublisher(redis_client).publish("5")

    assert receivers == 2
    redis_client.publish.assert_called_once_with("insert", "5")


def test_publish_without_subscribers_is_not_an_error(redis_client):
    redis_client.publish.return_value = 0

    assert RedisEventPublisher(redis_client).publish("5") == 0


def test_publish_failure(redis_client):
    redis_client.publish.side_effect = ConnectionError("down")

    with pytest.raises(ChannelUnavailableError) as exc_info:
        RedisEventPublisher(redis_client).publish("5")

    assert exc_info.value.message == "unable to publish message"


# ============================================================================
# SUBSCRIBER
# ============================================================================


def test_subscribe_on_construction(redis_client):
    RedisEventSubscriber(redis_client)

    redis_client.pubsub.assert_called_once_with(ignore_subscribe_messages=True)
    redis_client.pubsub.return_value.subscribe.assert_called_once_with("insert")


def test_subscribe_failure(redis_client):
    redis_client.pubsub.return_value.subscribe.side_effect = ConnectionError("down")

    with pytest.raises(ChannelUnavailableError):
        RedisEventSubscriber(redis_client)


def test_listen_yields_data_messages_in_order(redis_client):
    pubsub = redis_client.pubsub.return_value
    subscriber = RedisEventSubscriber(redis_client, poll_timeout=0.01)
    received = []

    def get_message(timeout):
        messages = [
            {"type": "message", "data": "3"},
            None,
            {"type": "subscribe", "data": 1},
            {"type": "message", "data": "abc"},
        ]
        index = pubsub.get_message.call_count - 1
        if index >= len(messages) - 1:
            subscriber.close()
        return messages[min(index, len(messages) - 1)]

    pubsub.get_message.side_effect = get_message

    for payload in subscriber.listen():
        received.append(payload)

    assert received == ["3", "abc"]
    pubsub.unsubscribe.assert_called_once_with("insert")
    pubsub.close.assert_called_once()


def test_close_while_listening_defers_release(redis_client):
    pubsub = redis_client.pubsub.return_value
    pubsub.get_message.return_value = {"type": "message", "data": "1"}
    subscriber = RedisEventSubscriber(redis_client)

    listener = subscriber.listen()
    assert next(listener) == "1"

    subscriber.close()
    pubsub.unsubscribe.assert_not_called()

    with pytest.raises(StopIteration):
        next(listener)
    pubsub.unsubscribe.assert_called_once_with("insert")


def test_close_before_listening_releases_immediately(redis_client):
    pubsub = redis_client.pubsub.return_value
    subscriber = RedisEventSubscriber(redis_client)

    subscriber.close()
    subscriber.close()

    assert subscriber.closed is True
    pubsub.unsubscribe.assert_called_once_with("insert")
    assert list(subscriber.listen()) == []
    pubsub.close.assert_called_once()


def test_listen_failure_raises_and_releases(redis_client):
    pubsub = redis_client.pubsub.return_value
    pubsub.get_message.side_effect = ConnectionError("down")
    subscriber = RedisEventSubscriber(redis_client)

    with pytest.raises(ChannelUnavailableError):
        list(subscriber.listen())

    pubsub.unsubscribe.assert_called_once_with("insert")
