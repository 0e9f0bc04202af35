"""
Storage and messaging interfaces for the jobs pipeline.

Protocol-based contracts the Application Layer depends on. Infrastructure
provides the Redis/PostgreSQL/Celery implementations; tests provide
in-memory ones.

Architecture Notes:
    - Dependency Inversion: Domain defines, Infrastructure implements
    - Structural typing (typing.Protocol), no base class to inherit
    - Synchronous methods: every caller blocks on network I/O, the gateway
      in a threadpool worker and the computation worker in its own loop
    - Implementations raise fibjobs.infrastructure.exceptions errors on
      I/O failure, never the client library's own exceptions
"""

from typing import Dict, Iterator, List, Protocol


class StateStoreProtocol(Protocol):
    """
    Fast State Store: index key -> current materialized value.

    Last-write-wins. No versions, no timestamps, no deletes.
    """

    def set_value(self, key: str, value: str) -> None:
        """
        Store value under key, overwriting whatever is there.

        Raises:
            StoreUnavailableError: If the write fails
        """
        ...

    def snapshot(self) -> Dict[str, str]:
        """
        Return the entire mapping as-is (placeholders and results mixed).

        Raises:
            StoreUnavailableError: If the read fails
        """
        ...


class JobLogProtocol(Protocol):
    """
    Durable Log: append-only multiset of accepted indices.

    Never read by the worker, never reconciled with the state store.
    """

    def append(self, number: int) -> None:
        """
        Append one row. Duplicates are expected and kept.

        Raises:
            LogUnavailableError: If the insert fails
        """
        ...

    def list_all(self) -> List[int]:
        """
        Return every row, in no guaranteed order.

        Raises:
            LogUnavailableError: If the query fails
        """
        ...


class EventPublisherProtocol(Protocol):
    """Gateway side of the Event Channel."""

    def publish(self, payload: str) -> int:
        """
        Hand payload to the channel.

        Returns:
            Number of receivers that got the message (0 means it is lost
            for broadcast delivery; queue delivery always reports 1)

        Raises:
            ChannelUnavailableError: If the publish fails
        """
        ...


class EventSubscriberProtocol(Protocol):
    """Worker side of the Event Channel."""

    def listen(self) -> Iterator[str]:
        """
        Block and yield payloads in arrival order until closed.

        Raises:
            ChannelUnavailableError: If the subscription breaks
        """
        ...

    def close(self) -> None:
        """Stop listening and release the subscription."""
        ...
