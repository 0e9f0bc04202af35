"""
Pytest Configuration and Shared Fixtures

Shared fixtures used across all test suites (unit, integration, e2e).

Fixtures:
    - state_store: In-memory Fast State Store
    - job_log: In-memory Durable Log
    - event_bus: In-memory best-effort broadcast channel
    - gateway_resources: GatewayResources wired to the in-memory fakes
    - test_client: FastAPI TestClient serving an app bound to those fakes

The fakes implement the same Protocols as the Redis/PostgreSQL adapters,
including their failure mode: set `fail = True` on any of them to make the
next calls raise the matching infrastructure exception.

Usage:
    def test_something(test_client, state_store):
        test_client.post("/values", json={"index": "5"})
        assert state_store.get_value("5") == "Nothing yet!"
"""

import logging
from typing import Dict, Generator, Iterator, List

import pytest
from fastapi.testclient import TestClient

from fibjobs.api.dependencies import GatewayResources
from fibjobs.api.main import create_app
from fibjobs.infrastructure.exceptions import (
    ChannelUnavailableError,
    LogUnavailableError,
    StoreUnavailableError,
)

# Configure logger for tests
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# ============================================================================
# IN-MEMORY FAKES
# ============================================================================


class InMemoryStateStore:
    """
    Dict-backed StateStoreProtocol with an event history for ordering checks.

    get_value() is a test convenience; the pipeline only writes entries and
    reads the whole snapshot.
    """

    def __init__(self, events: List[tuple] | None = None) -> None:
        self.values: Dict[str, str] = {}
        self.events = events if events is not None else []
        self.fail = False

    def set_value(self, key: str, value: str) -> None:
        if self.fail:
            raise StoreUnavailableError(f"unable to set value '{value}' for key: '{key}'")
        self.values[key] = value
        self.events.append(("store", key, value))

    def get_value(self, key: str) -> str | None:
        if self.fail:
            raise StoreUnavailableError(f"unable to read key: '{key}'")
        return self.values.get(key)

    def snapshot(self) -> Dict[str, str]:
        if self.fail:
            raise StoreUnavailableError("unable to retrieve values from redis")
        return dict(self.values)


class InMemoryJobLog:
    """List-backed JobLogProtocol (multiset, insertion order)."""

    def __init__(self, events: List[tuple] | None = None) -> None:
        self.rows: List[int] = []
        self.events = events if events is not None else []
        self.fail = False

    def append(self, number: int) -> None:
        if self.fail:
            raise LogUnavailableError("unable to save data to DB")
        self.rows.append(number)
        self.events.append(("log", number))

    def list_all(self) -> List[int]:
        if self.fail:
            raise LogUnavailableError("unable to retrieve values from db")
        return list(self.rows)


class InMemorySubscription:
    """One subscriber's mailbox. listen() drains what was delivered so far."""

    def __init__(self, bus: "InMemoryEventBus") -> None:
        self.bus = bus
        self.mailbox: List[str] = []
        self.closed = False

    def listen(self) -> Iterator[str]:
        while self.mailbox and not self.closed:
            yield self.mailbox.pop(0)

    def close(self) -> None:
        self.closed = True
        if self in self.bus.subscriptions:
            self.bus.subscriptions.remove(self)


class InMemoryEventBus:
    """
    Best-effort broadcast: delivers only to subscriptions open at publish time.

    Acts as EventPublisherProtocol; subscribe() returns an
    EventSubscriberProtocol.
    """

    def __init__(self, events: List[tuple] | None = None) -> None:
        self.subscriptions: List[InMemorySubscription] = []
        self.published: List[str] = []
        self.events = events if events is not None else []
        self.fail = False

    def subscribe(self) -> InMemorySubscription:
        subscription = InMemorySubscription(self)
        self.subscriptions.append(subscription)
        return subscription

    def publish(self, payload: str) -> int:
        if self.fail:
            raise ChannelUnavailableError("unable to publish message")
        self.published.append(payload)
        self.events.append(("publish", payload))
        for subscription in self.subscriptions:
            subscription.mailbox.append(payload)
        return len(self.subscriptions)


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def side_effects() -> List[tuple]:
    """Shared, ordered record of every side effect performed by the fakes."""
    return []


@pytest.fixture
def state_store(side_effects) -> InMemoryStateStore:
    return InMemoryStateStore(side_effects)


@pytest.fixture
def job_log(side_effects) -> InMemoryJobLog:
    return InMemoryJobLog(side_effects)


@pytest.fixture
def event_bus(side_effects) -> InMemoryEventBus:
    return InMemoryEventBus(side_effects)


@pytest.fixture
def gateway_resources(state_store, event_bus, job_log) -> GatewayResources:
    """GatewayResources bound to the in-memory fakes."""
    return GatewayResources(
        state_store=state_store,
        publisher=event_bus,
        job_log=job_log,
        health_checks={"redis": lambda: not state_store.fail, "postgres": lambda: not job_log.fail},
    )


@pytest.fixture
def test_client(gateway_resources) -> Generator[TestClient, None, None]:
    """
    FastAPI TestClient for an app serving the in-memory fakes.

    The app is created with injected resources, so its lifespan connects to
    nothing and closes nothing.
    """
    app = create_app(resources=gateway_resources)
    with TestClient(app) as client:
        yield client


# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================


def pytest_configure(config):
    """
    Register custom markers.

    Markers:
        - e2e: End-to-end tests (require live Redis and PostgreSQL)
        - integration: Integration tests (in-memory, whole pipeline)
    """
    config.addinivalue_line(
        "markers", "integration: Integration tests (whole pipeline, in-memory stores)"
    )
