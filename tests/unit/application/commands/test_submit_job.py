"""
Tests for SubmitJobHandler.

Covers:
- Validation happens before any side effect
- Side effects run in order: placeholder, publish, log append
- A failing step aborts the remaining ones without rolling back earlier ones
"""

import pytest

from fibjobs.application.commands.submit_job import SubmitJobCommand, SubmitJobHandler
from fibjobs.domain.jobs.constants import PLACEHOLDER_VALUE
from fibjobs.domain.shared.exceptions import InvalidInputError, OutOfRangeError
from fibjobs.infrastructure.exceptions import (
    ChannelUnavailableError,
    LogUnavailableError,
    StoreUnavailableError,
)


@pytest.fixture
def handler(state_store, event_bus, job_log):
    return SubmitJobHandler(state_store=state_store, publisher=event_bus, job_log=job_log)


# ============================================================================
# HAPPY PATH
# ============================================================================


def test_submit_runs_side_effects_in_order(handler, side_effects):
    handler.handle(SubmitJobCommand(index="7"))

    assert side_effects == [
        ("store", "7", PLACEHOLDER_VALUE),
        ("publish", "7"),
        ("log", 7),
    ]


def test_submit_returns_acknowledgment(handler, event_bus):
    event_bus.subscribe()

    result = handler.handle(SubmitJobCommand(index="12"))

    assert result.index == 12
    assert result.key == "12"
    assert result.receivers == 1


def test_submit_uses_canonical_key(handler, state_store, event_bus, job_log):
    handler.handle(SubmitJobCommand(index="+05"))

    assert state_store.values == {"5": PLACEHOLDER_VALUE}
    assert event_bus.published == ["5"]
    assert job_log.rows == [5]


def test_submit_without_subscriber_still_succeeds(handler):
    result = handler.handle(SubmitJobCommand(index="5"))

    assert result.receivers == 0


def test_duplicate_submissions_are_logged_twice(handler, job_log):
    handler.handle(SubmitJobCommand(index="3"))
    handler.handle(SubmitJobCommand(index="3"))

    assert job_log.rows == [3, 3]


# ============================================================================
# VALIDATION (NO SIDE EFFECTS)
# ============================================================================


@pytest.mark.parametrize("index", ["41", "100", "-1"])
def test_out_of_range_has_no_side_effects(handler, side_effects, index):
    with pytest.raises(OutOfRangeError):
        handler.handle(SubmitJobCommand(index=index))

    assert side_effects == []


@pytest.mark.parametrize("index", ["abc", "", "4.2", " 4"])
def test_invalid_input_has_no_side_effects(handler, side_effects, index):
    with pytest.raises(InvalidInputError):
        handler.handle(SubmitJobCommand(index=index))

    assert side_effects == []


# ============================================================================
# PARTIAL FAILURES
# ============================================================================


def test_store_failure_aborts_before_publish(handler, state_store, side_effects):
    state_store.fail = True

    with pytest.raises(StoreUnavailableError):
        handler.handle(SubmitJobCommand(index="5"))

    assert side_effects == []


def test_publish_failure_leaves_placeholder_without_log_row(
    handler, event_bus, state_store, job_log
):
    event_bus.fail = True

    with pytest.raises(ChannelUnavailableError):
        handler.handle(SubmitJobCommand(index="5"))

    assert state_store.values == {"5": PLACEHOLDER_VALUE}
    assert job_log.rows == []


def test_log_failure_keeps_placeholder_and_publish(handler, job_log, state_store, event_bus):
    job_log.fail = True

    with pytest.raises(LogUnavailableError):
        handler.handle(SubmitJobCommand(index="5"))

    assert state_store.values == {"5": PLACEHOLDER_VALUE}
    assert event_bus.published == ["5"]
