"""
Tests for JobProcessor and payload parsing.

Covers:
- Result computed and written under the canonical key
- Malformed and out-of-range payloads raise MalformedMessageError
- Store write failures propagate
"""

import pytest

from fibjobs.application.services.job_processor import JobProcessor, parse_payload
from fibjobs.domain.shared.exceptions import MalformedMessageError
from fibjobs.infrastructure.exceptions import StoreUnavailableError


def test_process_writes_result(state_store):
    state_store.set_value("10", "Nothing yet!")

    result = JobProcessor(state_store).process("10")

    assert result == 89
    assert state_store.get_value("10") == "89"


def test_process_overwrites_previous_result(state_store):
    state_store.set_value("6", "0")

    JobProcessor(state_store).process("6")

    assert state_store.get_value("6") == "13"


@pytest.mark.parametrize("payload", ["abc", "", "41", "-2", "3.0"])
def test_parse_payload_rejects_malformed(payload):
    with pytest.raises(MalformedMessageError) as exc_info:
        parse_payload(payload)

    assert exc_info.value.payload == payload


def test_malformed_payload_writes_nothing(state_store):
    with pytest.raises(MalformedMessageError):
        JobProcessor(state_store).process("abc")

    assert state_store.values == {}


def test_store_failure_propagates(state_store):
    state_store.fail = True

    with pytest.raises(StoreUnavailableError):
        JobProcessor(state_store).process("4")
