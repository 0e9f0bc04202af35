"""
Job Processor - per-message computation step

Turns one Event Channel payload into a materialized result: parse, compute,
overwrite the Fast State Store entry. Shared by both consumers, the pub/sub
ComputationWorker and the Celery task of the durable delivery mode; they
differ only in what they do when this step raises.

Architecture Notes:
    - Part of Application Layer (Services)
    - Pure orchestration: parsing and computing are Domain concerns, the
      write goes through StateStoreProtocol
    - Raises instead of logging so each consumer picks its own policy
"""

import logging
import time

from fibjobs.domain.jobs.fibonacci import compute_result
from fibjobs.domain.jobs.job_index import JobIndex
from fibjobs.domain.jobs.repositories import StateStoreProtocol
from fibjobs.domain.shared.exceptions import (
    InvalidInputError,
    MalformedMessageError,
    OutOfRangeError,
)

# Configure logger for this module
logger = logging.getLogger(__name__)


def parse_payload(payload: str) -> JobIndex:
    """
    Parse a channel payload into a JobIndex.

    Args:
        payload: Message body, expected to be the index decimal string

    Returns:
        Validated JobIndex

    Raises:
        MalformedMessageError: Payload is not an integer literal in 0..40
    """
    try:
        return JobIndex.from_string(payload)
    except (InvalidInputError, OutOfRangeError) as e:
        raise MalformedMessageError(
            f"unable to parse integer: {payload}", payload=payload
        ) from e


class JobProcessor:
    """
    Computes and stores the result for one payload.

    Examples:
        >>> processor = JobProcessor(state_store)
        >>> processor.process("10")
        89
        >>> state_store.snapshot()["10"]
        '89'
    """

    def __init__(self, state_store: StateStoreProtocol) -> None:
        self.state_store = state_store

    def process(self, payload: str) -> int:
        """
        Parse payload, compute fib, overwrite the state entry.

        Args:
            payload: Channel message body

        Returns:
            The computed result

        Raises:
            MalformedMessageError: Payload is not a valid job index
            StoreUnavailableError: Result could not be written
        """
        index = parse_payload(payload)

        started = time.perf_counter()
        result = compute_result(index)
        elapsed = time.perf_counter() - started

        logger.info(f"Computed fib({index.key}) = {result} in {elapsed:.3f}s")

        self.state_store.set_value(index.key, str(result))
        return result
