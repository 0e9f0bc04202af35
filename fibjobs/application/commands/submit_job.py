"""
SubmitJobCommand - CQRS Write Command

Accepts a Fibonacci job and makes it observable before any computation
happens.

Responsibility:
    - Data holder for a job submission (index as received, still a string)
    - Validation of the index (integer literal, 0..40) before side effects
    - Ordered, independently failable side effects:
        (a) placeholder into the Fast State Store
        (b) publish on the Event Channel
        (c) append to the Durable Log

Architecture Notes:
    - Part of Application Layer (orchestration)
    - Depends on Domain protocols only; Redis/PostgreSQL are injected
    - Synchronous: the gateway runs it in a threadpool worker per request

Partial Failure Ordering:
    The three steps are NOT a transaction and nothing is rolled back.
        - (a) fails: nothing observable happened
        - (b) fails: placeholder visible, nobody will compute it, no log row
        - (c) fails: placeholder visible and a worker may compute it, no log row
    The caller receives the error of the failing step in every case.
"""

import logging

from pydantic import BaseModel, Field

from fibjobs.domain.jobs.constants import PLACEHOLDER_VALUE
from fibjobs.domain.jobs.job_index import JobIndex
from fibjobs.domain.jobs.repositories import (
    EventPublisherProtocol,
    JobLogProtocol,
    StateStoreProtocol,
)

# Configure logger for this module
logger = logging.getLogger(__name__)


class SubmitJobCommand(BaseModel):
    """
    Command carrying a job submission as received from the client.

    The index stays a string here; parsing it is part of handling the
    command so that parse errors become InvalidInputError, not a schema error.

    Attributes:
        index: Decimal integer literal, e.g. "10"
    """

    index: str = Field(description="Job index as decimal string")

    class Config:
        json_schema_extra = {"example": {"index": "10"}}


class JobAccepted(BaseModel):
    """
    Result DTO returned after all three submission steps succeeded.

    Attributes:
        index: Parsed job index
        key: Fast State Store key the result will appear under
        receivers: Subscribers that got the event (0: nobody will compute it)
    """

    index: int
    key: str
    receivers: int = Field(ge=0)


class SubmitJobHandler:
    """
    Executes SubmitJobCommand against injected stores.

    Examples:
        >>> handler = SubmitJobHandler(state_store, publisher, job_log)
        >>> handler.handle(SubmitJobCommand(index="10"))
        JobAccepted(index=10, key='10', receivers=1)
    """

    def __init__(
        self,
        state_store: StateStoreProtocol,
        publisher: EventPublisherProtocol,
        job_log: JobLogProtocol,
    ) -> None:
        self.state_store = state_store
        self.publisher = publisher
        self.job_log = job_log

    def handle(self, command: SubmitJobCommand) -> JobAccepted:
        """
        Validate the index, then run the three side effects in order.

        Args:
            command: Submission as received

        Returns:
            JobAccepted once placeholder, publish and log append all succeeded

        Raises:
            InvalidInputError: Index is not an integer literal (no side effects)
            OutOfRangeError: Index outside 0..40 (no side effects)
            StoreUnavailableError: Step (a) failed
            ChannelUnavailableError: Step (b) failed
            LogUnavailableError: Step (c) failed
        """
        index = JobIndex.from_string(command.index)
        logger.info(f"Accepting job {index.key}")

        # (a) placeholder first: the earliest observable effect
        self.state_store.set_value(index.key, PLACEHOLDER_VALUE)

        # (b) notify whoever is listening right now
        receivers = self.publisher.publish(index.key)

        # (c) durable record of the submission
        self.job_log.append(index.value)

        logger.info(f"Job {index.key} accepted ({receivers} receiver(s))")
        return JobAccepted(index=index.value, key=index.key, receivers=receivers)
