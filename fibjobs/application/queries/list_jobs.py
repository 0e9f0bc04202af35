"""
ListJobsQuery - CQRS Read Query

Returns the submission history from the Durable Log: one entry per accepted
submission, duplicates included, in no particular order.
"""

import logging
from typing import List

from pydantic import BaseModel

from fibjobs.domain.jobs.repositories import JobLogProtocol

logger = logging.getLogger(__name__)


class LoggedJob(BaseModel):
    """One Durable Log row."""

    number: int


class ListJobsQueryHandler:
    """
    Reads every Durable Log row.

    Raises LogUnavailableError from the log unchanged.
    """

    def __init__(self, job_log: JobLogProtocol) -> None:
        self.job_log = job_log

    def handle(self) -> List[LoggedJob]:
        numbers = self.job_log.list_all()
        logger.debug(f"Job log returned {len(numbers)} row(s)")
        return [LoggedJob(number=number) for number in numbers]
