"""
CurrentValuesQuery - CQRS Read Query

Returns the Fast State Store snapshot as-is: placeholders for jobs the
worker has not reached (or never will), results for the rest.

Consistency:
    Eventually consistent at best. A snapshot taken right after a submission
    shows the placeholder; nothing bounds how long it stays there, and it
    stays forever if no worker was subscribed when the job was published.
"""

import logging
from typing import Dict

from fibjobs.domain.jobs.repositories import StateStoreProtocol

logger = logging.getLogger(__name__)


class CurrentValuesQueryHandler:
    """
    Reads the whole state mapping.

    Raises StoreUnavailableError from the store unchanged.
    """

    def __init__(self, state_store: StateStoreProtocol) -> None:
        self.state_store = state_store

    def handle(self) -> Dict[str, str]:
        values = self.state_store.snapshot()
        logger.debug(f"State store returned {len(values)} entries")
        return values
