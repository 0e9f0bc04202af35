"""
Computation Worker - long-lived Event Channel consumer

Single sequential loop: receive a payload, compute, write, repeat. Runs in
its own process for as long as the subscription is open.

Responsibility:
    - Drain the Event Channel in arrival order, one message at a time
    - Apply the drop policy: a message that cannot be processed is logged
      and discarded, never retried, never escalated
    - Keep counters for the shutdown summary

Architecture Notes:
    - Part of Application Layer (Services)
    - No concurrency inside the worker: a slow fib(40) delays everything
      published after it
    - Subscriber and processor are injected; the worker owns neither and
      closes neither (see fibjobs.worker for resource ownership)

Error Handling:
    - MalformedMessageError: log warning, drop message
    - StoreUnavailableError: log error, drop message (entry stays placeholder)
    - ChannelUnavailableError from the subscription itself: propagates, the
      process exits and whoever supervises it decides about restarting
"""

import logging
from dataclasses import dataclass

from fibjobs.application.services.job_processor import JobProcessor
from fibjobs.domain.jobs.repositories import EventSubscriberProtocol
from fibjobs.domain.shared.exceptions import MalformedMessageError
from fibjobs.infrastructure.exceptions import StoreUnavailableError

# Configure logger for this module
logger = logging.getLogger(__name__)


@dataclass
class WorkerStats:
    """Counters reported when the worker stops."""

    received: int = 0
    computed: int = 0
    malformed: int = 0
    store_failures: int = 0


class ComputationWorker:
    """
    Sequential consumer of the Event Channel.

    Examples:
        >>> worker = ComputationWorker(RedisEventSubscriber(client), JobProcessor(store))
        >>> worker.run()          # blocks until worker.stop()
        WorkerStats(received=3, computed=3, malformed=0, store_failures=0)
    """

    def __init__(
        self,
        subscriber: EventSubscriberProtocol,
        processor: JobProcessor,
    ) -> None:
        self.subscriber = subscriber
        self.processor = processor
        self.stats = WorkerStats()

    def handle_message(self, payload: str) -> None:
        """
        Process one payload, dropping it on any per-message failure.

        Never raises for MalformedMessageError or StoreUnavailableError.
        """
        self.stats.received += 1
        logger.info(f"new message: {payload}")

        try:
            self.processor.process(payload)

        except MalformedMessageError as e:
            self.stats.malformed += 1
            logger.warning(f"Dropping message: {e.message}")
            return

        except StoreUnavailableError as e:
            self.stats.store_failures += 1
            logger.error(f"Dropping message '{payload}': {e.message}")
            return

        self.stats.computed += 1

    def run(self) -> WorkerStats:
        """
        Consume until the subscription is closed.

        Returns:
            WorkerStats accumulated over the run

        Raises:
            ChannelUnavailableError: If the subscription breaks
        """
        logger.info("Computation worker started")

        for payload in self.subscriber.listen():
            self.handle_message(payload)

        logger.info(
            f"Computation worker stopped: received={self.stats.received}, "
            f"computed={self.stats.computed}, malformed={self.stats.malformed}, "
            f"store_failures={self.stats.store_failures}"
        )
        return self.stats

    def stop(self) -> None:
        """Ask the loop to finish after the message in progress."""
        logger.info("Stopping computation worker")
        self.subscriber.close()
