"""
Computation worker process entry point.

Opens the worker's own Redis connection, subscribes to the Event Channel
and runs ComputationWorker until SIGINT/SIGTERM. Everything opened here is
closed here, whichever way the loop ends.

Usage:
    fibjobs-worker [--log-level DEBUG]
    python -m fibjobs.worker

Exit codes:
    0 - stopped by signal
    1 - configuration missing or Redis unreachable at startup
    2 - subscription broke while running
"""

import argparse
import logging
import signal
import sys
from typing import List, Optional

from fibjobs.application.services.computation_worker import ComputationWorker
from fibjobs.application.services.job_processor import JobProcessor
from fibjobs.config import ConfigMissingError, Settings, configure_logging
from fibjobs.infrastructure.exceptions import (
    ChannelUnavailableError,
    StoreUnavailableError,
)
from fibjobs.infrastructure.messaging.redis_channel import RedisEventSubscriber
from fibjobs.infrastructure.persistence.redis.connection import (
    close_redis_client,
    create_redis_client,
)
from fibjobs.infrastructure.persistence.redis.state_store import RedisStateStore

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Consume accepted job indices and compute their Fibonacci values"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: LOG_LEVEL env or INFO)",
    )
    return parser.parse_args(argv)


def run(settings: Settings) -> int:
    """
    Run the worker until stopped.

    Args:
        settings: Worker settings (Redis fields required)

    Returns:
        Process exit code
    """
    try:
        redis_client = create_redis_client(settings)
    except StoreUnavailableError as e:
        logger.critical(f"Cannot start worker: {e.message}")
        return 1

    try:
        subscriber = RedisEventSubscriber(redis_client)
        worker = ComputationWorker(subscriber, JobProcessor(RedisStateStore(redis_client)))

        def handle_signal(signum, frame) -> None:
            logger.info(f"Received signal {signal.Signals(signum).name}")
            worker.stop()

        signal.signal(signal.SIGINT, handle_signal)
        signal.signal(signal.SIGTERM, handle_signal)

        worker.run()
        return 0

    except ChannelUnavailableError as e:
        logger.critical(f"Worker stopped: {e.message}")
        return 2

    finally:
        close_redis_client(redis_client)


def main(argv: Optional[List[str]] = None) -> int:
    """Console entry point."""
    args = parse_args(argv)

    try:
        settings = Settings.from_env(require_postgres=False)
    except ConfigMissingError as e:
        configure_logging(args.log_level or "INFO")
        logger.critical(f"Cannot start worker: {e}")
        return 1

    configure_logging(args.log_level or settings.log_level)
    logger.info("starting computation worker")
    return run(settings)


if __name__ == "__main__":
    sys.exit(main())
