"""
Application Services

Exports:
    - JobProcessor: Parse, compute and store one channel payload
    - ComputationWorker: Sequential Event Channel consumer
"""

from .computation_worker import ComputationWorker, WorkerStats
from .job_processor import JobProcessor, parse_payload

__all__ = ["JobProcessor", "parse_payload", "ComputationWorker", "WorkerStats"]
