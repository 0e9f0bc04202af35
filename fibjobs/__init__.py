"""
fibjobs - asynchronous Fibonacci job pipeline.

An HTTP gateway accepts a job index, stores a placeholder in Redis,
announces the job on an event channel and logs it to PostgreSQL. A separate
worker process computes the value and overwrites the placeholder.
"""

__version__ = "0.1.0"
