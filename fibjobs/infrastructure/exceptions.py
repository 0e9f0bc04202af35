"""
Infrastructure Layer Exceptions

Errors raised when an external collaborator (Redis, PostgreSQL, Celery
broker) fails. Adapters catch the client library's exceptions at their
boundary and re-raise one of these, chained with `from`, so the layers above
never import redis or sqlalchemy exception types.

Mapping (API Layer):
    - StoreUnavailableError   -> 500 STORE_UNAVAILABLE
    - LogUnavailableError     -> 500 LOG_UNAVAILABLE
    - ChannelUnavailableError -> 500 CHANNEL_UNAVAILABLE
"""


class InfrastructureError(Exception):
    """Base exception for failures of external collaborators."""

    code: str = "INFRASTRUCTURE_ERROR"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class StoreUnavailableError(InfrastructureError):
    """Fast State Store (Redis hash) read or write failed."""

    code = "STORE_UNAVAILABLE"


class LogUnavailableError(InfrastructureError):
    """Durable Log (PostgreSQL table) read or write failed."""

    code = "LOG_UNAVAILABLE"


class ChannelUnavailableError(InfrastructureError):
    """Event Channel publish or subscription failed."""

    code = "CHANNEL_UNAVAILABLE"
