"""
API Schemas Package

Contains shared Pydantic models for API Layer.
"""

from fibjobs.api.schemas.common import ErrorResponse
from fibjobs.api.schemas.values import (
    SubmitValueRequest,
    SubmitValueResponse,
    ValueRecord,
)

__all__ = ["ErrorResponse", "SubmitValueRequest", "SubmitValueResponse", "ValueRecord"]
