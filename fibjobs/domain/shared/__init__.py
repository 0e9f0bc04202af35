"""
Shared Domain Module

Shared domain concepts used across the jobs subdomain.

This module exports:
    - DomainException: Base exception for all domain errors
    - InvalidInputError, OutOfRangeError, MalformedMessageError
"""

from .exceptions import (
    DomainException,
    InvalidInputError,
    MalformedMessageError,
    OutOfRangeError,
)

__all__ = [
    "DomainException",
    "InvalidInputError",
    "OutOfRangeError",
    "MalformedMessageError",
]
