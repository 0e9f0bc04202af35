"""
Commands Package (CQRS write side)

Exports:
    - SubmitJobCommand, SubmitJobHandler, JobAccepted
"""

from .submit_job import JobAccepted, SubmitJobCommand, SubmitJobHandler

__all__ = ["SubmitJobCommand", "SubmitJobHandler", "JobAccepted"]
