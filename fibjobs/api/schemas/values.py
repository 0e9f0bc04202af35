"""
Values API Schemas

Wire format of the /values endpoints.
"""

from pydantic import BaseModel, Field


class SubmitValueRequest(BaseModel):
    """
    Body of POST /values.

    The index is a string on the wire; its integer validation happens in the
    Application Layer so that "abc" yields 400 rather than a schema error.
    """

    index: str = Field(description="Job index as decimal string (0-40)")

    class Config:
        json_schema_extra = {"example": {"index": "10"}}


class SubmitValueResponse(BaseModel):
    """Acknowledgment: the job was accepted, the result is not ready yet."""

    working: bool = True


class ValueRecord(BaseModel):
    """One accepted submission, as stored in the Durable Log."""

    number: int
