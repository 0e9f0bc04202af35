"""
Domain Layer Exceptions

Exception hierarchy for errors caused by the data a job carries, as opposed
to errors caused by the infrastructure that moves it around.

Responsibility:
    - Base exception class for domain errors
    - Client-caused validation errors (InvalidInputError, OutOfRangeError)
    - Worker-side payload errors (MalformedMessageError)

Architecture Notes:
    - Part of Shared Domain
    - API Layer converts InvalidInputError/OutOfRangeError to HTTP 400
    - Worker logs MalformedMessageError and drops the message
    - Infrastructure failures live in fibjobs.infrastructure.exceptions
"""


class DomainException(Exception):
    """
    Base exception for all domain layer errors.

    All domain-specific exceptions inherit from this class so the API Layer
    can map the whole family with a single exception handler.

    Examples:
        >>> raise DomainException("Business rule violation")
    """

    def __init__(self, message: str) -> None:
        """
        Initialize domain exception with error message.

        Args:
            message: Human-readable error description
        """
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        """String representation of the exception."""
        return f"{self.__class__.__name__}: {self.message}"

    def __repr__(self) -> str:
        """Developer-friendly representation."""
        return f"{self.__class__.__name__}(message={self.message!r})"


class InvalidInputError(DomainException):
    """
    Raised when a submitted job index is not an integer literal.

    This exception is raised when:
    - The index string is empty
    - The index string contains non-digit characters ("abc", "1.5", "1e3")

    Raised before any side effect, so nothing is written anywhere.

    Examples:
        >>> raise InvalidInputError("unable to parse index value: abc", raw_value="abc")
    """

    def __init__(self, message: str, raw_value: str | None = None) -> None:
        """
        Initialize input parsing error.

        Args:
            message: Error description
            raw_value: Original string that failed to parse (optional)
        """
        self.raw_value = raw_value
        super().__init__(message)


class OutOfRangeError(DomainException):
    """
    Raised when a job index parses but falls outside the accepted domain.

    Accepted domain is 0..MAX_INDEX inclusive. Raised before any side effect.

    Attributes:
        index: The offending integer
        min_index: Lowest accepted index
        max_index: Highest accepted index

    Examples:
        >>> raise OutOfRangeError("index too high", index=41, min_index=0, max_index=40)
    """

    def __init__(
        self,
        message: str,
        index: int | None = None,
        min_index: int | None = None,
        max_index: int | None = None,
    ) -> None:
        self.index = index
        self.min_index = min_index
        self.max_index = max_index
        super().__init__(message)


class MalformedMessageError(DomainException):
    """
    Raised by the worker when an Event Channel payload is not a valid job index.

    Never surfaced to a client: the worker logs it and drops the message.
    """

    def __init__(self, message: str, payload: str | None = None) -> None:
        self.payload = payload
        super().__init__(message)
