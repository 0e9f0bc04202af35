"""
JobIndex Value Object.

A JobIndex is the unit of work of the system: a non-negative integer that is
both the input of the Fibonacci computation and the key under which its
status is cached and its submission is logged.

This is an immutable Value Object following DDD principles.
"""

import re
from dataclasses import dataclass
from typing import Final

from fibjobs.domain.jobs.constants import MAX_INDEX, MIN_INDEX
from fibjobs.domain.shared.exceptions import InvalidInputError, OutOfRangeError


# Optional sign followed by ASCII digits, nothing else (no spaces, no "1_000")
INTEGER_LITERAL_PATTERN: Final[re.Pattern] = re.compile(r"[+-]?[0-9]+")

# Significant digits accepted before conversion; anything longer is far out of range
MAX_SIGNIFICANT_DIGITS: Final[int] = 18


def parse_integer(text: str) -> int:
    """
    Parse a decimal integer literal strictly.

    Python's int() is more permissive than a wire format should be (it strips
    whitespace and accepts underscores), so the whole literal is matched
    first. Leading zeros are dropped before conversion; a literal with more
    than MAX_SIGNIFICANT_DIGITS digits left is refused without converting it
    (int() raises ValueError past 4300 digits).

    Args:
        text: Candidate integer literal

    Returns:
        Parsed integer

    Raises:
        InvalidInputError: If text is not a string, not an integer literal,
            or too long to be an index

    Examples:
        >>> parse_integer("17")
        17
        >>> parse_integer("+003")
        3
        >>> parse_integer(" 3")
        Traceback (most recent call last):
        ...
        fibjobs.domain.shared.exceptions.InvalidInputError: ...
    """
    if not isinstance(text, str) or not INTEGER_LITERAL_PATTERN.fullmatch(text):
        raise InvalidInputError(
            f"unable to parse index value: {text}",
            raw_value=str(text) if text is not None else None,
        )

    sign = "-" if text[0] == "-" else ""
    digits = text.lstrip("+-").lstrip("0") or "0"

    if len(digits) > MAX_SIGNIFICANT_DIGITS:
        raise InvalidInputError(
            f"unable to parse index value: literal has {len(digits)} significant digits",
            raw_value=text,
        )

    return int(sign + digits)


@dataclass(frozen=True)
class JobIndex:
    """
    Immutable Value Object representing an accepted job index.

    Valid range: MIN_INDEX..MAX_INDEX inclusive (0..40). The upper bound keeps
    the naive recursive computation tractable; negative indices are rejected
    as well since the recurrence is not defined for them.

    Attributes:
        value: Index as integer

    Examples:
        >>> JobIndex(7).key
        '7'
        >>> JobIndex.from_string("07")
        JobIndex(value=7)
        >>> JobIndex.from_string("41")
        Traceback (most recent call last):
        ...
        fibjobs.domain.shared.exceptions.OutOfRangeError: ...
    """

    value: int

    def __post_init__(self) -> None:
        """
        Validate index after initialization.

        Raises:
            InvalidInputError: If value is not an int (bool is refused too)
            OutOfRangeError: If value is outside MIN_INDEX..MAX_INDEX
        """
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise InvalidInputError(
                f"index must be integer, got {type(self.value).__name__}",
                raw_value=repr(self.value),
            )

        if self.value > MAX_INDEX:
            raise OutOfRangeError(
                "index too high",
                index=self.value,
                min_index=MIN_INDEX,
                max_index=MAX_INDEX,
            )

        if self.value < MIN_INDEX:
            raise OutOfRangeError(
                "index must not be negative",
                index=self.value,
                min_index=MIN_INDEX,
                max_index=MAX_INDEX,
            )

    @classmethod
    def from_string(cls, text: str) -> "JobIndex":
        """
        Parse and validate an index received as a string.

        Args:
            text: Decimal integer literal, optional sign allowed

        Returns:
            JobIndex instance

        Raises:
            InvalidInputError: If text is not an integer literal
            OutOfRangeError: If the parsed integer is out of range
        """
        return cls(parse_integer(text))

    @property
    def key(self) -> str:
        """
        Canonical decimal string used as Fast State Store key and channel payload.

        "05" and "+5" both map to "5", so the gateway's placeholder and the
        worker's result always land on the same field.
        """
        return str(self.value)

    def __str__(self) -> str:
        return self.key
