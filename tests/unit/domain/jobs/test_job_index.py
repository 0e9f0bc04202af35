"""
Tests for JobIndex value object and strict integer parsing.

Covers:
- Accepted range 0..40
- Rejection of out-of-range values (above 40, negative)
- Rejection of non-integer literals
- Canonical key form
"""

import pytest

from fibjobs.domain.jobs.constants import MAX_INDEX, MIN_INDEX
from fibjobs.domain.jobs.job_index import JobIndex, parse_integer
from fibjobs.domain.shared.exceptions import InvalidInputError, OutOfRangeError


# ============================================================================
# parse_integer()
# ============================================================================


@pytest.mark.parametrize(
    "text,expected",
    [("0", 0), ("7", 7), ("40", 40), ("+5", 5), ("-3", -3), ("007", 7), ("41", 41)],
)
def test_parse_integer_accepts_integer_literals(text, expected):
    assert parse_integer(text) == expected


@pytest.mark.parametrize(
    "text", ["abc", "", " 5", "5 ", "5\n", "\n5", "1.5", "1e3", "1_0", "0x10", "+", "--1"]
)
def test_parse_integer_rejects_non_literals(text):
    with pytest.raises(InvalidInputError) as exc_info:
        parse_integer(text)

    assert exc_info.value.raw_value == text
    assert "unable to parse index value" in exc_info.value.message


def test_parse_integer_rejects_non_string():
    with pytest.raises(InvalidInputError):
        parse_integer(5)  # type: ignore[arg-type]


def test_parse_integer_ignores_leading_zeros_of_long_literal():
    assert parse_integer("0" * 5000 + "5") == 5
    assert parse_integer("-" + "0" * 5000 + "7") == -7


@pytest.mark.parametrize("text", ["9" * 19, "9" * 5000, "-" + "1" * 5000, "1" + "0" * 4400])
def test_parse_integer_rejects_overlong_literal(text):
    with pytest.raises(InvalidInputError) as exc_info:
        parse_integer(text)

    assert exc_info.value.raw_value == text
    assert "significant digits" in exc_info.value.message


# ============================================================================
# JobIndex
# ============================================================================


def test_job_index_accepts_bounds():
    assert JobIndex(MIN_INDEX).value == 0
    assert JobIndex(MAX_INDEX).value == 40


def test_job_index_rejects_above_max():
    with pytest.raises(OutOfRangeError) as exc_info:
        JobIndex(41)

    error = exc_info.value
    assert error.index == 41
    assert error.max_index == 40
    assert error.message == "index too high"


def test_job_index_rejects_negative():
    with pytest.raises(OutOfRangeError) as exc_info:
        JobIndex(-1)

    assert exc_info.value.index == -1
    assert exc_info.value.min_index == 0


def test_job_index_rejects_bool():
    with pytest.raises(InvalidInputError):
        JobIndex(True)


def test_from_string_parses_and_validates():
    assert JobIndex.from_string("10") == JobIndex(10)

    with pytest.raises(OutOfRangeError):
        JobIndex.from_string("41")

    with pytest.raises(InvalidInputError):
        JobIndex.from_string("abc")


@pytest.mark.parametrize("text", ["5", "05", "+5", "005"])
def test_key_is_canonical(text):
    """Every spelling of the same index maps to the same store key."""
    assert JobIndex.from_string(text).key == "5"


def test_job_index_is_immutable():
    index = JobIndex(3)
    with pytest.raises(AttributeError):
        index.value = 4  # type: ignore[misc]
