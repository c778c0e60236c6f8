"""Command-line argument parsing for the dining philosophers simulation."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

_WHITESPACE = frozenset(" \n\t\v\r\f")
_DIGITS = frozenset("0123456789")

MSG_BAD_COUNT = "argument invalid"
MSG_NOT_POSITIVE = "argument cannot be zero"
MSG_NOT_NUMERIC = "the argument must only contain numbers"


class ArgumentError(ValueError):
    """Raised when the command-line arguments are unusable."""


@dataclass(frozen=True)
class Settings:
    """Parameters of one simulation run; times are in milliseconds."""

    philosophers: int
    time_to_die: int
    time_to_eat: int
    time_to_sleep: int
    meals_required: int | None = None


def atol(text: str) -> int:
    """Parse a leading integer the way C's atol does.

    Leading whitespace is skipped, one optional sign is accepted, and
    parsing stops at the first character that is not an ASCII digit.
    Text with no digits yields 0.
    """
    rest = text.lstrip("".join(_WHITESPACE))
    sign = 1
    if rest[:1] in ("-", "+"):
        if rest[0] == "-":
            sign = -1
        rest = rest[1:]
    value = 0
    for char in rest:
        if char not in _DIGITS:
            break
        value = value * 10 + ord(char) - ord("0")
    return sign * value


def validate_argument(text: str) -> int:
    """Check that ``text`` is a positive, purely numeric argument and return its value."""
    value = atol(text)
    if value <= 0:
        raise ArgumentError(MSG_NOT_POSITIVE)
    if any(char not in _DIGITS for char in text):
        raise ArgumentError(MSG_NOT_NUMERIC)
    return value


def parse_settings(args: Sequence[str]) -> Settings:
    """Build :class:`Settings` from the arguments that follow the program name.

    Expected: number_of_philosophers time_to_die time_to_eat time_to_sleep
    [number_of_times_each_philosopher_must_eat]
    """
    if len(args) not in (4, 5):
        raise ArgumentError(MSG_BAD_COUNT)
    values = [validate_argument(arg) for arg in args]
    philosophers, time_to_die, time_to_eat, time_to_sleep = values[:4]
    meals_required = values[4] if len(values) == 5 else None
    return Settings(
        philosophers=philosophers,
        time_to_die=time_to_die,
        time_to_eat=time_to_eat,
        time_to_sleep=time_to_sleep,
        meals_required=meals_required,
    )