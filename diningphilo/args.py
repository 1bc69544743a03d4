"""Command-line argument parsing for the dining philosophers simulation."""

from __future__ import annotations

from dataclasses import dataclass

MAX_PHILOSOPHERS = 300
LONG_MAX = 2**63 - 1
BAD_ARGS_MESSAGE = "Error: bad arguments"
MAX_THREADS_MESSAGE = "Error: too much threads"

_DIGITS = frozenset("0123456789")


class ArgumentError(ValueError):
    """Raised when the command-line arguments are invalid."""

    def __init__(self, message: str = BAD_ARGS_MESSAGE) -> None:
        super().__init__(message)


class TooManyPhilosophersError(ArgumentError):
    """Raised when more philosophers are requested than allowed."""

    def __init__(self, message: str = MAX_THREADS_MESSAGE) -> None:
        super().__init__(message)


@dataclass(frozen=True)
class Settings:
    """Parameters of one simulation run; times are in milliseconds."""

    philo_count: int
    time_to_die: int
    time_to_eat: int
    time_to_sleep: int
    min_meals: int | None = None


def parse_positive(text: str) -> int:
    """Parse a strictly positive decimal integer, allowing one leading '+'."""
    digits = text[1:] if text.startswith("+") and len(text) > 1 else text
    if not digits or not set(digits) <= _DIGITS:
        raise ArgumentError()
    value = int(digits)
    if value > LONG_MAX or value <= 0:
        raise ArgumentError()
    return value


def parse_args(args: list[str]) -> Settings:
    """Build Settings from the four or five positional arguments."""
    if len(args) not in (4, 5):
        raise ArgumentError()
    values = []
    for position, text in enumerate(args):
        value = parse_positive(text)
        if position == 0 and value >= MAX_PHILOSOPHERS:
            raise TooManyPhilosophersError()
        values.append(value)
    min_meals = values[4] if len(values) == 5 else None
    return Settings(values[0], values[1], values[2], values[3], min_meals)