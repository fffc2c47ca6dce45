"""Command-line argument parsing for the dining philosophers simulation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

INT_MAX = 2**31 - 1

_LEADING_BLANKS = " \t\n"
_DIGITS = "0123456789"


class ArgumentError(ValueError):
    """Raised when the command-line arguments are missing or malformed."""


@dataclass(frozen=True)
class Settings:
    """Simulation parameters; all times are in milliseconds."""

    n_philo: int
    time_die: int
    time_eat: int
    time_sleep: int
    meals_required: Optional[int] = None

    @property
    def meal_limit_set(self) -> bool:
        """True when the simulation stops after a number of meals."""
        return self.meals_required is not None


def parse_number(text: str) -> int:
    """Parse a non-negative decimal integer no larger than INT_MAX.

    Leading spaces, tabs and newlines are skipped and a single leading '+'
    is accepted. A '-' sign, an empty value, trailing characters or a value
    above INT_MAX raise ArgumentError.
    """
    rest = text.lstrip(_LEADING_BLANKS)
    if not rest:
        raise ArgumentError(f"empty number: {text!r}")
    if rest[0] == "-":
        raise ArgumentError(f"negative number: {text!r}")
    if rest[0] == "+":
        rest = rest[1:]

    digits = ""
    for char in rest:
        if char not in _DIGITS:
            break
        digits += char

    if len(digits) != len(rest):
        raise ArgumentError(f"invalid characters in number: {text!r}")

    value = int(digits) if digits else 0
    if value > INT_MAX:
        raise ArgumentError(f"number too large: {text!r}")
    return value


def parse_args(argv: Sequence[str]) -> Settings:
    """Build Settings from the arguments that follow the program name.

    Expects number_of_philosophers, time_to_die, time_to_eat, time_to_sleep
    and optionally number_of_times_each_philosopher_must_eat. Every value
    must be a positive integer.
    """
    if not 4 <= len(argv) <= 5:
        raise ArgumentError(f"expected 4 or 5 arguments, got {len(argv)}")

    values = [parse_number(arg) for arg in argv]
    if any(value == 0 for value in values):
        raise ArgumentError("all arguments must be greater than zero")

    n_philo, time_die, time_eat, time_sleep, *extra = values
    return Settings(
        n_philo=n_philo,
        time_die=time_die,
        time_eat=time_eat,
        time_sleep=time_sleep,
        meals_required=extra[0] if extra else None,
    )