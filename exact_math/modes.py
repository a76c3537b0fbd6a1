"""Session-wide evaluation settings."""

from dataclasses import dataclass
from enum import Enum


class AngleMode(Enum):
    """Units of angle measurement."""
    RADIAN = 0
    DEGREE = 1


class FractionMode(Enum):
    """When fractions are merged while combining like terms."""
    COMBINE_ALL_TERMS = 0       # one fraction for the whole expression
    COMBINE_ALL_FRACTIONS = 1   # every fractional term merged together
    COMBINE_LIKE_FRACTIONS = 2  # only fractions with the same denominator
    NEVER_COMBINE = 3


class FunctionMode(Enum):
    """Whether function arguments are plugged into the definition when solving."""
    PLUG_IN = 0
    KEEP_WHOLE = 1


@dataclass(frozen=True)
class NumberMode:
    """How numbers are displayed.

    ``NumberMode.decimal()`` prints floating point values,
    ``NumberMode.fraction(accuracy)`` prints reals as ``n/d`` when a
    rational with a denominator no larger than ``accuracy`` is found.
    """
    kind: str = "decimal"
    approximation_accuracy: int = 0

    @classmethod
    def decimal(cls) -> 'NumberMode':
        return cls("decimal", 0)

    @classmethod
    def fraction(cls, approximation_accuracy: int = 10000) -> 'NumberMode':
        return cls("fraction", approximation_accuracy)

    @property
    def is_fraction(self) -> bool:
        return self.kind == "fraction"
