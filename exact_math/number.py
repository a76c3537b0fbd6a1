"""
Numeric kernel: a complex scalar built on a pair of doubles.
"""

import math
from typing import Optional, Tuple, Union

from .errors import (
    DivideByZeroError, DomainError, NonComparableError, ParsingError,
    RaisedToComplexNumberError, RootOfComplexNumberError,
)
from .value import Value

RATIONAL_EPSILON = 0.000000001
RATIONAL_SEARCH_CAP = 10000

IMAGINARY_UNIT = "ⅈ"


def _pow(base: float, exponent: float) -> float:
    try:
        return math.pow(base, exponent)
    except OverflowError:
        return math.inf


def int_gcf(a: int, b: int) -> int:
    """Euclid's algorithm; 0 when either side is 0."""
    c, d = abs(a), abs(b)
    high, low = max(c, d), min(c, d)
    if low == 0:
        return 0
    while True:
        remainder = high % low
        if remainder == 0:
            return low
        high, low = low, remainder


class Number(Value):
    """Complex number with real and imaginary parts.

    Instances are never mutated after construction; arithmetic returns
    new numbers.
    """

    def __init__(self, real: Union[int, float] = 0.0, imag: Union[int, float] = 0.0):
        self.real = float(real)
        self.imag = float(imag)

    # ========================================================================
    # CONSTRUCTORS
    # ========================================================================

    @classmethod
    def from_string(cls, text: str) -> 'Number':
        """Parse a decimal literal, optionally suffixed with ⅈ."""
        imaginary = text.endswith(IMAGINARY_UNIT)
        body = text[:-1] if imaginary else text
        if imaginary and body in ("", "+", "-"):
            body += "1"
        if not body or any(c not in "+-0123456789." for c in body):
            raise ParsingError(f"not a number: {text!r}")
        try:
            value = float(body)
        except ValueError:
            raise ParsingError(f"not a number: {text!r}")
        return cls(0.0, value) if imaginary else cls(value)

    @classmethod
    def pi(cls) -> 'Number':
        return cls(math.pi)

    @classmethod
    def e(cls) -> 'Number':
        return cls(math.e)

    @staticmethod
    def coerce(value) -> 'Number':
        if isinstance(value, Number):
            return value
        if isinstance(value, complex):
            return Number(value.real, value.imag)
        if isinstance(value, (int, float)):
            return Number(value)
        raise TypeError(f"cannot make a Number from {type(value).__name__}")

    # ========================================================================
    # PROPERTIES
    # ========================================================================

    @property
    def is_real(self) -> bool:
        return self.imag == 0.0

    @property
    def conjugate(self) -> 'Number':
        return Number(self.real, -self.imag)

    @property
    def as_integer(self) -> Optional[int]:
        if self.imag == 0.0 and math.isfinite(self.real) and math.fmod(self.real, 1.0) == 0:
            return int(self.real)
        return None

    @property
    def approximate_rational(self) -> Optional[Tuple[int, int]]:
        """Search for ``(numerator, denominator)`` within 1e-9 of the value.

        The denominator carries the sign. Gives up once the pair grows past
        the search cap, or for complex values.
        """
        if not self.is_real or not math.isfinite(self.real):
            return None
        real = self.real
        numerator = 0.0
        denominator = 1.0 if real >= 0.0 else -1.0
        step = 1.0 if real > 0.0 else -1.0
        divided = numerator / denominator
        while abs(divided - real) > RATIONAL_EPSILON:
            if abs(divided) > abs(real):
                denominator += step
            else:
                numerator += 1
            divided = numerator / denominator
            if numerator + denominator > RATIONAL_SEARCH_CAP:
                return None
        return int(numerator), int(denominator)

    # ========================================================================
    # ARITHMETIC
    # ========================================================================

    def __add__(self, other) -> 'Number':
        other = Number.coerce(other)
        return Number(self.real + other.real, self.imag + other.imag)

    __radd__ = __add__

    def __sub__(self, other) -> 'Number':
        other = Number.coerce(other)
        return Number(self.real - other.real, self.imag - other.imag)

    def __rsub__(self, other) -> 'Number':
        return Number.coerce(other) - self

    def __mul__(self, other) -> 'Number':
        other = Number.coerce(other)
        real = (self.real * other.real) - (self.imag * other.imag)
        imag = (self.real * other.imag) + (self.imag * other.real)
        return Number(real, imag)

    __rmul__ = __mul__

    def __truediv__(self, other) -> 'Number':
        other = Number.coerce(other)
        denominator = (other.real * other.real) + (other.imag * other.imag)
        if denominator == 0.0:
            raise DivideByZeroError(f"{self} / {other}")
        real = ((self.real * other.real) + (self.imag * other.imag)) / denominator
        imag = ((self.imag * other.real) - (self.real * other.imag)) / denominator
        return Number(real, imag)

    def __rtruediv__(self, other) -> 'Number':
        return Number.coerce(other) / self

    def __neg__(self) -> 'Number':
        return Number(-1) * self

    def __pow__(self, other) -> 'Number':
        return self.exponentiate(Number.coerce(other))

    def __mod__(self, other) -> 'Number':
        return self.mod(Number.coerce(other))

    def exponentiate(self, exponent: 'Number') -> 'Number':
        """Raise to a real power.

        Rational exponents are recognised as roots so that even roots of
        negative reals come out imaginary.
        """
        if exponent.imag != 0.0:
            raise RaisedToComplexNumberError()

        power_int = exponent.as_integer
        if power_int is not None and power_int >= 0 and self.imag != 0.0:
            if power_int == 0:
                return Number(1)
            result = self
            for _ in range(1, power_int):
                result = result * self
            return result

        if self.imag == 0.0:
            if self.real == 0.0:
                if exponent.real < 0.0:
                    raise DivideByZeroError(f"0^({exponent})")
                return Number(0)
            rational = exponent.approximate_rational
            if rational is not None:
                numerator, denominator = rational
                base_sign = 1 if self.real > 0.0 else -1
                exponent_sign = 1 if denominator > 0 else -1
                base = self.real * base_sign
                denominator *= exponent_sign
                power = _pow(base, numerator / denominator)
                if exponent_sign == -1:
                    power = 1.0 / power if power != 0.0 else math.inf
                if numerator % 2 == 1:
                    power *= base_sign
                if denominator % 2 == 0 and base_sign == -1:
                    return Number(0.0, -1.0 * power)
                return Number(power)
            sign = 1.0 if self.real >= 0.0 else -1.0
            return Number(_pow(abs(self.real), exponent.real) * sign)

        raise RootOfComplexNumberError(f"({self})^({exponent})")

    def mod(self, other: 'Number') -> 'Number':
        if not (self.is_real and other.is_real):
            raise DomainError("mod of a complex number")
        if other.real == 0.0:
            raise DivideByZeroError(f"{self} mod 0")
        return Number(math.fmod(self.real, other.real))

    def absolute_value(self) -> Optional['Number']:
        """|x| for reals, None for complex numbers."""
        if not self.is_real:
            return None
        return Number(-self.real) if self.real < 0.0 else Number(self.real)

    def floor(self) -> 'Number':
        if not self.is_real:
            raise DomainError("floor of a complex number")
        return Number(math.floor(self.real))

    def gcf(self, other: 'Number') -> 'Number':
        a, b = self.as_integer, other.as_integer
        if a is not None and b is not None:
            return Number(int_gcf(a, b))
        return Number(1)

    def lcm(self, other: 'Number') -> 'Number':
        return self * other / self.gcf(other)

    # ========================================================================
    # ORDERING (real only)
    # ========================================================================

    def _check_comparable(self, other: 'Number'):
        if self.imag != 0.0 or other.imag != 0.0:
            raise NonComparableError(f"cannot order {self} and {other}")

    def __lt__(self, other) -> bool:
        other = Number.coerce(other)
        self._check_comparable(other)
        return self.real < other.real

    def __le__(self, other) -> bool:
        other = Number.coerce(other)
        self._check_comparable(other)
        return self.real <= other.real

    def __gt__(self, other) -> bool:
        other = Number.coerce(other)
        self._check_comparable(other)
        return self.real > other.real

    def __ge__(self, other) -> bool:
        other = Number.coerce(other)
        self._check_comparable(other)
        return self.real >= other.real

    # ========================================================================
    # VALUE
    # ========================================================================

    def equals(self, value: Value) -> bool:
        return isinstance(value, Number) and self.real == value.real and self.imag == value.imag

    def __eq__(self, other):
        if isinstance(other, (int, float, complex)):
            other = Number.coerce(other)
        return super().__eq__(other)

    def __hash__(self):
        return hash(self.real)

    def copy(self) -> 'Number':
        return Number(self.real, self.imag)

    def evaluate(self) -> 'Number':
        return self.copy()

    def get_variables(self):
        return []

    def __float__(self):
        if not self.is_real:
            raise NonComparableError(f"{self} is not real")
        return self.real

    def __complex__(self):
        return complex(self.real, self.imag)

    # ========================================================================
    # FORMATTING
    # ========================================================================

    @staticmethod
    def _format_double(num: float) -> str:
        components = repr(num).split("e")
        power = ""
        if len(components) > 1:
            exponent = int(components[1])
            power = "*10^" + (f"{exponent}" if exponent > 0 else f"({exponent})")
        digits = components[0]
        while digits.endswith("0"):
            digits = digits[:-1]
        if digits.endswith("."):
            digits = digits[:-1]
        if digits == "1" and power:
            return power[1:]
        return digits + power

    def description(self) -> str:
        real = self._format_double(self.real)
        imag = self._format_double(self.imag) + IMAGINARY_UNIT
        if self.real == 0.0 and self.imag == 0.0:
            return "0"
        if self.real == 0.0:
            return imag
        if self.imag == 0.0:
            return real
        return f"{real}{'+' if self.imag > 0.0 else ''}{imag}"

    def display(self, mode=None) -> str:
        """Description honouring a NumberMode."""
        if mode is None or not mode.is_fraction or not self.is_real or self.as_integer is not None:
            return self.description()
        rational = self.approximate_rational
        if rational is None:
            return self.description()
        numerator, denominator = rational
        if abs(denominator) > mode.approximation_accuracy:
            return self.description()
        if denominator < 0:
            numerator, denominator = -numerator, -denominator
        return f"{numerator}/{denominator}"
