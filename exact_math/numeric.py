"""
Numeric methods: logarithms, trigonometry, numerical calculus and
root finding.

Everything here works on ``Number`` and returns ``Number``. The calculus
helpers take any ``Value`` and the variable to sweep.
"""

import logging
import math
from typing import Optional

from .errors import DomainError, MathError
from .modes import AngleMode
from .number import Number

logger = logging.getLogger(__name__)

DERIVATIVE_STEP = 0.0000000148996644
INTEGRAL_ACCURACY = 0.0000000000001
INTEGRAL_MAX_DEPTH = 10
ZERO_ACCURACY = 0.00000000001
EXTREME_OFFSET = 0.001
DEFAULT_MAX_NEWTON_STEPS = 100


def log(base: Number, of: Number) -> Number:
    """Logarithm of ``of`` in ``base``; both must be positive reals."""
    try:
        valid = of > 0 and base > 0
    except MathError:
        valid = False
    if not valid:
        raise DomainError(f"log base {base} of {of}")
    return Number(math.log2(of.real) / math.log2(base.real))


# ============================================================================
# TRIGONOMETRY
# ============================================================================

def _to_radians(num: Number, angle_mode: AngleMode) -> float:
    if not num.is_real:
        raise DomainError(f"angle {num} is not real")
    if angle_mode == AngleMode.DEGREE:
        return (Number(num.real) * Number.pi() / Number(180)).real
    return num.real


def _from_radians(angle: float, angle_mode: AngleMode) -> Number:
    if angle_mode == AngleMode.DEGREE:
        return Number(angle) * Number(180) / Number.pi()
    return Number(angle)


def _apply(fn, x: float) -> float:
    try:
        return fn(x)
    except ValueError:
        raise DomainError(f"{fn.__name__}({x})")


def _check_unit_interval(num: Number):
    if not num.is_real or num.absolute_value() > 1:
        raise DomainError(f"{num} is outside [-1, 1]")


def sine(num: Number, angle_mode: AngleMode = AngleMode.RADIAN) -> Number:
    return Number(_apply(math.sin, _to_radians(num, angle_mode)))


def cosine(num: Number, angle_mode: AngleMode = AngleMode.RADIAN) -> Number:
    return Number(_apply(math.cos, _to_radians(num, angle_mode)))


def tangent(num: Number, angle_mode: AngleMode = AngleMode.RADIAN) -> Number:
    return Number(_apply(math.tan, _to_radians(num, angle_mode)))


def secant(num: Number, angle_mode: AngleMode = AngleMode.RADIAN) -> Number:
    return Number(1) / cosine(num, angle_mode)


def cosecant(num: Number, angle_mode: AngleMode = AngleMode.RADIAN) -> Number:
    return Number(1) / sine(num, angle_mode)


def cotangent(num: Number, angle_mode: AngleMode = AngleMode.RADIAN) -> Number:
    return Number(1) / tangent(num, angle_mode)


def arc_sine(num: Number, angle_mode: AngleMode = AngleMode.RADIAN) -> Number:
    _check_unit_interval(num)
    return _from_radians(_apply(math.asin, num.real), angle_mode)


def arc_cosine(num: Number, angle_mode: AngleMode = AngleMode.RADIAN) -> Number:
    _check_unit_interval(num)
    return _from_radians(_apply(math.acos, num.real), angle_mode)


def arc_tangent(num: Number, angle_mode: AngleMode = AngleMode.RADIAN) -> Number:
    if not num.is_real:
        raise DomainError(f"atan of {num}")
    return _from_radians(math.atan(num.real), angle_mode)


def arc_secant(num: Number, angle_mode: AngleMode = AngleMode.RADIAN) -> Number:
    return arc_cosine(Number(1) / num, angle_mode)


def arc_cosecant(num: Number, angle_mode: AngleMode = AngleMode.RADIAN) -> Number:
    return arc_sine(Number(1) / num, angle_mode)


def arc_cotangent(num: Number, angle_mode: AngleMode = AngleMode.RADIAN) -> Number:
    return arc_tangent(Number(1) / num, angle_mode)


# ============================================================================
# CALCULUS
# ============================================================================

def numerical_derivative(function, variable, location: Number) -> Number:
    """Symmetric difference quotient of ``function`` at ``location``."""
    h = Number(DERIVATIVE_STEP)
    plus = location + h
    minus = location - h
    dx = plus - minus
    rise = function.plug_in(plus, variable).evaluate() - function.plug_in(minus, variable).evaluate()
    return rise / dx


def integral(a: Number, b: Number, function, variable) -> Number:
    """Definite integral of ``function`` from a to b by adaptive Simpson's rule."""

    def at(x: Number) -> Number:
        return function.plug_in(x, variable).evaluate()

    def simpsons(a, b, epsilon, whole, fa, fb, fc, depth):
        h = b - a
        c = (a + b) / Number(2)
        d = (a + c) / Number(2)
        e = (b + c) / Number(2)
        fd = at(d)
        fe = at(e)
        left = h * (fa + Number(4) * fd + fc) / Number(12)
        right = h * (fc + Number(4) * fe + fb) / Number(12)
        both = left + right
        error = (both - whole).absolute_value()
        if error is None:
            error = Number(0)
        if depth <= 0 or error <= Number(15) * epsilon:
            return both + (both - whole) / Number(15)
        half = epsilon / Number(2)
        return (simpsons(a, c, half, left, fa, fc, fd, depth - 1)
                + simpsons(c, b, half, right, fc, fb, fe, depth - 1))

    c = (b + a) / Number(2)
    fa, fb, fc = at(a), at(b), at(c)
    whole = (b - a) * (fa + Number(4) * fc + fb) / Number(6)
    return simpsons(a, b, Number(INTEGRAL_ACCURACY), whole, fa, fb, fc, INTEGRAL_MAX_DEPTH)


# ============================================================================
# POINTS OF INTEREST
# ============================================================================

def find_zero(function, near: Number, variable,
              max_steps: int = DEFAULT_MAX_NEWTON_STEPS) -> Optional[Number]:
    """Newton's method from ``near``.

    Returns None for constant functions, flat tangents, complex iterates,
    undefined points and when ``max_steps`` runs out.
    """
    from .core import Expression, Object, Term

    try:
        Expression([Term([Object(function)])]).simplify().evaluate()
        return None
    except MathError:
        pass

    accuracy = Number(ZERO_ACCURACY)
    a = near
    try:
        for _ in range(max_steps):
            m = numerical_derivative(function, variable, a)
            fa = function.plug_in(a, variable).evaluate()
            if m == Number(0):
                return None
            new_x = a - (fa / m)
            distance = function.plug_in(new_x, variable).evaluate().absolute_value()
            if distance is None:
                return None
            if distance <= accuracy:
                return new_x
            slope = m.absolute_value()
            if slope is None or slope < accuracy:
                return None
            a = new_x
    except MathError as e:
        logger.debug(f"Newton's method stopped at {a}: {e}")
        return None
    logger.warning(f"Newton's method did not converge near {near} in {max_steps} steps")
    return None


def find_intersect(function1, function2, near: Number, variable,
                   max_steps: int = DEFAULT_MAX_NEWTON_STEPS) -> Optional[Number]:
    """x where the two functions meet, searching from ``near``."""
    from .core import Expression, Object, Term

    difference = Expression([Term([Object(function1)]),
                             Term([Object(Number(-1)), Object(function2)])])
    return find_zero(difference, near, variable, max_steps)


def find_extreme(function, near: Number, variable, system,
                 max_steps: int = DEFAULT_MAX_NEWTON_STEPS) -> Optional[Number]:
    """A relative minimum or maximum near ``near``: a zero of the derivative where it changes sign."""
    derivative = function.derivative(variable, system)
    zero = find_zero(derivative, near, variable, max_steps)
    if zero is None:
        return None
    offset = Number(EXTREME_OFFSET)
    try:
        after = derivative.plug_in(zero + offset, variable).evaluate() > 0
        before = derivative.plug_in(zero - offset, variable).evaluate() > 0
    except MathError:
        return None
    return zero if after != before else None
