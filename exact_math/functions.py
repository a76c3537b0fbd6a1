"""
Named functions and function calls.

A ``Function`` is a definition owned by a System: either one of the
built-ins (trigonometry, logarithms, calculus helpers, abs, fact, floor)
or a user function with a symbolic body. A ``FunctionValue`` is a call of
a function on argument values inside an expression tree.
"""

import logging
import math
from typing import List, Optional

from .core import Expression, Object, Term, Variable, VariableValue
from .errors import (
    DomainError, MathError, MissingFunctionArgumentError,
    MissingFunctionDefinitionError,
)
from .modes import AngleMode
from .number import Number
from .value import Value
from . import numeric

logger = logging.getLogger(__name__)


# ============================================================================
# BUILT-IN NAMES
# ============================================================================

SINE = "sin"
COSINE = "cos"
TANGENT = "tan"
COSECANT = "csc"
SECANT = "sec"
COTANGENT = "cot"
ARCSINE = "asin"
ARCCOSINE = "acos"
ARCTANGENT = "atan"
ARCCOSECANT = "acsc"
ARCSECANT = "asec"
ARCCOTANGENT = "acot"
NATURAL_LOG = "ln"
LOG = "log"
DERIVATIVE = "deriv"
NUMERICAL_DERIVATIVE = "nderiv"
INTEGRAL = "∫"
ABSOLUTE_VALUE = "abs"
FACTORIAL = "fact"
FLOOR = "floor"

TRIG_FUNCTIONS = {
    SINE: numeric.sine,
    COSINE: numeric.cosine,
    TANGENT: numeric.tangent,
    COSECANT: numeric.cosecant,
    SECANT: numeric.secant,
    COTANGENT: numeric.cotangent,
    ARCSINE: numeric.arc_sine,
    ARCCOSINE: numeric.arc_cosine,
    ARCTANGENT: numeric.arc_tangent,
    ARCCOSECANT: numeric.arc_cosecant,
    ARCSECANT: numeric.arc_secant,
    ARCCOTANGENT: numeric.arc_cotangent,
}

INVERSE_TRIG_FUNCTIONS = (ARCSINE, ARCCOSINE, ARCTANGENT, ARCCOSECANT, ARCSECANT, ARCCOTANGENT)

BUILTIN_NAMES = (
    SINE, COSINE, TANGENT, COSECANT, SECANT, COTANGENT,
    ARCSINE, ARCCOSINE, ARCTANGENT, ARCCOSECANT, ARCSECANT, ARCCOTANGENT,
    NATURAL_LOG, LOG, DERIVATIVE, NUMERICAL_DERIVATIVE, INTEGRAL,
    ABSOLUTE_VALUE, FACTORIAL, FLOOR,
)


def _single_variable(argument: Value) -> Variable:
    variables = argument.get_variables()
    if len(variables) != 1:
        raise DomainError(f"expected one variable in {argument}, found {len(variables)}")
    return variables[0]


# ============================================================================
# FUNCTION DEFINITIONS
# ============================================================================

class Function:
    """A named function with parameter variables and an optional body.

    ``protected_variables`` marks parameters whose arguments are bound
    inside the function (the ``x`` in ``deriv(f, x, a)``): plugging a value
    in from outside leaves those arguments alone.
    """

    def __init__(self, name: Optional[str], variables: List[Variable], value: Optional[Value],
                 identifier: int, protected_variables: Optional[List[bool]] = None, system=None):
        self.name = name
        self.variables = variables
        self.value = value
        self.identifier = identifier
        self.protected_variables = (list(protected_variables) if protected_variables is not None
                                    else [False] * len(variables))
        self.system = system

    @property
    def angle_mode(self) -> AngleMode:
        if self.system is None:
            return AngleMode.RADIAN
        return self.system.angle_mode

    def is_protected(self, index: int) -> bool:
        return index < len(self.protected_variables) and self.protected_variables[index]

    def evaluate_at(self, arguments: List[Value]) -> Value:
        """Replace a call with the function's result for ``arguments``."""
        name = self.name or ""
        if name in BUILTIN_NAMES and len(self.variables) != len(arguments):
            raise MissingFunctionArgumentError(
                f"{name} takes {len(self.variables)} arguments, got {len(arguments)}")

        if name in TRIG_FUNCTIONS:
            return TRIG_FUNCTIONS[name](arguments[0].evaluate(), self.angle_mode)
        if name == NATURAL_LOG:
            return numeric.log(Number.e(), arguments[0].evaluate())
        if name == LOG:
            return numeric.log(arguments[1].evaluate(), arguments[0].evaluate())
        if name == DERIVATIVE:
            variable = _single_variable(arguments[1])
            derivative = arguments[0].derivative(variable, self.system)
            return derivative.plug_in(arguments[2], variable)
        if name == NUMERICAL_DERIVATIVE:
            variable = _single_variable(arguments[1])
            return numeric.numerical_derivative(arguments[0], variable, arguments[2].evaluate())
        if name == INTEGRAL:
            variable = _single_variable(arguments[1])
            return numeric.integral(arguments[2].evaluate(), arguments[3].evaluate(), arguments[0], variable)
        if name == ABSOLUTE_VALUE:
            absolute = arguments[0].evaluate().absolute_value()
            if absolute is None:
                raise DomainError(f"abs of {arguments[0]}")
            return absolute
        if name == FACTORIAL:
            num = arguments[0].evaluate()
            if not num.is_real:
                raise DomainError(f"fact of {num}")
            try:
                result = math.gamma(num.real + 1.0)
            except (ValueError, OverflowError):
                raise DomainError(f"fact of {num}")
            if math.isnan(result) or math.isinf(result):
                raise DomainError(f"fact of {num}")
            return Number(result)
        if name == FLOOR:
            return arguments[0].evaluate().floor()

        if self.value is None:
            raise MissingFunctionDefinitionError(f"{name} is not defined")
        if len(self.variables) != len(arguments):
            raise MissingFunctionArgumentError(
                f"{name} takes {len(self.variables)} arguments, got {len(arguments)}")
        value = self.value.copy()
        for argument, variable in zip(arguments, self.variables):
            value = value.plug_in(argument, variable)
        return value

    def copy(self) -> 'Function':
        return Function(self.name, [v.copy() for v in self.variables],
                        self.value.copy() if self.value is not None else None,
                        self.identifier, self.protected_variables, self.system)

    def __str__(self):
        parameters = ",".join(str(v) for v in self.variables)
        head = f"{self.name or self.identifier}({parameters})"
        return f"{head} = {self.value}" if self.value is not None else head

    def __repr__(self):
        return f"Function({self.name!r}, id={self.identifier})"


# ============================================================================
# FUNCTION CALLS
# ============================================================================

class FunctionValue(Value):
    """A call ``name(arg1,arg2,...)`` inside an expression."""

    def __init__(self, function: Function, arguments: List[Value]):
        self.function = function
        self.arguments = arguments

    @property
    def is_linear(self) -> bool:
        if self.function.value is None:
            return False
        return self.function.value.is_linear

    def plug_in_value(self) -> Value:
        return self.function.evaluate_at(self.arguments)

    def evaluate(self) -> Number:
        return self.plug_in_value().evaluate()

    def get_variables(self) -> List[Variable]:
        variables = []
        if self.function.value is not None:
            parameters = {p.identifier for p in self.function.variables}
            variables += [v for v in self.function.value.get_variables() if v.identifier not in parameters]
        for a in self.arguments:
            for v in a.get_variables():
                if v not in variables:
                    variables.append(v)
        return [v.copy() for v in variables]

    def equals(self, value: Value) -> bool:
        if not isinstance(value, FunctionValue):
            return False
        if value.function.identifier != self.function.identifier:
            return False
        if len(value.arguments) != len(self.arguments):
            return False
        return all(a == b for a, b in zip(self.arguments, value.arguments))

    def copy(self) -> 'FunctionValue':
        return FunctionValue(self.function, [a.copy() for a in self.arguments])

    def plug_in(self, value: Value, variable: Variable) -> Value:
        arguments = []
        for i, a in enumerate(self.arguments):
            arguments.append(a if self.function.is_protected(i) else a.plug_in(value, variable))
        return FunctionValue(self.function, arguments)

    def factor(self, system=None) -> Term:
        if self.function.name == DERIVATIVE or self.function.value is not None:
            return self.plug_in_value().factor(system)
        call = self.copy()
        for i, a in enumerate(call.arguments):
            if call.function.is_protected(i):
                continue
            wrapped = Expression([Term([Object(a)])])
            try:
                call.arguments[i] = wrapped.simplify(system)
            except MathError:
                call.arguments[i] = wrapped
        return Term([Object(call)])

    def _call(self, name: str, arguments: List[Value], system) -> 'FunctionValue':
        return FunctionValue(system.function(name, []), [a.copy() for a in arguments])

    def derivative(self, variable: Variable, system) -> Value:
        """Symbolic derivative of the call, chain rule included."""
        if len(self.function.variables) != len(self.arguments):
            raise MissingFunctionArgumentError(f"{self}")
        name = self.function.name or ""
        args = self.arguments

        if name in TRIG_FUNCTIONS:
            chains = [Object(a.derivative(variable, system)) for a in args]
            if system.angle_mode == AngleMode.DEGREE:
                if name in INVERSE_TRIG_FUNCTIONS:
                    chains += [Object(VariableValue(system.pi), Number(-1)), Object(Number(180))]
                else:
                    chains += [Object(VariableValue(system.pi)), Object(Number(180), Number(-1))]
            return Expression([Term(self._trig_derivative(name, args, system) + chains)])

        if name == NATURAL_LOG:
            chains = [Object(a.derivative(variable, system)) for a in args]
            return Expression([Term([Object(args[0].copy(), Number(-1))] + chains)])
        if name == LOG:
            base_change = Object(self._call(NATURAL_LOG, [args[1]], system), Number(-1))
            chain = Object(args[0].derivative(variable, system))
            return Expression([Term([base_change, Object(args[0].copy(), Number(-1)), chain])])
        if name == DERIVATIVE:
            first = Expression([Term([Object(self.plug_in_value())])]).simplify(system)
            return Expression([Term([Object(first.derivative(variable, system))])]).simplify(system)
        if name == INTEGRAL:
            integrand = args[0]
            bound = args[1].get_variables()[0]
            a, b = args[2], args[3]
            dadx = a.derivative(variable, system)
            dbdx = b.derivative(variable, system)
            fa = integrand.plug_in(a, bound)
            fb = integrand.plug_in(b, bound)
            return Expression([Term([Object(fb), Object(dbdx)]),
                               Term([Object(Number(-1)), Object(fa), Object(dadx)])])
        if name in (NUMERICAL_DERIVATIVE, ABSOLUTE_VALUE, FACTORIAL, FLOOR):
            return FunctionValue(system.function(NUMERICAL_DERIVATIVE, []),
                                 [self.copy(), VariableValue(variable), VariableValue(variable)])

        return self.plug_in_value().derivative(variable, system)

    def _trig_derivative(self, name: str, args: List[Value], system) -> List[Object]:
        """Outer derivative of a trig call, before the chain factors."""
        if name == SINE:
            return [Object(self._call(COSINE, args, system))]
        if name == COSINE:
            return [Object(self._call(SINE, args, system)), Object(Number(-1))]
        if name == TANGENT:
            return [Object(self._call(SECANT, args, system), Number(2))]
        if name == SECANT:
            return [Object(self._call(TANGENT, args, system)), Object(self._call(SECANT, args, system))]
        if name == COSECANT:
            return [Object(self._call(COSECANT, args, system)), Object(self._call(COTANGENT, args, system)),
                    Object(Number(-1))]
        if name == COTANGENT:
            return [Object(self._call(COSECANT, args, system), Number(2)), Object(Number(-1))]

        half = Number(-1) / Number(2)
        if name in (ARCSINE, ARCCOSINE):
            radicand = Expression([Term([Object(Number(1))]),
                                   Term([Object(Number(-1)), Object(args[0].copy(), Number(2))])])
            outer = [Object(radicand, half)]
            return outer + [Object(Number(-1))] if name == ARCCOSINE else outer
        if name in (ARCSECANT, ARCCOSECANT):
            radicand = Expression([Term([Object(Number(-1)), Object(Number(1))]),
                                   Term([Object(args[0].copy(), Number(2))])])
            outer = [Object(radicand, half), Object(self._call(ABSOLUTE_VALUE, args, system), Number(-1))]
            return outer + [Object(Number(-1))] if name == ARCCOSECANT else outer
        denominator = Expression([Term([Object(Number(1))]), Term([Object(args[0].copy(), Number(2))])])
        outer = [Object(denominator, Number(-1))]
        return outer + [Object(Number(-1))] if name == ARCCOTANGENT else outer

    def description(self) -> str:
        args = ",".join(a.description() for a in self.arguments)
        return f"{self.function.name or self.function.identifier}({args})"
