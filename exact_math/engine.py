"""
Main MathEngine class - unified interface for all operations.
"""

import logging
from typing import Dict, List, Optional, Union

from .config import EngineConfig
from .core import Expression, Object, Term, Variable
from .equation import Equation
from .errors import MathSyntaxError
from .functions import BUILTIN_NAMES, Function
from .number import Number
from .parser import MathParser
from .system import System
from .value import Value
from . import numeric

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "exact_math"

Problem = Union[str, Value]


class MathEngine:
    """
    Unified interface for the exact math engine.

    Usage:
        engine = MathEngine()

        # Rewrite expressions
        engine.simplify("x^2 + 2x + 1 - x")
        engine.factor("9a^2 - 16")                # (3a + 4)(3a - 4)
        engine.differentiate("sin(x^2)")          # 2x*cos((x)^(2))

        # Solve one equation or several at once
        engine.solve("x^2 = 9")
        engine.solve(["y = x + 1", "y = 2x - 2"], "x")

        # User functions
        engine.define_function("g", "x", "3x + 2")
        engine.evaluate("g(4)")                   # 14

        # Numeric methods
        engine.integrate("x^2", 0, 3)
        engine.find_zero("cos(x)", 1.5)
    """

    def __init__(self, config: Optional[EngineConfig] = None, system: Optional[System] = None):
        self.config = config or EngineConfig.from_env()
        for warning in self.config.validate():
            logger.warning(warning)
        logging.getLogger(PACKAGE_LOGGER).setLevel(self.config.resolved_log_level)

        if system is None:
            system = self.config.apply(System())
        self.system = system
        self.parser = MathParser(self.system)

    # ========================================================================
    # HELPERS
    # ========================================================================

    def _value(self, problem: Problem) -> Value:
        if isinstance(problem, str):
            return self.parser.parse(problem)
        return problem

    def _expression(self, problem: Problem) -> Expression:
        value = self._value(problem)
        if isinstance(value, Expression):
            return value
        return Expression([Term([Object(value)])])

    def _variable(self, variable: Union[str, Variable, None], values: List[Value] = ()) -> Variable:
        if isinstance(variable, Variable):
            return variable
        if variable is not None:
            return self.system.variable(variable)
        for value in values:
            for v in value.get_variables():
                if not self.system.is_default(v):
                    return self.system.variable(v.symbol)
        return self.system.variable("x")

    def display(self, value: Value) -> str:
        """``value`` as text, honouring the system's number mode."""
        if isinstance(value, Number):
            return value.display(self.system.number_mode)
        return str(value)

    # ========================================================================
    # REWRITING
    # ========================================================================

    def parse(self, text: str) -> Value:
        """Parse string to value tree."""
        return self.parser.parse(text)

    def evaluate(self, problem: Problem) -> Number:
        return self._value(problem).evaluate()

    def simplify(self, problem: Problem) -> Expression:
        return self._expression(problem).simplify(self.system)

    def factor(self, problem: Problem) -> Term:
        return self._expression(problem).factor(self.system)

    def differentiate(self, problem: Problem, variable: Union[str, Variable, None] = None,
                      simplify: bool = True) -> Value:
        """Derivative with respect to ``variable`` (default: the first one found)."""
        value = self._value(problem)
        var = self._variable(variable, [value])
        derivative = value.derivative(var, self.system)
        if simplify:
            return Expression([Term([Object(derivative)])]).simplify(self.system)
        return derivative

    def integrate(self, problem: Problem, lower, upper,
                  variable: Union[str, Variable, None] = None) -> Number:
        """Definite integral by adaptive Simpson's rule."""
        value = self._value(problem)
        var = self._variable(variable, [value])
        return numeric.integral(Number.coerce(lower), Number.coerce(upper), value, var)

    # ========================================================================
    # SOLVING
    # ========================================================================

    def solve(self, problem: Union[str, Equation, List[Union[str, Equation]]],
              variable: Union[str, Variable, None] = None) -> Dict:
        """Solve one equation, or a list of equations together.

        Returns a dict with the problem type, the variable solved for, the
        solutions as text and the solution values.
        """
        if isinstance(problem, (list, tuple)):
            equations = [self._equation(p) for p in problem]
            var = self._variable(variable, [e.lhs for e in equations] + [e.rhs for e in equations])
            for equation in equations:
                self.system.add_equation(equation)
            try:
                solutions = self.system.solve(var)
            finally:
                for equation in equations:
                    self.system.remove_equation(equation)
            problem_type = "system"
        else:
            equation = self._equation(problem)
            var = self._variable(variable, [equation.lhs, equation.rhs])
            solutions = equation.solve(var, self.system)
            problem_type = "equation"

        logger.debug(f"{problem_type} solved for {var}: {[str(s) for s in solutions]}")
        return {
            'type': problem_type,
            'variable': str(var),
            'solutions': [self.display(s) for s in solutions],
            'values': solutions,
        }

    def _equation(self, problem: Union[str, Equation]) -> Equation:
        if isinstance(problem, Equation):
            return problem
        return Equation.from_string(problem, self.system)

    def define_function(self, name: str, parameters: Union[str, List[str]], body: Problem) -> Function:
        """Define or redefine ``name(parameters) = body``."""
        if name in BUILTIN_NAMES:
            raise MathSyntaxError(f"{name} is a built-in function")
        symbols = [p.strip() for p in parameters.split(",")] if isinstance(parameters, str) else parameters
        variables = [self.system.variable(s) for s in symbols]
        function = self.system.function(name, variables)
        function.variables = variables
        function.protected_variables = [False] * len(variables)
        function.value = self._value(body)
        logger.debug(f"defined {function}")
        return function

    # ========================================================================
    # POINTS OF INTEREST
    # ========================================================================

    def find_zero(self, problem: Problem, near, variable: Union[str, Variable, None] = None) -> Optional[Number]:
        value = self._value(problem)
        var = self._variable(variable, [value])
        return numeric.find_zero(value, Number.coerce(near), var, self.config.resolved_newton_steps)

    def find_intersect(self, problem1: Problem, problem2: Problem, near,
                       variable: Union[str, Variable, None] = None) -> Optional[Number]:
        value1 = self._value(problem1)
        value2 = self._value(problem2)
        var = self._variable(variable, [value1, value2])
        return numeric.find_intersect(value1, value2, Number.coerce(near), var, self.config.resolved_newton_steps)

    def find_extreme(self, problem: Problem, near, variable: Union[str, Variable, None] = None) -> Optional[Number]:
        value = self._value(problem)
        var = self._variable(variable, [value])
        return numeric.find_extreme(value, Number.coerce(near), var, self.system,
                                    self.config.resolved_newton_steps)
