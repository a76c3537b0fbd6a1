"""
Equations and single-equation solving.
"""

import logging
from typing import List

from .core import Expression, Variable, VariableValue
from .errors import MathError, MathSyntaxError, RaisedToComplexNumberError
from .functions import FunctionValue
from .number import Number
from .value import Value

logger = logging.getLogger(__name__)


class Equation:
    """``lhs = rhs`` with both sides as expressions."""

    def __init__(self, lhs: Expression, rhs: Expression):
        self.lhs = lhs
        self.rhs = rhs

    @classmethod
    def from_string(cls, text: str, system) -> 'Equation':
        from .parser import MathParser

        sides = text.split("=")
        if len(sides) < 2:
            raise MathSyntaxError(f"no '=' in {text!r}")
        parser = MathParser(system)
        return cls(parser.parse_expression(sides[0]), parser.parse_expression(sides[1]))

    def solve(self, variable: Variable, system=None) -> List[Value]:
        """Values of ``variable`` that satisfy the equation.

        Moves everything to one side, factors, and solves each factor with
        a positive exponent. Candidates that zero out a factor with a
        negative exponent are dropped.
        """
        expression = self.rhs.subtract(self.lhs, system).combine_like_terms(system).simplify(system)
        factors = expression.factor(system).objects

        excluded: List[Value] = []
        solutions: List[Value] = []
        for factor in factors:
            exponent = factor.exponent.evaluate()
            if not exponent.is_real:
                raise RaisedToComplexNumberError(f"{factor}")
            base = factor.base
            if exponent > 0:
                if isinstance(base, VariableValue) and base.variable.identifier == variable.identifier:
                    solutions.append(Number(0))
                elif isinstance(base, FunctionValue):
                    solutions.append(base.function.value if base.function.value is not None else base)
                elif isinstance(base, Expression):
                    solutions += base.solve_factor(variable)
            elif exponent < 0:
                excluded.append(base)

        kept = []
        for solution in solutions:
            if any(self._zeroes(out, solution, variable) for out in excluded):
                logger.debug(f"dropping {solution}: outside the domain of {self}")
                continue
            kept.append(solution)
        return kept

    @staticmethod
    def _zeroes(value: Value, solution: Value, variable: Variable) -> bool:
        try:
            return value.plug_in(solution, variable).evaluate() == Number(0)
        except MathError:
            return True

    def plug_in(self, value: Value, variable: Variable) -> 'Equation':
        lhs = self.lhs.plug_in(value, variable)
        rhs = self.rhs.plug_in(value, variable)
        return Equation(lhs if isinstance(lhs, Expression) else self.lhs,
                        rhs if isinstance(rhs, Expression) else self.rhs)

    def get_variables(self) -> List[Variable]:
        try:
            return self.lhs.add(self.rhs).get_variables()
        except MathError:
            return []

    def copy(self) -> 'Equation':
        return Equation(self.lhs.copy(), self.rhs.copy())

    def __str__(self):
        return f"{self.lhs} = {self.rhs}"

    def __repr__(self):
        return f"Equation({str(self)!r})"
