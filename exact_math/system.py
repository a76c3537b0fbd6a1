"""
System: the session that owns variables, functions, equations and modes.

Symbols are interned: asking for a variable or function by name returns
the existing one or creates it with the next free identifier. Variables
and functions share one identifier counter.
"""

import itertools
import logging
from typing import Dict, List, Optional, Tuple

from .core import Expression, Object, Term, Variable, VariableValue
from .equation import Equation
from .errors import MathError
from .functions import (
    ABSOLUTE_VALUE, ARCCOSECANT, ARCCOSINE, ARCCOTANGENT, ARCSECANT, ARCSINE,
    ARCTANGENT, COSECANT, COSINE, COTANGENT, DERIVATIVE, FACTORIAL, FLOOR,
    INTEGRAL, LOG, NATURAL_LOG, NUMERICAL_DERIVATIVE, SECANT, SINE, TANGENT,
    Function,
)
from .modes import AngleMode, FractionMode, NumberMode
from .number import Number
from .value import Value

logger = logging.getLogger(__name__)

PI_NAME = "π"
E_NAME = "e"
PARAMETER_NAMES = tuple(f"%parameter variable{i}%" for i in range(1, 5))

ONE_PARAMETER_FUNCTIONS = (
    SINE, COSINE, TANGENT, COSECANT, SECANT, COTANGENT,
    ARCSINE, ARCCOSINE, ARCTANGENT, ARCCOSECANT, ARCSECANT, ARCCOTANGENT,
    NATURAL_LOG,
)


def _combinations(lists: List[List]) -> List[Tuple]:
    """One pick from each list; empty when there are no lists."""
    if not lists:
        return []
    return list(itertools.product(*lists))


def _assignments(options: Dict) -> List[Dict]:
    """Every way to pick one value per key; empty when there are no keys."""
    if not options:
        return []
    keys = list(options)
    return [dict(zip(keys, picks)) for picks in itertools.product(*(options[k] for k in keys))]


class System:
    """A session of symbols, equations and evaluation settings."""

    def __init__(self, load_defaults: bool = True):
        self.equations: List[Equation] = []
        self.variables: List[Variable] = []
        self.functions: List[Function] = []
        self.evaluate_constants = True
        self.angle_mode = AngleMode.RADIAN
        self.number_mode = NumberMode.decimal()
        self.fraction_mode = FractionMode.COMBINE_LIKE_FRACTIONS
        self._default_identifiers: List[int] = []
        self._used_identifiers = 0
        if load_defaults:
            self._load_defaults()

    # ========================================================================
    # SYMBOLS
    # ========================================================================

    def _next_identifier(self) -> int:
        self._used_identifiers += 1
        return self._used_identifiers

    def variable(self, symbol: str) -> Variable:
        """The variable named ``symbol``, created if needed."""
        for v in self.variables:
            if v.symbol == symbol:
                return v
        variable = Variable(self._next_identifier(), symbol)
        self.variables.append(variable)
        return variable

    def remove_variable(self, symbol: str):
        self.variables = [v for v in self.variables if v.symbol != symbol]

    def function(self, name: str, variables: List[Variable],
                 protected_variables: Optional[List[bool]] = None) -> Function:
        """The function named ``name``, created without a body if needed."""
        for f in self.functions:
            if f.name == name:
                return f
        function = Function(name, variables, None, self._next_identifier(), protected_variables, self)
        self.functions.append(function)
        return function

    def has_function(self, name: str) -> bool:
        return any(f.name == name for f in self.functions)

    def remove_function(self, name: str):
        self.functions = [f for f in self.functions if f.name != name]

    def default_variable(self) -> Variable:
        """The first variable without a value, or a fresh unregistered ``x``."""
        for v in self.variables:
            if v.value is None:
                return v
        return Variable(self._next_identifier(), "x")

    def is_default(self, variable: Variable) -> bool:
        return variable.identifier in self._default_identifiers

    @property
    def pi(self) -> Variable:
        return self.variable(PI_NAME)

    @property
    def e(self) -> Variable:
        return self.variable(E_NAME)

    def _load_defaults(self):
        parameters = [self.variable(name) for name in PARAMETER_NAMES]
        self._default_identifiers += [p.identifier for p in parameters]
        p1, p2, p3, p4 = parameters

        e = self.variable(E_NAME)
        e.value = Number.e()
        self._default_identifiers.append(e.identifier)
        pi = self.variable(PI_NAME)
        pi.value = Number.pi()
        self._default_identifiers.append(pi.identifier)

        for name in ONE_PARAMETER_FUNCTIONS:
            self.function(name, [p1])
        self.function(LOG, [p1, p2])
        self.function(DERIVATIVE, [p1, p2, p3], [True, True, False])
        self.function(NUMERICAL_DERIVATIVE, [p1, p2, p3], [True, True, False])
        self.function(INTEGRAL, [p1, p2, p3, p4], [True, True, False, False])
        self.function(ABSOLUTE_VALUE, [p1])
        self.function(FACTORIAL, [p1])
        self.function(FLOOR, [p1])

    # ========================================================================
    # EQUATIONS
    # ========================================================================

    def add_equation(self, equation: Equation):
        self.equations.append(equation)

    def remove_equation(self, equation: Equation):
        self.equations = [e for e in self.equations if e is not equation]

    def solve(self, variable: Variable) -> List[Value]:
        """Solve the equations together for ``variable``.

        Each equation is solved for each user variable. Starting from the
        target, every variable a candidate solution mentions is itself
        solved from the other equations and substituted in. A variable is
        never solved twice on one path and an equation is never reused on
        one path, so cyclic dependencies terminate.
        """
        equation_solutions: Dict[Variable, List[List[Tuple[Value, int]]]] = {}
        for index, equation in enumerate(self.equations):
            for v in self.variables:
                if self.is_default(v):
                    continue
                solutions = equation.solve(v, self)
                linear = [(s, index) for s in solutions if s.is_linear]
                if linear:
                    equation_solutions.setdefault(v, []).append(linear)

        def solve_for(target: Variable, checked: List[Variable], excepted: List[int]) -> List[Value]:
            if target in checked:
                return []
            checked = checked + [target]
            solutions: List[Value] = []
            for choice in _combinations(equation_solutions.get(target, [])):
                for i, (value, index) in enumerate(choice):
                    if index in excepted:
                        continue
                    variables = value.get_variables()
                    if not variables:
                        solutions.append(value)
                        break
                    options: Dict[Variable, List[Value]] = {}
                    dead_end = False
                    for j in range(len(variables) - 1, -1, -1):
                        v = variables[j]
                        if v in checked or v.value is not None:
                            del variables[j]
                            continue
                        options[v] = solve_for(v, checked, excepted + [index])
                        if not options[v] and i == len(choice) - 1:
                            dead_end = True
                            break
                    if dead_end:
                        break
                    if not variables:
                        solutions.append(value)
                        break
                    for assignment in _assignments(options):
                        substituted = value.copy()
                        for v, v_value in assignment.items():
                            try:
                                substituted = substituted.plug_in(v_value, v)
                            except MathError as e:
                                logger.debug(f"could not substitute {v} = {v_value}: {e}")
                        solutions.append(substituted)
                    if solutions:
                        break
            return solutions

        candidates: List[Value] = []
        for value in solve_for(variable, [], []):
            lhs = Expression([Term([Object(VariableValue(variable))])])
            rhs = Expression([Term([Object(value)])])
            candidates += Equation(lhs, rhs).solve(variable, self)

        checked_solutions: List[Value] = []
        for solution in candidates:
            if not self._satisfies_all(solution, variable):
                logger.debug(f"rejecting {variable} = {solution}")
                continue
            if solution not in checked_solutions:
                checked_solutions.append(solution)
        return checked_solutions

    def _satisfies_all(self, solution: Value, variable: Variable) -> bool:
        for equation in self.equations:
            plugged = equation.plug_in(solution, variable)
            lhs = plugged.lhs.try_evaluate()
            rhs = plugged.rhs.try_evaluate()
            if lhs is not None and (rhs is None or lhs != rhs):
                return False
        return True

    # ========================================================================
    # COPYING
    # ========================================================================

    def copy(self) -> 'System':
        system = System(load_defaults=False)
        system.equations = [e.copy() for e in self.equations]
        system.variables = [v.copy() for v in self.variables]
        for f in self.functions:
            function = f.copy()
            function.system = system
            system.functions.append(function)
        system.evaluate_constants = self.evaluate_constants
        system.angle_mode = self.angle_mode
        system.number_mode = self.number_mode
        system.fraction_mode = self.fraction_mode
        system._default_identifiers = list(self._default_identifiers)
        system._used_identifiers = self._used_identifiers
        return system

    def __repr__(self):
        return (f"System(variables={len(self.variables)}, functions={len(self.functions)}, "
                f"equations={len(self.equations)})")
