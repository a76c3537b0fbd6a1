"""
Exact Math
==========
A small computer-algebra kernel: exact value trees, simplification,
factoring, differentiation, numeric calculus and equation solving.

Usage:
    from exact_math import MathEngine, solve, simplify, factor

    # Quick operations on the default engine
    simplify("3x^2y + 1/(1+x) + 2")
    factor("9a^2 - 16")                      # (3a + 4)(3a - 4)
    solve("x^2 = 9")                         # {'solutions': ['-3', '3'], ...}
    differentiate("sin(x^2)")                # 2x*cos((x)^(2))

    # Several equations at once
    solve(["y = x + 1", "y = 2x - 2"], "x")  # {'solutions': ['3'], ...}

    # A dedicated engine with its own symbols and settings
    from exact_math import EngineConfig
    engine = MathEngine(EngineConfig(angle_mode="degree"))
    engine.define_function("f", "x", "x^2 - 4")
    engine.find_zero("f(x)", 3)

    # Working with the value model directly
    from exact_math import System, MathParser, Equation
    system = System()
    x = system.variable("x")
    equation = Equation.from_string("(x)^(2)=9", system)
    equation.solve(x)

Environment:
    EXACT_MATH_ANGLE_MODE         radian | degree
    EXACT_MATH_FRACTION_MODE      never | like | fractions | terms
    EXACT_MATH_NUMBER_MODE        decimal | fraction
    EXACT_MATH_FRACTION_ACCURACY  largest denominator shown in fraction mode
    EXACT_MATH_MAX_NEWTON_STEPS   iteration cap for root finding
    EXACT_MATH_LOG_LEVEL          level for the exact_math logger
"""

from .errors import (
    # Roots
    MathError, CalculationError, SolvingError,
    CalculationErrorKind, SolvingErrorKind,

    # Calculation conditions
    DivideByZeroError, ZeroToTheZeroError, DomainError,
    MissingFunctionArgumentError, MissingFunctionDefinitionError,
    RootOfComplexNumberError, RaisedToComplexNumberError,

    # Solving conditions
    NonAlgebraicError, TooComplexError, ParsingError,
    NonComparableError, MathSyntaxError,
)

from .modes import AngleMode, FractionMode, FunctionMode, NumberMode

from .value import Value
from .number import Number
from .core import Variable, VariableValue, Object, Term, Expression
from .functions import Function, FunctionValue
from .parser import MathParser
from .equation import Equation
from .system import System
from . import numeric
from .graph import Point, Window, Graph, sample_function, nearest_zero, nearest_intersect, nearest_extreme
from .config import EngineConfig
from .engine import MathEngine

# Convenience functions
_default_engine = None

def get_engine():
    """Get or create default engine."""
    global _default_engine
    if _default_engine is None:
        _default_engine = MathEngine()
    return _default_engine

def parse(text):
    """Parse string to value tree."""
    return get_engine().parse(text)

def evaluate(problem):
    """Evaluate to a Number."""
    return get_engine().evaluate(problem)

def simplify(problem):
    """Simplify an expression."""
    return get_engine().simplify(problem)

def factor(problem):
    """Factor an expression."""
    return get_engine().factor(problem)

def differentiate(problem, variable=None):
    """Compute derivative."""
    return get_engine().differentiate(problem, variable)

def solve(problem, variable=None):
    """Solve an equation or a list of equations."""
    return get_engine().solve(problem, variable)

__version__ = "1.0"
__all__ = [
    # Errors
    'MathError', 'CalculationError', 'SolvingError',
    'CalculationErrorKind', 'SolvingErrorKind',
    'DivideByZeroError', 'ZeroToTheZeroError', 'DomainError',
    'MissingFunctionArgumentError', 'MissingFunctionDefinitionError',
    'RootOfComplexNumberError', 'RaisedToComplexNumberError',
    'NonAlgebraicError', 'TooComplexError', 'ParsingError',
    'NonComparableError', 'MathSyntaxError',

    # Modes
    'AngleMode', 'FractionMode', 'FunctionMode', 'NumberMode',

    # Value model
    'Value', 'Number', 'Variable', 'VariableValue', 'Object', 'Term', 'Expression',
    'Function', 'FunctionValue',

    # Classes
    'MathParser', 'Equation', 'System', 'MathEngine', 'EngineConfig',

    # Numeric methods and graphing
    'numeric', 'Point', 'Window', 'Graph',
    'sample_function', 'nearest_zero', 'nearest_intersect', 'nearest_extreme',

    # Functions
    'parse', 'evaluate', 'simplify', 'factor', 'differentiate', 'solve',
    'get_engine',
]
