"""
Error conditions raised by the algebra engine.

Two disjoint families:
    CalculationError - the value is well formed but numerically undefined
    SolvingError     - the algebra cannot proceed
"""

from enum import Enum


class CalculationErrorKind(Enum):
    DIVIDE_BY_ZERO = "divide_by_zero"
    ZERO_TO_THE_ZERO = "zero_to_the_zero"
    DOMAIN = "domain"
    MISSING_FUNCTION_ARGUMENT = "missing_function_argument"
    MISSING_FUNCTION_DEFINITION = "missing_function_definition"
    ROOT_OF_COMPLEX_NUMBER = "root_of_complex_number"
    RAISED_TO_COMPLEX_NUMBER = "raised_to_complex_number"


class SolvingErrorKind(Enum):
    NON_ALGEBRAIC = "non_algebraic"
    TOO_COMPLEX = "too_complex"
    PARSING = "parsing"
    NON_COMPARABLE = "non_comparable"
    SYNTAX = "syntax"


class MathError(Exception):
    """Base class for every condition the engine raises."""
    kind = None

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message)

    default_message = "math error"


# ============================================================================
# CALCULATION CONDITIONS
# ============================================================================

class CalculationError(MathError):
    default_message = "calculation error"


class DivideByZeroError(CalculationError):
    kind = CalculationErrorKind.DIVIDE_BY_ZERO
    default_message = "division by zero"


class ZeroToTheZeroError(CalculationError):
    kind = CalculationErrorKind.ZERO_TO_THE_ZERO
    default_message = "zero raised to the zero"


class DomainError(CalculationError):
    kind = CalculationErrorKind.DOMAIN
    default_message = "argument outside the function's domain"


class MissingFunctionArgumentError(CalculationError):
    kind = CalculationErrorKind.MISSING_FUNCTION_ARGUMENT
    default_message = "wrong number of function arguments"


class MissingFunctionDefinitionError(CalculationError):
    kind = CalculationErrorKind.MISSING_FUNCTION_DEFINITION
    default_message = "function has no definition"


class RootOfComplexNumberError(CalculationError):
    kind = CalculationErrorKind.ROOT_OF_COMPLEX_NUMBER
    default_message = "root of a complex number"


class RaisedToComplexNumberError(CalculationError):
    kind = CalculationErrorKind.RAISED_TO_COMPLEX_NUMBER
    default_message = "number raised to a complex exponent"


# ============================================================================
# SOLVING CONDITIONS
# ============================================================================

class SolvingError(MathError):
    default_message = "solving error"


class NonAlgebraicError(SolvingError):
    kind = SolvingErrorKind.NON_ALGEBRAIC
    default_message = "value cannot be reduced to a number"


class TooComplexError(SolvingError):
    kind = SolvingErrorKind.TOO_COMPLEX
    default_message = "too complex to solve"


class ParsingError(SolvingError):
    kind = SolvingErrorKind.PARSING
    default_message = "could not parse number"


class NonComparableError(SolvingError):
    kind = SolvingErrorKind.NON_COMPARABLE
    default_message = "complex numbers cannot be ordered"


class MathSyntaxError(SolvingError):
    kind = SolvingErrorKind.SYNTAX
    default_message = "invalid syntax"
