"""
The Value capability shared by every expression node kind.
"""

from typing import List, Optional

from .errors import NonAlgebraicError


class Value:
    """Base class for expression nodes.

    Subclasses: Number, VariableValue, Object, Term, Expression, FunctionValue.
    Nodes are mutated in place while rewriting, so anything that changes a
    subtree it did not build works on a ``copy()``.
    """

    @property
    def is_linear(self) -> bool:
        return True

    def factor(self, system=None) -> 'Term':
        from .core import Object, Term
        return Term([Object(self.copy())])

    def equals(self, value: 'Value') -> bool:
        return True

    def evaluate(self) -> 'Number':
        raise NonAlgebraicError(f"cannot evaluate {self}")

    def copy(self) -> 'Value':
        return Value()

    def plug_in(self, value: 'Value', variable) -> 'Value':
        return self.copy()

    def get_variables(self) -> List:
        return []

    def derivative(self, variable, system) -> 'Value':
        from .number import Number
        return Number(0)

    def try_evaluate(self) -> Optional['Number']:
        """Evaluate, or None when the value is not numeric."""
        from .errors import MathError
        try:
            return self.evaluate()
        except MathError:
            return None

    def description(self) -> str:
        return ""

    def __str__(self):
        return self.description()

    def __repr__(self):
        return f"{type(self).__name__}({self.description()!r})"

    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return self.equals(other)

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None
