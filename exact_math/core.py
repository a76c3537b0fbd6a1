"""
Core components: variables, objects, terms and expressions.

An ``Expression`` is a sum of ``Term``s, a ``Term`` is a product of
``Object``s and an ``Object`` is a base raised to an exponent. The
simplifier and the factoring engine live on these classes.
"""

import logging
from functools import cmp_to_key
from typing import Dict, List, Optional, Tuple

from .errors import (
    DivideByZeroError, MathError, NonAlgebraicError,
    RaisedToComplexNumberError, ZeroToTheZeroError,
)
from .modes import FractionMode
from .number import Number
from .value import Value

logger = logging.getLogger(__name__)


def _minimum(a: Number, b: Number) -> Number:
    return a if a < b else b


def _beyond_one(num: Number) -> bool:
    """|num| > 1 for reals, False for complex numbers."""
    try:
        return num > 1 or num < -1
    except MathError:
        return False


def _divisible(exponent: Number, by: int) -> bool:
    try:
        return exponent % Number(by) == Number(0)
    except MathError:
        return False


def _dedupe(variables: List['Variable']) -> List['Variable']:
    unique = []
    for v in variables:
        if v not in unique:
            unique.append(v)
    return [v.copy() for v in unique]


# ============================================================================
# VARIABLES
# ============================================================================

class Variable:
    """A named unknown owned by a System.

    Identity is the integer identifier: two variables with the same
    identifier are the same variable, whatever their symbol or value.
    """

    def __init__(self, identifier: int, symbol: Optional[str] = None, value: Optional[Value] = None):
        self.identifier = identifier
        self.symbol = symbol
        self.value = value
        self.should_plug_in_value = False

    def copy(self) -> 'Variable':
        value = self.value.copy() if isinstance(self.value, Number) else None
        return Variable(self.identifier, self.symbol, value)

    def __eq__(self, other):
        if not isinstance(other, Variable):
            return NotImplemented
        return self.identifier == other.identifier

    def __hash__(self):
        return hash(self.identifier)

    def __str__(self):
        return self.symbol if self.symbol is not None else str(self.identifier)

    def __repr__(self):
        return f"Variable({self.identifier}, {self.symbol!r})"


class VariableValue(Value):
    """An occurrence of a Variable inside an expression tree."""

    def __init__(self, variable: Variable):
        self.variable = variable

    def factor(self, system=None) -> 'Term':
        if self.variable.value is not None and self.variable.should_plug_in_value:
            return self.variable.value.factor(system)
        return Term([Object(self.copy())])

    def equals(self, value: Value) -> bool:
        return isinstance(value, VariableValue) and self.variable.identifier == value.variable.identifier

    def copy(self) -> 'VariableValue':
        return VariableValue(self.variable)

    def plug_in(self, value: Value, variable: Variable) -> Value:
        if variable.identifier == self.variable.identifier:
            return value
        if self.variable.value is not None:
            return self.variable.value.plug_in(value, variable)
        return self

    def get_variables(self) -> List[Variable]:
        return [self.variable.copy()]

    def evaluate(self) -> Number:
        if self.variable.value is not None:
            return self.variable.value.evaluate()
        raise NonAlgebraicError(f"{self.variable} has no value")

    def derivative(self, variable: Variable, system) -> Value:
        if self.variable.identifier == variable.identifier:
            return Number(1)
        if self.variable.value is not None and self.variable.should_plug_in_value:
            return self.variable.value.derivative(variable, system)
        from .functions import FunctionValue
        return FunctionValue(system.function("nderiv", []),
                             [self.copy(), VariableValue(variable), VariableValue(variable)])

    def description(self) -> str:
        return str(self.variable)


# ============================================================================
# OBJECTS (base ^ exponent)
# ============================================================================

class Object(Value):
    """A base raised to an exponent; the exponent defaults to 1."""

    def __init__(self, base: Value, exponent: Optional[Value] = None):
        self.base = base
        self.exponent = exponent if exponent is not None else Number(1)

    @property
    def is_linear(self) -> bool:
        if self.exponent == Number(1):
            return self.base.is_linear
        return isinstance(self.base, Number)

    def factor(self, system=None) -> 'Term':
        term = self.base.factor(system)
        for o in term.objects:
            e1 = o.exponent.evaluate()
            e2 = self.exponent.evaluate()
            if e1 * e2 == Number(0) and self.base == Number(0):
                raise ZeroToTheZeroError()
            o.exponent = e1 * e2
            base = o.base.try_evaluate()
            if base is not None and base == Number(0):
                exponent = o.exponent.try_evaluate()
                if exponent is not None and exponent < 0:
                    raise DivideByZeroError(f"{self}")
        return term

    def expand(self) -> Optional['Expression']:
        """Multiply out a sum raised to a positive integer power."""
        exponent = self.exponent.evaluate()
        if not exponent.is_real:
            raise RaisedToComplexNumberError()
        if isinstance(self.base, Expression) and exponent.as_integer is not None and exponent > 0:
            product = Expression([Term([Object(Number(1))])])
            for _ in range(exponent.as_integer):
                product = product.multiply(self.base)
            return product
        return None

    def equals(self, value: Value) -> bool:
        return (isinstance(value, Object)
                and self.base == value.base
                and self.exponent == value.exponent)

    def copy(self) -> 'Object':
        return Object(self.base.copy(), self.exponent.copy())

    def evaluate(self) -> Number:
        exponent = self.exponent.evaluate()
        if not exponent.is_real:
            raise RaisedToComplexNumberError()
        if exponent == Number(0):
            if self.base == Number(0):
                raise ZeroToTheZeroError()
            return Number(1)
        base = self.base.evaluate()
        if not (base != Number(0) or exponent > 0):
            raise DivideByZeroError(f"{self}")
        return base ** exponent

    def plug_in(self, value: Value, variable: Variable) -> Value:
        return Object(self.base.plug_in(value, variable), self.exponent.plug_in(value, variable))

    def get_variables(self) -> List[Variable]:
        return _dedupe(self.base.get_variables() + self.exponent.get_variables())

    def derivative(self, variable: Variable, system) -> Value:
        chain = self.base.derivative(variable, system)
        old_exponent = self.exponent.evaluate()
        new_exponent = old_exponent - Number(1)
        return Term([Object(old_exponent), Object(self.base.copy(), new_exponent), Object(chain)])

    def description(self) -> str:
        if self.exponent == Number(1):
            return self.base.description()
        return f"({self.base.description()})^({self.exponent.description()})"


# ============================================================================
# TERMS (products)
# ============================================================================

class Term(Value):
    """Objects multiplied together."""

    def __init__(self, objects: Optional[List[Object]] = None):
        self.objects = objects if objects is not None else []

    @property
    def is_square(self) -> bool:
        for o in self.objects:
            exponent = o.exponent.try_evaluate()
            if exponent is None or not _divisible(exponent, 2):
                return False
        return True

    @property
    def is_cube(self) -> bool:
        for o in self.objects:
            exponent = o.exponent.try_evaluate()
            if exponent is None or not _divisible(exponent, 3):
                return False
        return True

    @property
    def is_linear(self) -> bool:
        counts: Dict[int, int] = {}
        for o in self.objects:
            if not o.is_linear:
                return False
            for v in o.get_variables():
                counts[v.identifier] = counts.get(v.identifier, 0) + 1
                if counts[v.identifier] > 1:
                    return False
        return True

    def factor(self, system=None) -> 'Term':
        factors = []
        for o in self.objects:
            factors += o.factor(system).objects
        return Term(factors).combine_objects()

    def combine_objects(self) -> 'Term':
        """Fold numeric factors together and merge objects with equal bases.

        Proportional polynomial bases are merged too, with the ratio moved
        into the numeric factor. The numeric factor always comes first.
        """
        numbers = []
        others = []
        for o in self.objects:
            n = o.try_evaluate()
            if n is not None:
                numbers.append(n)
            else:
                others.append(o.copy())

        number = Number(1)
        for n in numbers:
            number = number * n
        term = Term([Object(number)])
        if number == Number(0):
            return term

        i = 0
        while i < len(others):
            val = others[i]
            match = False
            for o in term.objects:
                if o.base == val.base:
                    e1 = val.exponent.evaluate()
                    e2 = o.exponent.evaluate()
                    o.exponent = e1 + e2
                    match = True
                    break
                if isinstance(o.base, Expression) and isinstance(val.base, Expression):
                    o_base, val_base = o.base, val.base
                    ratio = val_base.compare(o_base)
                    if ratio is not None:
                        e1 = val.exponent.evaluate()
                        e2 = o.exponent.evaluate()
                        o.exponent = e1 + e2
                        if _beyond_one(ratio):
                            number = number * (ratio ** e1)
                        else:
                            number = number * ((Number(1) / ratio) ** e2)
                            o.base = val_base
                        term.objects[0].base = number
                        match = True
                        break
                    quotient = val_base.divide(o_base)
                    if quotient is not None:
                        e1 = val.exponent.evaluate()
                        e2 = o.exponent.evaluate()
                        o.exponent = e1 + e2
                        others.append(Object(quotient, e1))
                        match = True
                        break
                    quotient = o_base.divide(val_base)
                    if quotient is not None:
                        e1 = val.exponent.evaluate()
                        e2 = o.exponent.evaluate()
                        o.base = val_base
                        o.exponent = e1 + e2
                        others.append(Object(quotient, e2))
                        match = True
                        break
            if not match:
                term.objects.append(val)
            i += 1

        kept = []
        for o in term.objects:
            if o.exponent == Number(0):
                base = o.base.try_evaluate()
                if base is not None and base == Number(0):
                    raise ZeroToTheZeroError()
                continue
            kept.append(o)
        term.objects = kept
        return term

    def equals(self, value: Value) -> bool:
        if not isinstance(value, Term):
            return False
        remaining = list(self.objects)
        for o in value.objects:
            for i, r in enumerate(remaining):
                if o == r:
                    del remaining[i]
                    break
            else:
                return False
        return not remaining

    def add(self, term: 'Term', system=None) -> Optional['Term']:
        """Sum with a like term, or None when the terms are not alike."""
        num_a, term_a = self.extract_numbers()
        num_b, term_b = term.extract_numbers()
        if term_a == term_b:
            term_a.objects.append(Object(num_a + num_b))
            return term_a
        return None

    def multiply(self, term: 'Term') -> 'Term':
        product = Term([o.copy() for o in self.objects] + [o.copy() for o in term.objects])
        return product.combine_objects()

    def divide(self, term: 'Term') -> 'Term':
        quotient = Term([o.copy() for o in self.objects])
        for o in term.objects:
            divisor = o.copy()
            if not isinstance(divisor.exponent, Number):
                raise NonAlgebraicError(f"cannot divide by {term}")
            divisor.exponent = divisor.exponent * Number(-1)
            quotient.objects.append(divisor)
        return quotient.combine_objects()

    def expand(self) -> 'Expression':
        """Distribute over every expandable power in the term."""
        non_expandable = Term([Object(Number(1))])
        product = Expression([Term([Object(Number(1))])])
        for o in self.objects:
            expanded = o.expand()
            if expanded is not None:
                product = product.multiply(expanded)
            else:
                non_expandable.objects.append(o.copy())
        product.terms = [t.multiply(non_expandable) for t in product.terms]
        return product

    def simplify(self) -> Optional['Term']:
        """Multiply sums that share an exponent; None when the term is zero."""
        term = Term()
        for o in self.objects:
            match = False
            for i, existing in enumerate(term.objects):
                if (isinstance(o.base, Expression) and isinstance(existing.base, Expression)
                        and o.exponent == existing.exponent):
                    term.objects[i] = Object(o.base.multiply(existing.base).simplify(), o.exponent.copy())
                    match = True
                    break
            if not match:
                if isinstance(o.base, Expression):
                    term.objects.append(Object(o.base.simplify(), o.exponent.copy()))
                else:
                    term.objects.append(o.copy())
        combined = term.combine_objects()
        if not combined.objects or (len(combined.objects) == 1 and combined.objects[0].base == Number(0)):
            return None
        num, others = combined.extract_numbers()
        if num == Number(1) and others.objects:
            return others
        return combined

    def extract_numbers(self) -> Tuple[Number, 'Term']:
        num = Number(1)
        term = Term()
        for o in self.objects:
            n = o.try_evaluate()
            if n is not None:
                num = num * n
            else:
                term.objects.append(o.copy())
        return num, term

    def extract(self, variable: Variable) -> Tuple[Number, 'Term']:
        """Pull out ``variable``: (its total exponent, the remaining term)."""
        exponent = Number(0)
        others = self.copy().objects
        for i in range(len(others) - 1, -1, -1):
            base = others[i].base
            if isinstance(base, VariableValue) and base.variable.identifier == variable.identifier:
                exponent = exponent + others[i].exponent.evaluate()
                del others[i]
        return exponent, Term(others)

    def copy(self) -> 'Term':
        return Term([o.copy() for o in self.objects])

    def evaluate(self) -> Number:
        product = Number(1)
        for o in self.objects:
            product = product * o.evaluate()
        return product

    def plug_in(self, value: Value, variable: Variable) -> Value:
        term = Term()
        for o in self.objects:
            plugged = o.plug_in(value, variable)
            term.objects.append(plugged if isinstance(plugged, Object) else Object(plugged))
        return term

    def get_numerator(self) -> 'Term':
        term = Term([o.copy() for o in self.objects if o.exponent.evaluate() > 0])
        if not term.objects:
            term.objects.append(Object(Number(1)))
        return term

    def get_denominator(self) -> Optional['Term']:
        term = Term([o.copy() for o in self.objects if o.exponent.evaluate() < 0])
        return term if term.objects else None

    def gcf(self, term: 'Term') -> 'Term':
        """Greatest common factor of two factored terms; the number goes last."""
        gcf = Term()
        unchecked = term.copy().objects
        num1 = Number(1)
        num2 = Number(1)
        for o in unchecked:
            n = o.try_evaluate()
            if n is not None:
                num2 = num2 * n
        for o in self.copy().objects:
            n = o.try_evaluate()
            if n is not None:
                num1 = num1 * n
                continue
            for i, other in enumerate(unchecked):
                if o.base == other.base:
                    gcf.objects.append(Object(o.base.copy(),
                                              _minimum(o.exponent.evaluate(), other.exponent.evaluate())))
                    del unchecked[i]
                    break
                if isinstance(o.base, Expression) and isinstance(other.base, Expression):
                    ratio = o.base.compare(other.base)
                    if ratio is None:
                        continue
                    e1 = o.exponent.evaluate()
                    e2 = other.exponent.evaluate()
                    del unchecked[i]
                    try:
                        if _beyond_one(ratio):
                            gcf.objects.append(Object(other.base, _minimum(e1, e2)))
                            num1 = num1 * ratio
                        else:
                            gcf.objects.append(Object(o.base, _minimum(e1, e2)))
                            num2 = num2 / ratio
                    except MathError:
                        raise RaisedToComplexNumberError()
                    break
        gcf.objects.append(Object(num1.gcf(num2)))
        return gcf

    def lcm(self, term: 'Term') -> 'Term':
        return self.multiply(term).divide(self.gcf(term))

    def get_reciprocal(self) -> 'Term':
        reciprocal = Term()
        for o in self.objects:
            flipped = o.copy()
            flipped.exponent = flipped.exponent.evaluate() * Number(-1)
            reciprocal.objects.append(flipped)
        return reciprocal

    def get_variables(self) -> List[Variable]:
        variables = []
        for o in self.objects:
            variables += o.get_variables()
        return _dedupe(variables)

    def derivative(self, variable: Variable, system) -> Value:
        """Product rule."""
        terms = []
        for i, o in enumerate(self.objects):
            term = Term([Object(o.derivative(variable, system))])
            term.objects += [other.copy() for j, other in enumerate(self.objects) if j != i]
            terms.append(term)
        return Expression(terms)

    def description(self) -> str:
        from .functions import FunctionValue

        numbers, variables, others, functions = [], [], [], []
        for o in self.objects:
            if isinstance(o.base, Number):
                numbers.append(o)
            elif isinstance(o.base, VariableValue):
                variables.append(o)
            elif isinstance(o.base, FunctionValue) and o.exponent == Number(1):
                functions.append(o)
            else:
                others.append(o)

        text = ""
        first = True
        for n in numbers:
            shown = n.description()
            if shown == "1":
                continue
            if not first:
                text += "*"
            if_complex = (len(variables) + len(others) + len(functions) > 0
                          or n.base.imag < 0.0 or n.base.real < 0.0)
            if n.exponent == Number(1):
                try:
                    wrap = n.base < 0
                except MathError:
                    wrap = if_complex
            else:
                wrap = False
            text += f"({shown})" if wrap else shown
            first = False
        for v in variables:
            text += v.description()
        for o in others:
            if isinstance(o.base, (Expression, Term)) and o.exponent == Number(1):
                text += f"({o.description()})"
            else:
                text += o.description()
        if variables and not others and functions:
            text += "*"
        for f in functions:
            text += f.description()
        return text or "1"


# ============================================================================
# EXPRESSIONS (sums)
# ============================================================================

class Expression(Value):
    """Terms added together."""

    def __init__(self, terms: Optional[List[Term]] = None):
        self.terms = terms if terms is not None else []

    # ------------------------------------------------------------------
    # Pattern checks
    # ------------------------------------------------------------------

    @property
    def is_difference_of_squares(self) -> bool:
        if len(self.terms) != 2:
            return False
        num_a, term_a = self.terms[0].extract_numbers()
        num_b, term_b = self.terms[1].extract_numbers()
        try:
            same_sign = (num_a > 0 and num_b > 0) or (num_a < 0 and num_b < 0)
        except MathError:
            same_sign = True
        if same_sign:
            return False
        return term_a.is_square and term_b.is_square

    @property
    def is_sum_or_difference_of_cubes(self) -> bool:
        if len(self.terms) != 2:
            return False
        return self.terms[0].extract_numbers()[1].is_cube and self.terms[1].extract_numbers()[1].is_cube

    @property
    def is_quadratic_pattern(self) -> bool:
        if len(self.terms) != 3:
            return False
        term_a = self.terms[0].extract_numbers()[1]
        term_b = self.terms[1].extract_numbers()[1]
        term_c = self.terms[2].extract_numbers()[1]
        if term_c.objects:
            return False
        try:
            t = term_a.divide(term_b)
        except MathError:
            return False
        return t.extract_numbers()[1] == term_b

    @property
    def is_linear(self) -> bool:
        return all(t.is_linear for t in self.terms)

    # ------------------------------------------------------------------
    # Simplification
    # ------------------------------------------------------------------

    def simplify(self, system=None) -> 'Expression':
        """Factor terms, combine, distribute, combine again and order."""
        expression = self.copy()
        expression.terms = [t.factor(system) for t in expression.terms]
        expression = expression.combine_like_terms(system)

        distributed = Expression()
        for t in expression.terms:
            distributed.terms += t.expand().terms
        combined = distributed.combine_like_terms(system)

        for i in range(len(combined.terms) - 1, -1, -1):
            simplified = combined.terms[i].simplify()
            if simplified is not None:
                combined.terms[i] = simplified
            else:
                del combined.terms[i]
        if not combined.terms:
            combined.terms = [Term([Object(Number(0))])]
        return combined.order()

    def combine_like_terms(self, system=None) -> 'Expression':
        summed: List[Term] = []
        for t in self.terms:
            for i, existing in enumerate(summed):
                total = t.add(existing, system)
                if total is not None:
                    summed[i] = total
                    break
            else:
                summed.append(t.copy())

        expression = Expression(list(summed))
        mode = system.fraction_mode if system is not None else FractionMode.COMBINE_LIKE_FRACTIONS

        if mode == FractionMode.COMBINE_ALL_FRACTIONS:
            lcm = Term([Object(Number(1))])
            non_fractions = list(summed)
            fractions = Expression()
            for i in range(len(non_fractions) - 1, -1, -1):
                denominator = non_fractions[i].get_denominator()
                if denominator is not None:
                    lcm = lcm.lcm(denominator.get_reciprocal())
                    fractions.terms.append(non_fractions[i])
                    del non_fractions[i]
            if fractions.terms:
                numerator = fractions.multiply_term(lcm).simplify(system)
                fraction = Term([Object(numerator)]
                                + Object(lcm, Number(-1)).factor(system).objects).combine_objects()
                expression.terms = non_fractions + [fraction]

        elif mode == FractionMode.COMBINE_ALL_TERMS:
            lcm = Term([Object(Number(1))])
            for t in summed:
                denominator = t.get_denominator()
                if denominator is not None:
                    lcm = lcm.lcm(denominator.get_reciprocal())
            if lcm.try_evaluate() != Number(1):
                numerator = expression.multiply_term(lcm).simplify(system)
                term = Term([Object(numerator)]
                            + Object(lcm, Number(-1)).factor(system).objects).combine_objects()
                expression.terms = [term]

        elif mode == FractionMode.COMBINE_LIKE_FRACTIONS:
            fractions: List[Term] = []
            non_fractions = list(summed)
            for i in range(len(non_fractions) - 1, -1, -1):
                denominator = non_fractions[i].get_denominator()
                if denominator is None:
                    continue
                match = False
                for j, fraction in enumerate(fractions):
                    other = fraction.get_denominator().get_reciprocal()
                    product = denominator.multiply(other)
                    multiplier = product.objects[0].try_evaluate() if product.objects else None
                    if multiplier is not None and len(product.objects) == 1:
                        numerator = Expression([
                            non_fractions[i].get_numerator().multiply(Term([Object(multiplier)])),
                            fraction.get_numerator(),
                        ]).simplify(system)
                        fractions[j] = Term([Object(numerator)] + other.get_reciprocal().objects)
                        match = True
                        break
                if not match:
                    fractions.append(non_fractions[i])
                del non_fractions[i]
            expression.terms = non_fractions + fractions

        return expression

    # ------------------------------------------------------------------
    # Factoring
    # ------------------------------------------------------------------

    def factor(self, system=None) -> Term:
        """Denominators first, then the GCF, then structural factors."""
        term = Term()
        expression = self.copy()
        expression.terms = [t.factor(system) for t in expression.terms]

        reciprocal = Term()
        for t in expression.terms:
            denominator = t.get_denominator()
            objects = denominator.objects if denominator is not None else []
            term.objects += objects
            for o in objects:
                flipped = o.copy()
                flipped.exponent = flipped.exponent.evaluate() * Number(-1)
                reciprocal.objects.append(flipped)
        expression = expression.multiply_term(reciprocal)

        gcf = None
        for t in expression.terms:
            gcf = t.copy() if gcf is None else gcf.gcf(t)
        if gcf is not None:
            lead = gcf.objects[0].base if gcf.objects else Number(0)
            if lead != Number(0):
                term.objects += gcf.objects
                expression = expression.multiply_term(gcf.get_reciprocal())

        expression = expression.simplify(system)

        factors = [expression]
        i = 0
        while i < len(factors):
            found = factors[i].get_factor()
            quotient = factors[i].divide(found) if found is not None else None
            if quotient is not None:
                logger.debug(f"factor {found} found in {factors[i]}")
                factors[i] = quotient
                factors.append(found.simplify(system))
                i = 0
            else:
                i += 1

        for f in factors:
            term.objects.append(Object(f.copy()))
        return term.combine_objects()

    @staticmethod
    def _root_term(term: Term, degree: int) -> Term:
        root = Term()
        for o in term.objects:
            piece = o.copy()
            piece.exponent = piece.exponent.evaluate() / Number(degree)
            base = piece.base.try_evaluate()
            if base is not None:
                try:
                    sign = Number(1) if base > 0 else Number(-1)
                except MathError:
                    sign = Number(1)
                base = base * sign
                piece = Object(sign * (base ** (Number(1) / Number(degree))))
            root.objects.append(piece)
        return root

    def get_factor(self) -> Optional['Expression']:
        """Find one factor by pattern, or None."""
        if len(self.terms) < 2:
            return None

        if len(self.terms) == 2:
            if self.is_difference_of_squares:
                return Expression([self._root_term(self.terms[0], 2), self._root_term(self.terms[1], 2)])
            if self.is_sum_or_difference_of_cubes:
                return Expression([self._root_term(self.terms[0], 3), self._root_term(self.terms[1], 3)])
            return None

        if self.is_quadratic_pattern:
            a = self.terms[0].extract_numbers()[0]
            b, x = self.terms[1].extract_numbers()
            c = self.terms[2].extract_numbers()[0]
            if a.as_integer is None or b.as_integer is None or c.as_integer is None:
                return None
            discriminant = ((b ** Number(2)) - (Number(4) * a * c)) ** Number(0.5)
            if discriminant.as_integer is None:
                return None
            zero_numerator = -b + discriminant
            zero_denominator = Number(2) * a
            gcf = zero_numerator.gcf(zero_denominator)
            zero_numerator = zero_numerator / gcf
            zero_denominator = zero_denominator / gcf
            dx = Term([Object(zero_denominator)] + x.objects)
            e = Term([Object(zero_numerator * Number(-1))])
            return Expression([dx, e])

        # (a + b)^n
        n = len(self.terms) - 1
        quantity = Expression([self.terms[0].copy(), self.terms[n].copy()])
        if Term([Object(quantity, Number(n))]).expand() == self:
            return quantity

        # grouping
        expression = Expression([self.terms[0]])
        gcf = self.terms[0]
        count = len(self.terms)
        for i in range(1, count // 2 + 1):
            expression.terms.append(self.terms[i])
            gcf = gcf.gcf(self.terms[i])
            if count % (i + 1) != 0:
                continue
            factor = expression.multiply_term(gcf.get_reciprocal())
            all_match = True
            for start in range(1, count // (i + 1)):
                group = Expression([self.terms[start * (i + 1) + t] for t in range(i + 1)])
                if group.compare(factor) is None:
                    all_match = False
                    break
            if all_match:
                return factor
        return None

    def solve_factor(self, variable: Variable) -> List[Value]:
        """Solve ``self = 0`` when it is a binomial or quadratic in ``variable``."""
        solutions: List[Value] = []
        by_degree: Dict[Number, List[Term]] = {}
        for t in self.terms:
            exponent, term = t.extract(variable)
            by_degree.setdefault(exponent, []).append(term)

        if len(by_degree) == 2:
            degrees = list(by_degree)
            if degrees[0] == Number(0):
                d1 = degrees[1]
                terms1, terms2 = by_degree[degrees[1]], by_degree[degrees[0]]
            else:
                d1 = degrees[0]
                terms1, terms2 = by_degree[degrees[0]], by_degree[degrees[1]]
            terms1 = [t.extract(variable)[1] for t in terms1]
            terms2 = [t.extract(variable)[1] for t in terms2]

            # terms1 * x^d1 + terms2 = 0, so x = (-terms2 / terms1)^(1/d1)
            q = Term([Object(Expression(terms2)), Object(Expression(terms1), Number(-1)), Object(Number(-1))])
            simplified = q.factor(None).simplify()
            if simplified is not None:
                for o in simplified.objects:
                    o.exponent = o.exponent.evaluate() / d1
                solutions.append(simplified.expand().simplify())
                rational = d1.approximate_rational
                if rational is not None and rational[0] % 2 == 0:
                    simplified.objects.append(Object(Number(-1)))
                    solutions.append(simplified.expand().simplify())
            else:
                solutions.append(Number(0))

        elif len(by_degree) == 3:
            a = Expression()
            b = Expression()
            c = Expression()
            n = Number(0)
            for exponent, terms in by_degree.items():
                if exponent == Number(0):
                    c = Expression(terms)
                elif n == Number(0):
                    n = exponent
                    b = Expression(terms)
                elif n * Number(2) == exponent:
                    a = Expression(terms)
                elif exponent * Number(2) == n:
                    a = b
                    n = exponent
                    b = Expression(terms)
                else:
                    return solutions

            neg_b = Expression().subtract(b)
            two_a = a.multiply_term(Term([Object(Number(2))]))
            discriminant = b.multiply(b).subtract(
                a.multiply(c).multiply_term(Term([Object(Number(4))])))
            rational = n.approximate_rational
            for sign in (-1, 1):
                root = Term([Object(Number(sign)), Object(discriminant, Number(0.5))])
                numerator = Expression(neg_b.terms + [root])
                solution = Expression([Term([Object(numerator), Object(two_a, Number(-1))])])
                if rational is None:
                    continue
                powered = Object(solution, Number(1) / n)
                expanded = powered.expand()
                sol = expanded.simplify() if expanded is not None else Expression([Term([powered])])
                solutions.append(sol.simplify())
                if rational[0] % 2 == 0:
                    solutions.append(sol.multiply_term(Term([Object(Number(-1))])).simplify())

        return solutions

    def order(self) -> 'Expression':
        """Sort terms by variable identifier, then falling exponent, then size."""

        def variables_of(term: Term) -> List[Object]:
            found = [o for o in term.objects if isinstance(o.base, VariableValue)]
            return sorted(found, key=lambda o: o.base.variable.identifier)

        def precedes(term1: Term, term2: Term) -> bool:
            variables1, variables2 = variables_of(term1), variables_of(term2)
            for o1, o2 in zip(variables1, variables2):
                id1, id2 = o1.base.variable.identifier, o2.base.variable.identifier
                if id1 < id2:
                    return True
                if id1 > id2:
                    return False
                num1, num2 = o1.exponent.try_evaluate(), o2.exponent.try_evaluate()
                if num1 is not None and num2 is not None:
                    try:
                        if num1 > num2:
                            return True
                        if num1 < num2:
                            return False
                    except MathError:
                        return True
            return len(variables1) > len(variables2)

        def compare(term1: Term, term2: Term) -> int:
            if precedes(term1, term2):
                return -1
            if precedes(term2, term1):
                return 1
            return 0

        expression = self.copy()
        expression.terms.sort(key=cmp_to_key(compare))
        return expression

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def add(self, expression: 'Expression', system=None) -> 'Expression':
        total = self.copy()
        total.terms += [t.copy() for t in expression.terms]
        return total.simplify(system)

    def subtract(self, expression: 'Expression', system=None) -> 'Expression':
        return self.add(expression.get_negated(), system)

    def multiply(self, expression: 'Expression') -> 'Expression':
        product = Expression()
        for t1 in expression.terms:
            for t2 in self.terms:
                product.terms.append(t1.multiply(t2))
        return product.combine_like_terms()

    def multiply_term(self, term: Term) -> 'Expression':
        return Expression([t.multiply(term) for t in self.terms])

    def divide(self, expression: 'Expression') -> Optional['Expression']:
        """Polynomial long division; None when there is a remainder."""
        remainder = self.order()
        divisor = expression.order()
        quotient = Expression()
        if not divisor.terms:
            raise DivideByZeroError("division by an empty expression")
        while remainder.terms and remainder.terms[0].extract_numbers()[0] != Number(0):
            quotient_term = remainder.terms[0].divide(divisor.terms[0])
            if quotient_term.get_denominator() is not None:
                return None
            product = divisor.multiply_term(quotient_term)
            quotient.terms.append(quotient_term)
            remainder = remainder.subtract(product)
        return quotient.simplify()

    def compare(self, expression: 'Expression') -> Optional[Number]:
        """The constant ratio ``self / expression``, or None if not proportional."""
        remaining = self.copy().terms
        num = None
        for t in expression.terms:
            for i, r in enumerate(remaining):
                try:
                    ratio = r.divide(t).evaluate()
                except MathError:
                    continue
                if num is None or ratio == num:
                    del remaining[i]
                    num = ratio
                    break
            else:
                return None
        return num if not remaining else None

    def get_negated(self) -> 'Expression':
        return Expression([t.multiply(Term([Object(Number(-1))])) for t in self.copy().terms])

    # ------------------------------------------------------------------
    # Value
    # ------------------------------------------------------------------

    def equals(self, value: Value) -> bool:
        if not isinstance(value, Expression):
            return False
        remaining = list(self.terms)
        for t in value.terms:
            for i, r in enumerate(remaining):
                if t == r:
                    del remaining[i]
                    break
            else:
                return False
        return not remaining

    def copy(self) -> 'Expression':
        return Expression([t.copy() for t in self.terms])

    def evaluate(self) -> Number:
        total = Number(0)
        for t in self.terms:
            total = total + t.evaluate()
        return total

    def plug_in(self, value: Value, variable: Variable) -> Value:
        expression = Expression()
        for t in self.terms:
            plugged = t.plug_in(value, variable)
            expression.terms.append(plugged if isinstance(plugged, Term) else Term([Object(plugged)]))
        return expression

    def get_variables(self) -> List[Variable]:
        variables = []
        for t in self.terms:
            variables += t.get_variables()
        return _dedupe(variables)

    def derivative(self, variable: Variable, system) -> Value:
        return Expression([Term([Object(t.derivative(variable, system))]) for t in self.terms])

    def description(self) -> str:
        text = ""
        first = True
        for t in self.terms:
            shown = t.copy()
            negative = False
            for o in shown.objects:
                if o.exponent == Number(1) and isinstance(o.base, Number):
                    try:
                        is_negative = o.base < 0
                    except MathError:
                        is_negative = False
                    if is_negative:
                        o.base = o.base * Number(-1)
                        negative = True
            if not first:
                text += " - " if negative else " + "
            else:
                text += "-" if negative else ""
                first = False
            text += shown.description()
        return text
