"""
Text to value tree.

Grammar, loosely:
    expression := term (('+'|'-'|'±') term)*
    term       := sign* factor (('*'|'/'|juxtaposition) factor)*
    factor     := item ('^' item)?
    item       := number | variables | '(' expression ')' | name '(' args ')'

Each letter of a run of letters is its own variable, so ``xy`` is x times y.
A run of letters directly followed by a bracket is a call when the system
knows a function by that name.
"""

import logging
from typing import List, Optional

from .core import Expression, Object, Term, VariableValue
from .errors import MathSyntaxError
from .number import Number
from .value import Value

logger = logging.getLogger(__name__)

OPEN_BRACKETS = "([{"
CLOSE_BRACKETS = ")]}"
ADDITIVE_CHARACTERS = "+-±"
NUMBER_CHARACTERS = "-+0123456789.ⅈ"

NUMBER = "number"
VARIABLE = "variable"
BRACKETED = "expression"
CALL = "function"


class _TermScanner:
    """State for scanning one term left to right."""

    def __init__(self, parser: 'MathParser'):
        self.parser = parser
        self.objects: List[Object] = []
        self.item_type = ""
        self.item = ""
        self.base: Optional[str] = None
        self.base_type: Optional[str] = None
        self.dividing = False

    def start_exponent(self):
        self.base = self.item
        self.base_type = self.item_type
        self.item = ""
        self.item_type = ""

    def end_item(self):
        if self.item == "":
            return
        if self.base is not None:
            exponent, exponent_type = self.item, self.item_type
        else:
            self.base, self.base_type = self.item, self.item_type
            exponent, exponent_type = None, None
        self.item = ""
        self.item_type = ""

        base_value = self.parser.parse_item(self.base, self.base_type)
        exponent_value = self.parser.parse_item(exponent, exponent_type) if exponent_type is not None else None
        obj = Object(base_value, exponent_value)
        self.objects.append(Object(obj, Number(-1)) if self.dividing else obj)
        self.base = None
        self.base_type = None
        self.dividing = False


class MathParser:
    """Builds value trees from text, interning symbols in ``system``."""

    def __init__(self, system):
        self.system = system

    def _preprocess(self, text: str) -> str:
        text = text.replace('\\cdot', '*').replace('\\times', '*').replace('\\div', '/')
        return text.replace(" ", "")

    def parse(self, text: str) -> Value:
        """The narrowest value for ``text``: Expression, Number or Term."""
        text = self._preprocess(text)
        if any(c in "+-" for c in text):
            return self.parse_expression(text)
        if all(c in NUMBER_CHARACTERS for c in text):
            return Number.from_string(text)
        return self.parse_term(text)

    def parse_expression(self, text: str) -> Expression:
        text = self._preprocess(text)
        terms = []
        depth = 0
        current = ""
        for c in text:
            if depth == 0 and c in ADDITIVE_CHARACTERS:
                if current != "":
                    terms.append(self.parse_term(current))
                current = ""
            elif c in OPEN_BRACKETS:
                depth += 1
            elif c in CLOSE_BRACKETS:
                depth -= 1
            current += c
        terms.append(self.parse_term(current))
        return Expression(terms)

    def parse_term(self, text: str) -> Term:
        text = self._preprocess(text)
        if not text:
            raise MathSyntaxError("empty term")
        sign = Number(1)
        while text and text[0] in ADDITIVE_CHARACTERS:
            if text[0] == "-":
                sign = sign * Number(-1)
            text = text[1:]
            if not text:
                raise MathSyntaxError("sign without a term")

        scanner = _TermScanner(self)
        if sign != Number(1):
            scanner.objects.append(Object(sign))

        depth = 0
        for c in text:
            if depth == 0:
                if c in NUMBER_CHARACTERS:
                    if scanner.item_type != NUMBER:
                        scanner.end_item()
                    scanner.item_type = NUMBER
                    scanner.item += c
                elif c == "*":
                    scanner.end_item()
                elif c == "/":
                    scanner.end_item()
                    scanner.dividing = True
                elif c == "^":
                    scanner.start_exponent()
                elif c in CLOSE_BRACKETS:
                    raise MathSyntaxError(f"unmatched {c!r} in {text!r}")
                elif c not in OPEN_BRACKETS:
                    if scanner.item_type != VARIABLE:
                        scanner.end_item()
                    scanner.item_type = VARIABLE
                    scanner.item += c

            if c in OPEN_BRACKETS:
                is_call = scanner.item_type == VARIABLE and self.system.has_function(scanner.item)
                if depth == 0 and not is_call:
                    scanner.end_item()
                    scanner.item_type = BRACKETED
                elif depth == 0:
                    scanner.item_type = CALL
                scanner.item += c
                depth += 1
            elif c in CLOSE_BRACKETS:
                scanner.item += c
                depth -= 1
            elif depth != 0:
                scanner.item += c

        if depth != 0:
            raise MathSyntaxError(f"unclosed bracket in {text!r}")
        scanner.end_item()
        if not scanner.objects:
            scanner.objects.append(Object(Number(0)))
        return Term(scanner.objects)

    def parse_item(self, text: str, item_type: str) -> Value:
        if item_type == NUMBER:
            return Number.from_string(text)
        if item_type == BRACKETED:
            if len(text) <= 2:
                raise MathSyntaxError(f"empty brackets in {text!r}")
            return self.parse(text[1:-1])
        if item_type == VARIABLE:
            term = Term([Object(VariableValue(self.system.variable(c))) for c in text])
            if len(term.objects) == 1:
                return term.objects[0].base
            return term
        if item_type == CALL:
            return self.parse_function_value(text)
        return self.parse(text)

    def parse_function_value(self, text: str):
        """``name(arg1,arg2,...)``; each argument is an expression."""
        from .functions import FunctionValue

        text = self._preprocess(text)
        args = [""]
        name = ""
        depth = 0
        for c in text:
            opening = False
            if c in OPEN_BRACKETS:
                depth += 1
                opening = True
            elif c in CLOSE_BRACKETS:
                depth -= 1
            elif depth == 0:
                name += c
            if depth == 1 and c == ",":
                args.append("")
            elif depth != 0 and (not opening or depth > 1):
                args[-1] += c

        arguments = [self.parse_expression(a) for a in args]
        function = self.system.function(name, [self.system.default_variable()])
        logger.debug(f"call {name} with {len(arguments)} arguments")
        return FunctionValue(function, arguments)
