import pytest

from exact_math import Expression, FunctionValue, MathSyntaxError, Number, ParsingError, Term


class TestTerms:
    def test_numbers_and_signs(self, parser):
        assert str(parser.parse_term("12")) == "12"
        assert str(parser.parse_term("-12")) == "(-1)*12"
        assert str(parser.parse_term("--12")) == "12"

    def test_variable_runs(self, parser):
        assert str(parser.parse_term("xyz")) == "(xyz)"
        assert str(parser.parse_term("x^2y")) == "(x)^(2)y"

    def test_division(self, parser):
        term = parser.parse_term(".5(x+1)/(x+1)^2")
        assert str(term) == "0.5(x + 1)((x + 1)^(2))^(-1)"

    def test_empty_term(self, parser):
        with pytest.raises(MathSyntaxError):
            parser.parse_term("")
        with pytest.raises(MathSyntaxError):
            parser.parse_term("--")

    def test_unbalanced_brackets(self, parser):
        with pytest.raises(MathSyntaxError):
            parser.parse_term("(x+1")
        with pytest.raises(MathSyntaxError):
            parser.parse_term("x)")

    def test_empty_brackets(self, parser):
        with pytest.raises(MathSyntaxError):
            parser.parse_term("3()")


class TestExpressions:
    def test_mixed_expression(self, parser):
        expression = parser.parse_expression("3x^2y + 1/(1+x) + 2")
        assert str(expression) == "3(x)^(2)y + (1 + x)^(-1) + 2"

    def test_subtraction(self, parser):
        assert str(parser.parse_expression("6x - 7y")) == "6x - 7y"
        assert str(parser.parse_expression("1+2+3+4-4-3-2-1+x")) == "1 + 2 + 3 + 4 - 4 - 3 - 2 - 1 + x"

    def test_juxtaposed_brackets(self, parser):
        assert str(parser.parse_expression("3*xy(x+1)")) == "3(xy)(x + 1)"

    def test_variable_exponent(self, parser):
        expression = parser.parse_expression("(3x+1)^(5z)/(x8y)^(4)")
        assert str(expression) == "(3x + 1)^(5z)((8xy)^(4))^(-1)"

    def test_exponent_written_as_a_variable(self, parser, system):
        term = parser.parse_term("2^x")
        assert term.objects[0].base == Number(2)
        assert term.objects[0].exponent.variable == system.variable("x")

    def test_function_call(self, parser):
        expression = parser.parse_expression("f(x)")
        assert str(expression) == "f(x)"
        assert isinstance(expression.terms[0].objects[0].base, FunctionValue)

    def test_multiple_arguments(self, parser):
        call = parser.parse_function_value("log(x,10)")
        assert call.function.name == "log"
        assert [str(a) for a in call.arguments] == ["x", "10"]

    def test_latex_operators(self, parser):
        assert parser.parse("8 \\div 4 \\cdot 2").evaluate() == Number(4)

    def test_unknown_name_is_a_product_of_variables(self, parser):
        assert str(parser.parse_term("ab(2)")) == "2(ab)"


class TestNarrowestValue:
    def test_number(self, parser):
        assert parser.parse("42") == Number(42)
        assert parser.parse("2ⅈ") == Number(0, 2)

    def test_term(self, parser):
        assert isinstance(parser.parse("3x"), Term)

    def test_expression(self, parser):
        assert isinstance(parser.parse("x+1"), Expression)

    def test_empty(self, parser):
        with pytest.raises(ParsingError):
            parser.parse("")
