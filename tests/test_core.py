import pytest

from exact_math import (
    Expression, NonAlgebraicError, Number, Object, System, Term, Variable,
    VariableValue, ZeroToTheZeroError,
)
from exact_math.modes import FractionMode


@pytest.fixture
def xv():
    return VariableValue(Variable(0, "x"))


@pytest.fixture
def yv():
    return VariableValue(Variable(1, "y"))


class TestPrinting:
    def test_simple_tree(self, xv):
        obj = Object(xv)
        term1 = Term([obj])
        term2 = Term([Object(Number(1))])
        expression = Expression([term1, term2])
        assert str(xv) == "x"
        assert str(obj) == "x"
        assert str(term1) == "x"
        assert str(term2) == "1"
        assert str(expression) == "x + 1"


class TestEquality:
    def test_terms_and_expressions_are_unordered(self, xv):
        object1 = Object(xv)
        object2 = Object(Number(2))
        term1 = Term([object1])
        term2 = Term([object2])
        term3 = Term([object1, object2])
        term4 = Term([object2, object1])
        assert object1 == object1
        assert object1 != object2
        assert term1 != term2
        assert term1 != term3
        assert term3 == term4
        assert Expression([term1, term2]) == Expression([term2, term1])
        assert Expression([term1, term2]) != Expression([term1, term1])

    def test_parsed_expressions(self, parser):
        assert parser.parse_expression("x+1") == parser.parse_expression("1+x")

    def test_variables_compare_by_identifier(self):
        assert Variable(3, "a") == Variable(3, "b")
        assert hash(Variable(3, "a")) == hash(Variable(3, "b"))
        assert Variable(3, "a") != Variable(4, "a")


class TestTermFactoring:
    def test_nested_exponents_are_evaluated(self, xv, yv):
        term = Term([Object(yv, Number(1.0)), Object(xv, Object(Number(2), Number(3)))])
        assert str(term.factor()) == "y(x)^(8)"

    def test_plug_in(self, xv, yv):
        term = Term([Object(yv, Number(1.0)), Object(xv, Object(Number(2), Number(3)))])
        assert str(term.factor().plug_in(xv, yv.variable)) == "x(x)^(8)"

    def test_cancelling(self, parser, system):
        term = parser.parse_term(".5(x+1)/(x+1)^2")
        assert str(term.factor(system)) == "0.5(x + 1)^(-1)"

    def test_combining(self, parser, system):
        assert str(parser.parse_term("(x +1)(x+2)").factor(system)) == "(x + 1)(x + 2)"
        assert str(parser.parse_term("(x+1)^(5)*((x)^(2) + 2x + 1)^(2)").factor(system)) == "(x + 1)^(9)"
        assert str(parser.parse_term("xyz").factor(system)) == "xyz"

    def test_zero_to_the_zero(self):
        with pytest.raises(ZeroToTheZeroError):
            Object(Number(0), Number(0)).evaluate()


class TestCombineObjects:
    def test_like_bases(self, parser):
        assert str(parser.parse_term("3xy").combine_objects()) == "3(xy)"
        assert str(parser.parse_term("3(x+1)(x+1)").combine_objects()) == "3(x + 1)^(2)"
        assert str(parser.parse_term("(x+1)(x+2)").combine_objects()) == "(x + 1)(x + 2)"

    def test_proportional_bases(self, parser):
        assert str(parser.parse_term("(5x+5)(x+1)^(-1.0)").combine_objects()) == "4.999999999999999"
        assert str(parser.parse_term("(x+1)^(4)*(4x+4)^(3)").combine_objects()) == "64(x + 1)^(7)"

    def test_numeric_factor_comes_first(self, parser):
        term = parser.parse_term("x*3*2").combine_objects()
        assert term.objects[0].base == Number(6)


class TestTermArithmetic:
    def test_adding_like_terms(self, parser, system):
        def add(a, b):
            return parser.parse_term(a).factor(system).add(parser.parse_term(b).factor(system), system)

        assert str(add("3x", "2x")) == "5x"
        assert str(add("3xy(x+1)", "7.5xy(x+1)")) == "10.5xy(x + 1)"
        assert add("3x", "3y") is None
        assert add("3xy(x+1)", "7.5xy(x-1)") is None
        assert str(add("3xy(x+1)(x+1)", "-7.5xy(x+1)^2")) == "(-4.5)xy(x + 1)^(2)"

    def test_gcf(self, parser):
        def gcf(a, b):
            return str(parser.parse_term(a).gcf(parser.parse_term(b)))

        assert gcf("12", "15x") == "3"
        assert gcf("1.5x", "x") == "x"
        assert gcf("(x+1)(y+1)", "(x+1)") == "(x + 1)"
        assert gcf("(2x+2)", "(4x+4)") == "(2x + 2)"
        assert gcf("5(x)^(5)", "(x)^(3)") == "(x)^(3)"
        assert gcf("(16x+4)^(.5)", "(8x+2)^(2)") == "(8x + 2)^(0.5)"

    def test_divide_by_symbolic_exponent(self, parser):
        with pytest.raises(NonAlgebraicError):
            parser.parse_term("x").divide(parser.parse_term("(y)^(z)"))

    def test_numerator_and_denominator(self, parser):
        term = parser.parse_term("3x/y")
        assert str(term.get_numerator()) == "3x"
        assert str(term.get_denominator()) == "(y)^(-1)"
        assert parser.parse_term("3x").get_denominator() is None

    def test_extract(self, parser, system):
        term = parser.parse_term("3(x)^(2)y").factor(system)
        exponent, rest = term.extract(system.variable("x"))
        assert exponent == Number(2)
        assert str(rest) == "3y"


class TestSimplify:
    def test_like_fractions(self, parser, system):
        expression = parser.parse_expression("(x + y) / z + x + y").simplify(system)
        assert str(expression) == "x + y + (z)^(-1)(x + y)"

    def test_ordering(self, parser, system):
        assert str(parser.parse_expression("2y^2+(x+1)").simplify(system)) == "x + 2(y)^(2) + 1"

    def test_expanding_powers(self, parser, system):
        assert str(parser.parse_expression("3(x+1)^(2.0)").simplify(system)) == "3(x)^(2) + 6x + 3"
        expression = parser.parse_expression("(6(y)^(2) + 3/y)^(3) + 7(y)^(3) + 2").simplify(system)
        assert str(expression) == "216(y)^(6) + 331(y)^(3) + 27(y)^(-3) + 164"

    def test_sums_sharing_an_exponent_multiply(self, parser, system):
        expression = parser.parse_expression("3(x+1)^(.5)(x+2)^(.5)").simplify(system)
        assert str(expression) == "3((x)^(2) + 3x + 2)^(0.5)"

    def test_quotient_of_sums(self, parser, system):
        expression = parser.parse_expression("3(x(x-1)+1) / (x+7) / (x + 8)").simplify(system)
        assert str(expression) == "(3(x)^(2) - 3x + 3)((x)^(2) + 15x + 56)^(-1)"

    def test_combine_all_terms(self):
        system = System()
        system.fraction_mode = FractionMode.COMBINE_ALL_TERMS
        from exact_math import MathParser
        expression = MathParser(system).parse_expression("3(x+2)(x+1)^(-1)").simplify(system)
        assert str(expression) == "(3x + 6)(x + 1)^(-1)"

    def test_combine_all_fractions(self):
        system = System()
        system.fraction_mode = FractionMode.COMBINE_ALL_FRACTIONS
        from exact_math import MathParser
        expression = MathParser(system).parse_expression("x/y + y/x + xy").simplify(system)
        assert str(expression) == "xy + (x)^(-1)(y)^(-1)((x)^(2) + (y)^(2))"

    def test_constant_function_call(self, parser, system):
        assert str(parser.parse_expression("sin(π/2)").simplify(system)) == "1"

    def test_everything_cancels(self, parser, system):
        assert str(parser.parse_expression("2x+2").add(parser.parse_expression("-2x-2"))) == "0"


class TestExpressionArithmetic:
    def test_compare(self, parser):
        def simplified(text):
            return parser.parse_expression(text).simplify()

        assert simplified("1x+1").compare(simplified("1x+1")) == Number(1)
        assert simplified("1x+1").compare(simplified("2x+2")) == Number(0.5)
        assert simplified("x+3y").compare(simplified("12y+4x")) == Number(0.25)
        assert simplified("2x+2").compare(simplified("x+3y")) is None
        assert simplified("x+2y").compare(simplified("x+y")) is None

    def test_divide(self, parser):
        def divide(a, b):
            return parser.parse_expression(a).simplify().divide(parser.parse_expression(b).simplify())

        assert str(divide("2x+2", "2x+2")) == "1"
        assert str(divide("3(x)^(3)+(x)^(2)+6x+2", "3x+1")) == "(x)^(2) + 2"
        assert str(divide("xy+x+y+1", "x+1")) == "y + 1"
        assert divide("z/y + zz/x + x + zy", "x/y + z") is None

    def test_add(self, parser):
        def add(a, b):
            return str(parser.parse_expression(a).add(parser.parse_expression(b)))

        assert add("x+1", "x-1") == "2x"
        assert add("y+x+1", "z+x-y") == "2x + z + 1"

    def test_negate(self, parser):
        assert str(parser.parse_expression("x-1").get_negated().simplify()) == "-x + 1"


class TestPatterns:
    @pytest.mark.parametrize("text, squares, cubes, quadratic", [
        ("x - 1", False, False, False),
        ("-(x)^(2) + 1", True, False, False),
        ("(x)^(2) - 1", True, False, False),
        ("(x)^(3) - 1", False, True, False),
        ("(x)^(3) + x", False, False, False),
        ("(x)^(2) + x + 1", False, False, True),
        ("(y)^(2) + y + 1", False, False, True),
        ("(x)^(2) - xy - 2", False, False, False),
        ("(x)^(4)(y)^(2) + (x)^(2)y + 1", False, False, True),
        ("(x)^(2) + x + y", False, False, False),
    ])
    def test_pattern_checks(self, parser, text, squares, cubes, quadratic):
        expression = parser.parse_expression(text).simplify()
        assert expression.is_difference_of_squares == squares
        assert expression.is_sum_or_difference_of_cubes == cubes
        assert expression.is_quadratic_pattern == quadratic


class TestFactoring:
    def test_common_factor(self, parser, system):
        assert str(parser.parse_expression("2x+2").factor(system)) == "2(x + 1)"

    def test_denominators(self, parser, system):
        term = parser.parse_expression("12(x)^(-1) + 15(y)^(-2)").factor(system)
        assert str(term) == "3(x)^(-1)(y)^(-2)(5x + 4(y)^(2))"

    def test_difference_of_squares(self, parser, system):
        assert str(parser.parse_expression("9(a)^(2) - 16").factor(system)) == "(3a + 4)(3a - 4)"

    def test_sum_of_cubes(self, parser, system):
        term = parser.parse_expression("-27(a)^(3) + 8(b)^(3)").factor(system)
        assert str(term) == "(9(a)^(2) + 6ba + 4(b)^(2))(-3a + 2b)"

    def test_perfect_square(self, parser, system):
        assert str(parser.parse_expression("(x)^(2) + 2x + 1").factor(system)) == "(x + 1)^(2)"

    def test_quadratic_pattern(self, parser, system):
        term = parser.parse_expression("18(x)^(4)(y)^(2) + 9(x)^(2)y - 14").factor(system)
        assert str(term) == "(6(x)^(2)y + 7)(3(x)^(2)y - 2)"

    def test_grouping(self, parser, system):
        assert str(parser.parse_expression("3(x)^(3) + 3(x)^(2) + x + 1").factor(system)) == "(3(x)^(2) + 1)(x + 1)"

    def test_defined_function_is_plugged_in(self, parser, system):
        assert str(parser.parse_expression("f(x)").factor(system)) == "2"

    def test_undefined_call_is_kept(self, parser, system):
        test_func = system.function("testFunc", [system.variable("x")])
        test_func.value = parser.parse_expression("deriv(x+1,x,x)")
        term = parser.parse_expression("∫(testFunc(x),x,0,x)").factor(system)
        assert str(term) == "∫(testFunc(x),x,0,x)"
