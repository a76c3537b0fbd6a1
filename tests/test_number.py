import math

import pytest

from exact_math import (
    DivideByZeroError, DomainError, NonComparableError, NumberMode, ParsingError,
    RaisedToComplexNumberError,
)
from exact_math.number import Number, int_gcf


class TestFormatting:
    def test_integers_drop_the_decimal_point(self):
        assert str(Number(4.0) + Number(2.0)) == "6"
        assert str(Number(-7.0) - Number(21.0)) == "-28"

    def test_complex_numbers(self):
        assert str(Number(2, 3) + Number(2, 3)) == "4+6ⅈ"
        assert str(Number(7, 4) - Number(2, 1)) == "5+3ⅈ"
        assert str(Number(2, 3) * Number(2, 3)) == "-5+12ⅈ"
        assert str(Number(0, -1)) == "-1ⅈ"

    def test_zero(self):
        assert str(Number(2, 3) - Number(2, 3)) == "0"

    def test_shortest_round_trip(self):
        assert str(Number(1.0) / Number(8.0)) == "0.125"
        assert str(Number(-7.0) / Number(21.0)) == "-0.3333333333333333"
        assert str(Number(7, 4) / Number(2, 1)) == "3.6+0.2ⅈ"

    def test_exponent_notation(self):
        assert str(Number(2.2232270038814686e-06)) == "2.2232270038814686*10^(-6)"
        assert str(Number(1e20)) == "10^20"

    def test_fraction_display(self):
        mode = NumberMode.fraction()
        assert Number(0.2).display(mode) == "1/5"
        assert Number(-0.2).display(mode) == "-1/5"
        assert Number(3).display(mode) == "3"
        assert Number(0.2).display(NumberMode.decimal()) == "0.2"
        assert Number(math.pi).display(mode) == str(Number(math.pi))


class TestArithmetic:
    def test_products_and_quotients(self):
        assert Number(-7) * Number(21) == Number(-147)
        assert Number(2, 3) / Number(2, 3) == Number(1)

    def test_division_by_zero(self):
        with pytest.raises(DivideByZeroError):
            Number(1) / Number(0)

    def test_even_root_of_negative_is_imaginary(self):
        assert str(Number(-4.0) ** Number(0.5)) == "2ⅈ"

    def test_integer_powers(self):
        assert str(Number(1.0) ** Number(8.0)) == "1"
        assert str(Number(-7.0) ** Number(2.0)) == "49"
        assert str(Number(7, 4) ** Number(2, 0)) == "33+56ⅈ"

    def test_complex_exponent(self):
        with pytest.raises(RaisedToComplexNumberError):
            Number(2, 3) ** Number(2, 3)

    def test_negative_exponent(self):
        assert Number(8) ** Number(-1) == Number(0.125)

    def test_zero_to_a_negative_power(self):
        with pytest.raises(DivideByZeroError):
            Number(0) ** Number(-1)
        assert Number(0) ** Number(2) == Number(0)

    def test_mod(self):
        assert Number(7) % Number(3) == Number(1)
        with pytest.raises(DomainError):
            Number(1, 1) % Number(2)
        with pytest.raises(DivideByZeroError):
            Number(1) % Number(0)

    def test_absolute_value_and_floor(self):
        assert Number(-3.5).absolute_value() == Number(3.5)
        assert Number(1, 1).absolute_value() is None
        assert Number(-2.5).floor() == Number(-3)

    def test_gcf_and_lcm(self):
        assert Number(12).gcf(Number(15)) == Number(3)
        assert Number(1.5).gcf(Number(3)) == Number(1)
        assert Number(4).lcm(Number(6)) == Number(12)
        assert int_gcf(0, 5) == 0


class TestRational:
    def test_approximate_rational(self):
        assert Number(0.2).approximate_rational == (1, 5)
        assert Number(-0.2).approximate_rational == (1, -5)
        assert Number(0.0).approximate_rational == (0, 1)
        assert Number(3.5).approximate_rational == (7, 2)
        assert Number(-6.7).approximate_rational == (67, -10)

    def test_irrational_gives_up(self):
        assert Number(math.pi).approximate_rational is None
        assert Number(1, 1).approximate_rational is None

    def test_as_integer(self):
        assert Number(4.0).as_integer == 4
        assert Number(4.5).as_integer is None
        assert Number(math.inf).as_integer is None


class TestComparison:
    def test_ordering(self):
        assert Number(1) < Number(2)
        assert Number(2) >= 2

    def test_complex_numbers_cannot_be_ordered(self):
        with pytest.raises(NonComparableError):
            Number(1, 1) < Number(2)

    def test_equality_with_python_numbers(self):
        assert Number(3) == 3
        assert Number(0, 1) == 1j
        assert Number(3) != Number(3, 1)


class TestParsing:
    def test_decimal(self):
        assert Number.from_string(".5") == Number(0.5)
        assert Number.from_string("-12") == Number(-12)

    def test_imaginary_literal(self):
        assert Number.from_string("2ⅈ") == Number(0, 2)
        assert Number.from_string("ⅈ") == Number(0, 1)

    def test_malformed(self):
        with pytest.raises(ParsingError):
            Number.from_string("1.2.3")
        with pytest.raises(ParsingError):
            Number.from_string("")
