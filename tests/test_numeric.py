import logging
import math

import pytest

from exact_math import AngleMode, DomainError, Number, numeric


class TestLogarithms:
    def test_log(self):
        assert numeric.log(Number(2), Number(8)) == Number(3)
        assert numeric.log(Number(10), Number(1000)).real == pytest.approx(3)

    @pytest.mark.parametrize("base, of", [(2, 0), (2, -4), (-2, 4)])
    def test_log_domain(self, base, of):
        with pytest.raises(DomainError):
            numeric.log(Number(base), Number(of))

    def test_complex_argument(self):
        with pytest.raises(DomainError):
            numeric.log(Number(2), Number(1, 1))


class TestTrigonometry:
    def test_radians(self):
        assert numeric.sine(Number(0)) == Number(0)
        assert numeric.cosine(Number(0)) == Number(1)
        assert numeric.tangent(Number(math.pi / 4)).real == pytest.approx(1)

    def test_degrees(self):
        assert numeric.sine(Number(90), AngleMode.DEGREE) == Number(1)
        assert numeric.arc_tangent(Number(1), AngleMode.DEGREE).real == pytest.approx(45)

    def test_reciprocals(self):
        assert numeric.secant(Number(0)) == Number(1)
        assert numeric.cosecant(Number(math.pi / 2)) == Number(1)
        assert numeric.arc_secant(Number(1)) == Number(0)

    def test_inverse_domain(self):
        with pytest.raises(DomainError):
            numeric.arc_sine(Number(2))
        with pytest.raises(DomainError):
            numeric.arc_cosine(Number(0, 1))

    def test_complex_angle(self):
        with pytest.raises(DomainError):
            numeric.sine(Number(1, 1))


class TestCalculus:
    def test_numerical_derivative(self, parser, x):
        function = parser.parse_expression("x^3")
        assert numeric.numerical_derivative(function, x, Number(2)).real == pytest.approx(12, rel=1e-6)

    def test_integral(self, parser, x):
        function = parser.parse_expression("x^2")
        assert numeric.integral(Number(0), Number(3), function, x).real == pytest.approx(9)
        sine = parser.parse_expression("sin(x)")
        assert numeric.integral(Number(0), Number(math.pi), sine, x).real == pytest.approx(2)


class TestPointsOfInterest:
    def test_find_zero(self, parser, x):
        assert numeric.find_zero(parser.parse_expression("2x-1"), Number(2), x).real == pytest.approx(0.5)
        cosine = numeric.find_zero(parser.parse_expression("cos(x)"), Number(1.5), x)
        assert cosine.real == pytest.approx(math.pi / 2)
        square = numeric.find_zero(parser.parse_expression("x^2"), Number(9.32489), x)
        assert square.real == pytest.approx(0, abs=1e-5)

    def test_constant_has_no_zero(self, parser, x):
        assert numeric.find_zero(parser.parse_expression("3"), Number(1), x) is None

    def test_step_limit(self, parser, x):
        assert numeric.find_zero(parser.parse_expression("x^2"), Number(9.32489), x, max_steps=2) is None

    def test_step_limit_is_logged(self, parser, x, caplog):
        with caplog.at_level(logging.WARNING, logger="exact_math.numeric"):
            numeric.find_zero(parser.parse_expression("x^2"), Number(9.32489), x, max_steps=2)
        assert any(r.levelno == logging.WARNING for r in caplog.records)

    def test_find_intersect(self, parser, x):
        meet = numeric.find_intersect(parser.parse_expression("3x^2"), parser.parse_expression("6x"), Number(3.0), x)
        assert meet.real == pytest.approx(2)
        fixed = numeric.find_intersect(parser.parse_expression("cos(x)"), parser.parse_expression("x"),
                                       Number(0.5), x)
        assert fixed.real == pytest.approx(0.7390851332151607)

    def test_find_extreme(self, parser, system, x):
        extreme = numeric.find_extreme(parser.parse_expression("x^2 - 4x"), Number(5), x, system)
        assert extreme.real == pytest.approx(2)

    def test_no_sign_change_is_not_an_extreme(self, parser, system, x):
        assert numeric.find_extreme(parser.parse_expression("x^3"), Number(1), x, system) is None
