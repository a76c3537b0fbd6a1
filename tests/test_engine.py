import logging

import pytest

import exact_math
from exact_math import (
    AngleMode, EngineConfig, Expression, MathEngine, MathSyntaxError, Number, System,
)


@pytest.fixture
def engine():
    return MathEngine(EngineConfig(angle_mode="radian", fraction_mode="like",
                                   number_mode="decimal", log_level="WARNING"))


class TestScenarios:
    def test_parse(self, engine):
        value = engine.parse("3x^2y + 1/(1+x) + 2")
        assert isinstance(value, Expression)
        assert str(value) == "3(x)^(2)y + (1 + x)^(-1) + 2"

    def test_factor_difference_of_squares(self, engine):
        assert str(engine.factor("9(a)^(2) - 16")) == "(3a + 4)(3a - 4)"

    def test_solve_quadratic(self, engine):
        result = engine.solve("(x)^(2)=9")
        assert result['type'] == "equation"
        assert result['variable'] == "x"
        assert sorted(result['solutions']) == ["-3", "3"]

    def test_solve_system(self, engine):
        result = engine.solve(["y=x+1", "y=2x-2"], "x")
        assert result['type'] == "system"
        assert result['solutions'] == ["3"]
        assert engine.system.equations == []

    def test_evaluate(self, engine):
        assert engine.evaluate("2^4 + 5*9/2 - 5^(2^2)") == Number(-586.5)

    def test_differentiate(self, engine):
        assert str(engine.differentiate("sin(x^2)")) == "2x*cos((x)^(2))"


class TestRewriting:
    def test_simplify(self, engine):
        assert str(engine.simplify("3(x+1)^(2.0)")) == "3(x)^(2) + 6x + 3"

    def test_unsimplified_derivative(self, engine):
        x = engine.system.variable("x")
        derivative = engine.differentiate("x^2", "x", simplify=False)
        assert derivative.plug_in(Number(3), x).evaluate() == Number(6)

    def test_integrate(self, engine):
        assert engine.integrate("x^2", 0, 3).real == pytest.approx(9)

    def test_points_of_interest(self, engine):
        assert engine.find_zero("cos(x)", 1.5).real == pytest.approx(1.5707963267948966)
        assert engine.find_intersect("cos(x)", "x", 0.5).real == pytest.approx(0.7390851332151607)
        assert engine.find_extreme("x^2 - 4x", 5).real == pytest.approx(2)


class TestFunctions:
    def test_define_and_call(self, engine):
        engine.define_function("g", "x", "3x + 2")
        assert engine.evaluate("g(4)") == Number(14)

    def test_redefine(self, engine):
        engine.define_function("g", "x", "3x + 2")
        engine.define_function("g", "x", "x")
        assert engine.evaluate("g(4)") == Number(4)

    def test_builtin_names_are_reserved(self, engine):
        with pytest.raises(MathSyntaxError):
            engine.define_function("sin", "x", "x")


class TestConfiguration:
    def test_fraction_display(self):
        engine = MathEngine(EngineConfig(number_mode="fraction"))
        assert engine.display(engine.evaluate("1/5")) == "1/5"

    def test_degree_mode(self):
        engine = MathEngine(EngineConfig(angle_mode="degree"))
        assert engine.evaluate("sin(90)") == Number(1)

    def test_given_system_is_left_alone(self):
        system = System()
        engine = MathEngine(EngineConfig(angle_mode="degree"), system=system)
        assert engine.system is system
        assert engine.evaluate("cos(0)") == Number(1)
        assert engine.system.angle_mode == AngleMode.RADIAN

    def test_log_level(self):
        package_logger = logging.getLogger("exact_math")
        previous = package_logger.level
        try:
            MathEngine(EngineConfig(log_level="DEBUG"))
            assert package_logger.level == logging.DEBUG
        finally:
            package_logger.setLevel(previous)


class TestModuleFunctions:
    def test_default_engine_is_shared(self):
        assert exact_math.get_engine() is exact_math.get_engine()

    def test_shortcuts(self):
        assert exact_math.evaluate("1+3") == Number(4)
        assert str(exact_math.factor("2x+2")) == "2(x + 1)"
