import pytest

from exact_math import MathParser, Number, System


@pytest.fixture
def system():
    """A fresh system with f(x) = 2 and g(x) = 3x + 2 defined."""
    system = System()
    x = system.variable("x")
    f = system.function("f", [x])
    f.value = Number(2)
    g = system.function("g", [x])
    g.value = MathParser(system).parse_expression("3x+2")
    return system


@pytest.fixture
def parser(system):
    return MathParser(system)


@pytest.fixture
def x(system):
    return system.variable("x")
