"""
Plotting boundary: points, windows, sampling, and the point-of-interest
searches a graph view runs when the user taps near a curve.

No drawing happens here. A renderer asks for sampled points and for the
zero, intersection or extreme nearest to a tap.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from .core import VariableValue
from .errors import MathError
from .functions import Function, FunctionValue
from .number import Number
from . import numeric

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_COUNT = 200


@dataclass(frozen=True)
class Point:
    x: Number
    y: Number

    def __str__(self):
        return f"({self.x}, {self.y})"


@dataclass
class Window:
    """Visible region of the plane."""
    min_x: Number = field(default_factory=lambda: Number(-10))
    max_x: Number = field(default_factory=lambda: Number(10))
    min_y: Number = field(default_factory=lambda: Number(-10))
    max_y: Number = field(default_factory=lambda: Number(10))

    @property
    def width(self) -> Number:
        return self.max_x - self.min_x

    @property
    def height(self) -> Number:
        return self.max_y - self.min_y

    def contains(self, point: Point) -> bool:
        if not (point.x.is_real and point.y.is_real):
            return False
        return (self.min_x <= point.x <= self.max_x) and (self.min_y <= point.y <= self.max_y)

    def sample_xs(self, count: int = DEFAULT_SAMPLE_COUNT) -> np.ndarray:
        """Evenly spaced x coordinates across the window, both edges included."""
        return np.linspace(self.min_x.real, self.max_x.real, count)


def evaluate_function(function: Function, x: Number) -> Number:
    return function.evaluate_at([x]).evaluate()


def sample_function(function: Function, window: Window,
                    count: int = DEFAULT_SAMPLE_COUNT) -> List[Point]:
    """Points of ``function`` on a grid across ``window`` that are real and visible."""
    points = []
    for x in window.sample_xs(count):
        try:
            point = Point(Number(float(x)), evaluate_function(function, Number(float(x))))
        except MathError:
            continue
        if window.contains(point):
            points.append(point)
    return points


def _call(function: Function) -> FunctionValue:
    return FunctionValue(function, [VariableValue(function.variables[0])])


def nearest_function(functions: List[Function], point: Point) -> Optional[int]:
    """Index of the function whose curve passes closest to ``point`` vertically."""
    distances: List[Tuple[float, int]] = []
    for i, function in enumerate(functions):
        try:
            distance = (point.y - evaluate_function(function, point.x)).absolute_value()
        except MathError:
            continue
        if distance is not None:
            distances.append((distance.real, i))
    if not distances:
        return None
    values = np.array([d for d, _ in distances])
    return distances[int(np.argmin(values))][1]


def nearest_zero(functions: List[Function], point: Point,
                 max_steps: int = numeric.DEFAULT_MAX_NEWTON_STEPS) -> Optional[Point]:
    index = nearest_function(functions, point)
    if index is None:
        return None
    function = functions[index]
    zero = numeric.find_zero(_call(function), point.x, function.variables[0], max_steps)
    if zero is None:
        return None
    return Point(zero, Number(0))


def nearest_intersect(functions: List[Function], point: Point,
                      max_steps: int = numeric.DEFAULT_MAX_NEWTON_STEPS) -> Optional[Point]:
    """Intersection of the nearest curve with any other, closest to ``point.x``."""
    index = nearest_function(functions, point)
    if index is None:
        return None
    first = _call(functions[index])
    nearest = None
    for i, function in enumerate(functions):
        if i == index:
            continue
        intersect = numeric.find_intersect(first, _call(function), point.x, function.variables[0], max_steps)
        if intersect is None:
            continue
        try:
            closer = nearest is None or (nearest.x - point.x).absolute_value() > (intersect - point.x).absolute_value()
            if closer:
                nearest = Point(intersect, evaluate_function(function, intersect))
        except MathError as e:
            logger.debug(f"skipping intersect at {intersect}: {e}")
    return nearest


def nearest_extreme(functions: List[Function], point: Point, system,
                    max_steps: int = numeric.DEFAULT_MAX_NEWTON_STEPS) -> Optional[Point]:
    index = nearest_function(functions, point)
    if index is None:
        return None
    function = functions[index]
    try:
        extreme = numeric.find_extreme(_call(function), point.x, function.variables[0], system, max_steps)
        if extreme is None:
            return None
        return Point(extreme, evaluate_function(function, extreme))
    except MathError as e:
        logger.debug(f"no extreme near {point}: {e}")
        return None


class Graph:
    """The functions on a plot and the points of interest found so far."""

    def __init__(self, system, window: Optional[Window] = None):
        self.system = system
        self.window = window or Window()
        self.functions: List[Function] = []
        self.zero_points: List[Point] = []
        self.intersect_points: List[Point] = []
        self.extreme_points: List[Point] = []

    def add_function(self, function: Function):
        self.functions.append(function)

    def sample(self, count: int = DEFAULT_SAMPLE_COUNT) -> List[List[Point]]:
        return [sample_function(f, self.window, count) for f in self.functions]

    def find_zero(self, near: Point) -> Optional[Point]:
        found = nearest_zero(self.functions, near)
        if found is not None:
            self.zero_points.append(found)
        return found

    def find_intersect(self, near: Point) -> Optional[Point]:
        found = nearest_intersect(self.functions, near)
        if found is not None:
            self.intersect_points.append(found)
        return found

    def find_extreme(self, near: Point) -> Optional[Point]:
        found = nearest_extreme(self.functions, near, self.system)
        if found is not None:
            self.extreme_points.append(found)
        return found

    def clear_points(self):
        self.zero_points = []
        self.intersect_points = []
        self.extreme_points = []
