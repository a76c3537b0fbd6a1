"""Configuration for the algebra engine."""

import logging
import os
from dataclasses import dataclass, field

from .modes import AngleMode, FractionMode, NumberMode

logger = logging.getLogger(__name__)

ANGLE_MODES = {
    "radian": AngleMode.RADIAN,
    "degree": AngleMode.DEGREE,
}

FRACTION_MODES = {
    "never": FractionMode.NEVER_COMBINE,
    "like": FractionMode.COMBINE_LIKE_FRACTIONS,
    "fractions": FractionMode.COMBINE_ALL_FRACTIONS,
    "terms": FractionMode.COMBINE_ALL_TERMS,
}

NUMBER_MODES = ("decimal", "fraction")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

TRUE_VALUES = ("1", "true", "yes", "on")


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"{name}={raw!r} is not an integer, using {default}")
        return default


@dataclass
class EngineConfig:
    """Evaluation settings (environment variables override defaults)."""

    angle_mode: str = field(default_factory=lambda: os.getenv("EXACT_MATH_ANGLE_MODE", "radian"))
    fraction_mode: str = field(default_factory=lambda: os.getenv("EXACT_MATH_FRACTION_MODE", "like"))
    number_mode: str = field(default_factory=lambda: os.getenv("EXACT_MATH_NUMBER_MODE", "decimal"))
    fraction_accuracy: int = field(default_factory=lambda: _int_from_env("EXACT_MATH_FRACTION_ACCURACY", 10000))
    evaluate_constants: bool = field(
        default_factory=lambda: os.getenv("EXACT_MATH_EVALUATE_CONSTANTS", "true").lower() in TRUE_VALUES)

    # Newton's method
    max_newton_steps: int = field(default_factory=lambda: _int_from_env("EXACT_MATH_MAX_NEWTON_STEPS", 100))

    log_level: str = field(default_factory=lambda: os.getenv("EXACT_MATH_LOG_LEVEL", "WARNING"))

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Create config from environment variables."""
        return cls(
            angle_mode=os.getenv("EXACT_MATH_ANGLE_MODE", "radian"),
            fraction_mode=os.getenv("EXACT_MATH_FRACTION_MODE", "like"),
            number_mode=os.getenv("EXACT_MATH_NUMBER_MODE", "decimal"),
            fraction_accuracy=_int_from_env("EXACT_MATH_FRACTION_ACCURACY", 10000),
            evaluate_constants=os.getenv("EXACT_MATH_EVALUATE_CONSTANTS", "true").lower() in TRUE_VALUES,
            max_newton_steps=_int_from_env("EXACT_MATH_MAX_NEWTON_STEPS", 100),
            log_level=os.getenv("EXACT_MATH_LOG_LEVEL", "WARNING"),
        )

    def validate(self) -> list:
        """Validate configuration, return list of warnings."""
        warnings = []

        if self.angle_mode.lower() not in ANGLE_MODES:
            warnings.append(f"unknown angle mode {self.angle_mode!r} - using radian")
        if self.fraction_mode.lower() not in FRACTION_MODES:
            warnings.append(f"unknown fraction mode {self.fraction_mode!r} - using like")
        if self.number_mode.lower() not in NUMBER_MODES:
            warnings.append(f"unknown number mode {self.number_mode!r} - using decimal")
        if self.fraction_accuracy < 1:
            warnings.append(f"fraction accuracy {self.fraction_accuracy} must be positive - using 10000")
        if self.max_newton_steps < 1:
            warnings.append(f"max Newton steps {self.max_newton_steps} must be positive - using 100")
        if self.log_level.upper() not in LOG_LEVELS:
            warnings.append(f"unknown log level {self.log_level!r} - using WARNING")

        return warnings

    # ========================================================================
    # RESOLVED SETTINGS
    # ========================================================================

    @property
    def resolved_angle_mode(self) -> AngleMode:
        return ANGLE_MODES.get(self.angle_mode.lower(), AngleMode.RADIAN)

    @property
    def resolved_fraction_mode(self) -> FractionMode:
        return FRACTION_MODES.get(self.fraction_mode.lower(), FractionMode.COMBINE_LIKE_FRACTIONS)

    @property
    def resolved_number_mode(self) -> NumberMode:
        if self.number_mode.lower() == "fraction":
            accuracy = self.fraction_accuracy if self.fraction_accuracy >= 1 else 10000
            return NumberMode.fraction(accuracy)
        return NumberMode.decimal()

    @property
    def resolved_newton_steps(self) -> int:
        return self.max_newton_steps if self.max_newton_steps >= 1 else 100

    @property
    def resolved_log_level(self) -> int:
        name = self.log_level.upper()
        return getattr(logging, name) if name in LOG_LEVELS else logging.WARNING

    def apply(self, system):
        """Push the modes into ``system``."""
        system.angle_mode = self.resolved_angle_mode
        system.fraction_mode = self.resolved_fraction_mode
        system.number_mode = self.resolved_number_mode
        system.evaluate_constants = self.evaluate_constants
        return system
