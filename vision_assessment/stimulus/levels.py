"""
Stimulus level model: a bounded, ordered scale and the rule used to step along it.
"""
# Standard library imports
import math
from dataclasses import dataclass
from typing import ClassVar, Dict, Type

# Local imports
from ..exceptions import ConfigurationError
from ..utils.defaults import GRID_TOLERANCE, LEVEL_PRECISION


@dataclass(frozen=True)
class FixedStep:
    """Additive step: levels move by ``size`` along the ``min + k*size`` grid."""
    size: float
    kind: ClassVar[str] = 'fixed'

    def validate(self, min_level, max_level):
        if self.size <= 0:
            raise ConfigurationError(f"step size must be positive, got {self.size}")
        if self.size > max_level - min_level:
            raise ConfigurationError(
                f"step size {self.size} exceeds the level range [{min_level}, {max_level}]")

    def up(self, level, min_level):
        """Next grid point strictly above ``level``."""
        k = math.floor(self._grid_position(level, min_level) + GRID_TOLERANCE) + 1
        return self._grid_level(k, min_level)

    def down(self, level, min_level):
        """Next grid point strictly below ``level``."""
        k = math.ceil(self._grid_position(level, min_level) - GRID_TOLERANCE) - 1
        return self._grid_level(k, min_level)

    def on_grid(self, level, min_level):
        position = self._grid_position(level, min_level)
        return abs(position - round(position)) <= GRID_TOLERANCE

    def nearest(self, level, min_level):
        """Grid point closest to ``level``; halfway values go up."""
        k = math.floor(self._grid_position(level, min_level) + 0.5)
        return self._grid_level(k, min_level)

    def _grid_position(self, level, min_level):
        return (level - min_level) / self.size

    def _grid_level(self, k, min_level):
        # Rounded so repeated float steps do not drift off the grid
        return round(min_level + k * self.size, LEVEL_PRECISION)


@dataclass(frozen=True)
class GeometricStep:
    """Multiplicative step: levels are multiplied or divided by ``factor``."""
    factor: float
    kind: ClassVar[str] = 'geometric'

    def validate(self, min_level, max_level):
        if self.factor <= 1:
            raise ConfigurationError(f"geometric step factor must be > 1, got {self.factor}")
        if min_level <= 0:
            raise ConfigurationError("geometric steps need a strictly positive minimum level")

    def up(self, level, min_level):
        return round(level * self.factor, LEVEL_PRECISION)

    def down(self, level, min_level):
        return round(level / self.factor, LEVEL_PRECISION)


STEP_RULES: Dict[str, Type] = {
    FixedStep.kind: FixedStep,
    GeometricStep.kind: GeometricStep,
}


def make_step_rule(kind, size):
    """Build a step rule from its tag and its size (step or factor)."""
    try:
        rule_cls = STEP_RULES[kind]
    except KeyError:
        raise ConfigurationError(
            f"Unknown step kind {kind!r}; expected one of {sorted(STEP_RULES)}") from None
    return rule_cls(size)


class StimulusLevelModel:
    """Bounded stimulus scale. Every level it returns lies within [min_level, max_level]."""

    def __init__(self, min_level, max_level, step_rule):
        if min_level >= max_level:
            raise ConfigurationError(
                f"min_level ({min_level}) must be below max_level ({max_level})")
        step_rule.validate(min_level, max_level)
        self.min_level = min_level
        self.max_level = max_level
        self.step_rule = step_rule

    def __repr__(self):
        return (f"{type(self).__name__}(min_level={self.min_level}, "
                f"max_level={self.max_level}, step_rule={self.step_rule!r})")

    def clamp_level(self, requested):
        """Restrict a requested level to the configured bounds."""
        return max(self.min_level, min(requested, self.max_level))

    def step_up(self, level):
        """Next easier level, clamped to the maximum."""
        return self.clamp_level(self.step_rule.up(level, self.min_level))

    def step_down(self, level):
        """Next harder level, clamped to the minimum."""
        return self.clamp_level(self.step_rule.down(level, self.min_level))

    def step(self, level, direction):
        return self.step_up(level) if direction > 0 else self.step_down(level)

    def contains(self, level):
        return self.min_level <= level <= self.max_level

    def is_boundary(self, level):
        return level == self.min_level or level == self.max_level
