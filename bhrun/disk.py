#!/usr/bin/env python3
"""
Accretion disk glow: a bounded brightness scalar fed by asteroid absorption.
"""
import math

from .constants import (
    ACCRETION_PARTICLE_COUNT,
    DISK_GLOW_MAX,
    DISK_GLOW_MIN,
    DISK_GLOW_RESET,
    DISK_GLOW_STEP,
)
from .vector_utils import clamp


class DiskGlow:
    """
    Glow value kept within [minimum, maximum].

    Starts at the minimum, jumps to reset_value on a game reset and rises by
    step for every absorbed asteroid.
    """

    def __init__(self, minimum: float = DISK_GLOW_MIN, maximum: float = DISK_GLOW_MAX,
                 reset_value: float = DISK_GLOW_RESET, step: float = DISK_GLOW_STEP,
                 particle_count: int = ACCRETION_PARTICLE_COUNT):
        self.minimum = minimum
        self.maximum = maximum
        self.reset_value = reset_value
        self.step = step
        self.base_particle_count = particle_count
        self.value = minimum

    def absorb(self) -> float:
        self.value = clamp(self.value + self.step, self.minimum, self.maximum)
        return self.value

    def reset(self) -> None:
        self.value = clamp(self.reset_value, self.minimum, self.maximum)

    @property
    def alpha(self) -> float:
        """Draw opacity, capped at fully opaque."""
        return min(self.value, 1.0)

    @property
    def particle_count(self) -> int:
        """Number of disk particles to draw; the reset value draws the base count."""
        if self.reset_value <= 0:
            return 0
        return int(math.floor((self.value / self.reset_value) * self.base_particle_count))
