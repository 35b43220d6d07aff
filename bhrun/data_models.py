#!/usr/bin/env python3
"""
Data models for Blackhole Run.

This module defines the entities shared between the simulation, rendering, and UI.

Units and usage
- position is in game units [px], velocity in [px/s], mass is dimensionless game mass.
- Derived quantities (event horizon radius, planet radius, gravity pull) are properties
  recomputed on every read. The black hole grows at runtime, so nothing here is cached.
- Access to entities is coordinated by GameController using a lock.
"""
from dataclasses import dataclass
from typing import Tuple

from .constants import (
    GRAVITY_CONSTANT,
    LIGHT_SPEED,
    PLANET_RADIUS_K,
    PLANET_RADIUS_EXPONENT,
)


def black_hole_radius(mass: float, gravity_constant: float = GRAVITY_CONSTANT,
                      light_speed: float = LIGHT_SPEED) -> float:
    """Schwarzschild-style horizon radius 2GM/c^2, used purely as a gameplay scale."""
    return (2.0 * gravity_constant * mass) / (light_speed * light_speed)


def planet_radius(mass: float, k: float = PLANET_RADIUS_K,
                  exponent: float = PLANET_RADIUS_EXPONENT) -> float:
    """Empirical mass-radius relation R = K * M^exponent."""
    return k * mass ** exponent


@dataclass
class BlackHole:
    """
    The central attractor. Mass only ever grows (asteroid absorption).

    Fields:
    - position: fixed world position, the origin by default
    - mass: current mass
    - gravity_constant / light_speed: scaled constants the radius is derived from
    """
    mass: float
    position: Tuple[float, float] = (0.0, 0.0)
    gravity_constant: float = GRAVITY_CONSTANT
    light_speed: float = LIGHT_SPEED

    @property
    def radius(self) -> float:
        return black_hole_radius(self.mass, self.gravity_constant, self.light_speed)

    @property
    def gravity_pull(self) -> float:
        return self.gravity_constant * self.mass

    def absorb(self, mass: float) -> None:
        """Add absorbed mass. Negative amounts are ignored so mass never decreases."""
        if mass > 0:
            self.mass += mass


@dataclass
class Planet:
    """The landing target. Mass is fixed for the whole session."""
    mass: float
    position: Tuple[float, float]
    gravity_constant: float = GRAVITY_CONSTANT
    radius_k: float = PLANET_RADIUS_K
    radius_exponent: float = PLANET_RADIUS_EXPONENT

    @property
    def radius(self) -> float:
        return planet_radius(self.mass, self.radius_k, self.radius_exponent)

    @property
    def gravity_pull(self) -> float:
        return self.gravity_constant * self.mass


@dataclass
class Ship:
    """
    The player ship.

    Fields:
    - position / velocity: integrated every frame
    - radius: collision size
    - mass: kept for completeness, gravity here is mass-independent
    - fuel: current fuel, never negative
    - fuel_deposited: fuel banked by landings during this run
    """
    position: Tuple[float, float]
    velocity: Tuple[float, float]
    radius: float
    mass: float
    fuel: float
    fuel_deposited: float = 0.0


@dataclass
class Asteroid:
    position: Tuple[float, float]
    velocity: Tuple[float, float]
    radius: float
    mass: float
    stretching: bool = False
