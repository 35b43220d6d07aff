#!/usr/bin/env python3
"""
Asteroid field for Blackhole Run.

Asteroids are pulled by the black hole only (no asteroid-asteroid or
asteroid-ship interaction). An asteroid that reaches the event horizon is
absorbed: its mass is handed to the black hole and it is removed from the
field, which makes the hole, and therefore its horizon, grow.
"""
import logging
import random
from typing import Iterator, List, Optional, Tuple

from .data_models import Asteroid, BlackHole
from .vector_utils import heading, vec_add, vec_scale

logger = logging.getLogger(__name__)


class AsteroidField:
    """Ordered collection of live asteroids."""

    def __init__(self, asteroids: Optional[List[Asteroid]] = None):
        self.asteroids: List[Asteroid] = list(asteroids or [])

    def __len__(self) -> int:
        return len(self.asteroids)

    def __iter__(self) -> Iterator[Asteroid]:
        return iter(self.asteroids)

    def __getitem__(self, index: int) -> Asteroid:
        return self.asteroids[index]

    def spawn(self, count: int, center: Tuple[float, float], spread: Tuple[float, float],
              radius: float, mass_range: Tuple[float, float],
              rng: Optional[random.Random] = None) -> None:
        """
        Replace the field with count asteroids at rest.

        Offsets are uniform in [-spread_x, spread_x) x [-spread_y, spread_y) around center,
        masses uniform in [min, max).
        """
        rng = rng or random.Random()
        sx, sy = spread
        lo, hi = mass_range
        self.asteroids = []
        for _ in range(count):
            offset_x = rng.random() * sx * 2 - sx
            offset_y = rng.random() * sy * 2 - sy
            self.asteroids.append(Asteroid(
                position=(center[0] + offset_x, center[1] + offset_y),
                velocity=(0.0, 0.0),
                radius=radius,
                mass=rng.random() * (hi - lo) + lo,
            ))

    def is_stretching(self, index: int) -> bool:
        """Whether the asteroid at index was inside the stretch zone on the last update."""
        if 0 <= index < len(self.asteroids):
            return self.asteroids[index].stretching
        return False

    def update(self, black_hole: BlackHole, dt: float, stretch_distance: float) -> List[Asteroid]:
        """
        Advance every asteroid one frame and absorb those at the horizon.

        Iterates back to front so removals never shift an index still to be visited;
        each asteroid is processed exactly once. Distances are measured before the move.
        Mass is transferred immediately, so later asteroids in the same frame already
        see the heavier black hole.

        Returns the absorbed asteroids in the order they were absorbed.
        """
        absorbed: List[Asteroid] = []
        for i in range(len(self.asteroids) - 1, -1, -1):
            asteroid = self.asteroids[i]
            direction, dist = heading(asteroid.position, black_hole.position)

            if dist > 0:
                pull = black_hole.gravity_pull / (dist * dist)
                asteroid.velocity = vec_add(asteroid.velocity, vec_scale(direction, pull * dt))
            asteroid.position = vec_add(asteroid.position, vec_scale(asteroid.velocity, dt))

            horizon = black_hole.radius
            asteroid.stretching = dist < horizon + stretch_distance

            if dist < horizon + asteroid.radius:
                black_hole.absorb(asteroid.mass)
                del self.asteroids[i]
                absorbed.append(asteroid)
                logger.debug("Asteroid absorbed (mass %.2f); black hole mass now %.1f",
                             asteroid.mass, black_hole.mass)
        return absorbed
