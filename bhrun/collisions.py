#!/usr/bin/env python3
"""
Collision and landing rules for Blackhole Run.

The ship can end a run three ways:
- Infall: crossing the event horizon (game over, immediate reset)
- Crash: touching the planet faster than the landing speed limit (explosion, delayed reset)
- Landing: staying on the planet at or below the limit long enough to bank the fuel

These helpers only evaluate geometry and timers and apply the direct ship
effects (freeze, snap, respawn). Resets and scheduling belong to GameController.
"""
import math
import random
from enum import Enum
from typing import Optional, Tuple

from .data_models import BlackHole, Planet, Ship
from .vector_utils import distance, heading, speed, vec_add, vec_scale


class FlightState(Enum):
    FLYING = "flying"
    EXPLODING = "exploding"
    LANDED = "landed"
    CONSUMED = "consumed"


def in_event_horizon(ship: Ship, black_hole: BlackHole) -> bool:
    return distance(black_hole.position, ship.position) < black_hole.radius + ship.radius


def touching_planet(ship: Ship, planet: Planet) -> bool:
    return distance(planet.position, ship.position) < planet.radius + ship.radius


def is_fatal_impact(ship: Ship, planet: Planet, speed_limit: float) -> bool:
    return touching_planet(ship, planet) and speed(ship.velocity) > speed_limit


def freeze_at_surface(ship: Ship, planet: Planet) -> None:
    """
    Stop the ship and pin it to the planet surface along the planet->ship direction.

    The position is left untouched if the ship sits exactly on the planet center.
    """
    ship.velocity = (0.0, 0.0)
    direction, magnitude = heading(planet.position, ship.position)
    if magnitude == 0:
        return
    ship.position = vec_add(planet.position, vec_scale(direction, planet.radius + ship.radius))


def annulus_point(center: Tuple[float, float], inner_radius: float, span: float,
                  rng: random.Random) -> Tuple[float, float]:
    """Random point on the ring [inner_radius, inner_radius + span) around center."""
    angle = rng.random() * 2 * math.pi
    r = inner_radius + rng.random() * span
    return (center[0] + math.cos(angle) * r, center[1] + math.sin(angle) * r)


def respawn_near_black_hole(ship: Ship, black_hole: BlackHole, min_offset: float, span: float,
                            fuel: float, rng: random.Random) -> None:
    """Relocate the ship to a random point outside the horizon, at rest, with fresh fuel."""
    ship.position = annulus_point(black_hole.position, black_hole.radius + min_offset, span, rng)
    ship.velocity = (0.0, 0.0)
    ship.fuel = fuel


class LandingTimer:
    """
    Tracks how long the ship has rested on the planet, in wall-clock milliseconds.

    Leaving the landing radius clears the timer; there is no partial credit.
    """

    def __init__(self, delay_ms: float):
        self.delay_ms = delay_ms
        self.start_time: Optional[float] = None

    @property
    def running(self) -> bool:
        return self.start_time is not None

    def reset(self) -> None:
        self.start_time = None

    def update(self, touching: bool, slow_enough: bool, now: float) -> bool:
        """Returns True once the ship has stayed down slowly for the full delay."""
        if not touching:
            self.start_time = None
            return False
        if not slow_enough:
            return False
        if self.start_time is None:
            self.start_time = now
        return now - self.start_time >= self.delay_ms


def landing_advisory(ship: Ship, planet: Planet, near_distance: float, speed_limit: float) -> Optional[str]:
    """
    Approach hint for the HUD: None when far away, else "too_fast" or "ready".
    """
    if distance(planet.position, ship.position) >= near_distance:
        return None
    return "too_fast" if speed(ship.velocity) > speed_limit else "ready"
