#!/usr/bin/env python3
"""
Core Physics for Blackhole Run

Responsibilities
- Point-mass gravitational acceleration a = G*M/d^2 toward an attractor.
- Fuel collection near the event horizon and fuel burn while thrusting.
- Advance the ship one frame with a semi-implicit (symplectic) Euler step.

Units and conventions
- Positions are in game units [px], velocities in [px/s], time steps in seconds.
- G is the scaled game constant (see constants.GRAVITY_CONSTANT), not the SI value.

Numerical notes
- One step per frame, no substepping. Velocity is updated first and the position is then
  advanced with the *new* velocity. Swapping the order makes orbits visibly spiral outward.
- No softening: a body at exactly zero distance simply contributes nothing that frame.
  Collision rules end the run long before distances get that small.
- Thrust and gravity are exclusive: while the engine fires, gravity is not applied.
"""

from typing import Tuple

from .config import GameConfig
from .data_models import BlackHole, Planet, Ship
from .vector_utils import distance, heading, vec_add, vec_scale


def gravity_acceleration(position: Tuple[float, float], attractor: Tuple[float, float],
                         gravity_pull: float) -> Tuple[float, float]:
    """
    Acceleration at position due to a point mass at attractor.

    Args:
        position: Point being accelerated.
        attractor: Position of the attracting body.
        gravity_pull: G * M of the attracting body.

    Returns:
        (ax, ay) pointing at the attractor, or (0, 0) when the two points coincide.
    """
    direction, d = heading(position, attractor)
    if d == 0:
        return (0.0, 0.0)
    return vec_scale(direction, gravity_pull / (d * d))


class ShipPhysics:
    """
    Per-frame ship integrator.

    step() runs, in order: fuel collection, thrust or gravity, position update.
    Collision evaluation is left to the caller so it sees the moved ship.
    """

    def __init__(self, config: GameConfig):
        self.config = config

    def collect_fuel(self, ship: Ship, black_hole: BlackHole, dt: float) -> bool:
        """
        Add fuel while the ship is inside the collection band around the horizon.

        Returns True when fuel was collected this frame.
        """
        bh_dist = distance(black_hole.position, ship.position)
        distance_from_field = max(0.0, bh_dist - black_hole.radius)
        if distance_from_field <= self.config.fuel_collection_distance:
            ship.fuel += self.config.fuel_collection_rate * dt
            return True
        return False

    def apply_forces(self, ship: Ship, black_hole: BlackHole, planet: Planet, dt: float,
                     propelling: bool = False, reversing: bool = False) -> str:
        """
        Update ship velocity for one frame.

        Propel pushes straight away from the black hole, reverse pulls straight toward it.
        Without thrust (or with an empty tank) both bodies attract the ship.

        Returns the branch taken: "propel", "reverse" or "gravity".
        """
        cfg = self.config
        if propelling and ship.fuel > 0:
            self._thrust(ship, black_hole, cfg.push_strength, dt, away=True)
            return "propel"
        if reversing and ship.fuel > 0:
            self._thrust(ship, black_hole, cfg.reverse_strength, dt, away=False)
            return "reverse"

        a_bh = gravity_acceleration(ship.position, black_hole.position, black_hole.gravity_pull)
        a_bp = gravity_acceleration(ship.position, planet.position, planet.gravity_pull)
        ship.velocity = vec_add(ship.velocity, vec_scale(vec_add(a_bh, a_bp), dt))
        return "gravity"

    def _thrust(self, ship: Ship, black_hole: BlackHole, strength: float, dt: float, away: bool) -> None:
        if away:
            direction, magnitude = heading(black_hole.position, ship.position)
        else:
            direction, magnitude = heading(ship.position, black_hole.position)
        if magnitude == 0:
            # No direction to push along: no thrust and no fuel burned
            return
        ship.velocity = vec_add(ship.velocity, vec_scale(direction, strength * dt))
        ship.fuel = max(0.0, ship.fuel - self.config.fuel_consumption_rate * dt)

    @staticmethod
    def integrate_position(ship: Ship, dt: float) -> None:
        ship.position = vec_add(ship.position, vec_scale(ship.velocity, dt))

    def step(self, ship: Ship, black_hole: BlackHole, planet: Planet, dt: float,
             propelling: bool = False, reversing: bool = False) -> bool:
        """
        Advance the ship one frame.

        Returns True when fuel was collected this frame (drives the fuel alert).
        """
        collecting = self.collect_fuel(ship, black_hole, dt)
        self.apply_forces(ship, black_hole, planet, dt, propelling, reversing)
        self.integrate_position(ship, dt)
        return collecting
