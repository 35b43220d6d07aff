#!/usr/bin/env python3
"""
Game state and frame controller for Blackhole Run.

What this module does
- GameState groups every mutable entity and flag of a session in one object.
- GameController owns the state, advances it once per frame (tick) and applies
  the run-ending rules: infall, crash, landing, respawn and reset.

Frame order (tick)
1) delayed actions that came due (the crash reset), even while paused
2) fuel collection, thrust or gravity, position update
3) collision and landing rules on the moved ship
4) asteroid gravity and absorption, disk glow

Threading model
- The renderer thread calls tick(); the Dear PyGui thread toggles inputs and requests
  resets. Every public method takes the controller's re-entrant lock, so a tick always
  runs to completion before any input change or reset is applied.

Time
- delta_time is in seconds. Landing and crash timers use the wall-clock in milliseconds
  from the injected clock, not accumulated delta_time.
"""
import logging
import random
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from .asteroids import AsteroidField
from .collisions import (
    FlightState,
    LandingTimer,
    freeze_at_surface,
    in_event_horizon,
    landing_advisory,
    respawn_near_black_hole,
    touching_planet,
)
from .config import GameConfig
from .data_models import BlackHole, Planet, Ship
from .disk import DiskGlow
from .physics import ShipPhysics
from .scheduler import DelayedActionQueue
from .vector_utils import distance, speed

logger = logging.getLogger(__name__)

MSG_CONSUMED = "You fell into the black hole and were spaghettified. Game over!"
MSG_CRASHED = "You hit the planet's atmosphere too fast, crashed and lost all your fuel. Game over!"
MSG_LANDED = "You landed safely on the planet. Total fuel collected: {:.1f}"
MSG_RESPAWNED = "Pulled out of the event horizon. Ship redeployed near the black hole."


class GameEvent(Enum):
    EXPLODE = "explode"  # crash started, reset pending
    CRASH = "crash"  # crash reset fired
    LAND = "land"
    CONSUMED = "consumed"
    RESPAWN = "respawn"
    RESET = "reset"


def monotonic_ms() -> float:
    return time.perf_counter() * 1000.0


@dataclass
class GameState:
    """All mutable simulation state of one session."""
    black_hole: BlackHole
    planet: Planet
    ship: Ship
    asteroids: AsteroidField
    disk: DiskGlow
    landing: LandingTimer
    high_score: float = 0.0
    flight_state: FlightState = FlightState.FLYING
    # State the previous run ended in (CONSUMED, EXPLODING, LANDED, or FLYING for a manual reset)
    last_outcome: Optional[FlightState] = None

    # Inputs latched by the UI
    is_propelling: bool = False
    is_reversing: bool = False
    paused: bool = False

    is_ship_exploding: bool = False
    is_ship_stretching: bool = False
    collecting_fuel: bool = False

    # Post-reset respawn suppression window
    just_reset: bool = False
    reset_time: float = 0.0

    # Bumped by every reset; delayed actions from older epochs are dropped
    epoch: int = 0

    @property
    def deposit_start_time(self) -> Optional[float]:
        return self.landing.start_time


@dataclass(frozen=True)
class HudSnapshot:
    """Read-only per-frame values for the HUD and alert banners."""
    black_hole_distance: float
    planet_distance: float
    fuel: float
    fuel_deposited: float
    speed: float
    black_hole_mass: float
    black_hole_radius: float
    high_score: float
    disk_glow: float
    disk_particle_count: int
    asteroid_count: int
    exploding: bool
    landing: bool
    out_of_fuel: bool
    collecting_fuel: bool
    near_planet: bool
    too_fast: bool
    paused: bool
    flight_state: FlightState = FlightState.FLYING


class GameController:
    """
    Owns the GameState and applies one frame of simulation per tick().

    Args:
        config: tuning values; defaults to the classic game
        clock: wall-clock source in milliseconds (monotonic)
        rng: random source for asteroid placement and respawn
    """

    def __init__(self, config: Optional[GameConfig] = None,
                 clock: Callable[[], float] = monotonic_ms,
                 rng: Optional[random.Random] = None):
        self.lock = threading.RLock()
        self.config = (config or GameConfig()).validate()
        self.clock = clock
        self.rng = rng or random.Random()
        self.physics = ShipPhysics(self.config)
        self.scheduler = DelayedActionQueue()
        self.last_message: Optional[str] = None
        self._events: List[GameEvent] = []
        self.state = self._new_state()

    # -----------------------
    # Setup
    # -----------------------

    def _new_state(self) -> GameState:
        cfg = self.config
        black_hole = BlackHole(
            mass=cfg.black_hole_mass,
            position=cfg.black_hole_position,
            gravity_constant=cfg.gravity_constant,
            light_speed=cfg.light_speed,
        )
        planet = Planet(
            mass=cfg.planet_mass,
            position=cfg.planet_position,
            gravity_constant=cfg.gravity_constant,
            radius_k=cfg.planet_radius_k,
            radius_exponent=cfg.planet_radius_exponent,
        )
        ship = Ship(
            position=cfg.ship_spawn_position,
            velocity=(0.0, 0.0),
            radius=cfg.ship_radius,
            mass=cfg.ship_mass,
            fuel=cfg.initial_fuel,
        )
        disk = DiskGlow(
            minimum=cfg.disk_glow_min,
            maximum=cfg.disk_glow_max,
            reset_value=cfg.disk_glow_reset,
            step=cfg.disk_glow_step,
            particle_count=cfg.accretion_particle_count,
        )
        state = GameState(
            black_hole=black_hole,
            planet=planet,
            ship=ship,
            asteroids=AsteroidField(),
            disk=disk,
            landing=LandingTimer(cfg.deposit_delay_ms),
        )
        self._spawn_asteroids(state)
        return state

    def _spawn_asteroids(self, state: GameState) -> None:
        cfg = self.config
        state.asteroids.spawn(
            cfg.asteroid_count,
            center=state.black_hole.position,
            spread=cfg.asteroid_spread,
            radius=cfg.ship_radius * cfg.asteroid_radius_fraction,
            mass_range=cfg.asteroid_mass_range,
            rng=self.rng,
        )

    def apply_config(self, config: GameConfig) -> None:
        """Start a fresh session with new tuning. The high score is kept."""
        with self.lock:
            high_score = self.state.high_score
            self.config = config.validate()
            self.physics = ShipPhysics(self.config)
            self.scheduler.clear()
            self.state = self._new_state()
            self.state.high_score = high_score
            self._emit(None, f"Loaded preset: {self.config.name}")

    # -----------------------
    # Inputs
    # -----------------------

    def set_propelling(self, active: bool) -> None:
        with self.lock:
            self.state.is_propelling = bool(active)

    def set_reversing(self, active: bool) -> None:
        with self.lock:
            self.state.is_reversing = bool(active)

    def set_paused(self, paused: bool) -> None:
        with self.lock:
            self.state.paused = bool(paused)

    def toggle_pause(self) -> bool:
        with self.lock:
            self.state.paused = not self.state.paused
            return self.state.paused

    # -----------------------
    # Reset and respawn
    # -----------------------

    def reset_game(self, now: Optional[float] = None) -> None:
        """
        Restore the ship, flags, disk glow and asteroid field for a new run.

        The black hole keeps its grown mass and the high score survives. Bumping the
        epoch invalidates any crash reset still pending from the previous run.
        """
        with self.lock:
            now = self.clock() if now is None else now
            cfg = self.config
            state = self.state

            ship = state.ship
            ship.position = cfg.ship_spawn_position
            ship.velocity = (0.0, 0.0)
            ship.radius = cfg.ship_radius
            ship.mass = cfg.ship_mass
            ship.fuel = cfg.reset_fuel
            ship.fuel_deposited = 0.0

            state.is_propelling = False
            state.is_reversing = False
            state.landing.reset()
            state.is_ship_exploding = False
            state.is_ship_stretching = False
            state.last_outcome = state.flight_state
            state.flight_state = FlightState.FLYING
            state.disk.reset()
            if cfg.reinit_asteroids_on_reset:
                self._spawn_asteroids(state)

            state.just_reset = True
            state.reset_time = now
            state.epoch += 1
            self._emit(GameEvent.RESET)
            logger.info("Game reset (epoch %d, high score %.1f)", state.epoch, state.high_score)

    def respawn_suppressed(self, now: float) -> bool:
        state = self.state
        return state.just_reset and now - state.reset_time < self.config.respawn_suppression_ms

    def _update_reset_window(self, now: float) -> None:
        if self.state.just_reset and not self.respawn_suppressed(now):
            self.state.just_reset = False

    # -----------------------
    # Frame update
    # -----------------------

    def tick(self, delta_time: float, now: Optional[float] = None) -> List[GameEvent]:
        """
        Advance the game by one frame.

        Returns the events raised during this frame (including a crash reset that
        came due), in the order they happened. A paused frame changes nothing.
        Resets requested between frames (Redeploy, preset load) are not reported here.
        """
        with self.lock:
            now = self.clock() if now is None else now
            self._events = []
            self.scheduler.run_due(now, lambda: self.state.epoch)
            state = self.state
            if state.paused:
                return self._drain_events()

            dt = self._clamp_delta(delta_time)
            self._update_reset_window(now)

            if not state.is_ship_exploding:
                state.collecting_fuel = self.physics.step(
                    state.ship, state.black_hole, state.planet, dt,
                    propelling=state.is_propelling, reversing=state.is_reversing,
                )
                self._evaluate_ship(now)

            bh = state.black_hole
            state.is_ship_stretching = (
                distance(bh.position, state.ship.position) < bh.radius + self.config.stretch_distance
            )

            absorbed = state.asteroids.update(bh, dt, self.config.stretch_distance)
            for _ in absorbed:
                state.disk.absorb()

            return self._drain_events()

    def _clamp_delta(self, delta_time: float) -> float:
        cap = self.config.max_delta_time
        dt = max(0.0, delta_time)
        # A cap of 0 disables clamping from above
        if cap > 0 and dt > cap:
            logger.debug("Frame delta %.3fs clamped to %.3fs", dt, cap)
            dt = cap
        return dt

    def _evaluate_ship(self, now: float) -> None:
        cfg = self.config
        state = self.state
        ship = state.ship

        if in_event_horizon(ship, state.black_hole):
            if cfg.horizon_policy == "respawn" and not self.respawn_suppressed(now):
                respawn_near_black_hole(ship, state.black_hole, cfg.respawn_min_offset,
                                        cfg.respawn_span, cfg.respawn_fuel, self.rng)
                state.landing.reset()
                self._emit(GameEvent.RESPAWN, MSG_RESPAWNED)
                logger.info("Ship respawned at (%.0f, %.0f)", ship.position[0], ship.position[1])
                return
            ship.fuel = 0.0
            state.flight_state = FlightState.CONSUMED
            self._emit(GameEvent.CONSUMED, MSG_CONSUMED)
            logger.info("Ship fell into the black hole (mass %.1f)", state.black_hole.mass)
            self.reset_game(now)
            return

        touching = touching_planet(ship, state.planet)
        slow_enough = speed(ship.velocity) <= cfg.landing_speed_limit

        if touching and not slow_enough and not state.is_ship_exploding:
            impact_speed = speed(ship.velocity)
            state.is_ship_exploding = True
            state.flight_state = FlightState.EXPLODING
            state.landing.reset()
            freeze_at_surface(ship, state.planet)
            self.scheduler.schedule(now, cfg.explosion_delay_ms, state.epoch, self._finish_crash,
                                    label="crash reset")
            self._emit(GameEvent.EXPLODE)
            logger.info("Ship crashed into the planet at %.1f px/s", impact_speed)
            return

        if state.landing.update(touching, slow_enough, now):
            ship.fuel_deposited += ship.fuel
            state.high_score = max(state.high_score, ship.fuel_deposited)
            ship.fuel = 0.0
            state.flight_state = FlightState.LANDED
            self._emit(GameEvent.LAND, MSG_LANDED.format(ship.fuel_deposited))
            logger.info("Landed, deposited %.1f fuel (high score %.1f)",
                        ship.fuel_deposited, state.high_score)
            self.reset_game(now)

    def _finish_crash(self, now: float) -> None:
        self.state.ship.fuel = 0.0
        self._emit(GameEvent.CRASH, MSG_CRASHED)
        self.reset_game(now)

    # -----------------------
    # Events and read-only views
    # -----------------------

    def _emit(self, event: Optional[GameEvent], message: Optional[str] = None) -> None:
        if event is not None:
            self._events.append(event)
        if message:
            self.last_message = message

    def _drain_events(self) -> List[GameEvent]:
        events, self._events = self._events, []
        return events

    def pop_message(self) -> Optional[str]:
        """Return and clear the latest player-facing notification."""
        with self.lock:
            msg, self.last_message = self.last_message, None
            return msg

    def snapshot(self) -> HudSnapshot:
        with self.lock:
            cfg = self.config
            state = self.state
            ship = state.ship
            bh = state.black_hole
            ship_speed = speed(ship.velocity)
            advisory = landing_advisory(ship, state.planet, cfg.near_planet_distance, cfg.landing_speed_limit)
            return HudSnapshot(
                black_hole_distance=distance(bh.position, ship.position),
                planet_distance=distance(state.planet.position, ship.position),
                fuel=ship.fuel,
                fuel_deposited=ship.fuel_deposited,
                speed=ship_speed,
                black_hole_mass=bh.mass,
                black_hole_radius=bh.radius,
                high_score=state.high_score,
                disk_glow=state.disk.value,
                disk_particle_count=state.disk.particle_count,
                asteroid_count=len(state.asteroids),
                exploding=state.is_ship_exploding,
                landing=state.landing.running,
                out_of_fuel=ship.fuel <= 0,
                collecting_fuel=state.collecting_fuel,
                near_planet=advisory is not None,
                too_fast=advisory == "too_fast",
                paused=state.paused,
                flight_state=state.flight_state,
            )
