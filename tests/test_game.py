"""
Scenario tests for GameController.

Tests cover:
- Infall, crash and landing outcomes and the reset that follows
- Epoch invalidation of the pending crash reset
- Pause gate and frame delta clamping
- Respawn policy and the post-reset suppression window
- Asteroid absorption feeding the disk glow
- HUD snapshot and preset switching
"""

import math

import pytest

from bhrun.collisions import FlightState
from bhrun.config import GameConfig
from bhrun.data_models import Asteroid
from bhrun.game import GameController, GameEvent


def landing_spot(game, overlap=5.0):
    planet = game.state.planet
    edge = planet.radius + game.state.ship.radius - overlap
    return (planet.position[0] - edge, planet.position[1])


def start_crash(game, clock):
    ship = game.state.ship
    ship.position = landing_spot(game)
    ship.velocity = (200.0, 0.0)
    return game.tick(0.0, clock.now)


# =============================================================================
# INFALL
# =============================================================================

def test_infall_ends_run_and_resets(game, clock):
    game.state.ship.position = (99.0, 0.0)

    events = game.tick(0.0, clock.now)

    assert events == [GameEvent.CONSUMED, GameEvent.RESET]
    ship = game.state.ship
    assert ship.position == game.config.ship_spawn_position
    assert ship.fuel == game.config.reset_fuel
    assert game.state.last_outcome == FlightState.CONSUMED
    assert game.state.flight_state == FlightState.FLYING
    assert "black hole" in game.pop_message()


def test_reset_restores_defaults(clock, rng):
    game = GameController(GameConfig(), clock=clock, rng=rng)
    ship = game.state.ship
    ship.fuel = 3.0
    ship.fuel_deposited = 12.0
    ship.velocity = (40.0, -10.0)

    game.reset_game(clock.now)

    assert ship.fuel == 50.0
    assert ship.fuel_deposited == 0.0
    assert ship.velocity == (0.0, 0.0)
    assert len(game.state.asteroids) == 1000
    assert game.state.disk.value == pytest.approx(0.5)
    assert game.respawn_suppressed(clock.now + 999)
    assert not game.respawn_suppressed(clock.now + 1000)


def test_reset_window_closes_on_tick(game, clock):
    game.reset_game(clock.now)
    assert game.state.just_reset
    game.tick(0.0, clock.advance(1000))
    assert not game.state.just_reset


def test_reset_clears_flags_and_keeps_black_hole_mass(game, clock):
    state = game.state
    state.black_hole.absorb(250.0)
    game.set_propelling(True)
    game.set_reversing(True)
    state.is_ship_stretching = True
    start_crash(game, clock)
    assert state.is_ship_exploding

    game.reset_game(clock.now)

    assert not state.is_propelling
    assert not state.is_reversing
    assert not state.is_ship_exploding
    assert not state.is_ship_stretching
    assert not state.landing.running
    assert state.black_hole.mass == pytest.approx(100250.0)


# =============================================================================
# LANDING
# =============================================================================

def test_landing_deposits_after_delay(game, clock):
    game.state.ship.position = landing_spot(game)

    assert game.tick(0.0, clock.now) == []
    assert game.state.deposit_start_time == clock.now
    assert game.tick(0.0, clock.advance(1999)) == []

    events = game.tick(0.0, clock.advance(1))

    assert events == [GameEvent.LAND, GameEvent.RESET]
    assert game.state.high_score == pytest.approx(50.0)
    assert game.state.ship.fuel_deposited == 0.0
    assert game.state.last_outcome == FlightState.LANDED
    assert "50.0" in game.pop_message()


def test_leaving_planet_restarts_landing_timer(game, clock):
    ship = game.state.ship
    ship.position = landing_spot(game)
    game.tick(0.0, clock.now)
    clock.advance(1500)

    ship.position = landing_spot(game, overlap=-100.0)
    game.tick(0.0, clock.now)
    assert game.state.deposit_start_time is None

    ship.position = landing_spot(game)
    game.tick(0.0, clock.advance(100))
    assert game.tick(0.0, clock.advance(1999)) == []
    assert game.tick(0.0, clock.advance(1)) == [GameEvent.LAND, GameEvent.RESET]


def test_high_score_is_best_landing(game, clock):
    game.state.high_score = 100.0
    game.state.ship.position = landing_spot(game)
    game.tick(0.0, clock.now)
    game.tick(0.0, clock.advance(2000))
    assert game.state.high_score == 100.0


# =============================================================================
# CRASH
# =============================================================================

def test_fast_contact_explodes_then_resets(game, clock):
    events = start_crash(game, clock)

    assert events == [GameEvent.EXPLODE]
    state = game.state
    ship = state.ship
    planet = state.planet
    assert state.is_ship_exploding
    assert ship.velocity == (0.0, 0.0)
    d = math.hypot(ship.position[0] - planet.position[0], ship.position[1] - planet.position[1])
    assert d == pytest.approx(planet.radius + ship.radius)

    frozen = ship.position
    assert game.tick(0.1, clock.advance(499)) == []
    assert ship.position == frozen
    assert state.is_ship_exploding

    assert game.tick(0.1, clock.advance(1)) == [GameEvent.CRASH, GameEvent.RESET]
    assert not state.is_ship_exploding
    assert ship.fuel == game.config.reset_fuel
    assert state.last_outcome == FlightState.EXPLODING
    assert "crashed" in game.pop_message()


def test_crash_does_not_retrigger_while_exploding(game, clock):
    start_crash(game, clock)
    game.state.ship.velocity = (500.0, 0.0)
    assert game.tick(0.0, clock.advance(100)) == []
    assert len(game.scheduler) == 1


def test_manual_reset_cancels_pending_crash(game, clock):
    start_crash(game, clock)
    game.reset_game(clock.advance(100))

    assert game.tick(0.0, clock.advance(400)) == []
    assert len(game.scheduler) == 0
    assert game.state.last_outcome == FlightState.EXPLODING


# =============================================================================
# PAUSE AND DELTA TIME
# =============================================================================

def test_paused_tick_changes_nothing(game, clock):
    ship = game.state.ship
    ship.velocity = (100.0, 0.0)
    before = (ship.position, ship.velocity, ship.fuel)
    game.set_paused(True)

    assert game.tick(0.1, clock.advance(16)) == []
    assert (ship.position, ship.velocity, ship.fuel) == before


def test_pending_crash_fires_while_paused(game, clock):
    start_crash(game, clock)
    assert game.toggle_pause()

    assert game.tick(0.016, clock.advance(500)) == [GameEvent.CRASH, GameEvent.RESET]
    assert game.state.paused


def test_negative_delta_is_a_no_op(game, clock):
    ship = game.state.ship
    ship.position = (10000.0, 0.0)
    ship.velocity = (100.0, 0.0)
    game.tick(-1.0, clock.now)
    assert ship.position == (10000.0, 0.0)
    assert ship.velocity == (100.0, 0.0)


def test_large_delta_is_capped(clock, rng):
    capped = GameController(GameConfig(asteroid_count=0), clock=clock, rng=rng)
    reference = GameController(GameConfig(asteroid_count=0), clock=clock, rng=rng)
    for g in (capped, reference):
        g.state.ship.position = (10000.0, 0.0)

    capped.tick(5.0, clock.now)
    reference.tick(0.25, clock.now)

    assert capped.state.ship.position == pytest.approx(reference.state.ship.position)
    assert capped.state.ship.velocity == pytest.approx(reference.state.ship.velocity)


# =============================================================================
# RESPAWN POLICY
# =============================================================================

@pytest.fixture
def respawn_game(clock, rng):
    return GameController(GameConfig(asteroid_count=0, horizon_policy="respawn"), clock=clock, rng=rng)


def test_respawn_policy_relocates_ship(respawn_game, clock):
    ship = respawn_game.state.ship
    ship.position = (99.0, 0.0)
    ship.velocity = (-300.0, 0.0)
    ship.fuel = 2.0

    assert respawn_game.tick(0.0, clock.now) == [GameEvent.RESPAWN]

    r = math.hypot(*ship.position)
    bh_radius = respawn_game.state.black_hole.radius
    assert bh_radius + 50.0 <= r < bh_radius + 1250.0 + 1e-9
    assert ship.velocity == (0.0, 0.0)
    assert ship.fuel == 50.0
    assert respawn_game.state.flight_state == FlightState.FLYING


def test_respawn_suppressed_right_after_reset(respawn_game, clock):
    respawn_game.reset_game(clock.now)
    respawn_game.state.ship.position = (99.0, 0.0)

    events = respawn_game.tick(0.0, clock.advance(100))

    assert events == [GameEvent.CONSUMED, GameEvent.RESET]


# =============================================================================
# ASTEROIDS, STRETCHING AND DISK
# =============================================================================

def test_absorption_grows_black_hole_and_glow(game, clock):
    game.state.asteroids.asteroids.append(
        Asteroid(position=(10.0, 0.0), velocity=(0.0, 0.0), radius=7.5, mass=2.0))

    game.tick(0.0, clock.now)

    assert len(game.state.asteroids) == 0
    assert game.state.black_hole.mass == pytest.approx(100002.0)
    assert game.state.disk.value == pytest.approx(0.2)


def test_ship_stretching_flag(game, clock):
    game.state.ship.position = (150.0, 0.0)
    game.tick(0.0, clock.now)
    assert game.state.is_ship_stretching
    assert game.state.collecting_fuel

    game.state.ship.position = (10000.0, 0.0)
    game.tick(0.0, clock.now)
    assert not game.state.is_ship_stretching
    assert not game.state.collecting_fuel


def test_propel_burns_fuel_away_from_black_hole(game, clock):
    ship = game.state.ship
    ship.position = (10000.0, 0.0)
    game.set_propelling(True)

    game.tick(0.1, clock.now)

    assert ship.fuel == pytest.approx(48.0)
    assert ship.velocity == pytest.approx((80.0, 0.0))
    assert ship.position == pytest.approx((10008.0, 0.0))


# =============================================================================
# SNAPSHOT AND PRESETS
# =============================================================================

def test_snapshot_reports_hud_values(game):
    snap = game.snapshot()
    assert snap.black_hole_distance == pytest.approx(1200.0)
    assert snap.fuel == 50.0
    assert snap.black_hole_radius == pytest.approx(100.0)
    assert snap.disk_glow == pytest.approx(0.1)
    assert snap.asteroid_count == 0
    assert not snap.exploding
    assert not snap.out_of_fuel
    assert not snap.near_planet
    assert not snap.paused


def test_snapshot_flags_fast_approach(game):
    ship = game.state.ship
    ship.position = (45000.0, 0.0)
    ship.velocity = (300.0, 0.0)
    snap = game.snapshot()
    assert snap.near_planet
    assert snap.too_fast


def test_apply_config_keeps_high_score(game, clock):
    game.state.high_score = 75.0
    start_crash(game, clock)

    game.apply_config(GameConfig(asteroid_count=0, black_hole_mass=150000.0, name="Heavy"))

    assert game.state.high_score == 75.0
    assert game.state.black_hole.mass == 150000.0
    assert len(game.scheduler) == 0
    assert game.pop_message() == "Loaded preset: Heavy"


def test_reset_between_frames_is_not_reported_by_next_tick(game, clock):
    game.reset_game(clock.now)
    assert game.tick(0.0, clock.advance(16)) == []


def test_reset_keeps_field_when_reinit_disabled(clock, rng):
    game = GameController(GameConfig(asteroid_count=0, reinit_asteroids_on_reset=False),
                          clock=clock, rng=rng)
    marker = Asteroid(position=(20000.0, 0.0), velocity=(3.0, 0.0), radius=7.5, mass=1.25)
    game.state.asteroids.asteroids.append(marker)

    game.reset_game(clock.now)

    assert len(game.state.asteroids) == 1
    assert game.state.asteroids[0] is marker
    assert marker.position == (20000.0, 0.0)
    assert marker.mass == 1.25
