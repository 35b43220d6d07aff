#!/usr/bin/env python3
"""
Game configuration and JSON preset loading.

GameConfig gathers every tunable of the simulation; defaults come from
constants.py. Presets are JSON files in presets/ that override any subset of
the fields:

{
  "name": "Human-friendly preset name",
  "description": "Optional description",
  "black_hole_mass": 150000,
  "planet_position": [50000, 0],
  "horizon_policy": "respawn"
}

Unknown keys are ignored and missing keys keep their defaults. Users can drop
their own JSON files into presets/ and they'll be picked up by the loader.
"""
import json
import logging
import math
import os
from dataclasses import dataclass, fields, replace
from typing import List, Optional, Tuple

from . import constants as C
from .utils import try_float, try_pair

logger = logging.getLogger(__name__)

PRESETS_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "presets")

HORIZON_POLICIES = ("reset", "respawn")


class ConfigError(ValueError):
    """Raised when a configuration value is missing its required shape or range."""


@dataclass(frozen=True)
class GameConfig:
    name: str = "Classic"
    description: str = ""

    gravity_constant: float = C.GRAVITY_CONSTANT
    light_speed: float = C.LIGHT_SPEED

    black_hole_position: Tuple[float, float] = C.BLACK_HOLE_POSITION
    black_hole_mass: float = C.BLACK_HOLE_MASS

    planet_position: Tuple[float, float] = C.PLANET_POSITION
    planet_mass: float = C.PLANET_MASS
    planet_radius_k: float = C.PLANET_RADIUS_K
    planet_radius_exponent: float = C.PLANET_RADIUS_EXPONENT

    ship_spawn_position: Tuple[float, float] = C.SHIP_SPAWN_POSITION
    ship_radius: float = C.SHIP_RADIUS
    ship_mass: float = C.SHIP_MASS
    initial_fuel: float = C.INITIAL_FUEL
    reset_fuel: float = C.RESET_FUEL
    respawn_fuel: float = C.RESPAWN_FUEL

    fuel_consumption_rate: float = C.FUEL_CONSUMPTION_RATE
    fuel_collection_rate: float = C.FUEL_COLLECTION_RATE
    fuel_collection_distance: float = C.FUEL_COLLECTION_DISTANCE
    push_strength: float = C.PUSH_STRENGTH
    reverse_strength: float = C.REVERSE_STRENGTH

    landing_speed_limit: float = C.LANDING_SPEED_LIMIT
    deposit_delay_ms: float = C.DEPOSIT_DELAY_MS
    explosion_delay_ms: float = C.EXPLOSION_DELAY_MS
    near_planet_distance: float = C.NEAR_PLANET_DISTANCE

    horizon_policy: str = "reset"  # reset | respawn
    respawn_suppression_ms: float = C.RESPAWN_SUPPRESSION_MS
    respawn_min_offset: float = C.RESPAWN_MIN_OFFSET
    respawn_span: float = C.RESPAWN_SPAN

    stretch_distance: float = C.STRETCH_DISTANCE

    asteroid_count: int = C.ASTEROID_COUNT
    asteroid_spread: Tuple[float, float] = (C.ASTEROID_SPREAD_X, C.ASTEROID_SPREAD_Y)
    asteroid_radius_fraction: float = C.ASTEROID_RADIUS_FRACTION
    asteroid_mass_range: Tuple[float, float] = (C.ASTEROID_MIN_MASS, C.ASTEROID_MAX_MASS)
    reinit_asteroids_on_reset: bool = True

    disk_glow_min: float = C.DISK_GLOW_MIN
    disk_glow_max: float = C.DISK_GLOW_MAX
    disk_glow_reset: float = C.DISK_GLOW_RESET
    disk_glow_step: float = C.DISK_GLOW_STEP
    accretion_particle_count: int = C.ACCRETION_PARTICLE_COUNT

    max_delta_time: float = C.MAX_DELTA_TIME

    def validate(self) -> "GameConfig":
        """Check ranges that the simulation relies on. Returns self for chaining."""
        for f in fields(self):
            value = getattr(self, f.name)
            numbers = value if isinstance(value, tuple) else (value,)
            for n in numbers:
                if isinstance(n, (int, float)) and not math.isfinite(n):
                    raise ConfigError(f"{f.name} must be a finite number, got {value!r}")
        positive = ("light_speed", "black_hole_mass", "planet_mass", "ship_radius", "ship_mass",
                    "disk_glow_reset")
        for name in positive:
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive, got {getattr(self, name)!r}")
        non_negative = (
            "gravity_constant", "initial_fuel", "reset_fuel", "respawn_fuel",
            "fuel_consumption_rate", "fuel_collection_rate", "fuel_collection_distance",
            "push_strength", "reverse_strength", "landing_speed_limit", "deposit_delay_ms",
            "explosion_delay_ms", "near_planet_distance", "respawn_suppression_ms",
            "respawn_min_offset", "respawn_span", "stretch_distance", "asteroid_count",
            "asteroid_radius_fraction", "disk_glow_step", "accretion_particle_count", "max_delta_time",
        )
        for name in non_negative:
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must be >= 0, got {getattr(self, name)!r}")
        if self.horizon_policy not in HORIZON_POLICIES:
            raise ConfigError(f"horizon_policy must be one of {HORIZON_POLICIES}, got {self.horizon_policy!r}")
        lo, hi = self.asteroid_mass_range
        if lo < 0 or hi < lo:
            raise ConfigError(f"asteroid_mass_range must satisfy 0 <= min <= max, got {self.asteroid_mass_range!r}")
        if not (0 <= self.disk_glow_min <= self.disk_glow_reset <= self.disk_glow_max):
            raise ConfigError("disk glow bounds must satisfy min <= reset <= max")
        return self

    @classmethod
    def from_dict(cls, data: dict) -> "GameConfig":
        """Build a validated config from a preset mapping, coercing JSON values."""
        defaults = cls()
        overrides = {}
        for f in fields(cls):
            if f.name not in data:
                continue
            raw = data[f.name]
            current = getattr(defaults, f.name)
            if isinstance(current, bool):
                if not isinstance(raw, bool):
                    raise ConfigError(f"{f.name} must be true or false, got {raw!r}")
                value = raw
            elif isinstance(current, int):
                num = try_float(raw)
                if num is None or not math.isfinite(num):
                    raise ConfigError(f"{f.name} must be a number, got {raw!r}")
                value = int(num)
            elif isinstance(current, float):
                value = try_float(raw)
                if value is None:
                    raise ConfigError(f"{f.name} must be a number, got {raw!r}")
            elif isinstance(current, tuple):
                value = try_pair(raw)
                if value is None:
                    raise ConfigError(f"{f.name} must be a pair of numbers, got {raw!r}")
            else:
                value = str(raw)
            overrides[f.name] = value
        return replace(defaults, **overrides).validate()


def _read_json(path: str) -> Optional[dict]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Could not read preset %s: %s", path, exc)
        return None
    if not isinstance(data, dict):
        logger.warning("Preset %s is not a JSON object", path)
        return None
    return data


def list_presets() -> List[Tuple[str, str]]:
    """Return list of (file_name, display_name) for available presets."""
    items: List[Tuple[str, str]] = []
    if not os.path.isdir(PRESETS_DIR):
        return items
    for fn in sorted(os.listdir(PRESETS_DIR)):
        if not fn.lower().endswith(".json"):
            continue
        data = _read_json(os.path.join(PRESETS_DIR, fn)) or {}
        display = data.get("name") or os.path.splitext(fn)[0]
        items.append((fn, display))
    return items


def load_preset(file_name: str, presets_dir: Optional[str] = None) -> Optional[GameConfig]:
    """
    Load a preset JSON by file name.

    Returns None (and logs a warning) when the file is unreadable or holds invalid values.
    """
    path = os.path.join(presets_dir or PRESETS_DIR, file_name)
    data = _read_json(path)
    if data is None:
        return None
    if "name" not in data:
        data = dict(data, name=os.path.splitext(file_name)[0])
    try:
        config = GameConfig.from_dict(data)
    except ConfigError as exc:
        logger.warning("Invalid preset %s: %s", file_name, exc)
        return None
    logger.info("Loaded preset '%s' from %s", config.name, file_name)
    return config
