#!/usr/bin/env python3
"""
Shared constants for Blackhole Run (game units: px, px/s, seconds, ms for wall-clock timers).

Keeping constants in one place helps ensure values are consistent across the
codebase and makes tuning easier. GameConfig takes its defaults from here.
"""

# Scaled physics
GRAVITY_CONSTANT = 500.0  # shared by black hole, planet and asteroids
LIGHT_SPEED = 1000.0  # only used for the event horizon radius

# Black hole
BLACK_HOLE_POSITION = (0.0, 0.0)
BLACK_HOLE_MASS = 100000.0  # radius 100 with the constants above

# Planet (landing target)
PLANET_POSITION = (50000.0, 0.0)
PLANET_MASS = 500.0
PLANET_RADIUS_K = 50.0
PLANET_RADIUS_EXPONENT = 0.27  # empirical rocky-planet mass-radius relation

# Ship
SHIP_SPAWN_POSITION = (1200.0, 0.0)
SHIP_RADIUS = 15.0
SHIP_MASS = 1.0
INITIAL_FUEL = 50.0
RESET_FUEL = 50.0
RESPAWN_FUEL = 50.0

# Propulsion and fuel economy
FUEL_CONSUMPTION_RATE = 20.0  # per second of thrust
FUEL_COLLECTION_RATE = 30.0  # per second inside the collection band
FUEL_COLLECTION_DISTANCE = 450.0  # measured from the event horizon
PUSH_STRENGTH = 800.0
REVERSE_STRENGTH = 200.0

# Landing and crashes
LANDING_SPEED_LIMIT = 150.0
DEPOSIT_DELAY_MS = 2000.0
EXPLOSION_DELAY_MS = 500.0
NEAR_PLANET_DISTANCE = 20000.0

# Respawn around the black hole
RESPAWN_SUPPRESSION_MS = 1000.0
RESPAWN_MIN_OFFSET = 50.0
RESPAWN_SPAN = 1200.0

# Stretch effect (visual)
STRETCH_DISTANCE = 100.0

# Asteroids
ASTEROID_COUNT = 1000
ASTEROID_SPREAD_X = 45000.0
ASTEROID_SPREAD_Y = 1000.0
ASTEROID_RADIUS_FRACTION = 0.5  # of ship radius
ASTEROID_MIN_MASS = 0.5
ASTEROID_MAX_MASS = 2.0

# Accretion disk glow
DISK_GLOW_MIN = 0.1
DISK_GLOW_MAX = 1.5
DISK_GLOW_RESET = 0.5
DISK_GLOW_STEP = 0.1
ACCRETION_PARTICLE_COUNT = 600

# Frame delta cap (seconds); long stalls would otherwise fling the ship
MAX_DELTA_TIME = 0.25

# Rendering (viewport)
VIEW_WIDTH = 1100
VIEW_HEIGHT = 800
TARGET_FPS = 60
BACKGROUND_COLOR = (0, 0, 0)
GRID_COLOR = (26, 26, 26)
GRID_SIZE = 50
STAR_COUNT = 4000
STARFIELD_WIDTH = 25000
STARFIELD_HEIGHT = 900
PARALLAX_FACTOR = 0.2
BLACK_HOLE_COLOR = (34, 34, 34)
DISK_COLOR = (255, 150, 50)
PLANET_COLOR = (40, 80, 255)
SHIP_COLOR = (230, 40, 40)
SHIP_EXPLOSION_COLOR = (255, 200, 40)
ASTEROID_COLOR = (128, 128, 128)

# Camera zoom bounds (world units per pixel)
DEFAULT_UNITS_PER_PIXEL = 1.0
MIN_UNITS_PER_PIXEL = 0.25
MAX_UNITS_PER_PIXEL = 200.0

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
