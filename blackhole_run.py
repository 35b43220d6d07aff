#!/usr/bin/env python3
"""
Blackhole Run application entry point and UI/renderer coordination.

What this module does
- Starts two event loops: a Pygame rendering thread (viewport, keyboard/mouse thrust,
  frame loop) and the Dear PyGui control panel (running on the main thread).
- Shares a single GameController between them; every access goes through its
  re-entrant lock, and only the rendering thread advances the simulation.

How to play
- Collect fuel close to the black hole, thrust away from it to avoid falling in.
- Fly to the blue planet and slow down to 150 px/s or less before touching it.
- Stay on the planet for two seconds to bank your fuel; faster contact is a crash.
- Asteroids falling into the black hole add to its mass and its pull.

Controls (viewport)
- Up/Right or left mouse button: propel (away from the black hole)
- Down/Left or right mouse button: reverse (toward the black hole)
- P: pause, R: redeploy, mouse wheel: zoom

Running
1) Install dependencies: `pip install pygame dearpygui`
2) Run this module: `python blackhole_run.py [--preset classic.json] [--debug]`
"""

import argparse
import logging
import math
import random
import threading
import time
from typing import List, Optional, Tuple

# GUI and Rendering libs
import pygame
from pygame import gfxdraw
import dearpygui.dearpygui as dpg

from bhrun.camera import Camera2D
from bhrun.config import GameConfig, list_presets, load_preset
from bhrun.constants import (
    ASTEROID_COLOR,
    BACKGROUND_COLOR,
    BLACK_HOLE_COLOR,
    DISK_COLOR,
    GRID_COLOR,
    GRID_SIZE,
    PARALLAX_FACTOR,
    PLANET_COLOR,
    SAFE_COORD_LIMIT,
    SHIP_COLOR,
    SHIP_EXPLOSION_COLOR,
    STAR_COUNT,
    STARFIELD_HEIGHT,
    STARFIELD_WIDTH,
    TARGET_FPS,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from bhrun.game import GameController

logger = logging.getLogger("blackhole_run")

WELCOME_TEXT = (
    "Collect fuel near the black hole and use Propel to stay out of it.\n"
    "Fly to the blue planet and slow down below 150 px/s to land.\n"
    "Hold still on the planet for 2 s to bank your fuel.\n"
    "Asteroids feed the black hole and strengthen its pull.\n"
    "Lost in space? Press Redeploy."
)


# ============================================================
# Visual-only scenery
# ============================================================

def make_starfield(rng: random.Random, count: int = STAR_COUNT) -> List[Tuple[float, float, int]]:
    return [
        (rng.random() * STARFIELD_WIDTH - STARFIELD_WIDTH / 2,
         rng.random() * STARFIELD_HEIGHT - STARFIELD_HEIGHT / 2,
         1 if rng.random() < 0.7 else 2)
        for _ in range(count)
    ]


class AccretionDisk:
    """Particles orbiting just outside the horizon; how many are drawn follows the disk glow."""

    def __init__(self, rng: random.Random, count: int):
        self.count = count
        # (angle, offset from horizon, angular speed per frame)
        self.particles = [
            [rng.random() * 2 * math.pi, 40 + rng.random() * 60, 0.002 + rng.random() * 0.003]
            for _ in range(max(1, count))
        ]

    def advance(self, draw_count: int) -> None:
        n = len(self.particles)
        for i in range(draw_count):
            p = self.particles[i % n]
            p[0] += p[2]

    def points(self, center: Tuple[float, float], horizon: float, draw_count: int):
        n = len(self.particles)
        for i in range(draw_count):
            angle, offset, _ = self.particles[i % n]
            r = horizon + offset
            yield (center[0] + math.cos(angle) * r, center[1] + math.sin(angle) * r)


def _safe_point(p) -> Optional[Tuple[int, int]]:
    try:
        x, y = int(p[0]), int(p[1])
    except (TypeError, ValueError, OverflowError):
        return None
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None


# ============================================================
# Pygame Renderer Thread
# ============================================================

class GameRenderer(threading.Thread):
    """
    Pygame loop: reads thrust inputs, ticks the game, draws the scene.
    """

    def __init__(self, game: GameController):
        super().__init__(daemon=True)
        self.game = game
        self.camera = Camera2D(center=game.config.ship_spawn_position)
        self.surface = None
        self.clock = None
        self.font = None
        self.running = True
        self.rng = rng = random.Random()
        self.stars = make_starfield(rng)
        self.disk = AccretionDisk(rng, game.config.accretion_particle_count)
        # Latched by the Dear PyGui hold buttons
        self.ui_propel = False
        self.ui_reverse = False

    def run(self):
        pygame.init()
        pygame.display.set_caption("Blackhole Run")
        self.surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT), pygame.RESIZABLE)
        self.camera.set_viewport_size(VIEW_WIDTH, VIEW_HEIGHT)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont(None, 28)

        last_time = time.perf_counter()
        while self.running:
            now = time.perf_counter()
            real_dt = now - last_time
            last_time = now

            self.handle_events()
            self.game.tick(real_dt)
            self.draw()

            self.clock.tick(TARGET_FPS)

        pygame.quit()

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.VIDEORESIZE:
                self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.camera.set_viewport_size(event.w, event.h)
            elif event.type == pygame.MOUSEWHEEL:
                self.camera.zoom(1.1 if event.y > 0 else 1.0 / 1.1)
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_p:
                    self.game.toggle_pause()
                elif event.key == pygame.K_r:
                    self.game.reset_game()

        keys = pygame.key.get_pressed()
        buttons = pygame.mouse.get_pressed()
        propel = keys[pygame.K_UP] or keys[pygame.K_RIGHT] or buttons[0] or self.ui_propel
        reverse = keys[pygame.K_DOWN] or keys[pygame.K_LEFT] or buttons[2] or self.ui_reverse
        self.game.set_propelling(propel)
        self.game.set_reversing(reverse)

    def draw_grid(self, surf):
        w, h = self.camera.viewport_size
        spacing = GRID_SIZE
        # Skip the grid once lines would be closer than 8 px
        if spacing / self.camera.upp < 8:
            return
        x0, y0, x1, y1 = self.camera.world_bounds()
        x = math.floor(x0 / spacing) * spacing
        while x <= x1:
            sx, _ = self.camera.world_to_screen((x, 0))
            pygame.draw.line(surf, GRID_COLOR, (sx, 0), (sx, h), 1)
            x += spacing
        y = math.floor(y0 / spacing) * spacing
        while y <= y1:
            _, sy = self.camera.world_to_screen((0, y))
            pygame.draw.line(surf, GRID_COLOR, (0, sy), (w, sy), 1)
            y += spacing

    def draw(self):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)

        # Copy what we need under the lock so the draw itself runs unlocked
        with self.game.lock:
            state = self.game.state
            ship_pos = state.ship.position
            ship_vel = state.ship.velocity
            ship_radius = state.ship.radius
            exploding = state.is_ship_exploding
            stretching = state.is_ship_stretching
            bh_pos = state.black_hole.position
            bh_radius = state.black_hole.radius
            planet_pos = state.planet.position
            planet_radius = state.planet.radius
            glow_alpha = state.disk.alpha
            particle_count = state.disk.particle_count
            pool_size = self.game.config.accretion_particle_count
            paused = state.paused
            x0, y0, x1, y1 = self.camera.world_bounds(margin=50)
            asteroids = [
                (a.position, a.radius, a.stretching)
                for a in state.asteroids
                if x0 <= a.position[0] <= x1 and y0 <= a.position[1] <= y1
            ]

        self.camera.follow(ship_pos)
        cam = self.camera

        for sx, sy, size in self.stars:
            p = _safe_point(cam.world_to_screen((sx, sy), parallax=PARALLAX_FACTOR))
            if p and 0 <= p[0] < cam.viewport_size[0] and 0 <= p[1] < cam.viewport_size[1]:
                pygame.draw.circle(surf, (255, 255, 255), p, size)

        self.draw_grid(surf)

        # Accretion disk; a preset may change the particle pool size
        if self.disk.count != pool_size:
            self.disk = AccretionDisk(self.rng, pool_size)
        if not paused:
            self.disk.advance(particle_count)
        disk_color = tuple(int(c * glow_alpha) for c in DISK_COLOR)
        for point in self.disk.points(bh_pos, bh_radius, particle_count):
            p = _safe_point(cam.world_to_screen(point))
            if p:
                pygame.draw.circle(surf, disk_color, p, max(1, cam.scale_length(2)))

        # Black hole and planet
        for pos, radius, color in ((bh_pos, bh_radius, BLACK_HOLE_COLOR),
                                   (planet_pos, planet_radius, PLANET_COLOR)):
            p = _safe_point(cam.world_to_screen(pos))
            r = cam.scale_length(radius, minimum=2)
            if p and r < SAFE_COORD_LIMIT:
                pygame.draw.circle(surf, color, p, r)

        # Asteroids, elongated while inside the stretch zone
        for pos, radius, stretched in asteroids:
            p = _safe_point(cam.world_to_screen(pos))
            if not p:
                continue
            r = cam.scale_length(radius, minimum=1)
            if stretched:
                pygame.draw.ellipse(surf, ASTEROID_COLOR, pygame.Rect(p[0] - 2 * r, p[1] - r // 2, 4 * r, r))
            else:
                pygame.draw.circle(surf, ASTEROID_COLOR, p, r)

        # Ship
        p = _safe_point(cam.world_to_screen(ship_pos))
        if p:
            r = cam.scale_length(ship_radius, minimum=3)
            if exploding:
                gfxdraw.filled_circle(surf, p[0], p[1], r * 2, SHIP_EXPLOSION_COLOR)
                gfxdraw.aacircle(surf, p[0], p[1], r * 3, SHIP_COLOR)
            elif stretching:
                pygame.draw.ellipse(surf, SHIP_COLOR, pygame.Rect(p[0] - 2 * r, p[1] - r // 2, 4 * r, r))
            else:
                gfxdraw.filled_circle(surf, p[0], p[1], r, SHIP_COLOR)
                gfxdraw.aacircle(surf, p[0], p[1], r, (0, 0, 0))
                # Heading hint along the velocity
                v = math.hypot(ship_vel[0], ship_vel[1])
                if v > 0:
                    tip = (p[0] + int(ship_vel[0] / v * r * 2), p[1] + int(ship_vel[1] / v * r * 2))
                    pygame.draw.line(surf, (255, 255, 255), p, tip, 1)

        if paused:
            text = self.font.render("PAUSED", True, (255, 255, 255))
            surf.blit(text, text.get_rect(center=(cam.viewport_size[0] // 2, 40)))

        pygame.display.flip()


# ============================================================
# Dear PyGui UI
# ============================================================

class UI:
    """
    Dear PyGui control panel: pause/redeploy, hold-to-fire thrust, presets, HUD readouts.
    """

    def __init__(self, game: GameController, renderer: GameRenderer):
        self.game = game
        self.renderer = renderer

        self.status_msg_id = None
        self.pause_button_id = None
        self.propel_button_id = None
        self.reverse_button_id = None
        self.info_id = None
        self.mass_id = None
        self.high_score_id = None
        self.deposited_id = None
        self.fuel_alert_id = None
        self.out_of_fuel_id = None
        self.landing_alert_id = None

        self._preset_map = {}
        self._frames = 0

        self._build_ui()
        self._schedule_frame()

    def _schedule_frame(self):
        # One callback per frame number: thrust is polled every frame, readouts every 6th
        dpg.set_frame_callback(dpg.get_frame_count() + 1, self._on_frame)

    def _on_frame(self):
        self._poll_thrust_buttons()
        self._frames += 1
        if self._frames % 6 == 0:
            self._sync_ui_with_game()
        if not self.renderer.is_alive():
            dpg.stop_dearpygui()
            return
        self._schedule_frame()

    # -----------------------
    # UI Construction
    # -----------------------

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title='Blackhole Run - Controls', width=460, height=640)

        with dpg.window(label="Blackhole Run", width=440, height=620, pos=(10, 10), tag="main_window"):
            dpg.add_text(WELCOME_TEXT, wrap=420)
            dpg.add_separator()

            with dpg.group(horizontal=True):
                self.pause_button_id = dpg.add_button(label="Pause", width=100, callback=self._toggle_pause)
                dpg.add_button(label="Redeploy", width=100, callback=self._redeploy)
            with dpg.group(horizontal=True):
                self.reverse_button_id = dpg.add_button(label="<< Reverse", width=150, height=40)
                self.propel_button_id = dpg.add_button(label="Propel >>", width=150, height=40)

            dpg.add_separator()
            with dpg.group(horizontal=True):
                dpg.add_text("Preset:")
                self._preset_map = {display: fn for fn, display in list_presets()}
                preset_items = list(self._preset_map.keys()) or [self.game.config.name]
                default_item = self.game.config.name if self.game.config.name in preset_items else preset_items[0]
                dpg.add_combo(preset_items, default_value=default_item, width=220, tag="preset_combo")
                dpg.add_button(label="Load", callback=lambda: self.load_preset(dpg.get_value("preset_combo")))

            dpg.add_separator()
            self.info_id = dpg.add_text("")
            self.mass_id = dpg.add_text("")
            self.high_score_id = dpg.add_text("High Score: 0.0")
            self.deposited_id = dpg.add_text("")

            dpg.add_separator()
            self.fuel_alert_id = dpg.add_text("Collecting fuel from the accretion field", color=(120, 220, 255), show=False)
            self.out_of_fuel_id = dpg.add_text("Out of fuel!", color=(255, 120, 120), show=False)
            self.landing_alert_id = dpg.add_text("", show=False)
            self.status_msg_id = dpg.add_text("", wrap=420)

        dpg.setup_dearpygui()
        dpg.show_viewport()
        dpg.set_primary_window("main_window", True)

    # -----------------------
    # UI Callbacks
    # -----------------------

    def _set_status(self, msg: str, color=(180, 220, 180)):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=color)

    def _set_error(self, msg: str):
        self._set_status(msg, color=(255, 120, 120))

    def _toggle_pause(self):
        paused = self.game.toggle_pause()
        dpg.configure_item(self.pause_button_id, label="Start" if paused else "Pause")

    def _redeploy(self):
        self.game.reset_game()
        self._set_status("Ship redeployed.")

    def _poll_thrust_buttons(self):
        self.renderer.ui_propel = dpg.is_item_active(self.propel_button_id)
        self.renderer.ui_reverse = dpg.is_item_active(self.reverse_button_id)

    def load_preset(self, display_name: str):
        fn = self._preset_map.get(display_name)
        if fn is None:
            self._set_error(f"Unknown preset '{display_name}'.")
            return
        config = load_preset(fn)
        if config is None:
            self._set_error(f"Failed to load preset '{display_name}', see log.")
            return
        self.game.apply_config(config)
        self._set_status(f"Loaded preset: {config.name}")

    def _sync_ui_with_game(self):
        """
        Periodic UI update mirroring the HUD snapshot and any new game message.
        """
        hud = self.game.snapshot()
        dpg.set_value(
            self.info_id,
            f"Black Hole: {hud.black_hole_distance:.2f}px\n"
            f"Blue Planet: {hud.planet_distance:.2f}px\n"
            f"Fuel: {hud.fuel:.2f}\n"
            f"Ship Speed: {hud.speed:.2f}px/s",
        )
        dpg.set_value(self.mass_id, f"Black Hole Mass: {hud.black_hole_mass:.0f}  "
                                    f"(horizon {hud.black_hole_radius:.1f}px, {hud.asteroid_count} asteroids)")
        dpg.set_value(self.high_score_id, f"High Score: {hud.high_score:.1f}")
        dpg.set_value(self.deposited_id, f"Fuel Deposited: {hud.fuel_deposited:.1f}")

        dpg.configure_item(self.fuel_alert_id, show=hud.collecting_fuel)
        dpg.configure_item(self.out_of_fuel_id, show=hud.out_of_fuel)
        if hud.near_planet:
            if hud.too_fast:
                dpg.set_value(self.landing_alert_id, "Slow down below 150 px/s to land on the planet!")
                dpg.configure_item(self.landing_alert_id, color=(255, 180, 80), show=True)
            else:
                text = "Landing... hold steady" if hud.landing else "Ready to land!"
                dpg.set_value(self.landing_alert_id, text)
                dpg.configure_item(self.landing_alert_id, color=(140, 255, 140), show=True)
        else:
            dpg.configure_item(self.landing_alert_id, show=False)

        msg = self.game.pop_message()
        if msg:
            self._set_status(msg, color=(255, 220, 120))

        dpg.configure_item(self.pause_button_id, label="Start" if hud.paused else "Pause")


# ============================================================
# Application Entry
# ============================================================

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Blackhole Run")
    parser.add_argument("--preset", help="preset file name in presets/ (e.g. classic.json)")
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = GameConfig()
    if args.preset:
        loaded = load_preset(args.preset)
        if loaded is None:
            logger.warning("Falling back to the classic tuning")
        else:
            config = loaded

    game = GameController(config)
    renderer = GameRenderer(game)
    renderer.start()

    ui = UI(game, renderer)

    # Space in the control panel toggles pause as well
    with dpg.handler_registry():
        def key_press(sender, app_data):
            if app_data == dpg.mvKey_Spacebar:
                ui._toggle_pause()
        dpg.add_key_press_handler(callback=key_press)

    try:
        dpg.start_dearpygui()
    finally:
        renderer.running = False
        renderer.join(timeout=2.0)
        dpg.destroy_context()


if __name__ == "__main__":
    main()
