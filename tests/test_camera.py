"""Tests for the world-to-screen camera."""

import pytest

from bhrun.camera import Camera2D
from bhrun.constants import MAX_UNITS_PER_PIXEL, MIN_UNITS_PER_PIXEL


@pytest.fixture
def camera():
    cam = Camera2D(center=(1200.0, 0.0), units_per_pixel=2.0)
    cam.set_viewport_size(800, 600)
    return cam


def test_center_maps_to_viewport_middle(camera):
    assert camera.world_to_screen((1200.0, 0.0)) == (400, 300)


def test_screen_to_world_inverts_projection(camera):
    world = camera.screen_to_world((500, 250))
    assert world == pytest.approx((1400.0, -100.0))
    assert camera.world_to_screen(world) == (500, 250)


def test_follow_recenters(camera):
    camera.follow((-50.0, 75.0))
    assert camera.world_to_screen((-50.0, 75.0)) == (400, 300)


def test_parallax_layers_drift_slower(camera):
    near = camera.world_to_screen((0.0, 0.0))
    far = camera.world_to_screen((0.0, 0.0), parallax=0.2)
    # The starfield is shifted by a fifth of the camera offset
    assert far[0] - near[0] == (1200 - 240) // 2


def test_zoom_is_clamped(camera):
    for _ in range(100):
        camera.zoom(1.1)
    assert camera.upp == MIN_UNITS_PER_PIXEL
    for _ in range(200):
        camera.zoom(1 / 1.1)
    assert camera.upp == MAX_UNITS_PER_PIXEL


def test_world_bounds_and_lengths(camera):
    x0, y0, x1, y1 = camera.world_bounds(margin=10.0)
    assert (x0, y0, x1, y1) == pytest.approx((390.0, -610.0, 2010.0, 610.0))
    assert camera.scale_length(15.0) == 7
    assert camera.scale_length(1.0, minimum=3) == 3
