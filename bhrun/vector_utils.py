#!/usr/bin/env python3
"""
2D vector helpers shared by the ship, asteroid and collision code.

Vectors are plain (x, y) tuples; entities replace them instead of mutating.
"""
import math
from typing import Tuple

Vec2 = Tuple[float, float]


def clamp(x: float, a: float, b: float) -> float:
    """Clamp x to the inclusive range [a, b]."""
    return max(a, min(b, x))


def vec_add(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] + b[0], a[1] + b[1])


def vec_scale(a: Vec2, s: float) -> Vec2:
    return (a[0] * s, a[1] * s)


def distance(a: Vec2, b: Vec2) -> float:
    """Euclidean distance between two points."""
    return math.hypot(b[0] - a[0], b[1] - a[1])


def speed(velocity: Vec2) -> float:
    return math.hypot(velocity[0], velocity[1])


def heading(origin: Vec2, target: Vec2) -> Tuple[Vec2, float]:
    """
    Unit vector from origin toward target, and the distance between them.

    Coincident points give ((0, 0), 0): there is no direction to follow.
    """
    dx = target[0] - origin[0]
    dy = target[1] - origin[1]
    d = math.hypot(dx, dy)
    if d == 0:
        return (0.0, 0.0), 0.0
    return (dx / d, dy / d), d
