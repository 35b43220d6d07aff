#!/usr/bin/env python3
"""
General utilities for Blackhole Run.
"""
from typing import Optional, Tuple


def try_float(val) -> Optional[float]:
    try:
        return float(val)
    except (TypeError, ValueError):
        return None


def try_pair(val) -> Optional[Tuple[float, float]]:
    """Coerce a two-item sequence (e.g. a JSON list) into a float tuple."""
    try:
        x, y = val
    except (TypeError, ValueError):
        return None
    fx, fy = try_float(x), try_float(y)
    if fx is None or fy is None:
        return None
    return (fx, fy)
