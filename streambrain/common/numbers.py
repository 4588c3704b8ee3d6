from __future__ import annotations

import math


def round_half_up(x: float) -> int:
    """Round to the nearest integer, .5 going up (builtin round() is banker's rounding)."""
    return math.floor(x + 0.5)


def clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else hi if x > hi else x
