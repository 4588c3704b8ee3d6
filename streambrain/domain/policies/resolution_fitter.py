# streambrain/domain/policies/resolution_fitter.py
from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class FittedResolution:
    width: int
    height: int
    resized: bool


def _even_down(value: float) -> int:
    n = math.ceil(value)
    return n - 1 if n % 2 else n


def _even_up(value: float) -> int:
    n = math.ceil(value)
    return n + 1 if n % 2 else n


def _within(width: int, height: int, max_width: float, max_height: float) -> bool:
    return 0 < width <= max_width and 0 < height <= max_height


def fit_resolution(width: int, height: int, max_width: float, max_height: float) -> FittedResolution:
    """
    Fit width x height inside max_width x max_height, keeping the aspect ratio.

    Encoders want even dimensions, so two candidates are tried: one bound by the
    width and one bound by the height (rounding one axis can overshoot the other).
    The height-bound candidate rounds its height *up* to even while the width-bound
    one rounds down; existing ladders rely on that, keep it.
    If neither candidate fits, the source is returned untouched with resized=False.
    """
    if width <= max_width and height <= max_height:
        return FittedResolution(width, height, False)

    if width <= 0 or height <= 0:
        return FittedResolution(width, height, False)

    ratio = width / height

    w1, h1 = _even_down(max_width), _even_down(max_width / ratio)
    if _within(w1, h1, max_width, max_height):
        return FittedResolution(w1, h1, True)

    w2, h2 = _even_down(max_height * ratio), _even_up(max_height)
    if _within(w2, h2, max_width, max_height):
        return FittedResolution(w2, h2, True)

    return FittedResolution(width, height, False)
