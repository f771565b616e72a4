"""Iteration-count to RGB mapping for the escape-time fractals.

Scalar functions serve single-point queries; the ``*_array`` variants apply
the same formulas to whole rows of pixels and agree with them exactly.
"""
from __future__ import annotations

import math
from enum import Enum

import numpy as np

from chaos_lab.types.values import ColorRGB

SATURATION = 0.8
# Brightness used by the HSV palette
VALUE = 0.8
# Lightness ramp of the HSL palette: 0.3 at t'=0 up to 0.9 at t'=1
LIGHTNESS_BASE = 0.3
LIGHTNESS_SPAN = 0.6

BLACK = ColorRGB(0, 0, 0)


class Palette(str, Enum):
    HSV = "hsv"
    HSL = "hsl"


def _channel(value: float) -> int:
    # half-up rounding, clamped
    return min(255, max(0, int(math.floor(value * 255 + 0.5))))


def _channel_array(value: np.ndarray) -> np.ndarray:
    return np.clip(np.floor(value * 255 + 0.5), 0, 255).astype(np.uint8)


def hsv_to_rgb(h: float, s: float, v: float) -> ColorRGB:
    """h in degrees [0, 360), s and v in [0, 1]."""
    c = v * s
    x = c * (1 - abs((h / 60) % 2 - 1))
    m = v - c

    sector = int(h // 60) % 6
    r, g, b = [
        (c, x, 0.0),
        (x, c, 0.0),
        (0.0, c, x),
        (0.0, x, c),
        (x, 0.0, c),
        (c, 0.0, x),
    ][sector]
    return ColorRGB(_channel(r + m), _channel(g + m), _channel(b + m))


def _hue_to_rgb(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_rgb(h: float, s: float, l: float) -> ColorRGB:
    """h in degrees [0, 360), s and l in [0, 1]."""
    h /= 360
    if s == 0:
        r = g = b = l
    else:
        q = l * (1 + s) if l < 0.5 else l + s - l * s
        p = 2 * l - q
        r = _hue_to_rgb(p, q, h + 1 / 3)
        g = _hue_to_rgb(p, q, h)
        b = _hue_to_rgb(p, q, h - 1 / 3)
    return ColorRGB(_channel(r), _channel(g), _channel(b))


def hsv_to_rgb_array(h: np.ndarray, s: float, v: np.ndarray | float) -> np.ndarray:
    h = np.asarray(h, dtype=np.float64)
    v = np.broadcast_to(np.asarray(v, dtype=np.float64), h.shape)
    c = v * s
    x = c * (1 - np.abs((h / 60) % 2 - 1))
    m = v - c
    zero = np.zeros_like(h)

    sector = np.floor(h / 60).astype(np.int64) % 6
    conds = [sector == k for k in range(6)]
    r = np.select(conds, [c, x, zero, zero, x, c])
    g = np.select(conds, [x, c, c, x, zero, zero])
    b = np.select(conds, [zero, zero, x, c, c, x])
    return np.stack(
        [_channel_array(r + m), _channel_array(g + m), _channel_array(b + m)], axis=-1
    )


def _hue_to_rgb_array(p: np.ndarray, q: np.ndarray, t: np.ndarray) -> np.ndarray:
    t = np.where(t < 0, t + 1, t)
    t = np.where(t > 1, t - 1, t)
    return np.select(
        [t < 1 / 6, t < 1 / 2, t < 2 / 3],
        [p + (q - p) * 6 * t, q, p + (q - p) * (2 / 3 - t) * 6],
        default=p,
    )


def hsl_to_rgb_array(h: np.ndarray, s: float, l: np.ndarray) -> np.ndarray:
    h = np.asarray(h, dtype=np.float64) / 360
    l = np.asarray(l, dtype=np.float64)
    if s == 0:
        r = g = b = l
    else:
        q = np.where(l < 0.5, l * (1 + s), l + s - l * s)
        p = 2 * l - q
        r = _hue_to_rgb_array(p, q, h + 1 / 3)
        g = _hue_to_rgb_array(p, q, h)
        b = _hue_to_rgb_array(p, q, h - 1 / 3)
    return np.stack([_channel_array(r), _channel_array(g), _channel_array(b)], axis=-1)


def escape_color(
    iterations: int,
    escaped: bool,
    max_iterations: int,
    color_intensity: float,
    palette: Palette,
) -> ColorRGB:
    """Color of one pixel. Points that never escaped are black.

    t = iterations / max_iterations is reshaped to t' = t**(1/color_intensity);
    HSV uses hue t'*360, HSL uses hue t'*360 + 180 with lightness rising in t'.
    """
    if not escaped:
        return BLACK
    t = (iterations / max_iterations) ** (1 / color_intensity)
    if palette == Palette.HSV:
        return hsv_to_rgb((t * 360) % 360, SATURATION, VALUE)
    return hsl_to_rgb((t * 360 + 180) % 360, SATURATION, LIGHTNESS_BASE + t * LIGHTNESS_SPAN)


def escape_colors(
    iterations: np.ndarray,
    escaped: np.ndarray,
    max_iterations: int,
    color_intensity: float,
    palette: Palette,
) -> np.ndarray:
    """Vectorised ``escape_color``; returns uint8 RGB with a trailing axis of 3."""
    t = (np.asarray(iterations, dtype=np.float64) / max_iterations) ** (1 / color_intensity)
    if palette == Palette.HSV:
        rgb = hsv_to_rgb_array((t * 360) % 360, SATURATION, VALUE)
    else:
        rgb = hsl_to_rgb_array(
            (t * 360 + 180) % 360, SATURATION, LIGHTNESS_BASE + t * LIGHTNESS_SPAN
        )
    rgb[~np.asarray(escaped, dtype=bool)] = 0
    return rgb
