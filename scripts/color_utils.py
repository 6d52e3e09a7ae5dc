#!/usr/bin/env python3
"""Color helpers: hex parsing, rgba strings and a Lab-space delta-E heuristic."""

import math
from typing import Tuple

RGB = Tuple[int, int, int]

# D65 reference white
REFERENCE_WHITE = (95.047, 100.0, 108.883)


def _normalize_hex(value: str) -> str:
    value = str(value or "").strip().lstrip("#")
    if len(value) == 3:
        value = "".join(c + c for c in value)
    return value


def hex_to_rgb(value: str) -> RGB:
    """Parse #rgb / #rrggbb. Anything unparseable becomes black."""
    value = _normalize_hex(value)
    if len(value) != 6:
        return (0, 0, 0)
    try:
        number = int(value, 16)
    except ValueError:
        return (0, 0, 0)
    return ((number >> 16) & 255, (number >> 8) & 255, number & 255)


def hex_to_rgba(value: str, alpha) -> str:
    r, g, b = hex_to_rgb(value)
    return f"rgba({r}, {g}, {b}, {alpha})"


def _linearize(channel: int) -> float:
    c = channel / 255
    if c > 0.04045:
        return ((c + 0.055) / 1.055) ** 2.4
    return c / 12.92


def rgb_to_xyz(rgb: RGB) -> Tuple[float, float, float]:
    r, g, b = (_linearize(c) * 100 for c in rgb)
    x = r * 0.4124 + g * 0.3576 + b * 0.1805
    y = r * 0.2126 + g * 0.7152 + b * 0.0722
    z = r * 0.0193 + g * 0.1192 + b * 0.9505
    return (x, y, z)


def _lab_f(t: float) -> float:
    if t > 0.008856:
        return t ** (1 / 3)
    return 7.787 * t + 16 / 116


def xyz_to_lab(xyz: Tuple[float, float, float]) -> Tuple[float, float, float]:
    fx, fy, fz = (_lab_f(v / ref) for v, ref in zip(xyz, REFERENCE_WHITE))
    return (116 * fy - 16, 500 * (fx - fy), 200 * (fy - fz))


def hex_to_lab(value: str) -> Tuple[float, float, float]:
    return xyz_to_lab(rgb_to_xyz(hex_to_rgb(value)))


def color_delta_e(hex_a: str, hex_b: str) -> float:
    """Euclidean distance between two colors in Lab space."""
    lab_a = hex_to_lab(hex_a)
    lab_b = hex_to_lab(hex_b)
    return math.sqrt(sum((a - b) ** 2 for a, b in zip(lab_a, lab_b)))
