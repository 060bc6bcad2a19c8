"""
Color tools: shade ramps, gradients and color mixing.
"""
from typing import List, Sequence

import numpy as np

from .conversions import hex_to_hsl, hex_to_rgb, hsl_to_hex, normalize_hex, rgb_to_hex


def generate_shades(hex_color: str, count: int = 9) -> List[str]:
    """
    Generate a lightness ramp of a color.

    Keeps hue and saturation and spreads HSL lightness evenly from 10% to
    90%, darkest first. A single shade uses 50%.
    """
    if count < 1:
        raise ValueError(f"Shade count must be at least 1, got {count}")

    h, s, _ = hex_to_hsl(hex_color)
    if count == 1:
        return [hsl_to_hex(h, s, 0.5)]
    return [hsl_to_hex(h, s, float(l)) for l in np.linspace(0.1, 0.9, count)]


def generate_gradient(stops: Sequence[str], steps: int) -> List[str]:
    """
    Interpolate a piecewise linear RGB gradient through the stops.

    Args:
        stops: Two or more hex colors
        steps: Number of output colors (>= 2); first and last equal the end stops

    Returns:
        List of steps hex colors
    """
    if len(stops) < 2:
        raise ValueError("A gradient needs at least two stops")
    if steps < 2:
        raise ValueError(f"A gradient needs at least two steps, got {steps}")

    rgb = np.array([hex_to_rgb(s) for s in stops], dtype=np.float64)
    stop_positions = np.linspace(0.0, 1.0, len(stops))
    positions = np.linspace(0.0, 1.0, steps)

    channels = [np.interp(positions, stop_positions, rgb[:, c]) for c in range(3)]
    return [rgb_to_hex(color) for color in zip(*channels)]


def _check_ratio(ratio: float) -> float:
    if not 0.0 <= ratio <= 1.0:
        raise ValueError(f"Mix ratio must be between 0 and 1, got {ratio}")
    return float(ratio)


def mix_colors(hex1: str, hex2: str, ratio: float = 0.5) -> str:
    """
    Mix two colors in HSL space.

    Hue travels along the shorter arc of the color wheel. ratio=0 returns
    hex1, ratio=1 returns hex2.
    """
    ratio = _check_ratio(ratio)
    h1, s1, l1 = hex_to_hsl(hex1)
    h2, s2, l2 = hex_to_hsl(hex2)

    # Achromatic colors have no meaningful hue; borrow the other one
    if s1 == 0:
        h1 = h2
    if s2 == 0:
        h2 = h1

    delta = ((h2 - h1 + 180.0) % 360.0) - 180.0
    return hsl_to_hex(
        (h1 + delta * ratio) % 360.0,
        s1 + (s2 - s1) * ratio,
        l1 + (l2 - l1) * ratio,
    )


def mix_colors_rgb(hex1: str, hex2: str, ratio: float = 0.5) -> str:
    """Mix two colors by linear interpolation of their RGB channels."""
    ratio = _check_ratio(ratio)
    rgb1 = np.array(hex_to_rgb(hex1), dtype=np.float64)
    rgb2 = np.array(hex_to_rgb(hex2), dtype=np.float64)
    return rgb_to_hex(rgb1 + (rgb2 - rgb1) * ratio)


def mix_multiple_colors(hexes: Sequence[str]) -> str:
    """Average any number of colors in RGB."""
    if not hexes:
        raise ValueError("At least one color is required")
    if len(hexes) == 1:
        return normalize_hex(hexes[0])
    rgb = np.array([hex_to_rgb(h) for h in hexes], dtype=np.float64)
    return rgb_to_hex(rgb.mean(axis=0))
