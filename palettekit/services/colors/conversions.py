"""
Color model and conversions.

All color strings cross the API as canonical "#RRGGBB" uppercase hex.
Conventions used throughout PaletteKit:

- RGB components are integers 0-255
- HSL/HSV hue is in degrees [0, 360); saturation, lightness and value are
  fractions [0, 1]
- LAB is CIE L*a*b* with the D65 reference white
- CMYK components are fractions [0, 1]

Validation happens once, in normalize_hex; every other function that takes
a hex string goes through it.
"""

import colorsys
import math
import re
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np

from palettekit.constants import SIMILAR_COLOR_DELTA_E
from palettekit.exceptions import InvalidColorError

HEX_PATTERN = re.compile(r"^#?([0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})$")

# D65 reference white (2° observer)
D65_WHITE = (0.95047, 1.00000, 1.08883)

_LAB_EPSILON = (6.0 / 29.0) ** 3
_LAB_KAPPA = 3.0 * (6.0 / 29.0) ** 2

RGB = Tuple[int, int, int]


# ============================================================================
# HEX
# ============================================================================

def normalize_hex(value: str) -> str:
    """
    Canonicalize a hex color string.

    Args:
        value: 3- or 6-digit hex, with or without a leading '#'

    Returns:
        Uppercase "#RRGGBB"

    Raises:
        InvalidColorError: If the value is not a valid hex color
    """
    if not isinstance(value, str):
        raise InvalidColorError(value)

    match = HEX_PATTERN.match(value.strip())
    if match is None:
        raise InvalidColorError(value)

    digits = match.group(1)
    if len(digits) == 3:
        # Shorthand: each digit is doubled ("f0a" -> "ff00aa")
        digits = "".join(ch * 2 for ch in digits)

    return f"#{digits.upper()}"


def is_valid_hex(value: object) -> bool:
    """Return True if value is a valid 3- or 6-digit hex color."""
    return isinstance(value, str) and HEX_PATTERN.match(value.strip()) is not None


def hex_to_rgb(hex_color: str) -> RGB:
    """Convert hex color string to RGB tuple."""
    hex_clean = normalize_hex(hex_color)[1:]
    return tuple(int(hex_clean[i:i + 2], 16) for i in (0, 2, 4))


def rgb_to_hex(rgb: Sequence[float]) -> str:
    """
    Convert an RGB triple to a hex color string.

    Float components are rounded and every component is clamped to 0-255,
    so numpy centroids can be passed in directly.
    """
    r, g, b = [max(0, min(255, int(round(float(x))))) for x in rgb]
    return f"#{r:02X}{g:02X}{b:02X}"


# ============================================================================
# HSL / HSV
# ============================================================================

def rgb_to_hsl(rgb: Sequence[int]) -> Tuple[float, float, float]:
    """
    Convert RGB to HSL.

    Returns:
        Tuple of (H, S, L) where H in [0, 360), S and L in [0, 1]
    """
    r, g, b = [c / 255.0 for c in rgb]
    h, l, s = colorsys.rgb_to_hls(r, g, b)
    return (h * 360.0) % 360.0, s, l


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    """Convert HSL (degrees, fraction, fraction) to an RGB tuple."""
    s = max(0.0, min(1.0, s))
    l = max(0.0, min(1.0, l))
    r, g, b = colorsys.hls_to_rgb((h % 360.0) / 360.0, l, s)
    return tuple(max(0, min(255, int(round(c * 255)))) for c in (r, g, b))


def hex_to_hsl(hex_color: str) -> Tuple[float, float, float]:
    """Convert hex color to (H degrees, S, L)."""
    return rgb_to_hsl(hex_to_rgb(hex_color))


def hsl_to_hex(h: float, s: float, l: float) -> str:
    """Convert HSL to uppercase hex. S and L are clamped to [0, 1]."""
    return rgb_to_hex(hsl_to_rgb(h, s, l))


def rgb_to_hsv(rgb: Sequence[int]) -> Tuple[float, float, float]:
    """Convert RGB to (H degrees, S, V)."""
    r, g, b = [c / 255.0 for c in rgb]
    h, s, v = colorsys.rgb_to_hsv(r, g, b)
    return (h * 360.0) % 360.0, s, v


def hex_to_hsv(hex_color: str) -> Tuple[float, float, float]:
    """Convert hex color to (H degrees, S, V)."""
    return rgb_to_hsv(hex_to_rgb(hex_color))


# ============================================================================
# CIE L*a*b* (D65)
# ============================================================================

def _srgb_to_linear(c: float) -> float:
    return c / 12.92 if c <= 0.04045 else ((c + 0.055) / 1.055) ** 2.4


def _linear_to_srgb(c: float) -> float:
    return 12.92 * c if c <= 0.0031308 else 1.055 * (c ** (1.0 / 2.4)) - 0.055


def _lab_f(t: float) -> float:
    return t ** (1.0 / 3.0) if t > _LAB_EPSILON else t / _LAB_KAPPA + 4.0 / 29.0


def _lab_f_inv(t: float) -> float:
    return t ** 3 if t > 6.0 / 29.0 else _LAB_KAPPA * (t - 4.0 / 29.0)


def rgb_to_lab(rgb: Sequence[int]) -> Tuple[float, float, float]:
    """
    Convert RGB to CIE L*a*b*.

    Returns:
        Tuple of (L, a, b) with L in [0, 100]
    """
    r, g, b = [_srgb_to_linear(c / 255.0) for c in rgb]

    # Linear sRGB -> XYZ (D65)
    x = 0.4124564 * r + 0.3575761 * g + 0.1804375 * b
    y = 0.2126729 * r + 0.7151522 * g + 0.0721750 * b
    z = 0.0193339 * r + 0.1191920 * g + 0.9503041 * b

    xn, yn, zn = D65_WHITE
    fx, fy, fz = _lab_f(x / xn), _lab_f(y / yn), _lab_f(z / zn)

    return 116.0 * fy - 16.0, 500.0 * (fx - fy), 200.0 * (fy - fz)


def lab_to_rgb(l: float, a: float, b: float) -> RGB:
    """Convert CIE L*a*b* to an RGB tuple (out-of-gamut values are clamped)."""
    fy = (l + 16.0) / 116.0
    fx = fy + a / 500.0
    fz = fy - b / 200.0

    xn, yn, zn = D65_WHITE
    x, y, z = xn * _lab_f_inv(fx), yn * _lab_f_inv(fy), zn * _lab_f_inv(fz)

    r = 3.2404542 * x - 1.5371385 * y - 0.4985314 * z
    g = -0.9692660 * x + 1.8760108 * y + 0.0415560 * z
    bl = 0.0556434 * x - 0.2040259 * y + 1.0572252 * z

    return tuple(
        max(0, min(255, int(round(_linear_to_srgb(max(0.0, min(1.0, c))) * 255))))
        for c in (r, g, bl)
    )


def hex_to_lab(hex_color: str) -> Tuple[float, float, float]:
    """Convert hex color to CIE L*a*b*."""
    return rgb_to_lab(hex_to_rgb(hex_color))


def lab_to_hex(l: float, a: float, b: float) -> str:
    """Convert CIE L*a*b* to hex."""
    return rgb_to_hex(lab_to_rgb(l, a, b))


# ============================================================================
# CMYK
# ============================================================================

def rgb_to_cmyk(rgb: Sequence[int]) -> Tuple[float, float, float, float]:
    """
    Convert RGB to CMYK using the subtractive formula.

    Returns:
        Tuple of (C, M, Y, K) fractions; pure black yields (0, 0, 0, 1)
    """
    r, g, b = [c / 255.0 for c in rgb]
    k = 1.0 - max(r, g, b)
    if k >= 1.0:
        return 0.0, 0.0, 0.0, 1.0

    c = (1.0 - r - k) / (1.0 - k)
    m = (1.0 - g - k) / (1.0 - k)
    y = (1.0 - b - k) / (1.0 - k)
    return c, m, y, k


def cmyk_to_rgb(c: float, m: float, y: float, k: float) -> RGB:
    """Convert CMYK fractions to an RGB tuple."""
    return tuple(
        max(0, min(255, int(round(255.0 * (1.0 - v) * (1.0 - k)))))
        for v in (c, m, y)
    )


def hex_to_cmyk(hex_color: str) -> Tuple[float, float, float, float]:
    """Convert hex color to CMYK fractions."""
    return rgb_to_cmyk(hex_to_rgb(hex_color))


def cmyk_to_hex(c: float, m: float, y: float, k: float) -> str:
    """Convert CMYK fractions to hex."""
    return rgb_to_hex(cmyk_to_rgb(c, m, y, k))


# ============================================================================
# Luminance & distance (shared with the accessibility engine)
# ============================================================================

def linearize_channel(value: int) -> float:
    """Linearize an 8-bit sRGB channel using the WCAG 2.x formula."""
    normalized = value / 255.0
    if normalized <= 0.03928:
        return normalized / 12.92
    return ((normalized + 0.055) / 1.055) ** 2.4


def relative_luminance(hex_color: str) -> float:
    """
    Calculate WCAG relative luminance.

    Returns:
        Luminance in [0, 1]
    """
    r, g, b = [linearize_channel(c) for c in hex_to_rgb(hex_color)]
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(hex1: str, hex2: str) -> float:
    """
    Calculate the WCAG contrast ratio between two colors.

    Returns:
        Ratio in [1, 21]; symmetric in its arguments
    """
    lum1 = relative_luminance(hex1)
    lum2 = relative_luminance(hex2)
    lighter, darker = max(lum1, lum2), min(lum1, lum2)
    return (lighter + 0.05) / (darker + 0.05)


def rgb_distance(rgb1: Sequence[float], rgb2: Sequence[float]) -> float:
    """Euclidean distance between two RGB triples."""
    return math.dist(rgb1, rgb2)


def delta_e(hex1: str, hex2: str) -> float:
    """CIE76 Delta E (Euclidean distance in L*a*b*) between two colors."""
    return math.dist(hex_to_lab(hex1), hex_to_lab(hex2))


def is_color_similar(hex_color: str, others: Iterable[str],
                     threshold: float = SIMILAR_COLOR_DELTA_E) -> bool:
    """
    Check whether a color is perceptually close to any color in a list.

    Args:
        hex_color: Candidate color
        others: Colors to compare against
        threshold: Delta E below which two colors count as similar

    Returns:
        True if any color in others lies within threshold
    """
    lab = hex_to_lab(hex_color)
    return any(math.dist(lab, hex_to_lab(other)) < threshold for other in others)


# ============================================================================
# Random colors
# ============================================================================

def generate_random_color(rng: Optional[np.random.Generator] = None) -> str:
    """
    Sample a color uniformly from the RGB cube.

    Args:
        rng: Seeded numpy Generator for reproducible output

    Returns:
        Uppercase hex color
    """
    rng = rng if rng is not None else np.random.default_rng()
    return rgb_to_hex(rng.integers(0, 256, size=3))
