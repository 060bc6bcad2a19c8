"""
Color naming engine.

Maps an arbitrary color to a human-readable name. Lookup order:

1. Pure black / pure white short-circuit
2. Exact match in the named color database
3. Close match by CIE76 Delta E below a fixed threshold
4. Grayscale naming from lightness alone when saturation is near zero
5. Descriptive composition "{saturation} {lightness} {hue}"

Every step is a pure function of the hex value.
"""

import math
from dataclasses import dataclass

from loguru import logger

from palettekit.constants import (
    BLACK_LIGHTNESS_THRESHOLD,
    CLOSE_MATCH_DELTA_E,
    DARK_GRAY_LIGHTNESS_THRESHOLD,
    GRAYSCALE_SATURATION_THRESHOLD,
    HUE_SECTORS,
    LIGHT_GRAY_LIGHTNESS_THRESHOLD,
    LIGHTNESS_DESCRIPTORS,
    SATURATION_DESCRIPTORS,
    WHITE_LIGHTNESS_THRESHOLD,
)
from .conversions import hex_to_hsl, hex_to_lab, normalize_hex
from .named_colors import HEX_TO_NAME, NAMED_COLORS_LAB


@dataclass(frozen=True)
class NearestColorResult:
    """Closest database entry to a queried color."""
    name: str
    hex: str
    distance: float  # CIE76 Delta E


def find_nearest_named_color(hex_color: str) -> NearestColorResult:
    """
    Find the perceptually closest named color.

    Args:
        hex_color: Color to look up

    Returns:
        NearestColorResult with the Delta E to the best entry
    """
    lab = hex_to_lab(hex_color)
    best_name, best_hex, best_distance = None, None, math.inf

    for name, hex_value, entry_lab in NAMED_COLORS_LAB:
        distance = math.dist(lab, entry_lab)
        if distance < best_distance:
            best_name, best_hex, best_distance = name, hex_value, distance

    return NearestColorResult(name=best_name, hex=best_hex, distance=best_distance)


def get_lightness_descriptor(lightness: float) -> str:
    """Classify HSL lightness into one of seven bands."""
    for lower_bound, descriptor in LIGHTNESS_DESCRIPTORS:
        if lightness >= lower_bound:
            return descriptor
    return LIGHTNESS_DESCRIPTORS[-1][1]


def get_saturation_descriptor(saturation: float) -> str:
    """Classify HSL saturation into one of five bands."""
    for upper_bound, descriptor in SATURATION_DESCRIPTORS:
        if saturation < upper_bound:
            return descriptor
    return SATURATION_DESCRIPTORS[-1][1]


def get_hue_name(hue: float) -> str:
    """Name the hue sector containing hue (degrees)."""
    hue = hue % 360.0
    for upper_bound, name in HUE_SECTORS:
        if hue < upper_bound:
            return name
    return HUE_SECTORS[-1][1]


def get_grayscale_name(lightness: float) -> str:
    """Name an achromatic color from its lightness."""
    if lightness >= WHITE_LIGHTNESS_THRESHOLD:
        return "White"
    if lightness <= BLACK_LIGHTNESS_THRESHOLD:
        return "Black"
    if lightness > LIGHT_GRAY_LIGHTNESS_THRESHOLD:
        return "Light Gray"
    if lightness < DARK_GRAY_LIGHTNESS_THRESHOLD:
        return "Dark Gray"
    return "Gray"


def describe_color(hex_color: str) -> str:
    """
    Build a descriptive name from HSL bands, ignoring the database.

    Examples:
        "#FF0000" -> "Bright Red", "#005580" -> "Bright Dark Blue"
    """
    hue, saturation, lightness = hex_to_hsl(hex_color)

    if saturation < GRAYSCALE_SATURATION_THRESHOLD:
        return get_grayscale_name(lightness)

    parts = [
        get_saturation_descriptor(saturation),
        get_lightness_descriptor(lightness),
        get_hue_name(hue),
    ]
    # Empty descriptors collapse; words are already title-cased
    return " ".join(" ".join(parts).split())


def get_color_name(hex_color: str, close_match_threshold: float = CLOSE_MATCH_DELTA_E) -> str:
    """
    Get a human-readable name for a color.

    Args:
        hex_color: Color in any accepted hex form
        close_match_threshold: Delta E below which the nearest database
            entry is used; 0 disables close matching

    Returns:
        Color name such as "Red", "Cornflower Blue" or "Muted Dark Blue Green"

    Raises:
        InvalidColorError: If hex_color is malformed
    """
    hex_color = normalize_hex(hex_color)

    if hex_color == "#000000":
        return "Black"
    if hex_color == "#FFFFFF":
        return "White"

    exact = HEX_TO_NAME.get(hex_color)
    if exact is not None:
        return exact

    nearest = find_nearest_named_color(hex_color)
    if nearest.distance < close_match_threshold:
        logger.debug(f"Close match {hex_color} -> {nearest.name} (ΔE={nearest.distance:.2f})")
        return nearest.name

    return describe_color(hex_color)
