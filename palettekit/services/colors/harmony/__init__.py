"""
PaletteKit Color Harmony Engine

Hue geometry for color-theory relationships. Each relationship is a fixed
set of degree offsets from a base hue; rotations are exact and wrap into
[0, 360).
"""

from typing import Dict, List, Tuple

from .presets import (
    GenerationToken, HarmonyPreset, DEFAULT_HARMONY_PRESET,
    HARMONY_GENERATION_PRIORITIES, HARMONY_OPTIONS, get_generation_priorities,
)

ANALOGOUS_HUE_OFFSET = 30.0
COMPLEMENTARY_HUE_OFFSET = 180.0
TRIADIC_HUE_OFFSET = 120.0
SPLIT_COMPLEMENTARY_HUE_OFFSET = 150.0

# Degree offsets from the base hue, in emission order
HARMONY_OFFSETS: Dict[GenerationToken, Tuple[float, ...]] = {
    GenerationToken.ANALOGOUS: (ANALOGOUS_HUE_OFFSET, -ANALOGOUS_HUE_OFFSET),
    GenerationToken.COMPLEMENTARY: (COMPLEMENTARY_HUE_OFFSET,),
    GenerationToken.TRIADIC: (TRIADIC_HUE_OFFSET, -TRIADIC_HUE_OFFSET),
    # Two complementary pairs 90° apart: the base pair first, then the second pair
    GenerationToken.TETRADIC: (180.0, 90.0, 270.0),
    GenerationToken.SPLIT_COMPLEMENTARY: (SPLIT_COMPLEMENTARY_HUE_OFFSET, -SPLIT_COMPLEMENTARY_HUE_OFFSET),
    # Four hues 90° apart, in wheel order
    GenerationToken.SQUARE: (90.0, 180.0, 270.0),
    # Analogous neighbour, complement, and the complement's neighbour
    GenerationToken.COMPOUND: (ANALOGOUS_HUE_OFFSET, COMPLEMENTARY_HUE_OFFSET, 210.0),
}


def rotate_hue(h: float, degrees: float) -> float:
    """
    Rotate hue by specified degrees.

    Args:
        h: Original hue in degrees
        degrees: Rotation in degrees (can be negative)

    Returns:
        Rotated hue in [0, 360)
    """
    return (h + degrees) % 360.0


def get_hue_separation(h1: float, h2: float) -> float:
    """
    Calculate the minimum angular separation between two hues.

    Returns:
        Separation in degrees [0, 180]
    """
    diff = abs(h1 - h2) % 360.0
    return min(diff, 360.0 - diff)


def harmony_hues(base_hue: float, harmony: GenerationToken) -> List[float]:
    """
    Hues related to base_hue by a harmony relationship (base excluded).

    Args:
        base_hue: Base hue in degrees
        harmony: A relationship token (not WHITE, BLACK or VARIATIONS)

    Raises:
        ValueError: If the token has no hue relationship
    """
    token = GenerationToken(harmony)
    if token not in HARMONY_OFFSETS:
        raise ValueError(f"'{token.value}' is not a hue relationship")
    return [rotate_hue(base_hue, offset) for offset in HARMONY_OFFSETS[token]]


__all__ = [
    "GenerationToken",
    "HarmonyPreset",
    "DEFAULT_HARMONY_PRESET",
    "HARMONY_GENERATION_PRIORITIES",
    "HARMONY_OPTIONS",
    "HARMONY_OFFSETS",
    "get_generation_priorities",
    "rotate_hue",
    "get_hue_separation",
    "harmony_hues",
]
