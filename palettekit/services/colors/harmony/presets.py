"""
Harmony presets and their generation priorities.

Each preset maps to an ordered tuple of generation tokens. The generator
walks the tuple, emitting colors for each token until the palette is full.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class GenerationToken(str, Enum):
    """What the generator should produce next."""
    WHITE = "white"
    BLACK = "black"
    ANALOGOUS = "analogous"
    COMPLEMENTARY = "complementary"
    TRIADIC = "triadic"
    TETRADIC = "tetradic"
    SPLIT_COMPLEMENTARY = "splitComplementary"
    SQUARE = "square"
    COMPOUND = "compound"
    VARIATIONS = "variations"


class HarmonyPreset(str, Enum):
    """Strict color-theory harmonies plus the web-friendly default."""
    WEB_FRIENDLY = "webFriendly"
    ANALOGOUS = "analogous"
    MONOCHROMATIC = "monochromatic"
    COMPLEMENTARY = "complementary"
    TRIADIC = "triadic"
    TETRADIC = "tetradic"
    SPLIT_COMPLEMENTARY = "splitComplementary"
    SQUARE = "square"
    COMPOUND = "compound"


DEFAULT_HARMONY_PRESET = HarmonyPreset.WEB_FRIENDLY

_T = GenerationToken

HARMONY_GENERATION_PRIORITIES: Dict[HarmonyPreset, Tuple[GenerationToken, ...]] = {
    # Neutrals first, then common relationships, then variations
    HarmonyPreset.WEB_FRIENDLY: (_T.WHITE, _T.BLACK, _T.COMPLEMENTARY, _T.ANALOGOUS, _T.VARIATIONS),
    # Strict harmonies: relationship first, then variations, then neutrals
    HarmonyPreset.ANALOGOUS: (_T.ANALOGOUS, _T.VARIATIONS, _T.WHITE, _T.BLACK),
    HarmonyPreset.MONOCHROMATIC: (_T.VARIATIONS, _T.WHITE, _T.BLACK),
    HarmonyPreset.COMPLEMENTARY: (_T.COMPLEMENTARY, _T.VARIATIONS, _T.WHITE, _T.BLACK),
    HarmonyPreset.TRIADIC: (_T.TRIADIC, _T.VARIATIONS, _T.WHITE, _T.BLACK),
    HarmonyPreset.TETRADIC: (_T.TETRADIC, _T.VARIATIONS, _T.WHITE, _T.BLACK),
    HarmonyPreset.SPLIT_COMPLEMENTARY: (_T.SPLIT_COMPLEMENTARY, _T.VARIATIONS, _T.WHITE, _T.BLACK),
    HarmonyPreset.SQUARE: (_T.SQUARE, _T.VARIATIONS, _T.WHITE, _T.BLACK),
    HarmonyPreset.COMPOUND: (_T.COMPOUND, _T.VARIATIONS, _T.WHITE, _T.BLACK),
}

# Used when growing an existing palette without an explicit preset
GROWTH_PRIORITIES: Tuple[GenerationToken, ...] = (
    _T.ANALOGOUS, _T.COMPLEMENTARY, _T.TRIADIC, _T.SPLIT_COMPLEMENTARY, _T.VARIATIONS,
)


@dataclass(frozen=True)
class HarmonyOption:
    """Display metadata for a preset."""
    value: HarmonyPreset
    pretty_name: str
    description: str


HARMONY_OPTIONS: Dict[HarmonyPreset, HarmonyOption] = {
    HarmonyPreset.WEB_FRIENDLY: HarmonyOption(
        HarmonyPreset.WEB_FRIENDLY, "Web-Friendly (Default)",
        "Smart mix of neutrals (white, black) and common harmonies (complementary, "
        "analogous) with tasteful variations. Perfect for web design.",
    ),
    HarmonyPreset.ANALOGOUS: HarmonyOption(
        HarmonyPreset.ANALOGOUS, "Analogous",
        "Colors that sit next to each other on the color wheel.",
    ),
    HarmonyPreset.MONOCHROMATIC: HarmonyOption(
        HarmonyPreset.MONOCHROMATIC, "Monochromatic",
        "Variations in lightness and saturation of a single hue.",
    ),
    HarmonyPreset.COMPLEMENTARY: HarmonyOption(
        HarmonyPreset.COMPLEMENTARY, "Complementary",
        "Colors opposite each other on the color wheel.",
    ),
    HarmonyPreset.TRIADIC: HarmonyOption(
        HarmonyPreset.TRIADIC, "Triadic",
        "Three colors evenly spaced on the color wheel.",
    ),
    HarmonyPreset.TETRADIC: HarmonyOption(
        HarmonyPreset.TETRADIC, "Tetradic",
        "Four colors arranged into two complementary pairs.",
    ),
    HarmonyPreset.SPLIT_COMPLEMENTARY: HarmonyOption(
        HarmonyPreset.SPLIT_COMPLEMENTARY, "Split Complementary",
        "A base color plus two adjacent to its complement.",
    ),
    HarmonyPreset.SQUARE: HarmonyOption(
        HarmonyPreset.SQUARE, "Square",
        "Four colors evenly spaced around the color wheel.",
    ),
    HarmonyPreset.COMPOUND: HarmonyOption(
        HarmonyPreset.COMPOUND, "Compound",
        "A balanced mix using complementary and nearby hues.",
    ),
}


def _check_exhaustive() -> None:
    missing = set(HarmonyPreset) - set(HARMONY_GENERATION_PRIORITIES) | \
        set(HarmonyPreset) - set(HARMONY_OPTIONS)
    if missing:
        raise RuntimeError(f"Harmony tables missing presets: {sorted(p.value for p in missing)}")


_check_exhaustive()


def get_generation_priorities(preset: HarmonyPreset) -> Tuple[GenerationToken, ...]:
    """Return the ordered generation tokens for a preset."""
    return HARMONY_GENERATION_PRIORITIES[HarmonyPreset(preset)]
