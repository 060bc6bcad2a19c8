"""
WCAG contrast checks.

Luminance and contrast ratio come from the shared conversion primitives so
every caller measures contrast the same way.
"""
from dataclasses import dataclass
from typing import Union

from palettekit.services.colors.conversions import contrast_ratio, normalize_hex, relative_luminance
from .constants import WCAG_CONTRAST_RATIOS, WCAG_LEVEL_DESCRIPTIONS, WCAGContrastLevel

WHITE_HEX = "#FFFFFF"
BLACK_HEX = "#000000"

LevelLike = Union[WCAGContrastLevel, str]


@dataclass(frozen=True)
class TextSizeCompliance:
    aa: bool
    aaa: bool


@dataclass(frozen=True)
class WCAGCompliance:
    """All WCAG results for one text/background pair."""
    contrast_ratio: float
    accessibility_level: WCAGContrastLevel
    normal_text: TextSizeCompliance
    large_text: TextSizeCompliance


def get_minimum_contrast_ratio(level: LevelLike, is_large_text: bool = False) -> float:
    """Minimum ratio required for a level; FAIL has no requirement (1.0)."""
    normal, large = WCAG_CONTRAST_RATIOS[WCAGContrastLevel(level)]
    return large if is_large_text else normal


def passes_wcag_level(ratio: float, level: LevelLike, is_large_text: bool = False) -> bool:
    return ratio >= get_minimum_contrast_ratio(level, is_large_text)


def meets_wcag_contrast(hex1: str,
                        hex2: str,
                        level: LevelLike = WCAGContrastLevel.AA,
                        is_large_text: bool = False) -> bool:
    """
    Check whether two colors meet a WCAG contrast level.

    Args:
        hex1: Foreground color
        hex2: Background color
        level: AA (4.5 normal / 3.0 large) or AAA (7.0 / 4.5)
        is_large_text: Use the large-text thresholds

    Returns:
        True when the contrast ratio reaches the threshold
    """
    return passes_wcag_level(contrast_ratio(hex1, hex2), level, is_large_text)


def get_accessibility_level(ratio: float) -> WCAGContrastLevel:
    """Classify a contrast ratio against the normal-text thresholds."""
    if ratio >= WCAG_CONTRAST_RATIOS[WCAGContrastLevel.AAA][0]:
        return WCAGContrastLevel.AAA
    if ratio >= WCAG_CONTRAST_RATIOS[WCAGContrastLevel.AA][0]:
        return WCAGContrastLevel.AA
    return WCAGContrastLevel.FAIL


def get_wcag_level_description(level: LevelLike) -> str:
    return WCAG_LEVEL_DESCRIPTIONS[WCAGContrastLevel(level)]


def get_wcag_compliance(text_hex: str, background_hex: str) -> WCAGCompliance:
    """Evaluate a text/background pair at both levels and text sizes."""
    ratio = contrast_ratio(text_hex, background_hex)
    return WCAGCompliance(
        contrast_ratio=ratio,
        accessibility_level=get_accessibility_level(ratio),
        normal_text=TextSizeCompliance(
            aa=passes_wcag_level(ratio, WCAGContrastLevel.AA),
            aaa=passes_wcag_level(ratio, WCAGContrastLevel.AAA),
        ),
        large_text=TextSizeCompliance(
            aa=passes_wcag_level(ratio, WCAGContrastLevel.AA, is_large_text=True),
            aaa=passes_wcag_level(ratio, WCAGContrastLevel.AAA, is_large_text=True),
        ),
    )


def get_readable_text_color(background_hex: str) -> str:
    """Black or white, whichever contrasts more with the background."""
    background_hex = normalize_hex(background_hex)
    if contrast_ratio(BLACK_HEX, background_hex) >= contrast_ratio(WHITE_HEX, background_hex):
        return BLACK_HEX
    return WHITE_HEX


__all__ = [
    "WCAGCompliance",
    "TextSizeCompliance",
    "relative_luminance",
    "contrast_ratio",
    "meets_wcag_contrast",
    "get_accessibility_level",
    "get_minimum_contrast_ratio",
    "passes_wcag_level",
    "get_wcag_level_description",
    "get_wcag_compliance",
    "get_readable_text_color",
]
