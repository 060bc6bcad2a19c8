"""
Accessibility constants: WCAG contrast thresholds, color vision deficiency
descriptions and the RGB simulation matrices.

Every table is keyed by the full enum and checked for completeness at
import time.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


class WCAGContrastLevel(str, Enum):
    """WCAG 2.1 contrast conformance level."""
    AAA = "AAA"
    AA = "AA"
    FAIL = "FAIL"


class ColorBlindnessType(str, Enum):
    """Simulated color vision conditions."""
    NORMAL = "normal"
    PROTANOMALY = "protanomaly"
    DEUTERANOMALY = "deuteranomaly"
    TRITANOMALY = "tritanomaly"
    PROTANOPIA = "protanopia"
    DEUTERANOPIA = "deuteranopia"
    TRITANOPIA = "tritanopia"
    ACHROMATOPSIA = "achromatopsia"
    BLUE_CONE_MONOCHROMACY = "blue_cone_monochromacy"


# Minimum contrast ratios: level -> (normal text, large text)
WCAG_CONTRAST_RATIOS: Dict[WCAGContrastLevel, Tuple[float, float]] = {
    WCAGContrastLevel.AAA: (7.0, 4.5),
    WCAGContrastLevel.AA: (4.5, 3.0),
    WCAGContrastLevel.FAIL: (1.0, 1.0),
}

WCAG_LEVEL_DESCRIPTIONS: Dict[WCAGContrastLevel, str] = {
    WCAGContrastLevel.AAA: "Enhanced accessibility (AAA)",
    WCAGContrastLevel.AA: "Standard accessibility (AA)",
    WCAGContrastLevel.FAIL: "Does not meet accessibility standards",
}


@dataclass(frozen=True)
class ColorVisionDeficiencyInfo:
    name: str
    description: str
    prevalence: str
    category: str  # normal | anomalous_trichromacy | dichromacy | monochromacy
    supports_severity: bool


COLOR_VISION_DEFICIENCY_INFO: Dict[ColorBlindnessType, ColorVisionDeficiencyInfo] = {
    ColorBlindnessType.NORMAL: ColorVisionDeficiencyInfo(
        name="Normal Vision (Trichromatic)",
        description="Normal color vision with all three types of cone cells functioning properly. "
                    "Can distinguish the full spectrum of colors.",
        prevalence="92% of men, 99.5% of women",
        category="normal",
        supports_severity=False,
    ),
    ColorBlindnessType.PROTANOMALY: ColorVisionDeficiencyInfo(
        name="Protanomaly",
        description="Reduced sensitivity to red light. L-cones have shifted spectral sensitivity, "
                    "making it difficult to distinguish between reds and greens.",
        prevalence="1% of men, 0.01% of women",
        category="anomalous_trichromacy",
        supports_severity=True,
    ),
    ColorBlindnessType.DEUTERANOMALY: ColorVisionDeficiencyInfo(
        name="Deuteranomaly",
        description="Reduced sensitivity to green light. M-cones have shifted spectral sensitivity, "
                    "the most common form of color vision deficiency.",
        prevalence="5% of men, 0.4% of women",
        category="anomalous_trichromacy",
        supports_severity=True,
    ),
    ColorBlindnessType.TRITANOMALY: ColorVisionDeficiencyInfo(
        name="Tritanomaly",
        description="Reduced sensitivity to blue light. S-cones have shifted spectral sensitivity, "
                    "affecting blue-yellow discrimination.",
        prevalence="0.01% of population",
        category="anomalous_trichromacy",
        supports_severity=True,
    ),
    ColorBlindnessType.PROTANOPIA: ColorVisionDeficiencyInfo(
        name="Protanopia",
        description="Complete absence of L-cones (red-sensitive). Cannot distinguish between red and green colors.",
        prevalence="1% of men, rare in women",
        category="dichromacy",
        supports_severity=False,
    ),
    ColorBlindnessType.DEUTERANOPIA: ColorVisionDeficiencyInfo(
        name="Deuteranopia",
        description="Complete absence of M-cones (green-sensitive). Cannot distinguish between red and green colors.",
        prevalence="1% of men, rare in women",
        category="dichromacy",
        supports_severity=False,
    ),
    ColorBlindnessType.TRITANOPIA: ColorVisionDeficiencyInfo(
        name="Tritanopia",
        description="Complete absence of S-cones (blue-sensitive). Cannot distinguish between blue and yellow colors.",
        prevalence="0.001% of population",
        category="dichromacy",
        supports_severity=False,
    ),
    ColorBlindnessType.ACHROMATOPSIA: ColorVisionDeficiencyInfo(
        name="Achromatopsia",
        description="Complete color blindness. Only rod cells function, resulting in monochromatic vision (grayscale).",
        prevalence="0.003% of population",
        category="monochromacy",
        supports_severity=False,
    ),
    ColorBlindnessType.BLUE_CONE_MONOCHROMACY: ColorVisionDeficiencyInfo(
        name="Blue Cone Monochromacy",
        description="Only S-cones function. Severely limited color perception with only blue wavelengths detected.",
        prevalence="0.001% of population",
        category="monochromacy",
        supports_severity=False,
    ),
}

Matrix = Tuple[Tuple[float, float, float], Tuple[float, float, float], Tuple[float, float, float]]

# Row-major 3x3 matrices applied to normalized RGB column vectors (Brettel et al. 1997)
SIMULATION_MATRICES: Dict[ColorBlindnessType, Optional[Matrix]] = {
    ColorBlindnessType.NORMAL: None,
    ColorBlindnessType.PROTANOMALY: (
        (0.856167, 0.182038, -0.038205),
        (0.029342, 0.955115, 0.015544),
        (-0.002880, -0.001563, 1.004443),
    ),
    ColorBlindnessType.DEUTERANOMALY: (
        (0.288299, 0.052709, -0.257912),
        (0.711701, 0.947291, 0.257912),
        (0.000000, 0.000000, 1.000000),
    ),
    ColorBlindnessType.TRITANOMALY: (
        (1.000000, 0.000000, 0.000000),
        (0.000000, 1.000000, 0.000000),
        (0.000000, 0.000000, 0.000000),
    ),
    ColorBlindnessType.PROTANOPIA: (
        (0.152286, 1.052583, -0.204868),
        (0.114503, 0.786281, 0.099216),
        (-0.003882, -0.048116, 1.051998),
    ),
    ColorBlindnessType.DEUTERANOPIA: (
        (0.367322, 0.860646, -0.227968),
        (0.280085, 0.672501, 0.047413),
        (-0.011820, 0.042940, 0.968881),
    ),
    ColorBlindnessType.TRITANOPIA: (
        (1.000000, 0.000000, 0.000000),
        (0.000000, 1.000000, 0.000000),
        (-0.395913, 0.801109, 0.594804),
    ),
    # Grayscale via Rec. 601 luma
    ColorBlindnessType.ACHROMATOPSIA: (
        (0.299, 0.587, 0.114),
        (0.299, 0.587, 0.114),
        (0.299, 0.587, 0.114),
    ),
    ColorBlindnessType.BLUE_CONE_MONOCHROMACY: (
        (0.01775, 0.10945, 0.87262),
        (0.01775, 0.10945, 0.87262),
        (0.01775, 0.10945, 0.87262),
    ),
}

SEVERITY_SUPPORTED_TYPES = frozenset(
    t for t, info in COLOR_VISION_DEFICIENCY_INFO.items() if info.supports_severity
)


def _check_exhaustive() -> None:
    for table_name, table in (("COLOR_VISION_DEFICIENCY_INFO", COLOR_VISION_DEFICIENCY_INFO),
                              ("SIMULATION_MATRICES", SIMULATION_MATRICES)):
        missing = set(ColorBlindnessType) - set(table)
        if missing:
            raise RuntimeError(f"{table_name} is missing entries for {sorted(m.value for m in missing)}")
    missing_levels = set(WCAGContrastLevel) - set(WCAG_CONTRAST_RATIOS)
    if missing_levels:
        raise RuntimeError(f"WCAG_CONTRAST_RATIOS is missing {sorted(m.value for m in missing_levels)}")


_check_exhaustive()
