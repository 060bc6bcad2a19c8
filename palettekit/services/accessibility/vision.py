"""
Color vision deficiency simulation.

Colors are transformed as normalized RGB column vectors by the condition's
3x3 matrix, then denormalized, clamped to [0, 255] and rounded. For the
anomalous trichromacies a severity in [0, 1] blends the original color
(0) with the full simulation (1); other conditions ignore severity.
"""
from dataclasses import dataclass
from typing import List, Sequence, Union

import numpy as np

from palettekit.services.colors.conversions import hex_to_rgb, normalize_hex, rgb_to_hex
from .constants import (
    COLOR_VISION_DEFICIENCY_INFO,
    SEVERITY_SUPPORTED_TYPES,
    SIMULATION_MATRICES,
    ColorBlindnessType,
    ColorVisionDeficiencyInfo,
)

VisionLike = Union[ColorBlindnessType, str]


@dataclass(frozen=True)
class PaletteSimulationResult:
    original_palette: List[str]
    simulated_palette: List[str]
    vision_type: ColorBlindnessType
    severity: float = 1.0


def supports_severity_adjustment(vision_type: VisionLike) -> bool:
    return ColorBlindnessType(vision_type) in SEVERITY_SUPPORTED_TYPES


def get_color_blindness_info(vision_type: VisionLike) -> ColorVisionDeficiencyInfo:
    return COLOR_VISION_DEFICIENCY_INFO[ColorBlindnessType(vision_type)]


def simulate_color_blindness(hex_color: str,
                             vision_type: VisionLike,
                             severity: float = 1.0) -> str:
    """
    Simulate how a color appears under a color vision deficiency.

    Args:
        hex_color: Input color
        vision_type: Condition to simulate
        severity: Strength in [0, 1] for anomalous trichromacies (clamped)

    Returns:
        Simulated color as #RRGGBB; NORMAL returns the normalized input
    """
    hex_color = normalize_hex(hex_color)
    vision_type = ColorBlindnessType(vision_type)
    matrix = SIMULATION_MATRICES[vision_type]
    if matrix is None:
        return hex_color

    original = np.array(hex_to_rgb(hex_color), dtype=np.float64)
    simulated = np.array(matrix) @ (original / 255.0) * 255.0

    if vision_type in SEVERITY_SUPPORTED_TYPES:
        severity = min(1.0, max(0.0, float(severity)))
        simulated = original + (simulated - original) * severity

    return rgb_to_hex(np.clip(simulated, 0.0, 255.0))


def simulate_color_blindness_for_palette(hexes: Sequence[str],
                                         vision_type: VisionLike,
                                         severity: float = 1.0) -> PaletteSimulationResult:
    """Simulate every color of a palette; output order matches input order."""
    vision_type = ColorBlindnessType(vision_type)
    original = [normalize_hex(h) for h in hexes]
    return PaletteSimulationResult(
        original_palette=original,
        simulated_palette=[simulate_color_blindness(h, vision_type, severity) for h in original],
        vision_type=vision_type,
        severity=severity,
    )
