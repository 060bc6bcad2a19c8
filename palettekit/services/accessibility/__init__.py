"""
Accessibility engine: WCAG contrast checks and color vision deficiency
simulation.
"""

from .constants import (
    COLOR_VISION_DEFICIENCY_INFO,
    SIMULATION_MATRICES,
    WCAG_CONTRAST_RATIOS,
    ColorBlindnessType,
    ColorVisionDeficiencyInfo,
    WCAGContrastLevel,
)
from .contrast import (
    TextSizeCompliance,
    WCAGCompliance,
    contrast_ratio,
    get_accessibility_level,
    get_minimum_contrast_ratio,
    get_readable_text_color,
    get_wcag_compliance,
    get_wcag_level_description,
    meets_wcag_contrast,
    passes_wcag_level,
    relative_luminance,
)
from .vision import (
    PaletteSimulationResult,
    get_color_blindness_info,
    simulate_color_blindness,
    simulate_color_blindness_for_palette,
    supports_severity_adjustment,
)

__all__ = [
    'COLOR_VISION_DEFICIENCY_INFO',
    'SIMULATION_MATRICES',
    'WCAG_CONTRAST_RATIOS',
    'ColorBlindnessType',
    'ColorVisionDeficiencyInfo',
    'WCAGContrastLevel',
    'TextSizeCompliance',
    'WCAGCompliance',
    'contrast_ratio',
    'relative_luminance',
    'get_accessibility_level',
    'get_minimum_contrast_ratio',
    'get_readable_text_color',
    'get_wcag_compliance',
    'get_wcag_level_description',
    'meets_wcag_contrast',
    'passes_wcag_level',
    'PaletteSimulationResult',
    'get_color_blindness_info',
    'simulate_color_blindness',
    'simulate_color_blindness_for_palette',
    'supports_severity_adjustment',
]
