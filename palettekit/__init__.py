"""
PaletteKit

Color-theory and image color extraction core for palette design tools.
Provides hex/RGB/HSL/LAB/CMYK conversions, perceptual color naming,
harmonious palette generation, WCAG accessibility analysis and dominant
color extraction from raw pixel buffers.
"""

__version__ = "1.0.0"
