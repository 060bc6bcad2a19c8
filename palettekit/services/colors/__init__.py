"""
PaletteKit Colors Module

Provides color conversions, naming, harmony generation, shade/gradient
tools and dominant color extraction from raw pixel buffers.
"""

__version__ = "1.0.0"
