"""
Fixed color-theory and algorithm constants.

These values are part of the behavior contract (naming bands, harmony
factors, clustering caps) and are not read from the environment.
"""
from typing import NamedTuple


class KMeansConstants(NamedTuple):
    MAX_ITERATIONS: int
    MAX_GENERATION_ATTEMPTS: int


KMEANS_CONSTANTS = KMeansConstants(MAX_ITERATIONS=10, MAX_GENERATION_ATTEMPTS=100)

# Palette size bounds
MIN_PALETTE_COLORS = 1
MAX_PALETTE_COLORS = 16
DEFAULT_COLOR_COUNT = 5

COLOR_ID_LENGTH = 6

# Harmony variation factors
LIGHTNESS_VARIATION_FACTOR = 0.25
SATURATION_VARIATION_FACTOR = 0.35

# Neutral detection (HSL lightness)
WHITE_LIGHTNESS_THRESHOLD = 0.95
BLACK_LIGHTNESS_THRESHOLD = 0.05
LIGHT_GRAY_LIGHTNESS_THRESHOLD = 0.70
DARK_GRAY_LIGHTNESS_THRESHOLD = 0.30
GRAYSCALE_SATURATION_THRESHOLD = 0.10

# Perceptual distances (CIE76 Delta E)
CLOSE_MATCH_DELTA_E = 5.0
SIMILAR_COLOR_DELTA_E = 8.0

# Lightness bands for descriptive names: (lower bound inclusive, descriptor)
LIGHTNESS_DESCRIPTORS = (
    (0.90, "Pale"),      # very light
    (0.75, "Light"),     # light
    (0.60, ""),          # medium light
    (0.40, ""),          # medium
    (0.30, ""),          # medium dark
    (0.15, "Dark"),      # dark
    (0.00, "Deep"),      # very dark
)

# Saturation bands for descriptive names: (upper bound exclusive, descriptor)
SATURATION_DESCRIPTORS = (
    (0.20, "Grayish"),   # very low
    (0.40, "Muted"),     # low
    (0.60, ""),          # medium
    (0.85, "Vivid"),     # high
    (1.01, "Bright"),    # very high
)

# Hue sectors: (upper bound exclusive in degrees, name). Red covers 325-360 and 0-15.
HUE_SECTORS = (
    (15.0, "Red"),
    (25.0, "Red Orange"),
    (45.0, "Orange"),
    (65.0, "Yellow Orange"),
    (85.0, "Yellow"),
    (105.0, "Yellow Green"),
    (125.0, "Green"),
    (145.0, "Blue Green"),
    (165.0, "Cyan"),
    (185.0, "Light Blue"),
    (205.0, "Blue"),
    (225.0, "Blue Violet"),
    (245.0, "Violet"),
    (265.0, "Purple"),
    (285.0, "Red Violet"),
    (305.0, "Magenta"),
    (325.0, "Pink"),
    (360.0, "Red"),
)

# Image extraction
ALPHA_OPAQUE_THRESHOLD = 128
LEGACY_SAMPLE_STRIDE = 10
SAMPLING_TIERS = (
    (10_000, 1),
    (100_000, 4),
    (500_000, 16),
)
SAMPLING_MAX_STRIDE = 32

# Direct extraction (most frequent buckets, no k-means) is used when any limit is met
DIRECT_EXTRACTION_UNIQUE_FACTOR = 2       # distinct buckets <= factor * k
DIRECT_EXTRACTION_MIN_SAMPLES = 1000      # opaque samples below this
DIRECT_EXTRACTION_MAX_DIVERSITY = 0.3     # distinct buckets per sample below this
