"""
PaletteKit Configuration
Manages environment variables and defaults for the palette services.
"""
import os

from palettekit.constants import MAX_PALETTE_COLORS, MIN_PALETTE_COLORS


class Config:
    """Configuration class for PaletteKit services."""

    # Logging
    LOG_LEVEL: str = os.environ.get("PALETTEKIT_LOG_LEVEL", "INFO")

    # Palette generation defaults
    DEFAULT_COLOR_COUNT: int = int(os.environ.get("PALETTEKIT_DEFAULT_COLOR_COUNT", "5"))
    DEFAULT_PRESET: str = os.environ.get("PALETTEKIT_DEFAULT_PRESET", "webFriendly")

    # Image extraction tuning
    EXTRACTION_MIN_SAMPLES: int = int(os.environ.get("PALETTEKIT_EXTRACTION_MIN_SAMPLES", "1000"))
    EXTRACTION_DEDUP_BUCKET: int = int(os.environ.get("PALETTEKIT_EXTRACTION_DEDUP_BUCKET", "4"))

    # Observability
    METRICS_ENABLED: bool = bool(int(os.environ.get("PALETTEKIT_METRICS_ENABLED", "1")))

    @classmethod
    def validate_color_count(cls, count: int) -> bool:
        """Validate a requested palette size."""
        return MIN_PALETTE_COLORS <= count <= MAX_PALETTE_COLORS

    @classmethod
    def validate_dedup_bucket(cls, bucket: int) -> bool:
        """Validate the deduplication cell size (must divide 256 evenly)."""
        return 1 <= bucket <= 32 and 256 % bucket == 0

    @classmethod
    def validate_min_samples(cls, min_samples: int) -> bool:
        """Validate the extraction sample floor (0 disables it)."""
        return 0 <= min_samples <= 1_000_000


# Global config instance
config = Config()
