"""
PaletteKit error taxonomy.
"""
from typing import Optional


class PaletteKitError(Exception):
    """Base class for all PaletteKit errors."""


class InvalidColorError(PaletteKitError, ValueError):
    """Raised when a color string is not a valid 3- or 6-digit hex color."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid hex color: {value!r}")


class RoleConflictError(PaletteKitError):
    """Raised when two colors in one palette hold the same role."""

    def __init__(self, role: str, color_ids: Optional[list] = None):
        self.role = role
        self.color_ids = color_ids or []
        super().__init__(f"Role '{role}' is assigned to more than one color: {self.color_ids}")


class PaletteSizeError(PaletteKitError, ValueError):
    """Raised when a palette or requested color count falls outside 1..16."""
