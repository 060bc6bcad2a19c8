"""
PaletteKit Schemas
Pydantic models for colors and palettes exchanged with storage collaborators.

Models are frozen: every palette operation returns a new instance. JSON
uses camelCase field names (isPublic, favoriteCount, createdAt, ...).
"""
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from palettekit.constants import MAX_PALETTE_COLORS, MIN_PALETTE_COLORS
from palettekit.services.colors.conversions import normalize_hex
from palettekit.utils.ids import generate_color_id, generate_palette_id


class ColorRole(str, Enum):
    """Semantic UI slot a color can fill; at most one color per role."""
    PRIMARY = "primary"
    SECONDARY = "secondary"
    ACCENT = "accent"
    BACKGROUND = "background"
    FOREGROUND = "foreground"
    MUTED = "muted"
    CARD = "card"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class _Model(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=False,
    )


class Color(_Model):
    """Single palette color."""
    id: str = Field(default_factory=generate_color_id, description="Color identifier")
    hex: str = Field(..., description="Hex color code in format #RRGGBB")
    locked: bool = Field(False, description="Locked colors survive regeneration and resizing")
    name: Optional[str] = Field(None, description="Human-readable color name")
    role: Optional[ColorRole] = Field(None, description="Semantic role, unique per palette")

    @field_validator("hex", mode="before")
    @classmethod
    def _canonical_hex(cls, value):
        return normalize_hex(value)


class Palette(_Model):
    """Ordered collection of 1-16 colors with metadata."""
    id: str = Field(default_factory=generate_palette_id, description="Palette identifier")
    name: str = Field(..., description="Palette name")
    description: Optional[str] = Field(None, description="Optional description")
    colors: List[Color] = Field(
        ...,
        min_length=MIN_PALETTE_COLORS,
        max_length=MAX_PALETTE_COLORS,
        description="Palette colors in display order"
    )
    tags: List[str] = Field(default_factory=list, description="Free-form tags")
    is_public: bool = Field(False, description="Whether the palette is shared publicly")
    is_favorite: bool = Field(False, description="Whether the owner favorited the palette")
    favorite_count: int = Field(0, ge=0, description="Number of users who favorited the palette")
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @model_validator(mode="after")
    def _unique_ids_and_roles(self):
        ids = [c.id for c in self.colors]
        if len(set(ids)) != len(ids):
            raise ValueError("Color ids must be unique within a palette")

        roles = [c.role for c in self.colors if c.role is not None]
        if len(set(roles)) != len(roles):
            raise ValueError("Each role may be assigned to at most one color")
        return self

    @property
    def hexes(self) -> List[str]:
        return [c.hex for c in self.colors]

    @property
    def locked_colors(self) -> List[Color]:
        return [c for c in self.colors if c.locked]

    def to_json(self) -> str:
        """Serialize with camelCase field names."""
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, data: str) -> "Palette":
        return cls.model_validate_json(data)
