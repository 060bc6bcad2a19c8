"""
Palette operations.

Pure functions over immutable Palette values, called by an external palette
store that holds the current state. Every operation returns a new Palette
(or the same instance when the operation is a no-op) and keeps the palette
invariants: 1-16 colors, unique roles, locked colors never dropped.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence

import numpy as np

from palettekit.constants import DEFAULT_COLOR_COUNT, MAX_PALETTE_COLORS, MIN_PALETTE_COLORS
from palettekit.exceptions import PaletteSizeError, RoleConflictError
from palettekit.schemas import Color, ColorRole, Palette
from palettekit.utils.logging import get_logger
from palettekit.services.colors.conversions import normalize_hex
from palettekit.services.colors.harmony.generator import (
    PresetLike, derive_harmonious_color, extend_palette, generate_harmonious_palette,
)
from palettekit.services.colors.naming import get_color_name

log = get_logger("palettes")


@dataclass(frozen=True)
class RoleAssignment:
    """Outcome of a role assignment; rejected assignments leave the palette unchanged."""
    palette: Palette
    accepted: bool
    conflict_color_id: Optional[str] = None


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _with_colors(palette: Palette, colors: List[Color]) -> Palette:
    return palette.model_copy(update={"colors": colors, "updated_at": _now()})


def _new_color(hex_color: str) -> Color:
    hex_color = normalize_hex(hex_color)
    return Color(hex=hex_color, name=get_color_name(hex_color))


def _find_index(palette: Palette, color_id: str) -> int:
    for index, color in enumerate(palette.colors):
        if color.id == color_id:
            return index
    return -1


# ============================================================================
# Creation
# ============================================================================

def create_palette(name: str,
                   hexes: Sequence[str],
                   description: Optional[str] = None,
                   tags: Optional[Iterable[str]] = None,
                   is_public: bool = False) -> Palette:
    """
    Build a palette from hex colors, naming each color.

    Raises:
        InvalidColorError: If a hex is malformed
        PaletteSizeError: If the number of colors is outside 1-16
    """
    if not MIN_PALETTE_COLORS <= len(hexes) <= MAX_PALETTE_COLORS:
        raise PaletteSizeError(
            f"A palette holds {MIN_PALETTE_COLORS}-{MAX_PALETTE_COLORS} colors, got {len(hexes)}"
        )
    return Palette(
        name=name,
        description=description,
        colors=[_new_color(h) for h in hexes],
        tags=list(tags or []),
        is_public=is_public,
    )


def palette_from_hex_list(hexes: Sequence[str], name: str = "Extracted Palette") -> Palette:
    """Convert an extracted color list into a palette (truncated to 16 colors)."""
    return create_palette(name, list(hexes)[:MAX_PALETTE_COLORS])


def generate_new_palette(name: str = "Untitled Palette",
                         count: int = DEFAULT_COLOR_COUNT,
                         base_hex: Optional[str] = None,
                         preset: PresetLike = None,
                         rng: Optional[np.random.Generator] = None) -> Palette:
    """Generate a fresh harmonious palette."""
    hexes = generate_harmonious_palette(base_hex, count, preset, rng)
    return create_palette(name, hexes)


def validate_palette(palette: Palette) -> None:
    """
    Check palette-level invariants for externally assembled data.

    Raises:
        PaletteSizeError: If the palette has fewer than 1 or more than 16 colors
        RoleConflictError: If two colors share a role
    """
    if not MIN_PALETTE_COLORS <= len(palette.colors) <= MAX_PALETTE_COLORS:
        raise PaletteSizeError(f"Palette has {len(palette.colors)} colors")

    holders = {}
    for color in palette.colors:
        if color.role is None:
            continue
        holders.setdefault(color.role, []).append(color.id)

    for role, color_ids in holders.items():
        if len(color_ids) > 1:
            raise RoleConflictError(role.value, color_ids)


# ============================================================================
# Color operations
# ============================================================================

def get_locked_colors(palette: Palette) -> List[Color]:
    return [c for c in palette.colors if c.locked]


def toggle_color_lock(palette: Palette, color_id: str) -> Palette:
    """Flip the locked flag of one color."""
    colors = [
        c.model_copy(update={"locked": not c.locked}) if c.id == color_id else c
        for c in palette.colors
    ]
    return _with_colors(palette, colors)


def update_color(palette: Palette, color_id: str, hex_color: str) -> Palette:
    """
    Replace a color's hex value and refresh its name.

    Raises:
        InvalidColorError: If hex_color is malformed
    """
    hex_color = normalize_hex(hex_color)
    name = get_color_name(hex_color)
    colors = [
        c.model_copy(update={"hex": hex_color, "name": name}) if c.id == color_id else c
        for c in palette.colors
    ]
    return _with_colors(palette, colors)


def add_color(palette: Palette,
              hex_color: Optional[str] = None,
              rng: Optional[np.random.Generator] = None) -> Palette:
    """
    Append a color; derived harmoniously from the palette when not given.

    No-op at MAX_PALETTE_COLORS.
    """
    if len(palette.colors) >= MAX_PALETTE_COLORS:
        log.info("Palette is full; add ignored", extra={"palette_id": palette.id})
        return palette

    if hex_color is None:
        hex_color = derive_harmonious_color(palette.hexes, rng=rng)
    return _with_colors(palette, [*palette.colors, _new_color(hex_color)])


def remove_color(palette: Palette, color_id: str) -> Palette:
    """
    Remove a color by id.

    No-op when the palette would drop below MIN_PALETTE_COLORS, when the color
    is locked, or when the id is unknown.
    """
    index = _find_index(palette, color_id)
    if index < 0:
        return palette
    if len(palette.colors) <= MIN_PALETTE_COLORS:
        log.info("Palette at minimum size; remove ignored", extra={"palette_id": palette.id})
        return palette
    if palette.colors[index].locked:
        log.info("Locked color cannot be removed", extra={"color_id": color_id})
        return palette

    colors = [c for c in palette.colors if c.id != color_id]
    return _with_colors(palette, colors)


def reorder_colors(palette: Palette, from_index: int, to_index: int) -> Palette:
    """
    Move the color at from_index to to_index.

    Raises:
        IndexError: If either index is out of range
    """
    size = len(palette.colors)
    if not (0 <= from_index < size and 0 <= to_index < size):
        raise IndexError(f"Reorder indices out of range for {size} colors: {from_index} -> {to_index}")

    colors = list(palette.colors)
    colors.insert(to_index, colors.pop(from_index))
    return _with_colors(palette, colors)


def resize_palette(palette: Palette,
                   count: int,
                   preset: PresetLike = None,
                   rng: Optional[np.random.Generator] = None) -> Palette:
    """
    Grow or shrink a palette to count colors.

    Shrinking removes unlocked colors from the end; locked colors are a hard
    floor, so the result holds max(count, locked) colors. Growing derives new
    colors harmoniously from the existing ones.
    """
    count = max(MIN_PALETTE_COLORS, min(MAX_PALETTE_COLORS, count))
    current = len(palette.colors)

    if count == current:
        return palette

    if count > current:
        new_hexes = extend_palette(palette.hexes, count - current, preset=preset, rng=rng)
        return _with_colors(palette, [*palette.colors, *(_new_color(h) for h in new_hexes)])

    to_remove = current - count
    kept_reversed: List[Color] = []
    for color in reversed(palette.colors):
        if to_remove > 0 and not color.locked:
            to_remove -= 1
            continue
        kept_reversed.append(color)

    if to_remove > 0:
        log.info(
            "Locked colors limit palette shrink",
            extra={"palette_id": palette.id, "requested": count, "locked": len(get_locked_colors(palette))},
        )
    return _with_colors(palette, list(reversed(kept_reversed)))


def regenerate_unlocked(palette: Palette,
                        preset: PresetLike = None,
                        rng: Optional[np.random.Generator] = None) -> Palette:
    """
    Give every unlocked color a new harmonious value.

    Locked colors keep their value and position; the new colors are derived
    from the locked ones, or from a fresh random base when nothing is locked.
    Unlocked colors keep their id and role.
    """
    locked = get_locked_colors(palette)
    unlocked_count = len(palette.colors) - len(locked)
    if unlocked_count == 0:
        return palette

    if locked:
        new_hexes = extend_palette([c.hex for c in locked], unlocked_count, preset=preset, rng=rng)
    else:
        new_hexes = generate_harmonious_palette(None, unlocked_count, preset, rng)

    replacements = iter(new_hexes)
    colors = []
    for color in palette.colors:
        if color.locked:
            colors.append(color)
        else:
            hex_color = next(replacements)
            colors.append(color.model_copy(update={"hex": hex_color, "name": get_color_name(hex_color)}))
    return _with_colors(palette, colors)


# ============================================================================
# Roles
# ============================================================================

def get_assigned_roles(colors: Iterable[Color]) -> List[ColorRole]:
    """Roles currently held by any color, in palette order."""
    return [c.role for c in colors if c.role is not None]


def get_available_roles(assigned_roles: Iterable[ColorRole],
                        current_role: Optional[ColorRole] = None) -> List[ColorRole]:
    """Roles a color may take: unassigned ones plus its own current role."""
    taken = set(assigned_roles)
    return [role for role in ColorRole if role not in taken or role == current_role]


def assign_role(palette: Palette,
                color_id: str,
                role: Optional[ColorRole],
                replace: bool = False) -> RoleAssignment:
    """
    Assign a role to a color.

    If another color already holds the role the assignment is rejected and
    the palette returned unchanged, unless replace=True, in which case the
    holder loses the role first. role=None clears the color's role.
    """
    index = _find_index(palette, color_id)
    if index < 0:
        return RoleAssignment(palette=palette, accepted=False)

    role = ColorRole(role) if role is not None else None
    holder = next((c for c in palette.colors if role is not None and c.role == role), None)

    if holder is not None and holder.id != color_id and not replace:
        log.warning(
            "Role already assigned",
            extra={"role": role.value, "color_id": color_id, "holder_id": holder.id},
        )
        return RoleAssignment(palette=palette, accepted=False, conflict_color_id=holder.id)

    colors = []
    for color in palette.colors:
        if color.id == color_id:
            colors.append(color.model_copy(update={"role": role}))
        elif holder is not None and color.id == holder.id:
            colors.append(color.model_copy(update={"role": None}))
        else:
            colors.append(color)
    return RoleAssignment(palette=_with_colors(palette, colors), accepted=True)


def clear_role(palette: Palette, color_id: str) -> Palette:
    """Remove the role from a color."""
    return assign_role(palette, color_id, None).palette
