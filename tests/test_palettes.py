"""
Unit tests for palette operations: locking, resizing, roles and editing.
"""

import pytest

from palettekit.exceptions import InvalidColorError, PaletteSizeError, RoleConflictError
from palettekit.schemas import Color, ColorRole, Palette
from palettekit.services.palettes import (
    create_palette, palette_from_hex_list, generate_new_palette, regenerate_unlocked,
    toggle_color_lock, update_color, add_color, remove_color, reorder_colors,
    resize_palette, assign_role, clear_role, get_assigned_roles, get_available_roles,
    get_locked_colors, validate_palette,
)

HEXES = ["#3B82F6", "#FFFFFF", "#000000", "#F6AF3B", "#1D4ED8"]


@pytest.fixture
def palette():
    return create_palette("Test", HEXES)


def _lock(palette, *indices):
    for index in indices:
        palette = toggle_color_lock(palette, palette.colors[index].id)
    return palette


class TestCreation:
    """Building palettes."""

    def test_create_names_colors(self, palette):
        assert palette.hexes == HEXES
        assert palette.colors[1].name == "White"
        assert all(c.id for c in palette.colors)

    def test_create_rejects_bad_sizes(self):
        with pytest.raises(PaletteSizeError):
            create_palette("Empty", [])
        with pytest.raises(PaletteSizeError):
            create_palette("Huge", ["#000000"] * 17)

    def test_create_rejects_bad_hex(self):
        with pytest.raises(InvalidColorError):
            create_palette("Bad", ["#zzz"])

    def test_from_hex_list_truncates(self):
        hexes = [f"#0000{i:02X}" for i in range(20)]
        assert len(palette_from_hex_list(hexes).colors) == 16

    def test_generate_new(self, rng):
        generated = generate_new_palette("Fresh", 6, "#3B82F6", rng=rng)
        assert len(generated.colors) == 6
        assert generated.colors[0].hex == "#3B82F6"


class TestLocking:
    """Locked colors survive regeneration and shrinking."""

    def test_toggle_lock(self, palette):
        locked = toggle_color_lock(palette, palette.colors[0].id)
        assert locked.colors[0].locked
        assert not palette.colors[0].locked
        assert not toggle_color_lock(locked, palette.colors[0].id).colors[0].locked

    def test_regenerate_keeps_locked(self, palette, rng):
        palette = _lock(palette, 0, 3)
        regenerated = regenerate_unlocked(palette, rng=rng)

        assert len(regenerated.colors) == len(palette.colors)
        assert regenerated.colors[0] == palette.colors[0]
        assert regenerated.colors[3] == palette.colors[3]
        assert [c.id for c in regenerated.colors] == [c.id for c in palette.colors]
        assert len(set(regenerated.hexes)) == len(regenerated.hexes)

    def test_regenerate_all_locked_is_noop(self, palette, rng):
        palette = _lock(palette, 0, 1, 2, 3, 4)
        assert regenerate_unlocked(palette, rng=rng) is palette

    def test_regenerate_nothing_locked(self, palette, rng):
        regenerated = regenerate_unlocked(palette, rng=rng)
        assert len(regenerated.colors) == 5
        assert not get_locked_colors(regenerated)

    def test_locked_colors_listing(self, palette):
        palette = _lock(palette, 2)
        assert [c.hex for c in get_locked_colors(palette)] == ["#000000"]
        assert palette.locked_colors == get_locked_colors(palette)


class TestResize:
    """Resizing with the locked floor."""

    def test_grow(self, palette, rng):
        grown = resize_palette(palette, 8, rng=rng)
        assert len(grown.colors) == 8
        assert grown.hexes[:5] == HEXES
        assert len(set(grown.hexes)) == 8

    def test_shrink_removes_unlocked_from_end(self, palette):
        palette = _lock(palette, 4)
        shrunk = resize_palette(palette, 3)
        assert shrunk.hexes == ["#3B82F6", "#FFFFFF", "#1D4ED8"]

    def test_locked_floor(self, palette):
        # Locking 4 colors and asking for 2 yields 4
        palette = _lock(palette, 0, 1, 2, 3)
        shrunk = resize_palette(palette, 2)
        assert len(shrunk.colors) == 4
        assert all(c.locked for c in shrunk.colors)

    def test_count_is_clamped(self, palette, rng):
        assert len(resize_palette(palette, 0).colors) == 1
        assert len(resize_palette(palette, 40, rng=rng).colors) == 16

    def test_same_size_is_noop(self, palette):
        assert resize_palette(palette, 5) is palette


class TestEditing:
    """Add, remove, update, reorder."""

    def test_update_color(self, palette):
        updated = update_color(palette, palette.colors[0].id, "#f00")
        assert updated.colors[0].hex == "#FF0000"
        assert updated.colors[0].name == "Red"
        assert updated.colors[0].id == palette.colors[0].id

    def test_update_rejects_bad_hex(self, palette):
        with pytest.raises(InvalidColorError):
            update_color(palette, palette.colors[0].id, "blue-ish")

    def test_add_explicit_and_derived(self, palette, rng):
        added = add_color(palette, "#123456")
        assert added.hexes[-1] == "#123456"

        derived = add_color(palette, rng=rng)
        assert len(derived.colors) == 6
        assert derived.hexes[-1] not in HEXES

    def test_add_is_noop_when_full(self, rng):
        full = create_palette("Full", [f"#0000{i:02X}" for i in range(16)])
        assert add_color(full, rng=rng) is full

    def test_remove(self, palette):
        removed = remove_color(palette, palette.colors[1].id)
        assert removed.hexes == ["#3B82F6", "#000000", "#F6AF3B", "#1D4ED8"]

    def test_remove_locked_is_noop(self, palette):
        palette = _lock(palette, 1)
        assert remove_color(palette, palette.colors[1].id) is palette

    def test_remove_last_color_is_noop(self):
        single = create_palette("One", ["#3B82F6"])
        assert remove_color(single, single.colors[0].id) is single

    def test_remove_unknown_id_is_noop(self, palette):
        assert remove_color(palette, "nope") is palette

    def test_reorder(self, palette):
        moved = reorder_colors(palette, 0, 4)
        assert moved.hexes == ["#FFFFFF", "#000000", "#F6AF3B", "#1D4ED8", "#3B82F6"]

    def test_reorder_out_of_range(self, palette):
        with pytest.raises(IndexError):
            reorder_colors(palette, 0, 5)

    def test_operations_do_not_mutate(self, palette):
        before = palette.model_dump()
        update_color(palette, palette.colors[0].id, "#000001")
        remove_color(palette, palette.colors[0].id)
        reorder_colors(palette, 0, 1)
        assert palette.model_dump() == before


class TestRoles:
    """Role uniqueness."""

    def test_assign_role(self, palette):
        result = assign_role(palette, palette.colors[0].id, ColorRole.PRIMARY)
        assert result.accepted
        assert result.palette.colors[0].role == ColorRole.PRIMARY

    def test_conflicting_role_rejected(self, palette):
        first = assign_role(palette, palette.colors[0].id, ColorRole.PRIMARY).palette
        result = assign_role(first, first.colors[1].id, ColorRole.PRIMARY)

        assert not result.accepted
        assert result.conflict_color_id == first.colors[0].id
        assert result.palette is first

    def test_conflicting_role_replaced(self, palette):
        first = assign_role(palette, palette.colors[0].id, ColorRole.PRIMARY).palette
        result = assign_role(first, first.colors[1].id, ColorRole.PRIMARY, replace=True)

        assert result.accepted
        assert result.palette.colors[0].role is None
        assert result.palette.colors[1].role == ColorRole.PRIMARY
        validate_palette(result.palette)

    def test_reassigning_own_role(self, palette):
        first = assign_role(palette, palette.colors[0].id, ColorRole.ACCENT).palette
        assert assign_role(first, first.colors[0].id, ColorRole.ACCENT).accepted

    def test_role_accepts_string(self, palette):
        result = assign_role(palette, palette.colors[2].id, "background")
        assert result.palette.colors[2].role == ColorRole.BACKGROUND

    def test_clear_role(self, palette):
        assigned = assign_role(palette, palette.colors[0].id, ColorRole.PRIMARY).palette
        assert clear_role(assigned, assigned.colors[0].id).colors[0].role is None

    def test_available_roles(self, palette):
        assigned = assign_role(palette, palette.colors[0].id, ColorRole.PRIMARY).palette
        assigned = assign_role(assigned, assigned.colors[1].id, ColorRole.MUTED).palette

        taken = get_assigned_roles(assigned.colors)
        assert taken == [ColorRole.PRIMARY, ColorRole.MUTED]

        available = get_available_roles(taken)
        assert ColorRole.PRIMARY not in available
        assert len(available) == len(ColorRole) - 2

        own = get_available_roles(taken, current_role=ColorRole.PRIMARY)
        assert ColorRole.PRIMARY in own


class TestValidatePalette:
    """Validation of externally built palettes."""

    def test_valid_palette(self, palette):
        validate_palette(palette)

    def test_duplicate_roles(self, palette):
        # model_construct skips validation, as data from a store might
        colors = [
            Color(hex="#000000", role=ColorRole.PRIMARY),
            Color(hex="#FFFFFF", role=ColorRole.PRIMARY),
        ]
        bad = Palette.model_construct(**{**palette.model_dump(), "colors": colors})
        with pytest.raises(RoleConflictError) as exc_info:
            validate_palette(bad)
        assert exc_info.value.role == "primary"

    def test_empty_palette(self, palette):
        bad = Palette.model_construct(**{**palette.model_dump(), "colors": []})
        with pytest.raises(PaletteSizeError):
            validate_palette(bad)
