"""
Unit tests for the harmony engine and palette generator.

Tests the hue geometry of each relationship and the generator's
count, uniqueness and fallback guarantees.
"""

import numpy as np
import pytest

from palettekit.exceptions import InvalidColorError, PaletteSizeError
from palettekit.services.colors.conversions import hex_to_hsl, is_valid_hex
from palettekit.services.colors.harmony import (
    GenerationToken, HarmonyPreset, HARMONY_GENERATION_PRIORITIES, HARMONY_OPTIONS,
    rotate_hue, get_hue_separation, harmony_hues,
)
from palettekit.services.colors.harmony.generator import (
    generate_palette, generate_harmonious_palette, extend_palette, derive_harmonious_color,
)
from palettekit.services.observability import get_metrics_collector


class TestHueRotation:
    """Test hue rotation mathematics."""

    def test_complementary_rotation(self):
        assert rotate_hue(200.0, 180) == 20.0
        assert rotate_hue(0.0, 180) == 180.0

    def test_wraparound(self):
        assert rotate_hue(350.0, 30) == 20.0
        assert rotate_hue(10.0, -30) == 340.0

    def test_hue_separation(self):
        assert get_hue_separation(10, 350) == 20.0
        assert get_hue_separation(0, 180) == 180.0
        assert get_hue_separation(90, 90) == 0.0


class TestHarmonyOffsets:
    """Each relationship emits its exact offsets."""

    @pytest.mark.parametrize("token,expected", [
        (GenerationToken.COMPLEMENTARY, [20.0]),
        (GenerationToken.ANALOGOUS, [230.0, 170.0]),
        (GenerationToken.TRIADIC, [320.0, 80.0]),
        (GenerationToken.SPLIT_COMPLEMENTARY, [350.0, 50.0]),
        (GenerationToken.TETRADIC, [20.0, 290.0, 110.0]),
        (GenerationToken.SQUARE, [290.0, 20.0, 110.0]),
        (GenerationToken.COMPOUND, [230.0, 20.0, 50.0]),
    ])
    def test_offsets_from_200(self, token, expected):
        assert harmony_hues(200.0, token) == expected

    @pytest.mark.parametrize("token", [GenerationToken.WHITE, GenerationToken.BLACK, GenerationToken.VARIATIONS])
    def test_non_relationship_tokens_rejected(self, token):
        with pytest.raises(ValueError):
            harmony_hues(0.0, token)

    def test_tables_cover_every_preset(self):
        assert set(HARMONY_GENERATION_PRIORITIES) == set(HarmonyPreset)
        assert set(HARMONY_OPTIONS) == set(HarmonyPreset)


class TestGeneratePalette:
    """Palette generation guarantees."""

    def test_complementary_from_blue(self, rng):
        colors = generate_harmonious_palette("#3B82F6", 5, HarmonyPreset.COMPLEMENTARY, rng)

        assert len(colors) == 5
        assert colors[0] == "#3B82F6"
        base_h, _, _ = hex_to_hsl(colors[0])
        comp_h, _, _ = hex_to_hsl(colors[1])
        assert get_hue_separation(base_h, comp_h) == pytest.approx(180.0, abs=1.0)

        # The rest are lightness/saturation variations of the base or its complement
        for variation in colors[2:]:
            hue, _, _ = hex_to_hsl(variation)
            assert min(get_hue_separation(hue, base_h), get_hue_separation(hue, comp_h)) < 1.0
            assert variation not in colors[:2]

    def test_web_friendly_includes_neutrals(self, rng):
        colors = generate_harmonious_palette("#3B82F6", 5, "webFriendly", rng)
        assert colors[:3] == ["#3B82F6", "#FFFFFF", "#000000"]

    @pytest.mark.parametrize("preset", list(HarmonyPreset))
    @pytest.mark.parametrize("count", [1, 2, 5, 8, 16])
    def test_count_and_uniqueness(self, preset, count, rng):
        result = generate_palette("#3B82F6", count, preset, rng)
        assert len(result.colors) == count
        assert len(set(result.colors)) == count
        assert all(is_valid_hex(c) for c in result.colors)

    def test_random_base_is_reproducible(self):
        first = generate_harmonious_palette(None, 5, None, np.random.default_rng(123))
        second = generate_harmonious_palette(None, 5, None, np.random.default_rng(123))
        assert first == second

    def test_base_is_normalized(self, rng):
        assert generate_harmonious_palette("3b82f6", 3, rng=rng)[0] == "#3B82F6"

    @pytest.mark.parametrize("count", [0, 17, -1])
    def test_invalid_count(self, count, rng):
        with pytest.raises(PaletteSizeError):
            generate_palette("#3B82F6", count, rng=rng)

    def test_invalid_base(self, rng):
        with pytest.raises(InvalidColorError):
            generate_palette("#nope", 5, rng=rng)

    def test_invalid_preset(self, rng):
        with pytest.raises(ValueError):
            generate_palette("#3B82F6", 5, "rainbow", rng)

    def test_black_base_falls_back_to_random(self, rng):
        # Every lightness/saturation variation of black is black again
        result = generate_palette("#000000", 16, HarmonyPreset.MONOCHROMATIC, rng)

        assert len(result.colors) == 16
        assert len(set(result.colors)) == 16
        assert result.used_random_fallback
        assert result.colors[:2] == ["#000000", "#FFFFFF"]
        assert get_metrics_collector().get_event_count("generation_random_fallback") == 1

    def test_no_fallback_for_easy_request(self, rng):
        result = generate_palette("#3B82F6", 5, HarmonyPreset.TRIADIC, rng)
        assert not result.used_random_fallback


class TestExtendPalette:
    """Growing an existing palette."""

    def test_returns_only_new_colors(self, rng):
        existing = ["#3B82F6", "#FFFFFF"]
        new = extend_palette(existing, 3, rng=rng)
        assert len(new) == 3
        assert not set(new) & set(existing)
        assert len(set(new)) == 3

    def test_zero_additional(self, rng):
        assert extend_palette(["#3B82F6"], 0, rng=rng) == []

    def test_empty_existing_generates_fresh(self, rng):
        assert len(extend_palette([], 4, rng=rng)) == 4

    def test_derive_single_color(self, rng):
        color = derive_harmonious_color(["#3B82F6"], rng=rng)
        assert is_valid_hex(color)
        assert color != "#3B82F6"

    def test_uses_chromatic_anchor(self, rng):
        # The analogous neighbours of the chromatic color come first
        new = extend_palette(["#FFFFFF", "#FF0000"], 2, rng=rng)
        hues = sorted(round(hex_to_hsl(c)[0]) for c in new)
        assert hues == [30, 330]
