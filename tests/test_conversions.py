"""
Unit tests for color conversions and format parsing.
"""

import numpy as np
import pytest

from palettekit.exceptions import InvalidColorError
from palettekit.services.colors.conversions import (
    normalize_hex, is_valid_hex, hex_to_rgb, rgb_to_hex,
    hex_to_hsl, hsl_to_hex, hex_to_hsv, hex_to_lab, lab_to_hex,
    hex_to_cmyk, cmyk_to_hex, relative_luminance, contrast_ratio,
    delta_e, rgb_distance, is_color_similar, generate_random_color,
)
from palettekit.services.colors.formats import get_all_color_formats, parse_color_input

SAMPLE_COLORS = ["#FF0000", "#00FF00", "#0000FF", "#3B82F6", "#808080", "#FFFFFF", "#000000", "#A1B2C3"]


class TestNormalizeHex:
    """Test hex canonicalization."""

    def test_shorthand_expands(self):
        assert normalize_hex("#f0a") == "#FF00AA"
        assert normalize_hex("abc") == "#AABBCC"

    def test_missing_hash_and_case(self):
        assert normalize_hex("3b82f6") == "#3B82F6"
        assert normalize_hex("  #3b82f6 ") == "#3B82F6"

    def test_idempotent(self):
        for color in SAMPLE_COLORS + ["#abc", "def"]:
            once = normalize_hex(color)
            assert normalize_hex(once) == once

    @pytest.mark.parametrize("bad", ["#GGGGGG", "#FF00", "", "#12345", "red", None, 0xFF0000])
    def test_invalid_raises(self, bad):
        with pytest.raises(InvalidColorError):
            normalize_hex(bad)

    def test_invalid_is_value_error(self):
        with pytest.raises(ValueError):
            hex_to_rgb("#XYZ")

    def test_is_valid_hex(self):
        assert is_valid_hex("#fff")
        assert not is_valid_hex("#ffff")
        assert not is_valid_hex(None)


class TestRoundTrips:
    """Conversions back to hex must reproduce the input."""

    def test_rgb_roundtrip(self):
        for color in SAMPLE_COLORS:
            assert rgb_to_hex(hex_to_rgb(color)) == color

    def test_hsl_roundtrip(self):
        for color in SAMPLE_COLORS:
            assert hsl_to_hex(*hex_to_hsl(color)) == color

    def test_lab_roundtrip(self):
        for color in SAMPLE_COLORS:
            assert lab_to_hex(*hex_to_lab(color)) == color

    def test_cmyk_roundtrip(self):
        for color in SAMPLE_COLORS:
            assert cmyk_to_hex(*hex_to_cmyk(color)) == color


class TestColorSpaces:
    """Spot checks against known values."""

    def test_hsl_of_primaries(self):
        h, s, l = hex_to_hsl("#FF0000")
        assert h == pytest.approx(0.0)
        assert s == pytest.approx(1.0)
        assert l == pytest.approx(0.5)

        h, _, _ = hex_to_hsl("#0000FF")
        assert h == pytest.approx(240.0)

    def test_hsv_of_white(self):
        h, s, v = hex_to_hsv("#FFFFFF")
        assert s == pytest.approx(0.0)
        assert v == pytest.approx(1.0)

    def test_lab_of_white_and_black(self):
        l, a, b = hex_to_lab("#FFFFFF")
        assert l == pytest.approx(100.0, abs=0.01)
        assert a == pytest.approx(0.0, abs=0.01)
        assert b == pytest.approx(0.0, abs=0.01)
        assert hex_to_lab("#000000")[0] == pytest.approx(0.0, abs=0.01)

    def test_cmyk_of_black(self):
        assert hex_to_cmyk("#000000") == (0.0, 0.0, 0.0, 1.0)

    def test_rgb_to_hex_clamps_and_rounds(self):
        assert rgb_to_hex((300, -5, 127.6)) == "#FF0080"


class TestLuminanceAndContrast:
    """WCAG luminance primitives."""

    def test_luminance_bounds(self):
        assert relative_luminance("#000000") == pytest.approx(0.0)
        assert relative_luminance("#FFFFFF") == pytest.approx(1.0)

    def test_black_on_white_is_21(self):
        assert contrast_ratio("#000000", "#FFFFFF") == pytest.approx(21.0)

    def test_contrast_symmetric_and_bounded(self):
        for a in SAMPLE_COLORS:
            for b in SAMPLE_COLORS:
                ratio = contrast_ratio(a, b)
                assert ratio == pytest.approx(contrast_ratio(b, a))
                assert 1.0 <= ratio <= 21.0

    def test_identical_colors_have_ratio_one(self):
        assert contrast_ratio("#3B82F6", "#3b82f6") == pytest.approx(1.0)


class TestDistance:
    """Perceptual distance helpers."""

    def test_delta_e_zero_for_same_color(self):
        assert delta_e("#3B82F6", "#3B82F6") == pytest.approx(0.0)

    def test_rgb_distance(self):
        assert rgb_distance((0, 0, 0), (3, 4, 0)) == pytest.approx(5.0)
        assert rgb_distance((10, 20, 30), (10, 20, 30)) == 0.0
        assert rgb_distance((0, 0, 0), (255, 255, 255)) == pytest.approx(255 * 3 ** 0.5)

    def test_similar_colors(self):
        assert is_color_similar("#FF0000", ["#FE0101"])
        assert not is_color_similar("#FF0000", ["#0000FF", "#00FF00"])
        assert not is_color_similar("#FF0000", [])

    def test_random_color_is_reproducible(self, rng):
        first = generate_random_color(np.random.default_rng(7))
        second = generate_random_color(np.random.default_rng(7))
        assert first == second
        assert is_valid_hex(generate_random_color(rng))


class TestFormats:
    """Format rendering and free-form parsing."""

    def test_all_formats_for_red(self):
        formats = get_all_color_formats("#f00")
        assert formats.hex == "#FF0000"
        assert formats.rgb == "rgb(255, 0, 0)"
        assert formats.hsl == "hsl(0, 100%, 50%)"
        assert formats.cmyk == "cmyk(0%, 100%, 100%, 0%)"
        assert formats.name == "Red"
        assert set(formats.to_dict()) == {"hex", "rgb", "hsl", "hsv", "cmyk", "lab", "name"}

    @pytest.mark.parametrize("text,expected", [
        ("#abc", "#AABBCC"),
        ("rgb(59, 130, 246)", "#3B82F6"),
        ("rgba(255, 0, 0, 0.5)", "#FF0000"),
        ("hsl(0, 100%, 50%)", "#FF0000"),
        ("hsl(240deg, 100%, 50%)", "#0000FF"),
        ("Cornflower Blue", "#6495ED"),
        ("rebeccapurple", "#663399"),
        ("aqua", "#00FFFF"),
    ])
    def test_parse_valid(self, text, expected):
        assert parse_color_input(text) == expected

    @pytest.mark.parametrize("text", ["rgb(300, 0, 0)", "hsl(0, 150%, 50%)", "notacolor", "", None])
    def test_parse_invalid(self, text):
        assert parse_color_input(text) is None
