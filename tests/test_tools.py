"""
Unit tests for shade, gradient and mixing tools.
"""

import pytest

from palettekit.services.colors.conversions import hex_to_hsl
from palettekit.services.colors.tools import (
    generate_shades, generate_gradient, mix_colors, mix_colors_rgb, mix_multiple_colors,
)


class TestShades:
    """Lightness ramps."""

    def test_default_count(self):
        shades = generate_shades("#3B82F6")
        assert len(shades) == 9

    def test_lightness_spread(self):
        shades = generate_shades("#FF0000", 5)
        lightness = [hex_to_hsl(s)[2] for s in shades]
        assert lightness[0] == pytest.approx(0.1, abs=0.01)
        assert lightness[-1] == pytest.approx(0.9, abs=0.01)
        assert lightness == sorted(lightness)

    def test_hue_is_kept(self):
        for shade in generate_shades("#FF0000", 5):
            h, _, _ = hex_to_hsl(shade)
            assert h == pytest.approx(0.0, abs=1.0) or h == pytest.approx(360.0, abs=1.0)

    def test_single_shade(self):
        assert generate_shades("#FF0000", 1) == ["#FF0000"]

    def test_invalid_count(self):
        with pytest.raises(ValueError):
            generate_shades("#FF0000", 0)


class TestGradient:
    """Piecewise linear gradients."""

    def test_two_stops(self):
        assert generate_gradient(["#000000", "#FFFFFF"], 3) == ["#000000", "#808080", "#FFFFFF"]

    def test_three_stops_pass_through_middle(self):
        gradient = generate_gradient(["#FF0000", "#00FF00", "#0000FF"], 5)
        assert gradient[0] == "#FF0000"
        assert gradient[2] == "#00FF00"
        assert gradient[4] == "#0000FF"

    def test_invalid_arguments(self):
        with pytest.raises(ValueError):
            generate_gradient(["#000000"], 5)
        with pytest.raises(ValueError):
            generate_gradient(["#000000", "#FFFFFF"], 1)


class TestMixing:
    """Two-color and multi-color mixing."""

    def test_rgb_mix(self):
        assert mix_colors_rgb("#000000", "#FFFFFF", 0.5) == "#808080"
        assert mix_colors_rgb("#FF0000", "#0000FF", 0.0) == "#FF0000"
        assert mix_colors_rgb("#FF0000", "#0000FF", 1.0) == "#0000FF"

    def test_hsl_mix_endpoints(self):
        assert mix_colors("#FF0000", "#0000FF", 0.0) == "#FF0000"
        assert mix_colors("#FF0000", "#0000FF", 1.0) == "#0000FF"

    def test_hsl_mix_takes_short_arc(self):
        # Red (0°) and blue (240°) meet at magenta (300°), not green
        mixed = mix_colors("#FF0000", "#0000FF", 0.5)
        assert mixed == "#FF00FF"

    def test_hsl_mix_with_gray_keeps_hue(self):
        mixed = mix_colors("#FF0000", "#808080", 0.5)
        h, _, _ = hex_to_hsl(mixed)
        assert h == pytest.approx(0.0, abs=1.0)

    def test_invalid_ratio(self):
        with pytest.raises(ValueError):
            mix_colors("#FF0000", "#0000FF", 1.5)

    def test_mix_multiple(self):
        assert mix_multiple_colors(["#FF0000", "#00FF00", "#0000FF"]) == "#555555"
        assert mix_multiple_colors(["#abc"]) == "#AABBCC"
        with pytest.raises(ValueError):
            mix_multiple_colors([])
