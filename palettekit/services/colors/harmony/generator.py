"""
Harmonious palette generator.

Walks a preset's generation tokens from a base color, emitting unique
colors until the requested count is reached:

- relationship tokens (analogous, complementary, ...) emit every related
  hue at the base saturation and lightness
- white / black emit the pure neutrals
- variations fill all remaining slots with lightness (±25%) and saturation
  (±35%) jitters of the chromatic colors chosen so far; tokens after
  variations are only reached if variations stall

Rejected candidates (duplicates) count against
KMEANS_CONSTANTS.MAX_GENERATION_ATTEMPTS. Once the tokens are exhausted the
remainder is filled with random colors, which is logged and flagged on the
result rather than raised.
"""

import itertools
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Union

import numpy as np
from loguru import logger

from palettekit.config import config
from palettekit.constants import (
    GRAYSCALE_SATURATION_THRESHOLD,
    KMEANS_CONSTANTS,
    LIGHTNESS_VARIATION_FACTOR,
    MAX_PALETTE_COLORS,
    MIN_PALETTE_COLORS,
    SATURATION_VARIATION_FACTOR,
)
from palettekit.exceptions import PaletteSizeError
from palettekit.services.observability import performance_monitor, record_event
from ..conversions import generate_random_color, hex_to_hsl, hsl_to_hex, normalize_hex
from . import harmony_hues, HARMONY_OFFSETS
from .presets import GenerationToken, HarmonyPreset, GROWTH_PRIORITIES, get_generation_priorities

WHITE_HEX = "#FFFFFF"
BLACK_HEX = "#000000"

PresetLike = Union[HarmonyPreset, str, None]


@dataclass
class GenerationResult:
    """Output of a palette generation run."""
    colors: List[str]
    preset: HarmonyPreset
    base_hex: str
    attempts: int = 0
    used_random_fallback: bool = False


@dataclass
class _PaletteBuilder:
    """Accumulates unique colors up to a target count."""
    count: int
    colors: List[str] = field(default_factory=list)
    attempts: int = 0

    @property
    def full(self) -> bool:
        return len(self.colors) >= self.count

    @property
    def exhausted(self) -> bool:
        return self.attempts >= KMEANS_CONSTANTS.MAX_GENERATION_ATTEMPTS

    def add(self, hex_color: str) -> bool:
        if self.full:
            return False
        if hex_color in self.colors:
            self.attempts += 1
            return False
        self.colors.append(hex_color)
        return True


def _resolve_preset(preset: PresetLike) -> HarmonyPreset:
    if preset is None:
        return HarmonyPreset(config.DEFAULT_PRESET)
    return HarmonyPreset(preset)


def _random_base(rng: np.random.Generator) -> str:
    """Pick a random hue at a usable saturation and lightness."""
    hue = float(rng.uniform(0.0, 360.0))
    saturation = float(rng.uniform(0.55, 0.85))
    lightness = float(rng.uniform(0.40, 0.60))
    return hsl_to_hex(hue, saturation, lightness)


def _variation_sources(colors: Sequence[str], base_hex: str) -> List[str]:
    sources = [c for c in colors if c not in (WHITE_HEX, BLACK_HEX)]
    return sources or [base_hex]


def _variation_candidates(sources: Sequence[str]) -> Iterator[str]:
    """
    Yield lightness/saturation jitters of the source colors.

    Each round applies L-down, L-up, S-down, S-up to every source; later
    rounds scale the factors (round 2 uses ±50% lightness, ±70% saturation).
    """
    hsl = [hex_to_hsl(c) for c in sources]
    for step in itertools.count(1):
        l_delta = LIGHTNESS_VARIATION_FACTOR * step
        s_delta = SATURATION_VARIATION_FACTOR * step
        for kind, factor in (("l", 1.0 - l_delta), ("l", 1.0 + l_delta),
                             ("s", 1.0 - s_delta), ("s", 1.0 + s_delta)):
            for h, s, l in hsl:
                if kind == "l":
                    yield hsl_to_hex(h, s, l * factor)
                else:
                    yield hsl_to_hex(h, s * factor, l)


def _walk_tokens(builder: _PaletteBuilder, anchor_hex: str,
                 tokens: Sequence[GenerationToken]) -> None:
    """Emit colors for each token in order until the builder is full."""
    anchor_h, anchor_s, anchor_l = hex_to_hsl(anchor_hex)

    for token in tokens:
        if builder.full:
            return

        if token == GenerationToken.WHITE:
            builder.add(WHITE_HEX)
        elif token == GenerationToken.BLACK:
            builder.add(BLACK_HEX)
        elif token == GenerationToken.VARIATIONS:
            sources = _variation_sources(builder.colors, anchor_hex)
            for candidate in _variation_candidates(sources):
                if builder.full or builder.exhausted:
                    break
                builder.add(candidate)
        elif token in HARMONY_OFFSETS:
            for hue in harmony_hues(anchor_h, token):
                builder.add(hsl_to_hex(hue, anchor_s, anchor_l))
        else:
            raise ValueError(f"Unhandled generation token: {token}")


def _fill_random(builder: _PaletteBuilder, rng: np.random.Generator) -> bool:
    """Fill remaining slots with random colors. Returns True if any were needed."""
    if builder.full:
        return False

    missing = builder.count - len(builder.colors)
    # Bounded so a pathological RNG can never hang the caller
    for _ in range(KMEANS_CONSTANTS.MAX_GENERATION_ATTEMPTS * max(1, missing)):
        if builder.full:
            break
        builder.add(generate_random_color(rng))
    return True


def _validate_count(count: int) -> None:
    if not config.validate_color_count(count):
        raise PaletteSizeError(
            f"Color count must be between {MIN_PALETTE_COLORS} and {MAX_PALETTE_COLORS}, got {count}"
        )


def generate_palette(base_hex: Optional[str] = None,
                     count: int = 5,
                     preset: PresetLike = None,
                     rng: Optional[np.random.Generator] = None) -> GenerationResult:
    """
    Generate a harmonious palette.

    Args:
        base_hex: Base color; a random hue is chosen when omitted
        count: Number of colors (1-16)
        preset: Harmony preset; defaults to config.DEFAULT_PRESET
        rng: Seeded numpy Generator for the random base and fallback fill

    Returns:
        GenerationResult whose colors start with the base color

    Raises:
        PaletteSizeError: If count is outside 1-16
        InvalidColorError: If base_hex is malformed
    """
    _validate_count(count)
    preset = _resolve_preset(preset)
    rng = rng if rng is not None else np.random.default_rng()
    base = normalize_hex(base_hex) if base_hex is not None else _random_base(rng)

    with performance_monitor("palette_generation", item_count=count):
        builder = _PaletteBuilder(count=count)
        builder.add(base)
        _walk_tokens(builder, base, get_generation_priorities(preset))
        used_fallback = _fill_random(builder, rng)

    if used_fallback:
        logger.warning(
            f"Harmony '{preset.value}' from {base} could not produce {count} unique colors "
            f"after {builder.attempts} attempts; filled remainder randomly"
        )
        record_event("generation_random_fallback")

    return GenerationResult(
        colors=builder.colors,
        preset=preset,
        base_hex=base,
        attempts=builder.attempts,
        used_random_fallback=used_fallback,
    )


def generate_harmonious_palette(base_hex: Optional[str] = None,
                                count: int = 5,
                                preset: PresetLike = None,
                                rng: Optional[np.random.Generator] = None) -> List[str]:
    """Generate a harmonious palette and return just its hex colors."""
    return generate_palette(base_hex, count, preset, rng).colors


def _pick_anchor(existing: Sequence[str]) -> str:
    """First chromatic color of a palette, or its first color."""
    for hex_color in existing:
        _, s, _ = hex_to_hsl(hex_color)
        if s >= GRAYSCALE_SATURATION_THRESHOLD:
            return hex_color
    return existing[0]


def extend_palette(existing: Sequence[str],
                   additional: int,
                   preset: PresetLike = None,
                   rng: Optional[np.random.Generator] = None) -> List[str]:
    """
    Derive new colors that harmonize with an existing palette.

    Args:
        existing: Colors already in the palette (kept, not returned)
        additional: Number of new colors wanted
        preset: Harmony preset to follow; growth relationships when omitted
        rng: Seeded numpy Generator for random fallback

    Returns:
        `additional` new unique hex colors, none equal to an existing color
    """
    if additional <= 0:
        return []

    rng = rng if rng is not None else np.random.default_rng()
    existing = [normalize_hex(c) for c in existing]
    if not existing:
        return generate_harmonious_palette(None, additional, preset, rng)

    tokens = get_generation_priorities(_resolve_preset(preset)) if preset is not None else GROWTH_PRIORITIES
    anchor = _pick_anchor(existing)

    unique_existing = list(dict.fromkeys(existing))
    builder = _PaletteBuilder(count=len(unique_existing) + additional, colors=list(unique_existing))
    _walk_tokens(builder, anchor, tokens)
    if _fill_random(builder, rng):
        logger.warning(f"Palette extension from {anchor} needed random colors")
        record_event("generation_random_fallback")

    return builder.colors[len(unique_existing):]


def derive_harmonious_color(existing: Sequence[str],
                            rng: Optional[np.random.Generator] = None) -> str:
    """Derive a single new color that harmonizes with existing colors."""
    return extend_palette(existing, 1, rng=rng)[0]
