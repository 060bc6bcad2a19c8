"""
Color format rendering and free-form color input parsing.
"""

import re
from dataclasses import dataclass, asdict
from typing import Dict, Optional

from .conversions import (
    hex_to_cmyk, hex_to_hsl, hex_to_hsv, hex_to_lab, hex_to_rgb,
    hsl_to_hex, is_valid_hex, normalize_hex, rgb_to_hex,
)
from .named_colors import CSS_KEYWORDS
from .naming import get_color_name

_RGB_INPUT = re.compile(
    r"^rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*[\d.]+%?\s*)?\)$",
    re.IGNORECASE,
)
_HSL_INPUT = re.compile(
    r"^hsla?\(\s*(-?\d+(?:\.\d+)?)(?:deg)?\s*,\s*(\d+(?:\.\d+)?)%\s*,\s*(\d+(?:\.\d+)?)%"
    r"\s*(?:,\s*[\d.]+%?\s*)?\)$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class ColorFormats:
    """A color rendered in every supported notation."""
    hex: str
    rgb: str
    hsl: str
    hsv: str
    cmyk: str
    lab: str
    name: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


def get_all_color_formats(hex_color: str) -> ColorFormats:
    """
    Render a color in CSS-style notations.

    Args:
        hex_color: Color in any accepted hex form

    Returns:
        ColorFormats with hex, rgb, hsl, hsv, cmyk, lab and name strings
    """
    hex_color = normalize_hex(hex_color)
    r, g, b = hex_to_rgb(hex_color)
    h, s, l = hex_to_hsl(hex_color)
    hv, sv, v = hex_to_hsv(hex_color)
    c, m, y, k = hex_to_cmyk(hex_color)
    lab_l, lab_a, lab_b = hex_to_lab(hex_color)

    return ColorFormats(
        hex=hex_color,
        rgb=f"rgb({r}, {g}, {b})",
        hsl=f"hsl({round(h)}, {round(s * 100)}%, {round(l * 100)}%)",
        hsv=f"hsv({round(hv)}, {round(sv * 100)}%, {round(v * 100)}%)",
        cmyk=f"cmyk({round(c * 100)}%, {round(m * 100)}%, {round(y * 100)}%, {round(k * 100)}%)",
        lab=f"lab({lab_l:.2f}% {lab_a:.2f} {lab_b:.2f})",
        name=get_color_name(hex_color),
    )


def parse_color_input(text: str) -> Optional[str]:
    """
    Parse user-typed color text into a hex color.

    Accepts hex ("#f00", "ff0000"), rgb()/rgba(), hsl()/hsla() and CSS
    color keywords. Alpha components are ignored.

    Returns:
        Normalized hex, or None if the text is not a recognizable color
    """
    if not isinstance(text, str):
        return None
    text = text.strip()

    if is_valid_hex(text):
        return normalize_hex(text)

    match = _RGB_INPUT.match(text)
    if match:
        channels = [int(v) for v in match.groups()]
        if all(0 <= v <= 255 for v in channels):
            return rgb_to_hex(channels)
        return None

    match = _HSL_INPUT.match(text)
    if match:
        h, s, l = (float(v) for v in match.groups())
        if s <= 100 and l <= 100:
            return hsl_to_hex(h, s / 100.0, l / 100.0)
        return None

    return CSS_KEYWORDS.get(text.replace(" ", "").lower())
