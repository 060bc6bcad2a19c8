"""
PaletteKit ID Utilities
Generate identifiers for colors and palettes.
"""
import uuid
from datetime import datetime

from palettekit.constants import COLOR_ID_LENGTH


def generate_color_id() -> str:
    """
    Generate a short random color ID.

    Returns:
        Lowercase hex string of COLOR_ID_LENGTH characters
    """
    return uuid.uuid4().hex[:COLOR_ID_LENGTH]


def generate_palette_id() -> str:
    """
    Generate a unique palette ID.

    Returns:
        ID string in the form pal-YYYYmmddHHMMSS-xxxxxxxx
    """
    timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
    short_uuid = str(uuid.uuid4())[:8]
    return f"pal-{timestamp}-{short_uuid}"


def extract_timestamp_from_palette_id(palette_id: str) -> str:
    """
    Extract timestamp from a palette ID.

    Args:
        palette_id: Palette ID string

    Returns:
        Timestamp string or empty if not found
    """
    parts = palette_id.split("-")
    if len(parts) >= 2 and parts[0] == "pal":
        return parts[1]
    return ""
