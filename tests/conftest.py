"""
Test configuration and fixtures for PaletteKit tests.
"""
import numpy as np
import pytest
from PIL import Image

from palettekit.services.observability import reset_metrics as _reset_metrics


@pytest.fixture
def rng():
    """Seeded generator so random palettes are reproducible."""
    return np.random.default_rng(42)


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics before each test."""
    _reset_metrics()
    yield


@pytest.fixture
def quadrant_image():
    """64x64 RGBA image with four solid quadrants: red, green, blue, white."""
    arr = np.zeros((64, 64, 4), dtype=np.uint8)
    arr[:, :, 3] = 255
    arr[:32, :32, :3] = (255, 0, 0)
    arr[:32, 32:, :3] = (0, 128, 0)
    arr[32:, :32, :3] = (0, 0, 255)
    arr[32:, 32:, :3] = (255, 255, 255)
    return Image.fromarray(arr, mode="RGBA")
