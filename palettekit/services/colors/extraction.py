"""
Image color extraction.

Derives a small set of representative colors from a flat RGBA pixel buffer
(row-major, 4 bytes per pixel). Decoding the image is the caller's job;
pixel_buffer_from_image adapts an already-decoded Pillow image.

Two algorithms are available:

- adaptive (default): size-tiered sampling and bucket deduplication with
  counts as weights. Simple images (few buckets, few samples or low
  diversity) return their most frequent buckets directly; the rest go
  through weighted k-means (scikit-learn) with a deterministic
  farthest-point initialization, ordered by cluster population. Near
  duplicates are merged in both cases.
- legacy: every 10th opaque pixel, randomly seeded k-means for a fixed
  number of iterations, deduplicated by exact hex.

An image with no opaque pixels yields an empty list and a logged warning.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
from loguru import logger
from PIL import Image
from sklearn.cluster import KMeans

from palettekit.config import config
from palettekit.constants import (
    ALPHA_OPAQUE_THRESHOLD,
    DIRECT_EXTRACTION_MAX_DIVERSITY,
    DIRECT_EXTRACTION_MIN_SAMPLES,
    DIRECT_EXTRACTION_UNIQUE_FACTOR,
    KMEANS_CONSTANTS,
    LEGACY_SAMPLE_STRIDE,
    SAMPLING_MAX_STRIDE,
    SAMPLING_TIERS,
)
from palettekit.services.observability import performance_monitor, record_event
from .conversions import is_color_similar, rgb_to_hex

PixelBuffer = Union[bytes, bytearray, memoryview, Sequence[int], np.ndarray]


class ExtractionAlgorithm(str, Enum):
    ADAPTIVE = "adaptive"
    LEGACY = "legacy"


@dataclass(frozen=True)
class ImageAnalysis:
    """Sampling statistics for one image."""
    total_pixels: int
    sampling_rate: int
    sampled_pixels: int
    unique_colors: int
    color_diversity: float


# ============================================================================
# Input handling
# ============================================================================

def _as_rgba(pixels: PixelBuffer, width: int, height: int) -> np.ndarray:
    """
    Validate a flat RGBA buffer and reshape it to (N, 4) uint8.

    Raises:
        ValueError: If dimensions are negative or the buffer length is not width*height*4
    """
    if width < 0 or height < 0:
        raise ValueError(f"Invalid image dimensions: {width}x{height}")

    if isinstance(pixels, (bytes, bytearray, memoryview)):
        data = np.frombuffer(pixels, dtype=np.uint8)
    else:
        data = np.asarray(pixels)
        if data.size and (data.min() < 0 or data.max() > 255):
            raise ValueError("Pixel values must be in 0-255")
        data = data.astype(np.uint8).reshape(-1)

    expected = width * height * 4
    if data.size != expected:
        raise ValueError(
            f"Pixel buffer length {data.size} does not match {width}x{height} RGBA ({expected})"
        )
    return data.reshape(-1, 4)


def pixel_buffer_from_image(image: Image.Image) -> Tuple[bytes, int, int]:
    """
    Convert a decoded Pillow image to a flat RGBA buffer.

    Returns:
        Tuple of (buffer, width, height)
    """
    rgba = image if image.mode == "RGBA" else image.convert("RGBA")
    width, height = rgba.size
    return rgba.tobytes(), width, height


# ============================================================================
# Adaptive pipeline
# ============================================================================

def calculate_sampling_rate(total_pixels: int, min_samples: Optional[int] = None) -> int:
    """
    Choose a sampling stride (every nth pixel) from the image size.

    Tiers: <10k pixels -> 1, <100k -> 4, <500k -> 16, else 32. The stride is
    lowered so at least min_samples pixels are sampled when the image has
    that many; min_samples=0 disables the floor.

    Raises:
        ValueError: If min_samples is out of range
    """
    min_samples = config.EXTRACTION_MIN_SAMPLES if min_samples is None else min_samples
    if not config.validate_min_samples(min_samples):
        raise ValueError(f"Invalid minimum sample count: {min_samples}")

    rate = SAMPLING_MAX_STRIDE
    for upper_bound, tier_rate in SAMPLING_TIERS:
        if total_pixels < upper_bound:
            rate = tier_rate
            break

    if min_samples > 0 and total_pixels >= min_samples:
        rate = min(rate, max(1, total_pixels // min_samples))
    return rate


def sample_pixels(rgba: np.ndarray, sampling_rate: int) -> np.ndarray:
    """
    Take every nth pixel and keep the opaque ones.

    Args:
        rgba: (N, 4) uint8 pixels
        sampling_rate: Stride between sampled pixels

    Returns:
        (M, 3) uint8 RGB pixels with alpha > 128
    """
    sampled = rgba[::max(1, sampling_rate)]
    opaque = sampled[sampled[:, 3] > ALPHA_OPAQUE_THRESHOLD]
    return opaque[:, :3]


def deduplicate_pixels(pixels: np.ndarray,
                       bucket: Optional[int] = None) -> Tuple[np.ndarray, np.ndarray]:
    """
    Merge colors that fall into the same RGB bucket.

    Each bucket is replaced by the mean of its pixels, and the pixel count
    becomes its weight.

    Returns:
        Tuple of ((U, 3) float64 colors, (U,) float64 weights)

    Raises:
        ValueError: If bucket does not divide 256 evenly
    """
    bucket = config.EXTRACTION_DEDUP_BUCKET if bucket is None else bucket
    if not config.validate_dedup_bucket(bucket):
        raise ValueError(f"Invalid deduplication bucket size: {bucket}")
    if len(pixels) == 0:
        return np.empty((0, 3), dtype=np.float64), np.empty(0, dtype=np.float64)

    keys = pixels.astype(np.int32) // bucket
    _, inverse = np.unique(keys, axis=0, return_inverse=True)
    inverse = inverse.reshape(-1)

    weights = np.bincount(inverse).astype(np.float64)
    colors = np.stack(
        [np.bincount(inverse, weights=pixels[:, c].astype(np.float64)) for c in range(3)],
        axis=1,
    ) / weights[:, None]
    return colors, weights


def _farthest_point_init(colors: np.ndarray, weights: np.ndarray, k: int) -> np.ndarray:
    """Deterministic seeding: heaviest color first, then weighted farthest points."""
    chosen = [int(np.argmax(weights))]
    min_dist = np.sum((colors - colors[chosen[0]]) ** 2, axis=1)
    for _ in range(1, k):
        index = int(np.argmax(min_dist * weights))
        chosen.append(index)
        min_dist = np.minimum(min_dist, np.sum((colors - colors[index]) ** 2, axis=1))
    return colors[chosen]


def cluster_colors(colors: np.ndarray, weights: np.ndarray, k: int) -> List[Tuple[np.ndarray, float]]:
    """
    Cluster weighted colors with k-means.

    Args:
        colors: (U, 3) distinct colors
        weights: (U,) pixel counts per color
        k: Number of clusters (at most U)

    Returns:
        List of (centroid, population) ordered by population, descending;
        clusters that end up empty are dropped
    """
    kmeans = KMeans(
        n_clusters=k,
        init=_farthest_point_init(colors, weights, k),
        n_init=1,
        max_iter=KMEANS_CONSTANTS.MAX_ITERATIONS,
        algorithm="lloyd",
    )
    kmeans.fit(colors, sample_weight=weights)

    populations = np.bincount(kmeans.labels_, weights=weights, minlength=k)
    order = np.argsort(-populations, kind="stable")
    return [(kmeans.cluster_centers_[i], float(populations[i])) for i in order if populations[i] > 0]


def _merge_similar(hexes: Sequence[str]) -> List[str]:
    merged: List[str] = []
    for hex_color in hexes:
        if hex_color in merged or is_color_similar(hex_color, merged):
            continue
        merged.append(hex_color)
    return merged


def _validate_k(k: int) -> None:
    if k < 1:
        raise ValueError(f"Number of colors must be at least 1, got {k}")


def _top_up(hexes: List[str], colors: np.ndarray, weights: np.ndarray, k: int) -> List[str]:
    """Append the most frequent buckets not similar to a kept color until k are kept."""
    result = list(hexes)
    for i in np.argsort(-weights, kind="stable"):
        if len(result) >= k:
            break
        hex_color = rgb_to_hex(colors[i])
        if hex_color in result or is_color_similar(hex_color, result):
            continue
        result.append(hex_color)
    return result[:k]


def _analyze(rgba: np.ndarray) -> Tuple[ImageAnalysis, np.ndarray, np.ndarray]:
    total = len(rgba)
    rate = calculate_sampling_rate(total)
    sampled = sample_pixels(rgba, rate)
    colors, weights = deduplicate_pixels(sampled)
    analysis = ImageAnalysis(
        total_pixels=total,
        sampling_rate=rate,
        sampled_pixels=len(sampled),
        unique_colors=len(colors),
        color_diversity=len(colors) / len(sampled) if len(sampled) else 0.0,
    )
    return analysis, colors, weights


def analyze_image(pixels: PixelBuffer, width: int, height: int) -> ImageAnalysis:
    """Report sampling statistics for an image without clustering it."""
    analysis, _, _ = _analyze(_as_rgba(pixels, width, height))
    return analysis


def should_use_direct_extraction(analysis: ImageAnalysis, k: int) -> bool:
    """
    Decide whether an image is simple enough to skip k-means.

    Direct extraction returns the most frequent buckets, so flat artwork
    such as logos keeps its exact colors.
    """
    return (
        analysis.unique_colors <= DIRECT_EXTRACTION_UNIQUE_FACTOR * k
        or analysis.sampled_pixels < DIRECT_EXTRACTION_MIN_SAMPLES
        or analysis.color_diversity < DIRECT_EXTRACTION_MAX_DIVERSITY
    )


def extract_colors(pixels: PixelBuffer, width: int, height: int, k: int = 5) -> List[str]:
    """
    Extract up to k dominant colors with the adaptive algorithm.

    Args:
        pixels: Flat RGBA buffer, width*height*4 values
        width: Image width in pixels
        height: Image height in pixels
        k: Maximum number of colors

    Returns:
        Hex colors ordered by how much of the image they cover; empty when
        the image has no opaque pixels. Fewer than k only when the image
        has fewer than k mutually dissimilar colors.

    Raises:
        ValueError: If the buffer does not match the dimensions or k < 1
    """
    _validate_k(k)
    rgba = _as_rgba(pixels, width, height)

    with performance_monitor("color_extraction", item_count=len(rgba)):
        analysis, colors, weights = _analyze(rgba)
        logger.debug(
            f"Sampled {analysis.sampled_pixels} opaque pixels of {analysis.total_pixels} "
            f"at rate {analysis.sampling_rate}, diversity {analysis.color_diversity:.3f}"
        )

        if analysis.sampled_pixels == 0:
            logger.warning(f"No opaque pixels in {width}x{height} image; nothing to extract")
            record_event("extraction_empty")
            return []

        if should_use_direct_extraction(analysis, k):
            hexes: List[str] = []
        else:
            clusters = cluster_colors(colors, weights, k)
            hexes = _merge_similar([rgb_to_hex(center) for center, _ in clusters])

        result = _top_up(hexes, colors, weights, k)

    logger.info(f"Extracted {len(result)} colors from {analysis.unique_colors} distinct samples")
    return result


# ============================================================================
# Legacy algorithm
# ============================================================================

def extract_colors_old(pixels: PixelBuffer,
                       width: int,
                       height: int,
                       k: int = 5,
                       rng: Optional[np.random.Generator] = None) -> List[str]:
    """
    Extract colors with the fixed-stride k-means of earlier releases.

    Every 10th opaque pixel is clustered for a fixed number of iterations
    from randomly chosen starting pixels; an empty cluster keeps its
    previous centroid. Results are ordered by cluster size and deduplicated
    by exact hex.
    """
    _validate_k(k)
    rgba = _as_rgba(pixels, width, height)
    rng = rng if rng is not None else np.random.default_rng()

    with performance_monitor("color_extraction_legacy", item_count=len(rgba)):
        samples = sample_pixels(rgba, LEGACY_SAMPLE_STRIDE).astype(np.float64)

        if len(samples) == 0:
            logger.warning(f"No opaque pixels in {width}x{height} image; nothing to extract")
            record_event("extraction_empty")
            return []

        k_eff = min(k, len(samples))
        centroids = samples[rng.choice(len(samples), size=k_eff, replace=False)]
        labels = np.zeros(len(samples), dtype=np.int64)

        for _ in range(KMEANS_CONSTANTS.MAX_ITERATIONS):
            distances = np.sum((samples[:, None, :] - centroids[None, :, :]) ** 2, axis=2)
            labels = np.argmin(distances, axis=1)
            for cluster in range(k_eff):
                members = samples[labels == cluster]
                if len(members):
                    centroids[cluster] = members.mean(axis=0)

        populations = np.bincount(labels, minlength=k_eff)
        order = np.argsort(-populations, kind="stable")
        hexes = list(dict.fromkeys(rgb_to_hex(centroids[i]) for i in order))

    return hexes


def extract_palette(pixels: PixelBuffer,
                    width: int,
                    height: int,
                    k: int = 5,
                    algorithm: Union[ExtractionAlgorithm, str] = ExtractionAlgorithm.ADAPTIVE,
                    rng: Optional[np.random.Generator] = None) -> List[str]:
    """Extract colors with the selected algorithm."""
    algorithm = ExtractionAlgorithm(algorithm)
    if algorithm == ExtractionAlgorithm.LEGACY:
        return extract_colors_old(pixels, width, height, k, rng)
    return extract_colors(pixels, width, height, k)
