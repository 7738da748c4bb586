"""Normalize press counts into intensities and sixteen heat buckets."""

from __future__ import annotations

from bisect import bisect_right
from typing import Mapping

BUCKET_COUNT = 16

# Upper bounds (exclusive) of buckets 1..14; anything at or above the last is bucket 15.
# Bands narrow towards 1.0 so the busiest keys stay distinguishable.
BUCKET_THRESHOLDS: tuple[float, ...] = (
    0.04,
    0.08,
    0.13,
    0.19,
    0.26,
    0.34,
    0.42,
    0.52,
    0.62,
    0.70,
    0.77,
    0.84,
    0.90,
    0.96,
)

BUCKET_NAMES: tuple[str, ...] = (
    "None",
    "Ultra Cold",
    "Ext. Cold",
    "Very Cold",
    "Cold",
    "Semi-Cold",
    "Cool",
    "Slightly Cool",
    "Neutral",
    "Warm",
    "Slightly Warm",
    "Warmer",
    "Hot",
    "Very Hot",
    "Ext. Hot",
    "Extreme",
)


def max_count(frequencies: Mapping[str, int]) -> int:
    """Largest count in *frequencies*, never less than 1."""
    return max(1, max(frequencies.values(), default=0))


def intensity(count: int, max_count: int) -> float:
    """Return ``count / max_count`` clamped to [0, 1]."""
    value = count / max(max_count, 1)
    return max(0.0, min(1.0, value))


def bucket(intensity: float) -> int:
    """Map an intensity to a bucket index: 0 means no presses, 15 the hottest band."""
    if intensity <= 0:
        return 0
    return 1 + bisect_right(BUCKET_THRESHOLDS, intensity)


def bucket_bounds(index: int) -> tuple[float, float]:
    """Return the ``(low, high)`` intensity range covered by bucket *index*.

    Bucket 0 is the single point ``(0.0, 0.0)``; the others are half-open
    ``[low, high)`` ranges except bucket 15, which closes at 1.0.
    """
    if not 0 <= index < BUCKET_COUNT:
        raise IndexError(f"bucket index out of range: {index}")
    if index == 0:
        return (0.0, 0.0)
    edges = (0.0,) + BUCKET_THRESHOLDS + (1.0,)
    return (edges[index - 1], edges[index])
