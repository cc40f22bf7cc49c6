"""
Shared utilities for JTL summary calculations: percentiles, rates, and unit conversions.
"""

import math
from fractions import Fraction
from typing import Dict, Iterable

import numpy as np

from jtl_splitter.configuration import (
    BYTES_PER_KB,
    MILLIS_PER_SECOND,
    MIN_DURATION_MS,
)


def nearest_rank(percentile: float, sample_count: int) -> int:
    """
    Calculate the 1-based nearest rank for a percentile.

    The rank is ceil(p / 100 * n) computed on exact fractions, so that for
    example 99.9% of 1000 samples is rank 999 rather than 1000. The result is
    clamped to [1, sample_count].

    Args:
        percentile: Percentile in the range (0, 100]
        sample_count: Number of samples (must be positive)

    Returns:
        1-based rank into the ascending sample order
    """
    rank = math.ceil(Fraction(str(percentile)) * sample_count / 100)
    return min(max(rank, 1), sample_count)


def calculate_percentiles(values: Iterable[int], percentiles: Iterable[float]) -> Dict[float, float]:
    """
    Calculate nearest-rank percentiles without interpolation.

    Args:
        values: Elapsed times
        percentiles: Percentiles to compute (e.g. 50, 99.9)

    Returns:
        Dictionary mapping each percentile to its sample value, or 0.0 for
        every percentile if there are no values
    """
    ordered = np.sort(np.asarray(list(values), dtype=np.int64))
    if ordered.size == 0:
        return {p: 0.0 for p in percentiles}
    return {p: float(ordered[nearest_rank(p, int(ordered.size)) - 1]) for p in percentiles}


def calculate_duration_seconds(first_timestamp_ms: int, last_timestamp_ms: int) -> float:
    """
    Calculate a phase span in seconds, never shorter than one millisecond.

    A single sample or out-of-order input yields a zero or negative span;
    the lower bound keeps the rate calculations finite.
    """
    return max(MIN_DURATION_MS, last_timestamp_ms - first_timestamp_ms) / MILLIS_PER_SECOND


def calculate_requests_per_second(request_count: int, duration_seconds: float) -> float:
    """
    Calculate samples per second from a sample count and duration.

    Args:
        request_count: Number of samples
        duration_seconds: Duration in seconds

    Returns:
        Samples per second
    """
    if duration_seconds <= 0:
        return 0.0
    return request_count / duration_seconds


def calculate_kb_per_second(total_bytes: int, duration_seconds: float) -> float:
    """Calculate kilobytes (1024 bytes) per second."""
    if duration_seconds <= 0:
        return 0.0
    return total_bytes / BYTES_PER_KB / duration_seconds
