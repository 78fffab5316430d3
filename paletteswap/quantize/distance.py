# Copyright (c) 2026 Paletteswap
# SPDX-License-Identifier: MIT

"""
Color distance metrics.

Both metrics broadcast over leading axes: passing colors of shape (N, 1, 3)
and centroids of shape (1, k, 3) yields an (N, k) distance matrix, which is
how the k-means engine and the palette mapper use them.

References:
- CIEDE2000: Sharma, Wu & Dalal (2005), "The CIEDE2000 color-difference
  formula: implementation notes, supplementary test data, and mathematical
  observations"
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

from paletteswap.errors import InvalidInput


DistanceFunction = Callable[[NDArray[np.float64], NDArray[np.float64]], NDArray[np.float64]]


class DistanceMetric(Enum):
    """Selector for the distance function used by clustering and mapping."""

    EUCLIDEAN = "euclidean"
    CIEDE2000 = "ciede2000"


# =============================================================================
# Euclidean
# =============================================================================


def euclidean_distance(a: ArrayLike, b: ArrayLike) -> NDArray[np.float64]:
    """
    Square root of summed squared per-dimension differences.

    Returns infinity when ``a`` and ``b`` have different dimensionality:
    an array over the broadcast leading shape, or a scalar when the leading
    shapes do not broadcast either.
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)

    if a.shape[-1:] != b.shape[-1:]:
        try:
            shape = np.broadcast_shapes(a.shape[:-1], b.shape[:-1])
        except ValueError:
            return np.float64(np.inf)
        return np.full(shape, np.inf) if shape else np.float64(np.inf)

    return np.sqrt(np.sum((b - a) ** 2, axis=-1))


# =============================================================================
# CIEDE2000
# =============================================================================

_25_POW_7 = 25.0 ** 7
_TWO_PI = 2.0 * np.pi

_DEG_6 = np.radians(6.0)
_DEG_25 = np.radians(25.0)
_DEG_30 = np.radians(30.0)
_DEG_63 = np.radians(63.0)
_DEG_275 = np.radians(275.0)


def delta_e00_distance(lab1: ArrayLike, lab2: ArrayLike) -> NDArray[np.float64]:
    """
    CIEDE2000 color difference between LAB colors.

    Hue angles are handled in radians throughout. The result is
    non-negative, and exactly 0 when both inputs are the same LAB triple.

    Args:
        lab1: Array of shape (..., 3) with LAB values
        lab2: Array of shape (..., 3) with LAB values (broadcastable)

    Returns:
        ΔE00 values with the broadcast leading shape
    """
    lab1 = np.asarray(lab1, dtype=np.float64)
    lab2 = np.asarray(lab2, dtype=np.float64)
    if lab1.shape[-1:] != (3,) or lab2.shape[-1:] != (3,):
        raise InvalidInput(
            f"CIEDE2000 needs LAB triples, got shapes {lab1.shape} and {lab2.shape}"
        )

    L1, a1, b1 = lab1[..., 0], lab1[..., 1], lab1[..., 2]
    L2, a2, b2 = lab2[..., 0], lab2[..., 1], lab2[..., 2]

    # 1. Chroma and its mean
    C1 = np.sqrt(a1 ** 2 + b1 ** 2)
    C2 = np.sqrt(a2 ** 2 + b2 ** 2)
    C_mean = (C1 + C2) / 2.0

    # 2. G-factor pulls a* toward CIELAB uniformity for neutral colors
    C_mean_7 = C_mean ** 7
    G = 0.5 * (1.0 - np.sqrt(C_mean_7 / (C_mean_7 + _25_POW_7)))
    a1_p = (1.0 + G) * a1
    a2_p = (1.0 + G) * a2

    # 3. Adjusted chroma and hue in [0, 2π)
    C1_p = np.sqrt(a1_p ** 2 + b1 ** 2)
    C2_p = np.sqrt(a2_p ** 2 + b2 ** 2)
    h1_p = _hue_angle(a1_p, b1)
    h2_p = _hue_angle(a2_p, b2)

    # 4. Differences, with hue wraparound
    dL_p = L2 - L1
    dC_p = C2_p - C1_p

    chroma_product = C1_p * C2_p
    has_hue = chroma_product != 0
    dh_p = h2_p - h1_p
    dh_p = np.where(dh_p > np.pi, dh_p - _TWO_PI, dh_p)
    dh_p = np.where(dh_p < -np.pi, dh_p + _TWO_PI, dh_p)
    dh_p = np.where(has_hue, dh_p, 0.0)

    # 5. Hue difference term
    dH_p = 2.0 * np.sqrt(chroma_product) * np.sin(dh_p / 2.0)

    # 6. Means, with hue wraparound
    L_mean_p = (L1 + L2) / 2.0
    C_mean_p = (C1_p + C2_p) / 2.0

    h_sum = h1_p + h2_p
    h_mean_p = np.where(
        np.abs(h1_p - h2_p) <= np.pi,
        h_sum / 2.0,
        np.where(h_sum < _TWO_PI, (h_sum + _TWO_PI) / 2.0, (h_sum - _TWO_PI) / 2.0),
    )
    h_mean_p = np.where(has_hue, h_mean_p, h_sum)

    # 7. Weighting functions and rotation term
    T = (
        1.0
        - 0.17 * np.cos(h_mean_p - _DEG_30)
        + 0.24 * np.cos(2.0 * h_mean_p)
        + 0.32 * np.cos(3.0 * h_mean_p + _DEG_6)
        - 0.20 * np.cos(4.0 * h_mean_p - _DEG_63)
    )
    d_theta = _DEG_30 * np.exp(-(((h_mean_p - _DEG_275) / _DEG_25) ** 2))

    C_mean_p_7 = C_mean_p ** 7
    R_C = 2.0 * np.sqrt(C_mean_p_7 / (C_mean_p_7 + _25_POW_7))
    R_T = -np.sin(2.0 * d_theta) * R_C

    L_term = (L_mean_p - 50.0) ** 2
    S_L = 1.0 + (0.015 * L_term) / np.sqrt(20.0 + L_term)
    S_C = 1.0 + 0.045 * C_mean_p
    S_H = 1.0 + 0.015 * C_mean_p * T

    # 8. Combine
    lightness = dL_p / S_L
    chroma = dC_p / S_C
    hue = dH_p / S_H
    squared = lightness ** 2 + chroma ** 2 + hue ** 2 + R_T * chroma * hue

    # Rounding can push an exact zero slightly negative
    return np.sqrt(np.maximum(squared, 0.0))


def _hue_angle(a_p: NDArray[np.float64], b: NDArray[np.float64]) -> NDArray[np.float64]:
    """Hue in [0, 2π); 0 when both components are 0."""
    h = np.arctan2(b, a_p)
    h = np.where(h < 0, h + _TWO_PI, h)
    return np.where((a_p == 0) & (b == 0), 0.0, h)


# =============================================================================
# Selection and nearest-centroid search
# =============================================================================

_METRICS: dict[DistanceMetric, DistanceFunction] = {
    DistanceMetric.EUCLIDEAN: euclidean_distance,
    DistanceMetric.CIEDE2000: delta_e00_distance,
}


def resolve_distance(
    metric: Union[DistanceMetric, str, DistanceFunction],
) -> DistanceFunction:
    """
    Turn a metric selector into a distance function.

    Accepts a DistanceMetric, its string value ("euclidean", "ciede2000"),
    or a callable. Callables must broadcast like the built-in metrics.
    """
    if isinstance(metric, DistanceMetric):
        return _METRICS[metric]
    if isinstance(metric, str):
        try:
            return _METRICS[DistanceMetric(metric.lower())]
        except ValueError as e:
            raise InvalidInput(f"Unknown distance metric: {metric!r}") from e
    if callable(metric):
        return metric
    raise InvalidInput(f"Expected a DistanceMetric or callable, got {type(metric)}")


def distance_matrix(
    colors: NDArray[np.float64],
    centroids: NDArray[np.float64],
    distance: DistanceFunction,
) -> NDArray[np.float64]:
    """Distances of shape (N, k) from every color to every centroid."""
    return np.asarray(
        distance(colors[:, np.newaxis, :], centroids[np.newaxis, :, :]),
        dtype=np.float64,
    )


def nearest_centroid(
    colors: NDArray[np.float64],
    centroids: NDArray[np.float64],
    distance: DistanceFunction,
) -> NDArray[np.int64]:
    """
    Index of the closest centroid for each color.

    Ties go to the lowest centroid index (np.argmin returns the first
    minimum).
    """
    return np.argmin(distance_matrix(colors, centroids, distance), axis=1)
