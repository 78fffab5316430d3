# Copyright (c) 2026 Paletteswap
# SPDX-License-Identifier: MIT

"""Frequency ordering of clusters and their centroids."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from paletteswap.errors import InvalidInput


@dataclass(frozen=True, eq=False)
class SortedPalette:
    """Clusters (and optionally centroids) ordered most populous first."""
    sorted_clusters: tuple[NDArray[np.float64], ...]
    sorted_centroids: Optional[NDArray[np.float64]] = None


def sort_by_frequency(
    clusters: Sequence[ArrayLike],
    centroids: Optional[ArrayLike] = None,
) -> SortedPalette:
    """
    Order clusters by descending member count.

    The sort is stable: equal-size clusters keep their relative order.
    Centroids, when given, are reordered identically.

    Args:
        clusters: Sequence of color lists
        centroids: Optional array of shape (k, D), index-aligned with clusters

    Returns:
        SortedPalette; ``sorted_centroids`` is None when no centroids were given
    """
    arrays = tuple(np.asarray(cluster, dtype=np.float64) for cluster in clusters)
    sizes = np.array([len(cluster) for cluster in arrays], dtype=np.int64)

    # Stable sort on negated sizes → descending, ties in original order
    order = np.argsort(-sizes, kind="stable")
    sorted_clusters = tuple(arrays[i] for i in order)

    sorted_centroids = None
    if centroids is not None:
        centroids = np.asarray(centroids, dtype=np.float64)
        if len(centroids) != len(arrays):
            raise InvalidInput(
                f"Got {len(centroids)} centroids for {len(arrays)} clusters"
            )
        sorted_centroids = centroids[order]

    return SortedPalette(sorted_clusters=sorted_clusters, sorted_centroids=sorted_centroids)


def flatten_colors(
    clusters: Sequence[ArrayLike],
    centroids: Optional[ArrayLike] = None,
    sort_colors: bool = False,
) -> NDArray[np.float64]:
    """
    Concatenate clusters into one color list.

    With ``sort_colors`` the clusters are frequency-sorted first, so the
    output groups colors by palette entry, most common entry first. Used
    for palette preview strips.
    """
    if sort_colors:
        clusters = sort_by_frequency(clusters, centroids).sorted_clusters
    arrays = [np.asarray(cluster, dtype=np.float64) for cluster in clusters]
    if not arrays:
        return np.empty((0, 3), dtype=np.float64)
    return np.concatenate(arrays, axis=0)
