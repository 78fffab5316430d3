# Copyright (c) 2026 Paletteswap
# SPDX-License-Identifier: MIT

"""
K-means clustering of color lists.

Partitions colors into k non-empty clusters under a pluggable distance
metric. Centroids are initialized from k distinct input colors drawn
without replacement, so every run is reproducible from its seed.

Empty clusters are never returned. When an assignment step starves a
centroid, that centroid is re-seeded from the color lying farthest from
its own centroid (taken only from clusters that keep at least one
member). If every color already sits on its centroid there is nothing
left to split, which means the input has fewer distinct colors than k,
and the run fails with ClusteringNonConvergence.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

import numpy as np
from loguru import logger
from numpy.typing import ArrayLike, NDArray

from paletteswap.errors import ClusteringNonConvergence, InvalidInput, InvalidPaletteSize
from paletteswap.quantize.distance import (
    DistanceFunction,
    DistanceMetric,
    distance_matrix,
    resolve_distance,
)


ITERATION_LIMIT = 500


@dataclass(frozen=True)
class ClusteringConfig:
    """Configuration for clustering runs."""

    # Hard cap on assignment/update rounds (re-seed rounds included)
    max_iterations: int = ITERATION_LIMIT

    # Convert colors to LAB before clustering. CIEDE2000 always runs in LAB;
    # this only matters for the Euclidean metric.
    convert_to_lab: bool = True

    def __post_init__(self) -> None:
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {self.max_iterations}")


@dataclass(frozen=True, eq=False)
class ClusteringResult:
    """
    Output of a k-means run.

    Attributes:
        clusters: k arrays of shape (m_i, D); members keep input order
        centroids: (k, D) array; centroids[i] is the mean of clusters[i]
        labels: (N,) array mapping each input color to its cluster
        iterations: Rounds taken to converge
    """
    clusters: tuple[NDArray[np.float64], ...]
    centroids: NDArray[np.float64]
    labels: NDArray[np.int64]
    iterations: int

    @property
    def k(self) -> int:
        return len(self.clusters)


def as_color_list(colors: ArrayLike) -> NDArray[np.float64]:
    """Validate and copy a color list into an (N, D) float64 array."""
    data = np.array(colors, dtype=np.float64)
    if data.ndim != 2:
        raise InvalidInput(f"Expected color list of shape (N, D), got {data.shape}")
    if len(data) == 0:
        raise InvalidInput("Cannot cluster an empty color list")
    if not np.all(np.isfinite(data)):
        raise InvalidInput("Color list contains non-finite values")
    return data


def kmeans(
    colors: ArrayLike,
    k: int,
    distance: Union[DistanceMetric, str, DistanceFunction] = DistanceMetric.EUCLIDEAN,
    *,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
    config: Optional[ClusteringConfig] = None,
) -> ClusteringResult:
    """
    Cluster colors into k groups.

    Args:
        colors: Array-like of shape (N, D)
        k: Number of clusters, 1 <= k <= N
        distance: DistanceMetric, its name, or a broadcasting callable
        seed: Seed for a per-call generator (ignored when ``rng`` is given)
        rng: Generator to draw initial centroids from
        config: Iteration settings (uses defaults if None)

    Returns:
        ClusteringResult with k non-empty, index-aligned clusters/centroids

    Raises:
        InvalidInput: Empty or malformed color list
        InvalidPaletteSize: k <= 0 or k > N
        ClusteringNonConvergence: No stable, non-empty clustering within
            ``config.max_iterations`` rounds
    """
    data = as_color_list(colors)
    n = len(data)
    if k <= 0 or k > n:
        raise InvalidPaletteSize(k, n)

    cfg = config or ClusteringConfig()
    distance_fn = resolve_distance(distance)
    generator = rng if rng is not None else np.random.default_rng(seed)

    initial = generator.choice(n, size=k, replace=False)
    centroids = data[np.sort(initial)].copy()

    logger.debug(f"Clustering {n} colors into {k} groups")

    for iteration in range(1, cfg.max_iterations + 1):
        dists = distance_matrix(data, centroids, distance_fn)
        labels = np.argmin(dists, axis=1)
        counts = np.bincount(labels, minlength=k)

        if np.any(counts == 0):
            labels = _reseed_empty(data, dists, labels, counts, k, iteration)

        new_centroids = np.empty_like(centroids)
        for j in range(k):
            new_centroids[j] = data[labels == j].mean(axis=0)

        if np.array_equal(new_centroids, centroids):
            logger.debug(f"Clustering converged after {iteration} iterations")
            clusters = tuple(data[labels == j] for j in range(k))
            return ClusteringResult(
                clusters=clusters,
                centroids=centroids,
                labels=labels,
                iterations=iteration,
            )

        centroids = new_centroids

    raise ClusteringNonConvergence(k, cfg.max_iterations)


def _reseed_empty(
    data: NDArray[np.float64],
    dists: NDArray[np.float64],
    labels: NDArray[np.int64],
    counts: NDArray[np.int64],
    k: int,
    iteration: int,
) -> NDArray[np.int64]:
    """
    Move the farthest outlying colors into starved clusters.

    Processes empty clusters in index order. A color is only eligible if
    its current cluster keeps at least one other member, so filling one
    cluster never empties another.
    """
    labels = labels.copy()
    counts = counts.copy()
    own_distance = dists[np.arange(len(data)), labels].copy()

    for j in np.flatnonzero(counts == 0):
        eligible = (counts[labels] > 1) & (own_distance > 0)
        if not np.any(eligible):
            raise ClusteringNonConvergence(
                k,
                iteration,
                reason="too few distinct colors to fill every cluster",
            )

        candidates = np.where(eligible, own_distance, -np.inf)
        idx = int(np.argmax(candidates))

        counts[labels[idx]] -= 1
        labels[idx] = j
        counts[j] = 1
        # Sits on its new centroid, so it can't be picked again
        own_distance[idx] = 0.0

        logger.debug(f"Re-seeded empty cluster {j} from color {idx} at iteration {iteration}")

    return labels
