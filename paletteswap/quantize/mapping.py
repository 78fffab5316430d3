# Copyright (c) 2026 Paletteswap
# SPDX-License-Identifier: MIT

"""
Cross-palette color mapping.

Two palettes sorted the same way (both by frequency) are put into index
correspondence: entry i of palette A maps to entry i of palette B. Colors
from A's source list are then replaced one by one with B's colors.

Entries are addressed by integer index, never by centroid value, so
floating-point centroids that happen to compare equal (or fail to) cannot
alias each other.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

from paletteswap.errors import InvalidInput, MappingMismatch
from paletteswap.quantize.distance import (
    DistanceFunction,
    DistanceMetric,
    nearest_centroid,
    resolve_distance,
)


@dataclass
class MappingEntry:
    """
    Target side of one palette correspondence.

    Attributes:
        centroid: Palette B color substituted in centroid mode
        cluster: Palette B cluster members cycled through in original-colors mode
        cursor: Index of the next cluster member to emit
    """
    centroid: NDArray[np.float64]
    cluster: NDArray[np.float64]
    cursor: int = 0

    def take(self, count: int) -> NDArray[np.float64]:
        """Emit ``count`` members round-robin and advance the cursor."""
        size = len(self.cluster)
        if size == 0:
            raise MappingMismatch("Cannot draw colors from an empty target cluster")
        indices = (self.cursor + np.arange(count)) % size
        self.cursor = (self.cursor + count) % size
        return self.cluster[indices]


@dataclass
class PaletteMapping:
    """Index-keyed correspondence from palette A to palette B."""
    source_centroids: NDArray[np.float64]
    entries: list[MappingEntry] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index: int) -> MappingEntry:
        return self.entries[index]

    def resolve(self, index: int) -> MappingEntry:
        """Entry for source centroid ``index``; MappingMismatch if absent."""
        if not 0 <= index < len(self.entries):
            raise MappingMismatch(
                f"No target palette entry for source centroid {index} "
                f"(mapping has {len(self.entries)} entries)"
            )
        return self.entries[index]

    def reset(self) -> None:
        """Start a new mapping session: rewind every cursor."""
        for entry in self.entries:
            entry.cursor = 0


def map_centroids(
    centroids_a: ArrayLike,
    centroids_b: ArrayLike,
    clusters_b: Sequence[ArrayLike],
) -> PaletteMapping:
    """
    Pair palette A's centroids with palette B's by index.

    Both centroid arrays must be sorted the same way (e.g. both by
    frequency) for index i to mean "corresponding" colors.

    Args:
        centroids_a: (k, D) source palette
        centroids_b: (k, D') target palette
        clusters_b: k target clusters, index-aligned with centroids_b

    Returns:
        PaletteMapping with every cursor at 0

    Raises:
        MappingMismatch: If the three inputs differ in length
    """
    source = np.asarray(centroids_a, dtype=np.float64)
    target = np.asarray(centroids_b, dtype=np.float64)
    if not (len(source) == len(target) == len(clusters_b)):
        raise MappingMismatch(
            f"Cannot map palettes of different sizes: {len(source)} source "
            f"centroids, {len(target)} target centroids, {len(clusters_b)} "
            f"target clusters"
        )

    entries = [
        MappingEntry(
            centroid=target[i],
            cluster=np.asarray(clusters_b[i], dtype=np.float64),
        )
        for i in range(len(source))
    ]
    return PaletteMapping(source_centroids=source, entries=entries)


def map_colors(
    colors_a: ArrayLike,
    centroids_a: ArrayLike,
    mapping: PaletteMapping,
    distance: Union[DistanceMetric, str, DistanceFunction] = DistanceMetric.EUCLIDEAN,
    use_original_colors: bool = True,
) -> NDArray[np.float64]:
    """
    Substitute every color in ``colors_a`` with a color from palette B.

    Each color is assigned to its nearest centroid in ``centroids_a``
    (ties to the lowest index). With ``use_original_colors`` the matching
    target cluster's members are emitted round-robin, which keeps the
    texture of the target image. Otherwise the target centroid is emitted,
    which flattens the output to exactly k colors.

    Cursors advance in input order and persist on ``mapping`` until
    ``mapping.reset()``.

    Returns:
        Array with one color per input color, in input order

    Raises:
        MappingMismatch: If ``centroids_a`` and ``mapping`` differ in
            length, a nearest centroid has no mapping entry, or its target
            cluster is empty
    """
    centroids = np.asarray(centroids_a, dtype=np.float64)
    if len(centroids) == 0:
        raise MappingMismatch("Cannot map colors onto an empty palette")
    if len(centroids) != len(mapping):
        raise MappingMismatch(
            f"Source palette has {len(centroids)} centroids but the mapping "
            f"has {len(mapping)} entries"
        )

    colors = np.asarray(colors_a, dtype=np.float64)
    if colors.shape[:1] == (0,):
        # [] and np.empty((0, D)) both mean "no colors"
        colors = colors.reshape(0, centroids.shape[-1])
    if colors.ndim != 2:
        raise InvalidInput(f"Expected color list of shape (N, D), got {colors.shape}")

    distance_fn = resolve_distance(distance)
    labels = nearest_centroid(colors, centroids, distance_fn)

    output: Optional[NDArray[np.float64]] = None
    for index in np.unique(labels):
        entry = mapping.resolve(int(index))
        positions = np.flatnonzero(labels == index)

        if use_original_colors:
            substitutes = entry.take(len(positions))
        else:
            substitutes = np.broadcast_to(entry.centroid, (len(positions), len(entry.centroid)))

        if output is None:
            output = np.empty((len(colors), substitutes.shape[1]), dtype=np.float64)
        output[positions] = substitutes

    if output is None:
        return np.empty((0, colors.shape[1]), dtype=np.float64)
    return output
