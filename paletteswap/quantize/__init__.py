# Copyright (c) 2026 Paletteswap
# SPDX-License-Identifier: MIT

"""
Quantization core for paletteswap.

Color space conversion, distance metrics, k-means clustering, frequency
sorting and cross-palette mapping. All operations are synchronous and
operate on caller-owned arrays without retaining them.
"""

from paletteswap.quantize.distance import (
    DistanceMetric,
    delta_e00_distance,
    euclidean_distance,
)
from paletteswap.quantize.kmeans import ClusteringConfig, ClusteringResult, kmeans
from paletteswap.quantize.mapping import (
    MappingEntry,
    PaletteMapping,
    map_centroids,
    map_colors,
)
from paletteswap.quantize.palette import create_color_palette, remap_colors
from paletteswap.quantize.sorting import SortedPalette, flatten_colors, sort_by_frequency

__all__ = [
    "DistanceMetric",
    "euclidean_distance",
    "delta_e00_distance",
    "ClusteringConfig",
    "ClusteringResult",
    "kmeans",
    "SortedPalette",
    "sort_by_frequency",
    "flatten_colors",
    "MappingEntry",
    "PaletteMapping",
    "map_centroids",
    "map_colors",
    "create_color_palette",
    "remap_colors",
]
