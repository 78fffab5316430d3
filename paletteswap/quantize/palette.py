# Copyright (c) 2026 Paletteswap
# SPDX-License-Identifier: MIT

"""
Palette extraction and cross-palette recoloring.

Two steps:
1. create_color_palette: cluster a color list into k colors, in LAB under
   CIEDE2000 by default, and sort the result by frequency
2. remap_colors: recolor a pattern's colors with an image's palette by
   pairing the two frequency-sorted palettes index by index

The most common pattern color is replaced by the most common image color,
the second by the second, and so on.
"""

from __future__ import annotations

from typing import Optional, Union

import numpy as np
from loguru import logger
from numpy.typing import ArrayLike, NDArray

from paletteswap.errors import InvalidInput, InvalidPaletteSize, MappingMismatch
from paletteswap.schema import ColorMode, ColorPalette
from paletteswap.quantize.colorspace import from_lab, to_lab
from paletteswap.quantize.distance import DistanceMetric
from paletteswap.quantize.kmeans import ClusteringConfig, as_color_list, kmeans
from paletteswap.quantize.mapping import map_centroids, map_colors
from paletteswap.quantize.sorting import sort_by_frequency


def prepare_colors(colors: ArrayLike) -> NDArray[np.float64]:
    """
    Validate a raw color list, dropping an alpha channel if present.

    Args:
        colors: Array-like of shape (N, 3) or (N, 4)

    Returns:
        (N, 3) float64 array
    """
    data = as_color_list(colors)
    if data.shape[1] == 4:
        data = data[:, :3].copy()
    if data.shape[1] != 3:
        raise InvalidInput(
            f"Expected colors with 3 channels (or 4 with alpha), got {data.shape[1]}"
        )
    return data


def create_color_palette(
    colors: ArrayLike,
    palette_size: int,
    *,
    color_mode: Union[ColorMode, str] = ColorMode.RGB,
    metric: Union[DistanceMetric, str] = DistanceMetric.CIEDE2000,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
    config: Optional[ClusteringConfig] = None,
) -> ColorPalette:
    """
    Cluster a color list into a frequency-sorted palette.

    Colors are converted to LAB for clustering (always under CIEDE2000,
    and under Euclidean unless ``config.convert_to_lab`` is False), then
    the centroids are converted back to ``color_mode``. Cluster members
    are the caller's own input colors, grouped and untouched.

    Args:
        colors: Color list of shape (N, 3), or (N, 4) with alpha
        palette_size: Number of palette colors (k)
        color_mode: Mode the colors are expressed in (RGB or HSB)
        metric: Distance used for clustering
        seed: Seed for centroid initialization
        rng: Generator for centroid initialization (overrides seed)
        config: Clustering settings (uses defaults if None)

    Returns:
        ColorPalette, most populous color first

    Raises:
        InvalidInput: Empty/malformed colors or unsupported mode/metric
        InvalidPaletteSize: palette_size outside 1..N
        ClusteringNonConvergence: Clustering failed to settle
    """
    mode = as_color_mode(color_mode)
    distance = as_distance_metric(metric)
    cfg = config or ClusteringConfig()

    data = prepare_colors(colors)
    if palette_size <= 0 or palette_size > len(data):
        raise InvalidPaletteSize(palette_size, len(data))

    if distance is DistanceMetric.CIEDE2000 or cfg.convert_to_lab:
        working_space = ColorMode.LAB
        working = to_lab(data, mode)
    else:
        working_space = mode
        working = data

    result = kmeans(working, palette_size, distance, seed=seed, rng=rng, config=cfg)

    logger.debug(
        f"Clustering {len(data)} colors complete into {palette_size} groups "
        f"({result.iterations} iterations)"
    )

    # Group the caller's own colors; sizes match the working clusters,
    # so this yields the same frequency order.
    original_clusters = [data[result.labels == j] for j in range(result.k)]
    ordered = sort_by_frequency(original_clusters, result.centroids)
    working_centroids = ordered.sorted_centroids

    if working_space is mode:
        palette_colors = working_centroids
    else:
        palette_colors = from_lab(working_centroids, mode)

    return ColorPalette(
        color_mode=mode,
        colors=_to_tuples(palette_colors),
        clusters=tuple(_to_tuples(cluster) for cluster in ordered.sorted_clusters),
        working_centroids=_to_tuples(working_centroids),
        working_space=working_space,
        metric=distance.value,
        seed=seed if rng is None else None,
    )


def remap_colors(
    pattern_colors: ArrayLike,
    pattern_palette: ColorPalette,
    image_palette: ColorPalette,
    *,
    use_original_colors: bool = False,
) -> NDArray[np.float64]:
    """
    Recolor a pattern with an image's palette.

    Each pattern color is assigned to its nearest pattern-palette entry
    (in the pattern palette's working space and metric) and replaced with
    the image palette entry at the same index.

    Args:
        pattern_colors: Raw pattern colors in ``pattern_palette.color_mode``
        pattern_palette: Palette clustered from ``pattern_colors``
        image_palette: Palette supplying the substitute colors
        use_original_colors: Cycle through the image cluster's own colors
            instead of emitting the image centroid

    Returns:
        (N, 3) array in ``image_palette.color_mode``, one color per
        pattern color, in pattern order

    Raises:
        MappingMismatch: If the palettes have different sizes
    """
    if pattern_palette.size != image_palette.size:
        raise MappingMismatch(
            f"Pattern palette has {pattern_palette.size} colors but image "
            f"palette has {image_palette.size}"
        )

    data = prepare_colors(pattern_colors)
    if pattern_palette.working_space is ColorMode.LAB:
        working = to_lab(data, pattern_palette.color_mode)
    else:
        working = data

    source_centroids = np.array(pattern_palette.working_centroids, dtype=np.float64)
    mapping = map_centroids(
        source_centroids,
        np.array(image_palette.colors, dtype=np.float64),
        [np.array(cluster, dtype=np.float64) for cluster in image_palette.clusters],
    )

    return map_colors(
        working,
        source_centroids,
        mapping,
        DistanceMetric(pattern_palette.metric),
        use_original_colors=use_original_colors,
    )


def as_color_mode(color_mode: Union[ColorMode, str]) -> ColorMode:
    """Coerce a ColorMode or its name ("rgb", "HSB", ...) to ColorMode."""
    try:
        if isinstance(color_mode, str):
            color_mode = color_mode.lower()
        return ColorMode(color_mode)
    except ValueError as e:
        raise InvalidInput(f"Unsupported color mode: {color_mode!r}") from e


def as_distance_metric(metric: Union[DistanceMetric, str]) -> DistanceMetric:
    """Coerce a DistanceMetric or its name to DistanceMetric."""
    try:
        if isinstance(metric, str):
            metric = metric.lower()
        return DistanceMetric(metric)
    except ValueError as e:
        raise InvalidInput(f"Unknown distance metric: {metric!r}") from e


def _to_tuples(colors: NDArray[np.float64]) -> tuple[tuple[float, float, float], ...]:
    return tuple((float(c[0]), float(c[1]), float(c[2])) for c in colors)
