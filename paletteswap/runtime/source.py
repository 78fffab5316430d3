# Copyright (c) 2026 Paletteswap
# SPDX-License-Identifier: MIT

"""
Source color lists with a palette cache.

Clustering a large color list is the expensive step, and interactive
callers tend to ask for the same palette size repeatedly (re-rendering a
pattern, switching between recolor modes). SourceImage keeps the raw
colors of one image or generated pattern and memoizes its palettes by
``(palette_size, seed)``.

The quantization functions themselves stay stateless; this class is the
caller-side cache they were designed to sit under.
"""

from __future__ import annotations

from typing import Optional, Union

import numpy as np
from loguru import logger
from numpy.typing import ArrayLike, NDArray

from paletteswap.quantize.distance import DistanceMetric
from paletteswap.quantize.kmeans import ClusteringConfig
from paletteswap.quantize.palette import (
    as_color_mode,
    as_distance_metric,
    create_color_palette,
    prepare_colors,
    remap_colors,
)
from paletteswap.schema import ColorMode, ColorPalette


PaletteKey = tuple[int, Optional[int]]


class SourceImage:
    """
    Raw colors of one image or pattern, plus its cached palettes.

    Args:
        colors: Color list of shape (N, 3), or (N, 4) with alpha
        color_mode: Mode the colors are expressed in
        metric: Distance used for every palette of this source
        config: Clustering settings shared by every palette
    """

    def __init__(
        self,
        colors: ArrayLike,
        color_mode: Union[ColorMode, str] = ColorMode.RGB,
        *,
        metric: Union[DistanceMetric, str] = DistanceMetric.CIEDE2000,
        config: Optional[ClusteringConfig] = None,
    ) -> None:
        data = prepare_colors(colors)
        data.flags.writeable = False
        self._colors = data
        self._mode = as_color_mode(color_mode)
        self._metric = as_distance_metric(metric)
        self._config = config
        self._palettes: dict[PaletteKey, ColorPalette] = {}

    @property
    def colors(self) -> NDArray[np.float64]:
        """Read-only (N, 3) view of the raw colors."""
        return self._colors

    @property
    def color_mode(self) -> ColorMode:
        return self._mode

    def __len__(self) -> int:
        return len(self._colors)

    def has_palette(self, size: int, seed: Optional[int] = None) -> bool:
        return (size, seed) in self._palettes

    def get_color_palette(self, size: int, seed: Optional[int] = None) -> ColorPalette:
        """
        Palette of ``size`` colors, clustered on first request.

        Failures (InvalidPaletteSize, ClusteringNonConvergence) propagate
        and nothing is cached for that key.
        """
        key = (size, seed)
        cached = self._palettes.get(key)
        if cached is not None:
            logger.debug(f"Palette cache hit for size={size} seed={seed}")
            return cached

        palette = create_color_palette(
            self._colors,
            size,
            color_mode=self._mode,
            metric=self._metric,
            seed=seed,
            config=self._config,
        )
        self._palettes[key] = palette
        return palette

    def clear(self) -> None:
        """Drop every cached palette."""
        self._palettes.clear()

    def recolor(
        self,
        pattern: SourceImage,
        palette_size: int,
        *,
        seed: Optional[int] = None,
        pattern_seed: Optional[int] = None,
        use_original_colors: bool = False,
    ) -> NDArray[np.float64]:
        """
        Recolor ``pattern`` with this source's palette.

        Both sources are clustered to ``palette_size`` colors (or served
        from cache). The result has one color per pattern color, in this
        source's color mode.
        """
        image_palette = self.get_color_palette(palette_size, seed)
        pattern_palette = pattern.get_color_palette(palette_size, pattern_seed)
        return remap_colors(
            pattern.colors,
            pattern_palette,
            image_palette,
            use_original_colors=use_original_colors,
        )
