# Copyright (c) 2026 Paletteswap
# SPDX-License-Identifier: MIT

"""
Paletteswap -- color quantization and cross-palette color transfer.

Clusters color lists into representative palettes under CIEDE2000 and
recolors one color list (a generated pattern) with another's palette
(an uploaded image).

Quick start::

    from paletteswap import create_color_palette, remap_colors

    image = create_color_palette(image_colors, 6, seed=1)
    pattern = create_color_palette(pattern_colors, 6, color_mode="hsb", seed=1)
    recolored = remap_colors(pattern_colors, pattern, image)

Debug traces go through loguru and are disabled by default; turn them on
with ``logger.enable("paletteswap")``.
"""

from __future__ import annotations

__version__ = "1.0.0"

from loguru import logger

from paletteswap.errors import (
    ClusteringNonConvergence,
    InvalidInput,
    InvalidPaletteSize,
    MappingMismatch,
    PaletteError,
)
from paletteswap.quantize import (
    ClusteringConfig,
    DistanceMetric,
    create_color_palette,
    kmeans,
    map_centroids,
    map_colors,
    remap_colors,
    sort_by_frequency,
)
from paletteswap.runtime import SourceImage
from paletteswap.schema import ColorMode, ColorPalette

# Library logging stays off until the application opts in with
# logger.enable("paletteswap").
logger.disable("paletteswap")

__all__ = [
    # Core API
    "create_color_palette",
    "remap_colors",
    "SourceImage",
    # Building blocks
    "kmeans",
    "sort_by_frequency",
    "map_centroids",
    "map_colors",
    # Types
    "ColorMode",
    "ColorPalette",
    "ClusteringConfig",
    "DistanceMetric",
    # Errors
    "PaletteError",
    "InvalidInput",
    "InvalidPaletteSize",
    "ClusteringNonConvergence",
    "MappingMismatch",
    # Version
    "__version__",
]
