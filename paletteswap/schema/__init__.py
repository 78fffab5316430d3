# Copyright (c) 2026 Paletteswap
# SPDX-License-Identifier: MIT

"""
Schema definitions for palettes.

All types in this module are immutable (frozen dataclasses).
Once a palette is produced, it can be cached and shared freely.
"""

from paletteswap.schema.palette import (
    Color,
    ColorMode,
    ColorPalette,
)

__all__ = [
    "Color",
    "ColorMode",
    "ColorPalette",
]
