# Copyright (c) 2026 Paletteswap
# SPDX-License-Identifier: MIT

"""
Serializers for ColorPalette delivery to rendering collaborators.

All serializers preserve the palette exactly -- no reordering or rounding
beyond display formatting.
"""

from paletteswap.runtime.serializers.palette import SerializerFormat, to_palette_output

__all__ = [
    "SerializerFormat",
    "to_palette_output",
]
