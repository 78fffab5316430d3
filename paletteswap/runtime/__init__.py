# Copyright (c) 2026 Paletteswap
# SPDX-License-Identifier: MIT

"""
Caller-side runtime for paletteswap.

1. SourceImage -- raw colors with a per-size palette cache
2. Serializers -- palette output for renderers (JSON or plain text)

Nothing here changes clustering or mapping results.
"""

from paletteswap.runtime.serializers import SerializerFormat, to_palette_output
from paletteswap.runtime.source import SourceImage

__all__ = [
    "SourceImage",
    "SerializerFormat",
    "to_palette_output",
]
