# Copyright (c) 2026 Paletteswap
# SPDX-License-Identifier: MIT

"""
Palette output serializer.

Formats a ColorPalette in the ``{colorPalette, colorClusters}`` shape that
canvas renderers consume, or as a short human-readable summary.
"""

from __future__ import annotations

import json
from enum import Enum

from paletteswap.schema import ColorMode, ColorPalette


class SerializerFormat(Enum):
    """How to_palette_output renders a palette."""

    JSON = "json"
    JSON_PRETTY = "json_pretty"
    NATURAL = "natural"


def to_palette_output(
    palette: ColorPalette,
    *,
    format: SerializerFormat = SerializerFormat.JSON,
    include_clusters: bool = True,
    as_hex: bool = False,
    precision: int = 4,
) -> str:
    """Serialize a ColorPalette for a renderer.

    Args:
        palette: The ColorPalette to serialize.
        format: JSON, JSON_PRETTY, or NATURAL text.
        include_clusters: Include ``colorClusters`` (JSON formats only).
            Clusters hold every input color and can be large.
        as_hex: Emit ``colorPalette`` as hex strings instead of channel
            lists. Cluster members stay as channel lists.
        precision: Decimal places for channel values.

    Returns:
        Serialized palette.

    Example (JSON_PRETTY, as_hex=True, include_clusters=False)::

        {
          "colorMode": "rgb",
          "colorPalette": ["#1F3A5C", "#E8D6B0"],
          "weights": [0.62, 0.38]
        }
    """
    if format == SerializerFormat.NATURAL:
        return _to_natural(palette)

    data: dict = {"colorMode": palette.color_mode.value}

    if as_hex:
        data["colorPalette"] = list(palette.hex_colors)
    else:
        data["colorPalette"] = [_round_color(c, precision) for c in palette.colors]

    data["weights"] = [round(w, 4) for w in palette.weights]

    if include_clusters:
        data["colorClusters"] = [
            [_round_color(c, precision) for c in cluster]
            for cluster in palette.clusters
        ]

    if format == SerializerFormat.JSON_PRETTY:
        return json.dumps(data, indent=2)
    return json.dumps(data, separators=(",", ":"))


def _round_color(color, precision: int) -> list[float]:
    return [round(v, precision) for v in color]


def _format_color(color, mode: ColorMode) -> str:
    if mode is ColorMode.RGB:
        r, g, b = (int(round(v)) for v in color)
        return f"rgb({r}, {g}, {b})"
    if mode is ColorMode.HSB:
        h, s, b = color
        return f"hsb({h:.0f}, {s:.0f}%, {b:.0f}%)"
    L, a, b = color
    return f"lab({L:.1f}, {a:.1f}, {b:.1f})"


def _to_natural(palette: ColorPalette) -> str:
    """One line per palette color, most common first."""
    lines = [f"Palette of {palette.size} colors ({palette.color_mode.value}):"]
    for i, (color, hex_value, count, weight) in enumerate(
        zip(palette.colors, palette.hex_colors, palette.counts, palette.weights),
        start=1,
    ):
        lines.append(
            f"{i}. {hex_value} {_format_color(color, palette.color_mode)} "
            f"- {count} colors ({weight:.0%})"
        )
    return "\n".join(lines)
