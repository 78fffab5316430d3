# Copyright (c) 2026 Paletteswap
# SPDX-License-Identifier: MIT

"""
ColorPalette, the result of clustering a color list into k colors.

Design principles:
- Immutable: frozen dataclasses with tuple fields
- Deterministic: same colors, size, metric and seed → same palette
- Serializable: JSON-ready for handing to rendering collaborators

A palette carries two views of the same centroids:
- ``colors`` / ``clusters``: expressed in the caller's color mode (RGB or
  HSB), ready to draw
- ``working_centroids``: expressed in the space clustering ran in (LAB by
  default), used to assign new colors to palette entries
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Optional


Color = tuple[float, float, float]


class ColorMode(Enum):
    """Color space a color list is expressed in."""

    RGB = "rgb"
    HSB = "hsb"
    LAB = "lab"


def _to_color(values) -> Color:
    r, g, b = (float(v) for v in values)
    return (r, g, b)


@dataclass(frozen=True, slots=True)
class ColorPalette:
    """
    A frequency-sorted palette with its member clusters.

    Attributes:
        color_mode: Mode of ``colors`` and ``clusters``
        colors: Centroids, most populous cluster first
        clusters: Members of each cluster, index-aligned with ``colors``.
            Members keep the order they had in the input list.
        working_centroids: ``colors`` expressed in ``working_space``
        working_space: Space the clustering ran in
        metric: Value of the DistanceMetric used ("ciede2000", "euclidean")
        seed: RNG seed used for centroid initialization, if any
    """
    color_mode: ColorMode
    colors: tuple[Color, ...]
    clusters: tuple[tuple[Color, ...], ...]
    working_centroids: tuple[Color, ...]
    working_space: ColorMode = ColorMode.LAB
    metric: str = "ciede2000"
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate index alignment and non-empty clusters."""
        if not self.colors:
            raise ValueError("Palette cannot be empty")
        if len(self.clusters) != len(self.colors):
            raise ValueError(
                f"Palette has {len(self.colors)} colors but "
                f"{len(self.clusters)} clusters"
            )
        if len(self.working_centroids) != len(self.colors):
            raise ValueError(
                f"Palette has {len(self.colors)} colors but "
                f"{len(self.working_centroids)} working centroids"
            )
        if any(len(cluster) == 0 for cluster in self.clusters):
            raise ValueError("Palette clusters cannot be empty")

    @property
    def size(self) -> int:
        """Number of colors (k)."""
        return len(self.colors)

    @property
    def counts(self) -> tuple[int, ...]:
        """Member count per palette color."""
        return tuple(len(cluster) for cluster in self.clusters)

    @property
    def weights(self) -> tuple[float, ...]:
        """Share of input colors per palette color; sums to 1.0."""
        total = sum(self.counts)
        return tuple(count / total for count in self.counts)

    @property
    def hex_colors(self) -> tuple[str, ...]:
        """Palette colors as hex strings (RGB conversion when needed)."""
        from paletteswap.quantize.colorspace import from_lab, rgb_to_hex, to_lab
        if self.color_mode is ColorMode.RGB:
            return tuple(rgb_to_hex(c) for c in self.colors)
        rgb = from_lab(to_lab(self.colors, self.color_mode), ColorMode.RGB)
        return tuple(rgb_to_hex(c) for c in rgb)

    def to_output(self) -> dict:
        """
        The ``{colorPalette, colorClusters}`` shape handed to renderers.

        Both lists are in ``color_mode``.
        """
        return {
            "colorPalette": [list(c) for c in self.colors],
            "colorClusters": [[list(c) for c in cluster] for cluster in self.clusters],
        }

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "color_mode": self.color_mode.value,
            "colors": [list(c) for c in self.colors],
            "clusters": [[list(c) for c in cluster] for cluster in self.clusters],
            "working_centroids": [list(c) for c in self.working_centroids],
            "working_space": self.working_space.value,
            "metric": self.metric,
            "seed": self.seed,
        }

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: dict) -> ColorPalette:
        """Deserialize from dictionary."""
        return cls(
            color_mode=ColorMode(data["color_mode"]),
            colors=tuple(_to_color(c) for c in data["colors"]),
            clusters=tuple(
                tuple(_to_color(c) for c in cluster) for cluster in data["clusters"]
            ),
            working_centroids=tuple(_to_color(c) for c in data["working_centroids"]),
            working_space=ColorMode(data.get("working_space", "lab")),
            metric=data.get("metric", "ciede2000"),
            seed=data.get("seed"),
        )

    @classmethod
    def from_json(cls, json_str: str) -> ColorPalette:
        """Deserialize from JSON string."""
        return cls.from_dict(json.loads(json_str))
