# Copyright (c) 2026 Paletteswap
# SPDX-License-Identifier: MIT

"""
Exceptions raised by the quantization and mapping core.

Every failure is reported synchronously to the immediate caller. The
core never returns a partial result (a shorter remapped list, a palette
with an empty cluster) in place of raising.
"""

from __future__ import annotations


class PaletteError(Exception):
    """Base class for all paletteswap errors."""


class InvalidInput(PaletteError, ValueError):
    """Color data or arguments that cannot be processed."""


class InvalidPaletteSize(InvalidInput):
    """Requested palette size is not in ``1..len(colors)``."""

    def __init__(self, k: int, n_colors: int) -> None:
        self.k = k
        self.n_colors = n_colors
        if k <= 0:
            message = f"Palette size must be a positive integer, got {k}"
        else:
            message = (
                f"Cannot divide data list into {k} groups because 'k' exceeds "
                f"data length ({n_colors}). Provide a smaller 'k' value."
            )
        super().__init__(message)


class ClusteringNonConvergence(PaletteError, RuntimeError):
    """K-means did not reach stable, non-empty clusters within its budget."""

    def __init__(self, k: int, iterations: int, reason: str = "") -> None:
        self.k = k
        self.iterations = iterations
        message = (
            f"Unable to cluster colors into {k} groups within set iteration "
            f"limit ({iterations} iterations). If colors in the image are too "
            f"similar, try running again with a lower value."
        )
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class MappingMismatch(PaletteError, ValueError):
    """Two palettes cannot be put into index correspondence."""
