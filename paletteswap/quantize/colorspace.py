# Copyright (c) 2026 Paletteswap
# SPDX-License-Identifier: MIT

"""
Color space conversions.

Conversion chains:
    RGB → XYZ → LAB        (perceptual working space for clustering)
    HSB → RGB → XYZ → LAB  (pattern colors are generated in HSB)

Ranges:
- RGB: channels in [0, 255]
- XYZ: scaled to [0, ~100]
- LAB: L in [0, 100], a/b roughly [-128, 127]
- HSB: H in [0, 360), S and B in [0, 100]

Every function accepts a single color of shape (3,) or a batch of shape
(..., 3) and is pure NumPy. RGB results are rounded to integer channels but
never clamped; out-of-gamut handling is left to the caller.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from paletteswap.errors import InvalidInput
from paletteswap.schema import ColorMode


# CIE 1964 10° observer, D65 illuminant
CIE10_D65 = np.array([94.811, 100.0, 107.304], dtype=np.float64)

HUE_SCALE = 360.0
SAT_SCALE = 100.0
BRI_SCALE = 100.0

_LAB_EPSILON = 0.008856
_LAB_KAPPA = 7.787


# =============================================================================
# RGB ↔ XYZ
# =============================================================================

_RGB_TO_XYZ = np.array([
    [0.4124, 0.3576, 0.1805],
    [0.2126, 0.7152, 0.0722],
    [0.0193, 0.1192, 0.9505],
], dtype=np.float64)

_XYZ_TO_RGB = np.array([
    [3.2406, -1.5372, -0.4986],
    [-0.9689, 1.8758, 0.0415],
    [0.0557, -0.2040, 1.0570],
], dtype=np.float64)


def _as_colors(colors: ArrayLike) -> NDArray[np.float64]:
    arr = np.asarray(colors, dtype=np.float64)
    if arr.shape[-1:] != (3,):
        raise InvalidInput(f"Expected color array of shape (..., 3), got {arr.shape}")
    return arr


def _round_half_up(values: NDArray[np.float64]) -> NDArray[np.int64]:
    return np.floor(values + 0.5).astype(np.int64)


def rgb_to_xyz(rgb: ArrayLike) -> NDArray[np.float64]:
    """
    Convert RGB [0,255] to XYZ [0,100].

    Channels are linearized with the sRGB piecewise gamma curve:
    - For values <= 0.04045: value/12.92
    - For values > 0.04045: ((value + 0.055) / 1.055) ^ 2.4
    """
    normalized = _as_colors(rgb) / 255.0
    linear = np.where(
        normalized > 0.04045,
        np.power((np.maximum(normalized, 0.04045) + 0.055) / 1.055, 2.4),
        normalized / 12.92,
    ) * 100.0
    return np.einsum('...j,ij->...i', linear, _RGB_TO_XYZ)


def xyz_to_rgb(xyz: ArrayLike) -> NDArray[np.int64]:
    """
    Convert XYZ [0,100] to RGB, rounded to integer channels.

    Inverse of rgb_to_xyz. Results outside [0, 255] are returned as-is.
    """
    linear = np.einsum('...j,ij->...i', _as_colors(xyz) / 100.0, _XYZ_TO_RGB)
    srgb = np.where(
        linear > 0.0031308,
        1.055 * np.power(np.maximum(linear, 0.0031308), 1.0 / 2.4) - 0.055,
        linear * 12.92,
    )
    return _round_half_up(srgb * 255.0)


# =============================================================================
# XYZ ↔ LAB
# =============================================================================


def xyz_to_lab(xyz: ArrayLike) -> NDArray[np.float64]:
    """
    Convert XYZ to CIELAB relative to the D65/10° reference white.

    Uses the cube root above 0.008856 and the linear segment
    7.787·t + 16/116 below it.
    """
    t = _as_colors(xyz) / CIE10_D65
    f = np.where(
        t > _LAB_EPSILON,
        np.cbrt(t),
        _LAB_KAPPA * t + 16.0 / 116.0,
    )
    fx, fy, fz = f[..., 0], f[..., 1], f[..., 2]

    L = 116.0 * fy - 16.0
    a = 500.0 * (fx - fy)
    b = 200.0 * (fy - fz)

    return np.stack([L, a, b], axis=-1)


def lab_to_xyz(lab: ArrayLike) -> NDArray[np.float64]:
    """Convert CIELAB to XYZ. Inverse of xyz_to_lab."""
    lab = _as_colors(lab)
    L, a, b = lab[..., 0], lab[..., 1], lab[..., 2]

    fy = (L + 16.0) / 116.0
    fx = a / 500.0 + fy
    fz = fy - b / 200.0

    f = np.stack([fx, fy, fz], axis=-1)
    cubed = f ** 3
    t = np.where(
        cubed > _LAB_EPSILON,
        cubed,
        (f - 16.0 / 116.0) / _LAB_KAPPA,
    )
    return t * CIE10_D65


# =============================================================================
# RGB ↔ HSB
# =============================================================================


def rgb_to_hsb(rgb: ArrayLike) -> NDArray[np.float64]:
    """
    Convert RGB [0,255] to HSB (H [0,360), S and B [0,100]).

    HSB and HSV name the same space. Achromatic colors (max == min) get
    hue 0 and saturation 0. Hue comes from whichever channel is largest,
    preferring red, then green, then blue on ties. Values are trimmed to
    four decimal places.
    """
    rgb = _as_colors(rgb) / 255.0
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]

    c_max = rgb.max(axis=-1)
    c_min = rgb.min(axis=-1)
    diff = c_max - c_min
    achromatic = diff == 0
    safe_diff = np.where(achromatic, 1.0, diff)

    # argmax picks the first maximal channel: r before g before b
    max_channel = np.argmax(rgb, axis=-1)
    h = np.select(
        [max_channel == 0, max_channel == 1],
        [
            (g - b) / safe_diff + np.where(g < b, 6.0, 0.0),
            (b - r) / safe_diff + 2.0,
        ],
        default=(r - g) / safe_diff + 4.0,
    ) / 6.0
    s = np.where(c_max > 0, diff / np.where(c_max > 0, c_max, 1.0), 0.0)

    h = np.where(achromatic, 0.0, h)
    s = np.where(achromatic, 0.0, s)

    hue = np.round(h * HUE_SCALE, 4) % HUE_SCALE
    return np.stack(
        [hue, np.round(s * SAT_SCALE, 4), np.round(c_max * BRI_SCALE, 4)],
        axis=-1,
    )


def hsb_to_rgb(hsb: ArrayLike) -> NDArray[np.int64]:
    """
    Convert HSB to RGB [0,255], rounded to integer channels.

    Standard six-sector formula; hue 360 wraps to 0.
    """
    hsb = _as_colors(hsb)
    h = hsb[..., 0] / HUE_SCALE
    s = hsb[..., 1] / SAT_SCALE
    v = hsb[..., 2] / BRI_SCALE

    sector = np.floor(h * 6.0)
    f = h * 6.0 - sector
    sector = np.mod(sector, 6).astype(np.int64)

    p = v * (1.0 - s)
    q = v * (1.0 - f * s)
    t = v * (1.0 - (1.0 - f) * s)

    conditions = [sector == i for i in range(5)]
    r = np.select(conditions, [v, q, p, p, t], default=v)
    g = np.select(conditions, [t, v, v, q, p], default=p)
    b = np.select(conditions, [p, p, t, v, v], default=q)

    return _round_half_up(np.stack([r, g, b], axis=-1) * 255.0)


# =============================================================================
# Composed chains
# =============================================================================


def rgb_to_lab(rgb: ArrayLike) -> NDArray[np.float64]:
    """Full chain: RGB → XYZ → LAB."""
    return xyz_to_lab(rgb_to_xyz(rgb))


def lab_to_rgb(lab: ArrayLike) -> NDArray[np.int64]:
    """Full chain: LAB → XYZ → RGB (integer channels, unclamped)."""
    return xyz_to_rgb(lab_to_xyz(lab))


def hsb_to_lab(hsb: ArrayLike) -> NDArray[np.float64]:
    """Full chain: HSB → RGB → XYZ → LAB."""
    return rgb_to_lab(hsb_to_rgb(hsb))


def lab_to_hsb(lab: ArrayLike) -> NDArray[np.float64]:
    """Full chain: LAB → XYZ → RGB → HSB."""
    return rgb_to_hsb(lab_to_rgb(lab))


def to_lab(colors: ArrayLike, mode: ColorMode) -> NDArray[np.float64]:
    """Convert colors expressed in ``mode`` to LAB."""
    if mode is ColorMode.RGB:
        return rgb_to_lab(colors)
    if mode is ColorMode.HSB:
        return hsb_to_lab(colors)
    if mode is ColorMode.LAB:
        return _as_colors(colors).copy()
    raise InvalidInput(f"Unsupported color mode: {mode!r}")


def from_lab(lab: ArrayLike, mode: ColorMode) -> NDArray[np.float64]:
    """Convert LAB colors back to ``mode``."""
    if mode is ColorMode.RGB:
        return lab_to_rgb(lab).astype(np.float64)
    if mode is ColorMode.HSB:
        return lab_to_hsb(lab)
    if mode is ColorMode.LAB:
        return _as_colors(lab).copy()
    raise InvalidInput(f"Unsupported color mode: {mode!r}")


# =============================================================================
# Rendering helpers
# =============================================================================


def rgb_to_hex(rgb: ArrayLike) -> str:
    """
    Format an RGB color as a hex string like "#3941C8".

    Channels are rounded and clamped to [0, 255] for display.
    """
    channels = np.clip(_round_half_up(_as_colors(rgb)), 0, 255)
    r, g, b = (int(c) for c in channels)
    return f"#{r:02X}{g:02X}{b:02X}"


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Parse "#3941C8" or "3941C8" into an (r, g, b) tuple."""
    hex_color = hex_color.lstrip("#")
    if len(hex_color) != 6:
        raise InvalidInput(f"Expected 6-digit hex color, got {hex_color!r}")
    try:
        return (
            int(hex_color[0:2], 16),
            int(hex_color[2:4], 16),
            int(hex_color[4:6], 16),
        )
    except ValueError as e:
        raise InvalidInput(f"Invalid hex color: {hex_color!r}") from e


def rgb_to_css(rgb: ArrayLike) -> str:
    """Format an RGB color as a CSS ``rgb(r, g, b)`` string."""
    r, g, b = (int(c) for c in _round_half_up(_as_colors(rgb)))
    return f"rgb({r}, {g}, {b})"
