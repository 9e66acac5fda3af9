#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# -----------------------------------------------------------------------------
# Signal Survey
#
# signal_survey/color_mapper.py
#
# Description:
# Signal strength to color mapping. A single red -> yellow -> green gradient
# over a fixed -90..-30 dBm window is used by the heatmap raster, the legend
# bar, the legend swatches and scan point markers.
# -----------------------------------------------------------------------------

import numpy as np
from typing import Tuple

from .signal_quality import SignalQuality

# Gradient window (dBm). Readings outside are clamped to the end colors.
SIGNAL_FLOOR_DBM = -90
SIGNAL_CEILING_DBM = -30
SIGNAL_SPAN_DB = SIGNAL_CEILING_DBM - SIGNAL_FLOOR_DBM


def _clamp_opacity(opacity) -> int:
    return int(min(max(int(opacity), 0), 255))


def colorize(signal_grid, opacity: int) -> np.ndarray:
    """
    Map an array of signal strengths to RGBA colors.

    Args:
        signal_grid: Array-like of signal strengths in dBm, any shape
        opacity: Alpha value (0-255) applied to every color

    Returns:
        uint8 array with the input shape plus a trailing axis of 4 (R, G, B, A)
    """
    signal = np.asarray(signal_grid, dtype=np.float64)
    t = np.clip((signal - SIGNAL_FLOOR_DBM) / SIGNAL_SPAN_DB, 0.0, 1.0)

    # Red -> yellow below the midpoint, yellow -> green above it
    lower_half = t < 0.5
    red = np.where(lower_half, 255.0, np.rint((1.0 - (t - 0.5) * 2.0) * 255.0))
    green = np.where(lower_half, np.rint(t * 2.0 * 255.0), 255.0)

    rgba = np.empty(signal.shape + (4,), dtype=np.uint8)
    rgba[..., 0] = red
    rgba[..., 1] = green
    rgba[..., 2] = 0
    rgba[..., 3] = _clamp_opacity(opacity)
    return rgba


def color_of(signal_dbm: float, opacity: int = 255) -> Tuple[int, int, int, int]:
    """
    Map a single signal strength to an (r, g, b, a) tuple.

    Args:
        signal_dbm: Signal strength in dBm
        opacity: Alpha value (0-255)

    Returns:
        Tuple of four ints
    """
    r, g, b, a = colorize([signal_dbm], opacity)[0]
    return int(r), int(g), int(b), int(a)


def representative_signal(quality: SignalQuality) -> float:
    """
    Signal strength used to paint a quality bucket's swatch: the middle of its
    band, with open ends closed by the gradient window.
    """
    upper = quality.upper_bound_dbm
    lower = quality.lower_bound_dbm
    if upper is None:
        upper = SIGNAL_CEILING_DBM
    if lower is None:
        lower = SIGNAL_FLOOR_DBM
    return (upper + lower) / 2.0


def quality_color(quality: SignalQuality, opacity: int = 255) -> Tuple[int, int, int, int]:
    """Swatch color for a coverage bucket."""
    return color_of(representative_signal(quality), opacity)
