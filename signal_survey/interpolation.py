#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# -----------------------------------------------------------------------------
# Signal Survey
#
# signal_survey/interpolation.py
#
# Description:
# Signal estimate grid construction. Interpolates sparse survey samples onto a
# per-pixel grid with inverse distance weighting and smooths the result with a
# Gaussian kernel.
# -----------------------------------------------------------------------------

import numpy as np
from typing import Callable, Optional
from scipy.ndimage import correlate

# Estimate used where no sample contributes any weight
NO_SIGNAL_DBM = -100.0

# Distances are floored so a pixel sitting on a sample does not divide by zero
MIN_DISTANCE_PX = 1.0


class HeatmapCancelledError(Exception):
    """Exception raised when heatmap generation is cancelled between scan lines."""
    pass


def snapshot_samples(samples) -> np.ndarray:
    """
    Copy sample positions and signals into a private (n, 3) array.

    Args:
        samples: Sequence of SamplePoint, or an array of (x, y, signal) rows

    Returns:
        float64 array of shape (n, 3): normalized x, normalized y, dBm
    """
    if isinstance(samples, np.ndarray):
        return np.array(samples, dtype=np.float64).reshape(-1, 3)
    rows = [(float(s.x), float(s.y), float(s.signal_strength)) for s in samples]
    return np.array(rows, dtype=np.float64).reshape(-1, 3)


def build_grid(width: int, height: int, samples, radius: float, smoothing: float,
               status_callback: Optional[Callable[[int], None]] = None,
               should_cancel: Optional[Callable[[], bool]] = None) -> np.ndarray:
    """
    Estimate the signal at every pixel from all samples.

    Weight is 1/d^2 inside the interpolation radius. Beyond it the weight is
    further attenuated by exp(-(d - radius) / (radius * smoothing)), so distant
    samples fade out instead of being cut off.

    Args:
        width, height: Grid size in pixels. Non-positive sizes give a 1x1 grid.
        samples: Sequence of SamplePoint or an (n, 3) array (see snapshot_samples)
        radius: Interpolation radius in pixels
        smoothing: Falloff factor (0-1) beyond the radius; 0 means a hard cutoff
        status_callback: Called with a 0-100 progress value after each row
        should_cancel: Polled before each row; returning True aborts

    Returns:
        float64 array of shape (height, width) with estimates in dBm

    Raises:
        HeatmapCancelledError: If should_cancel returned True
    """
    if width <= 0 or height <= 0:
        width, height = 1, 1

    points = snapshot_samples(samples)
    grid = np.full((height, width), NO_SIGNAL_DBM, dtype=np.float64)
    if len(points) == 0:
        return grid

    # Sample positions in pixel space (truncated like the canvas does)
    sample_x = np.trunc(points[:, 0] * width)
    sample_y = np.trunc(points[:, 1] * height)
    signals = points[:, 2]

    radius = float(radius)
    decay_length = radius * min(max(float(smoothing), 0.0), 1.0)

    # Horizontal offsets are the same for every row: (width, n_samples)
    columns = np.arange(width, dtype=np.float64)[:, np.newaxis]
    dx_squared = (columns - sample_x) ** 2

    for row in range(height):
        if should_cancel is not None and should_cancel():
            raise HeatmapCancelledError(f"Heatmap generation cancelled at row {row} of {height}")

        distance = np.sqrt(dx_squared + (row - sample_y) ** 2)
        distance = np.maximum(distance, MIN_DISTANCE_PX)
        weights = 1.0 / (distance * distance)

        excess = distance - radius
        beyond = excess > 0
        if decay_length > 0:
            weights = np.where(beyond, weights * np.exp(-np.maximum(excess, 0.0) / decay_length), weights)
        else:
            weights = np.where(beyond, 0.0, weights)

        weight_sum = weights.sum(axis=1)
        weighted_signal = (weights * signals).sum(axis=1)
        has_weight = weight_sum > 0
        grid[row] = np.where(has_weight, weighted_signal / np.where(has_weight, weight_sum, 1.0), NO_SIGNAL_DBM)

        if status_callback:
            status_callback(int((row + 1) * 100 / height))

    return grid


def gaussian_kernel(size: int) -> np.ndarray:
    """
    Normalized 2-D Gaussian kernel with sigma = size / 3.

    The kernel side is always odd: 2 * (size // 2) + 1.
    """
    radius = size // 2
    sigma = size / 3.0
    offsets = np.arange(-radius, radius + 1, dtype=np.float64)
    yy, xx = np.meshgrid(offsets, offsets, indexing='ij')
    kernel = np.exp(-(xx * xx + yy * yy) / (2.0 * sigma * sigma))
    return kernel / kernel.sum()


def blur(grid, kernel_size: int = 5) -> np.ndarray:
    """
    Gaussian blur that renormalizes at the edges.

    Only taps that fall inside the grid contribute, and each cell is divided by
    the sum of the kernel weights it actually used, so border cells are not
    pulled toward zero.

    Args:
        grid: 2-D array of signal estimates
        kernel_size: Kernel size in cells

    Returns:
        New array with the blurred estimates; the input is not modified
    """
    source = np.asarray(grid, dtype=np.float64)
    if kernel_size < 2 or source.size == 0:
        return source.copy()

    kernel = gaussian_kernel(kernel_size)
    weighted = correlate(source, kernel, mode='constant', cval=0.0)
    coverage = correlate(np.ones_like(source), kernel, mode='constant', cval=0.0)
    return weighted / coverage
