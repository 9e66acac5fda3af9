#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# -----------------------------------------------------------------------------
# Signal Survey
#
# signal_survey/heatmap_generator.py
#
# Description:
# Signal strength heatmap generation for the Signal Survey engine.
# Creates RGBA overlays showing WiFi coverage from survey sample points.
# -----------------------------------------------------------------------------

import numpy as np
import time
from typing import Callable, List, Optional
from scipy.ndimage import map_coordinates

from .color_mapper import colorize
from .coverage_classifier import compute_statistics, rank_networks
from .data_models import RenderConfig, SamplePoint, SurveyStatistics
from .interpolation import blur, build_grid, snapshot_samples
from .legend import create_legend
from .raster import Raster


class HeatmapGenerator:
    """
    Generates signal strength heatmaps from survey samples.

    Pipeline: inverse distance weighted grid -> Gaussian blur -> color mapping
    (red at -90 dBm through yellow at -60 dBm to green at -30 dBm) -> packed
    RGBA raster. The generator holds only its settings, so one instance can
    serve any number of calls.
    """

    BLUR_KERNEL_SIZE = 5
    PREVIEW_OPACITY = 150

    def __init__(self, interpolation_radius: float = RenderConfig.DEFAULT_INTERPOLATION_RADIUS,
                 smoothing_factor: float = RenderConfig.DEFAULT_SMOOTHING_FACTOR,
                 debug_mode: bool = False):
        """
        Initialize the heatmap generator.

        Args:
            interpolation_radius: Radius in pixels inside which samples weigh as pure IDW
            smoothing_factor: Falloff beyond the radius (0-1, higher = smoother); clamped
            debug_mode: If True, prints debug information
        """
        settings = RenderConfig(interpolation_radius=interpolation_radius, smoothing_factor=smoothing_factor)
        self.interpolation_radius = settings.interpolation_radius
        self.smoothing_factor = settings.smoothing_factor
        self.debug_mode = debug_mode

    @classmethod
    def from_config(cls, render_config: RenderConfig, debug_mode: bool = False) -> "HeatmapGenerator":
        return cls(render_config.interpolation_radius, render_config.smoothing_factor, debug_mode=debug_mode)

    def generate_heatmap(self, width: int, height: int, samples: List[SamplePoint],
                         opacity: int = RenderConfig.DEFAULT_OPACITY,
                         status_callback: Optional[Callable[[int], None]] = None,
                         should_cancel: Optional[Callable[[], bool]] = None) -> Raster:
        """
        Generate a signal strength heatmap from sample data.

        Args:
            width: Width of the output raster in pixels
            height: Height of the output raster in pixels
            samples: Survey sample points; read once at the start of the call
            opacity: Overlay opacity (0-255)
            status_callback: Progress callback, called with 0-100
            should_cancel: Polled between rows; returning True aborts the call

        Returns:
            Raster of exactly width x height. Fully transparent without samples,
            1x1 transparent for non-positive sizes.

        Raises:
            HeatmapCancelledError: If should_cancel requested cancellation
        """
        if width <= 0 or height <= 0:
            if self.debug_mode:
                print(f"DEBUG: Invalid heatmap size {width}x{height}, returning 1x1 raster")
            return Raster.blank(1, 1)

        points = snapshot_samples(samples)
        if len(points) == 0:
            return Raster.blank(width, height)

        start_time = time.time()

        grid = build_grid(width, height, points, self.interpolation_radius, self.smoothing_factor,
                          status_callback=status_callback, should_cancel=should_cancel)
        grid = blur(grid, self.BLUR_KERNEL_SIZE)
        raster = Raster.from_array(colorize(grid, opacity))

        if self.debug_mode:
            print(f"DEBUG: Heatmap {width}x{height} from {len(points)} samples "
                  f"(radius={self.interpolation_radius}, smoothing={self.smoothing_factor}) "
                  f"generated in {time.time() - start_time:.3f}s")

        return raster

    def generate_preview_heatmap(self, width: int, height: int, samples: List[SamplePoint],
                                 scale: int = RenderConfig.DEFAULT_PREVIEW_SCALE) -> Raster:
        """
        Generate a fast preview heatmap (lower resolution for performance).

        The heatmap is computed at 1/scale of the requested size with a fixed
        opacity and scaled back up with bilinear interpolation.

        Args:
            width: Width of the output raster in pixels
            height: Height of the output raster in pixels
            samples: Survey sample points
            scale: Downscale factor; values below 1 are treated as 1

        Returns:
            Raster of exactly width x height (1x1 for non-positive sizes). A scale
            larger than the canvas leaves no preview grid, so the overlay is
            fully transparent.
        """
        if width <= 0 or height <= 0:
            return Raster.blank(1, 1)

        scale = max(int(scale), 1)
        preview_width = width // scale
        preview_height = height // scale

        preview = self.generate_heatmap(preview_width, preview_height, samples, self.PREVIEW_OPACITY)
        if (preview.width, preview.height) == (width, height):
            return preview

        if self.debug_mode:
            print(f"DEBUG: Scaling preview {preview_width}x{preview_height} up to {width}x{height}")
        return upsample_bilinear(preview, width, height)

    def create_legend(self, width: int = 400, height: int = 80) -> Raster:
        """Create a legend showing signal strength color mapping."""
        return create_legend(width, height)

    def compute_statistics(self, samples: List[SamplePoint], label_filter: Optional[str] = None) -> SurveyStatistics:
        """Coverage statistics for the samples, optionally for one network only."""
        return compute_statistics(samples, label_filter)

    def get_connected_networks(self, samples: List[SamplePoint]) -> List[str]:
        """Networks that appear to be the surveyed network, best candidate first."""
        return rank_networks(samples)


def upsample_bilinear(raster: Raster, width: int, height: int) -> Raster:
    """
    Resize a raster to width x height with bilinear interpolation.

    Pixel centers are aligned, and coordinates past the source edge are clamped
    to the border pixels.
    """
    source = raster.to_array().astype(np.float64)
    source_height, source_width = source.shape[:2]

    rows = (np.arange(height, dtype=np.float64) + 0.5) * source_height / height - 0.5
    cols = (np.arange(width, dtype=np.float64) + 0.5) * source_width / width - 0.5
    rows = np.clip(rows, 0, source_height - 1)
    cols = np.clip(cols, 0, source_width - 1)
    row_grid, col_grid = np.meshgrid(rows, cols, indexing='ij')

    scaled = np.empty((height, width, Raster.BYTES_PER_PIXEL), dtype=np.uint8)
    for channel in range(Raster.BYTES_PER_PIXEL):
        values = map_coordinates(source[..., channel], [row_grid, col_grid], order=1, mode='nearest')
        scaled[..., channel] = np.clip(np.rint(values), 0, 255)

    return Raster.from_array(scaled)
