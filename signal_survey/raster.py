#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# -----------------------------------------------------------------------------
# Signal Survey
#
# signal_survey/raster.py
#
# Description:
# Packed RGBA pixel buffer returned by the heatmap and legend renderers, with
# conversion to QImage for the map overlay and image file export.
# -----------------------------------------------------------------------------

import numpy as np
from typing import Tuple
from PyQt5.QtGui import QImage


class Raster:
    """
    Immutable width x height image, 4 bytes per pixel in R, G, B, A order.

    Rows are stored top to bottom, each `stride` bytes long (stride is at least
    width * 4; any trailing bytes in a row are padding).
    """
    BYTES_PER_PIXEL = 4

    def __init__(self, width: int, height: int, data: bytes, stride: int = None):
        if stride is None:
            stride = width * self.BYTES_PER_PIXEL
        if width <= 0 or height <= 0:
            raise ValueError(f"Raster dimensions must be positive, got {width}x{height}")
        if stride < width * self.BYTES_PER_PIXEL:
            raise ValueError(f"Stride {stride} is too small for width {width}")
        if len(data) < stride * height:
            raise ValueError(f"Pixel buffer holds {len(data)} bytes, expected {stride * height}")
        self.width = width
        self.height = height
        self.stride = stride
        self._data = bytes(data)

    @property
    def data(self) -> bytes:
        return self._data

    @classmethod
    def blank(cls, width: int, height: int) -> "Raster":
        """Fully transparent raster."""
        return cls(width, height, bytes(width * height * cls.BYTES_PER_PIXEL))

    @classmethod
    def from_array(cls, rgba: np.ndarray) -> "Raster":
        """Create a raster from a (height, width, 4) uint8 array."""
        height, width = rgba.shape[:2]
        packed = np.ascontiguousarray(rgba, dtype=np.uint8)
        return cls(width, height, packed.tobytes())

    @classmethod
    def from_qimage(cls, image: QImage) -> "Raster":
        """Create a raster from any QImage (converted to RGBA8888 first)."""
        converted = image.convertToFormat(QImage.Format_RGBA8888)
        data = converted.constBits().asstring(converted.sizeInBytes())
        return cls(converted.width(), converted.height(), data, converted.bytesPerLine())

    def to_array(self) -> np.ndarray:
        """Read-only (height, width, 4) uint8 view of the pixels."""
        rows = np.frombuffer(self._data, dtype=np.uint8, count=self.stride * self.height)
        rows = rows.reshape(self.height, self.stride)
        return rows[:, :self.width * self.BYTES_PER_PIXEL].reshape(self.height, self.width, self.BYTES_PER_PIXEL)

    def pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        """(r, g, b, a) of the pixel at column x, row y."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) is outside a {self.width}x{self.height} raster")
        offset = y * self.stride + x * self.BYTES_PER_PIXEL
        r, g, b, a = self._data[offset:offset + self.BYTES_PER_PIXEL]
        return r, g, b, a

    def to_qimage(self) -> QImage:
        """Detached QImage copy, ready to be drawn over the floor plan."""
        image = QImage(self._data, self.width, self.height, self.stride, QImage.Format_RGBA8888)
        return image.copy()

    def save(self, file_path: str, quality: int = -1) -> bool:
        """
        Encode the raster to an image file. The format follows the file
        extension (PNG, JPEG, ...).

        Returns:
            bool: True if the file was written, False otherwise
        """
        if not self.to_qimage().save(file_path, None, quality):
            print(f"Error saving raster to '{file_path}'")
            return False
        return True

    def __eq__(self, other):
        if not isinstance(other, Raster):
            return NotImplemented
        return (self.width, self.height) == (other.width, other.height) and \
            np.array_equal(self.to_array(), other.to_array())

    def __hash__(self):
        return hash((self.width, self.height, self.to_array().tobytes()))

    def __repr__(self):
        return f"Raster({self.width}x{self.height}, stride={self.stride})"
