#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# -----------------------------------------------------------------------------
# Signal Survey
#
# signal_survey/legend.py
#
# Description:
# Heatmap legend rendering: a -90..-30 dBm gradient bar and one labeled swatch
# per coverage bucket, painted with QPainter from the shared color mapper.
# -----------------------------------------------------------------------------

import os
import sys
import numpy as np
from typing import List, Tuple
from PyQt5.QtCore import Qt, QRect
from PyQt5.QtGui import QColor, QFont, QGuiApplication, QImage, QPainter

from .color_mapper import SIGNAL_CEILING_DBM, SIGNAL_FLOOR_DBM, SIGNAL_SPAN_DB, colorize, quality_color
from .raster import Raster
from .signal_quality import SignalQuality

MARGIN = 10
BAR_HEIGHT = 20
SWATCH_SIZE = 15
LABEL_HEIGHT = 16

# Keeps an application created here alive for the lifetime of the process
_gui_application = None


def _ensure_gui_application():
    """Text rendering needs a QGuiApplication; create an offscreen one if none exists."""
    global _gui_application
    if QGuiApplication.instance() is None:
        os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
        _gui_application = QGuiApplication(sys.argv[:1] or ["signal-survey"])


def gradient_bar_rect(width: int, height: int) -> Tuple[int, int, int, int]:
    """(x, y, w, h) of the gradient bar for a legend of the given size."""
    bar_width = max(width - 2 * MARGIN, 1)
    bar_height = max(min(BAR_HEIGHT, height // 4), 1)
    return MARGIN, MARGIN, bar_width, bar_height


def swatch_rects(width: int, height: int) -> List[Tuple[SignalQuality, Tuple[int, int, int, int]]]:
    """Quality bucket and (x, y, w, h) of each swatch, left to right."""
    _, bar_y, _, bar_height = gradient_bar_rect(width, height)
    swatch_y = bar_y + bar_height + LABEL_HEIGHT + 5
    slot_width = max(width - 2 * MARGIN, 1) / len(SignalQuality)
    rects = []
    for index, quality in enumerate(SignalQuality):
        swatch_x = MARGIN + int(index * slot_width)
        rects.append((quality, (swatch_x, swatch_y, SWATCH_SIZE, SWATCH_SIZE)))
    return rects


def quality_range_text(quality: SignalQuality) -> str:
    """dBm range of a coverage bucket as shown under its swatch, e.g. "-60 to -50"."""
    lower = quality.lower_bound_dbm
    upper = quality.upper_bound_dbm
    if upper is None:
        return f">= {lower}"
    if lower is None:
        return f"< {upper}"
    return f"{lower} to {upper}"


def gradient_bar_colors(bar_width: int) -> np.ndarray:
    """(bar_width, 4) colors sweeping the gradient window from weak to strong."""
    signals = SIGNAL_FLOOR_DBM + np.arange(bar_width, dtype=np.float64) / bar_width * SIGNAL_SPAN_DB
    return colorize(signals, 255)


def create_legend(width: int = 400, height: int = 80) -> Raster:
    """
    Create a legend showing signal strength color mapping.

    Args:
        width: Legend width in pixels
        height: Legend height in pixels

    Returns:
        Raster of exactly width x height (1x1 for non-positive sizes)
    """
    if width <= 0 or height <= 0:
        return Raster.blank(1, 1)

    _ensure_gui_application()

    image = QImage(width, height, QImage.Format_ARGB32_Premultiplied)
    image.fill(QColor(255, 255, 255, 200))  # Semi-transparent white background

    painter = QPainter(image)
    font = QFont()
    font.setPointSize(9)
    painter.setFont(font)

    # Gradient bar
    bar_x, bar_y, bar_width, bar_height = gradient_bar_rect(width, height)
    bar_pixels = np.broadcast_to(gradient_bar_colors(bar_width), (bar_height, bar_width, 4))
    painter.drawImage(bar_x, bar_y, Raster.from_array(bar_pixels).to_qimage())

    painter.setPen(Qt.black)
    painter.drawRect(bar_x - 1, bar_y - 1, bar_width + 1, bar_height + 1)

    # Bar labels
    label_y = bar_y + bar_height + 2
    mid_signal = (SIGNAL_FLOOR_DBM + SIGNAL_CEILING_DBM) // 2
    painter.drawText(QRect(bar_x, label_y, bar_width, LABEL_HEIGHT),
                     Qt.AlignLeft | Qt.AlignTop, f"{SIGNAL_FLOOR_DBM} dBm")
    painter.drawText(QRect(bar_x, label_y, bar_width, LABEL_HEIGHT),
                     Qt.AlignHCenter | Qt.AlignTop, f"{mid_signal} dBm")
    painter.drawText(QRect(bar_x, label_y, bar_width, LABEL_HEIGHT),
                     Qt.AlignRight | Qt.AlignTop, f"{SIGNAL_CEILING_DBM} dBm")

    # Quality swatches with their dBm ranges
    range_font = QFont(font)
    range_font.setPointSize(7)
    slot_width = max(width - 2 * MARGIN, 1) // len(SignalQuality)
    for quality, (x, y, w, h) in swatch_rects(width, height):
        painter.fillRect(x, y, w, h, QColor(*quality_color(quality)))
        painter.setFont(font)
        painter.drawText(QRect(x + w + 4, y, LABEL_HEIGHT * 5, h),
                         Qt.AlignLeft | Qt.AlignVCenter, quality.label)
        painter.setFont(range_font)
        painter.drawText(QRect(x, y + h + 1, slot_width, LABEL_HEIGHT),
                         Qt.AlignLeft | Qt.AlignTop, quality_range_text(quality))

    painter.end()
    return Raster.from_qimage(image)
