#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# -----------------------------------------------------------------------------
# Signal Survey
#
# signal_survey/data_models.py
#
# Description:
# Data model classes for the Signal Survey engine. Contains the scan result
# record, survey sample points, render settings and coverage statistics.
# -----------------------------------------------------------------------------

from datetime import datetime

from .color_mapper import quality_color
from .signal_quality import SignalQuality, classify_signal


class APData:
    """
    Represents details of an Access Point detected during a scan.
    """
    def __init__(self, ssid, bssid, channel, signal_strength, security, frequency, quality, band):
        self.ssid = ssid
        self.bssid = bssid
        self.channel = channel
        self.signal_strength = signal_strength
        self.security = security
        self.frequency = frequency
        self.quality = quality  # Link quality percentage (0-100)
        self.band = band

    def to_dict(self):
        return dict(self.__dict__)

    @classmethod
    def from_dict(cls, data):
        """Create APData instance from dictionary."""
        return cls(
            ssid=data['ssid'],
            bssid=data['bssid'],
            channel=data['channel'],
            signal_strength=data['signal_strength'],
            security=data.get('security', ''),
            frequency=data.get('frequency', 0),
            quality=data.get('quality', 0),
            band=data.get('band', '')
        )


class SamplePoint:
    """
    A single survey measurement: where it was taken and how strong the signal was.

    Position is normalized to the floor plan (0-1 on both axes). Values outside
    that range are kept as-is; they land off-canvas but still take part in
    interpolation.
    """
    def __init__(self, x, y, signal_strength, link_quality=0, channel=0, ssid="",
                 bssid="", band="", frequency=0.0, timestamp=None, note=""):
        self.x = x
        self.y = y
        self.signal_strength = signal_strength  # dBm
        self.link_quality = link_quality
        self.channel = channel
        self.ssid = ssid
        self.bssid = bssid
        self.band = band
        self.frequency = frequency  # MHz
        self.timestamp = timestamp if timestamp is not None else datetime.now()
        self.note = note

    @classmethod
    def from_measurement(cls, x, y, ap_data, timestamp=None):
        """
        Create a sample point from the access point reported by a scan.

        Args:
            x, y: Normalized position on the floor plan
            ap_data: APData for the connected / target network
            timestamp: When the scan was taken (defaults to now)

        Returns:
            SamplePoint carrying the AP's signal and identity
        """
        return cls(
            x=x,
            y=y,
            signal_strength=int(ap_data.signal_strength),
            link_quality=ap_data.quality,
            channel=ap_data.channel,
            ssid=ap_data.ssid,
            bssid=ap_data.bssid,
            band=ap_data.band,
            frequency=ap_data.frequency,
            timestamp=timestamp
        )

    @property
    def quality(self) -> SignalQuality:
        return classify_signal(self.signal_strength)

    @property
    def quality_description(self) -> str:
        """Display label of the coverage bucket (Excellent, Good, Fair, Weak, Poor)."""
        return self.quality.label

    def signal_color(self, opacity=255):
        """Marker color for this point: the swatch of its coverage bucket."""
        return quality_color(self.quality, opacity)

    def to_dict(self):
        return {
            'x': self.x,
            'y': self.y,
            'signal_strength': self.signal_strength,
            'link_quality': self.link_quality,
            'channel': self.channel,
            'ssid': self.ssid,
            'bssid': self.bssid,
            'band': self.band,
            'frequency': self.frequency,
            'timestamp': self.timestamp.isoformat(),  # Store as ISO format string
            'note': self.note
        }

    @classmethod
    def from_dict(cls, data):
        """Create SamplePoint instance from dictionary."""
        timestamp = datetime.fromisoformat(data['timestamp']) if data.get('timestamp') else None
        return cls(
            x=data['x'],
            y=data['y'],
            signal_strength=data['signal_strength'],
            link_quality=data.get('link_quality', 0),
            channel=data.get('channel', 0),
            ssid=data.get('ssid', ''),
            bssid=data.get('bssid', ''),
            band=data.get('band', ''),
            frequency=data.get('frequency', 0.0),
            timestamp=timestamp,
            note=data.get('note', '')
        )

    def __repr__(self):
        return f"{self.ssid} @ ({self.x:.2f}, {self.y:.2f}): {self.signal_strength} dBm ({self.quality_description})"


class RenderConfig:
    """
    Heatmap rendering settings.

    interpolation_radius is the IDW core radius in pixels; beyond it sample
    influence decays exponentially at a rate set by smoothing_factor.
    """
    DEFAULT_INTERPOLATION_RADIUS = 100
    DEFAULT_SMOOTHING_FACTOR = 0.7
    DEFAULT_OPACITY = 150
    DEFAULT_PREVIEW_SCALE = 4

    def __init__(self, interpolation_radius=DEFAULT_INTERPOLATION_RADIUS,
                 smoothing_factor=DEFAULT_SMOOTHING_FACTOR, opacity=DEFAULT_OPACITY,
                 preview_scale=DEFAULT_PREVIEW_SCALE):
        self.interpolation_radius = max(float(interpolation_radius), 1.0)
        self.smoothing_factor = min(max(float(smoothing_factor), 0.0), 1.0)
        self.opacity = min(max(int(opacity), 0), 255)
        self.preview_scale = max(int(preview_scale), 1)

    def to_dict(self):
        return dict(self.__dict__)

    @classmethod
    def from_dict(cls, data):
        """Create RenderConfig instance from dictionary, falling back to defaults."""
        return cls(
            interpolation_radius=data.get('interpolation_radius', cls.DEFAULT_INTERPOLATION_RADIUS),
            smoothing_factor=data.get('smoothing_factor', cls.DEFAULT_SMOOTHING_FACTOR),
            opacity=data.get('opacity', cls.DEFAULT_OPACITY),
            preview_scale=data.get('preview_scale', cls.DEFAULT_PREVIEW_SCALE)
        )


class SurveyStatistics:
    """
    Summary of a set of survey samples.

    bucket_counts is ordered like SignalQuality (Excellent first, Poor last)
    and always sums to total_points.
    """
    def __init__(self, total_points=0, average_signal=0.0, min_signal=0, max_signal=0,
                 average_link_quality=0.0, unique_labels=0, unique_channels=0, bucket_counts=None):
        self.total_points = total_points
        self.average_signal = average_signal
        self.min_signal = min_signal
        self.max_signal = max_signal
        self.average_link_quality = average_link_quality
        self.unique_labels = unique_labels
        self.unique_channels = unique_channels
        self.bucket_counts = list(bucket_counts) if bucket_counts is not None else [0] * len(SignalQuality)

    def count(self, quality) -> int:
        """Number of samples in a bucket. Accepts a SignalQuality or its label."""
        if isinstance(quality, str):
            quality = SignalQuality.from_label(quality)
        return self.bucket_counts[list(SignalQuality).index(quality)]

    def coverage_percentage(self, quality) -> float:
        """Share of samples in a bucket, in percent. 0 when there are no samples."""
        if self.total_points == 0:
            return 0.0
        return self.count(quality) * 100.0 / self.total_points

    def to_dict(self):
        return {
            'total_points': self.total_points,
            'average_signal': self.average_signal,
            'min_signal': self.min_signal,
            'max_signal': self.max_signal,
            'average_link_quality': self.average_link_quality,
            'unique_labels': self.unique_labels,
            'unique_channels': self.unique_channels,
            'coverage': {
                quality.label: {
                    'count': self.count(quality),
                    'percentage': self.coverage_percentage(quality)
                }
                for quality in SignalQuality
            }
        }
