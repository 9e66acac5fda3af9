#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# -----------------------------------------------------------------------------
# Signal Survey
#
# signal_survey/coverage_classifier.py
#
# Description:
# Coverage statistics for a set of survey samples: signal summary values and
# a per-quality histogram built on the shared signal quality table.
# -----------------------------------------------------------------------------

import numpy as np
from collections import Counter
from typing import Dict, List, Optional

from .data_models import SamplePoint, SurveyStatistics
from .signal_quality import SignalQuality, classify_signal


def compute_statistics(samples: List[SamplePoint], label_filter: Optional[str] = None) -> SurveyStatistics:
    """
    Summarize survey samples.

    Args:
        samples: Survey sample points
        label_filter: Network SSID to restrict to (None or "" keeps every sample)

    Returns:
        SurveyStatistics; all zero when no sample is left after filtering
    """
    points = list(samples)
    if label_filter:
        points = [point for point in points if point.ssid == label_filter]

    if not points:
        return SurveyStatistics()

    signals = [point.signal_strength for point in points]
    buckets = Counter(classify_signal(signal) for signal in signals)

    return SurveyStatistics(
        total_points=len(points),
        average_signal=float(np.mean(signals)),
        min_signal=min(signals),
        max_signal=max(signals),
        average_link_quality=float(np.mean([point.link_quality for point in points])),
        unique_labels=len({point.ssid for point in points}),
        unique_channels=len({point.channel for point in points}),
        bucket_counts=[buckets[quality] for quality in SignalQuality]
    )


def rank_networks(samples: List[SamplePoint], min_coverage: float = 0.3) -> List[str]:
    """
    Get list of networks that appear to be the surveyed network.
    Uses heuristics like strongest consistent signal across points.

    Args:
        samples: Survey sample points
        min_coverage: Minimum share of samples a network must appear in

    Returns:
        List of network SSIDs, best candidate first
    """
    if not samples:
        return []

    network_stats: Dict[str, List[float]] = {}
    for sample in samples:
        if not sample.ssid:
            continue
        network_stats.setdefault(sample.ssid, []).append(sample.signal_strength)

    total_samples = len(samples)
    network_scores = []

    for ssid, signals in network_stats.items():
        coverage_ratio = len(signals) / total_samples
        if coverage_ratio < min_coverage:
            continue

        avg_signal = np.mean(signals)
        max_signal = max(signals)

        # Score based on coverage, average strength, and peak strength
        score = (coverage_ratio * 0.5 +
                 (avg_signal + 100) / 100 * 0.3 +  # Normalize dBm to 0-1 range
                 (max_signal + 100) / 100 * 0.2)
        network_scores.append((score, ssid))

    network_scores.sort(reverse=True)
    return [ssid for _, ssid in network_scores]
