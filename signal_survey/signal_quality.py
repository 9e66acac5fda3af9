#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# -----------------------------------------------------------------------------
# Signal Survey
#
# signal_survey/signal_quality.py
#
# Description:
# Signal quality classification bands. This table is the only place the dBm
# thresholds are defined; the color mapper, the coverage classifier and the
# per-point quality labels all read from it.
# -----------------------------------------------------------------------------

from enum import Enum
from typing import Optional


class SignalQuality(Enum):
    """
    Coverage bucket for a signal strength reading.

    Each member carries its display label and the inclusive lower bound of its
    band in dBm. POOR has no lower bound: everything below WEAK lands there.
    """
    EXCELLENT = ("Excellent", -50)
    GOOD = ("Good", -60)
    FAIR = ("Fair", -70)
    WEAK = ("Weak", -80)
    POOR = ("Poor", None)

    def __init__(self, label: str, lower_bound_dbm: Optional[int]):
        self.label = label
        self.lower_bound_dbm = lower_bound_dbm

    @property
    def upper_bound_dbm(self) -> Optional[int]:
        """Exclusive upper bound of the band, None for EXCELLENT."""
        members = list(SignalQuality)
        index = members.index(self)
        if index == 0:
            return None
        return members[index - 1].lower_bound_dbm

    @classmethod
    def from_label(cls, label: str) -> "SignalQuality":
        for quality in cls:
            if quality.label.lower() == label.lower():
                return quality
        raise ValueError(f"Unknown signal quality label: {label}")


def classify_signal(signal_dbm: float) -> SignalQuality:
    """
    Map a signal strength to its coverage bucket.

    Args:
        signal_dbm: Signal strength in dBm

    Returns:
        The SignalQuality band containing the reading
    """
    for quality in SignalQuality:
        if quality.lower_bound_dbm is None or signal_dbm >= quality.lower_bound_dbm:
            return quality
    return SignalQuality.POOR
