#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# -----------------------------------------------------------------------------
# Signal Survey
#
# signal_survey/sample_simulator.py
#
# Description:
# Simulated survey data generator. Places a few access points on a normalized
# floor plan and produces scan results and sample points with an empirical
# distance-based path loss model.
# -----------------------------------------------------------------------------

import random
import math
from typing import List, Optional

from .data_models import APData, SamplePoint


class SampleSimulator:
    """
    Generates simulated survey samples with spatial consistency: points close
    to an access point see it stronger than points far away.
    """

    # Site access points in normalized floor coordinates
    DEFAULT_ACCESS_POINTS = [
        {"ssid": "WLANS", "bssid": "9C-A2-F4-10-20-8E", "x": 0.25, "y": 0.25, "base_power": -22, "channel": 1, "band": "2.4 GHz"},
        {"ssid": "WLANS", "bssid": "9C-A2-F4-31-42-8F", "x": 0.75, "y": 0.25, "base_power": -28, "channel": 100, "band": "5 GHz"},
        {"ssid": "WLANS-Guest", "bssid": "A6-A2-F4-53-64-8E", "x": 0.50, "y": 0.75, "base_power": -23, "channel": 6, "band": "2.4 GHz"},
        {"ssid": "Office_Main", "bssid": "D4-CA-6E-AB-CD-01", "x": 0.90, "y": 0.80, "base_power": -38, "channel": 44, "band": "5 GHz"},
    ]

    CHANNEL_FREQUENCIES = {
        1: 2412, 6: 2437, 8: 2447, 11: 2462,
        36: 5180, 44: 5220, 100: 5500, 149: 5745
    }

    def __init__(self, seed=None, floor_width_feet=164.0, floor_height_feet=92.0, access_points=None):
        """
        Initialize the simulator.

        Args:
            seed: Random seed for reproducible results
            floor_width_feet: Physical width of the floor plan
            floor_height_feet: Physical height of the floor plan
            access_points: List of AP dicts like DEFAULT_ACCESS_POINTS (optional)
        """
        self.random = random.Random(seed)
        self.floor_width_feet = floor_width_feet
        self.floor_height_feet = floor_height_feet
        self.access_points = access_points if access_points is not None else list(self.DEFAULT_ACCESS_POINTS)

    def _calculate_signal_strength(self, ap, scan_x, scan_y):
        """
        Signal strength with the empirical path loss model:
        ~0.5 dB/ft on 2.4 GHz, ~0.6 dB/ft on 5 GHz, plus +-2 dB of noise.

        Returns:
            int: Signal strength in dBm, clamped to -95..-20
        """
        distance_feet = math.hypot((scan_x - ap['x']) * self.floor_width_feet,
                                   (scan_y - ap['y']) * self.floor_height_feet)
        path_loss_per_foot = 0.5 if ap['band'] == "2.4 GHz" else 0.6

        path_loss = distance_feet * path_loss_per_foot
        path_loss += self.random.uniform(-2, 2)

        signal_strength = ap['base_power'] - path_loss
        return max(-95, min(-20, int(signal_strength)))

    def _calculate_quality_from_rssi(self, rssi):
        """Calculate quality percentage from RSSI value"""
        if rssi >= -30:
            return self.random.randint(95, 99)
        elif rssi >= -40:
            return self.random.randint(85, 95)
        elif rssi >= -50:
            return self.random.randint(70, 87)
        elif rssi >= -60:
            return self.random.randint(60, 81)
        elif rssi >= -70:
            return self.random.randint(50, 70)
        elif rssi >= -80:
            return self.random.randint(25, 50)
        else:
            return self.random.randint(10, 30)

    def scan_at(self, scan_x, scan_y) -> List[APData]:
        """
        Simulate a scan at a normalized floor position.

        Returns:
            List[APData]: One entry per access point, strongest first
        """
        ap_list = []
        for ap in self.access_points:
            rssi = self._calculate_signal_strength(ap, scan_x, scan_y)
            ap_list.append(APData(
                ssid=ap['ssid'],
                bssid=ap['bssid'],
                channel=ap['channel'],
                signal_strength=rssi,
                security="WPA2",
                frequency=self.CHANNEL_FREQUENCIES.get(ap['channel'], 0),
                quality=self._calculate_quality_from_rssi(rssi),
                band=ap['band']
            ))

        ap_list.sort(key=lambda ap_data: ap_data.signal_strength, reverse=True)
        return ap_list

    def generate_samples(self, count: int, target_network: Optional[str] = None) -> List[SamplePoint]:
        """
        Generate survey samples at random positions.

        At each position the target network's strongest AP is recorded, or the
        strongest AP overall when no target is given. Positions where the target
        network is not visible are skipped.

        Args:
            count: Number of positions to scan
            target_network: SSID to record (optional)

        Returns:
            List[SamplePoint]
        """
        samples = []
        for _ in range(count):
            x = round(self.random.uniform(0.05, 0.95), 4)
            y = round(self.random.uniform(0.05, 0.95), 4)
            ap_list = self.scan_at(x, y)

            if target_network:
                ap_list = [ap for ap in ap_list if ap.ssid == target_network]
            if not ap_list:
                continue

            samples.append(SamplePoint.from_measurement(x, y, ap_list[0]))

        return samples
