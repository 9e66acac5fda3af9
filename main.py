#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# -----------------------------------------------------------------------------
# Signal Survey
#
# main.py
#
# Description:
# Command line entry point for the Signal Survey engine. Loads configuration,
# reads (or simulates) survey samples, renders the coverage overlay and legend
# to image files and prints coverage statistics.
# -----------------------------------------------------------------------------

import argparse
import json
import os
import sys
from PyQt5.QtGui import QGuiApplication

from signal_survey.config_manager import ConfigManager, default_config_path
from signal_survey.data_models import SamplePoint
from signal_survey.heatmap_generator import HeatmapGenerator
from signal_survey.sample_simulator import SampleSimulator
from signal_survey.signal_quality import SignalQuality


def load_samples(file_path):
    """
    Reads survey samples from a JSON file holding a list of sample dictionaries.

    Returns:
        list: SamplePoint objects, or None if the file could not be read
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return [SamplePoint.from_dict(entry) for entry in data]
    except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        print(f"Error loading samples from '{file_path}': {e}")
        return None


def print_statistics(stats, label_filter=None):
    """Prints the coverage statistics table."""
    title = f"Coverage for '{label_filter}'" if label_filter else "Coverage for all networks"
    print(title)
    print(f"  Points:          {stats.total_points}")
    print(f"  Average signal:  {stats.average_signal:.1f} dBm (min {stats.min_signal}, max {stats.max_signal})")
    print(f"  Link quality:    {stats.average_link_quality:.1f}%")
    print(f"  Networks:        {stats.unique_labels}   Channels: {stats.unique_channels}")
    for quality in SignalQuality:
        print(f"  {quality.label:<10} {stats.count(quality):>5}  {stats.coverage_percentage(quality):5.1f}%")


def build_parser():
    parser = argparse.ArgumentParser(description="Render a WiFi coverage heatmap from survey samples.")
    parser.add_argument("samples", nargs="?", help="JSON file with a list of sample points")
    parser.add_argument("--simulate", type=int, metavar="N", help="Simulate N survey points instead of reading a file")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for --simulate")
    parser.add_argument("--width", type=int, default=800, help="Overlay width in pixels")
    parser.add_argument("--height", type=int, default=600, help="Overlay height in pixels")
    parser.add_argument("--ssid", default=None, help="Only use samples for this network")
    parser.add_argument("--preview", action="store_true", help="Render the fast low resolution preview")
    parser.add_argument("--output", default="heatmap.png", help="Overlay image file")
    parser.add_argument("--legend", default=None, help="Also write the legend to this image file")
    return parser


def main(argv=None):
    """
    Main entry point for the Signal Survey renderer.
    """
    args = build_parser().parse_args(argv)

    # --- Determine Debug Mode from Environment Variable ---
    # Set SIGNAL_SURVEY_DEBUG=1 (or True/true) in your environment to enable debug logging.
    debug_mode = os.environ.get("SIGNAL_SURVEY_DEBUG", "0").lower() in ("1", "true")
    if debug_mode:
        print("DEBUG: SIGNAL_SURVEY_DEBUG environment variable detected. Debug mode is ON.")

    # Rendering text and encoding images needs a GUI application object
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    app = QGuiApplication.instance() or QGuiApplication(sys.argv[:1])

    config_file_path = default_config_path()
    if debug_mode:
        print(f"DEBUG: Configuration file path: {config_file_path}")
    config_manager = ConfigManager(config_file_path)
    render_config = config_manager.get_render_config()

    if args.simulate is not None:
        samples = SampleSimulator(seed=args.seed).generate_samples(args.simulate)
    elif args.samples:
        samples = load_samples(args.samples)
        if samples is None:
            return 1
    else:
        print("Error: give a samples file or --simulate N")
        return 2

    if args.ssid:
        samples = [sample for sample in samples if sample.ssid == args.ssid]
    if debug_mode:
        print(f"DEBUG: {len(samples)} samples loaded")

    generator = HeatmapGenerator.from_config(render_config, debug_mode=debug_mode)
    if args.preview:
        raster = generator.generate_preview_heatmap(args.width, args.height, samples, render_config.preview_scale)
    else:
        raster = generator.generate_heatmap(args.width, args.height, samples, render_config.opacity)

    exit_code = 0
    if raster.save(args.output):
        print(f"Heatmap written to {args.output}")
    else:
        exit_code = 1

    if args.legend:
        if generator.create_legend().save(args.legend):
            print(f"Legend written to {args.legend}")
        else:
            exit_code = 1

    print_statistics(generator.compute_statistics(samples), args.ssid)
    return exit_code


if __name__ == '__main__':
    sys.exit(main())
