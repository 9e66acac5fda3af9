# signal_survey/config_manager.py

import json
import os

from .data_models import RenderConfig

CONFIG_DIR_NAME = ".signal-survey"
CONFIG_FILE_NAME = "config.json"


def default_config_path():
    """Per-user settings file: ~/.signal-survey/config.json"""
    return os.path.join(os.path.expanduser("~"), CONFIG_DIR_NAME, CONFIG_FILE_NAME)


class ConfigManager:
    """
    Persistent survey settings stored as a flat JSON object.

    Render settings live next to any other keys the caller stores; keys that
    are missing or unreadable fall back to the RenderConfig defaults.
    """
    RENDER_KEYS = ("interpolation_radius", "smoothing_factor", "opacity", "preview_scale")

    def __init__(self, config_file_path=None):
        """
        Args:
            config_file_path (str): Settings file to read and write.
                Defaults to default_config_path().
        """
        self.config_file_path = config_file_path or default_config_path()
        self.config = self._read_settings()

    def _read_settings(self):
        """
        Reads the settings file. Unreadable, malformed or non-object files are
        reported and replaced by an empty settings dictionary.
        """
        path = self.config_file_path
        if not os.path.exists(path):
            print(f"Info: Settings file '{path}' not found. Using default render settings.")
            return {}

        try:
            with open(path, 'r', encoding='utf-8') as f:
                settings = json.load(f)
        except json.JSONDecodeError as e:
            print(f"Warning: Settings file '{path}' is not valid JSON ({e}). Using default render settings.")
            return {}
        except OSError as e:
            print(f"Error reading settings file '{path}': {e}")
            return {}

        if not isinstance(settings, dict):
            print(f"Warning: Settings file '{path}' does not hold an object. Using default render settings.")
            return {}
        return settings

    def _write_settings(self):
        """Writes all settings back, creating the settings directory on first use."""
        path = self.config_file_path
        try:
            settings_dir = os.path.dirname(path)
            if settings_dir:
                os.makedirs(settings_dir, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(self.config, f, indent=4)
        except OSError as e:
            print(f"Error writing settings file '{path}': {e}")

    def get(self, key, default=None):
        return self.config.get(key, default)

    def set(self, key, value):
        """Stores one setting and writes the file right away."""
        self.config[key] = value
        self._write_settings()

    def get_render_config(self):
        """
        Heatmap render settings from the stored values.

        Returns:
            RenderConfig: Stored values, clamped; defaults for missing or
            non-numeric entries (the latter are reported).
        """
        values = {}
        for key in self.RENDER_KEYS:
            value = self.get(key)
            if value is None:
                continue
            try:
                values[key] = float(value)
            except (TypeError, ValueError):
                print(f"Warning: Ignoring invalid value for '{key}': {value!r}")
        return RenderConfig.from_dict(values)

    def set_render_config(self, render_config):
        """Stores every render setting with a single write."""
        self.config.update(render_config.to_dict())
        self._write_settings()

    def get_all_config(self):
        """Shallow copy of every stored setting."""
        return dict(self.config)
