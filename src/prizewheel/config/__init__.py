"""Configuration for the prize wheel."""

from prizewheel.config.settings import Settings, WheelSettings, StyleSettings, get_settings

__all__ = ["Settings", "WheelSettings", "StyleSettings", "get_settings"]
