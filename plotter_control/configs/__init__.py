"""Plotter profile loading and validation."""

from plotter_control.configs.loader import (
    ConfigError,
    PlotterConfig,
    ServoConfig,
    list_profiles,
    load_config,
)

__all__ = [
    "ConfigError",
    "PlotterConfig",
    "ServoConfig",
    "list_profiles",
    "load_config",
]
