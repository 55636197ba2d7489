"""Configuration loader for plotter profiles.

Loads ``plotter.yaml`` and turns one named profile into typed, frozen
dataclasses.  Canvas size, motor anchors, calibration point and pen-servo
positions all come from the profile -- nothing is hardcoded.

Only the canvas size feeds the path-to-plot pipeline; the remaining values
are carried for the hardware driver behind the drawing surface.

Usage::

    from plotter_control.configs.loader import load_config
    cfg = load_config()                                # default profile
    cfg = load_config(profile="plotbert")              # named profile
    cfg = load_config("/custom/plotter.yaml", "mine")  # explicit path
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from plotter_control.path_ir.commands import Point
from plotter_control.transform.fit import Canvas
from plotter_control.utils.fs import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "plotter.yaml"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(Exception):
    """Raised when configuration validation fails."""

    pass


# ---------------------------------------------------------------------------
# Dataclasses -- mirror the YAML structure
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ServoConfig:
    """Pen-lift servo positions.

    Parameters
    ----------
    up, down : float
        Servo positions for pen up / pen down, in ``[0, range]``.
    range : float
        Full servo travel in driver units.
    """

    up: float
    down: float
    range: float


@dataclass(frozen=True)
class PlotterConfig:
    """One plotter profile loaded from ``plotter.yaml``.

    All positions are in the profile's device units (mm for the shipped
    profiles), measured from the same origin.
    """

    name: str
    motor_left: Point
    motor_right: Point
    calibration_point: Point
    width: float
    height: float
    servo: ServoConfig

    # -- Convenience helpers ------------------------------------------------

    def canvas(self) -> Canvas:
        """Canvas used by the transform calculator."""
        return Canvas(width=self.width, height=self.height)

    @property
    def motor_span(self) -> float:
        """Distance between the two cable anchors."""
        return math.hypot(
            self.motor_right.x - self.motor_left.x,
            self.motor_right.y - self.motor_left.y,
        )


# ---------------------------------------------------------------------------
# Internal parsing helpers
# ---------------------------------------------------------------------------


def _parse_point(name: str, value: Any) -> Point:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ConfigError(f"{name} must be a 2-element list, got {value!r}")
    return Point(float(value[0]), float(value[1]))


def _parse_profile(name: str, data: dict[str, Any]) -> PlotterConfig:
    """Parse a single profile section from raw YAML dict."""
    cv = data["canvas"]
    sv = data["servo"]
    return PlotterConfig(
        name=name,
        motor_left=_parse_point("motor_left", data["motor_left"]),
        motor_right=_parse_point("motor_right", data["motor_right"]),
        calibration_point=_parse_point(
            "calibration_point", data["calibration_point"]
        ),
        width=float(cv["width"]),
        height=float(cv["height"]),
        servo=ServoConfig(
            up=float(sv["up"]),
            down=float(sv["down"]),
            range=float(sv.get("range", 100)),
        ),
    )


def _validate_config(cfg: PlotterConfig) -> None:
    """Cross-field checks that dataclass construction cannot express."""
    # -- Canvas positive ----------------------------------------------------
    for dim, val in (("width", cfg.width), ("height", cfg.height)):
        if not math.isfinite(val) or val <= 0:
            raise ConfigError(
                f"Profile '{cfg.name}' canvas {dim} must be > 0, got {val}"
            )

    # -- Motors distinct and left of each other -----------------------------
    if cfg.motor_left.x >= cfg.motor_right.x:
        raise ConfigError(
            f"Profile '{cfg.name}': motor_left.x ({cfg.motor_left.x}) must be "
            f"less than motor_right.x ({cfg.motor_right.x})"
        )

    # -- Calibration point between the motors -------------------------------
    cp = cfg.calibration_point
    if not cfg.motor_left.x <= cp.x <= cfg.motor_right.x:
        raise ConfigError(
            f"Profile '{cfg.name}': calibration_point.x ({cp.x}) is outside "
            f"the motor span [{cfg.motor_left.x}, {cfg.motor_right.x}]"
        )

    # -- Servo positions in range -------------------------------------------
    s = cfg.servo
    if s.range <= 0:
        raise ConfigError(
            f"Profile '{cfg.name}' servo range must be > 0, got {s.range}"
        )
    for label, pos in (("up", s.up), ("down", s.down)):
        if not 0 <= pos <= s.range:
            raise ConfigError(
                f"Profile '{cfg.name}' servo {label} ({pos}) outside "
                f"[0, {s.range}]"
            )
    if s.up == s.down:
        raise ConfigError(
            f"Profile '{cfg.name}' servo up and down positions are equal ({s.up})"
        )


def _load_raw(path: str | Path | None) -> tuple[Path, dict[str, Any]]:
    path = DEFAULT_CONFIG_PATH if path is None else Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    data = load_yaml(path)
    if data is None:
        raise ConfigError(f"Empty configuration file: {path}")
    if not isinstance(data.get("profiles"), dict) or not data["profiles"]:
        raise ConfigError(f"No 'profiles' mapping in {path}")
    return path, data


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def list_profiles(path: str | Path | None = None) -> list[str]:
    """Names of all profiles defined in the configuration file."""
    _, data = _load_raw(path)
    return list(data["profiles"].keys())


def load_config(
    path: str | Path | None = None,
    profile: str | None = None,
) -> PlotterConfig:
    """Load and validate one plotter profile from YAML.

    Parameters
    ----------
    path : str | Path | None
        Path to ``plotter.yaml``.  ``None`` loads the file shipped
        alongside this module.
    profile : str | None
        Profile name.  ``None`` uses the file's ``default_profile`` (or
        ``"default"``).

    Returns
    -------
    PlotterConfig
        Fully validated, frozen configuration object.

    Raises
    ------
    ConfigError
        If the profile is unknown, a field is missing, or validation fails.
    FileNotFoundError
        If *path* does not exist.
    """
    path, data = _load_raw(path)
    profiles = data["profiles"]
    if profile is None:
        profile = str(data.get("default_profile", "default"))

    if profile not in profiles:
        raise ConfigError(
            f"Unknown profile '{profile}'. Available: {list(profiles.keys())}"
        )

    logger.info("Loading profile '%s' from %s", profile, path)

    try:
        config = _parse_profile(profile, profiles[profile])
    except KeyError as exc:
        raise ConfigError(
            f"Profile '{profile}': missing required configuration key: {exc}"
        ) from exc
    except (TypeError, ValueError) as exc:
        raise ConfigError(
            f"Profile '{profile}': invalid configuration value: {exc}"
        ) from exc

    _validate_config(config)
    return config
