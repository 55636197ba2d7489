"""Tests for the plotter profile loader.

Validates that the shipped ``plotter.yaml`` loads, that profile
selection works, and that structural mistakes are reported as
``ConfigError`` rather than leaking ``KeyError`` / ``TypeError``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from plotter_control.configs.loader import (
    ConfigError,
    PlotterConfig,
    list_profiles,
    load_config,
)
from plotter_control.path_ir.commands import Point
from plotter_control.transform.fit import Canvas


def _profile(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "motor_left": [0, 200],
        "motor_right": [100, 200],
        "calibration_point": [50, 150],
        "canvas": {"width": 100, "height": 200},
        "servo": {"up": 90, "down": 10, "range": 100},
    }
    data.update(overrides)
    return data


def _write(tmp_path: Path, data: Any) -> Path:
    path = tmp_path / "plotter.yaml"
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def config() -> PlotterConfig:
    """Load the default profile shipped with the package."""
    return load_config()


# ---------------------------------------------------------------------------
# Shipped profiles
# ---------------------------------------------------------------------------


class TestShippedProfiles:
    def test_default_profile(self, config: PlotterConfig) -> None:
        assert config.name == "default"
        assert config.width == 100.0
        assert config.height == 200.0
        assert config.calibration_point == Point(50.0, 150.0)

    def test_plotbert_profile(self) -> None:
        cfg = load_config(profile="plotbert")
        assert cfg.width == 580.0
        assert cfg.height == 400.0
        assert cfg.motor_left == Point(-27.0, 440.0)
        assert cfg.servo.up == 70.0
        assert cfg.servo.down == 30.0

    def test_list_profiles(self) -> None:
        names = list_profiles()
        assert "default" in names
        assert "plotbert" in names

    def test_canvas(self, config: PlotterConfig) -> None:
        assert config.canvas() == Canvas(100.0, 200.0)

    def test_motor_span(self, config: PlotterConfig) -> None:
        assert config.motor_span == pytest.approx(100.0)

    def test_frozen(self, config: PlotterConfig) -> None:
        with pytest.raises(AttributeError):
            config.width = 5.0  # type: ignore[misc]

    def test_unknown_profile(self) -> None:
        with pytest.raises(ConfigError, match="Unknown profile 'laser'"):
            load_config(profile="laser")


# ---------------------------------------------------------------------------
# Custom files
# ---------------------------------------------------------------------------


class TestCustomConfig:
    def test_explicit_path(self, tmp_path: Path) -> None:
        path = _write(tmp_path, {"profiles": {"mine": _profile()}})
        cfg = load_config(path, "mine")
        assert cfg.name == "mine"

    def test_default_profile_key(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            {"default_profile": "b", "profiles": {"a": _profile(), "b": _profile()}},
        )
        assert load_config(path).name == "b"

    def test_servo_range_defaults(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            {"profiles": {"default": _profile(servo={"up": 60, "down": 20})}},
        )
        assert load_config(path).servo.range == 100.0

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "plotter.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ConfigError, match="Empty"):
            load_config(path)

    def test_no_profiles(self, tmp_path: Path) -> None:
        path = _write(tmp_path, {"profiles": {}})
        with pytest.raises(ConfigError, match="profiles"):
            load_config(path)

    def test_missing_key(self, tmp_path: Path) -> None:
        data = _profile()
        del data["canvas"]
        path = _write(tmp_path, {"profiles": {"default": data}})
        with pytest.raises(ConfigError, match="missing required"):
            load_config(path)

    def test_bad_value(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            {"profiles": {"default": _profile(canvas={"width": "wide", "height": 1})}},
        )
        with pytest.raises(ConfigError, match="invalid configuration value"):
            load_config(path)

    def test_bad_point(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path, {"profiles": {"default": _profile(motor_left=[1, 2, 3])}},
        )
        with pytest.raises(ConfigError, match="motor_left"):
            load_config(path)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestValidation:
    @pytest.mark.parametrize("canvas", [{"width": 0, "height": 10}, {"width": 10, "height": -1}])
    def test_canvas_positive(self, tmp_path: Path, canvas: dict[str, float]) -> None:
        path = _write(tmp_path, {"profiles": {"default": _profile(canvas=canvas)}})
        with pytest.raises(ConfigError, match="canvas"):
            load_config(path)

    def test_motor_order(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            {"profiles": {"default": _profile(motor_left=[100, 200], motor_right=[0, 200])}},
        )
        with pytest.raises(ConfigError, match="motor_left"):
            load_config(path)

    def test_calibration_point_outside_span(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            {"profiles": {"default": _profile(calibration_point=[150, 150])}},
        )
        with pytest.raises(ConfigError, match="calibration_point"):
            load_config(path)

    def test_servo_out_of_range(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            {"profiles": {"default": _profile(servo={"up": 120, "down": 10, "range": 100})}},
        )
        with pytest.raises(ConfigError, match="servo up"):
            load_config(path)

    def test_servo_positions_distinct(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            {"profiles": {"default": _profile(servo={"up": 50, "down": 50})}},
        )
        with pytest.raises(ConfigError, match="equal"):
            load_config(path)
