"""Tests for logging setup and contextual fields."""

from __future__ import annotations

import json
import logging
import logging.handlers
from pathlib import Path

import pytest

from plotter_control.utils.logging_config import (
    ContextFormatter,
    get_context,
    get_logger,
    pop_context,
    push_context,
    setup_logging,
)


def _record(msg: str = "Replaying", level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord("plotter_control.test", level, __file__, 1, msg, None, None)


@pytest.fixture(autouse=True)
def _clean_logging():
    pop_context()
    yield
    setup_logging(to_stderr=False, capture_warnings=False)
    logging.captureWarnings(False)
    pop_context()


class TestContext:
    def test_push_and_pop(self) -> None:
        push_context(app="plot_svg")
        push_context(shape="#1")
        assert get_context() == {"app": "plot_svg", "shape": "#1"}
        pop_context(keys=["shape"])
        assert get_context() == {"app": "plot_svg"}
        pop_context()
        assert get_context() == {}

    def test_get_context_is_a_copy(self) -> None:
        push_context(shape="a")
        get_context()["shape"] = "b"
        assert get_context() == {"shape": "a"}

    def test_pop_unknown_key(self) -> None:
        push_context(app="x")
        pop_context(keys=["shape"])
        assert get_context() == {"app": "x"}


class TestContextFormatter:
    def test_human_includes_context(self) -> None:
        push_context(shape="#1")
        line = ContextFormatter("human", use_color=False).format(_record())
        assert "| INFO     | shape=#1 | Replaying" in line
        assert line.split(" ")[0].endswith("Z")

    def test_human_without_context(self) -> None:
        line = ContextFormatter("human", use_color=False).format(_record())
        assert line.endswith("| INFO     | Replaying")

    def test_json(self) -> None:
        push_context(app="plot_svg", shape="square")
        payload = json.loads(ContextFormatter("json").format(_record(level=logging.WARNING)))
        assert payload["lvl"] == "WARNING"
        assert payload["msg"] == "Replaying"
        assert payload["app"] == "plot_svg"
        assert payload["shape"] == "square"
        assert payload["name"] == "plotter_control.test"


class TestSetupLogging:
    def test_idempotent(self) -> None:
        root = logging.getLogger()
        first = setup_logging(capture_warnings=False)
        second = setup_logging(capture_warnings=False)
        assert len(first) == len(second) == 1
        assert first[0] not in root.handlers
        assert second[0] in root.handlers

    def test_level(self) -> None:
        setup_logging("DEBUG", to_stderr=False, capture_warnings=False)
        assert logging.getLogger().level == logging.DEBUG

    def test_initial_context(self) -> None:
        setup_logging(to_stderr=False, capture_warnings=False, context={"app": "plot_svg"})
        assert get_context() == {"app": "plot_svg"}

    def test_json_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "plot.jsonl"
        handlers = setup_logging(
            log_file=str(log_file), json=True, to_stderr=False, capture_warnings=False,
        )
        get_logger("plotter_control.test").info("Wrote %s", "plot.txt")
        for handler in handlers:
            handler.flush()
        payload = json.loads(log_file.read_text().splitlines()[-1])
        assert payload["msg"] == "Wrote plot.txt"

    def test_rotating_file(self, tmp_path: Path) -> None:
        handlers = setup_logging(
            log_file=str(tmp_path / "plot.log"),
            to_stderr=False,
            capture_warnings=False,
            rotate={"mode": "size", "max_bytes": 1024, "backup_count": 2},
        )
        assert isinstance(handlers[0], logging.handlers.RotatingFileHandler)

    def test_unknown_rotation(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="rotation mode"):
            setup_logging(
                log_file=str(tmp_path / "plot.log"),
                to_stderr=False,
                rotate={"mode": "weekly"},
            )
