"""Command-log surface -- draw calls to a plain-text plotter program.

Each call becomes one line::

    PU              pen up
    PD              pen down
    GOTO x y        absolute move in device units

The program opens with a comment header naming the canvas and, once
``close()`` is called, ends with a footer that lifts the pen (and
optionally returns to a home position).  The text is what the command-line
tool writes out; a hardware driver can stream it line by line.

Integer coordinates are written as-is; floats use three decimals.
"""

from __future__ import annotations

import logging
from io import StringIO

from plotter_control.path_ir.commands import Point

logger = logging.getLogger(__name__)


class SurfaceError(Exception):
    """Raised by a strict surface when a move leaves the canvas."""

    pass


def _fmt(value: float) -> str:
    if isinstance(value, int):
        return str(value)
    return f"{value:.3f}"


class CommandLogSurface:
    """Drawing surface that writes a text program.

    Parameters
    ----------
    canvas_width, canvas_height : float
        Canvas size reported to the transform calculator.
    strict : bool
        Reject moves outside ``[0, width] x [0, height]`` with
        ``SurfaceError`` instead of logging a warning.
    """

    def __init__(
        self,
        canvas_width: float,
        canvas_height: float,
        *,
        strict: bool = False,
    ) -> None:
        self._width = canvas_width
        self._height = canvas_height
        self._strict = strict
        self._buf = StringIO()
        self._pen_is_up = True
        self._position: tuple[float, float] | None = None
        self._closed = False
        self._write_header()

    # ------------------------------------------------------------------
    # DrawingSurface
    # ------------------------------------------------------------------

    def pen_up(self) -> None:
        self._write("PU")
        self._pen_is_up = True

    def pen_down(self) -> None:
        self._write("PD")
        self._pen_is_up = False

    def goto(self, x: float, y: float) -> None:
        self._check_bounds(x, y)
        self._write(f"GOTO {_fmt(x)} {_fmt(y)}")
        self._position = (x, y)

    def width(self) -> float:
        return self._width

    def height(self) -> float:
        return self._height

    # ------------------------------------------------------------------
    # Program access
    # ------------------------------------------------------------------

    @property
    def pen_is_up(self) -> bool:
        return self._pen_is_up

    @property
    def position(self) -> tuple[float, float] | None:
        """Last commanded position, ``None`` before the first move."""
        return self._position

    def close(self, home: Point | None = None) -> str:
        """Write the footer and return the complete program.

        Parameters
        ----------
        home : Point | None
            Position to travel to (pen up) after the last shape.
        """
        if not self._closed:
            self._buf.write("\n; --- End of plot ---\n")
            if not self._pen_is_up:
                self.pen_up()
            if home is not None:
                self.goto(home.x, home.y)
            self._closed = True
        return self._buf.getvalue()

    def getvalue(self) -> str:
        return self._buf.getvalue()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _write_header(self) -> None:
        self._buf.write("; Generated by plotter_control\n")
        self._buf.write(
            f"; Canvas: {self._width:g} x {self._height:g}\n"
        )
        self._buf.write("\n")

    def _write(self, line: str) -> None:
        if self._closed:
            raise SurfaceError("Command log is closed")
        self._buf.write(line + "\n")

    def _check_bounds(self, x: float, y: float) -> None:
        if 0 <= x <= self._width and 0 <= y <= self._height:
            return
        msg = (
            f"GOTO ({_fmt(x)}, {_fmt(y)}) outside canvas "
            f"[0, {_fmt(self._width)}] x [0, {_fmt(self._height)}]"
        )
        if self._strict:
            raise SurfaceError(msg)
        logger.warning(msg)
