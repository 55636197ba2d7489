"""Drawing surface protocol.

The plot replayer talks to the physical plotter (or anything pretending to
be one) only through this capability set.  Motor kinematics, servo
control, retries and cancellation all live behind it.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class DrawingSurface(Protocol):
    """Sink for pen-state and absolute move commands.

    ``pen_up`` / ``pen_down`` are idempotent.  ``goto`` moves to an absolute
    device position.  ``width`` / ``height`` report the canvas size and are
    assumed stable for the duration of a plot.
    """

    def pen_up(self) -> None: ...

    def pen_down(self) -> None: ...

    def goto(self, x: float, y: float) -> None: ...

    def width(self) -> float: ...

    def height(self) -> float: ...
