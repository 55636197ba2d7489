"""In-memory drawing surface.

Records every call in order so that a plot can be inspected after the
fact.  Used by the test suite.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

SurfaceCall = tuple[Any, ...]
"""``("pen_up",)``, ``("pen_down",)`` or ``("goto", x, y)``."""


@dataclass
class RecordingSurface:
    """Drawing surface that only remembers what it was told.

    Parameters
    ----------
    canvas_width, canvas_height : float
        Values reported by ``width()`` / ``height()``.
    width_queries : int
        Number of ``width()`` calls, to check that a fit reads the canvas
        once.
    """

    canvas_width: float = 100.0
    canvas_height: float = 200.0
    calls: list[SurfaceCall] = field(default_factory=list)
    width_queries: int = 0

    def pen_up(self) -> None:
        self.calls.append(("pen_up",))

    def pen_down(self) -> None:
        self.calls.append(("pen_down",))

    def goto(self, x: float, y: float) -> None:
        self.calls.append(("goto", x, y))

    def width(self) -> float:
        self.width_queries += 1
        return self.canvas_width

    def height(self) -> float:
        return self.canvas_height

    # -- Inspection helpers -------------------------------------------------

    @property
    def moves(self) -> list[tuple[float, float]]:
        """Targets of every ``goto`` call, in order."""
        return [(c[1], c[2]) for c in self.calls if c[0] == "goto"]

    def clear(self) -> None:
        self.calls.clear()
        self.width_queries = 0
