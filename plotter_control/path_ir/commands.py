"""Path IR commands -- the vocabulary between path text and the plotter.

A parsed path is a flat sequence of three command kinds:

``PenUp`` / ``PenDown``
    Pen-state changes, forwarded verbatim to the drawing surface.
``MoveTo``
    An **absolute** point in path-local coordinates.  Relative input is
    resolved by the parser, so the stream never carries relative moves.

Alongside the commands the parser accumulates an ``Extent`` (running
bounding box).  Both are bundled into a ``ParsedPath``, which is created
once per description string, transformed once, replayed once.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator, Union

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class PathError(Exception):
    """Base class for failures attributable to a single path."""

    pass


class MalformedPathError(PathError):
    """Raised when a path token is unknown or not allowed where it appears.

    Parameters
    ----------
    token : str
        The offending token, verbatim.
    reason : str
        Why the token was rejected at its position.
    """

    def __init__(self, token: str, reason: str = "unrecognized token") -> None:
        self.token = token
        self.reason = reason
        super().__init__(f"Invalid path token {token!r}: {reason}")


class EmptyPathError(PathError):
    """Raised when a path yields no points and cannot be auto-scaled."""

    pass


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PenUp:
    """Lift the pen; subsequent moves travel without drawing."""

    pass


@dataclass(frozen=True, slots=True)
class PenDown:
    """Lower the pen; subsequent moves draw."""

    pass


@dataclass(frozen=True, slots=True)
class MoveTo:
    """Move to an absolute point in path-local coordinates.

    Parameters
    ----------
    x, y : float
        Resolved absolute coordinates.  Must be finite.
    """

    x: float
    y: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.x) and math.isfinite(self.y)):
            raise ValueError(
                f"MoveTo coordinates must be finite, got ({self.x}, {self.y})"
            )


PathCommand = Union[PenUp, PenDown, MoveTo]
"""One entry of a parsed command stream."""


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Point:
    """Immutable 2D point."""

    x: float
    y: float


@dataclass
class Extent:
    """Running axis-aligned bounding box.

    ``min`` and ``max`` stay ``None`` until the first point is included.
    Updates are monotonic: ``min`` only decreases, ``max`` only increases.
    """

    min: Point | None = None
    max: Point | None = None

    @property
    def is_empty(self) -> bool:
        return self.min is None or self.max is None

    def include(self, x: float, y: float) -> None:
        """Grow the box so that it contains ``(x, y)``."""
        if self.min is None or self.max is None:
            self.min = Point(x, y)
            self.max = Point(x, y)
            return
        if x < self.min.x or y < self.min.y:
            self.min = Point(min(x, self.min.x), min(y, self.min.y))
        if x > self.max.x or y > self.max.y:
            self.max = Point(max(x, self.max.x), max(y, self.max.y))

    def width(self) -> float:
        """Horizontal size of the box.

        Raises
        ------
        EmptyPathError
            If no point was ever included.
        """
        lo, hi = self._bounds()
        return hi.x - lo.x

    def height(self) -> float:
        """Vertical size of the box.

        Raises
        ------
        EmptyPathError
            If no point was ever included.
        """
        lo, hi = self._bounds()
        return hi.y - lo.y

    def union(self, other: Extent) -> Extent:
        """Return a new extent covering both ``self`` and ``other``."""
        merged = Extent()
        for ext in (self, other):
            if not ext.is_empty:
                merged.include(ext.min.x, ext.min.y)
                merged.include(ext.max.x, ext.max.y)
        return merged

    def _bounds(self) -> tuple[Point, Point]:
        if self.min is None or self.max is None:
            raise EmptyPathError("Extent is empty: the path has no points")
        return self.min, self.max


# ---------------------------------------------------------------------------
# Parse result
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ParsedPath:
    """Command stream plus the extent accumulated while parsing it.

    Parameters
    ----------
    commands : tuple[PathCommand, ...]
        Ordered commands, always terminated by ``PenUp``.
    extent : Extent
        Bounding box of every ``MoveTo`` in ``commands``.  Treated as
        read-only once parsing has finished.
    """

    commands: tuple[PathCommand, ...]
    extent: Extent = field(default_factory=Extent)

    def __iter__(self) -> Iterator[PathCommand]:
        return iter(self.commands)

    def __len__(self) -> int:
        return len(self.commands)

    @property
    def is_empty(self) -> bool:
        """``True`` when the path contains no ``MoveTo`` at all."""
        return self.extent.is_empty

    def points(self) -> list[Point]:
        """Resolved absolute points, in stream order."""
        return [
            Point(cmd.x, cmd.y)
            for cmd in self.commands
            if isinstance(cmd, MoveTo)
        ]
