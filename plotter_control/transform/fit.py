"""Fit a parsed path onto a canvas.

Derives a uniform scale and a centring offset from a finished ``Extent``
and the canvas size reported by the drawing surface.  Aspect ratio is
always preserved: the axis that runs out of room first decides the scale.

Degenerate extents:
    A path whose box has zero width (or zero height) cannot be scaled on
    that axis.  The zero axis is treated as non-constraining and the scale
    comes from the other axis alone.  When both axes are zero (a single
    point, possibly repeated) there is nothing to scale against and
    ``DegenerateExtentError`` is raised.  No division by zero, ``inf`` or
    ``nan`` ever leaves this module.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from plotter_control.path_ir.commands import EmptyPathError, Extent, PathError, Point

if TYPE_CHECKING:
    from plotter_control.surface.base import DrawingSurface

logger = logging.getLogger(__name__)


class DegenerateExtentError(PathError):
    """Raised when an extent has zero width **and** zero height, or no
    finite scale maps it onto the canvas."""

    pass


# ---------------------------------------------------------------------------
# Value objects
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Canvas:
    """Drawable area of the target surface, in device units.

    Parameters
    ----------
    width, height : float
        Canvas size.  Both must be finite and positive.
    """

    width: float
    height: float

    def __post_init__(self) -> None:
        for name, val in (("width", self.width), ("height", self.height)):
            if not math.isfinite(val) or val <= 0:
                raise ValueError(
                    f"Canvas {name} must be a positive finite number, got {val}"
                )

    @classmethod
    def of(cls, surface: DrawingSurface) -> Canvas:
        """Query ``surface`` once for its width and height."""
        return cls(width=float(surface.width()), height=float(surface.height()))


@dataclass(frozen=True, slots=True)
class Transform:
    """Uniform scale followed by a translation.

    Parameters
    ----------
    scale : float
        Multiplier applied to both axes.  Must be finite and positive.
    offset : Point
        Translation added after scaling.  Must be finite.
    """

    scale: float
    offset: Point = Point(0.0, 0.0)

    def __post_init__(self) -> None:
        if not math.isfinite(self.scale) or self.scale <= 0:
            raise ValueError(
                f"Transform scale must be a positive finite number, "
                f"got {self.scale}"
            )
        if not (math.isfinite(self.offset.x) and math.isfinite(self.offset.y)):
            raise ValueError(
                f"Transform offset must be finite, got "
                f"({self.offset.x}, {self.offset.y})"
            )

    @classmethod
    def identity(cls) -> Transform:
        return cls(scale=1.0, offset=Point(0.0, 0.0))

    def apply(self, x: float, y: float) -> tuple[float, float]:
        """Map a path-local point to device coordinates."""
        return (
            x * self.scale + self.offset.x,
            y * self.scale + self.offset.y,
        )


# ---------------------------------------------------------------------------
# Calculator
# ---------------------------------------------------------------------------


def compute_scale(extent: Extent, canvas: Canvas, fill_fraction: float) -> float:
    """Uniform scale that fits ``extent`` into a fraction of ``canvas``.

    Parameters
    ----------
    extent : Extent
        Finished bounding box of the path.
    canvas : Canvas
        Target drawing area.
    fill_fraction : float
        Share of the limiting canvas dimension the path should occupy,
        in ``(0, 1]``.

    Returns
    -------
    float
        ``min(canvas.width * f / width, canvas.height * f / height)``,
        ignoring an axis whose extent is zero.

    Raises
    ------
    ValueError
        If ``fill_fraction`` is outside ``(0, 1]``.
    EmptyPathError
        If the extent never saw a point.
    DegenerateExtentError
        If both width and height are zero, or the size or scale is not
        a finite positive number.
    """
    if not (0.0 < fill_fraction <= 1.0):
        raise ValueError(
            f"fill_fraction must be in (0, 1], got {fill_fraction}"
        )
    if extent.is_empty:
        raise EmptyPathError("Cannot scale a path with no points")

    size_x = extent.width()
    size_y = extent.height()
    if not (math.isfinite(size_x) and math.isfinite(size_y)):
        raise DegenerateExtentError(
            f"Extent size ({size_x}, {size_y}) is out of range"
        )

    candidates: list[float] = []
    if size_x > 0:
        candidates.append(canvas.width * fill_fraction / size_x)
    if size_y > 0:
        candidates.append(canvas.height * fill_fraction / size_y)

    if not candidates:
        raise DegenerateExtentError(
            f"Extent has zero width and height at "
            f"({extent.min.x}, {extent.min.y}); cannot derive a scale"
        )
    if len(candidates) == 1:
        logger.debug(
            "Zero-size axis (width=%g, height=%g) ignored for scaling",
            size_x,
            size_y,
        )

    scale = min(candidates)
    if not math.isfinite(scale) or scale <= 0:
        raise DegenerateExtentError(
            f"Extent ({size_x}, {size_y}) is too small to scale onto "
            f"{canvas.width} x {canvas.height}"
        )
    logger.debug("scale: %g", scale)
    return scale


def compute_offset(extent: Extent, canvas: Canvas, scale: float) -> Point:
    """Offset that centres a box of the extent's size on the canvas.

    Returns ``((canvas.width - width * scale) / 2,
    (canvas.height - height * scale) / 2)``.  The result is not clamped and
    is negative when the scaled path is larger than the canvas.

    Raises
    ------
    EmptyPathError
        If the extent never saw a point.
    """
    offset = Point(
        (canvas.width - extent.width() * scale) / 2,
        (canvas.height - extent.height() * scale) / 2,
    )
    logger.debug("offset: (%g, %g)", offset.x, offset.y)
    return offset


def fit_transform(
    extent: Extent,
    canvas: Canvas,
    fill_fraction: float,
    *,
    center: bool = True,
    anchor_min: bool = False,
) -> Transform:
    """Compose ``compute_scale`` and ``compute_offset`` into a ``Transform``.

    Parameters
    ----------
    extent, canvas, fill_fraction
        As for ``compute_scale``.
    center : bool
        Apply the centring offset.  ``False`` leaves the origin in place.
    anchor_min : bool
        Also shift by ``-min * scale`` so that boxes not starting at the
        origin end up centred (or, with ``center=False``, flush with the
        canvas corner).
    """
    scale = compute_scale(extent, canvas, fill_fraction)
    ox, oy = 0.0, 0.0
    if center:
        centred = compute_offset(extent, canvas, scale)
        ox, oy = centred.x, centred.y
    if anchor_min:
        ox -= extent.min.x * scale
        oy -= extent.min.y * scale
        if not (math.isfinite(ox) and math.isfinite(oy)):
            raise DegenerateExtentError(
                f"Offset for extent anchored at ({extent.min.x}, "
                f"{extent.min.y}) is out of range"
            )
    return Transform(scale=scale, offset=Point(ox, oy))
