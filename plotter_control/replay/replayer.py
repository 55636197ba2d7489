"""Plot replayer -- parsed paths to drawing-surface calls.

Pipeline per path::

    parse -> (extent final) -> fit transform -> replay

Each stage completes before the next begins; the transform needs the
finished extent, so parsing and replaying are never fused.  Replay is
strictly sequential: commands are forwarded in stream order, one call per
command, with no reordering, batching or de-duplication.  Whether a
zero-length move has a physical effect is the surface's business.

All validation (malformed tokens, empty paths, degenerate extents,
non-finite coordinates) happens **before** the first surface call for a
shape, so a failing shape never leaves a half-drawn stroke behind.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Literal, Sequence

from plotter_control.path_ir.commands import (
    EmptyPathError,
    Extent,
    MoveTo,
    ParsedPath,
    PathError,
    PenDown,
    PenUp,
)
from plotter_control.path_ir.parser import parse
from plotter_control.surface.base import DrawingSurface
from plotter_control.transform.fit import Canvas, Transform, fit_transform
from plotter_control.utils.logging_config import pop_context, push_context

logger = logging.getLogger(__name__)

Rounding = Literal["truncate", "nearest"]
FitMode = Literal["per_path", "document"]
ErrorPolicy = Literal["halt", "skip"]


class ReplayError(PathError):
    """Raised when a transformed coordinate is not a finite number."""

    pass


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _round(value: float, rounding: Rounding | None) -> float:
    if rounding is None:
        return value
    if rounding == "truncate":
        return int(value)
    if rounding == "nearest":
        return int(round(value))
    raise ValueError(
        f"rounding must be None, 'truncate' or 'nearest', got {rounding!r}"
    )


def _device_moves(
    parsed: ParsedPath,
    transform: Transform,
    rounding: Rounding | None,
) -> list[tuple[float, float]]:
    """Transform every ``MoveTo`` up front so nothing fails mid-stroke."""
    moves: list[tuple[float, float]] = []
    for cmd in parsed.commands:
        if not isinstance(cmd, MoveTo):
            continue
        x, y = transform.apply(cmd.x, cmd.y)
        if not (math.isfinite(x) and math.isfinite(y)):
            raise ReplayError(
                f"Transformed point ({x}, {y}) from ({cmd.x}, {cmd.y}) "
                f"is not finite"
            )
        moves.append((_round(x, rounding), _round(y, rounding)))
    return moves


# ---------------------------------------------------------------------------
# Replay
# ---------------------------------------------------------------------------


def replay(
    parsed: ParsedPath,
    transform: Transform,
    surface: DrawingSurface,
    *,
    rounding: Rounding | None = None,
) -> int:
    """Forward a parsed path to ``surface`` through ``transform``.

    Parameters
    ----------
    parsed : ParsedPath
        Command stream to replay.
    transform : Transform
        Scale and offset applied to every ``MoveTo``.
    surface : DrawingSurface
        Receives ``pen_up`` / ``pen_down`` / ``goto`` calls in stream order.
    rounding : ``"truncate"`` | ``"nearest"`` | None
        Convert device coordinates to ``int`` before ``goto``.
        ``"truncate"`` matches the legacy driver.  ``None`` passes floats.

    Returns
    -------
    int
        Number of ``goto`` calls issued.

    Raises
    ------
    ReplayError
        If a transformed coordinate is not finite.  Raised before any
        surface call.
    """
    moves = iter(_device_moves(parsed, transform, rounding))
    count = 0
    for cmd in parsed.commands:
        if isinstance(cmd, PenUp):
            surface.pen_up()
        elif isinstance(cmd, PenDown):
            surface.pen_down()
        elif isinstance(cmd, MoveTo):
            x, y = next(moves)
            logger.debug("goto: (%s, %s)", x, y)
            surface.goto(x, y)
            count += 1
        else:
            logger.warning("Unsupported command: %s", type(cmd).__name__)
    return count


def plot_path(
    description: str,
    surface: DrawingSurface,
    *,
    fill_fraction: float = 0.5,
    center: bool = True,
    anchor_min: bool = False,
    truncate: bool = False,
    rounding: Rounding | None = None,
) -> ParsedPath:
    """Parse, auto-scale, centre and replay one path description.

    Returns
    -------
    ParsedPath
        The parsed path that was drawn.

    Raises
    ------
    MalformedPathError, EmptyPathError, DegenerateExtentError, ReplayError
        Before any call reaches ``surface``.
    """
    parsed = parse(description, truncate=truncate)
    if parsed.is_empty:
        raise EmptyPathError(f"Path has no points: {description!r}")
    canvas = Canvas.of(surface)
    transform = fit_transform(
        parsed.extent,
        canvas,
        fill_fraction,
        center=center,
        anchor_min=anchor_min,
    )
    replay(parsed, transform, surface, rounding=rounding)
    return parsed


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ShapeFailure:
    """One shape that could not be plotted."""

    index: int
    label: str
    error: PathError


@dataclass
class PlotReport:
    """Outcome of ``plot_document``."""

    plotted: list[int] = field(default_factory=list)
    failures: list[ShapeFailure] = field(default_factory=list)
    moves: int = 0

    @property
    def ok(self) -> bool:
        return not self.failures


def plot_document(
    descriptions: Sequence[str],
    surface: DrawingSurface,
    *,
    labels: Sequence[str] | None = None,
    fill_fraction: float = 0.5,
    fit: FitMode = "per_path",
    center: bool = True,
    anchor_min: bool = False,
    on_error: ErrorPolicy = "halt",
    truncate: bool = False,
    rounding: Rounding | None = None,
) -> PlotReport:
    """Plot several path descriptions onto one surface, in order.

    Parameters
    ----------
    descriptions : Sequence[str]
        One path description per shape, in drawing order.
    surface : DrawingSurface
        Shared target; shapes are replayed one after another.
    labels : Sequence[str] | None
        Shape identities used in log messages and failures
        (e.g. SVG element ids).  Defaults to ``"#<index>"``.
    fill_fraction : float
        Passed to the transform calculator.
    fit : ``"per_path"`` | ``"document"``
        ``"per_path"`` scales and centres every shape on its own (legacy
        behaviour).  ``"document"`` fits the union of all extents once and
        draws every shape with that single transform, keeping their
        relative placement.
    on_error : ``"halt"`` | ``"skip"``
        ``"halt"`` re-raises the first shape failure.  ``"skip"`` logs it,
        records it in the report and continues with the next shape.

    Returns
    -------
    PlotReport
        Indices plotted, failures, and total ``goto`` count.
    """
    if on_error not in ("halt", "skip"):
        raise ValueError(f"on_error must be 'halt' or 'skip', got {on_error!r}")
    if fit not in ("per_path", "document"):
        raise ValueError(f"fit must be 'per_path' or 'document', got {fit!r}")
    if labels is None:
        labels = [f"#{i}" for i in range(len(descriptions))]
    elif len(labels) != len(descriptions):
        raise ValueError(
            f"Got {len(labels)} labels for {len(descriptions)} descriptions"
        )

    report = PlotReport()

    def _fail(index: int, exc: PathError) -> None:
        if on_error == "halt":
            logger.error("Shape %s failed: %s", labels[index], exc)
            raise exc
        logger.error("Skipping shape %s: %s", labels[index], exc)
        report.failures.append(ShapeFailure(index, labels[index], exc))

    # -- Parse every shape before touching the surface ------------------
    parsed_shapes: list[tuple[int, ParsedPath]] = []
    for i, description in enumerate(descriptions):
        push_context(shape=labels[i])
        try:
            parsed = parse(description, truncate=truncate)
            if parsed.is_empty:
                raise EmptyPathError(f"Path has no points: {description!r}")
            parsed_shapes.append((i, parsed))
        except PathError as exc:
            _fail(i, exc)
        finally:
            pop_context(keys=["shape"])

    canvas = Canvas.of(surface)

    # -- Transforms -----------------------------------------------------
    planned: list[tuple[int, ParsedPath, Transform]] = []
    if fit == "document":
        union = Extent()
        for _, parsed in parsed_shapes:
            union = union.union(parsed.extent)
        if parsed_shapes:
            try:
                shared = fit_transform(
                    union, canvas, fill_fraction,
                    center=center, anchor_min=anchor_min,
                )
            except PathError as exc:
                for i, _ in parsed_shapes:
                    _fail(i, exc)
                parsed_shapes = []
            else:
                planned = [(i, p, shared) for i, p in parsed_shapes]
    else:
        for i, parsed in parsed_shapes:
            try:
                transform = fit_transform(
                    parsed.extent, canvas, fill_fraction,
                    center=center, anchor_min=anchor_min,
                )
            except PathError as exc:
                _fail(i, exc)
                continue
            planned.append((i, parsed, transform))

    # -- Replay, strictly in document order ------------------------------
    for i, parsed, transform in planned:
        push_context(shape=labels[i])
        try:
            report.moves += replay(parsed, transform, surface, rounding=rounding)
            report.plotted.append(i)
        except PathError as exc:
            _fail(i, exc)
        finally:
            pop_context(keys=["shape"])

    logger.info(
        "Plotted %d of %d shapes (%d moves, %d failed)",
        len(report.plotted),
        len(descriptions),
        report.moves,
        len(report.failures),
    )
    return report
