"""Path description parser.

Turns a whitespace-separated path description into a ``ParsedPath``.
The accepted grammar is a strict subset of SVG path data::

    M | m        start a subpath (absolute | relative), pen up
    L | l        continue the subpath (absolute | relative), pen down
    Z | z        close the subpath back to its first point
    <x>,<y>      one coordinate pair, e.g. ``-12.5,40``

Only straight segments are supported; there is no implicit command
repetition beyond "every pair after a command letter uses that mode".

Numbers keep their fractional part unless ``truncate=True``, which
reproduces the legacy integer convention (truncate toward zero).

The parser holds no module-level state: the running mode, current point,
subpath start and extent all live in a per-call ``_ParseState``, so
independent paths may be parsed from several threads at once.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field

from plotter_control.path_ir.commands import (
    Extent,
    MalformedPathError,
    MoveTo,
    ParsedPath,
    PathCommand,
    PenDown,
    PenUp,
    Point,
)

logger = logging.getLogger(__name__)

_NUMBER = r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)"
_PAIR_RE = re.compile(rf"^({_NUMBER}),({_NUMBER})$")

# command letter -> (relative mode?, pen command)
_COMMANDS: dict[str, tuple[bool, type[PenUp] | type[PenDown]]] = {
    "M": (False, PenUp),
    "m": (True, PenUp),
    "L": (False, PenDown),
    "l": (True, PenDown),
}
_CLOSE = frozenset({"Z", "z"})
_SUBPATH_START = frozenset({"M", "m"})


@dataclass
class _ParseState:
    relative: bool | None = None
    current: Point = Point(0.0, 0.0)
    subpath_start: Point | None = None
    extent: Extent = field(default_factory=Extent)
    commands: list[PathCommand] = field(default_factory=list)


def _to_number(token: str, text: str, truncate: bool) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise MalformedPathError(token, "coordinate out of range")
    if truncate:
        return float(int(value))
    return value


def parse(description: str, *, truncate: bool = False) -> ParsedPath:
    """Parse a path description into commands and an extent.

    Parameters
    ----------
    description : str
        Path data, e.g. ``"M 0,0 L 10,0 l 0,10 z"``.
    truncate : bool
        Truncate every coordinate toward zero before resolving it.

    Returns
    -------
    ParsedPath
        Commands ending with ``PenUp`` plus the bounding box of all points.

    Raises
    ------
    MalformedPathError
        On the first token that is not a command letter or coordinate
        pair, when the description does not open with ``M``/``m``, when
        ``Z``/``z`` appears before the current subpath has a point, or when
        a coordinate does not fit in a float.
    """
    tokens = description.split()
    state = _ParseState()

    for token in tokens:
        if state.relative is None and token not in _SUBPATH_START:
            raise MalformedPathError(
                token, "path data must start with 'M' or 'm'"
            )

        if token in _COMMANDS:
            relative, pen = _COMMANDS[token]
            state.relative = relative
            state.commands.append(pen())
            if token in _SUBPATH_START:
                state.subpath_start = None
            continue

        if token in _CLOSE:
            if state.subpath_start is None:
                raise MalformedPathError(
                    token, "close command before any point in the subpath"
                )
            start = state.subpath_start
            state.commands.append(MoveTo(start.x, start.y))
            state.current = start
            continue

        match = _PAIR_RE.match(token)
        if match is None:
            raise MalformedPathError(token)

        x = _to_number(token, match.group(1), truncate)
        y = _to_number(token, match.group(2), truncate)
        if state.relative:
            x += state.current.x
            y += state.current.y
            if not (math.isfinite(x) and math.isfinite(y)):
                raise MalformedPathError(token, "coordinate out of range")

        point = Point(x, y)
        state.commands.append(MoveTo(x, y))
        state.extent.include(x, y)
        state.current = point
        if state.subpath_start is None:
            state.subpath_start = point

    state.commands.append(PenUp())

    if state.extent.is_empty:
        logger.debug("Parsed %d tokens, no points", len(tokens))
    else:
        logger.debug(
            "Parsed %d tokens into %d commands, extent min=(%g, %g) max=(%g, %g)",
            len(tokens),
            len(state.commands),
            state.extent.min.x,
            state.extent.min.y,
            state.extent.max.x,
            state.extent.max.y,
        )

    return ParsedPath(commands=tuple(state.commands), extent=state.extent)
