"""
Path intermediate representation.

Parses path-description strings into an ordered stream of pen-state and
absolute move commands, together with the bounding box of every point.
"""

from plotter_control.path_ir.commands import (
    EmptyPathError,
    Extent,
    MalformedPathError,
    MoveTo,
    ParsedPath,
    PathCommand,
    PathError,
    PenDown,
    PenUp,
    Point,
)
from plotter_control.path_ir.parser import parse

__all__ = [
    "EmptyPathError",
    "Extent",
    "MalformedPathError",
    "MoveTo",
    "ParsedPath",
    "PathCommand",
    "PathError",
    "PenDown",
    "PenUp",
    "Point",
    "parse",
]
