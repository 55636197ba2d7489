"""
Plot replay.

Walks parsed command streams, applies the fitted transform, and drives a
drawing surface one command at a time.
"""

from plotter_control.replay.replayer import (
    PlotReport,
    ReplayError,
    ShapeFailure,
    plot_document,
    plot_path,
    replay,
)

__all__ = [
    "PlotReport",
    "ReplayError",
    "ShapeFailure",
    "plot_document",
    "plot_path",
    "replay",
]
