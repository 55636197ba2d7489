"""
Drawing surfaces.

The protocol the plot replayer drives, plus an in-memory recorder and a
text command-log writer.
"""

from plotter_control.surface.base import DrawingSurface
from plotter_control.surface.command_log import CommandLogSurface, SurfaceError
from plotter_control.surface.recording import RecordingSurface

__all__ = ["CommandLogSurface", "DrawingSurface", "RecordingSurface", "SurfaceError"]
