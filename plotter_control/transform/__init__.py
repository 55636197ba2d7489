"""
Transform calculation.

Derives a uniform, aspect-preserving scale and a centring offset that fit
a parsed path onto the canvas of a drawing surface.
"""

from plotter_control.transform.fit import (
    Canvas,
    DegenerateExtentError,
    Transform,
    compute_offset,
    compute_scale,
    fit_transform,
)

__all__ = [
    "Canvas",
    "DegenerateExtentError",
    "Transform",
    "compute_offset",
    "compute_scale",
    "fit_transform",
]
