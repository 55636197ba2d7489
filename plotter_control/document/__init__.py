"""
Document loading.

Pulls path descriptions out of SVG documents for the plot pipeline.
"""

from plotter_control.document.svg import (
    PathElement,
    SvgDocumentError,
    extract_path_descriptions,
    extract_path_elements,
)

__all__ = [
    "PathElement",
    "SvgDocumentError",
    "extract_path_descriptions",
    "extract_path_elements",
]
