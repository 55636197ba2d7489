"""
Plotter Control Package.

Path-to-plot pipeline for a two-motor cable plotter: parses SVG path data
into pen-up / pen-down / move commands, fits them onto the plotter canvas,
and replays them against a drawing surface.

Subpackages:
    path_ir: Path commands, extent tracking and the path parser
    transform: Uniform scale and centring offset calculation
    surface: Drawing surface protocol and reference surfaces
    replay: Plot replay for single paths and whole documents
    document: SVG path extraction
    configs: Plotter profile loading and validation
    utils: YAML / filesystem helpers, logging, job validation
"""

__all__ = ["path_ir", "transform", "surface", "replay", "document", "configs", "utils"]
