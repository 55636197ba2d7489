#!/usr/bin/env python3
"""
Plot SVG Script.

Scale every ``<path>`` of an SVG document onto the plotter canvas and
write the resulting pen-up / pen-down / move program.

Usage:
    python -m plotter_control.scripts.plot_svg drawing.svg
    python -m plotter_control.scripts.plot_svg - < drawing.svg
    python -m plotter_control.scripts.plot_svg drawing.svg --profile plotbert --fill 0.8
    python -m plotter_control.scripts.plot_svg drawing.svg --fit document --on-error skip -o plot.txt
    python -m plotter_control.scripts.plot_svg --job job.yaml

Exit status is 0 when the document was plotted (skipped shapes are
reported but do not fail the run) and 1 on any halting error.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Sequence

from plotter_control.configs.loader import ConfigError, list_profiles, load_config
from plotter_control.document.svg import SvgDocumentError, extract_path_elements
from plotter_control.path_ir.commands import PathError
from plotter_control.replay.replayer import PlotReport, plot_document
from plotter_control.surface.command_log import CommandLogSurface, SurfaceError
from plotter_control.utils import fs
from plotter_control.utils.logging_config import setup_logging
from plotter_control.utils.validators import PlotJobV1, load_plot_job

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Plot the paths of an SVG document",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "input",
        nargs="?",
        help="SVG file to plot ('-' reads stdin)",
    )
    parser.add_argument(
        "--job",
        "-j",
        type=str,
        help="Plot job YAML; command-line flags override its values",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        help="Plotter profile file (default: shipped plotter.yaml)",
    )
    parser.add_argument("--profile", "-p", type=str, help="Plotter profile name")
    parser.add_argument(
        "--list-profiles",
        action="store_true",
        help="List available profiles and exit",
    )
    parser.add_argument(
        "--fill",
        type=float,
        dest="fill_fraction",
        help="Share of the canvas each fit should occupy, in (0, 1]",
    )
    parser.add_argument(
        "--fit",
        choices=["per_path", "document"],
        help="Scale each path on its own or the document as a whole",
    )
    parser.add_argument(
        "--on-error",
        choices=["halt", "skip"],
        help="What to do with a shape that cannot be plotted",
    )
    parser.add_argument(
        "--no-center",
        dest="center",
        action="store_false",
        default=None,
        help="Do not centre the scaled path on the canvas",
    )
    parser.add_argument(
        "--anchor-min",
        action="store_true",
        default=None,
        help="Shift paths so their bounding box, not the origin, is centred",
    )
    parser.add_argument(
        "--truncate",
        action="store_true",
        default=None,
        help="Truncate path coordinates to integers while parsing",
    )
    parser.add_argument(
        "--rounding",
        choices=["truncate", "nearest", "none"],
        help="Device coordinate rounding (default: truncate)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on moves outside the canvas instead of warning",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        help="Write the command program here instead of stdout",
    )
    parser.add_argument(
        "--report",
        type=str,
        help="Write a YAML summary of plotted and failed shapes",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    parser.add_argument("--log-file", type=str, help="Also log to this file")
    return parser


def _resolve_job(args: argparse.Namespace) -> PlotJobV1:
    """Merge job file values with explicit command-line overrides."""
    values: dict[str, Any] = {}
    if args.job:
        values = load_plot_job(args.job).model_dump()

    overrides = {
        "input": args.input,
        "config": args.config,
        "profile": args.profile,
        "output": args.output,
        "fill_fraction": args.fill_fraction,
        "fit": args.fit,
        "on_error": args.on_error,
        "center": args.center,
        "anchor_min": args.anchor_min,
        "truncate": args.truncate,
    }
    values.update({k: v for k, v in overrides.items() if v is not None})
    if args.rounding is not None:
        values["rounding"] = None if args.rounding == "none" else args.rounding

    if "input" not in values:
        raise ValueError("No input given: pass an SVG file, '-' or --job")
    return PlotJobV1(**values)


def _report_dict(report: PlotReport, labels: Sequence[str]) -> dict[str, Any]:
    return {
        "plotted": [labels[i] for i in report.plotted],
        "moves": report.moves,
        "failures": [
            {"shape": f.label, "error": type(f.error).__name__, "message": str(f.error)}
            for f in report.failures
        ],
    }


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    setup_logging(
        log_level=args.log_level,
        log_file=args.log_file,
        context={"app": "plot_svg"},
    )

    if args.list_profiles:
        try:
            for name in list_profiles(args.config):
                print(name)
        except (ConfigError, FileNotFoundError) as exc:
            logger.error("%s", exc)
            return 1
        return 0

    try:
        job = _resolve_job(args)
    except (ValueError, FileNotFoundError) as exc:
        logger.error("Invalid plot job: %s", exc)
        return 1

    try:
        config = load_config(job.config, job.profile)
    except (ConfigError, FileNotFoundError) as exc:
        logger.error("Configuration error: %s", exc)
        return 1

    source = sys.stdin.buffer if job.input == "-" else job.input
    try:
        elements = extract_path_elements(source)
    except (SvgDocumentError, FileNotFoundError) as exc:
        logger.error("Cannot read %s: %s", job.input, exc)
        return 1

    if not elements:
        logger.warning("No paths found in %s", job.input)

    labels = [el.label for el in elements]
    surface = CommandLogSurface(config.width, config.height, strict=args.strict)

    try:
        report = plot_document(
            [el.d for el in elements],
            surface,
            labels=labels,
            fill_fraction=job.fill_fraction,
            fit=job.fit,
            center=job.center,
            anchor_min=job.anchor_min,
            on_error=job.on_error,
            truncate=job.truncate,
            rounding=job.rounding,
        )
        program = surface.close(home=config.calibration_point)
    except (PathError, SurfaceError) as exc:
        logger.error("Plot aborted: %s", exc)
        return 1

    if job.output:
        fs.atomic_write_text(program, job.output)
        logger.info("Wrote %s", job.output)
    else:
        sys.stdout.write(program)

    if args.report:
        fs.atomic_yaml_dump(_report_dict(report, labels), args.report)

    if report.failures:
        logger.warning("%d shape(s) skipped", len(report.failures))
    return 0


if __name__ == "__main__":
    sys.exit(main())
