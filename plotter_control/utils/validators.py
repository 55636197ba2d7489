"""YAML schema validation for plot jobs.

A plot job bundles everything the command-line tool needs to draw one SVG
document, so a run can be repeated exactly:

    input: drawings/logo.svg
    profile: plotbert
    fill_fraction: 0.8
    fit: document
    on_error: skip
    rounding: truncate

Validation uses pydantic for fail-fast error detection with actionable
messages (offending keys, expected ranges).

Units:
    - Geometry: plotter device units (mm for the shipped profiles)
    - fill_fraction: share of the limiting canvas dimension, (0, 1]

Usage:
    from plotter_control.utils import validators
    job = validators.load_plot_job("job.yaml")
"""

from pathlib import Path
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class PlotJobV1(BaseModel):
    """Plot job definition (plot_job.v1.yaml schema)."""
    model_config = ConfigDict(extra="forbid")

    input: str = Field(..., description="SVG file to plot, or '-' for stdin")
    profile: str = Field("default", description="Plotter profile name")
    config: Optional[str] = Field(None, description="Profile file; None uses the shipped one")
    output: Optional[str] = Field(None, description="Command-log output file; None writes stdout")
    fill_fraction: float = Field(0.5, gt=0.0, le=1.0, description="Share of the canvas to fill")
    fit: Literal["per_path", "document"] = "per_path"
    center: bool = True
    anchor_min: bool = False
    on_error: Literal["halt", "skip"] = "halt"
    truncate: bool = Field(False, description="Truncate path coordinates to integers while parsing")
    rounding: Optional[Literal["truncate", "nearest"]] = Field(
        "truncate", description="Device coordinate rounding; None keeps floats"
    )

    @field_validator('input', 'profile')
    @classmethod
    def validate_non_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must be a non-empty string")
        return v

    @model_validator(mode='after')
    def validate_anchor(self) -> 'PlotJobV1':
        if self.anchor_min and not self.center and self.fit == "per_path":
            # Every shape would be pushed into the same corner.
            raise ValueError(
                "anchor_min without center stacks every shape at the canvas "
                "corner; use fit='document' or enable center"
            )
        return self


def load_plot_job(path: Union[str, Path]) -> PlotJobV1:
    """Load and validate a plot job from YAML.

    Relative ``input`` / ``config`` / ``output`` paths are resolved against
    the job file's directory.

    Parameters
    ----------
    path : Union[str, Path]
        Path to plot_job.v1.yaml file

    Returns
    -------
    PlotJobV1
        Validated job

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ValueError
        If validation fails (with actionable error message)
    """
    from . import fs

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Plot job not found: {path}")

    data = fs.load_yaml(path)
    if not isinstance(data, dict):
        raise ValueError(f"Plot job validation failed at {path}: expected a mapping")

    base = path.parent
    for key in ("input", "config", "output"):
        value = data.get(key)
        if isinstance(value, str) and value != "-" and not Path(value).is_absolute():
            data[key] = str(base / value)

    try:
        return PlotJobV1(**data)
    except Exception as e:
        raise ValueError(f"Plot job validation failed at {path}: {e}") from e
