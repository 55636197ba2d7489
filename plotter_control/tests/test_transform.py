"""Tests for the transform calculator.

Validates uniform scale selection, centring, degenerate-extent fallback,
and value-object validation.
"""

from __future__ import annotations

import math

import pytest

from plotter_control.path_ir.commands import EmptyPathError, Extent, PathError, Point
from plotter_control.path_ir.parser import parse
from plotter_control.surface.recording import RecordingSurface
from plotter_control.transform.fit import (
    Canvas,
    DegenerateExtentError,
    Transform,
    compute_offset,
    compute_scale,
    fit_transform,
)


def _extent(*points: tuple[float, float]) -> Extent:
    ext = Extent()
    for x, y in points:
        ext.include(x, y)
    return ext


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def canvas() -> Canvas:
    return Canvas(width=100.0, height=100.0)


@pytest.fixture()
def tall() -> Extent:
    """10 wide, 20 high, anchored at the origin."""
    return _extent((0.0, 0.0), (10.0, 20.0))


# ---------------------------------------------------------------------------
# Value objects
# ---------------------------------------------------------------------------


class TestCanvas:
    def test_valid(self) -> None:
        c = Canvas(width=580.0, height=400.0)
        assert c.width == 580.0
        assert c.height == 400.0

    @pytest.mark.parametrize("w, h", [(0, 10), (10, 0), (-1, 10), (math.inf, 10), (10, math.nan)])
    def test_rejects_non_positive_or_non_finite(self, w: float, h: float) -> None:
        with pytest.raises(ValueError, match="Canvas"):
            Canvas(width=w, height=h)

    def test_of_surface_queries_once(self) -> None:
        surface = RecordingSurface(canvas_width=100.0, canvas_height=200.0)
        c = Canvas.of(surface)
        assert c == Canvas(100.0, 200.0)
        assert surface.width_queries == 1


class TestTransformValue:
    def test_apply(self) -> None:
        t = Transform(scale=2.0, offset=Point(1.0, -1.0))
        assert t.apply(3.0, 4.0) == (7.0, 7.0)

    def test_identity(self) -> None:
        assert Transform.identity().apply(5.0, -6.0) == (5.0, -6.0)

    @pytest.mark.parametrize("scale", [0.0, -1.0, math.inf, math.nan])
    def test_rejects_bad_scale(self, scale: float) -> None:
        with pytest.raises(ValueError, match="scale"):
            Transform(scale=scale)

    def test_rejects_non_finite_offset(self) -> None:
        with pytest.raises(ValueError, match="offset"):
            Transform(scale=1.0, offset=Point(math.nan, 0.0))


# ---------------------------------------------------------------------------
# compute_scale
# ---------------------------------------------------------------------------


class TestComputeScale:
    def test_smaller_axis_scale_wins(self, tall: Extent, canvas: Canvas) -> None:
        # min(100*0.5/10, 100*0.5/20) = min(5, 2.5)
        assert compute_scale(tall, canvas, 0.5) == pytest.approx(2.5)

    def test_wide_canvas_binds_on_height(self) -> None:
        ext = _extent((0.0, 0.0), (10.0, 10.0))
        c = Canvas(width=580.0, height=400.0)
        assert compute_scale(ext, c, 1.0) == pytest.approx(40.0)

    def test_full_fill(self, tall: Extent, canvas: Canvas) -> None:
        assert compute_scale(tall, canvas, 1.0) == pytest.approx(5.0)

    @pytest.mark.parametrize("fraction", [0.0, -0.5, 1.01, math.nan])
    def test_fill_fraction_range(
        self, tall: Extent, canvas: Canvas, fraction: float,
    ) -> None:
        with pytest.raises(ValueError, match="fill_fraction"):
            compute_scale(tall, canvas, fraction)

    def test_empty_extent(self, canvas: Canvas) -> None:
        with pytest.raises(EmptyPathError):
            compute_scale(Extent(), canvas, 0.5)

    def test_zero_width_uses_height(self, canvas: Canvas) -> None:
        ext = _extent((3.0, 0.0), (3.0, 10.0))
        assert compute_scale(ext, canvas, 0.5) == pytest.approx(5.0)

    def test_zero_height_uses_width(self, canvas: Canvas) -> None:
        ext = _extent((0.0, 7.0), (25.0, 7.0))
        assert compute_scale(ext, canvas, 0.5) == pytest.approx(2.0)

    def test_single_point_is_degenerate(self, canvas: Canvas) -> None:
        ext = parse("M 4,4 L 4,4").extent
        with pytest.raises(DegenerateExtentError):
            compute_scale(ext, canvas, 0.5)

    def test_degenerate_is_path_error(self) -> None:
        assert issubclass(DegenerateExtentError, PathError)

    def test_subnormal_extent_is_degenerate(self, canvas: Canvas) -> None:
        tiny = float("0." + "0" * 320 + "1")
        assert tiny > 0
        ext = _extent((0.0, 0.0), (tiny, tiny))
        with pytest.raises(DegenerateExtentError, match="too small"):
            compute_scale(ext, canvas, 0.5)

    def test_extent_wider_than_float_range(self, canvas: Canvas) -> None:
        ext = _extent((-1.7e308, 0.0), (1.7e308, 1.0))
        with pytest.raises(DegenerateExtentError, match="out of range"):
            compute_scale(ext, canvas, 0.5)


# ---------------------------------------------------------------------------
# compute_offset
# ---------------------------------------------------------------------------


class TestComputeOffset:
    def test_centering(self, tall: Extent, canvas: Canvas) -> None:
        offset = compute_offset(tall, canvas, 2.5)
        assert offset.x == pytest.approx(37.5)
        assert offset.y == pytest.approx(25.0)

    def test_negative_when_larger_than_canvas(self, tall: Extent, canvas: Canvas) -> None:
        offset = compute_offset(tall, canvas, 10.0)
        assert offset.x == pytest.approx(0.0)
        assert offset.y == pytest.approx(-50.0)

    def test_degenerate_axis_centres_line(self, canvas: Canvas) -> None:
        ext = _extent((0.0, 0.0), (10.0, 0.0))
        offset = compute_offset(ext, canvas, 5.0)
        assert offset == Point(25.0, 50.0)

    def test_empty_extent(self, canvas: Canvas) -> None:
        with pytest.raises(EmptyPathError):
            compute_offset(Extent(), canvas, 1.0)


# ---------------------------------------------------------------------------
# fit_transform
# ---------------------------------------------------------------------------


class TestFitTransform:
    def test_composes_scale_and_offset(self, tall: Extent, canvas: Canvas) -> None:
        t = fit_transform(tall, canvas, 0.5)
        assert t.scale == pytest.approx(2.5)
        assert t.offset.x == pytest.approx(37.5)
        assert t.offset.y == pytest.approx(25.0)

    def test_no_center(self, tall: Extent, canvas: Canvas) -> None:
        t = fit_transform(tall, canvas, 0.5, center=False)
        assert t.offset == Point(0.0, 0.0)

    def test_anchor_min_centres_off_origin_box(self, canvas: Canvas) -> None:
        ext = _extent((-5.0, -5.0), (5.0, 5.0))
        t = fit_transform(ext, canvas, 0.5, anchor_min=True)
        assert t.scale == pytest.approx(5.0)
        assert t.apply(-5.0, -5.0) == pytest.approx((25.0, 25.0))
        assert t.apply(5.0, 5.0) == pytest.approx((75.0, 75.0))

    def test_anchor_min_without_center_touches_corner(self, canvas: Canvas) -> None:
        ext = _extent((10.0, 20.0), (20.0, 40.0))
        t = fit_transform(ext, canvas, 1.0, center=False, anchor_min=True)
        assert t.apply(10.0, 20.0) == pytest.approx((0.0, 0.0))

    def test_result_always_finite(self, canvas: Canvas) -> None:
        ext = _extent((0.0, 0.0), (1e-9, 0.0))
        t = fit_transform(ext, canvas, 0.5)
        assert math.isfinite(t.scale)
        assert math.isfinite(t.offset.x)
        assert math.isfinite(t.offset.y)

    def test_anchor_min_offset_overflow(self, canvas: Canvas) -> None:
        # Zero height leaves the tiny width in charge of a huge scale
        ext = _extent((0.0, 1e308), (1e-10, 1e308))
        with pytest.raises(DegenerateExtentError, match="out of range"):
            fit_transform(ext, canvas, 0.5, anchor_min=True)
