from __future__ import annotations

import math

import numpy as np
import pytest

from fluxion.plot2d import (
    FUNCTION_STYLE,
    Plot2D,
    PlotStyle,
    ViewBounds,
    estimate_y_range,
    make_style,
    polyline,
    sample_function,
    to_ndc,
)


def test_sample_function_endpoints_and_order() -> None:
    plot = sample_function(lambda x: x * x, -2, 2, 5)
    assert plot.points.shape == (5, 2)
    assert plot.points.dtype == np.float32
    np.testing.assert_allclose(plot.x, [-2, -1, 0, 1, 2])
    np.testing.assert_allclose(plot.y, [4, 1, 0, 1, 4])
    assert np.all(np.diff(plot.x) > 0)


def test_sample_function_default_style() -> None:
    plot = sample_function(math.sin, 0, 1, 8)
    assert plot.style == FUNCTION_STYLE
    assert plot.style.lines and not plot.style.points
    assert plot.style.width == 2.0
    assert plot.style.color == (0.2, 0.8, 0.3)


def test_sample_function_clamps_sample_count() -> None:
    clamped = sample_function(math.cos, 0, 1, 1)
    reference = sample_function(math.cos, 0, 1, 2)
    assert len(clamped) == 2
    np.testing.assert_array_equal(clamped.points, reference.points)


def test_sample_function_default_count() -> None:
    assert len(sample_function(math.cos, 0, 1)) == 512


def test_sample_function_rejects_non_integer_samples() -> None:
    with pytest.raises(TypeError, match="samples must be an integer"):
        sample_function(math.cos, 0, 1, 2.5)


def test_polyline_default_style_is_white() -> None:
    plot = polyline([(0, 0), (1, 2)])
    assert plot.style == PlotStyle()
    assert plot.style.color == (1.0, 1.0, 1.0)
    np.testing.assert_allclose(plot.points, [[0, 0], [1, 2]])


def test_plot_points_are_read_only() -> None:
    plot = polyline([(0, 0), (1, 2)])
    with pytest.raises(ValueError):
        plot.points[0, 0] = 1.0


def test_style_validation_and_hex_colors() -> None:
    assert PlotStyle(color="#33cc4d").color == pytest.approx((0.2, 0.8, 0.302), abs=1e-3)
    assert PlotStyle(color=None).color is None
    with pytest.raises(ValueError, match="positive"):
        PlotStyle(width=0)
    with pytest.raises(ValueError, match=r"\[0, 1\]"):
        PlotStyle(color=(0, 0, 2))
    with pytest.raises(ValueError, match="three components"):
        PlotStyle(color=(0, 0))
    with pytest.raises(ValueError, match="Invalid hex color"):
        PlotStyle(color="#zzzzzz")


def test_make_style_resolves_width_alias() -> None:
    assert make_style(width=3).width == 3.0
    assert make_style(thickness=4).width == 4.0
    assert make_style(thickness=5, width=5).width == 5.0
    assert make_style().width == 2.0
    with pytest.raises(ValueError, match="both thickness= and width="):
        make_style(thickness=1, width=2)


def test_estimate_y_range_pads_by_ten_percent() -> None:
    lo, hi = estimate_y_range(lambda x: x, 0, 10, 11)
    assert (lo, hi) == pytest.approx((-1.0, 11.0))


def test_estimate_y_range_flat_function() -> None:
    assert estimate_y_range(lambda x: 0.0, -1, 1, 10) == pytest.approx((-1.0, 1.0))
    # pad = max(1, 0.1*|50| + 1) = 6
    assert estimate_y_range(lambda x: 50.0, -1, 1, 10) == pytest.approx((44.0, 56.0))


def test_estimate_y_range_skips_non_finite() -> None:
    lo, hi = estimate_y_range(lambda x: 1 / x, -1, 1, 3)
    assert (lo, hi) == pytest.approx((-1.2, 1.2))


def test_estimate_y_range_all_non_finite_falls_back() -> None:
    lo, hi = estimate_y_range(lambda x: math.nan, 0, 1, 5)
    assert (lo, hi) == pytest.approx((-1.2, 1.2))


def test_to_ndc_maps_window_corners() -> None:
    bounds = ViewBounds(0, 10, -5, 5)
    out = to_ndc([[0, -5], [10, 5], [5, 0]], bounds)
    np.testing.assert_allclose(out, [[-1, -1], [1, 1], [0, 0]])
    assert out.dtype == np.float32


def test_plot_to_ndc_keeps_style() -> None:
    plot = sample_function(lambda x: x, 0, 4, 5)
    ndc = plot.to_ndc(0, 4, 0, 4)
    assert ndc.style is plot.style
    np.testing.assert_allclose(ndc.x, [-1, -0.5, 0, 0.5, 1])
    np.testing.assert_allclose(ndc.y, [-1, -0.5, 0, 0.5, 1])


def test_to_ndc_zero_width_window_does_not_raise() -> None:
    out = to_ndc([[1, 1]], ViewBounds(1, 1, 0, 2))
    assert not np.isfinite(out[0, 0])
    assert out[0, 1] == 0.0


def test_plot2d_reshapes_flat_input() -> None:
    assert Plot2D([0, 1, 2, 3]).points.shape == (2, 2)


def test_estimate_y_range_over_partial_domain() -> None:
    # sqrt is undefined for x < 0; the finite samples 0..2 remain.
    lo, hi = estimate_y_range(math.sqrt, -4, 4, 9)
    assert (lo, hi) == pytest.approx((-0.2, 2.2))


def test_sample_function_marks_undefined_points_nan() -> None:
    plot = sample_function(lambda x: 1 / x, -1, 1, 3)
    assert plot.y[0] == -1.0
    assert math.isnan(plot.y[1])
    assert plot.y[2] == 1.0


def test_polyline_rejects_points_that_are_not_pairs() -> None:
    with pytest.raises(ValueError, match=r"points must have shape \(n, 2\)"):
        polyline([(0, 1, 2), (3, 4, 5)])
    with pytest.raises(ValueError, match="got shape"):
        Plot2D([0, 1, 2])
    with pytest.raises(ValueError, match="got shape"):
        to_ndc([[0, 1, 2]], ViewBounds(0, 1, 0, 1))
