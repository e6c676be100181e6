from __future__ import annotations

import math

import numpy as np
import pytest
import sympy as sp

import fluxion
from fluxion.demos import DEMOS, demo_names, run_demo
from fluxion.graph import PlotView, field, function, line, parametric, points
from fluxion.mesh import Mesh3D


def test_function_two_d_returns_plot_and_padded_view() -> None:
    view = function(lambda x: 2 * x).two_d(0, 5, samples=6)
    assert isinstance(view, PlotView)
    assert len(view.plot) == 6
    assert (view.bounds.x_min, view.bounds.x_max) == (0, 5)
    assert (view.bounds.y_min, view.bounds.y_max) == pytest.approx((-1.0, 11.0))


def test_plot_view_ndc_and_axes() -> None:
    view = function(lambda x: 2 * x).two_d(0, 5, samples=6)
    ndc = view.ndc()
    assert ndc.x[0] == pytest.approx(-1.0)
    assert ndc.x[-1] == pytest.approx(1.0)
    assert len(view.axes().major) > 0


def test_function_three_d_defaults_to_product_cos() -> None:
    mesh = function(lambda x: x).three_d(0, 1, 0, math.pi, resolution=3)
    # Node (i=2, j=2) is x=1, y=pi: height 1*cos(pi).
    assert mesh.positions[8].tolist() == pytest.approx([1.0, -1.0, math.pi], abs=1e-6)


def test_function_three_d_with_named_lift() -> None:
    mesh = function(sp.Symbol("x") ** 2).three_d(-1, 1, -1, 1, lift="radial", resolution=3)
    heights = mesh.positions[:, 1]
    assert heights[4] == pytest.approx(0.0)
    assert heights[0] == pytest.approx(2.0)


def test_function_three_d_line_embeds_in_plane() -> None:
    mesh = function(lambda x: x + 1).three_d_line(0, 2, plane="xz", offset=3.0, samples=3)
    assert mesh.is_line_strip
    # XZ plane: (t, offset, f(t)) stored Y-up as (t, f(t), offset).
    np.testing.assert_allclose(mesh.positions, [[0, 1, 3], [1, 2, 3], [2, 3, 3]])


def test_field_three_d() -> None:
    mesh = field(lambda x, y: x * y).three_d(-1, 1, -1, 1, resolution=4)
    assert mesh.triangle_count == 18


def test_line_graph_two_d_and_three_d() -> None:
    g = line(1.2, -0.5)
    view = g.two_d(-10, 10, samples=3)
    np.testing.assert_allclose(view.plot.y, [-12.5, -0.5, 11.5], rtol=1e-6)

    mesh = g.three_d(-1, 1, plane="xz", offset=1.0)
    assert mesh.is_line_strip
    assert len(mesh.positions) == 512


def test_points_graph() -> None:
    pts = [(-1.0, 0.0), (0.0, 1.0), (1.0, 0.0)]
    mesh = points(pts).three_d_line()
    assert len(mesh.positions) == 512
    np.testing.assert_allclose(mesh.positions[0], [-1, 0, 0])
    np.testing.assert_allclose(mesh.positions[-1], [1, 0, 0])

    view = points(pts).two_d()
    assert view.bounds.x_min == pytest.approx(-1.2)
    assert view.bounds.y_max == pytest.approx(1.1)


def test_points_graph_rejects_empty() -> None:
    with pytest.raises(ValueError, match="at least one"):
        points([])


def test_parametric_helix() -> None:
    mesh = parametric(math.cos, math.sin, lambda t: 0.5 * t, 0, 2 * math.pi, samples=5)
    assert mesh.positions.shape == (5, 3)
    # Y-up: height is the z component.
    np.testing.assert_allclose(mesh.positions[:, 1], 0.5 * np.linspace(0, 2 * math.pi, 5), rtol=1e-6)


def test_demo_catalog() -> None:
    assert demo_names() == (
        "sin2d",
        "sinradial3d",
        "sin3dline",
        "line2d",
        "line3d",
        "polyline3d",
        "sxcysurface",
        "helix",
    )
    assert set(DEMOS) == set(demo_names())


def test_run_demo_normalizes_names() -> None:
    view = run_demo("  SIN2D ")
    assert isinstance(view, PlotView)
    assert len(view.plot) == 1200

    helix = run_demo("helix")
    assert isinstance(helix, Mesh3D)
    assert helix.is_line_strip
    assert len(helix.positions) == 1200


def test_run_demo_unknown_name() -> None:
    with pytest.raises(KeyError, match="Unknown demo"):
        run_demo("torus")


def test_top_level_exports() -> None:
    assert fluxion.solve_quadratic(1, -3, 2) == (2.0, 1.0)
    assert fluxion.function is function
    assert "build_surface" in fluxion.__all__


def test_function_graph_with_log_over_negative_window() -> None:
    view = function(math.log).two_d(-1, 1, samples=5)
    assert np.isnan(view.plot.y[:3]).all()
    assert view.plot.y[4] == 0.0
    span = math.log(2.0)
    assert view.bounds.y_min == pytest.approx(-span - 0.1 * span)
    assert view.bounds.y_max == pytest.approx(0.1 * span)
