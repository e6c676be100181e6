from __future__ import annotations

import math

import numpy as np
import plotly.graph_objects as go
import pytest

from fluxion.graph import function, parametric
from fluxion.mesh import build_surface
from fluxion.plot2d import PlotStyle, polyline, sample_function
from fluxion.plotly_export import mesh_to_trace, plot_to_trace, to_figure


def test_plot_to_trace_mode_and_style() -> None:
    trace = plot_to_trace(sample_function(lambda x: x, 0, 1, 3))
    assert isinstance(trace, go.Scatter)
    assert trace.mode == "lines"
    assert trace.line.width == 2.0
    assert trace.line.color == "rgb(51,204,76)"
    np.testing.assert_allclose(trace.x, [0, 0.5, 1])

    both = plot_to_trace(polyline([(0, 0), (1, 1)], PlotStyle(points=True)))
    assert both.mode == "lines+markers"


def test_surface_trace_maps_back_to_z_up() -> None:
    mesh = build_surface(lambda x, y: 10 * x + y, 0, 1, 2, 3, 2)
    trace = mesh_to_trace(mesh)
    assert isinstance(trace, go.Mesh3d)
    np.testing.assert_allclose(trace.x, [0, 1, 0, 1])
    np.testing.assert_allclose(trace.y, [2, 2, 3, 3])
    np.testing.assert_allclose(trace.z, [2, 12, 3, 13])
    assert list(trace.i) == [0, 1]
    assert list(trace.j) == [2, 2]
    assert list(trace.k) == [1, 3]


def test_line_strip_becomes_scatter3d() -> None:
    mesh = parametric(math.cos, math.sin, lambda t: t, 0, 1, samples=4)
    trace = mesh_to_trace(mesh, name="helix")
    assert isinstance(trace, go.Scatter3d)
    assert trace.mode == "lines"
    assert trace.name == "helix"
    np.testing.assert_allclose(trace.z, np.linspace(0, 1, 4), rtol=1e-6)


def test_to_figure_collects_items_and_sets_ranges() -> None:
    view = function(lambda x: x).two_d(0, 10, samples=11)
    mesh = build_surface(lambda x, y: 0.0, 0, 1, 0, 1, 2)
    fig = to_figure(view, mesh, title="demo")

    assert len(fig.data) == 2
    assert tuple(fig.layout.xaxis.range) == (0, 10)
    assert tuple(fig.layout.yaxis.range) == pytest.approx((-1.0, 11.0))
    assert fig.layout.title.text == "demo"


def test_to_figure_rejects_unknown_items() -> None:
    with pytest.raises(TypeError, match="Cannot export"):
        to_figure("not a plot")  # type: ignore[arg-type]
