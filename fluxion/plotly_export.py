"""Convert plots and meshes into Plotly traces and figures.

Meshes are stored Y-up; Plotly's 3-D scenes are Z-up, so positions
``(px, py, pz)`` are drawn at ``x=px, y=pz, z=py``, which recovers the
original ``(x, y, z)`` of the sampled function.
"""

from __future__ import annotations

from typing import Any, Optional, Union

import numpy as np
import plotly.graph_objects as go

from .graph import PlotView
from .mesh import Mesh3D
from .plot2d import Plot2D

Exportable = Union[Plot2D, PlotView, Mesh3D]


def _rgb_string(color: Optional[tuple[float, float, float]]) -> Optional[str]:
    if color is None:
        return None
    r, g, b = (int(round(255 * c)) for c in color)
    return f"rgb({r},{g},{b})"


def _mode(plot: Plot2D) -> str:
    parts = []
    if plot.style.lines:
        parts.append("lines")
    if plot.style.points:
        parts.append("markers")
    return "+".join(parts) or "none"


def plot_to_trace(plot: Plot2D, *, name: Optional[str] = None) -> go.Scatter:
    """A 2-D scatter trace honoring the plot's lines/points flags, width and color."""
    color = _rgb_string(plot.style.color)
    return go.Scatter(
        x=plot.x.astype(float),
        y=plot.y.astype(float),
        mode=_mode(plot),
        name=name,
        line=dict(width=plot.style.width, color=color),
        marker=dict(color=color),
    )


def mesh_to_trace(
    mesh: Mesh3D,
    *,
    name: Optional[str] = None,
    color: Optional[str] = None,
) -> Union[go.Mesh3d, go.Scatter3d]:
    """A ``Mesh3d`` trace for triangle meshes, a ``Scatter3d`` line for line strips."""
    pos = mesh.positions.astype(float)
    x, y, z = pos[:, 0], pos[:, 2], pos[:, 1]

    if mesh.is_line_strip:
        return go.Scatter3d(x=x, y=y, z=z, mode="lines", name=name, line=dict(color=color))

    tri = mesh.indices.reshape(-1, 3).astype(np.int64)
    return go.Mesh3d(
        x=x,
        y=y,
        z=z,
        i=tri[:, 0],
        j=tri[:, 1],
        k=tri[:, 2],
        name=name,
        color=color,
        flatshading=False,
    )


def _default_layout() -> dict[str, Any]:
    return dict(
        template="plotly_white",
        showlegend=True,
        margin=dict(l=48, r=28, t=48, b=44),
        xaxis=dict(zeroline=True, zerolinewidth=1.5, zerolinecolor="#334155", showgrid=True),
        yaxis=dict(zeroline=True, zerolinewidth=1.5, zerolinecolor="#334155", showgrid=True),
        scene=dict(aspectmode="data"),
    )


def to_figure(*items: Exportable, title: Optional[str] = None) -> go.Figure:
    """Collect plots, plot views and meshes into one figure.

    A :class:`~fluxion.graph.PlotView` also sets the 2-D axis ranges to its
    bounds; the last view given wins.

    Raises
    ------
    TypeError
        For items that are not ``Plot2D``, ``PlotView`` or ``Mesh3D``.
    """
    fig = go.Figure()
    fig.update_layout(**_default_layout())
    if title is not None:
        fig.update_layout(title=title)

    for item in items:
        if isinstance(item, PlotView):
            fig.add_trace(plot_to_trace(item.plot))
            b = item.bounds
            fig.update_xaxes(range=[b.x_min, b.x_max])
            fig.update_yaxes(range=[b.y_min, b.y_max])
        elif isinstance(item, Plot2D):
            fig.add_trace(plot_to_trace(item))
        elif isinstance(item, Mesh3D):
            fig.add_trace(mesh_to_trace(item))
        else:
            raise TypeError(f"Cannot export {type(item).__name__}; expected Plot2D, PlotView or Mesh3D")
    return fig


__all__ = ["mesh_to_trace", "plot_to_trace", "to_figure"]
