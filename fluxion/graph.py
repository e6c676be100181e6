"""Fluent entry points that turn functions into renderable geometry.

Purpose
-------
One place to go from "I have f(x)" to a plot or mesh::

    function(f).two_d(x_min, x_max)           -> PlotView
    function(f).three_d(x0, x1, y0, y1, lift) -> Mesh3D (surface)
    function(f).three_d_line(x0, x1, plane)   -> Mesh3D (line strip)
    field(g).three_d(x0, x1, y0, y1)          -> Mesh3D (surface)
    line(m, b).two_d(...) / .three_d(...)
    points(pts).two_d() / .three_d_line(plane)
    parametric(x, y, z, t_min, t_max)         -> Mesh3D (line strip)

The graph objects only hold the wrapped function; every call samples afresh
and returns new arrays.

Examples
--------
>>> import math
>>> view = function(math.sin).two_d(-math.pi, math.pi, samples=64)
>>> len(view.plot)
64
>>> field(lambda x, y: x * y).three_d(-1, 1, -1, 1, resolution=4).triangle_count
18
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Optional

import numpy as np

from .axes import AxesGrid, AxesOptions, build_axes_grid
from .defaults import DEFAULT_CURVE_SAMPLES, DEFAULT_FUNCTION_SAMPLES, DEFAULT_LINE_SAMPLES
from .equations import Linear
from .lift import EmbedPlane, Lift, LiftLike, PlaneLike, embed_as_curve, embed_polyline, polyline_samples, to_scalar_field
from .mesh import Mesh3D, build_polyline, build_surface
from .plot2d import Plot2D, PlotStyle, ViewBounds, estimate_y_range, padded_range, polyline, sample_function
from .scalar_field import FieldLike, FunctionLike, ParametricCurve, RealFunction, as_function, as_scalar_field


@dataclass(frozen=True, eq=False)
class PlotView:
    """A 2-D plot together with the world window it should be shown in."""

    plot: Plot2D
    bounds: ViewBounds

    def ndc(self) -> Plot2D:
        b = self.bounds
        return self.plot.to_ndc(b.x_min, b.x_max, b.y_min, b.y_max)

    def axes(self, options: Optional[AxesOptions] = None) -> AxesGrid:
        b = self.bounds
        return build_axes_grid(b.x_min, b.x_max, b.y_min, b.y_max, options)


class FunctionGraph:
    """Graphs of a one-variable function ``y = f(x)``."""

    def __init__(self, f: FunctionLike) -> None:
        self.function = as_function(f)

    def two_d(
        self,
        x_min: float,
        x_max: float,
        samples: Any = DEFAULT_FUNCTION_SAMPLES,
        style: Optional[PlotStyle] = None,
    ) -> PlotView:
        """Sample the function and estimate a padded y window from the same samples."""
        plot = sample_function(self.function, x_min, x_max, samples, style)
        y_min, y_max = estimate_y_range(self.function, x_min, x_max, samples)
        return PlotView(plot, ViewBounds(x_min, x_max, y_min, y_max))

    def three_d(
        self,
        x_min: float,
        x_max: float,
        y_min: float,
        y_max: float,
        lift: LiftLike = Lift.PRODUCT_COS,
        resolution: Any = None,
    ) -> Mesh3D:
        """Lift ``f`` to ``g(x, y)`` and mesh it as a surface."""
        return build_surface(to_scalar_field(self.function, lift), x_min, x_max, y_min, y_max, resolution)

    def three_d_line(
        self,
        x_min: float,
        x_max: float,
        plane: PlaneLike = EmbedPlane.XY,
        offset: float = 0.0,
        samples: Any = DEFAULT_CURVE_SAMPLES,
    ) -> Mesh3D:
        """Draw ``y = f(x)`` as a 3-D line inside *plane* at *offset*."""
        return build_polyline(embed_as_curve(self.function, plane, offset), x_min, x_max, samples)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.function!r})"


class LineGraph(FunctionGraph):
    """``y = m*x + b``; ``three_d`` draws the line itself, not a surface."""

    def __init__(self, m: float, b: float) -> None:
        self.equation = Linear(m, b)
        super().__init__(RealFunction(self.equation, vectorized=True))

    def three_d(  # type: ignore[override]
        self,
        t_min: float,
        t_max: float,
        plane: PlaneLike = EmbedPlane.XY,
        offset: float = 0.0,
        samples: Any = DEFAULT_LINE_SAMPLES,
    ) -> Mesh3D:
        return self.three_d_line(t_min, t_max, plane, offset, samples)

    def __repr__(self) -> str:
        return f"LineGraph(m={self.equation.a!r}, b={self.equation.b!r})"


class FieldGraph:
    """Graphs of a scalar field ``z = g(x, y)``."""

    def __init__(self, g: FieldLike) -> None:
        self.field = as_scalar_field(g)

    def three_d(
        self,
        x_min: float,
        x_max: float,
        y_min: float,
        y_max: float,
        resolution: Any = None,
    ) -> Mesh3D:
        return build_surface(self.field, x_min, x_max, y_min, y_max, resolution)

    def __repr__(self) -> str:
        return f"FieldGraph({self.field!r})"


class PointsGraph:
    """Graphs of raw ``(x, y)`` samples with no underlying equation."""

    def __init__(self, pts: Iterable[Sequence[float]]) -> None:
        arr = np.asarray(list(pts), dtype=float)
        if arr.size == 0:
            raise ValueError("points() needs at least one (x, y) point")
        if arr.ndim != 2 or arr.shape[1] != 2:
            raise ValueError(f"points() expects (x, y) pairs, got array of shape {arr.shape}")
        self.points = arr

    def two_d(self, style: Optional[PlotStyle] = None) -> PlotView:
        """The points as a 2-D polyline, framed by their padded extent."""
        x_min, x_max = padded_range(self.points[:, 0])
        y_min, y_max = padded_range(self.points[:, 1])
        return PlotView(polyline(self.points, style), ViewBounds(x_min, x_max, y_min, y_max))

    def three_d_line(self, plane: PlaneLike = EmbedPlane.XY, offset: float = 0.0) -> Mesh3D:
        """Interpolate the points by index and draw them inside *plane*."""
        curve = embed_polyline(self.points, plane, offset)
        t_min, t_max = curve.t_range  # type: ignore[misc]
        return build_polyline(curve, t_min, t_max, polyline_samples(len(self.points)))

    def __repr__(self) -> str:
        return f"PointsGraph({len(self.points)} points)"


def function(f: FunctionLike) -> FunctionGraph:
    return FunctionGraph(f)


def field(g: FieldLike) -> FieldGraph:
    return FieldGraph(g)


def line(m: float, b: float) -> LineGraph:
    return LineGraph(m, b)


def points(pts: Iterable[Sequence[float]]) -> PointsGraph:
    return PointsGraph(pts)


def parametric(
    x: FunctionLike,
    y: FunctionLike,
    z: FunctionLike,
    t_min: float,
    t_max: float,
    samples: Any = DEFAULT_CURVE_SAMPLES,
) -> Mesh3D:
    """Mesh the curve ``t -> (x(t), y(t), z(t))`` as a line strip."""
    curve = ParametricCurve.from_components(x, y, z, t_range=(t_min, t_max))
    return build_polyline(curve, t_min, t_max, samples)


__all__ = [
    "FieldGraph",
    "FunctionGraph",
    "LineGraph",
    "PlotView",
    "PointsGraph",
    "field",
    "function",
    "line",
    "parametric",
    "points",
]
