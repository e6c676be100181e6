"""Top-level public API for the ``fluxion`` package.

``fluxion`` is the computation core of a small graphing tool: it solves
linear, quadratic and low-degree polynomial equations with narrated steps, and
turns functions and scalar fields into renderable 2-D polylines and 3-D
meshes. Everything commonly needed is re-exported here, for example:

>>> from fluxion import function, solve_quadratic
>>> solve_quadratic(1, -3, 2)
(2.0, 1.0)

Rendering is left to the caller; :mod:`fluxion.plotly_export` converts the
geometry into Plotly figures for quick inspection.
"""

from . import plotly_export
from .algebra_topics import BASICS, AlgebraTopic, FormulaItem
from .algebra_utils import discriminant, gcd, lcm, nearly_equal, quadratic_vertex
from .axes import AxesGrid, AxesOptions, build_axes_grid, nice_step, tick_values
from .defaults import DEFAULT, resolve_samples
from .demos import DEMOS, demo_names, run_demo
from .equation_graph import EquationGraph, graph_equation, graph_linear
from .equations import Linear, Polynomial, Quadratic
from .graph import PlotView, field, function, line, parametric, points
from .lift import EmbedPlane, Lift, embed_as_curve, embed_polyline, polyline_samples, to_scalar_field
from .mesh import Mesh3D, build_polyline, build_surface
from .numpify import CompiledFunction, numpify, numpify_cached
from .plot2d import Plot2D, PlotStyle, ViewBounds, estimate_y_range, make_style, polyline, sample_function, to_ndc
from .scalar_field import ParametricCurve, RealFunction, ScalarField
from .solve_result import SolutionKind, SolveFormatOptions, SolveResult
from .solvers import (
    SingularSystemError,
    classify_constant,
    explain_linear,
    solve,
    solve_linear,
    solve_linear_many,
    solve_linear_steps,
    solve_linear_two_sided,
    solve_polynomial,
    solve_quadratic,
    solve_system_2x2,
)

__version__ = "0.1.0"

__all__ = [
    "AlgebraTopic",
    "AxesGrid",
    "AxesOptions",
    "BASICS",
    "CompiledFunction",
    "DEFAULT",
    "DEMOS",
    "EmbedPlane",
    "EquationGraph",
    "FormulaItem",
    "Lift",
    "Linear",
    "Mesh3D",
    "ParametricCurve",
    "Plot2D",
    "PlotStyle",
    "PlotView",
    "Polynomial",
    "Quadratic",
    "RealFunction",
    "ScalarField",
    "SingularSystemError",
    "SolutionKind",
    "SolveFormatOptions",
    "SolveResult",
    "ViewBounds",
    "build_axes_grid",
    "build_polyline",
    "build_surface",
    "classify_constant",
    "demo_names",
    "discriminant",
    "embed_as_curve",
    "embed_polyline",
    "estimate_y_range",
    "explain_linear",
    "field",
    "function",
    "gcd",
    "graph_equation",
    "graph_linear",
    "lcm",
    "line",
    "make_style",
    "nearly_equal",
    "nice_step",
    "numpify",
    "numpify_cached",
    "parametric",
    "plotly_export",
    "points",
    "polyline",
    "polyline_samples",
    "quadratic_vertex",
    "resolve_samples",
    "run_demo",
    "sample_function",
    "solve",
    "solve_linear",
    "solve_linear_many",
    "solve_linear_steps",
    "solve_linear_two_sided",
    "solve_polynomial",
    "solve_quadratic",
    "solve_system_2x2",
    "tick_values",
    "to_ndc",
    "to_scalar_field",
]
