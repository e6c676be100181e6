"""Graph both sides of a linear equation around its solution.

``a*x + b = c*x + d`` is drawn as two lines meeting at the solution. The
window is centred on the solution, padded vertically, and every point is
returned in normalized device coordinates so a renderer can draw it without a
camera.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .defaults import EPSILON
from .plot2d import Plot2D, PlotStyle, ViewBounds, to_ndc

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

LEFT_STYLE = PlotStyle(lines=True, points=False, width=2.0, color=(0.2, 0.8, 0.3))
RIGHT_STYLE = PlotStyle(lines=True, points=False, width=2.0, color=(0.9, 0.5, 0.2))

_Y_PAD_FRACTION = 0.1
_Y_PAD_ABSOLUTE = 1e-3


@dataclass(frozen=True, eq=False)
class EquationGraph:
    """NDC geometry for a two-sided linear equation.

    Attributes
    ----------
    left, right:
        ``y = a*x + b`` and ``y = c*x + d`` in NDC.
    solution_point:
        The intersection ``(x, a*x + b)`` in NDC, shape ``(2,)``.
    bounds:
        The world-space window that was mapped onto ``[-1, 1]**2``.
    """

    left: Plot2D
    right: Plot2D
    solution_point: np.ndarray
    bounds: ViewBounds


def graph_equation(
    a: float,
    b: float,
    c: float,
    d: float,
    solution: float,
    range_: float = 2.0,
    samples: int = 200,
) -> Optional[EquationGraph]:
    """Sample both sides on ``[solution - range_, solution + range_]``.

    ``samples`` intervals give ``samples + 1`` points per side. The joint y
    extent is padded by ``0.1*span + 1e-3``. Returns ``None`` when
    ``solution`` is NaN or infinite.

    Raises
    ------
    ValueError
        If ``range_`` is not positive or ``samples`` is below 1.
    """
    if not math.isfinite(solution):
        logger.debug("graph_equation: non-finite solution %r, nothing to draw", solution)
        return None
    if not range_ > 0:
        raise ValueError(f"range_ must be positive, got {range_}")
    if samples < 1:
        raise ValueError(f"samples must be at least 1, got {samples}")

    x_min = solution - range_
    x_max = solution + range_
    step = (x_max - x_min) / samples
    xs = x_min + np.arange(samples + 1) * step

    y_left = a * xs + b
    y_right = c * xs + d

    y_min = float(min(y_left.min(), y_right.min()))
    y_max = float(max(y_left.max(), y_right.max()))
    pad = (y_max - y_min) * _Y_PAD_FRACTION + _Y_PAD_ABSOLUTE
    bounds = ViewBounds(x_min, x_max, y_min - pad, y_max + pad)

    left = Plot2D(to_ndc(np.column_stack([xs, y_left]), bounds), LEFT_STYLE)
    right = Plot2D(to_ndc(np.column_stack([xs, y_right]), bounds), RIGHT_STYLE)
    dot = to_ndc([[solution, a * solution + b]], bounds)[0]
    return EquationGraph(left, right, dot, bounds)


def graph_linear(
    a: float,
    b: float,
    x_min: float,
    x_max: float,
    samples: int = 300,
) -> Optional[EquationGraph]:
    """Graph ``a*x + b`` against ``y = 0`` over ``[x_min, x_max]``.

    The window is centred on the root, or on the interval centre when the line
    is horizontal.
    """
    half = (x_max - x_min) / 2.0
    if abs(a) < EPSILON:
        centre = x_min + half
    else:
        centre = -b / a
    return graph_equation(a, b, 0.0, 0.0, centre, range_=half, samples=samples)


__all__ = ["EquationGraph", "ViewBounds", "graph_equation", "graph_linear", "to_ndc"]
