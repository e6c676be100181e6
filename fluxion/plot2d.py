"""2-D plots: sampled point sequences plus a display style.

Purpose
-------
:func:`sample_function` evaluates ``y = f(x)`` at evenly spaced x-values and
returns a :class:`Plot2D` in ascending-x order. :func:`estimate_y_range`
scans the same samples to pick a padded viewing window, and
:meth:`Plot2D.to_ndc` maps a plot into normalized device coordinates.

Style options
-------------
:func:`make_style` accepts ``thickness=`` with ``width=`` as an alias, in the
same way plot calls elsewhere accept both spellings. Passing both with
different values is an error.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Optional, Union

import numpy as np

from .defaults import (
    DEFAULT_FUNCTION_COLOR,
    DEFAULT_LINE_WIDTH,
    DEFAULT_PLOT_SAMPLES,
    DEFAULT_POLYLINE_COLOR,
    FALLBACK_Y_RANGE,
    Y_RANGE_FLAT_SPAN,
    Y_RANGE_PAD_FRACTION,
    as_rows,
    resolve_samples,
)
from .scalar_field import FunctionLike, as_function

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

RGB = tuple[float, float, float]


def _coerce_color(color: Any) -> Optional[RGB]:
    if color is None:
        return None
    if isinstance(color, str):
        text = color.strip().lstrip("#")
        if len(text) != 6:
            raise ValueError(f"Color strings must look like '#RRGGBB', got {color!r}")
        try:
            return tuple(int(text[k:k + 2], 16) / 255.0 for k in (0, 2, 4))  # type: ignore[return-value]
        except ValueError as e:
            raise ValueError(f"Invalid hex color {color!r}") from e
    rgb = tuple(float(c) for c in color)
    if len(rgb) != 3:
        raise ValueError(f"Color must have three components, got {len(rgb)}")
    if any(not 0.0 <= c <= 1.0 for c in rgb):
        raise ValueError(f"Color components must lie in [0, 1], got {rgb}")
    return rgb  # type: ignore[return-value]


@dataclass(frozen=True)
class PlotStyle:
    """How a :class:`Plot2D` is drawn.

    ``color`` is an RGB triple in ``[0, 1]`` (or ``None`` for the renderer's
    choice); hex strings such as ``"#33cc4d"`` are converted on construction.
    """

    lines: bool = True
    points: bool = False
    width: float = DEFAULT_LINE_WIDTH
    color: Optional[RGB] = DEFAULT_POLYLINE_COLOR

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError(f"width must be positive, got {self.width}")
        object.__setattr__(self, "width", float(self.width))
        object.__setattr__(self, "color", _coerce_color(self.color))


FUNCTION_STYLE = PlotStyle(lines=True, points=False, width=DEFAULT_LINE_WIDTH, color=DEFAULT_FUNCTION_COLOR)


def make_style(
    *,
    lines: bool = True,
    points: bool = False,
    thickness: Union[int, float, None] = None,
    width: Union[int, float, None] = None,
    color: Any = DEFAULT_POLYLINE_COLOR,
) -> PlotStyle:
    """Build a :class:`PlotStyle`, resolving the ``width``/``thickness`` alias.

    Raises
    ------
    ValueError
        If ``thickness`` and ``width`` are both given with different values.
    """
    if width is not None:
        if thickness is not None and width != thickness:
            raise ValueError(
                "make_style() received both thickness= and width= with different values; use only one."
            )
        thickness = width if thickness is None else thickness
    if thickness is None:
        thickness = DEFAULT_LINE_WIDTH
    return PlotStyle(lines=lines, points=points, width=thickness, color=color)


@dataclass(frozen=True)
class ViewBounds:
    """An axis-aligned world-space window ``[x_min, x_max] x [y_min, y_max]``."""

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min


def to_ndc(points: Any, bounds: ViewBounds) -> np.ndarray:
    """Map world ``(x, y)`` points into ``[-1, 1]**2`` for *bounds*.

    A zero-width or zero-height window yields non-finite coordinates rather
    than an error.
    """
    pts = as_rows(points, 2, name="points", dtype=np.float64)
    lo = np.array([bounds.x_min, bounds.y_min])
    span = np.array([bounds.width, bounds.height])
    with np.errstate(divide="ignore", invalid="ignore"):
        out = -1.0 + 2.0 * (pts - lo) / span
    return out.astype(np.float32)


@dataclass(frozen=True, eq=False)
class Plot2D:
    """An ordered ``(n, 2)`` float32 point sequence with a :class:`PlotStyle`."""

    points: np.ndarray
    style: PlotStyle = field(default_factory=PlotStyle)

    def __post_init__(self) -> None:
        pts = as_rows(self.points, 2, name="points")
        pts.flags.writeable = False
        object.__setattr__(self, "points", pts)

    def __len__(self) -> int:
        return len(self.points)

    @property
    def x(self) -> np.ndarray:
        return self.points[:, 0]

    @property
    def y(self) -> np.ndarray:
        return self.points[:, 1]

    def to_ndc(self, x_min: float, x_max: float, y_min: float, y_max: float) -> "Plot2D":
        """Return a copy mapped into normalized device coordinates."""
        return Plot2D(to_ndc(self.points, ViewBounds(x_min, x_max, y_min, y_max)), self.style)


def _sample_grid(x_min: float, x_max: float, samples: Any) -> np.ndarray:
    n = resolve_samples(samples, DEFAULT_PLOT_SAMPLES)
    step = (x_max - x_min) / (n - 1)
    return x_min + np.arange(n) * step


def sample_function(
    f: FunctionLike,
    x_min: float,
    x_max: float,
    samples: Any = None,
    style: Optional[PlotStyle] = None,
) -> Plot2D:
    """Sample ``y = f(x)`` at ``samples`` points spanning ``[x_min, x_max]``.

    Sample counts below 2 are clamped to 2. Without *style* the plot is drawn
    as green lines of width 2.
    """
    fn = as_function(f)
    xs = _sample_grid(x_min, x_max, samples)
    ys = fn.evaluate_many(xs)
    logger.debug("sample_function: %d samples over [%g, %g]", len(xs), x_min, x_max)
    return Plot2D(np.column_stack([xs, ys]), style if style is not None else FUNCTION_STYLE)


def polyline(points: Union[Iterable[Sequence[float]], np.ndarray], style: Optional[PlotStyle] = None) -> Plot2D:
    """Wrap existing ``(x, y)`` points; the default style is white lines."""
    pts = points if isinstance(points, np.ndarray) else np.array(list(points), dtype=float)
    return Plot2D(pts, style if style is not None else PlotStyle())


def estimate_y_range(
    f: FunctionLike,
    x_min: float,
    x_max: float,
    samples: Any = None,
) -> tuple[float, float]:
    """Padded ``(y_min, y_max)`` covering the finite values of ``f``.

    Non-finite evaluations are skipped; if none are finite the window starts
    from ``(-1, 1)``. The pad is 10% of the span, or
    ``max(1, 0.1*|y_max| + 1)`` when the span is below ``1e-6``.
    """
    fn = as_function(f)
    return padded_range(fn.evaluate_many(_sample_grid(x_min, x_max, samples)))


def padded_range(values: Any) -> tuple[float, float]:
    """Pad the finite extent of *values* the way :func:`estimate_y_range` does."""
    values = np.asarray(values, dtype=float).ravel()
    finite = values[np.isfinite(values)]

    if finite.size:
        lo, hi = float(finite.min()), float(finite.max())
    else:
        lo, hi = FALLBACK_Y_RANGE

    span = abs(hi - lo)
    if span < Y_RANGE_FLAT_SPAN:
        pad = max(1.0, abs(hi) * Y_RANGE_PAD_FRACTION + 1.0)
    else:
        pad = Y_RANGE_PAD_FRACTION * span
    return lo - pad, hi + pad


__all__ = [
    "FUNCTION_STYLE",
    "Plot2D",
    "PlotStyle",
    "ViewBounds",
    "estimate_y_range",
    "make_style",
    "padded_range",
    "polyline",
    "sample_function",
    "to_ndc",
]
