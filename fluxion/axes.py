"""2-D axes, grid lines and tick marks as line-segment geometry.

Step sizes snap to "nice" values (1, 2 or 5 times a power of ten) so that
roughly ten major lines cover each axis. Every layer is returned as an
``(n, 2, 2)`` float32 array of segments ``[[x0, y0], [x1, y1]]`` in world
coordinates; colors and widths travel alongside in :class:`AxesOptions`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

_SNAP_TO_ZERO = 1e-6
_RANGE_SLACK = 1e-6
_MULTIPLE_TOLERANCE = 1e-5
_MIN_SPAN = 1e-9


def nice_step(lo: float, hi: float, target: int = 10) -> float:
    """Round ``(hi - lo) / target`` to 1, 2, 5 or 10 times a power of ten."""
    span = max(_MIN_SPAN, hi - lo)
    rough = span / target
    mag = 10.0 ** math.floor(math.log10(rough))
    norm = rough / mag
    if norm < 1.5:
        nice = 1.0
    elif norm < 3:
        nice = 2.0
    elif norm < 7:
        nice = 5.0
    else:
        nice = 10.0
    return nice * mag


def tick_values(lo: float, hi: float, step: float) -> np.ndarray:
    """Multiples of *step* inside ``[lo, hi]``; values near zero become ``0.0``.

    A non-positive *step* yields an empty array.
    """
    if not step > 0:
        return np.empty(0)
    start = math.ceil(lo / step) * step
    count = int(math.floor((hi + _RANGE_SLACK - start) / step)) + 1
    if count <= 0:
        return np.empty(0)
    values = start + np.arange(count) * step
    values[np.abs(values) < _SNAP_TO_ZERO] = 0.0
    return values


def nearly_multiple(value: float, step: float) -> bool:
    m = value / step
    return abs(m - round(m)) < _MULTIPLE_TOLERANCE


@dataclass(frozen=True)
class AxesOptions:
    axis_width: float = 1.5
    major_grid_width: float = 1.0
    minor_grid_width: float = 0.6
    minor_divisions: int = 5
    show_minor: bool = True
    show_grid: bool = True
    show_ticks: bool = True
    # World units; non-positive means 1% of the x span.
    tick_length: float = 0.03
    minor_color: tuple[float, float, float] = (0.25, 0.25, 0.30)
    major_color: tuple[float, float, float] = (0.35, 0.35, 0.40)
    axis_color: tuple[float, float, float] = (0.85, 0.85, 0.85)
    tick_color: tuple[float, float, float] = (0.85, 0.85, 0.85)


def _segments(rows: list[tuple[float, float, float, float]]) -> np.ndarray:
    if not rows:
        return np.empty((0, 2, 2), dtype=np.float32)
    return np.asarray(rows, dtype=np.float32).reshape(-1, 2, 2)


@dataclass(frozen=True, eq=False)
class AxesGrid:
    """Segment layers, drawn back to front: minor, major, axes, ticks."""

    minor: np.ndarray
    major: np.ndarray
    axes: np.ndarray
    ticks: np.ndarray
    x_step: float
    y_step: float
    options: AxesOptions = field(default_factory=AxesOptions)

    def layers(self) -> list[tuple[str, np.ndarray, float, tuple[float, float, float]]]:
        """``(name, segments, width, color)`` for each non-empty layer."""
        o = self.options
        out = [
            ("minor", self.minor, o.minor_grid_width, o.minor_color),
            ("major", self.major, o.major_grid_width, o.major_color),
            ("axes", self.axes, o.axis_width, o.axis_color),
            ("ticks", self.ticks, o.axis_width, o.tick_color),
        ]
        return [layer for layer in out if len(layer[1])]


def build_axes_grid(
    x_min: float,
    x_max: float,
    y_min: float,
    y_max: float,
    options: AxesOptions | None = None,
) -> AxesGrid:
    """Grid, axis and tick segments covering the given world window.

    Minor lines that coincide with a major line are skipped. An axis is only
    drawn when zero lies inside the corresponding range, and ticks sit on the
    axis they mark.
    """
    opts = options or AxesOptions()
    step_x = nice_step(x_min, x_max)
    step_y = nice_step(y_min, y_max)

    minor: list[tuple[float, float, float, float]] = []
    major: list[tuple[float, float, float, float]] = []
    axes: list[tuple[float, float, float, float]] = []
    ticks: list[tuple[float, float, float, float]] = []

    if opts.show_grid:
        if opts.show_minor:
            divisions = max(2, opts.minor_divisions)
            for x in tick_values(x_min, x_max, step_x / divisions):
                if not nearly_multiple(x, step_x):
                    minor.append((x, y_min, x, y_max))
            for y in tick_values(y_min, y_max, step_y / divisions):
                if not nearly_multiple(y, step_y):
                    minor.append((x_min, y, x_max, y))
        for x in tick_values(x_min, x_max, step_x):
            major.append((x, y_min, x, y_max))
        for y in tick_values(y_min, y_max, step_y):
            major.append((x_min, y, x_max, y))

    y_axis_visible = x_min <= 0 <= x_max
    x_axis_visible = y_min <= 0 <= y_max
    if y_axis_visible:
        axes.append((0.0, y_min, 0.0, y_max))
    if x_axis_visible:
        axes.append((x_min, 0.0, x_max, 0.0))

    if opts.show_ticks:
        tl = opts.tick_length if opts.tick_length > 0 else (x_max - x_min) * 0.01
        if x_axis_visible:
            for x in tick_values(x_min, x_max, step_x):
                ticks.append((x, -tl, x, tl))
        if y_axis_visible:
            for y in tick_values(y_min, y_max, step_y):
                ticks.append((-tl, y, tl, y))

    return AxesGrid(
        minor=_segments(minor),
        major=_segments(major),
        axes=_segments(axes),
        ticks=_segments(ticks),
        x_step=step_x,
        y_step=step_y,
        options=opts,
    )


__all__ = ["AxesGrid", "AxesOptions", "build_axes_grid", "nearly_multiple", "nice_step", "tick_values"]
