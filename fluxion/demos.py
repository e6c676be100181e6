"""Ready-made demo scenes.

Each demo builds and returns its geometry (a :class:`~fluxion.graph.PlotView`
or a :class:`~fluxion.mesh.Mesh3D`) so it can be rendered, exported with
:mod:`fluxion.plotly_export`, or inspected in tests.

>>> demo_names()[:3]
('sin2d', 'sinradial3d', 'sin3dline')
>>> run_demo(" Helix ").is_line_strip
True
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from typing import Union

from . import graph
from .graph import PlotView
from .lift import EmbedPlane, Lift
from .mesh import Mesh3D

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

DemoResult = Union[PlotView, Mesh3D]

TWO_PI = 2 * math.pi


def sin_2d() -> PlotView:
    return graph.function(math.sin).two_d(-TWO_PI, TWO_PI, samples=1200)


def sin_radial_surface() -> Mesh3D:
    return graph.function(math.sin).three_d(-8, 8, -8, 8, lift=Lift.RADIAL, resolution=180)


def sin_3d_line() -> Mesh3D:
    return graph.function(math.sin).three_d_line(-TWO_PI, TWO_PI, plane=EmbedPlane.XY, offset=0, samples=1000)


def line_2d(m: float = 1.2, b: float = -0.5) -> PlotView:
    return graph.line(m, b).two_d(-10, 10, samples=600)


def line_3d_on_xz(m: float = 1.2, b: float = -0.5, offset_y: float = 1.0) -> Mesh3D:
    return graph.line(m, b).three_d(-10, 10, plane=EmbedPlane.XZ, offset=offset_y, samples=600)


def polyline_3d() -> Mesh3D:
    pts = [(-3.0, -1.2), (-2.0, -0.2), (-1.0, 0.8), (0.0, 0.0), (1.0, 1.1), (2.0, 1.7), (3.0, 2.2)]
    return graph.points(pts).three_d_line(plane=EmbedPlane.XY, offset=0)


def sin_cos_surface() -> Mesh3D:
    return graph.field(lambda x, y: math.sin(x) * math.cos(y)).three_d(
        -TWO_PI, TWO_PI, -TWO_PI, TWO_PI, resolution=180
    )


def helix() -> Mesh3D:
    return graph.parametric(math.cos, math.sin, lambda t: 0.15 * t, 0.0, 12 * math.pi, samples=1200)


DEMOS: dict[str, Callable[[], DemoResult]] = {
    "sin2d": sin_2d,
    "sinradial3d": sin_radial_surface,
    "sin3dline": sin_3d_line,
    "line2d": line_2d,
    "line3d": line_3d_on_xz,
    "polyline3d": polyline_3d,
    "sxcysurface": sin_cos_surface,
    "helix": helix,
}


def demo_names() -> tuple[str, ...]:
    return tuple(DEMOS)


def run_demo(name: str) -> DemoResult:
    """Build the demo registered under *name* (case and surrounding spaces ignored).

    Raises
    ------
    KeyError
        If no demo has that name.
    """
    key = name.strip().lower()
    try:
        build = DEMOS[key]
    except KeyError as e:
        raise KeyError(f"Unknown demo {name!r}; available: {', '.join(DEMOS)}") from e
    logger.debug("run_demo: %s", key)
    return build()


__all__ = ["DEMOS", "demo_names", "run_demo"]
