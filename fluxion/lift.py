"""Lift 1-D functions into 2-D scalar fields and embed them as 3-D curves.

Lifts
-----
A :class:`Lift` turns ``f(x)`` into a field ``g(x, y)`` so it can be drawn as
a surface:

- ``EXTRUDE``: ``g = f(x)``, a surface constant along y
- ``RADIAL``: ``g = f(sqrt(x**2 + y**2))``, f revolved around the origin
- ``PRODUCT_COS``: ``g = f(x) * cos(y)``
- ``PRODUCT_SIN``: ``g = f(x) * sin(y)``

Embeddings
----------
An :class:`EmbedPlane` places ``y = f(x)`` inside a coordinate plane of 3-D
space, holding the remaining axis at ``offset``:

=====  ==========  ==========  ==========
plane  x(t)        y(t)        z(t)
=====  ==========  ==========  ==========
XY     t           f(t)        offset
XZ     t           offset      f(t)
YZ     offset      t           f(t)
=====  ==========  ==========  ==========

Both enums also accept their names as strings (``"radial"``, ``"xz"``). Any
other value raises ``ValueError``.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Any, Union

import numpy as np

from .defaults import DEFAULT_POLYLINE_MIN_SAMPLES
from .scalar_field import FunctionLike, ParametricCurve, ScalarField, as_function


class Lift(Enum):
    EXTRUDE = "extrude"
    RADIAL = "radial"
    PRODUCT_COS = "product_cos"
    PRODUCT_SIN = "product_sin"


class EmbedPlane(Enum):
    XY = "xy"
    XZ = "xz"
    YZ = "yz"


LiftLike = Union[Lift, str]
PlaneLike = Union[EmbedPlane, str]


def _coerce_enum(value: Any, enum_cls: type[Enum], role: str) -> Any:
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        key = value.strip().lower().replace("-", "_")
        for member in enum_cls:
            if key in (member.value, member.name.lower()):
                return member
    options = ", ".join(m.name for m in enum_cls)
    raise ValueError(f"Unknown {role} {value!r}; expected one of {options}")


def coerce_lift(value: LiftLike) -> Lift:
    return _coerce_enum(value, Lift, "lift")


def coerce_plane(value: PlaneLike) -> EmbedPlane:
    return _coerce_enum(value, EmbedPlane, "embed plane")


def to_scalar_field(f: FunctionLike, lift: LiftLike = Lift.EXTRUDE) -> ScalarField:
    """Lift ``f(x)`` to a scalar field ``g(x, y)``.

    The returned field is vectorized exactly when ``f`` is.
    """
    fn = as_function(f)
    lift = coerce_lift(lift)

    if fn.vectorized:
        evaluate = fn.evaluate_many
    else:
        evaluate = fn.evaluate

    if lift is Lift.EXTRUDE:
        def g(x: Any, y: Any) -> Any:
            return evaluate(x) + np.zeros_like(y)
    elif lift is Lift.RADIAL:
        def g(x: Any, y: Any) -> Any:
            return evaluate(np.sqrt(x * x + y * y))
    elif lift is Lift.PRODUCT_COS:
        def g(x: Any, y: Any) -> Any:
            return evaluate(x) * np.cos(y)
    elif lift is Lift.PRODUCT_SIN:
        def g(x: Any, y: Any) -> Any:
            return evaluate(x) * np.sin(y)
    else:  # pragma: no cover - coerce_lift already rejected it
        raise ValueError(f"Unhandled lift {lift!r}")

    return ScalarField(g, vectorized=fn.vectorized)


def _place(plane: EmbedPlane, u: np.ndarray, v: np.ndarray, offset: float) -> tuple[Any, Any, Any]:
    """Map in-plane coordinates ``(u, v)`` to ``(x, y, z)``."""
    fixed = np.full(u.shape, offset, dtype=float)
    if plane is EmbedPlane.XY:
        return u, v, fixed
    if plane is EmbedPlane.XZ:
        return u, fixed, v
    if plane is EmbedPlane.YZ:
        return fixed, u, v
    raise ValueError(f"Unhandled embed plane {plane!r}")  # pragma: no cover


def embed_as_curve(f: FunctionLike, plane: PlaneLike = EmbedPlane.XY, offset: float = 0.0) -> ParametricCurve:
    """Embed ``y = f(x)`` as a 3-D curve with parameter ``t = x``."""
    fn = as_function(f)
    plane = coerce_plane(plane)
    offset = float(offset)

    def r(ts: np.ndarray) -> tuple[Any, Any, Any]:
        return _place(plane, ts, fn.evaluate_many(ts), offset)

    return ParametricCurve(r)


def _interpolator(points: np.ndarray):
    n = len(points)
    xs = points[:, 0]
    ys = points[:, 1]

    def interpolate(ts: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        i = np.clip(np.floor(ts), 0, n - 1).astype(np.intp)
        j = np.minimum(i + 1, n - 1)
        alpha = ts - i
        x = xs[i] + alpha * (xs[j] - xs[i])
        y = ys[i] + alpha * (ys[j] - ys[i])
        return x, y

    return interpolate


def embed_polyline(
    points: Sequence[Sequence[float]],
    plane: PlaneLike = EmbedPlane.XY,
    offset: float = 0.0,
) -> ParametricCurve:
    """Embed raw ``(x, y)`` samples as a curve parametrized by sample index.

    ``t`` runs over ``[0, n - 1]``; fractional ``t`` interpolates linearly
    between neighbouring samples. The curve's ``t_range`` is
    ``(0, max(1, n - 1))``.

    Raises
    ------
    ValueError
        If ``points`` is empty or not a sequence of pairs.
    """
    pts = np.asarray(points, dtype=float)
    if pts.size == 0:
        raise ValueError("embed_polyline needs at least one (x, y) point")
    if pts.ndim != 2 or pts.shape[1] != 2:
        raise ValueError(f"embed_polyline expects (x, y) pairs, got array of shape {pts.shape}")

    plane = coerce_plane(plane)
    offset = float(offset)
    interpolate = _interpolator(pts)

    def r(ts: np.ndarray) -> tuple[Any, Any, Any]:
        x, y = interpolate(ts)
        return _place(plane, x, y, offset)

    return ParametricCurve(r, t_range=(0.0, float(max(1, len(pts) - 1))))


def polyline_samples(point_count: int) -> int:
    """Sample count used when drawing an index-parametrized polyline."""
    return max(point_count, DEFAULT_POLYLINE_MIN_SAMPLES)


__all__ = [
    "EmbedPlane",
    "Lift",
    "coerce_lift",
    "coerce_plane",
    "embed_as_curve",
    "embed_polyline",
    "polyline_samples",
    "to_scalar_field",
]
