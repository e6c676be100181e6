"""Function wrappers sampled by the geometry builders.

Purpose
-------
The builders only need three capabilities:

- :class:`RealFunction`: ``x -> y``,
- :class:`ScalarField`: ``(x, y) -> z``,
- :class:`ParametricCurve`: ``t -> (x, y, z)``.

Each wraps a plain Python callable or a SymPy expression and exposes a scalar
``evaluate`` plus an array ``evaluate_many`` used for grid sampling.

Vectorization
-------------
A wrapper marked ``vectorized=True`` is called once with whole NumPy arrays;
otherwise it is called point by point with Python floats, so ``math.sin`` and
friends work unchanged. A point where such a callable raises ``ValueError``,
``ZeroDivisionError`` or ``OverflowError`` (``math.log(-1)``, ``1 / 0``) samples
as NaN, the same value a vectorized NumPy function produces there.

SymPy expressions are compiled with :func:`fluxion.numpify.numpify_cached` and
are always vectorized. Symbols other than the arguments can be fixed with
``bindings={a: 2.0}``.

Examples
--------
>>> import math
>>> import sympy as sp
>>> RealFunction(math.sin).evaluate(0.0)
0.0
>>> x, y = sp.symbols("x y")
>>> ScalarField.from_expr(x * y).evaluate(2.0, 3.0)
6.0
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from numbers import Real
from typing import Any, Optional, Union

import numpy as np
import sympy as sp

from .numpify import CompiledFunction, numpify_cached

FunctionLike = Union["RealFunction", sp.Expr, Callable[[float], float], float]
FieldLike = Union["ScalarField", sp.Expr, Callable[[float, float], float]]
CurveLike = Union["ParametricCurve", Callable[[float], Sequence[float]]]


# Per-sample arithmetic failures of plain callables (``math.sqrt(-1)``, ``1 / 0``).
_DOMAIN_ERRORS = (ValueError, ZeroDivisionError, OverflowError)


def _call_or_nan(fn: Callable[..., Any], *args: float) -> float:
    """Call ``fn`` on scalars; numeric domain failures become NaN."""
    try:
        return float(fn(*args))
    except _DOMAIN_ERRORS:
        return np.nan


def _evaluate_pointwise(fn: Callable[..., Any], *arrays: np.ndarray) -> np.ndarray:
    shape = np.broadcast(*arrays).shape
    out = np.empty(shape, dtype=float)
    broadcast = [np.broadcast_to(a, shape) for a in arrays]
    for idx in np.ndindex(shape):
        out[idx] = _call_or_nan(fn, *(float(a[idx]) for a in broadcast))
    return out


def _evaluate_vectorized(fn: Callable[..., Any], *arrays: np.ndarray) -> np.ndarray:
    shape = np.broadcast(*arrays).shape
    with np.errstate(invalid="ignore", divide="ignore", over="ignore"):
        out = np.asarray(fn(*arrays), dtype=float)
    return np.array(np.broadcast_to(out, shape), dtype=float)


def _default_vars(
    expr: sp.Basic, names: tuple[str, ...], bound: Optional[Mapping[sp.Symbol, Any]] = None
) -> tuple[sp.Symbol, ...]:
    """Pick argument symbols by name, reusing the expression's own symbols."""
    bound_names = {s.name for s in (bound or {})}
    by_name = {s.name: s for s in expr.free_symbols if s.name not in bound_names}
    unknown = sorted(set(by_name) - set(names))
    if unknown:
        raise ValueError(
            f"Expression has symbols {unknown} besides {list(names)}; pass vars= explicitly."
        )
    return tuple(by_name.get(name, sp.Symbol(name)) for name in names)


class RealFunction:
    """A real function of one variable."""

    __slots__ = ("_fn", "vectorized", "symbolic")

    def __init__(
        self,
        fn: Callable[[Any], Any],
        *,
        vectorized: bool = False,
        symbolic: Optional[sp.Basic] = None,
    ) -> None:
        if not callable(fn):
            raise TypeError(f"RealFunction expects a callable, got {type(fn).__name__}")
        self._fn = fn
        self.vectorized = bool(vectorized)
        self.symbolic = symbolic

    @classmethod
    def from_expr(
        cls,
        expr: Any,
        var: Optional[sp.Symbol] = None,
        *,
        bindings: Optional[Mapping[sp.Symbol, Any]] = None,
    ) -> "RealFunction":
        expr = sp.sympify(expr)
        vars_ = (var,) if var is not None else _default_vars(expr, ("x",), bindings)
        compiled = numpify_cached(expr, vars=vars_, bindings=bindings)
        return cls(compiled, vectorized=True, symbolic=expr)

    @classmethod
    def constant(cls, value: float) -> "RealFunction":
        value = float(value)
        return cls(lambda x: np.full(np.shape(x), value), vectorized=True, symbolic=sp.Float(value))

    def evaluate(self, x: float) -> float:
        return _call_or_nan(self._fn, float(x))

    __call__ = evaluate

    def evaluate_many(self, xs: Any) -> np.ndarray:
        xs = np.asarray(xs, dtype=float)
        if self.vectorized:
            return _evaluate_vectorized(self._fn, xs)
        return _evaluate_pointwise(self._fn, xs)

    def __repr__(self) -> str:
        shown = self.symbolic if self.symbolic is not None else getattr(self._fn, "__name__", self._fn)
        return f"RealFunction({shown!r}, vectorized={self.vectorized})"


class ScalarField:
    """A scalar field ``z = g(x, y)``."""

    __slots__ = ("_fn", "vectorized", "symbolic")

    def __init__(
        self,
        fn: Callable[[Any, Any], Any],
        *,
        vectorized: bool = False,
        symbolic: Optional[sp.Basic] = None,
    ) -> None:
        if not callable(fn):
            raise TypeError(f"ScalarField expects a callable, got {type(fn).__name__}")
        self._fn = fn
        self.vectorized = bool(vectorized)
        self.symbolic = symbolic

    @classmethod
    def from_expr(
        cls,
        expr: Any,
        vars: Optional[tuple[sp.Symbol, sp.Symbol]] = None,
        *,
        bindings: Optional[Mapping[sp.Symbol, Any]] = None,
    ) -> "ScalarField":
        expr = sp.sympify(expr)
        vars_ = tuple(vars) if vars is not None else _default_vars(expr, ("x", "y"), bindings)
        if len(vars_) != 2:
            raise ValueError(f"ScalarField needs exactly two variables, got {len(vars_)}")
        compiled = numpify_cached(expr, vars=vars_, bindings=bindings)
        return cls(compiled, vectorized=True, symbolic=expr)

    def evaluate(self, x: float, y: float) -> float:
        return _call_or_nan(self._fn, float(x), float(y))

    __call__ = evaluate

    def evaluate_many(self, xs: Any, ys: Any) -> np.ndarray:
        """Evaluate on broadcast-compatible arrays (e.g. a meshgrid)."""
        xs = np.asarray(xs, dtype=float)
        ys = np.asarray(ys, dtype=float)
        if self.vectorized:
            return _evaluate_vectorized(self._fn, xs, ys)
        return _evaluate_pointwise(self._fn, xs, ys)

    def __repr__(self) -> str:
        shown = self.symbolic if self.symbolic is not None else getattr(self._fn, "__name__", self._fn)
        return f"ScalarField({shown!r}, vectorized={self.vectorized})"


class ParametricCurve:
    """A curve ``t -> (x, y, z)`` with an optional natural parameter range."""

    __slots__ = ("_r", "t_range")

    def __init__(
        self,
        r: Callable[[np.ndarray], tuple[Any, Any, Any]],
        *,
        t_range: Optional[tuple[float, float]] = None,
    ) -> None:
        # ``r`` maps an array of parameters to three component arrays.
        self._r = r
        self.t_range = None if t_range is None else (float(t_range[0]), float(t_range[1]))

    @classmethod
    def from_components(
        cls,
        x: FunctionLike,
        y: FunctionLike,
        z: FunctionLike,
        *,
        t_range: Optional[tuple[float, float]] = None,
    ) -> "ParametricCurve":
        fx, fy, fz = as_function(x), as_function(y), as_function(z)
        return cls(
            lambda ts: (fx.evaluate_many(ts), fy.evaluate_many(ts), fz.evaluate_many(ts)),
            t_range=t_range,
        )

    @classmethod
    def from_callable(
        cls,
        fn: Callable[[Any], Sequence[Any]],
        *,
        vectorized: bool = False,
        t_range: Optional[tuple[float, float]] = None,
    ) -> "ParametricCurve":
        """Wrap ``fn(t) -> (x, y, z)``."""
        if not callable(fn):
            raise TypeError(f"ParametricCurve expects a callable, got {type(fn).__name__}")
        if vectorized:
            return cls(lambda ts: tuple(fn(ts)), t_range=t_range)  # type: ignore[arg-type]

        def pointwise(ts: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
            out = np.empty((ts.size, 3), dtype=float)
            for k, t in enumerate(ts.ravel()):
                try:
                    out[k] = [float(v) for v in fn(float(t))]
                except _DOMAIN_ERRORS:
                    out[k] = np.nan
            return out[:, 0], out[:, 1], out[:, 2]

        return cls(pointwise, t_range=t_range)

    def evaluate(self, t: float) -> tuple[float, float, float]:
        x, y, z = self.evaluate_many(np.array([float(t)]))[0]
        return float(x), float(y), float(z)

    __call__ = evaluate

    def evaluate_many(self, ts: Any) -> np.ndarray:
        """Return an ``(n, 3)`` float64 array of curve points."""
        ts = np.asarray(ts, dtype=float).ravel()
        with np.errstate(invalid="ignore", divide="ignore", over="ignore"):
            components = self._r(ts)
        return np.column_stack(
            [np.broadcast_to(np.asarray(c, dtype=float).ravel(), ts.shape) for c in components]
        )


def as_function(obj: Any) -> RealFunction:
    """Coerce callables, SymPy expressions and numbers to :class:`RealFunction`."""
    if isinstance(obj, RealFunction):
        return obj
    if isinstance(obj, CompiledFunction):
        return RealFunction(obj, vectorized=True, symbolic=obj.symbolic)
    if isinstance(obj, sp.Basic):
        return RealFunction.from_expr(obj)
    if isinstance(obj, Real) and not isinstance(obj, bool):
        return RealFunction.constant(float(obj))
    if callable(obj):
        return RealFunction(obj)
    raise TypeError(
        f"Expected a callable, SymPy expression or number, got {type(obj).__name__}"
    )


def as_scalar_field(obj: Any) -> ScalarField:
    """Coerce callables and SymPy expressions to :class:`ScalarField`."""
    if isinstance(obj, ScalarField):
        return obj
    if isinstance(obj, CompiledFunction):
        return ScalarField(obj, vectorized=True, symbolic=obj.symbolic)
    if isinstance(obj, sp.Basic):
        return ScalarField.from_expr(obj)
    if callable(obj):
        return ScalarField(obj)
    raise TypeError(f"Expected a callable or SymPy expression, got {type(obj).__name__}")


def as_curve(obj: Any) -> ParametricCurve:
    """Coerce ``t -> (x, y, z)`` callables to :class:`ParametricCurve`."""
    if isinstance(obj, ParametricCurve):
        return obj
    if callable(obj):
        return ParametricCurve.from_callable(obj)
    raise TypeError(f"Expected a ParametricCurve or callable, got {type(obj).__name__}")


__all__ = [
    "ParametricCurve",
    "RealFunction",
    "ScalarField",
    "as_curve",
    "as_function",
    "as_scalar_field",
]
