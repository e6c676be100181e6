"""Closed-form solvers for linear, quadratic and low-degree polynomial equations.

Purpose
-------
Every solver here is a pure function. Degenerate but well-formed equations
(``0*x + 0 = 0``, ``0*x + 1 = 0``, a negative discriminant) are reported as
values: a ``SolveResult`` variant, NaN, or an empty root tuple. Structurally
invalid requests raise:

- ``ValueError`` when :func:`solve_quadratic` receives ``a == 0``,
- :class:`SingularSystemError` when a 2x2 system has no unique solution,
- ``NotImplementedError`` for polynomials of degree three or more.

Narration
---------
:func:`solve_linear_two_sided` and :func:`solve_linear_steps` record each
algebraic step with the numbers substituted, e.g.::

    Move all terms to left side: (4 - 8)x + (12.6 - 9.6) = 0
    Simplify: -4x + 3 = 0
    Divide both sides by -4: x = -3/-4
    x ≈ 0.75

Examples
--------
>>> solve_quadratic(1, -3, 2)
(2.0, 1.0)
>>> solve_system_2x2(2, 1, 5, 1, -1, 1)
(2.0, 1.0)
>>> solve_linear_two_sided(4, 12.6, 8, 9.6).value
0.75
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Iterator
from typing import Optional, Union

from .defaults import DETERMINANT_EPSILON, EPSILON
from .equations import Linear, Polynomial, Quadratic
from .solve_result import SolutionKind, SolveFormatOptions, SolveResult, format_number

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

_DEFAULT_OPTIONS = SolveFormatOptions()


class SingularSystemError(ValueError):
    """Raised when a linear system has no unique solution."""


def solve_linear(a: float, b: float) -> float:
    """Root of ``a*x + b = 0``, or NaN when ``|a| < EPSILON``.

    NaN covers both "no solution" and "every x"; use
    :func:`solve_linear_steps` when the caller needs to tell them apart.
    """
    if abs(a) < EPSILON:
        return math.nan
    return -b / a


def solve_linear_two_sided(
    a: float,
    b: float,
    c: float,
    d: float,
    options: Optional[SolveFormatOptions] = None,
) -> SolveResult:
    """Solve ``a*x + b = c*x + d`` with narrated steps.

    The equation is normalized to ``A*x + B = 0`` with ``A = a - c`` and
    ``B = b - d`` and then classified:

    - ``|A| < EPSILON`` and ``|B| < EPSILON``: infinitely many solutions,
    - ``|A| < EPSILON`` only: no solution,
    - otherwise the unique solution ``-B/A``.
    """
    fmt = options or _DEFAULT_OPTIONS
    steps: list[str] = []

    A = a - c
    B = b - d

    steps.append(
        f"Move all terms to left side: ({format_number(a)} - {format_number(c)})x"
        f" + ({format_number(b)} - {format_number(d)}) = 0"
    )
    steps.append(f"Simplify: {format_number(A)}x + {format_number(B)} = 0")

    if abs(A) < EPSILON:
        if abs(B) < EPSILON:
            steps.append("Result: Infinite solutions (identity).")
            return SolveResult.infinite(steps)
        steps.append("Result: No solution (contradiction).")
        return SolveResult.none(steps)

    value = -B / A
    fraction = f"{format_number(-B)}/{format_number(A)}"
    exact = fraction if fmt.use_fractions_in_steps else None

    steps.append(f"Divide both sides by {format_number(A)}: x = {fraction}")
    steps.append(f"x ≈ {format_number(round(value, fmt.decimal_places))}")

    return SolveResult.unique(value, exact, steps)


def solve_linear_steps(
    a: float,
    b: float,
    options: Optional[SolveFormatOptions] = None,
) -> SolveResult:
    """Solve the one-sided equation ``a*x + b = 0`` with narrated steps."""
    fmt = options or _DEFAULT_OPTIONS

    if abs(a) < EPSILON:
        if abs(b) < EPSILON:
            return SolveResult.infinite(["Any x works (identity)."])
        return SolveResult.none(["No solution (contradiction)."])

    fraction = f"{format_number(-b)}/{format_number(a)}"
    value = -b / a
    steps = [
        f"Subtract {format_number(b)} from both sides → {format_number(a)}x = {format_number(-b)}",
        f"Divide both sides by {format_number(a)} → x = {fraction}",
        f"x ≈ {format_number(round(value, fmt.decimal_places))}",
    ]
    exact = fraction if fmt.use_fractions_in_steps else None
    return SolveResult.unique(value, exact, steps)


def explain_linear(a: float, b: float, c: float, d: float) -> tuple[str, ...]:
    """Narration for ``a*x + b = c*x + d`` without the result."""
    return solve_linear_two_sided(a, b, c, d).steps


def solve_linear_many(
    items: Optional[Iterable[tuple[float, float, float, float]]],
    options: Optional[SolveFormatOptions] = None,
) -> Iterator[SolveResult]:
    """Lazily solve many ``(a, b, c, d)`` two-sided equations."""
    if items is None:
        return
    for a, b, c, d in items:
        yield solve_linear_two_sided(a, b, c, d, options)


def solve_quadratic(a: float, b: float, c: float) -> tuple[float, float]:
    """Real roots of ``a*x**2 + b*x + c = 0``.

    Returns ``(x1, x2)`` with ``x1`` using ``+sqrt(d)`` and ``x2`` using
    ``-sqrt(d)``; the order is fixed, not sorted. A negative discriminant
    yields ``(nan, nan)``.

    Raises
    ------
    ValueError
        If ``a == 0``.
    """
    if a == 0:
        raise ValueError("Coefficient 'a' must not be zero for a quadratic equation.")

    d = b * b - 4 * a * c
    if d < 0:
        return math.nan, math.nan

    sqrt_d = math.sqrt(d)
    denom = 2 * a
    return (-b + sqrt_d) / denom, (-b - sqrt_d) / denom


def solve_polynomial(p: Polynomial) -> tuple[float, ...]:
    """Real roots of a polynomial of degree two or less.

    Degree 0 returns ``()`` whether the constant is zero (every x) or not (no
    x); :func:`classify_constant` separates the two. A zero leading
    coefficient degrades to the lower-degree case.

    Raises
    ------
    NotImplementedError
        For degree three or more.
    """
    coeffs = p.coefficients
    deg = p.degree

    if deg == 0:
        return ()

    if deg == 1:
        a0, a1 = coeffs[0], coeffs[1]
        if a1 == 0:
            return ()
        return (-a0 / a1,)

    if deg == 2:
        a0, a1, a2 = coeffs[0], coeffs[1], coeffs[2]
        if a2 == 0:
            logger.debug("solve_polynomial: %s degenerates to linear", p)
            if a1 == 0:
                return ()
            return (-a0 / a1,)

        x1, x2 = solve_quadratic(a2, a1, a0)
        roots: list[float] = []
        if not math.isnan(x1):
            roots.append(x1)
        if not math.isnan(x2) and x2 != x1:
            roots.append(x2)
        return tuple(roots)

    raise NotImplementedError(f"Polynomial degree {deg} not supported yet.")


def classify_constant(c: float) -> SolutionKind:
    """Classify the degree-0 equation ``c = 0``."""
    return SolutionKind.INFINITE if abs(c) < EPSILON else SolutionKind.NONE


def solve_system_2x2(
    a1: float, b1: float, c1: float,
    a2: float, b2: float, c2: float,
) -> tuple[float, float]:
    """Solve ``a1*x + b1*y = c1``, ``a2*x + b2*y = c2`` by Cramer's rule.

    Raises
    ------
    SingularSystemError
        If ``|det| < DETERMINANT_EPSILON``.
    """
    det = a1 * b2 - a2 * b1
    if abs(det) < DETERMINANT_EPSILON:
        raise SingularSystemError("System has no unique solution (determinant is zero).")

    x = (c1 * b2 - c2 * b1) / det
    y = (a1 * c2 - a2 * c1) / det
    return x, y


Equation = Union[Linear, Quadratic, Polynomial]


def solve(equation: Equation) -> Union[float, tuple[float, float], tuple[float, ...]]:
    """Dispatch to the solver matching the equation type.

    ``Linear`` -> :func:`solve_linear`, ``Quadratic`` -> :func:`solve_quadratic`,
    ``Polynomial`` -> :func:`solve_polynomial`.
    """
    if isinstance(equation, Linear):
        return solve_linear(equation.a, equation.b)
    if isinstance(equation, Quadratic):
        return solve_quadratic(equation.a, equation.b, equation.c)
    if isinstance(equation, Polynomial):
        return solve_polynomial(equation)
    raise TypeError(f"solve() expects Linear, Quadratic or Polynomial, got {type(equation).__name__}")


__all__ = [
    "SingularSystemError",
    "classify_constant",
    "explain_linear",
    "solve",
    "solve_linear",
    "solve_linear_many",
    "solve_linear_steps",
    "solve_linear_two_sided",
    "solve_polynomial",
    "solve_quadratic",
    "solve_system_2x2",
]
