"""Immutable equation value types.

``Linear`` (``y = a*x + b``), ``Quadratic`` (``y = a*x**2 + b*x + c``) and
``Polynomial`` (ascending coefficients, index 0 is the constant term). All
three evaluate on scalars and on NumPy arrays, and convert to SymPy
expressions for display.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from numbers import Real
from typing import Any

import sympy as sp

_X = sp.Symbol("x")


@dataclass(frozen=True)
class Linear:
    """``y = a*x + b``."""

    a: float
    b: float

    def evaluate(self, x: Any) -> Any:
        return self.a * x + self.b

    __call__ = evaluate

    def to_polynomial(self) -> "Polynomial":
        return Polynomial(self.b, self.a)

    def to_expr(self, x: sp.Symbol = _X) -> sp.Expr:
        return sp.Float(self.a) * x + sp.Float(self.b)


@dataclass(frozen=True)
class Quadratic:
    """``y = a*x**2 + b*x + c``.

    ``a == 0`` is representable; the quadratic solver rejects it rather than
    quietly solving the linear equation.
    """

    a: float
    b: float
    c: float

    @classmethod
    def from_coefficients(cls, a: float, b: float, c: float) -> "Quadratic":
        return cls(a, b, c)

    def evaluate(self, x: Any) -> Any:
        return self.a * x * x + self.b * x + self.c

    __call__ = evaluate

    def to_polynomial(self) -> "Polynomial":
        return Polynomial(self.c, self.b, self.a)

    def to_expr(self, x: sp.Symbol = _X) -> sp.Expr:
        return sp.Float(self.a) * x**2 + sp.Float(self.b) * x + sp.Float(self.c)


@dataclass(frozen=True, init=False)
class Polynomial:
    """Real polynomial with coefficients in ascending degree order.

    ``Polynomial(2, -3, 1)`` is ``2 - 3x + x**2``. A single iterable argument
    is unpacked, so ``Polynomial([2, -3, 1])`` is the same polynomial.
    Trailing zero coefficients are kept and count towards :attr:`degree`.
    """

    coefficients: tuple[float, ...]

    def __init__(self, *coefficients: Any) -> None:
        if len(coefficients) == 1 and isinstance(coefficients[0], Iterable) and not isinstance(
            coefficients[0], (str, bytes)
        ):
            coefficients = tuple(coefficients[0])
        if not coefficients:
            raise ValueError("Polynomial must have at least one coefficient.")
        coeffs: list[float] = []
        for c in coefficients:
            if isinstance(c, bool) or not isinstance(c, (Real, sp.Basic)):
                raise TypeError(f"Polynomial coefficients must be real numbers, got {type(c).__name__}")
            coeffs.append(float(c))
        object.__setattr__(self, "coefficients", tuple(coeffs))

    @classmethod
    def from_expr(cls, expr: Any, x: sp.Symbol = _X) -> "Polynomial":
        """Build a polynomial from a SymPy expression in ``x``.

        Raises
        ------
        ValueError
            If ``expr`` is not a polynomial in ``x`` with numeric coefficients.
        """
        try:
            poly = sp.Poly(sp.sympify(expr), x)
        except sp.PolynomialError as e:
            raise ValueError(f"{expr!r} is not a polynomial in {x}") from e
        coeffs = poly.all_coeffs()
        if any(not c.is_number for c in coeffs):
            raise ValueError(f"{expr!r} has non-numeric coefficients in {x}")
        return cls(*reversed(coeffs))

    @property
    def degree(self) -> int:
        return len(self.coefficients) - 1

    def evaluate(self, x: Any) -> Any:
        # Horner
        result: Any = 0.0
        for c in reversed(self.coefficients):
            result = result * x + c
        return result

    __call__ = evaluate

    def to_expr(self, x: sp.Symbol = _X) -> sp.Expr:
        return sp.Add(*(sp.Float(c) * x**i for i, c in enumerate(self.coefficients)))

    def __str__(self) -> str:
        return " + ".join(f"{_format_coefficient(c)}x^{i}" for i, c in enumerate(self.coefficients))


def _format_coefficient(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return repr(value)


__all__ = ["Linear", "Polynomial", "Quadratic"]
