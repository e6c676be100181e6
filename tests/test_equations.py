from __future__ import annotations

import dataclasses

import numpy as np
import pytest
import sympy as sp

from fluxion.equations import Linear, Polynomial, Quadratic


def test_linear_and_quadratic_evaluate() -> None:
    assert Linear(2, 1).evaluate(3) == 7
    assert Quadratic(1, -3, 2)(2) == 0
    assert Quadratic.from_coefficients(1, 0, -4) == Quadratic(1, 0, -4)


def test_equations_are_immutable() -> None:
    eq = Linear(1.0, 2.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        eq.a = 3.0  # type: ignore[misc]

    p = Polynomial(1, 2)
    with pytest.raises(dataclasses.FrozenInstanceError):
        p.coefficients = (0.0,)  # type: ignore[misc]


def test_polynomial_degree_keeps_trailing_zeros() -> None:
    p = Polynomial(1, 2, 0)
    assert p.degree == 2
    assert p.coefficients == (1.0, 2.0, 0.0)


def test_polynomial_accepts_single_iterable() -> None:
    assert Polynomial([2, -3, 1]) == Polynomial(2, -3, 1)


def test_polynomial_rejects_empty_and_non_numeric() -> None:
    with pytest.raises(ValueError, match="at least one coefficient"):
        Polynomial()
    with pytest.raises(ValueError, match="at least one coefficient"):
        Polynomial([])
    with pytest.raises(TypeError, match="real numbers"):
        Polynomial(1, "2")


def test_polynomial_horner_matches_direct_evaluation() -> None:
    p = Polynomial(2, -3, 1)
    assert p.evaluate(2) == 0
    assert p.evaluate(1) == 0
    assert p(0) == 2

    xs = np.linspace(-3, 3, 13)
    np.testing.assert_allclose(p.evaluate(xs), 2 - 3 * xs + xs**2)


def test_polynomial_str_lists_ascending_terms() -> None:
    assert str(Polynomial(2, -3, 1)) == "2x^0 + -3x^1 + 1x^2"
    assert str(Polynomial(0.5)) == "0.5x^0"


def test_polynomial_from_expr_roundtrips_coefficients() -> None:
    x = sp.Symbol("x")
    p = Polynomial.from_expr(x**2 - 3 * x + 2, x)
    assert p == Polynomial(2, -3, 1)
    assert sp.simplify(p.to_expr(x) - (x**2 - 3 * x + 2)) == 0


def test_polynomial_from_expr_rejects_non_polynomials() -> None:
    x = sp.Symbol("x")
    with pytest.raises(ValueError, match="not a polynomial"):
        Polynomial.from_expr(sp.sin(x), x)


def test_to_polynomial_orders_coefficients_ascending() -> None:
    assert Linear(3, 4).to_polynomial() == Polynomial(4, 3)
    assert Quadratic(1, -3, 2).to_polynomial() == Polynomial(2, -3, 1)
