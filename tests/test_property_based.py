"""Property-based checks for the solvers and geometry builders."""

from __future__ import annotations

import math

import numpy as np
import pytest

from fluxion.equations import Polynomial
from fluxion.mesh import build_surface
from fluxion.plot2d import sample_function
from fluxion.solvers import solve_linear, solve_linear_two_sided, solve_polynomial, solve_quadratic

try:
    from hypothesis import assume, given, settings
    from hypothesis import strategies as st
except ModuleNotFoundError:  # pragma: no cover - environment-specific fallback
    pytest.skip("hypothesis is required for property-based tests", allow_module_level=True)


MODERATE_FLOATS = st.floats(min_value=-1e6, max_value=1e6, allow_nan=False, allow_infinity=False)
NONZERO_MODERATE = MODERATE_FLOATS.filter(lambda v: abs(v) > 1e-3)
# Zero or comfortably away from it, so roots stay finite.
COEFFICIENTS = st.one_of(st.just(0.0), NONZERO_MODERATE)


@given(a=NONZERO_MODERATE, b=MODERATE_FLOATS)
def test_linear_root_satisfies_equation(a: float, b: float) -> None:
    x = solve_linear(a, b)
    assert a * x + b == pytest.approx(0.0, abs=1e-9 * max(1.0, abs(b)))


@given(a=MODERATE_FLOATS, b=MODERATE_FLOATS, c=MODERATE_FLOATS, d=MODERATE_FLOATS)
def test_two_sided_unique_value_balances_both_sides(a: float, b: float, c: float, d: float) -> None:
    res = solve_linear_two_sided(a, b, c, d)
    assume(res.is_unique and abs(a - c) > 1e-3)
    x = res.value
    assert a * x + b == pytest.approx(c * x + d, rel=1e-6, abs=1e-6 * max(1.0, abs(b), abs(d)))


@given(
    r1=st.floats(min_value=-100, max_value=100, allow_nan=False),
    r2=st.floats(min_value=-100, max_value=100, allow_nan=False),
)
def test_quadratic_recovers_constructed_roots(r1: float, r2: float) -> None:
    # (x - r1)(x - r2) = x**2 - (r1 + r2) x + r1 r2
    x1, x2 = solve_quadratic(1.0, -(r1 + r2), r1 * r2)
    assume(not math.isnan(x1))
    assert sorted([x1, x2]) == pytest.approx(sorted([r1, r2]), abs=1e-4)


@given(coeffs=st.lists(COEFFICIENTS, min_size=1, max_size=3))
def test_polynomial_roots_are_real_and_unique(coeffs: list[float]) -> None:
    roots = solve_polynomial(Polynomial(coeffs))
    assert all(math.isfinite(r) for r in roots)
    assert len(set(roots)) == len(roots)
    assert len(roots) <= max(0, len(coeffs) - 1)


@settings(max_examples=25, deadline=None)
@given(resolution=st.integers(min_value=-3, max_value=20))
def test_surface_buffer_invariants(resolution: int) -> None:
    mesh = build_surface(lambda x, y: math.sin(x) * math.cos(y), -2, 2, -1, 1, resolution)
    r = max(2, resolution)
    assert mesh.positions.shape == (r * r, 3)
    assert mesh.indices.size == (r - 1) ** 2 * 6
    assert int(mesh.indices.max()) < r * r
    np.testing.assert_allclose(np.linalg.norm(mesh.normals, axis=1), 1.0, atol=1e-5)


@settings(max_examples=25, deadline=None)
@given(samples=st.integers(min_value=-5, max_value=200))
def test_sample_function_count_and_order(samples: int) -> None:
    plot = sample_function(math.tanh, -3, 3, samples)
    assert len(plot) == max(2, samples)
    assert np.all(np.diff(plot.x) > 0)
    assert plot.x[0] == -3 and plot.x[-1] == pytest.approx(3)


@given(a=MODERATE_FLOATS, b=MODERATE_FLOATS, c=MODERATE_FLOATS, d=MODERATE_FLOATS)
def test_two_sided_solve_is_repeatable(a: float, b: float, c: float, d: float) -> None:
    assert solve_linear_two_sided(a, b, c, d) == solve_linear_two_sided(a, b, c, d)


@given(a=NONZERO_MODERATE, b=MODERATE_FLOATS, c=MODERATE_FLOATS)
def test_quadratic_solve_is_repeatable(a: float, b: float, c: float) -> None:
    first = solve_quadratic(a, b, c)
    second = solve_quadratic(a, b, c)
    np.testing.assert_array_equal(first, second)


@settings(max_examples=25, deadline=None)
@given(samples=st.integers(min_value=2, max_value=200))
def test_sample_function_is_repeatable(samples: int) -> None:
    first = sample_function(math.sqrt, -1, 1, samples)
    second = sample_function(math.sqrt, -1, 1, samples)
    np.testing.assert_array_equal(first.points, second.points)
