"""Small algebra helpers shared by the solvers and the cheat sheet."""

from __future__ import annotations

from .defaults import NEARLY_EQUAL_EPSILON


def discriminant(a: float, b: float, c: float) -> float:
    """Discriminant ``b**2 - 4*a*c`` of ``a*x**2 + b*x + c``."""
    return (b * b) - (4 * a * c)


def gcd(a: int, b: int) -> int:
    """Greatest common divisor by Euclid's algorithm; always non-negative."""
    while b != 0:
        a, b = b, a % b
    return abs(a)


def lcm(a: int, b: int) -> int:
    """Least common multiple; ``lcm(0, n) == 0``."""
    if a == 0 or b == 0:
        return 0
    return abs(a * b) // gcd(a, b)


def nearly_equal(a: float, b: float, eps: float = NEARLY_EQUAL_EPSILON) -> bool:
    """Relative comparison with an absolute floor of *eps*."""
    if a == b:
        return True
    diff = abs(a - b)
    norm = abs(a) + abs(b)
    return diff < max(eps, eps * norm)


def quadratic_vertex(a: float, b: float, c: float) -> tuple[float, float]:
    """Vertex ``(-b/(2a), c - b**2/(4a))`` of a parabola.

    Raises
    ------
    ValueError
        If ``a == 0``.
    """
    if a == 0:
        raise ValueError("Coefficient 'a' must not be zero for a parabola vertex.")
    return -b / (2 * a), c - (b * b) / (4 * a)


__all__ = ["discriminant", "gcd", "lcm", "nearly_equal", "quadratic_vertex"]
