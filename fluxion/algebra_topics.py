"""Algebra cheat-sheet content: named formulas grouped by topic."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FormulaItem:
    name: str
    formula: str
    notes: str = ""


@dataclass(frozen=True)
class AlgebraTopic:
    title: str
    items: tuple[FormulaItem, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def find(self, name: str) -> FormulaItem:
        """Return the item called *name*, ignoring case.

        Raises
        ------
        KeyError
            If the topic has no such item.
        """
        for item in self.items:
            if item.name.lower() == name.lower():
                return item
        raise KeyError(f"{self.title!r} has no formula named {name!r}")


BASICS: tuple[AlgebraTopic, ...] = (
    AlgebraTopic(
        "Linear Equations",
        (
            FormulaItem("Slope-Intercept", "y = m x + b", "m = slope, b = y-intercept"),
            FormulaItem("Point-Slope", "y - y₁ = m(x - x₁)"),
        ),
    ),
    AlgebraTopic(
        "Quadratic",
        (
            FormulaItem("Standard Form", "y = ax² + bx + c"),
            FormulaItem("Vertex", "x_v = -b/(2a),  y_v = c - b²/(4a)"),
            FormulaItem("Roots (Quadratic Formula)", "x = (-b ± √(b² - 4ac)) / (2a)"),
        ),
    ),
    AlgebraTopic(
        "Exponent Rules",
        (
            FormulaItem("Product", "a^m * a^n = a^(m+n)"),
            FormulaItem("Quotient", "a^m / a^n = a^(m-n)"),
            FormulaItem("Power of Power", "(a^m)^n = a^(mn)"),
        ),
    ),
)


def topic(title: str) -> AlgebraTopic:
    """Look up a :data:`BASICS` topic by title, ignoring case."""
    for t in BASICS:
        if t.title.lower() == title.lower():
            return t
    raise KeyError(f"No algebra topic titled {title!r}")


__all__ = ["AlgebraTopic", "BASICS", "FormulaItem", "topic"]
