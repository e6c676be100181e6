"""Immutable result of a narrated solve.

A ``SolveResult`` is either a unique solution (with an optional display-only
fraction string), infinitely many solutions, or no solution, together with the
ordered narration of the algebraic steps that produced it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from .defaults import DEFAULT_DECIMAL_PLACES


class SolutionKind(Enum):
    UNIQUE = "unique"
    INFINITE = "infinite"
    NONE = "none"


@dataclass(frozen=True)
class SolveFormatOptions:
    """Narration formatting options.

    Parameters
    ----------
    decimal_places : int
        Rounding used for the ``x ≈ ...`` step and :meth:`SolveResult.final_line`.
    use_fractions_in_steps : bool
        Attach a non-reduced ``"numerator/denominator"`` string to unique
        results. This is formatting only; nothing is simplified.
    """

    decimal_places: int = DEFAULT_DECIMAL_PLACES
    use_fractions_in_steps: bool = False

    def __post_init__(self) -> None:
        if self.decimal_places < 0:
            raise ValueError(f"decimal_places must be >= 0, got {self.decimal_places}")


@dataclass(frozen=True)
class SolveResult:
    """Outcome of a narrated solve.

    Parameters
    ----------
    kind : SolutionKind
        Which variant this is.
    value : float or None
        The solution, only for ``UNIQUE``.
    exact : str or None
        Non-reduced fraction display, only for ``UNIQUE`` and only when
        requested through :class:`SolveFormatOptions`.
    steps : tuple[str, ...]
        Narration in the order the steps were taken.
    """

    kind: SolutionKind
    value: Optional[float] = None
    exact: Optional[str] = None
    steps: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.kind is SolutionKind.UNIQUE:
            if self.value is None:
                raise ValueError("A unique SolveResult requires a value")
        elif self.value is not None or self.exact is not None:
            raise ValueError(f"A {self.kind.value} SolveResult carries no value")
        object.__setattr__(self, "steps", tuple(self.steps))

    @classmethod
    def unique(cls, value: float, exact: Optional[str] = None, steps: Iterable[str] = ()) -> "SolveResult":
        return cls(SolutionKind.UNIQUE, float(value), exact, tuple(steps))

    @classmethod
    def infinite(cls, steps: Iterable[str] = ()) -> "SolveResult":
        return cls(SolutionKind.INFINITE, steps=tuple(steps))

    @classmethod
    def none(cls, steps: Iterable[str] = ()) -> "SolveResult":
        return cls(SolutionKind.NONE, steps=tuple(steps))

    @property
    def is_unique(self) -> bool:
        return self.kind is SolutionKind.UNIQUE

    @property
    def is_infinite(self) -> bool:
        return self.kind is SolutionKind.INFINITE

    @property
    def is_none(self) -> bool:
        return self.kind is SolutionKind.NONE

    def final_line(self, decimals: int = DEFAULT_DECIMAL_PLACES) -> str:
        """Return the closing narration line, preferring the exact display."""
        if self.kind is SolutionKind.UNIQUE:
            shown = self.exact if self.exact is not None else format_number(round(self.value, decimals))
            return f"Final: x = {shown}"
        if self.kind is SolutionKind.INFINITE:
            return "Final: Infinite solutions."
        return "Final: No solution."


def format_number(value: float) -> str:
    """Shortest display of *value*: ``4.0 -> "4"``, ``12.6 -> "12.6"``.

    Negative zero keeps its sign (``"-0"``).
    """
    value = float(value)
    if value == 0.0 and math.copysign(1.0, value) < 0:
        return "-0"
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(value)


__all__ = ["SolutionKind", "SolveFormatOptions", "SolveResult", "format_number"]
