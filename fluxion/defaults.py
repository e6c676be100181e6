"""Library-wide defaults and the ``DEFAULT`` sentinel.

Purpose
-------
Collects the numeric tolerances, sample counts and colors shared by the
solvers and geometry builders so they live in one discoverable place. Call
sites accept ``DEFAULT`` (or the string ``"default"``) wherever a sample count
or resolution may be left to the library.

Notes
-----
The tolerances are part of the observable contract: ``EPSILON`` decides when a
linear coefficient counts as zero and ``DETERMINANT_EPSILON`` decides when a
2x2 system is singular.
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


# Solver tolerances
EPSILON = 1e-12
DETERMINANT_EPSILON = 1e-10
NEARLY_EQUAL_EPSILON = 1e-9

# Narration
DEFAULT_DECIMAL_PLACES = 4

# Sampling
MIN_SAMPLES = 2
DEFAULT_PLOT_SAMPLES = 512
DEFAULT_FUNCTION_SAMPLES = 1000
DEFAULT_CURVE_SAMPLES = 1000
DEFAULT_LINE_SAMPLES = 512
DEFAULT_SURFACE_RESOLUTION = 120
DEFAULT_POLYLINE_MIN_SAMPLES = 512

# View padding
Y_RANGE_PAD_FRACTION = 0.1
Y_RANGE_FLAT_SPAN = 1e-6
FALLBACK_Y_RANGE = (-1.0, 1.0)

# Colors are linear RGB triples in [0, 1].
DEFAULT_FUNCTION_COLOR = (0.2, 0.8, 0.3)
DEFAULT_POLYLINE_COLOR = (1.0, 1.0, 1.0)
DEFAULT_LINE_WIDTH = 2.0


class _DefaultSentinel:
    """Sentinel value meaning "use the library default"."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "DEFAULT"


DEFAULT = _DefaultSentinel()


def is_default(value: Any) -> bool:
    """Return True when *value* requests library-default behavior."""
    return value is DEFAULT or value is None or (
        isinstance(value, str) and value.lower() == "default"
    )


def resolve_samples(value: Any, default: int, *, name: str = "samples") -> int:
    """Return a usable sample count.

    ``DEFAULT``/``None``/``"default"`` resolve to *default*. Counts below
    ``MIN_SAMPLES`` are clamped rather than rejected.

    Raises
    ------
    TypeError
        If *value* is not an integer-like number.
    """
    if is_default(value):
        value = default
    if isinstance(value, bool) or not hasattr(value, "__index__"):
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        else:
            raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    count = int(value)
    if count < MIN_SAMPLES:
        logger.debug("%s=%d clamped to %d", name, count, MIN_SAMPLES)
        return MIN_SAMPLES
    return count


def as_rows(values: Any, width: int, *, name: str, dtype: Any = np.float32) -> np.ndarray:
    """Return *values* as an ``(n, width)`` array.

    Accepts ``(n, width)`` arrays and flat buffers whose length is a multiple of
    *width*. Anything else raises ``ValueError`` instead of being reshaped.
    """
    arr = np.array(values, dtype=dtype)
    if arr.ndim == 1 and arr.size % width == 0:
        return arr.reshape(-1, width)
    if arr.ndim == 2 and arr.shape[1] == width:
        return arr
    raise ValueError(
        f"{name} must have shape (n, {width}) or be a flat array of {width}-tuples, "
        f"got shape {arr.shape}"
    )


__all__ = [
    "DEFAULT",
    "DEFAULT_CURVE_SAMPLES",
    "DEFAULT_DECIMAL_PLACES",
    "DEFAULT_FUNCTION_COLOR",
    "DEFAULT_FUNCTION_SAMPLES",
    "DEFAULT_LINE_SAMPLES",
    "DEFAULT_LINE_WIDTH",
    "DEFAULT_PLOT_SAMPLES",
    "DEFAULT_POLYLINE_COLOR",
    "DEFAULT_POLYLINE_MIN_SAMPLES",
    "DEFAULT_SURFACE_RESOLUTION",
    "DETERMINANT_EPSILON",
    "EPSILON",
    "FALLBACK_Y_RANGE",
    "MIN_SAMPLES",
    "NEARLY_EQUAL_EPSILON",
    "Y_RANGE_FLAT_SPAN",
    "Y_RANGE_PAD_FRACTION",
    "as_rows",
    "is_default",
    "resolve_samples",
]
