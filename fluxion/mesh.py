"""Triangle meshes and line strips sampled from continuous objects.

Purpose
-------
:func:`build_surface` grid-samples a scalar field ``z = g(x, y)`` into an
indexed triangle mesh with per-vertex normals. :func:`build_polyline` samples
a parametric curve into an ordered point sequence.

Conventions
-----------
- Renderer space is Y-up: a sample ``(x, y, z)`` is stored as position
  ``(x, z, y)``. The field's output becomes the vertical axis and the field's
  ``y`` input becomes depth.
- Grid node ``(i, j)`` has vertex index ``j * nx + i``.
- Each grid quad emits triangles ``(i0, i2, i1)`` and ``(i1, i2, i3)`` with
  ``i0 = j*nx + i``, ``i1 = i0 + 1``, ``i2 = i0 + nx``, ``i3 = i2 + 1``.
- A mesh with no indices and no normals is a line strip, not triangles.
- Evaluation runs in float64; buffers are narrowed to float32 once, when the
  :class:`Mesh3D` is built.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Optional

import numpy as np

from .defaults import DEFAULT_CURVE_SAMPLES, DEFAULT_SURFACE_RESOLUTION, as_rows, resolve_samples
from .scalar_field import CurveLike, FieldLike, as_curve, as_scalar_field

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

_UP = np.array([0.0, 1.0, 0.0])


def _readonly(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array


@dataclass(frozen=True, eq=False)
class Mesh3D:
    """Renderable geometry as three parallel buffers.

    Parameters
    ----------
    positions : numpy.ndarray
        ``(n, 3)`` float32 vertex positions.
    normals : numpy.ndarray
        ``(n, 3)`` float32 unit normals, or ``(0, 3)`` for line strips.
    indices : numpy.ndarray
        Flat uint32 triangle indices (triples), or empty for line strips.

    Raises
    ------
    ValueError
        If a buffer has the wrong width, an index is out of range, the index
        count is not a multiple of three, or normals and positions disagree
        in length.
    """

    positions: np.ndarray
    normals: np.ndarray
    indices: np.ndarray

    def __post_init__(self) -> None:
        positions = as_rows(self.positions, 3, name="positions")
        normals = as_rows(self.normals, 3, name="normals")
        raw_indices = np.asarray(self.indices).ravel()

        if raw_indices.size:
            if not np.issubdtype(raw_indices.dtype, np.integer):
                raise ValueError(f"indices must be integers, got dtype {raw_indices.dtype}")
            if raw_indices.size % 3:
                raise ValueError(f"index count {raw_indices.size} is not a multiple of 3")
            if raw_indices.min() < 0 or raw_indices.max() >= len(positions):
                raise ValueError(
                    f"indices must lie in [0, {len(positions)}), got "
                    f"[{raw_indices.min()}, {raw_indices.max()}]"
                )
        if len(normals) and len(normals) != len(positions):
            raise ValueError(
                f"normals has {len(normals)} entries but positions has {len(positions)}"
            )

        indices = np.array(raw_indices, dtype=np.uint32)
        object.__setattr__(self, "positions", _readonly(positions))
        object.__setattr__(self, "normals", _readonly(normals))
        object.__setattr__(self, "indices", _readonly(indices))

    @property
    def vertex_count(self) -> int:
        return len(self.positions)

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    @property
    def is_line_strip(self) -> bool:
        return len(self.indices) == 0 and len(self.normals) == 0

    def bounds(self) -> Optional[tuple[np.ndarray, np.ndarray]]:
        """Return ``(min_xyz, max_xyz)`` over finite positions, or ``None``."""
        finite = self.positions[np.isfinite(self.positions).all(axis=1)]
        if not len(finite):
            return None
        return finite.min(axis=0), finite.max(axis=0)

    def interleaved(self) -> np.ndarray:
        """Return contiguous float32 rows ``[px, py, pz, nx, ny, nz]``.

        Line strips have no normals and yield ``[px, py, pz]`` rows.
        """
        if len(self.normals):
            return np.ascontiguousarray(np.hstack([self.positions, self.normals]))
        return np.ascontiguousarray(self.positions.copy())

    def __repr__(self) -> str:
        kind = "line strip" if self.is_line_strip else f"{self.triangle_count} triangles"
        return f"Mesh3D({self.vertex_count} vertices, {kind})"


def _grid_normals(pos: np.ndarray) -> np.ndarray:
    """Central-difference normals for a ``(ny, nx, 3)`` position grid.

    Neighbours are clamped at the border, giving one-sided differences there.
    """
    left = np.concatenate([pos[:, :1], pos[:, :-1]], axis=1)
    right = np.concatenate([pos[:, 1:], pos[:, -1:]], axis=1)
    below = np.concatenate([pos[:1], pos[:-1]], axis=0)
    above = np.concatenate([pos[1:], pos[-1:]], axis=0)

    horizontal = right - left
    vertical = above - below
    with np.errstate(invalid="ignore", over="ignore"):
        n = np.cross(vertical, horizontal)
        length = np.linalg.norm(n, axis=-1, keepdims=True)
    ok = np.isfinite(length) & (length > 0)
    safe_length = np.where(ok, length, 1.0)
    return np.where(ok, n / safe_length, _UP)


def _grid_indices(nx: int, ny: int) -> np.ndarray:
    jj, ii = np.meshgrid(np.arange(ny - 1), np.arange(nx - 1), indexing="ij")
    i0 = jj * nx + ii
    i1 = i0 + 1
    i2 = i0 + nx
    i3 = i2 + 1
    return np.stack([i0, i2, i1, i1, i2, i3], axis=-1).reshape(-1)


def build_surface(
    field: FieldLike,
    x_min: float,
    x_max: float,
    y_min: float,
    y_max: float,
    resolution: Any = None,
) -> Mesh3D:
    """Sample ``z = field(x, y)`` on a regular grid into a triangle mesh.

    Parameters
    ----------
    field:
        A :class:`~fluxion.scalar_field.ScalarField`, a two-argument callable,
        or a SymPy expression in ``x`` and ``y``.
    x_min, x_max, y_min, y_max:
        Sampled rectangle, endpoints included.
    resolution:
        Nodes per axis; clamped to at least 2. ``None`` uses
        ``DEFAULT_SURFACE_RESOLUTION``.

    Returns
    -------
    Mesh3D
        ``resolution**2`` vertices with normals and
        ``(resolution - 1)**2 * 2`` triangles.
    """
    g = as_scalar_field(field)
    n = resolve_samples(resolution, DEFAULT_SURFACE_RESOLUTION, name="resolution")
    nx = ny = n

    t0 = time.perf_counter() if logger.isEnabledFor(logging.DEBUG) else None

    dx = (x_max - x_min) / (nx - 1)
    dy = (y_max - y_min) / (ny - 1)
    xs = x_min + np.arange(nx) * dx
    ys = y_min + np.arange(ny) * dy
    X, Y = np.meshgrid(xs, ys, indexing="xy")
    Z = g.evaluate_many(X, Y)

    # Y-up: (x, z, y)
    pos = np.stack([X, Z, Y], axis=-1)
    normals = _grid_normals(pos)
    indices = _grid_indices(nx, ny)

    mesh = Mesh3D(pos.reshape(-1, 3), normals.reshape(-1, 3), indices)
    if t0 is not None:
        logger.debug(
            "build_surface: %dx%d grid, %d triangles in %.2f ms",
            nx, ny, mesh.triangle_count, 1000.0 * (time.perf_counter() - t0),
        )
    return mesh


def build_polyline(
    r: CurveLike,
    t_min: float,
    t_max: float,
    samples: Any = None,
) -> Mesh3D:
    """Sample a parametric curve ``r(t)`` into a line-strip mesh.

    ``samples`` evenly spaced parameters span ``[t_min, t_max]`` inclusive
    (at least 2; ``None`` uses ``DEFAULT_CURVE_SAMPLES``). The result has
    positions only.
    """
    curve = as_curve(r)
    n = resolve_samples(samples, DEFAULT_CURVE_SAMPLES)

    dt = (t_max - t_min) / (n - 1)
    ts = t_min + np.arange(n) * dt
    pts = curve.evaluate_many(ts)

    # Y-up: (x, z, y)
    pos = pts[:, [0, 2, 1]]
    logger.debug("build_polyline: %d samples over [%g, %g]", n, t_min, t_max)
    return Mesh3D(pos, np.empty((0, 3)), np.empty(0, dtype=np.uint32))


__all__ = ["Mesh3D", "build_polyline", "build_surface"]
