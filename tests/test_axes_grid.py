from __future__ import annotations

import numpy as np
import pytest

from fluxion.axes import AxesOptions, build_axes_grid, nearly_multiple, nice_step, tick_values


@pytest.mark.parametrize(
    "lo, hi, expected",
    [
        (0, 10, 1.0),
        (0, 25, 2.0),
        (0, 50, 5.0),
        (0, 80, 10.0),
        (-1, 1, 0.2),
        (0, 0.01, 0.001),
    ],
)
def test_nice_step(lo: float, hi: float, expected: float) -> None:
    assert nice_step(lo, hi) == pytest.approx(expected)


def test_nice_step_handles_empty_span() -> None:
    assert nice_step(3, 3) > 0


def test_tick_values_are_multiples_inside_range() -> None:
    np.testing.assert_allclose(tick_values(-1.5, 2.2, 1.0), [-1, 0, 1, 2])
    np.testing.assert_allclose(tick_values(0, 1, 0.5), [0, 0.5, 1])


def test_tick_values_snap_zero() -> None:
    ticks = tick_values(-0.3, 0.3, 0.1)
    assert 0.0 in ticks.tolist()


def test_tick_values_non_positive_step_is_empty() -> None:
    assert tick_values(0, 1, 0).size == 0
    assert tick_values(0, 1, -1).size == 0


def test_nearly_multiple() -> None:
    assert nearly_multiple(3.0, 1.0)
    assert nearly_multiple(0.6000000001, 0.2)
    assert not nearly_multiple(0.5, 0.2)


def test_grid_layers_for_symmetric_window() -> None:
    grid = build_axes_grid(-5, 5, -5, 5)
    assert grid.x_step == pytest.approx(1.0)
    assert grid.y_step == pytest.approx(1.0)

    # 11 vertical and 11 horizontal major lines.
    assert grid.major.shape == (22, 2, 2)
    assert grid.major.dtype == np.float32
    # Two axes through the origin.
    assert grid.axes.shape == (2, 2, 2)
    np.testing.assert_allclose(grid.axes[0], [[0, -5], [0, 5]])
    np.testing.assert_allclose(grid.axes[1], [[-5, 0], [5, 0]])
    # Minor lines exclude positions that coincide with majors.
    assert len(grid.minor) == 2 * (51 - 11)
    assert len(grid.ticks) == 22


def test_axes_hidden_when_origin_outside_window() -> None:
    grid = build_axes_grid(1, 3, 1, 3)
    assert grid.axes.shape == (0, 2, 2)
    assert grid.ticks.shape == (0, 2, 2)


def test_options_disable_layers() -> None:
    opts = AxesOptions(show_minor=False, show_grid=False, show_ticks=False)
    grid = build_axes_grid(-1, 1, -1, 1, opts)
    assert len(grid.minor) == 0
    assert len(grid.major) == 0
    assert len(grid.ticks) == 0
    assert [name for name, *_ in grid.layers()] == ["axes"]


def test_tick_length_defaults_to_one_percent_of_x_span() -> None:
    grid = build_axes_grid(-50, 50, -1, 1, AxesOptions(tick_length=0))
    x_ticks = grid.ticks[np.isclose(grid.ticks[:, 0, 0], grid.ticks[:, 1, 0])]
    np.testing.assert_allclose(x_ticks[:, 1, 1], 1.0)
