from __future__ import annotations

import numpy as np
import pytest

from mandelbrot_explorer.compute import (
    compute_mandelbrot,
    compute_mandelbrot_partial,
    compute_mandelbrot_sampled,
    escape_time,
)


@pytest.mark.parametrize("max_iter", [1, 2, 10, 500, 5000])
def test_origin_is_bounded(max_iter: int) -> None:
    assert escape_time(0.0, 0.0, max_iter) == max_iter


def test_far_points_escape_immediately() -> None:
    assert escape_time(3.0, 0.0, 100) == 1
    assert escape_time(-2.0, -1.5, 100) == 1
    assert escape_time(0.0, 2.5, 100) == 1


def test_known_points() -> None:
    # c = -1 cycles 0, -1, 0, -1, ...
    assert escape_time(-1.0, 0.0, 1000) == 1000
    # c = 1: 0, 1, 2 -> |z|^2 reaches 4 after two steps
    assert escape_time(1.0, 0.0, 1000) == 2


@pytest.mark.parametrize(
    "x,y",
    [(0.3, 0.5), (-0.75, 0.1), (-1.25, 0.05), (0.26, 0.0), (-0.1, 0.9), (0.4, -0.3)],
)
def test_escape_count_independent_of_larger_budget(x: float, y: float) -> None:
    small = escape_time(x, y, 50)
    large = escape_time(x, y, 2000)
    if small < 50:
        assert large == small
    else:
        assert large >= 50


def test_partial_only_touches_its_rows() -> None:
    out = np.full((10, 12), -1, dtype=np.int32)
    compute_mandelbrot_partial(-2.0, 1.0, -1.5, 1.5, 12, 10, 50, out, 3, 7)
    assert (out[:3] == -1).all()
    assert (out[7:] == -1).all()
    assert (out[3:7] >= 1).all()
    assert out[5, 4] == escape_time(-2.0 + 4 * 3.0 / 12, -1.5 + 5 * 3.0 / 10, 50)


def test_full_frame_matches_pointwise_evaluation() -> None:
    data = compute_mandelbrot(-2.0, 1.0, -1.5, 1.5, 16, 8, 100)
    assert data.shape == (8, 16)
    assert data.dtype == np.int32
    for py in range(8):
        for px in range(16):
            x = -2.0 + px * 3.0 / 16
            y = -1.5 + py * 3.0 / 8
            assert data[py, px] == escape_time(x, y, 100)


def test_sampled_grid_picks_every_stride_pixel() -> None:
    full = compute_mandelbrot(-2.0, 1.0, -1.5, 1.5, 18, 10, 80)
    grid = compute_mandelbrot_sampled(-2.0, 1.0, -1.5, 1.5, 18, 10, 80, 4)
    assert grid.shape == (3, 5)
    np.testing.assert_array_equal(grid, full[::4, ::4])
