"""
Escape-time computation using Numba JIT compilation.

This module contains the performance-critical kernels of the renderer.
They are compiled in nopython mode with the GIL released, so the render
scheduler can run one kernel call per row slice on a plain thread pool
and get real parallelism:
- escape_time: iteration count for a single point
- compute_mandelbrot_partial: escape counts for a contiguous row range
- compute_mandelbrot_sampled: escape counts on a coarse grid (preview pass)

Escape counts equal to max_iter mean the point never escaped (in the set).
"""

import numpy as np
from numba import jit


ESCAPE_RADIUS_SQ = 4.0


@jit(nopython=True, nogil=True, cache=True)
def escape_time(x, y, max_iter):
    """
    Iterate z <- z^2 + c from z = 0 for c = x + iy.

    Args:
        x, y: Real and imaginary parts of c
        max_iter: Iteration budget

    Returns:
        Number of iterations performed before |z|^2 reached 4, or max_iter
        if the orbit stayed bounded for the whole budget.
    """
    zr = 0.0
    zi = 0.0
    iteration = 0
    while zr * zr + zi * zi < ESCAPE_RADIUS_SQ and iteration < max_iter:
        temp = zr * zr - zi * zi + x
        zi = 2.0 * zr * zi + y
        zr = temp
        iteration += 1
    return iteration


@jit(nopython=True, nogil=True, cache=True)
def compute_mandelbrot_partial(x_min, x_max, y_min, y_max, width, height, max_iter,
                               out, start_row, end_row):
    """
    Compute escape counts for rows [start_row, end_row) into an existing array.

    Each call only touches its own rows of out, so disjoint row ranges can
    be computed concurrently on the same array without locking.

    Args:
        x_min, x_max, y_min, y_max: Full image bounds in the complex plane
        width, height: Full image dimensions
        max_iter: Maximum iterations
        out: int32 array of shape (height, width), modified in place
        start_row, end_row: Row range to compute
    """
    for py in range(start_row, end_row):
        y = y_min + py * (y_max - y_min) / height
        for px in range(width):
            x = x_min + px * (x_max - x_min) / width
            out[py, px] = escape_time(x, y, max_iter)


@jit(nopython=True, nogil=True, cache=True)
def compute_mandelbrot_sampled(x_min, x_max, y_min, y_max, width, height, max_iter,
                               stride):
    """
    Compute escape counts for every stride-th pixel in both directions.

    Returns:
        int32 array of shape (ceil(height / stride), ceil(width / stride));
        entry [i, j] is the count for pixel (row i * stride, col j * stride).
    """
    rows = (height + stride - 1) // stride
    cols = (width + stride - 1) // stride
    grid = np.empty((rows, cols), dtype=np.int32)
    for i in range(rows):
        py = i * stride
        y = y_min + py * (y_max - y_min) / height
        for j in range(cols):
            px = j * stride
            x = x_min + px * (x_max - x_min) / width
            grid[i, j] = escape_time(x, y, max_iter)
    return grid


def compute_mandelbrot(x_min, x_max, y_min, y_max, width, height, max_iter):
    """Compute escape counts for a whole frame on the calling thread."""
    out = np.empty((height, width), dtype=np.int32)
    compute_mandelbrot_partial(x_min, x_max, y_min, y_max, width, height,
                               max_iter, out, 0, height)
    return out


def warmup_jit():
    """
    Compile every kernel on tiny inputs.

    Call this once at startup so the first interactive render does not
    pay the compilation delay.
    """
    out = np.empty((4, 4), dtype=np.int32)
    compute_mandelbrot_partial(-2.0, 1.0, -1.5, 1.5, 4, 4, 10, out, 0, 4)
    compute_mandelbrot_sampled(-2.0, 1.0, -1.5, 1.5, 4, 4, 10, 2)
    escape_time(0.0, 0.0, 10)
