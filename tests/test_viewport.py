from __future__ import annotations

import pytest

from mandelbrot_explorer.viewport import DragState, Viewport


def _initial() -> Viewport:
    return Viewport(-2.0, 1.0, -1.5, 1.5, 800, 800)


def test_corner_pixels_map_to_plane_bounds() -> None:
    vp = _initial()
    assert vp.pixel_to_plane(0, 0) == (-2.0, -1.5)
    # Mapping uses pixel indices, so the far edge is the exclusive boundary
    assert vp.pixel_to_plane(800, 800) == (1.0, 1.5)


@pytest.mark.parametrize("px,py", [(0, 0), (1, 799), (400, 400), (799, 0), (123, 456)])
def test_plane_to_pixel_round_trips(px: int, py: int) -> None:
    vp = _initial()
    rx, ry = vp.plane_to_pixel(*vp.pixel_to_plane(px, py))
    assert rx == pytest.approx(px, abs=1.0)
    assert ry == pytest.approx(py, abs=1.0)


def test_zoom_half_halves_extent_around_center() -> None:
    vp = Viewport(-7.0, 3.0, 2.0, 4.5, 640, 480)
    vp.zoom(0.25, -0.5, 0.5)
    assert vp.plane_width == pytest.approx(5.0)
    assert vp.plane_height == pytest.approx(1.25)
    assert (vp.x_min + vp.x_max) / 2 == pytest.approx(0.25)
    assert (vp.y_min + vp.y_max) / 2 == pytest.approx(-0.5)
    # Pixel dimensions are untouched
    assert (vp.width, vp.height) == (640, 480)


def test_zoom_out_grows_extent() -> None:
    vp = _initial()
    vp.zoom(-0.5, 0.0, 1 / 0.8)
    assert vp.plane_width == pytest.approx(3.75)
    assert vp.plane_height == pytest.approx(3.75)


def test_pan_is_relative_to_anchor() -> None:
    vp = _initial()
    anchor = vp.drag_anchor(100, 100)
    assert anchor == DragState(100, 100, -2.0, -1.5)

    vp.pan(40, 20, anchor.anchor_x_min, anchor.anchor_y_min)
    assert vp.x_min == pytest.approx(-2.15)
    assert vp.y_min == pytest.approx(-1.575)
    assert vp.plane_width == pytest.approx(3.0)
    assert vp.plane_height == pytest.approx(3.0)

    # Repeating the same delta from the same anchor does not accumulate
    vp.pan(40, 20, anchor.anchor_x_min, anchor.anchor_y_min)
    assert vp.x_min == pytest.approx(-2.15)

    vp.pan(0, 0, anchor.anchor_x_min, anchor.anchor_y_min)
    assert vp.bounds == pytest.approx((-2.0, 1.0, -1.5, 1.5))


def test_copy_is_detached() -> None:
    vp = _initial()
    snapshot = vp.copy()
    vp.zoom(0.0, 0.0, 0.5)
    assert snapshot.bounds == (-2.0, 1.0, -1.5, 1.5)


def test_reset_restores_bounds() -> None:
    vp = _initial()
    vp.zoom(0.3, 0.1, 0.1)
    vp.reset((-2.0, 1.0, -1.5, 1.5))
    assert vp.bounds == (-2.0, 1.0, -1.5, 1.5)


@pytest.mark.parametrize(
    "args",
    [
        (1.0, -2.0, -1.5, 1.5, 800, 800),
        (-2.0, 1.0, 1.5, 1.5, 800, 800),
        (-2.0, 1.0, -1.5, 1.5, 0, 800),
        (-2.0, 1.0, -1.5, 1.5, 800, -1),
    ],
)
def test_invalid_viewport_rejected(args: tuple) -> None:
    with pytest.raises(ValueError):
        Viewport(*args)
