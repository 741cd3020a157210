"""
Viewport onto the complex plane.

The Viewport maps pixel indices of the canvas to points of the complex
plane and back, and applies the pan and zoom transforms driven by the
pointer. Pixel (0, 0) maps to (x_min, y_min); row indices grow towards
y_max. The mapping uses pixel indices, not pixel centers, everywhere.
"""

from collections import namedtuple


# Captured on pointer press, consumed by every drag event until release
DragState = namedtuple(
    "DragState", ["anchor_x", "anchor_y", "anchor_x_min", "anchor_y_min"]
)


class Viewport:
    """
    Visible rectangle of the complex plane and the canvas size in pixels.

    Attributes:
        x_min, x_max: Real axis bounds
        y_min, y_max: Imaginary axis bounds
        width, height: Canvas dimensions in pixels
    """

    def __init__(self, x_min, x_max, y_min, y_max, width, height):
        if not x_max > x_min or not y_max > y_min:
            raise ValueError(
                f"Viewport bounds must have positive extent, got "
                f"x=[{x_min}, {x_max}] y=[{y_min}, {y_max}]"
            )
        if int(width) <= 0 or int(height) <= 0:
            raise ValueError(f"Viewport size must be positive, got {width}x{height}")
        self.x_min = float(x_min)
        self.x_max = float(x_max)
        self.y_min = float(y_min)
        self.y_max = float(y_max)
        self.width = int(width)
        self.height = int(height)

    def __repr__(self):
        return (
            f"Viewport(x=[{self.x_min!r}, {self.x_max!r}], "
            f"y=[{self.y_min!r}, {self.y_max!r}], {self.width}x{self.height})"
        )

    @property
    def bounds(self):
        return (self.x_min, self.x_max, self.y_min, self.y_max)

    @property
    def plane_width(self):
        return self.x_max - self.x_min

    @property
    def plane_height(self):
        return self.y_max - self.y_min

    def copy(self):
        """Return a detached snapshot of this viewport."""
        return Viewport(self.x_min, self.x_max, self.y_min, self.y_max,
                        self.width, self.height)

    def pixel_to_plane(self, px, py):
        """
        Map a pixel index to its point on the complex plane.

        The expression matches the one used by the compute kernels so that
        the preview pass, the full pass and zoom-on-click agree exactly.
        """
        x = self.x_min + px * (self.x_max - self.x_min) / self.width
        y = self.y_min + py * (self.y_max - self.y_min) / self.height
        return x, y

    def plane_to_pixel(self, x, y):
        """Inverse of pixel_to_plane. Returns fractional pixel coordinates."""
        px = (x - self.x_min) * self.width / (self.x_max - self.x_min)
        py = (y - self.y_min) * self.height / (self.y_max - self.y_min)
        return px, py

    def zoom(self, center_x, center_y, factor):
        """
        Scale the visible rectangle by factor around a plane point.

        Args:
            center_x, center_y: Plane point that becomes the new center
            factor: < 1 zooms in, > 1 zooms out
        """
        new_width = self.plane_width * factor
        new_height = self.plane_height * factor

        self.x_min = center_x - new_width / 2
        self.x_max = center_x + new_width / 2
        self.y_min = center_y - new_height / 2
        self.y_max = center_y + new_height / 2

    def pan(self, delta_px, delta_py, anchor_x_min, anchor_y_min):
        """
        Shift the view by a pixel delta measured from the drag anchor.

        Bounds are recomputed from the anchor captured at drag start rather
        than updated incrementally, so repeated drag events do not drift.
        Content follows the pointer: dragging right moves the view left.

        Args:
            delta_px, delta_py: Pointer displacement since the press
            anchor_x_min, anchor_y_min: x_min and y_min at the press
        """
        plane_width = self.plane_width
        plane_height = self.plane_height

        self.x_min = anchor_x_min - delta_px * plane_width / self.width
        self.x_max = self.x_min + plane_width
        self.y_min = anchor_y_min - delta_py * plane_height / self.height
        self.y_max = self.y_min + plane_height

    def reset(self, bounds):
        """Restore the given (x_min, x_max, y_min, y_max) bounds."""
        self.x_min, self.x_max, self.y_min, self.y_max = (float(b) for b in bounds)

    def drag_anchor(self, px, py):
        """Capture a DragState for a press at pixel (px, py)."""
        return DragState(px, py, self.x_min, self.y_min)
