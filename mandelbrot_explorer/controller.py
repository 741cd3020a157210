"""
Pointer interaction: turns decoded pointer events into viewport changes.

Clicks zoom around the clicked point, drags pan the view from the anchor
captured at press time. Every change requests a render; drags request
progressive renders so the preview keeps up with the pointer.
"""

import logging


logger = logging.getLogger(__name__)

# Button identities as delivered by pygame
BUTTON_PRIMARY = 1
BUTTON_SECONDARY = 3

DEFAULT_ZOOM_FACTOR = 0.8


class InteractionController:
    """
    Applies pointer events to a Viewport and triggers renders.

    Attributes:
        viewport: The live Viewport shared with the renderer
        renderer: MandelbrotRenderer to request passes from
        zoom_factor: Scale applied on primary click (inverse on secondary)
        drag: DragState of the drag in progress, or None
    """

    def __init__(self, viewport, renderer, zoom_factor=DEFAULT_ZOOM_FACTOR,
                 home_bounds=None):
        self.viewport = viewport
        self.renderer = renderer
        self.zoom_factor = zoom_factor
        self.home_bounds = home_bounds or viewport.bounds
        self.drag = None
        self.pending = False

    def pointer_down(self, x, y, button):
        """Record the drag anchor for a press of any button at pixel (x, y)."""
        self.drag = self.viewport.drag_anchor(x, y)

    def pointer_drag(self, x, y):
        """Pan relative to the drag anchor and request a progressive render."""
        if self.drag is None:
            return
        self.viewport.pan(
            x - self.drag.anchor_x,
            y - self.drag.anchor_y,
            self.drag.anchor_x_min,
            self.drag.anchor_y_min,
        )
        self._request(progressive=True)

    def pointer_up(self, x, y, button):
        """End the drag in progress."""
        self.drag = None

    def pointer_click(self, x, y, button):
        """
        Zoom around the clicked point.

        Primary zooms in by zoom_factor, secondary zooms out by its
        inverse; other buttons are ignored.
        """
        if button == BUTTON_PRIMARY:
            factor = self.zoom_factor
        elif button == BUTTON_SECONDARY:
            factor = 1 / self.zoom_factor
        else:
            return
        center_x, center_y = self.viewport.pixel_to_plane(x, y)
        self.viewport.zoom(center_x, center_y, factor)
        logger.debug("Zoom x%.3f at (%r, %r)", factor, center_x, center_y)
        self._request(progressive=False)

    def reset_view(self):
        """Restore the home bounds and render them."""
        self.viewport.reset(self.home_bounds)
        self.drag = None
        self._request(progressive=False)

    def flush(self):
        """
        Re-issue a dropped request once the renderer is idle.

        Requests made while a pass is in flight are dropped by the renderer,
        so without this the last viewport of a drag could stay unrendered.
        Call once per frame from the event loop.
        """
        if self.pending and not self.renderer.is_rendering:
            self._request(progressive=False)

    def _request(self, progressive):
        self.pending = not self.renderer.render(progressive=progressive)
