"""
Main application module for the Mandelbrot explorer.

Contains the MandelbrotApp class which handles:
- Window setup and main loop
- Translating pygame mouse/keyboard events into controller calls
- Displaying the renderer's framebuffer
"""

import logging
import os

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame

from .compute import warmup_jit
from .config import load_settings
from .controller import InteractionController
from .logging_setup import configure_logging, level_from_name
from .renderer import MandelbrotRenderer
from .viewport import Viewport


logger = logging.getLogger(__name__)

TITLE = "Mandelbrot Explorer - Left click zoom in, right click zoom out, drag to pan"


class MandelbrotApp:
    """
    Main application class for the Mandelbrot explorer.

    Handles the pygame window and event loop, and wires pointer events to
    the InteractionController and the renderer output to the screen.
    """

    FPS = 60

    def __init__(self, settings=None):
        """
        Initialize the application.

        Args:
            settings: Validated settings dict (default: load_settings())
        """
        self.settings = settings or load_settings()

        self.width = self.settings["width"]
        self.height = self.settings["height"]
        self.viewport = Viewport(*self.settings["bounds"], self.width, self.height)
        self.renderer = MandelbrotRenderer(
            self.viewport,
            base_iter=self.settings["base_iter"],
            max_iter_cap=self.settings["max_iter_cap"],
            preview_stride=self.settings["preview_stride"],
            workers=self.settings["workers"],
            timeout=self.settings["render_timeout"],
        )
        self.controller = InteractionController(
            self.viewport, self.renderer, zoom_factor=self.settings["zoom_factor"]
        )

        # Pygame state (initialized in run())
        self.screen = None
        self.clock = None
        self.current_surface = None

        # A release counts as a click only if the pointer did not move
        self.pressed_button = None
        self.moved_since_press = False

        self.running = False

    def run(self):
        """Run the application main loop."""
        self._init_pygame()
        self._warmup_and_initial_render()

        self.running = True
        try:
            while self.running:
                for event in pygame.event.get():
                    self.handle_event(event)
                self.controller.flush()
                self._check_render_result()
                self._draw()
                self.clock.tick(self.FPS)
        finally:
            self.renderer.close()
            pygame.quit()

    def _init_pygame(self):
        """Initialize pygame and create window."""
        pygame.init()
        self.screen = pygame.display.set_mode((self.width, self.height), pygame.DOUBLEBUF)
        pygame.display.set_caption(TITLE)
        self.clock = pygame.time.Clock()

    def _warmup_and_initial_render(self):
        """Warm up JIT and start the first full render."""
        pygame.display.set_caption("Compiling (first run only)...")
        warmup_jit()
        logger.info("Rendering %r with %d workers", self.viewport, self.renderer.workers)
        self.renderer.render(progressive=False)
        pygame.display.set_caption(TITLE)

    def handle_event(self, event):
        """Dispatch one pygame event."""
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.MOUSEBUTTONDOWN:
            self.pressed_button = event.button
            self.moved_since_press = False
            self.controller.pointer_down(event.pos[0], event.pos[1], event.button)
        elif event.type == pygame.MOUSEMOTION:
            if self.pressed_button is not None:
                self.moved_since_press = True
                self.controller.pointer_drag(event.pos[0], event.pos[1])
        elif event.type == pygame.MOUSEBUTTONUP:
            x, y = event.pos
            self.controller.pointer_up(x, y, event.button)
            if event.button == self.pressed_button and not self.moved_since_press:
                self.controller.pointer_click(x, y, event.button)
            self.pressed_button = None
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_r:
                self.controller.reset_view()
            elif event.key == pygame.K_ESCAPE:
                self.running = False

    def _check_render_result(self):
        """Pick up a newly published framebuffer."""
        image, _ = self.renderer.get_result()
        if image is not None:
            # surfarray expects (width, height, 3)
            self.current_surface = pygame.surfarray.make_surface(image.swapaxes(0, 1))

    def _draw(self):
        """Draw the current frame."""
        self.screen.fill((0, 0, 0))
        if self.current_surface is not None:
            self.screen.blit(self.current_surface, (0, 0))
        pygame.display.flip()


def run(settings_path=None):
    """
    Run the Mandelbrot explorer.

    Args:
        settings_path: Optional settings.json to load instead of the default
    """
    settings = load_settings(settings_path)
    configure_logging(level=level_from_name(settings["log_level"]),
                      log_file=settings["log_file"])
    app = MandelbrotApp(settings)
    try:
        app.run()
    except KeyboardInterrupt:
        pass
