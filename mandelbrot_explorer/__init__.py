"""
Mandelbrot Set Explorer Package

An interactive Mandelbrot set explorer using Pygame for display and Numba
for JIT-compiled, slice-parallel computation.

Quick Start:
    from mandelbrot_explorer import run
    run()

Or from command line:
    python -m mandelbrot_explorer

Package Structure:
    - viewport.py: Pixel <-> complex plane mapping, pan and zoom
    - compute.py: JIT-compiled escape-time kernels
    - colormaps.py: HSB rainbow coloring of escape counts
    - budget.py: Zoom-dependent iteration budget
    - renderer.py: Single-flight async renderer with progressive preview
    - controller.py: Pointer events -> viewport changes and render requests
    - config.py: Defaults and settings.json loading
    - app.py: Main application and event loop

Controls:
    - Left click: Zoom in at mouse position
    - Right click: Zoom out at mouse position
    - Drag: Pan around
    - R: Reset to default view
    - ESC: Quit
"""

from .app import run, MandelbrotApp
from .budget import iteration_budget
from .colormaps import color_for, colorize, hsb_to_rgb
from .compute import escape_time
from .config import DEFAULT_SETTINGS, load_settings
from .controller import InteractionController, BUTTON_PRIMARY, BUTTON_SECONDARY
from .renderer import MandelbrotRenderer, RenderTimeout, split_rows
from .viewport import Viewport, DragState

__version__ = "1.0.0"
__all__ = [
    "run",
    "MandelbrotApp",
    "MandelbrotRenderer",
    "RenderTimeout",
    "split_rows",
    "InteractionController",
    "BUTTON_PRIMARY",
    "BUTTON_SECONDARY",
    "Viewport",
    "DragState",
    "escape_time",
    "color_for",
    "colorize",
    "hsb_to_rgb",
    "iteration_budget",
    "DEFAULT_SETTINGS",
    "load_settings",
]
