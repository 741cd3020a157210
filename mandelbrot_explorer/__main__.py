"""
Allow running the package directly: python -m mandelbrot_explorer [settings.json]
"""
import sys

from .app import run

run(sys.argv[1] if len(sys.argv) > 1 else None)
