"""
Settings for the explorer.

Defaults live in DEFAULT_SETTINGS. A settings.json file (next to the
package, or an explicit path) may override any of them; the merged result
is validated by normalise_settings.
"""

import json
import logging
import os

from .budget import DEFAULT_BASE_ITER, DEFAULT_MAX_ITER_CAP
from .logging_setup import level_from_name


logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "settings.json"

DEFAULT_SETTINGS = {
    "width": 800,
    "height": 800,
    "bounds": [-2.0, 1.0, -1.5, 1.5],  # x_min, x_max, y_min, y_max
    "zoom_factor": 0.8,
    "base_iter": DEFAULT_BASE_ITER,
    "max_iter_cap": DEFAULT_MAX_ITER_CAP,
    "preview_stride": 4,
    "workers": None,  # None = one per CPU
    "render_timeout": 60.0,
    "log_level": "INFO",
    "log_file": None,
}


def default_settings_path():
    return os.path.join(os.path.dirname(__file__), SETTINGS_FILENAME)


def load_settings(path=None):
    """
    Load settings from JSON, falling back to the defaults.

    Args:
        path: settings file to read; None reads settings.json next to the
            package if it exists

    Returns:
        Validated settings dict with every DEFAULT_SETTINGS key

    Raises:
        ValueError if the file is unreadable, not a JSON object, or holds
        invalid values. An explicit path that does not exist is also an error.
    """
    explicit = path is not None
    path = path or default_settings_path()

    overrides = {}
    if os.path.exists(path):
        try:
            with open(path, "r", encoding="utf-8") as f:
                overrides = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ValueError(f"Could not load {path}: {e}") from e
        if not isinstance(overrides, dict):
            raise ValueError(f"{path} must contain a JSON object")
        logger.debug("Loaded settings overrides from %s: %s", path, sorted(overrides))
    elif explicit:
        raise ValueError(f"Settings file not found: {path}")

    unknown = set(overrides) - set(DEFAULT_SETTINGS)
    if unknown:
        logger.warning("Ignoring unknown settings: %s", ", ".join(sorted(unknown)))

    cfg = dict(DEFAULT_SETTINGS)
    cfg.update({k: v for k, v in overrides.items() if k in DEFAULT_SETTINGS})
    return normalise_settings(cfg)


def normalise_settings(cfg):
    """Coerce types and check ranges. Raises ValueError on bad values."""
    out = dict(cfg)

    out["width"] = int(cfg["width"])
    out["height"] = int(cfg["height"])
    if out["width"] <= 0 or out["height"] <= 0:
        raise ValueError("width/height must be positive.")

    bounds = cfg["bounds"]
    if not (isinstance(bounds, (list, tuple)) and len(bounds) == 4):
        raise ValueError("bounds must be [x_min, x_max, y_min, y_max].")
    x_min, x_max, y_min, y_max = (float(b) for b in bounds)
    if not (x_max > x_min and y_max > y_min):
        raise ValueError("bounds must satisfy x_max > x_min and y_max > y_min.")
    out["bounds"] = (x_min, x_max, y_min, y_max)

    out["zoom_factor"] = float(cfg["zoom_factor"])
    if not 0.0 < out["zoom_factor"] < 1.0:
        raise ValueError("zoom_factor must be in (0, 1).")

    out["base_iter"] = int(cfg["base_iter"])
    if out["base_iter"] < 1:
        raise ValueError("base_iter must be at least 1.")
    if cfg["max_iter_cap"] is not None:
        out["max_iter_cap"] = int(cfg["max_iter_cap"])
        if out["max_iter_cap"] < out["base_iter"]:
            raise ValueError("max_iter_cap must not be below base_iter.")

    out["preview_stride"] = int(cfg["preview_stride"])
    if out["preview_stride"] < 1:
        raise ValueError("preview_stride must be at least 1.")

    if cfg["workers"] is not None:
        out["workers"] = int(cfg["workers"])
        if out["workers"] < 1:
            raise ValueError("workers must be at least 1.")

    out["render_timeout"] = float(cfg["render_timeout"])
    if out["render_timeout"] <= 0:
        raise ValueError("render_timeout must be positive.")

    out["log_level"] = str(cfg["log_level"]).upper()
    level_from_name(out["log_level"])
    return out
