from __future__ import annotations

import json

import pytest

from mandelbrot_explorer.config import DEFAULT_SETTINGS, load_settings, normalise_settings


def _write(tmp_path, payload) -> str:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def test_empty_file_gives_defaults(tmp_path) -> None:
    cfg = load_settings(_write(tmp_path, {}))
    assert cfg["width"] == 800
    assert cfg["height"] == 800
    assert cfg["bounds"] == (-2.0, 1.0, -1.5, 1.5)
    assert cfg["zoom_factor"] == 0.8
    assert cfg["base_iter"] == 500
    assert cfg["preview_stride"] == 4
    assert cfg["workers"] is None
    assert set(cfg) == set(DEFAULT_SETTINGS)


def test_overrides_are_merged(tmp_path) -> None:
    cfg = load_settings(_write(tmp_path, {"width": "640", "workers": 2, "log_level": "debug"}))
    assert cfg["width"] == 640
    assert cfg["height"] == 800
    assert cfg["workers"] == 2
    assert cfg["log_level"] == "DEBUG"


def test_unknown_keys_are_ignored(tmp_path) -> None:
    cfg = load_settings(_write(tmp_path, {"colour": "blue"}))
    assert "colour" not in cfg


def test_missing_explicit_file_is_an_error(tmp_path) -> None:
    with pytest.raises(ValueError, match="not found"):
        load_settings(str(tmp_path / "nope.json"))


def test_malformed_files_are_rejected(tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        load_settings(str(path))
    with pytest.raises(ValueError, match="JSON object"):
        load_settings(_write(tmp_path, [1, 2, 3]))


@pytest.mark.parametrize(
    "override",
    [
        {"width": 0},
        {"bounds": [1.0, -2.0, -1.5, 1.5]},
        {"bounds": [0.0, 1.0]},
        {"zoom_factor": 1.25},
        {"base_iter": 0},
        {"max_iter_cap": 100},
        {"preview_stride": 0},
        {"workers": 0},
        {"render_timeout": 0},
        {"log_level": "LOUD"},
    ],
)
def test_invalid_values_are_rejected(override: dict) -> None:
    cfg = dict(DEFAULT_SETTINGS)
    cfg.update(override)
    with pytest.raises(ValueError):
        normalise_settings(cfg)
