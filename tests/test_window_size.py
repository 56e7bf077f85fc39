import json

import pytest

from neovide.window_settings import WindowSettings
from neovide.window_size import (
    Maximized,
    PhysicalPosition,
    PhysicalSize,
    Windowed,
    load_last_window_settings,
    save_window_size,
    settings_path,
)


def test_settings_path_file_name():
    assert settings_path().name == "neovide-settings.json"


def test_windowed_round_trip(tmp_path):
    path = tmp_path / "sub" / "settings.json"
    size = PhysicalSize(800, 600)
    position = PhysicalPosition(10, -20)
    save_window_size(False, size, position, WindowSettings(), path)
    assert load_last_window_settings(path) == Windowed(position=position, pixel_size=size)


def test_maximized_round_trip(tmp_path):
    path = tmp_path / "settings.json"
    save_window_size(True, PhysicalSize(800, 600), None, WindowSettings(), path)
    assert load_last_window_settings(path) == Maximized()
    assert path.read_text() == '{"window":"Maximized"}'


def test_maximized_without_remembering_size_is_windowed(tmp_path):
    path = tmp_path / "settings.json"
    settings = WindowSettings(remember_window_size=False)
    position = PhysicalPosition(5, 6)
    save_window_size(True, PhysicalSize(800, 600), position, settings, path)
    loaded = load_last_window_settings(path)
    assert loaded == Windowed(position=position, pixel_size=None)


def test_position_not_remembered_defaults(tmp_path):
    path = tmp_path / "settings.json"
    settings = WindowSettings(remember_window_position=False)
    size = PhysicalSize(300, 200)
    save_window_size(False, size, PhysicalPosition(5, 6), settings, path)
    assert load_last_window_settings(path) == Windowed(PhysicalPosition(), size)


def test_missing_position_gives_default(tmp_path):
    path = tmp_path / "settings.json"
    save_window_size(False, PhysicalSize(1, 2), None, WindowSettings(), path)
    loaded = load_last_window_settings(path)
    assert loaded.position == PhysicalPosition()


def test_json_layout(tmp_path):
    path = tmp_path / "settings.json"
    save_window_size(False, PhysicalSize(7, 8), PhysicalPosition(1, 2), WindowSettings(), path)
    data = json.loads(path.read_text())
    body = data["window"]["Windowed"]
    assert body["position"] == {"x": 1, "y": 2}
    assert body["pixel_size"] == {"width": 7, "height": 8}


def test_defaults_when_fields_absent(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"window": {"Windowed": {}}}))
    assert load_last_window_settings(path) == Windowed()


def test_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        load_last_window_settings(tmp_path / "absent.json")


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("not json")
    with pytest.raises(ValueError):
        load_last_window_settings(path)


def test_unknown_variant_raises(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"window": "Minimized"}))
    with pytest.raises(ValueError):
        load_last_window_settings(path)


def test_negative_size_raises(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps({"window": {"Windowed": {"pixel_size": {"width": -1, "height": 2}}}})
    )
    with pytest.raises(ValueError):
        load_last_window_settings(path)