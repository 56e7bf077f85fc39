"""Persistence of the window's size and position between sessions."""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from neovide.settings import SETTINGS
from neovide.window_settings import WindowSettings

_log = logging.getLogger(__name__)

SETTINGS_FILE = "neovide-settings.json"


@dataclass(frozen=True)
class PhysicalPosition:
    """A position in physical pixels."""

    x: int = 0
    y: int = 0


@dataclass(frozen=True)
class PhysicalSize:
    """A size in physical pixels."""

    width: int
    height: int


@dataclass(frozen=True)
class Maximized:
    """The window was maximized."""


@dataclass(frozen=True)
class Windowed:
    """The window was a normal window at a position, maybe with a size."""

    position: PhysicalPosition = field(default_factory=PhysicalPosition)
    pixel_size: PhysicalSize | None = None


PersistentWindowSettings = Maximized | Windowed


def _neovim_std_datapath() -> Path:
    if sys.platform == "win32":
        return Path.home() / "AppData" / "local" / "nvim-data"
    xdg = os.environ.get("XDG_DATA_HOME")
    base = Path(xdg) if xdg and Path(xdg).is_absolute() else Path.home() / ".local" / "share"
    return base / "nvim"


def settings_path() -> Path:
    """Return the location of the persisted window settings."""
    return _neovim_std_datapath() / SETTINGS_FILE


def _int(value: Any, name: str, *, unsigned: bool) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"invalid type for `{name}`: expected an integer, got {value!r}")
    if unsigned and value < 0:
        raise ValueError(f"invalid value for `{name}`: expected a non-negative integer")
    return value


def _parse_position(data: Any) -> PhysicalPosition:
    if not isinstance(data, dict):
        raise ValueError(f"invalid position: {data!r}")
    try:
        return PhysicalPosition(
            _int(data["x"], "x", unsigned=False), _int(data["y"], "y", unsigned=False)
        )
    except KeyError as error:
        raise ValueError(f"missing field `{error.args[0]}`") from None


def _parse_size(data: Any) -> PhysicalSize | None:
    if data is None:
        return None
    if not isinstance(data, dict):
        raise ValueError(f"invalid pixel_size: {data!r}")
    try:
        return PhysicalSize(
            _int(data["width"], "width", unsigned=True),
            _int(data["height"], "height", unsigned=True),
        )
    except KeyError as error:
        raise ValueError(f"missing field `{error.args[0]}`") from None


def _parse_window(data: Any) -> PersistentWindowSettings:
    if data == "Maximized":
        return Maximized()
    if isinstance(data, dict) and len(data) == 1 and "Windowed" in data:
        body = data["Windowed"]
        if not isinstance(body, dict):
            raise ValueError(f"invalid Windowed variant: {body!r}")
        position = _parse_position(body["position"]) if "position" in body else PhysicalPosition()
        return Windowed(position=position, pixel_size=_parse_size(body.get("pixel_size")))
    raise ValueError(f"unknown window settings variant: {data!r}")


def _encode_window(window: PersistentWindowSettings) -> Any:
    if isinstance(window, Maximized):
        return "Maximized"
    size = window.pixel_size
    return {
        "Windowed": {
            "position": {"x": window.position.x, "y": window.position.y},
            "pixel_size": None if size is None else {"width": size.width, "height": size.height},
        }
    }


def load_last_window_settings(
    path: str | os.PathLike[str] | None = None,
) -> PersistentWindowSettings:
    """Read the last saved window settings.

    Raises OSError when the file cannot be read and ValueError when it is invalid.
    """
    target = settings_path() if path is None else Path(path)
    data = json.loads(target.read_text(encoding="utf-8"))
    if not isinstance(data, dict) or "window" not in data:
        raise ValueError("missing field `window`")
    loaded = _parse_window(data["window"])
    _log.debug("Loaded window settings: %r", loaded)
    return loaded


def save_window_size(
    maximized: bool,
    size: PhysicalSize,
    position: PhysicalPosition | None,
    window_settings: WindowSettings | None = None,
    path: str | os.PathLike[str] | None = None,
) -> None:
    """Save the window state, honouring the remember-size and -position settings."""
    if window_settings is None:
        window_settings = SETTINGS.get(WindowSettings)
    if maximized and window_settings.remember_window_size:
        window: PersistentWindowSettings = Maximized()
    else:
        remembered = position if window_settings.remember_window_position else None
        window = Windowed(
            position=remembered or PhysicalPosition(),
            pixel_size=size if window_settings.remember_window_size else None,
        )
    target = settings_path() if path is None else Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    text = json.dumps({"window": _encode_window(window)}, separators=(",", ":"))
    _log.debug("Saved Window Settings: %s", text)
    target.write_text(text, encoding="utf-8")