"""Settings groups for the window and for keyboard input."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class WindowSettings:
    """Window behaviour that the editor can change through ``g:neovide_*``.

    ``idle`` takes its default from the command line, so callers that know
    the command-line value pass it in.
    """

    refresh_rate: int = 60
    refresh_rate_idle: int = 5
    idle: bool = True
    transparency: float = 1.0
    scale_factor: float = 1.0
    fullscreen: bool = False
    iso_layout: bool = False
    remember_window_size: bool = True
    remember_window_position: bool = True
    hide_mouse_when_typing: bool = False
    touch_deadzone: float = 6.0
    touch_drag_timeout: float = 0.17
    background_color: str = ""
    confirm_quit: bool = True
    padding_top: int = 0
    padding_left: int = 0
    padding_right: int = 0
    padding_bottom: int = 0
    theme: str = ""


@dataclass
class KeyboardSettings:
    """Keyboard input settings, exposed with the ``input_`` prefix."""

    macos_alt_is_meta: bool = False
    ime: bool = True