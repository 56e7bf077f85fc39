"""Frame pacing for the window: deciding when to draw and when to wake up."""

from __future__ import annotations

import enum
import math
import os
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol

from neovide.settings import SETTINGS
from neovide.window_settings import WindowSettings
from neovide.window_size import PhysicalPosition, PhysicalSize, save_window_size


class FocusedState(enum.Enum):
    """Focus of the window as far as frame pacing is concerned."""

    FOCUSED = "focused"
    UNFOCUSED_NOT_DRAWN = "unfocused_not_drawn"
    UNFOCUSED = "unfocused"


class FrameTarget(Protocol):
    """The window that the update loop drives."""

    def is_running(self) -> bool: ...

    def exit_code(self) -> int: ...

    def window_state(self) -> tuple[bool, PhysicalSize, PhysicalPosition | None]:
        """Return whether the window is maximized, its inner size and outer position."""
        ...

    def handle_window_commands(self) -> None: ...

    def synchronize_settings(self) -> None: ...

    def handle_event(self, event: Any) -> None: ...

    def draw_frame(self, dt: float) -> None: ...


@dataclass
class UpdateLoop:
    """Runs one step of the window's event loop per event.

    An event with a boolean ``focused`` attribute reports a change of focus.
    ``window_settings`` is read from the global settings when not given, and
    ``settings_path`` is where the window state is saved on exit.
    """

    window_settings: WindowSettings | None = None
    settings_path: str | os.PathLike[str] | None = None
    clock: Callable[[], float] = time.monotonic
    focused: FocusedState = FocusedState.FOCUSED
    previous_frame_start: float = field(init=False)

    def __post_init__(self) -> None:
        self.previous_frame_start = self.clock()

    def _settings(self) -> WindowSettings:
        if self.window_settings is not None:
            return self.window_settings
        return SETTINGS.get(WindowSettings)

    def _refresh_rate(self) -> float:
        settings = self._settings()
        if self.focused is FocusedState.UNFOCUSED:
            return float(settings.refresh_rate_idle)
        return float(settings.refresh_rate)

    def event_deadline(self) -> float:
        """Return the clock time at which the next frame is due."""
        refresh_rate = max(self._refresh_rate(), 1.0)
        return self.previous_frame_start + 1.0 / refresh_rate

    def focus_changed(self, focused: bool) -> None:
        """Record that the window gained or lost focus."""
        self.focused = FocusedState.FOCUSED if focused else FocusedState.UNFOCUSED_NOT_DRAWN

    def step(self, target: FrameTarget, event: Any) -> float:
        """Handle one event, draw if a frame is due, and return the next deadline.

        Raises SystemExit with the target's exit code once it stops running,
        after saving the window state.
        """
        focused = getattr(event, "focused", None)
        if isinstance(focused, bool):
            self.focus_changed(focused)

        deadline = self.event_deadline()

        if not target.is_running():
            maximized, size, position = target.window_state()
            save_window_size(
                maximized, size, position, self.window_settings, self.settings_path
            )
            raise SystemExit(target.exit_code())

        frame_start = self.clock()

        target.handle_window_commands()
        target.synchronize_settings()
        target.handle_event(event)

        refresh_rate = max(self._refresh_rate(), 0.0)
        frame_duration = math.inf if refresh_rate == 0.0 else 1.0 / refresh_rate

        if frame_start - self.previous_frame_start > frame_duration:
            dt = self.clock() - self.previous_frame_start
            target.draw_frame(dt)
            if self.focused is FocusedState.UNFOCUSED_NOT_DRAWN:
                self.focused = FocusedState.UNFOCUSED
            self.previous_frame_start = frame_start

        return deadline