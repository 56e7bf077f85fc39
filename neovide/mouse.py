"""Translation of pointer, wheel and touch events into editor mouse commands."""

from __future__ import annotations

import enum
import math
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from neovide.keyboard import KeyboardManager
from neovide.settings import SETTINGS
from neovide.window_settings import WindowSettings

Point = tuple[float, float]
GridPoint = tuple[int, int]
FontDimensions = tuple[int, int]


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle in physical pixels."""

    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def from_wh(cls, width: float, height: float) -> Rect:
        return cls(0.0, 0.0, float(width), float(height))

    def contains(self, point: Point) -> bool:
        x, y = point
        return self.left <= x < self.right and self.top <= y < self.bottom


@dataclass(frozen=True)
class WindowRegion:
    """A rendered editor window and the area it covers."""

    id: int
    region: Rect


@dataclass
class Layout:
    """What the mouse handling needs to know about the rendered window.

    ``window_regions`` is in draw order: later regions are drawn on top.
    """

    width: int
    height: int
    font_dimensions: FontDimensions
    window_regions: Sequence[WindowRegion] = ()


class MouseButton(enum.Enum):
    LEFT = "left"
    RIGHT = "right"
    MIDDLE = "middle"
    BACK = "back"
    FORWARD = "forward"
    OTHER = "other"


class TouchPhase(enum.Enum):
    STARTED = "started"
    MOVED = "moved"
    ENDED = "ended"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class MouseButtonCommand:
    button: str
    action: str
    grid_id: int
    position: GridPoint
    modifier_string: str


@dataclass(frozen=True)
class DragCommand:
    button: str
    grid_id: int
    position: GridPoint
    modifier_string: str


@dataclass(frozen=True)
class ScrollCommand:
    direction: str
    grid_id: int
    position: GridPoint
    modifier_string: str


MouseCommand = MouseButtonCommand | DragCommand | ScrollCommand


@dataclass(frozen=True)
class CursorMoved:
    x: float
    y: float


@dataclass(frozen=True)
class LineScroll:
    x: float
    y: float


@dataclass(frozen=True)
class PixelScroll:
    x: float
    y: float


@dataclass(frozen=True)
class Touch:
    device_id: int
    id: int
    location: Point
    phase: TouchPhase


@dataclass(frozen=True)
class MouseInput:
    button: MouseButton
    pressed: bool


@dataclass(frozen=True)
class KeyPressed:
    """A key was pressed while the window had focus."""


def clamp_position(position: Point, region: Rect, font_dimensions: FontDimensions) -> Point:
    """Keep a position inside a region, leaving room for one character cell."""
    font_width, font_height = font_dimensions
    x, y = position
    return (
        max(min(x, region.right - font_width), region.left),
        max(min(y, region.bottom - font_height), region.top),
    )


def to_grid_coords(position: Point, font_dimensions: FontDimensions) -> GridPoint:
    """Convert a pixel position to the character cell that holds it."""
    font_width, font_height = font_dimensions
    x, y = position
    return (max(0, int(x)) // font_width, max(0, int(y)) // font_height)


def mouse_button_to_button_text(button: MouseButton) -> str | None:
    """Return the editor's name of a button, or None for unsupported buttons."""
    return {
        MouseButton.LEFT: "left",
        MouseButton.RIGHT: "right",
        MouseButton.MIDDLE: "middle",
    }.get(button)


def _round(value: float) -> int:
    """Round half away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass
class _TouchTrace:
    start_time: float
    start: Point
    last: Point
    left_deadzone_once: bool


@dataclass
class MouseManager:
    """Tracks pointer, drag, scroll and touch state and produces mouse commands.

    ``window_settings`` is read from the global settings when not given.
    """

    window_settings: WindowSettings | None = None
    clock: Callable[[], float] = time.monotonic
    enabled: bool = True
    mouse_hidden: bool = False
    dragging: str | None = None
    drag_position: GridPoint = (0, 0)
    has_moved: bool = False
    position: GridPoint = (0, 0)
    relative_position: GridPoint = (0, 0)
    scroll_position: Point = (0.0, 0.0)
    window_under_mouse: WindowRegion | None = None
    _touches: dict[tuple[int, int], _TouchTrace] = field(default_factory=dict)

    def _settings(self) -> WindowSettings:
        if self.window_settings is not None:
            return self.window_settings
        return SETTINGS.get(WindowSettings)

    def handle_pointer_motion(
        self, x: int, y: int, keyboard_manager: KeyboardManager, layout: Layout
    ) -> list[MouseCommand]:
        """Move the pointer to a pixel position inside the window."""
        if x < 0 or x >= layout.width or y < 0 or y >= layout.height:
            return []
        position = (float(x), float(y))

        relevant: WindowRegion | None
        if self.dragging is not None:
            # While dragging, commands go to the window the drag started on.
            if self.window_under_mouse is None:
                raise RuntimeError("If dragging, there should be a window details recorded")
            target_id = self.window_under_mouse.id
            relevant = next(
                (details for details in layout.window_regions if details.id == target_id), None
            )
        else:
            relevant = None
            for details in layout.window_regions:
                if details.region.contains(position):
                    relevant = details

        bounds = relevant.region if relevant else Rect.from_wh(layout.width, layout.height)
        clamped = clamp_position(position, bounds, layout.font_dimensions)
        self.position = to_grid_coords(clamped, layout.font_dimensions)

        commands: list[MouseCommand] = []
        if relevant is None:
            return commands

        relative = (clamped[0] - relevant.region.left, clamped[1] - relevant.region.top)
        self.relative_position = to_grid_coords(relative, layout.font_dimensions)
        previous = self.drag_position
        self.drag_position = self.relative_position
        has_moved = self.drag_position != previous
        modifiers = keyboard_manager.format_modifier_string("", True)

        if self.dragging is not None and has_moved:
            commands.append(
                DragCommand(self.dragging, relevant.id, self.drag_position, modifiers)
            )
        else:
            self.window_under_mouse = relevant
            if has_moved:
                commands.append(
                    MouseButtonCommand("move", "", relevant.id, self.relative_position, modifiers)
                )

        self.has_moved = self.dragging is not None and (self.has_moved or has_moved)
        return commands

    def handle_pointer_transition(
        self, button: MouseButton, down: bool, keyboard_manager: KeyboardManager
    ) -> list[MouseCommand]:
        """Press or release a mouse button."""
        commands: list[MouseCommand] = []
        if not self.enabled:
            return commands
        button_text = mouse_button_to_button_text(button)
        if button_text is None:
            return commands

        if self.window_under_mouse is not None:
            position = self.drag_position if not down and self.has_moved else self.relative_position
            commands.append(
                MouseButtonCommand(
                    button_text,
                    "press" if down else "release",
                    self.window_under_mouse.id,
                    position,
                    keyboard_manager.format_modifier_string("", True),
                )
            )

        self.dragging = button_text if down else None
        if self.dragging is None:
            self.has_moved = False
        return commands

    def _scroll_commands(
        self, previous: int, new: int, directions: tuple[str, str], keyboard_manager: KeyboardManager
    ) -> list[MouseCommand]:
        if new == previous:
            return []
        direction = directions[0] if new > previous else directions[1]
        grid_id = self.window_under_mouse.id if self.window_under_mouse else 0
        command = ScrollCommand(
            direction,
            grid_id,
            self.drag_position,
            keyboard_manager.format_modifier_string("", True),
        )
        return [command] * abs(new - previous)

    def handle_line_scroll(
        self, x: float, y: float, keyboard_manager: KeyboardManager
    ) -> list[MouseCommand]:
        """Scroll by a number of lines; fractions accumulate between calls."""
        if not self.enabled:
            return []
        scroll_x, scroll_y = self.scroll_position

        previous_y = int(scroll_y)
        scroll_y += y
        self.scroll_position = (scroll_x, scroll_y)
        commands = self._scroll_commands(
            previous_y, int(scroll_y), ("up", "down"), keyboard_manager
        )

        previous_x = int(scroll_x)
        scroll_x += x
        self.scroll_position = (scroll_x, scroll_y)
        commands += self._scroll_commands(
            previous_x, int(scroll_x), ("left", "right"), keyboard_manager
        )
        return commands

    def handle_pixel_scroll(
        self,
        font_dimensions: FontDimensions,
        delta: Point,
        keyboard_manager: KeyboardManager,
    ) -> list[MouseCommand]:
        """Scroll by a pixel distance, measured in character cells."""
        font_width, font_height = font_dimensions
        pixel_x, pixel_y = delta
        return self.handle_line_scroll(
            pixel_x / font_width, pixel_y / font_height, keyboard_manager
        )

    def handle_touch(
        self,
        keyboard_manager: KeyboardManager,
        layout: Layout,
        finger_id: tuple[int, int],
        location: Point,
        phase: TouchPhase,
    ) -> list[MouseCommand]:
        """Turn touches into taps, drags or scrolling."""
        commands: list[MouseCommand] = []

        if phase is TouchPhase.STARTED:
            enable_deadzone = self._settings().touch_deadzone >= 0.0
            self._touches[finger_id] = _TouchTrace(
                start_time=self.clock(),
                start=location,
                last=location,
                left_deadzone_once=not enable_deadzone,
            )
            return commands

        if phase is TouchPhase.MOVED:
            dragging_just_now = False
            trace = self._touches.get(finger_id)
            if trace is not None:
                if not trace.left_deadzone_once:
                    distance = math.hypot(
                        trace.start[0] - location[0], trace.start[1] - location[1]
                    )
                    settings = self._settings()
                    if distance >= settings.touch_deadzone:
                        trace.left_deadzone_once = True
                    timeout = max(0, int(settings.touch_drag_timeout * 1_000_000)) / 1_000_000
                    if self.dragging is None and self.clock() - trace.start_time >= timeout:
                        dragging_just_now = True

                if self.dragging is not None or dragging_just_now:
                    commands += self.handle_pointer_motion(
                        _round(location[0]), _round(location[1]), keyboard_manager, layout
                    )
                elif trace.left_deadzone_once:
                    delta = (trace.last[0] - location[0], location[1] - trace.last[1])
                    trace.last = location
                    commands += self.handle_pixel_scroll(
                        layout.font_dimensions, delta, keyboard_manager
                    )

            if dragging_just_now:
                commands += self.handle_pointer_motion(
                    _round(location[0]), _round(location[1]), keyboard_manager, layout
                )
                commands += self.handle_pointer_transition(
                    MouseButton.LEFT, True, keyboard_manager
                )
            return commands

        trace = self._touches.pop(finger_id, None)
        if trace is not None:
            if self.dragging is not None:
                commands += self.handle_pointer_transition(
                    MouseButton.LEFT, False, keyboard_manager
                )
            if not trace.left_deadzone_once:
                commands += self.handle_pointer_motion(
                    _round(trace.start[0]), _round(trace.start[1]), keyboard_manager, layout
                )
                commands += self.handle_pointer_transition(MouseButton.LEFT, True, keyboard_manager)
                commands += self.handle_pointer_transition(
                    MouseButton.LEFT, False, keyboard_manager
                )
        return commands

    def handle_event(
        self, event: object, keyboard_manager: KeyboardManager, layout: Layout
    ) -> list[MouseCommand]:
        """Process a window event and return the commands it produces.

        ``mouse_hidden`` tells afterwards whether the cursor should be hidden.
        """
        match event:
            case CursorMoved(x=x, y=y):
                commands = self.handle_pointer_motion(int(x), int(y), keyboard_manager, layout)
                self.mouse_hidden = False
                return commands
            case LineScroll(x=x, y=y):
                return self.handle_line_scroll(x, y, keyboard_manager)
            case PixelScroll(x=x, y=y):
                return self.handle_pixel_scroll(layout.font_dimensions, (x, y), keyboard_manager)
            case Touch(device_id=device_id, id=finger, location=location, phase=phase):
                return self.handle_touch(
                    keyboard_manager, layout, (device_id, finger), location, phase
                )
            case MouseInput(button=button, pressed=pressed):
                return self.handle_pointer_transition(button, pressed, keyboard_manager)
            case KeyPressed():
                if self._settings().hide_mouse_when_typing and not self.mouse_hidden:
                    self.mouse_hidden = True
        return []