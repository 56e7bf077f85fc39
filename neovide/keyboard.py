"""Translation of keyboard events into the editor's key notation."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Modifiers:
    """The modifier keys held down."""

    shift: bool = False
    control: bool = False
    alt: bool = False
    super_key: bool = False


class KeyLocation(enum.Enum):
    STANDARD = "standard"
    LEFT = "left"
    RIGHT = "right"
    NUMPAD = "numpad"


@dataclass(frozen=True)
class KeyEvent:
    """A key event.

    ``logical_key`` is a character, or the name of a named key when ``named``
    is true. ``text`` is the text the key produced, if any.
    """

    logical_key: str
    text: str | None = None
    named: bool = False
    physical_key: str | None = None
    location: KeyLocation = KeyLocation.STANDARD
    pressed: bool = True
    key_without_modifiers: str | None = None


@dataclass(frozen=True)
class KeyboardInput:
    event: KeyEvent
    is_synthetic: bool = False


@dataclass(frozen=True)
class ImeCommit:
    text: str


@dataclass(frozen=True)
class ImePreedit:
    text: str
    cursor: tuple[int, int] | None = None


@dataclass(frozen=True)
class ModifiersChanged:
    modifiers: Modifiers


_NAMED_KEYS: dict[str, str] = {
    "ArrowDown": "Down",
    "ArrowLeft": "Left",
    "ArrowRight": "Right",
    "ArrowUp": "Up",
    "Backspace": "BS",
    "Delete": "Del",
    "End": "End",
    "Enter": "Enter",
    "Escape": "Esc",
    **{f"F{number}": f"F{number}" for number in range(1, 36)},
    "Home": "Home",
    "Insert": "Insert",
    "PageDown": "PageDown",
    "PageUp": "PageUp",
    "Tab": "Tab",
}

_NUMPAD_KEYS: dict[str, str] = {
    "NumpadDivide": "kDivide",
    "NumpadStar": "kMultiply",
    "NumpadSubtract": "kMinus",
    "NumpadAdd": "kPlus",
    "NumpadEnter": "kEnter",
    "NumpadDecimal": "kDel",
}

# (with numlock, without numlock)
_NUMPAD_NUMBER_KEYS: dict[str, tuple[str, str]] = {
    "Numpad9": ("k9", "kPageUp"),
    "Numpad8": ("k8", "kUp"),
    "Numpad7": ("k7", "kHome"),
    "Numpad6": ("k6", "kRight"),
    "Numpad5": ("k5", "kOrigin"),
    "Numpad4": ("k4", "kLeft"),
    "Numpad3": ("k3", "kPageDown"),
    "Numpad2": ("k2", "kDown"),
    "Numpad1": ("k1", "kEnd"),
    "Numpad0": ("k0", "Insert"),
}


def _is_ascii_alphabetic_char(text: str) -> bool:
    return len(text) == 1 and text.isascii() and text.isalpha()


def _numpad_key(key_event: KeyEvent) -> str | None:
    if key_event.physical_key in _NUMPAD_KEYS:
        return _NUMPAD_KEYS[key_event.physical_key]
    pair = _NUMPAD_NUMBER_KEYS.get(key_event.physical_key or "")
    if pair is None:
        return None
    numlock, no_numlock = pair
    return numlock if key_event.text is not None else no_numlock


def get_special_key(key_event: KeyEvent) -> str | None:
    """Return the editor name of a special key, or None for ordinary keys."""
    if key_event.location is KeyLocation.NUMPAD:
        return _numpad_key(key_event)
    if not key_event.named:
        return None
    if key_event.logical_key == "Space":
        # Space may finish a dead-key sequence; only then is it not special.
        return "Space" if key_event.text == " " else None
    return _NAMED_KEYS.get(key_event.logical_key)


@dataclass
class KeyboardManager:
    """Tracks modifiers and IME state and formats key presses.

    ``macos_alt_is_meta`` is None except on macOS, where alt is only meta
    when that setting is true.
    """

    macos_alt_is_meta: bool | None = None
    modifiers: Modifiers = field(default_factory=Modifiers)
    ime_preedit: tuple[str, tuple[int, int] | None] = ("", None)

    def _use_alt(self) -> bool:
        return True if self.macos_alt_is_meta is None else self.macos_alt_is_meta

    def handle_event(
        self, event: KeyboardInput | ImeCommit | ImePreedit | ModifiersChanged | object
    ) -> str | None:
        """Process an event; return the key text to send to the editor, if any."""
        match event:
            case KeyboardInput(event=key_event, is_synthetic=False) if not self.ime_preedit[0]:
                if key_event.pressed:
                    text = self.format_key(key_event)
                    if text is not None:
                        _log.debug("Key pressed %s %r", text, self.modifiers)
                    return text
            case ImeCommit(text=text):
                _log.debug("Ime commit %s", text)
                return text
            case ImePreedit(text=text, cursor=cursor):
                self.ime_preedit = (text, cursor)
            case ModifiersChanged(modifiers=modifiers):
                self.modifiers = modifiers
        return None

    def format_key(self, key_event: KeyEvent) -> str | None:
        """Format a key press in key notation, or None if it produces nothing."""
        special = get_special_key(key_event)
        if special is not None:
            return self._format_key_text(special, True)
        return self._format_normal_key(key_event)

    def _format_normal_key(self, key_event: KeyEvent) -> str | None:
        if self.macos_alt_is_meta is not None and self.modifiers.alt and self._use_alt():
            base = key_event.key_without_modifiers
            return None if base is None else self._format_key_text(base, True)
        text = key_event.text
        if text is None and not key_event.named:
            text = key_event.logical_key
        return None if text is None else self._format_key_text(text, False)

    def _format_key_text(self, text: str, is_special: bool) -> str:
        if self.modifiers.shift and _is_ascii_alphabetic_char(text):
            text = text.upper()
        modifiers = self.format_modifier_string(text, is_special)
        # "<" is written as a special key, but counts as normal for the modifiers.
        if text == "<":
            text, is_special = "lt", True
        if modifiers:
            return f"<{modifiers}{text}>"
        return f"<{text}>" if is_special else text

    def format_modifier_string(self, text: str, is_special: bool) -> str:
        """Return the modifier prefix, such as ``S-C-``, for a key."""
        state = self.modifiers
        include_shift = is_special or (state.control and _is_ascii_alphabetic_char(text))
        include_alt = self._use_alt() or is_special
        parts = []
        if state.shift and include_shift:
            parts.append("S-")
        if state.control:
            parts.append("C-")
        if state.alt and include_alt:
            parts.append("M-")
        if state.super_key:
            parts.append("D-")
        return "".join(parts)