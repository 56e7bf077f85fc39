import pytest

from neovide.keyboard import (
    ImeCommit,
    ImePreedit,
    KeyboardInput,
    KeyboardManager,
    KeyEvent,
    KeyLocation,
    Modifiers,
    ModifiersChanged,
    get_special_key,
)


def manager_with(**modifiers):
    manager = KeyboardManager()
    manager.handle_event(ModifiersChanged(Modifiers(**modifiers)))
    return manager


@pytest.mark.parametrize(
    "name, expected",
    [("ArrowDown", "Down"), ("Backspace", "BS"), ("Escape", "Esc"), ("F35", "F35"), ("Tab", "Tab")],
)
def test_special_named_keys(name, expected):
    assert get_special_key(KeyEvent(name, named=True)) == expected


def test_space_special_only_with_space_text():
    assert get_special_key(KeyEvent("Space", text=" ", named=True)) == "Space"
    assert get_special_key(KeyEvent("Space", text="´", named=True)) is None


def test_character_is_not_special():
    assert get_special_key(KeyEvent("a", text="a")) is None


@pytest.mark.parametrize(
    "physical, text, expected",
    [
        ("Numpad8", None, "kUp"),
        ("Numpad8", "8", "k8"),
        ("Numpad0", None, "Insert"),
        ("NumpadStar", "*", "kMultiply"),
    ],
)
def test_numpad_keys(physical, text, expected):
    event = KeyEvent("x", text=text, physical_key=physical, location=KeyLocation.NUMPAD)
    assert get_special_key(event) == expected


def test_plain_character():
    assert KeyboardManager().format_key(KeyEvent("a", text="a")) == "a"


def test_special_key_wrapped_in_brackets():
    result = KeyboardManager().format_key(KeyEvent("Enter", named=True))
    assert result == "<Enter>"


def test_less_than_is_escaped():
    assert KeyboardManager().format_key(KeyEvent("<", text="<")) == "<lt>"


def test_shift_uppercases_and_is_dropped_for_characters():
    manager = manager_with(shift=True)
    assert manager.format_key(KeyEvent("a", text="a")) == "A"
    assert manager.format_key(KeyEvent("$", text="$")) == "$"


def test_modifier_strings():
    assert manager_with(control=True).format_modifier_string("a", False) == "C-"
    assert manager_with(shift=True).format_modifier_string("a", False) == ""
    assert manager_with(shift=True, control=True).format_modifier_string("A", False) == "S-C-"
    assert manager_with(super_key=True).format_modifier_string("", True) == "D-"


def test_control_shift_alpha_keeps_shift():
    manager = manager_with(shift=True, control=True)
    result = manager.format_key(KeyEvent("a", text="a"))
    assert result.startswith("<S-C-") and result.endswith("A>")


def test_alt_on_macos_without_meta_is_dropped():
    manager = KeyboardManager(macos_alt_is_meta=False)
    manager.handle_event(ModifiersChanged(Modifiers(alt=True)))
    assert manager.format_key(KeyEvent("å", text="å", key_without_modifiers="a")) == "å"


def test_alt_on_macos_with_meta_uses_base_key():
    manager = KeyboardManager(macos_alt_is_meta=True)
    manager.handle_event(ModifiersChanged(Modifiers(alt=True)))
    result = manager.format_key(KeyEvent("å", text="å", key_without_modifiers="a"))
    assert result == "<M-a>"


def test_unknown_named_key_produces_nothing():
    assert KeyboardManager().format_key(KeyEvent("Shift", named=True)) is None


def test_handle_event_pressed_and_released():
    manager = KeyboardManager()
    assert manager.handle_event(KeyboardInput(KeyEvent("q", text="q"))) == "q"
    assert manager.handle_event(KeyboardInput(KeyEvent("q", text="q", pressed=False))) is None


def test_synthetic_input_ignored():
    manager = KeyboardManager()
    assert manager.handle_event(KeyboardInput(KeyEvent("q", text="q"), is_synthetic=True)) is None


def test_preedit_suppresses_keys_until_cleared():
    manager = KeyboardManager()
    manager.handle_event(ImePreedit("ka", (0, 2)))
    assert manager.ime_preedit == ("ka", (0, 2))
    assert manager.handle_event(KeyboardInput(KeyEvent("q", text="q"))) is None
    manager.handle_event(ImePreedit(""))
    assert manager.handle_event(KeyboardInput(KeyEvent("q", text="q"))) == "q"


def test_ime_commit_passes_text_through():
    assert KeyboardManager().handle_event(ImeCommit("日本")) == "日本"


def test_modifiers_changed_recorded():
    modifiers = Modifiers(control=True, alt=True)
    manager = KeyboardManager()
    manager.handle_event(ModifiersChanged(modifiers))
    assert manager.modifiers == modifiers