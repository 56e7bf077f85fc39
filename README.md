# neovide

Building blocks for a graphical Neovim front end: the parts that need no
window system. Every module uses only the standard library.

## Modules

- `neovide.from_value`: `parse_f32`, `parse_u64`, `parse_u32`,
  `parse_i32`, `parse_string` and `parse_bool`. Each takes the current value
  of a setting and an incoming value, and returns the new value. If the
  incoming value has the wrong type, the error is logged and the current
  value is returned. `parse_u32` and `parse_i32` truncate to 32 bits.
  `parse_f32` rounds to single precision. `parse_bool` also accepts
  unsigned integers, where any value other than zero counts as true.
- `neovide.settings`: `Settings` stores one settings object per type, with
  `set(value)` and `get(setting_type)`; both work on copies. It also holds an
  update handler and a reader for each named setting
  (`set_setting_handlers`).
  - `read_initial_values(nvim)` is async. For each setting it reads
    `g:neovide_<name>` and passes the value to the update handler. If the
    read fails, it writes the reader's value to that variable instead.
  - `setup_changed_listeners(nvim)` is async. It installs a dict watcher for
    each setting.
  - `handle_changed_notification([name, value])` calls the handler for
    `name`.
  - The `nvim` object needs async `get_var`, `set_var` and `command`
    methods.
  - A shared instance is available as `neovide.settings.SETTINGS`.
- `neovide.config`: `config_path()` returns the location of the config file:
  - `$XDG_CONFIG_HOME/neovide/config.toml`, or `~/.config/neovide/config.toml`
    when that variable is unset;
  - `%APPDATA%\neovide\config.toml` on Windows.

  `Config.load_from_path(path)` returns a `Config`. It returns `None` if the
  file does not exist. It raises `ConfigError` if the file cannot be read or
  parsed. `Config.write_to_env(environ=None)` exports every option that is
  set. The variables are `NEOVIDE_WSL`, `NEOVIDE_MULTIGRID`,
  `NEOVIDE_MAXIMIZED`, `NEOVIDE_VSYNC`, `NEOVIDE_SRGB`, `NEOVIDE_IDLE`,
  `NEOVIDE_FRAME`, `NEOVIM_BIN` and `NEOVIDE_THEME`. Booleans are written as
  `true` or `false`. `Config.init(path=None)` loads the file and writes it to
  `os.environ`. Errors are printed to stderr.
- `neovide.window_settings`: the `WindowSettings` and `KeyboardSettings`
  dataclasses with their default values.
- `neovide.window_size`: the window state is either `Maximized()` or
  `Windowed(position, pixel_size)`, built from `PhysicalPosition` and
  `PhysicalSize`.
  - `save_window_size(maximized, size, position, window_settings=None, path=None)`
    writes the state as JSON. It honours `remember_window_size` and
    `remember_window_position`.
  - `load_last_window_settings(path=None)` reads the state back.
  - The default location, returned by `settings_path()`, is
    `neovide-settings.json` in Neovim's data directory.
- `neovide.keyboard`: `KeyboardManager` turns key events into Neovim key
  notation, such as `<S-C-A>`, `<kEnter>` or `<lt>`.
  - `handle_event` accepts `KeyboardInput`, `ImeCommit`, `ImePreedit` and
    `ModifiersChanged` events. It returns the text to send, or `None`.
    Key presses are ignored while IME preedit text is pending.
  - `get_special_key(key_event)` maps named and numpad keys to their Neovim
    names.
  - Set `macos_alt_is_meta` only on macOS; it decides there whether alt acts
    as meta.
- `neovide.mouse`: `MouseManager` turns the events `CursorMoved`,
  `LineScroll`, `PixelScroll`, `Touch`, `MouseInput` and `KeyPressed` into
  `MouseButtonCommand`, `DragCommand` and `ScrollCommand` objects, relative
  to the grid. A `Layout` describes the window size, the font cell size and
  the `WindowRegion`s in draw order.
  - Touch handling supports taps, dragging after `touch_drag_timeout`, and
    scrolling once the finger leaves `touch_deadzone`.
  - `mouse_hidden` tells whether the cursor should be hidden while typing.
- `neovide.update_loop`: `UpdateLoop` paces frames from `refresh_rate`, or
  from `refresh_rate_idle` once the window has been drawn unfocused.
  - `step(target, event)` runs one step for a target object, which has
    `is_running`, `exit_code`, `window_state`, `handle_window_commands`,
    `synchronize_settings`, `handle_event` and `draw_frame`.
  - It returns the next deadline on the loop's clock.
  - When the target stops running, `step` saves the window state and raises
    `SystemExit` with the target's exit code.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from neovide.keyboard import KeyboardManager, KeyEvent, Modifiers, ModifiersChanged

manager = KeyboardManager()
manager.handle_event(ModifiersChanged(Modifiers(control=True, shift=True)))
print(manager.format_key(KeyEvent(logical_key="a", text="a")))  # <S-C-A>
```

```python
from neovide.window_settings import WindowSettings
from neovide.window_size import (
    PhysicalPosition, PhysicalSize, load_last_window_settings, save_window_size,
)

save_window_size(False, PhysicalSize(800, 600), PhysicalPosition(10, 20),
                 WindowSettings(), "state.json")
print(load_last_window_settings("state.json"))
# Windowed(position=PhysicalPosition(x=10, y=20), pixel_size=PhysicalSize(width=800, height=600))
```

## What this package does not do

The package has no command to run, and it opens no window. It does not
render text, and it does not start or connect to a Neovim process. The
keyboard and mouse managers return key text and command objects. The
update loop calls a target object that you supply. Sending the results to
Neovim and drawing the screen are left to the application that uses these
pieces.