"""Global container for the settings of each subsystem.

Settings objects are stored by type. Named handlers keep the values in sync
with the editor's ``g:neovide_<name>`` variables.
"""

from __future__ import annotations

import contextlib
import copy
import logging
import threading
from typing import Any, Callable, Protocol, TypeVar

_log = logging.getLogger(__name__)

T = TypeVar("T")

UpdateHandler = Callable[[Any], None]
Reader = Callable[[], Any]


class NeovimClient(Protocol):
    """The part of an editor connection that settings synchronisation needs."""

    async def get_var(self, name: str) -> Any: ...

    async def set_var(self, name: str, value: Any) -> Any: ...

    async def command(self, command: str) -> Any: ...


def _notifier_script(name: str) -> str:
    return (
        'exe "'
        f"fun! NeovideNotify{name}Changed(d, k, z)\n"
        f"call rpcnotify(g:neovide_channel_id, 'setting_changed', '{name}', g:neovide_{name})\n"
        "endf\n"
        f"call dictwatcheradd(g:, 'neovide_{name}', 'NeovideNotify{name}Changed')\""
    )


class Settings:
    """Thread-safe store of settings objects and named setting handlers."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._settings: dict[type, Any] = {}
        self._listeners: dict[str, UpdateHandler] = {}
        self._readers: dict[str, Reader] = {}

    def set_setting_handlers(
        self, property_name: str, update_func: UpdateHandler, reader_func: Reader
    ) -> None:
        """Register the update and read functions of a named setting."""
        with self._lock:
            self._listeners[property_name] = update_func
            self._readers[property_name] = reader_func

    def set(self, value: Any) -> None:
        """Store a copy of a settings object, replacing any of the same type."""
        stored = copy.deepcopy(value)
        with self._lock:
            self._settings[type(value)] = stored

    def get(self, setting_type: type[T]) -> T:
        """Return a copy of the stored settings object of the given type."""
        with self._lock:
            try:
                value = self._settings[setting_type]
            except KeyError:
                raise KeyError(
                    "Trying to retrieve a settings object that doesn't exist: "
                    f"{setting_type.__name__}"
                ) from None
            return copy.deepcopy(value)

    def _listener(self, name: str) -> UpdateHandler:
        with self._lock:
            return self._listeners[name]

    def _reader(self, name: str) -> Reader:
        with self._lock:
            return self._readers[name]

    def _names(self) -> list[str]:
        with self._lock:
            return list(self._listeners)

    async def read_initial_values(self, nvim: NeovimClient) -> None:
        """Load each setting from the editor, or push the local value if unset."""
        for name in self._names():
            variable_name = f"neovide_{name}"
            try:
                value = await nvim.get_var(variable_name)
            except Exception as error:  # noqa: BLE001 - any failure means "unset"
                _log.debug("Initial value load failed for %s: %s", name, error)
                setting = self._reader(name)()
                with contextlib.suppress(Exception):
                    await nvim.set_var(variable_name, setting)
            else:
                self._listener(name)(value)

    async def setup_changed_listeners(self, nvim: NeovimClient) -> None:
        """Install a watcher in the editor that reports changes of each setting."""
        for name in self._names():
            try:
                await nvim.command(_notifier_script(name))
            except Exception as error:
                raise RuntimeError(
                    f"Could not setup setting notifier for {name}"
                ) from error

    def handle_changed_notification(self, arguments: list[Any]) -> None:
        """Dispatch a ``setting_changed`` notification to its listener."""
        if len(arguments) < 2:
            raise ValueError("setting_changed notification needs a name and a value")
        name, value = arguments[0], arguments[1]
        if not isinstance(name, str):
            raise ValueError(f"setting name must be a string, got {name!r}")
        self._listener(name)(value)


SETTINGS = Settings()