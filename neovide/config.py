"""Loading of the TOML configuration file into environment variables."""

from __future__ import annotations

import os
import sys
import tomllib
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

CONFIG_FILE = "config.toml"

_BOOL_FIELDS = ("wsl", "multigrid", "maximized", "vsync", "srgb", "idle")
_STRING_FIELDS = ("neovim_bin", "frame", "theme")

_ENV_NAMES = (
    ("wsl", "NEOVIDE_WSL"),
    ("multigrid", "NEOVIDE_MULTIGRID"),
    ("maximized", "NEOVIDE_MAXIMIZED"),
    ("vsync", "NEOVIDE_VSYNC"),
    ("srgb", "NEOVIDE_SRGB"),
    ("idle", "NEOVIDE_IDLE"),
    ("frame", "NEOVIDE_FRAME"),
    ("neovim_bin", "NEOVIM_BIN"),
    ("theme", "NEOVIDE_THEME"),
)


class ConfigError(Exception):
    """The configuration file exists but could not be read or parsed."""


def _config_dir() -> Path:
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        base = Path(appdata) if appdata else Path.home() / "AppData" / "Roaming"
    else:
        xdg = os.environ.get("XDG_CONFIG_HOME")
        base = Path(xdg) if xdg and Path(xdg).is_absolute() else Path.home() / ".config"
    return base / "neovide"


def config_path() -> Path:
    """Return the location of the configuration file."""
    return _config_dir() / CONFIG_FILE


def _format(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class Config:
    """Options read from the configuration file; unset options are None."""

    wsl: bool | None = None
    multigrid: bool | None = None
    maximized: bool | None = None
    vsync: bool | None = None
    srgb: bool | None = None
    idle: bool | None = None
    neovim_bin: Path | None = None
    frame: str | None = None
    theme: str | None = None

    @classmethod
    def _from_mapping(cls, data: Mapping[str, Any]) -> Config:
        values: dict[str, Any] = {}
        for name in _BOOL_FIELDS:
            value = data.get(name)
            if value is not None and not isinstance(value, bool):
                raise ValueError(f"invalid type for `{name}`: expected a boolean, got {value!r}")
            values[name] = value
        for name in _STRING_FIELDS:
            value = data.get(name)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"invalid type for `{name}`: expected a string, got {value!r}")
            values[name] = value
        if values["neovim_bin"] is not None:
            values["neovim_bin"] = Path(values["neovim_bin"])
        return cls(**values)

    @classmethod
    def load_from_path(cls, path: str | os.PathLike[str]) -> Config | None:
        """Read a config file; None if it does not exist, ConfigError if broken."""
        path = Path(path)
        if not path.exists():
            return None
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as error:
            raise ConfigError(
                f"Error while trying to open config file {path}:\n{error}\n"
                "Continuing with default config."
            ) from error
        try:
            return cls._from_mapping(tomllib.loads(text))
        except ValueError as error:
            raise ConfigError(
                f"Error while parsing config file {path}:\n{error}\n"
                "Continuing with default config."
            ) from error

    def write_to_env(self, environ: MutableMapping[str, str] | None = None) -> None:
        """Export every set option as its environment variable."""
        target = os.environ if environ is None else environ
        for field, env_name in _ENV_NAMES:
            value = getattr(self, field)
            if value is not None:
                target[env_name] = _format(value)

    @classmethod
    def init(cls, path: str | os.PathLike[str] | None = None) -> Config | None:
        """Load the config file and write it to the process environment.

        Errors are reported on stderr and the defaults are kept.
        """
        try:
            config = cls.load_from_path(config_path() if path is None else path)
        except ConfigError as error:
            print(error, file=sys.stderr)
            return None
        if config is not None:
            config.write_to_env()
        return config