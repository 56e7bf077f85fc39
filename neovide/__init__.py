"""Settings, config file, window persistence, keyboard, mouse and frame-pacing logic for a Neovim GUI."""

__version__ = "0.1.0"