[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "neovide"
version = "0.1.0"
description = "Settings, configuration, window persistence and input handling for a Neovim GUI front end"
requires-python = ">=3.11"
dependencies = []
keywords = ["neovim", "gui", "editor", "keyboard", "mouse", "touch", "settings"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Editors",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[tool.hatch.build.targets.wheel]
packages = ["neovide"]

[tool.pytest.ini_options]
addopts = "-ra"
