"""Filesystem locations for feedstore config."""

from pathlib import Path

import platformdirs

APP_NAME = "feedstore"


def get_config_dir() -> Path:
    """Return the user config directory (XDG on Linux)."""
    return Path(platformdirs.user_config_dir(APP_NAME))


def get_config_file() -> Path:
    return get_config_dir() / "config.yaml"
