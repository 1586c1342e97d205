"""Configuration management for feedstore."""

from feedstore.config.manager import ConfigManager
from feedstore.config.schema import FetchConfig, GlobalConfig

__all__ = ["ConfigManager", "FetchConfig", "GlobalConfig"]
