"""Configuration module."""

from config.settings import (
    DataSettings,
    ModelSettings,
    Settings,
    settings,
)

__all__ = [
    "DataSettings",
    "ModelSettings",
    "Settings",
    "settings",
]
