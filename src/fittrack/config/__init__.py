"""Configuration loading."""

from __future__ import annotations

from fittrack.config.settings import (
    BackendConfig,
    DefaultsConfig,
    ImageHostConfig,
    Settings,
)

__all__ = [
    "BackendConfig",
    "DefaultsConfig",
    "ImageHostConfig",
    "Settings",
]
