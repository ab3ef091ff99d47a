"""Application settings and configuration management."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

CLOUDINARY_API_BASE = "https://api.cloudinary.com/v1_1"

# Environment variables override values from config.yaml
ENV_APP_SCRIPT_URL = "FITTRACK_APP_SCRIPT_URL"
ENV_API_KEY = "FITTRACK_API_KEY"
ENV_TIMEOUT = "FITTRACK_TIMEOUT"
ENV_CLOUDINARY_NAME = "FITTRACK_CLOUDINARY_NAME"
ENV_CLOUDINARY_UPLOAD_PRESET = "FITTRACK_CLOUDINARY_UPLOAD_PRESET"


def _default_config_dir() -> Path:
    """Return the default configuration directory."""
    return Path.home() / ".fittrack"


def _default_config_path() -> Path:
    return _default_config_dir() / "config.yaml"


def _parse_timeout(
    value: object, source: str, current: Optional[float]
) -> Optional[float]:
    """Parse a timeout in seconds, keeping ``current`` if the value is unusable."""
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        logger.error("Ignoring invalid timeout in %s: %r", source, value)
        return current


@dataclass
class BackendConfig:
    """Spreadsheet-backed endpoint configuration."""

    url: Optional[str] = None
    api_key: Optional[str] = None
    timeout: Optional[float] = None  # None: no client-side timeout


@dataclass
class ImageHostConfig:
    """Image hosting (Cloudinary unsigned upload) configuration."""

    cloud_name: Optional[str] = None
    upload_preset: Optional[str] = None
    api_base: str = CLOUDINARY_API_BASE


@dataclass
class DefaultsConfig:
    """Default values for various operations."""

    output_format: str = "table"  # "table" or "json"
    recent_photos: int = 10


@dataclass
class Settings:
    """Main application settings.

    Built once at startup and handed to the API client and image uploader.
    """

    backend: BackendConfig = field(default_factory=BackendConfig)
    images: ImageHostConfig = field(default_factory=ImageHostConfig)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)

    @classmethod
    def load(
        cls,
        config_path: Optional[Path] = None,
        environ: Optional[dict[str, str]] = None,
    ) -> "Settings":
        """Load settings from YAML file, then apply environment overrides.

        Args:
            config_path: Path to config.yaml. If None, uses ~/.fittrack/config.yaml
            environ: Environment mapping. If None, uses os.environ

        Returns:
            Settings instance
        """
        if config_path is None:
            config_path = _default_config_path()
        if environ is None:
            environ = dict(os.environ)

        settings = cls()

        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}

            # Parse backend config
            if "backend" in data:
                be_data = data["backend"] or {}
                if "url" in be_data:
                    settings.backend.url = be_data["url"]
                if "api_key" in be_data:
                    settings.backend.api_key = be_data["api_key"]
                if be_data.get("timeout") is not None:
                    settings.backend.timeout = _parse_timeout(
                        be_data["timeout"], "backend.timeout", settings.backend.timeout
                    )

            # Parse image host config
            if "images" in data:
                img_data = data["images"] or {}
                if "cloud_name" in img_data:
                    settings.images.cloud_name = img_data["cloud_name"]
                if "upload_preset" in img_data:
                    settings.images.upload_preset = img_data["upload_preset"]
                if img_data.get("api_base"):
                    settings.images.api_base = img_data["api_base"]

            # Parse defaults
            if "defaults" in data:
                def_data = data["defaults"] or {}
                if "output_format" in def_data:
                    settings.defaults.output_format = def_data["output_format"]
                if "recent_photos" in def_data:
                    settings.defaults.recent_photos = int(def_data["recent_photos"])

        if environ.get(ENV_APP_SCRIPT_URL):
            settings.backend.url = environ[ENV_APP_SCRIPT_URL]
        if environ.get(ENV_API_KEY):
            settings.backend.api_key = environ[ENV_API_KEY]
        if environ.get(ENV_TIMEOUT):
            settings.backend.timeout = _parse_timeout(
                environ[ENV_TIMEOUT], ENV_TIMEOUT, settings.backend.timeout
            )
        if environ.get(ENV_CLOUDINARY_NAME):
            settings.images.cloud_name = environ[ENV_CLOUDINARY_NAME]
        if environ.get(ENV_CLOUDINARY_UPLOAD_PRESET):
            settings.images.upload_preset = environ[ENV_CLOUDINARY_UPLOAD_PRESET]

        return settings

    def missing(self) -> list[str]:
        """Return the environment variable names of unset required values."""
        missing = []
        if not self.backend.url:
            missing.append(ENV_APP_SCRIPT_URL)
        if not self.backend.api_key:
            missing.append(ENV_API_KEY)
        if not self.images.cloud_name:
            missing.append(ENV_CLOUDINARY_NAME)
        if not self.images.upload_preset:
            missing.append(ENV_CLOUDINARY_UPLOAD_PRESET)
        return missing

    def validate(self) -> bool:
        """Log a configuration error for each missing value.

        Startup continues either way; requests made without configuration
        fail with a configuration error envelope.
        """
        missing = self.missing()
        for name in missing:
            logger.error("Missing configuration value: %s", name)
        return not missing

    def save(
        self, config_path: Optional[Path] = None, include_secrets: bool = False
    ) -> None:
        """Save current settings to YAML file.

        Args:
            config_path: Path to save config.yaml. If None, uses ~/.fittrack/config.yaml
            include_secrets: Whether to write the API key
        """
        if config_path is None:
            config_path = _default_config_path()

        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "backend": {
                "url": self.backend.url,
                "api_key": self.backend.api_key if include_secrets else None,
                "timeout": self.backend.timeout,
            },
            "images": {
                "cloud_name": self.images.cloud_name,
                "upload_preset": self.images.upload_preset,
                "api_base": self.images.api_base,
            },
            "defaults": {
                "output_format": self.defaults.output_format,
                "recent_photos": self.defaults.recent_photos,
            },
        }

        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
