"""Configuration for Folio.

Settings come from three places, highest priority first:

1. Environment variables (``FOLIO_SECTION__KEY``, e.g. ``FOLIO_CONTACT__TO_EMAIL``)
2. ``.folio.toml`` in the site root
3. Defaults declared on the models below
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from folio.exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".folio.toml"
DEFAULT_CONTENT_DIRS = (Path("content"), Path("src/content"))
DEFAULT_CONTENT_EXTENSION = ".mdx"
DEFAULT_RESEND_API_URL = "https://api.resend.com/emails"


def _deep_merge(destination: dict[str, Any], source: Mapping[str, Any]) -> dict[str, Any]:
    """Merge source into destination, with source values overwriting."""
    for key, value in source.items():
        if isinstance(value, Mapping) and isinstance(destination.get(key), Mapping):
            destination[key] = _deep_merge(dict(destination[key]), value)
        else:
            destination[key] = value
    return destination


class PathsSettings(BaseModel):
    """Where content lives.

    ``content_dirs`` are candidate roots tried in order; relative entries are
    resolved against ``site_root``.
    """

    site_root: Path = Field(default_factory=Path.cwd, description="Root directory of the site")
    content_dirs: list[Path] = Field(
        default_factory=lambda: list(DEFAULT_CONTENT_DIRS),
        description="Candidate content roots, first match wins",
    )
    content_extension: str = Field(default=DEFAULT_CONTENT_EXTENSION, description="Content file extension")

    @property
    def abs_content_dirs(self) -> list[Path]:
        return [path if path.is_absolute() else self.site_root / path for path in self.content_dirs]


class ExplorerSettings(BaseModel):
    """Defaults for the interactive explorer."""

    default_sort: Literal["newest", "oldest"] = Field(default="newest")
    threshold: float = Field(default=0.35, ge=0.0, le=1.0, description="Fuzzy match tolerance")


class ContactSettings(BaseModel):
    """Message relay and rate limiting for the contact form."""

    resend_api_key: str | None = Field(default=None, description="API key for the Resend relay")
    to_email: str | None = Field(default=None, description="Inbox receiving contact messages")
    from_email: str | None = Field(default=None, description="Verified sender address")
    api_url: str = Field(default=DEFAULT_RESEND_API_URL)
    timeout_seconds: float = Field(default=10.0, gt=0)
    rate_limit_window_seconds: float = Field(default=60.0, gt=0)
    rate_limit_max: int = Field(default=3, ge=1)
    rate_limit_max_clients: int = Field(default=10_000, ge=1)


class FolioConfig(BaseSettings):
    """Root configuration for Folio."""

    paths: PathsSettings = Field(default_factory=PathsSettings)
    explorer: ExplorerSettings = Field(default_factory=ExplorerSettings)
    contact: ContactSettings = Field(default_factory=ContactSettings)

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix="FOLIO_",
        env_nested_delimiter="__",
    )

    @classmethod
    def load(cls, site_root: Path | None = None) -> FolioConfig:
        """Load configuration from ``.folio.toml`` and environment variables."""
        root_path = site_root if site_root is not None else Path.cwd()
        config_file = root_path / CONFIG_FILENAME

        file_settings: dict[str, Any] = {}
        if config_file.is_file():
            try:
                with config_file.open("rb") as f:
                    file_settings = tomllib.load(f)
            except tomllib.TOMLDecodeError as exc:
                raise ConfigError(str(config_file), [{"msg": str(exc)}]) from exc
            logger.debug("Loaded configuration file %s", config_file)

        try:
            env_settings = cls().model_dump(exclude_unset=True)
            merged = _deep_merge(file_settings, env_settings)
            merged.setdefault("paths", {}).setdefault("site_root", root_path)
            return cls.model_validate(merged)
        except ValidationError as exc:
            raise ConfigError(str(config_file), exc.errors()) from exc
