"""Sync configuration model and loader."""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ConfigurationError
from .transform import SUPPORTED_EXPORT_TYPES
from .utils.config_loader import load_yaml
from .utils.logging import get_logger

logger = get_logger(__name__)

LANGUAGE_PLACEHOLDER = "{LANGUAGE}"
API_KEY_ENV = "POEDITOR_API_KEY"


class SyncConfig(BaseModel):
    """Configuration for one export/check run.

    Example ``poeditor.yml``::

        api_key: 0123456789abcdef
        project_id: 12345
        type: apple_strings
        tags: [ios]
        languages: [en, ko, zh-Hans]
        language_alias:
          zh: zh-Hans
        path: Resources/{LANGUAGE}.lproj/Localizable.strings
        path_replace:
          en: Resources/Base.lproj/Localizable.strings
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    api_key: str = Field(..., description="POEditor API token")
    project_id: str = Field(..., description="POEditor project id")
    type: str = Field(..., description="Export file type")
    languages: tuple[str, ...] = Field(..., description="Languages to export, in order")
    filters: tuple[str, ...] = Field(default=(), description="Export filters")
    tags: tuple[str, ...] = Field(default=(), description="Export tags")
    path: str = Field(..., description="Destination template containing {LANGUAGE}")
    path_replace: dict[str, str] = Field(
        default_factory=dict, description="Language -> literal destination path"
    )
    language_alias: dict[str, str] = Field(
        default_factory=dict, description="Alias language -> source language"
    )

    @field_validator("project_id", mode="before")
    @classmethod
    def _coerce_project_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("filters", "tags", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        return value

    @field_validator("path_replace", "language_alias", mode="before")
    @classmethod
    def _coerce_mapping(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("api_key", "project_id")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("languages")
    @classmethod
    def _has_languages(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("at least one language is required")
        return value

    @field_validator("type")
    @classmethod
    def _known_type(cls, value: str) -> str:
        if value not in SUPPORTED_EXPORT_TYPES:
            supported = ", ".join(sorted(SUPPORTED_EXPORT_TYPES))
            raise ValueError(f"unsupported export type '{value}' (expected one of: {supported})")
        return value

    @field_validator("path")
    @classmethod
    def _single_placeholder(cls, value: str) -> str:
        count = value.count(LANGUAGE_PLACEHOLDER)
        if count != 1:
            raise ValueError(
                f"must contain {LANGUAGE_PLACEHOLDER} exactly once (found {count})"
            )
        return value

    @field_validator("path_replace")
    @classmethod
    def _no_blank_overrides(cls, value: dict[str, str]) -> dict[str, str]:
        blank = sorted(language for language, path in value.items() if not path.strip())
        if blank:
            raise ValueError(f"empty destination path for: {', '.join(blank)}")
        return value

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> "SyncConfig":
        """Create config from a dictionary.

        Raises:
            ConfigurationError: If the dictionary fails validation
        """
        try:
            config = cls(**config_dict)
        except ValidationError as e:
            raise ConfigurationError(_format_validation_error(e)) from e
        except TypeError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

        config.warn_orphan_aliases()
        return config

    def warn_orphan_aliases(self) -> None:
        """Log aliases whose source language is never exported."""
        for alias, source in self.language_alias.items():
            if source not in self.languages:
                logger.warning(
                    f"Alias '{alias}' points to '{source}', which is not in languages; "
                    "it will never be written"
                )


def _format_validation_error(error: ValidationError) -> str:
    lines = ["Invalid configuration:"]
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "config"
        lines.append(f"  {location}: {item['msg']}")
    return "\n".join(lines)


def load_config(
    config_path: str | Path,
    environ: Optional[Mapping[str, str]] = None,
) -> SyncConfig:
    """Load and validate a sync configuration file.

    The ``POEDITOR_API_KEY`` environment variable overrides ``api_key``
    from the file.

    Args:
        config_path: Path to the YAML configuration file
        environ: Environment to read overrides from (default: os.environ)

    Returns:
        Validated SyncConfig instance

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    environ = os.environ if environ is None else environ

    try:
        raw = load_yaml(config_path)
    except FileNotFoundError as e:
        raise ConfigurationError(str(e)) from e
    except (yaml.YAMLError, ValueError) as e:
        raise ConfigurationError(f"Could not parse {config_path}: {e}") from e

    api_key = environ.get(API_KEY_ENV)
    if api_key:
        raw["api_key"] = api_key

    logger.debug(f"Loaded configuration from {config_path}")
    return SyncConfig.from_dict(raw)
