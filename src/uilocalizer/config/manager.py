"""Configuration manager for UI Localizer.

This module loads the optional YAML configuration file, validates it with the
Pydantic schema and overlays the provider settings taken from the process
environment (the way the CI job passes them in).
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..utils.exceptions import ConfigurationError
from .schema import LocalizerConfig

logger = logging.getLogger(__name__)

# Environment variable -> field of TranslationConfig
ENVIRONMENT_OVERRIDES: dict[str, str] = {
    "OPENAI_API_KEY": "api_key",
    "OPENAI_MODEL": "model",
    "API_ENDPOINT": "api_endpoint",
    "TARGET_LANGUAGE": "target_language",
}


class ConfigManager:
    """Loads and validates pipeline configuration."""

    @staticmethod
    def load_config(config_path: Path | None = None) -> LocalizerConfig:
        """
        Load and validate configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file, or None for defaults

        Returns:
            LocalizerConfig: Validated configuration object

        Raises:
            ConfigurationError: If the file is missing, unreadable or invalid
        """
        if config_path is None:
            return LocalizerConfig()

        if not config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with config_path.open("r", encoding="utf-8") as f:
                raw_config_data: object = yaml.safe_load(f)  # pyright: ignore[reportAny]
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {config_path}: {e}") from e

        if raw_config_data is None:
            config_data: dict[str, object] = {}
        elif isinstance(raw_config_data, dict):
            config_data = raw_config_data  # pyright: ignore[reportUnknownVariableType]
        else:
            raise ConfigurationError(
                f"Configuration file must contain a YAML dictionary, got {type(raw_config_data).__name__}"
            )

        try:
            config = LocalizerConfig.model_validate(config_data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration in {config_path}: {e}") from e

        logger.debug(f"Loaded configuration from {config_path}")
        return config

    @staticmethod
    def apply_environment(
        config: LocalizerConfig,
        environ: Mapping[str, str] | None = None,
    ) -> LocalizerConfig:
        """
        Overlay provider settings from environment variables.

        Empty variables are ignored so that an unset CI input keeps the
        configured (or default) value.

        Returns:
            A new validated configuration; the input is not modified
        """
        if environ is None:
            environ = os.environ

        overrides: dict[str, str] = {}
        for variable, field_name in ENVIRONMENT_OVERRIDES.items():
            value = environ.get(variable, "").strip()
            if value:
                overrides[field_name] = value

        if not overrides:
            return config

        data = config.model_dump()
        translation_data = dict(data["translation"])  # pyright: ignore[reportAny]
        translation_data.update(overrides)
        data["translation"] = translation_data

        try:
            updated = LocalizerConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid value in environment: {e}") from e

        logger.debug(
            "Applied environment overrides: "
            + ", ".join(name for name in overrides if name != "api_key")
        )
        return updated

    @classmethod
    def load(
        cls,
        config_path: Path | None = None,
        environ: Mapping[str, str] | None = None,
        work_dir: Path | None = None,
    ) -> LocalizerConfig:
        """Load the YAML file, apply environment overrides and an optional work dir."""
        config = cls.apply_environment(cls.load_config(config_path), environ)
        if work_dir is not None:
            config.paths.work_dir = work_dir
        return config
