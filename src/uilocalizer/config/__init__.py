"""Configuration loading and validation."""

from .manager import ConfigManager
from .schema import (
    ExtractionConfig,
    LocalizerConfig,
    PathsConfig,
    ReplacementConfig,
    TranslationConfig,
)

__all__ = [
    "ConfigManager",
    "ExtractionConfig",
    "LocalizerConfig",
    "PathsConfig",
    "ReplacementConfig",
    "TranslationConfig",
]
