"""Configuration schema for UI Localizer using nested Pydantic models."""

from pathlib import Path
from typing import Annotated, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_API_ENDPOINT = "https://api.openai.com/v1"
DEFAULT_TARGET_LANGUAGE = "简体中文"


class TranslationConfig(BaseModel):
    """Translation provider and batching configuration."""

    api_key: str = Field(
        default="",
        description="API key for the chat-completions provider (required to translate)",
    )
    model: str = Field(
        default=DEFAULT_MODEL,
        description="Model identifier sent to the provider",
        min_length=1,
    )
    api_endpoint: str = Field(
        default=DEFAULT_API_ENDPOINT,
        description="Base URL of the OpenAI-compatible API (e.g., https://api.openai.com/v1)",
    )
    target_language: str = Field(
        default=DEFAULT_TARGET_LANGUAGE,
        description="Human-readable name of the language to translate into",
        min_length=1,
    )
    batch_size: Annotated[int, Field(ge=1, le=100)] = Field(
        default=10,
        description="Number of strings sent in one batch request",
    )
    batch_delay: Annotated[float, Field(ge=0)] = Field(
        default=1.0,
        description="Seconds to wait between batch requests",
    )
    item_delay: Annotated[float, Field(ge=0)] = Field(
        default=0.5,
        description="Seconds to wait between single-item retry requests",
    )
    timeout: Annotated[float, Field(gt=0, le=600)] = Field(
        default=60.0,
        description="HTTP timeout in seconds for one provider request",
    )
    temperature: Annotated[float, Field(ge=0, le=2)] = Field(
        default=0.3,
        description="Sampling temperature sent to the provider",
    )
    max_tokens: Annotated[int, Field(ge=1)] = Field(
        default=2000,
        description="Maximum tokens the provider may return per request",
    )

    @field_validator("api_endpoint")
    @classmethod
    def validate_api_endpoint(cls, v: str) -> str:
        """Validate and normalize the API endpoint."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("API endpoint must start with http:// or https://")
        return v.rstrip("/")


class ExtractionConfig(BaseModel):
    """Source scanning and translatability filter configuration."""

    min_length: Annotated[int, Field(ge=1)] = Field(
        default=2,
        description="Minimum trimmed length of a translatable string",
    )
    max_length: Annotated[int, Field(ge=1)] = Field(
        default=500,
        description="Maximum trimmed length of a translatable string",
    )
    excluded_dirs: list[str] = Field(
        default_factory=lambda: [
            "node_modules",
            ".git",
            "dist",
            "build",
            ".nuxt",
            ".next",
            ".output",
            "coverage",
            "__pycache__",
        ],
        description="Directory names never descended into",
    )
    excluded_files: list[str] = Field(
        default_factory=lambda: [
            "nuxt.config.ts",
            "nuxt.config.js",
            "vite.config.ts",
            "vite.config.js",
            "webpack.config.js",
            "webpack.config.ts",
            "rollup.config.js",
            "rollup.config.ts",
            "tailwind.config.js",
            "tailwind.config.ts",
            "tsconfig.json",
            "package.json",
            "eslint.config.js",
            "eslint.config.ts",
        ],
        description="Configuration file names (case-insensitive) that are skipped",
    )
    component_extensions: list[str] = Field(
        default_factory=lambda: [".vue"],
        description="Extensions of single-file components with template and script zones",
    )
    script_extensions: list[str] = Field(
        default_factory=lambda: [".js", ".ts", ".jsx", ".tsx"],
        description="Extensions of plain script modules",
    )


class ReplacementConfig(BaseModel):
    """Write-back configuration."""

    backup_suffix: str = Field(
        default="-backup",
        description="Suffix appended to the source directory name for the backup copy",
        min_length=1,
    )
    backup_excluded_dirs: list[str] = Field(
        default_factory=lambda: ["node_modules", ".git", "dist", "build"],
        description="Directory names left out of the backup copy",
    )
    file_extensions: list[str] = Field(
        default_factory=lambda: [".vue", ".js", ".ts", ".jsx", ".tsx"],
        description="Extensions of files the mapping is applied to",
    )


class PathsConfig(BaseModel):
    """Locations of the JSON artifacts exchanged between stages."""

    work_dir: Path = Field(
        default=Path("."),
        description="Directory holding all stage artifacts",
    )
    extracted_file: str = Field(default="extracted-text.json")
    cache_file: str = Field(default="translation-cache.json")
    translations_file: str = Field(default="translations.json")
    mapping_file: str = Field(default="translation-mapping.json")
    report_file: str = Field(default="replacement-report.json")
    summary_file: str = Field(default="replacement-summary.md")

    @property
    def extracted_path(self) -> Path:
        return self.work_dir / self.extracted_file

    @property
    def cache_path(self) -> Path:
        return self.work_dir / self.cache_file

    @property
    def translations_path(self) -> Path:
        return self.work_dir / self.translations_file

    @property
    def mapping_path(self) -> Path:
        return self.work_dir / self.mapping_file

    @property
    def report_path(self) -> Path:
        return self.work_dir / self.report_file

    @property
    def summary_path(self) -> Path:
        return self.work_dir / self.summary_file


class LocalizerConfig(BaseModel):
    """
    Configuration model for the localization pipeline.

    Every section has defaults, so an empty YAML file (or none at all) plus
    the provider environment variables is a complete configuration.
    """

    translation: TranslationConfig = Field(default_factory=TranslationConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    replacement: ReplacementConfig = Field(default_factory=ReplacementConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)

    model_config: ClassVar[ConfigDict] = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        extra="forbid",
    )
