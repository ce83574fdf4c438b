"""Tests for configuration schema and manager functionality."""

# pyright: reportAny=false
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from uilocalizer.config.manager import ConfigManager
from uilocalizer.config.schema import (
    DEFAULT_API_ENDPOINT,
    DEFAULT_MODEL,
    DEFAULT_TARGET_LANGUAGE,
    LocalizerConfig,
    PathsConfig,
    TranslationConfig,
)
from uilocalizer.utils.exceptions import ConfigurationError


class TestConfigSchema:
    """Test cases for the Pydantic configuration models."""

    def test_defaults(self) -> None:
        config = LocalizerConfig()

        assert config.translation.api_key == ""
        assert config.translation.model == DEFAULT_MODEL
        assert config.translation.api_endpoint == DEFAULT_API_ENDPOINT
        assert config.translation.target_language == DEFAULT_TARGET_LANGUAGE
        assert config.translation.batch_size == 10
        assert config.extraction.min_length == 2
        assert "node_modules" in config.extraction.excluded_dirs
        assert config.replacement.backup_suffix == "-backup"

    def test_api_endpoint_normalized(self) -> None:
        config = TranslationConfig(api_endpoint="https://llm.example.com/v1/")

        assert config.api_endpoint == "https://llm.example.com/v1"

    def test_api_endpoint_requires_scheme(self) -> None:
        with pytest.raises(ValidationError):
            _ = TranslationConfig(api_endpoint="llm.example.com/v1")

    @pytest.mark.parametrize("batch_size", [0, 101])
    def test_batch_size_bounds(self, batch_size: int) -> None:
        with pytest.raises(ValidationError):
            _ = TranslationConfig(batch_size=batch_size)

    def test_artifact_paths(self, tmp_path: Path) -> None:
        paths = PathsConfig(work_dir=tmp_path)

        assert paths.extracted_path == tmp_path / "extracted-text.json"
        assert paths.cache_path == tmp_path / "translation-cache.json"
        assert paths.translations_path == tmp_path / "translations.json"
        assert paths.mapping_path == tmp_path / "translation-mapping.json"
        assert paths.report_path == tmp_path / "replacement-report.json"
        assert paths.summary_path == tmp_path / "replacement-summary.md"

    def test_unknown_section_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _ = LocalizerConfig.model_validate({"unknown": {}})


class TestConfigManager:
    """Test cases for ConfigManager functionality."""

    @pytest.fixture
    def config_file(self, tmp_path: Path) -> Path:
        path = tmp_path / "localizer.yml"
        config_data = {
            "translation": {"model": "gpt-4", "batch_size": 5},
            "extraction": {"min_length": 3},
        }
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(config_data, f, default_flow_style=False)
        return path

    def test_load_config_success(self, config_file: Path) -> None:
        config = ConfigManager.load_config(config_file)

        assert config.translation.model == "gpt-4"
        assert config.translation.batch_size == 5
        assert config.extraction.min_length == 3
        assert config.translation.target_language == DEFAULT_TARGET_LANGUAGE

    def test_load_config_none_gives_defaults(self) -> None:
        assert ConfigManager.load_config(None) == LocalizerConfig()

    def test_load_config_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yml"
        _ = path.write_text("", encoding="utf-8")

        assert ConfigManager.load_config(path) == LocalizerConfig()

    def test_load_config_file_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="not found"):
            _ = ConfigManager.load_config(tmp_path / "missing.yml")

    def test_load_config_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.yml"
        _ = path.write_text("invalid: yaml: content: [", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            _ = ConfigManager.load_config(path)

    def test_load_config_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yml"
        _ = path.write_text("- one\n- two\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="dictionary"):
            _ = ConfigManager.load_config(path)

    def test_load_config_invalid_values(self, tmp_path: Path) -> None:
        path = tmp_path / "invalid.yml"
        _ = path.write_text("translation:\n  batch_size: 0\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            _ = ConfigManager.load_config(path)

    def test_apply_environment(self) -> None:
        environ = {
            "OPENAI_API_KEY": "sk-test",
            "OPENAI_MODEL": "gpt-4",
            "API_ENDPOINT": "https://llm.example.com/v1/",
            "TARGET_LANGUAGE": "日本語",
        }

        config = ConfigManager.apply_environment(LocalizerConfig(), environ)

        assert config.translation.api_key == "sk-test"
        assert config.translation.model == "gpt-4"
        assert config.translation.api_endpoint == "https://llm.example.com/v1"
        assert config.translation.target_language == "日本語"

    def test_apply_environment_ignores_empty_values(self, config_file: Path) -> None:
        base = ConfigManager.load_config(config_file)

        config = ConfigManager.apply_environment(base, {"OPENAI_MODEL": "", "TARGET_LANGUAGE": "  "})

        assert config.translation.model == "gpt-4"
        assert config.translation.target_language == DEFAULT_TARGET_LANGUAGE

    def test_apply_environment_invalid_endpoint(self) -> None:
        with pytest.raises(ConfigurationError):
            _ = ConfigManager.apply_environment(LocalizerConfig(), {"API_ENDPOINT": "not-a-url"})

    def test_load_with_work_dir(self, config_file: Path, tmp_path: Path) -> None:
        config = ConfigManager.load(config_file, environ={}, work_dir=tmp_path / "artifacts")

        assert config.paths.extracted_path == tmp_path / "artifacts" / "extracted-text.json"
        assert config.translation.model == "gpt-4"
