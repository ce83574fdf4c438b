"""Tests for the translatability filter."""

import pytest

from uilocalizer.extraction.filters import TranslatabilityFilter


class TestTranslatabilityFilter:
    """Test cases for TranslatabilityFilter.is_translatable."""

    @pytest.fixture
    def text_filter(self) -> TranslatabilityFilter:
        return TranslatabilityFilter()

    @pytest.mark.parametrize(
        "text",
        [
            "Hello World",
            "Save changes",
            "Loading...",
            "Are you sure you want to delete this item?",
            "Error loading data",
            "  Padded sentence  ",
        ],
    )
    def test_ui_text_is_kept(self, text_filter: TranslatabilityFilter, text: str) -> None:
        """Sentences and phrases shown to users pass the filter."""
        assert text_filter.is_translatable(text)

    @pytest.mark.parametrize(
        "text",
        [
            "onClick",  # camelCase identifier
            "Button",  # single PascalCase word
            "API_KEY",  # constant
            "https://example.com/docs",
            "/usr/local/bin",
            "./components/Header",
            "@/stores/user",
            "1.2.3",
            "#ff00aa",
            "rgba(0, 0, 0, 0.5)",
            "var(--primary)",
            "console.log",
            "warning",
            "type:button",
            "ValidationError",
            "floating-vue",
            "?page=2",
            "refresh()",
            "user.name",
            "logo.svg",
            "{{ message }}",
            "v-model",
            "user_name",
            "JSON",
            "GraphQL",
        ],
    )
    def test_code_like_text_is_dropped(self, text_filter: TranslatabilityFilter, text: str) -> None:
        """Identifiers, paths, packages and other code never pass."""
        assert not text_filter.is_translatable(text)

    def test_length_bounds(self) -> None:
        """Trimmed text must fall within the configured length range."""
        text_filter = TranslatabilityFilter(min_length=2, max_length=20)

        assert not text_filter.is_translatable("a")
        assert not text_filter.is_translatable("   ")
        assert text_filter.is_translatable("Go on")
        assert not text_filter.is_translatable("This sentence is far too long")

    def test_requires_latin_letter(self, text_filter: TranslatabilityFilter) -> None:
        """Strings without a Latin letter are not English UI text."""
        assert not text_filter.is_translatable("12 345")
        assert not text_filter.is_translatable("你好 世界")

    def test_alpha_ratio(self, text_filter: TranslatabilityFilter) -> None:
        """Mostly non-alphabetic strings are dropped."""
        assert not text_filter.is_translatable("1 2 3 4 5 a")

    def test_technical_terms_case_insensitive(self, text_filter: TranslatabilityFilter) -> None:
        """Denylisted terms are matched regardless of case."""
        assert not text_filter.is_translatable("Undefined")
        assert not text_filter.is_translatable("websocket")
