"""Tests for the source tree extractor."""

# pyright: reportAny=false
import json
from pathlib import Path
from unittest.mock import patch

import pytest

from uilocalizer.config.schema import ExtractionConfig
from uilocalizer.extraction.extractor import TextExtractor, extract_texts, sort_key
from uilocalizer.utils.exceptions import DirectoryNotFoundError

EXPECTED_TEXTS = [
    "Hello World",
    "Save changes",
    "Search products",
    "Something went wrong",
    "Welcome back",
    "Your profile was updated",
]


class TestTextExtractor:
    """Test cases for TextExtractor."""

    def test_extract_source_tree(self, source_tree: Path) -> None:
        extractor = TextExtractor(source_tree)

        texts = extractor.extract()

        assert [entry.text for entry in texts] == EXPECTED_TEXTS
        assert extractor.files_processed == 3
        assert extractor.files_failed == 0

    def test_contexts(self, source_tree: Path) -> None:
        texts = {entry.text: entry for entry in TextExtractor(source_tree).extract()}

        assert texts["Hello World"].context == "template-text"
        assert texts["Search products"].context == "attribute-placeholder"
        assert texts["Welcome back"].context == "template-expression"
        assert texts["Your profile was updated"].context == "script-string"
        assert texts["Something went wrong"].context == "script-regex"

    def test_duplicates_merge_files(self, source_tree: Path) -> None:
        texts = {entry.text: entry for entry in TextExtractor(source_tree).extract()}

        assert texts["Hello World"].files == ["App.vue", "components/Greeting.vue"]

    def test_exclusions(self, source_tree: Path) -> None:
        extractor = TextExtractor(source_tree)
        files = [path.relative_to(source_tree).as_posix() for path in extractor.iter_source_files()]

        assert files == ["App.vue", "components/Greeting.vue", "utils/messages.ts"]

    def test_identifiers_are_not_extracted(self, tmp_path: Path) -> None:
        """'Hello World' is kept while 'onClick' is dropped."""
        _ = (tmp_path / "labels.js").write_text(
            "export const labels = ['Hello World', 'onClick']\n", encoding="utf-8"
        )

        texts = TextExtractor(tmp_path).extract()

        assert [entry.text for entry in texts] == ["Hello World"]

    def test_custom_extensions(self, source_tree: Path) -> None:
        config = ExtractionConfig(script_extensions=[".js"])

        files = TextExtractor(source_tree, config).iter_source_files()

        assert all(path.suffix == ".vue" for path in files)

    def test_unreadable_file_is_skipped(self, source_tree: Path) -> None:
        _ = (source_tree / "broken.js").write_bytes(b"\xff\xfe\x00 not utf-8")

        extractor = TextExtractor(source_tree)
        texts = extractor.extract()

        assert extractor.files_failed == 1
        assert [entry.text for entry in texts] == EXPECTED_TEXTS

    def test_harvest_error_is_contained(self, source_tree: Path) -> None:
        with patch(
            "uilocalizer.extraction.extractor.harvest_script",
            side_effect=RuntimeError("unexpected"),
        ):
            extractor = TextExtractor(source_tree)
            texts = extractor.extract()

        # Every scanned file has a script zone, so every file fails as a whole
        assert extractor.files_failed == 3
        assert texts == []

    def test_deeply_nested_script_keeps_file(self, tmp_path: Path) -> None:
        """A script too deep for recursion still yields the whole component."""
        terms = " + ".join(["'x'"] * 3000)
        _ = (tmp_path / "Big.vue").write_text(
            "<template>\n  <h1>Hello World</h1>\n</template>\n\n"
            + f"<script>\nconst saved = 'Profile saved'\nconst blob = {terms}\n</script>\n",
            encoding="utf-8",
        )

        extractor = TextExtractor(tmp_path)
        texts = extractor.extract()

        assert extractor.files_failed == 0
        assert [entry.text for entry in texts] == ["Hello World", "Profile saved"]

    def test_missing_source_directory(self, tmp_path: Path) -> None:
        with pytest.raises(DirectoryNotFoundError):
            _ = TextExtractor(tmp_path / "missing").extract()


class TestExtractionArtifact:
    """Test cases for extracted-text.json."""

    def test_write_artifact(self, source_tree: Path, work_dir: Path) -> None:
        output_path = work_dir / "extracted-text.json"

        _ = extract_texts(source_tree, output_path)

        data = json.loads(output_path.read_text(encoding="utf-8"))
        assert data["metadata"]["sourceDir"] == str(source_tree)
        assert data["metadata"]["filesProcessed"] == 3
        assert data["metadata"]["textsFound"] == len(EXPECTED_TEXTS)
        assert data["metadata"]["extractedAt"].endswith("Z")
        assert [item["text"] for item in data["texts"]] == EXPECTED_TEXTS
        assert set(data["texts"][0]) == {"text", "context", "files"}

    def test_repeated_extraction_is_identical(self, source_tree: Path, work_dir: Path) -> None:
        first_path = work_dir / "first.json"
        second_path = work_dir / "second.json"

        _ = extract_texts(source_tree, first_path)
        _ = extract_texts(source_tree, second_path)

        first = json.loads(first_path.read_text(encoding="utf-8"))
        second = json.loads(second_path.read_text(encoding="utf-8"))
        assert json.dumps(first["texts"], ensure_ascii=False) == json.dumps(
            second["texts"], ensure_ascii=False
        )
        assert first["metadata"]["textsFound"] == second["metadata"]["textsFound"]

    def test_empty_tree(self, tmp_path: Path, work_dir: Path) -> None:
        source_dir = tmp_path / "empty"
        source_dir.mkdir()
        output_path = work_dir / "extracted-text.json"

        texts = extract_texts(source_dir, output_path)

        assert texts == []
        data = json.loads(output_path.read_text(encoding="utf-8"))
        assert data["texts"] == []
        assert data["metadata"]["filesProcessed"] == 0


class TestSortKey:
    """Test cases for the locale-aware ordering."""

    def test_case_and_accent_insensitive(self) -> None:
        words = ["zebra crossing", "Éclair recipe", "apple pie", "Banana split"]

        assert sorted(words, key=sort_key) == [
            "apple pie",
            "Banana split",
            "Éclair recipe",
            "zebra crossing",
        ]

    def test_total_order(self) -> None:
        assert sorted(["save", "Save"], key=sort_key) == ["Save", "save"]
