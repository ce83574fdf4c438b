"""
Source tree scanning for translatable UI strings.

This module walks a front-end source directory, harvests candidate strings
from component templates and script code, filters them for translatability
and writes the deduplicated, sorted result to ``extracted-text.json``.

Usage Examples:
    Extract strings from a source tree:
        >>> from uilocalizer.extraction.extractor import TextExtractor
        >>> extractor = TextExtractor(Path("apps/frontend"))
        >>> texts = extractor.extract()
        >>> extractor.write(Path("extracted-text.json"))
"""

from __future__ import annotations

import logging
import os
import unicodedata
from dataclasses import dataclass, field
from pathlib import Path
from typing import TypedDict

from ..config.schema import ExtractionConfig
from ..utils.artifacts import utc_timestamp, write_json
from ..utils.exceptions import DirectoryNotFoundError
from .filters import TranslatabilityFilter
from .script import harvest_script
from .sfc import split_component
from .template import harvest_template

logger = logging.getLogger(__name__)

JSX_EXTENSIONS = frozenset({".jsx", ".tsx"})


class ExtractionMetadata(TypedDict):
    """Metadata block of ``extracted-text.json``."""

    sourceDir: str
    extractedAt: str
    filesProcessed: int
    textsFound: int


@dataclass
class ExtractedString:
    """A deduplicated candidate string and where it was found."""

    text: str
    context: str
    files: list[str] = field(default_factory=list)

    def add_file(self, file: str) -> None:
        """Record another file containing this text, keeping first-seen order."""
        if file not in self.files:
            self.files.append(file)

    def to_dict(self) -> dict[str, object]:
        return {"text": self.text, "context": self.context, "files": list(self.files)}


def sort_key(text: str) -> tuple[str, str]:
    """
    Locale-aware ordering key: case- and accent-insensitive first, exact text second.

    The second element makes the order total, so repeated runs are identical.
    """
    decomposed = unicodedata.normalize("NFKD", text.casefold())
    folded = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return folded, text


class TextExtractor:
    """Scans a source directory and collects translatable strings."""

    def __init__(self, source_dir: Path, config: ExtractionConfig | None = None) -> None:
        """
        Initialize the extractor.

        Args:
            source_dir: Root of the source tree to scan
            config: Extraction settings; defaults are used when omitted
        """
        self.source_dir: Path = source_dir
        self.config: ExtractionConfig = config or ExtractionConfig()
        self.text_filter: TranslatabilityFilter = TranslatabilityFilter(
            min_length=self.config.min_length,
            max_length=self.config.max_length,
        )
        self.files_processed: int = 0
        self.files_failed: int = 0
        self._entries: dict[str, ExtractedString] = {}
        self._texts: list[ExtractedString] = []

        self._excluded_dirs: frozenset[str] = frozenset(self.config.excluded_dirs)
        self._excluded_files: frozenset[str] = frozenset(
            name.lower() for name in self.config.excluded_files
        )
        self._component_extensions: frozenset[str] = frozenset(
            ext.lower() for ext in self.config.component_extensions
        )
        self._script_extensions: frozenset[str] = frozenset(
            ext.lower() for ext in self.config.script_extensions
        )

    @property
    def texts(self) -> list[ExtractedString]:
        """Sorted result of the last extraction."""
        return self._texts

    def extract(self) -> list[ExtractedString]:
        """
        Scan the source directory and return the sorted, deduplicated strings.

        Raises:
            DirectoryNotFoundError: If the source directory does not exist
        """
        if not self.source_dir.is_dir():
            raise DirectoryNotFoundError(self.source_dir)

        logger.info(f"Starting text extraction from: {self.source_dir}")

        self.files_processed = 0
        self.files_failed = 0
        self._entries = {}

        for file_path in self.iter_source_files():
            self.process_file(file_path)

        self._texts = sorted(self._entries.values(), key=lambda entry: sort_key(entry.text))

        logger.info(
            f"Extraction complete: {self.files_processed} files processed, "
            + f"{len(self._texts)} unique texts found"
        )
        if self.files_failed:
            logger.warning(f"{self.files_failed} file(s) could not be processed")

        return self._texts

    def iter_source_files(self) -> list[Path]:
        """List candidate files in a stable order, honouring the exclusions."""
        files: list[Path] = []
        extensions = self._component_extensions | self._script_extensions

        for root, dirs, filenames in os.walk(self.source_dir):
            dirs[:] = sorted(d for d in dirs if d not in self._excluded_dirs)
            for filename in sorted(filenames):
                if filename.lower() in self._excluded_files:
                    logger.debug(f"Skipping config file: {filename}")
                    continue
                path = Path(root) / filename
                if path.suffix.lower() in extensions:
                    files.append(path)

        return files

    def process_file(self, file_path: Path) -> None:
        """
        Harvest and record candidates from one file.

        Read and parse errors are logged and only skip this file.
        """
        relative_path = file_path.relative_to(self.source_dir).as_posix()
        suffix = file_path.suffix.lower()

        try:
            content = file_path.read_text(encoding="utf-8")
            if suffix in self._component_extensions:
                candidates = self._harvest_component(content, relative_path)
            else:
                candidates = harvest_script(
                    content, jsx=suffix in JSX_EXTENSIONS, filename=relative_path
                )
        except Exception as e:
            self.files_failed += 1
            logger.warning(f"Skipping {relative_path} due to error: {e}")
            return

        self.files_processed += 1
        accepted = 0
        for text, context in candidates:
            if self.text_filter.is_translatable(text):
                self._add_text(text.strip(), relative_path, context)
                accepted += 1

        logger.debug(f"Processed {relative_path}: {accepted} translatable strings")

    def _harvest_component(self, content: str, relative_path: str) -> list[tuple[str, str]]:
        blocks = split_component(content)
        candidates: list[tuple[str, str]] = []
        if blocks.template is not None:
            candidates.extend(harvest_template(blocks.template))
        if blocks.script is not None:
            candidates.extend(harvest_script(blocks.script, filename=relative_path))
        if blocks.script_setup is not None:
            candidates.extend(harvest_script(blocks.script_setup, filename=relative_path))
        return candidates

    def _add_text(self, text: str, file: str, context: str) -> None:
        existing = self._entries.get(text)
        if existing is None:
            self._entries[text] = ExtractedString(text=text, context=context, files=[file])
        else:
            existing.add_file(file)

    def build_artifact(self) -> dict[str, object]:
        """Build the ``extracted-text.json`` document for the last extraction."""
        metadata: ExtractionMetadata = {
            "sourceDir": str(self.source_dir),
            "extractedAt": utc_timestamp(),
            "filesProcessed": self.files_processed,
            "textsFound": len(self._texts),
        }
        return {
            "metadata": metadata,
            "texts": [entry.to_dict() for entry in self._texts],
        }

    def write(self, output_path: Path) -> None:
        """Write the last extraction result as JSON."""
        write_json(output_path, self.build_artifact())
        logger.info(f"Extracted texts saved to: {output_path}")


def extract_texts(
    source_dir: Path,
    output_path: Path,
    config: ExtractionConfig | None = None,
) -> list[ExtractedString]:
    """Run a full extraction and write its artifact."""
    extractor = TextExtractor(source_dir, config)
    texts = extractor.extract()
    extractor.write(output_path)
    return texts
