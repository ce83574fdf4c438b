"""
Write-back stage of the pipeline.

Applies ``translation-mapping.json`` to the source tree by literal substring
replacement, after taking a one-time backup of the tree. The stage always
finishes with ``replacement-report.json`` and ``replacement-summary.md``,
even when nothing changed.
"""

from __future__ import annotations

import json
import logging
import os
import re
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import TypedDict, cast

from ..config.schema import LocalizerConfig
from ..utils.artifacts import read_json, utc_timestamp, write_json, write_text
from ..utils.exceptions import ArtifactError, ArtifactNotFoundError, DirectoryNotFoundError
from .report import render_summary

logger = logging.getLogger(__name__)


class ChangeRecord(TypedDict):
    """One mapping key applied to one file."""

    original: str
    translated: str
    occurrences: int


@dataclass
class FileChange:
    """All replacements made in one file."""

    file: str
    replacements: int = 0
    changes: list[ChangeRecord] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "file": self.file,
            "replacements": self.replacements,
            "changes": [dict(change) for change in self.changes],
        }


@dataclass
class ReplacementSummary:
    """Result of one replacement run; serialised as ``replacement-report.json``."""

    source_dir: Path
    backup_dir: Path
    start_time: str
    end_time: str = ""
    files_processed: int = 0
    files_failed: int = 0
    mappings_loaded: int = 0
    invalid_mappings: int = 0
    backup_created: bool = False
    dry_run: bool = False
    file_changes: list[FileChange] = field(default_factory=list)

    @property
    def total_replacements(self) -> int:
        return sum(change.replacements for change in self.file_changes)

    @property
    def files_changed(self) -> int:
        return len(self.file_changes)

    def to_dict(self) -> dict[str, object]:
        return {
            "startTime": self.start_time,
            "endTime": self.end_time,
            "sourceDir": str(self.source_dir),
            "backupDir": str(self.backup_dir),
            "dryRun": self.dry_run,
            "filesProcessed": self.files_processed,
            "totalReplacements": self.total_replacements,
            "mappingsLoaded": self.mappings_loaded,
            "invalidMappings": self.invalid_mappings,
            "fileChanges": [change.to_dict() for change in self.file_changes],
        }


def load_mapping(mapping_path: Path) -> tuple[dict[str, str], int]:
    """
    Load and validate ``translation-mapping.json``.

    Entries whose sides are not strings, are blank after trimming, or are
    identical are dropped. Valid entries are trimmed.

    Returns:
        Tuple of (mapping, number of invalid entries)

    Raises:
        ArtifactNotFoundError: If the mapping file does not exist
        ArtifactError: If the file is not a JSON object
    """
    if not mapping_path.exists():
        raise ArtifactNotFoundError(mapping_path, "Run the translate stage first.")

    try:
        data = read_json(mapping_path)
    except json.JSONDecodeError as e:
        raise ArtifactError(f"Invalid JSON in {mapping_path}: {e}", mapping_path) from e

    if not isinstance(data, dict):
        raise ArtifactError("Invalid translation mapping data", mapping_path)

    mapping: dict[str, str] = {}
    invalid = 0
    for original, translated in cast(dict[object, object], data).items():
        if not isinstance(original, str) or not isinstance(translated, str):
            invalid += 1
            continue
        original = original.strip()
        translated = translated.strip()
        if not original or not translated or original == translated:
            invalid += 1
            continue
        mapping[original] = translated

    return mapping, invalid


def ordered_keys(mapping: dict[str, str]) -> list[str]:
    """Keys longest first, ties broken lexicographically."""
    return sorted(mapping, key=lambda key: (-len(key), key))


class TextReplacer:
    """Applies a translation mapping to a source tree in place."""

    def __init__(self, source_dir: Path, config: LocalizerConfig | None = None) -> None:
        # Absolute, so "." still has a name to derive the backup from
        source_dir = source_dir.resolve()
        self.source_dir: Path = source_dir
        self.config: LocalizerConfig = config or LocalizerConfig()
        replacement = self.config.replacement
        self.backup_dir: Path = source_dir.with_name(source_dir.name + replacement.backup_suffix)
        self._extensions: frozenset[str] = frozenset(
            ext.lower() for ext in replacement.file_extensions
        )
        self._walk_excluded: frozenset[str] = frozenset(self.config.extraction.excluded_dirs)
        self._backup_excluded: frozenset[str] = frozenset(replacement.backup_excluded_dirs)

    def create_backup(self) -> bool:
        """
        Copy the source tree to the backup directory unless it already exists.

        Returns:
            True if a new backup was created
        """
        if self.backup_dir.exists():
            logger.info(f"Backup already exists at: {self.backup_dir}")
            return False

        logger.info(f"Creating backup at: {self.backup_dir}")
        excluded = self._backup_excluded

        def ignore(directory: str, names: list[str]) -> set[str]:
            return {
                name
                for name in names
                if name in excluded and os.path.isdir(os.path.join(directory, name))
            }

        _ = shutil.copytree(self.source_dir, self.backup_dir, ignore=ignore)
        logger.info("Backup created successfully")
        return True

    def iter_target_files(self) -> list[Path]:
        """Files the mapping is applied to, in a stable order."""
        files: list[Path] = []
        for root, dirs, filenames in os.walk(self.source_dir):
            dirs[:] = sorted(d for d in dirs if d not in self._walk_excluded)
            for filename in sorted(filenames):
                path = Path(root) / filename
                if path.suffix.lower() in self._extensions:
                    files.append(path)
        return files

    def replace_in_content(
        self, content: str, mapping: dict[str, str], keys: list[str]
    ) -> tuple[str, list[ChangeRecord]]:
        """
        Apply ``mapping`` to ``content`` in ``keys`` order.

        Returns:
            Tuple of (new content, one record per key that matched)
        """
        changes: list[ChangeRecord] = []
        for original in keys:
            translated = mapping[original]
            try:
                pattern = re.compile(re.escape(original))
                content, occurrences = pattern.subn(lambda _match: translated, content)
            except re.error as e:
                logger.warning(f'Error replacing "{original}": {e}')
                continue
            if occurrences:
                changes.append(
                    {"original": original, "translated": translated, "occurrences": occurrences}
                )
        return content, changes

    def process_file(
        self,
        file_path: Path,
        mapping: dict[str, str],
        keys: list[str],
        summary: ReplacementSummary,
        dry_run: bool = False,
    ) -> None:
        relative_path = file_path.relative_to(self.source_dir).as_posix()
        try:
            content = file_path.read_text(encoding="utf-8")
            summary.files_processed += 1
            modified, changes = self.replace_in_content(content, mapping, keys)
            if not changes:
                return
            if not dry_run:
                _ = file_path.write_text(modified, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            summary.files_failed += 1
            logger.warning(f"Error processing {relative_path}: {e}")
            return

        file_change = FileChange(
            file=relative_path,
            replacements=sum(change["occurrences"] for change in changes),
            changes=changes,
        )
        summary.file_changes.append(file_change)
        logger.info(f"{relative_path}: {file_change.replacements} replacements made")

    def run(self, dry_run: bool = False) -> ReplacementSummary:
        """
        Replace texts in the source tree and write both reports.

        Args:
            dry_run: Count replacements without touching files or making a backup

        Raises:
            DirectoryNotFoundError: If the source directory does not exist
            ArtifactNotFoundError: If the mapping file is missing
            ArtifactError: If the mapping file is not a JSON object
        """
        if not self.source_dir.is_dir():
            raise DirectoryNotFoundError(self.source_dir)

        paths = self.config.paths
        summary = ReplacementSummary(
            source_dir=self.source_dir,
            backup_dir=self.backup_dir,
            start_time=utc_timestamp(),
            dry_run=dry_run,
        )

        logger.info(f"Starting text replacement in: {self.source_dir}")
        mapping, invalid = load_mapping(paths.mapping_path)
        summary.mappings_loaded = len(mapping)
        summary.invalid_mappings = invalid
        logger.info(f"Loaded {len(mapping)} valid translation mappings")
        if invalid:
            logger.warning(f"Ignored {invalid} invalid mapping entries")

        if mapping:
            if dry_run:
                logger.info("Dry run: no backup is created and no files are written")
            else:
                summary.backup_created = self.create_backup()

            keys = ordered_keys(mapping)
            for file_path in self.iter_target_files():
                self.process_file(file_path, mapping, keys, summary, dry_run=dry_run)
        else:
            logger.info("No translations to replace")

        summary.end_time = utc_timestamp()
        write_json(paths.report_path, summary.to_dict())
        logger.info(f"Replacement report saved to: {paths.report_path}")
        write_text(paths.summary_path, render_summary(summary))
        logger.info(f"Summary report saved to: {paths.summary_path}")

        logger.info(
            f"Text replacement completed: {summary.files_processed} files processed, "
            + f"{summary.total_replacements} replacements in {summary.files_changed} files"
        )
        return summary


def replace_texts(
    source_dir: Path, config: LocalizerConfig | None = None, dry_run: bool = False
) -> ReplacementSummary:
    """Run the replacement stage for ``source_dir``."""
    return TextReplacer(source_dir, config).run(dry_run=dry_run)
