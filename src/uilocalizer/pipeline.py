"""
Sequential execution of the three stages.

Extraction, translation and replacement communicate only through the JSON
artifacts in ``config.paths.work_dir``; this module just runs them in order,
the same way the CI job invokes them one after another.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from .config.schema import LocalizerConfig
from .extraction.extractor import ExtractedString, extract_texts
from .replacement.replacer import ReplacementSummary, replace_texts
from .translation.translator import TranslationSummary, translate_texts

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Outcome of a full pipeline run."""

    extracted: list[ExtractedString]
    translation: TranslationSummary
    replacement: ReplacementSummary
    backup_removed: bool = False


def run_pipeline(
    source_dir: Path,
    config: LocalizerConfig,
    clean_backup: bool = False,
    dry_run: bool = False,
) -> PipelineResult:
    """
    Run extract, translate and replace against ``source_dir``.

    Args:
        source_dir: Front-end source tree to localize
        config: Pipeline configuration (artifacts go to ``config.paths.work_dir``)
        clean_backup: Remove the backup directory after a successful replace
        dry_run: Run the replace stage without writing files

    Raises:
        LocalizerError: If any stage hits a fatal precondition
    """
    logger.info("Step 1/3: extracting texts")
    extracted = extract_texts(source_dir, config.paths.extracted_path, config.extraction)

    logger.info("Step 2/3: translating texts")
    translation = translate_texts(config)

    logger.info("Step 3/3: replacing texts")
    replacement = replace_texts(source_dir, config, dry_run=dry_run)

    backup_removed = False
    if clean_backup and not dry_run and replacement.backup_dir.exists():
        shutil.rmtree(replacement.backup_dir)
        backup_removed = True
        logger.info(f"Removed backup directory: {replacement.backup_dir}")

    return PipelineResult(
        extracted=extracted,
        translation=translation,
        replacement=replacement,
        backup_removed=backup_removed,
    )
