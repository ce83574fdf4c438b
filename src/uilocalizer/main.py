"""
Command-line entry point for UI Localizer.

Usage:
    ui-localizer [options] <command> [command options]

Commands:
    extract     - Scan a source tree and write extracted-text.json
    translate   - Translate extracted texts and write translations.json and
                  translation-mapping.json
    replace     - Apply translation-mapping.json to a source tree
    run         - Run extract, translate and replace in sequence

Environment:
    OPENAI_API_KEY, OPENAI_MODEL, API_ENDPOINT, TARGET_LANGUAGE
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable
from pathlib import Path

from rich.console import Console
from rich.table import Table

from . import __version__
from .config.manager import ConfigManager
from .config.schema import LocalizerConfig
from .extraction.extractor import ExtractedString, extract_texts
from .pipeline import run_pipeline
from .replacement.replacer import ReplacementSummary, replace_texts
from .translation.translator import TranslationSummary, translate_texts
from .utils.exceptions import LocalizerError
from .utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)

console = Console()


def print_extraction_summary(texts: list[ExtractedString], config: LocalizerConfig) -> None:
    table = Table(title="Extraction Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Unique texts", str(len(texts)))
    table.add_row("Output", str(config.paths.extracted_path))
    console.print(table)


def print_translation_summary(summary: TranslationSummary, config: LocalizerConfig) -> None:
    table = Table(title="Translation Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Model", config.translation.model)
    table.add_row("Target language", config.translation.target_language)
    table.add_row("Texts processed", str(summary.total))
    table.add_row("Translated", str(len(summary.mapping)), style="green")
    table.add_row("Failed", str(summary.failed), style="red" if summary.failed else None)
    table.add_row("Cache hits", f"{summary.cache_hits} ({summary.cache_efficiency:.0f}%)")
    table.add_row("API calls", str(summary.api_calls))
    console.print(table)


def print_replacement_summary(summary: ReplacementSummary) -> None:
    title = "Replacement Summary (dry run)" if summary.dry_run else "Replacement Summary"
    table = Table(title=title)
    table.add_column("File", style="cyan")
    table.add_column("Replacements", justify="right", style="green")
    for file_change in summary.file_changes:
        table.add_row(file_change.file, str(file_change.replacements))
    console.print(table)
    console.print(
        f"Files processed: {summary.files_processed}, "
        + f"files changed: {summary.files_changed}, "
        + f"total replacements: {summary.total_replacements}"
    )
    if not summary.dry_run:
        console.print(f"Backup: {summary.backup_dir}")


def cmd_extract(config: LocalizerConfig, args: argparse.Namespace) -> None:
    """Scan the source tree."""
    source_dir: Path = args.source_dir
    texts = extract_texts(source_dir, config.paths.extracted_path, config.extraction)
    print_extraction_summary(texts, config)


def cmd_translate(config: LocalizerConfig, args: argparse.Namespace) -> None:
    """Translate the extracted texts."""
    summary = translate_texts(config)
    print_translation_summary(summary, config)


def cmd_replace(config: LocalizerConfig, args: argparse.Namespace) -> None:
    """Apply the translation mapping."""
    source_dir: Path = args.source_dir
    dry_run: bool = args.dry_run
    summary = replace_texts(source_dir, config, dry_run=dry_run)
    print_replacement_summary(summary)


def cmd_run(config: LocalizerConfig, args: argparse.Namespace) -> None:
    """Run every stage."""
    source_dir: Path = args.source_dir
    clean_backup: bool = args.clean_backup
    dry_run: bool = args.dry_run
    result = run_pipeline(source_dir, config, clean_backup=clean_backup, dry_run=dry_run)
    print_extraction_summary(result.extracted, config)
    print_translation_summary(result.translation, config)
    print_replacement_summary(result.replacement)
    if result.backup_removed:
        console.print("[yellow]Backup directory removed[/yellow]")


COMMANDS: dict[str, Callable[[LocalizerConfig, argparse.Namespace], None]] = {
    "extract": cmd_extract,
    "translate": cmd_translate,
    "replace": cmd_replace,
    "run": cmd_run,
}


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="ui-localizer",
        description="Extract, translate and write back UI text of Vue/JS/TS front-ends",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  ui-localizer extract apps/frontend
  ui-localizer translate
  ui-localizer replace apps/frontend --dry-run
  ui-localizer --work-dir build/i18n run apps/frontend --clean-backup
        """,
    )
    _ = parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    _ = parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML configuration file (default: built-in defaults)",
    )
    _ = parser.add_argument(
        "--work-dir",
        type=Path,
        default=None,
        help="Directory for JSON artifacts (default: current directory)",
    )
    _ = parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose output")
    _ = parser.add_argument(
        "--ci-mode", action="store_true", help="Enable CI-friendly logging format"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    extract_parser = subparsers.add_parser("extract", help="Extract translatable texts")
    _ = extract_parser.add_argument("source_dir", type=Path, help="Source directory to scan")

    _ = subparsers.add_parser("translate", help="Translate extracted texts")

    replace_parser = subparsers.add_parser("replace", help="Replace texts in the source tree")
    _ = replace_parser.add_argument("source_dir", type=Path, help="Source directory to rewrite")
    _ = replace_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report replacements without modifying files or creating a backup",
    )

    run_parser = subparsers.add_parser("run", help="Run extract, translate and replace")
    _ = run_parser.add_argument("source_dir", type=Path, help="Source directory to localize")
    _ = run_parser.add_argument(
        "--clean-backup",
        action="store_true",
        help="Remove the backup directory after a successful replace",
    )
    _ = run_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Run the replace stage without modifying files",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    verbose: bool = args.verbose
    ci_mode: bool = args.ci_mode
    setup_logging(verbose=verbose, ci_mode=ci_mode)

    try:
        config = ConfigManager.load(args.config, work_dir=args.work_dir)
        COMMANDS[args.command](config, args)
        return 0
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled by user[/yellow]")
        return 1
    except LocalizerError as e:
        logger.error(str(e))
        console.print(f"[red]Error: {e}[/red]")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
