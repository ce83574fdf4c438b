"""Markdown rendering of a replacement run."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .replacer import ReplacementSummary


def _parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def format_duration(start_time: str, end_time: str) -> str:
    """Whole seconds between two ISO timestamps, e.g. ``"3s"``."""
    try:
        elapsed = _parse_timestamp(end_time) - _parse_timestamp(start_time)
    except ValueError:
        return "unknown"
    return f"{round(elapsed.total_seconds())}s"


def render_summary(summary: ReplacementSummary) -> str:
    """
    Render ``replacement-summary.md``.

    The document lists the run statistics, every changed file with its
    per-key occurrence counts, the backup location and the commands to
    restore the original tree.
    """
    try:
        started = _parse_timestamp(summary.start_time).strftime("%Y-%m-%d %H:%M:%S UTC")
    except ValueError:
        started = summary.start_time

    lines: list[str] = [
        "# Text Replacement Summary",
        "",
        f"**Date:** {started}",
        f"**Duration:** {format_duration(summary.start_time, summary.end_time)}",
        f"**Source Directory:** {summary.source_dir}",
    ]
    if summary.dry_run:
        lines.append("**Mode:** dry run (no files were modified)")

    lines.extend(
        [
            "",
            "## Statistics",
            "",
            f"- **Files Processed:** {summary.files_processed}",
            f"- **Files Changed:** {summary.files_changed}",
            f"- **Total Replacements:** {summary.total_replacements}",
            f"- **Translation Mappings:** {summary.mappings_loaded}",
        ]
    )
    if summary.invalid_mappings:
        lines.append(f"- **Invalid Mappings Ignored:** {summary.invalid_mappings}")
    if summary.files_failed:
        lines.append(f"- **Files Skipped (errors):** {summary.files_failed}")
    lines.append("")

    if summary.file_changes:
        lines.extend(["## Changed Files", ""])
        for file_change in summary.file_changes:
            lines.extend(
                [
                    f"### {file_change.file}",
                    "",
                    f"**Replacements:** {file_change.replacements}",
                    "",
                    "**Changes:**",
                ]
            )
            for change in file_change.changes:
                lines.append(
                    f"- `{change['original']}` → `{change['translated']}` "
                    + f"({change['occurrences']} occurrences)"
                )
            lines.append("")
    else:
        lines.extend(["No files were changed.", ""])

    lines.extend(
        [
            "## Backup",
            "",
            f"A backup of the original files was created at: `{summary.backup_dir}`",
            "",
            "## Restore Instructions",
            "",
            "To restore the original files if needed:",
            "```bash",
            f'rm -rf "{summary.source_dir}"',
            f'mv "{summary.backup_dir}" "{summary.source_dir}"',
            "```",
            "",
        ]
    )
    return "\n".join(lines)
