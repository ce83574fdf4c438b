"""Write-back of translations into the source tree."""

from .replacer import FileChange, ReplacementSummary, TextReplacer, load_mapping, replace_texts

__all__ = [
    "FileChange",
    "ReplacementSummary",
    "TextReplacer",
    "load_mapping",
    "replace_texts",
]
