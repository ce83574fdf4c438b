"""
Harvesting of candidate strings from component template markup.

Three kinds of template text are collected, each under its own context tag:
literal text between tags, the values of plain text-bearing attributes, and
interpolations whose whole expression is a single string literal.
"""

from __future__ import annotations

import re

TRANSLATABLE_ATTRIBUTES: tuple[str, ...] = (
    "title",
    "placeholder",
    "alt",
    "aria-label",
    "data-tooltip",
)

TAG_TEXT = re.compile(r">([^<>{}]+)<")
# The lookbehind rejects bound (:title) and directive (v-bind:title) forms
ATTRIBUTE_VALUE = re.compile(
    r"(?<![\w:@.-])(" + "|".join(re.escape(a) for a in TRANSLATABLE_ATTRIBUTES) + r')\s*=\s*"([^"]+)"'
)
INTERPOLATION = re.compile(r"\{\{\s*([^}]+?)\s*\}\}")
STRING_LITERAL_EXPRESSION = re.compile(r"""^['"]([^'"]+)['"]$""")


def harvest_template(content: str) -> list[tuple[str, str]]:
    """
    Collect candidate strings from template markup.

    Returns:
        List of (text, context) pairs in document order per kind; texts are
        trimmed but not yet filtered for translatability
    """
    candidates: list[tuple[str, str]] = []

    for match in TAG_TEXT.finditer(content):
        text = match.group(1).strip()
        if text:
            candidates.append((text, "template-text"))

    for match in ATTRIBUTE_VALUE.finditer(content):
        text = match.group(2).strip()
        if text:
            candidates.append((text, f"attribute-{match.group(1)}"))

    for match in INTERPOLATION.finditer(content):
        literal = STRING_LITERAL_EXPRESSION.match(match.group(1).strip())
        if literal:
            candidates.append((literal.group(1).strip(), "template-expression"))

    return candidates
