"""Prompt construction and response parsing for translation requests."""

from __future__ import annotations

import re
from collections.abc import Sequence

NUMBERED_LINE = re.compile(r"^\s*(\d+)\.\s*(.+)$")
SURROUNDING_QUOTES = re.compile(r"""^["']|["']$""")


def build_batch_prompt(texts: Sequence[str], target_language: str) -> str:
    """Build a prompt asking for ``texts`` to be translated in a numbered list."""
    text_list = "\n".join(f'{index}. "{text}"' for index, text in enumerate(texts, start=1))

    return f"""You are a professional software localization expert. Translate the following UI text strings from English to {target_language}.

CRITICAL INSTRUCTIONS - READ CAREFULLY:
- ONLY translate genuine user interface text (buttons, messages, labels, tooltips)
- DO NOT translate if the text appears to be:
  * Package names (e.g., "floating-vue", "vue-router")
  * File paths or URLs (e.g., "./component.vue", "https://...")
  * Function names or variables (e.g., "onClick", "userData")
  * CSS classes or IDs (e.g., "btn-primary", "#app")
  * Technical identifiers or code snippets
  * Import statements or module names
  * Configuration keys or API endpoints
- Preserve placeholders, variables, and special formatting (like {{}}, [], etc.)
- Keep technical terms and proper nouns in English when appropriate
- Make translations natural and user-friendly for {target_language} speakers
- If uncertain whether text is UI-related, DO NOT translate it - return original text

WHEN IN DOUBT: If text looks technical or code-related, keep it unchanged!

Context: These strings were extracted from a front-end application. Only user-facing text should be translated.

Text strings to translate:
{text_list}

Please respond with ONLY the translated strings in the same numbered format. Use original text if unsure:
1. [translated text 1]
2. [translated text 2]
...

Do not include any explanation or additional text."""


def build_single_prompt(text: str, target_language: str) -> str:
    """Build a prompt for translating one string."""
    return f"""Translate this UI text from English to {target_language}.

CRITICAL: Only translate if this is genuine user interface text (buttons, messages, labels).
DO NOT translate if it looks like: package names, file paths, function names, CSS classes, or any technical identifiers.
Preserve placeholders and formatting tokens exactly.
WHEN IN DOUBT: Return the original text unchanged.

Text: "{text}"

Translation:"""


def strip_quotes(text: str) -> str:
    """Remove one leading and one trailing quote character."""
    return SURROUNDING_QUOTES.sub("", text.strip())


def parse_batch_response(response: str, batch_size: int) -> list[str | None]:
    """
    Parse a numbered-list response into per-item translations.

    Lines are matched by their ordinal, so a skipped line only affects its own
    position. Positions without a usable line are None; the caller falls back
    to the original text for them.

    Args:
        response: Raw provider message content
        batch_size: Number of items that were sent

    Returns:
        List of length ``batch_size``
    """
    translations: list[str | None] = [None] * batch_size

    for line in response.splitlines():
        match = NUMBERED_LINE.match(line)
        if not match:
            continue
        position = int(match.group(1)) - 1
        if not 0 <= position < batch_size or translations[position] is not None:
            continue
        text = strip_quotes(match.group(2))
        if text:
            translations[position] = text

    return translations


def clean_single_response(response: str) -> str:
    """Normalize a single-item response to the bare translated text."""
    return strip_quotes(response)
