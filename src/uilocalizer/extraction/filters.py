"""
Translatability filter for candidate UI strings.

A candidate is translatable when it reads like text shown to a user rather
than an identifier, path, package name, CSS token or other piece of code.
The rules are deliberately conservative: a missed string stays in English,
while a translated identifier breaks the application.

Usage Examples:
    >>> from uilocalizer.extraction.filters import TranslatabilityFilter
    >>> text_filter = TranslatabilityFilter()
    >>> text_filter.is_translatable("Hello World")
    True
    >>> text_filter.is_translatable("onClick")
    False
"""

from __future__ import annotations

import re

# Strings matching any of these are never translated
EXCLUDE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^https?://"),  # URLs
    re.compile(r"^/[/\w\-.]*$"),  # Absolute file paths
    re.compile(r"^\.[/\w\-]*$"),  # Relative paths starting with .
    re.compile(r"^@[/\w\-]*$"),  # Import paths starting with @
    re.compile(r"^[A-Z_]{2,}$"),  # Constants
    re.compile(r"^\d+(\.\d+)*$"),  # Version numbers
    re.compile(r"^[A-Za-z0-9+/=]+$"),  # Base64-like tokens
    re.compile(r"^#[0-9a-fA-F]{3,8}$"),  # Hex colors
    re.compile(r"^(rgb|rgba|hsl|hsla)\("),  # CSS colors
    re.compile(r"^\$[a-zA-Z]"),  # CSS variables
    re.compile(r"^(var|calc|url)\("),  # CSS functions
    re.compile(r"^(console\.\w+|error|warn|warning|info|debug|log|trace)$", re.IGNORECASE),
    re.compile(r"^[a-z]+:[a-z]+$"),  # Key-value pairs like "type:button"
    re.compile(r"^[A-Z][a-zA-Z]*Error$"),  # Error types
    re.compile(r"^[a-z]+-[a-z-]+$"),  # Package names
    re.compile(r"^\?[a-zA-Z]"),  # Query strings
    re.compile(r"^\w+\(\)$"),  # Function calls
    re.compile(r"^\w+\.\w+"),  # Property access
    re.compile(r"^[a-zA-Z0-9_-]+\.(vue|js|ts|jsx|tsx|css|scss|png|jpg|svg)$", re.IGNORECASE),
    re.compile(r"^\{\{.*\}\}$"),  # Template expressions
    re.compile(r"^v-[a-z]"),  # Vue directives
    re.compile(r"^[a-z][a-zA-Z]*[A-Z]"),  # camelCase identifiers
    re.compile(r"^[A-Z][a-z]*$"),  # Single PascalCase words
)

# Compared case-insensitively
TECHNICAL_TERMS: frozenset[str] = frozenset(
    term.casefold()
    for term in (
        "API", "HTTP", "HTTPS", "JSON", "XML", "HTML", "CSS", "JS", "TS",
        "Vue", "React", "Node", "npm", "yarn", "pnpm", "webpack", "vite",
        "GitHub", "Git", "OAuth", "JWT", "UUID", "URL", "URI", "SQL",
        "CORS", "REST", "GraphQL", "WebSocket", "localStorage", "sessionStorage",
        "getElementById", "querySelector", "addEventListener", "fetch", "async", "await",
        "true", "false", "null", "undefined", "NaN", "Infinity",
        "floating-vue", "vue-router", "vue-virtual-scroller", "vue-multiselect",
        "tauri", "pinia",
    )
)

# Shapes of short single tokens that are almost always identifiers
IDENTIFIER_SHAPES: tuple[re.Pattern[str], ...] = (
    re.compile(r"^[a-z]+([A-Z][a-z]*)+$"),  # camelCase
    re.compile(r"^[A-Z][a-z]*([A-Z][a-z]*)*$"),  # PascalCase
    re.compile(r"^[a-z]+[-_][a-z]+"),  # kebab-case or snake_case
)

LATIN_LETTER = re.compile(r"[a-zA-Z]")

MIN_ALPHA_RATIO = 0.3
SHORT_TOKEN_LENGTH = 15


class TranslatabilityFilter:
    """Decides whether a candidate string should be sent for translation."""

    def __init__(self, min_length: int = 2, max_length: int = 500) -> None:
        self.min_length: int = min_length
        self.max_length: int = max_length

    def is_translatable(self, text: str) -> bool:
        """
        Check whether ``text`` looks like user-facing UI text.

        Args:
            text: Raw candidate; surrounding whitespace is ignored

        Returns:
            True if every translatability rule holds
        """
        text = text.strip()

        if not self.min_length <= len(text) <= self.max_length:
            return False

        if not LATIN_LETTER.search(text):
            return False

        if any(pattern.search(text) for pattern in EXCLUDE_PATTERNS):
            return False

        if text.casefold() in TECHNICAL_TERMS:
            return False

        alpha_count = len(LATIN_LETTER.findall(text))
        if alpha_count / len(text) < MIN_ALPHA_RATIO:
            return False

        if " " not in text and len(text) < SHORT_TOKEN_LENGTH:
            if any(shape.search(text) for shape in IDENTIFIER_SHAPES):
                return False

        return True
