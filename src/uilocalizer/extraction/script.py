"""
Harvesting of candidate strings from JavaScript/TypeScript code.

Two strategies share one interface. The structural strategy parses the code
into a syntax tree and knows which string literals are code (import sources,
object keys, callees, directives) rather than text. The regex strategy scans
quoted substrings and is used only when structural parsing fails, for example
on TypeScript-only syntax the parser does not understand.
"""

from __future__ import annotations

import logging
import re
import sys
from abc import ABC, abstractmethod
from collections.abc import Iterator
if sys.version_info >= (3, 12):
    from typing import override
else:
    from typing_extensions import override

import esprima  # pyright: ignore[reportMissingTypeStubs]
from esprima.error_handler import Error as EsprimaError  # pyright: ignore[reportMissingTypeStubs]

from ..utils.exceptions import ScriptParseError

logger = logging.getLogger(__name__)

# Parent node types whose `source` literal is a module path
MODULE_SOURCE_PARENTS = frozenset(
    {"ImportDeclaration", "ExportNamedDeclaration", "ExportAllDeclaration"}
)

QUOTED_STRING = re.compile(r"""['"`]([^'"`\n\r]{4,}?)['"`]""")
JSX_TEXT = re.compile(r">([^<>{}\n\r]{3,})<")


def _field(obj: object, name: str) -> object:
    """Read a field from a parser node or a plain dict value."""
    if isinstance(obj, dict):
        return obj.get(name)  # pyright: ignore[reportUnknownMemberType,reportUnknownVariableType]
    return getattr(obj, name, None)


def _children(node: object) -> Iterator[tuple[str, object]]:
    """Yield (field name, child node) pairs of a parser node."""
    for name, value in vars(node).items():  # pyright: ignore[reportAny]
        if name in ("range", "loc"):
            continue
        if isinstance(value, list):
            for item in value:  # pyright: ignore[reportUnknownVariableType]
                if _field(item, "type") is not None:
                    yield name, item  # pyright: ignore[reportUnknownArgumentType]
        elif value is not None and _field(value, "type") is not None:
            yield name, value


class ScriptStrategy(ABC):
    """Common interface of the script harvesting strategies."""

    @abstractmethod
    def harvest(self, content: str, jsx: bool = False) -> list[tuple[str, str]]:
        """Return (text, context) candidates found in ``content``."""


class StructuralStrategy(ScriptStrategy):
    """Harvest string literals by walking an ES module syntax tree."""

    @override
    def harvest(self, content: str, jsx: bool = False) -> list[tuple[str, str]]:
        """
        Parse ``content`` and collect literals that may be UI text.

        JSX syntax is always accepted by the parser, but JSX text children
        are only collected when ``jsx`` is set.

        Raises:
            ScriptParseError: If the code cannot be parsed
        """
        try:
            tree = esprima.parseModule(content, {"jsx": True})  # pyright: ignore[reportUnknownMemberType]
        except EsprimaError as e:
            raise ScriptParseError(f"Failed to parse script: {e}") from e
        except RecursionError as e:
            raise ScriptParseError("Script nesting too deep to parse") from e

        return self._walk(tree, jsx)

    def _walk(self, tree: object, jsx: bool) -> list[tuple[str, str]]:
        """Visit the tree in source order with an explicit stack."""
        candidates: list[tuple[str, str]] = []
        stack: list[tuple[object, object | None, str | None]] = [(tree, None, None)]

        while stack:
            node, parent, field_name = stack.pop()
            node_type = _field(node, "type")

            if node_type == "Literal":
                value = _field(node, "value")
                if isinstance(value, str) and not self._is_code_literal(parent, field_name):
                    candidates.append((value, "script-string"))
            elif node_type == "TemplateElement":
                value = _field(node, "value")
                text = _field(value, "cooked") or _field(value, "raw")
                if isinstance(text, str) and text.strip():
                    candidates.append((text.strip(), "script-template"))
            elif node_type == "JSXText" and jsx:
                value = _field(node, "value")
                if isinstance(value, str) and value.strip():
                    candidates.append((value.strip(), "jsx-text"))

            children = [(child, node, child_field) for child_field, child in _children(node)]
            stack.extend(reversed(children))

        return candidates

    @staticmethod
    def _is_code_literal(parent: object | None, field_name: str | None) -> bool:
        """Whether a string literal at this position is code rather than text."""
        if parent is None:
            return False

        parent_type = _field(parent, "type")
        if parent_type in MODULE_SOURCE_PARENTS and field_name == "source":
            return True
        if parent_type == "Property" and field_name == "key":
            return True
        if parent_type == "CallExpression" and field_name == "callee":
            return True
        # 'use strict' and friends
        if parent_type == "ExpressionStatement" and _field(parent, "directive"):
            return True
        return False


class RegexStrategy(ScriptStrategy):
    """Harvest quoted substrings; used when the code cannot be parsed."""

    @override
    def harvest(self, content: str, jsx: bool = False) -> list[tuple[str, str]]:
        candidates: list[tuple[str, str]] = [
            (match.group(1).strip(), "script-regex")
            for match in QUOTED_STRING.finditer(content)
        ]
        if jsx:
            candidates.extend(
                (match.group(1).strip(), "jsx-text")
                for match in JSX_TEXT.finditer(content)
            )
        return [(text, context) for text, context in candidates if text]


def harvest_script(
    content: str,
    jsx: bool = False,
    filename: str | None = None,
    primary: ScriptStrategy | None = None,
    fallback: ScriptStrategy | None = None,
) -> list[tuple[str, str]]:
    """
    Harvest candidates from script code, degrading to the regex scan on parse errors.

    Args:
        content: Script source
        jsx: Whether the code may contain JSX text children
        filename: Used for log messages only

    Returns:
        List of (text, context) pairs; texts are not yet filtered
    """
    primary = primary or StructuralStrategy()
    fallback = fallback or RegexStrategy()

    if not content.strip():
        return []

    try:
        return primary.harvest(content, jsx=jsx)
    except ScriptParseError as e:
        logger.warning(f"Falling back to pattern scan for {filename or 'script'}: {e}")
        return fallback.harvest(content, jsx=jsx)
