"""
Persistent translation cache.

The on-disk file holds entries for every model and target language ever
used. A cache instance only loads the entries of its own model and language,
and saving merges into whatever is on disk so other combinations survive.

File layout::

    {
      "version": "1.0",
      "lastUpdated": "2026-01-01T00:00:00.000Z",
      "cache": {
        "<text>|<model>|<language>|<context>": {
          "original": "...", "translated": "...", "context": "...",
          "model": "...", "targetLanguage": "...", "createdAt": "..."
        }
      }
    }

Keys are pipe-joined; a ``|`` inside one of the fields could in theory make
two different tuples share a key.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol, TypedDict, TypeVar, cast

from ..utils.artifacts import read_json, utc_timestamp, write_json

logger = logging.getLogger(__name__)

CACHE_VERSION = "1.0"
KEY_SEPARATOR = "|"


class CacheEntry(TypedDict):
    """One cached translation."""

    original: str
    translated: str
    context: str
    model: str
    targetLanguage: str
    createdAt: str


class CacheCandidate(Protocol):
    """Anything with the text and context of an extracted string."""

    @property
    def text(self) -> str: ...

    @property
    def context(self) -> str: ...


T = TypeVar("T", bound=CacheCandidate)


def make_cache_key(text: str, model: str, target_language: str, context: str = "") -> str:
    """Build the composite cache key for a translation."""
    return KEY_SEPARATOR.join((text, model, target_language, context))


def _read_cache_map(cache_file: Path) -> dict[str, object] | None:
    """
    Return the ``cache`` map stored in ``cache_file``.

    Returns None when the file is missing, unreadable or has an unexpected
    shape; the caller decides how loud to be about it.
    """
    if not cache_file.exists():
        return None

    try:
        data = read_json(cache_file)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Error reading translation cache {cache_file}: {e}")
        return None

    if not isinstance(data, dict):
        return None
    data_dict = cast(dict[str, object], data)
    cache_map = data_dict.get("cache")
    if not data_dict.get("version") or not isinstance(cache_map, dict):
        return None
    return cast(dict[str, object], cache_map)


def _is_valid_entry(entry: object) -> bool:
    if not isinstance(entry, dict):
        return False
    entry_dict = cast(dict[str, object], entry)
    return all(
        isinstance(entry_dict.get(name), str)
        for name in ("original", "translated", "model", "targetLanguage")
    )


class TranslationCache:
    """In-memory view of the translation cache for one model and target language."""

    def __init__(self, cache_file: Path, model: str, target_language: str) -> None:
        """
        Initialize an empty cache; call ``load()`` to read the file.

        Args:
            cache_file: Path of the JSON cache file
            model: Model identifier of the current run
            target_language: Target language label of the current run
        """
        self.cache_file: Path = cache_file
        self.model: str = model
        self.target_language: str = target_language
        self._entries: dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def key(self, text: str, context: str = "") -> str:
        """Cache key of ``text`` in ``context`` for the current model and language."""
        return make_cache_key(text, self.model, self.target_language, context)

    def load(self) -> int:
        """
        Load matching entries from disk.

        A missing or malformed file yields an empty cache; it never fails the run.

        Returns:
            Number of entries loaded
        """
        self._entries = {}

        if not self.cache_file.exists():
            logger.info("No translation cache found, starting fresh")
            return 0

        cache_map = _read_cache_map(self.cache_file)
        if cache_map is None:
            logger.info("Translation cache format not recognised, starting fresh")
            return 0

        skipped = 0
        for key, entry in cache_map.items():
            if not _is_valid_entry(entry):
                skipped += 1
                continue
            cache_entry = cast(CacheEntry, entry)
            if (
                cache_entry["model"] == self.model
                and cache_entry["targetLanguage"] == self.target_language
            ):
                self._entries[key] = cache_entry

        logger.info(
            f"Loaded {len(self._entries)} cached translations "
            + f"(model: {self.model}, language: {self.target_language})"
        )
        if skipped:
            logger.debug(f"Ignored {skipped} malformed cache entries")
        return len(self._entries)

    def get(self, text: str, context: str = "") -> str | None:
        """Return the cached translation, or None on a miss."""
        entry = self._entries.get(self.key(text, context))
        if entry is not None and entry["translated"]:
            return entry["translated"]
        return None

    def set(self, text: str, translated: str, context: str = "") -> None:
        """Store a translation for the current model and language."""
        self._entries[self.key(text, context)] = {
            "original": text,
            "translated": translated,
            "context": context,
            "model": self.model,
            "targetLanguage": self.target_language,
            "createdAt": utc_timestamp(),
        }

    def partition(self, texts: Iterable[T]) -> tuple[list[T], list[T]]:
        """
        Split ``texts`` into cache hits and misses.

        Returns:
            Tuple of (cached, uncached), each in input order
        """
        cached: list[T] = []
        uncached: list[T] = []
        for item in texts:
            if self.get(item.text, item.context) is not None:
                cached.append(item)
            else:
                uncached.append(item)
        return cached, uncached

    def save(self) -> bool:
        """
        Merge the in-memory entries into the file on disk.

        Entries of other models and languages already on disk are kept. When
        the merge changes nothing the file is left untouched.

        Returns:
            True if the file was written
        """
        existing = _read_cache_map(self.cache_file)
        merged: dict[str, object] = dict(existing or {})
        merged.update(self._entries)

        if existing is not None and merged == existing:
            logger.info("Translation cache unchanged")
            return False

        write_json(
            self.cache_file,
            {
                "version": CACHE_VERSION,
                "lastUpdated": utc_timestamp(),
                "cache": merged,
            },
        )
        logger.info(f"Translation cache saved: {len(self._entries)} entries for this run")
        return True
