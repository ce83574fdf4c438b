"""
Translation stage of the pipeline.

Reads ``extracted-text.json``, resolves every string through the persistent
cache and the chat-completions provider, and writes ``translations.json``
plus the flat ``translation-mapping.json`` used by the replacer.

Provider failures never abort the run: a failed batch is retried item by
item, and an item that still fails keeps its original text with
``error: true``.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TypeVar, cast

from ..config.schema import LocalizerConfig
from ..utils.artifacts import read_json, utc_timestamp, write_json
from ..utils.exceptions import ArtifactError, ArtifactNotFoundError, ProviderError
from .cache import TranslationCache
from .client import ChatCompletionClient
from .prompts import (
    build_batch_prompt,
    build_single_prompt,
    clean_single_response,
    parse_batch_response,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class SourceText:
    """An entry of ``extracted-text.json`` as seen by the translator."""

    text: str
    context: str
    files: list[str]

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> SourceText | None:
        """Build from JSON; accepts both ``files`` lists and a single ``file``."""
        text = data.get("text")
        if not isinstance(text, str) or not text.strip():
            return None
        context = data.get("context")
        files_raw = data.get("files")
        if isinstance(files_raw, list):
            files = [f for f in cast(list[object], files_raw) if isinstance(f, str)]
        elif isinstance(data.get("file"), str):
            files = [cast(str, data["file"])]
        else:
            files = []
        return cls(text=text, context=context if isinstance(context, str) else "", files=files)


@dataclass
class TranslationResult:
    """Outcome of translating one extracted string."""

    original: str
    translated: str
    context: str
    files: list[str]
    from_cache: bool = False
    error: bool = False

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {
            "original": self.original,
            "translated": self.translated,
            "context": self.context,
            "files": list(self.files),
            "fromCache": self.from_cache,
        }
        if self.error:
            data["error"] = True
        return data


@dataclass
class TranslationSummary:
    """Counters and results of one translation run."""

    results: list[TranslationResult] = field(default_factory=list)
    cache_hits: int = 0
    api_calls: int = 0
    batches: int = 0

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def failed(self) -> int:
        return sum(1 for result in self.results if result.error)

    @property
    def successful(self) -> int:
        return self.total - self.failed

    @property
    def mapping(self) -> dict[str, str]:
        """Original -> translated for every result that actually changed."""
        return {
            result.original: result.translated
            for result in self.results
            if result.translated != result.original
        }

    @property
    def cache_efficiency(self) -> float:
        """Share of texts served from the cache, as a percentage."""
        if self.total == 0:
            return 100.0
        return (self.cache_hits / self.total) * 100.0


def create_batches(items: Sequence[T], batch_size: int) -> Iterator[list[T]]:
    """Yield consecutive slices of ``items`` of at most ``batch_size``."""
    for start in range(0, len(items), batch_size):
        yield list(items[start : start + batch_size])


def load_extracted_texts(extracted_path: Path) -> tuple[dict[str, object], list[SourceText]]:
    """
    Load ``extracted-text.json``.

    Returns:
        Tuple of (metadata, texts)

    Raises:
        ArtifactNotFoundError: If the file does not exist
        ArtifactError: If the file is not a valid extraction artifact
    """
    if not extracted_path.exists():
        raise ArtifactNotFoundError(extracted_path, "Run the extract stage first.")

    try:
        data = read_json(extracted_path)
    except json.JSONDecodeError as e:
        raise ArtifactError(f"Invalid JSON in {extracted_path}: {e}", extracted_path) from e

    if not isinstance(data, dict):
        raise ArtifactError(f"{extracted_path} must contain a JSON object", extracted_path)

    data_dict = cast(dict[str, object], data)
    metadata_raw = data_dict.get("metadata")
    metadata = cast(dict[str, object], metadata_raw) if isinstance(metadata_raw, dict) else {}

    texts_raw = data_dict.get("texts")
    texts: list[SourceText] = []
    if isinstance(texts_raw, list):
        for item in cast(list[object], texts_raw):
            if isinstance(item, dict):
                source_text = SourceText.from_dict(cast(dict[str, object], item))
                if source_text is not None:
                    texts.append(source_text)

    return metadata, texts


class Translator:
    """Resolves extracted strings through the cache and the provider."""

    def __init__(
        self,
        config: LocalizerConfig,
        cache: TranslationCache | None = None,
        client: ChatCompletionClient | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Initialize the translator.

        Args:
            config: Pipeline configuration
            cache: Cache to use; by default the configured cache file is loaded
            client: Provider client; by default one is built from the config
            sleep: Delay function between requests

        Raises:
            ConfigurationError: If no API key is configured and no client is given
        """
        self.config: LocalizerConfig = config
        translation = config.translation
        self.client: ChatCompletionClient = client or ChatCompletionClient(translation)
        if cache is None:
            cache = TranslationCache(
                config.paths.cache_path, translation.model, translation.target_language
            )
            _ = cache.load()
        self.cache: TranslationCache = cache
        self._sleep: Callable[[float], None] = sleep
        self._results: dict[str, TranslationResult] = {}
        self._summary: TranslationSummary = TranslationSummary()

    def translate(self, texts: Sequence[SourceText]) -> TranslationSummary:
        """
        Translate ``texts`` and return the results in input order.

        The cache is updated in memory; call ``cache.save()`` to persist it.
        """
        self._results = {}
        self._summary = TranslationSummary()
        translation = self.config.translation

        logger.info(
            f"Starting AI translation with {translation.model} "
            + f"(target language: {translation.target_language})"
        )

        cached, uncached = self.cache.partition(texts)
        logger.info(f"Cache status: {len(cached)} cached, {len(uncached)} need translation")

        for item in cached:
            translated = self.cache.get(item.text, item.context)
            if translated is None:
                continue
            self._summary.cache_hits += 1
            self._store(item, translated, from_cache=True)

        if uncached:
            batches = list(create_batches(uncached, translation.batch_size))
            self._summary.batches = len(batches)
            logger.info(f"Created {len(batches)} translation batches for uncached texts")

            for index, batch in enumerate(batches):
                logger.info(f"Processing batch {index + 1}/{len(batches)}...")
                self._translate_batch(batch, index)
                if index < len(batches) - 1 and translation.batch_delay > 0:
                    self._sleep(translation.batch_delay)
        else:
            logger.info("All texts found in cache, no API calls needed")

        seen: set[str] = set()
        for item in texts:
            if item.text in self._results and item.text not in seen:
                seen.add(item.text)
                self._summary.results.append(self._results[item.text])

        return self._summary

    def _store(
        self,
        item: SourceText,
        translated: str,
        from_cache: bool,
        error: bool = False,
    ) -> None:
        self._results[item.text] = TranslationResult(
            original=item.text,
            translated=translated,
            context=item.context,
            files=list(item.files),
            from_cache=from_cache,
            error=error,
        )

    def _translate_batch(self, batch: list[SourceText], index: int) -> None:
        prompt = build_batch_prompt(
            [item.text for item in batch], self.config.translation.target_language
        )

        try:
            self._summary.api_calls += 1
            response = self.client.complete(prompt)
        except ProviderError as e:
            logger.error(f"Batch {index + 1} failed: {e}")
            self._translate_individually(batch)
            return

        translations = parse_batch_response(response, len(batch))
        missing = 0
        for item, translated in zip(batch, translations, strict=True):
            if translated is None:
                missing += 1
                self._store(item, item.text, from_cache=False)
                continue
            self.cache.set(item.text, translated, item.context)
            self._store(item, translated, from_cache=False)

        if missing:
            logger.warning(
                f"Batch {index + 1}: {missing} item(s) missing from response, kept original text"
            )
        logger.info(f"Batch {index + 1} completed ({len(batch)} texts)")

    def _translate_individually(self, batch: list[SourceText]) -> None:
        logger.info("Retrying batch individually...")
        item_delay = self.config.translation.item_delay

        for item in batch:
            cached = self.cache.get(item.text, item.context)
            if cached is not None:
                self._summary.cache_hits += 1
                self._store(item, cached, from_cache=True)
                continue

            try:
                translated = self._translate_single(item.text)
            except ProviderError as e:
                logger.warning(f'Failed to translate "{item.text[:50]}": {e}')
                self._store(item, item.text, from_cache=False, error=True)
            else:
                self.cache.set(item.text, translated, item.context)
                self._store(item, translated, from_cache=False)

            if item_delay > 0:
                self._sleep(item_delay)

    def _translate_single(self, text: str) -> str:
        self._summary.api_calls += 1
        response = self.client.complete(
            build_single_prompt(text, self.config.translation.target_language)
        )
        translated = clean_single_response(response)
        if not translated:
            raise ProviderError("Empty translation received from API")
        return translated

    def build_translations_artifact(
        self, summary: TranslationSummary, source_metadata: dict[str, object]
    ) -> dict[str, object]:
        """Build the ``translations.json`` document."""
        translation = self.config.translation
        metadata: dict[str, object] = {
            **source_metadata,
            "translatedAt": utc_timestamp(),
            "model": translation.model,
            "targetLanguage": translation.target_language,
            "apiEndpoint": translation.api_endpoint,
            "totalTexts": summary.total,
            "successfulTranslations": summary.successful,
            "failedTranslations": summary.failed,
            "cacheHits": summary.cache_hits,
            "apiCalls": summary.api_calls,
        }
        return {
            "metadata": metadata,
            "translations": [result.to_dict() for result in summary.results],
        }

    def run(self) -> TranslationSummary:
        """
        Run the whole stage: load, translate, save cache and write artifacts.

        Raises:
            ArtifactNotFoundError: If ``extracted-text.json`` is missing
        """
        paths = self.config.paths
        source_metadata, texts = load_extracted_texts(paths.extracted_path)

        if texts:
            logger.info(f"Found {len(texts)} texts to translate")
        else:
            logger.info("No texts found to translate")

        summary = self.translate(texts)
        _ = self.cache.save()

        write_json(paths.translations_path, self.build_translations_artifact(summary, source_metadata))
        logger.info(f"Translations saved to: {paths.translations_path}")

        mapping = summary.mapping
        write_json(paths.mapping_path, mapping)
        logger.info(f"Translation mapping saved to: {paths.mapping_path}")

        logger.info(
            f"Translation summary: {summary.total} processed, {len(mapping)} translated, "
            + f"{summary.total - len(mapping)} unchanged, {summary.failed} failed"
        )
        logger.info(
            f"Cache efficiency: {summary.cache_hits}/{summary.total} hits "
            + f"({summary.cache_efficiency:.0f}%), API calls made: {summary.api_calls}"
        )
        return summary


def translate_texts(config: LocalizerConfig) -> TranslationSummary:
    """Run the translation stage with a client built from ``config``."""
    client = ChatCompletionClient(config.translation)
    with client:
        return Translator(config, client=client).run()
