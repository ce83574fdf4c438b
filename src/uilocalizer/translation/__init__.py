"""Translation of extracted strings through a cached chat-completions provider."""

from .cache import TranslationCache, make_cache_key
from .client import ChatCompletionClient
from .translator import TranslationResult, TranslationSummary, Translator, translate_texts

__all__ = [
    "ChatCompletionClient",
    "TranslationCache",
    "TranslationResult",
    "TranslationSummary",
    "Translator",
    "make_cache_key",
    "translate_texts",
]
