"""
Extraction of translatable UI strings from a front-end source tree.

This package contains:
- The translatability filter
- Template and script harvesters for components and modules
- The directory scanner that writes extracted-text.json
"""

from .extractor import ExtractedString, TextExtractor, extract_texts
from .filters import TranslatabilityFilter

__all__ = ["ExtractedString", "TextExtractor", "TranslatabilityFilter", "extract_texts"]
