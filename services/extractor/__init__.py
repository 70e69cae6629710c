# services/extractor/__init__.py
"""
Public API of the record field extractor.

Every function accepts an optional ``registry``; without one the registry
configured by ``EXTRACTOR_LEXICON_CONFIG_PATH`` is used.  Records may be
``models.Record`` instances or plain mappings.
"""

from functools import lru_cache
from typing import Any, Optional

from models.fields import ConfidenceLevel, ExtractedFields, LayoutSuggestion
from models.lexicon import LexiconRegistry

from .confidence import score_confidence
from .config_loader import get_default_registry
from .field_extractor import FieldExtractor, get_type_name
from .layout_selector import build_suggestion


@lru_cache(maxsize=1)
def get_default_extractor() -> FieldExtractor:
    return FieldExtractor(get_default_registry())


def _extractor(registry: Optional[LexiconRegistry]) -> FieldExtractor:
    if registry is None:
        return get_default_extractor()
    return FieldExtractor(registry)


def extract_fields(record: Any, registry: Optional[LexiconRegistry] = None) -> ExtractedFields:
    return _extractor(registry).extract_fields(record)


def get_extraction_confidence(record: Any, registry: Optional[LexiconRegistry] = None) -> ConfidenceLevel:
    extractor = _extractor(registry)
    return score_confidence(extractor.registry, extractor.extract_fields(record))


def suggest_layout(record: Any, registry: Optional[LexiconRegistry] = None) -> LayoutSuggestion:
    """Suggested layout plus the confidence behind it."""
    extractor = _extractor(registry)
    return suggest_layout_for_fields(extractor.extract_fields(record), extractor.registry)


def suggest_layout_for_fields(fields: ExtractedFields, registry: Optional[LexiconRegistry] = None) -> LayoutSuggestion:
    """Same as ``suggest_layout`` for fields that were already extracted."""
    registry = registry or get_default_registry()
    return build_suggestion(registry, fields, score_confidence(registry, fields))


def has_lexicon_schema(type_id: Optional[str], registry: Optional[LexiconRegistry] = None) -> bool:
    return (registry or get_default_registry()).has_schema(type_id)


def is_known_lexicon(type_id: Optional[str], registry: Optional[LexiconRegistry] = None) -> bool:
    return (registry or get_default_registry()).is_known(type_id)


__all__ = [
    'FieldExtractor', 'extract_fields', 'get_extraction_confidence', 'suggest_layout', 'suggest_layout_for_fields',
    'has_lexicon_schema', 'is_known_lexicon', 'get_type_name', 'get_default_extractor',
]
