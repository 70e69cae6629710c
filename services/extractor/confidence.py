# services/extractor/confidence.py
"""
Extraction confidence.

Priority order:

1. schema with an explicit ``confidence`` override → that level;
2. any schema → ``high``;
3. known lexicon with 3+ meaningful fields → ``high``;
4. known lexicon with 2+, or any lexicon with 3+ → ``medium``;
5. otherwise → ``low``.
"""

from typing import Any

from models.fields import ConfidenceLevel, ExtractedFields
from models.lexicon import LexiconRegistry

from .paths import is_present

KNOWN_HIGH_THRESHOLD = 3
KNOWN_MEDIUM_THRESHOLD = 2
UNKNOWN_MEDIUM_THRESHOLD = 3


def _meaningful(value: Any) -> bool:
    if isinstance(value, (list, tuple)):
        return len(value) > 0
    return is_present(value) and value is not False


def meaningful_field_count(fields: ExtractedFields) -> int:
    return sum(
        _meaningful(value)
        for value in (
            fields.title,
            fields.content,
            fields.image,
            fields.images,
            fields.url,
            fields.date,
            fields.author,
            fields.tags,
        )
    )


def score_confidence(registry: LexiconRegistry, fields: ExtractedFields) -> ConfidenceLevel:
    schema = registry.lookup(fields.type_id)
    if schema is not None:
        return schema.confidence or ConfidenceLevel.HIGH

    is_known = registry.is_known(fields.type_id)
    count = meaningful_field_count(fields)

    if is_known and count >= KNOWN_HIGH_THRESHOLD:
        return ConfidenceLevel.HIGH
    if (is_known and count >= KNOWN_MEDIUM_THRESHOLD) or count >= UNKNOWN_MEDIUM_THRESHOLD:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW
