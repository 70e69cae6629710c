from .fields import ConfidenceLevel, ExtractedFields, ImageRef, LayoutSuggestion
from .lexicon import (
    CustomExtractor,
    ExactName,
    LexiconRegistry,
    LexiconSchema,
    NameCandidates,
)
from .record import Record, coerce_record

__all__ = [
    'ConfidenceLevel', 'ExtractedFields', 'ImageRef', 'LayoutSuggestion',
    'CustomExtractor', 'ExactName', 'LexiconRegistry', 'LexiconSchema', 'NameCandidates',
    'Record', 'coerce_record',
]
