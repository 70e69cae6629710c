# core/exceptions.py
"""
Exception hierarchy for the record field extractor.

Everything below ``ExtractionError`` is *recoverable*: it is raised at the
point a candidate value turns out to be unusable and caught by the fallback
chain in ``services.extractor.field_extractor``.  Callers of the public API
never see these.

``LexiconConfigError`` and ``LexiconNotFoundError`` are configuration errors
and do propagate.
"""

from __future__ import annotations

from typing import Any, Optional


class ExtractionError(Exception):
    """Base error for a single field that could not be extracted."""

    pass


class SchemaExtractorFailure(ExtractionError):
    """A lexicon's custom extractor raised while reading a record."""

    def __init__(self, type_id: Optional[str], field: str, cause: BaseException):
        self.type_id = type_id
        self.field = field
        self.cause = cause
        super().__init__(f"Schema extractor failed for {type_id}.{field}: {cause!r}")


class MalformedDate(ExtractionError):
    """A date-like candidate could not be parsed."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Unparseable date value: {value!r}")


class IncompleteBlobReference(ExtractionError):
    """A blob reference lacks the content hash or the author identifier."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Incomplete blob reference: {reason}")


class LexiconConfigError(Exception):
    """The lexicon registry file is malformed."""

    pass


class LexiconNotFoundError(KeyError):
    """Raised when a strict schema lookup names an unregistered lexicon."""

    def __init__(self, type_id: str):
        super().__init__(f"Lexicon '{type_id}' has no registered schema.")
        self.type_id = type_id
