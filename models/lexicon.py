# models/lexicon.py
"""
Schema registry types.

A ``LexiconSchema`` says, per semantic field, where a lexicon keeps that
field.  The ``FieldMapping`` union has one case per form:

* ``ExactName`` – one property name (or dotted path);
* ``NameCandidates`` – property names tried in order;
* ``CustomExtractor`` – a named function that reads the whole record.
"""

from __future__ import annotations

from typing import Annotated, Any, Callable, Dict, FrozenSet, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .fields import ConfidenceLevel

# Semantic fields a schema may map, in extraction order
SEMANTIC_FIELDS: Tuple[str, ...] = (
    "title",
    "pronouns",
    "content",
    "url",
    "image",
    "images",
    "banner",
    "date",
    "author",
    "tags",
    "items",
)


class ExactName(BaseModel):
    kind: Literal["exact"] = "exact"
    name: str

    model_config = ConfigDict(frozen=True)


class NameCandidates(BaseModel):
    kind: Literal["candidates"] = "candidates"
    names: Tuple[str, ...]

    model_config = ConfigDict(frozen=True)


class CustomExtractor(BaseModel):
    """``func`` receives the full record mapping and may raise."""

    kind: Literal["custom"] = "custom"
    extractor: str
    func: Callable[[Any], Any] = Field(exclude=True, repr=False)

    model_config = ConfigDict(frozen=True)


FieldMapping = Annotated[
    Union[ExactName, NameCandidates, CustomExtractor],
    Field(discriminator="kind"),
]


class LexiconSchema(BaseModel):
    """Precise field mappings for one lexicon type."""

    title: Optional[FieldMapping] = None
    pronouns: Optional[FieldMapping] = None
    content: Optional[FieldMapping] = None
    url: Optional[FieldMapping] = None
    image: Optional[FieldMapping] = None
    images: Optional[FieldMapping] = None
    banner: Optional[FieldMapping] = None
    date: Optional[FieldMapping] = None
    author: Optional[FieldMapping] = None
    tags: Optional[FieldMapping] = None
    items: Optional[FieldMapping] = None

    confidence: Optional[ConfidenceLevel] = None
    preferred_layout: Optional[str] = None

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("confidence")
    @classmethod
    def _registered_types_never_score_low(cls, v: Optional[ConfidenceLevel]) -> Optional[ConfidenceLevel]:
        if v == ConfidenceLevel.LOW:
            raise ValueError("a registered lexicon cannot declare low confidence")
        return v

    def mapping_for(self, field: str) -> Optional[Union[ExactName, NameCandidates, CustomExtractor]]:
        if field not in SEMANTIC_FIELDS:
            return None
        return getattr(self, field)


class LexiconRegistry(BaseModel):
    """
    Read-only table of lexicon schemas plus the known-lexicon allow-list.

    Every type with a schema counts as known; ``known_lexicons`` lists the
    extra types that render well through heuristics alone.
    """

    schemas: Dict[str, LexiconSchema] = Field(default_factory=dict)
    known_lexicons: FrozenSet[str] = frozenset()

    model_config = ConfigDict(frozen=True)

    def lookup(self, type_id: Optional[str]) -> Optional[LexiconSchema]:
        if not type_id:
            return None
        return self.schemas.get(type_id)

    def has_schema(self, type_id: Optional[str]) -> bool:
        return self.lookup(type_id) is not None

    def is_known(self, type_id: Optional[str]) -> bool:
        if not type_id:
            return False
        return type_id in self.known_lexicons or type_id in self.schemas

    def type_ids(self) -> FrozenSet[str]:
        return frozenset(self.schemas) | self.known_lexicons

    def extended(self, type_id: str, schema: LexiconSchema) -> "LexiconRegistry":
        """Return a new registry with ``schema`` added under ``type_id``."""
        schemas = dict(self.schemas)
        schemas[type_id] = schema
        return LexiconRegistry(schemas=schemas, known_lexicons=self.known_lexicons)
