# services/extractor/config_loader.py
"""
Loads the lexicon schema registry from ``configs/lexicons.yaml`` and
validates it with Pydantic models.

The YAML uses a shorthand per field mapping (string, list, or
``{extractor: name}``); this module expands it into the ``FieldMapping``
union and resolves extractor names against
``custom_extractors.EXTRACTORS``.

Public API:
* ``load_registry(path)`` – parse, validate and cache one registry file.
* ``get_default_registry()`` – the registry at ``Settings.lexicon_config_path``.
* ``get_lexicon_schema(type_id)`` – strict lookup, raises ``LexiconNotFoundError``.
* ``list_available_lexicons()`` – convenience helper for UI/CLI.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from core.config import get_settings
from core.exceptions import LexiconConfigError, LexiconNotFoundError
from models.lexicon import (
    SEMANTIC_FIELDS,
    CustomExtractor,
    ExactName,
    LexiconRegistry,
    LexiconSchema,
    NameCandidates,
)

from .custom_extractors import EXTRACTORS


# ----------------------------------------------------------------------
# Raw file shape – validated before the shorthand is expanded
# ----------------------------------------------------------------------
class ExtractorRef(BaseModel):
    extractor: str


RawMapping = Union[str, List[str], ExtractorRef]


class RawSchema(BaseModel):
    title: Optional[RawMapping] = None
    pronouns: Optional[RawMapping] = None
    content: Optional[RawMapping] = None
    url: Optional[RawMapping] = None
    image: Optional[RawMapping] = None
    images: Optional[RawMapping] = None
    banner: Optional[RawMapping] = None
    date: Optional[RawMapping] = None
    author: Optional[RawMapping] = None
    tags: Optional[RawMapping] = None
    items: Optional[RawMapping] = None
    confidence: Optional[str] = None
    preferred_layout: Optional[str] = None

    model_config = {"extra": "forbid"}


class RegistryFile(BaseModel):
    """Top-level container – maps lexicon type → raw schema."""
    schemas: Dict[str, RawSchema] = Field(default_factory=dict)
    known_lexicons: List[str] = Field(default_factory=list)


# ----------------------------------------------------------------------
# Shorthand expansion
# ----------------------------------------------------------------------
def _expand_mapping(type_id: str, field: str, raw: RawMapping):
    if isinstance(raw, str):
        return ExactName(name=raw)
    if isinstance(raw, list):
        if not raw:
            raise LexiconConfigError(f"{type_id}.{field}: empty candidate list")
        return NameCandidates(names=tuple(raw))
    try:
        func = EXTRACTORS[raw.extractor]
    except KeyError as exc:
        raise LexiconConfigError(
            f"{type_id}.{field}: unknown extractor '{raw.extractor}'"
        ) from exc
    return CustomExtractor(extractor=raw.extractor, func=func)


def _build_schema(type_id: str, raw: RawSchema) -> LexiconSchema:
    data: Dict[str, Any] = {
        field: _expand_mapping(type_id, field, getattr(raw, field))
        for field in SEMANTIC_FIELDS
        if getattr(raw, field) is not None
    }
    data["confidence"] = raw.confidence
    data["preferred_layout"] = raw.preferred_layout
    try:
        return LexiconSchema(**data)
    except ValidationError as exc:
        raise LexiconConfigError(f"Invalid schema for '{type_id}': {exc}") from exc


def build_registry(raw: Dict[str, Any]) -> LexiconRegistry:
    """Validate an already-parsed registry document."""
    try:
        parsed = RegistryFile(**raw)
    except ValidationError as exc:
        raise LexiconConfigError(f"Invalid lexicon registry: {exc}") from exc

    schemas = {
        type_id: _build_schema(type_id, schema)
        for type_id, schema in parsed.schemas.items()
    }
    return LexiconRegistry(schemas=schemas, known_lexicons=frozenset(parsed.known_lexicons))


# ----------------------------------------------------------------------
# Loading & caching – one read per path per process
# ----------------------------------------------------------------------
@lru_cache(maxsize=None)
def _load(path: Path) -> LexiconRegistry:
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise LexiconConfigError(f"Cannot read lexicon registry {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise LexiconConfigError(f"Lexicon registry {path} must be a mapping")

    registry = build_registry(raw)
    logger.info(
        f"Loaded {len(registry.schemas)} lexicon schemas "
        f"({len(registry.type_ids())} known lexicons) from {path}"
    )
    return registry


def load_registry(path: Optional[Union[str, Path]] = None) -> LexiconRegistry:
    """
    Return the validated registry stored at ``path`` (default: the
    configured ``lexicon_config_path``).

    Raises
    ------
    LexiconConfigError
        If the file is missing, is not YAML, or does not match the schema.
    """
    resolved = Path(path).resolve() if path is not None else get_settings().lexicon_config_path
    return _load(resolved)


def get_default_registry() -> LexiconRegistry:
    return load_registry()


def get_lexicon_schema(type_id: str, registry: Optional[LexiconRegistry] = None) -> LexiconSchema:
    """
    Return the schema for ``type_id``.

    Raises
    ------
    LexiconNotFoundError
        If no schema is registered for the type.
    """
    schema = (registry or get_default_registry()).lookup(type_id)
    if schema is None:
        raise LexiconNotFoundError(type_id)
    return schema


def list_available_lexicons(registry: Optional[LexiconRegistry] = None) -> List[str]:
    """All lexicon types with a registered schema, sorted."""
    return sorted((registry or get_default_registry()).schemas)
