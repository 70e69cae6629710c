# services/extractor/field_extractor.py
"""
Field extraction engine.

For each semantic field the engine walks an ordered fallback chain:

1. the lexicon schema's mapping for the field, if the record's type has one
   (custom extractor, or candidate names looked up on the record);
2. the universal heuristic name table;
3. nothing – the field is absent.

Typed fields (media, date, tags) run every candidate through a normalizer
and keep the first one that normalizes.  Recoverable failures are caught in
``_first_usable`` and nowhere else.
"""

from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple

from loguru import logger

from core.config import get_settings
from core.exceptions import ExtractionError, SchemaExtractorFailure
from models.fields import ExtractedFields, ImageItem, ImageRef
from models.lexicon import CustomExtractor, ExactName, LexiconRegistry, NameCandidates
from models.record import coerce_record

from .normalizers import normalize_date, normalize_images, normalize_tags, resolve_media
from .paths import get_nested_value, is_present, lexicon_type, record_value

# ----------------------------------------------------------------------
# Universal heuristic table – property names tried in order per field
# ----------------------------------------------------------------------
FIELD_CANDIDATES: Dict[str, Tuple[str, ...]] = {
    "title": ("title", "name", "displayName", "subject", "heading"),
    "pronouns": ("pronouns", "pronoun"),
    "content": ("content", "text", "description", "message", "body", "summary", "bio"),
    "url": ("url", "uri", "link", "href", "website"),
    "image": ("image", "avatar", "thumbnail", "picture", "photo"),
    "images": ("images", "photos", "media", "attachments", "blobs"),
    "banner": ("banner", "coverImage", "cover", "header", "headerImage"),
    "date": ("createdAt", "indexedAt", "publishedAt", "updatedAt", "timestamp", "date"),
    "author": ("author", "creator", "by", "from"),
    "tags": ("tags", "labels", "categories", "topics", "keywords"),
    "items": ("items", "links", "entries", "records", "children"),
}

Normalizer = Callable[[Any, Mapping[str, Any]], Any]


def _name_candidates(record: Mapping[str, Any], names) -> Iterator[Any]:
    """
    Present values for ``names``, each looked up on the record's top level,
    then its value payload, then as a dotted path over the whole record and
    over the payload.
    """
    value = record_value(record)
    for name in names:
        lookups = (
            record.get(name),
            value.get(name),
            get_nested_value(record, name),
            get_nested_value(value, name),
        )
        for candidate in lookups:
            if is_present(candidate):
                yield candidate


class FieldExtractor:
    """
    Extracts ``ExtractedFields`` from records using a ``LexiconRegistry``.

    The registry and the CDN URL template are injected; the extractor keeps
    no per-record state and is safe to share.
    """

    def __init__(self, registry: LexiconRegistry, cdn_url_template: Optional[str] = None):
        self.registry = registry
        self.cdn_url_template = cdn_url_template or get_settings().cdn_url_template

    # ------------------------------------------------------------------
    # Candidate stages
    # ------------------------------------------------------------------
    def _schema_stage(self, record: Mapping[str, Any], field: str, type_id: Optional[str]) -> Iterator[Any]:
        schema = self.registry.lookup(type_id)
        mapping = schema.mapping_for(field) if schema else None
        if mapping is None:
            return

        if isinstance(mapping, CustomExtractor):
            try:
                result = mapping.func(record)
            except Exception as exc:
                raise SchemaExtractorFailure(type_id, field, exc) from exc
            if is_present(result):
                yield result
        elif isinstance(mapping, ExactName):
            yield from _name_candidates(record, (mapping.name,))
        elif isinstance(mapping, NameCandidates):
            yield from _name_candidates(record, mapping.names)

    def _heuristic_stage(self, record: Mapping[str, Any], field: str, type_id: Optional[str]) -> Iterator[Any]:
        yield from _name_candidates(record, FIELD_CANDIDATES.get(field, (field,)))

    def _first_usable(
        self,
        record: Mapping[str, Any],
        field: str,
        type_id: Optional[str],
        normalize: Optional[Normalizer] = None,
    ) -> Any:
        for stage in (self._schema_stage, self._heuristic_stage):
            try:
                for candidate in stage(record, field, type_id):
                    if normalize is None:
                        return candidate
                    try:
                        result = normalize(candidate, record)
                    except ExtractionError as exc:
                        logger.debug(f"{type_id}.{field}: skipping candidate ({exc})")
                        continue
                    if result is not None:
                        return result
            except SchemaExtractorFailure as exc:
                logger.warning(f"{exc}; falling back to heuristics")
        return None

    # ------------------------------------------------------------------
    # Per-field extraction
    # ------------------------------------------------------------------
    def extract_field(self, record: Any, field: str, type_id: Optional[str] = None) -> Any:
        """Raw value for ``field``: schema mapping, then heuristics, then ``None``."""
        return self._first_usable(coerce_record(record), field, type_id)

    def _media(self, candidate: Any, record: Mapping[str, Any]) -> Optional[str]:
        return resolve_media(candidate, record, self.cdn_url_template)

    def _image_list(self, candidate: Any, record: Mapping[str, Any]) -> Optional[List[ImageItem]]:
        return normalize_images(candidate, record, self.cdn_url_template)

    def extract_images(self, record: Mapping[str, Any], type_id: Optional[str]) -> List[ImageItem]:
        return self._first_usable(record, "images", type_id, self._image_list) or []

    def extract_image(
        self,
        record: Mapping[str, Any],
        type_id: Optional[str],
        images: Optional[List[ImageItem]] = None,
    ) -> Optional[str]:
        image = self._first_usable(record, "image", type_id, self._media)
        if image is not None:
            return image
        if images is None:
            images = self.extract_images(record, type_id)
        if images:
            first = images[0]
            return first.url if isinstance(first, ImageRef) else first
        return None

    def extract_banner(self, record: Mapping[str, Any], type_id: Optional[str]) -> Optional[str]:
        return self._first_usable(record, "banner", type_id, self._media)

    def extract_date(self, record: Mapping[str, Any], type_id: Optional[str]):
        return self._first_usable(record, "date", type_id, lambda candidate, _: normalize_date(candidate))

    def extract_tags(self, record: Mapping[str, Any], type_id: Optional[str]) -> List[str]:
        return self._first_usable(record, "tags", type_id, lambda candidate, _: normalize_tags(candidate)) or []

    # ------------------------------------------------------------------
    # Whole record
    # ------------------------------------------------------------------
    def extract_fields(self, record: Any) -> ExtractedFields:
        """Build the full ``ExtractedFields`` for ``record``."""
        data = coerce_record(record)
        type_id = lexicon_type(data)
        images = self.extract_images(data, type_id)

        return ExtractedFields(
            title=self._first_usable(data, "title", type_id),
            pronouns=self._first_usable(data, "pronouns", type_id),
            content=self._first_usable(data, "content", type_id),
            url=self._first_usable(data, "url", type_id),
            image=self.extract_image(data, type_id, images),
            images=images,
            banner=self.extract_banner(data, type_id),
            date=self.extract_date(data, type_id),
            author=self._first_usable(data, "author", type_id),
            tags=self.extract_tags(data, type_id),
            items=self._first_usable(data, "items", type_id),
            type_id=type_id,
            uri=data.get("uri") if isinstance(data.get("uri"), str) else None,
            cid=data.get("cid") if isinstance(data.get("cid"), str) else None,
            raw=record_value(data),
        )


def get_type_name(type_id: Optional[str]) -> str:
    """``garden.spores.social.takenFlower`` → ``Taken Flower``."""
    if not type_id:
        return "Unknown"
    last = type_id.split(".")[-1]
    spaced = "".join(f" {ch}" if ch.isupper() else ch for ch in last)
    return (spaced[:1].upper() + spaced[1:]).strip()
