# services/extractor/layout_selector.py
"""
Layout suggestion.

A schema's ``preferred_layout`` wins outright.  Otherwise the first matching
rule of an ordered decision list picks the layout:

a. an image and no content / content under 100 chars → ``image``
b. a url and no content / content under 200 chars → ``link``
c. non-empty items → ``links`` when the first item has a url/href, else ``list``
d. content over 500 chars → ``post``
e. → ``card``
"""

from typing import Any, Mapping

from models.fields import ConfidenceLevel, ExtractedFields, LayoutSuggestion
from models.lexicon import LexiconRegistry

IMAGE_CONTENT_LIMIT = 100
LINK_CONTENT_LIMIT = 200
POST_CONTENT_MINIMUM = 500

DEFAULT_LAYOUT = "card"


def _content_shorter_than(content: Any, limit: int) -> bool:
    """True when there is no content or it is a string shorter than ``limit``."""
    if content is None:
        return True
    return isinstance(content, str) and len(content) < limit


def _looks_like_link(item: Any) -> bool:
    return isinstance(item, Mapping) and bool(item.get("url") or item.get("href"))


def choose_layout(registry: LexiconRegistry, fields: ExtractedFields) -> str:
    schema = registry.lookup(fields.type_id)
    if schema is not None and schema.preferred_layout:
        return schema.preferred_layout

    if (fields.image or fields.images) and _content_shorter_than(fields.content, IMAGE_CONTENT_LIMIT):
        return "image"

    if fields.url and _content_shorter_than(fields.content, LINK_CONTENT_LIMIT):
        return "link"

    items = fields.items
    if isinstance(items, (list, tuple)) and items:
        return "links" if _looks_like_link(items[0]) else "list"

    if isinstance(fields.content, str) and len(fields.content) > POST_CONTENT_MINIMUM:
        return "post"

    return DEFAULT_LAYOUT


def build_suggestion(registry: LexiconRegistry, fields: ExtractedFields, confidence: ConfidenceLevel) -> LayoutSuggestion:
    return LayoutSuggestion(layout=choose_layout(registry, fields), confidence=confidence)
