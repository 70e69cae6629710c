# services/extractor/normalizers.py
"""
Per-field normalizers for the typed semantic fields.

Each normalizer takes one candidate value and returns the normalized value,
``None`` when the candidate is simply the wrong shape, or raises an
``ExtractionError`` subclass when the candidate looked right but was
unusable.  The fallback chain treats both outcomes as "try the next
candidate".
"""

import re
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

from loguru import logger

from core.exceptions import IncompleteBlobReference, MalformedDate
from models.fields import ImageItem, ImageRef

from .paths import format_blob_url, is_blob_ref, is_present

_TAG_KEYS = ("name", "tag", "val")
_FRACTION = re.compile(r"(\d{2}:\d{2}:\d{2})\.(\d+)")


def _str_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def resolve_media(value: Any, record: Mapping[str, Any], template: str) -> Optional[str]:
    """
    Resolve one media reference to a URL.

    Accepted shapes, in order: a plain string; ``{url}``; view-style
    ``{thumb}`` / ``{fullsize}``; a blob reference (``$type: blob`` or a
    ``ref``), templated from the record author and the blob hash.
    """
    if isinstance(value, str):
        return value or None
    if not isinstance(value, Mapping):
        return None
    for key in ("url", "thumb", "fullsize"):
        url = _str_or_none(value.get(key))
        if url:
            return url
    if is_blob_ref(value):
        return format_blob_url(record, value, template)
    return None


def normalize_images(value: Any, record: Mapping[str, Any], template: str) -> Optional[List[ImageItem]]:
    """
    Normalize an image list.  Items carrying an ``alt`` key come back as
    ``ImageRef`` so the label survives; the rest come back as bare URLs.
    Unresolvable items are dropped.
    """
    if not isinstance(value, (list, tuple)) or not value:
        return None

    images: List[ImageItem] = []
    for item in value:
        try:
            url = resolve_media(item, record, template)
        except IncompleteBlobReference as exc:
            logger.debug(f"Dropping image item: {exc}")
            continue
        if not url:
            continue
        if isinstance(item, Mapping) and "alt" in item:
            alt = item.get("alt")
            images.append(ImageRef(url=url, alt=alt if isinstance(alt, str) else ""))
        else:
            images.append(url)
    return images or None


def normalize_date(value: Any) -> datetime:
    """
    Parse ``value`` as an aware ``datetime``.

    Accepts ``datetime`` objects, ISO-8601 strings (``Z`` suffix and
    date-only forms included) and numeric epoch milliseconds.  Naive values
    are taken as UTC.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, bool):
        raise MalformedDate(value)
    elif isinstance(value, (int, float)):
        try:
            parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            raise MalformedDate(value) from exc
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        # fromisoformat on 3.10 only takes 3 or 6 fractional digits
        text = _FRACTION.sub(lambda m: f"{m.group(1)}.{m.group(2)[:6]:0<6}", text, count=1)
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise MalformedDate(value) from exc
    else:
        raise MalformedDate(value)

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _tag_name(tag: Any) -> Optional[str]:
    if isinstance(tag, str):
        return tag
    if isinstance(tag, Mapping):
        for key in _TAG_KEYS:
            if tag.get(key):
                return tag[key]
    return None


def normalize_tags(value: Any) -> Optional[List[str]]:
    """A list of strings or of ``{name|tag|val}`` objects → list of non-empty strings."""
    if not isinstance(value, (list, tuple)):
        return None
    tags = (_tag_name(tag) for tag in value)
    return [tag for tag in tags if isinstance(tag, str) and is_present(tag.strip())]
