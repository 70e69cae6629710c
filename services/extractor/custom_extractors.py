# services/extractor/custom_extractors.py
"""
Named custom extractors referenced from ``configs/lexicons.yaml`` as
``{extractor: <name>}``.

Each extractor receives the full record mapping and returns a raw value,
or ``None``.  Extractors may raise; the engine catches it and falls back to
heuristics.  Media values are returned unresolved (view URLs or blob
references); the image normalizers turn them into URLs.
"""

import re
from typing import Any, Callable, Dict, List, Mapping, Optional

from .paths import record_value, uri_parts

Extractor = Callable[[Mapping[str, Any]], Any]

EXTRACTORS: Dict[str, Extractor] = {}

_BSKY_POST_URI = re.compile(r"at://([^/]+)/app\.bsky\.feed\.post/(.+)$")
_SMOKE_SIGNAL_URL = "https://smokesignal.events/{did}/{rkey}"
_LEAFLET_URL = "https://leaflet.pub/@{did}/{rkey}"


def extractor(name: str) -> Callable[[Extractor], Extractor]:
    """Register ``func`` under ``name``."""

    def decorator(func: Extractor) -> Extractor:
        EXTRACTORS[name] = func
        return func

    return decorator


def _smoke_signal_url(uri: Any) -> Optional[str]:
    parts = uri_parts(uri)
    if len(parts) > 4 and parts[2] and parts[4]:
        return _SMOKE_SIGNAL_URL.format(did=parts[2], rkey=parts[4])
    return None


# ----------------------------------------------------------------------
# Bluesky
# ----------------------------------------------------------------------
def _embed_images(embed: Any) -> List[Dict[str, Any]]:
    if not isinstance(embed, Mapping) or embed.get("$type") != "app.bsky.embed.images":
        return []

    images = []
    for img in embed.get("images") or []:
        alt = img.get("alt") or ""
        if img.get("fullsize"):
            images.append({"url": img["fullsize"], "alt": alt})
        elif img.get("thumb"):
            images.append({"url": img["thumb"], "alt": alt})
        elif isinstance(img.get("image"), Mapping):
            # raw record: blob reference, resolved by the images normalizer
            images.append({**img["image"], "alt": alt})
    return images


@extractor("bsky_post_images")
def bsky_post_images(record):
    embed = record_value(record).get("embed")
    if not embed:
        return None

    images = _embed_images(embed)
    if embed.get("$type") == "app.bsky.embed.recordWithMedia":
        images.extend(_embed_images(embed.get("media")))
    return images or None


# ----------------------------------------------------------------------
# Smoke Signal calendar events / RSVPs
# ----------------------------------------------------------------------
@extractor("smoke_signal_event_url")
def smoke_signal_event_url(record):
    return _smoke_signal_url(record.get("uri"))


@extractor("rsvp_title")
def rsvp_title(record):
    status = record_value(record).get("status") or "going"
    label = status.split("#")[-1]
    return f"RSVP: {label}"


@extractor("rsvp_content")
def rsvp_content(record):
    subject = record_value(record).get("subject") or {}
    if subject.get("uri"):
        return f"Event: {subject['uri']}"
    return None


@extractor("rsvp_event_url")
def rsvp_event_url(record):
    subject = record_value(record).get("subject") or {}
    return _smoke_signal_url(subject.get("uri"))


# ----------------------------------------------------------------------
# Leaflet / site.standard documents
# ----------------------------------------------------------------------
@extractor("leaflet_cover_image")
def leaflet_cover_image(record):
    cover = record_value(record).get("coverImage") or {}
    if cover.get("$type") == "blob" and (cover.get("ref") or {}).get("$link"):
        return cover
    return None


@extractor("leaflet_content")
def leaflet_content(record):
    # block renderers read the whole document value
    return record_value(record)


@extractor("standard_document_content")
def standard_document_content(record):
    value = record_value(record)
    return value.get("content") or value


@extractor("leaflet_post_url")
def leaflet_post_url(record):
    post_ref = record_value(record).get("postRef") or {}
    match = _BSKY_POST_URI.search(post_ref.get("uri") or "")
    if match:
        return _LEAFLET_URL.format(did=match.group(1), rkey=match.group(2))
    return None
