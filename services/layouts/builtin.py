# services/layouts/builtin.py
"""Built-in layouts.  Each returns a view payload tagged with its layout name."""

import re
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlparse

from models.fields import ExtractedFields

from .registry import LayoutRegistry

CARD_CONTENT_LIMIT = 200
LINK_DESCRIPTION_LIMIT = 100

_BSKY_POST_URI = re.compile(r"^at://([^/]+)/app\.bsky\.feed\.post/(.+)$")


def bluesky_post_url(uri: Optional[str]) -> Optional[str]:
    """``at://did/app.bsky.feed.post/rkey`` → the bsky.app web URL."""
    match = _BSKY_POST_URI.match(uri or "")
    if not match:
        return None
    return f"https://bsky.app/profile/{match.group(1)}/post/{match.group(2)}"


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _truncate(text: Optional[str], limit: int) -> Optional[str]:
    if text is None or len(text) <= limit:
        return text
    return text[:limit] + "..."


def _hostname(url: Any) -> Optional[str]:
    if not isinstance(url, str):
        return None
    return urlparse(url).hostname or url


def _iso(fields: ExtractedFields) -> Optional[str]:
    return fields.date.isoformat() if fields.date else None


def render_card(fields: ExtractedFields, record: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "layout": "card",
        "title": _text(fields.title),
        "content": _truncate(_text(fields.content), CARD_CONTENT_LIMIT),
        "image": fields.image,
        "date": _iso(fields),
        "date_link": bluesky_post_url(fields.uri),
    }


def render_post(fields: ExtractedFields, record: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "layout": "post",
        "title": _text(fields.title),
        "content": _text(fields.content),
        "images": fields.images,
        "date": _iso(fields),
        "tags": fields.tags,
        "date_link": bluesky_post_url(fields.uri),
    }


def render_image(fields: ExtractedFields, record: Mapping[str, Any]) -> Dict[str, Any]:
    images = fields.images or ([fields.image] if fields.image else [])
    return {
        "layout": "image",
        "title": _text(fields.title),
        "images": images,
        "caption": _text(fields.content),
        "date": _iso(fields),
    }


def render_link(fields: ExtractedFields, record: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "layout": "link",
        "href": fields.url if isinstance(fields.url, str) else "#",
        "title": _text(fields.title),
        "description": (_text(fields.content) or "")[:LINK_DESCRIPTION_LIMIT] or None,
        "image": fields.image,
        "host": _hostname(fields.url),
    }


def render_links(fields: ExtractedFields, record: Mapping[str, Any]) -> Dict[str, Any]:
    items = fields.items if isinstance(fields.items, (list, tuple)) else []
    links = [
        {
            "href": item.get("url") or item.get("href"),
            "title": item.get("title") or item.get("name") or item.get("url") or item.get("href"),
            "emoji": item.get("emoji"),
        }
        for item in items
        if isinstance(item, Mapping) and (item.get("url") or item.get("href"))
    ]
    return {"layout": "links", "title": _text(fields.title), "links": links}


def render_list(fields: ExtractedFields, record: Mapping[str, Any]) -> Dict[str, Any]:
    items = fields.items if isinstance(fields.items, (list, tuple)) else []
    entries = []
    for item in items:
        if isinstance(item, Mapping):
            entries.append(item.get("title") or item.get("name") or item.get("text") or str(dict(item)))
        else:
            entries.append(str(item))
    return {"layout": "list", "title": _text(fields.title), "content": _text(fields.content), "items": entries}


def render_profile(fields: ExtractedFields, record: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "layout": "profile",
        "name": _text(fields.title),
        "pronouns": _text(fields.pronouns),
        "bio": _text(fields.content),
        "avatar": fields.image,
        "banner": fields.banner,
        "website": fields.url if isinstance(fields.url, str) else None,
    }


def render_raw(fields: ExtractedFields, record: Mapping[str, Any]) -> Dict[str, Any]:
    return {"layout": "raw", "content": fields.content, "value": fields.raw}


def render_leaflet(fields: ExtractedFields, record: Mapping[str, Any]) -> Dict[str, Any]:
    document = fields.content if isinstance(fields.content, Mapping) else fields.raw
    pages = document.get("pages") if isinstance(document, Mapping) else None
    return {
        "layout": "leaflet",
        "title": _text(fields.title),
        "cover": fields.image,
        "date": _iso(fields),
        "tags": fields.tags,
        "href": fields.url if isinstance(fields.url, str) else None,
        "pages": pages or [],
    }


def render_smoke_signal(fields: ExtractedFields, record: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "layout": "smoke-signal",
        "title": _text(fields.title),
        "description": _text(fields.content),
        "starts_at": _iso(fields),
        "href": fields.url if isinstance(fields.url, str) else None,
    }


BUILTIN_LAYOUTS = {
    "card": render_card,
    "post": render_post,
    "image": render_image,
    "link": render_link,
    "links": render_links,
    "list": render_list,
    "profile": render_profile,
    "raw": render_raw,
    "leaflet": render_leaflet,
    "smoke-signal": render_smoke_signal,
}


def register_builtin_layouts(registry: LayoutRegistry) -> LayoutRegistry:
    for name, renderer in BUILTIN_LAYOUTS.items():
        registry.register(name, renderer)
    return registry
