# services/extractor/paths.py
"""
Record navigation helpers: payload access, dotted-path lookup, author
identifier parsing and blob URL templating.  Nothing here raises except
``format_blob_url``, which raises ``IncompleteBlobReference``.
"""

import re
from typing import Any, List, Mapping, Optional, Sequence

from core.exceptions import IncompleteBlobReference

_INDEXED_KEY = re.compile(r"^(\w+)\[(\d+)\]$")


def is_present(value: Any) -> bool:
    """A value counts as present unless it is ``None`` or the empty string."""
    return value is not None and not (isinstance(value, str) and value == "")


def record_value(record: Mapping[str, Any]) -> Mapping[str, Any]:
    """The record's ``value`` payload, or the record itself when it has none."""
    value = record.get("value")
    if isinstance(value, Mapping):
        return value
    return record


def lexicon_type(record: Mapping[str, Any]) -> Optional[str]:
    """Lexicon type: ``value.$type``, then ``value.typeId``, then a top-level ``typeId``."""
    value = record_value(record)
    for type_id in (value.get("$type"), value.get("typeId"), record.get("typeId")):
        if isinstance(type_id, str) and type_id:
            return type_id
    return None


def uri_parts(uri: Any) -> List[str]:
    """``at://did/collection/rkey`` → ``['at:', '', 'did', 'collection', 'rkey']``."""
    if not isinstance(uri, str):
        return []
    return uri.split("/")


def author_did(record: Mapping[str, Any]) -> Optional[str]:
    """Author identifier from the record URI, falling back to a top-level ``did``."""
    parts = uri_parts(record.get("uri"))
    if len(parts) > 2 and parts[2]:
        return parts[2]
    did = record.get("did")
    return did if isinstance(did, str) and did else None


def _step(current: Any, key: str) -> Any:
    if isinstance(current, Mapping):
        return current.get(key)
    if isinstance(current, Sequence) and not isinstance(current, str) and key.isdigit():
        index = int(key)
        return current[index] if index < len(current) else None
    return None


def get_nested_value(obj: Any, path: str) -> Any:
    """
    Resolve ``a.b`` / ``a.b[2]`` style paths.  Missing segments and type
    mismatches resolve to ``None``.
    """
    current = obj
    for key in path.split("."):
        if current is None:
            return None
        match = _INDEXED_KEY.match(key)
        if match:
            current = _step(_step(current, match.group(1)), match.group(2))
        else:
            current = _step(current, key)
    return current


# ----------------------------------------------------------------------
# Blob references
# ----------------------------------------------------------------------
def is_blob_ref(value: Any) -> bool:
    return isinstance(value, Mapping) and (value.get("$type") == "blob" or bool(value.get("ref")))


def blob_cid(blob: Mapping[str, Any]) -> Optional[str]:
    """Content hash of a blob: ``ref.$link``, ``ref.hash``, a plain ``ref`` string, or ``cid``."""
    ref = blob.get("ref")
    if isinstance(ref, Mapping):
        for key in ("$link", "hash"):
            if isinstance(ref.get(key), str) and ref[key]:
                return ref[key]
    elif isinstance(ref, str) and ref:
        return ref
    cid = blob.get("cid")
    return cid if isinstance(cid, str) and cid else None


def format_blob_url(record: Mapping[str, Any], blob: Mapping[str, Any], template: str) -> str:
    """Template a content-delivery URL for ``blob``; no request is made."""
    cid = blob_cid(blob)
    if not cid:
        raise IncompleteBlobReference("no content hash")
    did = author_did(record)
    if not did:
        raise IncompleteBlobReference("no author identifier on the record")
    return template.format(did=did, cid=cid)
