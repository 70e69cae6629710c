# tests/test_normalizers.py
from datetime import datetime, timedelta, timezone

import pytest

from core.config import DEFAULT_CDN_URL_TEMPLATE
from core.exceptions import IncompleteBlobReference, MalformedDate
from models.fields import ImageRef
from services.extractor.normalizers import normalize_date, normalize_images, normalize_tags, resolve_media
from services.extractor.paths import author_did, blob_cid, get_nested_value

RECORD = {"uri": "at://did:plc:abc/app.bsky.feed.post/1"}


# -------------------------------------------------------------------
# 1️⃣  Media references
# -------------------------------------------------------------------
@pytest.mark.parametrize(
    "value,expected",
    [
        ("https://x/plain.png", "https://x/plain.png"),
        ({"url": "https://x/url.png"}, "https://x/url.png"),
        ({"thumb": "https://x/thumb.png"}, "https://x/thumb.png"),
        ({"fullsize": "https://x/full.png"}, "https://x/full.png"),
        (
            {"$type": "blob", "ref": {"$link": "bafy1"}},
            "https://cdn.bsky.app/img/feed_thumbnail/plain/did:plc:abc/bafy1@jpeg",
        ),
        ({"ref": "bafy2"}, "https://cdn.bsky.app/img/feed_thumbnail/plain/did:plc:abc/bafy2@jpeg"),
        ({"width": 10}, None),
        (42, None),
        ("", None),
    ],
)
def test_resolve_media(value, expected):
    assert resolve_media(value, RECORD, DEFAULT_CDN_URL_TEMPLATE) == expected


def test_blob_without_hash_raises():
    with pytest.raises(IncompleteBlobReference):
        resolve_media({"$type": "blob"}, RECORD, DEFAULT_CDN_URL_TEMPLATE)


def test_blob_without_author_raises():
    with pytest.raises(IncompleteBlobReference):
        resolve_media({"ref": {"$link": "bafy"}}, {}, DEFAULT_CDN_URL_TEMPLATE)


def test_author_falls_back_to_top_level_did():
    assert author_did({"did": "did:plc:zzz"}) == "did:plc:zzz"
    assert author_did({"uri": "at://did:plc:abc/x/y", "did": "did:plc:zzz"}) == "did:plc:abc"


def test_blob_cid_sources():
    assert blob_cid({"ref": {"$link": "a"}}) == "a"
    assert blob_cid({"ref": {"hash": "b"}}) == "b"
    assert blob_cid({"cid": "c"}) == "c"
    assert blob_cid({"ref": {}}) is None


# -------------------------------------------------------------------
# 2️⃣  Image lists
# -------------------------------------------------------------------
def test_images_keep_alt_only_when_given():
    images = normalize_images(
        ["a.jpg", {"url": "b.jpg", "alt": "Bee"}, {"thumb": "c.jpg"}],
        RECORD,
        DEFAULT_CDN_URL_TEMPLATE,
    )
    assert images == ["a.jpg", ImageRef(url="b.jpg", alt="Bee"), "c.jpg"]


def test_images_drop_unresolvable_items():
    images = normalize_images(
        [{"$type": "blob"}, None, "ok.jpg"], RECORD, DEFAULT_CDN_URL_TEMPLATE
    )
    assert images == ["ok.jpg"]


@pytest.mark.parametrize("value", [[], "a.jpg", {"url": "x"}, [None, {}]])
def test_images_reject_non_lists_and_empty_results(value):
    assert normalize_images(value, RECORD, DEFAULT_CDN_URL_TEMPLATE) is None


# -------------------------------------------------------------------
# 3️⃣  Dates
# -------------------------------------------------------------------
@pytest.mark.parametrize(
    "value",
    [
        "2024-12-20T10:00:00Z",
        "2024-12-20T10:00:00.000Z",
        "2024-12-20T11:00:00+01:00",
        1734688800000,
        datetime(2024, 12, 20, 10, tzinfo=timezone.utc),
    ],
)
def test_normalize_date_variants(value):
    assert normalize_date(value) == datetime(2024, 12, 20, 10, tzinfo=timezone.utc)


def test_naive_dates_are_utc():
    parsed = normalize_date("2024-12-20")
    assert parsed.utcoffset() == timedelta(0)
    assert parsed.date().isoformat() == "2024-12-20"


@pytest.mark.parametrize(
    "value, microsecond",
    [
        ("2024-12-20T10:00:00.12345Z", 123450),
        ("2024-12-20T10:00:00.1Z", 100000),
        ("2024-12-20T10:00:00.123456789Z", 123456),
    ],
)
def test_odd_fraction_widths_parse(value, microsecond):
    parsed = normalize_date(value)
    assert parsed == datetime(2024, 12, 20, 10, 0, 0, microsecond, tzinfo=timezone.utc)


@pytest.mark.parametrize("value", ["invalid-date", "", True, None, {"at": 1}, 10 ** 30])
def test_malformed_dates_raise(value):
    with pytest.raises(MalformedDate):
        normalize_date(value)


# -------------------------------------------------------------------
# 4️⃣  Tags
# -------------------------------------------------------------------
def test_tags_from_mixed_shapes():
    value = ["plain", {"name": "named"}, {"tag": "tagged"}, {"val": "valued"}, {}, "", "  ", None, 3]
    assert normalize_tags(value) == ["plain", "named", "tagged", "valued"]


def test_tags_require_a_list():
    assert normalize_tags("a,b") is None


# -------------------------------------------------------------------
# 5️⃣  Path lookup
# -------------------------------------------------------------------
@pytest.mark.parametrize(
    "path,expected",
    [
        ("a.b", 1),
        ("a.list[1]", "second"),
        ("a.list.0", "first"),
        ("a.list[9]", None),
        ("a.missing.deeper", None),
        ("a.b.c", None),
    ],
)
def test_get_nested_value(path, expected):
    obj = {"a": {"b": 1, "list": ["first", "second"]}}
    assert get_nested_value(obj, path) == expected
