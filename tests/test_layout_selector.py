# tests/test_layout_selector.py
import pytest

from models.fields import ConfidenceLevel
from services.extractor import extract_fields, suggest_layout, suggest_layout_for_fields


def test_image_layout_for_short_captioned_image(registry):
    record = {"value": {"$type": "test.type", "image": "https://example.com/img.jpg", "text": "Short text"}}
    assert suggest_layout(record, registry=registry).layout == "image"


def test_image_rule_needs_short_content(registry):
    record = {"value": {"image": "https://example.com/img.jpg", "text": "x" * 150}}
    assert suggest_layout(record, registry=registry).layout == "card"


def test_images_alone_pick_image_layout(registry):
    assert suggest_layout({"value": {"images": ["a.jpg"]}}, registry=registry).layout == "image"


def test_link_layout(registry):
    record = {"value": {"$type": "test.type", "url": "https://example.com", "text": "Short description"}}
    assert suggest_layout(record, registry=registry).layout == "link"


def test_long_content_with_url_is_not_a_link(registry):
    record = {"value": {"url": "https://example.com", "text": "y" * 600}}
    assert suggest_layout(record, registry=registry).layout == "post"


def test_links_layout_for_link_like_items(registry):
    record = {"value": {"items": [{"href": "https://a.example"}, {"href": "https://b.example"}]}}
    assert suggest_layout(record, registry=registry).layout == "links"


def test_list_layout_for_plain_items(registry):
    record = {"value": {"entries": [{"name": "one"}, {"name": "two"}]}}
    assert suggest_layout(record, registry=registry).layout == "list"


def test_post_layout_for_long_content(registry):
    record = {"value": {"content": "x" * 600}}
    assert suggest_layout(record, registry=registry).layout == "post"


@pytest.mark.parametrize("content", ["short", "z" * 500])
def test_card_is_the_default(registry, content):
    assert suggest_layout({"value": {"content": content}}, registry=registry).layout == "card"


def test_preferred_layout_short_circuits(registry):
    record = {
        "value": {
            "$type": "pub.leaflet.document",
            "title": "Article",
            "pages": [],
            "image": "https://example.com/cover.jpg",
            "url": "https://example.com",
        }
    }

    suggestion = suggest_layout(record, registry=registry)

    assert suggestion.layout == "leaflet"
    assert suggestion.confidence == ConfidenceLevel.HIGH


def test_custom_preferred_layout_is_passed_through(custom_registry):
    record = {"value": {"$type": "test.gallery", "content": "x" * 1000}}
    assert suggest_layout(record, registry=custom_registry).layout == "gallery"


def test_suggestion_carries_confidence(registry):
    suggestion = suggest_layout({"value": {"$type": "unknown.type", "title": "T"}}, registry=registry)
    assert suggestion.confidence == ConfidenceLevel.LOW


def test_suggestion_from_extracted_fields(custom_registry):
    record = {"typeId": "test.gallery", "value": {"title": "Pictures"}}
    fields = extract_fields(record, registry=custom_registry)

    suggestion = suggest_layout_for_fields(fields, custom_registry)

    assert suggestion == suggest_layout(record, registry=custom_registry)
    assert suggestion.layout == "gallery"
    assert suggestion.confidence == ConfidenceLevel.HIGH
