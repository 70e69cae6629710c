# tests/test_confidence.py
import pytest

from models.fields import ConfidenceLevel, ExtractedFields
from services.extractor import get_extraction_confidence
from services.extractor.confidence import meaningful_field_count, score_confidence


def test_schema_override_wins(custom_registry):
    fields = ExtractedFields(type_id="test.headline", title="a", content="b", url="c")
    assert score_confidence(custom_registry, fields) == ConfidenceLevel.MEDIUM


def test_schema_without_override_is_high_even_when_empty(custom_registry):
    assert score_confidence(custom_registry, ExtractedFields(type_id="post-like-A")) == ConfidenceLevel.HIGH


@pytest.mark.parametrize(
    "type_id,kwargs,expected",
    [
        ("test.known", {"title": "t", "content": "c", "url": "u"}, ConfidenceLevel.HIGH),
        ("test.known", {"title": "t", "tags": ["x"]}, ConfidenceLevel.MEDIUM),
        ("test.known", {"title": "t"}, ConfidenceLevel.LOW),
        ("test.unknown", {"title": "t", "content": "c", "images": ["i.png"]}, ConfidenceLevel.MEDIUM),
        ("test.unknown", {"title": "t", "content": "c"}, ConfidenceLevel.LOW),
        (None, {}, ConfidenceLevel.LOW),
    ],
)
def test_heuristic_levels(custom_registry, type_id, kwargs, expected):
    fields = ExtractedFields(type_id=type_id, **kwargs)
    assert score_confidence(custom_registry, fields) == expected


def test_empty_lists_do_not_count():
    fields = ExtractedFields(title="t", images=[], tags=[], items=["not counted"])
    assert meaningful_field_count(fields) == 1


def test_registered_types_never_score_low(registry):
    """Every schema in the shipped registry scores at least medium, even for an empty record."""
    for type_id in registry.schemas:
        confidence = get_extraction_confidence({"value": {"$type": type_id}}, registry=registry)
        assert confidence != ConfidenceLevel.LOW, type_id


def test_known_heuristic_type_scores_high(registry):
    record = {
        "value": {
            "$type": "garden.spores.site.content",
            "title": "My Content",
            "content": "Content body",
            "createdAt": "2024-12-20T10:00:00Z",
        }
    }
    assert get_extraction_confidence(record, registry=registry) == ConfidenceLevel.HIGH


def test_unknown_type_with_one_field_is_low(registry):
    record = {"value": {"$type": "unknown.type", "title": "Test"}}
    assert get_extraction_confidence(record, registry=registry) == ConfidenceLevel.LOW
