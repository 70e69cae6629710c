# tests/conftest.py
import pytest

from models.lexicon import CustomExtractor, ExactName, LexiconRegistry, LexiconSchema, NameCandidates
from services.extractor.config_loader import load_registry
from services.extractor.field_extractor import FieldExtractor


@pytest.fixture(scope="session")
def registry() -> LexiconRegistry:
    """The registry shipped in ``configs/lexicons.yaml``."""
    return load_registry()


@pytest.fixture
def extractor(registry) -> FieldExtractor:
    return FieldExtractor(registry)


def _boom(record):
    raise RuntimeError("extractor exploded")


@pytest.fixture
def custom_registry() -> LexiconRegistry:
    """A small hand-built registry, independent of the YAML file."""
    return LexiconRegistry(
        schemas={
            "post-like-A": LexiconSchema(
                content=ExactName(name="text"),
                date=ExactName(name="createdAt"),
            ),
            "test.headline": LexiconSchema(
                title=NameCandidates(names=("headline", "caption")),
                confidence="medium",
            ),
            "test.broken": LexiconSchema(
                title=CustomExtractor(extractor="boom", func=_boom),
                image=CustomExtractor(extractor="boom", func=_boom),
            ),
            "test.computed": LexiconSchema(
                title=CustomExtractor(extractor="computed", func=lambda r: "Computed title"),
                content=ExactName(name="meta.summary"),
            ),
            "test.gallery": LexiconSchema(preferred_layout="gallery"),
        },
        known_lexicons=frozenset({"test.known"}),
    )
