# core/config.py
"""Runtime settings, read from ``EXTRACTOR_*`` environment variables."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_REPO_ROOT = Path(__file__).resolve().parents[1]

DEFAULT_CDN_URL_TEMPLATE = "https://cdn.bsky.app/img/feed_thumbnail/plain/{did}/{cid}@jpeg"


class Settings(BaseSettings):
    """
    Settings for the extraction engine.

    ``cdn_url_template`` turns an author identifier and a blob content hash
    into a fetchable media URL.  It must contain the ``{did}`` and ``{cid}``
    placeholders.
    """

    lexicon_config_path: Path = Path("configs/lexicons.yaml")
    cdn_url_template: str = DEFAULT_CDN_URL_TEMPLATE
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="EXTRACTOR_", extra="ignore", frozen=True)

    @field_validator("lexicon_config_path")
    @classmethod
    def _resolve_path(cls, path: Path) -> Path:
        if path.is_absolute():
            return path
        return (_REPO_ROOT / path).resolve()

    @field_validator("cdn_url_template")
    @classmethod
    def _check_template(cls, template: str) -> str:
        for placeholder in ("{did}", "{cid}"):
            if placeholder not in template:
                raise ValueError(f"cdn_url_template is missing {placeholder}")
        return template


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
