# models/fields.py
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# ----------------------------------------------------------------------
#  Confidence enumeration – how much a caller can trust ExtractedFields
# ----------------------------------------------------------------------
class ConfidenceLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ImageRef(BaseModel):
    """An image URL paired with its alt text."""

    url: str
    alt: str = ""


ImageItem = Union[str, ImageRef]


class ExtractedFields(BaseModel):
    """
    Canonical, presentation-ready view of a record.

    Every key is always present.  Optional fields are ``None`` when the
    record did not supply them; ``images`` and ``tags`` are always lists.
    """

    # ------------------------------------------------------------------
    # Core content
    # ------------------------------------------------------------------
    title: Optional[Any] = None
    pronouns: Optional[Any] = None
    content: Optional[Any] = None
    url: Optional[Any] = None

    # ------------------------------------------------------------------
    # Media
    # ------------------------------------------------------------------
    image: Optional[str] = None
    images: List[ImageItem] = Field(default_factory=list)
    banner: Optional[str] = None

    # ------------------------------------------------------------------
    # Metadata & collections
    # ------------------------------------------------------------------
    date: Optional[datetime] = None
    author: Optional[Any] = None
    tags: List[str] = Field(default_factory=list)
    items: Optional[Any] = None

    # ------------------------------------------------------------------
    # Original record reference
    # ------------------------------------------------------------------
    type_id: Optional[str] = Field(default=None, alias="$type")
    uri: Optional[str] = None
    cid: Optional[str] = None
    raw: Any = Field(default=None, alias="$raw")

    model_config = ConfigDict(populate_by_name=True)

    def image_urls(self) -> List[str]:
        """``images`` flattened to bare URLs."""
        return [img.url if isinstance(img, ImageRef) else img for img in self.images]

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class LayoutSuggestion(BaseModel):
    layout: str
    confidence: ConfidenceLevel
