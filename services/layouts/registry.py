# services/layouts/registry.py
"""
Name-keyed layout renderers.

A renderer takes ``(fields, record)`` and returns a plain presentation
payload.  ``get`` never fails: unknown names resolve to the ``card``
renderer, so any layout name coming out of ``suggest_layout`` or a user
override is safe to render.
"""

from typing import Any, Callable, Dict, List, Mapping, Optional

from loguru import logger

from models.fields import ExtractedFields
from models.record import coerce_record
from services.extractor import get_default_extractor
from services.extractor.field_extractor import FieldExtractor

Renderer = Callable[[ExtractedFields, Mapping[str, Any]], Dict[str, Any]]

FALLBACK_LAYOUT = "card"


class LayoutRegistry:
    def __init__(self) -> None:
        self._layouts: Dict[str, Renderer] = {}

    def register(self, name: str, renderer: Renderer) -> None:
        self._layouts[name] = renderer

    def get(self, name: Optional[str]) -> Renderer:
        renderer = self._layouts.get(name) if name else None
        if renderer is None:
            if name and name != FALLBACK_LAYOUT:
                logger.debug(f"Unknown layout '{name}', using '{FALLBACK_LAYOUT}'")
            renderer = self._layouts[FALLBACK_LAYOUT]
        return renderer

    def available(self) -> List[str]:
        return list(self._layouts)

    def render(
        self,
        record: Any,
        name: str = FALLBACK_LAYOUT,
        extractor: Optional[FieldExtractor] = None,
    ) -> Dict[str, Any]:
        """Extract ``record`` and render it with layout ``name``."""
        data = coerce_record(record)
        fields = (extractor or get_default_extractor()).extract_fields(data)
        return self.render_fields(fields, data, name)

    def render_fields(
        self,
        fields: ExtractedFields,
        record: Any,
        name: str = FALLBACK_LAYOUT,
    ) -> Dict[str, Any]:
        """Render already-extracted ``fields`` with layout ``name``."""
        return self.get(name)(fields, coerce_record(record))
