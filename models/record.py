# models/record.py
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Record(BaseModel):
    """
    A single stored record as delivered by a record source.

    ``value`` is the lexicon-typed payload; its ``$type`` key names the
    lexicon (``typeId`` is accepted too, in the payload or at the top
    level).  ``uri`` has the shape ``at://{did}/{collection}/{rkey}``.
    Unknown top-level keys are kept, because heuristic extraction looks at
    them too.
    """

    value: Optional[Dict[str, Any]] = None
    uri: Optional[str] = None
    cid: Optional[str] = None
    did: Optional[str] = None
    type_id: Optional[str] = Field(
        default=None,
        alias="typeId",
        description="Lexicon type; copied into value['$type'] when the payload names none",
    )

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    def as_mapping(self) -> Dict[str, Any]:
        """Plain-dict view of the record, the shape the extraction engine reads."""
        data = self.model_dump(exclude_none=True, exclude={"type_id"})
        if self.type_id:
            value = dict(data.get("value") or {})
            if "$type" not in value and "typeId" not in value:
                value["$type"] = self.type_id
            data["value"] = value
        return data


RecordLike = Union[Record, Mapping[str, Any]]


def coerce_record(record: Any) -> Mapping[str, Any]:
    """Accept a ``Record`` or any mapping; everything else reads as an empty record."""
    if isinstance(record, Record):
        return record.as_mapping()
    if isinstance(record, Mapping):
        return record
    return {}
