"""
Boundary models for Resend API responses.

Raw JSON is narrowed into these models as soon as it leaves the HTTP
transport, so the pagination core only ever sees typed values.
"""
from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

NARROWED_FIELDS = ("object", "data")


def _narrow_str(v: Any) -> Optional[str]:
    """Keep strings, render numbers as text, drop anything else."""
    if isinstance(v, str):
        return v
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(v)
    return None


class ListResponse(BaseModel):
    """
    A page from a Resend list endpoint: ``{object, data, has_more}``.

    Unknown provider fields are kept so a reshaped page still looks like
    the raw response it came from.
    """
    model_config = ConfigDict(extra="allow")

    object: Optional[str] = None
    data: Optional[List[Any]] = None
    has_more: bool = False

    # Raw values of fields that were narrowed to None, restored by to_dict()
    _narrowed: Dict[str, Any] = PrivateAttr(default_factory=dict)

    @field_validator("object", mode="before")
    @classmethod
    def narrow_object(cls, v: Any) -> Optional[str]:
        return v if isinstance(v, str) else None

    @field_validator("data", mode="before")
    @classmethod
    def narrow_data(cls, v: Any) -> Optional[List[Any]]:
        """Anything other than a list is treated as missing."""
        return v if isinstance(v, list) else None

    @field_validator("has_more", mode="before")
    @classmethod
    def coerce_has_more(cls, v: Any) -> bool:
        return bool(v)

    @property
    def items(self) -> List[Any]:
        return self.data if self.data is not None else []

    def to_dict(self) -> Dict[str, Any]:
        """Return the fields the provider sent, plus any the fetcher rewrote."""
        dumped = self.model_dump(exclude_unset=True)
        for name, raw in self._narrowed.items():
            if getattr(self, name) is None:
                dumped[name] = raw
        return dumped


class TemplateVariable(BaseModel):
    """A variable declared on a Resend template."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    key: Optional[str] = None
    type: Optional[str] = None
    fallback_value: Any = Field(default=None, alias="fallbackValue")

    @field_validator("key", "type", mode="before")
    @classmethod
    def narrow_text(cls, v: Any) -> Optional[str]:
        return _narrow_str(v)


def parse_list_response(raw: Any) -> ListResponse:
    """Narrow a decoded JSON body into a ListResponse; never raises."""
    if not isinstance(raw, Mapping):
        return ListResponse()
    body = dict(raw)
    response = ListResponse.model_validate(body)
    for name in NARROWED_FIELDS:
        if name in body and body[name] is not None and getattr(response, name) is None:
            response._narrowed[name] = body[name]
    return response


def parse_template_variables(raw: Any) -> List[TemplateVariable]:
    """Extract the declared variables from a template detail response."""
    if not isinstance(raw, Mapping):
        return []
    variables = raw.get("variables") or []
    if not isinstance(variables, list):
        return []
    return [TemplateVariable.model_validate(dict(v)) for v in variables if isinstance(v, Mapping)]


def record_id(record: Any) -> Optional[str]:
    """Return the record's ``id`` if it is a usable cursor, else None."""
    if not isinstance(record, Mapping):
        return None
    value = record.get("id")
    if isinstance(value, str) and value:
        return value
    return None
