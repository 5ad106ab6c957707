"""
Field types for restlang IR.

Parameters describe route, querystring, body, file and response fields.
Fields declared with repeated leading symbols nest inside their parent
field, which lets object and array payloads be described as trees.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator

from ..grammar import is_datatype
from .properties import Authentication


class Parameter(BaseModel):
    """
    A single field of a method, receiver or emitter.

    Examples:
        - :id int64 required: Parameter(datatype="int64", required=True)
        - ?page int default=1: Parameter(datatype="int", default="1")
        - @@street string40: nested Parameter(datatype="string40")
    """

    datatype: str
    required: bool = False
    description: str | None = None
    default: str | None = None
    authentication: Authentication | None = None
    fields: dict[str, Parameter] | None = None

    @field_validator("datatype")
    @classmethod
    def validate_datatype(cls, v: str) -> str:
        """Ensure the datatype is part of the vocabulary."""
        if not is_datatype(v):
            raise ValueError(f"'{v}' is not a recognized datatype")
        return v

    def field_map(self) -> dict[str, Parameter]:
        """Get the nested field map, creating it on first use."""
        if self.fields is None:
            self.fields = {}
        return self.fields


# Field name (lower-cased) -> Parameter, in declaration order
FieldMap = dict[str, Parameter]

Parameter.model_rebuild()
