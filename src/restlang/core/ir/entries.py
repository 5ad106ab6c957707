"""
Entry types for restlang IR.

A document is an ordered list of entries. Each entry is exactly one of:
- Resource: a REST entity with methods under a URL path
- Receiver: an inbound message with a body field map
- Emitter: an outbound message with a response field map
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from .fields import FieldMap
from .properties import Authentication, Command, Identity, Mutable, Parent


class Method(BaseModel):
    """
    One HTTP or WebDAV operation on a resource.

    Attributes:
        verb: Canonical verb (aliases already resolved)
        name: Directive name as written, lower-cased (e.g. "add" for POST)
        path: Resource path extended with route parameters
        params/query/body/files/response: Field maps, absent until used
    """

    verb: str
    name: str
    path: str
    description: str | None = None
    params: FieldMap | None = None
    query: FieldMap | None = None
    body: FieldMap | None = None
    files: FieldMap | None = None
    response: FieldMap | None = None
    identity: list[Identity] | None = None
    parent: list[Parent] | None = None
    mutable: Mutable | None = None
    authentication: Authentication | None = None
    command: Command | None = None

    def field_map(self, key: str) -> FieldMap:
        """Get one of the method's field maps, creating it on first use."""
        fields = getattr(self, key)
        if fields is None:
            fields = {}
            setattr(self, key, fields)
        return fields


class Resource(BaseModel):
    """A named REST entity exposing methods under a URL path."""

    kind: Literal["resource"] = "resource"
    name: str
    description: str | None = None
    path: str
    methods: list[Method] = Field(default_factory=list)
    identity: list[Identity] | None = None
    parent: list[Parent] | None = None
    mutable: Mutable | None = None
    authentication: Authentication | None = None

    def find_methods(self, verb: str) -> list[Method]:
        """Get all methods declared with a verb."""
        return [m for m in self.methods if m.verb == verb.upper()]


class Receiver(BaseModel):
    """An inbound (client to server) message definition."""

    kind: Literal["receiver"] = "receiver"
    name: str
    description: str | None = None
    body: FieldMap = Field(default_factory=dict)


class Emitter(BaseModel):
    """An outbound (server to client) message definition."""

    kind: Literal["emitter"] = "emitter"
    name: str
    description: str | None = None
    response: FieldMap = Field(default_factory=dict)


Entry = Annotated[Resource | Receiver | Emitter, Field(discriminator="kind")]
