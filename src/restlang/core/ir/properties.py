"""
Property types for restlang IR.

Identity, parent, mutable and authentication markers attach to resources
and methods; commands attach to methods only.
"""

from __future__ import annotations

from pydantic import BaseModel


class Identity(BaseModel):
    """
    A field marking the natural key of a resource or method.

    Example:
        .identity id: The todo id
    """

    name: str
    description: str | None = None


class Parent(BaseModel):
    """
    A foreign-key relationship to another resource's identity.

    Example:
        .parent list listid: The owning list
    """

    resource: str
    name: str
    description: str | None = None


class Mutable(BaseModel):
    """Marks that invoking a method changes server-side state."""

    unsafe: bool = True
    description: str | None = None


class Authentication(BaseModel):
    """Authentication level required to reach a resource, method or field."""

    level: str
    description: str | None = None


class Command(BaseModel):
    """
    Reference to an external handler for a method.

    Attributes:
        reference: Text between the braces, trimmed
        file: Part before the colon for file:handler references
        handler: Part after the colon for file:handler references
    """

    reference: str
    file: str | None = None
    handler: str | None = None
    description: str | None = None
