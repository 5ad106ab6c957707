"""
Property builder mixin for restlang.

Properties attach to the enclosing method, or to the resource when no
method is open. Authentication may also override the level of the field
declared just before it.

DSL Syntax:

    .identity id: The todo id
    .parent list listid: The owning list
    .mutable: Changes the todo
    .authentication level=admin
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ir
from ..errors import ErrorKind
from ..lexer import TokenRecord
from ..scope import FIELD_FRAMES, Frame, FrameKind

_HOLDERS = (FrameKind.METHOD, FrameKind.RESOURCE)


class PropertyBuilderMixin:
    """Builder mixin for .identity, .parent, .mutable and .authentication."""

    if TYPE_CHECKING:
        stack: Any
        error: Any
        require_scope: Any
        line: str

    def build_property(self, record: TokenRecord) -> None:
        """
        Reject a property line whose keyword the tokenizer could not resolve.

        Known keywords arrive already typed as identity, parent, mutable or
        authentication.
        """
        raise self.error(
            ErrorKind.UNRECOGNIZED_KEYWORD,
            f"The keyword '{record.name}' was not recognised.",
        )

    def _holder(self) -> Any:
        frame = self.require_scope(
            _HOLDERS,
            f"The property '{self.line}' does not apply to a method or resource.",
        )
        return frame.node

    def build_identity(self, record: TokenRecord) -> None:
        holder = self._holder()
        if not record.values:
            raise self.error(
                ErrorKind.MISSING_NAME,
                f"An identity name is missing for '{self.line}'",
            )

        identity = ir.Identity(name=record.values[0], description=record.description)
        if holder.identity is None:
            holder.identity = []
        holder.identity.append(identity)
        self.stack.push(Frame(FrameKind.PROPERTY, identity))

    def build_parent(self, record: TokenRecord) -> None:
        holder = self._holder()
        if not record.values:
            raise self.error(
                ErrorKind.MISSING_PARENT_COMPONENTS,
                f"A parent resource is missing for '{self.line}'",
            )
        if len(record.values) == 1:
            raise self.error(
                ErrorKind.MISSING_PARENT_COMPONENTS,
                f"A parent id is missing for '{record.values[0]}'",
            )
        if len(record.values) > 2:
            raise self.error(
                ErrorKind.MISSING_PARENT_COMPONENTS,
                f"A parent takes a resource and an id, got '{' '.join(record.values)}'",
            )

        resource, name = record.values
        parent = ir.Parent(resource=resource, name=name, description=record.description)
        if holder.parent is None:
            holder.parent = []
        holder.parent.append(parent)
        self.stack.push(Frame(FrameKind.PROPERTY, parent))

    def build_mutable(self, record: TokenRecord) -> None:
        holder = self._holder()
        holder.mutable = ir.Mutable(description=record.description)
        self.stack.push(Frame(FrameKind.PROPERTY, holder.mutable))

    def build_authentication(self, record: TokenRecord) -> None:
        frame = self.require_scope(
            FIELD_FRAMES | set(_HOLDERS),
            f"The property '{self.line}' does not apply to a field, method or resource.",
        )
        level = record.settings.get("level")
        if not level:
            raise self.error(
                ErrorKind.MISSING_AUTHENTICATION_LEVEL,
                f"An authentication level is missing for '{self.line}'",
            )

        authentication = ir.Authentication(level=level, description=record.description)
        frame.node.authentication = authentication
        self.stack.push(Frame(FrameKind.PROPERTY, authentication))
