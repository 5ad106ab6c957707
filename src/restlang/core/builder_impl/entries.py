"""
Entry builder mixin for restlang.

Builds the top-level entries and attaches free description text.

DSL Syntax:

    /todo: The todo list
    //items: Items of a todo list (path /todo/items)
    >message: Inbound chat message
    <notice: Outbound notice
    Any line without a directive symbol extends the current description.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .. import ir
from ..errors import ErrorKind
from ..lexer import TokenRecord
from ..scope import Frame, FrameKind

logger = logging.getLogger(__name__)


class EntryBuilderMixin:
    """Builder mixin for resources, receivers, emitters and descriptions."""

    if TYPE_CHECKING:
        document: ir.Document
        stack: Any
        error: Any
        require_scope: Any
        line: str

    def build_resource(self, record: TokenRecord) -> None:
        """
        Open a resource.

        A plain resource closes every open scope. A nested resource (repeated
        leading slashes) extends the path of the enclosing resource one level
        shallower and keeps that resource open beneath it.
        """
        name = record.name
        assert name is not None

        prefix = ""
        if record.nested:
            enclosing = self.require_scope(
                lambda f: f.kind == FrameKind.RESOURCE and f.depth == record.depth - 1,
                f"The nested resource '{name}' does not apply to a resource.",
            )
            prefix = enclosing.node.path

        resource = ir.Resource(name=name, description=record.description, path=f"{prefix}/{name}")
        if record.mutable:
            resource.mutable = ir.Mutable()
        if "level" in record.settings:
            resource.authentication = ir.Authentication(level=record.settings["level"])

        self.document.entries.append(resource)
        frame = Frame(FrameKind.RESOURCE, resource, record.depth)
        if record.nested:
            self.stack.push(frame)
        else:
            self.stack.reset(frame)
        logger.debug("Opened resource %s", resource.path)

    def build_receiver(self, record: TokenRecord) -> None:
        assert record.name is not None
        receiver = ir.Receiver(name=record.name, description=record.description)
        self.document.entries.append(receiver)
        self.stack.reset(Frame(FrameKind.RECEIVER, receiver))
        logger.debug("Opened receiver %s", receiver.name)

    def build_emitter(self, record: TokenRecord) -> None:
        assert record.name is not None
        emitter = ir.Emitter(name=record.name, description=record.description)
        self.document.entries.append(emitter)
        self.stack.reset(Frame(FrameKind.EMITTER, emitter))
        logger.debug("Opened emitter %s", emitter.name)

    def build_description(self, record: TokenRecord) -> None:
        """Append free text to the description of the innermost scope."""
        frame = self.stack.top
        if frame is None:
            raise self.error(
                ErrorKind.INVALID_SCOPE_ATTACHMENT,
                f"The description '{self.line}' does not apply to a resource, "
                "receiver or emitter.",
            )

        node = frame.node
        text = record.name or ""
        node.description = f"{node.description} {text}" if node.description else text
