"""
Method builder mixin for restlang.

DSL Syntax:

    #GET: Fetch a todo
    #ADD mutable: Create a todo (alias of POST)
    {handlers/todo.js:create}
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .. import ir
from ..errors import ErrorKind
from ..lexer import TokenRecord
from ..scope import Frame, FrameKind

logger = logging.getLogger(__name__)


class MethodBuilderMixin:
    """Builder mixin for methods and their external command references."""

    if TYPE_CHECKING:
        stack: Any
        error: Any
        require_scope: Any
        line: str

    def build_method(self, record: TokenRecord) -> None:
        """Open a method on the enclosing resource."""
        assert record.name is not None and record.verb is not None

        frame = self.require_scope(
            [FrameKind.RESOURCE],
            f"The method '{record.name.upper()}' does not apply to a resource.",
        )
        resource: ir.Resource = frame.node

        method = ir.Method(
            verb=record.verb,
            name=record.name,
            path=resource.path,
            description=record.description,
        )
        if record.mutable:
            method.mutable = ir.Mutable()
        if "level" in record.settings:
            method.authentication = ir.Authentication(level=record.settings["level"])

        resource.methods.append(method)
        self.stack.push(Frame(FrameKind.METHOD, method))
        logger.debug("Opened method %s %s", method.verb, method.path)

    def build_command(self, record: TokenRecord) -> None:
        """Attach an external handler reference to the enclosing method."""
        frame = self.require_scope(
            [FrameKind.METHOD],
            f"The command '{self.line}' does not apply to a method.",
        )

        reference = record.name
        assert reference is not None

        file = handler = None
        if ":" in reference:
            parts = [part.strip() for part in reference.split(":")]
            if len(parts) != 2 or not all(parts):
                raise self.error(
                    ErrorKind.MALFORMED_COMMAND_REFERENCE,
                    f"The command format '{self.line}' was not recognised.",
                )
            file, handler = parts

        frame.node.command = ir.Command(
            reference=reference,
            file=file,
            handler=handler,
            description=record.description,
        )
