"""
Field builder mixin for restlang.

Fields go into one of the enclosing method's maps, or into the body of a
receiver or the response of an emitter. Repeating the leading symbol nests
a field inside the closest shallower field of the same family.

DSL Syntax:

    :id int64 required: Route parameter, extends the method path
    ?page int default=1: Querystring parameter
    @todo object: Body parameter
    @@title string200 required: Nested inside @todo
    $attachment binary: File attachment
    |done boolean: Response field
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .. import ir
from ..errors import ErrorKind
from ..grammar import DirectiveType
from ..lexer import TokenRecord
from ..scope import Frame, FrameKind, field_frame_kind

logger = logging.getLogger(__name__)

# Method attribute holding each field family
FIELD_MAP_KEYS = {
    DirectiveType.PARAM: "params",
    DirectiveType.QUERY: "query",
    DirectiveType.BODY: "body",
    DirectiveType.FILE: "files",
    DirectiveType.RESPONSE: "response",
}

FIELD_LABELS = {
    DirectiveType.PARAM: "route parameter",
    DirectiveType.QUERY: "querystring parameter",
    DirectiveType.BODY: "body parameter",
    DirectiveType.FILE: "file attachment",
    DirectiveType.RESPONSE: "response field",
}

_FIELD_OWNERS = (FrameKind.METHOD, FrameKind.RECEIVER, FrameKind.EMITTER)


class FieldBuilderMixin:
    """Builder mixin for route, querystring, body, file and response fields."""

    if TYPE_CHECKING:
        stack: Any
        error: Any
        require_scope: Any
        options: Any
        line: str

    def build_field(self, record: TokenRecord) -> None:
        """
        Declare a field and open its scope.

        Raises:
            ParseError: If the name or datatype is missing, or no enclosing
                method, receiver, emitter or parent field accepts it
        """
        label = FIELD_LABELS[record.type]
        family = field_frame_kind(record.type)

        name = record.name
        if not name:
            raise self.error(ErrorKind.MISSING_NAME, f"A name is missing for the {label} '{self.line}'")
        if not record.datatype:
            raise self.error(ErrorKind.MISSING_DATATYPE, f"A datatype is missing for '{name}'")

        if record.nested:
            frame = self.require_scope(
                lambda f: f.kind == family and f.depth < record.depth,
                f"The nested {label} '{name}' does not apply to a {label}.",
            )
            fields = frame.node.field_map()
        else:
            frame = self.require_scope(
                _FIELD_OWNERS,
                f"The {label} '{name}' does not apply to a method.",
            )
            fields = self._owner_fields(frame, record, label)

        parameter = self._store_field(fields, name, record)

        if record.type == DirectiveType.PARAM and frame.kind == FrameKind.METHOD:
            self._extend_path(frame.node, name)

        self.stack.push(Frame(family, parameter, record.depth))
        logger.debug("Declared %s %s (%s)", label, name, parameter.datatype)

    def _owner_fields(self, frame: Frame, record: TokenRecord, label: str) -> ir.FieldMap:
        """Get the field map of a method, receiver or emitter for a directive."""
        if frame.kind == FrameKind.METHOD:
            return frame.node.field_map(FIELD_MAP_KEYS[record.type])
        if frame.kind == FrameKind.RECEIVER and record.type == DirectiveType.BODY:
            return frame.node.body
        if frame.kind == FrameKind.EMITTER and record.type == DirectiveType.RESPONSE:
            return frame.node.response

        raise self.error(
            ErrorKind.INVALID_SCOPE_ATTACHMENT,
            f"The {label} '{record.name}' does not apply to a {frame.kind}.",
        )

    def _store_field(self, fields: ir.FieldMap, name: str, record: TokenRecord) -> ir.Parameter:
        """Create a field, or update an existing one with the same name."""
        key = name.lower()
        parameter = fields.get(key)

        if parameter is None:
            assert record.datatype is not None
            parameter = ir.Parameter(datatype=record.datatype)
            fields[key] = parameter
        elif self.options.strict_duplicates:
            raise self.error(
                ErrorKind.DUPLICATE_NAME,
                f"The field '{key}' is already declared in this scope.",
            )
        else:
            logger.debug("Merging repeated field %s", key)
            parameter.datatype = record.datatype

        parameter.required = record.required
        if record.description:
            parameter.description = record.description
        if "default" in record.settings:
            parameter.default = record.settings["default"]
        if "level" in record.settings:
            parameter.authentication = ir.Authentication(level=record.settings["level"])
        if record.values:
            logger.debug("Ignoring extra tokens %s on line '%s'", record.values, self.line)
        return parameter

    def _extend_path(self, method: ir.Method, name: str) -> None:
        segment = f":{name.lower()}"
        if segment not in method.path.split("/"):
            method.path = f"{method.path}/{segment}"
