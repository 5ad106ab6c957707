"""
restlang Document Builder Package.

The builder is composed of mixins, one per family of directives:

- EntryBuilderMixin: resources, receivers, emitters and descriptions
- MethodBuilderMixin: methods and command references
- PropertyBuilderMixin: identity, parent, mutable and authentication
- FieldBuilderMixin: route, querystring, body, file and response fields

Usage:
    from restlang.core.builder_impl import parse_restlang

    document = parse_restlang(text)
"""

from __future__ import annotations

import logging
from pathlib import Path

from .. import ir
from ..errors import ErrorKind
from ..grammar import FIELD_TYPES, DirectiveType
from ..lexer import TokenRecord, tokenize
from ..manifest import ParserOptions
from ..normalizer import split_lines
from .base import BaseBuilder
from .entries import EntryBuilderMixin
from .fields import FieldBuilderMixin
from .methods import MethodBuilderMixin
from .properties import PropertyBuilderMixin

logger = logging.getLogger(__name__)


class DocumentBuilder(
    BaseBuilder,
    EntryBuilderMixin,
    MethodBuilderMixin,
    PropertyBuilderMixin,
    FieldBuilderMixin,
):
    """
    Complete restlang document builder.

    Tokenizes each line and hands the record to the handler for its
    directive type. The first violation aborts the build.
    """

    def build(self) -> ir.Document:
        """
        Build the document from every line.

        Returns:
            Document with all entries in source order

        Raises:
            ParseError: On the first invalid line
        """
        for index, line in enumerate(self.lines):
            self.index = index
            self.line = line
            self.dispatch(tokenize(line))

        logger.debug("Built document with %d entries", len(self.document))
        return self.document

    def dispatch(self, record: TokenRecord) -> None:
        """Apply one token record to the document."""
        if record.error is not None:
            raise self.error(record.error.kind, record.error.message)

        directive = record.type

        if directive == DirectiveType.RESOURCE:
            self.build_resource(record)
        elif directive == DirectiveType.RECEIVER:
            self.build_receiver(record)
        elif directive == DirectiveType.EMITTER:
            self.build_emitter(record)
        elif directive == DirectiveType.METHOD:
            self.build_method(record)
        elif directive == DirectiveType.COMMAND:
            self.build_command(record)
        elif directive == DirectiveType.PROPERTY:
            self.build_property(record)
        elif directive == DirectiveType.IDENTITY:
            self.build_identity(record)
        elif directive == DirectiveType.PARENT:
            self.build_parent(record)
        elif directive == DirectiveType.MUTABLE:
            self.build_mutable(record)
        elif directive == DirectiveType.AUTHENTICATION:
            self.build_authentication(record)
        elif directive in FIELD_TYPES:
            self.build_field(record)
        elif directive == DirectiveType.DESCRIPTION:
            self.build_description(record)
        else:
            raise self.error(
                ErrorKind.UNRECOGNIZED_KEYWORD,
                f"Unexpected directive '{directive}'",
            )


def parse_restlang(
    text: str,
    file: Path | None = None,
    options: ParserOptions | None = None,
) -> ir.Document:
    """
    Compile restlang source text into a document.

    Args:
        text: Raw source text
        file: Source file path (for error reporting)
        options: Parser options

    Returns:
        The compiled document

    Raises:
        ParseError: If the source is empty or any line is invalid
    """
    lines = split_lines(text)
    builder = DocumentBuilder(lines, file, options)
    return builder.build()


__all__ = ["DocumentBuilder", "parse_restlang"]
