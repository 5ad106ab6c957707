"""
Grammar tables for the restlang DSL.

Every table here is immutable and shared by all parse calls: directive
symbols, datatype vocabulary, verbs and aliases, and the legality of
keywords and settings per directive type.
"""

from __future__ import annotations

import re
from enum import StrEnum
from types import MappingProxyType


class DirectiveType(StrEnum):
    """Closed set of directive types a line can resolve to."""

    RESOURCE = "resource"
    RECEIVER = "receiver"
    EMITTER = "emitter"
    METHOD = "method"
    PARAM = "param"
    QUERY = "query"
    BODY = "body"
    FILE = "file"
    RESPONSE = "response"
    COMMAND = "command"
    PROPERTY = "property"
    # Property keywords resolve to one of these
    IDENTITY = "identity"
    PARENT = "parent"
    MUTABLE = "mutable"
    AUTHENTICATION = "authentication"
    DESCRIPTION = "description"


SYMBOLS: MappingProxyType[str, DirectiveType] = MappingProxyType(
    {
        "/": DirectiveType.RESOURCE,
        "#": DirectiveType.METHOD,
        ":": DirectiveType.PARAM,
        "?": DirectiveType.QUERY,
        "@": DirectiveType.BODY,
        "$": DirectiveType.FILE,
        "|": DirectiveType.RESPONSE,
        "{": DirectiveType.COMMAND,
        ".": DirectiveType.PROPERTY,
        ">": DirectiveType.RECEIVER,
        "<": DirectiveType.EMITTER,
    }
)

# Directives that may repeat their leading symbol to declare nesting
NESTABLE = frozenset(
    {
        DirectiveType.RESOURCE,
        DirectiveType.QUERY,
        DirectiveType.BODY,
        DirectiveType.RESPONSE,
    }
)

# Directives that declare a field in one of a method's field maps
FIELD_TYPES = frozenset(
    {
        DirectiveType.PARAM,
        DirectiveType.QUERY,
        DirectiveType.BODY,
        DirectiveType.FILE,
        DirectiveType.RESPONSE,
    }
)

PROPERTY_KEYWORDS: MappingProxyType[str, DirectiveType] = MappingProxyType(
    {
        "identity": DirectiveType.IDENTITY,
        "parent": DirectiveType.PARENT,
        "mutable": DirectiveType.MUTABLE,
        "authentication": DirectiveType.AUTHENTICATION,
    }
)

DATATYPES = frozenset(
    {
        "binary",
        "boolean",
        "byte",
        "datetime",
        "decimal",
        "double",
        "single",
        "float",
        "guid",
        "int16",
        "int32",
        "int64",
        "int",
        "number",
        "sbyte",
        "string",
        "text",
        "date",
        "time",
        "datetimeoffset",
        "object",
        "array",
    }
)

# Fixed-length strings: string1, string40, ...
FIXED_STRING_PATTERN = re.compile(r"^string[1-9][0-9]*$")

HTTP_VERBS = frozenset(
    {
        "GET",
        "HEAD",
        "POST",
        "PUT",
        "DELETE",
        "CONNECT",
        "OPTIONS",
        "TRACE",
        "PATCH",
    }
)

WEBDAV_VERBS = frozenset(
    {
        "PROPFIND",
        "PROPPATCH",
        "MKCOL",
        "COPY",
        "MOVE",
        "LOCK",
        "UNLOCK",
        "SEARCH",
        "REPORT",
    }
)

VERBS = HTTP_VERBS | WEBDAV_VERBS

VERB_ALIASES: MappingProxyType[str, str] = MappingProxyType(
    {
        "ENTRY": "GET",
        "COLLECTION": "GET",
        "ADD": "POST",
        "SAVE": "PUT",
        "REMOVE": "DELETE",
    }
)

# Boolean keywords and the directive types allowed to carry them
KEYWORDS: MappingProxyType[str, frozenset[DirectiveType]] = MappingProxyType(
    {
        "required": frozenset(
            {
                DirectiveType.PARAM,
                DirectiveType.QUERY,
                DirectiveType.BODY,
                DirectiveType.FILE,
            }
        ),
        "mutable": frozenset({DirectiveType.METHOD, DirectiveType.RESOURCE}),
    }
)

# Directive types that accept a datatype token
DATATYPE_TYPES = FIELD_TYPES

# key=value settings and the directive types allowed to carry them
SETTINGS: MappingProxyType[str, frozenset[DirectiveType]] = MappingProxyType(
    {
        "default": frozenset(
            {
                DirectiveType.PARAM,
                DirectiveType.QUERY,
                DirectiveType.BODY,
                DirectiveType.FILE,
            }
        ),
        "level": FIELD_TYPES
        | {
            DirectiveType.AUTHENTICATION,
            DirectiveType.METHOD,
            DirectiveType.RESOURCE,
        },
    }
)

# Names are lower-cased before this check
NAME_PATTERN = re.compile(r"^[a-z0-9_.\-]+$")

# Leading symbol runs, compiled once per nestable symbol
NESTING_PATTERNS: MappingProxyType[str, re.Pattern[str]] = MappingProxyType(
    {
        symbol: re.compile(rf"^{re.escape(symbol)}+")
        for symbol, directive in SYMBOLS.items()
        if directive in NESTABLE
    }
)


def is_datatype(token: str) -> bool:
    """Check whether a token names a recognized datatype."""
    return token in DATATYPES or FIXED_STRING_PATTERN.match(token) is not None


def resolve_verb(name: str) -> str | None:
    """Resolve a method name to its canonical verb, or None if unknown."""
    verb = name.upper()
    if verb in VERBS:
        return verb
    return VERB_ALIASES.get(verb)
