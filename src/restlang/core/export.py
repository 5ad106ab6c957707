"""
Serialization of compiled restlang documents.

Documents are written as the array of their entries, in source order.
"""

from __future__ import annotations

import json

import yaml

from . import ir
from .errors import ExportError
from .manifest import OUTPUT_FORMATS


def document_to_json(document: ir.Document, pretty: bool = True, indent: int = 2) -> str:
    """Serialize a document to JSON; compact when pretty is false."""
    if pretty:
        return json.dumps(document.to_list(), indent=indent, ensure_ascii=False)
    return json.dumps(document.to_list(), separators=(",", ":"), ensure_ascii=False)


def document_to_yaml(document: ir.Document, indent: int = 2) -> str:
    """Serialize a document to YAML, keeping key order."""
    return yaml.safe_dump(
        document.to_list(),
        sort_keys=False,
        indent=indent,
        allow_unicode=True,
        default_flow_style=False,
    )


def render_document(
    document: ir.Document,
    fmt: str = "json",
    pretty: bool = True,
    indent: int = 2,
) -> str:
    """
    Serialize a document in the requested format.

    Raises:
        ExportError: If the format is not supported
    """
    fmt = fmt.lower()
    if fmt == "json":
        return document_to_json(document, pretty=pretty, indent=indent)
    if fmt == "yaml":
        return document_to_yaml(document, indent=indent)
    raise ExportError(
        f"Unsupported output format '{fmt}' (expected one of: {', '.join(OUTPUT_FORMATS)})"
    )
