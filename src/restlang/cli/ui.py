"""
Rich output helpers for the restlang CLI.

Tables go to stdout; errors go to stderr so compiled output stays clean.
"""

from __future__ import annotations

from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text

from restlang.core import ir
from restlang.core.lexer import TokenRecord

console = Console()
err_console = Console(stderr=True)

STYLES = {
    "title": Style(color="bright_cyan", bold=True),
    "muted": Style(color="bright_black"),
    "success": Style(color="green", bold=True),
    "error": Style(color="red", bold=True),
}


def print_header(title: str, subtitle: str = "") -> None:
    console.print()
    console.print(Text(title, style=STYLES["title"]))
    if subtitle:
        console.print(Text(subtitle, style=STYLES["muted"]))
    console.print()


def print_success(message: str) -> None:
    console.print(Text(f"✓ {message}", style=STYLES["success"]))


def print_error(message: str) -> None:
    err_console.print(Text(f"✗ {message}", style=STYLES["error"]))


def print_document_summary(document: ir.Document) -> None:
    """One row per entry: its kind, name, path and what it declares."""
    table = Table("Kind", "Name", "Path", "Methods / fields")
    for entry in document:
        if isinstance(entry, ir.Resource):
            declared = ", ".join(m.verb for m in entry.methods)
            table.add_row(entry.kind, entry.name, entry.path, declared or "-")
        elif isinstance(entry, ir.Receiver):
            table.add_row(entry.kind, entry.name, "-", ", ".join(entry.body) or "-")
        else:
            table.add_row(entry.kind, entry.name, "-", ", ".join(entry.response) or "-")
    console.print(table)


def print_token_table(records: list[TokenRecord]) -> None:
    """One row per tokenized line, with its error if the line has one."""
    table = Table("#", "Type", "Name", "Datatype", "Depth", "Flags", "Description", "Error")
    for index, record in enumerate(records):
        flags = [flag for flag in ("required", "mutable") if getattr(record, flag)]
        flags += [f"{key}={value}" for key, value in record.settings.items()]
        error = Text(record.error.message, style=STYLES["error"]) if record.error else ""
        table.add_row(
            str(index),
            str(record.type),
            record.verb or record.name or "",
            record.datatype or "",
            str(record.depth),
            " ".join(flags),
            record.description or "",
            error,
        )
    console.print(table)
