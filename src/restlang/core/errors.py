"""
Error types for restlang parsing, configuration, and export.
"""

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Optional


class ErrorKind(StrEnum):
    """Categories of syntax errors raised while compiling a source."""

    EMPTY_SOURCE = "empty_source"
    UNRECOGNIZED_KEYWORD = "unrecognized_keyword"
    INVALID_SCOPE_ATTACHMENT = "invalid_scope_attachment"
    MISSING_NAME = "missing_name"
    MISSING_DATATYPE = "missing_datatype"
    MISSING_PARENT_COMPONENTS = "missing_parent_components"
    MISSING_AUTHENTICATION_LEVEL = "missing_authentication_level"
    INVALID_VERB = "invalid_verb"
    MALFORMED_COMMAND_REFERENCE = "malformed_command_reference"
    INVALID_NAME_CHARACTERS = "invalid_name_characters"
    # Only raised when strict duplicate checking is enabled
    DUPLICATE_NAME = "duplicate_name"


class RestlangError(Exception):
    """Base exception for all restlang errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ParseError(RestlangError):
    """
    Raised when a source cannot be compiled.

    Examples:
    - Empty source
    - Directive with no enclosing resource or method
    - Parameter without a datatype
    - Unknown verb or property keyword
    """

    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        context: Optional["ErrorContext"] = None,
    ):
        self.kind = kind
        super().__init__(message, context)

    @property
    def line(self) -> int:
        """Zero-based index of the offending line."""
        return self.context.line if self.context else 0

    @property
    def text(self) -> str:
        """Raw text of the offending line."""
        return self.context.text if self.context else ""


class ConfigError(RestlangError):
    """
    Raised when restlang.toml cannot be loaded.

    Examples:
    - Invalid TOML
    - Unknown output format
    - Non-boolean flag values
    """

    pass


class ExportError(RestlangError):
    """Raised when a document cannot be serialized."""

    pass


@dataclass
class ErrorContext:
    """
    Source location of a syntax error.

    Attributes:
        line: Line index (0-indexed) within the normalized source
        text: Raw text of the offending line
        file: Optional path of the source file
    """

    line: int
    text: str
    file: Path | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "todo.api:3\n    3 | :id int64"
        """
        number = self.line + 1
        location = f"{self.file}:{number}" if self.file else f"line {number}"
        if self.text:
            return f"{location}\n{number:4d} | {self.text}"
        return location


def make_parse_error(
    message: str,
    kind: ErrorKind,
    line: int,
    text: str,
    file: Path | None = None,
) -> ParseError:
    """
    Helper to create a ParseError with context.

    Args:
        message: Error description
        kind: Error category
        line: Line index (0-indexed)
        text: Raw line text
        file: Optional source file path

    Returns:
        ParseError with context attached
    """
    context = ErrorContext(line=line, text=text, file=file)
    return ParseError(message, kind, context)
