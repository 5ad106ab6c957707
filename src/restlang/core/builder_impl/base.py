"""
Base builder class for restlang documents.

Provides the scope stack, line tracking and error generation used by all
builder mixins.
"""

from collections.abc import Iterable
from pathlib import Path

from .. import ir
from ..errors import ErrorKind, ParseError, make_parse_error
from ..manifest import ParserOptions
from ..scope import Frame, FrameKind, FrameMatcher, ScopeStack


class BaseBuilder:
    """
    Base builder class with scope and error utilities.

    One builder compiles one source; it owns the document, the scope stack
    and the position of the line being handled.
    """

    def __init__(
        self,
        lines: list[str],
        file: Path | None = None,
        options: ParserOptions | None = None,
    ):
        """
        Initialize builder.

        Args:
            lines: Normalized source lines
            file: Source file path (for error reporting)
            options: Parser options
        """
        self.lines = lines
        self.file = file
        self.options = options or ParserOptions()
        self.document = ir.Document()
        self.stack = ScopeStack()
        self.index = 0
        self.line = ""

    def error(self, kind: ErrorKind, message: str) -> ParseError:
        """Create a ParseError located at the current line."""
        return make_parse_error(message, kind, self.index, self.line, self.file)

    def require_scope(self, target: Iterable[FrameKind] | FrameMatcher, message: str) -> Frame:
        """
        Pop to an enclosing scope that must exist.

        Raises:
            ParseError: If no frame matches
        """
        frame = self.stack.pop_to(target)
        if frame is None:
            raise self.error(ErrorKind.INVALID_SCOPE_ATTACHMENT, message)
        return frame
