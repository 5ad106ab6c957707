import logging
from pathlib import Path

from . import ir
from .builder_impl import parse_restlang
from .manifest import ParserOptions

logger = logging.getLogger(__name__)


def parse(text: str, options: ParserOptions | None = None) -> ir.Document:
    """
    Parse restlang source text into a Document.

    Parsing the same text twice yields equal documents; nothing is shared
    between calls.

    Args:
        text: Raw source text
        options: Parser options (defaults when omitted)

    Returns:
        The compiled Document
    """
    return parse_restlang(text, options=options)


def parse_file(path: Path, options: ParserOptions | None = None) -> ir.Document:
    """
    Read a UTF-8 source file and parse it.

    Syntax errors carry the file path in their context.

    Args:
        path: Path to a .api source file
        options: Parser options (defaults when omitted)

    Returns:
        The compiled Document
    """
    logger.debug("Parsing %s", path)
    text = path.read_text(encoding="utf-8")
    return parse_restlang(text, file=path, options=options)
