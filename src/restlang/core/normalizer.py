"""
Source normalization for restlang.

Collapses blank lines, trims every line and turns tabs into single spaces
so the tokenizer only ever sees one directive per line.
"""

from __future__ import annotations

import re

from .errors import ErrorKind, make_parse_error

_NEWLINE_RUNS = re.compile(r"\n+")
_LEADING_WS = re.compile(r"\n\s+")
_TRAILING_WS = re.compile(r"\s+\n")
_TAB_RUNS = re.compile(r"\t+")


def normalize(text: object) -> str:
    """
    Normalize raw source text.

    Raises:
        ParseError: If the text is not a string or is empty once trimmed
    """
    if not isinstance(text, str):
        raise make_parse_error("The source is empty.", ErrorKind.EMPTY_SOURCE, 0, "")

    text = _NEWLINE_RUNS.sub("\n", text)
    text = text.strip()
    text = _LEADING_WS.sub("\n", text)
    text = _TRAILING_WS.sub("\n", text)
    text = _TAB_RUNS.sub(" ", text)

    if not text:
        raise make_parse_error("The source is empty.", ErrorKind.EMPTY_SOURCE, 0, "")
    return text


def split_lines(text: str) -> list[str]:
    """Normalize text and split it into directive lines."""
    return normalize(text).split("\n")
