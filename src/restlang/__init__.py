"""
restlang - a compact DSL for describing REST and message-based APIs.

Compiles line-oriented API descriptions into an ordered document of
resources, methods, fields and metadata for documentation and
code-generation tools.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.errors import ConfigError, ErrorKind, ExportError, ParseError, RestlangError
from .core.lexer import TokenRecord, tokenize
from .core.normalizer import normalize
from .core.parser import parse, parse_file

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "parse",
    "parse_file",
    "tokenize",
    "normalize",
    "TokenRecord",
    "ErrorKind",
    "RestlangError",
    "ParseError",
    "ConfigError",
    "ExportError",
]
