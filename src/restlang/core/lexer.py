"""
Line tokenizer for the restlang DSL.

Each source line holds exactly one directive. The leading symbol decides the
directive type; the rest of the line is scanned character by character into
a name, flags, a datatype, settings and a description. Violations never
raise here: the first one is recorded on the token so the builder can report
it with the line it came from.
"""

from dataclasses import dataclass, field

from .errors import ErrorKind
from .grammar import (
    DATATYPE_TYPES,
    KEYWORDS,
    NAME_PATTERN,
    NESTABLE,
    NESTING_PATTERNS,
    PROPERTY_KEYWORDS,
    SETTINGS,
    SYMBOLS,
    DirectiveType,
    is_datatype,
    resolve_verb,
)
from .normalizer import split_lines

_SEPARATORS = (" ", "\t")


@dataclass
class TokenError:
    """First violation found while tokenizing a line."""

    kind: ErrorKind
    message: str


@dataclass
class TokenRecord:
    """
    A tokenized directive line.

    Attributes:
        type: Resolved directive type
        name: First token of the line (lower-cased), or the whole line for
            descriptions, or the brace contents for commands
        symbol: Leading directive symbol, None for descriptions
        verb: Canonical verb for method directives
        datatype: Field datatype
        required: Set by the 'required' keyword
        mutable: Set by the 'mutable' keyword
        settings: key=value settings such as default= and level=
        values: Remaining positional tokens
        description: Text after the first colon, case preserved
        depth: Number of leading directive symbols (1 when not nested)
        error: First violation, if any
        line: Raw line text
    """

    type: DirectiveType
    name: str | None = None
    symbol: str | None = None
    verb: str | None = None
    datatype: str | None = None
    required: bool = False
    mutable: bool = False
    settings: dict[str, str] = field(default_factory=dict)
    values: list[str] = field(default_factory=list)
    description: str | None = None
    depth: int = 1
    error: TokenError | None = None
    line: str = ""

    @property
    def nested(self) -> bool:
        """Whether the directive is declared inside another of its family."""
        return self.depth > 1


class LineLexer:
    """
    Character-level state machine for a single directive line.

    The machine moves from the symbol state (directive type and nesting run)
    through token scanning until a colon or the end of the line.
    """

    def __init__(self, line: str):
        self.line = line
        self.pos = 0
        self.buffer: list[str] = []
        self.record = TokenRecord(type=DirectiveType.DESCRIPTION, name=line, line=line)

    def current_char(self) -> str | None:
        """Get current character or None if at end."""
        if self.pos >= len(self.line):
            return None
        return self.line[self.pos]

    def advance(self) -> None:
        """Move to next character."""
        if self.pos < len(self.line):
            self.pos += 1

    def tokenize(self) -> TokenRecord:
        """Tokenize the line into a TokenRecord."""
        symbol = self.line[:1]
        directive = SYMBOLS.get(symbol)
        if directive is None:
            return self.record

        if directive == DirectiveType.COMMAND:
            return self.read_command(symbol)

        self.record = TokenRecord(type=directive, symbol=symbol, line=self.line)
        self.advance()

        if directive in NESTABLE:
            run = NESTING_PATTERNS[symbol].match(self.line)
            assert run is not None
            self.record.depth = run.end()
            self.pos = run.end()

        while True:
            ch = self.current_char()

            if ch is None:
                self.finish_token()
                break

            if ch == ":":
                self.finish_token()
                self.advance()
                if self.record.name is None:
                    return self.as_description()
                description = self.line[self.pos :].strip()
                if description:
                    self.record.description = description
                return self.record

            if ch in _SEPARATORS:
                self.finish_token()
            else:
                self.buffer.append(ch.lower())
            self.advance()

        if self.record.name is None:
            return self.as_description()
        return self.record

    def read_command(self, symbol: str) -> TokenRecord:
        """Read a {reference} command line."""
        self.record = TokenRecord(type=DirectiveType.COMMAND, symbol=symbol, line=self.line)
        body = self.line[1:]
        end = body.find("}")

        if end == -1:
            self.fail(
                ErrorKind.MALFORMED_COMMAND_REFERENCE,
                f"The command '{self.line}' is missing its closing brace.",
            )
            return self.record

        reference = body[:end].strip()
        trailing = body[end + 1 :].strip()

        if not reference or "{" in reference:
            self.fail(
                ErrorKind.MALFORMED_COMMAND_REFERENCE,
                f"The command format '{self.line}' was not recognised.",
            )
        elif trailing and not trailing.startswith(":"):
            self.fail(
                ErrorKind.MALFORMED_COMMAND_REFERENCE,
                f"Unexpected text after the command '{self.line}'.",
            )

        self.record.name = reference or None
        if trailing[1:].strip():
            self.record.description = trailing[1:].strip()
        return self.record

    def as_description(self) -> TokenRecord:
        """Reinterpret the whole line as free description text."""
        self.record = TokenRecord(type=DirectiveType.DESCRIPTION, name=self.line, line=self.line)
        return self.record

    def finish_token(self) -> None:
        """Classify the buffered token, if any."""
        if not self.buffer:
            return
        token = "".join(self.buffer)
        self.buffer = []
        self.classify(token)

    def classify(self, token: str) -> None:
        record = self.record

        if record.name is None:
            self.capture_name(token)
            return

        if record.type in (DirectiveType.IDENTITY, DirectiveType.PARENT):
            record.values.append(token)
            return

        if token in KEYWORDS:
            if record.type in KEYWORDS[token]:
                setattr(record, token, True)
            else:
                self.fail(
                    ErrorKind.UNRECOGNIZED_KEYWORD,
                    f"The keyword '{token}' does not apply to a {record.type} directive.",
                )
            return

        if is_datatype(token):
            if record.type in DATATYPE_TYPES:
                record.datatype = token
            else:
                self.fail(
                    ErrorKind.UNRECOGNIZED_KEYWORD,
                    f"The datatype '{token}' does not apply to a {record.type} directive.",
                )
            return

        key, sep, value = token.partition("=")
        if sep and key in SETTINGS:
            if record.type in SETTINGS[key]:
                record.settings[key] = value
            else:
                self.fail(
                    ErrorKind.UNRECOGNIZED_KEYWORD,
                    f"The setting '{key}=' does not apply to a {record.type} directive.",
                )
            return

        record.values.append(token)

    def capture_name(self, token: str) -> None:
        record = self.record
        record.name = token

        if record.type == DirectiveType.METHOD:
            verb = resolve_verb(token)
            if verb is None:
                self.fail(
                    ErrorKind.INVALID_VERB,
                    f"The method '{token.upper()}' is not a recognised verb.",
                )
            record.verb = verb
            return

        if record.type == DirectiveType.PROPERTY:
            # Unknown keywords stay PROPERTY and are reported by the builder
            record.type = PROPERTY_KEYWORDS.get(token, DirectiveType.PROPERTY)
            return

        if not NAME_PATTERN.match(token):
            self.fail(
                ErrorKind.INVALID_NAME_CHARACTERS,
                f"The name '{token}' contains characters that are not allowed.",
            )

    def fail(self, kind: ErrorKind, message: str) -> None:
        """Record a violation; only the first one is kept."""
        if self.record.error is None:
            self.record.error = TokenError(kind=kind, message=message)


def tokenize(line: str) -> TokenRecord:
    """Tokenize a single directive line."""
    return LineLexer(line).tokenize()


def tokenize_source(text: str) -> list[TokenRecord]:
    """
    Normalize a whole source and tokenize every line.

    Raises:
        ParseError: If the source is empty
    """
    return [tokenize(line) for line in split_lines(text)]
