"""
Compile, check and token inspection commands for the restlang CLI.
"""

from __future__ import annotations

from pathlib import Path

import typer

from restlang.cli.utils import resolve_config, setup_logging
from restlang.core import ir
from restlang.core.errors import ExportError, ParseError
from restlang.core.export import render_document
from restlang.core.lexer import tokenize_source
from restlang.core.manifest import OUTPUT_FORMATS, ParserOptions
from restlang.core.parser import parse_file


def _compile(source: Path, options: ParserOptions) -> ir.Document:
    """Parse a source file, exiting with code 1 on read or syntax errors."""
    try:
        return parse_file(source, options)
    except (OSError, UnicodeDecodeError) as e:
        typer.echo(f"Error reading {source}: {e}", err=True)
        raise typer.Exit(code=1)
    except ParseError as e:
        typer.echo(f"Parse error: {e}", err=True)
        raise typer.Exit(code=1)


def compile_command(
    source: Path = typer.Argument(..., help="restlang source file"),  # noqa: B008
    target: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file (default: stdout)",
    ),
    pretty: bool | None = typer.Option(
        None,
        "--pretty/--compact",
        help="Indent the output (default from restlang.toml, else pretty)",
    ),
    format: str | None = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format (json or yaml)",
    ),
    config: Path | None = typer.Option(  # noqa: B008
        None,
        "--config",
        "-c",
        help="Path to restlang.toml (default: nearest one above the source)",
    ),
    strict_duplicates: bool | None = typer.Option(
        None,
        "--strict-duplicates/--merge-duplicates",
        help="Reject repeated field names instead of merging them",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Log parser activity"),
) -> None:
    """
    Compile a restlang source into a structured document.

    Examples:
        restlang compile todo.api                 # Print JSON to stdout
        restlang compile todo.api -o todo.json    # Save to file
        restlang compile todo.api -f yaml         # Output as YAML
    """
    setup_logging(verbose)
    settings = resolve_config(source, config)

    options = settings.parser
    if strict_duplicates is not None:
        options = ParserOptions(strict_duplicates=strict_duplicates)

    output_format = (format or settings.output.format).lower()
    if output_format not in OUTPUT_FORMATS:
        typer.echo(
            f"Unknown format '{output_format}' (expected one of: {', '.join(OUTPUT_FORMATS)})",
            err=True,
        )
        raise typer.Exit(code=1)

    document = _compile(source, options)

    try:
        content = render_document(
            document,
            output_format,
            pretty=settings.output.pretty if pretty is None else pretty,
            indent=settings.output.indent,
        )
    except ExportError as e:
        typer.echo(f"Export error: {e}", err=True)
        raise typer.Exit(code=1)

    if target:
        try:
            target.write_text(content, encoding="utf-8")
        except OSError as e:
            typer.echo(f"Error writing {target}: {e}", err=True)
            raise typer.Exit(code=1)
        typer.echo(f"Document written to {target}", err=True)
    else:
        typer.echo(content)


def check_command(
    source: Path = typer.Argument(..., help="restlang source file"),  # noqa: B008
    config: Path | None = typer.Option(  # noqa: B008
        None,
        "--config",
        "-c",
        help="Path to restlang.toml (default: nearest one above the source)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Log parser activity"),
) -> None:
    """
    Parse a restlang source and report what it declares.
    """
    from restlang.cli.ui import print_document_summary, print_header, print_success

    setup_logging(verbose)
    settings = resolve_config(source, config)
    document = _compile(source, settings.parser)

    print_header(str(source), f"{len(document)} entries")
    print_document_summary(document)
    print_success("Source is valid.")


def tokens_command(
    source: Path = typer.Argument(..., help="restlang source file"),  # noqa: B008
) -> None:
    """
    Show how every normalized line of a source is tokenized.

    Token errors are listed rather than raised.
    """
    from restlang.cli.ui import print_error, print_token_table

    try:
        records = tokenize_source(source.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        typer.echo(f"Error reading {source}: {e}", err=True)
        raise typer.Exit(code=1)
    except ParseError as e:
        print_error(e.message)
        raise typer.Exit(code=1)

    print_token_table(records)
