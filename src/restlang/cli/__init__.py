"""
restlang CLI Package.

- commands.py: compile, check and tokens commands
- ui.py: rich output helpers
- utils.py: version, logging and configuration helpers
"""

import sys

import typer

from restlang.cli.commands import check_command, compile_command, tokens_command
from restlang.cli.utils import version_callback

app = typer.Typer(
    help="""restlang – compile API descriptions into structured documents

Commands:
  • compile: source → JSON/YAML document
  • check:   validate a source and summarize it
  • tokens:  inspect how each line is tokenized
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
) -> None:
    """restlang CLI main callback for global options."""
    pass


app.command(name="compile")(compile_command)
app.command(name="check")(check_command)
app.command(name="tokens")(tokens_command)


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


__all__ = ["app", "main"]


if __name__ == "__main__":
    main(sys.argv[1:])
