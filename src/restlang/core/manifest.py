import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "restlang.toml"
OUTPUT_FORMATS = ("json", "yaml")


@dataclass
class ParserOptions:
    """Options that change how a source is compiled."""

    strict_duplicates: bool = False  # repeated field names raise instead of merging


@dataclass
class OutputOptions:
    """Serialization defaults for the compiled document."""

    format: str = "json"  # "json" | "yaml"
    pretty: bool = True
    indent: int = 2


@dataclass
class RestlangConfig:
    """Contents of a restlang.toml file."""

    parser: ParserOptions = field(default_factory=ParserOptions)
    output: OutputOptions = field(default_factory=OutputOptions)
    path: Path | None = None


def find_config(start: Path) -> Path | None:
    """Walk from start up to the filesystem root looking for restlang.toml."""
    current = start.resolve()
    if current.is_file():
        current = current.parent

    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None) -> RestlangConfig:
    if path is None or not path.exists():
        return RestlangConfig()

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    parser_data = data.get("parser", {})
    output_data = data.get("output", {})

    parser = ParserOptions(
        strict_duplicates=_flag(parser_data, "strict_duplicates", False, path),
    )

    output_format = output_data.get("format", "json")
    if output_format not in OUTPUT_FORMATS:
        raise ConfigError(
            f"Unknown output format '{output_format}' in {path} "
            f"(expected one of: {', '.join(OUTPUT_FORMATS)})"
        )

    indent = output_data.get("indent", 2)
    if not isinstance(indent, int) or isinstance(indent, bool) or indent < 0:
        raise ConfigError(f"'indent' must be a non-negative integer in {path}")

    output = OutputOptions(
        format=output_format,
        pretty=_flag(output_data, "pretty", True, path),
        indent=indent,
    )

    logger.debug("Loaded configuration from %s", path)
    return RestlangConfig(parser=parser, output=output, path=path)


def _flag(section: dict[str, object], key: str, default: bool, path: Path) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be true or false in {path}")
    return value
