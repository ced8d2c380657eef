"""Command-line interface for the bbcode-ast parser.

This module provides a small CLI that parses a BBCode file (or standard
input) and prints the canonical BBCode rendering, a debug tree dump, or the
JSON form of the tree.

Configuration
-------------
Parser settings are read from the first configuration file found (see
:mod:`bbcode_ast.cli.config`), from the file named by the
``BBCODE_AST_CONFIG`` environment variable, or from ``--config``.
Command-line flags always override file settings.

Examples
--------
Dump the tree of a post::

    $ bbcode-ast post.txt --format tree

Parse user content from stdin without failing on broken markup::

    $ echo "[b]unclosed" | bbcode-ast --lenient --format json

Restrict the allowed tags::

    $ bbcode-ast post.txt --tags b,i,url

"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from bbcode_ast import __version__
from bbcode_ast.ast import Root, TreeFormatter, ast_to_json
from bbcode_ast.cli.config import discover_config_file, load_config_file, options_from_config
from bbcode_ast.constants import CONFIG_ENV_VAR, DEFAULT_JSON_INDENT, DEFAULT_OUTPUT_FORMAT, OutputFormat
from bbcode_ast.exceptions import ParsingError, ValidationError
from bbcode_ast.logging_utils import configure_logging
from bbcode_ast.options import BBCodeParserOptions
from bbcode_ast.parser import BBCodeParser

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6

__all__ = [
    "main",
    "create_parser",
    "EXIT_SUCCESS",
    "EXIT_VALIDATION_ERROR",
    "EXIT_FILE_ERROR",
    "EXIT_PARSING_ERROR",
]


def _parse_tag_list(value: str) -> list[str]:
    tags = [tag.strip() for tag in value.split(",") if tag.strip()]
    if not tags:
        raise argparse.ArgumentTypeError("--tags needs at least one tag name")
    return tags


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="bbcode-ast",
        description="Parse BBCode into an abstract syntax tree.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="BBCode file to parse, or '-' for standard input (default)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    output_group = parser.add_argument_group("Output options")
    output_group.add_argument(
        "--format",
        "-f",
        dest="output_format",
        choices=["bbcode", "tree", "json"],
        default=DEFAULT_OUTPUT_FORMAT,
        help="What to print: canonical BBCode, an indented tree, or JSON (default: %(default)s)",
    )
    output_group.add_argument(
        "--indent",
        type=int,
        default=DEFAULT_JSON_INDENT,
        help="Indentation for JSON output (default: %(default)s)",
    )
    output_group.add_argument("--out", "-o", metavar="PATH", help="Write output to PATH instead of stdout")

    parser_group = parser.add_argument_group("Parser options")
    parser_group.add_argument(
        "--tags",
        type=_parse_tag_list,
        metavar="NAMES",
        help="Comma-separated list of supported tag names (overrides configuration)",
    )
    parser_group.add_argument(
        "--case-sensitive",
        action="store_true",
        default=None,
        help="Compare tag names case-sensitively",
    )
    parser_group.add_argument(
        "--lenient",
        action="store_true",
        default=None,
        help="Turn malformed nesting into text instead of failing",
    )

    config_group = parser.add_argument_group("Configuration")
    config_group.add_argument("--config", metavar="PATH", help="Load parser settings from a JSON, TOML or YAML file")
    config_group.add_argument("--no-config", action="store_true", help="Ignore configuration files")

    logging_group = parser.add_argument_group("Logging")
    logging_group.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: %(default)s)",
    )
    logging_group.add_argument("--log-file", metavar="PATH", help="Also write log output to PATH")
    logging_group.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")
    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command-line arguments

    """
    log_level = logging.DEBUG if parsed_args.trace else getattr(logging, parsed_args.log_level.upper())
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _resolve_config_path(parsed_args: argparse.Namespace) -> Optional[Path]:
    if parsed_args.no_config:
        return None
    if parsed_args.config:
        return Path(parsed_args.config)
    env_config = os.environ.get(CONFIG_ENV_VAR)
    if env_config:
        return Path(env_config)
    return discover_config_file()


def build_options(parsed_args: argparse.Namespace) -> BBCodeParserOptions:
    """Combine configuration file settings and command-line flags.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command-line arguments

    Returns
    -------
    BBCodeParserOptions
        Effective parser options

    Raises
    ------
    argparse.ArgumentTypeError
        If the configuration file or a flag value is invalid

    """
    options = BBCodeParserOptions()
    config_path = _resolve_config_path(parsed_args)
    if config_path is not None:
        logger.info("Using configuration file: %s", config_path)
        options = options_from_config(load_config_file(config_path), options)

    overrides = {
        key: value
        for key, value in (
            ("supported_tags", parsed_args.tags),
            ("case_sensitive", parsed_args.case_sensitive),
            ("lenient", parsed_args.lenient),
        )
        if value is not None
    }
    if not overrides:
        return options
    try:
        return options.create_updated(**overrides)
    except ValidationError as e:
        raise argparse.ArgumentTypeError(e.message) from e


def render_output(root: Root, output_format: OutputFormat, indent: int = DEFAULT_JSON_INDENT) -> str:
    """Render a parsed tree in the requested output format."""
    if output_format == "tree":
        return TreeFormatter().format(root)
    if output_format == "json":
        return ast_to_json(root, indent=indent)
    return root.to_bbcode()


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def main(args: list[str] | None = None) -> int:
    """Execute the CLI and return a process exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    try:
        options = build_options(parsed_args)
    except argparse.ArgumentTypeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        source = _read_input(parsed_args.input)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: Could not read input {parsed_args.input}: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    try:
        root = BBCodeParser.from_options(options).parse(source)
    except ParsingError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_PARSING_ERROR

    output = render_output(root, parsed_args.output_format, parsed_args.indent)

    if parsed_args.out:
        try:
            Path(parsed_args.out).write_text(output, encoding="utf-8")
        except OSError as e:
            print(f"Error: Could not write output {parsed_args.out}: {e}", file=sys.stderr)
            return EXIT_FILE_ERROR
        logger.info("Wrote output to %s", parsed_args.out)
    else:
        sys.stdout.write(output)
        # BBCode output stays byte-for-byte identical to the parsed input
        if parsed_args.output_format != "bbcode":
            sys.stdout.write("\n")

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
