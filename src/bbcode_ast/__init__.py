"""bbcode-ast - Parse BBCode fragments into an abstract syntax tree.

bbcode-ast converts a flat BBCode fragment such as ``[b]Hello[/b]`` or
``[img w=10 h=10]cat.png[/img]`` into an ordered tree of nodes, and renders
any such tree back into BBCode. Parsing is lossless: for every fragment the
parser accepts, ``parse(text).to_bbcode() == text``.

The parser has no notion of what tags mean. It is configured with the set
of allowed tag names; anything else in brackets stays text.

Key Features
------------
- Single-pass character state machine, no regular expressions
- Simple values (``[color=red]``) and ordered attributes (``[img w=10 h=10]``)
- Implicitly closed list items (``[list][*]A[*]B[/list]``)
- Opaque ``[code]`` regions
- Strict mode (raise on malformed nesting) or lenient mode (demote it to text)
- JSON serialization and a debug tree dump

Examples
--------
Parse with the default forum tag set:

    >>> from bbcode_ast import parse
    >>> root = parse("[color=red]Hi[/color]")
    >>> root.children[0].value
    'red'

Configure a parser:

    >>> from bbcode_ast import BBCodeParser
    >>> parser = BBCodeParser(["b", "quote"], lenient=True)
    >>> parser.parse("[quote=JohnDoe][b]Hello[/quote]").to_bbcode()
    '[quote=JohnDoe][b]Hello[/quote]'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "bbcode-ast requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.1.0"

from bbcode_ast.ast import ListItem, Node, Root, Tag, Text, TreeFormatter
from bbcode_ast.constants import DEFAULT_SUPPORTED_TAGS
from bbcode_ast.exceptions import (
    BBCodeAstError,
    MismatchedClosingTagError,
    ParsingError,
    UnclosedTagsError,
    ValidationError,
)
from bbcode_ast.options import BBCodeParserOptions
from bbcode_ast.parser import BBCodeParser

default_parser = BBCodeParser(options=BBCodeParserOptions())


def parse(text: str) -> Root:
    """Parse ``text`` with :data:`default_parser`.

    The default parser recognizes :data:`DEFAULT_SUPPORTED_TAGS`,
    compares tag names case-insensitively and is strict.

    Raises
    ------
    MismatchedClosingTagError, UnclosedTagsError
        If the markup is not well nested

    """
    return default_parser.parse(text)


__all__ = [
    "__version__",
    "BBCodeParser",
    "BBCodeParserOptions",
    "DEFAULT_SUPPORTED_TAGS",
    "default_parser",
    "parse",
    # AST
    "Node",
    "Root",
    "Tag",
    "ListItem",
    "Text",
    "TreeFormatter",
    # Exceptions
    "BBCodeAstError",
    "ValidationError",
    "ParsingError",
    "MismatchedClosingTagError",
    "UnclosedTagsError",
]
