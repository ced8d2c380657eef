#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for bbcode-ast.

This module centralizes the hardcoded values used across the library:
default parser configuration, node sentinel names, the characters that
drive the tag state machine, and CLI defaults.
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

OutputFormat = Literal["bbcode", "tree", "json"]

# =============================================================================
# Parser Defaults
# =============================================================================

DEFAULT_SUPPORTED_TAGS: tuple[str, ...] = (
    "b",
    "u",
    "i",
    "s",
    "center",
    "right",
    "color",
    "size",
    "yt",
    "list",
    "url",
    "img",
    "spoiler",
    "code",
)
DEFAULT_CASE_SENSITIVE = False
DEFAULT_LENIENT = False

# =============================================================================
# Node Names
# =============================================================================

ROOT_NODE_NAME = "#root"
TEXT_NODE_NAME = "#text"
LIST_ITEM_NODE_NAME = "*"
LIST_TAG_NAME = "list"
CODE_TAG_NAME = "code"

# =============================================================================
# Tag Syntax
# =============================================================================

TAG_OPEN = "["
TAG_CLOSE = "]"
CLOSING_TAG_MARKER = "/"
VALUE_SEPARATOR = "="
ATTRIBUTE_SEPARATOR = " "
QUOTE_CHARACTERS = frozenset({'"', "'"})
TAG_NAME_TERMINATORS = frozenset({TAG_CLOSE, ATTRIBUTE_SEPARATOR, VALUE_SEPARATOR})

# =============================================================================
# CLI
# =============================================================================

DEFAULT_OUTPUT_FORMAT: OutputFormat = "bbcode"
DEFAULT_JSON_INDENT = 2
CONFIG_SECTION_NAME = "bbcode-ast"
CONFIG_ENV_VAR = "BBCODE_AST_CONFIG"
CONFIG_FILENAMES = (".bbcode-ast.toml", ".bbcode-ast.yaml", ".bbcode-ast.yml", ".bbcode-ast.json")
