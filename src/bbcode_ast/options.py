#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/bbcode_ast/options.py
"""Configuration options for BBCode parsing.

This module defines the immutable options class consumed by
:class:`bbcode_ast.parser.BBCodeParser`. A single options instance can be
shared by any number of parsers and parse calls.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from bbcode_ast.constants import (
    CLOSING_TAG_MARKER,
    DEFAULT_CASE_SENSITIVE,
    DEFAULT_LENIENT,
    DEFAULT_SUPPORTED_TAGS,
    TAG_NAME_TERMINATORS,
)
from bbcode_ast.exceptions import ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BBCodeParserOptions(CloneFrozenMixin):
    """Configuration options for BBCode-to-AST parsing.

    Parameters
    ----------
    supported_tags : tuple of str
        Tag names recognized as markup. Bracket sequences naming any other
        tag pass through as text. Any iterable of strings is accepted and
        stored as a tuple.
    case_sensitive : bool, default False
        Whether tag names are compared case-sensitively. When False, names
        are lower-cased before comparison; the source spelling is still kept
        on the nodes.
    lenient : bool, default False
        Whether malformed nesting is recovered by flattening the affected
        tags back into text instead of raising a parse error.

    Examples
    --------
    Basic usage:
        >>> from bbcode_ast.options import BBCodeParserOptions
        >>> from bbcode_ast.parser import BBCodeParser
        >>> options = BBCodeParserOptions(supported_tags=("b", "i"))
        >>> parser = BBCodeParser.from_options(options)
        >>> root = parser.parse("[b]Bold text[/b]")

    Switching on recovery for user-generated content:
        >>> lenient_options = options.create_updated(lenient=True)

    """

    supported_tags: tuple[str, ...] = field(
        default=DEFAULT_SUPPORTED_TAGS,
        metadata={"help": "Tag names recognized as markup", "importance": "core"},
    )
    case_sensitive: bool = field(
        default=DEFAULT_CASE_SENSITIVE,
        metadata={"help": "Compare tag names case-sensitively", "importance": "core"},
    )
    lenient: bool = field(
        default=DEFAULT_LENIENT,
        metadata={"help": "Flatten malformed nesting into text instead of raising", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Normalize and validate the supported tag names.

        Raises
        ------
        ValidationError
            If ``supported_tags`` is not an iterable of usable tag names.

        """
        tags = self.supported_tags
        if isinstance(tags, (str, bytes)) or not isinstance(tags, Iterable):
            raise ValidationError(
                f"supported_tags must be an iterable of tag names, got {type(tags).__name__}",
                parameter_name="supported_tags",
                parameter_value=tags,
            )

        tags = tuple(tags)
        for tag in tags:
            if not isinstance(tag, str) or not tag:
                raise ValidationError(
                    f"Tag names must be non-empty strings, got {tag!r}",
                    parameter_name="supported_tags",
                    parameter_value=tag,
                )
            if tag.startswith(CLOSING_TAG_MARKER) or any(char in TAG_NAME_TERMINATORS for char in tag):
                raise ValidationError(
                    f"Tag name {tag!r} cannot start with '/' or contain ']', '=' or spaces",
                    parameter_name="supported_tags",
                    parameter_value=tag,
                )

        # Frozen dataclass: bypass __setattr__ to store the normalized tuple
        object.__setattr__(self, "supported_tags", tags)
