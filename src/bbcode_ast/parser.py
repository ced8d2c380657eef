#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbcode_ast/parser.py
"""BBCode to AST parser.

This module turns a BBCode fragment into a tree of
:mod:`bbcode_ast.ast` nodes with a single left-to-right pass over the
input. The parser only knows which tag names are allowed; it attaches no
meaning to them beyond two structural rules:

- ``[*]`` opens a list item that is closed implicitly by the next ``[*]``
  or by the enclosing ``[/list]``.
- After a plain ``[code]`` every bracket sequence other than a code tag is
  text, up to the next matched ``[/code]``.

Bracket sequences that do not form an allowed tag are kept as text, so the
tree always renders back to the exact input. Structural errors (a closing
tag that does not match, tags left open at the end) either raise, or, in
lenient mode, demote the affected tags to text.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, Optional, Union

from bbcode_ast.ast.nodes import ContainerNode, ListItem, Root, Tag, Text
from bbcode_ast.constants import (
    ATTRIBUTE_SEPARATOR,
    CLOSING_TAG_MARKER,
    CODE_TAG_NAME,
    LIST_ITEM_NODE_NAME,
    LIST_TAG_NAME,
    QUOTE_CHARACTERS,
    TAG_CLOSE,
    TAG_NAME_TERMINATORS,
    TAG_OPEN,
    VALUE_SEPARATOR,
)
from bbcode_ast.exceptions import MismatchedClosingTagError, UnclosedTagsError, ValidationError
from bbcode_ast.options import BBCodeParserOptions

logger = logging.getLogger(__name__)


class ParserState(Enum):
    """States of the tag scanner."""

    TEXT = "text"
    TAG_NAME = "tag_name"
    TAG_VALUE = "tag_value"
    ATTRIBUTE_NAME = "attribute_name"
    ATTRIBUTE_VALUE = "attribute_value"


@dataclass
class _ParseContext:
    """Mutable state of a single ``parse`` call.

    ``stack`` holds the open containers, innermost last; ``stack[0]`` is
    always the root. ``in_code`` is set by a plain ``[code]`` tag and
    cleared by the next matched ``[/code]``. The tag buffers describe the
    tag currently being scanned and are reset by :meth:`begin_tag`.
    """

    stack: list[ContainerNode] = field(default_factory=lambda: [Root()])
    state: ParserState = ParserState.TEXT
    text: list[str] = field(default_factory=list)
    quoted: bool = False
    in_code: bool = False
    closing: bool = False
    tag_name: str = ""
    tag_value: Optional[str] = None
    attributes: list[tuple[str, str]] = field(default_factory=list)
    attribute_name: str = ""
    attribute_value: str = ""

    @property
    def top(self) -> ContainerNode:
        return self.stack[-1]

    def begin_tag(self) -> None:
        self.closing = False
        self.tag_name = ""
        self.tag_value = None
        self.attributes = []
        self.attribute_name = ""
        self.attribute_value = ""

    def flush_text(self) -> None:
        if self.text:
            self.top.adopt_child(Text(text="".join(self.text)))
            self.text = []

    def commit_attribute(self) -> None:
        self.attributes.append((self.attribute_name, self.attribute_value))
        self.attribute_name = ""
        self.attribute_value = ""

    def tag_source(self, include_pending: bool = True) -> str:
        """Rebuild the source text of the tag scanned so far.

        Parameters
        ----------
        include_pending : bool, default True
            Whether to include the attribute currently being scanned

        """
        if self.state is ParserState.TAG_NAME:
            return (TAG_OPEN + CLOSING_TAG_MARKER if self.closing else TAG_OPEN) + self.tag_name

        parts = [TAG_OPEN, self.tag_name]
        if self.tag_value is not None:
            parts.append(VALUE_SEPARATOR + self.tag_value)
        for key, value in self.attributes:
            parts.append(f"{ATTRIBUTE_SEPARATOR}{key}{VALUE_SEPARATOR}{value}")
        if include_pending and self.state is ParserState.ATTRIBUTE_NAME:
            parts.append(ATTRIBUTE_SEPARATOR + self.attribute_name)
        elif include_pending and self.state is ParserState.ATTRIBUTE_VALUE:
            parts.append(f"{ATTRIBUTE_SEPARATOR}{self.attribute_name}{VALUE_SEPARATOR}{self.attribute_value}")
        return "".join(parts)


class BBCodeParser:
    """Convert a BBCode fragment into a :class:`~bbcode_ast.ast.Root` tree.

    A parser holds only its immutable configuration, so one instance can
    serve any number of independent ``parse`` calls.

    Parameters
    ----------
    supported_tags : iterable of str, optional
        Tag names recognized as markup. Defaults to the options' value.
    case_sensitive : bool, optional
        Whether tag names are compared case-sensitively
    lenient : bool, optional
        Whether malformed nesting is flattened into text instead of raising
    options : BBCodeParserOptions or None, default = None
        Base configuration. Explicit arguments above override its fields.

    Examples
    --------
    Basic parsing:

        >>> parser = BBCodeParser(["b", "i", "img"])
        >>> root = parser.parse("[b][i]Hi![/i][/b][img width=100 height=100]cat.png[/img]")
        >>> root.children[1].attributes
        {'width': '100', 'height': '100'}

    Lenient parsing of broken markup:

        >>> BBCodeParser(["b"], lenient=True).parse("[b]Hello").children
        [Text(text='[b]Hello')]

    """

    def __init__(
        self,
        supported_tags: Optional[Iterable[str]] = None,
        case_sensitive: Optional[bool] = None,
        lenient: Optional[bool] = None,
        *,
        options: BBCodeParserOptions | None = None,
    ):
        """Initialize the parser from options and explicit overrides."""
        if options is not None and not isinstance(options, BBCodeParserOptions):
            raise ValidationError(
                f"options must be BBCodeParserOptions, got {type(options).__name__}",
                parameter_name="options",
                parameter_value=options,
            )

        overrides = {
            name: value
            for name, value in (
                ("supported_tags", supported_tags),
                ("case_sensitive", case_sensitive),
                ("lenient", lenient),
            )
            if value is not None
        }
        base = options or BBCodeParserOptions()
        self.options: BBCodeParserOptions = base.create_updated(**overrides) if overrides else base
        self._supported_names = frozenset(self._normalize(tag) for tag in self.options.supported_tags)
        self._handlers: dict[ParserState, Callable[[_ParseContext, str, int], ParserState]] = {
            ParserState.TEXT: self._handle_text,
            ParserState.TAG_NAME: self._handle_tag_name,
            ParserState.TAG_VALUE: self._handle_tag_value,
            ParserState.ATTRIBUTE_NAME: self._handle_attribute_name,
            ParserState.ATTRIBUTE_VALUE: self._handle_attribute_value,
        }

    @classmethod
    def from_options(cls, options: BBCodeParserOptions) -> BBCodeParser:
        """Create a parser configured entirely by ``options``."""
        return cls(options=options)

    @property
    def supported_tags(self) -> tuple[str, ...]:
        return self.options.supported_tags

    @property
    def case_sensitive(self) -> bool:
        return self.options.case_sensitive

    @property
    def lenient(self) -> bool:
        return self.options.lenient

    def _normalize(self, name: str) -> str:
        return name if self.options.case_sensitive else name.lower()

    def _names_match(self, left: str, right: str) -> bool:
        return self._normalize(left) == self._normalize(right)

    def parse(self, text: str) -> Root:
        """Parse a BBCode fragment.

        Parameters
        ----------
        text : str
            BBCode source

        Returns
        -------
        Root
            Tree whose ``to_bbcode()`` equals ``text``

        Raises
        ------
        MismatchedClosingTagError
            In strict mode, if a closing tag does not match the innermost
            open tag
        UnclosedTagsError
            In strict mode, if tags are still open at the end of the input
        ValidationError
            If ``text`` is not a string

        Examples
        --------
            >>> root = BBCodeParser(["list", "*"]).parse("[list][*]A[*]B[/list]")
            >>> [type(child).__name__ for child in root.children[0].children]
            ['ListItem', 'ListItem']

        """
        if not isinstance(text, str):
            raise ValidationError(
                f"BBCode input must be a string, got {type(text).__name__}",
                parameter_name="text",
                parameter_value=text,
            )

        ctx = _ParseContext()
        for position, char in enumerate(text):
            if char in QUOTE_CHARACTERS:
                ctx.quoted = not ctx.quoted
            ctx.state = self._handlers[ctx.state](ctx, char, position)

        self._finish_input(ctx)
        return ctx.stack[0]  # type: ignore[return-value]

    def parse_file(self, path: Union[str, Path], encoding: str = "utf-8") -> Root:
        """Read a file and parse its contents.

        Parameters
        ----------
        path : str or Path
            File to read
        encoding : str, default "utf-8"
            Text encoding of the file

        Returns
        -------
        Root
            Parsed tree

        """
        return self.parse(Path(path).read_text(encoding=encoding))

    # ------------------------------------------------------------------
    # State handlers: each consumes one character and returns the next state
    # ------------------------------------------------------------------

    def _handle_text(self, ctx: _ParseContext, char: str, position: int) -> ParserState:
        if char != TAG_OPEN:
            ctx.text.append(char)
            return ParserState.TEXT

        ctx.flush_text()
        ctx.begin_tag()
        return ParserState.TAG_NAME

    def _handle_tag_name(self, ctx: _ParseContext, char: str, position: int) -> ParserState:
        if not ctx.tag_name and not ctx.closing:
            if char == LIST_ITEM_NODE_NAME:
                self._close_open_list_item(ctx)
                ctx.tag_name = char
                return ParserState.TAG_NAME
            if char == CLOSING_TAG_MARKER:
                ctx.closing = True
                return ParserState.TAG_NAME

        if char not in TAG_NAME_TERMINATORS:
            ctx.tag_name += char
            return ParserState.TAG_NAME

        if not self._accepts_tag(ctx, char):
            logger.debug("Treating %r as text at position %d", ctx.tag_source() + char, position)
            ctx.text.append(ctx.tag_source() + char)
            return ParserState.TEXT

        if char == VALUE_SEPARATOR:
            ctx.tag_value = ""
            return ParserState.TAG_VALUE
        if char == ATTRIBUTE_SEPARATOR:
            return ParserState.ATTRIBUTE_NAME

        if ctx.closing:
            self._close_tag(ctx, position)
        elif ctx.tag_name == LIST_ITEM_NODE_NAME:
            ctx.stack.append(ListItem())
        else:
            ctx.stack.append(Tag(name=ctx.tag_name))
            if ctx.tag_name.lower() == CODE_TAG_NAME:
                ctx.in_code = True
        return ParserState.TEXT

    def _handle_tag_value(self, ctx: _ParseContext, char: str, position: int) -> ParserState:
        if char == TAG_CLOSE:
            return self._open_tag(ctx)
        if char == ATTRIBUTE_SEPARATOR and not ctx.quoted:
            return ParserState.ATTRIBUTE_NAME

        ctx.tag_value = (ctx.tag_value or "") + char
        return ParserState.TAG_VALUE

    def _handle_attribute_name(self, ctx: _ParseContext, char: str, position: int) -> ParserState:
        if char == VALUE_SEPARATOR:
            return ParserState.ATTRIBUTE_VALUE

        ctx.attribute_name += char
        return ParserState.ATTRIBUTE_NAME

    def _handle_attribute_value(self, ctx: _ParseContext, char: str, position: int) -> ParserState:
        if char == TAG_CLOSE:
            ctx.commit_attribute()
            return self._open_tag(ctx)
        if char == ATTRIBUTE_SEPARATOR and not ctx.quoted:
            ctx.commit_attribute()
            return ParserState.ATTRIBUTE_NAME

        ctx.attribute_value += char
        return ParserState.ATTRIBUTE_VALUE

    # ------------------------------------------------------------------
    # Tree building
    # ------------------------------------------------------------------

    def _accepts_tag(self, ctx: _ParseContext, terminator: str) -> bool:
        """Decide whether the scanned name starts a real tag.

        Inside a code region only code tags count, and closing tags may not
        carry a value or attributes.
        """
        if self._normalize(ctx.tag_name) not in self._supported_names:
            return False
        if ctx.in_code and ctx.tag_name.lower() != CODE_TAG_NAME:
            return False
        return not (ctx.closing and terminator != TAG_CLOSE)

    def _close_open_list_item(self, ctx: _ParseContext) -> None:
        if isinstance(ctx.top, ListItem):
            item = ctx.stack.pop()
            ctx.top.adopt_child(item)

    def _open_tag(self, ctx: _ParseContext) -> ParserState:
        """Push the tag described by the buffers after its closing ``]``."""
        keys = [key for key, _ in ctx.attributes]
        if len(set(keys)) != len(keys):
            logger.debug("Tag [%s] repeats an attribute; treating it as text", ctx.tag_name)
            ctx.text.append(ctx.tag_source(include_pending=False) + TAG_CLOSE)
            return ParserState.TEXT

        ctx.stack.append(Tag(name=ctx.tag_name, value=ctx.tag_value, attributes=dict(ctx.attributes)))
        return ParserState.TEXT

    def _close_tag(self, ctx: _ParseContext, position: int) -> None:
        """Attach the frame closed by ``[/name]`` to its parent.

        A list item left open directly inside the frame being closed by
        ``[/list]`` is folded into it first.
        """
        name = ctx.tag_name
        stack = ctx.stack
        fold_item = name.lower() == LIST_TAG_NAME and isinstance(ctx.top, ListItem) and len(stack) > 2
        candidate_index = len(stack) - 2 if fold_item else len(stack) - 1
        candidate = stack[candidate_index]

        if candidate_index > 0 and self._names_match(candidate.name, name):
            if fold_item:
                self._close_open_list_item(ctx)
            self._attach_closed_frame(ctx, name)
            return

        if not self.options.lenient:
            raise MismatchedClosingTagError(expected=candidate.name, found=name, position=position)

        match_index = next(
            (index for index in range(len(stack) - 1, 0, -1) if self._names_match(stack[index].name, name)),
            None,
        )
        if match_index is None:
            logger.debug("Closing tag [/%s] at position %d matches no open tag; keeping it as text", name, position)
            ctx.text.append(f"{TAG_OPEN}{CLOSING_TAG_MARKER}{name}{TAG_CLOSE}")
            return

        while len(stack) - 1 > match_index:
            self._flatten_top(ctx)
        self._attach_closed_frame(ctx, name)

    def _attach_closed_frame(self, ctx: _ParseContext, closing_name: str) -> None:
        frame = ctx.stack.pop()
        if isinstance(frame, ListItem):
            frame.closing_name = closing_name
        elif isinstance(frame, Tag) and frame.name != closing_name:
            frame.closing_name = closing_name
        if frame.name.lower() == CODE_TAG_NAME:
            ctx.in_code = False
        ctx.top.adopt_child(frame)

    def _flatten_top(self, ctx: _ParseContext) -> None:
        """Replace the innermost open frame with its source text."""
        frame = ctx.stack.pop()
        logger.debug("Flattening unclosed [%s] into text", frame.name)
        ctx.top.adopt_child(Text(text=frame.opening_tag() + frame.render_children()))  # type: ignore[union-attr]

    def _finish_input(self, ctx: _ParseContext) -> None:
        ctx.flush_text()
        if ctx.state is not ParserState.TEXT:
            ctx.top.adopt_child(Text(text=ctx.tag_source()))

        unclosed = len(ctx.stack) - 1
        if not unclosed:
            return
        if not self.options.lenient:
            raise UnclosedTagsError(count=unclosed, innermost_name=ctx.top.name)
        while len(ctx.stack) > 1:
            self._flatten_top(ctx)


__all__ = ["BBCodeParser", "ParserState"]
