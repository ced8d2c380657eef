#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbcode_ast/ast/nodes.py
"""AST node classes for BBCode fragments.

This module defines the node family produced by the BBCode parser. The tree
is deliberately thin: it records which tags appeared, their simple values
and attributes, and the text between them, without attaching any meaning
to individual tag names.

Node Hierarchy
--------------
All nodes inherit from the base Node class and support the visitor pattern.

Container nodes hold an ordered list of children:
    - Root (the whole fragment)
    - Tag (a bracket tag and its body)
    - ListItem (one ``[*]`` entry of a list)

Leaf nodes:
    - Text (a literal run of characters)

Every node renders back to BBCode with :meth:`Node.to_bbcode`. For a tree
produced by the parser, ``root.to_bbcode()`` reproduces the parsed input
exactly.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional

from bbcode_ast.constants import (
    CLOSING_TAG_MARKER,
    LIST_ITEM_NODE_NAME,
    ROOT_NODE_NAME,
    TAG_CLOSE,
    TAG_OPEN,
    TEXT_NODE_NAME,
    VALUE_SEPARATOR,
)


class Node(ABC):
    """Base class for all AST nodes.

    Attributes
    ----------
    name : str
        Tag name for ``Tag`` nodes, a fixed sentinel for every other kind

    """

    name: str

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass

    @abstractmethod
    def clone(self) -> Node:
        """Create a fully independent deep copy of this node."""
        pass

    @abstractmethod
    def to_bbcode(self) -> str:
        """Render this node and its descendants as BBCode."""
        pass

    def __str__(self) -> str:
        return self.to_bbcode()


class ChildrenHolder:
    """Capability mixin for nodes that own an ordered list of children.

    Appending a ``Text`` directly after another ``Text`` merges the two, so
    a holder never contains adjacent text siblings.
    """

    children: list[Node]

    def add_child(self, child: Node) -> None:
        """Append a deep copy of ``child``.

        Parameters
        ----------
        child : Node
            Node to append. The caller keeps ownership of the original;
            later changes to it do not affect this tree.

        """
        self.adopt_child(child.clone())

    def adopt_child(self, child: Node) -> None:
        """Append ``child`` itself, taking ownership of it.

        The caller must not keep using ``child`` afterwards. Text merging
        applies exactly as in :meth:`add_child`.

        Parameters
        ----------
        child : Node
            Node to append

        """
        if isinstance(child, Text) and self.children and isinstance(self.children[-1], Text):
            self.children[-1].text += child.text
            return
        self.children.append(child)

    def render_children(self) -> str:
        """Concatenate the BBCode rendering of every child."""
        return "".join(child.to_bbcode() for child in self.children)


@dataclass
class Root(ChildrenHolder, Node):
    """Root node of a parsed fragment.

    Parameters
    ----------
    children : list of Node, default = empty list
        Top-level nodes of the fragment

    """

    name: ClassVar[str] = ROOT_NODE_NAME

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this root.

        Returns
        -------
        Any
            Result from visitor.visit_root(self)

        """
        return visitor.visit_root(self)

    def clone(self) -> Root:
        """Create a deep copy of the root and all descendants."""
        return Root(children=[child.clone() for child in self.children])

    def to_bbcode(self) -> str:
        """Render the fragment; equals the parser input for parsed trees."""
        return self.render_children()


@dataclass
class Tag(ChildrenHolder, Node):
    """A bracket tag and its body.

    Parameters
    ----------
    name : str
        Tag name as written in the opening tag (e.g. ``b``, ``url``)
    value : str or None, default = None
        Simple value, e.g. ``red`` in ``[color=red]``. ``None`` means the
        tag had no ``=``; an empty string is a present but empty value.
    attributes : dict, default = empty dict
        Space-separated attributes in source order, e.g. ``{"w": "10"}``
        for ``[img w=10]``. Quotes are kept verbatim in the values.
    children : list of Node, default = empty list
        Body of the tag
    closing_name : str or None, default = None
        Spelling used by the closing tag when it differs from ``name``,
        which only happens with case-insensitive parsing (``[B]..[/b]``)

    """

    name: str
    value: Optional[str] = None
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)
    closing_name: Optional[str] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this tag.

        Returns
        -------
        Any
            Result from visitor.visit_tag(self)

        """
        return visitor.visit_tag(self)

    def clone(self) -> Tag:
        """Create a deep copy of the tag, its attributes and its children."""
        return Tag(
            name=self.name,
            value=self.value,
            attributes=dict(self.attributes),
            children=[child.clone() for child in self.children],
            closing_name=self.closing_name,
        )

    def opening_tag(self) -> str:
        """Render the opening tag including value and attributes.

        Returns
        -------
        str
            Text such as ``[quote=JohnDoe message=1]``

        """
        parts = [TAG_OPEN, self.name]
        if self.value is not None:
            parts.append(f"{VALUE_SEPARATOR}{self.value}")
        for key, value in self.attributes.items():
            parts.append(f" {key}{VALUE_SEPARATOR}{value}")
        parts.append(TAG_CLOSE)
        return "".join(parts)

    def closing_tag(self) -> str:
        """Render the closing tag, e.g. ``[/b]``."""
        return f"{TAG_OPEN}{CLOSING_TAG_MARKER}{self.closing_name or self.name}{TAG_CLOSE}"

    def to_bbcode(self) -> str:
        """Render the tag, its body and its closing tag."""
        return self.opening_tag() + self.render_children() + self.closing_tag()


@dataclass
class ListItem(ChildrenHolder, Node):
    """One ``[*]`` entry inside a list.

    List items are normally closed implicitly by the next ``[*]`` or by the
    enclosing ``[/list]``, so no closing tag is rendered unless the source
    had one.

    Parameters
    ----------
    children : list of Node, default = empty list
        Body of the list item
    closing_name : str or None, default = None
        Set when the item was closed explicitly with ``[/*]``

    """

    name: ClassVar[str] = LIST_ITEM_NODE_NAME

    children: list[Node] = field(default_factory=list)
    closing_name: Optional[str] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list item.

        Returns
        -------
        Any
            Result from visitor.visit_list_item(self)

        """
        return visitor.visit_list_item(self)

    def clone(self) -> ListItem:
        """Create a deep copy of the list item and its children."""
        return ListItem(children=[child.clone() for child in self.children], closing_name=self.closing_name)

    def opening_tag(self) -> str:
        """Render the item marker, ``[*]``."""
        return f"{TAG_OPEN}{LIST_ITEM_NODE_NAME}{TAG_CLOSE}"

    def to_bbcode(self) -> str:
        """Render the item marker followed by the item body."""
        rendered = self.opening_tag() + self.render_children()
        if self.closing_name is not None:
            rendered += f"{TAG_OPEN}{CLOSING_TAG_MARKER}{self.closing_name}{TAG_CLOSE}"
        return rendered


@dataclass
class Text(Node):
    """A literal run of characters. Never a tag.

    Parameters
    ----------
    text : str
        The characters, unescaped

    """

    name: ClassVar[str] = TEXT_NODE_NAME

    text: str

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this text.

        Returns
        -------
        Any
            Result from visitor.visit_text(self)

        """
        return visitor.visit_text(self)

    def clone(self) -> Text:
        """Create a copy of the text node."""
        return Text(text=self.text)

    def to_bbcode(self) -> str:
        """Return the text unchanged."""
        return self.text


ContainerNode = Root | Tag | ListItem
