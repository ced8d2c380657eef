#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbcode_ast/ast/visitors.py
"""Visitor pattern implementation for AST traversal.

This module provides the visitor base class for processing BBCode AST
nodes, plus :class:`TreeFormatter`, a visitor producing an indented debug
dump of a tree. The dump is for humans only; the canonical text form of a
tree is :meth:`bbcode_ast.ast.nodes.Node.to_bbcode`.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from bbcode_ast.ast.nodes import ListItem, Node, Root, Tag, Text


class NodeVisitor(ABC):
    """Abstract base class for AST node visitors.

    Subclasses implement one visit_* method per node kind. Traversal into
    children is up to the visitor.

    Examples
    --------
    Simple visitor that counts tags:

        >>> class TagCounter(NodeVisitor):
        ...     def __init__(self):
        ...         self.count = 0
        ...     def visit_root(self, node):
        ...         for child in node.children:
        ...             child.accept(self)
        ...     def visit_tag(self, node):
        ...         self.count += 1
        ...         for child in node.children:
        ...             child.accept(self)
        ...     visit_list_item = visit_root
        ...     def visit_text(self, node):
        ...         pass

    """

    @abstractmethod
    def visit_root(self, node: Root) -> Any:
        """Visit a Root node."""
        pass

    @abstractmethod
    def visit_tag(self, node: Tag) -> Any:
        """Visit a Tag node."""
        pass

    @abstractmethod
    def visit_list_item(self, node: ListItem) -> Any:
        """Visit a ListItem node."""
        pass

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text node."""
        pass


class TreeFormatter(NodeVisitor):
    """Render a tree as an indented, brace-delimited outline.

    Parameters
    ----------
    indent : str, default = two spaces
        String repeated once per nesting level

    Examples
    --------
        >>> from bbcode_ast import parse
        >>> print(TreeFormatter().format(parse("[b]Hello, world![/b]")))
        Root {
          Tag [b] {
            Text {
              Hello, world!
            }
          }
        }

    """

    def __init__(self, indent: str = "  ") -> None:
        self.indent = indent
        self._depth = 0
        self._lines: list[str] = []

    def format(self, node: Node) -> str:
        """Produce the outline for ``node`` and its descendants."""
        self._depth = 0
        self._lines = []
        node.accept(self)
        return "\n".join(self._lines)

    def _emit(self, line: str) -> None:
        self._lines.append(f"{self.indent * self._depth}{line}")

    def _block(self, header: str, children: list[Node]) -> None:
        self._emit(f"{header} {{")
        self._depth += 1
        for child in children:
            child.accept(self)
        self._depth -= 1
        self._emit("}")

    def visit_root(self, node: Root) -> None:
        """Emit the root block."""
        self._block("Root", node.children)

    def visit_tag(self, node: Tag) -> None:
        """Emit a tag block with its value and attributes in parentheses."""
        details = []
        if node.value is not None:
            details.append(node.value)
        details.extend(f"{key}={value}" for key, value in node.attributes.items())
        header = f"Tag [{node.name}]"
        if details:
            header += f" ({', '.join(details)})"
        self._block(header, node.children)

    def visit_list_item(self, node: ListItem) -> None:
        """Emit a list item block."""
        self._block(f"ListItem [{node.name}]", node.children)

    def visit_text(self, node: Text) -> None:
        """Emit a text block, one output line per source line."""
        self._emit("Text {")
        self._depth += 1
        for line in node.text.split("\n"):
            self._emit(line)
        self._depth -= 1
        self._emit("}")
