#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbcode_ast/ast/utils.py
"""Traversal helpers for BBCode AST trees."""

from __future__ import annotations

from collections.abc import Iterator

from bbcode_ast.ast.nodes import ChildrenHolder, Node, Tag


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants in depth-first pre-order.

    Parameters
    ----------
    node : Node
        Starting node (included in the output)

    Yields
    ------
    Node
        Each node of the subtree, parents before children, siblings in order

    """
    pending: list[Node] = [node]
    while pending:
        current = pending.pop()
        yield current
        if isinstance(current, ChildrenHolder):
            pending.extend(reversed(current.children))


def find_tags(node: Node, name: str, case_sensitive: bool = False) -> list[Tag]:
    """Collect every ``Tag`` named ``name`` in the subtree, in document order.

    Parameters
    ----------
    node : Node
        Root of the subtree to search
    name : str
        Tag name to look for
    case_sensitive : bool, default False
        Whether to compare names case-sensitively

    Returns
    -------
    list of Tag
        Matching tags

    """
    wanted = name if case_sensitive else name.lower()
    return [
        candidate
        for candidate in walk(node)
        if isinstance(candidate, Tag) and (candidate.name if case_sensitive else candidate.name.lower()) == wanted
    ]
