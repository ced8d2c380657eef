#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbcode_ast/ast/__init__.py
"""Abstract Syntax Tree (AST) for BBCode fragments.

This package provides the node classes produced by the parser, a visitor
base class with a debug tree formatter, traversal helpers and JSON
serialization.

Examples
--------
Build a tree by hand and render it:

    >>> from bbcode_ast.ast import Root, Tag, Text
    >>> root = Root()
    >>> root.add_child(Tag(name="color", value="red", children=[Text(text="Hi")]))
    >>> root.to_bbcode()
    '[color=red]Hi[/color]'

"""

from bbcode_ast.ast.nodes import ChildrenHolder, ContainerNode, ListItem, Node, Root, Tag, Text
from bbcode_ast.ast.serialization import ast_to_dict, ast_to_json, dict_to_ast, json_to_ast
from bbcode_ast.ast.utils import find_tags, walk
from bbcode_ast.ast.visitors import NodeVisitor, TreeFormatter

__all__ = [
    "ChildrenHolder",
    "ContainerNode",
    "ListItem",
    "Node",
    "Root",
    "Tag",
    "Text",
    "NodeVisitor",
    "TreeFormatter",
    "walk",
    "find_tags",
    "ast_to_dict",
    "ast_to_json",
    "dict_to_ast",
    "json_to_ast",
]
