#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_ast_nodes.py
"""Unit tests for AST node classes.

Tests cover:
- Node creation and sentinel names
- Text merging and copy-on-add semantics of add_child
- Deep cloning
- Canonical BBCode rendering

"""

import pytest

from bbcode_ast.ast import ChildrenHolder, ListItem, Node, Root, Tag, Text


@pytest.mark.unit
class TestNodeNames:
    """Tests for node names used in tag matching."""

    def test_tag_uses_its_own_name(self):
        assert Tag(name="url").name == "url"

    def test_sentinel_names(self):
        assert Root().name == "#root"
        assert Text(text="x").name == "#text"
        assert ListItem().name == "*"

    def test_containers_share_children_capability(self):
        for node in (Root(), Tag(name="b"), ListItem()):
            assert isinstance(node, ChildrenHolder)
            assert isinstance(node, Node)
        assert not isinstance(Text(text="x"), ChildrenHolder)


@pytest.mark.unit
class TestAddChild:
    """Tests for ChildrenHolder.add_child and adopt_child."""

    def test_adjacent_text_is_merged(self):
        root = Root()
        root.add_child(Text(text="Hello, "))
        root.add_child(Text(text="world"))
        assert root.children == [Text(text="Hello, world")]

    def test_text_after_tag_is_not_merged(self):
        tag = Tag(name="b")
        tag.add_child(Text(text="a"))
        tag.add_child(Tag(name="i"))
        tag.add_child(Text(text="b"))
        assert len(tag.children) == 3

    def test_merging_does_not_touch_the_appended_node(self):
        item = ListItem()
        first = Text(text="a")
        second = Text(text="b")
        item.add_child(first)
        item.add_child(second)
        assert first.text == "a"
        assert second.text == "b"
        assert item.children == [Text(text="ab")]

    def test_add_child_stores_a_copy(self):
        child = Tag(name="b", children=[Text(text="x")])
        root = Root()
        root.add_child(child)

        child.children.append(Text(text="later"))
        child.attributes["key"] = "value"

        assert root.children[0] == Tag(name="b", children=[Text(text="x")])
        assert root.children[0] is not child

    def test_same_node_can_be_added_to_two_trees(self):
        child = Text(text="shared")
        first, second = Root(), Root()
        first.add_child(child)
        second.add_child(child)
        first.children[0].text = "changed"
        assert second.children[0].text == "shared"

    def test_adopt_child_keeps_identity(self):
        child = Tag(name="b")
        root = Root()
        root.adopt_child(child)
        assert root.children[0] is child

    def test_adopt_child_merges_text(self):
        root = Root(children=[Text(text="a")])
        root.adopt_child(Text(text="b"))
        assert root.children == [Text(text="ab")]


@pytest.mark.unit
class TestClone:
    """Tests for deep cloning."""

    def test_clone_tag_is_independent(self):
        tag = Tag(name="img", value="x", attributes={"w": "1"}, children=[Text(text="a")], closing_name="IMG")
        copy = tag.clone()

        assert copy == tag
        copy.attributes["h"] = "2"
        copy.children[0].text = "b"
        assert tag.attributes == {"w": "1"}
        assert tag.children[0].text == "a"

    def test_clone_root_recurses(self):
        root = Root(children=[Tag(name="list", children=[ListItem(children=[Text(text="A")])])])
        copy = root.clone()
        assert copy == root
        assert copy.children[0].children[0] is not root.children[0].children[0]

    def test_clone_list_item_keeps_closing_name(self):
        item = ListItem(children=[Text(text="A")], closing_name="*")
        assert item.clone().closing_name == "*"


@pytest.mark.unit
class TestRendering:
    """Tests for canonical BBCode rendering."""

    def test_text_is_rendered_verbatim(self):
        assert Text(text="a [b] & <c>").to_bbcode() == "a [b] & <c>"

    def test_plain_tag(self):
        assert Tag(name="b", children=[Text(text="Hi")]).to_bbcode() == "[b]Hi[/b]"

    def test_tag_with_value(self):
        assert Tag(name="color", value="red").to_bbcode() == "[color=red][/color]"

    def test_tag_with_empty_value(self):
        assert Tag(name="color", value="").to_bbcode() == "[color=][/color]"

    def test_attributes_in_insertion_order_without_added_quotes(self):
        tag = Tag(name="img", attributes={"width": "100", "alt": '"a cat"', "height": "50"})
        assert tag.opening_tag() == '[img width=100 alt="a cat" height=50]'

    def test_value_and_attributes(self):
        tag = Tag(name="quote", value="JohnDoe", attributes={"message": "1"}, children=[Text(text="Hello")])
        assert tag.to_bbcode() == "[quote=JohnDoe message=1]Hello[/quote]"

    def test_closing_name_overrides_closing_spelling(self):
        tag = Tag(name="B", children=[Text(text="x")], closing_name="b")
        assert tag.to_bbcode() == "[B]x[/b]"
        assert tag.closing_tag() == "[/b]"

    def test_list_item_has_no_closing_tag(self):
        assert ListItem(children=[Text(text="A")]).to_bbcode() == "[*]A"

    def test_list_item_with_explicit_close(self):
        assert ListItem(children=[Text(text="A")], closing_name="*").to_bbcode() == "[*]A[/*]"

    def test_root_concatenates_children(self):
        root = Root(
            children=[
                Text(text="Say "),
                Tag(name="list", children=[ListItem(children=[Text(text="A")]), ListItem(children=[Text(text="B")])]),
            ]
        )
        assert root.to_bbcode() == "Say [list][*]A[*]B[/list]"

    def test_str_is_to_bbcode(self):
        tag = Tag(name="u", children=[Text(text="x")])
        assert str(tag) == tag.to_bbcode()
