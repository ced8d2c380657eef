#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for AST serialization and deserialization."""
import json

import pytest

from bbcode_ast.ast import ListItem, Root, Tag, Text
from bbcode_ast.ast.serialization import ast_to_dict, ast_to_json, dict_to_ast, json_to_ast


@pytest.mark.unit
class TestAstToDictConversion:
    """Test AST to dictionary conversion."""

    def test_text_node_to_dict(self) -> None:
        """Test converting Text node to dict."""
        assert ast_to_dict(Text(text="Hello")) == {"node_type": "Text", "text": "Hello"}

    def test_tag_without_value_omits_value(self) -> None:
        result = ast_to_dict(Tag(name="b", children=[Text(text="x")]))

        assert result == {
            "node_type": "Tag",
            "name": "b",
            "attributes": {},
            "children": [{"node_type": "Text", "text": "x"}],
        }

    def test_tag_with_empty_value_keeps_value(self) -> None:
        assert ast_to_dict(Tag(name="color", value=""))["value"] == ""

    def test_attribute_order_is_kept(self) -> None:
        result = ast_to_dict(Tag(name="img", attributes={"width": "1", "height": "2", "alt": "x"}))
        assert list(result["attributes"]) == ["width", "height", "alt"]

    def test_closing_name_is_written_when_set(self) -> None:
        assert ast_to_dict(Tag(name="B", closing_name="b"))["closing_name"] == "b"
        assert "closing_name" not in ast_to_dict(Tag(name="b"))

    def test_list_item_to_dict(self) -> None:
        result = ast_to_dict(ListItem(children=[Text(text="A")], closing_name="*"))
        assert result == {
            "node_type": "ListItem",
            "children": [{"node_type": "Text", "text": "A"}],
            "closing_name": "*",
        }

    def test_unknown_node_raises(self) -> None:
        class Custom(Text):
            pass

        with pytest.raises(ValueError, match="Unknown node type"):
            ast_to_dict(Custom(text="x"))


@pytest.mark.unit
class TestDictToAstConversion:
    """Test dictionary to AST conversion."""

    def test_text_from_dict(self) -> None:
        assert dict_to_ast({"node_type": "Text", "text": "Hi"}) == Text(text="Hi")

    def test_tag_defaults(self) -> None:
        node = dict_to_ast({"node_type": "Tag", "name": "b"})
        assert node == Tag(name="b")
        assert node.value is None

    def test_empty_value_is_kept(self) -> None:
        node = dict_to_ast({"node_type": "Tag", "name": "color", "value": ""})
        assert node.value == ""

    def test_adjacent_text_entries_are_not_merged(self) -> None:
        node = dict_to_ast(
            {
                "node_type": "Root",
                "children": [{"node_type": "Text", "text": "a"}, {"node_type": "Text", "text": "b"}],
            }
        )
        assert node.children == [Text(text="a"), Text(text="b")]

    @pytest.mark.parametrize(
        "data, message",
        [
            ({"text": "x"}, "node_type"),
            ({"node_type": "Paragraph"}, "Unknown node type"),
            ({"node_type": "Tag"}, "name"),
            ({"node_type": "Tag", "name": "img", "attributes": {"w": 1}}, "attributes"),
            ({"node_type": "Text"}, "text"),
            ({"node_type": "Root", "children": "oops"}, "children"),
            ({"node_type": "Root", "children": [{"node_type": "Root"}]}, "cannot appear as a child"),
            ({"node_type": "Tag", "name": "b", "children": [{"node_type": "Root"}]}, "cannot appear as a child"),
            ({"node_type": "Tag", "name": "size", "value": 12}, "'value' must be a string or null"),
            ({"node_type": "Tag", "name": "b", "closing_name": ["B"]}, "'closing_name' must be a string or null"),
            ({"node_type": "ListItem", "closing_name": 1}, "'closing_name' must be a string or null"),
        ],
    )
    def test_malformed_input_raises(self, data, message) -> None:
        with pytest.raises(ValueError, match=message):
            dict_to_ast(data)

    def test_non_dict_raises(self) -> None:
        with pytest.raises(ValueError, match="Expected a dictionary"):
            dict_to_ast(["node_type", "Text"])  # type: ignore[arg-type]


@pytest.mark.unit
class TestJsonRoundTrip:
    """Test JSON serialization round trips."""

    def test_parsed_tree_round_trips(self, strict_parser) -> None:
        source = '[quote=JohnDoe message=1][B]Hi[/b][/quote][list][*]A[/*][*]B[/list][img alt="a b"][/img]'
        root = strict_parser.parse(source)

        restored = json_to_ast(ast_to_json(root, indent=2))

        assert restored == root
        assert restored.to_bbcode() == source

    def test_schema_version_is_written(self) -> None:
        data = json.loads(ast_to_json(Root()))
        assert data == {"schema_version": 1, "node_type": "Root", "children": []}

    def test_non_ascii_is_kept(self) -> None:
        assert "ünïcode" in ast_to_json(Text(text="ünïcode"))

    def test_missing_schema_version_is_accepted(self) -> None:
        assert json_to_ast('{"node_type": "Text", "text": "x"}') == Text(text="x")

    def test_unsupported_schema_version_raises(self) -> None:
        with pytest.raises(ValueError, match="Unsupported schema version"):
            json_to_ast('{"schema_version": 99, "node_type": "Root", "children": []}')

    def test_unsupported_schema_version_warns_without_validation(self, caplog) -> None:
        with caplog.at_level("WARNING", logger="bbcode_ast.ast.serialization"):
            node = json_to_ast('{"schema_version": 99, "node_type": "Root"}', validate_schema=False)
        assert node == Root()
        assert "Schema version 99" in caplog.text

    def test_invalid_json_raises(self) -> None:
        with pytest.raises(ValueError, match="Invalid JSON"):
            json_to_ast("{not json")

    def test_top_level_must_be_object(self) -> None:
        with pytest.raises(ValueError, match="JSON object"):
            json_to_ast("[]")
