#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for BBCodeParserOptions."""

import dataclasses

import pytest

from bbcode_ast.constants import DEFAULT_SUPPORTED_TAGS
from bbcode_ast.exceptions import ValidationError
from bbcode_ast.options import BBCodeParserOptions


@pytest.mark.unit
class TestBBCodeParserOptions:
    """Tests for option defaults, normalization and validation."""

    def test_defaults(self):
        options = BBCodeParserOptions()
        assert options.supported_tags == DEFAULT_SUPPORTED_TAGS
        assert options.case_sensitive is False
        assert options.lenient is False

    def test_default_tag_set(self):
        assert set(DEFAULT_SUPPORTED_TAGS) == {
            "b", "u", "i", "s", "center", "right", "color", "size", "yt", "list", "url", "img", "spoiler", "code",
        }

    @pytest.mark.parametrize("tags", [["b", "i"], ("b", "i"), (name for name in ("b", "i"))])
    def test_supported_tags_stored_as_tuple(self, tags):
        assert BBCodeParserOptions(supported_tags=tags).supported_tags == ("b", "i")

    def test_options_are_frozen(self):
        options = BBCodeParserOptions()
        with pytest.raises(dataclasses.FrozenInstanceError):
            options.lenient = True  # type: ignore[misc]

    def test_create_updated_returns_new_instance(self):
        options = BBCodeParserOptions(supported_tags=("b",))
        updated = options.create_updated(lenient=True)
        assert updated is not options
        assert updated.lenient is True
        assert updated.supported_tags == ("b",)
        assert options.lenient is False

    def test_create_updated_validates(self):
        with pytest.raises(ValidationError):
            BBCodeParserOptions().create_updated(supported_tags=["bad]"])

    def test_empty_tag_set_is_allowed(self):
        assert BBCodeParserOptions(supported_tags=()).supported_tags == ()

    @pytest.mark.parametrize("tags", ["b", b"b", 5, None])
    def test_rejects_non_iterable_or_string(self, tags):
        with pytest.raises(ValidationError) as exc_info:
            BBCodeParserOptions(supported_tags=tags)
        assert exc_info.value.parameter_name == "supported_tags"

    @pytest.mark.parametrize("tag", ["", 3, "/b", "a]", "a=b", "a b"])
    def test_rejects_unusable_tag_names(self, tag):
        with pytest.raises(ValidationError) as exc_info:
            BBCodeParserOptions(supported_tags=("b", tag))
        assert exc_info.value.parameter_value == tag

    def test_field_metadata_has_help(self):
        for options_field in dataclasses.fields(BBCodeParserOptions):
            assert options_field.metadata["help"]
