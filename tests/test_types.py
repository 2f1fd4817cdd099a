"""Tests for the schema type -> Swift type mapping."""

import pytest

from swiftgen.codegen.core.schema import SchemaProperty
from swiftgen.codegen.languages.swift.types import (
    SwiftTypeConfig,
    SwiftTypeMapper,
    swift_type,
)


class TestSwiftType:
    """Default type table."""

    @pytest.mark.parametrize(
        "tag, expected",
        [
            ("string", "String"),
            ("integer", "Int"),
            ("number", "Double"),
            ("boolean", "Bool"),
        ],
    )
    def test_primitives(self, tag, expected):
        assert swift_type(SchemaProperty(type=tag)) == expected

    def test_array_of_strings(self):
        prop = SchemaProperty(type="array", items=SchemaProperty(type="string"))
        assert swift_type(prop) == "[String]"

    def test_nested_arrays(self):
        prop = SchemaProperty(
            type="array",
            items=SchemaProperty(type="array", items=SchemaProperty(type="integer")),
        )
        assert swift_type(prop) == "[[Int]]"

    def test_array_without_items(self):
        assert swift_type(SchemaProperty(type="array")) == "[Any]"

    def test_array_of_unknown(self):
        prop = SchemaProperty(type="array", items=SchemaProperty(type="frobnicate"))
        assert swift_type(prop) == "[Any]"

    @pytest.mark.parametrize("tag", ["unknown", "frobnicate", "object", "null", None])
    def test_fallback(self, tag):
        assert swift_type(SchemaProperty(type=tag)) == "Any"

    def test_format_does_not_change_type(self):
        assert swift_type(SchemaProperty(type="string", format="date-time")) == "String"


class TestSwiftTypeMapper:
    """Configurable mapping."""

    def test_override(self):
        mapper = SwiftTypeMapper(SwiftTypeConfig(type_overrides={"integer": "Int64"}))
        assert mapper.map_property(SchemaProperty(type="integer")) == "Int64"

    def test_override_inside_array(self):
        mapper = SwiftTypeMapper(SwiftTypeConfig(type_overrides={"integer": "Int64"}))
        prop = SchemaProperty(type="array", items=SchemaProperty(type="integer"))
        assert mapper.map_property(prop) == "[Int64]"

    def test_override_unknown_tag(self):
        mapper = SwiftTypeMapper(SwiftTypeConfig(type_overrides={"uuid": "UUID"}))
        assert mapper.map_property(SchemaProperty(type="uuid")) == "UUID"

    def test_hints_for_unknown_type(self):
        hints = SwiftTypeMapper().validation_hints(
            SchemaProperty(type="frobnicate"), "Root.x"
        )
        assert len(hints) == 1
        assert "Root.x" in hints[0]

    def test_hints_for_untyped_array(self):
        hints = SwiftTypeMapper().validation_hints(SchemaProperty(type="array"), "Root.x")
        assert "no element type" in hints[0]

    def test_no_hints_for_primitives(self):
        assert SwiftTypeMapper().validation_hints(SchemaProperty(type="string"), "R.x") == []
