"""Tests for $ref resolution."""

from unittest.mock import Mock, patch

import pytest
import requests

from swiftgen.codegen.core.resolver import (
    CyclicReferenceError,
    ReferenceLoadError,
    ReferenceResolver,
    UnresolvedReferenceError,
    node_key,
    split_reference,
)
from swiftgen.codegen.core.schema import (
    DecodeError,
    InvalidSchemaError,
    SchemaDocument,
    decode_schema,
)

from .conftest import NESTED_SCHEMA

ADDRESS_SCHEMA = {
    "title": "Address",
    "type": "object",
    "properties": {"street": {"type": "string"}},
    "required": ["street"],
}


class TestLocalReferences:
    """References into the enclosing document's definitions."""

    def test_resolves_definition(self):
        document = SchemaDocument.from_dict(NESTED_SCHEMA)
        resolved = ReferenceResolver().resolve(document.properties["address"], document)
        assert resolved is document.definitions["Address"]

    def test_accepts_token_string(self):
        document = SchemaDocument.from_dict(NESTED_SCHEMA)
        resolved = ReferenceResolver().resolve("#/definitions/Address", document)
        assert resolved.title == "Address"

    def test_lookup_walks_to_parent(self):
        document = SchemaDocument.from_dict(
            {
                "definitions": {
                    "A": {"properties": {"b": {"$ref": "#/definitions/B"}}},
                    "B": {"properties": {"x": {"type": "string"}}},
                }
            }
        )
        inner = document.definitions["A"]
        assert ReferenceResolver().resolve("#/definitions/B", inner) is document.definitions["B"]

    def test_missing_definition(self):
        document = SchemaDocument.from_dict(NESTED_SCHEMA)
        with pytest.raises(UnresolvedReferenceError) as exc_info:
            ReferenceResolver().resolve("#/definitions/Missing", document)
        assert exc_info.value.ref == "#/definitions/Missing"

    def test_unsupported_local_pointer(self):
        document = SchemaDocument.from_dict(NESTED_SCHEMA)
        with pytest.raises(UnresolvedReferenceError, match="unsupported"):
            ReferenceResolver().resolve("#/properties/name", document)

    def test_empty_reference(self):
        with pytest.raises(UnresolvedReferenceError):
            ReferenceResolver().resolve("", SchemaDocument())


class TestExternalReferences:
    """References to other schema files and URLs."""

    def test_absolute_path(self, write_schema):
        path = write_schema("address.json", ADDRESS_SCHEMA)
        resolved = ReferenceResolver().resolve(str(path), SchemaDocument())

        assert resolved.title == "Address"
        assert resolved.source == str(path.resolve())

    def test_relative_to_referencing_file(self, write_schema, tmp_path):
        write_schema("models/address.json", ADDRESS_SCHEMA)
        root = SchemaDocument(source=str(tmp_path / "models" / "root.json"))

        resolved = ReferenceResolver().resolve("address.json", root)
        assert resolved.title == "Address"

    def test_fragment_into_external_definitions(self, write_schema):
        path = write_schema(
            "shared.json",
            {"definitions": {"Address": ADDRESS_SCHEMA}},
        )
        resolved = ReferenceResolver().resolve(
            f"{path}#/definitions/Address", SchemaDocument()
        )
        assert resolved.title == "Address"
        assert resolved.pointer == "#/definitions/Address"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ReferenceLoadError) as exc_info:
            ReferenceResolver().resolve(str(tmp_path / "nope.json"), SchemaDocument())
        assert "nope.json" in str(exc_info.value)

    def test_external_document_must_decode(self, write_schema):
        path = write_schema("broken.json", "{oops")
        with pytest.raises(DecodeError):
            ReferenceResolver().resolve(str(path), SchemaDocument())

    def test_external_reference_property_needs_type(self, write_schema):
        path = write_schema(
            "linked.json",
            {"title": "Linked", "properties": {"next": {"$ref": "other.json"}}},
        )
        with pytest.raises(InvalidSchemaError, match="missing type in properties: next"):
            ReferenceResolver().resolve(str(path), SchemaDocument())

    def test_external_document_validated(self, write_schema):
        path = write_schema(
            "untyped.json", {"title": "Untyped", "properties": {"x": {}}}
        )
        with pytest.raises(InvalidSchemaError, match="missing type in properties: x"):
            ReferenceResolver().resolve(str(path), SchemaDocument())

    @patch("swiftgen.utils.requests.get")
    def test_url(self, mock_get):
        response = Mock()
        response.content = b'{"title": "Remote", "properties": {"id": {"type": "integer"}}}'
        mock_get.return_value = response

        resolved = ReferenceResolver(timeout=5).resolve(
            "https://example.com/remote.json", SchemaDocument()
        )

        assert resolved.title == "Remote"
        assert resolved.source == "https://example.com/remote.json"
        mock_get.assert_called_once_with("https://example.com/remote.json", timeout=5)

    @patch("swiftgen.utils.requests.get")
    def test_url_failure(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError("down")

        with pytest.raises(ReferenceLoadError, match="unable to load"):
            ReferenceResolver().resolve("https://example.com/x.json", SchemaDocument())

    @patch("swiftgen.utils.requests.get")
    def test_relative_to_remote_source(self, mock_get):
        response = Mock()
        response.content = b'{"title": "Address", "properties": {"street": {"type": "string"}}}'
        mock_get.return_value = response

        root = SchemaDocument(source="https://example.com/schemas/root.json")
        resolved = ReferenceResolver().resolve("address.json", root)

        assert resolved.title == "Address"
        mock_get.assert_called_once_with(
            "https://example.com/schemas/address.json", timeout=30
        )


class TestHelpers:
    def test_split_reference(self):
        assert split_reference("a.json#/definitions/X") == ("a.json", "#/definitions/X")
        assert split_reference("a.json") == ("a.json", "")

    def test_node_key_same_file_loaded_twice(self, write_schema):
        path = write_schema("address.json", ADDRESS_SCHEMA)
        first = decode_schema(path.read_bytes(), source=str(path))
        second = decode_schema(path.read_bytes(), source=str(path))

        assert first is not second
        assert node_key(first) == node_key(second)

    def test_node_key_distinguishes_definitions(self):
        document = SchemaDocument.from_dict(NESTED_SCHEMA)
        assert node_key(document) != node_key(document.definitions["Address"])

    def test_cycle_message(self):
        error = CyclicReferenceError(["a.json#", "b.json#", "a.json#"])
        assert str(error) == "cyclic $ref: a.json# -> b.json# -> a.json#"
        assert error.chain == ("a.json#", "b.json#", "a.json#")
