"""
Core schema representation for code generation.

Decodes JSON Schema documents into a normalized internal format that the
generators work with. Only the subset of JSON Schema the generator
understands is modelled: title, type, properties, required, definitions.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class SchemaError(Exception):
    """Base exception for schema decoding and resolution errors."""

    pass


class DecodeError(SchemaError):
    """Raised when a buffer is not a well-formed schema document."""

    def __init__(self, message: str, source: Optional[str] = None):
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


class InvalidSchemaError(SchemaError):
    """Raised when a loaded schema fails validation."""

    pass


class FieldType(Enum):
    """Schema type tags understood by the generators."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    UNKNOWN = "unknown"

    @classmethod
    def from_tag(cls, tag: Optional[str]) -> "FieldType":
        """Map a raw type tag to a FieldType, UNKNOWN if unrecognized."""
        if tag is None:
            return cls.UNKNOWN
        try:
            return cls(tag)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class SchemaProperty:
    """Represents a single property descriptor in a schema."""

    type: Optional[str] = None
    format: Optional[str] = None
    default: Any = None
    ref: Optional[str] = None
    items: Optional["SchemaProperty"] = None
    description: Optional[str] = None

    @property
    def field_type(self) -> FieldType:
        return FieldType.from_tag(self.type)

    @property
    def is_reference(self) -> bool:
        return bool(self.ref)

    @classmethod
    def from_dict(
        cls, data: Any, path: str = "", source: Optional[str] = None
    ) -> "SchemaProperty":
        """Build a property from a parsed JSON object."""
        if not isinstance(data, dict):
            raise DecodeError(
                f"property '{path}' must be an object, got {_json_type(data)}",
                source,
            )

        items = data.get("items")
        return cls(
            type=_optional_str(data, "type", path, source),
            format=_optional_str(data, "format", path, source),
            default=data.get("default"),
            ref=_optional_str(data, "$ref", path, source),
            items=(
                cls.from_dict(items, f"{path}.items", source)
                if items is not None
                else None
            ),
            description=_optional_str(data, "description", path, source),
        )


@dataclass
class SchemaDocument:
    """Represents a named schema: one generated type."""

    title: Optional[str] = None
    type: Optional[str] = None
    properties: Dict[str, SchemaProperty] = field(default_factory=dict)
    required: List[str] = field(default_factory=list)
    definitions: Dict[str, "SchemaDocument"] = field(default_factory=dict)
    description: Optional[str] = None

    # Where the document was loaded from (path or URL), None for in-memory input
    source: Optional[str] = field(default=None, compare=False)

    # JSON pointer of this document inside its source
    pointer: str = field(default="#", compare=False)

    # Enclosing document when this is a nested definition
    parent: Optional["SchemaDocument"] = field(
        default=None, compare=False, repr=False
    )

    @property
    def root(self) -> "SchemaDocument":
        """Top of the enclosing-document chain."""
        document = self
        while document.parent is not None:
            document = document.parent
        return document

    def is_required(self, name: str) -> bool:
        return name in self.required

    def missing_types(self) -> List[str]:
        """Names of properties without a type tag, references included."""
        return [name for name, prop in self.properties.items() if not prop.type]

    @classmethod
    def from_dict(
        cls,
        data: Any,
        source: Optional[str] = None,
        parent: Optional["SchemaDocument"] = None,
        path: str = "",
        pointer: str = "#",
    ) -> "SchemaDocument":
        """
        Build a document from a parsed JSON object.

        Args:
            data: Parsed JSON value
            source: Path or URL the document came from
            parent: Enclosing document for nested definitions
            path: Location inside the source, used in error messages
            pointer: JSON pointer of the document inside the source

        Returns:
            SchemaDocument

        Raises:
            DecodeError: If the value does not have the expected shape
        """
        where = path or "document"
        if not isinstance(data, dict):
            raise DecodeError(
                f"{where} must be an object, got {_json_type(data)}", source
            )

        properties = _optional_mapping(data, "properties", where, source)
        required = data.get("required")
        if required is None:
            required = []
        elif not isinstance(required, list) or not all(
            isinstance(name, str) for name in required
        ):
            raise DecodeError(f"{where}.required must be a list of strings", source)

        document = cls(
            title=_optional_str(data, "title", where, source),
            type=_optional_str(data, "type", where, source),
            required=list(required),
            description=_optional_str(data, "description", where, source),
            source=source,
            pointer=pointer,
            parent=parent,
        )

        for name, value in properties.items():
            document.properties[name] = SchemaProperty.from_dict(
                value, f"{where}.properties.{name}", source
            )

        definitions = _optional_mapping(data, "definitions", where, source)
        for name, value in definitions.items():
            document.definitions[name] = cls.from_dict(
                value,
                source=source,
                parent=document,
                path=f"{where}.definitions.{name}",
                pointer=f"{pointer.rstrip('/')}/definitions/{name}",
            )

        return document


def decode_schema(
    data: Union[bytes, str], source: Optional[str] = None
) -> SchemaDocument:
    """
    Decode a serialized schema document.

    Args:
        data: Raw JSON bytes or text
        source: Path or URL the data came from

    Returns:
        SchemaDocument

    Raises:
        DecodeError: If the data is not JSON or does not match the schema shape
    """
    try:
        parsed = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodeError(f"invalid JSON: {e}", source) from e

    return SchemaDocument.from_dict(parsed, source=source)


def validate_loaded_schema(document: SchemaDocument) -> SchemaDocument:
    """
    Check a loaded document for properties without a type tag.

    Raises:
        InvalidSchemaError: If any declared property lacks a type
    """
    missing = document.missing_types()
    if missing:
        where = document.source or document.title or "schema"
        raise InvalidSchemaError(
            f"invalid schema {where}: missing type in properties: {', '.join(missing)}"
        )
    return document


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def _optional_str(
    data: Dict[str, Any], key: str, where: str, source: Optional[str]
) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise DecodeError(
            f"{where}.{key} must be a string, got {_json_type(value)}", source
        )
    return value


def _optional_mapping(
    data: Dict[str, Any], key: str, where: str, source: Optional[str]
) -> Dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise DecodeError(
            f"{where}.{key} must be an object, got {_json_type(value)}", source
        )
    return value
