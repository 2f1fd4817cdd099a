"""
Swift-specific type system for code generation.

Maps schema type tags to Swift type names. Unrecognized tags degrade to
the configured unknown type rather than failing.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ...core.schema import FieldType, SchemaProperty


@dataclass(frozen=True)
class SwiftTypeConfig:
    """Names used for each schema type."""

    string_type: str = "String"
    int_type: str = "Int"
    double_type: str = "Double"
    bool_type: str = "Bool"
    unknown_type: str = "Any"

    # Schema type tag -> Swift type name, checked before the table
    type_overrides: Dict[str, str] = field(default_factory=dict)


class SwiftTypeMapper:
    """Maps schema property descriptors to Swift type names."""

    def __init__(self, config: Optional[SwiftTypeConfig] = None):
        """Initialize with type configuration."""
        self.config = config or SwiftTypeConfig()
        self._primitive_types = self._build_primitive_type_map()

    def _build_primitive_type_map(self) -> Dict[FieldType, str]:
        return {
            FieldType.STRING: self.config.string_type,
            FieldType.INTEGER: self.config.int_type,
            FieldType.NUMBER: self.config.double_type,
            FieldType.BOOLEAN: self.config.bool_type,
        }

    def map_property(self, prop: SchemaProperty) -> str:
        """
        Map a property descriptor to a Swift type name.

        Arrays recurse into their element descriptor; an array without one
        becomes an array of the unknown type.
        """
        if prop.type in self.config.type_overrides:
            return self.config.type_overrides[prop.type]

        field_type = prop.field_type

        if field_type in self._primitive_types:
            return self._primitive_types[field_type]

        if field_type == FieldType.ARRAY:
            if prop.items is not None:
                return f"[{self.map_property(prop.items)}]"
            return f"[{self.config.unknown_type}]"

        return self.config.unknown_type

    def validation_hints(self, prop: SchemaProperty, where: str) -> List[str]:
        """Warnings about lossy mappings for one property."""
        hints = []
        if prop.type in self.config.type_overrides:
            return hints

        if prop.field_type == FieldType.UNKNOWN:
            hints.append(
                f"Unknown type {prop.type!r} in {where}, "
                f"using {self.config.unknown_type}"
            )
        elif prop.field_type == FieldType.OBJECT:
            hints.append(
                f"Inline object in {where} is not generated, "
                f"using {self.config.unknown_type}"
            )
        elif prop.field_type == FieldType.ARRAY:
            if prop.items is None:
                hints.append(
                    f"Array {where} has no element type, "
                    f"using [{self.config.unknown_type}]"
                )
            else:
                hints.extend(self.validation_hints(prop.items, f"{where}[]"))
        return hints


_default_mapper = SwiftTypeMapper()


def swift_type(prop: SchemaProperty) -> str:
    """Map a property with the default type configuration."""
    return _default_mapper.map_property(prop)
