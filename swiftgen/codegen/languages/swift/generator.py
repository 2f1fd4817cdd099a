"""
Swift code generator implementation.

Generates Codable Swift structs from JSON schema documents, following
``$ref`` links to local definitions and external documents.
"""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple
from urllib.parse import urlparse

from ....logging_config import get_logger
from ...core.config import FIELD_ORDERS, REQUIRED_MATCH_MODES, GeneratorConfig
from ...core.generator import CodeGenerator, GeneratorError
from ...core.naming import NamingCase
from ...core.resolver import (
    DEFINITIONS_PREFIX,
    CyclicReferenceError,
    ReferenceResolver,
    is_local_reference,
    node_key,
    split_reference,
)
from ...core.schema import SchemaDocument, SchemaProperty
from .naming import create_swift_sanitizer, shadows_builtin
from .types import SwiftTypeConfig, SwiftTypeMapper

logger = get_logger(__name__)


class SwiftGenerator(CodeGenerator):
    """Code generator for Swift structs."""

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        resolver: Optional[ReferenceResolver] = None,
    ):
        """Initialize Swift generator with configuration."""
        super().__init__(config)
        self._check_config()

        self.sanitizer = create_swift_sanitizer()
        self.type_config = SwiftTypeConfig(
            type_overrides=dict(self.config.type_overrides)
        )
        self.type_mapper = SwiftTypeMapper(self.type_config)
        self.resolver = resolver or ReferenceResolver()

        # Type name -> node key of the schema it was generated from
        self.generated_types: Dict[str, str] = {}

        # Node key -> type name it was declared as
        self._type_names: Dict[str, str] = {}
        self._declarations: List[str] = []
        self._active: List[str] = []

    def _check_config(self):
        if self.config.required_match not in REQUIRED_MATCH_MODES:
            raise GeneratorError(
                f"required_match must be one of {sorted(REQUIRED_MATCH_MODES)}, "
                f"got {self.config.required_match!r}"
            )
        if self.config.field_order not in FIELD_ORDERS:
            raise GeneratorError(
                f"field_order must be one of {sorted(FIELD_ORDERS)}, "
                f"got {self.config.field_order!r}"
            )

    @property
    def language_name(self) -> str:
        return "swift"

    @property
    def file_extension(self) -> str:
        return ".swift"

    def get_template_directory(self) -> Optional[Path]:
        """Return the Swift templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    def type_name(
        self, document: SchemaDocument, fallback: Optional[str] = None
    ) -> str:
        """Struct name: the title, else the fallback, else the root name."""
        raw = document.title or fallback or self.config.root_name
        return self.sanitizer.convert(raw, NamingCase.PASCAL_CASE)

    def generate(self, document: SchemaDocument) -> str:
        """Generate Swift code for a document and everything it references."""
        self.generated_types.clear()
        self._type_names.clear()
        self._declarations = []
        self._active = []
        self.warnings = []

        root_name = self._emit(document)
        self.root_type = root_name
        logger.info(
            f"Generated {len(self._declarations)} struct(s) for {root_name}"
        )

        return self.render_template(
            "file.swift.j2",
            {
                "header": self._header(document, root_name),
                "structs": self._declarations,
            },
        )

    def generate_single_schema(
        self, document: SchemaDocument, fallback: Optional[str] = None
    ) -> str:
        """Render one struct, without following references into new structs."""
        fields = []
        for name, prop in self._ordered_properties(document):
            if prop.is_reference:
                referenced = self.resolver.resolve(prop, document)
                field_type = self.type_name(referenced, self._fallback_name(prop.ref))
            else:
                field_type = self.type_mapper.map_property(prop)
            fields.append(self._field_data(document, name, prop, field_type))

        struct_name = self.type_name(document, fallback)
        self.warnings.extend(self._dedupe_field_names(fields, struct_name))
        return self._render_struct(document, struct_name, fields)

    def _emit(self, document: SchemaDocument, fallback: Optional[str] = None) -> str:
        """
        Emit ``document`` after every schema it references.

        Returns:
            The struct name used for ``document``

        Raises:
            CyclicReferenceError: If ``document`` is already being emitted
        """
        name = self.type_name(document, fallback)
        key = node_key(document)

        if key in self._type_names:
            return self._type_names[key]

        if key in self._active:
            chain = self._active[self._active.index(key) :] + [key]
            logger.error(f"Cyclic reference while generating {name}")
            raise CyclicReferenceError(chain)

        self._active.append(key)
        try:
            fields, warnings = self._collect_fields(document, name)
        finally:
            self._active.pop()

        name = self._unique_type_name(name, warnings)

        if not document.properties:
            warnings.append(f"Schema {name} has no properties - empty struct")
        if shadows_builtin(name):
            warnings.append(f"Struct {name} shadows a Swift standard library type")

        self.generated_types[name] = key
        self._type_names[key] = name
        self.warnings.extend(warnings)
        self._declarations.append(self._render_struct(document, name, fields))
        return name

    def _collect_fields(
        self, document: SchemaDocument, struct_name: str
    ) -> Tuple[List[Dict[str, Any]], List[str]]:
        fields = []
        warnings = []

        for prop_name, prop in self._ordered_properties(document):
            if prop.is_reference:
                referenced = self.resolver.resolve(prop, document)
                logger.debug(f"{struct_name}.{prop_name} -> {prop.ref}")
                field_type = self._emit(referenced, self._fallback_name(prop.ref))
            else:
                field_type = self.type_mapper.map_property(prop)
                warnings.extend(
                    self.type_mapper.validation_hints(prop, f"{struct_name}.{prop_name}")
                )

            fields.append(self._field_data(document, prop_name, prop, field_type))

        warnings.extend(self._dedupe_field_names(fields, struct_name))
        return fields, warnings

    def _unique_type_name(self, name: str, warnings: List[str]) -> str:
        """Suffix a type name already taken by a different schema."""
        if name not in self.generated_types:
            return name

        suffix = 2
        while f"{name}{suffix}" in self.generated_types:
            suffix += 1
        unique = f"{name}{suffix}"
        warnings.append(
            f"Type name {name} is used by more than one schema; "
            f"declaring this one as {unique}"
        )
        return unique

    def _dedupe_field_names(
        self, fields: List[Dict[str, Any]], struct_name: str
    ) -> List[str]:
        """Suffix field names that collide after conversion, in place."""
        warnings = []
        used = set()
        for field_data in fields:
            name = field_data["name"]
            if name in used:
                base = name.strip("`")
                suffix = 2
                while f"{base}{suffix}" in used:
                    suffix += 1
                field_data["name"] = f"{base}{suffix}"
                warnings.append(
                    f"Property {field_data['original_name']!r} of {struct_name} "
                    f"converts to {name}, which is already taken; "
                    f"using {field_data['name']}"
                )
            used.add(field_data["name"])
        return warnings

    def _field_data(
        self,
        document: SchemaDocument,
        prop_name: str,
        prop: SchemaProperty,
        field_type: str,
    ) -> Dict[str, Any]:
        return {
            "name": self.sanitizer.sanitize_name(prop_name, NamingCase.PASCAL_CASE),
            "original_name": prop_name,
            "type": field_type,
            "required": self.is_required(document, prop_name),
            "comment": prop.description if self.config.add_comments else None,
        }

    def is_required(self, document: SchemaDocument, prop_name: str) -> bool:
        """Check the enclosing document's required list for a property.

        With ``required_match="raw"`` the list holds schema property names;
        with ``"pascal"`` it holds the converted field names.
        """
        if self.config.required_match == "pascal":
            return document.is_required(
                self.sanitizer.convert(prop_name, NamingCase.PASCAL_CASE)
            )
        return document.is_required(prop_name)

    def _ordered_properties(
        self, document: SchemaDocument
    ) -> Iterable[Tuple[str, SchemaProperty]]:
        items = list(document.properties.items())
        if self.config.field_order == "sorted":
            items.sort(key=lambda item: item[0])
        return items

    def _fallback_name(self, ref: str) -> Optional[str]:
        """Name to use when a referenced schema has no title."""
        if is_local_reference(ref):
            return ref.rsplit("/", 1)[-1] or None

        location, fragment = split_reference(ref)
        if fragment.startswith(DEFINITIONS_PREFIX):
            return fragment.rsplit("/", 1)[-1] or None
        stem = Path(urlparse(location).path).name.split(".", 1)[0]
        return stem or None

    def _render_struct(
        self, document: SchemaDocument, name: str, fields: List[Dict[str, Any]]
    ) -> str:
        conformances = self.config.conformances or []
        context = {
            "struct_name": name,
            "inheritance": f": {', '.join(conformances)}" if conformances else "",
            "description": document.description if self.config.add_comments else None,
            "fields": fields,
            "keyword": self.config.field_keyword,
            "indent": self.config.indent,
        }
        return self.render_template("struct.swift.j2", context)

    def _header(self, document: SchemaDocument, root_name: str) -> Optional[str]:
        if not self.config.add_comments:
            return None
        origin = document.source or f"schema {root_name}"
        return f"Code generated by swiftgen from {origin}. DO NOT EDIT."


def create_swift_generator(
    config: Optional[GeneratorConfig] = None,
    resolver: Optional[ReferenceResolver] = None,
) -> SwiftGenerator:
    """Create a Swift generator with default configuration."""
    return SwiftGenerator(config, resolver)
