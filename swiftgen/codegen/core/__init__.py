"""
Core code generation components.

Provides the schema model, reference resolution and the base classes used
by the language generators.
"""

from .config import ConfigError, ConfigManager, GeneratorConfig, load_config
from .generator import CodeGenerator, GenerationResult, GeneratorError, generate_code
from .naming import NameSanitizer, NamingCase, to_pascal_case
from .resolver import (
    CyclicReferenceError,
    ReferenceLoadError,
    ReferenceResolver,
    ResolutionError,
    UnresolvedReferenceError,
)
from .schema import (
    DecodeError,
    FieldType,
    InvalidSchemaError,
    SchemaDocument,
    SchemaError,
    SchemaProperty,
    decode_schema,
    validate_loaded_schema,
)
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Schema model
    "SchemaDocument",
    "SchemaProperty",
    "FieldType",
    "decode_schema",
    "validate_loaded_schema",
    # Errors
    "SchemaError",
    "DecodeError",
    "InvalidSchemaError",
    "ResolutionError",
    "UnresolvedReferenceError",
    "ReferenceLoadError",
    "CyclicReferenceError",
    # Reference resolution
    "ReferenceResolver",
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "generate_code",
    # Naming utilities
    "NameSanitizer",
    "NamingCase",
    "to_pascal_case",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
