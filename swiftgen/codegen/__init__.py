"""
swiftgen code generation module.

Generates Swift structs from JSON Schema documents.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

from .core.config import ConfigError, GeneratorConfig, load_config
from .core.generator import CodeGenerator, GenerationResult, GeneratorError, generate_code
from .core.resolver import ReferenceResolver
from .core.schema import DecodeError, SchemaDocument, decode_schema
from .languages.swift import SwiftGenerator, create_swift_generator

ConfigLike = Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]]


def resolve_config(config: ConfigLike = None) -> GeneratorConfig:
    """Accept a GeneratorConfig, an overrides dict, or a config file path."""
    if isinstance(config, GeneratorConfig):
        return config
    if isinstance(config, (str, Path)):
        return load_config(config_file=config)
    if isinstance(config, dict):
        return load_config(custom_config=config)
    if config is None:
        return load_config()
    raise ConfigError(f"Invalid config type: {type(config)}")


def generate_from_schema(
    document: SchemaDocument,
    config: ConfigLike = None,
    resolver: Optional[ReferenceResolver] = None,
) -> GenerationResult:
    """
    Generate Swift code from a decoded schema document.

    Args:
        document: Root schema document
        config: Generator configuration (object, dict or path)
        resolver: Reference resolver, defaults to a new ReferenceResolver

    Returns:
        GenerationResult with generated code; invalid configuration also
        produces a failed result
    """
    try:
        generator = create_swift_generator(resolve_config(config), resolver)
    except (ConfigError, GeneratorError) as e:
        return GenerationResult.error(f"Code generation failed: {e}", exception=e)
    return generate_code(generator, document)


def generate_from_bytes(
    data: Union[bytes, str],
    source: Optional[str] = None,
    config: ConfigLike = None,
) -> GenerationResult:
    """
    Decode a schema buffer and generate Swift code for it.

    Decoding errors produce a failed GenerationResult like any other
    generation error.
    """
    try:
        document = decode_schema(data, source=source)
    except DecodeError as e:
        return GenerationResult.error(f"Code generation failed: {e}", exception=e)
    return generate_from_schema(document, config)


__all__ = [
    "CodeGenerator",
    "GenerationResult",
    "GeneratorConfig",
    "GeneratorError",
    "SwiftGenerator",
    "generate_code",
    "generate_from_bytes",
    "generate_from_schema",
    "load_config",
    "resolve_config",
]
