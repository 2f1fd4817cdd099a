"""swiftgen: generate Swift structs from JSON Schema documents."""

__version__ = "0.1.0"

from .codegen import (  # noqa: E402
    GenerationResult,
    GeneratorConfig,
    generate_from_bytes,
    generate_from_schema,
    load_config,
)
from .codegen.core.schema import SchemaDocument  # noqa: E402


def quick_generate(schema, **options) -> str:
    """
    Quick code generation from schema data.

    Args:
        schema: JSON schema as bytes, text, or an already parsed dict
        **options: Generator configuration overrides

    Returns:
        Generated Swift code

    Raises:
        RuntimeError: If generation fails
    """
    if isinstance(schema, dict):
        result = generate_from_schema(SchemaDocument.from_dict(schema), options)
    else:
        result = generate_from_bytes(schema, config=options)

    if result.success:
        return result.code
    raise RuntimeError(result.error_message) from result.exception


__all__ = [
    "GenerationResult",
    "GeneratorConfig",
    "generate_from_bytes",
    "generate_from_schema",
    "load_config",
    "quick_generate",
    "__version__",
]
