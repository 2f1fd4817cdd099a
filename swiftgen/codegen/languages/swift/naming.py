"""
Swift-specific naming utilities and sanitization.

Generated names are PascalCase, so only capitalized keywords and the
type-like identifiers the compiler reserves can collide.
"""

from ...core.naming import NameSanitizer

# Capitalized identifiers that need backtick escaping as member names
SWIFT_RESERVED_WORDS = {
    "Any",
    "Protocol",
    "Self",
    "Type",
}

# Standard library type names that a generated struct would shadow
SWIFT_BUILTIN_TYPES = {
    "Any",
    "Array",
    "Bool",
    "Codable",
    "Decodable",
    "Dictionary",
    "Double",
    "Encodable",
    "Float",
    "Int",
    "Optional",
    "Set",
    "String",
}


def create_swift_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for Swift members."""
    return NameSanitizer(SWIFT_RESERVED_WORDS, escape="`{}`")


def shadows_builtin(type_name: str) -> bool:
    """True when a generated type name hides a standard library type."""
    return type_name in SWIFT_BUILTIN_TYPES
