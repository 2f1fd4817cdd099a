"""
Swift code generator module.

Generates Codable Swift structs from JSON schema documents.
"""

from .generator import SwiftGenerator, create_swift_generator
from .naming import SWIFT_RESERVED_WORDS, create_swift_sanitizer
from .types import SwiftTypeConfig, SwiftTypeMapper, swift_type

__all__ = [
    "SwiftGenerator",
    "SwiftTypeConfig",
    "SwiftTypeMapper",
    "SWIFT_RESERVED_WORDS",
    "create_swift_generator",
    "create_swift_sanitizer",
    "swift_type",
]
