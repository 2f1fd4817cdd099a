"""
Naming utilities for safe code generation.

Handles case conversion of schema property names and titles, and keyword
conflicts in the target language.
"""

import re
from enum import Enum
from typing import Dict, List, Optional, Set

# Word separators in schema names
_SEPARATORS = re.compile(r"[-_]+")

# Anything that is not a Unicode word character or dash becomes a separator
_INVALID_CHARS = re.compile(r"[^\w-]", re.UNICODE)


class NamingCase(Enum):
    """Different naming case styles."""

    PASCAL_CASE = "pascal"  # UserName
    CAMEL_CASE = "camel"  # userName


def split_words(name: str) -> List[str]:
    """Split a name on ``-``, ``_`` and invalid characters, dropping empties."""
    cleaned = _INVALID_CHARS.sub("_", name)
    return [word for word in _SEPARATORS.split(cleaned) if word]


def to_pascal_case(name: str) -> str:
    """
    Convert snake_case or kebab-case to PascalCase.

    Each word gets an upper-case first letter; the rest of the word is kept
    as is, so already PascalCase input comes back unchanged.

    Examples:
        is_active -> IsActive
        user-id   -> UserId
        userName  -> UserName
    """
    return "".join(word[:1].upper() + word[1:] for word in split_words(name))


def to_camel_case(name: str) -> str:
    """Convert to camelCase (first word's first letter lowered)."""
    pascal = to_pascal_case(name)
    return pascal[:1].lower() + pascal[1:]


class NameSanitizer:
    """Handles name sanitization and case conversion."""

    def __init__(
        self,
        reserved_words: Optional[Set[str]] = None,
        escape: str = "`{}`",
        fallback: str = "Field",
    ):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Names that must be escaped in the target language
            escape: Format string applied to reserved names
            fallback: Name used when nothing usable is left after cleanup
        """
        self.reserved_words = reserved_words or set()
        self.escape = escape
        self.fallback = fallback
        self._name_cache: Dict[str, str] = {}

    def convert(
        self, name: str, target_case: NamingCase = NamingCase.PASCAL_CASE
    ) -> str:
        """Convert case without escaping; used for required-list matching."""
        if target_case == NamingCase.CAMEL_CASE:
            converted = to_camel_case(name)
        else:
            converted = to_pascal_case(name)

        if not converted:
            return self.fallback
        if converted[0].isdigit():
            converted = f"_{converted}"
        return converted

    def sanitize_name(
        self, name: str, target_case: NamingCase = NamingCase.PASCAL_CASE
    ) -> str:
        """
        Sanitize a name for safe use in the target language.

        Args:
            name: Original name to sanitize
            target_case: Desired case style

        Returns:
            Converted name, escaped if it collides with a reserved word
        """
        cache_key = f"{name}_{target_case.value}"
        if cache_key in self._name_cache:
            return self._name_cache[cache_key]

        converted = self.convert(name, target_case)
        if converted in self.reserved_words:
            converted = self.escape.format(converted)

        self._name_cache[cache_key] = converted
        return converted
