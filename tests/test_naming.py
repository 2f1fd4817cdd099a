"""Tests for name conversion."""

import pytest

from swiftgen.codegen.core.naming import NameSanitizer, NamingCase, to_pascal_case
from swiftgen.codegen.languages.swift.naming import create_swift_sanitizer


class TestToPascalCase:
    """PascalCase conversion of schema property names."""

    def test_snake_case(self):
        assert to_pascal_case("is_active") == "IsActive"

    def test_kebab_case(self):
        assert to_pascal_case("user-id") == "UserId"

    def test_single_word(self):
        assert to_pascal_case("name") == "Name"

    def test_camel_case_keeps_inner_capitals(self):
        assert to_pascal_case("userName") == "UserName"

    @pytest.mark.parametrize("name", ["IsActive", "UserId", "HTTPStatus", "A"])
    def test_idempotent_on_pascal_case(self, name):
        assert to_pascal_case(name) == name
        assert to_pascal_case(to_pascal_case(name)) == name

    @pytest.mark.parametrize("words", ["foo{}bar", "created{}at{}utc", "a{}b"])
    def test_dash_and_underscore_equivalent(self, words):
        assert to_pascal_case(words.format("-")) == to_pascal_case(words.format("_"))

    def test_repeated_and_edge_separators_dropped(self):
        assert to_pascal_case("__foo--bar_") == "FooBar"

    def test_invalid_characters_split_words(self):
        assert to_pascal_case("first name.value") == "FirstNameValue"

    def test_empty(self):
        assert to_pascal_case("") == ""

    def test_non_ascii_letters_kept(self):
        assert to_pascal_case("größe") == "Größe"
        assert to_pascal_case("état_civil") == "ÉtatCivil"

    def test_cjk_names_kept(self):
        assert to_pascal_case("名前") == "名前"
        assert to_pascal_case("名前") != to_pascal_case("年齢")


class TestNameSanitizer:
    """Identifier safety on top of case conversion."""

    def test_leading_digit_prefixed(self):
        assert NameSanitizer().convert("1st_place") == "_1stPlace"

    def test_empty_name_falls_back(self):
        assert NameSanitizer().convert("--") == "Field"

    def test_camel_case(self):
        assert NameSanitizer().convert("user_id", NamingCase.CAMEL_CASE) == "userId"

    def test_swift_reserved_word_escaped(self):
        sanitizer = create_swift_sanitizer()
        assert sanitizer.sanitize_name("type") == "`Type`"
        assert sanitizer.sanitize_name("self") == "`Self`"

    def test_convert_does_not_escape(self):
        assert create_swift_sanitizer().convert("type") == "Type"

    def test_regular_name_untouched(self):
        assert create_swift_sanitizer().sanitize_name("type_name") == "TypeName"
