"""Shared fixtures for swiftgen tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from swiftgen.codegen.core.config import load_config
from swiftgen.codegen.languages.swift import SwiftGenerator


@pytest.fixture
def write_schema(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that writes a schema dict as JSON under tmp_path."""

    def _write(name: str, data: Any) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        text = data if isinstance(data, str) else json.dumps(data)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def plain_config():
    """Default configuration without comments, so output can be compared exactly."""
    return load_config(custom_config={"add_comments": False})


@pytest.fixture
def generator(plain_config) -> SwiftGenerator:
    return SwiftGenerator(plain_config)


ROOT_SCHEMA: dict = {
    "title": "Root",
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "age": {"type": "number"},
    },
    "required": ["name"],
}

NESTED_SCHEMA: dict = {
    "title": "Root",
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "address": {"$ref": "#/definitions/Address"},
    },
    "required": ["name", "address"],
    "definitions": {
        "Address": {
            "title": "Address",
            "type": "object",
            "properties": {
                "street": {"type": "string"},
                "zip_code": {"type": "string"},
            },
            "required": ["street"],
        }
    },
}
