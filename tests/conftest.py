"""Shared test fixtures for the testgen test suite."""
from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

import pytest


SAMPLE_DOC: dict[str, Any] = {
    "openapi": "3.0.0",
    "info": {"title": "Sample API", "version": "1.0.0"},
    "servers": [{"url": "https://api.example.com/"}],
    "paths": {
        "/items": {
            "get": {
                "responses": {
                    "200": {"description": "OK"},
                },
            },
        },
        "/users": {
            "post": {
                "requestBody": {"$ref": "#/components/requestBodies/NewUser"},
                "responses": {
                    "201": {
                        "description": "Created",
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/User"},
                            },
                        },
                    },
                    "400": {"description": "Bad request"},
                    "500": {"description": "Server error"},
                },
            },
        },
        "/sessions": {
            "post": {
                "requestBody": {
                    "content": {
                        "application/json": {
                            "example": {"username": "u", "password": "p"},
                        },
                    },
                },
                "responses": {
                    "201": {
                        "description": "Logged in",
                        "content": {
                            "application/json": {"example": {"token": "abc"}},
                        },
                    },
                    "401": {"description": "Unauthorized"},
                },
            },
            "delete": {
                "responses": {"204": {"description": "Logged out"}},
            },
        },
    },
    "components": {
        "schemas": {
            "User": {
                "type": "object",
                "properties": {
                    "id": {"type": "integer", "example": 1},
                    "username": {"type": "string", "example": "bob"},
                    "bio": {"type": "string"},
                },
            },
        },
        "requestBodies": {
            "NewUser": {
                "content": {
                    "application/json": {
                        "schema": {"$ref": "#/components/schemas/User"},
                    },
                },
            },
        },
    },
}


@pytest.fixture
def sample_doc() -> dict[str, Any]:
    """Provide a fresh copy of the sample OpenAPI document."""
    return copy.deepcopy(SAMPLE_DOC)


@pytest.fixture
def sample_spec_file(tmp_path: Path, sample_doc: dict[str, Any]) -> Path:
    """Write the sample document to a temporary JSON file."""
    path = tmp_path / "openapi.json"
    path.write_text(json.dumps(sample_doc), encoding="utf-8")
    return path


@pytest.fixture
def swagger_init_script(sample_doc: dict[str, Any]) -> str:
    """A swagger-ui-init.js bundle embedding the sample document."""
    return (
        "window.onload = function() {\n"
        "  var url = window.location.search.match(/url=([^&]+)/);\n"
        "  var options = {\n"
        f'    "swaggerDoc": {json.dumps(sample_doc, indent=2)},\n'
        '    "customOptions": {}\n'
        "  };\n"
        "  url = options.swaggerUrl || url;\n"
        "};\n"
    )
