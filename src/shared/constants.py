"""Shared constants used by the generator and the runner."""
from __future__ import annotations

# Application version
VERSION: str = "1.0.0"

# Service name used in structured logs
SERVICE_NAME: str = "testgen"

# Spec acquisition
DEFAULT_INIT_SCRIPT_SUFFIX: str = "/swagger-ui-init.js"
SWAGGER_DOC_NAME: str = "swaggerDoc"
JSON_MEDIA_TYPE: str = "application/json"

# Generated artifacts
DEFAULT_OUTPUT_DIR: str = "generated_tests"

# HTTP methods that denote operations inside an OpenAPI path item
HTTP_METHODS: tuple[str, ...] = (
    "get", "put", "post", "delete", "options", "head", "patch", "trace",
)

# Methods that never carry a request body in generated cases
BODYLESS_METHODS: frozenset[str] = frozenset({"get", "delete"})

# Status code sent back when a request never reached the server
TRANSPORT_ERROR_STATUS: int = 0
