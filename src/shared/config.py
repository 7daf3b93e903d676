"""Shared configuration management using pydantic-settings."""
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings

from src.shared.constants import DEFAULT_INIT_SCRIPT_SUFFIX, DEFAULT_OUTPUT_DIR


class GeneratorSettings(BaseSettings):
    """Settings for test generation and execution."""
    log_level: str = Field(default="info", validation_alias="LOG_LEVEL")
    output_dir: str = Field(
        default=DEFAULT_OUTPUT_DIR, validation_alias="TESTGEN_OUTPUT_DIR"
    )
    init_script_suffix: str = Field(
        default=DEFAULT_INIT_SCRIPT_SUFFIX,
        validation_alias="TESTGEN_INIT_SCRIPT_SUFFIX",
    )
    # None means no timeout: a hung request blocks the run.
    http_timeout: float | None = Field(
        default=None, validation_alias="TESTGEN_HTTP_TIMEOUT"
    )
    planner_config: str | None = Field(
        default=None, validation_alias="TESTGEN_PLANNER_CONFIG"
    )

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
    }
