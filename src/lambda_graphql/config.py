"""
Generator configuration for lambda-graphql.

Configuration is loaded from the lambda-graphql.toml [generate] section.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .core.errors import ConfigError, ErrorContext

CONFIG_FILE_NAME = "lambda-graphql.toml"


class GeneratorConfig(BaseModel):
    """
    Settings for the build-time generation step.

    Attributes:
        schema_file_name: File name for the SDL output
        resolver_file_name: File name for the resolver manifest
        output_directory: Directory (relative to the project) for both files
        schema_description: Optional description placed above the schema block
        strict_data_sources: Treat conflicting data source backings as fatal
        validate_sdl: Parse the generated SDL before writing it
    """

    schema_file_name: str = "schema.graphql"
    resolver_file_name: str = "resolvers.json"
    output_directory: str = "graphql"
    schema_description: str | None = None
    strict_data_sources: bool = False
    validate_sdl: bool = True

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("schema_file_name", "resolver_file_name")
    @classmethod
    def plain_file_name(cls, v: str) -> str:
        if not v or Path(v).name != v:
            raise ValueError(f"must be a plain file name, got '{v}'")
        return v


def load_generator_config(toml_path: Path) -> GeneratorConfig:
    """
    Load generator configuration from lambda-graphql.toml.

    Args:
        toml_path: Path to lambda-graphql.toml

    Returns:
        GeneratorConfig with values from file or defaults

    Raises:
        ConfigError: If the file is not valid TOML or holds invalid settings
    """
    if not toml_path.exists():
        return GeneratorConfig()

    try:
        with open(toml_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML: {e}", ErrorContext(file=toml_path)) from e

    section = data.get("generate", {})
    if not section:
        return GeneratorConfig()
    if not isinstance(section, dict):
        raise ConfigError(
            "[generate] must be a table", ErrorContext(file=toml_path, location="generate")
        )

    return _parse_config(section, toml_path)


def _parse_config(data: dict[str, Any], toml_path: Path) -> GeneratorConfig:
    try:
        return GeneratorConfig.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigError(
            f"Invalid generator settings: {problems}",
            ErrorContext(file=toml_path, location="generate"),
        ) from e
