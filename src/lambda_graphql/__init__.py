"""
lambda-graphql - GraphQL SDL and resolver manifests for AWS AppSync.

Builds a schema document and a resolver/data-source manifest from a
declarative description of types and Lambda-backed operations.
"""

from __future__ import annotations

# Re-export commonly used types for convenience
from ._version import get_version
from .config import GeneratorConfig, load_generator_config
from .core import ir
from .core.errors import (
    ConfigError,
    GenerationError,
    IRValidationError,
    LambdaGraphQLError,
    LoadError,
)
from .core.loader import load_schema_data, load_schema_document
from .generators import GeneratedArtifacts, generate_artifacts
from .writer import WriteResult, write_artifacts

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "ConfigError",
    "GeneratedArtifacts",
    "GenerationError",
    "GeneratorConfig",
    "IRValidationError",
    "LambdaGraphQLError",
    "LoadError",
    "WriteResult",
    "generate_artifacts",
    "load_generator_config",
    "load_schema_data",
    "load_schema_document",
    "write_artifacts",
]
