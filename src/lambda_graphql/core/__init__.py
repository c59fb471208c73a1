"""Core lambda-graphql functionality: IR, scalar registry, type resolution, loading, diagnostics."""

from . import ir
from .diagnostics import Diagnostic, DiagnosticCode, Failed, Ok, Severity
from .errors import (
    ConfigError,
    ErrorContext,
    GenerationError,
    IRValidationError,
    LambdaGraphQLError,
    LoadError,
)
from .loader import ExtractionReport, load_schema_data, load_schema_document
from .type_resolver import (
    ResolvedType,
    ReturnTypeResolver,
    SourceType,
    TypeNameCache,
    TypeResolver,
)

__all__ = [
    "ir",
    # Diagnostics
    "Diagnostic",
    "DiagnosticCode",
    "Failed",
    "Ok",
    "Severity",
    # Errors
    "ConfigError",
    "ErrorContext",
    "GenerationError",
    "IRValidationError",
    "LambdaGraphQLError",
    "LoadError",
    # Loading
    "ExtractionReport",
    "load_schema_data",
    "load_schema_document",
    # Type resolution
    "ResolvedType",
    "ReturnTypeResolver",
    "SourceType",
    "TypeNameCache",
    "TypeResolver",
]
