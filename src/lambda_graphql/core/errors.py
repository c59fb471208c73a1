"""
Error types for lambda-graphql IR loading, validation and generation.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class LambdaGraphQLError(Exception):
    """Base exception for all lambda-graphql errors."""

    code: str | None = None

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        prefix = f"{self.code}: " if self.code else ""
        if self.context:
            return f"{self.context.format()}\n{prefix}{self.message}"
        return f"{prefix}{self.message}"


class LoadError(LambdaGraphQLError):
    """
    Raised when an IR document cannot be read at all.

    Examples:
    - Missing file
    - Malformed YAML/JSON
    - Top-level document is not a mapping
    """

    pass


class IRValidationError(LambdaGraphQLError):
    """
    Raised when a merged IR snapshot violates a structural invariant.

    Examples:
    - Two types share a name
    - Operation field declared twice on the same root type
    """

    pass


class GenerationError(LambdaGraphQLError):
    """
    Raised when the generation engine itself fails.

    Fatal: a partially generated schema/manifest pair is never written.
    """

    code = "LGQL003"


class ConfigError(LambdaGraphQLError):
    """Raised when lambda-graphql.toml cannot be parsed or validated."""

    pass


@dataclass
class ErrorContext:
    """
    Location information for an error.

    Attributes:
        file: Path to the IR document or config file
        location: Path inside the document (e.g. ``types[3].fields[0]``)
        line: Optional line number (1-indexed)
    """

    file: Path | None = None
    location: str | None = None
    line: int | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "schema.yaml:10 at types[3]"
        """
        parts = []
        if self.file:
            parts.append(f"{self.file}:{self.line}" if self.line else str(self.file))
        if self.location:
            parts.append(f"at {self.location}")
        return " ".join(parts) or "<unknown>"


def make_load_error(
    message: str,
    file: Path | None = None,
    line: int | None = None,
) -> LoadError:
    """Helper to create a LoadError with optional file context."""
    if file:
        return LoadError(message, ErrorContext(file=file, line=line))
    return LoadError(message)


def make_generation_error(message: str, location: str | None = None) -> GenerationError:
    """
    Helper to create a GenerationError.

    Args:
        message: Error description
        location: Optional IR location the failure relates to

    Returns:
        GenerationError with context if location provided
    """
    if location:
        return GenerationError(message, ErrorContext(location=location))
    return GenerationError(message)
