"""
Generation pipeline.

Runs both emitters over one IR snapshot and returns the two artifacts
together. Nothing is written here; see ``lambda_graphql.writer``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime

from ..config import GeneratorConfig
from ..core.diagnostics import Diagnostic
from ..core.errors import GenerationError, make_generation_error
from ..core.ir import SchemaSpec
from .manifest import ManifestGenerator
from .sdl import SDLGenerator, validate_sdl

logger = logging.getLogger(__name__)


@dataclass
class GeneratedArtifacts:
    """SDL and manifest text produced from one snapshot."""

    sdl: str
    manifest: str
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        """Both artifacts are present."""
        return bool(self.sdl) and bool(self.manifest)


def generate_artifacts(
    schema: SchemaSpec,
    config: GeneratorConfig | None = None,
    generated_at: datetime | None = None,
) -> GeneratedArtifacts:
    """
    Generate the SDL and resolver manifest for a schema.

    Args:
        schema: IR snapshot
        config: Generator settings (defaults when omitted)
        generated_at: Manifest timestamp; pass a fixed value for
            reproducible output

    Returns:
        GeneratedArtifacts

    Raises:
        GenerationError: If either emitter fails
    """
    config = config or GeneratorConfig()
    logger.info(
        f"Generating schema: {len(schema.types)} types, {len(schema.operations)} operations"
    )

    try:
        sdl = SDLGenerator().render_schema(schema, config.schema_description)
        if config.validate_sdl:
            validate_sdl(sdl)

        manifest = ManifestGenerator(strict_data_sources=config.strict_data_sources).build(
            schema.operations, generated_at
        )
    except GenerationError:
        raise
    except Exception as e:
        raise make_generation_error(f"Failed to generate GraphQL schema: {e}") from e

    logger.info(f"Generated {len(manifest.data_sources)} data source(s)")
    return GeneratedArtifacts(
        sdl=sdl,
        manifest=manifest.to_json(),
        diagnostics=list(manifest.diagnostics),
    )
