"""
Artifact generators.

- sdl: GraphQL SDL document
- manifest: resolver/data-source manifest (resolvers.json)
- pipeline: runs both over one IR snapshot
"""

from .manifest import Manifest, ManifestGenerator, generate_manifest
from .pipeline import GeneratedArtifacts, generate_artifacts
from .sdl import SDLGenerator, generate_sdl, validate_sdl

__all__ = [
    "GeneratedArtifacts",
    "Manifest",
    "ManifestGenerator",
    "SDLGenerator",
    "generate_artifacts",
    "generate_manifest",
    "generate_sdl",
    "validate_sdl",
]
