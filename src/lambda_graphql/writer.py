"""
Artifact writer.

Writes the SDL and resolver manifest side by side. Both texts must exist
before anything touches the disk, and each file is written to a temporary
sibling and renamed into place so a failed run leaves no partial pair.
"""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from .config import GeneratorConfig
from .core.errors import make_generation_error
from .generators import GeneratedArtifacts

logger = logging.getLogger(__name__)


@dataclass
class WriteResult:
    """Result from writing generated artifacts."""

    files_created: list[Path] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return len(self.errors) == 0

    def add_file(self, path: Path) -> None:
        self.files_created.append(path)

    def add_error(self, error: str) -> None:
        self.errors.append(error)


def write_artifacts(
    artifacts: GeneratedArtifacts,
    output_dir: Path,
    config: GeneratorConfig | None = None,
) -> WriteResult:
    """
    Write schema and manifest files.

    Args:
        artifacts: Generated SDL and manifest text
        output_dir: Directory to write into (created if missing)
        config: Supplies the output file names

    Returns:
        WriteResult listing the files written

    Raises:
        GenerationError: If either artifact is empty
    """
    config = config or GeneratorConfig()
    if not artifacts.is_complete:
        raise make_generation_error("Refusing to write an incomplete schema/manifest pair")

    output_dir.mkdir(parents=True, exist_ok=True)
    targets = [
        (output_dir / config.schema_file_name, artifacts.sdl),
        (output_dir / config.resolver_file_name, artifacts.manifest),
    ]

    result = WriteResult()
    staged: list[tuple[Path, Path]] = []
    try:
        for target, content in targets:
            staged.append((_stage(target, content), target))
        for temp_path, target in staged:
            os.replace(temp_path, target)
            result.add_file(target)
            logger.info(f"Wrote {target}")
    except OSError as e:
        result.add_error(f"Failed to write artifacts to {output_dir}: {e}")
        for temp_path, _ in staged:
            temp_path.unlink(missing_ok=True)

    return result


def _stage(target: Path, content: str) -> Path:
    """Write content to a temporary file next to target."""
    fd, name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    temp_path = Path(name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
    except OSError:
        temp_path.unlink(missing_ok=True)
        raise
    return temp_path
