"""Tests for the artifact writer."""

from pathlib import Path

import pytest

from lambda_graphql.config import GeneratorConfig
from lambda_graphql.core.errors import GenerationError
from lambda_graphql.generators import GeneratedArtifacts, generate_artifacts
from lambda_graphql.writer import write_artifacts


class TestWriteArtifacts:
    """Tests for write_artifacts."""

    def test_writes_both_files(self, tmp_path: Path, product_schema, fixed_time):
        artifacts = generate_artifacts(product_schema, generated_at=fixed_time)
        output_dir = tmp_path / "graphql"

        result = write_artifacts(artifacts, output_dir)

        assert result.success
        assert result.files_created == [
            output_dir / "schema.graphql",
            output_dir / "resolvers.json",
        ]
        assert (output_dir / "schema.graphql").read_text() == artifacts.sdl
        assert (output_dir / "resolvers.json").read_text() == artifacts.manifest

    def test_configured_names(self, tmp_path: Path, product_schema):
        artifacts = generate_artifacts(product_schema)
        config = GeneratorConfig(schema_file_name="api.graphql", resolver_file_name="api.json")

        write_artifacts(artifacts, tmp_path, config)

        assert (tmp_path / "api.graphql").exists()
        assert (tmp_path / "api.json").exists()

    def test_no_temp_files_left(self, tmp_path: Path, product_schema):
        write_artifacts(generate_artifacts(product_schema), tmp_path)
        assert sorted(p.name for p in tmp_path.iterdir()) == ["resolvers.json", "schema.graphql"]

    def test_overwrites_existing(self, tmp_path: Path, product_schema):
        (tmp_path / "schema.graphql").write_text("stale")
        artifacts = generate_artifacts(product_schema)
        write_artifacts(artifacts, tmp_path)
        assert (tmp_path / "schema.graphql").read_text() == artifacts.sdl

    @pytest.mark.parametrize(
        "artifacts",
        [
            GeneratedArtifacts(sdl="", manifest="{}"),
            GeneratedArtifacts(sdl="type A", manifest=""),
        ],
    )
    def test_incomplete_pair_is_not_written(self, tmp_path: Path, artifacts):
        output_dir = tmp_path / "graphql"
        with pytest.raises(GenerationError, match="incomplete"):
            write_artifacts(artifacts, output_dir)
        assert not output_dir.exists()
