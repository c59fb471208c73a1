"""Tests for CLI commands."""

import json
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from lambda_graphql.cli import app


@pytest.fixture
def cli_runner():
    """Return a CLI test runner."""
    return CliRunner()


class TestGenerateCommand:
    """Tests for the generate command."""

    def test_generate(self, cli_runner: CliRunner, ir_file: Path, tmp_path: Path):
        output_dir = tmp_path / "out"
        result = cli_runner.invoke(
            app,
            ["generate", str(ir_file), "-o", str(output_dir), "--timestamp", "2024-01-15T10:30:00Z"],
        )

        assert result.exit_code == 0, result.output
        assert "Success" in result.output
        sdl = (output_dir / "schema.graphql").read_text()
        assert "getProduct(id: ID!): Product!" in sdl
        manifest = json.loads((output_dir / "resolvers.json").read_text())
        assert manifest["generatedAt"] == "2024-01-15T10:30:00Z"
        assert [r["fieldName"] for r in manifest["resolvers"]] == ["getProduct", "archiveProduct"]

    def test_dry_run(self, cli_runner: CliRunner, ir_file: Path, tmp_path: Path):
        output_dir = tmp_path / "out"
        result = cli_runner.invoke(app, ["generate", str(ir_file), "-o", str(output_dir), "-n"])

        assert result.exit_code == 0, result.output
        assert "DRY RUN" in result.output
        assert not output_dir.exists()

    def test_uses_config_next_to_document(self, cli_runner: CliRunner, ir_file: Path, tmp_path):
        (ir_file.parent / "lambda-graphql.toml").write_text(
            '[generate]\nschema_file_name = "catalog.graphql"\n'
        )
        output_dir = tmp_path / "out"
        result = cli_runner.invoke(app, ["generate", str(ir_file), "-o", str(output_dir)])

        assert result.exit_code == 0, result.output
        assert (output_dir / "catalog.graphql").exists()

    def test_strict_conflict_fails(
        self, cli_runner: CliRunner, tmp_path: Path, product_document: dict
    ):
        product_document["operations"][1]["deployment"] = {"lambda_function_logical_id": "Other"}
        path = tmp_path / "api.yaml"
        path.write_text(yaml.safe_dump(product_document))
        output_dir = tmp_path / "out"

        result = cli_runner.invoke(app, ["generate", str(path), "-o", str(output_dir), "--strict"])

        assert result.exit_code == 1
        assert "LGQL003" in result.output
        assert not output_dir.exists()

    def test_invalid_document(self, cli_runner: CliRunner, tmp_path: Path):
        path = tmp_path / "api.yaml"
        path.write_text("- not a mapping\n")
        result = cli_runner.invoke(app, ["generate", str(path), "-o", str(tmp_path / "out")])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_empty_document_warns(self, cli_runner: CliRunner, tmp_path: Path):
        path = tmp_path / "api.yaml"
        path.write_text("description: Nothing yet\n")
        result = cli_runner.invoke(app, ["generate", str(path), "-o", str(tmp_path / "out"), "-n"])

        assert result.exit_code == 0, result.output
        assert "declares no types or operations" in result.output

    def test_missing_document(self, cli_runner: CliRunner, tmp_path: Path):
        result = cli_runner.invoke(app, ["generate", str(tmp_path / "missing.yaml")])
        assert result.exit_code != 0


class TestCheckCommand:
    """Tests for the check command."""

    def test_clean(self, cli_runner: CliRunner, ir_file: Path):
        result = cli_runner.invoke(app, ["check", str(ir_file)])

        assert result.exit_code == 0, result.output
        assert "No problems found" in result.output

    def test_reports_diagnostics(
        self, cli_runner: CliRunner, tmp_path: Path, product_document: dict
    ):
        product_document["types"].append({"name": "Query"})
        path = tmp_path / "api.yaml"
        path.write_text(yaml.safe_dump(product_document))

        result = cli_runner.invoke(app, ["check", str(path)])

        assert result.exit_code == 1
        assert "LGQL001" in result.output
        assert "0 error(s) and 1 warning(s)" in result.output

    def test_info_only_passes(self, cli_runner: CliRunner, tmp_path: Path):
        path = tmp_path / "api.yaml"
        path.write_text(
            yaml.safe_dump(
                {"operations": [{"root_type": "Query", "field_name": "ping", "data_source": "D"}]}
            )
        )
        result = cli_runner.invoke(app, ["check", str(path)])

        assert result.exit_code == 0, result.output
        assert "LGQL004" in result.output


class TestMiscCommands:
    """Tests for scalars and --version."""

    def test_scalars(self, cli_runner: CliRunner):
        result = cli_runner.invoke(app, ["scalars"])

        assert result.exit_code == 0
        assert "AWSDateTime" in result.output
        assert "AWSTimestamp" in result.output

    def test_version(self, cli_runner: CliRunner):
        result = cli_runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "lambda-graphql" in result.output

    def test_no_args_shows_help(self, cli_runner: CliRunner):
        result = cli_runner.invoke(app, [])
        assert "generate" in result.output
