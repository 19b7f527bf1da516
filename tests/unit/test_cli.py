"""Tests for the catalogsnap CLI."""

import json

import pytest
from typer.testing import CliRunner

from catalogsnap.cli.main import app
from catalogsnap.config import Config


class TestCLI:
    """Test CLI commands using CliRunner."""

    @pytest.fixture
    def runner(self):
        """Create a CLI runner."""
        return CliRunner()

    @pytest.fixture
    def project(self, tmp_path, monkeypatch):
        """Run commands from an empty project directory."""
        monkeypatch.chdir(tmp_path)
        return tmp_path

    @pytest.fixture
    def catalog_file(self, project, catalog_doc):
        """Write the sample catalog document to disk."""
        path = project / "catalog.json"
        path.write_text(json.dumps(catalog_doc), encoding="utf-8")
        return path

    def test_no_command_shows_help(self, runner):
        """Test that running without a command prints help."""
        result = runner.invoke(app, [])

        assert result.exit_code == 0
        assert "validate" in result.stdout

    def test_version(self, runner):
        """Test the version command."""
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "catalogsnap version" in result.stdout

    def test_init(self, runner, project):
        """Test project initialization."""
        result = runner.invoke(app, ["init", "--metadata", "catalog.json"])

        assert result.exit_code == 0
        assert "Initialized catalogsnap project" in result.stdout
        assert Config(project).load().metadata_path == "catalog.json"

        result = runner.invoke(app, ["init"])

        assert result.exit_code == 1
        assert "already exists" in result.stdout

    def test_validate(self, runner, catalog_file):
        """Test validating a well-formed document."""
        result = runner.invoke(app, ["validate", str(catalog_file)])

        assert result.exit_code == 0
        assert "Catalog metadata is valid" in result.stdout
        assert "tables" in result.stdout

    def test_validate_uses_configured_path(self, runner, project, catalog_file):
        """Test that validate falls back to the configured document."""
        Config(project).init_project(metadata_path=catalog_file.name)

        result = runner.invoke(app, ["validate"])

        assert result.exit_code == 0
        assert "Catalog metadata is valid" in result.stdout

    def test_validate_without_document(self, runner, project):
        """Test validate with neither an argument nor a configured path."""
        result = runner.invoke(app, ["validate"])

        assert result.exit_code == 1
        assert "No catalog document given" in result.stdout

    def test_validate_missing_file(self, runner, project):
        """Test validate with a path that does not exist."""
        result = runner.invoke(app, ["validate", "nope.json"])

        assert result.exit_code == 1
        assert "not found" in result.stdout

    def test_validate_reports_invariant_violation(self, runner, project, catalog_doc):
        """Test that a foreign key mismatch fails validation."""
        catalog_doc["tables"][0]["info"]["foreign_keys"][0]["foreign_columns"] = []
        path = project / "broken.json"
        path.write_text(json.dumps(catalog_doc), encoding="utf-8")

        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 1
        assert "Invariant violation" in result.stdout
        assert "differ in length" in result.stdout

    def test_validate_respects_error_limit(self, runner, project, catalog_doc):
        """Test that only error_limit errors are listed."""
        del catalog_doc["tables"][0]["is_enum"]
        del catalog_doc["tables"][1]["is_enum"]
        del catalog_doc["relations"][0]["rel_type"]
        path = project / "broken.json"
        path.write_text(json.dumps(catalog_doc), encoding="utf-8")

        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 1
        assert "Decode error" in result.stdout
        assert "2 more error(s)" in result.stdout

    def test_validate_reports_bad_encoding(self, runner, project):
        """Test that a file that is not UTF-8 fails validation cleanly."""
        path = project / "latin1.json"
        path.write_bytes(b'{"tables": ["caf\xe9"]}')

        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "Decode error" in result.stdout
        assert "invalid utf-8 text" in result.stdout

    def test_invalid_log_level(self, runner, catalog_file):
        """Test that an unknown log level is rejected."""
        result = runner.invoke(app, ["--log-level", "loud", "validate", str(catalog_file)])

        assert result.exit_code == 1
        assert "Unknown log level" in result.stdout

    def test_tables(self, runner, catalog_file):
        """Test listing tracked tables."""
        result = runner.invoke(app, ["tables", str(catalog_file)])

        assert result.exit_code == 0
        assert "public.orders" in result.stdout
        assert "public.customers" in result.stdout
        assert "missing" in result.stdout

    def test_tables_empty(self, runner, project):
        """Test listing tables of an empty catalog."""
        path = project / "empty.json"
        path.write_text(
            json.dumps({"custom_types": {"custom_types": {}, "pg_scalars": []}}),
            encoding="utf-8",
        )

        result = runner.invoke(app, ["tables", str(path)])

        assert result.exit_code == 0
        assert "No tables found" in result.stdout
