"""Tests for the sapling command line."""

import json
import shutil
from pathlib import Path

import pytest
from typer.testing import CliRunner

from sapling.cli import app

runner = CliRunner()


@pytest.fixture
def project(tmp_path: Path, schemas_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A project directory holding calc.toml, used as the working directory."""
    shutil.copy(schemas_dir / "calc.toml", tmp_path / "calc.toml")
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_version() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.output.startswith("sapling ")


class TestGenerate:
    def test_writes_grammar_json(self, project: Path) -> None:
        result = runner.invoke(app, ["generate", "calc.toml", "-o", "out"])

        assert result.exit_code == 0, result.output
        assert "✓ calc" in result.output
        data = json.loads((project / "out" / "calc" / "grammar.json").read_text())
        assert next(iter(data["rules"])) == "source_file"
        assert data["extras"] == [{"type": "SYMBOL", "name": "Whitespace"}]

    def test_uses_manifest_in_working_directory(self, project: Path) -> None:
        (project / "sapling.toml").write_text(
            '[project]\nschema = "calc.toml"\n[output]\ndir = "build"\nindent = 0\n'
        )
        result = runner.invoke(app, ["generate"])

        assert result.exit_code == 0, result.output
        assert (project / "build" / "calc" / "grammar.json").exists()

    def test_explicit_manifest(self, project: Path, tmp_path_factory) -> None:
        other = tmp_path_factory.mktemp("elsewhere")
        manifest = other / "sapling.toml"
        manifest.write_text(f'[project]\nschema = "{(project / "calc.toml").as_posix()}"\n')

        result = runner.invoke(app, ["generate", "--manifest", str(manifest)])

        assert result.exit_code == 0, result.output
        assert (other / "grammars" / "calc" / "grammar.json").exists()

    def test_without_schema_or_manifest(self, project: Path) -> None:
        result = runner.invoke(app, ["generate"])
        assert result.exit_code == 1
        assert "No schema given" in result.output

    def test_missing_schema(self, project: Path) -> None:
        result = runner.invoke(app, ["generate", "missing.toml"])
        assert result.exit_code == 1
        assert "Schema not found" in result.output

    def test_invalid_schema_writes_nothing(self, project: Path, schemas_dir: Path) -> None:
        result = runner.invoke(app, ["generate", str(schemas_dir / "no_root.toml"), "-o", "out"])

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "root definition" in result.output
        assert not (project / "out").exists()

    def test_empty_schema(self, project: Path) -> None:
        (project / "empty.toml").write_text('name = "crate"\n')
        result = runner.invoke(app, ["generate", "empty.toml"])
        assert result.exit_code == 0
        assert "No grammar modules found" in result.output


class TestCheck:
    def test_undecodable_schema(self, project: Path) -> None:
        (project / "bad.toml").write_bytes(b'grammar = "\xff"\n')
        result = runner.invoke(app, ["check", "bad.toml"])

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "Cannot read schema" in result.output

    def test_reports_rule_counts(self, project: Path) -> None:
        result = runner.invoke(app, ["check", "calc.toml"])

        assert result.exit_code == 0, result.output
        assert "calc" in result.output
        assert "10" in result.output
        assert "Schema is valid." in result.output
        assert not (project / "grammars").exists()

    def test_bad_manifest(self, project: Path) -> None:
        (project / "sapling.toml").write_text('[project]\nname = "calc"\n')
        result = runner.invoke(app, ["check"])
        assert result.exit_code == 1
        assert "project.schema" in result.output


class TestShow:
    def test_prints_grammar(self, project: Path) -> None:
        result = runner.invoke(app, ["show", "calc.toml"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["name"] == "calc"

    def test_selects_grammar_by_name(self, schemas_dir: Path) -> None:
        result = runner.invoke(app, ["show", str(schemas_dir / "nested.toml"), "-g", "outer"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["name"] == "outer"

    def test_unknown_grammar(self, schemas_dir: Path) -> None:
        result = runner.invoke(app, ["show", str(schemas_dir / "calc.toml"), "-g", "nope"])
        assert result.exit_code == 1
        assert "No grammar named 'nope'" in result.output
