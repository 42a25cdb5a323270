#!/usr/bin/env python3

import json
from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from swagger_to_rdl.cli_utils import generation_command
from swagger_to_rdl.swagger_to_rdl import swagger_to_rdl

PETSTORE = Path(__file__).parent / "test_data" / "reference" / "petstore.json"


def write_doc(tmp_path, doc, name="api.json"):
    path = tmp_path / name
    path.write_text(json.dumps(doc))
    return path


class TestCli:
    """Test cases for the command line entry point"""

    def test_json_to_stdout(self):
        result = CliRunner().invoke(swagger_to_rdl, [str(PETSTORE)])
        assert result.exit_code == 0, result.output
        schema = json.loads(result.output)
        assert schema["name"] == "Petstore"
        assert [list(t.values())[0]["name"] for t in schema["types"]] == ["Error", "Pet_Name", "Pet_Status", "Pet", "Pets"]

    def test_name_from_file_name(self, tmp_path):
        path = write_doc(tmp_path, {"swagger": "2.0", "info": {"title": "Zoo"}}, "zoo.json")
        result = CliRunner().invoke(swagger_to_rdl, [str(path)])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {"name": "zoo"}

        result = CliRunner().invoke(swagger_to_rdl, ["--name", "animals", str(path)])
        assert json.loads(result.output) == {"name": "animals"}

    def test_output_file(self, tmp_path):
        output = tmp_path / "out" / "petstore.json"
        result = CliRunner().invoke(swagger_to_rdl, [str(PETSTORE), str(output)])
        assert result.exit_code == 0, result.output
        assert json.loads(output.read_text())["name"] == "Petstore"
        assert output.read_text().endswith("}\n")

    def test_existing_output_requires_force(self, tmp_path):
        output = tmp_path / "petstore.json"
        output.write_text("keep me")

        result = CliRunner().invoke(swagger_to_rdl, [str(PETSTORE), str(output)])
        assert result.exit_code == 1
        assert "***" in result.output
        assert "--force" in result.output
        assert output.read_text() == "keep me"

        result = CliRunner().invoke(swagger_to_rdl, ["--force", str(PETSTORE), str(output)])
        assert result.exit_code == 0, result.output
        assert json.loads(output.read_text())["name"] == "Petstore"

    def test_rdl_format(self, tmp_path):
        output = tmp_path / "petstore.rdl"
        result = CliRunner().invoke(swagger_to_rdl, ["--format", "rdl", str(PETSTORE), str(output)])
        assert result.exit_code == 0, result.output

        lines = output.read_text().splitlines()
        assert lines[0].startswith("// Generated by swagger_to_rdl")
        assert "--format rdl" in lines[0]
        assert "name Petstore;" in lines
        assert 'resource Pets GET "/pets?limit={limit}" (name=listPets, x_tags="pets") {' in lines

    def test_config_file(self, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"ignore_types": ["Error"], "reserved_types": []}))
        path = write_doc(tmp_path, {"definitions": {"Error": {"type": "object"}, "ResourceError": {"type": "object"}}})

        result = CliRunner().invoke(swagger_to_rdl, ["--config", str(config), str(path)])
        assert result.exit_code == 0, result.output
        types = json.loads(result.output)["types"]
        assert [t["StructTypeDef"]["name"] for t in types] == ["ResourceError"]

    @pytest.mark.parametrize(
        "content",
        [
            b'{"openapi": "3.0.0"}',
            b'{"paths": {"/pets/{id}": {"get": {}}}}',
            b"{not json",
            b'{"swagger": "2.0", "info": {"title": "\xff"}}',
        ],
        ids=["openapi3", "path-template", "invalid-json", "invalid-utf8"],
    )
    def test_fatal_errors(self, tmp_path, content):
        path = tmp_path / "api.json"
        path.write_bytes(content)
        result = CliRunner().invoke(swagger_to_rdl, [str(path)])
        assert result.exit_code == 1
        assert "***" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)

    @pytest.mark.parametrize("content", ["{not json", '["ignore_types"]'], ids=["invalid-json", "not-an-object"])
    def test_bad_config_file(self, tmp_path, content):
        config = tmp_path / "config.json"
        config.write_text(content)
        result = CliRunner().invoke(swagger_to_rdl, ["--config", str(config), str(PETSTORE)])
        assert result.exit_code == 1
        assert "***" in result.output
        assert "config.json" in result.output

    def test_unwritable_output(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        result = CliRunner().invoke(swagger_to_rdl, ["--force", str(PETSTORE), str(blocker / "petstore.json")])
        assert result.exit_code == 1
        assert "***" in result.output

    def test_missing_input(self, tmp_path):
        result = CliRunner().invoke(swagger_to_rdl, [str(tmp_path / "missing.json")])
        assert result.exit_code == 2


class TestGenerationCommand:
    def test_without_context(self):
        """Without an active Click context the program name alone is returned"""
        assert generation_command() == "swagger_to_rdl"

    def test_schema_options_only(self):
        ctx = click.Context(swagger_to_rdl)
        ctx.params = {
            "name": "store",
            "config": "/work/settings/importer.json",
            "output_format": "rdl",
            "force": True,
            "verbose": True,
            "path": "/work/api/petstore.json",
            "output": "/work/out/petstore.rdl",
        }
        assert generation_command(ctx) == "swagger_to_rdl petstore.json --name store --config importer.json --format rdl"

    def test_defaults_are_omitted(self):
        ctx = click.Context(swagger_to_rdl)
        ctx.params = {"name": None, "config": None, "output_format": "json", "path": "/work/api/petstore.json"}
        assert generation_command(ctx) == "swagger_to_rdl petstore.json"


if __name__ == "__main__":
    pytest.main([__file__])
