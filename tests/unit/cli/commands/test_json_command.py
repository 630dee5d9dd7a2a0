"""
Unit tests for the 'json' command.
"""

import json

import pytest
from click.testing import CliRunner

from mapburst.cli.commands.export import export_json


class TestJsonCommand:
    @pytest.fixture
    def runner(self):
        return CliRunner()

    @pytest.fixture
    def map_file(self, tmp_path, sourcemap):
        path = tmp_path / "foo.js.map"
        path.write_text(json.dumps(sourcemap), encoding="utf-8")
        return path

    def test_prints_tree(self, runner, map_file):
        result = runner.invoke(export_json, [str(map_file)])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["name"] == "/"
        bar = data["children"][0]["children"][0]
        assert bar["name"] == "bar.js"
        assert bar["contents"] == "aaa\nbbb"
        assert bar["loc"] == 2
        assert "sizeGzipped" in bar

    def test_no_contents(self, runner, map_file):
        result = runner.invoke(export_json, [str(map_file), "--no-contents"])

        assert result.exit_code == 0, result.output
        bar = json.loads(result.output)["children"][0]["children"][0]
        assert "contents" not in bar
        assert bar["size"] == 7

    def test_output_file(self, runner, map_file, tmp_path):
        output = tmp_path / "tree.json"

        result = runner.invoke(export_json, [str(map_file), "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert "Generated:" in result.output
        assert json.loads(output.read_text(encoding="utf-8"))["children"][0]["name"] == "foo"

    def test_error(self, runner, tmp_path):
        path = tmp_path / "app.js"
        path.write_text("no annotation here\n", encoding="utf-8")

        result = runner.invoke(export_json, [str(path)])

        assert result.exit_code == 1
        assert "sourceMappingURL" in result.output
