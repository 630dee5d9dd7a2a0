"""
Unit tests for the 'build' command.
"""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from mapburst.cli.commands.build import build


class TestBuildCommand:
    """Tests for the build command execution."""

    @pytest.fixture
    def runner(self):
        return CliRunner()

    @pytest.fixture
    def workdir(self, tmp_path, monkeypatch):
        """Isolated working directory so no stray mapburst.yaml is picked up."""
        monkeypatch.chdir(tmp_path)
        return tmp_path

    @pytest.fixture
    def bundle(self, workdir, sourcemap, annotate):
        path = workdir / "app.js"
        path.write_text(f"console.log(1);\n{annotate(sourcemap)}\n", encoding="utf-8")
        return path

    def test_writes_page_next_to_source(self, runner, bundle):
        result = runner.invoke(build, [str(bundle)])

        assert result.exit_code == 0, result.output
        page = bundle.with_suffix(".html")
        assert page.exists()
        assert "<title>foo.js</title>" in page.read_text(encoding="utf-8")
        assert "Generated:" in result.output
        assert "Open: file://" in result.output
        assert "Finished in" in result.output

    def test_output_directory_is_created(self, runner, bundle, workdir):
        result = runner.invoke(build, ["-d", "viz/out", str(bundle)])

        assert result.exit_code == 0, result.output
        assert (workdir / "viz" / "out" / "app.html").exists()

    def test_title_option(self, runner, bundle):
        result = runner.invoke(build, ["--title", "Bundle", str(bundle)])

        assert result.exit_code == 0, result.output
        assert "<title>Bundle</title>" in bundle.with_suffix(".html").read_text(encoding="utf-8")

    def test_multiple_files(self, runner, workdir, sourcemap, annotate):
        for name in ("one.js", "two.css"):
            (workdir / name).write_text(annotate(sourcemap, block=name.endswith(".css")), encoding="utf-8")

        result = runner.invoke(build, ["one.js", "two.css"])

        assert result.exit_code == 0, result.output
        assert (workdir / "one.html").exists()
        assert (workdir / "two.html").exists()
        assert "file://" in result.output and "one.html" in result.output

    def test_standalone_map_file(self, runner, workdir, sourcemap):
        (workdir / "app.js.map").write_text(json.dumps(sourcemap), encoding="utf-8")

        result = runner.invoke(build, ["app.js.map"])

        assert result.exit_code == 0, result.output
        assert (workdir / "app.js.html").exists()

    def test_external_map(self, runner, workdir, sourcemap):
        (workdir / "app.js.map").write_text(json.dumps(sourcemap), encoding="utf-8")
        (workdir / "app.js").write_text("//# sourceMappingURL=app.js.map\n", encoding="utf-8")

        result = runner.invoke(build, ["app.js"])

        assert result.exit_code == 0, result.output
        assert (workdir / "app.html").exists()

    def test_missing_annotation_fails(self, runner, workdir):
        (workdir / "plain.js").write_text("console.log(1);\n", encoding="utf-8")

        result = runner.invoke(build, ["plain.js"])

        assert result.exit_code == 1
        assert "Saw no sourceMappingURL comments (0 found)" in result.output
        assert not (workdir / "plain.html").exists()

    def test_missing_sources_content_fails(self, runner, workdir):
        (workdir / "app.js.map").write_text(json.dumps({"sources": ["/a.js"]}), encoding="utf-8")

        result = runner.invoke(build, ["app.js.map"])

        assert result.exit_code == 1
        assert "sourcesContent" in result.output

    def test_open_flag(self, runner, bundle):
        with patch("mapburst.cli.commands.build.open_visualization") as mock_open:
            result = runner.invoke(build, ["--open", str(bundle)])

        assert result.exit_code == 0, result.output
        mock_open.assert_called_once()
        assert mock_open.call_args[0][1] == str(bundle.with_suffix(".html"))
        assert "Open: file://" not in result.output

    def test_config_file_defaults(self, runner, bundle, workdir):
        (workdir / "mapburst.yaml").write_text("title: From Config\ndirectory: pages\n", encoding="utf-8")

        result = runner.invoke(build, [str(bundle)])

        assert result.exit_code == 0, result.output
        page = workdir / "pages" / "app.html"
        assert "<title>From Config</title>" in page.read_text(encoding="utf-8")

    def test_options_override_config(self, runner, bundle, workdir):
        (workdir / "mapburst.yaml").write_text("title: From Config\n", encoding="utf-8")

        result = runner.invoke(build, ["-t", "From Flag", str(bundle)])

        assert result.exit_code == 0, result.output
        assert "<title>From Flag</title>" in bundle.with_suffix(".html").read_text(encoding="utf-8")

    def test_bad_config_fails(self, runner, bundle, workdir):
        (workdir / "mapburst.yaml").write_text("- not a mapping\n", encoding="utf-8")

        result = runner.invoke(build, [str(bundle)])

        assert result.exit_code == 1
        assert "must contain a mapping" in result.output

    def test_requires_files(self, runner, workdir):
        result = runner.invoke(build, [])
        assert result.exit_code == 2
