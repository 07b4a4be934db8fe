"""Tests for CLI commands."""

from pathlib import Path

from click.testing import CliRunner
from mdsite.cli import cli


def _write_site(root: Path) -> Path:
    (root / "static").mkdir()
    (root / "static" / "main.css").write_text("body{}")
    (root / "README.md").write_text("# Home\n\n[guide](guide.md)")
    (root / "guide.md").write_text("Guide")
    config_file = root / "mdsite.toml"
    config_file.write_text('[site]\ntitle = "CLI Site"\n')
    return config_file


class TestBuildCommand:
    """Tests for the build command."""

    def test_builds_site_from_config(self, tmp_path: Path) -> None:
        """Build using an explicit configuration file."""
        config_file = _write_site(tmp_path)

        runner = CliRunner()
        result = runner.invoke(cli, ["build", "-c", str(config_file)])

        assert result.exit_code == 0
        assert "Built 2 pages, copied 1 static files." in result.output
        index = (tmp_path / "build" / "index.html").read_text()
        assert "<title>CLI Site</title>" in index
        assert 'href="guide.html"' in index

    def test_output_dir_override(self, tmp_path: Path) -> None:
        """--output-dir replaces the configured output directory."""
        config_file = _write_site(tmp_path)
        output = tmp_path / "public"

        runner = CliRunner()
        result = runner.invoke(cli, ["build", "-c", str(config_file), "-o", str(output)])

        assert result.exit_code == 0
        assert (output / "guide.html").exists()
        assert not (tmp_path / "build").exists()

    def test_fails_without_static_dir(self, tmp_path: Path) -> None:
        """Report the error and exit non-zero when the build fails."""
        (tmp_path / "README.md").write_text("hi")
        config_file = tmp_path / "mdsite.toml"
        config_file.write_text("")

        runner = CliRunner()
        result = runner.invoke(cli, ["build", "-c", str(config_file)])

        assert result.exit_code == 1
        assert "Error: Static directory not found" in result.output

    def test_fails_on_missing_config(self, tmp_path: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["build", "-c", str(tmp_path / "nonexistent.toml")])

        assert result.exit_code != 0
