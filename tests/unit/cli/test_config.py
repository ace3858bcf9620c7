"""Unit tests for config CLI commands.

Tests for the recyclectl config show and recyclectl config init commands.
"""

import tomllib
from pathlib import Path

from recyclectl.cli.main import app
from recyclectl.core.paths import get_config_path
from typer.testing import CliRunner

runner = CliRunner()


class TestConfigShow:
    """Tests for recyclectl config show."""

    def test_defaults_without_file(self) -> None:
        """Without a file the defaults are shown and the source says so."""
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "does not exist" in result.stdout
        assert "recurse = false" in result.stdout
        assert "passes = 3" in result.stdout

    def test_shows_file_values(self, tmp_path: Path) -> None:
        """Values from --config are shown."""
        config = tmp_path / "config.toml"
        config.write_text("recurse = true\n\n[shred]\npasses = 7\n")

        result = runner.invoke(app, ["--config", str(config), "config", "show"])

        assert result.exit_code == 0
        assert f"# Source: {config}" in result.stdout
        assert "recurse = true" in result.stdout
        assert "passes = 7" in result.stdout


class TestConfigInit:
    """Tests for recyclectl config init."""

    def test_writes_default_file(self) -> None:
        """init creates the default config file."""
        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0
        path = get_config_path()
        assert path.exists()
        with open(path, "rb") as f:
            data = tomllib.load(f)
        assert data["recurse"] is False
        assert data["shred"]["passes"] == 3

    def test_refuses_to_overwrite(self, tmp_path: Path) -> None:
        """An existing file is kept unless --force is given."""
        config = tmp_path / "config.toml"
        config.write_text("recurse = true\n")

        result = runner.invoke(app, ["--config", str(config), "config", "init"])

        assert result.exit_code == 1
        assert "already exists" in (result.stdout + result.stderr)
        assert config.read_text() == "recurse = true\n"

    def test_force_overwrites(self, tmp_path: Path) -> None:
        """--force replaces the file with defaults."""
        config = tmp_path / "config.toml"
        config.write_text("recurse = true\n")

        result = runner.invoke(app, ["--config", str(config), "config", "init", "--force"])

        assert result.exit_code == 0
        with open(config, "rb") as f:
            assert tomllib.load(f)["recurse"] is False
