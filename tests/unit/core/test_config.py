"""Unit tests for settings loading and saving."""

import tomllib
from pathlib import Path

import pytest
from recyclectl.core.config import (
    DEFAULT_BLOCK_SIZE,
    DEFAULT_PASSES,
    ConfigError,
    ConfigParseError,
    Settings,
    ShredSettings,
    load_settings,
    render_settings,
    save_settings,
)


class TestSettingsModel:
    """Tests for the Settings and ShredSettings models."""

    def test_defaults(self) -> None:
        """Settings default to prompting for recursion and three passes."""
        settings = Settings()
        assert settings.recurse is False
        assert settings.shred.passes == DEFAULT_PASSES == 3
        assert settings.shred.block_size == DEFAULT_BLOCK_SIZE == 1024 * 1024

    def test_pass_bounds(self) -> None:
        """Pass counts outside 1..35 are rejected."""
        with pytest.raises(ValueError):
            ShredSettings(passes=0)
        with pytest.raises(ValueError):
            ShredSettings(passes=36)

    def test_block_size_bounds(self) -> None:
        """Block sizes below 512 bytes are rejected."""
        with pytest.raises(ValueError):
            ShredSettings(block_size=100)

    def test_extra_keys_forbidden(self) -> None:
        """Unknown keys are rejected."""
        with pytest.raises(ValueError):
            Settings.model_validate({"recurse": True, "colour": "red"})


class TestLoadSettings:
    """Tests for load_settings function."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        """A missing config file is not an error."""
        settings = load_settings(tmp_path / "nope.toml")
        assert settings == Settings()

    def test_loads_values(self, tmp_path: Path) -> None:
        """Values from the TOML file are applied."""
        path = tmp_path / "config.toml"
        path.write_text("recurse = true\n\n[shred]\npasses = 7\n")

        settings = load_settings(path)

        assert settings.recurse is True
        assert settings.shred.passes == 7
        assert settings.shred.block_size == DEFAULT_BLOCK_SIZE

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Broken TOML raises ConfigParseError."""
        path = tmp_path / "config.toml"
        path.write_text("recurse = \n")

        with pytest.raises(ConfigParseError, match="Invalid TOML"):
            load_settings(path)

    def test_schema_violation(self, tmp_path: Path) -> None:
        """Values of the wrong type raise ConfigError."""
        path = tmp_path / "config.toml"
        path.write_text("[shred]\npasses = 0\n")

        with pytest.raises(ConfigError, match="Invalid config content"):
            load_settings(path)

    def test_default_path_uses_xdg(self, isolated_xdg: Path) -> None:
        """Without an explicit path the XDG config file is read."""
        config_dir = isolated_xdg / "config" / "recyclectl"
        config_dir.mkdir(parents=True)
        (config_dir / "config.toml").write_text("recurse = true\n")

        assert load_settings().recurse is True


class TestSaveSettings:
    """Tests for save_settings and render_settings."""

    def test_save_then_load(self, tmp_path: Path) -> None:
        """Saved settings load back unchanged."""
        path = tmp_path / "sub" / "config.toml"
        settings = Settings(recurse=True, shred=ShredSettings(passes=5, block_size=4096))

        saved = save_settings(settings, path)

        assert saved == path
        assert load_settings(path) == settings

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        """The atomic write leaves only the config file behind."""
        path = tmp_path / "config.toml"
        save_settings(Settings(), path)

        assert [p.name for p in tmp_path.iterdir()] == ["config.toml"]

    def test_render_is_valid_toml(self) -> None:
        """render_settings produces TOML with a [shred] table."""
        data = tomllib.loads(render_settings(Settings()))
        assert data["recurse"] is False
        assert data["shred"]["passes"] == DEFAULT_PASSES
