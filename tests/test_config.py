"""Essential configuration tests."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from reelshelf.config import ReelshelfConfig, create_sample_config, load_config


class TestConfigBasics:
    """Test essential configuration functionality."""

    def test_default_config(self):
        config = ReelshelfConfig()

        assert config.handbrake_binary == "HandBrakeCLI"
        assert config.atomicparsley_binary == "AtomicParsley"
        assert config.output_extension == "m4v"
        assert config.stop_on_conversion_failure is False
        assert config.case_insensitive_paths is False
        assert config.catalog_source == "local"

    def test_path_expansion(self):
        config = ReelshelfConfig(data_dir=Path("~/reelshelf"), log_dir="~/reelshelf/logs")

        assert "~" not in str(config.data_dir)
        assert "~" not in str(config.log_dir)
        assert config.data_dir.is_absolute()

    def test_database_path(self, config):
        assert config.database_path == config.data_dir / "reelshelf.db"

    def test_directory_creation(self, config):
        config.ensure_directories()

        assert config.data_dir.exists()
        assert config.log_dir.exists()
        assert config.conversion_dir.exists()

    def test_output_extension_dot_stripped(self):
        assert ReelshelfConfig(output_extension=".mp4").output_extension == "mp4"

    def test_empty_output_extension_rejected(self):
        with pytest.raises(ValidationError):
            ReelshelfConfig(output_extension=".")

    def test_unknown_catalog_source_rejected(self):
        with pytest.raises(ValidationError):
            ReelshelfConfig(catalog_source="sonarr")


class TestConfigLoading:
    """Test configuration loading from files."""

    def test_config_file_loading(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_file.write_text(
            f'''
data_dir = "{tmp_path / 'data'}"
handbrake_preset = "Fast 720p30"
stop_on_conversion_failure = true
''',
        )

        config = load_config(config_file)

        assert config.data_dir == tmp_path / "data"
        assert config.handbrake_preset == "Fast 720p30"
        assert config.stop_on_conversion_failure is True

    def test_load_config_defaults(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.chdir(tmp_path)

        config = load_config()

        assert config.handbrake_binary == "HandBrakeCLI"

    def test_sample_config_loads(self, tmp_path):
        path = tmp_path / "nested" / "config.toml"

        create_sample_config(path)
        config = load_config(path)

        assert config.tv_library == "TV Shows"
        assert config.stop_on_conversion_failure is False
