"""Tests for profiler configuration loading."""

import json
from pathlib import Path

import pytest

from stperf.config import ENV_VARS, ProfilerConfig, load_config
from stperf.errors import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep STPERF_* variables from the outer environment out of tests."""
    for env_var in ENV_VARS.values():
        monkeypatch.delenv(env_var, raising=False)


class TestProfilerConfig:
    """Tests for the ProfilerConfig model."""

    def test_defaults(self):
        """Test default settings."""
        config = ProfilerConfig()

        assert config.enabled is True
        assert config.format == "streamlined"
        assert config.decimals == 0
        assert config.log_level == "INFO"
        assert config.log_format == "text"
        assert config.log_file is None

    def test_format_normalized(self):
        """Test format names are case-insensitive."""
        assert ProfilerConfig(format="DOUBLED").format == "doubled"

    def test_log_level_normalized(self):
        """Test log levels are upper-cased."""
        assert ProfilerConfig(log_level="debug").log_level == "DEBUG"

    @pytest.mark.parametrize(
        "field,value",
        [
            ("format", "fancy"),
            ("decimals", -1),
            ("decimals", 10),
            ("log_level", "LOUD"),
            ("log_format", "xml"),
        ],
    )
    def test_invalid_values(self, field, value):
        """Test invalid values are rejected."""
        with pytest.raises(ValueError):
            ProfilerConfig(**{field: value})


class TestLoadConfig:
    """Tests for load_config()."""

    def test_defaults(self):
        """Test loading with no sources gives defaults."""
        assert load_config() == ProfilerConfig()

    def test_environment(self, monkeypatch):
        """Test STPERF_* variables are applied."""
        monkeypatch.setenv("STPERF_ENABLED", "0")
        monkeypatch.setenv("STPERF_FORMAT", "compatible")
        monkeypatch.setenv("STPERF_DECIMALS", "3")

        config = load_config()

        assert config.enabled is False
        assert config.format == "compatible"
        assert config.decimals == 3

    def test_file(self, tmp_path: Path):
        """Test settings are read from a JSON file."""
        config_file = tmp_path / "stperf.json"
        config_file.write_text(json.dumps({"format": "doubled", "decimals": 2}))

        config = load_config(config_file)

        assert config.format == "doubled"
        assert config.decimals == 2

    def test_precedence(self, tmp_path: Path, monkeypatch):
        """Test overrides beat environment, which beats the file."""
        config_file = tmp_path / "stperf.json"
        config_file.write_text(json.dumps({"format": "doubled", "decimals": 2}))
        monkeypatch.setenv("STPERF_FORMAT", "debugging")
        monkeypatch.setenv("STPERF_DECIMALS", "4")

        config = load_config(config_file, decimals=1)

        assert config.format == "debugging"
        assert config.decimals == 1

    def test_log_file_sources(self, tmp_path: Path, monkeypatch):
        """Test the log file comes from the file, the environment or an override."""
        config_file = tmp_path / "stperf.json"
        config_file.write_text(json.dumps({"log_file": "from-file.log"}))

        assert load_config(config_file).log_file == Path("from-file.log")

        monkeypatch.setenv("STPERF_LOG_FILE", str(tmp_path / "env.log"))
        assert load_config(config_file).log_file == tmp_path / "env.log"
        assert load_config(log_file=tmp_path / "cli.log").log_file == tmp_path / "cli.log"

    def test_none_override_ignored(self):
        """Test None overrides leave lower sources in effect."""
        assert load_config(format=None).format == "streamlined"

    def test_missing_file(self, tmp_path: Path):
        """Test a missing file raises a configuration error."""
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path):
        """Test malformed JSON raises a configuration error."""
        config_file = tmp_path / "bad.json"
        config_file.write_text("{not json")

        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            load_config(config_file)

    def test_non_object_json(self, tmp_path: Path):
        """Test a JSON file must hold an object."""
        config_file = tmp_path / "list.json"
        config_file.write_text("[1, 2]")

        with pytest.raises(ConfigurationError):
            load_config(config_file)

    def test_invalid_value(self, monkeypatch):
        """Test validation errors surface as configuration errors."""
        monkeypatch.setenv("STPERF_FORMAT", "fancy")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config()

        assert exc_info.value.exit_code == 2
