"""Tests for configuration loading."""

import pytest
from pathlib import Path

from cca.config import load_config
from cca.memory.store import DEFAULT_MEMORY_DIR

ENV_KEYS = [
    "CCA_ENGINE",
    "CCA_MODEL",
    "CCA_MAX_TOKENS",
    "CCA_TEMPERATURE",
    "CCA_TIMEOUT",
    "CCA_MEMORY_DIR",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def isolated(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("cca.config._HOME_CONFIG", tmp_path / "home.toml")
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


class TestConfig:
    def test_defaults(self):
        config = load_config()
        assert config.engine.name == "anthropic_api"
        assert config.engine.max_tokens == 8192
        assert config.engine.temperature == 0.0
        assert config.engine.timeout == 300
        assert config.limits.explorer == 100
        assert config.limits.writer == 100
        assert config.limits.searcher == 50
        assert config.limits.updater == 100
        assert config.memory_dir == DEFAULT_MEMORY_DIR
        assert config.memory_dir.name == ".context-capturing-agents"
        assert config.log_level == "INFO"

    def test_env_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("CCA_MODEL", "claude-other")
        monkeypatch.setenv("CCA_TIMEOUT", "60")
        monkeypatch.setenv("CCA_TEMPERATURE", "0.5")
        monkeypatch.setenv("CCA_MEMORY_DIR", str(tmp_path / "ctx"))

        config = load_config()
        assert config.engine.model == "claude-other"
        assert config.engine.timeout == 60
        assert config.engine.temperature == 0.5
        assert config.memory_dir == tmp_path / "ctx"

    def test_toml_file(self, tmp_path: Path):
        toml_path = tmp_path / "custom.toml"
        toml_path.write_text("""
memory_dir = "~/notes"
log_level = "DEBUG"

[engine]
model = "claude-from-file"
timeout = 120

[limits]
searcher = 20
""")
        config = load_config(toml_path)
        assert config.engine.model == "claude-from-file"
        assert config.engine.timeout == 120
        assert config.limits.searcher == 20
        assert config.limits.explorer == 100
        assert config.memory_dir == Path("~/notes").expanduser()
        assert config.log_level == "DEBUG"

    def test_cwd_file_discovered(self, tmp_path: Path):
        (tmp_path / "cca.toml").write_text('[engine]\nmax_tokens = 4096\n')
        assert load_config().engine.max_tokens == 4096

    def test_home_file_discovered(self, tmp_path: Path):
        (tmp_path / "home.toml").write_text('[limits]\nupdater = 5\n')
        assert load_config().limits.updater == 5

    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("CCA_MODEL", "claude-from-env")
        toml_path = tmp_path / "cca.toml"
        toml_path.write_text("""
[engine]
model = "claude-from-file"
""")
        config = load_config(toml_path)
        assert config.engine.model == "claude-from-env"  # env wins
