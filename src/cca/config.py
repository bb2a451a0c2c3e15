"""Configuration loading from environment variables and cca.toml."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from cca.memory.store import DEFAULT_MEMORY_DIR

_CONFIG_FILENAME = "cca.toml"
_HOME_CONFIG = Path.home() / ".context-capturing-agents.toml"
_DEFAULT_MODEL = "claude-sonnet-4-5-20250929"


@dataclass
class EngineConfig:
    """Configuration for the reasoning engine."""

    name: str = "anthropic_api"
    model: str = _DEFAULT_MODEL
    max_tokens: int = 8192
    temperature: float = 0.0
    timeout: int = 300


@dataclass
class AgentLimits:
    """Maximum model turns per agent run."""

    explorer: int = 100
    writer: int = 100
    searcher: int = 50
    updater: int = 100


@dataclass
class CCAConfig:
    """Top-level configuration."""

    engine: EngineConfig = field(default_factory=EngineConfig)
    limits: AgentLimits = field(default_factory=AgentLimits)
    memory_dir: Path = DEFAULT_MEMORY_DIR
    log_level: str = "INFO"


def load_config(config_path: Path | None = None) -> CCAConfig:
    """Load configuration from environment variables and optional cca.toml.

    Priority: environment variables > cca.toml > defaults.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text())
    else:
        for candidate in [Path.cwd() / _CONFIG_FILENAME, _HOME_CONFIG]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text())
                break

    engine_data = file_data.get("engine", {})
    limits_data = file_data.get("limits", {})
    defaults = AgentLimits()

    return CCAConfig(
        engine=EngineConfig(
            name=os.getenv("CCA_ENGINE", engine_data.get("name", "anthropic_api")),
            model=os.getenv("CCA_MODEL", engine_data.get("model", _DEFAULT_MODEL)),
            max_tokens=int(os.getenv("CCA_MAX_TOKENS", engine_data.get("max_tokens", 8192))),
            temperature=float(
                os.getenv("CCA_TEMPERATURE", engine_data.get("temperature", 0.0))
            ),
            timeout=int(os.getenv("CCA_TIMEOUT", engine_data.get("timeout", 300))),
        ),
        limits=AgentLimits(
            explorer=int(limits_data.get("explorer", defaults.explorer)),
            writer=int(limits_data.get("writer", defaults.writer)),
            searcher=int(limits_data.get("searcher", defaults.searcher)),
            updater=int(limits_data.get("updater", defaults.updater)),
        ),
        memory_dir=Path(
            os.getenv("CCA_MEMORY_DIR", file_data.get("memory_dir", str(DEFAULT_MEMORY_DIR)))
        ).expanduser(),
        log_level=os.getenv("LOG_LEVEL", file_data.get("log_level", "INFO")),
    )
