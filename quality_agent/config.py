"""
Quality Agent - Configuration
=======================================
Loads from ~/.config/quality-agent/config.yaml (or $QUALITY_AGENT_CONFIG)
with env var overrides. A .env file in the working directory is honoured.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

# Load .env (before any os.environ access)
load_dotenv()

CONFIG_PATH = Path(
    os.environ.get(
        "QUALITY_AGENT_CONFIG",
        Path.home() / ".config" / "quality-agent" / "config.yaml",
    )
)


@dataclass
class LLMConfig:
    """Advisory model used for augmentation and questions."""

    provider: str = "openai"  # openai | azure-openai | minimax | demo
    model: str = "gpt-4o"
    max_tokens: int = 4000
    temperature: float = 0.2
    timeout_sec: float = 60.0


@dataclass
class AnalysisConfig:
    """File intake and augmentation bounds."""

    max_file_size: int = 1024 * 1024
    ignore_dirs: list = field(
        default_factory=lambda: [
            "node_modules",
            "dist",
            "build",
            ".git",
            "coverage",
            ".next",
            "vendor",
        ]
    )
    augment: bool = True
    augment_timeout_sec: float = 60.0
    context_files: int = 5
    context_issues: int = 10
    preview_chars: int = 500


@dataclass
class ServerConfig:
    """Web server configuration."""

    host: str = "127.0.0.1"
    port: int = 3000
    reports_dir: str = "reports"
    result_ttl_sec: int = 3600


@dataclass
class AgentConfig:
    """Root configuration object."""

    llm: LLMConfig = field(default_factory=LLMConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    server: ServerConfig = field(default_factory=ServerConfig)


def _apply_section(obj, raw: dict):
    """Apply dict values to a dataclass."""
    for k, v in raw.items():
        if hasattr(obj, k):
            setattr(obj, k, v)


def _truthy(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_config(path: Optional[Path] = None) -> AgentConfig:
    """Load config from YAML + env vars."""
    cfg = AgentConfig()
    path = path or CONFIG_PATH

    if path.exists():
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
        for section in ("llm", "analysis", "server"):
            if isinstance(raw.get(section), dict):
                _apply_section(getattr(cfg, section), raw[section])

    # Env overrides
    if p := os.environ.get("QUALITY_LLM_PROVIDER"):
        cfg.llm.provider = p
    if m := os.environ.get("QUALITY_LLM_MODEL"):
        cfg.llm.model = m
    if a := os.environ.get("QUALITY_AUGMENT"):
        cfg.analysis.augment = _truthy(a)
    if p := os.environ.get("PORT"):
        cfg.server.port = int(p)
    if h := os.environ.get("HOST"):
        cfg.server.host = h

    return cfg


_config: Optional[AgentConfig] = None


def get_config() -> AgentConfig:
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Drop the cached config so the next get_config() reloads it."""
    global _config
    _config = None
