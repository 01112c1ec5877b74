"""
Runtime Configuration

Central configuration for input/output locations, pipeline execution and logging.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()


ENV_PREFIX = "AIRDROP_"

DEFAULT_INPUT_PATH = "./data/airdrop/airdrop.csv"
DEFAULT_OUTPUT_DIR = "./data/airdrop"
DEFAULT_OUTPUT_FILE = "airdrop_setup.json"


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class IOConfig:
    """Where the recipient list is read from and the artifact written to."""
    input_path: str = DEFAULT_INPUT_PATH
    output_dir: str = DEFAULT_OUTPUT_DIR
    output_file: str = DEFAULT_OUTPUT_FILE


@dataclass
class PipelineConfig:
    """Configuration for pipeline execution."""
    workers: int = 1
    verify_proofs: bool = True

    def __post_init__(self):
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")


@dataclass
class LoggingConfig:
    """Configuration for log output."""
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables (AIRDROP_* prefix, .env honoured)
    - YAML file
    - Programmatic construction
    """
    io: IOConfig = field(default_factory=IOConfig)
    pipeline: PipelineConfig = field(default_factory=PipelineConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def output_path(self) -> Path:
        """Full path of the artifact file."""
        return Path(self.io.output_dir) / self.io.output_file

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - AIRDROP_INPUT_PATH: recipient CSV path
        - AIRDROP_OUTPUT_DIR: artifact directory
        - AIRDROP_OUTPUT_FILE: artifact file name
        - AIRDROP_WORKERS: proof generation worker threads
        - AIRDROP_VERIFY_PROOFS: re-verify proofs before writing (true/false)
        - AIRDROP_LOG_LEVEL: log level
        - AIRDROP_LOG_FILE: optional log file
        """
        overrides: dict[str, Any] = {}

        # IO settings
        if os.getenv(f"{ENV_PREFIX}INPUT_PATH"):
            overrides.setdefault("io", {})["input_path"] = os.getenv(f"{ENV_PREFIX}INPUT_PATH")
        if os.getenv(f"{ENV_PREFIX}OUTPUT_DIR"):
            overrides.setdefault("io", {})["output_dir"] = os.getenv(f"{ENV_PREFIX}OUTPUT_DIR")
        if os.getenv(f"{ENV_PREFIX}OUTPUT_FILE"):
            overrides.setdefault("io", {})["output_file"] = os.getenv(f"{ENV_PREFIX}OUTPUT_FILE")

        # Pipeline settings
        if os.getenv(f"{ENV_PREFIX}WORKERS"):
            overrides.setdefault("pipeline", {})["workers"] = int(os.getenv(f"{ENV_PREFIX}WORKERS", "1"))
        if os.getenv(f"{ENV_PREFIX}VERIFY_PROOFS"):
            overrides.setdefault("pipeline", {})["verify_proofs"] = _env_bool(
                os.getenv(f"{ENV_PREFIX}VERIFY_PROOFS", "true")
            )

        # Logging
        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        io_data = data.get("io", {}) or {}
        pipeline_data = data.get("pipeline", {}) or {}
        logging_data = data.get("logging", {}) or {}

        return cls(
            io=IOConfig(**io_data),
            pipeline=PipelineConfig(**pipeline_data),
            logging=LoggingConfig(**logging_data),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for section in ("io", "pipeline", "logging"):
            for key, value in overrides.get(section, {}).items():
                setattr(getattr(new_config, section), key, value)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "io": {
                "input_path": self.io.input_path,
                "output_dir": self.io.output_dir,
                "output_file": self.io.output_file,
            },
            "pipeline": {
                "workers": self.pipeline.workers,
                "verify_proofs": self.pipeline.verify_proofs,
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
            },
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: RuntimeConfig) -> None:
    """Set the default runtime configuration."""
    global _default_config
    _default_config = config
