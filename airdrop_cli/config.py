"""
CLI Configuration

Locates and loads the runtime configuration for the airdrop CLI.
Supports configuration files (YAML) and environment variables.
"""

from __future__ import annotations

from pathlib import Path

from core.config.runtime import RuntimeConfig


CONFIG_FILE_NAME = "airdrop.yaml"


def default_config_paths() -> list[Path]:
    """Locations searched, in order, when no --config is given."""
    return [
        Path.cwd() / CONFIG_FILE_NAME,
        Path.cwd() / f".{CONFIG_FILE_NAME}",
        Path.home() / ".config" / "airdrop" / "config.yaml",
    ]


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file; must exist if given

    Returns:
        Merged configuration

    Raises:
        FileNotFoundError: If config_path is given but does not exist
    """
    config = RuntimeConfig()

    if config_path is not None:
        config = RuntimeConfig.from_yaml(config_path)
    else:
        for default_path in default_config_paths():
            if default_path.exists():
                config = RuntimeConfig.from_yaml(default_path)
                break

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """# Merkle airdrop builder configuration
# Environment variables (AIRDROP_* prefix) override these values.

io:
  # Recipient list, CSV with an `address,amount` header
  input_path: ./data/airdrop/airdrop.csv
  output_dir: ./data/airdrop
  output_file: airdrop_setup.json

pipeline:
  # Threads used for proof generation
  workers: 1
  # Re-verify every proof against the root before writing
  verify_proofs: true

logging:
  level: INFO
  file: null
"""
