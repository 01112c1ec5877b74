"""
Runtime Configuration Module

Provides configuration loading and management for the distribution builder.
"""

from .runtime import (
    DEFAULT_INPUT_PATH,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_OUTPUT_FILE,
    IOConfig,
    LoggingConfig,
    PipelineConfig,
    RuntimeConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "DEFAULT_INPUT_PATH",
    "DEFAULT_OUTPUT_DIR",
    "DEFAULT_OUTPUT_FILE",
    "IOConfig",
    "LoggingConfig",
    "PipelineConfig",
    "RuntimeConfig",
    "get_default_config",
    "set_default_config",
]
