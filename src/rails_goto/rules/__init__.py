"""Resolver configuration."""

from rails_goto.rules.config import (
    CONFIG_FILENAME,
    ConfigError,
    ResolverConfig,
    load_config,
)

__all__ = ["CONFIG_FILENAME", "ConfigError", "ResolverConfig", "load_config"]
