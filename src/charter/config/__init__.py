"""Configuration loading for charter."""

from .runtime import CharterConfig, config_from_mapping, load_config

__all__ = ["CharterConfig", "config_from_mapping", "load_config"]
