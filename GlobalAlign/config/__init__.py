"""Configuration package for GlobalAlign."""

from GlobalAlign.config.config_loader import (
    get_config_loader,
    reset_config_loader,
    ConfigLoader,
    ConfigurationError,
)

__all__ = ["get_config_loader", "reset_config_loader", "ConfigLoader", "ConfigurationError"]
