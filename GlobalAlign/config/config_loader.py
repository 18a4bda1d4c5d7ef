"""Configuration loader for GlobalAlign."""
import os
import yaml
from pathlib import Path
from typing import Any, Dict, Optional, Union, List

# Type alias for configuration
Config = Dict[str, Any]


class ConfigurationError(Exception):
    """Exception raised for configuration errors."""
    pass


class ConfigLoader:
    """
    Configuration loader for GlobalAlign.

    This class loads configuration from a YAML file, overrides values with
    environment variables, and validates the configuration.
    """

    # Default configuration file path
    DEFAULT_CONFIG_PATH = Path(__file__).parent / "default_config.yaml"

    # Environment variable prefix for overriding configuration
    ENV_PREFIX = "GLOBALALIGN_"

    REQUIRED = {
        "scoring": ["match_score", "mismatch_score", "gap_penalty", "substitution_matrix"],
        "engine": ["fill_order", "empty_policy", "gap_symbol", "max_cells"],
        "logging": ["level", "log_file"],
    }

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """
        Initialize the configuration loader.

        :arg: config_path: Path to the configuration file. If None, the default
                configuration file shipped with the package is used.
        """
        self.using_default_config = config_path is None
        self.config_path = Path(config_path) if config_path else self.DEFAULT_CONFIG_PATH
        self.config = self._load_config()
        self._override_from_env()
        self._validate_config()

    def _load_config(self) -> Config:
        """
        Load configuration from a YAML file.

        :returns: The loaded configuration.
        :raises: ConfigurationError: If the configuration file cannot be loaded.
        """
        try:
            with open(self.config_path, "r") as f:
                config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load configuration from {self.config_path}: {e}")
        if not isinstance(config, dict):
            raise ConfigurationError(f"Configuration in {self.config_path} is not a mapping")
        return config

    def _override_from_env(self) -> None:
        """
        Override configuration values with environment variables.

        Environment variables should be prefixed with GLOBALALIGN_ and use
        double underscores to separate nested keys. For example, to override
        scoring.gap_penalty, use GLOBALALIGN_SCORING__GAP_PENALTY.
        """
        for env_var, value in os.environ.items():
            if not env_var.startswith(self.ENV_PREFIX):
                continue

            # Remove prefix and split by double underscore to get nested keys
            key_path = env_var[len(self.ENV_PREFIX):].lower().split("__")

            # Convert value to appropriate type
            if value.lower() == "true":
                value = True
            elif value.lower() == "false":
                value = False
            elif value.lower() == "null" or value.lower() == "none":
                value = None
            else:
                try:
                    # Try to convert to int or float
                    if "." in value:
                        value = float(value)
                    else:
                        value = int(value)
                except ValueError:
                    # Keep as string if conversion fails
                    pass

            # Update config with the environment variable value
            self._set_nested_value(self.config, key_path, value)

    def _set_nested_value(self, config: Dict[str, Any], key_path: List[str], value: Any) -> None:
        """
        Set a nested value in the configuration.

        :arg: config: The configuration dictionary.
        :arg: key_path: List of keys to navigate to the target value.
        :arg: value: The value to set.
        :raises: ConfigurationError: If the key path is invalid.
        """
        if not key_path:
            return

        if len(key_path) == 1:
            config[key_path[0]] = value
            return

        if key_path[0] not in config:
            config[key_path[0]] = {}

        if not isinstance(config[key_path[0]], dict):
            raise ConfigurationError(f"Cannot set nested value for non-dict key: {key_path[0]}")

        self._set_nested_value(config[key_path[0]], key_path[1:], value)

    def _validate_config(self) -> None:
        """
        Validate the configuration.

        :raises: ConfigurationError: If the configuration is invalid.
        """
        for section, keys in self.REQUIRED.items():
            if not isinstance(self.config.get(section), dict):
                raise ConfigurationError(f"Missing required configuration section: {section}")
            for key in keys:
                if key not in self.config[section]:
                    raise ConfigurationError(f"Missing required {section} parameter: {key}")

        scoring = self.config["scoring"]
        for key in ("match_score", "mismatch_score", "gap_penalty"):
            if not isinstance(scoring[key], int) or isinstance(scoring[key], bool):
                raise ConfigurationError(f"scoring.{key} must be an integer, got {scoring[key]!r}")
        matrix = scoring["substitution_matrix"]
        if matrix is not None and (not isinstance(matrix, str)
                                   or matrix.lower() not in ("match_mismatch", "blosum62")):
            raise ConfigurationError(f"Unknown scoring.substitution_matrix: {matrix}")

        engine = self.config["engine"]
        if engine["fill_order"] not in ("row", "column", "wavefront"):
            raise ConfigurationError(f"Unknown engine.fill_order: {engine['fill_order']}")
        if engine["empty_policy"] not in ("gap", "reject"):
            raise ConfigurationError(f"Unknown engine.empty_policy: {engine['empty_policy']}")
        if not isinstance(engine["gap_symbol"], str) or len(engine["gap_symbol"]) != 1:
            raise ConfigurationError("engine.gap_symbol must be a single character")
        max_cells = engine["max_cells"]
        if max_cells is not None and (not isinstance(max_cells, int) or isinstance(max_cells, bool)
                                      or max_cells <= 0):
            raise ConfigurationError(f"engine.max_cells must be a positive integer or null, got {max_cells!r}")

    def get_config(self) -> Config:
        """
        Get the complete configuration.
        :returns: The complete configuration.
        """
        return self.config

    def get_cli_config(self) -> tuple[Config, bool]:
        """
        Get the complete configuration. And a flag whether the configuration is the default or not.
        :returns: The complete configuration.
        """
        return self.config, self.using_default_config

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        :arg: section: The configuration section.
        :arg: key: The configuration key.
        :arg: default: The default value to return if the key is not found.
        :returns: The configuration value, or the default value if not found.
        """
        if section not in self.config:
            return default

        return self.config[section].get(key, default)


# Create a singleton instance of the configuration loader
_config_loader = None


def get_config_loader(config_path: Optional[Union[str, Path]] = None) -> ConfigLoader:
    """
    Get the configuration loader instance.
    :arg: config_path: Path to the configuration file. If None, the default configuration file is used.
    :return: The configuration loader instance.
    """
    global _config_loader
    if _config_loader is None or config_path is not None:
        _config_loader = ConfigLoader(config_path)
    return _config_loader


def reset_config_loader() -> None:
    """Drop the cached loader so the next call re-reads file and environment."""
    global _config_loader
    _config_loader = None
