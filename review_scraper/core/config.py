"""
Configuration management for the review scraper.

Settings live in YAML files under `review_scraper/config/`, one per
environment (`development.yaml`, `production.yaml`, ...). The environment is
picked from the `APP_ENV` variable and defaults to 'development'.

A single `ConfigurationManager` instance is shared by the process; nested
values are read with dot notation, e.g. `config.get("retry.max_attempts")`.
"""
import os
import yaml
from typing import Any, Dict, Optional

# Directory holding the per-environment YAML files (review_scraper/config).
CONFIG_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "config")

DEFAULT_ENV = "development"


class ConfigError(Exception):
    """Base class for all configuration-loading errors."""
    pass


class ConfigFileNotFoundError(ConfigError):
    """Raised when the YAML file for the requested environment does not exist."""
    pass


class InvalidYamlError(ConfigError):
    """Raised when a configuration file is not valid YAML or not a mapping."""
    pass


class ConfigurationManager:
    """
    Loads and serves configuration settings from YAML files.

    Implemented as a singleton: the first instantiation loads the configuration,
    later instantiations return the same object.
    """
    CONFIG_DIR: str = CONFIG_DIR

    _instance: Optional['ConfigurationManager'] = None
    _config: Dict[str, Any] = {}
    _current_env: str = ""

    def __new__(cls) -> 'ConfigurationManager':
        if cls._instance is None:
            cls._instance = super(ConfigurationManager, cls).__new__(cls)
            cls._instance.load_config()
        return cls._instance

    def load_config(self, env: Optional[str] = None) -> None:
        """
        Loads configuration for an environment.

        Precedence for the environment name: the `env` argument, then `APP_ENV`,
        then `DEFAULT_ENV`.

        Args:
            env (Optional[str]): Environment name such as "production".

        Raises:
            ConfigFileNotFoundError: If `<env>.yaml` does not exist in `CONFIG_DIR`.
            InvalidYamlError: If the file is malformed or not a mapping.
        """
        self._current_env = env or os.getenv("APP_ENV", DEFAULT_ENV)
        config_file_path = os.path.join(self.CONFIG_DIR, f"{self._current_env}.yaml")

        try:
            with open(config_file_path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except FileNotFoundError:
            raise ConfigFileNotFoundError(
                f"Configuration file not found for environment '{self._current_env}' at '{config_file_path}'. "
                f"Ensure '{self._current_env}.yaml' exists in the '{self.CONFIG_DIR}' directory."
            )
        except yaml.YAMLError as e:
            raise InvalidYamlError(
                f"Error parsing YAML in configuration file '{config_file_path}': {e}"
            )
        if not isinstance(loaded, dict):
            raise InvalidYamlError(
                f"Configuration file '{config_file_path}' does not contain a valid YAML dictionary."
            )
        self._config = loaded

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        """
        Returns the value at `key` (dot notation for nested keys) or `default`.

        Args:
            key (str): Key such as "components.scraper.timeouts.consent_ms".
            default (Optional[Any]): Value returned when the key is absent.
        """
        value: Any = self._config
        for part in key.split("."):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]
        return value

    def reload_config(self, env: Optional[str] = None) -> None:
        """Reloads the configuration, optionally switching environment."""
        self.load_config(env or self._current_env or None)

    @property
    def current_environment(self) -> str:
        """Name of the currently loaded environment."""
        return self._current_env


# Global instance; created (and loaded) on first import.
config_manager = ConfigurationManager()
