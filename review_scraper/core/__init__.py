# The run modules (pipeline, orchestrator, retry) import the components package,
# which imports this package; import them by full module path.
from .config import config_manager, ConfigurationManager, ConfigError, ConfigFileNotFoundError, InvalidYamlError
from .exceptions import (
    ReviewScraperError,
    ConfigurationError,
    InputFileError,
    ComponentError,
    RendererError,
    SelectorTimeoutError,
    ExtractorError,
    StorageError,
    StateError,
    RetryExhaustedError,
)
from .logger import setup_logging, get_logger
from .settings import ScraperSettings
from .state import WorkState

__all__ = [
    # Config
    "config_manager",
    "ConfigurationManager",
    "ConfigError",
    "ConfigFileNotFoundError",
    "InvalidYamlError",
    "ScraperSettings",
    # Logger
    "setup_logging",
    "get_logger",
    # Exceptions
    "ReviewScraperError",
    "ConfigurationError",
    "InputFileError",
    "ComponentError",
    "RendererError",
    "SelectorTimeoutError",
    "ExtractorError",
    "StorageError",
    "StateError",
    "RetryExhaustedError",
    # State
    "WorkState",
]
