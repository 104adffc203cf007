"""
Centralized logging setup for the review scraper.

`setup_logging()` configures the root logger from the `logging` section of
the active configuration (console handler and/or rotating file handler).
`get_logger(name)` hands out module loggers and falls back to a basic setup
when called before the entry point configured logging.
"""
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional, Dict, Any

from review_scraper.core.config import ConfigurationManager

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_logging_initialized = False


def setup_logging(
    config: Optional[ConfigurationManager] = None,
    level: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Configures the root logger from the configuration's `logging` section.

    Args:
        config (Optional[ConfigurationManager]): Configuration to read settings from.
            Falls back to the global `config_manager` when None.
        level (Optional[str]): Log level overriding `logging.level` (e.g. from the CLI).
        force (bool): Reconfigure even if logging was already initialized.
    """
    global _logging_initialized
    if _logging_initialized and not force:
        logging.getLogger(__name__).debug("setup_logging: already initialized.")
        return

    current_config = config
    if current_config is None:
        from review_scraper.core.config import config_manager as global_config_manager
        current_config = global_config_manager

    log_settings: Optional[Dict[str, Any]] = current_config.get("logging")
    if not log_settings:
        logging.basicConfig(level=(level or "INFO").upper(), format=DEFAULT_FORMAT, force=True)
        logging.warning("Logging setup: 'logging' section not found in configuration. Using basicConfig.")
        _logging_initialized = True
        return

    log_level_str = (level or log_settings.get("level", "INFO")).upper()
    log_level = getattr(logging, log_level_str, logging.INFO)
    log_format = log_settings.get("format", DEFAULT_FORMAT)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.setLevel(log_level)
    formatter = logging.Formatter(log_format)

    handlers_settings = log_settings.get("handlers", {}) or {}
    console_settings = handlers_settings.get("console", {}) or {}
    if console_settings.get("enabled", False):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    file_settings = handlers_settings.get("file", {}) or {}
    if file_settings.get("enabled", False):
        # Relative paths resolve against the working directory the scraper runs from.
        log_file_path = os.path.abspath(file_settings.get("path", "logs/review_scraper.log"))
        max_bytes = int(file_settings.get("max_bytes", 10 * 1024 * 1024))
        backup_count = int(file_settings.get("backup_count", 5))
        try:
            os.makedirs(os.path.dirname(log_file_path), exist_ok=True)
            file_handler = RotatingFileHandler(
                filename=log_file_path,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            logging.error(f"Logging setup: failed to configure file logging at '{log_file_path}': {e}. File logging disabled.")

    if not root_logger.handlers:
        root_logger.addHandler(logging.NullHandler())

    _logging_initialized = True
    logging.getLogger(__name__).debug(f"Logging initialized. Level: {log_level_str}.")


def get_logger(name: str) -> logging.Logger:
    """
    Returns the logger for `name`, making sure logging has been set up at least once.

    Args:
        name (str): Usually the calling module's `__name__`.
    """
    if not _logging_initialized:
        setup_logging()
    return logging.getLogger(name)
