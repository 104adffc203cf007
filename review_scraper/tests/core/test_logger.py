import logging
from logging.handlers import RotatingFileHandler

import pytest

from review_scraper.core import logger as logger_module
from review_scraper.core.logger import get_logger, setup_logging


class MockConfigurationManager:
    def __init__(self, settings=None):
        self.settings = settings if settings is not None else {}

    def get(self, key, default=None):
        return self.settings.get(key, default)


@pytest.fixture(autouse=True)
def restore_root_logger(monkeypatch):
    """setup_logging replaces the root handlers; put pytest's back afterwards."""
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    monkeypatch.setattr(logger_module, "_logging_initialized", False)
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        if handler not in saved_handlers:
            handler.close()
    for handler in saved_handlers:
        root.addHandler(handler)
    root.setLevel(saved_level)


def test_console_and_rotating_file_handlers(tmp_path):
    log_path = tmp_path / "logs" / "scraper.log"
    config = MockConfigurationManager({"logging": {
        "level": "WARNING",
        "handlers": {
            "console": {"enabled": True},
            "file": {"enabled": True, "path": str(log_path), "max_bytes": 1024, "backup_count": 2},
        },
    }})

    setup_logging(config)

    root = logging.getLogger()
    assert root.level == logging.WARNING
    file_handlers = [h for h in root.handlers if isinstance(h, RotatingFileHandler)]
    assert len(file_handlers) == 1
    assert file_handlers[0].maxBytes == 1024
    assert file_handlers[0].backupCount == 2
    assert any(type(h) is logging.StreamHandler for h in root.handlers)

    get_logger("review_scraper.test").warning("Scraping restaurant Bistro ranked: 1")
    file_handlers[0].flush()
    assert "Scraping restaurant Bistro ranked: 1" in log_path.read_text(encoding="utf-8")


def test_level_argument_overrides_config():
    config = MockConfigurationManager({"logging": {"level": "INFO", "handlers": {"console": {"enabled": True}}}})
    setup_logging(config, level="debug")
    assert logging.getLogger().level == logging.DEBUG


def test_no_enabled_handlers_installs_null_handler():
    setup_logging(MockConfigurationManager({"logging": {"level": "INFO", "handlers": {}}}))
    assert [type(h) for h in logging.getLogger().handlers] == [logging.NullHandler]


def test_second_call_is_ignored_unless_forced():
    setup_logging(MockConfigurationManager({"logging": {"level": "ERROR", "handlers": {}}}))
    setup_logging(MockConfigurationManager({"logging": {"level": "DEBUG", "handlers": {}}}))
    assert logging.getLogger().level == logging.ERROR

    setup_logging(MockConfigurationManager({"logging": {"level": "DEBUG", "handlers": {}}}), force=True)
    assert logging.getLogger().level == logging.DEBUG


def test_missing_logging_section_falls_back_to_basic_config():
    setup_logging(MockConfigurationManager({}))
    assert logger_module._logging_initialized is True
    assert logging.getLogger().level == logging.INFO
