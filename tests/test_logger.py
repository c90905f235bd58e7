"""
Tests for logging setup.
"""

import logging
from logging.handlers import TimedRotatingFileHandler

import pytest

from battery_notifier.config import ConfigManager
from battery_notifier.logger import LOG_FILE_NAME, setup_logging


@pytest.fixture
def reset_logger():
    yield
    logger = logging.getLogger("BatteryNotifier")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def _file_handler(logger):
    return next(h for h in logger.handlers if isinstance(h, TimedRotatingFileHandler))


def test_setup_logging_writes_fixed_file(tmp_path, write_config, reset_logger):
    config = ConfigManager(write_config({"log_level": "DEBUG"}))
    log_dir = tmp_path / "logs"

    logger = setup_logging(config, str(log_dir))

    assert logger.name == "BatteryNotifier"
    assert logger.level == logging.DEBUG
    assert (log_dir / LOG_FILE_NAME).exists()


def test_file_rolls_over_at_midnight(tmp_path, write_config, reset_logger):
    config = ConfigManager(write_config({}))

    handler = _file_handler(setup_logging(config, str(tmp_path)))

    assert handler.when == "MIDNIGHT"


def test_retention_days_bound_kept_files(tmp_path, write_config, reset_logger):
    config = ConfigManager(write_config({"log_retention_days": 7}))

    handler = _file_handler(setup_logging(config, str(tmp_path)))

    assert handler.backupCount == 7


def test_setup_logging_replaces_handlers(tmp_path, write_config, reset_logger):
    config = ConfigManager(write_config({}))

    setup_logging(config, str(tmp_path))
    logger = setup_logging(config, str(tmp_path))

    assert len(logger.handlers) == 2


def test_child_loggers_reach_file(tmp_path, write_config, reset_logger):
    config = ConfigManager(write_config({}))
    logger = setup_logging(config, str(tmp_path))

    logging.getLogger("BatteryNotifier.Dispatcher").info("BAT0: other -> discharging.normal")
    for handler in logger.handlers:
        handler.flush()

    assert "BAT0: other -> discharging.normal" in (tmp_path / LOG_FILE_NAME).read_text()
