"""
Logging setup for Battery Notifier.

The service runs for days at a time, so the log file rolls over at midnight
and only the configured number of days is kept.
"""

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

LOG_FILE_NAME = "battery_notifier.log"


def setup_logging(config, log_dir: str = "data/logs") -> logging.Logger:
    """
    Configure the BatteryNotifier logger hierarchy.

    Args:
        config: ConfigManager instance (log_level, log_retention_days)
        log_dir: Directory for log files

    Returns:
        Configured root application logger
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    level_name = config.get("log_level", "INFO")
    level = getattr(logging, level_name, logging.INFO)
    retention_days = int(config.get("log_retention_days", 30))

    logger = logging.getLogger("BatteryNotifier")
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # One file per day, older days pruned on rollover
    log_file = log_path / LOG_FILE_NAME
    file_handler = TimedRotatingFileHandler(
        log_file,
        when="midnight",
        backupCount=retention_days,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    logger.addHandler(file_handler)

    # Only warnings and errors reach the terminal
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console_handler)

    logger.info("=" * 60)
    logger.info(f"Logging to {log_file} at {level_name}, keeping {retention_days} days")
    logger.info("=" * 60)

    return logger
