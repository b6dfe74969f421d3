"""
Logging setup for Battery Watcher.

Console output is kept to warnings and errors; a rotating log file is
added when one is configured.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path


def setup_logging(config) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        config: WatcherConfig instance

    Returns:
        Configured logger instance
    """
    log_level_str = config.get("log_level", "INFO")
    log_level = getattr(logging, log_level_str, logging.INFO)

    logger = logging.getLogger("BatteryWatcher")
    logger.setLevel(log_level)

    # Remove existing handlers
    logger.handlers.clear()

    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_formatter = logging.Formatter(
        '%(levelname)s: %(message)s'
    )

    log_file = config.get("log_file")
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        # 1 MB max, keep 3 backups
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=1024 * 1024,
            backupCount=3,
            encoding='utf-8'
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(detailed_formatter)
        logger.addHandler(file_handler)

    # Only show warnings and errors in console
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    logger.info("Battery Watcher logging initialized")
    logger.info(f"Log level: {log_level_str}")
    if log_file:
        logger.info(f"Log file: {log_file}")

    return logger
