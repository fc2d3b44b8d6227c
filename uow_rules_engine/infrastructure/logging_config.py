"""
Logging Configuration

Optional logging setup for applications embedding the rules engine. The
library itself only creates module loggers and never configures handlers on
import.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from uow_rules_engine.application.config import LoggingConfig

DEFAULT_LOGGER_NAME = "uow_rules_engine"


def configure_logging(
    config: LoggingConfig, logger_name: str = DEFAULT_LOGGER_NAME
) -> logging.Logger:
    """
    Configure the engine's logger from a LoggingConfig.

    Previously installed handlers are removed, so calling this again does not
    duplicate output.

    Args:
        config: Level, format and optional rotating file settings
        logger_name: Logger to configure

    Returns:
        The configured logger
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(getattr(logging, config.level.upper(), logging.INFO))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(config.format)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if config.file:
        Path(config.file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            config.file,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
