#!/usr/bin/env python3
"""
Service logger setup

Configures the service logger from LoggingConfig:
console handler always, file handler when LOG_FILE is set.

Usage:
    from core.logger import setup_service_logger

    logger = setup_service_logger("album_service")
"""

import logging
import sys
from typing import Optional

from core.config import LoggingConfig


def setup_service_logger(
    service_name: str,
    level: Optional[str] = None,
    config: Optional[LoggingConfig] = None,
) -> logging.Logger:
    """
    Configure and return the logger for a service.

    Pass the service package name (``microservices.album_service``) so that
    every ``logging.getLogger(__name__)`` inside the package inherits the
    handlers configured here.

    Args:
        service_name: Logger name, usually the service package
        level: Optional level override (defaults to LoggingConfig.log_level)
        config: Optional LoggingConfig (defaults to environment)

    Returns:
        logging.Logger: Configured logger
    """
    config = config or LoggingConfig.from_env()
    log_level = getattr(logging, (level or config.log_level).upper(), logging.INFO)

    logger = logging.getLogger(service_name)
    logger.setLevel(log_level)

    # Calling twice (reload, tests) must not duplicate output
    if logger.handlers:
        return logger

    formatter = logging.Formatter(config.log_format)

    if config.enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if config.log_file:
        file_handler = logging.FileHandler(config.log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger
