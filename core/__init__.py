#!/usr/bin/env python3
"""
Core Module for the Album Service

Shared infrastructure components used by the microservice.

COMPONENTS:
    - config/: Environment-driven configuration (PostgreSQL, HTTP, CORS, logging)
    - logger.py: Service logger setup

USAGE:
    from core.config import get_settings
    from core.logger import setup_service_logger

    settings = get_settings()
    logger = setup_service_logger("microservices.album_service")
"""

__all__ = ["config", "logger"]

__version__ = "1.0.0"
