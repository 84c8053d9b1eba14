#!/usr/bin/env python3
"""Modular configuration system for the album service

Configuration hierarchy:
- infra_config: PostgreSQL connection and pool sizing
- service_config: HTTP host/port, mount path, body limit, CORS policy
- logging_config: Logging configuration
- album_config: Aggregate of the above
"""
import os
from dotenv import load_dotenv
from .logging_config import LoggingConfig
from .infra_config import InfraConfig
from .service_config import ServiceConfig, CorsConfig
from .album_config import AlbumServiceSettings

# Load environment file based on ENV
env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
env_files = {
    "development": "deployment/environments/dev.env",
    "dev": "deployment/environments/dev.env",
    "testing": "deployment/environments/test.env",
    "test": "deployment/environments/test.env",
    "staging": "deployment/environments/staging.env",
    "production": "deployment/environments/production.env",
}
env_file = env_files.get(env, "deployment/environments/dev.env")
load_dotenv(env_file, override=False)
# A plain .env in the working directory fills whatever is still unset
load_dotenv(override=False)

# Create global settings instance
settings = AlbumServiceSettings.from_env()

def get_settings() -> AlbumServiceSettings:
    """Get global settings instance"""
    return settings

def reload_settings() -> AlbumServiceSettings:
    """Reload settings from environment"""
    global settings
    settings = AlbumServiceSettings.from_env()
    return settings

__all__ = [
    # Main config
    'AlbumServiceSettings',
    'get_settings',
    'reload_settings',
    'settings',
    # Sub-configs
    'LoggingConfig',
    'InfraConfig',
    'ServiceConfig',
    'CorsConfig',
]
