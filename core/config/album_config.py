#!/usr/bin/env python3
"""Album service main configuration

Combines the infrastructure, service and logging sub-configs.
"""
import os
from dataclasses import dataclass, field

from .infra_config import InfraConfig
from .logging_config import LoggingConfig
from .service_config import ServiceConfig


@dataclass
class AlbumServiceSettings:
    """Complete configuration for the album service"""
    environment: str = "development"

    infrastructure: InfraConfig = field(default_factory=InfraConfig)
    service: ServiceConfig = field(default_factory=ServiceConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def is_testing(self) -> bool:
        return self.environment in ("testing", "test")

    @classmethod
    def from_env(cls) -> 'AlbumServiceSettings':
        """Load the complete configuration from environment"""
        env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
        return cls(
            environment=env,
            infrastructure=InfraConfig.from_env(),
            service=ServiceConfig.from_env(),
            logging=LoggingConfig.from_env(),
        )
