#!/usr/bin/env python3
"""Service configuration for the album HTTP surface

Listening address, mount path, request size limit and CORS policy.
"""
import os
from dataclasses import dataclass, field
from typing import List

def _int(val: str, default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default

def _list(val: str) -> List[str]:
    return [item.strip() for item in val.split(",") if item.strip()]


@dataclass
class CorsConfig:
    """Cross-origin policy applied to every route"""
    allow_origins: List[str] = field(default_factory=lambda: ["*"])
    allow_methods: List[str] = field(default_factory=lambda: ["GET", "POST", "PUT", "DELETE"])
    allow_headers: List[str] = field(default_factory=lambda: ["Content-Type", "Authorization"])
    max_age: int = 500

    @classmethod
    def from_env(cls) -> 'CorsConfig':
        return cls(
            allow_origins=_list(os.getenv("CORS_ALLOW_ORIGINS", "*")),
            allow_methods=_list(os.getenv("CORS_ALLOW_METHODS", "GET,POST,PUT,DELETE")),
            allow_headers=_list(os.getenv("CORS_ALLOW_HEADERS", "Content-Type,Authorization")),
            max_age=_int(os.getenv("CORS_MAX_AGE", "500"), 500),
        )


@dataclass
class ServiceConfig:
    """Album service endpoint"""

    # ===========================================
    # HTTP server
    # ===========================================
    service_name: str = "album_service"
    service_host: str = "0.0.0.0"
    service_port: int = 3000

    # Collection mount point
    base_path: str = "/album"

    # JSON body limit (50 MB)
    max_body_bytes: int = 50 * 1024 * 1024

    cors: CorsConfig = field(default_factory=CorsConfig)

    @classmethod
    def from_env(cls) -> 'ServiceConfig':
        """Load service configuration from environment variables"""
        port = os.getenv("ALBUM_SERVICE_PORT") or os.getenv("PORT", "3000")
        return cls(
            service_name=os.getenv("SERVICE_NAME", "album_service"),
            service_host=os.getenv("ALBUM_SERVICE_HOST", "0.0.0.0"),
            service_port=_int(port, 3000),
            base_path=os.getenv("ALBUM_BASE_PATH", "/album"),
            max_body_bytes=_int(os.getenv("MAX_BODY_BYTES", ""), 50 * 1024 * 1024),
            cors=CorsConfig.from_env(),
        )
