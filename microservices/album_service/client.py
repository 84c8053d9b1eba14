"""
Album Service Client

Client library for interacting with the album service via HTTP.
Every call returns the response envelope ({ok, data?, msg?, error?}),
whatever the status code.
"""

import httpx
import logging
from typing import Optional, Dict, Any, Union

from core.config import get_settings

logger = logging.getLogger(__name__)

Number = Union[int, float]


class AlbumServiceClient:
    """Album Service HTTP client"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        base_path: Optional[str] = None,
    ):
        """
        Initialize Album Service client

        Args:
            base_url: Album service base URL, defaults to the configured host/port
            client: Optional preconfigured httpx client (e.g. ASGI transport in tests)
            base_path: Collection mount point, defaults to configuration
        """
        service_config = get_settings().service
        if base_url:
            self.base_url = base_url.rstrip('/')
        else:
            self.base_url = f"http://localhost:{service_config.service_port}"
        self.base_path = (base_path or service_config.base_path).rstrip('/')

        self.client = client or httpx.AsyncClient(timeout=30.0)

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def _url(self, path: str = "/") -> str:
        return f"{self.base_url}{self.base_path}{path}"

    async def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        response = await self.client.request(method, self._url(path), **kwargs)
        envelope = response.json()
        if not envelope.get("ok"):
            logger.debug(f"{method} {path} -> {response.status_code}: {envelope.get('msg')}")
        envelope["status_code"] = response.status_code
        return envelope

    # =============================================================================
    # Album Management
    # =============================================================================

    async def list_albums(self) -> Dict[str, Any]:
        """
        List all albums

        Example:
            >>> async with AlbumServiceClient() as client:
            ...     envelope = await client.list_albums()
            ...     albums = envelope.get("data", [])
        """
        return await self._request("GET", "/")

    async def get_album(self, album_id: str) -> Dict[str, Any]:
        """Get album by ID"""
        return await self._request("GET", f"/{album_id}")

    async def create_album(
        self,
        title: str,
        year: Number,
        artist: str,
        photo_url: str,
    ) -> Dict[str, Any]:
        """
        Create a new album

        Example:
            >>> envelope = await client.create_album(
            ...     title="Kind of Blue",
            ...     year=1959,
            ...     artist="Miles Davis",
            ...     photo_url="https://example.com/kind-of-blue.jpg",
            ... )
        """
        payload = {
            "title": title,
            "year": year,
            "artist": artist,
            "photoUrl": photo_url,
        }
        return await self._request("POST", "/", json=payload)

    async def update_album(self, album_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Replace an album's fields (title, year, artist, photoUrl required)"""
        return await self._request("PUT", f"/{album_id}", json=payload)

    async def delete_album(self, album_id: str) -> Dict[str, Any]:
        """Delete album"""
        return await self._request("DELETE", f"/{album_id}")

    # =============================================================================
    # Score Management
    # =============================================================================

    async def add_score(self, album_id: str, score: Number) -> Dict[str, Any]:
        """Append a score to the album's history"""
        return await self._request("PUT", f"/update-score/{album_id}", json={"score": score})

    # =============================================================================
    # Health Check
    # =============================================================================

    async def health_check(self) -> bool:
        """Check service health"""
        try:
            response = await self.client.get(f"{self.base_url}/health")
            return response.status_code == 200
        except httpx.HTTPError as e:
            logger.error(f"Album service health check failed: {e}")
            return False
