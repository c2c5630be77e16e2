"""HTTP connectivity probe for the storage backend."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import httpx

logger = logging.getLogger(__name__)


@dataclass
class HttpxConnectivityProbe:
    """Polls the backend REST endpoint and tracks reachability."""

    base_url: str
    api_key: str
    http_client: httpx.AsyncClient
    interval_seconds: float = 15.0
    timeout_seconds: float = 5.0
    online: bool = True

    @classmethod
    def create(
        cls,
        base_url: str,
        api_key: str,
        interval_seconds: float = 15.0,
        timeout_seconds: float = 5.0,
    ) -> "HttpxConnectivityProbe":
        """Create a probe with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            api_key=api_key,
            http_client=httpx.AsyncClient(),
            interval_seconds=interval_seconds,
            timeout_seconds=timeout_seconds,
        )

    @property
    def is_online(self) -> bool:
        return self.online

    async def check(self) -> bool:
        """Probe the backend once and update the connectivity state."""
        try:
            response = await self.http_client.get(
                f"{self.base_url}/rest/v1/",
                headers={"apikey": self.api_key},
                timeout=self.timeout_seconds,
            )
        except httpx.HTTPError as exc:
            if self.online:
                logger.warning("Backend unreachable", extra={"error": str(exc)})
            self.online = False
            return False
        self.online = response.status_code < 500
        return self.online

    async def watch(self, on_online: Callable[[], Awaitable[object]]) -> None:
        """Poll forever, calling ``on_online`` on each offline to online change."""
        while True:
            was_online = self.online
            if await self.check() and not was_online:
                logger.info("Connection restored")
                try:
                    await on_online()
                except Exception:
                    logger.exception("Sync after reconnect failed")
            await asyncio.sleep(self.interval_seconds)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
