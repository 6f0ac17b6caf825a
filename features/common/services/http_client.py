import asyncio
import logging
from typing import Any, Dict, Optional

import aiohttp

from core.config import settings
from features.common.exceptions.upstream_exceptions import (
    UpstreamParseError,
    UpstreamTransportError
)

logger = logging.getLogger(__name__)

class BaseHttpClient:
    """Shared aiohttp session handling for the NOAA feed clients."""

    source: str = "upstream"

    def __init__(self, headers: Optional[Dict[str, str]] = None, timeout: Optional[int] = None):
        self._session: Optional[aiohttp.ClientSession] = None
        self._headers = headers or {}
        self._timeout = aiohttp.ClientTimeout(total=timeout or settings.request["timeout"])

    async def _init_session(self) -> aiohttp.ClientSession:
        if not self._session or self._session.closed:
            self._session = aiohttp.ClientSession(headers=self._headers, timeout=self._timeout)
        return self._session

    async def close(self):
        if self._session:
            await self._session.close()
            self._session = None

    async def _get_text(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None
    ) -> str:
        """GET a URL and return the body as text."""
        source = source or self.source
        session = await self._init_session()
        try:
            async with session.get(url, params=params) as response:
                response.raise_for_status()
                return await response.text()
        except aiohttp.ClientResponseError as e:
            logger.error(f"{source} answered {e.status} for {url}")
            raise UpstreamTransportError(source, f"HTTP {e.status} from {source}: {e.message}") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            reason = str(e) or type(e).__name__
            logger.error(f"Error fetching {url}: {reason}")
            raise UpstreamTransportError(source, f"Error fetching {source} data: {reason}") from e
        except UnicodeDecodeError as e:
            logger.error(f"Undecodable body from {url}: {str(e)}")
            raise UpstreamParseError(source, f"Undecodable response from {source}: {str(e)}") from e

    async def _get_json(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None
    ) -> Any:
        """GET a URL and decode the body as JSON."""
        source = source or self.source
        session = await self._init_session()
        try:
            async with session.get(url, params=params) as response:
                response.raise_for_status()
                # NWS serves application/geo+json, so don't insist on the content type
                return await response.json(content_type=None)
        except aiohttp.ClientResponseError as e:
            logger.error(f"{source} answered {e.status} for {url}")
            raise UpstreamTransportError(source, f"HTTP {e.status} from {source}: {e.message}") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            reason = str(e) or type(e).__name__
            logger.error(f"Error fetching {url}: {reason}")
            raise UpstreamTransportError(source, f"Error fetching {source} data: {reason}") from e
        except ValueError as e:
            logger.error(f"Invalid JSON from {url}: {str(e)}")
            raise UpstreamParseError(source, f"Invalid JSON from {source}: {str(e)}") from e
