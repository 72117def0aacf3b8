"""HTTP transport for the Resend REST API."""

import asyncio
import logging
from typing import Any, Dict, Optional, Union

import aiohttp

from .base import (
    ResendAuthError,
    ResendConfig,
    ResendConnectionError,
    ResendNotFoundError,
    ResendRateLimitError,
    TransportError,
)

logger = logging.getLogger(__name__)

QueryParams = Dict[str, Union[str, int]]


class ResendHttpClient:
    """
    Thin GET client for the Resend API.

    Key features:
    - Bearer token authentication, key passed per call
    - One lazily created aiohttp session, reused across pages
    - Status codes mapped onto the TransportError family
    - No retries: a failed request propagates to the caller immediately
    """

    def __init__(self, config: Optional[ResendConfig] = None):
        """
        Initialize the client.

        Args:
            config: ResendConfig with base URL and timeout
        """
        self.config = config or ResendConfig()
        self.base_url = self.config.base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=self.config.timeout)
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> "ResendHttpClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> bool:
        await self.close()
        return False

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()

    def build_url(self, path: str) -> str:
        """Join the configured base URL with a resource path."""
        return f"{self.base_url}/{path.lstrip('/')}"

    def _build_headers(self, api_key: str) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
        }

    async def get_json(
        self,
        url: str,
        api_key: str,
        params: Optional[QueryParams] = None,
    ) -> Any:
        """
        Issue one GET request and decode the JSON body.

        Args:
            url: Absolute endpoint URL
            api_key: Bearer token for the Authorization header
            params: Query string parameters

        Returns:
            Decoded JSON body

        Raises:
            ResendAuthError: For 401/403
            ResendNotFoundError: For 404
            ResendRateLimitError: For 429
            ResendConnectionError: For network failures and timeouts
            TransportError: For other non-2xx statuses and malformed JSON
        """
        session = await self._get_session()
        headers = self._build_headers(api_key)
        logger.debug(f"GET {url} params={params or {}}")

        try:
            async with session.get(url, headers=headers, params=params) as response:
                if response.status in (401, 403):
                    error_text = await response.text()
                    raise ResendAuthError(
                        f"Authentication failed (HTTP {response.status}): {error_text}",
                        status=response.status,
                        url=url,
                    )

                if response.status == 404:
                    error_text = await response.text()
                    raise ResendNotFoundError(
                        f"Resource not found (HTTP 404): {error_text}",
                        status=404,
                        url=url,
                    )

                if response.status == 429:
                    error_text = await response.text()
                    raise ResendRateLimitError(
                        f"Rate limit exceeded (HTTP 429): {error_text}",
                        status=429,
                        url=url,
                    )

                if not 200 <= response.status < 300:
                    error_text = await response.text()
                    raise TransportError(
                        f"API error {response.status}: {error_text}",
                        status=response.status,
                        url=url,
                    )

                try:
                    return await response.json()
                except (aiohttp.ContentTypeError, ValueError) as e:
                    raise TransportError(
                        f"Malformed JSON response: {e}",
                        status=response.status,
                        url=url,
                    ) from e

        except asyncio.TimeoutError as e:
            raise ResendConnectionError(f"Request timeout: {url}", url=url) from e

        except aiohttp.ClientError as e:
            raise ResendConnectionError(f"Connection failed: {e}", url=url) from e
