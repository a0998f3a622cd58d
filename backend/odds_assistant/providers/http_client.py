import logging
from typing import Any, Optional
from urllib.parse import urlparse

import httpx

logger = logging.getLogger("odds_assistant.http_client")

DEFAULT_HEADERS = {"User-Agent": "odds-assistant/1.0"}


class UpstreamError(Exception):
    """Raised when an upstream API answers with a non-2xx status or unreadable body."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def _safe_url(url: str) -> str:
    """Strip query params (may contain API keys) for safe logging."""
    parsed = urlparse(str(url))
    return f"{parsed.scheme}://{parsed.netloc}{parsed.path}"


class UpstreamClient:
    """httpx.AsyncClient wrapper: one attempt per call, bounded by a timeout.

    The underlying client is created on first use so importing a provider
    never needs a running event loop.
    """

    def __init__(self, name: str, timeout: float = 15.0):
        self._name = name
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self._timeout, headers=DEFAULT_HEADERS)
        return self._client

    async def get(self, url: str, **kwargs) -> httpx.Response:
        return await self._get_client().get(url, **kwargs)

    async def get_json(self, url: str, params: Optional[dict[str, str]] = None) -> Any:
        """GET ``url`` and decode the JSON body. Non-2xx raises UpstreamError."""
        try:
            resp = await self.get(url, params=params)
        except httpx.HTTPError as exc:
            logger.warning("[%s] Network error on GET %s: %s", self._name, _safe_url(url), exc)
            raise UpstreamError(f"{self._name} request failed: {exc}") from exc

        if not resp.is_success:
            logger.warning(
                "[%s] GET %s responded with status %d",
                self._name, _safe_url(url), resp.status_code,
            )
            raise UpstreamError(
                f"{self._name} responded with status: {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            return resp.json()
        except ValueError as exc:
            logger.warning("[%s] Invalid JSON from %s", self._name, _safe_url(url))
            raise UpstreamError(f"{self._name} returned invalid JSON") from exc

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
