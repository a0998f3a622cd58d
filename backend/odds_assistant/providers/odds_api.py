import logging
from typing import Any, Optional

from odds_assistant.config import settings
from odds_assistant.providers.http_client import UpstreamClient, UpstreamError

logger = logging.getLogger("odds_assistant.odds_api")


class OddsAPINotConfigured(Exception):
    """No API key for The Odds API; raised before any request is made."""


class TheOddsAPIProvider:
    """Thin async client for The Odds API ``/sports/{sport}/odds`` endpoint."""

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None):
        self._api_key = api_key
        self._base_url = (base_url or settings.THEODDSAPI_BASE_URL).rstrip("/")
        self._client = UpstreamClient("odds_api", timeout=settings.UPSTREAM_TIMEOUT_SECONDS)

    @property
    def api_key(self) -> str:
        return self._api_key if self._api_key is not None else settings.ODD_KEY

    def odds_url(self, sport: str) -> str:
        return f"{self._base_url}/sports/{sport}/odds"

    async def get_odds(self, sport: str, params: dict[str, str]) -> list[dict[str, Any]]:
        """Fetch raw events with odds for ``sport``.

        ``params`` are forwarded verbatim next to the API key. Raises
        OddsAPINotConfigured without touching the network when no key is set,
        UpstreamError on any non-2xx answer or non-list body.
        """
        api_key = self.api_key
        if not api_key:
            raise OddsAPINotConfigured("API key is not configured")

        raw = await self._client.get_json(
            self.odds_url(sport),
            params={"apiKey": api_key, **params},
        )
        if not isinstance(raw, list):
            raise UpstreamError("odds_api returned an unexpected payload")

        logger.info("Fetched %d events for %s", len(raw), sport)
        return raw

    async def aclose(self) -> None:
        await self._client.aclose()


# Singleton provider instance
odds_provider = TheOddsAPIProvider()
