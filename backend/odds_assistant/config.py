"""
backend/odds_assistant/config.py

Purpose:
    Central settings loading for the assistant backend. Loaded once at import
    time and frozen afterwards.

Dependencies:
    - pydantic-settings
    - pathlib
"""

import json
import logging
from pathlib import Path
from typing import Annotated, Any, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode

logger = logging.getLogger("odds_assistant.config")

# Prefer backend/.env, fallback to project-root .env.
_BACKEND_ENV_FILE = Path(__file__).resolve().parent.parent / ".env"
_ROOT_ENV_FILE = Path(__file__).resolve().parent.parent.parent / ".env"


class Settings(BaseSettings):
    # Assistant host identity: JSON blobs, e.g. BITTE_KEY='{"accountId": "me.near"}'
    BITTE_KEY: Annotated[dict[str, Any], NoDecode] = {}
    BITTE_CONFIG: Annotated[dict[str, Any], NoDecode] = {}

    # The Odds API
    ODD_KEY: str = ""
    THEODDSAPI_BASE_URL: str = "https://api.the-odds-api.com/v4"
    UPSTREAM_TIMEOUT_SECONDS: float = 15.0

    REDDIT_FRONTPAGE_URL: str = "https://www.reddit.com/.json"
    BACKEND_CORS_ORIGINS: str = "*"

    # Manifest metadata
    PLUGIN_TITLE: str = "Odds Assistant"
    PLUGIN_DESCRIPTION: str = "API for live sports odds and assistant tools"
    PLUGIN_VERSION: str = "1.0.0"
    ASSISTANT_NAME: str = "Odds Assistant"
    ASSISTANT_DESCRIPTION: str = (
        "An assistant that answers with sports odds and blockchain information"
    )
    ASSISTANT_INSTRUCTIONS: str = (
        "You answer with upcoming games and bookmaker odds. Use the get-odds tool "
        "to look up games, filtering by team when the user names one. Use the "
        "other tools for blockchain, Reddit, Twitter and transaction requests."
    )

    model_config = {
        "env_file": (str(_BACKEND_ENV_FILE), str(_ROOT_ENV_FILE)),
        "extra": "ignore",
        "frozen": True,
    }

    @field_validator("BITTE_KEY", "BITTE_CONFIG", mode="before")
    @classmethod
    def _parse_json_blob(cls, value: Any) -> dict[str, Any]:
        """Malformed or non-object JSON degrades to an empty mapping."""
        if isinstance(value, dict):
            return value
        if value is None or value == "":
            return {}
        try:
            parsed = json.loads(value)
        except (TypeError, ValueError):
            logger.warning("Ignoring malformed JSON config value")
            return {}
        return parsed if isinstance(parsed, dict) else {}

    @property
    def account_id(self) -> Optional[str]:
        return self.BITTE_KEY.get("accountId") or None

    @property
    def public_url(self) -> Optional[str]:
        return self.BITTE_CONFIG.get("url") or None

    @property
    def odds_api_configured(self) -> bool:
        return bool(self.ODD_KEY)


settings = Settings()
